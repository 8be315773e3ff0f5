"""
Minimal Elasticsearch search client over httpx.

Construction does no network I/O: no sniffing and no health checks. Several
node URLs may be given; a search tries them in order and moves on when a node
cannot be reached.
"""
import json
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple
from urllib.parse import quote, urlparse

import httpx

from ..config import CLUSTER_DIALER_URL, ES_TIMEOUT_SEC

logger = logging.getLogger(__name__)


class SearchClientError(Exception):
    """Raised when a search client cannot be built or a search fails"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _parse_urls(urls: Iterable[str]) -> List[str]:
    parsed = []
    for url in urls:
        url = (url or "").strip()
        if not url:
            continue
        u = urlparse(url)
        if u.scheme not in ("http", "https") or not u.netloc:
            raise SearchClientError(f"invalid elasticsearch url: {url!r}")
        parsed.append(url.rstrip("/"))
    if not parsed:
        raise SearchClientError("no elasticsearch url configured")
    return parsed


def cluster_dialer_transport(cluster_name: str, dialer_url: str = CLUSTER_DIALER_URL) -> httpx.HTTPTransport:
    """Transport that reaches an in-cluster ES through the cluster dialer proxy"""
    try:
        proxy = httpx.Proxy(dialer_url, headers={"X-Cluster-Name": cluster_name})
        return httpx.HTTPTransport(proxy=proxy, retries=0)
    except (ValueError, httpx.InvalidURL) as e:
        raise SearchClientError(f"invalid cluster dialer url {dialer_url!r}: {e}") from e


class SearchClient:
    """Search operations against one Elasticsearch cluster"""

    def __init__(self, urls: Iterable[str], basic_auth: Optional[Tuple[str, str]] = None,
                 transport: Optional[httpx.BaseTransport] = None, timeout: float = ES_TIMEOUT_SEC):
        self.urls = _parse_urls(urls)
        try:
            self._http = httpx.Client(
                auth=basic_auth,
                transport=transport,
                timeout=timeout,
                headers={"Content-Type": "application/json"},
            )
        except (TypeError, ValueError) as e:
            raise SearchClientError(f"failed to create http client: {e}") from e

    def search(self, indices: List[str], body: Dict[str, Any]) -> Dict[str, Any]:
        """Run ``_search`` over ``indices``; missing indices are ignored"""
        # each index is a single path segment
        path = "/" + ",".join(quote(name, safe="*-_.+") for name in indices) + "/_search"
        params = {"ignore_unavailable": "true", "allow_no_indices": "true"}
        last_error = None
        for url in self.urls:
            try:
                r = self._http.post(url + path, params=params, content=json.dumps(body))
            except (httpx.ConnectError, httpx.TimeoutException) as e:
                logger.warning("elasticsearch node %s unreachable: %s", url, e)
                last_error = e
                continue
            except httpx.HTTPError as e:
                raise SearchClientError(f"search failed on {url}: {e}") from e
            if r.status_code >= 400:
                raise SearchClientError(
                    f"search failed on {url}: http_{r.status_code} {r.text[:200]}",
                    status_code=r.status_code,
                )
            try:
                return r.json()
            except ValueError as e:
                raise SearchClientError(f"invalid search response from {url}") from e
        raise SearchClientError(f"no reachable elasticsearch node: {last_error}")

    def close(self):
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
