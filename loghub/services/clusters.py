"""
Cluster registry: which clusters belong to an organization.
"""
import logging
from typing import Dict, Iterable, List, Optional

import httpx

from ..config import CLUSTER_MANAGER_URL

logger = logging.getLogger(__name__)


class ClusterRegistryError(Exception):
    """Raised when the cluster list of an org cannot be obtained"""


class HTTPClusterRegistry:
    """Lists an org's clusters from the cluster manager HTTP API"""

    def __init__(self, base_url: str = CLUSTER_MANAGER_URL, timeout: float = 10.0,
                 transport: Optional[httpx.BaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def list_clusters(self, org_id: str) -> List[str]:
        try:
            with httpx.Client(base_url=self.base_url, timeout=self.timeout, transport=self._transport) as client:
                r = client.get("/api/clusters", params={"orgID": str(org_id)})
                r.raise_for_status()
                body = r.json()
        except httpx.HTTPStatusError as e:
            raise ClusterRegistryError(f"cluster manager returned http_{e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            raise ClusterRegistryError(f"cluster manager unavailable: {e}") from e

        if isinstance(body, dict):
            if body.get("success") is False:
                err = body.get("err") or {}
                raise ClusterRegistryError(f"cluster manager error: {err.get('msg', 'unknown')}")
            body = body.get("data") or []
        names = []
        for item in body:
            name = item.get("name") if isinstance(item, dict) else item
            if name:
                names.append(str(name))
        logger.debug("org %s has %d clusters", org_id, len(names))
        return names


class StaticClusterRegistry:
    """Fixed org -> clusters mapping"""

    def __init__(self, clusters: Optional[Dict[str, Iterable[str]]] = None):
        self._clusters = {str(k): list(v) for k, v in (clusters or {}).items()}

    def list_clusters(self, org_id: str) -> List[str]:
        return list(self._clusters.get(str(org_id), []))
