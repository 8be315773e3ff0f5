"""
Fan-out execution of a log search over the resolved ESClients.
"""
import json
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Tuple

from ..config import MAX_QUERY_SIZE
from .clients import ClientSelector, ESClient
from .index_names import LOG_VERSION_1
from .origin import ORIGIN_KEY
from .search_client import SearchClientError

logger = logging.getLogger(__name__)

# timestamp field and its unit (multiplier from epoch ms) per log version
_TIME_FIELDS = {
    LOG_VERSION_1: ("timestamp", 1_000_000),
}
_DEFAULT_TIME_FIELD = ("@timestamp", 1)


def time_field(log_version: str) -> Tuple[str, int]:
    return _TIME_FIELDS.get(log_version, _DEFAULT_TIME_FIELD)


def build_search_source(req, log_version: str, max_size: int = MAX_QUERY_SIZE) -> Dict[str, Any]:
    """Elasticsearch request body for one client of a log search"""
    field, unit = time_field(log_version)
    end = req.end or int(time.time() * 1000)
    must: List[Dict[str, Any]] = [
        {"range": {field: {"gte": req.start * unit, "lte": end * unit}}},
    ]
    if req.query:
        must.append({"query_string": {"query": req.query, "default_operator": "AND"}})
    for key, value in req.filter_pairs():
        if key == ORIGIN_KEY:
            continue
        must.append({"term": {f"tags.{key}": value}})
    return {
        "query": {"bool": {"filter": must}},
        "sort": [{field: {"order": req.sort}}],
        "size": min(req.size, max_size),
    }


def describe_search(client: ESClient, source: Dict[str, Any]) -> str:
    """Debug rendering of a search: urls, indices, then the JSON body"""
    body = json.dumps(source, indent=2, sort_keys=True)
    return client.urls + "\n" + ",".join(client.indices) + "\n" + body


def _hit_time(hit: Dict[str, Any]) -> int:
    """Hit timestamp normalized to epoch ms.

    Prefers the sort value ES returns for the timestamp field (epoch numbers
    even for date fields), then the raw source value, numeric or ISO-8601.
    """
    field, unit = time_field(hit.get("log_version", ""))
    sort_values = hit.get("sort") or []
    value = sort_values[0] if sort_values else (hit.get("_source") or {}).get(field)
    if isinstance(value, (int, float)):
        return int(value) // unit
    if isinstance(value, str) and value:
        if value.isdigit():
            return int(value) // unit
        try:
            ts = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return 0
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        return int(ts.timestamp() * 1000)
    return 0


class LogQueryService:
    """Resolve clients for a request and search them all"""

    def __init__(self, selector: ClientSelector, max_size: int = MAX_QUERY_SIZE):
        self.selector = selector
        self.max_size = max_size

    def targets(self, org_id: str, req) -> List[ESClient]:
        clients = self.selector.get_es_clients(org_id, req)
        for c in clients:
            c.close()
        return clients

    def search(self, org_id: str, req) -> Dict[str, Any]:
        clients = self.selector.get_es_clients(org_id, req)
        if not clients:
            logger.info("no elasticsearch clients for org %s", org_id, extra={"org_id": org_id})

        total = 0
        hits: List[Dict[str, Any]] = []
        failed: List[str] = []
        debug: List[str] = []
        try:
            for client in clients:
                source = build_search_source(req, client.log_version, self.max_size)
                rendered = describe_search(client, source)
                logger.debug(rendered)
                if req.debug:
                    debug.append(rendered)
                try:
                    resp = client.search(source)
                except SearchClientError as e:
                    logger.warning("log search failed on %s: %s", client.urls, e, extra={"org_id": org_id})
                    failed.append(client.urls)
                    continue
                total += _total_of(resp)
                for hit in (resp.get("hits") or {}).get("hits") or []:
                    hit["log_version"] = client.log_version
                    hits.append(hit)
        finally:
            for client in clients:
                client.close()

        hits.sort(key=_hit_time, reverse=(req.sort == "desc"))
        result = {
            "total": total,
            "hits": hits[:min(req.size, self.max_size)],
            "failed": failed,
        }
        if req.debug:
            result["debug"] = debug
        return result


def _total_of(resp: Dict[str, Any]) -> int:
    total = (resp.get("hits") or {}).get("total") or 0
    if isinstance(total, dict):
        return int(total.get("value") or 0)
    return int(total)
