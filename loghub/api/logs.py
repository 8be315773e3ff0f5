"""
Log query endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from ..auth import require_org
from ..deps import get_query_service
from ..query.search import LogQueryService
from ..schemas.log_request import ESClientInfo, LogRequest, LogSearchResponse, LogTargetsResponse

router = APIRouter(tags=["logs"])


def _log_request(
    clusterName: Optional[str] = Query(None, description="Cluster of the addon"),
    addon: Optional[str] = Query(None, description="Log addon key"),
    tag: List[str] = Query([], description="Filter as key=value, repeatable"),
    start: int = Query(0, ge=0),
    end: int = Query(0, ge=0),
    query: Optional[str] = Query(None),
    size: int = Query(100, ge=1, le=10000),
    sort: str = Query("desc", pattern="^(asc|desc)$"),
    debug: bool = Query(False),
) -> LogRequest:
    try:
        return LogRequest(
            cluster_name=clusterName,
            addon=addon,
            filters=LogRequest.parse_tags(tag),
            start=start,
            end=end,
            query=query,
            size=size,
            sort=sort,
            debug=debug,
        )
    except (ValueError, ValidationError) as e:
        raise HTTPException(status_code=400, detail=f"invalid_request: {e}")


@router.get("/logs/search", response_model=LogSearchResponse, response_model_exclude_none=True)
def search_logs(
    req: LogRequest = Depends(_log_request),
    org_id: str = Depends(require_org()),
    service: LogQueryService = Depends(get_query_service),
):
    """Search logs across every backend the request routes to"""
    if req.end and req.end < req.start:
        raise HTTPException(status_code=400, detail="invalid_time_range")
    return service.search(org_id, req)


@router.get("/logs/targets", response_model=LogTargetsResponse)
def log_targets(
    req: LogRequest = Depends(_log_request),
    org_id: str = Depends(require_org()),
    service: LogQueryService = Depends(get_query_service),
):
    """Show which backends and indices a request would be routed to"""
    clients = service.targets(org_id, req)
    return LogTargetsResponse(
        org_id=org_id,
        clients=[ESClientInfo(urls=c.urls, log_version=c.log_version, indices=c.indices) for c in clients],
    )
