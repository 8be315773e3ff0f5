"""
Registration of log deployments and log instances, used by the provisioning process
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError

from ..deps import get_deployment_store, get_instance_store
from ..schemas.deployment import LogDeploymentCreate, LogDeploymentOut, LogInstanceCreate, LogInstanceOut
from ..services.store import LogDeploymentStore, LogInstanceStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["deployments"])


@router.post("/log-deployments", response_model=LogDeploymentOut, status_code=201)
def create_log_deployment(
    body: LogDeploymentCreate,
    store: LogDeploymentStore = Depends(get_deployment_store),
):
    try:
        row = store.create(**body.model_dump())
    except SQLAlchemyError as e:
        logger.error(f"Failed to register log deployment: {e}")
        raise HTTPException(status_code=500, detail="database_error")
    return row.to_dict()


@router.get("/log-deployments", response_model=List[LogDeploymentOut])
def list_log_deployments(
    org_id: str = Query(..., description="Organization id"),
    cluster: List[str] = Query([], description="Restrict to clusters, repeatable"),
    store: LogDeploymentStore = Depends(get_deployment_store),
):
    try:
        rows = store.query_by_org_and_clusters(org_id, cluster)
    except SQLAlchemyError as e:
        logger.error(f"Failed to list log deployments: {e}")
        raise HTTPException(status_code=500, detail="database_error")
    return [r.to_dict() for r in rows]


@router.post("/log-instances", response_model=LogInstanceOut, status_code=201)
def create_log_instance(
    body: LogInstanceCreate,
    store: LogInstanceStore = Depends(get_instance_store),
):
    try:
        row = store.create(**body.model_dump())
    except SQLAlchemyError as e:
        logger.error(f"Failed to register log instance: {e}")
        raise HTTPException(status_code=500, detail="database_error")
    return row.to_dict()


@router.get("/log-instances/{log_key}", response_model=LogInstanceOut)
def get_log_instance(
    log_key: str,
    store: LogInstanceStore = Depends(get_instance_store),
):
    try:
        row = store.get_by_log_key(log_key)
    except SQLAlchemyError as e:
        logger.error(f"Failed to get log instance: {e}")
        raise HTTPException(status_code=500, detail="database_error")
    if row is None:
        raise HTTPException(status_code=404, detail="log_instance_not_found")
    return row.to_dict()
