"""
Wiring of the query services for FastAPI dependencies.
"""
import logging
from functools import lru_cache
from typing import Optional

from .config import (
    BACK_ES_PASSWORD, BACK_ES_URLS, BACK_ES_USERNAME,
    CENTRAL_ES_PASSWORD, CENTRAL_ES_URLS, CENTRAL_ES_USERNAME,
    CLUSTER_MANAGER_URL, get_query_back_es,
)
from .query.clients import ClientSelector, DeploymentResolver
from .query.search import LogQueryService
from .query.search_client import SearchClient, SearchClientError
from .services.clusters import HTTPClusterRegistry
from .services.store import LogDeploymentStore, LogInstanceStore

logger = logging.getLogger(__name__)


def _auth(username: str, password: str):
    return (username, password) if username or password else None


def build_shared_client(name: str, urls, username: str = "", password: str = "") -> Optional[SearchClient]:
    """Process-wide client for a fixed ES, None when its config is unusable"""
    try:
        return SearchClient(urls, basic_auth=_auth(username, password))
    except SearchClientError as e:
        logger.error("invalid %s elasticsearch config: %s", name, e)
        return None


@lru_cache(maxsize=1)
def get_central_client() -> Optional[SearchClient]:
    return build_shared_client("central", CENTRAL_ES_URLS, CENTRAL_ES_USERNAME, CENTRAL_ES_PASSWORD)


@lru_cache(maxsize=1)
def get_back_client() -> Optional[SearchClient]:
    if not BACK_ES_URLS:
        return None
    return build_shared_client("back-reader", BACK_ES_URLS, BACK_ES_USERNAME, BACK_ES_PASSWORD)


def get_deployment_store() -> LogDeploymentStore:
    return LogDeploymentStore()


def get_instance_store() -> LogInstanceStore:
    return LogInstanceStore()


def get_cluster_registry():
    return HTTPClusterRegistry(CLUSTER_MANAGER_URL)


def get_query_service() -> LogQueryService:
    resolver = DeploymentResolver(get_deployment_store(), get_instance_store())
    selector = ClientSelector(
        resolver,
        get_cluster_registry(),
        central_client=get_central_client(),
        back_client=get_back_client(),
        query_back_es=get_query_back_es(),
    )
    return LogQueryService(selector)


def close_shared_clients():
    for factory in (get_central_client, get_back_client):
        if factory.cache_info().currsize:
            client = factory()
            if client is not None:
                client.close()
        factory.cache_clear()
