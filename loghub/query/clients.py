"""
Resolution of the Elasticsearch clients and index patterns a log query runs on.

Nothing in here raises to the caller: lookup and construction failures are
logged and degrade to fewer (possibly zero) clients.
"""
import json
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from ..models.log_deployment import CLUSTER_TYPE_MANAGED, LOG_TYPE_LOG_ANALYTICS, LOG_TYPE_LOG_SERVICE
from ..services.clusters import ClusterRegistryError
from .groups import resolve_addon_group
from .index_names import (
    DEFAULT_INDICES, LOG_VERSION_1, LOG_VERSION_1_PREFIX, LOG_VERSION_2, LOG_VERSION_2_PREFIX,
    NOT_EXIST_INDICES, SYSTEM_INDICES, get_log_indices,
)
from .origin import Origin, classify_origin
from .search_client import SearchClient, SearchClientError, cluster_dialer_transport

logger = logging.getLogger(__name__)

CENTRAL_URLS = "-"
BACK_URLS = "-b"


@dataclass
class ESClient:
    client: SearchClient
    urls: str
    indices: List[str]
    log_version: str = ""
    owned: bool = True  # built for this request, closed after use

    def search(self, body: dict) -> dict:
        return self.client.search(self.indices, body)

    def close(self):
        if self.owned:
            self.client.close()


def _basic_auth(es_config: Optional[str]):
    """Credentials from a deployment's JSON ES config, None when not secured"""
    if not es_config:
        return None
    try:
        cfg = json.loads(es_config)
    except ValueError:
        return None
    if not isinstance(cfg, dict) or not cfg.get("securityEnable"):
        return None
    username = cfg.get("securityUsername") or ""
    password = cfg.get("securityPassword") or ""
    if not username and not password:
        return None
    return (username, password)


class DeploymentResolver:
    """Builds one ESClient per usable log deployment"""

    def __init__(self, deployment_store, instance_store,
                 client_factory: Callable[..., SearchClient] = SearchClient,
                 transport_factory: Callable[[str], object] = cluster_dialer_transport):
        self.deployment_store = deployment_store
        self.instance_store = instance_store
        self.client_factory = client_factory
        self.transport_factory = transport_factory

    def resolve(self, org_id: str, addon: str = "", cluster_names: List[str] = ()) -> List[ESClient]:
        try:
            deployments = self.deployment_store.query_by_org_and_clusters(org_id, cluster_names)
        except SQLAlchemyError as e:
            logger.error("failed to query log deployments of org %s: %s", org_id, e)
            return []

        clients = []
        addons = None
        for d in deployments:
            if not d.es_url:
                continue

            if addons is None:
                # all other addons in the same cluster, project and workspace
                addons = resolve_addon_group(self.instance_store, addon) if addon else []

            options = {"urls": d.es_url.split(",")}
            auth = _basic_auth(d.es_config)
            if auth:
                options["basic_auth"] = auth

            org_scope = str(d.org_id or "")
            if d.log_type == LOG_TYPE_LOG_ANALYTICS:
                # deployments of the log-analytics addon predate per-org index aliases
                org_scope = ""

            try:
                if d.cluster_type == CLUSTER_TYPE_MANAGED:
                    options["transport"] = self.transport_factory(d.cluster_name)
                client = self.client_factory(**options)
            except SearchClientError as e:
                logger.error("failed to create elasticsearch client for cluster %s: %s", d.cluster_name, e)
                continue

            collector_url = (d.collector_url or "").strip()
            if collector_url or d.log_type == LOG_TYPE_LOG_SERVICE:
                version, prefix = LOG_VERSION_2, LOG_VERSION_2_PREFIX
            else:
                version, prefix = LOG_VERSION_1, LOG_VERSION_1_PREFIX
            clients.append(ESClient(
                client=client,
                urls=d.es_url,
                log_version=version,
                indices=get_log_indices(prefix, org_scope, addons),
            ))
        return clients


class ClientSelector:
    """Decides which ESClients a log request fans out to"""

    def __init__(self, resolver: DeploymentResolver, cluster_registry,
                 central_client: Optional[SearchClient], back_client: Optional[SearchClient] = None,
                 query_back_es: bool = False):
        self.resolver = resolver
        self.cluster_registry = cluster_registry
        self.central_client = central_client
        self.back_client = back_client
        self.query_back_es = query_back_es
        self._handlers = {
            Origin.SYSTEM: self._system_clients,
            Origin.ORGANIZATION: self._organization_clients,
            Origin.UNRECOGNIZED: self._unrecognized_clients,
            Origin.UNSPECIFIED: self._unspecified_clients,
        }

    def get_es_clients(self, org_id: str, req) -> List[ESClient]:
        if req.cluster_name or req.addon:
            if not req.cluster_name or not req.addon:
                return []
            return self.resolver.resolve(org_id, req.addon.replace("*", ""), [req.cluster_name])
        origin = classify_origin(req.filter_pairs())
        return self._handlers[origin](org_id)

    def central_clients(self, *indices: str) -> List[ESClient]:
        if self.central_client is None:
            logger.error("no central elasticsearch is configured, skipping %s", ",".join(indices))
            return []
        clients = [ESClient(client=self.central_client, urls=CENTRAL_URLS, indices=list(indices), owned=False)]
        if self.query_back_es:
            if self.back_client is None:
                logger.warning("QUERY_BACK_ES is enabled but no back-reader elasticsearch is configured")
            else:
                clients.append(ESClient(client=self.back_client, urls=BACK_URLS, indices=list(indices), owned=False))
        return clients

    def org_clients(self, org_id: str) -> List[ESClient]:
        """Clients of every deployment across the org's clusters"""
        try:
            cluster_names = self.cluster_registry.list_clusters(org_id)
        except ClusterRegistryError as e:
            logger.error("failed to list clusters of org %s: %s", org_id, e)
            return []
        if not cluster_names:
            return []
        return self.resolver.resolve(org_id, "", cluster_names)

    def _system_clients(self, org_id: str) -> List[ESClient]:
        return self.central_clients(SYSTEM_INDICES)

    def _organization_clients(self, org_id: str) -> List[ESClient]:
        clients = self.org_clients(org_id)
        if not clients:
            return self.central_clients(DEFAULT_INDICES)
        return clients

    def _unrecognized_clients(self, org_id: str) -> List[ESClient]:
        return self.central_clients(NOT_EXIST_INDICES)

    def _unspecified_clients(self, org_id: str) -> List[ESClient]:
        return self.central_clients(SYSTEM_INDICES) + self.org_clients(org_id)
