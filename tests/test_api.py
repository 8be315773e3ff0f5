#!/usr/bin/env python3
"""
API tests for LogHub query
"""
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from loghub.config import runtime_config
from loghub.deps import get_deployment_store, get_instance_store, get_query_service
from loghub.main import app
from loghub.query.clients import ClientSelector, DeploymentResolver
from loghub.query.search import LogQueryService
from loghub.services.clusters import StaticClusterRegistry

ORG_HEADERS = {"Org-ID": "1"}


@pytest.fixture
def central():
    client = MagicMock(name="central")
    client.search.return_value = {"hits": {"total": {"value": 1}, "hits": [
        {"_id": "sys-1", "_source": {"@timestamp": 5, "content": "hello"}}]}}
    return client


@pytest.fixture
def client(deployment_store, instance_store, fake_client_cls, central):
    def query_service():
        resolver = DeploymentResolver(deployment_store, instance_store, client_factory=fake_client_cls)
        selector = ClientSelector(resolver, StaticClusterRegistry({"1": ["c1"]}), central_client=central)
        return LogQueryService(selector)

    app.dependency_overrides[get_query_service] = query_service
    app.dependency_overrides[get_deployment_store] = lambda: deployment_store
    app.dependency_overrides[get_instance_store] = lambda: instance_store
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_endpoint(client):
    response = client.get("/v1/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-API-Version" in response.headers
    assert "X-Request-ID" in response.headers

def test_org_header_required(client):
    response = client.get("/v1/logs/search")
    assert response.status_code == 400
    assert response.json()["detail"] == "org_required"

def test_org_header_must_be_numeric(client):
    response = client.get("/v1/logs/search", headers={"Org-ID": "abc"})
    assert response.status_code == 400
    assert response.json()["detail"] == "invalid_org_id"

def test_org_resolved_from_alternate_header(client):
    response = client.get("/v1/logs/targets", params={"tag": "origin=sls"}, headers={"X-Org-ID": "1"})
    assert response.status_code == 200

def test_invalid_tag_rejected(client):
    response = client.get("/v1/logs/search", params={"tag": "=x"}, headers=ORG_HEADERS)
    assert response.status_code == 400

def test_targets_for_system_origin(client):
    response = client.get("/v1/logs/targets", params={"tag": "origin=sls"}, headers=ORG_HEADERS)
    assert response.status_code == 200
    data = response.json()
    assert data["org_id"] == "1"
    assert data["clients"] == [{"urls": "-", "log_version": "", "indices": ["sls-*"]}]

def test_targets_cluster_without_addon_is_empty(client, add_deployment):
    add_deployment()
    response = client.get("/v1/logs/targets", params={"clusterName": "c1"}, headers=ORG_HEADERS)
    assert response.status_code == 200
    assert response.json()["clients"] == []

def test_targets_include_org_deployments(client, add_deployment):
    add_deployment(org_id="1", cluster_name="c1", log_type="log-service")
    response = client.get("/v1/logs/targets", headers=ORG_HEADERS)
    clients = response.json()["clients"]
    assert [c["indices"] for c in clients] == [["sls-*"], ["rlogs-1"]]

def test_search_merges_backends(client, add_deployment, fake_client_cls):
    add_deployment(org_id="1", cluster_name="c1", log_type="log-service")

    response = client.get("/v1/logs/search", params={"start": 0, "end": 10, "debug": "true"}, headers=ORG_HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert [h["_id"] for h in data["hits"]] == ["sys-1"]
    assert len(data["debug"]) == 2
    [own] = fake_client_cls.instances
    assert own.searches[0][0] == ["rlogs-1"]
    assert own.closed

def test_search_rejects_inverted_range(client):
    response = client.get("/v1/logs/search", params={"start": 10, "end": 5}, headers=ORG_HEADERS)
    assert response.status_code == 400
    assert response.json()["detail"] == "invalid_time_range"

def test_register_and_list_deployments(client):
    payload = {
        "org_id": "1",
        "cluster_name": "c1",
        "es_url": "http://es-1:9200, http://es-2:9200",
        "es_config": "{\"securityEnable\": true}",
        "log_type": "log-service",
    }
    response = client.post("/v1/log-deployments", json=payload)
    assert response.status_code == 201
    assert response.json()["es_url"] == "http://es-1:9200,http://es-2:9200"
    assert "es_config" not in response.json()

    response = client.get("/v1/log-deployments", params={"org_id": "1"})
    assert [d["cluster_name"] for d in response.json()] == ["c1"]

def test_register_deployment_validates_url(client):
    response = client.post("/v1/log-deployments", json={"org_id": "1", "cluster_name": "c1", "es_url": "ftp://x"})
    assert response.status_code == 422

def test_register_and_get_instance(client):
    response = client.post("/v1/log-instances", json={"log_key": "a1", "cluster_name": "c1",
                                                      "project_id": "5", "workspace": "PROD"})
    assert response.status_code == 201

    response = client.get("/v1/log-instances/a1")
    assert response.status_code == 200
    assert response.json()["project_id"] == "5"

    response = client.get("/v1/log-instances/missing")
    assert response.status_code == 404

def test_feature_flags_toggle_back_es(client):
    try:
        response = client.patch("/v1/admin/featureflags", json={"QUERY_BACK_ES": True, "UNKNOWN": True})
        assert response.status_code == 200
        assert response.json() == {"QUERY_BACK_ES": True}
    finally:
        runtime_config.set("QUERY_BACK_ES", False)
