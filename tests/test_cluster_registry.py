import httpx
import pytest

from loghub.services.clusters import ClusterRegistryError, HTTPClusterRegistry, StaticClusterRegistry


def registry_with(handler):
    return HTTPClusterRegistry("http://cluster-manager", transport=httpx.MockTransport(handler))

def test_lists_cluster_names_from_envelope():
    def handler(request):
        assert request.url.path == "/api/clusters"
        assert request.url.params["orgID"] == "7"
        return httpx.Response(200, json={"success": True, "data": [{"name": "c1"}, {"name": "c2"}]})

    assert registry_with(handler).list_clusters("7") == ["c1", "c2"]

def test_lists_cluster_names_from_plain_list():
    registry = registry_with(lambda request: httpx.Response(200, json=["c1", {"name": "c2"}, {"id": 3}]))
    assert registry.list_clusters("7") == ["c1", "c2"]

def test_error_envelope_raises():
    registry = registry_with(lambda request: httpx.Response(
        200, json={"success": False, "err": {"msg": "org not found"}}))
    with pytest.raises(ClusterRegistryError):
        registry.list_clusters("7")

def test_http_error_raises():
    registry = registry_with(lambda request: httpx.Response(503))
    with pytest.raises(ClusterRegistryError):
        registry.list_clusters("7")

def test_static_registry():
    registry = StaticClusterRegistry({1: ["c1"]})
    assert registry.list_clusters("1") == ["c1"]
    assert registry.list_clusters("2") == []
