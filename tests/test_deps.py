"""
Tests for the shared client wiring
"""
import pytest

from loghub.deps import build_shared_client
from loghub.query.search_client import SearchClient


@pytest.mark.parametrize("urls", [[], [""], ["not-a-url"], ["es-central:9200"]])
def test_unusable_shared_client_config_gives_none(urls):
    assert build_shared_client("central", urls) is None

def test_shared_client_built_with_auth():
    client = build_shared_client("central", ["http://es-central:9200"], "elastic", "secret")
    assert isinstance(client, SearchClient)
    assert client.urls == ["http://es-central:9200"]
    client.close()
