# tests/conftest.py
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from loghub.db import Base
import loghub.models  # noqa: F401
from loghub.query.search_client import _parse_urls
from loghub.services.store import LogDeploymentStore, LogInstanceStore


class FakeSearchClient:
    """SearchClient stand-in recording its options and searches"""

    instances = []

    def __init__(self, urls, basic_auth=None, transport=None, **kwargs):
        self.urls = _parse_urls(urls)
        self.basic_auth = basic_auth
        self.transport = transport
        self.response = {"hits": {"total": {"value": 0}, "hits": []}}
        self.searches = []
        self.closed = False
        FakeSearchClient.instances.append(self)

    def search(self, indices, body):
        self.searches.append((list(indices), body))
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def _reset_fake_clients():
    FakeSearchClient.instances = []
    yield


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def deployment_store(session_factory):
    return LogDeploymentStore(session_factory)


@pytest.fixture
def instance_store(session_factory):
    return LogInstanceStore(session_factory)


@pytest.fixture
def add_deployment(deployment_store):
    def _add(org_id="1", cluster_name="c1", es_url="http://es-1:9200", **fields):
        return deployment_store.create(org_id=org_id, cluster_name=cluster_name, es_url=es_url, **fields)
    return _add


@pytest.fixture
def add_instance(instance_store):
    def _add(log_key, cluster_name="c1", project_id="p1", workspace="PROD", **fields):
        return instance_store.create(log_key=log_key, cluster_name=cluster_name,
                                     project_id=project_id, workspace=workspace, **fields)
    return _add


@pytest.fixture
def fake_client_cls():
    return FakeSearchClient
