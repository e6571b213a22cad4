"""
Verse Graph API — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── stores: In-memory CollectionStore per resource (no ArangoDB needed)
    ├── app: FastAPI app built on those stores
    ├── test_client: HTTPX AsyncClient for API endpoint testing
    └── mock_database: MagicMock standing in for a python-arango database
"""

import os

# Override settings for testing BEFORE any app imports
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("PROVISION_ON_STARTUP", "false")

import itertools
import threading
from typing import Dict, List, Tuple
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from verse_graph.exceptions import StoreError, StoreErrorKind
from verse_graph.resources import RESOURCES
from verse_graph.services.store_base import CollectionStore, Record

SYSTEM_ATTRIBUTES = ("_key", "_id", "_rev")


class InMemoryCollectionStore(CollectionStore):
    """
    Dict-backed CollectionStore with ArangoDB-like semantics.

    Keys are assigned from a counter, revisions change on every write, a
    body carrying a stale `_rev` is rejected with CONFLICT, and edge stores
    refuse records without `_from`/`_to`. Every call is appended to `calls`
    so tests can assert the order of store primitives.
    """

    def __init__(self, name: str, edge: bool = False):
        self.name = name
        self.edge = edge
        self.documents: Dict[str, Record] = {}
        self.calls: List[Tuple[str, object]] = []
        self._keys = itertools.count(1)
        self._revs = itertools.count(1)
        self._lock = threading.Lock()

    def _next_rev(self) -> str:
        return f"_rev{next(self._revs)}"

    def _not_found(self, key: str) -> StoreError:
        return StoreError(StoreErrorKind.NOT_FOUND, "document not found", 1202, {"key": key})

    def _fields(self, record: Record) -> Record:
        return {k: v for k, v in record.items() if k not in SYSTEM_ATTRIBUTES}

    def _check_rev(self, current: Record, record: Record) -> None:
        if "_rev" in record and record["_rev"] != current["_rev"]:
            raise StoreError(StoreErrorKind.CONFLICT, "conflict, _rev values do not match", 1200)

    def all(self) -> List[Record]:
        self.calls.append(("all", None))
        return [dict(doc) for doc in self.documents.values()]

    def insert(self, record: Record) -> Record:
        self.calls.append(("insert", record.get("_key")))
        with self._lock:
            if self.edge and not (record.get("_from") and record.get("_to")):
                raise StoreError(StoreErrorKind.OTHER, "edge attribute missing or invalid", 1233)
            key = record.get("_key") or str(next(self._keys))
            if key in self.documents:
                raise StoreError(
                    StoreErrorKind.DUPLICATE,
                    f"unique constraint violated - in index primary of type primary over '_key'; conflicting key: {key}",
                    1210,
                )
            meta = {"_key": key, "_id": f"{self.name}/{key}", "_rev": self._next_rev()}
            self.documents[key] = {**self._fields(record), **meta}
            return dict(meta)

    def get(self, key: str) -> Record:
        self.calls.append(("get", key))
        if key not in self.documents:
            raise self._not_found(key)
        return dict(self.documents[key])

    def replace(self, key: str, record: Record) -> Record:
        self.calls.append(("replace", key))
        with self._lock:
            current = self.documents.get(key)
            if current is None:
                raise self._not_found(key)
            self._check_rev(current, record)
            meta = {"_key": key, "_id": current["_id"], "_rev": self._next_rev()}
            self.documents[key] = {**self._fields(record), **meta}
            return {**meta, "_old_rev": current["_rev"]}

    def update(self, key: str, patch: Record) -> Record:
        self.calls.append(("update", key))
        with self._lock:
            current = self.documents.get(key)
            if current is None:
                raise self._not_found(key)
            self._check_rev(current, patch)
            meta = {"_key": key, "_id": current["_id"], "_rev": self._next_rev()}
            self.documents[key] = {**current, **self._fields(patch), **meta}
            return {**meta, "_old_rev": current["_rev"]}

    def delete(self, key: str) -> None:
        self.calls.append(("delete", key))
        with self._lock:
            if self.documents.pop(key, None) is None:
                raise self._not_found(key)


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def stores() -> Dict[str, InMemoryCollectionStore]:
    """One empty in-memory store per resource, keyed by collection name."""
    return {
        resource.collection: InMemoryCollectionStore(resource.collection, edge=resource.edge)
        for resource in RESOURCES
    }


@pytest.fixture
def app(stores):
    """FastAPI app wired to the in-memory stores (no ArangoDB handle)."""
    from verse_graph.main import create_app

    return create_app(stores=stores)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/verse")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_database():
    """
    MagicMock python-arango database whose collections are tracked in a set.

    `has_collection` reflects `existing`; `create_collection` adds to it.
    """
    database = MagicMock()
    database.existing = set()
    database.has_collection.side_effect = lambda name: name in database.existing
    database.create_collection.side_effect = lambda name, edge=False: database.existing.add(name)
    return database
