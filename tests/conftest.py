"""
Pytest configuration and shared fixtures.

Route and manager tests run against an in-memory stand-in for the Motor database that
implements the handful of collection methods the managers call. Tests that need a real
MongoDB are marked `db` and skipped unless `RUN_DB_TESTS=1`.
"""

import copy
import os
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock, patch

# Settings are read at import time
os.environ.setdefault("MONGODB_URL", "mongodb://localhost:27017")
os.environ.setdefault("MONGODB_DATABASE", "test_communication_tracker")

import httpx
import pytest
import pytest_asyncio
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from communication_tracker.database import db_manager
from communication_tracker.main import app


# ============================================================================
# In-memory collection double
# ============================================================================


def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
    for key, condition in query.items():
        value = document.get(key)
        if isinstance(condition, dict) and "$in" in condition:
            if value not in condition["$in"]:
                return False
        elif value != condition:
            return False
    return True


class FakeInsertOneResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id


class FakeUpdateResult:
    def __init__(self, matched_count: int):
        self.matched_count = matched_count
        self.modified_count = matched_count


class FakeCursor:
    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = documents

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        return self._documents if length is None else self._documents[:length]


class FakeCollection:
    """Supports the subset of `AsyncIOMotorCollection` used by the managers."""

    def __init__(self):
        self.documents: List[Dict[str, Any]] = []
        self.indexes: List[Any] = []
        self.fail_on: set = set()

    def _check_failure(self, operation: str) -> None:
        if operation in self.fail_on:
            raise PyMongoError(f"{operation} failed")

    def _find_index(self, query: Dict[str, Any]) -> Optional[int]:
        for index, document in enumerate(self.documents):
            if _matches(document, query):
                return index
        return None

    @staticmethod
    def _apply_update(document: Dict[str, Any], update: Dict[str, Any]) -> None:
        for key, value in update.get("$set", {}).items():
            document[key] = copy.deepcopy(value)
        for key, value in update.get("$push", {}).items():
            document.setdefault(key, []).append(copy.deepcopy(value))

    async def insert_one(self, document: Dict[str, Any]) -> FakeInsertOneResult:
        self._check_failure("insert_one")
        document.setdefault("_id", ObjectId())
        self.documents.append(copy.deepcopy(document))
        return FakeInsertOneResult(document["_id"])

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self._check_failure("find_one")
        index = self._find_index(query)
        return copy.deepcopy(self.documents[index]) if index is not None else None

    def find(self, query: Optional[Dict[str, Any]] = None) -> FakeCursor:
        self._check_failure("find")
        return FakeCursor([copy.deepcopy(d) for d in self.documents if _matches(d, query or {})])

    async def update_one(self, query: Dict[str, Any], update: Dict[str, Any]) -> FakeUpdateResult:
        self._check_failure("update_one")
        index = self._find_index(query)
        if index is None:
            return FakeUpdateResult(0)
        self._apply_update(self.documents[index], update)
        return FakeUpdateResult(1)

    async def find_one_and_update(self, query, update, return_document=ReturnDocument.BEFORE):
        self._check_failure("find_one_and_update")
        index = self._find_index(query)
        if index is None:
            return None
        before = copy.deepcopy(self.documents[index])
        self._apply_update(self.documents[index], update)
        return copy.deepcopy(self.documents[index]) if return_document == ReturnDocument.AFTER else before

    async def find_one_and_delete(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self._check_failure("find_one_and_delete")
        index = self._find_index(query)
        if index is None:
            return None
        return self.documents.pop(index)

    async def create_index(self, keys, name=None):
        self.indexes.append((keys, name))
        return name


class FakeDatabase(dict):
    def __missing__(self, name: str) -> FakeCollection:
        collection = FakeCollection()
        self[name] = collection
        return collection


# ============================================================================
# Fixtures
# ============================================================================


def pytest_configure(config):
    config.addinivalue_line("markers", "db: requires a running MongoDB at MONGODB_URL")


def pytest_collection_modifyitems(config, items):
    if os.environ.get("RUN_DB_TESTS") == "1":
        return
    skip_db = pytest.mark.skip(reason="db tests skipped by default; set RUN_DB_TESTS=1 to enable")
    for item in items:
        if "db" in item.keywords:
            item.add_marker(skip_db)


@pytest.fixture
def fake_db():
    """Connect the global `db_manager` to a fresh in-memory database."""
    database = FakeDatabase()
    client = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1})
    with patch.object(db_manager, "database", database), patch.object(db_manager, "client", client):
        yield database


@pytest_asyncio.fixture
async def client():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest_asyncio.fixture
async def acme(client, fake_db):
    """Create the `Acme` company used across tests and return its JSON body."""
    response = await client.post("/api/companies", json={"name": "Acme", "location": "NY"})
    assert response.status_code == 201
    return response.json()["company"]
