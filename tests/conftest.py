"""
Shared pytest fixtures and configuration for all tests.

Database access goes through a small in-memory stand-in for the PyMongo
async collection API. It understands only the operators the contact code
issues (equality filters, ``$text``, ``$set``, ``$inc``, ``$max`` and a
``$match`` + ``$group`` pipeline).
"""

import copy
import itertools
from collections.abc import Generator
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
import strawberry

from rolodex.database.seed_data import TEXT_INDEX_FIELDS

FIXED_NOW = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)


@dataclass
class InsertOneResult:
    inserted_id: Any


@dataclass
class UpdateResult:
    matched_count: int
    modified_count: int


@dataclass
class DeleteResult:
    deleted_count: int


def _matches(document: dict[str, Any], query: dict[str, Any]) -> bool:
    for key, expected in query.items():
        if key == "$text":
            needle = expected["$search"].lower()
            haystack = " ".join(str(document.get(f) or "") for f in TEXT_INDEX_FIELDS)
            if needle not in haystack.lower():
                return False
        elif document.get(key) != expected:
            return False
    return True


def _sort_key(value: Any) -> tuple[bool, Any]:
    return (value is not None, value if value is not None else "")


class FakeCursor:
    def __init__(self, documents: list[dict[str, Any]]):
        self._documents = documents
        self._skip = 0
        self._limit = 0

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._documents.sort(key=lambda d: _sort_key(d.get(key)), reverse=direction < 0)
        return self

    def skip(self, count: int) -> "FakeCursor":
        self._skip = count
        return self

    def limit(self, count: int) -> "FakeCursor":
        self._limit = count
        return self

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        documents = self._documents[self._skip :]
        if self._limit:
            documents = documents[: self._limit]
        return [copy.deepcopy(d) for d in documents]


class FakeCollection:
    def __init__(self, name: str):
        self.name = name
        self.documents: list[dict[str, Any]] = []
        self.indexes: dict[str, dict[str, Any]] = {"_id_": {"key": [("_id", 1)]}}
        self._ids = itertools.count(1)

    def _find_raw(self, query: dict[str, Any] | None) -> dict[str, Any] | None:
        return next((d for d in self.documents if _matches(d, query or {})), None)

    async def insert_one(self, document: dict[str, Any]) -> InsertOneResult:
        document.setdefault("_id", f"{self.name}-{next(self._ids)}")
        self.documents.append(copy.deepcopy(document))
        return InsertOneResult(inserted_id=document["_id"])

    async def find_one(
        self,
        filter: dict[str, Any] | None = None,
        sort: list[tuple[str, int]] | None = None,
        projection: dict[str, int] | None = None,
    ) -> dict[str, Any] | None:
        if sort:
            cursor = self.find(filter).sort(*sort[0])
            found = await cursor.limit(1).to_list()
            return found[0] if found else None
        document = self._find_raw(filter)
        return copy.deepcopy(document) if document is not None else None

    def find(self, filter: dict[str, Any] | None = None) -> FakeCursor:
        return FakeCursor([d for d in self.documents if _matches(d, filter or {})])

    async def count_documents(self, filter: dict[str, Any]) -> int:
        return sum(1 for d in self.documents if _matches(d, filter))

    async def update_one(
        self, filter: dict[str, Any], update: dict[str, Any], upsert: bool = False
    ) -> UpdateResult:
        document = self._find_raw(filter)
        if document is None:
            if not upsert:
                return UpdateResult(matched_count=0, modified_count=0)
            document = dict(filter)
            await self.insert_one(document)
            document = self._find_raw(filter)
        document.update(update.get("$set", {}))
        for key, value in update.get("$inc", {}).items():
            document[key] = document.get(key, 0) + value
        for key, value in update.get("$max", {}).items():
            document[key] = max(document.get(key, value), value)
        return UpdateResult(matched_count=1, modified_count=1)

    async def find_one_and_update(
        self,
        filter: dict[str, Any],
        update: dict[str, Any],
        upsert: bool = False,
        return_document: Any = None,
    ) -> dict[str, Any] | None:
        await self.update_one(filter, update, upsert=upsert)
        return await self.find_one(filter)

    async def delete_one(self, filter: dict[str, Any]) -> DeleteResult:
        document = self._find_raw(filter)
        if document is None:
            return DeleteResult(deleted_count=0)
        self.documents.remove(document)
        return DeleteResult(deleted_count=1)

    async def aggregate(self, pipeline: list[dict[str, Any]]) -> FakeCursor:
        documents = [d for d in self.documents if _matches(d, pipeline[0]["$match"])]
        group = pipeline[1]["$group"]
        buckets: dict[tuple, dict[str, Any]] = {}
        for document in documents:
            key = {name: document.get(ref.lstrip("$")) for name, ref in group["_id"].items()}
            bucket = buckets.setdefault(tuple(key.items()), {"_id": key, "count": 0})
            bucket["count"] += 1
        return FakeCursor(list(buckets.values()))

    async def create_index(self, keys: list[tuple[str, Any]], **kwargs: Any) -> str:
        name = kwargs.get("name") or "_".join(f"{k}_{v}" for k, v in keys)
        self.indexes[name] = {"key": keys, **kwargs}
        return name

    async def index_information(self) -> dict[str, dict[str, Any]]:
        return copy.deepcopy(self.indexes)


class FakeDatabase:
    def __init__(self):
        self.collections: dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


@pytest.fixture
def fake_db() -> FakeDatabase:
    """Empty in-memory database."""
    return FakeDatabase()


@pytest.fixture
def patched_db(fake_db: FakeDatabase) -> Generator[FakeDatabase, None, None]:
    """Route the contact resolvers to the in-memory database."""
    with patch("rolodex.graphql.resolvers.contact.get_database", return_value=fake_db):
        yield fake_db


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def mock_info(fixed_now: datetime):
    """Create a mock GraphQL info object with a request and a fixed clock."""
    info = MagicMock(spec=strawberry.Info)
    info.context = {
        "request": MagicMock(
            headers=MagicMock(
                get=MagicMock(
                    side_effect=lambda key: {"authorization": "Bearer test-token"}.get(key)
                )
            )
        ),
        "clock": lambda: fixed_now,
    }
    return info


@pytest.fixture
def mock_info_no_auth(fixed_now: datetime):
    """Create a mock GraphQL info object without an authorization header."""
    info = MagicMock(spec=strawberry.Info)
    info.context = {
        "request": MagicMock(headers=MagicMock(get=MagicMock(return_value=None))),
        "clock": lambda: fixed_now,
    }
    return info


def make_contact(contact_id: int, **overrides: Any) -> dict[str, Any]:
    """Build a stored contact document."""
    document: dict[str, Any] = {
        "id": contact_id,
        "name": f"Contact {contact_id:02d}",
        "email": f"contact{contact_id}@example.com",
        "phone": None,
        "LinkedIn": None,
        "company": None,
        "title": None,
        "owner": "dev-user",
        "activeStatus": True,
        "contactFrequency": "Monthly",
        "priority": "Medium",
        "familiarity": "Acquaintance",
        "lastContactDate": None,
        "nextContactDate": None,
        "notes": None,
        "contextSpace": None,
    }
    document.update(overrides)
    return document


@pytest.fixture
def contact_factory():
    """Factory for stored contact documents."""
    return make_contact
