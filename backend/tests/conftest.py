"""
Petora Backend - Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   The app factory is given an in-memory stand-in for the async MongoDB
       client, so no database server is needed. Uploads go to a per-test
       temporary directory.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── settings:           Settings pointing at tmp_path, fast bcrypt
    ├── mongo_client:       InMemoryMongoClient
    ├── database:           MongoDatabase around the in-memory client, indexes ensured
    ├── app:                create_app(settings, database)
    ├── services:           app.state.services
    ├── test_client:        HTTPX AsyncClient bound to the app
    ├── sample_image_bytes: Minimal JPEG
    ├── shelter:            A stored shelter record
    └── admin_token:        Bearer token of a registered shelter admin
"""

import copy
import os
import tempfile
from typing import Any, Dict, List, Mapping, Optional

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo.errors import DuplicateKeyError

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set before any petora import: petora.main builds a default app on import
os.environ["MONGO_URI"] = "mongodb://localhost:27017/petora_test"
os.environ["JWT_SECRET"] = "test-secret-not-real"
os.environ["UPLOAD_ROOT"] = tempfile.mkdtemp(prefix="petora_test_")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

from petora.config import Settings  # noqa: E402
from petora.database import MongoDatabase  # noqa: E402
from petora.main import create_app  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# In-memory MongoDB
# ══════════════════════════════════════════════════════════════════════════

def _matches(document: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
    for key, expected in filters.items():
        actual = document.get(key)
        if isinstance(expected, dict) and "$in" in expected:
            if actual not in expected["$in"]:
                return False
        elif actual != expected:
            return False
    return True


class _InsertOneResult:
    def __init__(self, inserted_id: ObjectId):
        self.inserted_id = inserted_id


class _Cursor:
    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = documents

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        return self._documents if length is None else self._documents[:length]


class InMemoryCollection:
    """Subset of the async collection API used by EntityStore."""

    def __init__(self, name: str):
        self.name = name
        self.documents: List[Dict[str, Any]] = []
        self.unique_keys: List[str] = []

    def _check_unique(self, candidate: Mapping[str, Any], ignore_id: Any = None) -> None:
        for key in self.unique_keys:
            if key not in candidate:
                continue
            for existing in self.documents:
                if existing["_id"] != ignore_id and existing.get(key) == candidate[key]:
                    raise DuplicateKeyError(
                        f"E11000 duplicate key error collection: {self.name} index: {key}_1",
                        code=11000,
                        details={"keyValue": {key: candidate[key]}},
                    )

    async def create_index(self, key: str, unique: bool = False) -> str:
        if unique and key not in self.unique_keys:
            self.unique_keys.append(key)
        return f"{key}_1"

    async def insert_one(self, document: Dict[str, Any]) -> _InsertOneResult:
        self._check_unique(document)
        stored = copy.deepcopy(document)
        stored.setdefault("_id", ObjectId())
        self.documents.append(stored)
        return _InsertOneResult(stored["_id"])

    def find(self, filters: Optional[Mapping[str, Any]] = None) -> _Cursor:
        return _Cursor([
            copy.deepcopy(doc) for doc in self.documents if _matches(doc, filters or {})
        ])

    async def find_one(self, filters: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        for doc in self.documents:
            if _matches(doc, filters):
                return copy.deepcopy(doc)
        return None

    async def find_one_and_update(
        self,
        filters: Mapping[str, Any],
        update: Mapping[str, Any],
        return_document: bool = False,
    ) -> Optional[Dict[str, Any]]:
        for doc in self.documents:
            if _matches(doc, filters):
                before = copy.deepcopy(doc)
                changes = update.get("$set", {})
                self._check_unique(changes, ignore_id=doc["_id"])
                doc.update(copy.deepcopy(changes))
                return copy.deepcopy(doc) if return_document else before
        return None

    async def find_one_and_delete(self, filters: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        for index, doc in enumerate(self.documents):
            if _matches(doc, filters):
                return self.documents.pop(index)
        return None


class InMemoryDatabase:
    def __init__(self, name: str):
        self.name = name
        self._collections: Dict[str, InMemoryCollection] = {}

    def __getitem__(self, name: str) -> InMemoryCollection:
        if name not in self._collections:
            self._collections[name] = InMemoryCollection(name)
        return self._collections[name]

    async def command(self, name: str) -> Dict[str, Any]:
        return {"ok": 1.0}


class InMemoryMongoClient:
    def __init__(self):
        self.databases: Dict[str, InMemoryDatabase] = {}
        self.closed = False

    def get_default_database(self, default: Optional[str] = None) -> InMemoryDatabase:
        name = default or "test"
        if name not in self.databases:
            self.databases[name] = InMemoryDatabase(name)
        return self.databases[name]

    async def close(self) -> None:
        self.closed = True


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def settings(tmp_path):
    return Settings(
        mongo_uri="mongodb://localhost:27017/petora_test",
        jwt_secret="test-secret-not-real",
        upload_root=str(tmp_path / "uploads"),
        bcrypt_rounds=4,
        log_level="WARNING",
    )


@pytest.fixture
def mongo_client():
    return InMemoryMongoClient()


@pytest_asyncio.fixture
async def database(settings, mongo_client):
    """
    MongoDatabase around the in-memory client.

    ASGITransport does not run the app lifespan, so indexes are ensured here.
    """
    db = MongoDatabase(
        uri=settings.mongo_uri,
        default_database=settings.mongo_default_database,
        client=mongo_client,
    )
    await db.ensure_indexes()
    return db


@pytest.fixture
def app(settings, database):
    return create_app(settings=settings, database=database)


@pytest.fixture
def services(app):
    return app.state.services


@pytest_asyncio.fixture
async def test_client(app):
    """
    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_image_bytes():
    """Smallest valid JPEG: SOI + JFIF header + EOI."""
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest_asyncio.fixture
async def shelter(services):
    response = await services.shelters.create_shelter({
        "name": "Happy Tails",
        "location": "Springfield",
        "contactEmail": "hello@happytails.org",
    })
    return response


@pytest_asyncio.fixture
async def admin_token(test_client, shelter):
    credentials = {"email": "admin@happytails.org", "password": "s3cret-pass"}
    response = await test_client.post(
        "/api/auth/register", json={**credentials, "shelterRef": shelter.id}
    )
    assert response.status_code == 201
    response = await test_client.post("/api/auth/login", json=credentials)
    assert response.status_code == 200
    return response.json()["token"]
