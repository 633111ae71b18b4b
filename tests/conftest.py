"""
Precisely Documents: Test Configuration (conftest.py)
======================================================

What:  Shared fixtures for the whole suite.
How:   Service and route tests run against `InMemoryDocumentRepository`,
       which records every call so tests can assert the store was (or was
       not) reached. Repository and end-to-end tests run against a real
       SQLite database file in each test's tmp_path, via aiosqlite.

Fixture Hierarchy:
    ├── settings:            Settings pointing at a per-test SQLite file
    ├── fake_repository:     In-memory DocumentRepository double
    ├── document_service:    DocumentService over fake_repository
    ├── test_client:         HTTPX client for an app serving document_service
    ├── sqlite_engine:       Async engine with the schema created
    ├── sql_repository:      SqlDocumentRepository over sqlite_engine
    └── db_client:           HTTPX client for an app over sqlite_engine
"""

import os
from typing import Any, Dict, List, Optional, Tuple

# Set before any precisely import: precisely.main builds an app at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from precisely.config import Settings
from precisely.database import build_engine, build_session_factory, create_schema
from precisely.exceptions import NotFoundError
from precisely.main import create_app
from precisely.repositories.base import DocumentRepository
from precisely.repositories.document_repository import SqlDocumentRepository
from precisely.schemas.document import Document
from precisely.services.document_service import DocumentService


class InMemoryDocumentRepository(DocumentRepository):
    """
    Dict-backed repository double.

    `calls` lists (operation, argument) in order. Setting `failure` makes
    every operation raise it after recording the call.
    """

    def __init__(self):
        self.rows: Dict[int, Document] = {}
        self.calls: List[Tuple[str, Any]] = []
        self.failure: Optional[Exception] = None
        self._next_id = 1

    @property
    def operations(self) -> List[str]:
        return [name for name, _ in self.calls]

    def _record(self, operation: str, argument: Any = None) -> None:
        self.calls.append((operation, argument))
        if self.failure is not None:
            raise self.failure

    def seed(self, title: str, signee: str, **fields: Any) -> Document:
        """Stores a document directly, bypassing `calls`."""
        document = Document(id=self._next_id, title=title, signee=signee, **fields)
        self.rows[document.id] = document
        self._next_id += 1
        return document.model_copy(deep=True)

    async def create(self, document: Document) -> Document:
        self._record("create", document)
        stored = document.model_copy(deep=True, update={"id": self._next_id})
        self.rows[stored.id] = stored
        self._next_id += 1
        return stored.model_copy(deep=True)

    async def get(self, document_id: int) -> Document:
        self._record("get", document_id)
        if document_id not in self.rows:
            raise NotFoundError(resource="document", resource_id=document_id)
        return self.rows[document_id].model_copy(deep=True)

    async def update(self, document: Document) -> Document:
        self._record("update", document)
        self.rows[document.id] = document.model_copy(deep=True)
        return document

    async def delete(self, document_id: int) -> None:
        self._record("delete", document_id)
        self.rows.pop(document_id, None)

    async def get_all(self) -> List[Document]:
        self._record("get_all")
        return [row.model_copy(deep=True) for row in self.rows.values()]


# ══════════════════════════════════════════════════════════════════════════
# Configuration
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'precisely.db'}",
        log_level="WARNING",
    )


# ══════════════════════════════════════════════════════════════════════════
# In-Memory Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_repository() -> InMemoryDocumentRepository:
    return InMemoryDocumentRepository()


@pytest.fixture
def document_service(fake_repository) -> DocumentService:
    return DocumentService(fake_repository)


@pytest_asyncio.fixture
async def test_client(settings, document_service):
    """
    HTTPX client for an app serving the in-memory service.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/documents")
            assert response.json()["data"] == []
    """
    app = create_app(settings=settings, service=document_service)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    await app.state.engine.dispose()


# ══════════════════════════════════════════════════════════════════════════
# SQLite Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def sqlite_engine(settings):
    engine = build_engine(settings)
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def sql_repository(sqlite_engine) -> SqlDocumentRepository:
    return SqlDocumentRepository(build_session_factory(sqlite_engine))


@pytest_asyncio.fixture
async def db_client(settings, sqlite_engine):
    """HTTPX client for the full stack: routes → service → SQLite."""
    app = create_app(settings=settings, engine=sqlite_engine)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
