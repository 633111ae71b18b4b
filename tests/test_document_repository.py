"""
Precisely Documents: SQL Repository Tests
==========================================

What:  SqlDocumentRepository against a real SQLite database (aiosqlite).
How:   Each test gets a fresh database file with the schema created by
       `create_schema()`.

What we test:
    ✅ create assigns a positive id; get reads it back
    ✅ content JSON survives a write/read cycle; absent content stays None
    ✅ get on a missing id → NotFoundError
    ✅ get_all on an empty table → []
    ✅ update returns the input unchanged and writes the row
    ✅ update/delete of a missing id affect nothing and do not raise
    ✅ driver failures and undecodable content → PersistenceError
"""

import pytest
from sqlalchemy import insert

from precisely.database import Base
from precisely.exceptions import NotFoundError, PersistenceError
from precisely.models.document import DocumentRecord
from precisely.repositories.document_repository import (
    deserialize_content,
    serialize_content,
)
from precisely.schemas.document import Content, Document


class TestContentSerialization:

    def test_serialize_none_is_null(self):
        """Absent content should be stored as SQL NULL."""
        assert serialize_content(None) is None

    def test_deserialize_accepts_bytes(self):
        """Byte blobs from the driver should decode like text."""
        content = deserialize_content(b'{"header": "h", "data": "d"}')

        assert content == Content(header="h", data="d")

    def test_deserialize_json_null(self):
        """A JSON null blob should read back as no content."""
        assert deserialize_content("null") is None

    def test_deserialize_rejects_garbage(self):
        """Non-JSON blobs should raise ValueError."""
        with pytest.raises(ValueError):
            deserialize_content("{not json")


class TestSqlDocumentRepository:

    @pytest.mark.asyncio
    async def test_create_then_get(self, sql_repository):
        """Created documents should get a positive id and read back intact."""
        created = await sql_repository.create(Document(title="t", signee="s"))

        assert created.id is not None and created.id > 0

        fetched = await sql_repository.get(created.id)
        assert fetched.id == created.id
        assert fetched.title == "t"
        assert fetched.signee == "s"

    @pytest.mark.asyncio
    async def test_create_ignores_supplied_id(self, sql_repository):
        """The store, not the caller, should assign the id."""
        created = await sql_repository.create(Document(id=500, title="t", signee="s"))

        assert created.id == 1

    @pytest.mark.asyncio
    async def test_content_round_trip(self, sql_repository):
        """Content should survive a write/read cycle unchanged."""
        created = await sql_repository.create(
            Document(title="t", signee="s", content=Content(header="h", data="d"))
        )

        fetched = await sql_repository.get(created.id)

        assert fetched.content == Content(header="h", data="d")

    @pytest.mark.asyncio
    async def test_absent_content_stays_none(self, sql_repository):
        """Documents without content should read back with content None."""
        created = await sql_repository.create(Document(title="t", signee="s"))

        fetched = await sql_repository.get(created.id)

        assert fetched.content is None

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, sql_repository):
        """Zero matching rows should raise NotFoundError."""
        with pytest.raises(NotFoundError) as exc_info:
            await sql_repository.get(12345)

        assert exc_info.value.context["resource_id"] == 12345

    @pytest.mark.asyncio
    async def test_get_all_empty(self, sql_repository):
        """An empty table should give an empty list."""
        documents = await sql_repository.get_all()

        assert documents == []

    @pytest.mark.asyncio
    async def test_get_all_returns_every_row(self, sql_repository):
        """get_all should return every row with decoded content."""
        first = await sql_repository.create(Document(title="a", signee="x"))
        second = await sql_repository.create(
            Document(title="b", signee="y", content=Content(header="h", data="d"))
        )

        documents = await sql_repository.get_all()

        assert {d.id for d in documents} == {first.id, second.id}
        by_id = {d.id: d for d in documents}
        assert by_id[second.id].content == Content(header="h", data="d")

    @pytest.mark.asyncio
    async def test_update_writes_row_and_returns_input(self, sql_repository):
        """Update should persist the values and return the input object."""
        created = await sql_repository.create(Document(title="old", signee="old"))
        document = Document(
            id=created.id, title="new", signee="new2", content=Content(header="h", data="d")
        )

        result = await sql_repository.update(document)

        assert result is document
        fetched = await sql_repository.get(created.id)
        assert fetched == document

    @pytest.mark.asyncio
    async def test_update_missing_row_is_silent(self, sql_repository):
        """Updating a missing id should affect nothing and not raise."""
        document = Document(id=99, title="t", signee="s")

        result = await sql_repository.update(document)

        assert result is document
        with pytest.raises(NotFoundError):
            await sql_repository.get(99)

    @pytest.mark.asyncio
    async def test_delete(self, sql_repository):
        """Deleted documents should no longer be found."""
        created = await sql_repository.create(Document(title="t", signee="s"))

        await sql_repository.delete(created.id)

        with pytest.raises(NotFoundError):
            await sql_repository.get(created.id)

    @pytest.mark.asyncio
    async def test_delete_missing_row_is_silent(self, sql_repository):
        """Deleting a missing id should not raise."""
        assert await sql_repository.delete(404) is None

    @pytest.mark.asyncio
    async def test_undecodable_content_is_persistence_error(self, sql_repository, sqlite_engine):
        """A corrupt content blob should surface as PersistenceError."""
        async with sqlite_engine.begin() as conn:
            await conn.execute(
                insert(DocumentRecord).values(id=7, title="t", content="{broken", signee="s")
            )

        with pytest.raises(PersistenceError):
            await sql_repository.get(7)

    @pytest.mark.asyncio
    async def test_driver_failure_is_persistence_error(self, sql_repository, sqlite_engine):
        """SQL errors should be wrapped in PersistenceError for every operation."""
        async with sqlite_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

        with pytest.raises(PersistenceError) as exc_info:
            await sql_repository.create(Document(title="t", signee="s"))
        assert exc_info.value.context["operation"] == "create"

        with pytest.raises(PersistenceError):
            await sql_repository.get_all()

        with pytest.raises(PersistenceError):
            await sql_repository.get(1)
