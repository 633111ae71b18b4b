"""
Precisely Documents: SQL Document Repository
=============================================

What:  Stores documents in the `documents` table via async SQLAlchemy.
How:   Each operation opens its own session and transaction from the
       injected session factory and issues one parameterized statement.
       `content` is written as JSON text and parsed back on read.
Who:   Constructed once by `create_app()` and handed to `DocumentService`.

Error Translation:
    zero rows on get                → NotFoundError
    SQLAlchemyError (any statement) → PersistenceError
    undecodable content blob        → PersistenceError

    Constraint violations are not singled out; they surface as
    PersistenceError like every other driver failure.

Query Plans:
    get:      SELECT ... FROM documents WHERE id = :id
    get_all:  SELECT ... FROM documents            (no ORDER BY)
    update:   UPDATE documents SET ... WHERE id = :id
    delete:   DELETE FROM documents WHERE id = :id
"""

import json
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from precisely.exceptions import NotFoundError, PersistenceError
from precisely.models.document import DocumentRecord
from precisely.repositories.base import DocumentRepository
from precisely.schemas.document import Content, Document

logger = logging.getLogger(__name__)

_FAILURE_MESSAGES = {
    "create": "Could not create the document. Please try again.",
    "get": "Could not retrieve the document. Please try again.",
    "update": "Could not update the document. Please try again.",
    "delete": "Could not delete the document. Please try again.",
    "get_all": "Could not retrieve documents. Please try again.",
}


def serialize_content(content: Optional[Content]) -> Optional[str]:
    """JSON text for the `content` column; None stays SQL NULL."""
    if content is None:
        return None
    return json.dumps(content.model_dump())


def deserialize_content(raw: Any) -> Optional[Content]:
    """
    Parses a `content` column value back into `Content`.

    Accepts str or bytes (drivers differ for TEXT columns). NULL and a JSON
    `null` both give None.

    Raises:
        ValueError: The blob is not JSON, or not a content object.
    """
    if raw is None:
        return None
    payload = json.loads(raw)
    if payload is None:
        return None
    return Content.model_validate(payload)


class SqlDocumentRepository(DocumentRepository):
    """
    `DocumentRepository` backed by a relational store.

    Holds only the session factory, which is safe to share across
    concurrent requests; the engine's pool does the connection management.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def create(self, document: Document) -> Document:
        record = DocumentRecord(
            title=document.title,
            content=serialize_content(document.content),
            signee=document.signee,
        )
        try:
            async with self._session_factory() as session, session.begin():
                session.add(record)
                # Flush emits the INSERT and reads back the assigned id
                await session.flush()
                new_id = record.id
        except SQLAlchemyError as e:
            raise self._failure("create", e) from e

        logger.debug("Inserted document row %s", new_id)
        return document.model_copy(update={"id": new_id})

    async def get(self, document_id: int) -> Document:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(DocumentRecord).where(DocumentRecord.id == document_id)
                )
                record = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._failure("get", e, document_id=document_id) from e

        if record is None:
            raise NotFoundError(resource="document", resource_id=document_id)
        return self._to_document(record)

    async def update(self, document: Document) -> Document:
        stmt = (
            update(DocumentRecord)
            .where(DocumentRecord.id == document.id)
            .values(
                title=document.title,
                content=serialize_content(document.content),
                signee=document.signee,
            )
        )
        try:
            async with self._session_factory() as session, session.begin():
                result = await session.execute(stmt)
        except SQLAlchemyError as e:
            raise self._failure("update", e, document_id=document.id) from e

        logger.debug("Updated document %s (%s rows)", document.id, result.rowcount)
        # The row is not re-read; the caller's values are returned as given
        return document

    async def delete(self, document_id: int) -> None:
        try:
            async with self._session_factory() as session, session.begin():
                result = await session.execute(
                    delete(DocumentRecord).where(DocumentRecord.id == document_id)
                )
        except SQLAlchemyError as e:
            raise self._failure("delete", e, document_id=document_id) from e

        logger.debug("Deleted document %s (%s rows)", document_id, result.rowcount)

    async def get_all(self) -> List[Document]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(DocumentRecord))
                records = list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._failure("get_all", e) from e

        return [self._to_document(record) for record in records]

    # ── Helpers ───────────────────────────────────────────────────────────

    @staticmethod
    def _to_document(record: DocumentRecord) -> Document:
        """Row → schema, decoding the content blob."""
        try:
            content = deserialize_content(record.content)
        except ValueError as e:
            logger.error("Undecodable content on document %s: %s", record.id, str(e))
            raise PersistenceError(
                message="Could not read the document content.",
                context={"document_id": record.id, "original_error": type(e).__name__},
            ) from e

        return Document(
            id=record.id,
            title=record.title,
            content=content,
            signee=record.signee,
        )

    @staticmethod
    def _failure(operation: str, error: Exception, **context: Any) -> PersistenceError:
        """Logs a driver failure and wraps it for the caller to raise."""
        logger.error("Database error during %s: %s", operation, str(error))
        ctx: Dict[str, Any] = {"operation": operation, "original_error": type(error).__name__}
        ctx.update(context)
        return PersistenceError(message=_FAILURE_MESSAGES[operation], context=ctx)
