"""
Precisely Documents: Document Service (Orchestrator)
=====================================================

What:  Sequences validation and repository calls for the five operations.
How:   Composes `validate_document` with an injected `DocumentRepository`.
Who:   Constructed once by `create_app()`; called by the document routes.

Orchestration:
    create:  validate → repository.create
    update:  validate → repository.get (existence) → repository.update
    delete:  repository.get (existence) → repository.delete
    get:     repository.get
    get_all: repository.get_all

    Errors from the validator or repository propagate unchanged.

Concurrency Note:
    The existence check and the write that follows are separate statements
    with no transaction around them. A row deleted between the two is not
    detected: update then affects zero rows and still returns the input.
"""

import logging
from typing import List

from precisely.repositories.base import DocumentRepository
from precisely.schemas.document import Document
from precisely.services.validation import validate_document

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Business logic layer for documents.

    Responsibilities:
        - create(): validate then insert
        - update(): validate, confirm existence, then overwrite
        - delete(): confirm existence, then remove
        - get() / get_all(): pass-through reads
    """

    def __init__(self, repository: DocumentRepository):
        self.repository = repository

    async def create(self, document: Document) -> Document:
        """
        Validate and insert a new document.

        Raises:
            InvalidTitleError / InvalidSigneeError: Before any store access.
            PersistenceError: The insert failed.
        """
        validate_document(document)
        created = await self.repository.create(document)
        logger.info("Document %s created", created.id)
        return created

    async def update(self, document: Document) -> Document:
        """
        Validate, check the target exists, then overwrite it.

        `document.id` must already be set (the route copies it from the path).
        The update statement is never issued when the existence check fails.

        Returns:
            `document` as given, with trimmed title and signee.

        Raises:
            InvalidTitleError / InvalidSigneeError: Before any store access.
            NotFoundError: No document has `document.id`.
            PersistenceError: The check or the update failed.
        """
        validate_document(document)
        await self.repository.get(document.id)
        updated = await self.repository.update(document)
        logger.info("Document %s updated", document.id)
        return updated

    async def delete(self, document_id: int) -> None:
        """
        Check the target exists, then remove it.

        Deleting an unknown id reports NotFoundError, not a silent no-op.
        """
        await self.repository.get(document_id)
        await self.repository.delete(document_id)
        logger.info("Document %s deleted", document_id)

    async def get(self, document_id: int) -> Document:
        return await self.repository.get(document_id)

    async def get_all(self) -> List[Document]:
        return await self.repository.get_all()
