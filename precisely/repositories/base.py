"""
Precisely Documents: Abstract Document Repository
==================================================

What:  The persistence contract the service layer depends on.
How:   Concrete stores subclass `DocumentRepository` and implement all five
       coroutines. The service receives an instance at construction, so a
       real store and a test double are interchangeable.
"""

from abc import ABC, abstractmethod
from typing import List

from precisely.schemas.document import Document


class DocumentRepository(ABC):
    """
    Contract:
        - Missing rows raise NotFoundError (get only).
        - Every other store failure raises PersistenceError.
        - update and delete do not check that a row existed; callers that
          care perform a `get` first.
    """

    @abstractmethod
    async def create(self, document: Document) -> Document:
        """
        Inserts `document` and returns it with the store-assigned id.

        Any id already on `document` is ignored.
        """

    @abstractmethod
    async def get(self, document_id: int) -> Document:
        """
        Fetches one document by id.

        Raises:
            NotFoundError: No row has this id.
            PersistenceError: The query failed.
        """

    @abstractmethod
    async def update(self, document: Document) -> Document:
        """Overwrites the row with `document.id`; returns `document` as given."""

    @abstractmethod
    async def delete(self, document_id: int) -> None:
        """Deletes the row with `document_id`, if any."""

    @abstractmethod
    async def get_all(self) -> List[Document]:
        """Every document, in store order. Empty store gives an empty list."""
