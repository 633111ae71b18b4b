# Repositories package init
"""
Precisely Documents: Repository Layer
======================================

What:  Persistence for documents behind a small abstract interface.

Inventory:
    - DocumentRepository (abstract): the five operations every store offers
    - SqlDocumentRepository: async SQLAlchemy implementation over `documents`

Test doubles implement `DocumentRepository` directly; see tests/conftest.py.
"""

from precisely.repositories.base import DocumentRepository
from precisely.repositories.document_repository import SqlDocumentRepository

__all__ = ["DocumentRepository", "SqlDocumentRepository"]
