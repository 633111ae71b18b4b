"""
Precisely Documents: Document ORM Model
========================================

What:  Maps the `documents` table.
Who:   Used only by `SqlDocumentRepository` and Alembic; the rest of the
       application works with the pydantic `Document` schema.

Table Layout:
    id       BIGINT, auto-assigned by the store on insert
    title    TEXT NOT NULL
    content  TEXT NULL, JSON text of {"header": ..., "data": ...}
    signee   TEXT NOT NULL

    `content` is an opaque blob: the sub-object can change shape without a
    schema change, but it cannot be queried.
"""

from typing import Optional

from sqlalchemy import BigInteger, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from precisely.database import Base


class DocumentRecord(Base):
    """One persisted document row."""

    __tablename__ = "documents"

    # SQLite only auto-assigns ids for INTEGER PRIMARY KEY (the rowid alias)
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="JSON-serialized content sub-object",
    )

    signee: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<DocumentRecord(id={self.id}, title='{self.title}', signee='{self.signee}')>"
