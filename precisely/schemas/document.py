"""
Precisely Documents: Document Schemas
======================================

What:  The pydantic shapes of the document entity, used as request bodies,
       as the service/repository currency and in response payloads.
How:   FastAPI decodes request JSON into `Document`. Fields absent from the
       body (or sent as null) decode to their defaults, so a missing title or signee reaches
       the validator as an empty string (422) rather than failing decoding
       (400). Unknown keys are ignored.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class Content(BaseModel):
    """Structured document body, stored as a JSON blob."""

    header: str = Field(default="", description="Content header")
    data: str = Field(default="", description="Content data")


class Document(BaseModel):
    """
    A document as seen by clients and by the service layer.

    `id` is assigned by the store on create and fixed by the URL on update;
    any id in a request body is ignored.
    """

    id: Optional[int] = Field(default=None, description="Store-assigned identifier")
    title: str = Field(default="", description="Non-empty after trimming")
    content: Optional[Content] = Field(default=None, description="Optional structured content")
    signee: str = Field(default="", description="Non-empty after trimming")

    model_config = {"from_attributes": True}

    @field_validator("title", "signee", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        """JSON null decodes like an absent field, leaving the rule to the validator."""
        return "" if v is None else v
