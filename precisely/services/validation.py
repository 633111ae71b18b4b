"""
Precisely Documents: Document Validator
========================================

What:  The single business rule on documents: title and signee are required.
How:   Trims both fields in place, then checks title before signee so a
       document with both fields blank reports the title.
Who:   `DocumentService.create` and `DocumentService.update`, before any
       repository call.
"""

from precisely.exceptions import InvalidSigneeError, InvalidTitleError
from precisely.schemas.document import Document


def validate_document(document: Document) -> Document:
    """
    Trims title and signee on `document` and checks neither is empty.

    Content and id are not inspected.

    Returns:
        The same `document`, with trimmed fields applied.

    Raises:
        InvalidTitleError: title is empty after trimming.
        InvalidSigneeError: title is present but signee is empty after trimming.
    """
    document.title = document.title.strip()
    document.signee = document.signee.strip()

    if not document.title:
        raise InvalidTitleError(context={"document_id": document.id})
    if not document.signee:
        raise InvalidSigneeError(context={"document_id": document.id})
    return document
