"""
Precisely Documents: Document Route Handlers
=============================================

What:  The five CRUD endpoints over `/documents`.
How:   FastAPI decodes the JSON body into `Document` and the path id into a
       64-bit integer. Either failing raises RequestValidationError, which
       the app answers with 400 before the service is called. The service
       comes from `app.state` through `get_document_service`.

Status Codes:
    POST   /documents        201 created   | 400 body  | 422 validation
    PUT    /documents/{id}   200 updated   | 400 body/id | 404 | 422
    DELETE /documents/{id}   200 null data | 400 id    | 404
    GET    /documents/{id}   200 document  | 400 id    | 404
    GET    /documents        200 list
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Path, Request
from fastapi.responses import JSONResponse

from precisely.responses import envelope_response
from precisely.schemas.document import Document
from precisely.schemas.response import Envelope
from precisely.services.document_service import DocumentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["Documents"])

# Identifiers are signed 64-bit integers in the store
MIN_DOCUMENT_ID = -(2 ** 63)
MAX_DOCUMENT_ID = 2 ** 63 - 1

_ERROR_RESPONSES = {
    400: {"description": "Malformed body or identifier", "model": Envelope},
    404: {"description": "Document not found", "model": Envelope},
    422: {"description": "Title or signee is empty", "model": Envelope},
    500: {"description": "Persistence failure", "model": Envelope},
}


def get_document_service(request: Request) -> DocumentService:
    """Dependency: the `DocumentService` built by `create_app()`."""
    return request.app.state.document_service


def _document_id_param():
    """Path parameter for a signed 64-bit document id."""
    return Path(
        ...,
        ge=MIN_DOCUMENT_ID,
        le=MAX_DOCUMENT_ID,
        description="Document identifier",
    )


@router.post(
    "",
    status_code=201,
    response_model=Envelope,
    responses={k: _ERROR_RESPONSES[k] for k in (400, 422, 500)},
    summary="Create a document",
)
async def create_document(
    document: Document,
    service: DocumentService = Depends(get_document_service),
) -> JSONResponse:
    """Creates a document; any `id` in the body is ignored."""
    created = await service.create(document)
    return envelope_response(201, data=created)


@router.get(
    "",
    response_model=Envelope,
    responses={500: _ERROR_RESPONSES[500]},
    summary="List all documents",
)
async def list_documents(
    service: DocumentService = Depends(get_document_service),
) -> JSONResponse:
    documents: List[Document] = await service.get_all()
    return envelope_response(200, data=documents)


@router.get(
    "/{document_id}",
    response_model=Envelope,
    responses={k: _ERROR_RESPONSES[k] for k in (400, 404, 500)},
    summary="Get a document by ID",
)
async def get_document(
    document_id: int = _document_id_param(),
    service: DocumentService = Depends(get_document_service),
) -> JSONResponse:
    document = await service.get(document_id)
    return envelope_response(200, data=document)


@router.put(
    "/{document_id}",
    response_model=Envelope,
    responses=_ERROR_RESPONSES,
    summary="Update a document",
)
async def update_document(
    document: Document,
    document_id: int = _document_id_param(),
    service: DocumentService = Depends(get_document_service),
) -> JSONResponse:
    """
    Overwrites title, signee and content of an existing document.

    The path id wins over any `id` in the body. The reply echoes the
    submitted values (trimmed); the row is not re-read.
    """
    document.id = document_id
    updated = await service.update(document)
    return envelope_response(200, data=updated)


@router.delete(
    "/{document_id}",
    response_model=Envelope,
    responses={k: _ERROR_RESPONSES[k] for k in (400, 404, 500)},
    summary="Delete a document",
)
async def delete_document(
    document_id: int = _document_id_param(),
    service: DocumentService = Depends(get_document_service),
) -> JSONResponse:
    await service.delete(document_id)
    return envelope_response(200, data=None)
