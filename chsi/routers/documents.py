"""
Direct document generation endpoints.

Routes
------
GET  /api/documents/types    : supported document types → List[DocumentTypeInfo]
POST /api/documents/generate : render a document         → .docx download
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from chsi.config import settings
from chsi.dependencies.auth import get_current_user_id
from chsi.models.schemas import DocumentGenerateRequest, DocumentTypeInfo
from chsi.services.document_generator import (
    available_document_types,
    generate,
    resolve_document_type,
)
from chsi.services.document_model import UnknownDocumentType
from chsi.services.docx_serializer import DOCX_MIME_TYPE
from chsi.utils.helpers import content_disposition, document_filename

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/types", response_model=List[DocumentTypeInfo])
async def list_document_types() -> List[DocumentTypeInfo]:
    """List the document templates the generator supports."""
    return [DocumentTypeInfo(**item) for item in available_document_types()]


@router.post("/generate", status_code=status.HTTP_200_OK)
async def generate_document(
    body: DocumentGenerateRequest,
    user_id: str = Depends(get_current_user_id),
) -> Response:
    """
    Render a document from a data record and return it as a .docx download.

    Missing fields are printed as underscore blanks for hand filling.
    """
    try:
        document_type = resolve_document_type(body.type)
    except UnknownDocumentType as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    data = dict(body.data)
    if body.date:
        data["date"] = body.date

    title = (body.title or "").strip() or document_type.title
    blob = generate(
        document_type,
        data,
        title=title,
        font_name=settings.DOCUMENT_FONT_NAME,
    )
    filename = document_filename(title)

    logger.info("User %s generated %s (%d bytes)", user_id, document_type.value, len(blob))
    return Response(
        content=blob,
        media_type=DOCX_MIME_TYPE,
        headers={"Content-Disposition": content_disposition(filename)},
    )
