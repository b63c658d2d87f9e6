"""
Document generation entry point.

Public API
----------
resolve_document_type(tag)                     -> DocumentType
build_document(type, data, today=None)         -> List[StructuralNode]
generate(type, data, today=None)               -> bytes (.docx)
available_document_types()                     -> List[Dict[str, str]]
to_data_uri(blob)                              -> str
"""
from __future__ import annotations

import base64
import logging
from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from chsi.services.docx_serializer import DEFAULT_FONT_NAME, DOCX_MIME_TYPE, serialize
from chsi.services.document_model import (
    DocumentType,
    StructuralNode,
    UnknownDocumentType,
)
from chsi.services.document_templates import (
    build_bank_request,
    build_debtor_notice,
    build_property_inventory,
    build_resolution_initiation,
)

logger = logging.getLogger(__name__)

Assembler = Callable[[Optional[Mapping[str, Any]], Optional[date]], List[StructuralNode]]

TEMPLATES: Dict[DocumentType, Assembler] = {
    DocumentType.RESOLUTION_INITIATION: build_resolution_initiation,
    DocumentType.BANK_REQUEST: build_bank_request,
    DocumentType.DEBTOR_NOTICE: build_debtor_notice,
    DocumentType.PROPERTY_INVENTORY: build_property_inventory,
}


def resolve_document_type(tag: Union[DocumentType, str, None]) -> DocumentType:
    """Map a tag (enum or its string value) to a ``DocumentType``."""
    if isinstance(tag, DocumentType):
        return tag
    try:
        return DocumentType(tag)
    except ValueError:
        raise UnknownDocumentType(tag) from None


def build_document(
    document_type: Union[DocumentType, str],
    data: Optional[Mapping[str, Any]],
    today: Optional[date] = None,
) -> List[StructuralNode]:
    """Assemble the node tree for ``document_type`` without serializing it."""
    assembler = TEMPLATES[resolve_document_type(document_type)]
    return assembler(data, today)


def generate(
    document_type: Union[DocumentType, str],
    data: Optional[Mapping[str, Any]],
    today: Optional[date] = None,
    title: str = "",
    font_name: str = DEFAULT_FONT_NAME,
) -> bytes:
    """
    Render a document to .docx bytes.

    ``today`` pins the date printed in the document and stored in the package
    metadata; with the same inputs and date the output is byte-identical.

    Raises:
        UnknownDocumentType: if ``document_type`` is not a known tag.
    """
    resolved = resolve_document_type(document_type)
    today = today or date.today()
    nodes = TEMPLATES[resolved](data, today)
    blob = serialize(nodes, created=today, title=title or resolved.title, font_name=font_name)
    logger.info("Generated %s document (%d nodes, %d bytes)", resolved.value, len(nodes), len(blob))
    return blob


def available_document_types() -> List[Dict[str, str]]:
    return [{"type": t.value, "title": t.title} for t in TEMPLATES]


def to_data_uri(blob: bytes) -> str:
    """Encode a .docx buffer as a base64 data URI for inline delivery."""
    encoded = base64.b64encode(blob).decode("ascii")
    return f"data:{DOCX_MIME_TYPE};base64,{encoded}"
