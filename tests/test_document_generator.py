"""Tests for the document generation entry point."""
import base64
import io
from datetime import date

import pytest
from docx import Document

from chsi.services.document_generator import (
    TEMPLATES,
    available_document_types,
    build_document,
    generate,
    resolve_document_type,
    to_data_uri,
)
from chsi.services.document_model import DocumentType, UnknownDocumentType
from chsi.services.docx_serializer import DOCX_MIME_TYPE

TODAY = date(2024, 3, 7)


def test_resolve_document_type():
    assert resolve_document_type("bank_request") is DocumentType.BANK_REQUEST
    assert resolve_document_type(DocumentType.DEBTOR_NOTICE) is DocumentType.DEBTOR_NOTICE


@pytest.mark.parametrize("tag", ["court_order", "", None, "Bank_Request"])
def test_unknown_tags_are_rejected(tag):
    with pytest.raises(UnknownDocumentType) as exc_info:
        resolve_document_type(tag)
    assert exc_info.value.tag == tag


def test_every_type_has_a_template():
    assert set(TEMPLATES) == set(DocumentType)


def test_available_document_types():
    types = available_document_types()
    assert [t["type"] for t in types] == [
        "resolution_initiation",
        "bank_request",
        "debtor_notice",
        "property_inventory",
    ]
    assert types[3]["title"] == "Акт описи имущества"


def test_build_document_returns_nodes():
    nodes = build_document("resolution_initiation", {"city": "Астана"}, today=TODAY)
    assert nodes[0].text == "г. Астана"


@pytest.mark.parametrize("document_type", list(DocumentType))
def test_generate_is_deterministic_for_pinned_date(document_type):
    first = generate(document_type, {}, today=TODAY)
    second = generate(document_type, {}, today=TODAY)
    assert first == second


def test_generate_depends_on_date():
    assert generate("debtor_notice", {}, today=TODAY) != generate(
        "debtor_notice", {}, today=date(2024, 3, 8)
    )


def test_generate_unknown_type():
    with pytest.raises(UnknownDocumentType):
        generate("court_order", {}, today=TODAY)


def test_generated_document_reads_back():
    blob = generate("debtor_notice", {"debtor_name": "Иванов И.И."}, today=TODAY)
    doc = Document(io.BytesIO(blob))
    texts = [p.text for p in doc.paragraphs]
    assert "Уважаемый(ая) Иванов И.И.!" in texts
    assert "от 07.03.2024" in texts
    assert doc.core_properties.title == "Уведомление должнику"


def test_to_data_uri():
    uri = to_data_uri(b"PK\x03\x04")
    prefix = f"data:{DOCX_MIME_TYPE};base64,"
    assert uri.startswith(prefix)
    assert base64.b64decode(uri[len(prefix):]) == b"PK\x03\x04"
