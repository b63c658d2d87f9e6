"""Tests for small utility helpers."""
from chsi.utils.helpers import (
    chat_title_from_message,
    content_disposition,
    document_filename,
    safe_filename,
)


def test_chat_title_from_message():
    assert chat_title_from_message("Привет") == "Привет"
    assert chat_title_from_message("а" * 50) == "а" * 40 + "..."


def test_safe_filename():
    assert safe_filename('Акт: описи/имущества?') == "Акт описи имущества"
    assert safe_filename("   ") == "document"


def test_document_filename():
    assert document_filename("Уведомление") == "Уведомление.docx"
    assert document_filename("") == "document.docx"
    assert document_filename("a/b") == "a b.docx"
    long_name = document_filename("Уведомление " * 30)
    assert len(long_name) <= 205
    assert long_name.endswith(".docx")


def test_content_disposition_falls_back_to_ascii_name():
    value = content_disposition("Акт описи.docx")
    assert value.startswith('attachment; filename="document.docx"')
    assert "filename*=UTF-8''" in value
