"""
Formatting primitives used by the document templates.

Every builder returns a plain node from ``document_model``; nothing here
touches python-docx.
"""
from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence

from chsi.services.document_model import (
    Alignment,
    Paragraph,
    PropertyItem,
    Spacing,
    Table,
    TableCell,
    TableRow,
    TextRun,
)

# Fill-in-by-hand blank for any field the data record does not provide
PLACEHOLDER = "_______________"
# Blank line left for a handwritten signature
SIGNATURE_BLANK = "_________________"

HEADER_SIZE = 28
BODY_SIZE = 24
HEADER_SPACING = Spacing(after=200)
BODY_SPACING = Spacing(after=120)

PROPERTY_TABLE_HEADERS = ["№ п/п", "Наименование имущества", "Кол-во", "Примечание"]
PROPERTY_TABLE_WIDTHS = [10, 50, 15, 25]


def header(text: str) -> Paragraph:
    """Bold, large, centered line used for document titles."""
    return Paragraph(
        runs=[TextRun(text=text, bold=True, size=HEADER_SIZE)],
        alignment=Alignment.CENTER,
        spacing=HEADER_SPACING,
    )


def paragraph(
    text: str,
    bold: bool = False,
    alignment: Alignment = Alignment.JUSTIFIED,
    spacing: Optional[Spacing] = None,
) -> Paragraph:
    """Single-run body paragraph, justified unless told otherwise."""
    return Paragraph(
        runs=[TextRun(text=text, bold=bold, size=BODY_SIZE)],
        alignment=alignment,
        spacing=spacing or BODY_SPACING,
    )


def blank() -> Paragraph:
    return paragraph("")


def signature(role: str, name: str) -> Paragraph:
    return paragraph(f"{role} {SIGNATURE_BLANK} {name}")


def date_string(value: Optional[str] = None, today: Optional[date] = None) -> str:
    """
    Return ``value`` verbatim if given, otherwise today's date as DD.MM.YYYY.

    ``today`` pins the current date for reproducible output.
    """
    if value:
        return value
    return (today or date.today()).strftime("%d.%m.%Y")


def table(
    headers: Sequence[str],
    rows: Sequence[Sequence[Paragraph]],
    widths: Sequence[int],
) -> Table:
    """
    Build a bordered table with a bold, centered header row.

    ``rows`` holds one paragraph per cell; ``widths`` are column percentages.
    """
    header_row = TableRow(cells=[
        TableCell(paragraphs=[paragraph(label, bold=True, alignment=Alignment.CENTER)])
        for label in headers
    ])
    body_rows = [
        TableRow(cells=[TableCell(paragraphs=[cell]) for cell in row])
        for row in rows
    ]
    node = Table(rows=[header_row] + body_rows, widths=list(widths))
    node.validate()
    return node


def property_table(items: Sequence[PropertyItem]) -> Table:
    """Inventory table: index, name, quantity, remark."""
    rows: List[List[Paragraph]] = []
    for index, item in enumerate(items, start=1):
        rows.append([
            paragraph(str(index), alignment=Alignment.CENTER),
            paragraph(item.name),
            paragraph(item.quantity, alignment=Alignment.CENTER),
            paragraph(item.remark),
        ])
    return table(PROPERTY_TABLE_HEADERS, rows, PROPERTY_TABLE_WIDTHS)

