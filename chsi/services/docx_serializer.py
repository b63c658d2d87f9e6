"""
DOCX serializer for document node trees.

Writes paragraphs and tables through python-docx, then repacks the ZIP
container with fixed entry timestamps and fixed core-property dates so the
same node tree always produces the same bytes.
"""
from __future__ import annotations

import io
import logging
import zipfile
from datetime import date, datetime, time
from typing import Any, Dict, Optional, Sequence

from docx import Document as DocxDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt, Twips

from chsi.services.document_model import (
    Alignment,
    MalformedNode,
    Paragraph,
    StructuralNode,
    Table,
)

logger = logging.getLogger(__name__)

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DEFAULT_FONT_NAME = "Times New Roman"

_ALIGNMENTS: Dict[Alignment, Any] = {
    Alignment.START: WD_ALIGN_PARAGRAPH.LEFT,
    Alignment.CENTER: WD_ALIGN_PARAGRAPH.CENTER,
    Alignment.END: WD_ALIGN_PARAGRAPH.RIGHT,
    Alignment.JUSTIFIED: WD_ALIGN_PARAGRAPH.JUSTIFY,
}

# Earliest timestamp a ZIP entry can carry
_ZIP_TIMESTAMP = (1980, 1, 1, 0, 0, 0)
_ZIP_PERMISSIONS = 0o644 << 16

# Percentages are stored in fiftieths of a percent
_PCT_UNIT = 50

# Core properties are limited to 255 characters each
_CORE_PROPERTY_LIMIT = 255


def serialize(
    nodes: Sequence[StructuralNode],
    created: Optional[date] = None,
    title: str = "",
    font_name: str = DEFAULT_FONT_NAME,
) -> bytes:
    """
    Pack a node sequence into a .docx byte buffer.

    Args:
        nodes:     Ordered paragraphs and tables of the document body.
        created:   Date written to the package core properties. Defaults to
                   a fixed date so output does not depend on the clock.
        title:     Document title stored in the core properties.
        font_name: Base font of the Normal style.

    Raises:
        MalformedNode: if the sequence is empty or contains an invalid node.
    """
    if not nodes:
        raise MalformedNode("Document has no content")

    document = DocxDocument()
    _apply_base_style(document, font_name)
    _set_core_properties(document, created or date(2000, 1, 1), title)

    for node in nodes:
        if isinstance(node, Paragraph):
            _write_paragraph(document.add_paragraph(), node)
        elif isinstance(node, Table):
            _write_table(document, node)
        else:
            raise MalformedNode(f"Unsupported node type: {type(node).__name__}")

    buffer = io.BytesIO()
    document.save(buffer)
    blob = _normalize_package(buffer.getvalue())
    logger.debug("Serialized %d nodes into %d bytes", len(nodes), len(blob))
    return blob


# ---------------------------------------------------------------------------
# Document-level helpers
# ---------------------------------------------------------------------------

def _apply_base_style(document, font_name: str) -> None:
    normal = document.styles["Normal"]
    normal.font.name = font_name
    normal.font.size = Pt(12)
    r_pr = normal.element.get_or_add_rPr()
    r_fonts = r_pr.find(qn("w:rFonts"))
    if r_fonts is not None:
        r_fonts.set(qn("w:eastAsia"), font_name)
        r_fonts.set(qn("w:cs"), font_name)


def _set_core_properties(document, created: date, title: str) -> None:
    stamp = datetime.combine(created, time.min)
    core = document.core_properties
    core.title = title[:_CORE_PROPERTY_LIMIT]
    core.author = ""
    core.last_modified_by = ""
    core.revision = 1
    core.created = stamp
    core.modified = stamp
    core.last_printed = stamp


# ---------------------------------------------------------------------------
# Node writers
# ---------------------------------------------------------------------------

def _write_paragraph(target, node: Paragraph) -> None:
    target.alignment = _ALIGNMENTS[node.alignment]
    fmt = target.paragraph_format
    fmt.space_before = Twips(node.spacing.before)
    fmt.space_after = Twips(node.spacing.after)
    for run in node.runs:
        written = target.add_run(run.text)
        if run.bold:
            written.bold = True
        written.font.size = Pt(run.size / 2)


def _write_table(document, node: Table) -> None:
    node.validate()

    table = document.add_table(rows=len(node.rows), cols=node.column_count)
    table.style = "Table Grid"
    table.autofit = False
    _set_pct_width(table._tbl.tblPr, "w:tblW", 100)

    for row_node, row in zip(node.rows, table.rows):
        for width, cell_node, cell in zip(node.widths, row_node.cells, row.cells):
            _set_pct_width(cell._tc.get_or_add_tcPr(), "w:tcW", width)
            if not cell_node.paragraphs:
                continue
            _write_paragraph(cell.paragraphs[0], cell_node.paragraphs[0])
            for extra in cell_node.paragraphs[1:]:
                _write_paragraph(cell.add_paragraph(), extra)


def _set_pct_width(parent, tag: str, percent: int) -> None:
    width = parent.find(qn(tag))
    if width is None:
        width = OxmlElement(tag)
        parent.insert(0, width)
    width.set(qn("w:w"), str(percent * _PCT_UNIT))
    width.set(qn("w:type"), "pct")


# ---------------------------------------------------------------------------
# Packaging
# ---------------------------------------------------------------------------

def _normalize_package(blob: bytes) -> bytes:
    """Rewrite the ZIP container with fixed timestamps and permissions."""
    out = io.BytesIO()
    with zipfile.ZipFile(io.BytesIO(blob)) as source, \
            zipfile.ZipFile(out, "w", zipfile.ZIP_DEFLATED) as target:
        for info in source.infolist():
            entry = zipfile.ZipInfo(info.filename, date_time=_ZIP_TIMESTAMP)
            entry.compress_type = zipfile.ZIP_DEFLATED
            entry.external_attr = _ZIP_PERMISSIONS
            target.writestr(entry, source.read(info.filename))
    return out.getvalue()
