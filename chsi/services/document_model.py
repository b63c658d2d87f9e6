"""
Node tree and request types for generated legal documents.

A generated document is an ordered sequence of structural nodes: either a
``Paragraph`` (a list of text runs plus alignment and spacing) or a ``Table``
(rows of cells, each cell a list of paragraphs, with per-column widths given
as percentages of the table width).

Sizes are in half-points and spacing in twips, the native units of
WordprocessingML.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from chsi.utils.helpers import document_filename


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class UnknownDocumentType(ValueError):
    """Raised when a document-type tag is not one of the recognised tags."""

    def __init__(self, tag: Any) -> None:
        self.tag = tag
        super().__init__(f"Unknown document type: {tag!r}")


class MalformedPayload(ValueError):
    """Raised when a structured document block cannot be parsed."""


class MalformedNode(ValueError):
    """Raised when an invalid node reaches the serializer."""


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class DocumentType(str, enum.Enum):
    """Document templates the generator knows how to assemble."""

    RESOLUTION_INITIATION = "resolution_initiation"
    BANK_REQUEST = "bank_request"
    DEBTOR_NOTICE = "debtor_notice"
    PROPERTY_INVENTORY = "property_inventory"

    @property
    def title(self) -> str:
        return DOCUMENT_TYPE_TITLES[self]


DOCUMENT_TYPE_TITLES: Dict[DocumentType, str] = {
    DocumentType.RESOLUTION_INITIATION: "Постановление о возбуждении исполнительного производства",
    DocumentType.BANK_REQUEST: "Запрос в банк о наличии счетов",
    DocumentType.DEBTOR_NOTICE: "Уведомление должнику",
    DocumentType.PROPERTY_INVENTORY: "Акт описи имущества",
}


class Alignment(str, enum.Enum):
    """Paragraph alignment."""

    START = "start"
    CENTER = "center"
    END = "end"
    JUSTIFIED = "justified"


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TextRun:
    text: str
    bold: bool = False
    size: int = 24  # half-points


@dataclass(frozen=True)
class Spacing:
    before: int = 0  # twips
    after: int = 0   # twips


@dataclass
class Paragraph:
    runs: List[TextRun]
    alignment: Alignment = Alignment.JUSTIFIED
    spacing: Spacing = field(default_factory=Spacing)

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass
class TableCell:
    paragraphs: List[Paragraph]

    @property
    def text(self) -> str:
        return "\n".join(p.text for p in self.paragraphs)


@dataclass
class TableRow:
    cells: List[TableCell]


@dataclass
class Table:
    """A bordered table; ``widths`` are column percentages summing to 100."""

    rows: List[TableRow]
    widths: List[int]

    @property
    def column_count(self) -> int:
        return len(self.widths)

    def validate(self) -> None:
        """Raise ``MalformedNode`` if the table is not well formed."""
        if not self.widths:
            raise MalformedNode("Table has no columns")
        if sum(self.widths) != 100:
            raise MalformedNode(
                f"Table column widths sum to {sum(self.widths)}, expected 100"
            )
        if not self.rows:
            raise MalformedNode("Table has no rows")
        for index, row in enumerate(self.rows):
            if len(row.cells) != self.column_count:
                raise MalformedNode(
                    f"Table row {index} has {len(row.cells)} cells, "
                    f"expected {self.column_count}"
                )


StructuralNode = Union[Paragraph, Table]


@dataclass(frozen=True)
class PropertyItem:
    """One line of a property inventory."""

    name: str
    quantity: str = "1"
    remark: str = ""


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

@dataclass
class DocumentRequest:
    """A structured document payload taken from one assistant reply."""

    type: DocumentType
    title: str
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def filename(self) -> str:
        return document_filename(self.title)

