"""
Typed field records for each document template.

The assistant hands us a loose ``{key: value}`` mapping. Each template gets a
dataclass describing the fields it prints; ``from_data`` reads the mapping once,
substitutes the placeholder for anything missing, formats numbers, resolves
the document date and parses the property list. Templates then read plain
attributes and never deal with missing values themselves.
"""
from __future__ import annotations

import dataclasses
import re
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from chsi.services.document_builders import PLACEHOLDER, date_string
from chsi.services.document_model import PropertyItem

DEFAULT_SUBJECT = "взыскание денежных средств"
DEFAULT_REMARKS = "не поступали"
FALLBACK_PROPERTY_ROWS = 3

_ITEM_NUMBER_RE = re.compile(r"^\d+\.\s*")

F = TypeVar("F", bound="DocumentFields")


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------

def is_absent(value: Any) -> bool:
    """``None`` and blank strings count as missing; ``0`` does not."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def format_value(value: Any) -> str:
    """Render a payload value the way it was supplied."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def text_or_placeholder(value: Any, fallback: str = PLACEHOLDER) -> str:
    return fallback if is_absent(value) else format_value(value)


def parse_property_line(line: str) -> PropertyItem:
    """
    Parse ``"N. name, quantity, remark"``.

    The leading number is dropped; a missing name prints the placeholder and
    quantity defaults to ``"1"``. Anything after the second comma belongs to
    the remark.
    """
    body = _ITEM_NUMBER_RE.sub("", line.strip())
    parts = [part.strip() for part in body.split(",")]
    name = parts[0] or PLACEHOLDER
    quantity = parts[1] if len(parts) > 1 and parts[1] else "1"
    remark = ", ".join(part for part in parts[2:] if part)
    return PropertyItem(name=name, quantity=quantity, remark=remark)


def parse_property_items(value: Any) -> List[PropertyItem]:
    """
    Normalise the ``property_items`` field into table rows.

    Accepts a newline-delimited string, a list of such lines, or a list of
    ``{"name", "quantity", "remark"}`` objects. Missing or blank input gives
    placeholder rows for hand filling.
    """
    if isinstance(value, (list, tuple)):
        items: List[PropertyItem] = []
        for entry in value:
            if isinstance(entry, Mapping):
                if is_absent(entry.get("name")):
                    continue
                items.append(PropertyItem(
                    name=format_value(entry["name"]).strip(),
                    quantity=text_or_placeholder(entry.get("quantity"), "1").strip(),
                    remark=text_or_placeholder(entry.get("remark"), "").strip(),
                ))
            elif not is_absent(entry):
                items.append(parse_property_line(format_value(entry)))
        if items:
            return items
        value = None

    if is_absent(value):
        return [PropertyItem(name=PLACEHOLDER) for _ in range(FALLBACK_PROPERTY_ROWS)]

    lines = format_value(value).split("\n")
    return [parse_property_line(line) for line in lines if line.strip()]


# ---------------------------------------------------------------------------
# Field declarations
# ---------------------------------------------------------------------------

def text_field(fallback: str = PLACEHOLDER) -> Any:
    return dataclasses.field(default=fallback, metadata={"kind": "text", "fallback": fallback})


def date_field() -> Any:
    return dataclasses.field(default="", metadata={"kind": "date"})


def items_field() -> Any:
    return dataclasses.field(default_factory=list, metadata={"kind": "items"})


@dataclasses.dataclass
class DocumentFields:
    """Base class: builds any subclass from an untyped data record."""

    @classmethod
    def from_data(
        cls: Type[F],
        data: Optional[Mapping[str, Any]],
        today: Optional[date] = None,
    ) -> F:
        data = data or {}
        values: Dict[str, Any] = {}
        for declared in dataclasses.fields(cls):
            raw = data.get(declared.name)
            kind = declared.metadata.get("kind", "text")
            if kind == "date":
                values[declared.name] = date_string(
                    None if is_absent(raw) else format_value(raw), today
                )
            elif kind == "items":
                values[declared.name] = parse_property_items(raw)
            else:
                values[declared.name] = text_or_placeholder(
                    raw, declared.metadata.get("fallback", PLACEHOLDER)
                )
        return cls(**values)


@dataclasses.dataclass
class ResolutionFields(DocumentFields):
    city: str = text_field()
    date: str = date_field()
    executor_name: str = text_field()
    district: str = text_field()
    exec_doc_number: str = text_field()
    exec_doc_date: str = text_field()
    court_name: str = text_field()
    creditor_name: str = text_field()
    creditor_iin: str = text_field()
    creditor_address: str = text_field()
    debtor_name: str = text_field()
    debtor_iin: str = text_field()
    debtor_address: str = text_field()
    subject: str = text_field(DEFAULT_SUBJECT)
    amount: str = text_field()
    case_number: str = text_field()


@dataclasses.dataclass
class BankRequestFields(DocumentFields):
    outgoing_number: str = text_field()
    date: str = date_field()
    bank_name: str = text_field()
    bank_address: str = text_field()
    executor_name: str = text_field()
    executor_address: str = text_field()
    case_number: str = text_field()
    debtor_name: str = text_field()
    debtor_iin: str = text_field()
    debtor_address: str = text_field()
    creditor_name: str = text_field()
    amount: str = text_field()


@dataclasses.dataclass
class DebtorNoticeFields(DocumentFields):
    outgoing_number: str = text_field()
    date: str = date_field()
    debtor_name: str = text_field()
    debtor_address: str = text_field()
    executor_name: str = text_field()
    executor_address: str = text_field()
    executor_phone: str = text_field()
    case_number: str = text_field()
    exec_doc_number: str = text_field()
    exec_doc_date: str = text_field()
    court_name: str = text_field()
    creditor_name: str = text_field()
    subject: str = text_field(DEFAULT_SUBJECT)
    amount: str = text_field()


@dataclasses.dataclass
class PropertyInventoryFields(DocumentFields):
    city: str = text_field()
    date: str = date_field()
    executor_name: str = text_field()
    district: str = text_field()
    case_number: str = text_field()
    creditor_name: str = text_field()
    debtor_name: str = text_field()
    amount: str = text_field()
    inventory_address: str = text_field()
    witness1_name: str = text_field()
    witness1_address: str = text_field()
    witness2_name: str = text_field()
    witness2_address: str = text_field()
    property_items: List[PropertyItem] = items_field()
    storage_responsible: str = text_field()
    remarks: str = text_field(DEFAULT_REMARKS)
