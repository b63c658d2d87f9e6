"""
Extraction of structured document payloads from assistant replies.

The system prompt asks the model to append a block like::

    [DOCUMENT_DATA]
    {"type": "debtor_notice", "title": "Уведомление", "data": {...}}
    [/DOCUMENT_DATA]

Model output is unreliable, so parsing tolerates code fences, trailing commas,
Python literals, ``//`` comments and prose around the JSON object. Anything
that still cannot be read raises ``MalformedPayload``; the caller decides how
to degrade.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Optional, Tuple

from chsi.services.document_generator import resolve_document_type
from chsi.services.document_model import (
    DocumentRequest,
    DocumentType,
    MalformedPayload,
    UnknownDocumentType,
)

logger = logging.getLogger(__name__)

BLOCK_RE = re.compile(r"\[DOCUMENT_DATA\]\s*([\s\S]*?)\s*\[/DOCUMENT_DATA\]")

# Fields whose list form is meaningful to the templates
_LIST_FIELDS = frozenset({"property_items"})


# ---------------------------------------------------------------------------
# Block handling
# ---------------------------------------------------------------------------

def split_document_block(text: str) -> Tuple[str, Optional[str]]:
    """
    Separate the first document block from the conversational text.

    Returns ``(clean_text, raw_block)``; ``raw_block`` is ``None`` when the
    reply carries no block.
    """
    match = BLOCK_RE.search(text or "")
    if match is None:
        return (text or "").strip(), None
    clean = (text[: match.start()] + text[match.end():]).strip()
    return clean, match.group(1).strip()


def parse_document_payload(raw: str) -> DocumentRequest:
    """
    Parse the JSON body of a document block into a ``DocumentRequest``.

    Raises:
        MalformedPayload: the block is not a JSON object or ``data`` is not
            an object.
        UnknownDocumentType: neither the tag nor the title identify a
            known template.
    """
    ok, payload = parse_json_robust(raw)
    if not ok:
        raise MalformedPayload("Document block is not valid JSON")
    if not isinstance(payload, dict):
        raise MalformedPayload(
            f"Document block must be a JSON object, got {type(payload).__name__}"
        )

    data = payload.get("data")
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MalformedPayload("Document block 'data' must be a JSON object")

    title = payload.get("title")
    title = str(title).strip() if title is not None else ""

    tag = payload.get("type")
    try:
        document_type = resolve_document_type(tag)
    except UnknownDocumentType:
        document_type = detect_document_type(title)
        if document_type is None:
            raise
        logger.info("Unknown document tag %r resolved from title as %s", tag, document_type.value)

    return DocumentRequest(
        type=document_type,
        title=title,
        data=_flatten_data(data),
    )


# ---------------------------------------------------------------------------
# Type detection
# ---------------------------------------------------------------------------

def detect_document_type(text: str) -> Optional[DocumentType]:
    """Guess the template from a free-text title using keyword stems."""
    lower = (text or "").lower()

    if "постановлени" in lower and ("возбужден" in lower or "исполнительн" in lower):
        return DocumentType.RESOLUTION_INITIATION
    if "запрос" in lower and "банк" in lower:
        return DocumentType.BANK_REQUEST
    if "уведомлен" in lower and "должник" in lower:
        return DocumentType.DEBTOR_NOTICE
    if "акт" in lower and "опис" in lower:
        return DocumentType.PROPERTY_INVENTORY

    return None


# ---------------------------------------------------------------------------
# JSON parsing
# ---------------------------------------------------------------------------

def parse_json_robust(response: str) -> Tuple[bool, Any]:
    """
    Try multiple strategies to parse JSON from potentially messy LLM output.

    Handles:
    - Markdown code fences (```json … ```, ``` … ```)
    - Trailing commas before ] or }
    - Python-style True / False / None
    - Surrounding prose: finds the first balanced {...} block

    Returns ``(success, parsed_value)``.
    """
    if not response:
        return False, None

    text = response.strip()

    # Strategy 1: direct parse
    ok, val = _try_json(text)
    if ok:
        return True, val

    # Strategy 2: strip markdown code fences
    stripped = _strip_code_fences(text)
    if stripped != text:
        ok, val = _try_json(stripped)
        if ok:
            return True, val
        text = stripped

    # Strategy 3: fix common JSON mangling
    fixed = _fix_json_issues(text)
    ok, val = _try_json(fixed)
    if ok:
        return True, val

    # Strategy 4: extract the object from surrounding prose
    fragment = _extract_json_structure(text, "{", "}")
    if fragment:
        ok, val = _try_json(fragment)
        if ok:
            return True, val
        ok, val = _try_json(_fix_json_issues(fragment))
        if ok:
            return True, val

    logger.warning("parse_json_robust: all strategies failed. Preview: %s", response[:400])
    return False, None


def _try_json(text: str) -> Tuple[bool, Any]:
    try:
        return True, json.loads(text)
    except (json.JSONDecodeError, ValueError):
        return False, None


def _strip_code_fences(text: str) -> str:
    """Remove ```json / ``` delimiters that LLMs often wrap output in."""
    text = re.sub(r"^```(?:json|javascript|text)?\s*\n?", "", text, flags=re.IGNORECASE)
    text = re.sub(r"\n?```\s*$", "", text)
    return text.strip()


def _fix_json_issues(text: str) -> str:
    """Repair the most common JSON mangling patterns from LLMs."""
    # Whole-line // comments only, so URLs inside strings survive
    text = re.sub(r"(?m)^\s*//[^\n]*$", "", text)
    text = re.sub(r",(\s*[}\]])", r"\1", text)
    text = re.sub(r"\bTrue\b", "true", text)
    text = re.sub(r"\bFalse\b", "false", text)
    text = re.sub(r"\bNone\b", "null", text)
    return text.strip()


def _extract_json_structure(text: str, open_b: str, close_b: str) -> str:
    """
    Find the first complete balanced open_b … close_b structure in *text*.
    Returns the matched fragment, or empty string if not found.
    """
    start = text.find(open_b)
    if start == -1:
        return ""

    depth = 0
    in_string = False
    escape_next = False

    for i, ch in enumerate(text[start:], start=start):
        if escape_next:
            escape_next = False
            continue
        if ch == "\\" and in_string:
            escape_next = True
            continue
        if ch == '"':
            in_string = not in_string
            continue
        if in_string:
            continue
        if ch == open_b:
            depth += 1
        elif ch == close_b:
            depth -= 1
            if depth == 0:
                return text[start: i + 1]
    return ""


def _flatten_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """Keep scalars as-is and turn nested structures into printable strings."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        key = str(key)
        if value is None or isinstance(value, (str, int, float, bool)):
            flat[key] = value
        elif isinstance(value, list) and key in _LIST_FIELDS:
            flat[key] = value
        elif isinstance(value, list):
            flat[key] = ", ".join(str(v) for v in value if v is not None)
        else:
            flat[key] = json.dumps(value, ensure_ascii=False)
    return flat
