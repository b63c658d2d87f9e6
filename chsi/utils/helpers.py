"""
Common utility functions and helpers.
"""
from urllib.parse import quote
import re
import unicodedata


def chat_title_from_message(content: str, max_length: int = 40) -> str:
    """
    Derive a chat title from the first user message.

    Args:
        content: Message text
        max_length: Characters kept before the ellipsis

    Returns:
        The leading ``max_length`` characters, with "..." appended when cut
    """
    if len(content) > max_length:
        return content[:max_length] + "..."
    return content


def safe_filename(name: str, default: str = "document") -> str:
    """
    Make a user-supplied document title usable as a file name.

    Keeps Cyrillic and other letters; drops path separators, control
    characters and characters Windows refuses in file names.

    Args:
        name: Raw title
        default: Used when nothing printable is left

    Returns:
        Cleaned file name stem
    """
    name = unicodedata.normalize("NFC", name or "")
    name = re.sub(r'[\\/:*?"<>|\x00-\x1f]', " ", name)
    name = re.sub(r"\s+", " ", name).strip(" .")
    return name or default


def content_disposition(filename: str) -> str:
    """
    Build an ``attachment`` Content-Disposition value for a possibly
    non-ASCII file name (RFC 6266 / RFC 5987).
    """
    ascii_name = filename.encode("ascii", "ignore").decode("ascii").replace('"', "").strip()
    if not ascii_name or ascii_name.startswith("."):
        ascii_name = "document.docx"
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"


def document_filename(title: str, max_stem_length: int = 200) -> str:
    """
    Build the ``.docx`` file name for a document title.

    The stem is cleaned with ``safe_filename`` and cut to ``max_stem_length``
    characters so the name fits a 255-character column.
    """
    stem = safe_filename(title)[:max_stem_length].rstrip(" .") or "document"
    return f"{stem}.docx"
