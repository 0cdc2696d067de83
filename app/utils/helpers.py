"""Helper utilities."""

import math
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (matches the DateTime columns)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def normalize_text(text: str) -> str:
    """Normalize text for comparison."""
    return " ".join(text.lower().split())


def search_terms(text: str) -> list[str]:
    """Split a free-text query into distinct lowercase terms, preserving order."""
    seen = []
    for term in normalize_text(text).split(" "):
        if term and term not in seen:
            seen.append(term)
    return seen


def page_count(total: int, page_size: int) -> int:
    """Number of pages needed for ``total`` items (at least 1)."""
    if total <= 0 or page_size <= 0:
        return 1
    return math.ceil(total / page_size)


def like_pattern(text: str) -> str:
    """Substring LIKE pattern (escape char ``\\``) matching ``%`` and ``_`` in ``text`` literally."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
