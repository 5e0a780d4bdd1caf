"""Content checks applied to post and comment bodies before they are stored."""

from __future__ import annotations

import re

from jokebox.core.errors import ValidationError

_UNSAFE_PATTERNS = (
    re.compile(r"<\s*script", re.IGNORECASE),
    re.compile(r"<\s*iframe", re.IGNORECASE),
    re.compile(r"<\s*object", re.IGNORECASE),
    re.compile(r"<\s*embed", re.IGNORECASE),
    re.compile(r"<\s*style", re.IGNORECASE),
    re.compile(r"javascript\s*:", re.IGNORECASE),
    # Inline event handlers such as onclick= or onerror =
    re.compile(r"<[^>]*\bon[a-z]+\s*=", re.IGNORECASE),
)


def clean_body(body: str | None, *, min_length: int, max_length: int) -> str:
    """Return the trimmed body or raise :class:`ValidationError`."""
    text = (body or "").strip()
    if not text:
        raise ValidationError("Body must not be empty")
    if len(text) < min_length:
        raise ValidationError(f"Body must be at least {min_length} characters long")
    if len(text) > max_length:
        raise ValidationError(f"Body must be at most {max_length} characters long")
    for pattern in _UNSAFE_PATTERNS:
        if pattern.search(text):
            raise ValidationError("Body contains disallowed markup")
    return text
