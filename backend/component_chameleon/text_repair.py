"""Text repair for oracle output: strip garbage glyphs, coerce links."""

from __future__ import annotations

import re
from typing import TypeVar

from component_chameleon.schemas.component import AlternativeRecord, ComponentRecord

# Black diamond/square glyphs, U+FFFD replacement char, ASCII control bytes and DEL
_GARBAGE = re.compile(r"[\u25c6\u25a0\ufffd\x00-\x1f\x7f]")

_TEXT_FIELDS = (
    "part_number",
    "manufacturer",
    "description",
    "price",
    "datasheet_link",
    "part_status",
    "rohs_status",
    "reach_status",
)

RecordT = TypeVar("RecordT", bound=ComponentRecord)


def clean_text(value: str | None) -> str:
    """Remove corruption markers and surrounding whitespace. Never fails."""
    if not value:
        return ""
    return _GARBAGE.sub("", value).strip()


def to_safe_url(value: str | None) -> str:
    """Return a scheme-qualified URL or an empty string.

    Bare domains ("ti.com/lit/ds/lm317.pdf") get an https:// prefix. Anything
    with a space or without a dot ("Not available") is not treated as a link.
    Version-like strings such as "v1.2" also pass the domain check.
    """
    if not value or not isinstance(value, str):
        return ""
    trimmed = value.strip()
    if trimmed.lower() == "n/a" or trimmed == "—":
        return ""
    if trimmed.startswith(("http://", "https://")):
        return trimmed
    if "." in trimmed and " " not in trimmed:
        return f"https://{trimmed}"
    return ""


def clean_record(record: RecordT) -> RecordT:
    """Return a copy of ``record`` with every text field and spec cleaned."""
    update: dict[str, object] = {
        name: clean_text(getattr(record, name)) for name in _TEXT_FIELDS
    }
    update["specs"] = [clean_text(spec) for spec in record.specs]
    if isinstance(record, AlternativeRecord):
        update["justification"] = clean_text(record.justification)
    return record.model_copy(update=update)
