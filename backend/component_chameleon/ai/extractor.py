"""Structured Extractor — pull a JSON payload out of free-form model text.

Model output often arrives wrapped in prose or markdown fences. Rather than
depending on exact fence syntax, the payload is taken to span from the first
opening bracket to the last closing bracket.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from component_chameleon.errors import ExtractionError

logger = logging.getLogger(__name__)


def _first_index(text: str, *chars: str) -> int:
    found = [i for i in (text.find(c) for c in chars) if i != -1]
    return min(found) if found else -1


def extract_json(text: str) -> Any:
    """Return the JSON value embedded in ``text``.

    Raises:
        ExtractionError: ``reason="empty"`` for blank text,
            ``"no_structure"`` when no bracketed region exists, and
            ``"invalid_json"`` when the region is found but does not parse.
    """
    if not text or not text.strip():
        raise ExtractionError("empty", "The response text is empty.", text or "")

    start = _first_index(text, "{", "[")
    if start == -1:
        raise ExtractionError(
            "no_structure",
            "No JSON object or array found in the response text.",
            text,
        )

    end = max(text.rfind("}"), text.rfind("]"))
    if end < start:
        raise ExtractionError(
            "no_structure",
            "Could not find valid JSON structure in the response text.",
            text,
        )

    candidate = text[start : end + 1]
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.debug("Failed to parse extracted JSON string: %s", candidate)
        raise ExtractionError(
            "invalid_json",
            f"Could not parse the extracted JSON content: {e}",
            text,
        ) from e
