"""Status tone classification for lifecycle, compliance and BOM health strings.

Callers render these as badges; the core only decides the tone.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

StatusKind = Literal["lifecycle", "compliance", "health"]


class StatusTone(str, Enum):
    GOOD = "good"
    WARN = "warn"
    BAD = "bad"
    UNKNOWN = "unknown"


def _lifecycle_tone(s: str) -> StatusTone:
    if "obsolete" in s:
        return StatusTone.BAD
    if "nrnd" in s or "not recommended" in s:
        return StatusTone.WARN
    if "active" in s or "production" in s:
        return StatusTone.GOOD
    return StatusTone.UNKNOWN


def _compliance_tone(s: str) -> StatusTone:
    if "non-compliant" in s or "non compliant" in s or "not compliant" in s:
        return StatusTone.BAD
    if "compliant" in s:
        return StatusTone.GOOD
    return StatusTone.WARN


def _health_tone(s: str) -> StatusTone:
    if "obsolete" in s or "none" in s or "error" in s:
        return StatusTone.BAD
    if "nrnd" in s or "low" in s:
        return StatusTone.WARN
    if "production" in s or "good" in s or "stock" in s:
        return StatusTone.GOOD
    return StatusTone.UNKNOWN


def status_tone(status: str | None, kind: StatusKind) -> StatusTone:
    s = (status or "").strip().lower()
    if not s or s in ("n/a", "unknown"):
        return StatusTone.UNKNOWN
    if kind == "compliance":
        return _compliance_tone(s)
    if kind == "health":
        return _health_tone(s)
    return _lifecycle_tone(s)
