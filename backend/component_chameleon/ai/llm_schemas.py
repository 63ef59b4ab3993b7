"""JSON schema definitions for structured oracle output validation.

Each schema is used to:
1. Inject into prompts so the model knows the expected format.
2. Validate extracted responses before passing downstream.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from component_chameleon.errors import SchemaValidationError
from component_chameleon.schemas.component import ComponentRecord, AlternativeRecord
from component_chameleon.schemas.bom import BomHealthRecord

logger = logging.getLogger(__name__)


# ─── JSON Schema Generators from Pydantic Models ───

COMPONENT_SCHEMA: dict[str, Any] = ComponentRecord.model_json_schema(by_alias=True)

ALTERNATIVES_SCHEMA: dict[str, Any] = TypeAdapter(
    list[AlternativeRecord]
).json_schema(by_alias=True)

BOM_HEALTH_SCHEMA: dict[str, Any] = TypeAdapter(
    list[BomHealthRecord]
).json_schema(by_alias=True)


def schema_to_prompt_string(schema: dict[str, Any]) -> str:
    """Format a JSON schema for embedding in a prompt."""
    return json.dumps(schema, indent=2)


def _dump(data: Any) -> str:
    try:
        return json.dumps(data)
    except (TypeError, ValueError):
        return repr(data)


# ─── Validators ───


def validate_component_output(data: Any) -> ComponentRecord:
    """Validate and parse extracted JSON as a ComponentRecord."""
    if not isinstance(data, dict):
        raise SchemaValidationError(
            phase="component_lookup",
            raw_output=_dump(data),
            errors=f"expected a JSON object, got {type(data).__name__}",
        )
    try:
        return ComponentRecord.model_validate(data)
    except ValidationError as e:
        raise SchemaValidationError(
            phase="component_lookup",
            raw_output=_dump(data),
            errors=str(e),
        )


def validate_alternatives_output(data: Any) -> list[AlternativeRecord]:
    """Validate extracted JSON as a list of AlternativeRecords.

    A single record object is accepted as a one-item list, and a wrapper
    object holding exactly one list (``{"alternatives": [...]}``) is
    unwrapped. Items that fail validation or carry a not-found part number
    are skipped so one bad entry cannot void the rest.
    """
    if isinstance(data, dict):
        lists = [v for v in data.values() if isinstance(v, list)]
        if "partNumber" in data or "part_number" in data:
            data = [data]
        elif len(data) == 1 and len(lists) == 1:
            data = lists[0]
        else:
            raise SchemaValidationError(
                phase="alternatives",
                raw_output=_dump(data),
                errors="expected a JSON array or a single alternative object",
            )
    if not isinstance(data, list):
        raise SchemaValidationError(
            phase="alternatives",
            raw_output=_dump(data),
            errors=f"expected a JSON array, got {type(data).__name__}",
        )

    records: list[AlternativeRecord] = []
    for index, item in enumerate(data):
        try:
            record = AlternativeRecord.model_validate(item)
        except ValidationError as e:
            logger.warning("[alternatives] Skipping item %d: %s", index, e)
            continue
        if record.is_not_found:
            logger.warning(
                "[alternatives] Skipping item %d: no part number (%r)",
                index,
                record.part_number,
            )
            continue
        records.append(record)
    return records


def validate_bom_health_output(data: Any) -> list[BomHealthRecord]:
    """Validate extracted JSON as a list of BomHealthRecords."""
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise SchemaValidationError(
            phase="bom_health",
            raw_output=_dump(data),
            errors=f"expected a JSON array, got {type(data).__name__}",
        )
    try:
        return TypeAdapter(list[BomHealthRecord]).validate_python(data)
    except ValidationError as e:
        raise SchemaValidationError(
            phase="bom_health",
            raw_output=_dump(data),
            errors=str(e),
        )
