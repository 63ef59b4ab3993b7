from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field, field_validator

from component_chameleon.schemas.base import CamelModel

NOT_AVAILABLE = "N/A"
NOT_FOUND = "Not Found"

# Values the oracle uses for "no such part"
NOT_FOUND_SENTINELS = frozenset({"", NOT_AVAILABLE, NOT_FOUND})


def _coerce_text(value: Any) -> Any:
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, (bool, int, float)):
        return str(value)
    return value


class ComponentRecord(CamelModel):
    model_config = ConfigDict(frozen=True)

    part_number: str = NOT_AVAILABLE
    manufacturer: str = NOT_AVAILABLE
    description: str = NOT_AVAILABLE
    price: str = NOT_AVAILABLE  # display string, never parsed
    datasheet_link: str = NOT_AVAILABLE
    specs: list[str] = Field(default_factory=list)  # "Key: Value" entries
    part_status: str = NOT_AVAILABLE
    rohs_status: str = NOT_AVAILABLE
    reach_status: str = NOT_AVAILABLE

    @field_validator(
        "part_number",
        "manufacturer",
        "description",
        "price",
        "datasheet_link",
        "part_status",
        "rohs_status",
        "reach_status",
        mode="before",
    )
    @classmethod
    def _text_fields(cls, value: Any) -> Any:
        return _coerce_text(value)

    @field_validator("specs", mode="before")
    @classmethod
    def _spec_entries(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, list):
            return [str(v) for v in value if v is not None]
        return value

    @property
    def is_not_found(self) -> bool:
        return self.part_number.strip() in NOT_FOUND_SENTINELS


class AlternativeRecord(ComponentRecord):
    justification: str = NOT_AVAILABLE

    @field_validator("justification", mode="before")
    @classmethod
    def _justification(cls, value: Any) -> Any:
        return _coerce_text(value)
