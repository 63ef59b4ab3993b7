from __future__ import annotations

from typing import Any

from pydantic import field_validator

from component_chameleon.schemas.base import CamelModel

BOM_ERROR = "Error"
BOM_API_ERROR = "API Error"
BOM_UNKNOWN = "Unknown"


class BomPartQuery(CamelModel):
    part_number: str
    manufacturer: str

    @property
    def key(self) -> tuple[str, str]:
        return bom_key(self.part_number, self.manufacturer)


class BomHealthRecord(CamelModel):
    part_number: str
    manufacturer: str
    lifecycle_status: str = BOM_UNKNOWN
    stock_availability: str = BOM_UNKNOWN
    lead_time: str = BOM_UNKNOWN

    @field_validator(
        "part_number",
        "manufacturer",
        "lifecycle_status",
        "stock_availability",
        "lead_time",
        mode="before",
    )
    @classmethod
    def _text_fields(cls, value: Any) -> Any:
        if value is None:
            return BOM_UNKNOWN
        if isinstance(value, (bool, int, float)):
            return str(value)
        return value

    @property
    def key(self) -> tuple[str, str]:
        return bom_key(self.part_number, self.manufacturer)

    @classmethod
    def degraded(cls, query: BomPartQuery, status: str) -> BomHealthRecord:
        """Placeholder row echoing the query with every status set to ``status``."""
        return cls(
            part_number=query.part_number,
            manufacturer=query.manufacturer,
            lifecycle_status=status,
            stock_availability=status,
            lead_time=status,
        )


def bom_key(part_number: str, manufacturer: str) -> tuple[str, str]:
    """Case- and whitespace-insensitive reconciliation key."""
    return part_number.strip().upper(), " ".join(manufacturer.split()).upper()
