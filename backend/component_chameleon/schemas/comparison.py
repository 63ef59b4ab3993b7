from __future__ import annotations

from pydantic import Field

from component_chameleon.schemas.base import CamelModel

MISSING_VALUE = "—"  # em-dash


class ComparisonHeader(CamelModel):
    part_number: str
    manufacturer: str


class ComparisonCell(CamelModel):
    value: str
    is_different: bool = False


class ComparisonRow(CamelModel):
    specification: str
    values: list[ComparisonCell] = Field(default_factory=list)


class ComparisonTable(CamelModel):
    headers: list[ComparisonHeader] = Field(default_factory=list)
    rows: list[ComparisonRow] = Field(default_factory=list)

    def row(self, specification: str) -> ComparisonRow | None:
        for row in self.rows:
            if row.specification == specification:
                return row
        return None
