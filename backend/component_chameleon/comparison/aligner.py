"""Comparison Aligner — one spec table across an original and its alternatives.

Each component reports its own free-form "Key: Value" specs. The aligner
takes the union of every key, orders rows by a curated master list (then
alphabetically), and marks every cell that differs from the original.

Pure Python. Deterministic. Nothing is cached between calls.
"""

from __future__ import annotations

from component_chameleon.schemas.comparison import (
    MISSING_VALUE,
    ComparisonCell,
    ComparisonHeader,
    ComparisonRow,
    ComparisonTable,
)
from component_chameleon.schemas.component import AlternativeRecord, ComponentRecord


# ─── Row Ordering ───

MASTER_PARAMETER_ORDER: list[str] = [
    "Part Number",
    "Manufacturer",
    "Price",
    "Part Status",
    "RoHS Status",
    "REACH Status",
    "Series",
    "Datasheet Link",
    # Electrical
    "Resistance",
    "Capacitance",
    "Inductance",
    "Tolerance",
    "Voltage Rating",
    "Power Rating",
    "Current Rating",
    # Component-specific
    "Composition",
    "Temperature Coefficient",
    "Dielectric",
    "ESR (Equivalent Series Resistance)",
    "Type",
    "Core Processor",
    "Speed",
    "Memory Size",
    "Interface",
    "Voltage - Supply",
    # Physical / environmental
    "Operating Temperature",
    "Package",
    "Supplier Device Package",
    "Mounting Type",
]

_MASTER_RANK: dict[str, int] = {
    name: rank for rank, name in enumerate(MASTER_PARAMETER_ORDER)
}


def _sort_key(name: str) -> tuple[int, int, str]:
    rank = _MASTER_RANK.get(name)
    if rank is not None:
        return (0, rank, "")
    return (1, 0, name)


# ─── Spec Maps ───


def split_spec(entry: str) -> tuple[str, str] | None:
    """Split "Key: Value" on the first colon. Entries without one are skipped."""
    key, sep, value = entry.partition(":")
    if not sep:
        return None
    return key.strip(), value.strip()


def build_spec_map(record: ComponentRecord) -> dict[str, str]:
    """Identity fields first, then the record's own specs (later keys win)."""
    spec_map = {
        "Part Number": record.part_number,
        "Manufacturer": record.manufacturer,
        "Price": record.price,
        "Datasheet Link": record.datasheet_link,
        "Part Status": record.part_status,
        "RoHS Status": record.rohs_status,
        "REACH Status": record.reach_status,
    }
    for entry in record.specs:
        pair = split_spec(entry)
        if pair is not None:
            key, value = pair
            spec_map[key] = value
    return spec_map


def _display(spec_map: dict[str, str], key: str) -> str:
    return spec_map.get(key) or MISSING_VALUE


# ─── Table ───


def build_comparison_table(
    original: ComponentRecord,
    alternatives: list[AlternativeRecord],
) -> ComparisonTable:
    """Align ``original`` and ``alternatives`` into a diff-annotated table.

    The table has ``1 + len(alternatives)`` columns, original first, and one
    row per distinct specification name. The original's cells are never
    marked different.
    """
    components: list[ComponentRecord] = [original, *alternatives]
    spec_maps = [build_spec_map(c) for c in components]
    baseline = spec_maps[0]

    all_keys: set[str] = set()
    for spec_map in spec_maps:
        all_keys.update(spec_map)

    rows: list[ComparisonRow] = []
    for key in sorted(all_keys, key=_sort_key):
        reference = _display(baseline, key)
        cells = []
        for index, spec_map in enumerate(spec_maps):
            value = _display(spec_map, key)
            cells.append(
                ComparisonCell(value=value, is_different=index > 0 and value != reference)
            )
        rows.append(ComparisonRow(specification=key, values=cells))

    headers = [
        ComparisonHeader(part_number=c.part_number, manufacturer=c.manufacturer)
        for c in components
    ]
    return ComparisonTable(headers=headers, rows=rows)
