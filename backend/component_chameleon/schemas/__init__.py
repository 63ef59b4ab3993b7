from component_chameleon.schemas.component import ComponentRecord, AlternativeRecord
from component_chameleon.schemas.bom import BomPartQuery, BomHealthRecord
from component_chameleon.schemas.comparison import (
    ComparisonTable,
    ComparisonHeader,
    ComparisonRow,
    ComparisonCell,
)
from component_chameleon.schemas.runs import (
    BulkItemState,
    BulkItem,
    BulkRun,
    BomRun,
    Progress,
    SearchResult,
)

__all__ = [
    "ComponentRecord",
    "AlternativeRecord",
    "BomPartQuery",
    "BomHealthRecord",
    "ComparisonTable",
    "ComparisonHeader",
    "ComparisonRow",
    "ComparisonCell",
    "BulkItemState",
    "BulkItem",
    "BulkRun",
    "BomRun",
    "Progress",
    "SearchResult",
]
