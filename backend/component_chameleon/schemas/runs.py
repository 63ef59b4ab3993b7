from __future__ import annotations

from enum import Enum

from pydantic import Field

from component_chameleon.errors import ErrorKind
from component_chameleon.schemas.base import CamelModel
from component_chameleon.schemas.bom import BomHealthRecord
from component_chameleon.schemas.comparison import ComparisonTable
from component_chameleon.schemas.component import AlternativeRecord, ComponentRecord


class BulkItemState(str, Enum):
    PENDING = "pending"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class Progress(CamelModel):
    current: int = 0
    total: int = 0

    @property
    def done(self) -> bool:
        return self.current >= self.total


class BulkItem(CamelModel):
    query: str
    state: BulkItemState = BulkItemState.PENDING
    original: ComponentRecord | None = None
    alternatives: list[AlternativeRecord] = Field(default_factory=list)
    error: str | None = None  # user-facing message
    error_kind: ErrorKind | None = None


class BulkRun(CamelModel):
    items: list[BulkItem] = Field(default_factory=list)
    progress: Progress = Field(default_factory=Progress)
    cancelled: bool = False


class BomRun(CamelModel):
    results: list[BomHealthRecord] = Field(default_factory=list)
    progress: Progress = Field(default_factory=Progress)
    cancelled: bool = False


class SearchResult(CamelModel):
    original: ComponentRecord
    alternatives: list[AlternativeRecord] = Field(default_factory=list)
    comparison: ComparisonTable
