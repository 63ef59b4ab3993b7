"""Component router — single lookup, alternatives and comparison endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import Field

from component_chameleon.ai.client import OracleClient
from component_chameleon.comparison.aligner import build_comparison_table
from component_chameleon.dependencies import get_oracle_client
from component_chameleon.schemas.base import CamelModel
from component_chameleon.schemas.comparison import ComparisonTable
from component_chameleon.schemas.component import AlternativeRecord, ComponentRecord
from component_chameleon.schemas.runs import SearchResult
from component_chameleon.services.search import normalize_query, search_component

router = APIRouter()


class ComponentQuery(CamelModel):
    query: str = Field(..., min_length=1, description="Part number or description")


class CompareRequest(CamelModel):
    original: ComponentRecord
    alternatives: list[AlternativeRecord] = Field(default_factory=list)


@router.post("/search", response_model=SearchResult)
async def search(
    request: ComponentQuery,
    client: OracleClient = Depends(get_oracle_client),
):
    """Resolve a component, find alternatives, and build the comparison."""
    return await search_component(client, request.query)


@router.post("/resolve", response_model=ComponentRecord)
async def resolve(
    request: ComponentQuery,
    client: OracleClient = Depends(get_oracle_client),
):
    """Resolve a single component without alternatives."""
    return await client.resolve_component(normalize_query(request.query))


@router.post("/alternatives", response_model=list[AlternativeRecord])
async def alternatives(
    original: ComponentRecord,
    client: OracleClient = Depends(get_oracle_client),
):
    """Best-effort alternatives for a known component. Empty on failure."""
    return await client.resolve_alternatives(original)


@router.post("/compare", response_model=ComparisonTable)
async def compare(request: CompareRequest):
    """Align already-fetched records into a comparison table. No oracle calls."""
    return build_comparison_table(request.original, request.alternatives)
