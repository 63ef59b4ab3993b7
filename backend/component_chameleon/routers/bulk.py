"""Bulk router — sequential multi-part lookup."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import Field

from component_chameleon.ai.client import OracleClient
from component_chameleon.dependencies import get_oracle_client
from component_chameleon.schemas.base import CamelModel
from component_chameleon.schemas.runs import BulkRun
from component_chameleon.services.bulk import run_bulk_orchestration

router = APIRouter()


class BulkRunRequest(CamelModel):
    part_numbers: list[str] = Field(..., min_length=1)


@router.post("/run", response_model=BulkRun)
async def run_bulk(
    request: BulkRunRequest,
    client: OracleClient = Depends(get_oracle_client),
):
    """Resolve every part in order; per-item failures are reported inline."""
    queries = [p.strip() for p in request.part_numbers if p.strip()]
    return await run_bulk_orchestration(client, queries)
