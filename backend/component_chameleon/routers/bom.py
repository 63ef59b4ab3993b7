"""BOM router — batched lifecycle and stock health."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import Field

from component_chameleon.ai.client import OracleClient
from component_chameleon.config import Settings
from component_chameleon.dependencies import get_app_settings, get_oracle_client
from component_chameleon.schemas.base import CamelModel
from component_chameleon.schemas.bom import BomPartQuery
from component_chameleon.schemas.runs import BomRun
from component_chameleon.services.bom_health import run_bom_batch_orchestration

router = APIRouter()


class BomHealthRequest(CamelModel):
    parts: list[BomPartQuery] = Field(..., min_length=1)
    batch_size: int | None = Field(default=None, ge=1)


@router.post("/health", response_model=BomRun)
async def bom_health(
    request: BomHealthRequest,
    client: OracleClient = Depends(get_oracle_client),
    settings: Settings = Depends(get_app_settings),
):
    """Analyze a parsed BOM. Failed batches come back as placeholder rows."""
    return await run_bom_batch_orchestration(
        client,
        request.parts,
        batch_size=request.batch_size or settings.bom_batch_size,
        reconcile=settings.bom_reconcile,
    )
