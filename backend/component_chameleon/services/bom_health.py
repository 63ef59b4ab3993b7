"""BOM Batch Orchestrator

Splits a BOM into fixed-size batches and asks the oracle for lifecycle and
stock data one batch at a time. Results accumulate monotonically and are
published after every batch. A batch that blows up past the client's own
degradation path becomes one "API Error" row per part.
"""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict

from component_chameleon.ai.client import OracleClient
from component_chameleon.schemas.bom import (
    BOM_API_ERROR,
    BOM_UNKNOWN,
    BomHealthRecord,
    BomPartQuery,
)
from component_chameleon.schemas.runs import BomRun, Progress
from component_chameleon.services.progress import UpdateCallback, is_cancelled, publish

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 5


def batched(queries: list[BomPartQuery], size: int) -> list[list[BomPartQuery]]:
    if size < 1:
        raise ValueError(f"batch size must be >= 1, got {size}")
    return [queries[i : i + size] for i in range(0, len(queries), size)]


def reconcile_batch(
    batch: list[BomPartQuery],
    results: list[BomHealthRecord],
) -> list[BomHealthRecord]:
    """Re-key oracle results onto the request order.

    Matches on (partNumber, manufacturer) ignoring case and spacing. Queries
    the oracle skipped get an "Unknown" row; unrequested extras are dropped.
    Repeated lines take one row each, and reuse the last row for their key
    once the oracle's rows run out.
    """
    by_key: dict[tuple[str, str], list[BomHealthRecord]] = defaultdict(list)
    for record in results:
        by_key[record.key].append(record)

    last_used: dict[tuple[str, str], BomHealthRecord] = {}
    reconciled: list[BomHealthRecord] = []
    for query in batch:
        pending = by_key.get(query.key)
        if pending:
            match = pending.pop(0)
            last_used[query.key] = match
        else:
            match = last_used.get(query.key)
        if match is None:
            logger.warning(
                "No BOM health result for %s / %s", query.manufacturer, query.part_number
            )
            match = BomHealthRecord.degraded(query, BOM_UNKNOWN)
        else:
            # Echo the caller's spelling so downstream joins stay exact
            match = match.model_copy(
                update={
                    "part_number": query.part_number,
                    "manufacturer": query.manufacturer,
                }
            )
        reconciled.append(match)

    leftover = sorted(key for key, rows in by_key.items() for _ in rows)
    if leftover:
        logger.warning(
            "Dropping %d unrequested BOM health results: %s",
            len(leftover),
            leftover,
        )
    return reconciled


async def run_bom_batch_orchestration(
    client: OracleClient,
    queries: list[BomPartQuery],
    batch_size: int = DEFAULT_BATCH_SIZE,
    reconcile: bool = True,
    on_update: UpdateCallback | None = None,
    cancel: asyncio.Event | None = None,
) -> BomRun:
    """Process ``queries`` batch by batch; return the accumulated run.

    With ``reconcile`` the results of each successful batch are aligned
    one-to-one with the batch. Without it they are appended verbatim.
    """
    batches = batched(queries, batch_size)
    run = BomRun(progress=Progress(current=0, total=len(queries)))
    await publish(on_update, run)

    for number, batch in enumerate(batches, start=1):
        if is_cancelled(cancel):
            logger.info("BOM run cancelled before batch %d/%d", number, len(batches))
            run.cancelled = True
            await publish(on_update, run)
            break

        try:
            results = await client.resolve_bom_health(batch)
            if reconcile:
                results = reconcile_batch(batch, results)
        except Exception:
            logger.exception("Error in BOM batch %d/%d", number, len(batches))
            results = [BomHealthRecord.degraded(q, BOM_API_ERROR) for q in batch]

        run.results.extend(results)
        run.progress.current = min(
            run.progress.current + batch_size, run.progress.total
        )
        logger.info(
            "BOM batch %d/%d done — %d/%d parts",
            number,
            len(batches),
            run.progress.current,
            run.progress.total,
        )
        await publish(on_update, run)

    return run
