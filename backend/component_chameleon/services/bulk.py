"""Bulk Orchestrator

Resolves a list of part-number queries strictly one after another:
  pending → loading → success (original + alternatives) | error

One item's failure never stops the rest. The oracle is a shared,
rate-sensitive dependency, so items are never fanned out concurrently.
"""

from __future__ import annotations

import asyncio
import logging

from component_chameleon.ai.client import OracleClient
from component_chameleon.errors import ComponentFinderError
from component_chameleon.schemas.runs import BulkItem, BulkItemState, BulkRun, Progress
from component_chameleon.services.progress import UpdateCallback, is_cancelled, publish

logger = logging.getLogger(__name__)


def new_bulk_run(queries: list[str]) -> BulkRun:
    return BulkRun(
        items=[BulkItem(query=q) for q in queries],
        progress=Progress(current=0, total=len(queries)),
    )


async def _process_item(client: OracleClient, item: BulkItem) -> None:
    try:
        original = await client.resolve_component(item.query)
    except Exception as e:
        error = ComponentFinderError.from_exception(e)
        logger.error(
            "Failed to process bulk item %r (%s): %s",
            item.query,
            error.kind.value,
            error.message,
        )
        item.state = BulkItemState.ERROR
        item.error = error.user_message
        item.error_kind = error.kind
        return

    try:
        alternatives = await client.resolve_alternatives(original)
    except Exception:
        # Alternatives are optional; the resolved original still stands
        logger.exception("Alternatives lookup raised for bulk item %r", item.query)
        alternatives = []
    item.state = BulkItemState.SUCCESS
    item.original = original
    item.alternatives = alternatives


async def run_bulk_orchestration(
    client: OracleClient,
    queries: list[str],
    on_update: UpdateCallback | None = None,
    cancel: asyncio.Event | None = None,
) -> BulkRun:
    """Resolve every query in order and return the final run state.

    ``on_update`` receives the same ``BulkRun`` after every state change.
    ``cancel`` is checked between items only; an in-flight lookup finishes.
    """
    run = new_bulk_run(queries)
    await publish(on_update, run)

    for index, item in enumerate(run.items):
        if is_cancelled(cancel):
            logger.info("Bulk run cancelled after %d/%d items", index, len(run.items))
            run.cancelled = True
            await publish(on_update, run)
            break

        item.state = BulkItemState.LOADING
        await publish(on_update, run)

        await _process_item(client, item)

        run.progress.current = index + 1
        logger.info(
            "Bulk item %d/%d %r → %s",
            index + 1,
            run.progress.total,
            item.query,
            item.state.value,
        )
        await publish(on_update, run)

    return run
