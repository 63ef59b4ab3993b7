"""Tests for the BOM Batch Orchestrator."""

import asyncio
import json

import pytest

from conftest import StubOracle
from component_chameleon.schemas.bom import BomHealthRecord, BomPartQuery
from component_chameleon.services.bom_health import (
    batched,
    reconcile_batch,
    run_bom_batch_orchestration,
)


def _queries(n: int) -> list[BomPartQuery]:
    return [BomPartQuery(part_number=f"PN{i}", manufacturer=f"MFR{i}") for i in range(n)]


def _health(part_number: str, manufacturer: str, status: str = "In Production") -> dict:
    return {
        "partNumber": part_number,
        "manufacturer": manufacturer,
        "lifecycleStatus": status,
        "stockAvailability": "Good",
        "leadTime": "Stock",
    }


class EchoOracle:
    """Answers each batch with one healthy row per requested part, reversed.

    Any batch naming ``fail_on`` fails on every attempt.
    """

    def __init__(self, fail_on: str | None = None):
        self.fail_on = fail_on
        self.batches: list[str] = []

    async def generate(self, request):
        self.batches.append(request.user_prompt)
        if self.fail_on and f'"{self.fail_on}"' in request.user_prompt:
            raise ConnectionError("service down")
        rows = []
        for chunk in request.user_prompt.split("(Manufacturer: ")[1:]:
            manufacturer = chunk.split('"')[1]
            part_number = chunk.split('Part Number: "')[1].split('"')[0]
            rows.append(_health(part_number, manufacturer))
        return json.dumps(list(reversed(rows)))


# ═══════════════════════════════════════════════════════════
# Batching and reconciliation helpers
# ═══════════════════════════════════════════════════════════


class TestHelpers:
    def test_batched(self):
        sizes = [len(b) for b in batched(_queries(12), 5)]
        assert sizes == [5, 5, 2]

    def test_batched_rejects_zero(self):
        with pytest.raises(ValueError):
            batched(_queries(1), 0)

    def test_reconcile_reorders_and_fills(self):
        batch = _queries(3)
        results = [
            BomHealthRecord.model_validate(_health("pn2", "mfr2 ", "Obsolete")),
            BomHealthRecord.model_validate(_health("PN0", "MFR0")),
            BomHealthRecord.model_validate(_health("EXTRA", "NOBODY")),
        ]

        reconciled = reconcile_batch(batch, results)

        assert [r.part_number for r in reconciled] == ["PN0", "PN1", "PN2"]
        assert [r.manufacturer for r in reconciled] == ["MFR0", "MFR1", "MFR2"]
        assert reconciled[1].lifecycle_status == "Unknown"
        assert reconciled[2].lifecycle_status == "Obsolete"

    def test_reconcile_duplicate_lines_each_take_a_row(self):
        line = BomPartQuery(part_number="LM317T", manufacturer="TI")
        results = [
            BomHealthRecord.model_validate(_health("LM317T", "TI", "In Production")),
            BomHealthRecord.model_validate(_health("LM317T", "TI", "NRND")),
        ]

        reconciled = reconcile_batch([line, line], results)

        assert [r.lifecycle_status for r in reconciled] == ["In Production", "NRND"]

    def test_reconcile_duplicate_lines_reuse_single_row(self):
        line = BomPartQuery(part_number="LM317T", manufacturer="TI")
        results = [BomHealthRecord.model_validate(_health("LM317T", "TI"))]

        reconciled = reconcile_batch([line, line], results)

        assert len(reconciled) == 2
        assert [r.lifecycle_status for r in reconciled] == ["In Production"] * 2


# ═══════════════════════════════════════════════════════════
# run_bom_batch_orchestration
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
class TestBomBatchOrchestration:
    async def test_batches_processed_in_order(self, make_client):
        oracle = EchoOracle()

        run = await run_bom_batch_orchestration(make_client(oracle), _queries(12), batch_size=5)

        assert len(oracle.batches) == 3
        assert [r.part_number for r in run.results] == [f"PN{i}" for i in range(12)]
        assert run.progress.current == 12

    async def test_no_reconcile_appends_verbatim(self, make_client):
        oracle = EchoOracle()

        run = await run_bom_batch_orchestration(
            make_client(oracle), _queries(3), batch_size=5, reconcile=False
        )

        assert [r.part_number for r in run.results] == ["PN2", "PN1", "PN0"]

    async def test_duplicate_bom_lines_keep_their_rows(self, make_client):
        line = BomPartQuery(part_number="LM317T", manufacturer="TI")
        oracle = EchoOracle()

        run = await run_bom_batch_orchestration(make_client(oracle), [line, line], batch_size=5)

        assert [r.lifecycle_status for r in run.results] == ["In Production", "In Production"]
        assert run.progress.current == 2

    @pytest.mark.parametrize("total,size", [(1, 5), (5, 5), (7, 3), (11, 4)])
    async def test_total_failure_is_length_matched(self, make_client, total, size):
        oracle = StubOracle(ConnectionError("down"))
        queries = _queries(total)

        run = await run_bom_batch_orchestration(make_client(oracle), queries, batch_size=size)

        assert len(run.results) == total
        assert [(r.part_number, r.manufacturer) for r in run.results] == [
            (q.part_number, q.manufacturer) for q in queries
        ]
        assert {r.lifecycle_status for r in run.results} == {"Error"}
        assert run.progress.current == total

    async def test_one_failed_batch_does_not_block_others(self, make_client):
        oracle = EchoOracle(fail_on="PN4")

        run = await run_bom_batch_orchestration(make_client(oracle), _queries(9), batch_size=3)

        statuses = [r.lifecycle_status for r in run.results]
        assert statuses == ["In Production"] * 3 + ["Error"] * 3 + ["In Production"] * 3

    async def test_escaped_exception_becomes_api_error_rows(self):
        class ExplodingClient:
            calls = 0

            async def resolve_bom_health(self, batch):
                ExplodingClient.calls += 1
                if ExplodingClient.calls == 1:
                    raise RuntimeError("escaped")
                return [BomHealthRecord.degraded(q, "Good") for q in batch]

        run = await run_bom_batch_orchestration(ExplodingClient(), _queries(4), batch_size=2)

        assert [r.lead_time for r in run.results] == ["API Error", "API Error", "Good", "Good"]
        assert [r.part_number for r in run.results] == ["PN0", "PN1", "PN2", "PN3"]

    async def test_partial_results_grow_monotonically(self, make_client):
        seen = []

        def on_update(run):
            seen.append((len(run.results), run.progress.current))

        await run_bom_batch_orchestration(
            make_client(EchoOracle()), _queries(7), batch_size=3, on_update=on_update
        )

        assert seen == [(0, 0), (3, 3), (6, 6), (7, 7)]

    async def test_cancel_between_batches(self, make_client):
        oracle = EchoOracle()
        cancel = asyncio.Event()

        def on_update(run):
            if run.results:
                cancel.set()

        run = await run_bom_batch_orchestration(
            make_client(oracle), _queries(6), batch_size=2, on_update=on_update, cancel=cancel
        )

        assert run.cancelled is True
        assert len(oracle.batches) == 1
        assert len(run.results) == 2
