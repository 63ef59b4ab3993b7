"""Shared fixtures: a scripted oracle and a sleep that never waits."""

from __future__ import annotations

import json

import pytest

from component_chameleon.ai.client import OracleClient, RetryPolicy
from component_chameleon.ai.oracle import OracleRequest


class StubOracle:
    """Replays scripted replies in order; the last one repeats.

    A reply is either response text or an exception instance to raise.
    A dict maps a request phase to its own script.
    """

    def __init__(self, *replies):
        if len(replies) == 1 and isinstance(replies[0], dict):
            self.scripts = {phase: list(r) for phase, r in replies[0].items()}
        else:
            self.scripts = {None: list(replies)}
        self.requests: list[OracleRequest] = []

    def calls(self, phase: str | None = None) -> int:
        if phase is None:
            return len(self.requests)
        return sum(1 for r in self.requests if r.phase == phase)

    async def generate(self, request: OracleRequest) -> str:
        self.requests.append(request)
        script = self.scripts.get(request.phase, self.scripts.get(None))
        if not script:
            raise AssertionError(f"no scripted reply for phase {request.phase!r}")
        reply = script.pop(0) if len(script) > 1 else script[0]
        if isinstance(reply, BaseException):
            raise reply
        return reply


class RecordingSleep:
    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


def component_json(part_number: str = "LM317T", **overrides) -> str:
    data = {
        "partNumber": part_number,
        "manufacturer": "Texas Instruments",
        "description": "Adjustable linear regulator",
        "price": "$0.52",
        "datasheetLink": "https://www.ti.com/lit/ds/symlink/lm317.pdf",
        "specs": ["Voltage - Output: 1.25V ~ 37V", "Current - Output: 1.5A"],
        "partStatus": "Active",
        "rohsStatus": "Compliant",
        "reachStatus": "Compliant",
    }
    data.update(overrides)
    return json.dumps(data)


def alternative_dict(part_number: str, **overrides) -> dict:
    data = json.loads(component_json(part_number, manufacturer="STMicroelectronics"))
    data["justification"] = "Pin-compatible adjustable regulator"
    data.update(overrides)
    return data


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_client(sleep):
    def _make(oracle, max_alternatives: int = 3) -> OracleClient:
        return OracleClient(
            oracle,
            policy=RetryPolicy(max_retries=2, base_delay_s=1.0, sleep=sleep),
            max_alternatives=max_alternatives,
        )

    return _make
