"""Progress publishing and cancellation checks shared by the orchestrators."""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Awaitable, Callable, TypeVar, Union

RunT = TypeVar("RunT")

UpdateCallback = Callable[[Any], Union[None, Awaitable[None]]]


async def publish(on_update: UpdateCallback | None, run: RunT) -> None:
    """Hand ``run`` to the observer; awaits it if the observer is async."""
    if on_update is None:
        return
    result = on_update(run)
    if inspect.isawaitable(result):
        await result


def is_cancelled(cancel: asyncio.Event | None) -> bool:
    return cancel is not None and cancel.is_set()
