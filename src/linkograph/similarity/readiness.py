from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Literal, Optional


@dataclass(frozen=True)
class ReadinessOutcome:
    """
    Tagged result of racing backend preparation against a timer.
    """

    kind: Literal["ready", "timed_out", "failed"]
    error: Optional[BaseException] = None
    elapsed_s: float = 0.0

    @property
    def ready(self) -> bool:
        return self.kind == "ready"


async def first_of(operation: Awaitable[Any], timeout_s: float) -> ReadinessOutcome:
    """
    Race ``operation`` against a ``timeout_s`` timer.

    Whichever finishes first decides the outcome; the loser is
    cancelled and its eventual result discarded. If both complete in
    the same loop iteration, the operation wins.
    """
    loop = asyncio.get_running_loop()
    started = loop.time()

    task = asyncio.ensure_future(operation)
    timer = asyncio.ensure_future(asyncio.sleep(timeout_s))
    try:
        done, _ = await asyncio.wait(
            {task, timer},
            return_when=asyncio.FIRST_COMPLETED,
        )
    finally:
        timer.cancel()
        if not task.done():
            task.cancel()

    elapsed = loop.time() - started

    if task in done:
        if task.cancelled():
            return ReadinessOutcome(
                kind="failed",
                error=asyncio.CancelledError(),
                elapsed_s=elapsed,
            )
        error = task.exception()
        if error is not None:
            return ReadinessOutcome(kind="failed", error=error, elapsed_s=elapsed)
        return ReadinessOutcome(kind="ready", elapsed_s=elapsed)

    return ReadinessOutcome(
        kind="timed_out",
        error=asyncio.TimeoutError(f"backend not ready after {timeout_s:.3f}s"),
        elapsed_s=elapsed,
    )
