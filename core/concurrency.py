# =============================================================================
# core/concurrency.py - Settled fan-out and paced batches
# =============================================================================
#
# The only two coordination primitives the project needs:
#
#   gather_settled  - run a group of independent awaitables and collect every
#                     outcome (value or exception) in input order.  One
#                     failure never cancels its siblings.
#   run_in_batches  - apply an async worker to a list in fixed-size chunks,
#                     each chunk settled before the next starts, with a pause
#                     between chunks (not after the last one).  This bounds
#                     peak outbound concurrency to ``batch_size``.
# =============================================================================

import asyncio
import logging
from typing import Any, Awaitable, Callable, Iterable, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


async def gather_settled(aws: Iterable[Awaitable[Any]]) -> list[Any]:
    """Await everything; exceptions are returned in place of results."""
    return list(await asyncio.gather(*aws, return_exceptions=True))


async def pause(seconds: float) -> None:
    """Suspend the current task without blocking the event loop."""
    await asyncio.sleep(seconds)


def chunked(items: Sequence[T], size: int) -> list[Sequence[T]]:
    """Consecutive slices of ``size``.  size <= 0 means one slice of everything."""
    if not items:
        return []
    if size <= 0:
        size = len(items)
    return [items[i : i + size] for i in range(0, len(items), size)]


async def run_in_batches(
    items: Sequence[T],
    worker: Callable[[T], Awaitable[R]],
    batch_size: int,
    delay: float,
) -> list[R | BaseException]:
    """Settled outcomes of ``worker(item)`` for every item, in input order."""
    batches = chunked(items, batch_size)
    outcomes: list[R | BaseException] = []
    for index, batch in enumerate(batches):
        outcomes.extend(await gather_settled(worker(item) for item in batch))
        if index < len(batches) - 1:
            logger.debug("batch %d/%d done, pausing %.3fs", index + 1, len(batches), delay)
            await pause(delay)
    return outcomes
