"""
Concurrency helpers
===================

Bounded fan-out used by the block fetcher and the volume aggregation.
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def gather_bounded(
    func: Callable[[T], Awaitable[R]],
    items: Iterable[T],
    limit: int | None = None,
) -> list[R]:
    """
    Run ``func`` over ``items`` concurrently, at most ``limit`` at a time.

    One task per item; results come back in input order regardless of
    completion order. The first exception propagates to the caller and no
    partial result list is returned.

    Args:
        func: Coroutine function applied to each item
        items: Inputs, in the order results should be returned
        limit: Max in-flight calls (None or <= 0 means one slot per item)

    Returns:
        list of results aligned with ``items``
    """
    items = list(items)
    if not items:
        return []

    semaphore = asyncio.Semaphore(limit if limit and limit > 0 else len(items))

    async def _run(item: T) -> R:
        async with semaphore:
            return await func(item)

    tasks = [asyncio.ensure_future(_run(item)) for item in items]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        raise
