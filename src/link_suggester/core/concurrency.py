"""
Fail-fast fan-out.

``gather_or_cancel`` behaves like ``asyncio.gather`` (results in argument
order, first exception propagates) but also cancels and awaits the sibling
tasks before re-raising, so no request outlives the failure that aborted it.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, List, TypeVar

T = TypeVar("T")


async def gather_or_cancel(*aws: Awaitable[T]) -> List[T]:
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            if not task.done():
                task.cancel()
        # Wait for cancellation to land; sibling errors are discarded.
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
