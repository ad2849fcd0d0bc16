"""Concurrent batch helpers shared by the provisioning stages.

A stage dispatches every call at once and then waits at a single barrier
until all of them have settled. Results come back in dispatch order, not in
arrival order.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Iterable, TypeVar

T = TypeVar("T")


async def gather_settled(calls: Iterable[Awaitable[T]]) -> list[T | BaseException]:
    """Run all ``calls`` concurrently and wait until every one has settled."""

    return await asyncio.gather(*calls, return_exceptions=True)


def first_failure(outcomes: Iterable[object]) -> BaseException | None:
    """Return the first exception in dispatch order, if any."""

    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            return outcome
    return None
