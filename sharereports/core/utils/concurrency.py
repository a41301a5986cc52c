# (c) Copyright Datacraft, 2026
"""Bounded fan-out over asyncio tasks."""
import asyncio
from typing import Awaitable, Callable, Iterable, TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def bounded_gather(
	items: Iterable[T],
	func: Callable[[T], Awaitable[R]],
	concurrency: int = 10,
) -> list[R]:
	"""
	Run ``func`` over ``items`` with at most ``concurrency`` running at once.

	Results keep the order of ``items``. Exceptions propagate; callers that
	want partial results handle failures inside ``func``.
	"""
	slots = asyncio.Semaphore(concurrency)

	async def run(item: T) -> R:
		async with slots:
			return await func(item)

	return await asyncio.gather(*(run(item) for item in items))
