"""
Bounded-Concurrency Batch Processing
------------------------------------

Runs an async per-item operation over a list of inputs with at most
`concurrency_limit` operations in flight. Each input yields exactly one
BatchItem; an item's failure (returned Err or raised exception) never
affects its siblings.

API:
  process_batch(inputs, op, concurrency_limit=10) -> list[BatchItem]   (coroutine)
  batch_summary(items, original_count=None, max_failed=5) -> dict

Examples:
  >>> async def double(x):
  ...     return Ok(x * 2)
  >>> items = asyncio.run(process_batch([1, 2, 3], double))
  >>> [(i.input, i.value) for i in items]
  [(1, 2), (2, 4), (3, 6)]
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Iterable, List, Optional, TypeVar, Union

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY_LIMIT = 10

I = TypeVar("I")
O = TypeVar("O")


@dataclass(frozen=True)
class Ok(Generic[O]):
    value: O

    ok = True


@dataclass(frozen=True)
class Err:
    reason: str

    ok = False


Outcome = Union[Ok, Err]


@dataclass(frozen=True)
class BatchItem(Generic[I]):
    """One input paired with its outcome."""

    input: I
    outcome: Outcome

    @property
    def ok(self) -> bool:
        return self.outcome.ok

    @property
    def value(self) -> Any:
        return self.outcome.value if self.outcome.ok else None

    @property
    def error(self) -> Optional[str]:
        return None if self.outcome.ok else self.outcome.reason


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


async def process_batch(
    inputs: Iterable[I],
    op: Callable[[I], Awaitable[Any]],
    concurrency_limit: int = DEFAULT_CONCURRENCY_LIMIT,
) -> List[BatchItem[I]]:
    """
    Apply `op` to every input with bounded concurrency.

    `op` should return Ok/Err; any other return value is wrapped in Ok, and an
    Exception raised by `op` becomes Err for that item only. Cancellation is
    not intercepted: cancelling the awaiting task cancels every pending item.

    Args:
        inputs: Work items, already de-duplicated by the caller
        op: Async callable taking one input
        concurrency_limit: Maximum number of `op` calls in flight

    Returns:
        One BatchItem per input, in input order

    Raises:
        ValueError: If concurrency_limit < 1
        TypeError: If op is not callable
    """
    if isinstance(concurrency_limit, bool) or not isinstance(concurrency_limit, int) or concurrency_limit < 1:
        raise ValueError(f"concurrency_limit must be a positive integer, got {concurrency_limit!r}")
    if not callable(op):
        raise TypeError(f"op must be callable, got {type(op).__name__}")

    inputs = list(inputs)
    if not inputs:
        return []

    semaphore = asyncio.Semaphore(concurrency_limit)

    async def run_one(item: I) -> BatchItem[I]:
        async with semaphore:
            try:
                result = op(item)
                if inspect.isawaitable(result):
                    result = await result
            except Exception as e:
                logger.warning(f"Batch item {item!r} failed: {_describe(e)}")
                return BatchItem(item, Err(_describe(e)))

        if not isinstance(result, (Ok, Err)):
            result = Ok(result)
        return BatchItem(item, result)

    logger.debug(f"Processing batch of {len(inputs)} item(s), concurrency limit {concurrency_limit}")
    return list(await asyncio.gather(*(run_one(item) for item in inputs)))


def batch_summary(
    items: List[BatchItem],
    original_count: Optional[int] = None,
    max_failed: int = 5,
) -> dict:
    """
    Accounting envelope for a finished batch.

    Args:
        items: Output of process_batch
        original_count: Number of inputs before caller-side de-duplication
            (defaults to len(items))
        max_failed: Cap on the failed entries listed (counts are never capped)

    Returns:
        {
          "summary": {"total", "successful", "failed", "success_rate"},
          "results": {"successful": [values...], "failed": [{"input", "error"}...]}
        }
    """
    total = len(items) if original_count is None else original_count
    successful = [item.value for item in items if item.ok]
    failed = [{"input": item.input, "error": item.error} for item in items if not item.ok]

    return {
        "summary": {
            "total": total,
            "successful": len(successful),
            "failed": len(failed),
            "success_rate": round(len(successful) / total * 100, 1) if total > 0 else 0,
        },
        "results": {
            "successful": successful,
            "failed": failed[:max_failed],
        },
    }


__all__ = [
    "DEFAULT_CONCURRENCY_LIMIT",
    "Ok",
    "Err",
    "Outcome",
    "BatchItem",
    "process_batch",
    "batch_summary",
]
