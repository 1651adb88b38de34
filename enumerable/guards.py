"""Guarded enumeration: size ceilings and wall-clock deadlines.

Both guards return ordinary values for their "did not happen" outcomes
(`SizeRejected`, ``None``) so callers branch on the result instead of catching
exceptions.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Optional

from enumerable.api import enumerable
from enumerable.config import ENUMERATION_CONFIG
from enumerable.deadline import cancellable
from enumerable.derive.resolve import resolve
from enumerable.errors import LargeTypeError
from enumerable.logging import get_logger
from enumerable.types.base import Cardinality, Enumerable, is_enumerable
from enumerable.types.dto import BoundedEnumeration, Enumerated, SizeRejected

logger = get_logger(__name__)


def enumerate_below(tp: Any, ceiling: Cardinality) -> BoundedEnumeration[Any]:
    """Enumerate `tp` only if it has fewer than `ceiling` values.

    The cardinality is computed first, without listing anything; the values
    are materialized only when ``cardinality < ceiling``.

    Args:
        tp: Type annotation or adapter.
        ceiling: Exclusive upper bound on the number of values.

    Returns:
        `Enumerated` with every value, or `SizeRejected` carrying the actual
        cardinality when it met or exceeded the ceiling.

    Raises:
        ValueError: If `ceiling` is negative.
        LargeTypeError: If `tp` is countable-only and its cardinality is below
            the ceiling (it still cannot be listed).
    """
    if ceiling < 0:
        raise ValueError(f"ceiling={ceiling} must be non-negative")
    adapter = resolve(tp)
    size = adapter.cardinality()
    if size >= ceiling:
        logger.warning(
            f"Refusing to enumerate {adapter.name}: {size:,} values "
            f"(ceiling {ceiling:,})"
        )
        return SizeRejected(cardinality=size, ceiling=ceiling)
    if not is_enumerable(adapter):
        raise LargeTypeError(adapter.name, size)
    values = adapter.enumerated()  # type: ignore[attr-defined]
    logger.debug(f"Enumerated {adapter.name} below {ceiling:,}: {len(values)} values")
    return Enumerated(values)


def enumerate_with_deadline(
    tp: Any, seconds: Optional[float] = None
) -> Optional[List[Any]]:
    """Enumerate `tp`, giving up after `seconds` of wall-clock time.

    The type is resolved in the calling thread, so structural and large-type
    errors are raised directly. The values are then built on a single worker
    thread. When the deadline passes the worker is signalled to stop at its
    next checkpoint and abandoned; the call returns immediately.

    Args:
        tp: Type annotation or adapter.
        seconds: Time budget. Defaults to
            ``ENUMERATION_CONFIG.default_deadline_seconds``.

    Returns:
        Every value of `tp`, or ``None`` if the deadline was exceeded.

    Raises:
        ValueError: If `seconds` is not positive.
        LargeTypeError: If `tp` is, or contains, a countable-only type.
        StructuralError: If `tp` cannot be enumerated at all.
    """
    if seconds is None:
        seconds = ENUMERATION_CONFIG.default_deadline_seconds
    if seconds <= 0:
        raise ValueError(f"seconds={seconds} must be positive")

    adapter = enumerable(tp)
    event = threading.Event()
    executor = ThreadPoolExecutor(
        max_workers=1, thread_name_prefix=ENUMERATION_CONFIG.worker_thread_prefix
    )
    try:
        future = executor.submit(_materialize, adapter, event)
        try:
            return future.result(timeout=seconds)
        except TimeoutError:
            event.set()
            future.cancel()
            logger.warning(
                f"Enumeration of {adapter.name} exceeded its {seconds:g}s deadline"
            )
            return None
    finally:
        # Never wait for an abandoned worker
        executor.shutdown(wait=False, cancel_futures=True)


def _materialize(adapter: Enumerable[Any], event: threading.Event) -> List[Any]:
    with cancellable(event):
        return adapter.enumerated()
