"""Structural derivation engine.

Two recursive functions over the shape algebra: `enumerate_shape` builds the
ordered list of shape-level values and `shape_cardinality` counts them without
building anything. Both are pure; neither caches.

Ordering is depth-first: all values of a sum's left side precede its right
side, and in a product the right (last) field varies fastest.
"""

from __future__ import annotations

from typing import Any, FrozenSet, List, Sequence, TypeVar

from enumerable.deadline import checkpoint
from enumerable.errors import LargeTypeError
from enumerable.shape.algebra import (
    UNIT_VALUE,
    Labeled,
    Leaf,
    Left,
    Product,
    Right,
    Shape,
    Sum,
    Unit,
    Void,
    iter_leaves,
)
from enumerable.types.base import Cardinality, is_enumerable

T = TypeVar("T")


def enumerate_shape(shape: Shape) -> List[Any]:
    """Return every shape-level value of `shape`, in structural order.

    Args:
        shape: Shape tree to enumerate.

    Returns:
        A new list; ``len(result) == shape_cardinality(shape)``.

    Raises:
        LargeTypeError: If any leaf is countable-only. Checked before anything
            is materialized.
    """
    for leaf in iter_leaves(shape):
        if not is_enumerable(leaf.source):
            raise LargeTypeError(leaf.source.name, leaf.source.cardinality())
    return _enumerate(shape)


def _enumerate(shape: Shape) -> List[Any]:
    if isinstance(shape, Unit):
        return [UNIT_VALUE]
    if isinstance(shape, Void):
        return []
    if isinstance(shape, Leaf):
        return list(shape.source.enumerated())  # type: ignore[attr-defined]
    if isinstance(shape, Labeled):
        return _enumerate(shape.inner)
    if isinstance(shape, Product):
        lefts = _enumerate(shape.left)
        if not lefts:
            return []
        rights = _enumerate(shape.right)
        values: List[Any] = []
        for left in lefts:
            checkpoint()
            values.extend((left, right) for right in rights)
        return values
    if isinstance(shape, Sum):
        values = [Left(v) for v in _enumerate(shape.left)]
        checkpoint()
        values.extend(Right(v) for v in _enumerate(shape.right))
        return values
    raise TypeError(f"Not a shape: {shape!r}")


def shape_cardinality(shape: Shape) -> Cardinality:
    """Return the number of values of `shape` without enumerating it.

    Works for countable-only leaves too, so oversized types can be sized and
    rejected cheaply.
    """
    if isinstance(shape, Unit):
        return 1
    if isinstance(shape, Void):
        return 0
    if isinstance(shape, Leaf):
        return shape.source.cardinality()
    if isinstance(shape, Labeled):
        return shape_cardinality(shape.inner)
    if isinstance(shape, Product):
        return shape_cardinality(shape.left) * shape_cardinality(shape.right)
    if isinstance(shape, Sum):
        return shape_cardinality(shape.left) + shape_cardinality(shape.right)
    raise TypeError(f"Not a shape: {shape!r}")


def power_set(values: Sequence[T]) -> List[FrozenSet[T]]:
    """Return every subset of `values`, depth-first in element order.

    Each subset is listed as soon as its last element is chosen, then extended
    with later elements before moving on. For ``[False, True]`` the result is
    ``{}, {False}, {False, True}, {True}``.

    Args:
        values: Distinct elements, in their enumeration order.

    Returns:
        ``2 ** len(values)`` frozensets.
    """
    subsets: List[FrozenSet[T]] = [frozenset()]
    # Each frame: (chosen elements so far, index of the next candidate)
    stack: List[tuple[tuple[T, ...], int]] = [((), 0)]
    while stack:
        chosen, start = stack.pop()
        # Push in reverse so that lower indices are explored first.
        frames = []
        for index in range(start, len(values)):
            frames.append((chosen + (values[index],), index + 1))
        for frame in reversed(frames):
            stack.append(frame)
        if frames:
            checkpoint()
        if chosen:
            subsets.append(frozenset(chosen))
    return subsets


def power_set_cardinality(cardinality: Cardinality) -> Cardinality:
    """Return ``2 ** cardinality``; exact for any base size."""
    return 2**cardinality
