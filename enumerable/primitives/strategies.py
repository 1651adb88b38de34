"""Adapter strategies for primitive (leaf) types.

Each strategy turns some existing structure of an atomic type into the
`Enumerable` capability:

- `BoundedOrdinal`: contiguous ordinals between a minimum and a maximum.
- `SuccessorFromZero`: repeated "next value" steps from an origin.
- `LiteralList`: a hand-written list, for types with no ordinal structure.
- `FlagCombinations`: every combination of a `Flag`'s members.

`Mapped` wraps another adapter (newtype style) and `Large` marks a type as
countable but too large to enumerate.

All strategies produce duplicate-free sequences whose length equals the
reported cardinality. Values are distinct by plain ``==``; violations are
rejected when the adapter is built or first walked.
"""

from __future__ import annotations

import operator
from enum import KEEP, Enum, Flag
from functools import reduce
from typing import (
    Any,
    Callable,
    Generic,
    Iterable,
    List,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

from enumerable.deadline import checkpoint
from enumerable.errors import StructuralError
from enumerable.shape.engine import power_set, power_set_cardinality
from enumerable.types.base import Cardinality, Countable, Enumerable

T = TypeVar("T")
S = TypeVar("S")
E = TypeVar("E", bound=Enum)
F = TypeVar("F", bound=Flag)

# Progress is checked once per this many steps in long primitive walks.
_CHECK_EVERY = 4096


def _identity(value: Any) -> Any:
    return value


class BoundedOrdinal(Enumerable[T]):
    """Values at contiguous ordinals ``ordinal(minimum) .. ordinal(maximum)``.

    The cardinality is ``1 + ordinal(maximum) - ordinal(minimum)``, computed
    with Python integers so the subtraction can never wrap, whatever the
    native width of the type.

    Args:
        name: Display name.
        minimum: Smallest value.
        maximum: Largest value (inclusive).
        to_ordinal: Maps a value to its integer position (default ``int``).
        from_ordinal: Inverse of `to_ordinal` (default identity).

    Raises:
        StructuralError: If ``maximum`` sorts before ``minimum``.
    """

    def __init__(
        self,
        name: str,
        minimum: T,
        maximum: T,
        to_ordinal: Callable[[T], int] = int,
        from_ordinal: Callable[[int], T] = _identity,
    ) -> None:
        self.name = name
        self.minimum = minimum
        self.maximum = maximum
        self._to_ordinal = to_ordinal
        self._from_ordinal = from_ordinal
        self._low = int(to_ordinal(minimum))
        self._high = int(to_ordinal(maximum))
        if self._high < self._low:
            raise StructuralError(
                f"{name}: maximum {maximum!r} sorts before minimum {minimum!r}"
            )

    def enumerated(self) -> List[T]:
        values: List[T] = []
        for offset, ordinal in enumerate(range(self._low, self._high + 1)):
            if offset % _CHECK_EVERY == 0:
                checkpoint()
            values.append(self._from_ordinal(ordinal))
        return values

    def cardinality(self) -> Cardinality:
        return 1 + self._high - self._low


class SuccessorFromZero(Enumerable[T]):
    """Values reached by stepping ``successor`` from ``origin``.

    ``successor(value)`` returns the next value, or ``None`` once the type is
    exhausted. Only valid for types independently known to be finite; a walk
    that revisits a value is rejected instead of looping forever.

    There is no closed form for the count, so `cardinality()` walks the type.

    Args:
        name: Display name.
        origin: First value.
        successor: Step function; ``None`` ends the walk.
    """

    def __init__(
        self,
        name: str,
        origin: T,
        successor: Callable[[T], Optional[T]],
    ) -> None:
        self.name = name
        self.origin = origin
        self._successor = successor

    def enumerated(self) -> List[T]:
        values: List[T] = []
        seen = set()
        current: Optional[T] = self.origin
        while current is not None:
            if current in seen:
                raise StructuralError(
                    f"{self.name}: successor walk revisits {current!r}; "
                    "the type is not finite along this step function"
                )
            seen.add(current)
            values.append(current)
            if len(values) % _CHECK_EVERY == 0:
                checkpoint()
            current = self._successor(current)
        return values


class LiteralList(Enumerable[T]):
    """A fixed, hand-specified list of every value.

    Args:
        name: Display name.
        values: Every value of the type, in the order to enumerate them.

    Raises:
        StructuralError: If ``values`` contains duplicates.
    """

    def __init__(self, name: str, values: Iterable[T]) -> None:
        self.name = name
        self.values: Tuple[T, ...] = tuple(values)
        check_distinct(name, self.values)

    def enumerated(self) -> List[T]:
        return list(self.values)

    def cardinality(self) -> Cardinality:
        return len(self.values)


class Mapped(Enumerable[T], Generic[S, T]):
    """Another enumerable's values passed through a constructor.

    Used for wrapper types (``Wrapper(value)`` for every value of the wrapped
    type). The function must be injective; the count is the source's.
    """

    def __init__(
        self, name: str, source: Enumerable[S], function: Callable[[S], T]
    ) -> None:
        self.name = name
        self.source = source
        self._function = function

    def enumerated(self) -> List[T]:
        return [self._function(value) for value in self.source.enumerated()]

    def cardinality(self) -> Cardinality:
        return self.source.cardinality()


class Large(Countable[T]):
    """Countable-only marker for types too large to enumerate.

    Passing one to `enumerated()` raises `LargeTypeError` immediately instead
    of attempting a walk that would not finish.

    Args:
        name: Display name.
        size: Exact cardinality of the type.
        contains: Optional membership test. Unions use it to reject listed
            values that this type also holds.
    """

    def __init__(
        self,
        name: str,
        size: Cardinality,
        contains: Optional[Callable[[Any], bool]] = None,
    ) -> None:
        if size < 0:
            raise ValueError(f"{name}: size={size} must be non-negative")
        self.name = name
        self.size = size
        self.contains = contains

    def cardinality(self) -> Cardinality:
        return self.size


def from_enum(cls: Type[E]) -> LiteralList[E]:
    """Adapter listing an `Enum`'s members in definition order (aliases skipped)."""
    return LiteralList(cls.__name__, list(cls))


class FlagCombinations(Enumerable[F]):
    """Every value of a `Flag`: each combination of its canonical members.

    Combinations are listed in power-set order over the members' definition
    order, starting with the empty flag; the count is ``2 ** len(members)``.
    """

    def __init__(self, cls: Type[F]) -> None:
        if cls._boundary_ is KEEP:
            raise StructuralError(
                f"{cls.__name__}: flag keeps undefined bits, so the type is unbounded"
            )
        self.name = cls.__name__
        self.cls = cls
        self.members: Tuple[F, ...] = tuple(cls)

    def enumerated(self) -> List[F]:
        empty = self.cls(0)
        return [
            reduce(operator.or_, subset, empty)
            for subset in power_set(self.members)
        ]

    def cardinality(self) -> Cardinality:
        return power_set_cardinality(len(self.members))


def from_flag(cls: Type[F]) -> FlagCombinations[F]:
    """Adapter for a `Flag`, listing every combination of its members."""
    return FlagCombinations(cls)


def from_literal(*values: T) -> LiteralList[T]:
    """Adapter for a literal set of values, e.g. ``from_literal("r", "w")``."""
    return LiteralList("literal[" + ", ".join(repr(v) for v in values) + "]", values)


def check_distinct(name: str, values: Iterable[Any]) -> None:
    """Raise `StructuralError` unless `values` are pairwise unequal.

    Distinctness is plain ``==``: ``1``, ``True`` and ``1.0`` are one value.
    """
    hashed = set()
    unhashable: List[Any] = []
    for value in values:
        try:
            duplicate = value in hashed
            hashed.add(value)
        except TypeError:
            duplicate = any(value == other for other in unhashable)
            unhashable.append(value)
        if duplicate:
            raise StructuralError(f"{name}: duplicate value {value!r}")
