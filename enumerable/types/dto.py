"""Result containers for guarded enumeration.

`enumerate_below` returns one of two immutable outcomes, both carrying the
cardinality so the caller can branch without recomputing it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, List, TypeVar, Union

from enumerable.types.base import Cardinality

T = TypeVar("T")


@dataclass(frozen=True)
class SizeRejected:
    """The type was too large for the caller's ceiling; nothing was enumerated.

    Attributes:
        cardinality: Actual number of values of the type.
        ceiling: The ceiling the cardinality met or exceeded.
    """

    cardinality: Cardinality
    ceiling: Cardinality


@dataclass(frozen=True)
class Enumerated(Generic[T]):
    """The full enumeration, produced because it fit below the ceiling.

    Attributes:
        values: Every value of the type, in structural order.
    """

    values: List[T]

    @property
    def cardinality(self) -> Cardinality:
        return len(self.values)


BoundedEnumeration = Union[SizeRejected, Enumerated[T]]
