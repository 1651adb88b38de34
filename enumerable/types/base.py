"""Base capabilities for finite, discrete types.

Defines the two interfaces every adapter implements:

* `Countable` knows how many values a type has.
* `Enumerable` additionally lists every value, in a fixed order.

Types that are too large to list (e.g. 64-bit integers) implement only
`Countable`, so they can be sized but never materialized.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, List, TypeVar

T = TypeVar("T")

#: Count of distinct values of a type. Python integers are unbounded, so
#: products and power sets never overflow.
Cardinality = int


class Countable(ABC, Generic[T]):
    """A finite type whose number of values is known.

    Attributes:
        name: Display name used in logs, errors and the CLI.
    """

    name: str = "<anonymous>"

    @abstractmethod
    def cardinality(self) -> Cardinality:
        """Return the number of distinct values of the type."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class Enumerable(Countable[T]):
    """A finite type whose values can be listed.

    Laws every implementation must keep:

    * ``cardinality() == len(enumerated())``
    * ``enumerated()`` is duplicate-free and contains every value
    * repeated calls return equal lists in the same order
    """

    @abstractmethod
    def enumerated(self) -> List[T]:
        """Return a newly built list of every value, in structural order."""

    def cardinality(self) -> Cardinality:
        # Fallback when no closed form is available; adapters override it.
        return len(self.enumerated())


def is_enumerable(source: Countable) -> bool:
    """Return True when `source` can be materialized, not only counted."""
    return isinstance(source, Enumerable)
