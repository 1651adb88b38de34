"""Countable-only adapters for types too large to enumerate.

Not re-exported from the package root: importing this module is an explicit
opt-in. These adapters can be sized (and make any composite containing them
sizeable) but every attempt to enumerate them raises `LargeTypeError`.
"""

from __future__ import annotations

from typing import Annotated, Any, Callable

from enumerable.primitives.strategies import Large


def _integers_between(low: int, high: int) -> Callable[[Any], bool]:
    # Matches by ==, so True and 3.0 count as the integers 1 and 3
    def contains(value: Any) -> bool:
        return (
            isinstance(value, (int, float))
            and low <= value <= high
            and value == int(value)
        )

    return contains


INT32 = Large("int32", 2**32, _integers_between(-(2**31), 2**31 - 1))
UINT32 = Large("uint32", 2**32, _integers_between(0, 2**32 - 1))
INT64 = Large("int64", 2**64, _integers_between(-(2**63), 2**63 - 1))
UINT64 = Large("uint64", 2**64, _integers_between(0, 2**64 - 1))

Int32 = Annotated[int, INT32]
UInt32 = Annotated[int, UINT32]
Int64 = Annotated[int, INT64]
UInt64 = Annotated[int, UINT64]
