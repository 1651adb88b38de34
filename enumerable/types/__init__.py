"""Core capability interfaces and result containers."""

from enumerable.types.base import Cardinality, Countable, Enumerable, is_enumerable
from enumerable.types.dto import BoundedEnumeration, Enumerated, SizeRejected

__all__ = [
    "Cardinality",
    "Countable",
    "Enumerable",
    "is_enumerable",
    "BoundedEnumeration",
    "Enumerated",
    "SizeRejected",
]
