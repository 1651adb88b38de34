"""enumerable: exhaustive enumeration of finite Python types.

Lists every value of a finite type, and counts them without listing, by
deriving both from the type's declared structure: dataclass fields, Enum
members, ``Union`` arms, ``tuple`` items and ``Literal`` values, down to
primitive adapters for the leaf types.

Primary API:
    enumerated() - Every value of a type, in structural order
    cardinality() - Number of values, without materializing them
    enumerable() - The reusable adapter for a type
    derive_enumerable - Class decorator adding enumerated()/cardinality()
    enumerate_below() - Enumerate only below a size ceiling
    enumerate_with_deadline() - Enumerate within a wall-clock budget

Example:
    from dataclasses import dataclass
    from typing import Optional

    from enumerable import cardinality, enumerated

    @dataclass(frozen=True)
    class Flags:
        read: bool
        write: Optional[bool]

    cardinality(Flags)  # 6
    enumerated(Flags)[0]  # Flags(read=False, write=False)

Types too large to list (``enumerable.primitives.large``) can be counted but
raise `LargeTypeError` when enumerated.
"""

from __future__ import annotations

from enumerable import cli, logging
from enumerable._version import __version__
from enumerable.api import (
    cardinality,
    countable,
    derive_enumerable,
    enumerable,
    enumerated,
)
from enumerable.config import ENUMERATION_CONFIG, EnumerationConfig
from enumerable.dsl import TypeCatalog
from enumerable.errors import (
    EnumerationCancelled,
    EnumerationError,
    LargeTypeError,
    StructuralError,
)
from enumerable.guards import enumerate_below, enumerate_with_deadline
from enumerable.primitives import (
    BoundedOrdinal,
    Large,
    LiteralList,
    Mapped,
    SuccessorFromZero,
    from_enum,
    from_literal,
)
from enumerable.types.base import Countable, Enumerable
from enumerable.types.dto import BoundedEnumeration, Enumerated, SizeRejected

__all__ = [
    # Version
    "__version__",
    # Enumeration (primary API)
    "enumerated",
    "cardinality",
    "enumerable",
    "countable",
    "derive_enumerable",
    # Guards
    "enumerate_below",
    "enumerate_with_deadline",
    "BoundedEnumeration",
    "Enumerated",
    "SizeRejected",
    # Capabilities
    "Countable",
    "Enumerable",
    # Primitive adapters
    "BoundedOrdinal",
    "Large",
    "LiteralList",
    "Mapped",
    "SuccessorFromZero",
    "from_enum",
    "from_literal",
    # Errors
    "EnumerationError",
    "StructuralError",
    "LargeTypeError",
    "EnumerationCancelled",
    # Configuration
    "EnumerationConfig",
    "ENUMERATION_CONFIG",
    # Catalog DSL
    "TypeCatalog",
    # Utilities
    "cli",
    "logging",
]
