"""Primitive adapter strategies and the built-in catalog."""

from enumerable.primitives.catalog import (
    ARITHMETIC_ERRORS,
    BOOL,
    CHAR,
    GENERAL_CATEGORY,
    INT8,
    INT16,
    IO_MODE,
    NEVER,
    NEWLINE,
    NONE,
    ORDERING,
    SEEK_MODE,
    UINT8,
    UINT16,
    Char,
    Int8,
    Int16,
    IOMode,
    Newline,
    NewlineMode,
    Ordering,
    SeekMode,
    UInt8,
    UInt16,
)
from enumerable.primitives.strategies import (
    BoundedOrdinal,
    FlagCombinations,
    Large,
    LiteralList,
    Mapped,
    SuccessorFromZero,
    check_distinct,
    from_enum,
    from_flag,
    from_literal,
)

__all__ = [
    "BoundedOrdinal",
    "FlagCombinations",
    "Large",
    "LiteralList",
    "Mapped",
    "SuccessorFromZero",
    "check_distinct",
    "from_enum",
    "from_flag",
    "from_literal",
    "ARITHMETIC_ERRORS",
    "BOOL",
    "CHAR",
    "GENERAL_CATEGORY",
    "INT8",
    "INT16",
    "IO_MODE",
    "NEVER",
    "NEWLINE",
    "NONE",
    "ORDERING",
    "SEEK_MODE",
    "UINT8",
    "UINT16",
    "Char",
    "Int8",
    "Int16",
    "IOMode",
    "Newline",
    "NewlineMode",
    "Ordering",
    "SeekMode",
    "UInt8",
    "UInt16",
]
