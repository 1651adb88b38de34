"""Catalog of ready-made primitive adapters.

Fixed-width integers and characters use the bounded-ordinal strategy,
`SeekMode` the successor strategy, and the remaining opaque domains are
literal lists. The ``Annotated`` aliases (`Int8`, `Char`, ...) let dataclass
fields pick an adapter through their annotation::

    @dataclass(frozen=True)
    class Pixel:
        red: UInt8
        lit: bool
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Optional

from enumerable.primitives.strategies import (
    BoundedOrdinal,
    LiteralList,
    SuccessorFromZero,
    from_enum,
)

BOOL = LiteralList("bool", [False, True])
NONE = LiteralList("none", [None])
NEVER: LiteralList = LiteralList("never", [])

INT8 = BoundedOrdinal("int8", -(2**7), 2**7 - 1)
UINT8 = BoundedOrdinal("uint8", 0, 2**8 - 1)
INT16 = BoundedOrdinal("int16", -(2**15), 2**15 - 1)
UINT16 = BoundedOrdinal("uint16", 0, 2**16 - 1)

#: Every Unicode code point, surrogates included: 1,114,112 values.
CHAR = BoundedOrdinal("char", "\x00", "\U0010ffff", ord, chr)

Int8 = Annotated[int, INT8]
UInt8 = Annotated[int, UINT8]
Int16 = Annotated[int, INT16]
UInt16 = Annotated[int, UINT16]
Char = Annotated[str, CHAR]


class Ordering(Enum):
    """Result of a three-way comparison. Members never equal an int or bool."""

    LT = -1
    EQ = 0
    GT = 1


ORDERING = from_enum(Ordering)


class SeekMode(Enum):
    """Reference point of a file seek; ``mode.value`` is the ``os.SEEK_*`` code."""

    SET = os.SEEK_SET
    CUR = os.SEEK_CUR
    END = os.SEEK_END


def _next_seek_mode(mode: SeekMode) -> Optional[SeekMode]:
    try:
        return SeekMode(mode.value + 1)
    except ValueError:
        return None


SEEK_MODE = SuccessorFromZero("SeekMode", SeekMode(0), _next_seek_mode)


class IOMode(Enum):
    """File opening modes, as ``open()`` mode strings."""

    READ = "r"
    WRITE = "w"
    APPEND = "a"
    READ_WRITE = "r+"


IO_MODE = LiteralList(
    "IOMode", [IOMode.READ, IOMode.WRITE, IOMode.APPEND, IOMode.READ_WRITE]
)


class Newline(Enum):
    """Line terminator conventions."""

    LF = "\n"
    CRLF = "\r\n"


NEWLINE = from_enum(Newline)


@dataclass(frozen=True)
class NewlineMode:
    """Newline translation for reading and for writing.

    Derived structurally: ``enumerated(NewlineMode)`` lists the four
    combinations, input varying slowest.
    """

    input: Newline
    output: Newline


#: Built-in arithmetic exception classes (the subclasses of ArithmeticError).
ARITHMETIC_ERRORS = LiteralList(
    "ArithmeticError", [OverflowError, ZeroDivisionError, FloatingPointError]
)

#: Unicode general-category codes, as returned by ``unicodedata.category``.
GENERAL_CATEGORY = LiteralList(
    "GeneralCategory",
    [
        "Lu", "Ll", "Lt", "Lm", "Lo",
        "Mn", "Mc", "Me",
        "Nd", "Nl", "No",
        "Pc", "Pd", "Ps", "Pe", "Pi", "Pf", "Po",
        "Sm", "Sc", "Sk", "So",
        "Zs", "Zl", "Zp",
        "Cc", "Cf", "Cs", "Co", "Cn",
    ],
)  # fmt: skip
