"""Tests for the built-in primitive catalog."""

from __future__ import annotations

import os
import unicodedata

import pytest

from enumerable import cardinality, enumerated
from enumerable.errors import LargeTypeError
from enumerable.primitives import (
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
    IOMode,
    Newline,
    NewlineMode,
    Ordering,
    SeekMode,
)
from enumerable.primitives.large import INT32, INT64, UINT32, UINT64


def test_trivial_types() -> None:
    assert BOOL.enumerated() == [False, True]
    assert NONE.enumerated() == [None]
    assert NEVER.enumerated() == []
    assert NEVER.cardinality() == 0


@pytest.mark.parametrize(
    "adapter, low, high",
    [
        (INT8, -128, 127),
        (UINT8, 0, 255),
        (INT16, -32768, 32767),
        (UINT16, 0, 65535),
    ],
)
def test_fixed_width_integers(adapter, low, high) -> None:
    """Enumeration coincides with the ordinal walk from minimum to maximum."""
    values = adapter.enumerated()
    assert values == list(range(low, high + 1))
    assert adapter.cardinality() == high - low + 1


def test_char_covers_every_code_point() -> None:
    assert CHAR.cardinality() == 1_114_112
    assert CHAR.minimum == "\x00"
    assert CHAR.maximum == "\U0010ffff"


def test_ordering() -> None:
    assert ORDERING.enumerated() == [Ordering.LT, Ordering.EQ, Ordering.GT]
    assert Ordering.EQ != 0
    assert Ordering.GT != True  # noqa: E712


def test_seek_mode_walks_successors() -> None:
    assert SEEK_MODE.enumerated() == [SeekMode.SET, SeekMode.CUR, SeekMode.END]
    assert [mode.value for mode in SEEK_MODE.enumerated()] == [
        os.SEEK_SET,
        os.SEEK_CUR,
        os.SEEK_END,
    ]
    assert SEEK_MODE.cardinality() == 3


def test_io_mode_and_newline() -> None:
    assert IO_MODE.enumerated() == list(IOMode)
    assert IO_MODE.cardinality() == 4
    assert NEWLINE.enumerated() == [Newline.LF, Newline.CRLF]


def test_newline_mode_is_derived_structurally() -> None:
    assert cardinality(NewlineMode) == 4
    assert enumerated(NewlineMode) == [
        NewlineMode(Newline.LF, Newline.LF),
        NewlineMode(Newline.LF, Newline.CRLF),
        NewlineMode(Newline.CRLF, Newline.LF),
        NewlineMode(Newline.CRLF, Newline.CRLF),
    ]


def test_arithmetic_errors() -> None:
    values = ARITHMETIC_ERRORS.enumerated()
    assert values == [OverflowError, ZeroDivisionError, FloatingPointError]
    assert all(issubclass(cls, ArithmeticError) for cls in values)


def test_general_category_codes() -> None:
    codes = GENERAL_CATEGORY.enumerated()
    assert len(codes) == 30
    assert len(set(codes)) == 30
    for char in ["A", "a", "1", " ", "\n", "\u00ad", "\ud800", "$", "-"]:
        assert unicodedata.category(char) in codes


class TestLargeCatalog:
    @pytest.mark.parametrize(
        "adapter, size",
        [(INT32, 2**32), (UINT32, 2**32), (INT64, 2**64), (UINT64, 2**64)],
    )
    def test_sizes(self, adapter, size) -> None:
        assert cardinality(adapter) == size

    def test_enumeration_rejected(self) -> None:
        with pytest.raises(LargeTypeError, match="int64"):
            enumerated(INT64)

    def test_membership(self) -> None:
        assert INT32.contains(-(2**31))
        assert not INT32.contains(2**31)
        assert UINT32.contains(True)
        assert UINT64.contains(7.0)
        assert not UINT64.contains(-1)
        assert not INT64.contains(0.5)
        assert not INT64.contains("1")
