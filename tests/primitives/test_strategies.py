"""Tests for the primitive adapter strategies."""

from __future__ import annotations

from enum import Enum, Flag, IntFlag

import pytest

from enumerable.errors import StructuralError
from enumerable.primitives import (
    BOOL,
    BoundedOrdinal,
    Large,
    LiteralList,
    Mapped,
    FlagCombinations,
    SuccessorFromZero,
    check_distinct,
    from_enum,
    from_flag,
    from_literal,
)
from enumerable.types.base import is_enumerable


class Suit(Enum):
    CLUBS = "c"
    DIAMONDS = "d"
    HEARTS = "h"
    SPADES = "s"
    TREFLE = "c"  # alias of CLUBS


class Access(Flag):
    READ = 1
    WRITE = 2
    EXEC = 4
    READ_WRITE = 3  # multi-bit alias


class TestBoundedOrdinal:
    def test_walks_inclusive_range(self) -> None:
        adapter = BoundedOrdinal("small", 3, 7)
        assert adapter.enumerated() == [3, 4, 5, 6, 7]
        assert adapter.cardinality() == 5

    def test_single_value(self) -> None:
        adapter = BoundedOrdinal("one", 9, 9)
        assert adapter.enumerated() == [9]
        assert adapter.cardinality() == 1

    def test_custom_ordinals(self) -> None:
        adapter = BoundedOrdinal("letters", "a", "e", ord, chr)
        assert adapter.enumerated() == ["a", "b", "c", "d", "e"]
        assert adapter.cardinality() == 5

    def test_inverted_bounds_rejected(self) -> None:
        with pytest.raises(StructuralError, match="sorts before"):
            BoundedOrdinal("bad", 5, 4)

    def test_cardinality_does_not_wrap(self) -> None:
        adapter = BoundedOrdinal("wide", -(2**63), 2**63 - 1)
        assert adapter.cardinality() == 2**64


class TestSuccessorFromZero:
    def test_walks_until_exhausted(self) -> None:
        adapter = SuccessorFromZero("digits", 0, lambda v: v + 1 if v < 4 else None)
        assert adapter.enumerated() == [0, 1, 2, 3, 4]
        assert adapter.cardinality() == 5

    def test_cycle_is_rejected(self) -> None:
        adapter = SuccessorFromZero("loop", 0, lambda v: (v + 1) % 3)
        with pytest.raises(StructuralError, match="revisits 0"):
            adapter.enumerated()


class TestLiteralList:
    def test_keeps_order(self) -> None:
        adapter = LiteralList("modes", ["w", "r", "a"])
        assert adapter.enumerated() == ["w", "r", "a"]
        assert adapter.cardinality() == 3

    def test_duplicates_rejected(self) -> None:
        with pytest.raises(StructuralError, match="duplicate value 'r'"):
            LiteralList("modes", ["r", "w", "r"])

    @pytest.mark.parametrize("values", [[1, True], [0, False], [2, 2.0]])
    def test_equal_values_of_different_types_are_duplicates(self, values) -> None:
        with pytest.raises(StructuralError, match="duplicate value"):
            LiteralList("mixed", values)

    def test_returns_fresh_lists(self) -> None:
        adapter = LiteralList("modes", ["r", "w"])
        first = adapter.enumerated()
        first.append("x")
        assert adapter.enumerated() == ["r", "w"]

    def test_empty(self) -> None:
        assert LiteralList("empty", []).enumerated() == []


def test_mapped_wraps_values_and_keeps_count() -> None:
    adapter = Mapped("Tagged", BOOL, lambda flag: ("tag", flag))
    assert adapter.enumerated() == [("tag", False), ("tag", True)]
    assert adapter.cardinality() == 2


class TestLarge:
    def test_countable_only(self) -> None:
        adapter = Large("huge", 10**30)
        assert adapter.cardinality() == 10**30
        assert not is_enumerable(adapter)
        assert not hasattr(adapter, "enumerated")

    def test_negative_size_rejected(self) -> None:
        with pytest.raises(ValueError):
            Large("bad", -1)


def test_from_enum_skips_aliases() -> None:
    adapter = from_enum(Suit)
    assert adapter.name == "Suit"
    assert adapter.enumerated() == [Suit.CLUBS, Suit.DIAMONDS, Suit.HEARTS, Suit.SPADES]


def test_from_literal() -> None:
    adapter = from_literal("r", "w")
    assert adapter.name == "literal['r', 'w']"
    assert adapter.enumerated() == ["r", "w"]


class TestFlagCombinations:
    def test_every_combination_in_power_set_order(self) -> None:
        adapter = from_flag(Access)
        assert isinstance(adapter, FlagCombinations)
        assert adapter.name == "Access"
        assert adapter.enumerated() == [
            Access(0),
            Access.READ,
            Access.READ | Access.WRITE,
            Access.READ | Access.WRITE | Access.EXEC,
            Access.READ | Access.EXEC,
            Access.WRITE,
            Access.WRITE | Access.EXEC,
            Access.EXEC,
        ]

    def test_aliases_do_not_add_values(self) -> None:
        adapter = from_flag(Access)
        assert adapter.cardinality() == 2**3 == len(adapter.enumerated())
        assert Access.READ_WRITE in adapter.enumerated()

    def test_flag_keeping_undefined_bits_rejected(self) -> None:
        class Bits(IntFlag):
            LOW = 1
            HIGH = 2

        with pytest.raises(StructuralError, match="unbounded"):
            from_flag(Bits)


class TestCheckDistinct:
    def test_accepts_distinct_values(self) -> None:
        check_distinct("ok", ["r", "w", None, (1, 2)])

    def test_equality_across_types(self) -> None:
        with pytest.raises(StructuralError, match="mixed: duplicate value 1.0"):
            check_distinct("mixed", [1, "one", 1.0])

    def test_unhashable_values(self) -> None:
        with pytest.raises(StructuralError, match=r"duplicate value \[1\]"):
            check_distinct("lists", [[1], [2], [1]])
