"""Tests for the structural derivation engine."""

from __future__ import annotations

import threading

import pytest

from enumerable.deadline import cancellable, checkpoint
from enumerable.errors import EnumerationCancelled, LargeTypeError
from enumerable.primitives import BOOL, NEVER, ORDERING, Ordering
from enumerable.primitives.large import INT32, UINT64
from enumerable.shape.algebra import (
    Labeled,
    Leaf,
    Left,
    Product,
    Right,
    Sum,
    Unit,
    Void,
)
from enumerable.shape.engine import (
    enumerate_shape,
    power_set,
    power_set_cardinality,
    shape_cardinality,
)


class TestBaseCases:
    def test_unit(self) -> None:
        assert enumerate_shape(Unit()) == [()]
        assert shape_cardinality(Unit()) == 1

    def test_void(self) -> None:
        assert enumerate_shape(Void()) == []
        assert shape_cardinality(Void()) == 0

    def test_leaf(self) -> None:
        assert enumerate_shape(Leaf(ORDERING)) == list(Ordering)
        assert shape_cardinality(Leaf(ORDERING)) == 3

    def test_label_is_transparent(self) -> None:
        shape = Labeled(Leaf(BOOL), "field", "flag")
        assert enumerate_shape(shape) == [False, True]
        assert shape_cardinality(shape) == 2


class TestComposites:
    def test_product_varies_right_fastest(self) -> None:
        shape = Product(Leaf(BOOL), Leaf(BOOL))
        assert enumerate_shape(shape) == [
            (False, False),
            (False, True),
            (True, False),
            (True, True),
        ]

    def test_sum_lists_left_before_right(self) -> None:
        shape = Sum(Leaf(BOOL), Unit())
        assert enumerate_shape(shape) == [Left(False), Left(True), Right(())]
        assert shape_cardinality(shape) == 3

    def test_product_with_empty_side_is_empty(self) -> None:
        assert enumerate_shape(Product(Leaf(NEVER), Leaf(ORDERING))) == []
        assert enumerate_shape(Product(Leaf(ORDERING), Void())) == []
        assert shape_cardinality(Product(Leaf(ORDERING), Void())) == 0

    def test_counts_multiply_and_add(self) -> None:
        shape = Sum(Product(Leaf(BOOL), Leaf(ORDERING)), Leaf(BOOL))
        assert shape_cardinality(shape) == 2 * 3 + 2
        assert len(enumerate_shape(shape)) == shape_cardinality(shape)


class TestLargeLeaves:
    def test_cardinality_works_without_enumerating(self) -> None:
        assert shape_cardinality(Product(Leaf(INT32), Leaf(BOOL))) == 2**33
        assert shape_cardinality(Product(Leaf(UINT64), Leaf(UINT64))) == 2**128

    def test_enumeration_is_rejected_up_front(self) -> None:
        with pytest.raises(LargeTypeError) as exc_info:
            enumerate_shape(Sum(Leaf(BOOL), Leaf(INT32)))
        assert exc_info.value.name == "int32"
        assert exc_info.value.cardinality == 2**32


class TestPowerSet:
    def test_empty(self) -> None:
        assert power_set([]) == [frozenset()]

    def test_bool_order(self) -> None:
        assert power_set([False, True]) == [
            frozenset(),
            frozenset({False}),
            frozenset({False, True}),
            frozenset({True}),
        ]

    def test_depth_first_inclusion_order(self) -> None:
        subsets = power_set([1, 2, 3])
        assert subsets == [
            frozenset(),
            frozenset({1}),
            frozenset({1, 2}),
            frozenset({1, 2, 3}),
            frozenset({1, 3}),
            frozenset({2}),
            frozenset({2, 3}),
            frozenset({3}),
        ]
        assert len(subsets) == power_set_cardinality(3)

    def test_cardinality_is_exact_for_large_bases(self) -> None:
        assert power_set_cardinality(200) == 2**200


class TestCancellation:
    def test_checkpoint_is_noop_outside_guarded_runs(self) -> None:
        checkpoint()

    def test_set_event_stops_enumeration(self) -> None:
        event = threading.Event()
        event.set()
        with cancellable(event):
            with pytest.raises(EnumerationCancelled):
                enumerate_shape(Product(Leaf(BOOL), Leaf(BOOL)))

    def test_unset_event_does_not_interfere(self) -> None:
        with cancellable(threading.Event()):
            assert len(enumerate_shape(Product(Leaf(BOOL), Leaf(BOOL)))) == 4

    def test_event_is_scoped_to_the_block(self) -> None:
        event = threading.Event()
        event.set()
        with cancellable(event):
            pass
        checkpoint()
