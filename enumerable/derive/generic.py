"""Isomorphisms between concrete types and their shapes.

A `Representation` pairs a shape with two conversions: `to_value` turns a
shape-level value (nested pairs, `Left`/`Right` tags) into a value of the
concrete type, and `from_value` goes back. `Derived` then exposes the engine's
results for the shape as an `Enumerable` of concrete values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Sequence, Tuple, TypeVar

from enumerable.errors import StructuralError
from enumerable.logging import get_logger
from enumerable.primitives.strategies import check_distinct
from enumerable.shape.algebra import (
    UNIT_VALUE,
    Labeled,
    Leaf,
    Left,
    Right,
    Shape,
    is_enumerable_shape,
    product_of,
    sum_of,
)
from enumerable.shape.engine import (
    enumerate_shape,
    power_set,
    power_set_cardinality,
    shape_cardinality,
)
from enumerable.types.base import Cardinality, Countable, Enumerable, is_enumerable

logger = get_logger(__name__)

T = TypeVar("T")

#: Predicate telling whether a concrete value belongs to one alternative.
Matcher = Callable[[Any], bool]


@dataclass(frozen=True)
class Representation(Generic[T]):
    """A shape together with conversions to and from concrete values.

    Attributes:
        shape: Generic structure of the type.
        to_value: Shape-level value -> concrete value.
        from_value: Concrete value -> shape-level value.
    """

    shape: Shape
    to_value: Callable[[Any], T]
    from_value: Callable[[T], Any]


def nest_product(values: Sequence[Any]) -> Any:
    """Encode field values as the right-nested pairs `product_of` expects."""
    if not values:
        return UNIT_VALUE
    result = values[-1]
    for value in reversed(values[:-1]):
        result = (value, result)
    return result


def unnest_product(value: Any, arity: int) -> List[Any]:
    """Decode right-nested pairs back into `arity` field values."""
    if arity == 0:
        return []
    fields: List[Any] = []
    for _ in range(arity - 1):
        head, value = value
        fields.append(head)
    fields.append(value)
    return fields


def inject_sum(index: int, count: int, value: Any) -> Any:
    """Tag `value` as alternative `index` of a right-nested `sum_of` chain."""
    if count == 1:
        return value
    if index == 0:
        return Left(value)
    return Right(inject_sum(index - 1, count - 1, value))


def project_sum(value: Any, count: int) -> Tuple[int, Any]:
    """Return ``(index, untagged value)`` for a value of a `sum_of` chain."""
    index = 0
    while count > 1:
        if isinstance(value, Left):
            return index, value.value
        value = value.value
        index += 1
        count -= 1
    return index, value


def leaf_representation(source: Countable[T]) -> Representation[T]:
    """Representation of a primitive: the leaf's own values, unchanged."""
    return Representation(Leaf(source), _identity, _identity)


def record_representation(
    name: str,
    constructor: Callable[..., T],
    fields: Sequence[Tuple[str, Representation[Any]]],
    positional: bool = False,
) -> Representation[T]:
    """Representation of a single-constructor type with named fields.

    Fields vary with the last one fastest.

    Args:
        name: Constructor name, used as the shape label.
        constructor: Called with the decoded field values.
        fields: ``(field name, field representation)`` in declaration order.
        positional: Call ``constructor(*values)`` instead of keywords; reading
            back then uses indexing (tuples, NamedTuples).
    """
    names = [field_name for field_name, _ in fields]
    reps = [rep for _, rep in fields]
    arity = len(fields)
    shape = Labeled(
        product_of([Labeled(rep.shape, "field", n) for n, rep in fields]),
        "constructor",
        name,
    )

    def to_value(encoded: Any) -> T:
        decoded = [
            rep.to_value(raw) for rep, raw in zip(reps, unnest_product(encoded, arity))
        ]
        if positional:
            return constructor(*decoded)
        return constructor(**dict(zip(names, decoded)))

    def from_value(value: T) -> Any:
        if positional:
            raw = [value[i] for i in range(arity)]  # type: ignore[index]
        else:
            raw = [getattr(value, n) for n in names]
        return nest_product([rep.from_value(v) for rep, v in zip(reps, raw)])

    return Representation(shape, to_value, from_value)


def variant_representation(
    name: str,
    alternatives: Sequence[Tuple[Representation[Any], Matcher]],
) -> Representation[Any]:
    """Representation of a choice between alternatives, in declaration order.

    Args:
        name: Datatype name, used as the shape label.
        alternatives: ``(representation, matcher)`` per alternative; the
            matcher tells `from_value` which alternative a value came from.
    """
    reps = [rep for rep, _ in alternatives]
    count = len(reps)
    shape = Labeled(sum_of([rep.shape for rep in reps]), "datatype", name)

    def to_value(encoded: Any) -> Any:
        index, inner = project_sum(encoded, count)
        return reps[index].to_value(inner)

    def from_value(value: Any) -> Any:
        for index, (rep, matches) in enumerate(alternatives):
            if matches(value):
                return inject_sum(index, count, rep.from_value(value))
        raise ValueError(f"{value!r} is not a value of {name}")

    return Representation(shape, to_value, from_value)


class Derived(Enumerable[T]):
    """Enumerable obtained from a representation through the engine."""

    def __init__(self, name: str, representation: Representation[T]) -> None:
        self.name = name
        self.representation = representation

    @property
    def shape(self) -> Shape:
        return self.representation.shape

    def enumerated(self) -> List[T]:
        to_value = self.representation.to_value
        return [to_value(encoded) for encoded in enumerate_shape(self.shape)]

    def cardinality(self) -> Cardinality:
        return shape_cardinality(self.shape)


class DerivedCountable(Countable[T]):
    """Countable-only twin of `Derived`, for shapes with a large leaf."""

    def __init__(self, name: str, representation: Representation[T]) -> None:
        self.name = name
        self.representation = representation

    @property
    def shape(self) -> Shape:
        return self.representation.shape

    def cardinality(self) -> Cardinality:
        return shape_cardinality(self.shape)


def derive(name: str, representation: Representation[T]) -> Countable[T]:
    """Return a `Derived` adapter, or `DerivedCountable` if a leaf is large."""
    if is_enumerable_shape(representation.shape):
        logger.debug(f"Derived enumerable adapter for {name}")
        return Derived(name, representation)
    logger.debug(f"Derived countable-only adapter for {name} (large leaf)")
    return DerivedCountable(name, representation)


class PowerSet(Enumerable[frozenset]):
    """Every subset of an enumerable element type, as frozensets.

    Cardinality is ``2 ** cardinality(element)`` without listing any subset.
    The element values are checked for distinctness when the adapter is built,
    so an illegal element type fails before it can be sized.
    """

    def __init__(self, element: Enumerable[Any]) -> None:
        self.name = f"frozenset[{element.name}]"
        self.element = element
        try:
            check_distinct(element.name, element.enumerated())
        except StructuralError as exc:
            raise StructuralError(
                f"{self.name}: element values are not distinct ({exc})"
            ) from exc

    def enumerated(self) -> List[frozenset]:
        return power_set(self.element.enumerated())

    def cardinality(self) -> Cardinality:
        return power_set_cardinality(self.element.cardinality())


class PowerSetCountable(Countable[frozenset]):
    """Power set of a countable-only element type; can only be sized."""

    def __init__(self, element: Countable[Any]) -> None:
        self.name = f"frozenset[{element.name}]"
        self.element = element

    def cardinality(self) -> Cardinality:
        return power_set_cardinality(self.element.cardinality())


def power_set_of(element: Countable[Any]) -> Countable[frozenset]:
    """Return the power-set adapter matching the element's capability."""
    if is_enumerable(element):
        return PowerSet(element)  # type: ignore[arg-type]
    return PowerSetCountable(element)


def _identity(value: Any) -> Any:
    return value
