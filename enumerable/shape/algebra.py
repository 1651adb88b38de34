"""Shape algebra: the generic sum-of-products view of a finite type.

Every derivable type is described, for enumeration purposes, by a tree of
these six node kinds. The tree is closed: the engine dispatches on exactly
these classes and nothing else.

Shape-level values are encoded as:

* ``()`` for `Unit`
* ``(left, right)`` pairs for `Product`
* `Left` / `Right` wrappers for `Sum`
* the leaf's own values for `Leaf`

`Labeled` adds names only; it never changes values or counts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, List, Literal, Sequence, TypeVar, Union

from enumerable.types.base import Countable, is_enumerable

T = TypeVar("T")

LabelKind = Literal["datatype", "constructor", "field"]

#: The single shape-level value of `Unit`.
UNIT_VALUE: tuple = ()


@dataclass(frozen=True)
class Unit:
    """Exactly one value carrying no data."""


@dataclass(frozen=True)
class Void:
    """No values at all."""


@dataclass(frozen=True)
class Leaf:
    """A primitive or previously derived type.

    Attributes:
        source: Adapter supplying the leaf's values and count.
    """

    source: Countable


@dataclass(frozen=True)
class Product:
    """Two independent fields; values are ``(left, right)`` pairs."""

    left: "Shape"
    right: "Shape"


@dataclass(frozen=True)
class Sum:
    """A tagged choice; values are `Left` or `Right` wrappers."""

    left: "Shape"
    right: "Shape"


@dataclass(frozen=True)
class Labeled:
    """Metadata around a shape (type, constructor or field name).

    Attributes:
        inner: The annotated shape.
        kind: What the name denotes.
        name: The name itself.
    """

    inner: "Shape"
    kind: LabelKind
    name: str


Shape = Union[Unit, Void, Leaf, Product, Sum, Labeled]


@dataclass(frozen=True)
class Left(Generic[T]):
    """Shape-level value tagged as coming from the left of a `Sum`."""

    value: T


@dataclass(frozen=True)
class Right(Generic[T]):
    """Shape-level value tagged as coming from the right of a `Sum`."""

    value: T


def product_of(shapes: Sequence[Shape]) -> Shape:
    """Chain shapes into a right-nested `Product`.

    ``[a, b, c]`` becomes ``Product(a, Product(b, c))``; a single shape is
    returned as is and no shapes at all is `Unit`.
    """
    if not shapes:
        return Unit()
    result = shapes[-1]
    for shape in reversed(shapes[:-1]):
        result = Product(shape, result)
    return result


def sum_of(shapes: Sequence[Shape]) -> Shape:
    """Chain shapes into a right-nested `Sum`; no shapes at all is `Void`."""
    if not shapes:
        return Void()
    result = shapes[-1]
    for shape in reversed(shapes[:-1]):
        result = Sum(shape, result)
    return result


def iter_leaves(shape: Shape) -> List[Leaf]:
    """Return the leaves of `shape`, left to right."""
    leaves: List[Leaf] = []
    stack: List[Shape] = [shape]
    while stack:
        node = stack.pop()
        if isinstance(node, Leaf):
            leaves.append(node)
        elif isinstance(node, (Product, Sum)):
            stack.append(node.right)
            stack.append(node.left)
        elif isinstance(node, Labeled):
            stack.append(node.inner)
    return leaves


def is_enumerable_shape(shape: Shape) -> bool:
    """Return False when any leaf is countable-only (too large to list)."""
    return all(is_enumerable(leaf.source) for leaf in iter_leaves(shape))


def describe_shape(shape: Shape, indent: int = 0) -> str:
    """Render `shape` as an indented tree, one node per line.

    Example:
        >>> shape = Labeled(Product(Leaf(BOOL), Unit()), "constructor", "P")
        >>> print(describe_shape(shape))
        constructor P
          product
            leaf bool
            unit
    """
    pad = "  " * indent
    if isinstance(shape, Unit):
        return f"{pad}unit"
    if isinstance(shape, Void):
        return f"{pad}void"
    if isinstance(shape, Leaf):
        return f"{pad}leaf {shape.source.name}"
    if isinstance(shape, Labeled):
        return f"{pad}{shape.kind} {shape.name}\n" + describe_shape(
            shape.inner, indent + 1
        )
    if isinstance(shape, Product):
        label = "product"
    elif isinstance(shape, Sum):
        label = "sum"
    else:
        raise TypeError(f"Not a shape: {shape!r}")
    return "\n".join(
        [
            f"{pad}{label}",
            describe_shape(shape.left, indent + 1),
            describe_shape(shape.right, indent + 1),
        ]
    )

