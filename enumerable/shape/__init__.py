"""Shape algebra and the structural derivation engine."""

from enumerable.shape.algebra import (
    Labeled,
    Leaf,
    Left,
    Product,
    Right,
    Shape,
    Sum,
    Unit,
    Void,
    describe_shape,
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

__all__ = [
    "Labeled",
    "Leaf",
    "Left",
    "Product",
    "Right",
    "Shape",
    "Sum",
    "Unit",
    "Void",
    "describe_shape",
    "is_enumerable_shape",
    "product_of",
    "sum_of",
    "enumerate_shape",
    "power_set",
    "power_set_cardinality",
    "shape_cardinality",
]
