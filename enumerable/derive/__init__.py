"""Structural derivation: from Python type annotations to adapters."""

from enumerable.derive.generic import (
    Derived,
    DerivedCountable,
    PowerSet,
    PowerSetCountable,
    Representation,
    derive,
    power_set_of,
    record_representation,
    variant_representation,
)
from enumerable.derive.resolve import (
    ADAPTER_ATTRIBUTE,
    FIELD_METADATA_KEY,
    Declared,
    derive_structure,
    resolve,
)

__all__ = [
    "ADAPTER_ATTRIBUTE",
    "FIELD_METADATA_KEY",
    "Declared",
    "Derived",
    "DerivedCountable",
    "PowerSet",
    "PowerSetCountable",
    "Representation",
    "derive",
    "derive_structure",
    "power_set_of",
    "record_representation",
    "resolve",
    "variant_representation",
]
