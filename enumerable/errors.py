"""Exception hierarchy for enumeration and derivation failures.

Size rejections and missed deadlines are not errors: they are returned as
ordinary values by `enumerable.guards`. The exceptions here cover types that
cannot be enumerated at all, or adapters that violate their contract.
"""

from __future__ import annotations


class EnumerationError(Exception):
    """Base class for all errors raised by this package."""


class StructuralError(EnumerationError, TypeError):
    """A type whose structure cannot be enumerated.

    Raised while building a shape or an adapter: the type is infinite,
    unsupported, self-referential, or the adapter breaks the
    duplicate-free / terminating contract.
    """


class LargeTypeError(EnumerationError, TypeError):
    """A countable-only type was passed where enumeration is required.

    Attributes:
        name: Display name of the offending type or leaf.
        cardinality: Its cardinality, when known.
    """

    def __init__(self, name: str, cardinality: int | None = None) -> None:
        self.name = name
        self.cardinality = cardinality
        detail = f" (cardinality {cardinality:,})" if cardinality is not None else ""
        super().__init__(
            f"Type '{name}' is marked too large to enumerate{detail}. "
            "Use cardinality() to size it instead."
        )


class EnumerationCancelled(EnumerationError):
    """Raised inside an abandoned worker once its deadline has passed."""
