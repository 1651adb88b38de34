"""Public entry points: enumerate and count finite types.

Every function accepts either an adapter instance or a type annotation; types
are resolved structurally (see `enumerable.derive.resolve`).

Example:
    >>> from dataclasses import dataclass
    >>> from typing import Optional
    >>> @dataclass(frozen=True)
    ... class Flags:
    ...     read: bool
    ...     write: bool
    >>> cardinality(Flags)
    4
    >>> enumerated(Optional[bool])
    [False, True, None]
"""

from __future__ import annotations

from typing import Any, List, NoReturn, Type, TypeVar, overload

from enumerable.derive.resolve import (
    ADAPTER_ATTRIBUTE,
    DERIVED_MARKER,
    derive_structure,
    resolve,
)
from enumerable.errors import LargeTypeError
from enumerable.logging import get_logger
from enumerable.primitives.strategies import Large
from enumerable.types.base import Cardinality, Countable, Enumerable, is_enumerable

logger = get_logger(__name__)

T = TypeVar("T")
C = TypeVar("C", bound=type)


def countable(tp: Any) -> Countable[Any]:
    """Return the adapter for `tp`; it may be countable-only.

    Raises:
        StructuralError: If `tp` is infinite, unsupported, or self-referential.
    """
    return resolve(tp)


@overload
def enumerable(tp: Large[Any]) -> NoReturn: ...
@overload
def enumerable(tp: Enumerable[T]) -> Enumerable[T]: ...
@overload
def enumerable(tp: Type[T]) -> Enumerable[T]: ...
@overload
def enumerable(tp: Any) -> Enumerable[Any]: ...


def enumerable(tp: Any) -> Enumerable[Any]:
    """Return an adapter that can list every value of `tp`.

    Raises:
        LargeTypeError: If `tp` is, or contains, a countable-only type.
        StructuralError: If `tp` is infinite, unsupported, or self-referential.
    """
    adapter = resolve(tp)
    if not is_enumerable(adapter):
        raise LargeTypeError(adapter.name, adapter.cardinality())
    return adapter  # type: ignore[return-value]


@overload
def enumerated(tp: Large[Any]) -> NoReturn: ...
@overload
def enumerated(tp: Enumerable[T]) -> List[T]: ...
@overload
def enumerated(tp: Type[T]) -> List[T]: ...
@overload
def enumerated(tp: Any) -> List[Any]: ...


def enumerated(tp: Any) -> List[Any]:
    """Return every value of `tp` in structural order, as a new list.

    Sum alternatives appear in declaration order and record fields vary with
    the last field fastest.

    Raises:
        LargeTypeError: If `tp` is, or contains, a countable-only type. Nothing
            is materialized in that case.
        StructuralError: If `tp` is infinite, unsupported, or self-referential.
    """
    adapter = enumerable(tp)
    values = adapter.enumerated()
    logger.debug(f"Enumerated {adapter.name}: {len(values)} values")
    return values


def cardinality(tp: Any) -> Cardinality:
    """Return the number of values of `tp` without listing them.

    Works for countable-only types as well.
    """
    return resolve(tp).cardinality()


def derive_enumerable(cls: C) -> C:
    """Class decorator deriving `enumerated()` and `cardinality()` classmethods.

    The class must be an ``Enum``, a dataclass or a ``NamedTuple``. Its
    structure is checked when the decorator runs, so an unbounded or
    self-referential field fails at class definition time::

        @derive_enumerable
        @dataclass(frozen=True)
        class Pixel:
            color: Color
            lit: bool

        Pixel.cardinality()  # 2 * len(Color)

    Subclasses are derived again from their own structure.

    Raises:
        StructuralError: If the class structure cannot be enumerated.
    """
    adapter = derive_structure(cls)
    setattr(cls, ADAPTER_ATTRIBUTE, adapter)

    def _enumerated(klass: Any) -> List[Any]:
        return enumerated(klass)

    def _cardinality(klass: Any) -> Cardinality:
        return cardinality(klass)

    for function in (_enumerated, _cardinality):
        setattr(function, DERIVED_MARKER, True)
    _enumerated.__doc__ = f"Every value of {cls.__qualname__}, in structural order."
    _cardinality.__doc__ = f"Number of values of {cls.__qualname__}."
    setattr(cls, "enumerated", classmethod(_enumerated))
    setattr(cls, "cardinality", classmethod(_cardinality))
    logger.debug(f"Derived enumerated()/cardinality() for {cls.__qualname__}")
    return cls
