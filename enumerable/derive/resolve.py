"""Shape builder: derive an adapter from a Python type annotation.

`resolve()` reads a type's declared structure (dataclass fields, NamedTuple
fields, Enum members, ``Union`` arms, ``tuple`` items, ``Literal`` values) and
returns the adapter for it. Composite types get a `Derived` adapter whose
shape inlines the shapes of their parts, so the engine walks one tree down to
the primitive leaves.

Supported forms, in the order they are tried:

* adapter instances (`Countable`), returned unchanged
* ``Annotated[X, adapter]``: the last adapter in the metadata wins
* ``bool``, ``None``, ``typing.Never``
* ``NewType`` and ``type X = ...`` aliases
* ``Literal[...]``
* ``Union[...]`` / ``Optional[...]`` / ``X | Y``
* ``tuple[A, B, ...]`` and ``frozenset[X]``
* classes carrying an adapter from ``@derive_enumerable``, or declaring an
  ``enumerated()`` classmethod
* ``Flag`` subclasses (every member combination), ``Enum`` subclasses,
  dataclasses and ``NamedTuple`` classes

Types reached again while they are still being resolved are self-referential
and rejected with `StructuralError`, as are unbounded builtins like ``int`` and
unions whose arms share a value.
"""

from __future__ import annotations

import dataclasses
import types
import typing
from enum import Enum, Flag
from typing import (
    Annotated,
    Any,
    Callable,
    List,
    Literal,
    NoReturn,
    Tuple,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from enumerable.errors import StructuralError
from enumerable.logging import get_logger
from enumerable.derive.generic import (
    Matcher,
    Representation,
    derive,
    leaf_representation,
    power_set_of,
    record_representation,
    variant_representation,
)
from enumerable.primitives.catalog import BOOL, NEVER, NONE
from enumerable.primitives.strategies import Large, LiteralList, from_enum, from_flag
from enumerable.shape.algebra import Labeled
from enumerable.types.base import Cardinality, Countable, Enumerable, is_enumerable

logger = get_logger(__name__)

#: Attribute under which ``@derive_enumerable`` stores a class's adapter.
ADAPTER_ATTRIBUTE = "__enumerable__"

#: Dataclass field metadata key overriding the adapter for one field.
FIELD_METADATA_KEY = "enumerable"

_UNBOUNDED_BUILTINS = (
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    list,
    dict,
    set,
    tuple,
    frozenset,
)

#: Marker set on the classmethods installed by ``@derive_enumerable``.
DERIVED_MARKER = "_enumerable_derived"

_NEVER_FORMS = (typing.Never, typing.NoReturn)


def resolve(tp: Any) -> Countable[Any]:
    """Return the adapter for `tp`, deriving it from its structure if needed.

    Args:
        tp: A type, type annotation, or adapter instance.

    Returns:
        An `Enumerable` when every leaf can be listed, otherwise a
        countable-only adapter.

    Raises:
        StructuralError: If `tp` is infinite, unsupported, or self-referential.
    """
    return _resolve(tp, ())


def derive_structure(cls: type) -> Countable[Any]:
    """Derive an adapter for `cls` from its declared fields or members.

    Unlike `resolve`, ignores any adapter already attached to the class, so
    decorators can call it while building that adapter.
    """
    return _resolve_class(cls, (cls,), allow_declared=False)


class Declared(Enumerable[Any]):
    """Adapter for a class that lists its own values.

    The class provides an ``enumerated()`` classmethod and optionally a
    ``cardinality()`` classmethod; without one the count is the list length.
    """

    def __init__(self, cls: type) -> None:
        self.name = _type_name(cls)
        self.cls = cls

    def enumerated(self) -> List[Any]:
        return list(self.cls.enumerated())  # type: ignore[attr-defined]

    def cardinality(self) -> Cardinality:
        declared = getattr(self.cls, "cardinality", None)
        if callable(declared):
            return int(declared())
        return len(self.enumerated())


def _resolve(tp: Any, stack: Tuple[Any, ...]) -> Countable[Any]:
    if isinstance(tp, Countable):
        return tp
    if _in_stack(tp, stack):
        chain = " -> ".join(_type_name(t) for t in stack + (tp,))
        raise StructuralError(
            f"Cannot enumerate self-referential type {_type_name(tp)}: {chain}"
        )
    stack = stack + (tp,)
    origin = get_origin(tp)

    if origin is Annotated:
        base, *metadata = get_args(tp)
        for item in reversed(metadata):
            if isinstance(item, Countable):
                return item
        return _resolve(base, stack)
    if tp is bool:
        return BOOL
    if tp is None or tp is type(None):
        return NONE
    if any(tp is form for form in _NEVER_FORMS):
        return NEVER
    if isinstance(tp, typing.NewType):
        return _resolve(tp.__supertype__, stack)
    if isinstance(tp, typing.TypeAliasType):
        return _resolve(tp.__value__, stack)
    if origin is Literal:
        return LiteralList(_type_name(tp), get_args(tp))
    if origin is Union or origin is types.UnionType:
        return _resolve_union(tp, stack)
    if origin is tuple:
        return _resolve_tuple(tp, stack)
    if origin is frozenset:
        (element,) = get_args(tp)
        return power_set_of(_resolve(element, stack))
    if isinstance(tp, type) and origin is None:
        return _resolve_class(tp, stack, allow_declared=True)
    raise StructuralError(
        f"Cannot enumerate {_type_name(tp)}: unsupported type form"
    )


def _resolve_class(
    cls: type, stack: Tuple[Any, ...], allow_declared: bool
) -> Countable[Any]:
    name = _type_name(cls)
    if allow_declared:
        attached = cls.__dict__.get(ADAPTER_ATTRIBUTE)
        if isinstance(attached, Countable):
            return attached
        declared = getattr(cls, "enumerated", None)
        if callable(declared) and not getattr(declared, DERIVED_MARKER, False):
            logger.debug(f"Using declared enumerated() of {name}")
            return Declared(cls)
    if issubclass(cls, Flag):
        return from_flag(cls)
    if issubclass(cls, Enum):
        return from_enum(cls)
    if dataclasses.is_dataclass(cls):
        fields = [
            (f.name, _field_representation(cls, f.name, hint, f.metadata, stack))
            for f, hint in _dataclass_fields(cls)
        ]
        return _derive_record(name, cls, fields, positional=False)
    if issubclass(cls, tuple) and hasattr(cls, "_fields"):
        hints = _type_hints(cls)
        fields = [
            (name_, _field_representation(cls, name_, hints[name_], {}, stack))
            for name_ in cls._fields  # type: ignore[attr-defined]
        ]
        return _derive_record(name, cls, fields, positional=True)
    if cls in (object, type) or issubclass(cls, _UNBOUNDED_BUILTINS):
        raise StructuralError(f"Cannot enumerate {name}: the type is unbounded")
    raise StructuralError(
        f"Cannot enumerate {name}: no enumerable structure. Make it a dataclass, "
        "NamedTuple or Enum, or declare an enumerated() classmethod"
    )


def _dataclass_fields(cls: type) -> List[Tuple[dataclasses.Field, Any]]:
    hints = _type_hints(cls)
    return [
        (f, hints.get(f.name, f.type)) for f in dataclasses.fields(cls) if f.init
    ]


def _field_representation(
    owner: type,
    field_name: str,
    annotation: Any,
    metadata: typing.Mapping[str, Any],
    stack: Tuple[Any, ...],
) -> Representation[Any]:
    override = metadata.get(FIELD_METADATA_KEY)
    if override is not None:
        if not isinstance(override, Countable):
            raise StructuralError(
                f"{_type_name(owner)}.{field_name}: metadata[{FIELD_METADATA_KEY!r}] "
                f"must be an adapter, got {type(override).__name__}"
            )
        return _as_representation(override)
    try:
        return _representation(annotation, stack)
    except StructuralError as exc:
        raise StructuralError(f"{_type_name(owner)}.{field_name}: {exc}") from exc


def _derive_record(
    name: str,
    constructor: Callable[..., Any],
    fields: List[Tuple[str, Representation[Any]]],
    positional: bool,
) -> Countable[Any]:
    rep = record_representation(name, constructor, fields, positional=positional)
    labeled = Representation(
        Labeled(rep.shape, "datatype", name), rep.to_value, rep.from_value
    )
    return derive(name, labeled)


def _resolve_union(tp: Any, stack: Tuple[Any, ...]) -> Countable[Any]:
    name = _type_name(tp)
    arms = get_args(tp)
    adapters = [_resolve(arm, stack) for arm in arms]
    _check_disjoint(name, arms, adapters)
    alternatives = [
        (_as_representation(adapter), _matcher(arm))
        for arm, adapter in zip(arms, adapters)
    ]
    return derive(name, variant_representation(name, alternatives))


def _check_disjoint(
    name: str, arms: Tuple[Any, ...], adapters: List[Countable[Any]]
) -> None:
    """Reject a union in which two arms share a value (compared with ``==``).

    Listed values are checked against each other and against the membership
    test of any `Large` arm. Two countable-only arms cannot be compared.
    """
    owners: typing.Dict[Any, int] = {}
    unhashable: List[Tuple[Any, int]] = []
    for index, adapter in enumerate(adapters):
        if not is_enumerable(adapter):
            continue
        for value in adapter.enumerated():  # type: ignore[attr-defined]
            try:
                owner = owners.setdefault(value, index)
            except TypeError:
                owner = next((o for v, o in unhashable if v == value), index)
                unhashable.append((value, index))
            if owner != index:
                _overlap(name, value, arms[owner], arms[index])
    listed = list(owners.items()) + unhashable
    for index, adapter in enumerate(adapters):
        if not isinstance(adapter, Large) or adapter.contains is None:
            continue
        for value, owner in listed:
            if adapter.contains(value):
                _overlap(name, value, arms[owner], arms[index])


def _overlap(name: str, value: Any, first: Any, second: Any) -> NoReturn:
    raise StructuralError(
        f"Cannot enumerate {name}: {value!r} is a value of both "
        f"{_type_name(first)} and {_type_name(second)}"
    )


def _resolve_tuple(tp: Any, stack: Tuple[Any, ...]) -> Countable[Any]:
    name = _type_name(tp)
    items = get_args(tp)
    if len(items) == 2 and items[1] is Ellipsis:
        raise StructuralError(
            f"Cannot enumerate {name}: variable-length tuples are unbounded"
        )
    fields = [
        (f"item{i}", _representation(item, stack)) for i, item in enumerate(items)
    ]
    return _derive_record(name, _make_tuple, fields, positional=True)


def _make_tuple(*values: Any) -> tuple:
    return tuple(values)


def _representation(tp: Any, stack: Tuple[Any, ...]) -> Representation[Any]:
    return _as_representation(_resolve(tp, stack))


def _as_representation(adapter: Countable[Any]) -> Representation[Any]:
    # Derived adapters are inlined so the engine sees one shape tree.
    representation = getattr(adapter, "representation", None)
    if isinstance(representation, Representation):
        return representation
    return leaf_representation(adapter)


def _matcher(arm: Any) -> Matcher:
    """Return a predicate recognizing values of one ``Union`` arm."""
    origin = get_origin(arm)
    if origin is Annotated:
        return _matcher(get_args(arm)[0])
    if arm is None or arm is type(None):
        return lambda value: value is None
    if arm is bool:
        return lambda value: type(value) is bool
    if isinstance(arm, typing.NewType):
        return _matcher(arm.__supertype__)
    if isinstance(arm, typing.TypeAliasType):
        return _matcher(arm.__value__)
    if origin is Literal:
        literals = get_args(arm)
        return lambda value: any(
            type(value) is type(literal) and value == literal for literal in literals
        )
    if origin is tuple:
        arity = len(get_args(arm))
        return lambda value: type(value) is tuple and len(value) == arity
    if origin is frozenset:
        return lambda value: isinstance(value, frozenset)
    if arm in _UNBOUNDED_BUILTINS:
        # Exact type: an IntEnum member is not an int arm value
        return lambda value: type(value) is arm
    if isinstance(arm, type):
        return lambda value: isinstance(value, arm)
    adapter = resolve(arm)
    if is_enumerable(adapter):
        values = adapter.enumerated()  # type: ignore[attr-defined]
        return lambda value: value in values
    raise StructuralError(
        f"Cannot recognize values of {_type_name(arm)} in a union"
    )


def _type_hints(cls: type) -> typing.Dict[str, Any]:
    try:
        # The class name must resolve inside its own annotations
        return get_type_hints(
            cls, localns={cls.__name__: cls}, include_extras=True
        )
    except NameError as exc:
        raise StructuralError(
            f"Cannot resolve annotations of {_type_name(cls)}: {exc}"
        ) from exc


def _in_stack(tp: Any, stack: Tuple[Any, ...]) -> bool:
    for seen in stack:
        if seen is tp:
            return True
        try:
            if seen == tp:
                return True
        except TypeError:
            continue
    return False


def _type_name(tp: Any) -> str:
    if isinstance(tp, type) and get_origin(tp) is None:
        return tp.__qualname__
    return repr(tp).replace("typing.", "")
