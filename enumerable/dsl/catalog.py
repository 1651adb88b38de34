"""Build Python types from a validated catalog document.

Each declaration becomes a real Python type that the rest of the package
resolves structurally:

* ``enum``: an `enum.Enum` whose member values are the member names.
* ``record``: a frozen dataclass built with `dataclasses.make_dataclass`.
* ``variant``: one frozen dataclass per constructor, combined with
  ``Union`` in declaration order (``Never`` when there are no constructors).

References between declarations form a dependency graph (a
`networkx.DiGraph` with an edge from each type to the types that use it).
Types are built in topological order; a reference cycle would make a type
infinite and is rejected.
"""

from __future__ import annotations

import keyword
from dataclasses import dataclass, field, make_dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Dict, List, Literal, Never, Optional, Union

import networkx as nx

from enumerable.dsl.loader import load_catalog_yaml
from enumerable.errors import StructuralError
from enumerable.logging import get_logger
from enumerable.primitives.catalog import (
    Char,
    Int8,
    Int16,
    Ordering,
    UInt8,
    UInt16,
)
from enumerable.primitives.large import Int32, Int64, UInt32, UInt64
from enumerable.primitives.strategies import BoundedOrdinal, from_literal

logger = get_logger(__name__)

DeclarationKind = Literal["enum", "record", "variant"]

#: Type names every catalog can reference without declaring them.
BUILTIN_TYPES: Dict[str, Any] = {
    "bool": bool,
    "none": None,
    "int8": Int8,
    "uint8": UInt8,
    "int16": Int16,
    "uint16": UInt16,
    "char": Char,
    "ordering": Ordering,
    "int32": Int32,
    "uint32": UInt32,
    "int64": Int64,
    "uint64": UInt64,
}


@dataclass
class TypeCatalog:
    """Named Python types built from a catalog document.

    Attributes:
        types: Built type (or type annotation) per declared name, in
            declaration order.
        kinds: Declaration kind per name.
        graph: Dependency graph; an edge ``A -> B`` means ``B`` uses ``A``.
        constructors: Constructor classes per variant name, in order.
    """

    types: Dict[str, Any] = field(default_factory=dict)
    kinds: Dict[str, DeclarationKind] = field(default_factory=dict)
    graph: nx.DiGraph = field(default_factory=nx.DiGraph)
    constructors: Dict[str, List[type]] = field(default_factory=dict)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "TypeCatalog":
        """Parse, validate and build a catalog from YAML text."""
        return build_catalog(load_catalog_yaml(yaml_str))

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "TypeCatalog":
        """Read a catalog file and build it.

        Raises:
            FileNotFoundError: If `path` does not exist.
        """
        return cls.from_yaml(Path(path).read_text(encoding="utf-8"))

    def get(self, name: str) -> Any:
        """Return the type declared as `name`.

        Raises:
            KeyError: If no type of that name is declared.
        """
        try:
            return self.types[name]
        except KeyError:
            raise KeyError(
                f"Unknown type '{name}'. Declared types: {', '.join(self.names())}"
            ) from None

    def names(self) -> List[str]:
        """Return the declared type names, in declaration order."""
        return list(self.types)

    def kind(self, name: str) -> DeclarationKind:
        """Return whether `name` was declared as an enum, record or variant."""
        self.get(name)
        return self.kinds[name]

    def dependencies(self, name: str, transitive: bool = False) -> List[str]:
        """Return the declared types that `name` refers to.

        Args:
            name: Declared type name.
            transitive: Include indirect dependencies as well.

        Returns:
            Names in declaration order; builtin types are not included.
        """
        self.get(name)
        if transitive:
            used = nx.ancestors(self.graph, name)
        else:
            used = set(self.graph.predecessors(name))
        return [n for n in self.types if n in used]

    def __contains__(self, name: object) -> bool:
        return name in self.types

    def __len__(self) -> int:
        return len(self.types)


def build_catalog(data: Dict[str, Any]) -> TypeCatalog:
    """Build every declaration of a validated catalog document.

    Args:
        data: Output of `load_catalog_yaml`.

    Returns:
        The populated `TypeCatalog`.

    Raises:
        ValueError: On invalid names or references to undeclared types.
        StructuralError: If declarations refer to each other in a cycle, or a
            literal or range is malformed.
    """
    declarations: Dict[str, Dict[str, Any]] = data.get("types", {}) or {}
    catalog = TypeCatalog()

    graph = catalog.graph
    for name in declarations:
        _check_name(name, f"type name '{name}'")
        if name in BUILTIN_TYPES:
            raise ValueError(f"Type '{name}' shadows a builtin type name")
        graph.add_node(name)
    for name, declaration in declarations.items():
        for referenced in _references(declaration):
            if referenced in BUILTIN_TYPES:
                continue
            if referenced not in declarations:
                raise ValueError(
                    f"Unknown type '{referenced}' referenced by '{name}'"
                )
            graph.add_edge(referenced, name)

    if not nx.is_directed_acyclic_graph(graph):
        cycle = [source for source, _ in nx.find_cycle(graph)]
        chain = " -> ".join(cycle + [cycle[0]])
        raise StructuralError(f"Cannot enumerate self-referential types: {chain}")

    built: Dict[str, Any] = {}
    for name in nx.lexicographical_topological_sort(graph):
        kind, body = next(iter(declarations[name].items()))
        built[name] = _build(name, kind, body, built, catalog)
        catalog.kinds[name] = kind
        logger.debug(f"Built {kind} type {name}")

    # Keep declaration order for listing
    catalog.types = {name: built[name] for name in declarations}
    logger.info(f"Built catalog with {len(catalog.types)} types")
    return catalog


def _build(
    name: str,
    kind: str,
    body: Any,
    built: Dict[str, Any],
    catalog: TypeCatalog,
) -> Any:
    if kind == "enum":
        for member in body:
            _check_name(member, f"member '{member}' of {name}")
        return Enum(name, [(member, member) for member in body])
    if kind == "record":
        return _record_class(name, name, body, built)
    constructors = [
        _record_class(f"{name}.{ctor}", ctor, fields, built)
        for ctor, fields in body.items()
    ]
    catalog.constructors[name] = constructors
    if not constructors:
        return Never
    return Union[tuple(constructors)]


def _record_class(
    owner: str, class_name: str, fields: Dict[str, Any], built: Dict[str, Any]
) -> type:
    _check_name(class_name, f"constructor name '{class_name}' of {owner}")
    field_specs = []
    for field_name, expression in fields.items():
        _check_name(field_name, f"field '{field_name}' of {owner}")
        field_specs.append((field_name, _annotation(expression, built, owner)))
    cls = make_dataclass(class_name, field_specs, frozen=True)
    cls.__qualname__ = owner
    return cls


def _annotation(expression: Any, built: Dict[str, Any], owner: str) -> Any:
    """Translate a catalog type expression into a type annotation."""
    if isinstance(expression, str):
        if expression in BUILTIN_TYPES:
            return BUILTIN_TYPES[expression]
        return built[expression]
    if "optional" in expression:
        inner = expression["optional"]
        if isinstance(inner, dict) and None in inner.get("literal", ()):
            raise StructuralError(
                f"{owner}: optional literal {inner['literal']!r} already holds null"
            )
        return Optional[_annotation(inner, built, owner)]
    if "set" in expression:
        return frozenset[_annotation(expression["set"], built, owner)]
    if "tuple" in expression:
        items = tuple(_annotation(item, built, owner) for item in expression["tuple"])
        return tuple[items]
    if "literal" in expression:
        values = tuple(expression["literal"])
        try:
            adapter = from_literal(*values)
        except StructuralError as exc:
            raise StructuralError(f"{owner}: {exc}") from exc
        return Annotated[Literal[values], adapter]
    low, high = expression["range"]
    try:
        adapter = BoundedOrdinal(f"range[{low}, {high}]", low, high)
    except StructuralError as exc:
        raise StructuralError(f"{owner}: {exc}") from exc
    return Annotated[int, adapter]


def _references(declaration: Dict[str, Any]) -> List[str]:
    kind, body = next(iter(declaration.items()))
    if kind == "enum":
        return []
    if kind == "record":
        expressions = list(body.values())
    else:
        expressions = [e for fields in body.values() for e in fields.values()]
    names: List[str] = []
    stack = list(reversed(expressions))
    while stack:
        expression = stack.pop()
        if isinstance(expression, str):
            names.append(expression)
        elif "tuple" in expression:
            stack.extend(reversed(expression["tuple"]))
        elif "optional" in expression:
            stack.append(expression["optional"])
        elif "set" in expression:
            stack.append(expression["set"])
    return names


def _check_name(name: Any, what: str) -> None:
    if (
        not isinstance(name, str)
        or not name.isidentifier()
        or keyword.iskeyword(name)
        or name.startswith("_")
    ):
        raise ValueError(f"Invalid {what}: names must be identifiers")
