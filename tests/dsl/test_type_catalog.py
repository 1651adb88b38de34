"""Tests for building Python types from catalog declarations."""

from __future__ import annotations

import dataclasses
from enum import Enum
from pathlib import Path

import pytest

from enumerable import LargeTypeError, StructuralError, cardinality, enumerated
from enumerable.dsl import TypeCatalog
from enumerable.primitives import Ordering


@pytest.fixture
def catalog(sample_catalog_yaml: str) -> TypeCatalog:
    return TypeCatalog.from_yaml(sample_catalog_yaml)


def build(yaml_text: str) -> TypeCatalog:
    return TypeCatalog.from_yaml(yaml_text)


class TestSampleCatalog:
    def test_names_in_declaration_order(self, catalog: TypeCatalog) -> None:
        assert catalog.names() == ["Color", "Pixel", "Glyph"]
        assert len(catalog) == 3
        assert "Pixel" in catalog

    def test_kinds(self, catalog: TypeCatalog) -> None:
        kinds = [catalog.kind(n) for n in catalog.names()]
        assert kinds == ["enum", "record", "variant"]

    def test_enum_type(self, catalog: TypeCatalog) -> None:
        color = catalog.get("Color")
        assert issubclass(color, Enum)
        assert [m.name for m in color] == ["red", "green", "blue"]
        assert color.red.value == "red"

    def test_record_type(self, catalog: TypeCatalog) -> None:
        pixel = catalog.get("Pixel")
        assert dataclasses.is_dataclass(pixel)
        assert [f.name for f in dataclasses.fields(pixel)] == ["color", "lit"]
        assert cardinality(pixel) == 6
        first = enumerated(pixel)[0]
        assert first == pixel(color=catalog.get("Color").red, lit=False)

    def test_variant_type(self, catalog: TypeCatalog) -> None:
        glyph = catalog.get("Glyph")
        blank, mark = catalog.constructors["Glyph"]
        assert cardinality(glyph) == 1 + 6 * 4
        values = enumerated(glyph)
        assert values[0] == blank()
        assert values[1] == mark(
            pixel=catalog.get("Pixel")(color=catalog.get("Color").red, lit=False),
            weight=0,
        )
        assert mark.__qualname__ == "Glyph.Mark"

    def test_dependencies(self, catalog: TypeCatalog) -> None:
        assert catalog.dependencies("Color") == []
        assert catalog.dependencies("Glyph") == ["Pixel"]
        assert catalog.dependencies("Glyph", transitive=True) == ["Color", "Pixel"]

    def test_unknown_type(self, catalog: TypeCatalog) -> None:
        with pytest.raises(KeyError, match="Unknown type 'Nope'"):
            catalog.get("Nope")


def test_from_path(sample_catalog_path: Path) -> None:
    assert TypeCatalog.from_path(sample_catalog_path).names() == [
        "Color",
        "Pixel",
        "Glyph",
    ]


def test_declaration_order_does_not_matter() -> None:
    catalog = build(
        "types:\n"
        "  Outer:\n    record: {inner: Inner}\n"
        "  Inner:\n    enum: [a, b]\n"
    )
    assert cardinality(catalog.get("Outer")) == 2
    assert catalog.names() == ["Outer", "Inner"]


class TestExpressions:
    def test_builtin_names(self) -> None:
        catalog = build(
            "types:\n"
            "  T:\n"
            "    record:\n"
            "      a: bool\n"
            "      b: none\n"
            "      c: ordering\n"
            "      d: int8\n"
        )
        t = catalog.get("T")
        assert cardinality(t) == 2 * 1 * 3 * 256
        assert enumerated(t)[0] == t(a=False, b=None, c=Ordering.LT, d=-128)

    def test_optional_set_and_tuple(self) -> None:
        catalog = build(
            "types:\n"
            "  T:\n"
            "    record:\n"
            "      maybe: {optional: bool}\n"
            "      some: {set: ordering}\n"
            "      pair: {tuple: [bool, bool]}\n"
            "      unit: {tuple: []}\n"
        )
        assert cardinality(catalog.get("T")) == 3 * 8 * 4 * 1

    def test_literal_and_range(self) -> None:
        catalog = build(
            "types:\n"
            "  T:\n"
            "    record:\n"
            "      mode: {literal: [r, w]}\n"
            "      level: {range: [1, 3]}\n"
        )
        t = catalog.get("T")
        assert enumerated(t) == [
            t(mode="r", level=1),
            t(mode="r", level=2),
            t(mode="r", level=3),
            t(mode="w", level=1),
            t(mode="w", level=2),
            t(mode="w", level=3),
        ]

    def test_empty_variant_is_never(self) -> None:
        catalog = build("types:\n  Nothing:\n    variant: {}\n")
        assert cardinality(catalog.get("Nothing")) == 0
        assert enumerated(catalog.get("Nothing")) == []

    def test_large_builtin(self) -> None:
        catalog = build("types:\n  Big:\n    record: {x: uint32, y: bool}\n")
        assert cardinality(catalog.get("Big")) == 2**33
        with pytest.raises(LargeTypeError):
            enumerated(catalog.get("Big"))


class TestErrors:
    def test_unknown_reference(self) -> None:
        with pytest.raises(ValueError, match="Unknown type 'Colour' referenced by 'P'"):
            build("types:\n  P:\n    record: {c: Colour}\n")

    def test_self_reference(self) -> None:
        with pytest.raises(StructuralError, match="List -> List"):
            build(
                "types:\n"
                "  List:\n"
                "    variant:\n"
                "      Nil: {}\n"
                "      Cons: {head: bool, tail: List}\n"
            )

    def test_mutual_reference_cycle(self) -> None:
        with pytest.raises(StructuralError, match="self-referential"):
            build(
                "types:\n"
                "  A:\n    record: {b: {optional: B}}\n"
                "  B:\n    record: {a: A}\n"
            )

    def test_builtin_name_cannot_be_redeclared(self) -> None:
        with pytest.raises(ValueError, match="shadows a builtin"):
            build("types:\n  bool:\n    enum: [no_, yes_]\n")

    @pytest.mark.parametrize(
        "yaml_text",
        [
            "types:\n  T:\n    record: {class: bool}\n",
            "types:\n  T:\n    enum: [ok, not-ok]\n",
            "types:\n  T:\n    enum: [_hidden]\n",
            "types:\n  T:\n    variant: {1Bad: {}}\n",
        ],
    )
    def test_invalid_names(self, yaml_text: str) -> None:
        with pytest.raises(ValueError, match="Invalid"):
            build(yaml_text)

    def test_duplicate_literal(self) -> None:
        with pytest.raises(StructuralError, match="T: .*duplicate value 'r'"):
            build("types:\n  T:\n    record: {m: {literal: [r, w, r]}}\n")

    def test_literal_values_equal_across_types(self) -> None:
        with pytest.raises(StructuralError, match="T: .*duplicate value True"):
            build("types:\n  T:\n    record: {b: {literal: [1, true]}}\n")

    def test_optional_literal_holding_null(self) -> None:
        with pytest.raises(StructuralError, match="T: optional literal .*holds null"):
            build("types:\n  T:\n    record: {x: {optional: {literal: [null, 1]}}}\n")

    def test_null_literal_without_optional(self) -> None:
        t = build("types:\n  T:\n    record: {x: {literal: [null, 1]}}\n").get("T")
        assert enumerated(t) == [t(x=None), t(x=1)]

    def test_inverted_range(self) -> None:
        with pytest.raises(StructuralError, match="sorts before"):
            build("types:\n  T:\n    record: {n: {range: [3, 1]}}\n")
