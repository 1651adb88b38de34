"""YAML catalog DSL for declaring finite types.

A catalog declares enums, records and variants that reference each other and
the builtin primitive names. `load_catalog_yaml` validates the document and
`build_catalog` turns it into real Python types that `enumerated()` and
`cardinality()` accept, collected in a `TypeCatalog`.
"""

from enumerable.dsl.catalog import BUILTIN_TYPES, TypeCatalog, build_catalog
from enumerable.dsl.loader import load_catalog_yaml

__all__ = ["BUILTIN_TYPES", "TypeCatalog", "build_catalog", "load_catalog_yaml"]
