"""YAML loader + schema validation for type catalogs.

Provides a single entrypoint to parse a YAML string, normalize names that YAML
1.1 reads as booleans, validate against the packaged JSON schema, and return a
canonical dictionary that `enumerable.dsl.catalog.build_catalog` consumes.
"""

from __future__ import annotations

import json
from importlib import resources
from typing import Any, Dict

import jsonschema
import yaml

from enumerable.utils.yaml_utils import (
    normalize_yaml_dict_keys,
    normalize_yaml_names,
)

#: Exactly one of these keys makes up each type declaration.
DECLARATION_KINDS = ("enum", "record", "variant")


def load_catalog_yaml(yaml_str: str) -> Dict[str, Any]:
    """Load, normalize, and validate a catalog YAML string.

    Args:
        yaml_str: YAML text with a top-level ``types`` mapping.

    Returns:
        The validated document; ``types`` maps each name to a one-key
        declaration (``enum``, ``record`` or ``variant``).

    Raises:
        ValueError: If the document has the wrong overall shape or unknown
            top-level keys.
        jsonschema.ValidationError: If a declaration does not match the schema.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")

    types_section = data.get("types")
    if types_section is None:
        types_section = {}
    if not isinstance(types_section, dict):
        raise ValueError("'types' must be a mapping of type names to declarations")

    # Early shape checks give clearer messages than the schema errors
    normalized: Dict[str, Any] = {}
    for name, declaration in normalize_yaml_dict_keys(types_section).items():
        if not isinstance(declaration, dict) or len(declaration) != 1:
            raise ValueError(
                f"Type '{name}' must be declared with exactly one of "
                f"{', '.join(DECLARATION_KINDS)}"
            )
        kind, body = next(iter(declaration.items()))
        if kind not in DECLARATION_KINDS:
            raise ValueError(
                f"Unrecognized declaration kind '{kind}' for type '{name}'. "
                f"Allowed kinds are {list(DECLARATION_KINDS)}"
            )
        normalized[name] = {kind: _normalize_body(name, kind, body)}
    data["types"] = normalized

    with (
        resources.files("enumerable.schemas")
        .joinpath("catalog.json")
        .open("r", encoding="utf-8")
    ) as f:  # type: ignore[attr-defined]
        schema_data = json.load(f)

    jsonschema.validate(data, schema_data)

    # Enforce allowed top-level keys
    recognized_keys = {"types"}
    extra = set(data.keys()) - recognized_keys
    if extra:
        raise ValueError(
            f"Unrecognized top-level key(s) in catalog: {', '.join(sorted(extra))}. "
            f"Allowed keys are {sorted(recognized_keys)}"
        )

    return data


def _normalize_body(name: str, kind: str, body: Any) -> Any:
    if kind == "enum":
        if body is None:
            return []
        if not isinstance(body, list):
            raise ValueError(f"'enum' of type '{name}' must be a list of member names")
        return normalize_yaml_names(body)
    if body is not None and not isinstance(body, dict):
        raise ValueError(f"'{kind}' of type '{name}' must be a mapping")
    body = normalize_yaml_dict_keys(body)
    if kind == "variant":
        for constructor, fields in body.items():
            if fields is not None and not isinstance(fields, dict):
                raise ValueError(
                    f"Constructor '{constructor}' of type '{name}' must map "
                    "field names to types"
                )
        return {
            constructor: normalize_yaml_dict_keys(fields)
            for constructor, fields in body.items()
        }
    return body
