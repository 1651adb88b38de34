"""Helpers for YAML 1.1 parsing quirks in catalog files."""

from typing import Any, Dict, List, Optional, TypeVar

V = TypeVar("V")


def normalize_yaml_name(value: Any) -> Any:
    """Return `value` as a name string when YAML turned a bare word into a bool.

    YAML 1.1 reads ``yes``, ``no``, ``on``, ``off``, ``true`` and ``false`` as
    booleans. Used as type, field, constructor or member names they become
    ``"True"`` / ``"False"``. Other non-string values are returned unchanged
    so schema validation can report them.

    Examples:
        >>> normalize_yaml_name(True)
        'True'
        >>> normalize_yaml_name("red")
        'red'
    """
    if isinstance(value, bool):
        return str(value)
    return value


def normalize_yaml_dict_keys(data: Optional[Dict[Any, V]]) -> Dict[str, V]:
    """Return a copy of `data` with every key converted to a string.

    A ``None`` mapping (an empty YAML block such as ``Blank:``) becomes ``{}``.
    """
    if data is None:
        return {}
    normalized: Dict[str, V] = {}
    for key, value in data.items():
        normalized[str(normalize_yaml_name(key))] = value
    return normalized


def normalize_yaml_names(items: List[Any]) -> List[Any]:
    """Apply `normalize_yaml_name` to every item of a YAML sequence."""
    return [normalize_yaml_name(item) for item in items]
