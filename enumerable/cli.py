"""Command-line interface for enumerable."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from enum import Enum
from pathlib import Path
from time import perf_counter
from typing import Any, List, Optional

from enumerable.api import cardinality, countable
from enumerable.config import ENUMERATION_CONFIG
from enumerable.dsl.catalog import TypeCatalog
from enumerable.guards import enumerate_below, enumerate_with_deadline
from enumerable.logging import get_logger, set_global_log_level
from enumerable.shape.algebra import describe_shape
from enumerable.types.base import is_enumerable
from enumerable.types.dto import SizeRejected

logger = get_logger(__name__)

#: Exit status when a value list was refused (size ceiling or deadline).
EXIT_REFUSED = 2


def _format_table(
    headers: List[str],
    rows: List[List[str]],
    min_width: int = 8,
    max_col_width: Optional[int] = None,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width
        max_col_width: Clip longer cells with an ASCII ellipsis

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    def clip(val: Any) -> str:
        s = str(val)
        if max_col_width is not None and len(s) > max_col_width:
            return s[: max_col_width - 3] + "..."
        return s

    clipped_headers = [clip(h) for h in headers]
    clipped_rows = [[clip(item) for item in row] for row in rows]

    all_data = [clipped_headers] + clipped_rows
    col_widths = [
        max(max(len(row[i]) for row in all_data), min_width)
        for i in range(len(clipped_headers))
    ]

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{item:<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(clipped_headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    lines.extend(format_row(row) for row in clipped_rows)
    return "\n".join(lines)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _format_cardinality(adapter: Any) -> str:
    """Return the cardinality with thousands separators; large types are marked."""
    text = f"{adapter.cardinality():,}"
    if not is_enumerable(adapter):
        text += " (large)"
    return text


def _render(value: Any) -> str:
    """Render one enumerated value for line-oriented output.

    Examples:
        Color.red -> "Color.red"; Pixel(color=Color.red, lit=True) stays as is;
        frozenset({1, 2}) -> "{1, 2}"; (1, None) -> "(1, None)".
    """
    if isinstance(value, Enum):
        return f"{type(value).__qualname__}.{value.name}"
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        inner = ", ".join(
            f"{f.name}={_render(getattr(value, f.name))}"
            for f in dataclasses.fields(value)
        )
        return f"{type(value).__qualname__}({inner})"
    if isinstance(value, frozenset):
        return "{" + ", ".join(sorted(_render(v) for v in value)) + "}"
    if isinstance(value, tuple):
        items = [_render(v) for v in value]
        if len(items) == 1:
            return f"({items[0]},)"
        return "(" + ", ".join(items) + ")"
    return repr(value)


def _to_jsonable(value: Any) -> Any:
    """Convert one enumerated value into plain JSON data.

    Enum members become their names, records become ``{"type": ..., "fields":
    {...}}``, tuples become lists and sets become lists in a stable order.
    """
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, Enum):
        return value.name
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            "type": type(value).__qualname__,
            "fields": {
                f.name: _to_jsonable(getattr(value, f.name))
                for f in dataclasses.fields(value)
            },
        }
    if isinstance(value, frozenset):
        return sorted(
            (_to_jsonable(v) for v in value), key=lambda v: json.dumps(v)
        )
    if isinstance(value, tuple):
        return [_to_jsonable(v) for v in value]
    if isinstance(value, type):
        return value.__name__
    return repr(value)


def _load_catalog(path: Path) -> TypeCatalog:
    logger.info(f"Loading catalog from: {path}")
    catalog = TypeCatalog.from_path(path)
    logger.info("✓ Catalog validated and built successfully")
    return catalog


def _shape_tree(adapter: Any) -> str:
    shape = getattr(adapter, "shape", None)
    if shape is None:
        return f"leaf {adapter.name}"
    return describe_shape(shape)


def _preview(adapter: Any, limit: int) -> str:
    if not is_enumerable(adapter):
        return "(countable only)"
    outcome = enumerate_below(adapter, ENUMERATION_CONFIG.default_ceiling)
    if isinstance(outcome, SizeRejected):
        return f"(not listed: {outcome.cardinality:,} values)"
    shown = [_render(v) for v in outcome.values[:limit]]
    if outcome.cardinality > limit:
        shown.append(f"... ({outcome.cardinality - limit:,} more)")
    return ", ".join(shown) if shown else "(no values)"


def _inspect_catalog(path: Path, detail: bool = False) -> None:
    """Validate a catalog file and show each declared type with its size.

    Args:
        path: Catalog YAML file.
        detail: Also print shape trees and a preview of the first values.
    """
    _start_time = perf_counter()
    try:
        catalog = _load_catalog(path)

        print("\n" + "=" * 60)
        print("ENUMERABLE CATALOG INSPECTION")
        print("=" * 60)
        print(f"\nCatalog: {path}")
        print(f"Types: {len(catalog)}")

        if not len(catalog):
            print("\nNo types declared")
        else:
            rows = []
            for name in catalog.names():
                adapter = countable(catalog.get(name))
                rows.append(
                    [
                        name,
                        catalog.kind(name),
                        _format_cardinality(adapter),
                        ", ".join(catalog.dependencies(name)) or "-",
                    ]
                )
            print()
            print(
                _format_table(
                    ["Type", "Kind", "Cardinality", "Uses"],
                    rows,
                    max_col_width=60,
                )
            )

        if detail:
            for name in catalog.names():
                adapter = countable(catalog.get(name))
                print(f"\n{name}:")
                for line in _shape_tree(adapter).splitlines():
                    print(f"   {line}")
                preview = _preview(adapter, ENUMERATION_CONFIG.preview_limit)
                print(f"   values: {preview}")

        _elapsed = perf_counter() - _start_time
        logger.info(
            f"Catalog inspection completed successfully in {_format_duration(_elapsed)}"
        )

    except FileNotFoundError:
        print(f"❌ ERROR: Catalog file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to inspect catalog: {e}")
        print("❌ ERROR: Failed to inspect catalog")
        print(f"  {type(e).__name__}: {e}")
        sys.exit(1)


def _count_type(path: Path, type_name: str) -> None:
    """Print the cardinality of one declared type."""
    try:
        catalog = _load_catalog(path)
        print(cardinality(catalog.get(type_name)))
    except FileNotFoundError:
        print(f"❌ ERROR: Catalog file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to count {type_name}: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to count {type_name}: {type(e).__name__}: {e}")
        sys.exit(1)


def _list_type(
    path: Path,
    type_name: str,
    below: Optional[int] = None,
    timeout: Optional[float] = None,
    as_json: bool = False,
) -> None:
    """Print every value of one declared type, guarded by a ceiling and deadline.

    Exits with `EXIT_REFUSED` when the type has too many values or the values
    could not be listed before the deadline.
    """
    ceiling = ENUMERATION_CONFIG.default_ceiling if below is None else below
    _start_time = perf_counter()
    try:
        catalog = _load_catalog(path)
        tp = catalog.get(type_name)

        if timeout is None:
            outcome = enumerate_below(tp, ceiling)
            if isinstance(outcome, SizeRejected):
                _refuse_size(type_name, outcome)
            values = outcome.values
        else:
            size = cardinality(tp)
            if size >= ceiling:
                _refuse_size(type_name, SizeRejected(size, ceiling))
            listed = enumerate_with_deadline(tp, timeout)
            if listed is None:
                print(
                    f"❌ Deadline exceeded: {type_name} could not be listed "
                    f"within {timeout:g}s",
                    file=sys.stderr,
                )
                sys.exit(EXIT_REFUSED)
            values = listed

        if as_json:
            print(json.dumps([_to_jsonable(v) for v in values], indent=2))
        else:
            for value in values:
                print(_render(value))

        _elapsed = perf_counter() - _start_time
        logger.info(
            f"Listed {len(values):,} values of {type_name} "
            f"in {_format_duration(_elapsed)}"
        )

    except FileNotFoundError:
        print(f"❌ ERROR: Catalog file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to list {type_name}: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to list {type_name}: {type(e).__name__}: {e}")
        sys.exit(1)


def _refuse_size(type_name: str, outcome: SizeRejected) -> None:
    print(
        f"❌ Refused: {type_name} has {outcome.cardinality:,} values "
        f"(limit is below {outcome.ceiling:,}; raise it with --below)",
        file=sys.stderr,
    )
    sys.exit(EXIT_REFUSED)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``enumerable`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="enumerable",
        description="Count and list the values of finite types declared in YAML.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{inspect,count,list}",
        help="Available commands",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Validate a catalog and show its types"
    )
    inspect_parser.add_argument("catalog", type=Path, help="Path to catalog YAML")
    inspect_parser.add_argument(
        "--detail",
        "-d",
        action="store_true",
        help="Show shape trees and the first values of each type",
    )

    count_parser = subparsers.add_parser("count", help="Print a type's cardinality")
    count_parser.add_argument("catalog", type=Path, help="Path to catalog YAML")
    count_parser.add_argument("type_name", metavar="TYPE", help="Declared type name")

    list_parser = subparsers.add_parser("list", help="Print every value of a type")
    list_parser.add_argument("catalog", type=Path, help="Path to catalog YAML")
    list_parser.add_argument("type_name", metavar="TYPE", help="Declared type name")
    list_parser.add_argument(
        "--below",
        type=int,
        default=None,
        help=(
            "Refuse types with this many values or more"
            f" (default: {ENUMERATION_CONFIG.default_ceiling:,})"
        ),
    )
    list_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Give up after this many seconds",
    )
    list_parser.add_argument(
        "--json", action="store_true", help="Print the values as a JSON array"
    )

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    if args.command == "inspect":
        _inspect_catalog(args.catalog, args.detail)
    elif args.command == "count":
        _count_type(args.catalog, args.type_name)
    elif args.command == "list":
        _list_type(
            args.catalog,
            args.type_name,
            below=args.below,
            timeout=args.timeout,
            as_json=args.json,
        )


if __name__ == "__main__":
    main()
