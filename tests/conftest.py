"""Global pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

SAMPLE_CATALOG = """\
types:
  Color:
    enum: [red, green, blue]
  Pixel:
    record:
      color: Color
      lit: bool
  Glyph:
    variant:
      Blank: {}
      Mark:
        pixel: Pixel
        weight: {range: [0, 3]}
"""


@pytest.fixture
def sample_catalog_yaml() -> str:
    """YAML text of a small catalog: an enum, a record and a variant."""
    return SAMPLE_CATALOG


@pytest.fixture
def sample_catalog_path(tmp_path: Path) -> Path:
    """The sample catalog written to a temporary file."""
    path = tmp_path / "catalog.yaml"
    path.write_text(SAMPLE_CATALOG, encoding="utf-8")
    return path
