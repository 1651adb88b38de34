"""Hypothesis strategies backed by exhaustive enumeration.

Requires the ``hypothesis`` extra. Drawing from the full enumeration keeps
generated examples inside the type and lets Hypothesis shrink toward the
first values of the structural order::

    from hypothesis import given

    @given(exhaustive(Pixel))
    def test_pixel_roundtrip(pixel): ...
"""

from __future__ import annotations

from typing import Any

from hypothesis import strategies as st

from enumerable.api import enumerated


def exhaustive(tp: Any) -> st.SearchStrategy[Any]:
    """Return a strategy sampling from every value of `tp`.

    An empty type gives a strategy that can never draw (`st.nothing()`).

    Raises:
        LargeTypeError: If `tp` is countable-only.
        StructuralError: If `tp` cannot be enumerated.
    """
    values = enumerated(tp)
    if not values:
        return st.nothing()
    return st.sampled_from(values)
