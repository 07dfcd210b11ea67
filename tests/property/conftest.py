# tests/property/conftest.py
"""Shared Hypothesis strategies for property contract tests.

Usage:
    from tests.property.conftest import declarations

    @given(declaration=declarations())
    def test_partition(declaration: list[str]) -> None:
        ...
"""

from __future__ import annotations

from hypothesis import strategies as st

from protean.contracts import REQUIRED_MARKER

# Small alphabet so duplicates and marked/unmarked collisions are common
property_names = st.text(alphabet="abcde", min_size=1, max_size=3)


@st.composite
def declaration_entries(draw: st.DrawFn) -> str:
    """One raw entry: a name, marked required about half the time."""
    name = draw(property_names)
    return f"{REQUIRED_MARKER}{name}" if draw(st.booleans()) else name


def declarations(max_size: int = 8) -> st.SearchStrategy[list[str]]:
    return st.lists(declaration_entries(), max_size=max_size)


# Values a configuration spec may carry, None included on purpose
spec_values = st.one_of(st.none(), st.integers(), st.text(max_size=5))
