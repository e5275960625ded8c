"""Shared hypothesis strategies for t-rex property-based testing.

Generates provider chains with unique ids and plain-datum entries, so
individual test modules can check resolution invariants over arbitrary
chain shapes.
"""

from __future__ import annotations

from hypothesis import strategies as st

# Property names that never collide with meta-locations or handlers
property_name = st.from_regex(r"p_[a-z]{1,6}", fullmatch=True)

plain_value = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-10_000, max_value=10_000),
    st.text(max_size=20),
    st.lists(st.integers(), max_size=4),
)

entries = st.dictionaries(property_name, plain_value, max_size=4)


@st.composite
def chain_levels(draw, min_size: int = 1, max_size: int = 4) -> list[dict]:
    """Flat provider dicts without ids or parents, leaf-most first."""
    return draw(st.lists(entries, min_size=min_size, max_size=max_size))


def build_chain(levels: list[dict], prefix: str) -> dict:
    """Link flat levels into a provider chain with ids ``{prefix}0``, ``{prefix}1``, ...

    ``levels[0]`` becomes the chain head; each next level is its parent.
    """
    head = None
    for index in reversed(range(len(levels))):
        provider = {"id": f"{prefix}{index}", **levels[index]}
        if head is not None:
            provider["parent"] = head
        head = provider
    return head


@st.composite
def chain_pairs(draw) -> tuple[list[dict], list[dict]]:
    """A template chain's levels and a context chain's levels."""
    return draw(chain_levels()), draw(chain_levels(min_size=0))
