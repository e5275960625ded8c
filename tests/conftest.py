"""Pytest configuration and fixtures for t-rex tests."""

import pytest


@pytest.fixture
def template_chain():
    """Three-level template chain: rT -> pT -> ppT."""
    return {
        "id": "rT",
        "rTProperty": None,
        "parent": {
            "id": "pT",
            "pTProperty": True,
            "parent": {
                "ppTProperty": [1, 2, 3],
                "id": "ppT",
            },
        },
    }


@pytest.fixture
def context_chain():
    """Three-level context chain: rC -> pC -> ppC."""
    return {
        "id": "rC",
        "rCProperty": {"key": "value"},
        "parent": {
            "id": "pC",
            "pCProperty": "value",
            "parent": {
                "id": "ppC",
                "ppCProperty": 4.2,
            },
        },
    }


@pytest.fixture
def parent_chains():
    """Template and context chains whose callables call ``t.parent()``."""
    template = {
        "id": "rootTemplate",
        "parent": {
            "id": "parentTemplate",
            "parentCall": lambda t: "rootTemplateParentCall",
        },
        "parentCall": lambda t: t.parent(),
    }
    context = {
        "id": "rootContext",
        "parent": {
            "id": "parentContext",
        },
        "contextParentCall": lambda t: t.parent(),
    }
    return template, context


def assert_marked(result: str, location: str, provider_id: str, inner: str) -> None:
    """Assert ``result`` is ``inner`` wrapped in debug marks for ``location@provider_id``.

    Args:
        result: The rendered string
        location: Property name expected in the marks
        provider_id: Provider id expected in the marks
        inner: The unmarked content
    """
    mark = f"{location}@{provider_id}"
    expected = f"<!--{mark}-->{inner}<!--\\{mark}-->"
    assert result == expected, (
        f"Debug marks mismatch:\n"
        f"  Actual: {result!r}\n"
        f"  Expected: {expected!r}"
    )
