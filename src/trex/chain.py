"""Provider chains and the merged layered lookup.

A provider is a named bag of properties with a string ``id`` and an
optional ``parent`` provider. Two independent chains are merged into one
lookup: the context chain (root provider to leaf-most parent) stacked on
top of the template chain, so every context provider shadows every
template provider.

Merge order for ``template=rT -> pT -> ppT`` and ``context=rC -> pC``:

    rC  (most specific, searched first)
    pC
    rT
    pT
    ppT (least specific)

Providers may be ``Mapping`` objects (own keys are entries) or plain
objects (public attributes are entries, bound methods are callables):

    >>> base = {"id": "base", "title": "Untitled"}
    >>> page = Provider("page", base, title="Home")
    >>> chains = ChainProvider(page)
    >>> chains.get("title")
    ('page', 'Home')
    >>> chains.next_id("page")
    'base'

"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any, Final

from trex.exceptions import ErrorCode, ValidationError

logger = logging.getLogger(__name__)

TYPE_CONTEXT: Final = "context"
TYPE_TEMPLATE: Final = "template"


class _Missing:
    """Sentinel type for 'no value' (``None`` is a legitimate value)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


class Provider(Mapping[str, Any]):
    """Convenience provider: an immutable mapping with ``id`` and ``parent``.

    Example:
        >>> base = Provider("base", head="", body="")
        >>> page = Provider("page", base, body=lambda t: "<p>Hi</p>")
        >>> page["id"], page["parent"] is base
        ('page', True)
    """

    __slots__ = ("_entries",)

    def __init__(self, id: str, parent: Any = None, /, **entries: Any):
        self._entries: dict[str, Any] = {"id": id, **entries}
        if parent is not None:
            self._entries["parent"] = parent

    def __getitem__(self, key: str) -> Any:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Provider({self._entries.get('id')!r})"


def provider_entries(provider: Any) -> dict[str, Any]:
    """Return the own entries of a provider as a plain dict."""
    if isinstance(provider, Mapping):
        return dict(provider.items())
    return {
        name: getattr(provider, name)
        for name in dir(provider)
        if not name.startswith("_")
    }


def _read(provider: Any, name: str) -> Any:
    if isinstance(provider, Mapping):
        return provider.get(name)
    return getattr(provider, name, None)


class Layer:
    """The merged-lookup contribution of a single provider.

    Each layer maps property names to ``(provider_id, value)`` and links to
    the layer beneath it. Lookups fall through to lower layers.
    """

    __slots__ = ("below", "entries", "id")

    def __init__(self, id: str, entries: dict[str, Any], below: Layer | None):
        self.id = id
        self.below = below
        self.entries = {
            name: (id, value) for name, value in entries.items() if name != "parent"
        }

    def lookup(self, prop: str) -> tuple[str | None, Any]:
        layer: Layer | None = self
        while layer is not None:
            hit = layer.entries.get(prop)
            if hit is not None:
                return hit
            layer = layer.below
        return None, MISSING


class ChainProvider:
    """Single layered lookup built from a template chain and a context chain.

    Validation walks each chain from the supplied provider up through its
    ``parent`` links and fails on the first provider without a non-empty
    string ``id``. Ids must be unique across both chains.

    Raises:
        ValidationError: Missing/invalid id, or a duplicate id (which also
            covers a ``parent`` cycle)
    """

    __slots__ = ("_id_map", "_top")

    def __init__(self, template_chain: Any, context_chain: Any = None):
        self._top: Layer | None = None
        self._id_map: dict[str, Layer] = {}

        # Root-most provider last, so popping yields the merge order
        chain = self._walk(context_chain, TYPE_CONTEXT, required=False)
        chain.extend(self._walk(template_chain, TYPE_TEMPLATE, required=True))
        while chain:
            self.add_provider(chain.pop())

        logger.debug("Built provider chain: %s", " < ".join(self.ids()))

    @staticmethod
    def _walk(provider: Any, kind: str, *, required: bool) -> list[Any]:
        chain: list[Any] = []
        if provider is None and not required:
            return chain

        last: Any = None
        seen: set[int] = set()
        while True:
            provider_id = _read(provider, "id") if provider is not None else None
            if not provider_id or not isinstance(provider_id, str):
                description = "Root" if last is None else f"Parent of '{_read(last, 'id')}'"
                raise ValidationError(
                    f'"{description} {kind} lacks a valid id."',
                    code=ErrorCode.INVALID_ID,
                )
            if id(provider) in seen:
                raise ValidationError(
                    f"\"Duplicate provider id '{provider_id}' found.\"",
                    code=ErrorCode.DUPLICATE_ID,
                )
            seen.add(id(provider))
            chain.append(provider)

            parent = _read(provider, "parent")
            if parent is None:
                return chain
            last, provider = provider, parent

    def add_provider(self, provider: Any) -> None:
        """Stack a provider's layer on top of the current lookup.

        Raises:
            ValidationError: If the provider's id is already present
        """
        entries = provider_entries(provider)
        provider_id = entries["id"]
        if provider_id in self._id_map:
            raise ValidationError(
                f"\"Duplicate provider id '{provider_id}' found.\"",
                code=ErrorCode.DUPLICATE_ID,
            )

        self._top = self._id_map[provider_id] = Layer(provider_id, entries, self._top)

    def get(self, prop: str, id: str | None = None) -> tuple[str | None, Any]:
        """Resolve a property, returning ``(producing_provider_id, value)``.

        Args:
            prop: Property name
            id: Provider whose layer starts the search; ``None`` searches the
                fully merged view

        Returns:
            ``(None, MISSING)`` when no layer defines the property

        Raises:
            KeyError: If ``id`` names no provider in the chain
        """
        layer = self._top if id is None else self._id_map[id]
        if layer is None:
            return None, MISSING
        return layer.lookup(prop)

    def next_id(self, id: str) -> str | None:
        """Id of the layer one level below ``id`` in the merged order, or None."""
        below = self._id_map[id].below
        return below.id if below is not None else None

    def ids(self) -> list[str]:
        """Provider ids, most specific first."""
        result = []
        layer = self._top
        while layer is not None:
            result.append(layer.id)
            layer = layer.below
        return result

    def __contains__(self, id: object) -> bool:
        return id in self._id_map
