"""The capability object passed to every callable as its first argument.

``Capability`` is the only way a callable talks to the engine. Calling it
with a property name renders that property; attribute access is sugar for
the same dispatch:

    >>> def main(t):
    ...     return t("title") + " | " + t.subtitle("short")

Both forms return whatever the render produced: a plain value, or an
awaitable when something along the way was asynchronous. Async callables
that cannot know which they will get use ``t.aio``, which always returns a
coroutine:

    >>> async def main(t):
    ...     return await t.aio.title() + await t.aio.body()

Names that collide with the dispatch attributes (``aio``) or start with an
underscore can still be rendered with the explicit ``t("name")`` form.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from trex.helpers import resolve, resolve_all

Render = Callable[..., Any]


class Capability:
    """Dispatch object bound to one call frame's stack."""

    __slots__ = ("_render",)

    def __init__(self, render: Render):
        self._render = render

    def __call__(self, location: str, *args: Any) -> Any:
        return self._render(location, *args)

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)

        def invoke(*args: Any) -> Any:
            return self._render(name, *args)

        invoke.__name__ = name
        return invoke

    @property
    def aio(self) -> AsyncCapability:
        return AsyncCapability(self._render)

    def __repr__(self) -> str:
        return "<Capability>"


class AsyncCapability:
    """Awaitable-always twin of Capability."""

    __slots__ = ("_render",)

    def __init__(self, render: Render):
        self._render = render

    async def __call__(self, location: str, *args: Any) -> Any:
        return await resolve(self._render(location, *args))

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)

        async def invoke(*args: Any) -> Any:
            return await resolve(self._render(name, *args))

        invoke.__name__ = name
        return invoke

    async def iterate(self, location: str, items: Any, *args: Any) -> list[Any]:
        """Render ``location`` per element and await every result in order."""
        return await resolve_all(await resolve(self._render("iterate", location, items, *args)))

    def __repr__(self) -> str:
        return "<AsyncCapability>"
