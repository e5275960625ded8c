"""The render loop: resolve a property name and invoke what it names.

Resolution searches the merged provider chain (context before template).
A plain value is returned as-is; a callable is invoked as
``value(t, *params)`` with a Capability bound to a new call frame, and its
result (plain or awaitable) becomes the render result.

Three names are meta-locations handled by the engine itself:

- ``debug``: a DebugView over the render's debug record
- ``iterate``: ``t.iterate(name, iterable, *extra)`` renders ``name`` once
  per element as ``(element, index, items, *extra)`` and returns the list
  of per-element results, awaitables included
- ``parent``: re-renders the calling frame's property starting one provider
  below the one that defined it (or at a given provider id)

Misses are redirected to the ``404`` property as ``(location, *params)``
and exceptions to the ``500`` property as ``(location, exc, *params)``.
When those are missing too, the render fails with a FinalError:

    >>> t_rex({"id": "rT", "main": lambda t: t.missing()})
    FinalError: "Resource 'missing' not found." tRex stack: [main@rT]

Thread-Safety:
    A render only touches its own ChainProvider and DebugRecord. The
    providers themselves are read, never mutated.

"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from trex.capability import Capability
from trex.chain import MISSING, ChainProvider
from trex.exceptions import ErrorCode, FinalError
from trex.helpers import call_catching, close_pending, resolve, then
from trex.render_context import DebugRecord, DebugView, Frame, raise_final

logger = logging.getLogger(__name__)

META_LOCATIONS = frozenset({"debug", "iterate", "parent"})


class Resolver:
    """One top-level render over a merged provider chain.

    Attributes:
        chains: The merged lookup, built for this render only
        debug: Render-scoped debug record shared by every branch
    """

    __slots__ = ("chains", "debug")

    def __init__(self, chains: ChainProvider, debug: DebugRecord):
        self.chains = chains
        self.debug = debug

    def run(self) -> Any:
        """Render the entrypoint with an empty call stack.

        Returns:
            The rendered value, or an awaitable of it when any callable in
            the render tree returned an awaitable
        """
        return call_catching(lambda: self.render([], self.debug.entrypoint), _surface)

    def render(self, stack: list[Frame], location: str, *args: Any) -> Any:
        """Resolve ``location`` on behalf of the frames in ``stack``.

        Args:
            stack: Active frames, innermost first; owned by this call
            location: Property name or meta-location
            *args: Parameters passed to the resolved callable
        """
        params = list(args)
        start_id: str | None = None
        exhausted = False

        if location == "debug":
            return DebugView(self.debug, stack)
        if location == "iterate":
            return self._iterate(stack, params)
        if location == "parent":
            if not stack:
                raise_final(
                    stack,
                    "\"'parent' requires a calling frame.\"",
                    code=ErrorCode.NO_CALLER,
                )
            location, caller_id = stack[0]
            start_id = self.chains.next_id(caller_id)
            target_id = params.pop(0) if params else None
            if isinstance(target_id, str):
                while start_id is not None and start_id != target_id:
                    start_id = self.chains.next_id(start_id)
            exhausted = start_id is None

        def handle_error(exc: Exception) -> Any:
            if location == "500" or isinstance(exc, FinalError):
                raise exc
            logger.debug("Error in %r, redirecting to 500: %r", location, exc)
            return self.render(stack.copy(), "500", location, exc, *params)

        def handle_not_found() -> Any:
            if location == "500" and len(params) > 1 and isinstance(params[1], BaseException):
                raise_final(stack, "", params[1])
            if location == "404":
                missing = params[0] if params else location
                raise_final(stack, f"\"Resource '{missing}' not found.\"")
            logger.debug("Resource %r not found, redirecting to 404", location)
            return self.render(stack.copy(), "404", location, *params)

        def get_resource() -> Any:
            provider_id, resolved = self.chains.get(location, start_id)
            if resolved is MISSING:
                return handle_not_found()
            if not callable(resolved):
                return self._mark(resolved, location, provider_id)

            stack.insert(0, Frame(location, provider_id))
            t = Capability(lambda name, *more: self.render(stack.copy(), name, *more))

            def unwind(result: Any) -> Any:
                stack.pop(0)
                return self._mark(result, location, provider_id)

            return then(resolved(t, *params), unwind)

        if exhausted:
            return call_catching(handle_not_found, handle_error)
        return call_catching(get_resource, handle_error)

    def _iterate(self, stack: list[Frame], params: list[Any]) -> list[Any]:
        """Render the target once per element; results may include awaitables."""
        target = params.pop(0) if params else None
        iterable = params.pop(0) if params else None
        if not isinstance(iterable, Iterable):
            raise_final(stack, '"Passed value is not iterable."', code=ErrorCode.NOT_ITERABLE)

        items = iterable if isinstance(iterable, list) else list(iterable)
        results: list[Any] = []
        try:
            for index, item in enumerate(items):
                results.append(self.render(stack.copy(), target, item, index, items, *params))
        except BaseException:
            close_pending(results)
            raise
        return results

    def _mark(self, value: Any, location: str, provider_id: str | None) -> Any:
        if not self.debug.debug_marks or not isinstance(value, str):
            return value
        mark = f"{location}@{provider_id}"
        return f"<!--{mark}-->{value}<!--\\{mark}-->"


def _surface(exc: Exception) -> Any:
    """Re-raise the original error behind a FinalError, message amended."""
    if isinstance(exc, FinalError) and exc.previous is not None:
        original = exc.previous
        message = original.args[0] if len(original.args) == 1 else str(original)
        original.args = (f"{message} --> {exc.message}",)
        logger.debug("Render failed: %s", original)
        raise original from exc
    raise exc


def t_rex(
    template_chain: Any,
    context_chain: Any = None,
    entrypoint: str = "main",
    debug_marks: bool = False,
) -> Any:
    """Render ``entrypoint`` from a template chain and optional context chain.

    Args:
        template_chain: Leaf-most template provider (required)
        context_chain: Leaf-most context provider, or None
        entrypoint: Property rendered first
        debug_marks: Wrap string results in ``<!--name@id-->`` delimiters

    Returns:
        The rendered value directly when every callable involved was
        synchronous, otherwise an awaitable (a Deferred) of it

    Raises:
        ValidationError: Malformed chain, raised before rendering starts
        FinalError: Unresolvable resource or misuse of a meta-location

    Example:
        >>> t_rex({"id": "page", "main": lambda t: t.greeting() + "!", "greeting": "Hi"})
        'Hi!'
    """
    chains = ChainProvider(template_chain, context_chain)
    record = DebugRecord(template_chain, context_chain, entrypoint, debug_marks)
    return Resolver(chains, record).run()


async def t_rex_async(
    template_chain: Any,
    context_chain: Any = None,
    entrypoint: str = "main",
    debug_marks: bool = False,
) -> Any:
    """Like ``t_rex()`` but always awaitable."""
    return await resolve(t_rex(template_chain, context_chain, entrypoint, debug_marks))


class Engine:
    """Holds a pair of chains and renders entrypoints from them.

    The merged lookup is rebuilt for every render, so changes made to the
    providers between renders are picked up.

    Example:
        >>> engine = Engine(page_template, site_context)
        >>> html = engine.render()
        >>> feed = engine.render("feed", debug_marks=True)
    """

    __slots__ = ("context_chain", "template_chain")

    def __init__(self, template_chain: Any, context_chain: Any = None):
        self.template_chain = template_chain
        self.context_chain = context_chain

    def render(self, entrypoint: str = "main", debug_marks: bool = False) -> Any:
        return t_rex(self.template_chain, self.context_chain, entrypoint, debug_marks)

    async def render_async(self, entrypoint: str = "main", debug_marks: bool = False) -> Any:
        return await t_rex_async(self.template_chain, self.context_chain, entrypoint, debug_marks)
