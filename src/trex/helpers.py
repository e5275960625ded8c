"""Dual sync/async plumbing for the render loop.

A user callable may return a plain value or an awaitable. The engine never
suspends unless something in the render tree actually returned an
awaitable: each helper below applies its continuation immediately to a
plain value and only builds a ``Deferred`` when handed an awaitable.

No event-loop API is used, so awaitable results can be driven by any
runtime that understands ``await``.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from inspect import isawaitable
from typing import Any


class Deferred:
    """A render result that is not computed until awaited.

    Wraps the awaitable a callable returned together with the continuation
    that finishes the render step. ``close()`` releases the wrapped
    awaitable (and, through nested Deferreds, every coroutine beneath it)
    when the result is dropped without being awaited.

    A Deferred is an awaitable, not a coroutine; use ``t_rex_async()`` where
    a coroutine is required (``asyncio.run``).
    """

    __slots__ = ("_args", "_awaitable", "_finish", "_started")

    def __init__(self, awaitable: Awaitable[Any], finish: Callable[..., Any], *args: Any):
        self._awaitable = awaitable
        self._finish = finish
        self._args = args
        self._started = False

    def __await__(self):
        self._started = True
        return self._finish(self._awaitable, *self._args).__await__()

    def close(self) -> None:
        """Release the wrapped awaitable if this result was never awaited."""
        if self._started:
            return
        self._started = True
        close_pending([self._awaitable])

    def __repr__(self) -> str:
        state = "started" if self._started else "pending"
        return f"<Deferred {state}>"


def close_pending(results: Iterable[Any]) -> None:
    """Close every not-yet-awaited awaitable in ``results``.

    Plain values and awaitables without a ``close()`` are skipped.
    """
    for result in results:
        if not isawaitable(result):
            continue
        close = getattr(result, "close", None)
        if callable(close):
            close()


def call_catching(func: Callable[[], Any], on_error: Callable[[Exception], Any]) -> Any:
    """Call ``func`` and route any exception it raises or rejects with to ``on_error``.

    Returns:
        The result of ``func`` (or of ``on_error``), awaitable only if one of
        them produced an awaitable
    """
    try:
        result = func()
    except Exception as exc:
        return on_error(exc)
    if isawaitable(result):
        return Deferred(result, _await_error, on_error)
    return result


async def _await_error(awaitable: Awaitable[Any], on_error: Callable[[Exception], Any]) -> Any:
    try:
        return await awaitable
    except Exception as exc:
        recovered = on_error(exc)
    if isawaitable(recovered):
        return await recovered
    return recovered


def then(result: Any, on_success: Callable[[Any], Any]) -> Any:
    """Apply ``on_success`` to ``result`` now, or once it has been awaited."""
    if isawaitable(result):
        return Deferred(result, _await_success, on_success)
    return on_success(result)


async def _await_success(awaitable: Awaitable[Any], on_success: Callable[[Any], Any]) -> Any:
    return on_success(await awaitable)


async def resolve(value: Any) -> Any:
    """Await ``value`` if it is awaitable, otherwise return it unchanged.

    Example:
        >>> async def main(t):
        ...     return await resolve(t.hello()) + "!"
    """
    if isawaitable(value):
        return await value
    return value


async def resolve_all(results: Iterable[Any]) -> list[Any]:
    """Await each awaitable in ``results`` in order and return all values.

    If one of them fails, the awaitables after it are closed before the
    error propagates. For concurrent execution pass the results to the
    event loop's gather instead.

    Example:
        >>> async def nav(t):
        ...     return "".join(await resolve_all(t.iterate("item", items)))
    """
    pending = list(results)
    values: list[Any] = []
    for index, result in enumerate(pending):
        try:
            values.append(await result if isawaitable(result) else result)
        except BaseException:
            close_pending(pending[index + 1:])
            raise
    return values
