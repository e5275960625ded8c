"""t-rex: Template Resolver Engine.

Templates are not markup here: a template is a chain of *providers*, plain
bags of values and callables linked by ``parent``. A second chain of
context providers is stacked on top, and rendering resolves a property
name through both, context first.

Quickstart:
    >>> from trex import t_rex
    >>> t_rex({
    ...     "id": "page",
    ...     "main": lambda t: f"{t.hello()} {t.world()}",
    ...     "hello": "Hello",
    ...     "world": "world!",
    ... })
    'Hello world!'

Inheritance and context:
    >>> base = {"id": "base", "title": "Untitled", "main": lambda t: f"<h1>{t.title()}</h1>"}
    >>> page = {"id": "page", "parent": base}
    >>> t_rex(page, {"id": "request", "title": "Home"})
    '<h1>Home</h1>'

Architecture:
Template chain + Context chain → ChainProvider (merged layers) → Resolver

1. **ChainProvider**: validates both chains and merges them into one
   layered lookup, each layer remembering which provider defined a value
2. **Resolver**: resolves a name, invokes callables with a Capability
   (``t``), and redirects misses to ``404`` and errors to ``500``

Async:
Callables may be ``async``. A render returns a plain value when every
callable involved was synchronous and an awaitable otherwise; use
``t_rex_async()`` to always get a coroutine, and ``t.aio.name()`` inside
async callables to always get something awaitable.

Meta-locations:
``t.debug()``, ``t.iterate(name, items, *extra)`` and ``t.parent(id=None)``
are handled by the engine; providers must not define ``debug``,
``iterate`` or ``parent`` entries.

"""

from trex.capability import AsyncCapability, Capability
from trex.chain import MISSING, ChainProvider, Provider
from trex.exceptions import ErrorCode, FinalError, TRexError, ValidationError
from trex.helpers import Deferred, resolve, resolve_all
from trex.render_context import DebugRecord, DebugView, Frame
from trex.resolver import Engine, Resolver, t_rex, t_rex_async

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "AsyncCapability",
    "Capability",
    "ChainProvider",
    "Deferred",
    "DebugRecord",
    "DebugView",
    "Engine",
    "ErrorCode",
    "FinalError",
    "Frame",
    "Provider",
    "Resolver",
    "TRexError",
    "ValidationError",
    "__version__",
    "resolve",
    "resolve_all",
    "t_rex",
    "t_rex_async",
]
