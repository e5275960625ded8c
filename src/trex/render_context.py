"""Per-render state: call frames and the debug record.

A render keeps two pieces of state apart from the providers:

- the call stack, a list of ``Frame`` (innermost first) that every recursive
  render receives a *copy* of, so sibling branches never see each other's
  pushes and pops;
- the ``DebugRecord``, created once per top-level render and shared by every
  branch of it. Its ``debug_marks`` flag is the only mutable field.

Caveat:
    ``debug_marks`` is shared by all branches of one render. Async branches
    that toggle it while interleaved race with each other; the flag is not
    isolated per branch.

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, NamedTuple, NoReturn

from trex.exceptions import ErrorCode, FinalError


class Frame(NamedTuple):
    """An active callable invocation: property name and producing provider."""

    location: str
    provider_id: str | None

    def __str__(self) -> str:
        return f"{self.location}@{self.provider_id}"


def format_stack(stack: Sequence[Frame]) -> str:
    """Format a call stack as ``name@id, name@id``, innermost first."""
    return ", ".join(str(frame) for frame in stack)


def raise_final(
    stack: Sequence[Frame],
    msg: str = "",
    previous: BaseException | None = None,
    *,
    code: ErrorCode | None = None,
) -> NoReturn:
    """Raise a FinalError whose message embeds the rendering stack.

    Raises:
        FinalError: Always
    """
    message = f"{msg} tRex stack: [{format_stack(stack)}]".lstrip()
    if code is None:
        code = ErrorCode.UNCAUGHT_ERROR if previous is not None else ErrorCode.RESOURCE_NOT_FOUND
    raise FinalError(message, previous, call_stack=stack, code=code)


@dataclass
class DebugRecord:
    """Render-scoped debug state.

    Attributes:
        template_chain: The template chain as passed to the entrypoint
        context_chain: The context chain as passed (or None)
        entrypoint: Name of the property rendered first
        debug_marks: Wrap string results in ``<!--name@id-->`` delimiters
    """

    template_chain: Any
    context_chain: Any
    entrypoint: str
    debug_marks: bool = False


class DebugView:
    """Read-mostly view over a DebugRecord, returned by the ``debug`` location.

    Every record field is readable; ``print_stack()`` formats the stack of
    the frame that requested the view. Only ``debug_marks`` is writable, and
    writes go through to the shared record. Reading a name that is not a
    record field raises AttributeError.

    Example:
        >>> def step(t):
        ...     t.debug().debug_marks = True
        ...     return t.fragment()
    """

    __slots__ = ("_record", "_stack")

    _WRITABLE = frozenset({"debug_marks"})

    def __init__(self, record: DebugRecord, stack: Sequence[Frame]):
        object.__setattr__(self, "_record", record)
        object.__setattr__(self, "_stack", tuple(stack))

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._record, name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name not in self._WRITABLE:
            raise_final(
                self._stack,
                f"\"'{name}' is not a writable property.\"",
                code=ErrorCode.READ_ONLY,
            )
        setattr(self._record, name, value)

    def print_stack(self) -> str:
        return format_stack(self._stack)

    def __repr__(self) -> str:
        return f"DebugView(entrypoint={self._record.entrypoint!r}, stack=[{format_stack(self._stack)}])"
