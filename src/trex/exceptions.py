"""Exceptions for the t-rex resolution engine.

Exception Hierarchy:
TRexError (base)
├── ValidationError   # Malformed provider chain (construction time)
└── FinalError        # Terminal render-time error, never redirected

Ordinary exceptions raised by user callables are not wrapped. They are
redirected to the ``500`` property of the chain; only when no ``500``
property resolves do they surface to the caller, with the rendering stack
appended to their message:

    ```
    ValueError: Hello! --> tRex stack: [main@rT]
    ```

"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING

from trex import terminal

if TYPE_CHECKING:
    from trex.render_context import Frame


class ErrorCode(Enum):
    """Searchable error codes for t-rex errors.

    Format: T-{CATEGORY}-{NUMBER}
    Categories: VAL (chain validation), RUN (rendering)
    """

    # Chain validation errors (T-VAL-xxx)
    INVALID_ID = "T-VAL-001"
    DUPLICATE_ID = "T-VAL-002"

    # Rendering errors (T-RUN-xxx)
    RESOURCE_NOT_FOUND = "T-RUN-001"
    UNCAUGHT_ERROR = "T-RUN-002"
    READ_ONLY = "T-RUN-003"
    NOT_ITERABLE = "T-RUN-004"
    NO_CALLER = "T-RUN-005"

    @property
    def category(self) -> str:
        """Error category ('validation' or 'runtime')."""
        prefix = self.value.split("-")[1]
        return {
            "VAL": "validation",
            "RUN": "runtime",
        }.get(prefix, "unknown")


def format_call_stack(stack: Sequence[Frame] | None) -> str:
    """Format a rendering call stack for compact diagnostics.

    Args:
        stack: Frames, innermost first

    Returns:
        Multi-line stack listing, or an empty string for an empty stack

    Example:
        >>> print(format_call_stack([Frame("nav", "page"), Frame("main", "base")]))
        Call stack:
          • nav@page
          • main@base
    """
    if not stack:
        return ""

    lines = [terminal.dim_text("Call stack:")]
    for frame in stack:
        lines.append(f"  • {terminal.frame(frame.location, frame.provider_id)}")
    return "\n".join(lines)


class TRexError(Exception):
    """Base exception for all t-rex errors.

    Attributes:
        message: Error description without decoration
        code: Optional ErrorCode for searchable error identification
    """

    code: ErrorCode | None = None

    def __init__(self, message: str, *, code: ErrorCode | None = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)

    def format_compact(self) -> str:
        """Format error as a structured, human-readable summary.

        Format::

            T-RUN-001: "Resource 'title' not found." tRex stack: [main@page]

        Returns:
            Diagnostic string prefixed with the error code when one is set.
        """
        return terminal.format_error_header(
            self.code.value if self.code else None,
            self.message,
        )


class ValidationError(TRexError):
    """Provider chain defect detected while building the merged lookup.

    Raised before any rendering begins and never redirected to ``404`` or
    ``500``:

        >>> t_rex({"main": "x"})
        ValidationError: "Root template lacks a valid id."
    """

    code: ErrorCode | None = ErrorCode.INVALID_ID


class FinalError(TRexError):
    """Terminal rendering error that is not intercepted again.

    Raised for the default not-found outcome, for an uncaught error when no
    ``500`` property resolves, and for misuse of the meta-locations. The
    message embeds the rendering stack as ``tRex stack: [name@id, ...]``.

    When ``previous`` is set, the top-level entrypoint re-raises that
    original exception with this error's message appended instead of
    raising the FinalError itself.

    Attributes:
        previous: The chained original exception, if any
        call_stack: Frames active when the error was raised, innermost first
    """

    code: ErrorCode | None = ErrorCode.RESOURCE_NOT_FOUND

    def __init__(
        self,
        message: str,
        previous: BaseException | None = None,
        *,
        call_stack: Sequence[Frame] = (),
        code: ErrorCode | None = None,
    ):
        self.previous = previous
        self.call_stack = tuple(call_stack)
        super().__init__(message, code=code)

    def format_compact(self) -> str:
        """Format the error with its call stack listed one frame per line."""
        parts = [super().format_compact()]
        if self.previous is not None:
            parts.append(
                f"  {terminal.hint('Caused by:')} "
                f"{type(self.previous).__name__}: {self.previous}"
            )
        if self.call_stack:
            parts.append("")
            parts.append(format_call_stack(self.call_stack))
        return "\n".join(parts)
