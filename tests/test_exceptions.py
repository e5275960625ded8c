"""Tests for error codes, compact diagnostics and terminal colouring."""

import pytest

from trex import ErrorCode, FinalError, Frame, ValidationError, t_rex
from trex import terminal
from trex.exceptions import format_call_stack


class TestErrorCodes:
    def test_categories(self) -> None:
        assert ErrorCode.INVALID_ID.category == "validation"
        assert ErrorCode.RESOURCE_NOT_FOUND.category == "runtime"

    def test_codes_are_unique(self) -> None:
        values = [code.value for code in ErrorCode]
        assert len(values) == len(set(values))


class TestFormatCompact:
    """``format_compact()`` adds the code and lists the stack."""

    def test_validation_error(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            t_rex({"id": "a"}, {"id": "a"})
        compact = terminal.strip_colors(exc_info.value.format_compact())
        assert compact == "T-VAL-002: \"Duplicate provider id 'a' found.\""

    def test_final_error_lists_frames(self) -> None:
        with pytest.raises(FinalError) as exc_info:
            t_rex({
                "id": "rT",
                "main": lambda t: t.layout(),
                "layout": lambda t: t.missing(),
            })
        compact = terminal.strip_colors(exc_info.value.format_compact())
        assert compact.startswith("T-RUN-001: \"Resource 'missing' not found.\"")
        assert compact.endswith("Call stack:\n  • layout@rT\n  • main@rT")

    def test_caused_by(self) -> None:
        error = FinalError(
            "tRex stack: [main@rT]",
            ValueError("Hello!"),
            call_stack=[Frame("main", "rT")],
            code=ErrorCode.UNCAUGHT_ERROR,
        )
        compact = terminal.strip_colors(error.format_compact())
        assert "Caused by: ValueError: Hello!" in compact

    def test_empty_stack(self) -> None:
        assert format_call_stack([]) == ""


class TestTerminal:
    def test_strip_colors(self) -> None:
        assert terminal.strip_colors("\033[36mmain\033[0m@\033[33mrT\033[0m") == "main@rT"

    def test_frame(self) -> None:
        assert terminal.strip_colors(terminal.frame("main", "rT")) == "main@rT"

    def test_header_without_code(self) -> None:
        assert terminal.format_error_header(None, "plain") == "plain"
