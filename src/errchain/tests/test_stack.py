"""Tests for stack capture and frame formatting."""

from __future__ import annotations

import os
import sys
import types

import pytest
from pydantic import ValidationError

import errchain.stack as stack_module
from errchain import Frame, capture, format_stack, new, with_stack


def _here() -> str:
    return os.path.abspath(__file__)


# ═════════════════════════════════════════════════════════════════════════════
# Capture
# ═════════════════════════════════════════════════════════════════════════════


def test_capture_starts_at_caller() -> None:
    line = sys._getframe().f_lineno + 1
    stack = capture()

    top = stack[0]
    assert top.function == f"{__name__}.test_capture_starts_at_caller"
    assert os.path.abspath(top.file) == _here()
    assert top.line == line


def test_constructor_frames_are_not_reported() -> None:
    """The first frame of a constructed error is the constructor's caller."""
    line = sys._getframe().f_lineno + 1
    err = new("boom")

    assert err.stack is not None
    assert err.stack[0].name == "test_constructor_frames_are_not_reported"
    assert err.stack[0].line == line
    assert all(not f.function.startswith("errchain.constructors") for f in err.stack)


def test_with_stack_frames_start_at_caller() -> None:
    err = with_stack(ValueError("x"))

    assert err.stack is not None
    assert err.stack[0].name == "test_with_stack_frames_start_at_caller"


def test_capture_skip_drops_callers() -> None:
    def helper() -> tuple[Frame, ...]:
        return capture(skip=1)

    stack = helper()
    assert stack[0].name == "test_capture_skip_drops_callers"


def test_capture_is_innermost_first() -> None:
    def inner() -> tuple[Frame, ...]:
        return capture()

    def outer() -> tuple[Frame, ...]:
        return inner()

    names = [f.name for f in outer()[:3]]
    assert names == ["inner", "outer", "test_capture_is_innermost_first"]


def test_nested_function_uses_qualified_name() -> None:
    def helper() -> tuple[Frame, ...]:
        return capture()

    assert helper()[0].function.endswith("test_nested_function_uses_qualified_name.<locals>.helper")


def test_capture_disabled_returns_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERRCHAIN_STACK_ENABLED", "false")

    assert capture() == ()
    assert new("x").stack == ()


def test_capture_respects_max_depth(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERRCHAIN_STACK_MAX_DEPTH", "2")

    stack = capture()
    assert len(stack) == 2
    assert stack[0].name == "test_capture_respects_max_depth"


def test_capture_without_introspection_returns_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    """Interpreters without sys._getframe yield an empty stack, not an error."""
    monkeypatch.setattr(stack_module, "sys", types.SimpleNamespace())

    assert capture() == ()
    err = new("still works")
    assert err.stack == ()
    assert str(err) == "still works"


# ═════════════════════════════════════════════════════════════════════════════
# Frame Formatting
# ═════════════════════════════════════════════════════════════════════════════


FRAME = Frame(function="app.db.Pool.query", file="/srv/app/db.py", line=42)


def test_frame_format_specs() -> None:
    assert format(FRAME, "s") == "db.py"
    assert format(FRAME, "d") == "42"
    assert format(FRAME, "n") == "query"
    assert format(FRAME, "v") == "/srv/app/db.py:42"
    assert format(FRAME, "+v") == "app.db.Pool.query\n\t/srv/app/db.py:42"


def test_frame_unknown_spec_falls_back_to_location() -> None:
    assert format(FRAME, "zz") == "/srv/app/db.py:42"
    assert format(FRAME, "") == "/srv/app/db.py:42"
    assert str(FRAME) == "/srv/app/db.py:42"


def test_frame_is_immutable() -> None:
    with pytest.raises(ValidationError):
        FRAME.line = 1  # type: ignore[misc]


def test_frame_rejects_negative_line() -> None:
    with pytest.raises(ValidationError):
        Frame(function="f", file="x.py", line=-1)


def test_format_stack_one_block_per_frame() -> None:
    other = Frame(function="app.main.run", file="/srv/app/main.py", line=7)

    assert format_stack((FRAME, other)) == (
        "app.db.Pool.query\n\t/srv/app/db.py:42\n"
        "app.main.run\n\t/srv/app/main.py:7"
    )
    assert format_stack(()) == ""
