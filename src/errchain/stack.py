"""Call-stack capture for error nodes.

Frames are recorded innermost first, starting at the first frame outside this
package, so the top of every captured stack is the code that called the
constructor.

Frame format specs:
    s   file base name
    d   line number
    n   function name without its module prefix
    v   file:line
    +v  function, then file:line on an indented second line
"""

from __future__ import annotations

import logging
import os
import sys
from types import FrameType
from typing import TypeAlias

from pydantic import BaseModel, ConfigDict, Field

from .config import degradation_level, effective_settings

logger = logging.getLogger("errchain.stack")

# Frames whose code lives directly in this directory belong to the library
_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))


class Frame(BaseModel):
    """One captured call site. Pydantic frozen=True for immutability."""

    model_config = ConfigDict(
        frozen=True, extra="forbid", revalidate_instances="never",
        json_schema_extra={"title": "Frame", "examples": [{"function": "app.main.run", "file": "/srv/app/main.py", "line": 42}]},
    )

    function: str
    file: str
    line: int = Field(default=0, ge=0)

    @property
    def name(self) -> str:
        """Function name without its module prefix."""
        return self.function.rsplit(".", 1)[-1]

    def __format__(self, spec: str) -> str:
        match spec:
            case "s": return os.path.basename(self.file)
            case "d": return str(self.line)
            case "n": return self.name
            case "+v": return f"{self.function}\n\t{self.file}:{self.line}"
            case _: return f"{self.file}:{self.line}"

    def __str__(self) -> str:
        return format(self, "v")


StackTrace: TypeAlias = tuple[Frame, ...]

# Shared empty stack returned whenever nothing can be recorded
_EMPTY_STACK: StackTrace = ()


def _is_internal(frame: FrameType) -> bool:
    return os.path.dirname(os.path.abspath(frame.f_code.co_filename)) == _PACKAGE_DIR


def _to_frame(frame: FrameType) -> Frame:
    code = frame.f_code
    module = frame.f_globals.get("__name__", "?")
    # Skip validation: values come straight from the interpreter
    return Frame.model_construct(
        function=f"{module}.{code.co_qualname}",
        file=code.co_filename,
        line=frame.f_lineno or 0,
    )


def capture(skip: int = 0) -> StackTrace:
    """Capture the current call stack, innermost frame first.

    Library frames at the top of the stack are dropped, then `skip` further
    caller frames. Returns an empty stack when capture is disabled through
    ERRCHAIN_STACK_ENABLED or the interpreter offers no frame introspection.
    """
    settings = effective_settings().stack
    if not settings.enabled:
        return _EMPTY_STACK

    getframe = getattr(sys, "_getframe", None)
    if getframe is None:
        logger.log(degradation_level(), "Frame introspection unavailable, recording empty stack")
        return _EMPTY_STACK

    frame: FrameType | None = getframe(0)
    while frame is not None and _is_internal(frame):
        frame = frame.f_back
    for _ in range(skip):
        if frame is None:
            break
        frame = frame.f_back

    frames: list[Frame] = []
    limit = settings.max_depth
    while frame is not None and (limit is None or len(frames) < limit):
        frames.append(_to_frame(frame))
        frame = frame.f_back
    return tuple(frames)


def format_stack(stack: StackTrace) -> str:
    """Render frames one per call site as `function\\n\\tfile:line`."""
    return "\n".join(format(frame, "+v") for frame in stack)
