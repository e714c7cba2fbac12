"""The error node: an immutable exception carrying a message, a cause and a stack.

Nodes are normally built through the constructors in errchain.constructors;
the class is public so chains can be assembled by hand (e.g. with fixed frames
in tests) and so `except ChainError` works.
"""

from __future__ import annotations

from typing import Final

from .stack import StackTrace


class EndOfInput(EOFError):
    """Type of the EOF sentinel. Pickles by reference so identity checks survive."""

    def __reduce__(self) -> str:
        return "EOF"


# Default leaf for root constructors given an empty message
EOF: Final[EndOfInput] = EndOfInput("EOF")

# Attributes the interpreter and traceback machinery may still set on a raised node
_RUNTIME_ATTRS = frozenset({"__traceback__", "__context__", "__suppress_context__", "__notes__"})


class ChainError(Exception):
    """One link of an error chain.

    Immutable after construction: message, cause, stack, args and __cause__
    reject assignment. Only the attributes Python manages while an exception
    propagates (traceback, context, notes) stay writable.
    `str()` gives the compact one-line rendering; format specs select a
    rendering verb, e.g. `f"{err:+v}"` for messages with stack traces.

    Example:
        >>> err = ChainError("open config", cause=ChainError("permission denied"))
        >>> str(err)
        'open config: permission denied'
    """

    def __init__(self, message: str = "", cause: BaseException | None = None, stack: StackTrace | None = None) -> None:
        super().__init__(message)
        object.__setattr__(self, "_message", message)
        object.__setattr__(self, "_cause", cause)
        object.__setattr__(self, "_stack", stack)
        # Lets Python's own traceback printing follow the chain when raised
        if isinstance(cause, BaseException):
            object.__setattr__(self, "__cause__", cause)

    @property
    def message(self) -> str:
        return self._message

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    @property
    def stack(self) -> StackTrace | None:
        return self._stack

    def unwrap(self) -> BaseException | None:
        """Next value in the chain, or None at the root."""
        return self._cause

    def __setattr__(self, name: str, value: object) -> None:
        if name not in _RUNTIME_ATTRS:
            raise AttributeError(f"{type(self).__name__} is immutable, cannot set {name!r}")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if name not in _RUNTIME_ATTRS:
            raise AttributeError(f"{type(self).__name__} is immutable, cannot delete {name!r}")
        super().__delattr__(name)

    def __str__(self) -> str:
        from .format import Verb, render
        return render(self, Verb.COMPACT)

    def __format__(self, spec: str) -> str:
        from .format import Verb, render
        return render(self, Verb.parse(spec))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    def __reduce__(self) -> tuple[type[ChainError], tuple[str, BaseException | None, StackTrace | None]]:
        return type(self), (self._message, self._cause, self._stack)
