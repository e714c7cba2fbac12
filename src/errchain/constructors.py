"""Constructors for error chains.

Root constructors (new, errorf) and with_stack record the call stack; the
wrap family only adds messages. None of them raise: an empty root message
falls back to the EOF leaf, a None error is left unwrapped, and a format
string that does not match its arguments is kept verbatim with a BADFORMAT
marker.

Example:
    >>> err = wrap(new("connection reset"), "fetch user 42")
    >>> str(err)
    'fetch user 42: connection reset'
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .config import degradation_level
from .node import EOF, ChainError
from .stack import capture

logger = logging.getLogger("errchain.constructors")


def _sprintf(fmt: str, args: tuple[object, ...]) -> str:
    """Printf-style interpolation that degrades instead of raising."""
    if not args:
        return fmt
    # A lone mapping fills %(key)s specifiers; without any it is a positional argument
    keyed = len(args) == 1 and isinstance(args[0], Mapping) and "%(" in fmt
    try:
        return fmt % (args[0] if keyed else args)
    except (TypeError, ValueError, KeyError) as e:
        logger.log(degradation_level(), f"Format {fmt!r} does not match its arguments: {e}")
        return f"{fmt}%!(BADFORMAT {', '.join(map(repr, args))})"


def _root(message: str) -> ChainError:
    stack = capture()
    return ChainError(message, None, stack) if message else ChainError("", EOF, stack)


def _link(err: BaseException | None, message: str, op: str) -> ChainError:
    if err is None:
        logger.log(degradation_level(), f"{op}() called without an error, returning an unwrapped node")
    return ChainError(message, err)


# ═══════════════════════════════════════════════════════════════════════════════
# Roots
# ═══════════════════════════════════════════════════════════════════════════════


def new(message: str) -> ChainError:
    """Create a root error with the current call stack."""
    return _root(message)


def errorf(fmt: str, *args: object) -> ChainError:
    """Create a root error from a printf-style format and the current call stack."""
    return _root(_sprintf(fmt, args))


# ═══════════════════════════════════════════════════════════════════════════════
# Wrapping
# ═══════════════════════════════════════════════════════════════════════════════


def wrap(err: BaseException | None, message: str) -> ChainError:
    """Wrap `err` with a message."""
    return _link(err, message, "wrap")


def wrapf(err: BaseException | None, fmt: str, *args: object) -> ChainError:
    """Wrap `err` with a printf-style formatted message."""
    return _link(err, _sprintf(fmt, args), "wrapf")


def with_stack(err: BaseException | None) -> ChainError:
    """Record the current call stack on top of `err` without adding a message."""
    if err is None:
        logger.log(degradation_level(), "with_stack() called without an error, returning an unwrapped node")
    return ChainError("", err, capture())


def with_message(err: BaseException | None, message: str) -> ChainError:
    """Add a message to `err` without recording a stack."""
    return _link(err, message, "with_message")


def with_messagef(err: BaseException | None, fmt: str, *args: object) -> ChainError:
    """Add a printf-style formatted message to `err` without recording a stack."""
    return _link(err, _sprintf(fmt, args), "with_messagef")
