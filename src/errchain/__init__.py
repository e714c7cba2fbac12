"""errchain - Error values with cause chains and captured call stacks.

Build a chain by wrapping errors as they travel up the call stack, then
render it as much or as little as needed.

Quick Start:
    >>> from errchain import new, wrap, with_stack
    >>>
    >>> err = wrap(new("connection reset"), "fetch user 42")
    >>> str(err)
    'fetch user 42: connection reset'
    >>> print(f"{err:+v}")     # messages plus the stack captured by new()
    fetch user 42
    connection reset
    app.users.fetch
    	/srv/app/users.py:17
    ...

Inspecting Chains:
    >>> from errchain import EOF, cause, contains, new
    >>> contains(new(""), EOF)
    True

Configuration (environment):
    ERRCHAIN_STACK_ENABLED=false     # constructors record empty stacks
    ERRCHAIN_STACK_MAX_DEPTH=32      # cap frames per capture
    ERRCHAIN_CHAIN_MAX_DEPTH=500     # cap links per walk
"""

from __future__ import annotations

__version__ = "0.1.0"

from .chain import Wrapper, cause, contains, find, unwrap, walk
from .config import ErrchainSettings, clear_settings_cache, get_settings
from .constructors import errorf, new, with_message, with_messagef, with_stack, wrap, wrapf
from .format import Verb, render
from .node import EOF, ChainError
from .stack import Frame, StackTrace, capture, format_stack

__all__ = [
    # Nodes
    "ChainError", "EOF",
    # Constructors
    "new", "errorf", "wrap", "wrapf", "with_stack", "with_message", "with_messagef",
    # Chain
    "Wrapper", "unwrap", "walk", "cause", "contains", "find",
    # Formatting
    "Verb", "render",
    # Stacks
    "Frame", "StackTrace", "capture", "format_stack",
    # Config
    "ErrchainSettings", "get_settings", "clear_settings_cache",
]
