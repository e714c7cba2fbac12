"""Walking error chains one cause at a time.

Anything with an `unwrap()` method counts as a link; every other value is a
leaf. Chains built by this library are acyclic, but walks still stop after
ERRCHAIN_CHAIN_MAX_DEPTH links.
"""

from __future__ import annotations

import logging
from typing import Iterator, Protocol, TypeVar, runtime_checkable

from .config import effective_settings

logger = logging.getLogger("errchain.chain")

E = TypeVar("E", bound=BaseException)


@runtime_checkable
class Wrapper(Protocol):
    """Protocol for error values that wrap another error."""

    def unwrap(self) -> BaseException | None: ...


def unwrap(err: BaseException | None) -> BaseException | None:
    """Return the next value in the chain, or None for a leaf."""
    if isinstance(err, Wrapper):
        return err.unwrap()
    return None


def walk(err: BaseException | None) -> Iterator[BaseException]:
    """Yield `err` and each successive cause, outermost first."""
    limit = effective_settings().chain.max_depth
    depth = 0
    while err is not None:
        if depth == limit:
            logger.warning(f"Chain walk stopped after {limit} links")
            return
        yield err
        depth += 1
        err = unwrap(err)


def cause(err: BaseException | None) -> BaseException | None:
    """Innermost value of the chain (the root cause)."""
    last = None
    for last in walk(err):
        pass
    return last


def contains(err: BaseException | None, target: BaseException) -> bool:
    """Whether `target` itself is a link of the chain, e.g. `contains(err, EOF)`."""
    return any(link is target for link in walk(err))


def find(err: BaseException | None, kind: type[E]) -> E | None:
    """First link that is an instance of `kind`."""
    return next((link for link in walk(err) if isinstance(link, kind)), None)
