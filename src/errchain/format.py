"""Rendering error chains.

Verbs select how much of a chain is shown:
    s   compact: non-empty messages joined with ": ", outermost first
    v   default: same as compact
    +v  detailed: each message on its own line, followed by that node's
        captured frames; a blank line separates stack blocks that follow
        one another directly; the leaf comes last without a stack
    q   quoted: repr() of the compact text

Unknown verbs render as the default. Rendering never raises.

Example:
    >>> from errchain import new, wrap
    >>> err = wrap(wrap(new("a"), "b"), "c")
    >>> f"{err}"
    'c: b: a'
"""

from __future__ import annotations

from enum import StrEnum

from .chain import walk
from .node import ChainError
from .stack import format_stack


class Verb(StrEnum):
    """Rendering modes, valued by their format spec."""
    COMPACT = "s"
    DEFAULT = "v"
    DETAILED = "+v"
    QUOTED = "q"

    @classmethod
    def parse(cls, spec: str) -> Verb:
        """Map a format spec to a verb, falling back to DEFAULT."""
        return _VERBS.get(spec, cls.DEFAULT)


_VERBS: dict[str, Verb] = {verb.value: verb for verb in Verb}


def _split(err: BaseException | None) -> tuple[list[ChainError], BaseException | None]:
    """Separate the chain into its library nodes and the leaf that ends it."""
    nodes: list[ChainError] = []
    for link in walk(err):
        if not isinstance(link, ChainError):
            return nodes, link
        nodes.append(link)
    return nodes, None


def _leaf_text(leaf: BaseException | None) -> str:
    if leaf is None:
        return ""
    try:
        return str(leaf)
    except Exception:
        return f"<unprintable {type(leaf).__name__} object>"


def compact(err: BaseException | None) -> str:
    """One-line rendering: messages joined with ": ", outermost first."""
    nodes, leaf = _split(err)
    parts = [node.message for node in nodes if node.message]
    if text := _leaf_text(leaf):
        parts.append(text)
    return ": ".join(parts)


def detailed(err: BaseException | None) -> str:
    """Multi-line rendering with every captured stack under its node's message."""
    nodes, leaf = _split(err)
    lines: list[str] = []
    after_stack = False
    for node in nodes:
        if node.message:
            lines.append(node.message)
            after_stack = False
        if node.stack:
            # Blank line keeps back-to-back stack blocks apart
            if after_stack:
                lines.append("")
            lines.append(format_stack(node.stack))
            after_stack = True
    if text := _leaf_text(leaf):
        lines.append(text)
    return "\n".join(lines)


def render(err: BaseException | None, verb: Verb | str = Verb.DEFAULT) -> str:
    """Render `err` under `verb` (a Verb or its format spec)."""
    verb = verb if isinstance(verb, Verb) else Verb.parse(verb)
    match verb:
        case Verb.DETAILED: return detailed(err)
        case Verb.QUOTED: return repr(compact(err))
        case _: return compact(err)
