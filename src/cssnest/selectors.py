"""Textual helpers for selector lists.

These are lexical checks on selector text, not a CSS selector parser:

    split_selectors(".a, .b:is(p, q)")   -> [".a", ".b:is(p, q)"]
    join_selectors([".b", ".a", ".b"])   -> ".a, .b"
    is_direct_pseudo("a", "a:hover")     -> True
    split_descendant(".nav ul li")       -> (".nav ul", "li")
"""

from __future__ import annotations

import string
from collections.abc import Iterable

__all__ = [
    "IMPLICIT_PARENT",
    "is_direct_pseudo",
    "join_selectors",
    "normalize_selector",
    "split_descendant",
    "split_selectors",
    "unique",
]

IMPLICIT_PARENT = "&"

_PSEUDO_NAME_START = frozenset(string.ascii_letters + "-_")
_COMBINATOR_CHARS = ">+~|"
_OPENERS = {"(": ")", "[": "]"}


def _split_top_level(text: str, is_separator) -> list[str]:
    """Split *text* on characters for which *is_separator* is true.

    Separators inside parentheses, brackets or quoted strings are ignored.
    """
    pieces: list[str] = []
    current: list[str] = []
    closers: list[str] = []
    quote = ""
    escaped = False
    for ch in text:
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif quote:
            if ch == quote:
                quote = ""
        elif ch in "\"'":
            quote = ch
        elif ch in _OPENERS:
            closers.append(_OPENERS[ch])
        elif closers and ch == closers[-1]:
            closers.pop()
        elif not closers and is_separator(ch):
            pieces.append("".join(current))
            current = []
            continue
        current.append(ch)
    pieces.append("".join(current))
    return pieces


def split_selectors(text: str) -> list[str]:
    """Split a comma-separated selector list into trimmed, non-empty parts."""
    parts = _split_top_level(text, lambda ch: ch == ",")
    return [p.strip() for p in parts if p.strip()]


def normalize_selector(text: str) -> str:
    """Collapse whitespace runs and separate list parts with ``", "``."""
    return ", ".join(
        " ".join(t for t in _split_top_level(part, str.isspace) if t)
        for part in split_selectors(text)
    )


def unique(items: Iterable[str]) -> list[str]:
    """Drop duplicates, keeping the first occurrence of each item."""
    return list(dict.fromkeys(items))


def join_selectors(parts: Iterable[str]) -> str:
    """Deduplicate, sort and comma-join selector parts."""
    return ", ".join(sorted(unique(parts)))


def is_direct_pseudo(base: str, candidate: str) -> bool:
    """Return True if *candidate* is *base* followed by a pseudo suffix.

    The suffix must start with one or two colons and then a letter,
    hyphen or underscore: ``a`` -> ``a:hover`` or ``a::before``.
    Escapes, attribute selectors and colons inside brackets are not
    understood.
    """
    if not base or len(candidate) <= len(base) or not candidate.startswith(base):
        return False
    rest = candidate[len(base):]
    colons = len(rest) - len(rest.lstrip(":"))
    if colons not in (1, 2) or len(rest) == colons:
        return False
    return rest[colons] in _PSEUDO_NAME_START


def split_descendant(part: str) -> tuple[str, str] | None:
    """Split one selector part into ``(parent, child)`` at its last space.

    Returns None for a single compound selector and for any selector
    using an explicit combinator, which is left untouched.
    """
    tokens = [t for t in _split_top_level(part.strip(), str.isspace) if t]
    if len(tokens) < 2:
        return None
    if any(t[0] in _COMBINATOR_CHARS or t[-1] in _COMBINATOR_CHARS for t in tokens):
        return None
    return " ".join(tokens[:-1]), tokens[-1]
