"""Lark Transformer that converts a stylesheet parse tree into model nodes."""

from __future__ import annotations

import functools
import re
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError

from cssnest.model.nodes import AtRule, Declaration, Node, Position, Root, Rule
from cssnest.parser.errors import ParseError
from cssnest.selectors import normalize_selector

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

# A quoted string (kept verbatim) or a comment (blanked out).
_COMMENT_RE = re.compile(
    r"""("(?:\\.|[^"\\])*"|'(?:\\.|[^'\\])*')|/\*.*?\*/""",
    re.DOTALL,
)

_IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)


def _strip_comments(source: str) -> str:
    """Blank out comments, keeping newlines so token positions stay valid."""

    def blank(match: re.Match[str]) -> str:
        if match.group(1):
            return match.group(1)
        return re.sub(r"[^\n]", " ", match.group(0))

    return _COMMENT_RE.sub(blank, source)


def _position(token: Token) -> Position | None:
    if token.line is None or token.column is None:
        return None
    return Position(line=token.line, column=token.column)


class StylesheetTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into a :class:`Root` of model nodes."""

    def declaration(self, items: list[Token]) -> Declaration:
        token = items[0]
        prop, _, value = str(token).partition(":")
        value = value.strip()
        important = False
        match = _IMPORTANT_RE.search(value)
        if match:
            value = value[: match.start()]
            important = True
        return Declaration(
            prop=prop.strip(),
            value=value,
            important=important,
            source=_position(token),
        )

    def block(self, items: list[Node]) -> list[Node]:
        return list(items)

    def rule(self, items: list[object]) -> Rule:
        token, children = items
        assert isinstance(token, Token)
        return Rule(
            selector=normalize_selector(str(token)),
            nodes=children,  # type: ignore[arg-type]
            source=_position(token),
        )

    def at_rule(self, items: list[object]) -> AtRule:
        keyword = items[0]
        assert isinstance(keyword, Token)
        params = str(items[1]).strip() if len(items) == 3 else ""
        return AtRule(
            name=str(keyword)[1:],
            params=params,
            nodes=items[-1],  # type: ignore[arg-type]
            source=_position(keyword),
        )

    def at_statement(self, items: list[Token]) -> AtRule:
        keyword = items[0]
        params = str(items[1]).strip() if len(items) == 2 else ""
        return AtRule(
            name=str(keyword)[1:],
            params=params,
            has_block=False,
            source=_position(keyword),
        )

    def start(self, items: list[Node]) -> Root:
        return Root(nodes=list(items))


@functools.lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(),
        parser="lalr",
        start="start",
    )


def parse_css(source: str) -> Root:
    """Parse stylesheet source into a :class:`Root` tree.

    Comments are dropped.  Raises :class:`ParseError` with the line and
    column of the first unexpected character or token.
    """
    try:
        tree = _parser().parse(_strip_comments(source))
    except LarkError as e:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        raise ParseError(str(e), line=line, column=column) from e
    return StylesheetTransformer().transform(tree)
