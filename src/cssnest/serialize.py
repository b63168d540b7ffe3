"""Print a stylesheet tree back to nested CSS text."""

from __future__ import annotations

from cssnest.model.nodes import AtRule, Container, Declaration, Node, Root, Rule

__all__ = ["to_css"]


def _header(node: Container) -> str:
    if isinstance(node, Rule):
        return node.selector
    if isinstance(node, AtRule):
        return f"@{node.name} {node.params}".rstrip()
    return ""


def _emit(node: Node, depth: int, indent: str, lines: list[str]) -> None:
    pad = indent * depth
    if isinstance(node, Declaration):
        important = " !important" if node.important else ""
        lines.append(f"{pad}{node.prop}: {node.value}{important};")
    elif isinstance(node, AtRule) and not node.has_block:
        lines.append(f"{pad}{_header(node)};")
    elif isinstance(node, Container):
        if node.is_empty:
            lines.append(f"{pad}{_header(node)} {{}}")
            return
        lines.append(f"{pad}{_header(node)} {{")
        for child in node.nodes:
            _emit(child, depth + 1, indent, lines)
        lines.append(f"{pad}}}")


def to_css(node: Node, indent: str = "  ") -> str:
    """Serialize *node* (usually a :class:`Root`) with one statement per line.

    Nested blocks are indented by *indent* per level.
    """
    lines: list[str] = []
    children = node.nodes if isinstance(node, Root) else [node]
    for child in children:
        _emit(child, 0, indent, lines)
    return "\n".join(lines) + "\n" if lines else ""
