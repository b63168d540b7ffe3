"""cssnest model layer -- public type re-exports."""

from cssnest.model.nodes import (
    AtRule,
    Container,
    Declaration,
    DeclarationKey,
    Node,
    Position,
    Root,
    Rule,
)

__all__ = [
    "Node",
    "Container",
    "Root",
    "Rule",
    "AtRule",
    "Declaration",
    "DeclarationKey",
    "Position",
]
