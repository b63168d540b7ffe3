"""Node factories used by the transforms to create new rules and declarations.

Transforms never call node constructors directly: a new node is always
derived from a reference node already in the tree, so that hosts whose
nodes carry extra context (source positions, raw formatting) can supply
a factory that builds compatible nodes.
"""

from __future__ import annotations

from typing import Protocol

from cssnest.errors import NodeConstructionError
from cssnest.model.nodes import Container, Declaration, Node, Rule

__all__ = ["CloneNodeFactory", "LiteralNodeFactory", "NodeFactory"]


class NodeFactory(Protocol):
    """Creates rules and declarations compatible with a reference node."""

    def rule(self, reference: Node, selector: str) -> Rule: ...

    def declaration(
        self, reference: Node, prop: str, value: str, important: bool = False
    ) -> Declaration: ...


def _template_rule(reference: Node) -> Rule | None:
    """Return *reference* if it is a rule, else the first rule in its tree."""
    if isinstance(reference, Rule):
        return reference
    top = reference.root()
    if isinstance(top, Rule):
        return top
    if isinstance(top, Container):
        return next(top.walk_rules(), None)
    return None


def _template_declaration(reference: Node) -> Declaration | None:
    if isinstance(reference, Declaration):
        return reference
    top = reference.root()
    if isinstance(top, Container):
        return next(top.walk_decls(), None)
    return None


class CloneNodeFactory:
    """Build new nodes by cloning an existing node of the same kind.

    The clone keeps the template's metadata (``source``) and drops its
    content.  Raises :class:`NodeConstructionError` when the tree holds no
    node of the requested kind.
    """

    def rule(self, reference: Node, selector: str) -> Rule:
        template = _template_rule(reference)
        if template is None:
            raise NodeConstructionError("rule")
        rule = template.clone_empty(selector=selector)
        assert isinstance(rule, Rule)
        return rule

    def declaration(
        self, reference: Node, prop: str, value: str, important: bool = False
    ) -> Declaration:
        template = _template_declaration(reference)
        if template is None:
            raise NodeConstructionError("declaration")
        decl = template.clone(prop=prop, value=value, important=important)
        assert isinstance(decl, Declaration)
        return decl


class LiteralNodeFactory:
    """Build new nodes directly from the model classes; never fails."""

    def rule(self, reference: Node, selector: str) -> Rule:
        return Rule(selector=selector)

    def declaration(
        self, reference: Node, prop: str, value: str, important: bool = False
    ) -> Declaration:
        return Declaration(prop=prop, value=value, important=important)
