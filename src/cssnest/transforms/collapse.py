"""Sibling collapsing: nested rules with identical blocks share one selector list."""

from __future__ import annotations

import logging

from cssnest.factory import CloneNodeFactory, NodeFactory
from cssnest.model.nodes import AtRule, Container, Declaration, Node, Root, Rule
from cssnest.selectors import join_selectors

logger = logging.getLogger(__name__)


def block_signature(container: Container) -> tuple:
    """Order-independent signature of a block's direct content.

    Declarations compare as a sorted multiset of exact ``(prop, value,
    important)`` keys; nested rules and at-rules compare structurally.
    """
    decls = tuple(sorted(d.key for d in container.declarations()))
    nested = tuple(
        _fingerprint(n) for n in container.nodes if not isinstance(n, Declaration)
    )
    return decls, nested


def _fingerprint(node: Node) -> tuple:
    if isinstance(node, Rule):
        return ("rule", node.selector, block_signature(node))
    if isinstance(node, AtRule):
        return ("atrule", node.name, node.params, node.has_block, block_signature(node))
    return (node.type,)


def _collapse_children(parent: Rule, factory: NodeFactory) -> None:
    groups: dict[tuple, list[Rule]] = {}
    for child in parent.rules():
        groups.setdefault(block_signature(child), []).append(child)

    for members in groups.values():
        if len(members) < 2:
            continue
        first = members[0]
        selector = join_selectors(part for rule in members for part in rule.selectors)
        merged = factory.rule(first, selector)
        merged.append(*(child.clone() for child in first.nodes))
        parent.insert_before(first, merged)
        for rule in members:
            rule.remove()
        logger.debug("Collapsed %d rules into %r", len(members), selector)


def collapse_nested_siblings(container: Container, factory: NodeFactory | None = None) -> None:
    """Merge identical sibling rules nested inside the rules of *container*.

    The direct children of the stylesheet root and of at-rules are not
    merged with each other; only rules nested in a rule are.
    """
    factory = factory or CloneNodeFactory()
    for node in list(container.nodes):
        if isinstance(node, Rule):
            _collapse_children(node, factory)
            collapse_nested_siblings(node, factory)
        elif isinstance(node, AtRule):
            collapse_nested_siblings(node, factory)


class SiblingCollapsingTransform:
    """Apply :func:`collapse_nested_siblings` to the whole stylesheet."""

    def __init__(self, factory: NodeFactory | None = None) -> None:
        self.factory = factory or CloneNodeFactory()

    def apply(self, root: Root) -> Root:
        collapse_nested_siblings(root, self.factory)
        return root
