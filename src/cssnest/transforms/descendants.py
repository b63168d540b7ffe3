"""Descendant nesting: ``.nav a { ... }`` becomes ``.nav { a { ... } }``."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from cssnest.factory import CloneNodeFactory, NodeFactory
from cssnest.model.nodes import AtRule, Container, Root, Rule
from cssnest.selectors import split_descendant, unique

logger = logging.getLogger(__name__)


def _last_child_rule(
    container: Container, selector: str, exclude: Sequence[Rule] = ()
) -> Rule | None:
    found = None
    for rule in container.rules():
        if rule.selector == selector and not any(rule is r for r in exclude):
            found = rule
    return found


def nest_descendants(container: Container, factory: NodeFactory | None = None) -> None:
    """Split descendant selectors of *container*'s rules into nested rules.

    Only the last space is split: ``a b c`` nests ``c`` inside a parent
    rule ``a b``, and that parent keeps its two-token selector.  Selector
    parts that cannot be split stay on the original rule.
    """
    factory = factory or CloneNodeFactory()
    pending = [
        rule
        for rule in container.rules()
        if any(split_descendant(part) for part in rule.selectors)
    ]

    for i, rule in enumerate(pending):
        kept: list[str] = []
        for part in unique(rule.selectors):
            split = split_descendant(part)
            if split is None:
                kept.append(part)
                continue
            parent_selector, child_selector = split

            parent = _last_child_rule(container, parent_selector, exclude=pending[i:])
            if parent is None:
                parent = factory.rule(rule, parent_selector)
                container.append(parent)
            nested = _last_child_rule(parent, child_selector)
            if nested is None:
                nested = factory.rule(rule, child_selector)
                parent.append(nested)
            nested.append(*(child.clone() for child in rule.nodes))
            logger.debug("Nested %r inside %r", child_selector, parent_selector)

        if kept:
            rule.selector = ", ".join(kept)
        else:
            rule.remove()

    for node in list(container.nodes):
        if isinstance(node, (Rule, AtRule)):
            nest_descendants(node, factory)


class DescendantNestingTransform:
    """Apply :func:`nest_descendants` to the whole stylesheet."""

    def __init__(self, factory: NodeFactory | None = None) -> None:
        self.factory = factory or CloneNodeFactory()

    def apply(self, root: Root) -> Root:
        nest_descendants(root, self.factory)
        return root
