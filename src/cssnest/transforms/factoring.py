"""Common-property factoring: pull shared declarations into grouped rules.

Given sibling rules::

    .a { color: red; margin: 0; }
    .b { color: red; }

every ``property: value`` pair found in two or more siblings moves to a new
rule placed before the first of them::

    .a, .b { color: red; }
    .a { margin: 0; }

Pairs are grouped by the exact set of siblings sharing them, so pairs
shared by ``{.a, .b}`` and pairs shared by ``{.a, .b, .c}`` land in two
different rules.  Groups are emitted in sorted order of their sibling
indices, and declarations inside a group keep first-occurrence order.
"""

from __future__ import annotations

import logging

from cssnest.factory import CloneNodeFactory, NodeFactory
from cssnest.model.nodes import AtRule, Container, Declaration, DeclarationKey, Root, Rule
from cssnest.selectors import join_selectors
from cssnest.transforms.cleanup import remove_empty_rules

logger = logging.getLogger(__name__)


def sharing_groups(rules: list[Rule]) -> dict[tuple[int, ...], list[DeclarationKey]]:
    """Map each sharing index set (two or more siblings) to its declaration keys."""
    sharing: dict[DeclarationKey, set[int]] = {}
    for i, rule in enumerate(rules):
        for decl in rule.declarations():
            sharing.setdefault(decl.key, set()).add(i)

    groups: dict[tuple[int, ...], list[DeclarationKey]] = {}
    for key, indices in sharing.items():
        if len(indices) >= 2:
            groups.setdefault(tuple(sorted(indices)), []).append(key)
    return {indices: groups[indices] for indices in sorted(groups)}


def _first_declaration(rule: Rule, key: DeclarationKey) -> Declaration:
    return next(d for d in rule.declarations() if d.key == key)


def _factor_siblings(container: Container, rules: list[Rule], factory: NodeFactory) -> None:
    for indices, keys in sharing_groups(rules).items():
        members = [rules[i] for i in indices]
        first = members[0]
        selector = join_selectors(part for rule in members for part in rule.selectors)
        grouped = factory.rule(first, selector)
        for prop, value, important in keys:
            reference = _first_declaration(first, (prop, value, important))
            grouped.append(factory.declaration(reference, prop, value, important))
        container.insert_before(first, grouped)

        shared = set(keys)
        for rule in members:
            for decl in rule.declarations():
                if decl.key in shared:
                    decl.remove()
        logger.debug("Factored %d declaration(s) into %r", len(keys), selector)


def factor_common_properties(container: Container, factory: NodeFactory | None = None) -> None:
    """Factor declarations shared by sibling rules, recursively."""
    factory = factory or CloneNodeFactory()
    rules = container.rules()
    if len(rules) >= 2:
        _factor_siblings(container, rules, factory)
        remove_empty_rules(container)

    for node in list(container.nodes):
        if isinstance(node, (Rule, AtRule)):
            factor_common_properties(node, factory)


class CommonPropertyFactoringTransform:
    """Apply :func:`factor_common_properties` to the whole stylesheet."""

    def __init__(self, factory: NodeFactory | None = None) -> None:
        self.factory = factory or CloneNodeFactory()

    def apply(self, root: Root) -> Root:
        factor_common_properties(root, self.factory)
        return root
