"""Pseudo nesting: ``a:hover`` moves into ``a`` as ``&:hover``."""

from __future__ import annotations

import logging

from cssnest.factory import CloneNodeFactory, NodeFactory
from cssnest.model.nodes import AtRule, Container, Root, Rule
from cssnest.selectors import IMPLICIT_PARENT, is_direct_pseudo

logger = logging.getLogger(__name__)


def _absorbs(base_part: str, candidate: Rule) -> bool:
    parts = candidate.selectors
    return bool(parts) and all(is_direct_pseudo(base_part, p) for p in parts)


def nest_pseudos(container: Container, factory: NodeFactory | None = None) -> None:
    """Move pseudo-class/element rules under the sibling rule they extend.

    A candidate is absorbed only when every part of its selector list
    extends the same part of the base selector list.  With a multi-part
    base such as ``a, b`` the nested ``&:hover`` applies to every part.
    """
    factory = factory or CloneNodeFactory()
    rules = container.rules()

    for base in rules:
        if base.parent is not container:
            continue
        for base_part in base.selectors:
            for candidate in rules:
                if candidate is base or candidate.parent is not container:
                    continue
                if not _absorbs(base_part, candidate):
                    continue
                selector = ", ".join(
                    IMPLICIT_PARENT + part[len(base_part):] for part in candidate.selectors
                )
                nested = factory.rule(candidate, selector)
                nested.append(*(child.clone() for child in candidate.nodes))
                base.append(nested)
                candidate.remove()
                logger.debug("Nested %r inside %r as %r", candidate.selector, base.selector, selector)

    for node in list(container.nodes):
        if isinstance(node, (Rule, AtRule)):
            nest_pseudos(node, factory)


class PseudoNestingTransform:
    """Apply :func:`nest_pseudos` to the whole stylesheet."""

    def __init__(self, factory: NodeFactory | None = None) -> None:
        self.factory = factory or CloneNodeFactory()

    def apply(self, root: Root) -> Root:
        nest_pseudos(root, self.factory)
        return root
