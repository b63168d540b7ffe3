"""Structural cleanup: prune rules left without declarations or nested rules."""

from __future__ import annotations

import logging

from cssnest.model.nodes import AtRule, Container, Root, Rule

logger = logging.getLogger(__name__)


def remove_empty_rules(container: Container) -> None:
    """Remove every empty rule below *container*.

    Children are cleaned before their parent is checked, so a rule that
    only held empty rules goes away in the same run.  At-rules are
    descended into but never removed.
    """
    for node in list(container.nodes):
        if isinstance(node, (Rule, AtRule)):
            remove_empty_rules(node)
        if isinstance(node, Rule) and node.is_empty:
            logger.debug("Removing empty rule %r", node.selector)
            node.remove()


class CleanupTransform:
    """Prune empty rules from the whole tree."""

    def apply(self, root: Root) -> Root:
        remove_empty_rules(root)
        return root
