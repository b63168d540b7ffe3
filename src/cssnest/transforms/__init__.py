from __future__ import annotations

import logging
from collections.abc import Mapping

from cssnest.config import NestOptions
from cssnest.factory import CloneNodeFactory, NodeFactory
from cssnest.model.nodes import Root
from cssnest.transforms.base import Transform
from cssnest.transforms.cleanup import CleanupTransform, remove_empty_rules
from cssnest.transforms.collapse import SiblingCollapsingTransform, collapse_nested_siblings
from cssnest.transforms.descendants import DescendantNestingTransform, nest_descendants
from cssnest.transforms.factoring import (
    CommonPropertyFactoringTransform,
    factor_common_properties,
)
from cssnest.transforms.pseudos import PseudoNestingTransform, nest_pseudos

logger = logging.getLogger(__name__)

__all__ = [
    "CleanupTransform",
    "CommonPropertyFactoringTransform",
    "DescendantNestingTransform",
    "PseudoNestingTransform",
    "SiblingCollapsingTransform",
    "Transform",
    "apply_transforms",
    "builtin_transforms",
    "collapse_nested_siblings",
    "factor_common_properties",
    "nest",
    "nest_css",
    "nest_descendants",
    "nest_pseudos",
    "remove_empty_rules",
]


def builtin_transforms(
    options: NestOptions | None = None, factory: NodeFactory | None = None
) -> list[Transform]:
    """Return the enabled passes in their fixed order."""
    options = options or NestOptions()
    factory = factory or CloneNodeFactory()
    transforms: list[Transform] = []
    if options.nest_descendants:
        transforms.append(DescendantNestingTransform(factory))
    if options.collapse_nested_siblings:
        transforms.append(SiblingCollapsingTransform(factory))
    if options.factor_common_properties:
        transforms.append(CommonPropertyFactoringTransform(factory))
    if options.nest_pseudos:
        transforms.append(PseudoNestingTransform(factory))
    return transforms


def apply_transforms(
    root: Root,
    options: NestOptions | None = None,
    factory: NodeFactory | None = None,
    custom_transforms: list[Transform] | None = None,
) -> Root:
    """Run the enabled passes (and any custom ones) on *root*, then prune empty rules.

    The tree is rewritten in place.  A :class:`~cssnest.errors.NodeConstructionError`
    from the factory aborts the run.
    """
    transforms = builtin_transforms(options, factory)
    if custom_transforms:
        transforms.extend(custom_transforms)
    for t in transforms:
        logger.info("Running %s", type(t).__name__)
        root = t.apply(root)
    remove_empty_rules(root)
    return root


def nest(
    root: Root,
    options: NestOptions | Mapping[str, object] | None = None,
    factory: NodeFactory | None = None,
) -> Root:
    """Compact *root* in place; *options* may be a plain mapping of pass toggles."""
    if not isinstance(options, NestOptions):
        options = NestOptions.from_mapping(options)
    return apply_transforms(root, options, factory)


def nest_css(
    source: str,
    options: NestOptions | Mapping[str, object] | None = None,
    indent: str = "  ",
) -> str:
    """Parse *source*, compact it and print it back as nested CSS."""
    from cssnest.parser import parse_css
    from cssnest.serialize import to_css

    return to_css(nest(parse_css(source), options), indent=indent)
