"""Base protocol for stylesheet transforms."""

from __future__ import annotations

from typing import Protocol

from cssnest.model.nodes import Root


class Transform(Protocol):
    """A tree rewrite step; mutates *root* in place and returns it."""

    def apply(self, root: Root) -> Root: ...
