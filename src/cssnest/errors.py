"""Exception types raised by the nesting engine and its configuration."""

from __future__ import annotations


class NestError(Exception):
    """Base class for every error raised by cssnest."""


class NodeConstructionError(NestError):
    """Raised when the node factory cannot synthesize a rule or declaration.

    A failed construction aborts the whole run.
    """

    def __init__(self, kind: str, message: str | None = None):
        self.kind = kind
        super().__init__(
            message or f"cannot construct a new {kind}: no reference {kind} in the tree"
        )


class ConfigError(NestError):
    """Raised for unknown option names or invalid option values."""
