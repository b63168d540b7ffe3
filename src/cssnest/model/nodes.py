"""Stylesheet tree model: Root, Rule, AtRule, and Declaration nodes."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, fields
from typing import ClassVar

from cssnest.selectors import split_selectors

DeclarationKey = tuple[str, str, bool]


@dataclass(frozen=True)
class Position:
    """A 1-based line/column location in the source text."""

    line: int
    column: int


@dataclass(eq=False, kw_only=True)
class Node:
    """Base class for every node in the stylesheet tree.

    Nodes compare by identity. Each node has at most one parent; attaching
    a node to a container detaches it from its previous parent first.
    """

    type: ClassVar[str] = "node"

    source: Position | None = None
    parent: Container | None = field(default=None, init=False, repr=False)

    def remove(self) -> Node:
        """Detach this node from its parent and return it."""
        if self.parent is not None:
            self.parent.remove_child(self)
        return self

    def clone(self, **overrides: object) -> Node:
        """Return a detached deep copy, with *overrides* applied to the copy."""
        kwargs = {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.init and f.name != "nodes"
        }
        kwargs.update({k: v for k, v in overrides.items() if k != "nodes"})
        return type(self)(**kwargs)

    def root(self) -> Node:
        """Return the topmost ancestor (the node itself when detached)."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node


@dataclass(eq=False, kw_only=True)
class Container(Node):
    """A node holding an ordered sequence of child nodes."""

    nodes: list[Node] = field(default_factory=list)

    def __post_init__(self) -> None:
        children = list(self.nodes)
        self.nodes = []
        self.append(*children)

    # --- structure ------------------------------------------------------------

    def append(self, *nodes: Node) -> Container:
        """Append *nodes* at the end, moving them out of their old parents."""
        for node in nodes:
            node.remove()
            node.parent = self
            self.nodes.append(node)
        return self

    def insert_before(self, existing: Node, node: Node) -> Container:
        """Insert *node* immediately before the child *existing*."""
        node.remove()
        self.nodes.insert(self.index(existing), node)
        node.parent = self
        return self

    def remove_child(self, node: Node) -> Container:
        del self.nodes[self.index(node)]
        node.parent = None
        return self

    def index(self, node: Node) -> int:
        for i, child in enumerate(self.nodes):
            if child is node:
                return i
        raise ValueError(f"{node!r} is not a child of this {self.type}")

    def clone(self, **overrides: object) -> Container:
        copy = self.clone_empty(**overrides)
        copy.append(*(child.clone() for child in self.nodes))
        return copy

    def clone_empty(self, **overrides: object) -> Container:
        """Return a detached copy of this node without its children."""
        copy = super().clone(**overrides)
        assert isinstance(copy, Container)
        return copy

    # --- navigation -----------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def rules(self) -> list[Rule]:
        """Return the direct children that are rules."""
        return [n for n in self.nodes if isinstance(n, Rule)]

    def declarations(self) -> list[Declaration]:
        """Return the direct children that are declarations."""
        return [n for n in self.nodes if isinstance(n, Declaration)]

    def walk(self) -> Iterator[Node]:
        """Yield every descendant depth-first, in document order."""
        for child in list(self.nodes):
            yield child
            if isinstance(child, Container):
                yield from child.walk()

    def walk_rules(self) -> Iterator[Rule]:
        for node in self.walk():
            if isinstance(node, Rule):
                yield node

    def walk_decls(self) -> Iterator[Declaration]:
        for node in self.walk():
            if isinstance(node, Declaration):
                yield node


@dataclass(eq=False, kw_only=True)
class Root(Container):
    """The stylesheet itself."""

    type: ClassVar[str] = "root"


@dataclass(eq=False, kw_only=True)
class Rule(Container):
    """A selector list with a block of declarations and nested rules."""

    type: ClassVar[str] = "rule"

    selector: str = ""

    @property
    def selectors(self) -> list[str]:
        return split_selectors(self.selector)


@dataclass(eq=False, kw_only=True)
class AtRule(Container):
    """A conditional block such as ``@media (...) { ... }``.

    The condition text in ``params`` is never interpreted.  Statement
    at-rules like ``@import`` have ``has_block=False`` and no children.
    """

    type: ClassVar[str] = "atrule"

    name: str = ""
    params: str = ""
    has_block: bool = True


@dataclass(eq=False, kw_only=True)
class Declaration(Node):
    """A single ``property: value`` pair."""

    type: ClassVar[str] = "decl"

    prop: str = ""
    value: str = ""
    important: bool = False

    @property
    def key(self) -> DeclarationKey:
        """Exact-text comparison key; no value normalization is applied."""
        return (self.prop, self.value, self.important)
