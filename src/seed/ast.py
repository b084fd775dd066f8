"""Syntax model for seed: spans, tokens, positions, nodes, and the arena.

The parser never links nodes by reference. Every node lives in a single
append-only ``Arena`` and refers to its children by integer node-id
(the child's index in the arena). Children are always appended before
their parent, so every child id of a ``ListNode`` is smaller than the
list's own id and the stored structure is acyclic by construction.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

NodeId = int


# ------------------------------------------------------------------ #
# Source locations
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class Span:
    """A non-owning window onto the source text."""

    start: int
    length: int = 0

    @property
    def end(self) -> int:
        return self.start + self.length

    def slice(self, source: str) -> str:
        return source[self.start : self.end]


@dataclass(frozen=True, slots=True)
class Position:
    """1-based line/column pair, for diagnostics only."""

    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


def position(source: str, offset: int) -> Position:
    """Compute the line/column of the character at ``offset``.

    Counts the characters before ``offset``, so a newline at ``offset`` is
    reported at the end of the line it terminates.

    Linear in ``offset``; only called on error paths.
    """
    line = 1
    column = 1
    for char in source[: max(0, offset)]:
        if char == "\n":
            line += 1
            column = 1
        else:
            column += 1
    return Position(line=line, column=column)


# ------------------------------------------------------------------ #
# Tokens
# ------------------------------------------------------------------ #


class TokenKind(StrEnum):
    """Token categories produced by the lexer.

    ``NONE`` is a sentinel and is never produced by the lexer.
    """

    NONE = "none"
    EOF = "end of input"
    LPAREN = "`(`"
    RPAREN = "`)`"
    STRING = "string"
    IDENTIFIER = "identifier"


@dataclass(frozen=True, slots=True)
class Token:
    """A lexed token.

    ``text`` is the resolved contents of ``span`` (string quotes and a
    leading escape backslash already excluded), so nodes can be rendered
    without holding on to the source.
    """

    kind: TokenKind
    span: Span
    text: str = ""


# ------------------------------------------------------------------ #
# Nodes
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class ListNode:
    """``(op child...)``: an operator token and its children's node-ids."""

    op: Token
    children: tuple[NodeId, ...] = ()


@dataclass(frozen=True, slots=True)
class IdentifierNode:
    token: Token


@dataclass(frozen=True, slots=True)
class StringNode:
    token: Token


@dataclass(frozen=True, slots=True)
class EmptyNode:
    """The literal pair ``()``."""


Node = ListNode | IdentifierNode | StringNode | EmptyNode


def node_to_dict(node: Node) -> dict[str, Any]:
    """JSON-ready view of a single node."""
    if isinstance(node, ListNode):
        return {"type": "list", "op": node.op.text, "children": list(node.children)}
    if isinstance(node, IdentifierNode):
        return {"type": "identifier", "text": node.token.text}
    if isinstance(node, StringNode):
        return {"type": "string", "text": node.token.text}
    return {"type": "empty"}


class Arena:
    """Append-only, indexable store of nodes.

    There is no update or remove operation: a node-id stays
    valid, and points at the same node, for the arena's whole lifetime.
    """

    __slots__ = ("_nodes",)

    def __init__(self) -> None:
        self._nodes: list[Node] = []

    def add(self, node: Node) -> NodeId:
        """Append a fully-constructed node and return its node-id."""
        self._nodes.append(node)
        return len(self._nodes) - 1

    def __getitem__(self, node_id: NodeId) -> Node:
        if node_id < 0:
            raise IndexError(f"invalid node id: {node_id}")
        return self._nodes[node_id]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __repr__(self) -> str:
        return f"Arena({len(self._nodes)} nodes)"

    def to_dict(self) -> list[dict[str, Any]]:
        """Serialize every node, in node-id order."""
        return [node_to_dict(node) for node in self._nodes]


@dataclass
class ParseResult:
    """Everything the renderer needs: the arena and the root node-ids."""

    arena: Arena = field(default_factory=Arena)
    roots: list[NodeId] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"roots": list(self.roots), "nodes": self.arena.to_dict()}
