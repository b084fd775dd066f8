"""DOT renderer for parsed S-expressions.

Each root expression becomes its own ``subgraph cluster<k>`` block. Every
list, identifier, and string node becomes one vertex labelled with its
text, with an edge from its parent's vertex. ``()`` renders as nothing.

Vertex ids come from one counter threaded through the whole document in
a ``RenderContext``; it is never reset between clusters, so ids are unique
across the document::

    digraph {
        subgraph cluster0 {
            n0 [label="add"];
            n1 [label="1"];
            n0 -> n1;
        }
    }
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from seed.ast import Arena, EmptyNode, IdentifierNode, ListNode, NodeId, ParseResult, StringNode
from seed.config import RenderOptions

logger = logging.getLogger(__name__)


def escape_label(text: str) -> str:
    """Escape text for use inside a double-quoted DOT string."""
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


@dataclass
class RenderContext:
    """Mutable state for one rendering run: vertex counter and output lines."""

    options: RenderOptions = field(default_factory=RenderOptions)
    next_vertex: int = 0
    lines: list[str] = field(default_factory=list)

    def allocate(self) -> int:
        vertex = self.next_vertex
        self.next_vertex += 1
        return vertex

    def emit(self, depth: int, text: str) -> None:
        self.lines.append(self.options.indent * depth + text)

    def vertex_name(self, vertex: int) -> str:
        return f"{self.options.vertex_prefix}{vertex}"

    def text(self) -> str:
        return "".join(line + "\n" for line in self.lines)


def render_nodes(
    root: NodeId,
    arena: Arena,
    ctx: RenderContext,
    depth: int,
) -> None:
    """Emit vertices and edges for the tree under ``root``, depth first.

    Uses an explicit stack, so arbitrarily deep trees render without
    hitting the recursion limit. Output order matches a recursive
    pre-order walk: a vertex, its parent edge, then its children in order.
    """
    # (node-id, parent vertex); the cluster root has no parent vertex.
    stack: list[tuple[NodeId, int | None]] = [(root, None)]

    while stack:
        node_id, parent = stack.pop()
        node = arena[node_id]

        match node:
            case ListNode(op=op, children=children):
                label = op.text
            case IdentifierNode(token=token) | StringNode(token=token):
                label = token.text
                children = ()
            case EmptyNode():
                continue
            case _:
                raise TypeError(f"unknown node type in arena: {type(node).__name__}")

        vertex = ctx.allocate()
        ctx.emit(depth, f'{ctx.vertex_name(vertex)} [label="{escape_label(label)}"];')
        if parent is not None:
            ctx.emit(
                depth,
                f"{ctx.vertex_name(parent)} {ctx.options.edge_op} {ctx.vertex_name(vertex)};",
            )

        for child in reversed(children):
            stack.append((child, vertex))


def render_cluster(root: NodeId, arena: Arena, ctx: RenderContext, index: int, depth: int) -> None:
    """Wrap one root expression in its own ``subgraph cluster<index>`` block."""
    ctx.emit(depth, f"subgraph {ctx.options.cluster_prefix}{index} {{")
    render_nodes(root, arena, ctx, depth + 1)
    ctx.emit(depth, "}")


def render(
    roots: Sequence[NodeId],
    arena: Arena,
    options: RenderOptions | None = None,
) -> str:
    """Render root expressions as a single DOT document.

    Deterministic: the same roots over the same arena always produce
    byte-identical text.
    """
    ctx = RenderContext(options=options or RenderOptions())
    header = ctx.options.graph_keyword
    if ctx.options.graph_name:
        header += f" {ctx.options.graph_name}"

    ctx.emit(0, header + " {")
    for index, root in enumerate(roots):
        render_cluster(root, arena, ctx, index, depth=1)
    ctx.emit(0, "}")

    logger.debug("Rendered %d cluster(s), %d vertex(es)", len(roots), ctx.next_vertex)
    return ctx.text()


def render_result(result: ParseResult, options: RenderOptions | None = None) -> str:
    """Render everything a ``parse`` call produced."""
    return render(result.roots, result.arena, options)
