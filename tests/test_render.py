"""Tests for the DOT renderer."""

from __future__ import annotations

import re

from seed import (
    Arena,
    EmptyNode,
    IdentifierNode,
    ListNode,
    RenderContext,
    RenderOptions,
    Span,
    Token,
    TokenKind,
    escape_label,
    parse,
    render,
    render_result,
    render_source,
)

_VERTEX_RE = re.compile(r"^\s*(n\d+) \[label=")


def _dot(source: str, options: RenderOptions | None = None) -> str:
    return render_result(parse(source), options)


def _edges(dot: str) -> set[str]:
    return {line.strip() for line in dot.splitlines() if "->" in line}


def _vertex_ids(dot: str) -> list[str]:
    return [m.group(1) for line in dot.splitlines() if (m := _VERTEX_RE.match(line))]


def _ident(text: str) -> Token:
    return Token(kind=TokenKind.IDENTIFIER, span=Span(0, len(text)), text=text)


# ================================================================== #
# Document layout
# ================================================================== #


class TestLayout:
    def test_single_list(self):
        assert _dot("(add 1 2)") == (
            "digraph {\n"
            "\tsubgraph cluster0 {\n"
            '\t\tn0 [label="add"];\n'
            '\t\tn1 [label="1"];\n'
            "\t\tn0 -> n1;\n"
            '\t\tn2 [label="2"];\n'
            "\t\tn0 -> n2;\n"
            "\t}\n"
            "}\n"
        )

    def test_empty_pair_renders_an_empty_cluster(self):
        assert _dot("()") == "digraph {\n\tsubgraph cluster0 {\n\t}\n}\n"

    def test_no_roots(self):
        assert render([], Arena()) == "digraph {\n}\n"

    def test_string_operator_only(self):
        assert _dot('("hello world")') == (
            'digraph {\n\tsubgraph cluster0 {\n\t\tn0 [label="hello world"];\n\t}\n}\n'
        )

    def test_empty_child_renders_nothing(self):
        dot = _dot("(a () b)")
        assert _vertex_ids(dot) == ["n0", "n1"]
        assert _edges(dot) == {"n0 -> n1;"}

    def test_declaration_precedes_its_edge_and_children(self):
        lines = [line.strip() for line in _dot("(a (b c) d)").splitlines()]
        assert lines[2:9] == [
            'n0 [label="a"];',
            'n1 [label="b"];',
            "n0 -> n1;",
            'n2 [label="c"];',
            "n1 -> n2;",
            'n3 [label="d"];',
            "n0 -> n3;",
        ]


# ================================================================== #
# Edges and vertex ids
# ================================================================== #


class TestEdges:
    def test_nested_list_edges(self):
        dot = _dot("(a (b c) d)")
        assert _edges(dot) == {"n0 -> n1;", "n1 -> n2;", "n0 -> n3;"}

    def test_cluster_root_has_no_incoming_edge(self):
        dot = _dot("(a b)")
        assert not any(edge.endswith("-> n0;") for edge in _edges(dot))

    def test_two_roots_get_two_clusters(self):
        dot = _dot("(a) (b)")
        assert "subgraph cluster0 {" in dot
        assert "subgraph cluster1 {" in dot
        assert _vertex_ids(dot) == ["n0", "n1"]
        assert _edges(dot) == set()

    def test_vertex_ids_unique_across_clusters(self):
        source = "(f (g x y) z) (h 'a' \"b\") () (k (l (m n)))"
        ids = _vertex_ids(_dot(source))
        assert len(ids) == len(set(ids)) == 12

    def test_counter_is_not_reset_between_clusters(self):
        dot = _dot("(a b) (c d)")
        second_cluster = dot.split("subgraph cluster1")[1]
        assert 'n2 [label="c"];' in second_cluster
        assert "n2 -> n3;" in second_cluster


# ================================================================== #
# Determinism and depth
# ================================================================== #


class TestDeterminism:
    def test_rendering_twice_is_identical(self):
        result = parse("(let (bind (x 1)) (f x \"y\") ())")
        first = render(result.roots, result.arena)
        second = render(result.roots, result.arena)
        assert first == second

    def test_rendering_does_not_touch_the_arena(self):
        result = parse("(a (b c))")
        before = list(result.arena)
        render_result(result)
        assert list(result.arena) == before

    def test_very_deep_tree_renders_without_recursion(self):
        arena = Arena()
        node = arena.add(IdentifierNode(_ident("leaf")))
        for _ in range(5000):
            node = arena.add(ListNode(op=_ident("wrap"), children=(node,)))

        dot = render([node], arena)
        assert len(_vertex_ids(dot)) == 5001
        assert "n4999 -> n5000;" in dot

    def test_empty_node_built_by_hand(self):
        arena = Arena()
        root = arena.add(EmptyNode())
        assert render([root], arena) == "digraph {\n\tsubgraph cluster0 {\n\t}\n}\n"


# ================================================================== #
# Labels and options
# ================================================================== #


class TestLabels:
    def test_escape_label(self):
        assert escape_label('say "hi"') == 'say \\"hi\\"'
        assert escape_label("a\\b") == "a\\\\b"
        assert escape_label("two\nlines") == "two\\nlines"

    def test_quotes_inside_string_are_escaped(self):
        dot = _dot("(echo 'say \"hi\"')")
        assert 'n1 [label="say \\"hi\\""];' in dot

    def test_backslash_in_identifier_is_escaped(self):
        dot = _dot("(a\\b)")
        assert 'n0 [label="a\\\\b"];' in dot


class TestOptions:
    def test_graph_name(self):
        dot = _dot("(a)", RenderOptions(graph_name="AST"))
        assert dot.startswith("digraph AST {\n")

    def test_prefixes_and_indent(self):
        options = RenderOptions(cluster_prefix="cluster_expr", vertex_prefix="v", indent="  ")
        assert _dot("(a b)", options) == (
            "digraph {\n"
            "  subgraph cluster_expr0 {\n"
            '    v0 [label="a"];\n'
            '    v1 [label="b"];\n'
            "    v0 -> v1;\n"
            "  }\n"
            "}\n"
        )

    def test_undirected_graph_uses_double_dash(self):
        dot = _dot("(a b)", RenderOptions(graph_keyword="graph"))
        assert dot.startswith("graph {\n")
        assert "n0 -- n1;" in dot

    def test_render_source(self):
        assert render_source("(add 1 2)") == _dot("(add 1 2)")

    def test_context_allocates_sequential_ids(self):
        ctx = RenderContext()
        assert [ctx.allocate() for _ in range(3)] == [0, 1, 2]
        assert ctx.vertex_name(7) == "n7"
