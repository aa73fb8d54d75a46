"""Tests for flowchart_mermaid.renderers.mermaid — Mermaid text generation."""

import pytest

from flowchart_mermaid.config import ConversionOptions
from flowchart_mermaid.ir.model import Edge, Graph, Metadata, Node
from flowchart_mermaid.renderers.mermaid import MermaidRenderer, convert_to_mermaid, mermaid_filename
from flowchart_mermaid.types import DECISION_NO, DECISION_YES, Direction, NodeCategory


def _basic_nodes() -> list[Node]:
    return [
        Node.new("s", NodeCategory.Start),
        Node.new("p", NodeCategory.Process, label="Review"),
        Node.new("e", NodeCategory.End),
    ]


class TestDocumentAssembly:
    def test_empty_graph(self):
        assert convert_to_mermaid([], []) == "flowchart TD\n    %% Empty flowchart\n"

    def test_empty_graph_keeps_title(self):
        out = convert_to_mermaid([], [], Metadata(title="Blank", description="ignored"))
        assert out == "---\ntitle: Blank\n---\nflowchart TD\n    %% Empty flowchart\n"

    def test_basic_end_to_end(self):
        nodes = _basic_nodes()
        edges = [Edge("s", "p"), Edge("p", "e")]
        out = convert_to_mermaid(nodes, edges, options=ConversionOptions(direction=Direction.LR))
        assert out == (
            "flowchart LR\n"
            "    s([Start])\n"
            "    p[Review]\n"
            "    e([End])\n"
            "\n"
            "    s --> p\n"
            "    p --> e\n"
        )

    def test_nodes_without_edges_have_no_separator(self):
        out = convert_to_mermaid(_basic_nodes(), [])
        assert out == "flowchart TD\n    s([Start])\n    p[Review]\n    e([End])\n"

    def test_all_edges_dangling_keeps_separator(self):
        out = convert_to_mermaid(_basic_nodes(), [Edge("s", "ghost"), Edge("ghost", "e")])
        assert out == "flowchart TD\n    s([Start])\n    p[Review]\n    e([End])\n\n"

    def test_full_document(self):
        metadata = Metadata(title="Flow", description="Reviewed monthly")
        options = ConversionOptions(theme="dark")
        out = convert_to_mermaid(_basic_nodes(), [Edge("s", "p")], metadata, options)
        assert out == (
            "---\n"
            "title: Flow\n"
            "---\n"
            "flowchart TD\n"
            "    s([Start])\n"
            "    p[Review]\n"
            "    e([End])\n"
            "\n"
            "    s --> p\n"
            "\n"
            "    %% Reviewed monthly\n"
            "\n"
            "%%{init: {'theme':'dark'}}%%\n"
        )

    def test_title_and_description_can_be_disabled(self):
        metadata = Metadata(title="Flow", description="Reviewed monthly")
        options = ConversionOptions(include_title=False, include_description=False)
        out = convert_to_mermaid(_basic_nodes(), [], metadata, options)
        assert "title:" not in out
        assert "%%" not in out
        assert out.startswith("flowchart TD\n")

    def test_multiline_description_stays_commented(self):
        out = convert_to_mermaid(_basic_nodes(), [], Metadata(description="one\ntwo"))
        assert out.endswith("\n    %% one\n    %% two\n")

    def test_raw_direction_string_emitted_verbatim(self):
        out = convert_to_mermaid(_basic_nodes(), [], options=ConversionOptions(direction="sideways"))
        assert out.startswith("flowchart sideways\n")

    def test_deterministic(self):
        nodes = _basic_nodes()
        edges = [Edge("s", "p", label="go"), Edge("p", "e")]
        metadata = Metadata(title="T", description="D")
        first = convert_to_mermaid(nodes, edges, metadata)
        assert all(convert_to_mermaid(nodes, edges, metadata) == first for _ in range(5))


class TestNodes:
    def test_ids_sanitized(self):
        nodes = [Node.new("start-0", NodeCategory.Start), Node.new("0node", NodeCategory.Process, label="P")]
        out = convert_to_mermaid(nodes, [Edge("start-0", "0node")])
        assert "    start_0([Start])\n" in out
        assert "    node_0node[P]\n" in out
        assert "    start_0 --> node_0node\n" in out

    def test_shapes(self):
        nodes = [
            Node.new("d", NodeCategory.Decision),
            Node.new("c", NodeCategory.Connector),
            Node.new("g", NodeCategory.Generic, label="Gateway"),
        ]
        out = convert_to_mermaid(nodes, [])
        assert "    d{Decision?}\n" in out
        assert "    c((•))\n" in out
        assert "    g[Gateway]\n" in out

    def test_identical_definitions_collapse(self):
        nodes = [
            Node.new("a", NodeCategory.Process, label="Same"),
            Node.new("b", NodeCategory.Process, label="Other"),
            Node.new("a", NodeCategory.Process, label="Same"),
        ]
        out = convert_to_mermaid(nodes, [])
        assert out == "flowchart TD\n    a[Same]\n    b[Other]\n"

    def test_label_escaping(self):
        node = Node.new("p", NodeCategory.Process, label='He said "no"\nit\'s over')
        out = convert_to_mermaid([node], [])
        line = out.splitlines()[1]
        assert line == "    p[He said #quot;no#quot;<br/>it#apos;s over]"
        assert '"' not in line and "'" not in line

    def test_long_label_not_truncated(self):
        label = "a" * 60
        out = convert_to_mermaid([Node.new("p", NodeCategory.Process, label=label)], [])
        assert f"    p[{label}]\n" in out


class TestEdges:
    def _decision_graph(self) -> tuple[list[Node], list[Edge]]:
        nodes = [
            Node.new("d", NodeCategory.Decision, label="Ok?", yes_label="Proceed", no_label="Stop"),
            Node.new("y-1", NodeCategory.Process, label="Go"),
            Node.new("n-1", NodeCategory.Process, label="Halt"),
        ]
        edges = [
            Edge("d", "y-1", source_handle=DECISION_YES),
            Edge("d", "n-1", source_handle=DECISION_NO),
        ]
        return nodes, edges

    def test_decision_branch_labels(self):
        nodes, edges = self._decision_graph()
        out = convert_to_mermaid(nodes, edges)
        assert out.count("-->|Proceed|") == 1
        assert out.count("-->|Stop|") == 1
        assert "    d -->|Proceed| y_1\n" in out
        assert "    d -->|Stop| n_1\n" in out

    def test_decision_branch_defaults(self):
        nodes = [Node.new("d", NodeCategory.Decision), Node.new("a", NodeCategory.Process)]
        edges = [Edge("d", "a", source_handle=DECISION_YES), Edge("d", "a", source_handle=DECISION_NO)]
        out = convert_to_mermaid(nodes, edges)
        assert "    d -->|Yes| a\n    d -->|No| a\n" in out

    def test_decision_branch_beats_edge_label(self):
        nodes, edges = self._decision_graph()
        edges[0].label = "ignored"
        out = convert_to_mermaid(nodes, edges)
        assert "ignored" not in out

    def test_decision_without_handle_uses_edge_label(self):
        nodes, _ = self._decision_graph()
        out = convert_to_mermaid(nodes, [Edge("d", "y-1", label="maybe"), Edge("d", "n-1")])
        assert "    d -->|maybe| y_1\n    d --> n_1\n" in out

    def test_handle_ignored_for_non_decision_source(self):
        nodes = [Node.new("p", NodeCategory.Process), Node.new("q", NodeCategory.Process)]
        out = convert_to_mermaid(nodes, [Edge("p", "q", source_handle=DECISION_YES)])
        assert "    p --> q\n" in out

    def test_edge_label_escaped(self):
        nodes = [Node.new("p", NodeCategory.Process), Node.new("q", NodeCategory.Process)]
        out = convert_to_mermaid(nodes, [Edge("p", "q", label='"a"\nb')])
        assert "    p -->|#quot;a#quot;<br/>b| q\n" in out

    def test_empty_edge_label_is_bare_arrow(self):
        nodes = [Node.new("p", NodeCategory.Process), Node.new("q", NodeCategory.Process)]
        out = convert_to_mermaid(nodes, [Edge("p", "q", label="")])
        assert "    p --> q\n" in out

    def test_parallel_edges_rendered_independently(self):
        nodes = [Node.new("p", NodeCategory.Process), Node.new("q", NodeCategory.Process)]
        out = convert_to_mermaid(nodes, [Edge("p", "q"), Edge("p", "q")])
        assert out.count("    p --> q\n") == 2

    def test_dangling_edges_excluded_in_any_position(self):
        nodes = _basic_nodes()
        edges = [Edge("ghost", "s"), Edge("s", "p"), Edge("p", "phantom"), Edge("p", "e")]
        out = convert_to_mermaid(nodes, edges)
        assert "ghost" not in out
        assert "phantom" not in out
        assert out.endswith("\n    s --> p\n    p --> e\n")


class TestRenderer:
    def test_render_graph_directly(self):
        graph = Graph(nodes=_basic_nodes(), edges=[Edge("s", "e")])
        out = MermaidRenderer().render(graph)
        assert out.endswith("    s --> e\n")

    def test_does_not_mutate_graph(self):
        graph = Graph(nodes=_basic_nodes(), edges=[Edge("s", "ghost")])
        MermaidRenderer().render(graph)
        assert len(graph.nodes) == 3
        assert len(graph.edges) == 1

    def test_filename(self):
        assert mermaid_filename(Metadata(title="My Flow")) == "My Flow.mmd"
        assert mermaid_filename() == "flowchart.mmd"


class TestConversionOptions:
    def test_from_dict(self):
        options = ConversionOptions.from_dict({"includeTitle": False, "direction": "RL", "theme": "forest"})
        assert options.include_title is False
        assert options.include_description is True
        assert options.direction_keyword == "RL"
        assert options.theme == "forest"

    def test_wrong_type_raises(self):
        with pytest.raises(ValueError, match="includeTitle"):
            ConversionOptions.from_dict({"includeTitle": "sometimes"})

    def test_defaults(self):
        options = ConversionOptions.from_dict({})
        assert options.direction_keyword == "TD"
        assert options.theme is None
