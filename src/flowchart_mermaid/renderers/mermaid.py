"""Mermaid flowchart renderer.

Walks a flowchart snapshot and emits Mermaid text in a fixed section
order: optional title front matter, the ``flowchart <dir>`` header, node
definitions, a blank separator plus edge lines, an optional description
comment, and an optional theme directive. Output is a pure function of
the input; every line is newline-terminated.
"""

from __future__ import annotations

import logging

from flowchart_mermaid.config import ConversionOptions
from flowchart_mermaid.ir.graph import GraphIR
from flowchart_mermaid.ir.model import DecisionData, Edge, Graph, Metadata, Node
from flowchart_mermaid.labels import escape_label, render_shape, resolve_label, sanitize_id
from flowchart_mermaid.renderers.base import Renderer
from flowchart_mermaid.types import DECISION_NO, DECISION_YES, NodeCategory

logger = logging.getLogger(__name__)

INDENT = "    "
EMPTY_PLACEHOLDER = "%% Empty flowchart"


class MermaidRenderer:
    """Render a flowchart Graph as Mermaid flowchart syntax."""

    format_name = "mermaid"
    file_extension = ".mmd"

    def render(self, graph: Graph, metadata: Metadata | None = None, options: ConversionOptions | None = None) -> str:
        options = options or ConversionOptions()
        metadata = metadata or Metadata()
        lines: list[str] = []

        if options.include_title and metadata.title:
            lines.extend(["---", f"title: {metadata.title}", "---"])
        lines.append(f"flowchart {options.direction_keyword}")

        if not graph.nodes:
            lines.append(INDENT + EMPTY_PLACEHOLDER)
            return _join(lines)

        id_map: dict[str, str] = {}
        for node in graph.nodes:
            id_map[node.id] = sanitize_id(node.id)
        lines.extend(self._render_nodes(graph.nodes, id_map))

        # the separator follows the raw edge list, even if every edge dangles
        if graph.edges:
            lines.append("")
            lines.extend(self._render_edges(graph, id_map))

        if options.include_description and metadata.description:
            lines.append("")
            lines.extend(f"{INDENT}%% {part}" for part in metadata.description.splitlines())

        if options.theme:
            lines.extend(["", f"%%{{init: {{'theme':'{options.theme}'}}}}%%"])

        return _join(lines)

    def _render_nodes(self, nodes: list[Node], id_map: dict[str, str]) -> list[str]:
        definitions: dict[str, None] = {}
        for node in nodes:
            line = f"{INDENT}{id_map[node.id]}{render_shape(node.category, resolve_label(node))}"
            definitions.setdefault(line)
        return list(definitions)

    def _render_edges(self, graph: Graph, id_map: dict[str, str]) -> list[str]:
        gir = GraphIR.from_graph(graph)
        for edge in gir.dangling_edges():
            logger.debug("skipping edge %s -> %s: endpoint not in node set", edge.source, edge.target)

        lines: list[str] = []
        for edge in gir.resolved_edges():
            source_id = id_map[edge.source]
            target_id = id_map[edge.target]
            label = self._edge_label(edge, gir.node(edge.source))
            if label:
                lines.append(f"{INDENT}{source_id} -->|{label}| {target_id}")
            else:
                lines.append(f"{INDENT}{source_id} --> {target_id}")
        return lines

    def _edge_label(self, edge: Edge, source: Node | None) -> str | None:
        """Resolve and escape the label for *edge*, or None for a bare arrow."""
        if source is not None and source.category is NodeCategory.Decision:
            branch = _decision_branch_label(edge, source)
            if branch is not None:
                return escape_label(branch)
        if edge.label:
            return escape_label(edge.label)
        return None


def _decision_branch_label(edge: Edge, source: Node) -> str | None:
    data = source.data
    yes_label = data.yes_label if isinstance(data, DecisionData) else ""
    no_label = data.no_label if isinstance(data, DecisionData) else ""
    if edge.source_handle == DECISION_YES:
        return yes_label or "Yes"
    if edge.source_handle == DECISION_NO:
        return no_label or "No"
    return None


def _join(lines: list[str]) -> str:
    return "".join(line + "\n" for line in lines)


def convert_to_mermaid(
    nodes: list[Node],
    edges: list[Edge],
    metadata: Metadata | None = None,
    options: ConversionOptions | None = None,
) -> str:
    """Convert node and edge sequences to Mermaid flowchart text.

    Args:
        nodes: Node sequence, rendered in order.
        edges: Edge sequence; edges with an unknown endpoint are skipped.
        metadata: Optional title and description.
        options: Conversion options; defaults to ConversionOptions().

    Returns:
        The Mermaid source text.
    """
    renderer: Renderer = MermaidRenderer()
    return renderer.render(Graph(nodes=list(nodes), edges=list(edges)), metadata, options or ConversionOptions())


def mermaid_filename(metadata: Metadata | None = None) -> str:
    """Download filename for exported Mermaid text."""
    title = metadata.title if metadata is not None else None
    return f"{title or 'flowchart'}{MermaidRenderer.file_extension}"
