"""Graph IR — wraps a flowchart snapshot in a networkx MultiDiGraph.

Only edges whose endpoints both resolve to a node enter the digraph;
the rest are kept aside as dangling edges in sequence order. Parallel
edges are preserved, one digraph edge per snapshot edge.
"""

from __future__ import annotations

import networkx as nx

from flowchart_mermaid.ir.model import Edge, Graph, Node


class GraphIR:
    """Read-only topology view over a flowchart Graph."""

    def __init__(self, digraph: nx.MultiDiGraph, nodes: list[Node], edges: list[Edge], dangling: list[Edge]) -> None:
        self.digraph = digraph
        self.nodes = nodes
        self.edges = edges
        self.dangling = dangling

    @classmethod
    def from_graph(cls, graph: Graph) -> GraphIR:
        return cls.build(graph.nodes, graph.edges)

    @classmethod
    def build(cls, nodes: list[Node], edges: list[Edge]) -> GraphIR:
        """Build a GraphIR from node and edge sequences."""
        digraph: nx.MultiDiGraph = nx.MultiDiGraph()
        for node in nodes:
            if node.id not in digraph:
                digraph.add_node(node.id, data=node)

        dangling: list[Edge] = []
        for index, edge in enumerate(edges):
            if edge.source in digraph and edge.target in digraph:
                digraph.add_edge(edge.source, edge.target, key=index, data=edge)
            else:
                dangling.append(edge)

        return cls(digraph=digraph, nodes=list(nodes), edges=list(edges), dangling=dangling)

    def node_count(self) -> int:
        return self.digraph.number_of_nodes()

    def edge_count(self) -> int:
        return self.digraph.number_of_edges()

    def has_node(self, node_id: str) -> bool:
        return node_id in self.digraph

    def node(self, node_id: str) -> Node | None:
        if node_id not in self.digraph:
            return None
        return self.digraph.nodes[node_id]["data"]

    def resolved_edges(self) -> list[Edge]:
        """Edges whose endpoints both resolve, in sequence order."""
        triples = sorted(self.digraph.edges(keys=True, data="data"), key=lambda t: t[2])
        return [t[3] for t in triples]

    def dangling_edges(self) -> list[Edge]:
        return list(self.dangling)

    def referenced_ids(self) -> set[str]:
        """Every id named by any edge endpoint, resolvable or not."""
        referenced: set[str] = set()
        for edge in self.edges:
            referenced.add(edge.source)
            referenced.add(edge.target)
        return referenced

    def disconnected_nodes(self) -> list[Node]:
        referenced = self.referenced_ids()
        return [n for n in self.nodes if n.id not in referenced]

    def has_cycle(self) -> bool:
        return self.find_cycle() is not None

    def find_cycle(self) -> list[str] | None:
        """Return the node ids along one cycle, or None if the graph is acyclic."""
        try:
            cycle = nx.find_cycle(self.digraph)
        except nx.NetworkXNoCycle:
            return None
        return [edge[0] for edge in cycle]
