"""Intermediate representation: flowchart model and GraphIR."""

from flowchart_mermaid.ir.graph import GraphIR
from flowchart_mermaid.ir.model import (
    ConnectorData,
    DecisionData,
    Edge,
    GenericData,
    Graph,
    Metadata,
    Node,
    NodeData,
    ProcessData,
    StartEndData,
)

__all__ = [
    "ConnectorData",
    "DecisionData",
    "Edge",
    "GenericData",
    "Graph",
    "GraphIR",
    "Metadata",
    "Node",
    "NodeData",
    "ProcessData",
    "StartEndData",
]
