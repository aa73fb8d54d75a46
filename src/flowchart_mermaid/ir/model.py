"""Flowchart data model: typed node data, nodes, edges, and graph snapshots.

Node data is a tagged union with one variant per category. The editor's
JSON shape (camelCase keys, ``type`` tag, free-form ``data`` bag)
is validated by the pydantic models in ``ir.schema`` and converted here;
keys the model does not type are carried through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

from pydantic import ValidationError

from flowchart_mermaid.ir.schema import EdgeModel, GraphModel, NodeDataModel, NodeModel, describe_error
from flowchart_mermaid.types import NodeCategory


@dataclass
class StartEndData:
    label: str = ""


@dataclass
class ProcessData:
    label: str = ""
    description: str = ""


@dataclass
class DecisionData:
    label: str = ""
    yes_label: str = ""
    no_label: str = ""


@dataclass
class ConnectorData:
    label: str = ""


@dataclass
class GenericData:
    label: str = ""


NodeData = StartEndData | ProcessData | DecisionData | ConnectorData | GenericData

_DATA_TYPES: dict[NodeCategory, type] = {
    NodeCategory.Start: StartEndData,
    NodeCategory.End: StartEndData,
    NodeCategory.Process: ProcessData,
    NodeCategory.Decision: DecisionData,
    NodeCategory.Connector: ConnectorData,
    NodeCategory.Generic: GenericData,
}


def data_for(category: NodeCategory, **values: str) -> NodeData:
    """Build the data variant belonging to *category*."""
    return _DATA_TYPES[category](**values)


def _validate(model: type, raw: Any, what: str) -> Any:
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise ValueError(f"invalid {what}: {describe_error(e)}") from e


@dataclass
class Node:
    id: str
    category: NodeCategory = field(default_factory=NodeCategory.default)
    data: NodeData = field(default_factory=GenericData)
    attrs: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def new(cls, id: str, category: NodeCategory, **values: str) -> Node:
        return cls(id=id, category=category, data=data_for(category, **values))

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Node:
        """Build a node from the editor's JSON shape.

        Raises:
            ValueError: If *raw* does not validate as a node.
        """
        return cls.from_model(_validate(NodeModel, raw, "node"))

    @classmethod
    def from_model(cls, model: NodeModel) -> Node:
        bag = model.data or NodeDataModel()
        attrs = dict(bag.model_extra or {})
        category = NodeCategory.parse(model.type or model.category)
        # startNode doubles as the end node in older documents
        if category is NodeCategory.Start and attrs.get("nodeType") == "end":
            category = NodeCategory.End
        data_cls = _DATA_TYPES[category]
        values = {f.name: getattr(bag, f.name) or "" for f in fields(data_cls)}
        return cls(
            id=model.id,
            category=category,
            data=data_cls(**values),
            attrs=attrs,
            extra=dict(model.model_extra or {}),
        )

    def to_model(self) -> NodeModel:
        values = {f.name: getattr(self.data, f.name) for f in fields(self.data)}
        return NodeModel(
            id=self.id,
            type=f"{self.category.value}Node",
            data=NodeDataModel(**values, **self.attrs),
            **self.extra,
        )

    def to_dict(self) -> dict[str, Any]:
        return self.to_model().model_dump(by_alias=True, exclude_none=True)


@dataclass
class Edge:
    source: str
    target: str
    label: str | None = None
    source_handle: str | None = None
    id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Edge:
        """Build an edge from the editor's JSON shape.

        Raises:
            ValueError: If *raw* does not validate as an edge.
        """
        return cls.from_model(_validate(EdgeModel, raw, "edge"))

    @classmethod
    def from_model(cls, model: EdgeModel) -> Edge:
        return cls(
            source=model.source,
            target=model.target,
            label=model.label,
            source_handle=model.source_handle,
            id=model.id,
            extra=dict(model.model_extra or {}),
        )

    def to_model(self) -> EdgeModel:
        return EdgeModel(
            id=self.id,
            source=self.source,
            target=self.target,
            label=self.label,
            source_handle=self.source_handle,
            **self.extra,
        )

    def to_dict(self) -> dict[str, Any]:
        return self.to_model().model_dump(by_alias=True, exclude_none=True)


@dataclass
class Metadata:
    title: str | None = None
    description: str | None = None


@dataclass
class Graph:
    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)

    @classmethod
    def new(cls) -> Graph:
        return cls()

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Graph:
        """Build a graph from ``{"nodes": [...], "edges": [...]}``.

        Raises:
            ValueError: If the graph or any node or edge in it does not validate.
        """
        return cls.from_model(_validate(GraphModel, raw, "graph"))

    @classmethod
    def from_model(cls, model: GraphModel) -> Graph:
        return cls(
            nodes=[Node.from_model(n) for n in model.nodes],
            edges=[Edge.from_model(e) for e in model.edges],
        )

    def to_model(self) -> GraphModel:
        return GraphModel(nodes=[n.to_model() for n in self.nodes], edges=[e.to_model() for e in self.edges])

    def to_dict(self) -> dict[str, Any]:
        return self.to_model().model_dump(by_alias=True, exclude_none=True)
