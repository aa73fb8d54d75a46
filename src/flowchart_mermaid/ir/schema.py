"""Pydantic models for the editor's JSON wire format.

These mirror the camelCase documents the editor saves and exports. Keys the
models do not declare are kept as extras so documents survive a round trip.
Numbers in string positions (ids, labels) are coerced to strings.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class NodeDataModel(BaseModel):
    """The free-form ``data`` bag of a node."""

    label: str | None = None
    description: str | None = None
    yes_label: str | None = Field(alias="yesLabel", default=None)
    no_label: str | None = Field(alias="noLabel", default=None)

    model_config = ConfigDict(populate_by_name=True, extra="allow", coerce_numbers_to_str=True)


class NodeModel(BaseModel):
    id: str
    type: str | None = None
    category: str | None = None
    data: NodeDataModel | None = None

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)


class EdgeModel(BaseModel):
    id: str | None = None
    source: str
    target: str
    label: str | None = None
    source_handle: str | None = Field(alias="sourceHandle", default=None)

    model_config = ConfigDict(populate_by_name=True, extra="allow", coerce_numbers_to_str=True)


class GraphModel(BaseModel):
    nodes: list[NodeModel] = Field(default_factory=list)
    edges: list[EdgeModel] = Field(default_factory=list)


class SnapshotModel(GraphModel):
    """A bare graph with optional metadata, as handed to the CLI."""

    title: str | None = None
    description: str | None = None

    model_config = ConfigDict(coerce_numbers_to_str=True)


class DocumentModel(GraphModel):
    """A saved or exported flowchart document."""

    id: str = Field(min_length=1)
    title: str | None = None
    description: str | None = None
    nodes: list[NodeModel]
    edges: list[EdgeModel]
    created_at: datetime | None = Field(alias="createdAt", default=None)
    updated_at: datetime | None = Field(alias="updatedAt", default=None)
    version: str | None = None

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


def describe_error(e: ValidationError) -> str:
    """One-line summary of the first validation problem."""
    first = e.errors()[0]
    where = ".".join(str(part) for part in first["loc"]) or "document"
    return f"{where}: {first['msg']}"
