"""Base renderer protocol."""

from __future__ import annotations

from typing import Protocol

from flowchart_mermaid.config import ConversionOptions
from flowchart_mermaid.ir.model import Graph, Metadata


class Renderer(Protocol):
    """Protocol that all diagram-text renderers must implement."""

    file_extension: str

    def render(self, graph: Graph, metadata: Metadata | None, options: ConversionOptions) -> str:
        """Render a flowchart snapshot to diagram text."""
        ...
