"""Diagram-text renderers."""

from flowchart_mermaid.renderers.base import Renderer
from flowchart_mermaid.renderers.mermaid import MermaidRenderer, convert_to_mermaid, mermaid_filename

__all__ = ["MermaidRenderer", "Renderer", "convert_to_mermaid", "mermaid_filename"]
