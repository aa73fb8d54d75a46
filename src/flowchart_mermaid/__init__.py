"""flowchart-mermaid: flowchart graphs to Mermaid flowchart text, with structural validation."""

from flowchart_mermaid.config import ConversionOptions, ValidatorConfig
from flowchart_mermaid.ir.model import Edge, Graph, Metadata, Node
from flowchart_mermaid.labels import escape_label, resolve_label, sanitize_id
from flowchart_mermaid.preview import MermaidPreview, generate_preview
from flowchart_mermaid.renderers.mermaid import MermaidRenderer, convert_to_mermaid, mermaid_filename
from flowchart_mermaid.types import Direction, NodeCategory
from flowchart_mermaid.validator import ValidationReport, validate_flowchart

__all__ = [
    "ConversionOptions",
    "Direction",
    "Edge",
    "Graph",
    "MermaidPreview",
    "MermaidRenderer",
    "Metadata",
    "Node",
    "NodeCategory",
    "ValidationReport",
    "ValidatorConfig",
    "convert_to_mermaid",
    "escape_label",
    "generate_preview",
    "mermaid_filename",
    "resolve_label",
    "sanitize_id",
    "validate_flowchart",
]
