"""Label resolution, escaping, identifier sanitizing, and shape mapping.

``resolve_label`` is the one place a node's display label is decided; the
validator measures and the renderer embeds the same string.
"""

from __future__ import annotations

import re

from flowchart_mermaid.ir.model import Node
from flowchart_mermaid.types import NodeCategory, NodeShape

CONNECTOR_GLYPH = "•"
ID_PREFIX = "node_"

_FALLBACK_LABELS: dict[NodeCategory, str] = {
    NodeCategory.Start: "Start",
    NodeCategory.End: "End",
    NodeCategory.Process: "Process",
    NodeCategory.Decision: "Decision?",
    NodeCategory.Connector: CONNECTOR_GLYPH,
    NodeCategory.Generic: "Node",
}

_SHAPES: dict[NodeCategory, NodeShape] = {
    NodeCategory.Start: NodeShape.Stadium,
    NodeCategory.End: NodeShape.Stadium,
    NodeCategory.Process: NodeShape.Rectangle,
    NodeCategory.Decision: NodeShape.Diamond,
    NodeCategory.Connector: NodeShape.Circle,
}

_UNSAFE_ID_RE = re.compile(r"[^A-Za-z0-9_]")
_LEADING_LETTER_RE = re.compile(r"[A-Za-z]")


def resolve_label(node: Node) -> str:
    """Return the node's own label, or its category fallback when empty."""
    if node.data.label:
        return node.data.label
    return _FALLBACK_LABELS.get(node.category, _FALLBACK_LABELS[NodeCategory.Generic])


def escape_label(text: str) -> str:
    """Escape a node or edge label for embedding in Mermaid text."""
    return (
        text.replace('"', "#quot;")
        .replace("'", "#apos;")
        .replace("\n", "<br/>")
        .replace("\r", "")
        .strip()
    )


def sanitize_id(node_id: str) -> str:
    """Rewrite *node_id* into a Mermaid-safe identifier.

    Distinct ids may collapse onto the same result ("a-b" and "a_b");
    callers get no collision detection.
    """
    sanitized = _UNSAFE_ID_RE.sub("_", node_id)
    if _LEADING_LETTER_RE.match(sanitized):
        return sanitized
    return f"{ID_PREFIX}{sanitized}"


def shape_for(category: NodeCategory) -> NodeShape:
    return _SHAPES.get(category, NodeShape.Rectangle)


def render_shape(category: NodeCategory, label: str) -> str:
    """Wrap the escaped *label* in the bracket notation for *category*."""
    escaped = escape_label(label)
    if category is NodeCategory.Connector and not escaped:
        escaped = CONNECTOR_GLYPH
    return shape_for(category).wrap(escaped)
