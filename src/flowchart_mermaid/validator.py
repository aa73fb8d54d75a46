"""Structural validator for flowchart snapshots.

Findings are accumulated, never raised, in a fixed order: the empty-graph
warning, the aggregate disconnected-node warning, per-node long-label
warnings in node order, then the opt-in checks from ValidatorConfig.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from flowchart_mermaid.config import ValidatorConfig
from flowchart_mermaid.ir.graph import GraphIR
from flowchart_mermaid.ir.model import Edge, Node
from flowchart_mermaid.labels import resolve_label

logger = logging.getLogger(__name__)

EMPTY_WARNING = "Flowchart is empty"
CYCLE_WARNING = "Potential circular references detected in flowchart"


@dataclass
class ValidationReport:
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {"isValid": self.is_valid, "warnings": list(self.warnings), "errors": list(self.errors)}


def validate_flowchart(
    nodes: list[Node],
    edges: list[Edge],
    config: ValidatorConfig | None = None,
) -> ValidationReport:
    """Inspect a node/edge snapshot and report structural anomalies.

    Args:
        nodes: Node sequence; not modified.
        edges: Edge sequence; not modified.
        config: Label limit and opt-in checks; defaults to ValidatorConfig().

    Returns:
        A ValidationReport. Warnings never affect ``is_valid``.
    """
    config = config or ValidatorConfig()
    gir = GraphIR.build(nodes, edges)
    report = ValidationReport()

    if not nodes:
        report.warnings.append(EMPTY_WARNING)

    disconnected = gir.disconnected_nodes()
    if disconnected:
        report.warnings.append(f"{len(disconnected)} disconnected node(s) found")

    for node in nodes:
        label = resolve_label(node)
        if len(label) > config.max_label_length:
            report.warnings.append(f'Node "{node.id}" has a very long label ({len(label)} characters)')

    if config.detect_cycles and gir.has_cycle():
        report.warnings.append(CYCLE_WARNING)

    if config.report_dangling_edges:
        for edge in gir.dangling_edges():
            report.errors.append(f'Edge "{edge.source}" -> "{edge.target}" references a missing node')

    logger.debug("validated %d node(s): %d warning(s), %d error(s)", len(nodes), len(report.warnings), len(report.errors))
    return report
