"""CLI entry point for flowchart-mermaid."""

import logging
import sys

import click
from pydantic import ValidationError

from flowchart_mermaid.config import ConversionOptions, ValidatorConfig
from flowchart_mermaid.ir.model import Graph, Metadata
from flowchart_mermaid.ir.schema import SnapshotModel, describe_error
from flowchart_mermaid.preview import generate_preview
from flowchart_mermaid.renderers.mermaid import MermaidRenderer
from flowchart_mermaid.types import Direction
from flowchart_mermaid.validator import validate_flowchart


def _load_snapshot(text: str) -> tuple[Graph, Metadata]:
    """Read a saved flowchart document or a bare {nodes, edges} object."""
    try:
        snapshot = SnapshotModel.model_validate_json(text)
    except ValidationError as e:
        raise ValueError(f"invalid input: {describe_error(e)}") from e
    metadata = Metadata(title=snapshot.title or None, description=snapshot.description or None)
    return Graph.from_model(snapshot), metadata


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option(
    "--direction",
    "-d",
    "direction",
    type=click.Choice([d.value for d in Direction], case_sensitive=False),
    default=Direction.TD.value,
    help="Layout direction",
)
@click.option("--theme", "theme", type=str, default=None, help="Emit a Mermaid theme directive")
@click.option("--no-title", "no_title", is_flag=True, help="Omit the title front matter")
@click.option("--no-description", "no_description", is_flag=True, help="Omit the description comment")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--validate", "validate", is_flag=True, help="Print the validation report to stderr")
@click.option("--strict", "strict", is_flag=True, help="Also report dangling edges and cycles")
@click.option("--stats", "stats", is_flag=True, help="Print line and character counts to stderr")
@click.option("--verbose", "-v", "verbose", is_flag=True, help="Enable debug logging")
def main(
    input: str | None,
    direction: str,
    theme: str | None,
    no_title: bool,
    no_description: bool,
    output: str | None,
    validate: bool,
    strict: bool,
    stats: bool,
    verbose: bool,
) -> None:
    """Flowchart JSON document to Mermaid flowchart text."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if input:
        try:
            with open(input, encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    try:
        graph, metadata = _load_snapshot(text)
    except ValueError as e:
        click.echo(f"error: {e}", err=True)
        sys.exit(1)

    options = ConversionOptions(
        include_title=not no_title,
        include_description=not no_description,
        direction=Direction(direction.upper()),
        theme=theme,
    )
    rendered = MermaidRenderer().render(graph, metadata, options)

    report = None
    if validate or strict:
        config = ValidatorConfig(report_dangling_edges=strict, detect_cycles=strict)
        report = validate_flowchart(graph.nodes, graph.edges, config)
        for warning in report.warnings:
            click.echo(f"warning: {warning}", err=True)
        for error in report.errors:
            click.echo(f"error: {error}", err=True)

    if stats:
        preview = generate_preview(rendered)
        click.echo(f"{preview.line_count} lines, {preview.character_count} characters", err=True)

    if output:
        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)

    if report is not None and not report.is_valid:
        sys.exit(1)


if __name__ == "__main__":
    main()
