"""Tests that verify example outputs match .expect.mmd golden files."""

from pathlib import Path

import pytest

from flowchart_mermaid.config import ConversionOptions
from flowchart_mermaid.storage import import_from_file
from flowchart_mermaid.renderers.mermaid import convert_to_mermaid

EXAMPLES_DIR = Path(__file__).parent.parent.parent / "examples"


def find_example_pairs() -> list[tuple[str, Path, Path]]:
    """Find all .json documents that have a matching .expect.mmd file."""
    pairs = []
    for doc_file in sorted(EXAMPLES_DIR.glob("*.json")):
        expect_file = EXAMPLES_DIR / f"{doc_file.stem}.expect.mmd"
        if expect_file.exists():
            pairs.append((doc_file.stem, doc_file, expect_file))
    return pairs


EXAMPLE_PAIRS = find_example_pairs()


@pytest.mark.parametrize("name,doc_file,expect_file", EXAMPLE_PAIRS, ids=[p[0] for p in EXAMPLE_PAIRS])
def test_example_matches_expect(name: str, doc_file: Path, expect_file: Path) -> None:
    """Convert a .json document and compare output against its .expect.mmd golden file."""
    doc = import_from_file(doc_file)
    expected = expect_file.read_text()
    actual = convert_to_mermaid(doc.graph.nodes, doc.graph.edges, doc.metadata, ConversionOptions())
    assert actual == expected, f"Output for {name} differs from .expect.mmd"


def test_examples_present():
    assert EXAMPLE_PAIRS
