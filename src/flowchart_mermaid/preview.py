"""Derived metrics for generated diagram text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class MermaidPreview:
    code: str
    line_count: int
    character_count: int

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "lineCount": self.line_count, "characterCount": self.character_count}


def generate_preview(code: str) -> MermaidPreview:
    """Count ``\\n``-separated segments and characters in *code*.

    A trailing newline counts as starting one more (empty) line.
    """
    return MermaidPreview(code=code, line_count=len(code.split("\n")), character_count=len(code))
