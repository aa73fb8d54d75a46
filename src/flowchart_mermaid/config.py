"""Centralized configuration for flowchart-mermaid."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from flowchart_mermaid.ir.schema import describe_error
from flowchart_mermaid.types import Direction


class ExportOptionsModel(BaseModel):
    """The export-options form as the editor submits it."""

    include_title: bool = Field(alias="includeTitle", default=True)
    include_description: bool = Field(alias="includeDescription", default=True)
    direction: str | None = None
    theme: str | None = None

    model_config = ConfigDict(populate_by_name=True)


@dataclass
class ConversionOptions:
    """Configuration for the Mermaid transpiler.

    ``direction`` is emitted verbatim; a raw string outside the
    ``Direction`` set is not rejected.
    """

    include_title: bool = True
    include_description: bool = True
    direction: Direction | str = Direction.TD
    theme: str | None = None

    @property
    def direction_keyword(self) -> str:
        if isinstance(self.direction, Direction):
            return self.direction.value
        return str(self.direction)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> ConversionOptions:
        """Build options from the export form's camelCase keys.

        Raises:
            ValueError: If a key holds a value of the wrong type.
        """
        try:
            form = ExportOptionsModel.model_validate(raw)
        except ValidationError as e:
            raise ValueError(f"invalid conversion options: {describe_error(e)}") from e
        return cls(
            include_title=form.include_title,
            include_description=form.include_description,
            direction=form.direction or Direction.default(),
            theme=form.theme or None,
        )


@dataclass
class ValidatorConfig:
    """Configuration for the structural validator.

    The opt-in checks are off by default.
    """

    max_label_length: int = 50
    report_dangling_edges: bool = False
    detect_cycles: bool = False
