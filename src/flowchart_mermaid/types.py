"""Shared type definitions for flowchart-mermaid.

Enums and small constants used across the model, validator, and renderers.
"""

from __future__ import annotations

from enum import Enum


class Direction(Enum):
    TD = "TD"
    TB = "TB"
    BT = "BT"
    RL = "RL"
    LR = "LR"

    @classmethod
    def default(cls) -> Direction:
        return cls.TD


class NodeCategory(Enum):
    Start = "start"
    End = "end"
    Process = "process"
    Decision = "decision"
    Connector = "connector"
    Generic = "generic"

    @classmethod
    def default(cls) -> NodeCategory:
        return cls.Generic

    @classmethod
    def parse(cls, tag: str | None) -> NodeCategory:
        """Map a raw category tag (or editor node type name) onto a category."""
        if tag is None:
            return cls.Generic
        key = tag[:-4] if tag.endswith("Node") else tag
        for category in cls:
            if category.value == key:
                return category
        return cls.Generic


class NodeShape(Enum):
    Stadium = ("([", "])")  # id([Label])
    Rectangle = ("[", "]")  # id[Label]
    Diamond = ("{", "}")  # id{Label}
    Circle = ("((", "))")  # id((Label))

    @property
    def open(self) -> str:
        return self.value[0]

    @property
    def close(self) -> str:
        return self.value[1]

    def wrap(self, label: str) -> str:
        return f"{self.open}{label}{self.close}"


DECISION_YES = "decision-yes"
DECISION_NO = "decision-no"
