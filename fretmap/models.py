"""Data models for fretboard grid layouts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from fretmap.layers import MARKER_KINDS, ElementKind, Layer


@dataclass(frozen=True)
class GridPosition:
    """A 1-based grid address with its z-order layer."""

    column: int
    row: int
    layer: Layer
    column_span: int = 1
    row_span: int = 1

    @property
    def last_column(self) -> int:
        return self.column + self.column_span - 1

    @property
    def last_row(self) -> int:
        return self.row + self.row_span - 1

    @property
    def cell(self) -> tuple[int, int]:
        return self.column, self.row


@dataclass
class GridElement:
    """One positioned element of a layout table."""

    kind: ElementKind
    position: GridPosition
    payload: Any = None


@dataclass
class LayoutTable:
    """The complete placement table for one fret count."""

    fret_count: int
    columns: int
    rows: int
    elements: list[GridElement] = field(default_factory=list)

    def of_kind(self, kind: ElementKind) -> list[GridElement]:
        return [element for element in self.elements if element.kind == kind]

    def markers(self) -> list[GridElement]:
        return [element for element in self.elements if element.kind in MARKER_KINDS]

    def marker_keys(self) -> set[tuple[int, int, int]]:
        """(column, row, layer) triples already taken by marker kinds."""
        return {
            (e.position.column, e.position.row, int(e.position.layer)) for e in self.markers()
        }

    def css_variables(self) -> dict[str, str]:
        return {
            "--fret-count": str(self.fret_count),
            "--grid-columns": str(self.columns),
            "--grid-rows": str(self.rows),
        }

    def to_dict(self) -> dict[str, Any]:
        """Plain-data view of the table, suitable for JSON output."""
        return {
            "fret_count": self.fret_count,
            "columns": self.columns,
            "rows": self.rows,
            "elements": [
                {
                    "kind": element.kind.value,
                    "column": element.position.column,
                    "row": element.position.row,
                    "column_span": element.position.column_span,
                    "row_span": element.position.row_span,
                    "layer": int(element.position.layer),
                }
                for element in self.elements
            ],
        }
