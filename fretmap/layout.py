"""LayoutAssembler: builds the grid placement table for a fretboard."""

import logging
from collections.abc import Iterable

from fretmap.coordinates import CoordinateMapper
from fretmap.errors import InvalidFretNumber
from fretmap.layers import ElementKind, LayerRegistry
from fretmap.models import GridElement, GridPosition, LayoutTable
from fretmap.scanner import FretPosition

logger = logging.getLogger(__name__)


class LayoutAssembler:
    """
    Produces every structural and marker element of a fretboard grid.

    Structural elements are built in one pass by :meth:`assemble`:

    - a top and a bottom placeholder row spanning every column,
    - one fret divider per fret ``1..fret_count``, spanning all string rows,
    - one string line per string, spanning every column.

    Marker elements come from the scanner's output and are converted one by
    one through the same :class:`CoordinateMapper` with
    :meth:`marker_element` / :meth:`marker_container_element`.

    The assembler deals in grid indices only. Column widths and row
    heights belong to whatever renders the table.
    """

    def __init__(
        self,
        mapper: CoordinateMapper | None = None,
        registry: LayerRegistry | None = None,
    ) -> None:
        self.mapper = mapper if mapper is not None else CoordinateMapper()
        self.registry = registry if registry is not None else LayerRegistry()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _element(self, kind: ElementKind, column: int, row: int, payload: object = None,
                 *, column_span: int = 1, row_span: int = 1) -> GridElement:
        position = GridPosition(
            column=column,
            row=row,
            layer=self.registry.expected_layer(kind),
            column_span=column_span,
            row_span=row_span,
        )
        return GridElement(kind=kind, position=position, payload=payload)

    def _check_bounds(self, position: GridPosition, columns: int, rows: int) -> None:
        assert 1 <= position.column and position.last_column <= columns, (
            f"Column {position.column}-{position.last_column} outside 1-{columns}"
        )
        assert 1 <= position.row and position.last_row <= rows, (
            f"Row {position.row}-{position.last_row} outside 1-{rows}"
        )

    def _placeholder_rows(self, columns: int) -> list[GridElement]:
        bands = [
            ("top", self.mapper.top_placeholder_row),
            ("bottom", self.mapper.bottom_placeholder_row),
        ]
        return [
            self._element(
                ElementKind.PLACEHOLDER_ROW, 1, row, {"band": band},
                column_span=columns, row_span=self.mapper.row_offset,
            )
            for band, row in bands
            if row is not None
        ]

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def assemble(self, fret_count: int) -> LayoutTable:
        """
        Build the structural layout table for *fret_count* frets.

        Raises:
            InvalidFretNumber: If *fret_count* is negative.
        """
        if fret_count < 0:
            raise InvalidFretNumber(fret_count)

        columns = self.mapper.total_columns(fret_count)
        rows = self.mapper.total_rows
        elements = self._placeholder_rows(columns)

        for fret in range(1, fret_count + 1):
            elements.append(
                self._element(
                    ElementKind.FRET_DIVIDER,
                    self.mapper.to_column(fret),
                    self.mapper.first_string_row,
                    {"fret_number": fret},
                    row_span=self.mapper.string_count,
                )
            )

        for string_index in range(self.mapper.string_count):
            elements.append(
                self._element(
                    ElementKind.STRING_LINE,
                    1,
                    self.mapper.to_row(string_index),
                    {"string_index": string_index},
                    column_span=columns,
                )
            )

        for element in elements:
            self._check_bounds(element.position, columns, rows)

        logger.debug(
            "Assembled layout for %d frets: %d columns x %d rows, %d elements",
            fret_count, columns, rows, len(elements),
        )
        return LayoutTable(fret_count=fret_count, columns=columns, rows=rows, elements=elements)

    def marker_element(self, position: FretPosition) -> GridElement:
        """Convert a scanned position into a note-marker element."""
        column, row = self.mapper.to_cell(position.string, position.fret)
        return self._element(ElementKind.NOTE_MARKER, column, row, position)

    def marker_container_element(self, position: FretPosition) -> GridElement:
        """Convert a scanned position into the container cell its marker sits in."""
        column, row = self.mapper.to_cell(position.string, position.fret)
        return self._element(ElementKind.MARKER_CONTAINER, column, row, position)

    def add_markers(
        self,
        table: LayoutTable,
        positions: Iterable[FretPosition],
        with_containers: bool = True,
    ) -> LayoutTable:
        """
        Append marker elements for *positions* to *table*.

        The batch is all-or-nothing: *table* is left untouched when any
        element fails the bounds or duplicate checks.

        Raises:
            ValueError: If a marker would reuse a (column, row, layer) triple
                        already taken in the table or earlier in the batch.
        """
        taken = table.marker_keys()
        batch: list[GridElement] = []
        for position in positions:
            new_elements = [self.marker_element(position)]
            if with_containers:
                new_elements.insert(0, self.marker_container_element(position))
            for element in new_elements:
                self._check_bounds(element.position, table.columns, table.rows)
                key = (element.position.column, element.position.row, int(element.position.layer))
                if key in taken:
                    raise ValueError(
                        f"Duplicate {element.kind.value} at column {key[0]}, row {key[1]}"
                    )
                taken.add(key)
                batch.append(element)
        table.elements.extend(batch)
        logger.debug("Added %d marker element(s)", len(batch))
        return table
