"""CoordinateMapper: (string, fret) positions to 1-based grid addresses."""

from fretmap.errors import InvalidFretNumber, InvalidStringIndex

#: Open strings always sit in the first grid column.
OPEN_STRING_COLUMN = 1

DEFAULT_STRING_COUNT = 6

#: Rows reserved above the strings for off-grid annotations.
DEFAULT_ROW_OFFSET = 1


class CoordinateMapper:
    """
    Maps fingerboard positions onto a 1-based column/row grid.

    Grid convention
    ---------------
    Columns: fret ``f`` occupies column ``f + 1``, so the open string is
    column 1 and the first fret is column 2.

    Rows: the grid reserves *row_offset* placeholder rows above the strings
    and the same number below them. String index ``s`` (0 = lowest-pitched
    string) occupies row ``s + 1 + row_offset``. With the default offset of
    1 and six strings::

        row 1      top placeholder (fret-number labels)
        rows 2..7  strings 0..5
        row 8      bottom placeholder

    Both mappings are exact inverses of :meth:`to_fret` and
    :meth:`to_string_index` over the valid domain.
    """

    def __init__(
        self,
        string_count: int = DEFAULT_STRING_COUNT,
        row_offset: int = DEFAULT_ROW_OFFSET,
    ) -> None:
        if string_count < 1:
            raise ValueError(f"string_count must be at least 1, got {string_count}")
        if row_offset < 0:
            raise ValueError(f"row_offset must be 0 or greater, got {row_offset}")
        self.string_count = string_count
        self.row_offset = row_offset

    # ── Row bands ───────────────────────────────────────────────────────────

    @property
    def first_string_row(self) -> int:
        return 1 + self.row_offset

    @property
    def last_string_row(self) -> int:
        return self.string_count + self.row_offset

    @property
    def total_rows(self) -> int:
        return self.string_count + 2 * self.row_offset

    @property
    def top_placeholder_row(self) -> int | None:
        """First row of the top annotation band, or None without an offset."""
        return 1 if self.row_offset else None

    @property
    def bottom_placeholder_row(self) -> int | None:
        """First row of the bottom annotation band, or None without an offset."""
        return self.last_string_row + 1 if self.row_offset else None

    def total_columns(self, fret_count: int) -> int:
        """Columns needed for *fret_count* frets plus the open-string column."""
        if fret_count < 0:
            raise InvalidFretNumber(fret_count)
        return fret_count + 1

    # ── Forward mapping ─────────────────────────────────────────────────────

    def to_column(self, fret: int) -> int:
        if fret < 0:
            raise InvalidFretNumber(fret)
        return fret + 1

    def to_row(self, string_index: int) -> int:
        if not 0 <= string_index < self.string_count:
            raise InvalidStringIndex(string_index, self.string_count)
        return string_index + 1 + self.row_offset

    def to_cell(self, string_index: int, fret: int) -> tuple[int, int]:
        """Return the ``(column, row)`` address of a position."""
        return self.to_column(fret), self.to_row(string_index)

    # ── Inverse mapping ─────────────────────────────────────────────────────

    def to_fret(self, column: int) -> int:
        if column < 1:
            raise ValueError(f"Grid columns start at 1, got {column}")
        return column - 1

    def to_string_index(self, row: int) -> int:
        if not self.first_string_row <= row <= self.last_string_row:
            raise ValueError(
                f"Row {row} is outside the string rows "
                f"{self.first_string_row}-{self.last_string_row}"
            )
        return row - 1 - self.row_offset
