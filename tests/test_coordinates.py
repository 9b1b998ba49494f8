"""Unit tests for grid coordinate mapping."""

import pytest

from fretmap.coordinates import OPEN_STRING_COLUMN, CoordinateMapper
from fretmap.errors import InvalidFretNumber, InvalidStringIndex

MAPPER = CoordinateMapper()


def test_fret_to_column() -> None:
    assert MAPPER.to_column(0) == OPEN_STRING_COLUMN == 1
    assert MAPPER.to_column(1) == 2
    assert MAPPER.to_column(12) == 13


def test_string_to_row_leaves_a_placeholder_row_above() -> None:
    assert MAPPER.to_row(0) == 2
    assert MAPPER.to_row(1) == 3
    assert MAPPER.to_row(5) == 7


def test_row_bands() -> None:
    assert MAPPER.top_placeholder_row == 1
    assert MAPPER.first_string_row == 2
    assert MAPPER.last_string_row == 7
    assert MAPPER.bottom_placeholder_row == 8
    assert MAPPER.total_rows == 8
    assert MAPPER.total_columns(12) == 13


def test_no_placeholder_rows_without_offset() -> None:
    mapper = CoordinateMapper(row_offset=0)
    assert mapper.to_row(0) == 1
    assert mapper.total_rows == 6
    assert mapper.top_placeholder_row is None
    assert mapper.bottom_placeholder_row is None


def test_coordinate_round_trip_and_injectivity() -> None:
    cells = set()
    for string_index in range(6):
        for fret in range(37):
            column, row = MAPPER.to_cell(string_index, fret)
            assert MAPPER.to_fret(column) == fret
            assert MAPPER.to_string_index(row) == string_index
            cells.add((column, row))
    assert len(cells) == 6 * 37


@pytest.mark.parametrize("offset", [0, 1, 2])
def test_row_inverse_holds_for_any_constant_offset(offset: int) -> None:
    mapper = CoordinateMapper(row_offset=offset)
    rows = [mapper.to_row(s) for s in range(6)]
    assert len(set(rows)) == 6
    assert [mapper.to_string_index(r) for r in rows] == list(range(6))


def test_invalid_inputs_raise() -> None:
    with pytest.raises(InvalidFretNumber):
        MAPPER.to_column(-1)
    with pytest.raises(InvalidStringIndex):
        MAPPER.to_row(6)
    with pytest.raises(InvalidFretNumber):
        MAPPER.total_columns(-1)


def test_inverse_rejects_cells_outside_the_playable_band() -> None:
    with pytest.raises(ValueError):
        MAPPER.to_fret(0)
    with pytest.raises(ValueError):
        MAPPER.to_string_index(1)
    with pytest.raises(ValueError):
        MAPPER.to_string_index(8)


def test_constructor_rejects_bad_geometry() -> None:
    with pytest.raises(ValueError):
        CoordinateMapper(string_count=0)
    with pytest.raises(ValueError):
        CoordinateMapper(row_offset=-1)
