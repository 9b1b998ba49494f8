"""Unit tests for fretboard scanning."""

import pytest

from fretmap.chromatic import CHROMATIC_NOTES
from fretmap.errors import InvalidFretNumber, InvalidRootNote, InvalidScaleDegree
from fretmap.position_resolver import PositionResolver
from fretmap.scanner import FretboardScanner, FretPosition

SCANNER = FretboardScanner()


def test_scan_c_major_twelve_frets() -> None:
    positions = SCANNER.scan("C", 12)
    # Frets 1..12 cover every pitch class once per string.
    assert len(positions) == 6 * 7
    assert all(p.is_in_scale for p in positions)
    assert all(p.fret > 0 for p in positions)


def test_scan_excludes_open_strings() -> None:
    assert all(p.fret >= 1 for p in SCANNER.scan("G", 24))


def test_scan_with_zero_frets_is_empty() -> None:
    assert SCANNER.scan("C", 0) == []


def test_scan_is_ordered_by_string_then_fret() -> None:
    positions = SCANNER.scan("D", 15)
    keys = [(p.string, p.fret) for p in positions]
    assert keys == sorted(keys)


def test_scan_finds_g_on_lowest_string() -> None:
    positions = SCANNER.scan("C", 12)
    assert FretPosition(string=0, fret=3, note="G", scale_degree=5) in positions


def test_scan_all_matches_resolver() -> None:
    resolver = PositionResolver()
    positions = SCANNER.scan_all("D", 15)
    assert len(positions) == 6 * 16
    for position in positions:
        assert position.note == resolver.note_at(position.string, position.fret)


@pytest.mark.parametrize("root", CHROMATIC_NOTES)
def test_scan_all_degrees_agree_with_engine(root: str) -> None:
    scale = SCANNER.engine.build_major_scale(root)
    for position in SCANNER.scan_all(root, 12):
        assert position.scale_degree == SCANNER.engine.degree_of(position.note, scale)
        assert position.is_in_scale == (position.scale_degree is not None)


def test_scan_is_restartable() -> None:
    first = SCANNER.scan("A", 12)
    second = SCANNER.scan("A", 12)
    assert first == second
    assert first is not second


def test_open_string_positions_c_major() -> None:
    positions = SCANNER.open_string_positions("C")
    assert [p.note for p in positions] == ["E", "A", "D", "G", "B", "E"]
    assert [p.scale_degree for p in positions] == [3, 6, 2, 5, 7, 3]
    assert all(p.is_open for p in positions)


def test_open_string_positions_keep_out_of_scale_strings() -> None:
    positions = SCANNER.open_string_positions("F#")
    assert len(positions) == 6
    assert [p.string for p in positions if p.is_in_scale] == [4]
    assert positions[4].scale_degree == 4


def test_positions_for_note() -> None:
    positions = SCANNER.positions_for_note("E", 12)
    assert [(p.string, p.fret) for p in positions] == [
        (0, 0), (0, 12), (1, 7), (2, 2), (3, 9), (4, 5), (5, 0), (5, 12),
    ]
    assert all(p.note == "E" and p.scale_degree is None for p in positions)


def test_positions_for_degree() -> None:
    positions = SCANNER.positions_for_degree(5, "C", 12)
    assert all(p.note == "G" and p.scale_degree == 5 for p in positions)
    assert (0, 3) in [(p.string, p.fret) for p in positions]


@pytest.mark.parametrize("degree", [0, 8])
def test_positions_for_invalid_degree_raises(degree: int) -> None:
    with pytest.raises(InvalidScaleDegree):
        SCANNER.positions_for_degree(degree, "C", 12)


def test_negative_max_fret_raises() -> None:
    with pytest.raises(InvalidFretNumber):
        SCANNER.scan("C", -1)


def test_invalid_root_raises() -> None:
    with pytest.raises(InvalidRootNote):
        SCANNER.scan("H", 12)


def test_fret_position_is_immutable() -> None:
    position = FretPosition(string=0, fret=1, note="F", scale_degree=4)
    with pytest.raises(AttributeError):
        position.fret = 2  # type: ignore[misc]
