"""Unit tests for the chromatic alphabet."""

import pytest

from fretmap.chromatic import CHROMATIC_NOTES, ChromaticSystem, normalize_note_name
from fretmap.errors import InvalidRootNote


def test_alphabet_has_twelve_sharp_spelled_notes() -> None:
    assert len(CHROMATIC_NOTES) == 12
    assert len(set(CHROMATIC_NOTES)) == 12
    assert not any(note.endswith("b") for note in CHROMATIC_NOTES)


@pytest.mark.parametrize(
    ("flat", "sharp"),
    [("Db", "C#"), ("Eb", "D#"), ("Gb", "F#"), ("Ab", "G#"), ("Bb", "A#")],
)
def test_flats_normalize_to_sharps(flat: str, sharp: str) -> None:
    assert normalize_note_name(flat) == sharp


def test_natural_and_sharp_names_pass_through() -> None:
    assert normalize_note_name("C") == "C"
    assert normalize_note_name("F#") == "F#"


def test_index_of_accepts_flat_spelling() -> None:
    chromatic = ChromaticSystem()
    assert chromatic.index_of("C") == 0
    assert chromatic.index_of("Bb") == chromatic.index_of("A#") == 10


def test_index_of_rejects_unknown_symbol() -> None:
    chromatic = ChromaticSystem()
    with pytest.raises(InvalidRootNote):
        chromatic.index_of("H")
    with pytest.raises(InvalidRootNote):
        chromatic.index_of(None)  # type: ignore[arg-type]


def test_note_at_wraps_modulo_twelve() -> None:
    chromatic = ChromaticSystem()
    assert chromatic.note_at(12) == "C"
    assert chromatic.note_at(25) == "C#"
    assert chromatic.note_at(-1) == "B"


def test_transpose() -> None:
    chromatic = ChromaticSystem()
    assert chromatic.transpose("B", 1) == "C"
    assert chromatic.transpose("E", 7) == "B"
    assert chromatic.transpose("C", -2) == "A#"


def test_chromatic_scale_starts_at_root() -> None:
    scale = ChromaticSystem().chromatic_scale("A")
    assert scale[:4] == ("A", "A#", "B", "C")
    assert len(scale) == 12
    assert set(scale) == set(CHROMATIC_NOTES)


def test_membership() -> None:
    chromatic = ChromaticSystem()
    assert "G" in chromatic
    assert "Gb" in chromatic
    assert "H" not in chromatic
    assert 7 not in chromatic


def test_alternate_alphabet_is_injectable() -> None:
    flats = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]
    chromatic = ChromaticSystem(flats)
    assert chromatic.index_of("Db") == 1
    assert chromatic.transpose("C", 3) == "Eb"


def test_alphabet_must_have_twelve_distinct_names() -> None:
    with pytest.raises(ValueError):
        ChromaticSystem(["C", "D", "E"])
    with pytest.raises(ValueError):
        ChromaticSystem(["C"] * 12)
