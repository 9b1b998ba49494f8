"""ChromaticSystem: the 12-note alphabet and its modulo-12 index arithmetic."""

from collections.abc import Sequence
from typing import Final

from fretmap.errors import InvalidRootNote

# Chromatic pitch class names (index 0 = C), sharps preferred over flats
CHROMATIC_NOTES: Final[tuple[str, ...]] = (
    "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B",
)

#: Flat spellings and the sharp spelling they normalize to.
ENHARMONIC_SHARPS: Final[dict[str, str]] = {
    "Db": "C#",
    "Eb": "D#",
    "Gb": "F#",
    "Ab": "G#",
    "Bb": "A#",
}

SEMITONES_PER_OCTAVE = 12


def normalize_note_name(note: str) -> str:
    """Return the sharp spelling of *note*; names without a flat twin pass through."""
    return ENHARMONIC_SHARPS.get(note, note)


class ChromaticSystem:
    """
    An ordered, immutable alphabet of 12 semitone-spaced note names.

    The alphabet is injected rather than read from a module global so that
    engines built on top of it can be exercised with alternate spellings.
    All index arithmetic wraps modulo the alphabet length.
    """

    def __init__(self, notes: Sequence[str] = CHROMATIC_NOTES) -> None:
        """
        Args:
            notes: 12 distinct note names in ascending semitone order.

        Raises:
            ValueError: If *notes* is not 12 distinct names.
        """
        alphabet = tuple(notes)
        if len(alphabet) != SEMITONES_PER_OCTAVE or len(set(alphabet)) != len(alphabet):
            raise ValueError(
                f"A chromatic alphabet needs {SEMITONES_PER_OCTAVE} distinct note names, "
                f"got {alphabet!r}"
            )
        self._notes = alphabet
        self._index = {name: i for i, name in enumerate(alphabet)}

    @property
    def notes(self) -> tuple[str, ...]:
        return self._notes

    def __len__(self) -> int:
        return len(self._notes)

    def __contains__(self, note: object) -> bool:
        return isinstance(note, str) and self._lookup(note) is not None

    def __repr__(self) -> str:
        return f"ChromaticSystem({list(self._notes)!r})"

    def _lookup(self, note: str) -> int | None:
        index = self._index.get(note)
        if index is None:
            index = self._index.get(normalize_note_name(note))
        return index

    def index_of(self, note: str) -> int:
        """
        Return the chromatic index (0-11) of *note*.

        A name missing from the alphabet is retried with its sharp spelling,
        so 'Bb' resolves to the index of 'A#'.

        Raises:
            InvalidRootNote: If *note* is not part of the alphabet.
        """
        index = self._lookup(note) if isinstance(note, str) else None
        if index is None:
            raise InvalidRootNote(note)
        return index

    def note_at(self, index: int) -> str:
        """Return the note at *index*, wrapping modulo 12."""
        return self._notes[index % len(self._notes)]

    def transpose(self, note: str, semitones: int) -> str:
        """Return the note *semitones* above (or below, if negative) *note*."""
        return self.note_at(self.index_of(note) + semitones)

    def chromatic_scale(self, root: str) -> tuple[str, ...]:
        """Return all 12 notes in ascending order starting from *root*."""
        start = self.index_of(root)
        return tuple(self.note_at(start + i) for i in range(len(self._notes)))
