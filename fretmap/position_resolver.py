"""PositionResolver: maps (string, fret) positions to the note they sound."""

from dataclasses import dataclass

from fretmap.chromatic import ChromaticSystem
from fretmap.errors import InvalidFretNumber, InvalidStringIndex


@dataclass(frozen=True)
class Tuning:
    """
    Open-string notes of a fretted instrument.

    Attributes:
        name:       Display name of the tuning.
        open_notes: Open note per string, ordered from the lowest-pitched
                    string (index 0) to the highest.
    """

    name: str
    open_notes: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.open_notes)


#: Six-string reference tuning, lowest string first: E2 A2 D3 G3 B3 E4
STANDARD_TUNING = Tuning(name="Standard", open_notes=("E", "A", "D", "G", "B", "E"))


class PositionResolver:
    """
    Resolves the note sounding at any (string, fret) position.

    The note at a position is ``index(open_note) + fret`` taken modulo 12,
    so frets above the twelfth simply wrap around the chromatic cycle.
    Fret numbers have no upper bound here; bounding the fingerboard is the
    scanner's job.
    """

    def __init__(
        self,
        tuning: Tuning = STANDARD_TUNING,
        chromatic: ChromaticSystem | None = None,
    ) -> None:
        """
        Args:
            tuning:    Open-string notes, lowest string first.
            chromatic: Alphabet used for index arithmetic.

        Raises:
            InvalidRootNote: If an open note is not in the alphabet.
            ValueError:      If the tuning has no strings.
        """
        if not tuning.open_notes:
            raise ValueError("A tuning needs at least one string.")
        self.tuning = tuning
        self.chromatic = chromatic if chromatic is not None else ChromaticSystem()
        self._open_indices = tuple(self.chromatic.index_of(n) for n in tuning.open_notes)

    @property
    def string_count(self) -> int:
        return len(self.tuning.open_notes)

    @property
    def open_indices(self) -> tuple[int, ...]:
        """Chromatic index of each open string, lowest string first."""
        return self._open_indices

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _check_string(self, string_index: int) -> None:
        if not 0 <= string_index < self.string_count:
            raise InvalidStringIndex(string_index, self.string_count)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def note_at(self, string_index: int, fret: int) -> str:
        """
        Return the note sounding on *string_index* at *fret*.

        Args:
            string_index: 0 is the lowest-pitched string.
            fret:         0 is the open string.

        Raises:
            InvalidStringIndex: If *string_index* is outside the tuning.
            InvalidFretNumber:  If *fret* is negative.
        """
        self._check_string(string_index)
        if fret < 0:
            raise InvalidFretNumber(fret)
        return self.chromatic.note_at(self._open_indices[string_index] + fret)

    def open_note(self, string_index: int) -> str:
        self._check_string(string_index)
        return self.tuning.open_notes[string_index]

    def string_names(self) -> tuple[str, ...]:
        """Open-string names, lowest string first."""
        return self.tuning.open_notes
