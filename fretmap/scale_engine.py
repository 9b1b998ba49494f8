"""ScaleEngine: builds major scales and answers degree/membership queries."""

import logging
from dataclasses import dataclass
from typing import Final

from fretmap.chromatic import ChromaticSystem
from fretmap.errors import InvalidRootNote, InvalidScaleDegree

logger = logging.getLogger(__name__)

# ── Interval tables ─────────────────────────────────────────────────────────

#: Major scale steps in semitones: whole, whole, half, whole, whole, whole, half
MAJOR_SCALE_INTERVALS: Final[tuple[int, ...]] = (2, 2, 1, 2, 2, 2, 1)

#: Scale degrees, positionally paired with ScaleInfo.notes
SCALE_DEGREES: Final[tuple[int, ...]] = (1, 2, 3, 4, 5, 6, 7)

NOTES_PER_SCALE = len(SCALE_DEGREES)


@dataclass(frozen=True)
class ScaleInfo:
    """
    A derived seven-note scale.

    Attributes:
        root:      The note the scale was built from (sharp spelling).
        notes:     The 7 scale notes in walk order.
        degrees:   Scale degrees 1..7, index-aligned with *notes*.
        intervals: The semitone pattern the scale was walked with.
    """

    root: str
    notes: tuple[str, ...]
    degrees: tuple[int, ...] = SCALE_DEGREES
    intervals: tuple[int, ...] = MAJOR_SCALE_INTERVALS

    def __post_init__(self) -> None:
        if len(self.notes) != NOTES_PER_SCALE or len(self.degrees) != NOTES_PER_SCALE:
            raise ValueError(
                f"A scale needs exactly {NOTES_PER_SCALE} notes and degrees, "
                f"got {len(self.notes)} notes and {len(self.degrees)} degrees"
            )

    @property
    def name(self) -> str:
        """Human-readable scale name, e.g. 'G Major'."""
        return f"{self.root} Major"

    def pairs(self) -> list[tuple[int, str]]:
        """Return ``(degree, note)`` pairs in degree order."""
        return list(zip(self.degrees, self.notes))


class ScaleEngine:
    """
    Builds major scales over a chromatic alphabet.

    Algorithm overview
    ------------------
    Starting at the root's chromatic index, the engine walks the interval
    pattern ``[2, 2, 1, 2, 2, 2, 1]`` and collects
    ``(root_index + running_sum) mod 12`` for seven notes. The final half
    step is never applied: it only closes the octave back onto the root.

    Degree lookups are positional: ``notes[i]`` carries ``degrees[i]``.
    A note outside the scale has no degree, which is a normal answer
    (``None``), not an error.
    """

    def __init__(self, chromatic: ChromaticSystem | None = None) -> None:
        self.chromatic = chromatic if chromatic is not None else ChromaticSystem()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build_major_scale(self, root: str) -> ScaleInfo:
        """
        Build the major scale starting at *root*.

        Args:
            root: A chromatic note name. Flat spellings are normalized.

        Returns:
            ScaleInfo with 7 notes and degrees 1..7.

        Raises:
            InvalidRootNote: If *root* is not in the chromatic alphabet.
        """
        if root not in self.chromatic:
            raise InvalidRootNote(root)

        root_index = self.chromatic.index_of(root)
        notes = [self.chromatic.note_at(root_index)]
        offset = 0
        for step in MAJOR_SCALE_INTERVALS[:-1]:
            offset += step
            notes.append(self.chromatic.note_at(root_index + offset))

        scale = ScaleInfo(root=notes[0], notes=tuple(notes))
        logger.debug("Built %s: %s", scale.name, " ".join(scale.notes))
        return scale

    def degree_of(self, note: str, scale: ScaleInfo) -> int | None:
        """Return the scale degree of *note*, or None when it is not a member."""
        if note not in self.chromatic:
            return None
        spelled = self.chromatic.note_at(self.chromatic.index_of(note))
        for scale_note, degree in zip(scale.notes, scale.degrees):
            if scale_note == spelled:
                return degree
        return None

    def note_at_degree(self, degree: int, scale: ScaleInfo) -> str | None:
        """Return the note carrying *degree*, or None when degree is outside 1..7."""
        if not isinstance(degree, int) or not 1 <= degree <= NOTES_PER_SCALE:
            return None
        for scale_note, scale_degree in zip(scale.notes, scale.degrees):
            if scale_degree == degree:
                return scale_note
        return None

    def require_note_at_degree(self, degree: int, scale: ScaleInfo) -> str:
        """
        Strict variant of :meth:`note_at_degree`.

        Raises:
            InvalidScaleDegree: If *degree* is outside 1..7.
        """
        note = self.note_at_degree(degree, scale)
        if note is None:
            raise InvalidScaleDegree(degree)
        return note

    def is_member(self, note: str, scale: ScaleInfo) -> bool:
        return self.degree_of(note, scale) is not None

    def excluded_notes(self, scale: ScaleInfo) -> tuple[str, ...]:
        """Return the chromatic notes that are not in *scale*, in chromatic order."""
        return tuple(n for n in self.chromatic.notes if n not in scale.notes)
