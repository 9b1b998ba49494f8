"""FretboardScanner: enumerates scale positions across the fingerboard."""

import logging
from dataclasses import dataclass

import numpy as np

from fretmap.errors import InvalidFretNumber
from fretmap.position_resolver import PositionResolver
from fretmap.scale_engine import ScaleEngine, ScaleInfo

logger = logging.getLogger(__name__)

DEFAULT_MAX_FRET = 24

# Marker for "no degree" in the per-pitch-class degree lookup array
_NO_DEGREE = 0


@dataclass(frozen=True)
class FretPosition:
    """
    One (string, fret) location and the note it sounds.

    Attributes:
        string:       0-based string index (0 = lowest-pitched string).
        fret:         Fret number, 0 for the open string.
        note:         Note name sounding at the position.
        scale_degree: Degree (1..7) within the scanned scale, or None.
    """

    string: int
    fret: int
    note: str
    scale_degree: int | None = None

    @property
    def is_in_scale(self) -> bool:
        return self.scale_degree is not None

    @property
    def is_open(self) -> bool:
        return self.fret == 0


class FretboardScanner:
    """
    Scans every string and fret of an instrument against a major scale.

    Algorithm overview
    ------------------
    1. **Note grid** – The chromatic index of every position is computed in
       one shot as ``(open_index[string] + fret) mod 12``, giving an array of
       shape ``(string_count, max_fret + 1)``.

    2. **Degree lookup** – A 12-slot array maps each pitch class to its
       degree in the scale (0 for excluded notes), so membership for the
       whole grid is a single fancy-indexing pass.

    3. **Emission** – Positions are emitted string by string, fret by fret.
       The canonical *active* scan keeps only in-scale, fretted positions;
       open strings are reported separately by
       :meth:`open_string_positions` because they are always shown.

    Every call recomputes from scratch and returns a fresh list.
    """

    def __init__(
        self,
        engine: ScaleEngine | None = None,
        resolver: PositionResolver | None = None,
    ) -> None:
        self.resolver = resolver if resolver is not None else PositionResolver()
        self.engine = engine if engine is not None else ScaleEngine(self.resolver.chromatic)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _note_grid(self, max_fret: int) -> np.ndarray:
        """Chromatic index grid of shape (string_count, max_fret + 1)."""
        if max_fret < 0:
            raise InvalidFretNumber(max_fret)
        open_indices = np.asarray(self.resolver.open_indices, dtype=np.int64)
        frets = np.arange(max_fret + 1, dtype=np.int64)
        return (open_indices[:, np.newaxis] + frets[np.newaxis, :]) % len(self.resolver.chromatic)

    def _degree_lookup(self, scale: ScaleInfo) -> np.ndarray:
        """Array mapping chromatic index -> scale degree (0 when excluded)."""
        chromatic = self.resolver.chromatic
        lookup = np.full(len(chromatic), _NO_DEGREE, dtype=np.int64)
        for note, degree in zip(scale.notes, scale.degrees):
            lookup[chromatic.index_of(note)] = degree
        return lookup

    def _positions(self, scale: ScaleInfo, max_fret: int, *, min_fret: int = 0,
                   in_scale_only: bool = False) -> list[FretPosition]:
        grid = self._note_grid(max_fret)
        degrees = self._degree_lookup(scale)[grid]
        chromatic = self.resolver.chromatic

        positions: list[FretPosition] = []
        for string_index in range(grid.shape[0]):
            for fret in range(min_fret, grid.shape[1]):
                degree = int(degrees[string_index, fret])
                if in_scale_only and degree == _NO_DEGREE:
                    continue
                positions.append(
                    FretPosition(
                        string=string_index,
                        fret=fret,
                        note=chromatic.note_at(int(grid[string_index, fret])),
                        scale_degree=degree if degree != _NO_DEGREE else None,
                    )
                )
        return positions

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def scan_all(self, root: str, max_fret: int = DEFAULT_MAX_FRET) -> list[FretPosition]:
        """
        Return every position with fret in ``[0, max_fret]``, in scale or not.

        Ordered by string ascending, then fret ascending.

        Raises:
            InvalidRootNote:   If *root* is not a chromatic note.
            InvalidFretNumber: If *max_fret* is negative.
        """
        scale = self.engine.build_major_scale(root)
        return self._positions(scale, max_fret)

    def scan(self, root: str, max_fret: int = DEFAULT_MAX_FRET) -> list[FretPosition]:
        """
        Return the active marker positions for *root*'s major scale.

        Only in-scale positions on frets ``1..max_fret`` are kept; open strings
        are excluded (see :meth:`open_string_positions`). ``max_fret == 0``
        yields an empty list.

        Raises:
            InvalidRootNote:   If *root* is not a chromatic note.
            InvalidFretNumber: If *max_fret* is negative.
        """
        scale = self.engine.build_major_scale(root)
        positions = self._positions(scale, max_fret, min_fret=1, in_scale_only=True)
        logger.debug(
            "Scanned %s up to fret %d: %d active positions",
            scale.name, max_fret, len(positions),
        )
        return positions

    def open_string_positions(self, root: str) -> list[FretPosition]:
        """Return one fret-0 position per string, with its degree or None."""
        scale = self.engine.build_major_scale(root)
        return self._positions(scale, 0)

    def positions_for_note(self, note: str, max_fret: int = DEFAULT_MAX_FRET) -> list[FretPosition]:
        """
        Return every position sounding *note* on frets ``0..max_fret``.

        The returned positions carry no scale degree.

        Raises:
            InvalidRootNote:   If *note* is not a chromatic note.
            InvalidFretNumber: If *max_fret* is negative.
        """
        chromatic = self.resolver.chromatic
        target = chromatic.index_of(note)
        grid = self._note_grid(max_fret)
        strings, frets = np.nonzero(grid == target)
        return [
            FretPosition(string=int(s), fret=int(f), note=chromatic.note_at(target))
            for s, f in zip(strings, frets)
        ]

    def positions_for_degree(
        self,
        degree: int,
        root: str,
        max_fret: int = DEFAULT_MAX_FRET,
    ) -> list[FretPosition]:
        """
        Return every position sounding the note at *degree* of *root*'s scale.

        Raises:
            InvalidScaleDegree: If *degree* is outside 1..7.
            InvalidRootNote:    If *root* is not a chromatic note.
            InvalidFretNumber:  If *max_fret* is negative.
        """
        scale = self.engine.build_major_scale(root)
        note = self.engine.require_note_at_degree(degree, scale)
        return [
            FretPosition(string=p.string, fret=p.fret, note=p.note, scale_degree=degree)
            for p in self.positions_for_note(note, max_fret)
        ]
