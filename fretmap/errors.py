"""Exception types raised by the fretmap engines.

Every error here is a precondition violation: the caller passed a value
outside the legal domain. They propagate immediately and are never retried.
"""


class FretmapError(ValueError):
    """Base class for all fretmap input errors."""


class InvalidRootNote(FretmapError):
    """Raised when a note symbol is not part of the chromatic alphabet."""

    def __init__(self, note: object) -> None:
        self.note = note
        super().__init__(f"Invalid root note: {note!r}")


class InvalidStringIndex(FretmapError):
    """Raised when a string index is outside ``[0, string_count)``."""

    def __init__(self, string_index: int, string_count: int) -> None:
        self.string_index = string_index
        self.string_count = string_count
        super().__init__(
            f"Invalid string number: {string_index}. Must be 0-{string_count - 1}"
        )


class InvalidFretNumber(FretmapError):
    """Raised when a fret number (or fret count) is negative."""

    def __init__(self, fret: int) -> None:
        self.fret = fret
        super().__init__(f"Invalid fret number: {fret}. Must be 0 or greater")


class InvalidScaleDegree(FretmapError):
    """Raised by strict degree-indexed lookups given a degree outside 1..7."""

    def __init__(self, degree: object) -> None:
        self.degree = degree
        super().__init__(f"Invalid scale degree: {degree!r}. Must be 1-7")
