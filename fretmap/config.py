"""Application defaults."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Final

from fretmap.palette import DEGREE_COLORS, DisplayMode
from fretmap.position_resolver import STANDARD_TUNING, Tuning
from fretmap.scanner import DEFAULT_MAX_FRET

#: Largest fret count any command accepts.
MAX_FRET_LIMIT: Final[int] = 36


@dataclass(frozen=True)
class FretboardConfig:
    """
    Defaults shared by the exporter and the command line.

    Attributes:
        default_key:          Root used when a command is given none.
        default_display_mode: Marker labels when no mode is given.
        max_frets:            Fret count when none is given.
        tuning:               Open strings the scanner and layout are built for.
        color_scheme:         Degree to color mapping used by the HTML output.
    """

    default_key: str = "C"
    default_display_mode: DisplayMode = DisplayMode.NOTES
    max_frets: int = DEFAULT_MAX_FRET
    tuning: Tuning = STANDARD_TUNING
    color_scheme: Mapping[int, str] = field(default_factory=lambda: DEGREE_COLORS)


DEFAULT_CONFIG: Final[FretboardConfig] = FretboardConfig()
