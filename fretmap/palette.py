"""Per-degree colors and marker labels shared by every renderer."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Final

from fretmap.errors import InvalidScaleDegree
from fretmap.scale_engine import ScaleInfo
from fretmap.scanner import FretPosition


class DisplayMode(str, Enum):
    """What a marker shows: the note name or its scale degree."""

    NOTES = "notes"
    DEGREES = "degrees"


#: Color scheme for scale degrees. Read-only.
DEGREE_COLORS: Final = MappingProxyType(
    {
        1: "#FF6B6B",  # Root - red
        2: "#4ECDC4",  # Second - teal
        3: "#45B7D1",  # Third - blue
        4: "#96CEB4",  # Fourth - green
        5: "#FFEAA7",  # Fifth - yellow
        6: "#DDA0DD",  # Sixth - purple
        7: "#98D8C8",  # Seventh - mint
    }
)

#: Color for positions without a degree.
FALLBACK_COLOR: Final[str] = "#999999"


@dataclass(frozen=True)
class MarkerStyle:
    """Label text and fill color of one marker."""

    label: str
    color: str


def color_for(degree: int | None, scheme: Mapping[int, str] = DEGREE_COLORS) -> str:
    """
    Return the color of *degree* in *scheme*.

    Raises:
        InvalidScaleDegree: If *degree* is neither None nor a degree of *scheme*.
    """
    if degree is None:
        return FALLBACK_COLOR
    try:
        return scheme[degree]
    except (KeyError, TypeError):
        raise InvalidScaleDegree(degree) from None


def label_for(position: FretPosition, mode: DisplayMode) -> str:
    """Marker text: the note name, or the degree number in degree mode."""
    if DisplayMode(mode) is DisplayMode.NOTES:
        return position.note
    return str(position.scale_degree) if position.scale_degree is not None else ""


def style_for(
    position: FretPosition,
    mode: DisplayMode,
    scheme: Mapping[int, str] = DEGREE_COLORS,
) -> MarkerStyle:
    return MarkerStyle(
        label=label_for(position, mode),
        color=color_for(position.scale_degree, scheme),
    )


def ordinal(number: int) -> str:
    """'1st', '2nd', '3rd', '4th', ... for scale degrees."""
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(number, "th")
    return f"{number}{suffix}"


def describe(position: FretPosition) -> str:
    """Accessible description, e.g. ``'G (5th degree) on fret 3'``."""
    where = "open string" if position.is_open else f"fret {position.fret}"
    if position.scale_degree is None:
        return f"{position.note} (not in scale) on {where}"
    return f"{position.note} ({ordinal(position.scale_degree)} degree) on {where}"


def legend(
    scale: ScaleInfo, scheme: Mapping[int, str] = DEGREE_COLORS
) -> list[tuple[int, str, str]]:
    """``(degree, note, color)`` entries for a scale legend."""
    return [(degree, note, color_for(degree, scheme)) for degree, note in scale.pairs()]
