"""LayerRegistry: the closed visual layer stack and its validation."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from fretmap.models import GridElement

logger = logging.getLogger(__name__)


class Layer(IntEnum):
    """Z-order of grid elements, bottom to top."""

    FRET_DIVIDERS = 1
    STRING_LINES = 2
    MARKER_CONTAINERS = 3
    NOTE_MARKERS = 4


class ElementKind(str, Enum):
    """Kinds of element a layout table can hold."""

    FRET_DIVIDER = "fret-divider"
    STRING_LINE = "string-line"
    MARKER_CONTAINER = "marker-container"
    NOTE_MARKER = "note-marker"
    PLACEHOLDER_ROW = "placeholder-row"


#: Kinds that take part in the stacking order, bottom to top.
STACKING_ORDER: Final[tuple[ElementKind, ...]] = (
    ElementKind.FRET_DIVIDER,
    ElementKind.STRING_LINE,
    ElementKind.MARKER_CONTAINER,
    ElementKind.NOTE_MARKER,
)

#: Kinds whose (column, row, layer) triples must be unique within a table.
MARKER_KINDS: Final[frozenset[ElementKind]] = frozenset(
    {ElementKind.MARKER_CONTAINER, ElementKind.NOTE_MARKER}
)

_KIND_LAYERS: Final[dict[ElementKind, Layer]] = {
    ElementKind.FRET_DIVIDER: Layer.FRET_DIVIDERS,
    ElementKind.STRING_LINE: Layer.STRING_LINES,
    ElementKind.MARKER_CONTAINER: Layer.MARKER_CONTAINERS,
    ElementKind.NOTE_MARKER: Layer.NOTE_MARKERS,
    # Annotation bands never overlap string rows; they ride on the string layer.
    ElementKind.PLACEHOLDER_ROW: Layer.STRING_LINES,
}


@dataclass(frozen=True)
class LayerMismatch:
    """One element whose layer tag disagrees with its kind."""

    index: int
    kind: ElementKind
    actual: int
    expected: Layer

    def __str__(self) -> str:
        return (
            f"Element {self.index} ({self.kind.value}) has layer {self.actual}, "
            f"expected {int(self.expected)} ({self.expected.name})"
        )


class LayerRegistry:
    """
    Polices the fixed kind -> layer assignment.

    The layout assembler tags elements correctly when it builds them;
    :meth:`validate` detects drift introduced afterwards and :meth:`enforce`
    repairs it in place.
    """

    def __init__(self) -> None:
        layers = [_KIND_LAYERS[kind] for kind in STACKING_ORDER]
        if any(lower >= upper for lower, upper in zip(layers, layers[1:])):
            raise RuntimeError(f"Layer stack is not strictly increasing: {layers}")
        if len(set(layers)) != len(layers):
            raise RuntimeError(f"Layer stack has shared values: {layers}")

    def expected_layer(self, kind: ElementKind) -> Layer:
        return _KIND_LAYERS[ElementKind(kind)]

    def mismatches(self, elements: Sequence[GridElement]) -> list[LayerMismatch]:
        """Return every element whose layer differs from its kind's layer."""
        found: list[LayerMismatch] = []
        for index, element in enumerate(elements):
            expected = self.expected_layer(element.kind)
            if element.position.layer != expected:
                found.append(
                    LayerMismatch(
                        index=index,
                        kind=ElementKind(element.kind),
                        actual=int(element.position.layer),
                        expected=expected,
                    )
                )
        return found

    def validate(self, elements: Sequence[GridElement]) -> bool:
        """Return True when every element carries its kind's layer; log each mismatch."""
        found = self.mismatches(elements)
        for mismatch in found:
            logger.warning("Layer validation failed: %s", mismatch)
        return not found

    def enforce(self, elements: Sequence[GridElement]) -> int:
        """
        Overwrite every element's layer with the one its kind dictates.

        Idempotent; :meth:`validate` is true afterwards.

        Returns:
            Number of elements that were repaired.
        """
        repaired = 0
        for element in elements:
            expected = self.expected_layer(element.kind)
            if element.position.layer != expected:
                element.position = replace(element.position, layer=expected)
                repaired += 1
        if repaired:
            logger.debug("Enforced layer order on %d element(s)", repaired)
        return repaired

    def layer_info(self) -> dict[str, int]:
        """Describe the stack for debugging, bottom layer first."""
        return {
            "Fret Dividers (bottom)": int(Layer.FRET_DIVIDERS),
            "String Lines": int(Layer.STRING_LINES),
            "Marker Containers": int(Layer.MARKER_CONTAINERS),
            "Note Markers (top)": int(Layer.NOTE_MARKERS),
        }
