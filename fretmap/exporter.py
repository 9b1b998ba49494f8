"""FretboardExporter: renders a key's fretboard map and writes it to disk."""

from __future__ import annotations

import logging
from typing import Final

from fretmap.config import DEFAULT_CONFIG, FretboardConfig
from fretmap.coordinates import CoordinateMapper
from fretmap.layout import LayoutAssembler
from fretmap.models import LayoutTable
from fretmap.palette import DisplayMode
from fretmap.renderers import FretboardRenderer, HtmlGridRenderer, TextRenderer
from fretmap.position_resolver import PositionResolver
from fretmap.scale_engine import ScaleInfo
from fretmap.scanner import FretboardScanner

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS: Final[set[str]] = {"html", "text"}


class FretboardExporter:
    """
    Build the full fretboard map for a key and write it via a pluggable renderer.

    Supported formats:
    - ``html``: self-contained HTML page laid out with CSS grid.
    - ``text``: plain-text chart.

    Display mode, fret count, tuning and color scheme fall back to *config*
    when not given.
    """

    def __init__(
        self,
        title: str = "",
        output_format: str = "html",
        display_mode: DisplayMode | None = None,
        fret_count: int | None = None,
        scanner: FretboardScanner | None = None,
        assembler: LayoutAssembler | None = None,
        config: FretboardConfig = DEFAULT_CONFIG,
    ) -> None:
        self.config = config
        self.title = title
        normalized = output_format.strip().lower()
        if normalized not in SUPPORTED_FORMATS:
            supported = ", ".join(sorted(SUPPORTED_FORMATS))
            raise ValueError(f"Unsupported output format '{output_format}'. Use one of: {supported}.")
        self.output_format = normalized
        self.display_mode = DisplayMode(
            display_mode if display_mode is not None else config.default_display_mode
        )
        self.fret_count = fret_count if fret_count is not None else config.max_frets
        if scanner is None:
            scanner = FretboardScanner(resolver=PositionResolver(config.tuning))
        self.scanner = scanner
        if assembler is None:
            assembler = LayoutAssembler(CoordinateMapper(string_count=scanner.resolver.string_count))
        self.assembler = assembler
        self.renderer = self._build_renderer(normalized)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _build_renderer(self, output_format: str) -> FretboardRenderer:
        if output_format == "html":
            return HtmlGridRenderer(color_scheme=self.config.color_scheme)
        return TextRenderer()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build_layout(self, root: str) -> tuple[ScaleInfo, LayoutTable]:
        """
        Compute the scale and the complete layout table for *root*.

        The table holds the structural elements, the always-shown open-string
        markers and the in-scale fretted markers.

        Raises:
            InvalidRootNote:   If *root* is not a chromatic note.
            InvalidFretNumber: If the exporter's fret count is negative.
        """
        scale = self.scanner.engine.build_major_scale(root)
        layout = self.assembler.assemble(self.fret_count)
        open_markers = [
            p for p in self.scanner.open_string_positions(scale.root) if p.is_in_scale
        ]
        self.assembler.add_markers(layout, open_markers)
        self.assembler.add_markers(layout, self.scanner.scan(scale.root, self.fret_count))

        if not self.assembler.registry.validate(layout.elements):
            self.assembler.registry.enforce(layout.elements)
        return scale, layout

    def render(self, root: str) -> str:
        scale, layout = self.build_layout(root)
        return self.renderer.render(
            title=self.title,
            scale=scale,
            layout=layout,
            display_mode=self.display_mode,
            string_names=self.scanner.resolver.string_names(),
        )

    def export(self, root: str, output_path: str) -> None:
        """
        Render *root*'s fretboard map and write it to *output_path*.

        Raises:
            InvalidRootNote: If *root* is not a chromatic note.
            OSError:         If the output file cannot be written.
        """
        content = self.render(root)
        with open(output_path, "w", encoding="utf-8") as fh:
            fh.write(content)
        logger.debug("Wrote %s fretboard for %s to %s", self.output_format, root, output_path)
