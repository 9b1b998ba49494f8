"""Renderer implementations for fretboard output formats."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence

from fretmap.layers import ElementKind
from fretmap.models import GridElement, GridPosition, LayoutTable
from fretmap.palette import DEGREE_COLORS, DisplayMode, describe, legend, style_for
from fretmap.position_resolver import STANDARD_TUNING
from fretmap.scale_engine import ScaleInfo


def _escape_html(text: str) -> str:
    """Escape the three characters that are unsafe in HTML text content."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _grid_style(position: GridPosition) -> str:
    """Inline CSS placing an element at its grid address and layer."""
    column = f"{position.column} / span {position.column_span}"
    row = f"{position.row} / span {position.row_span}"
    return f"grid-column: {column}; grid-row: {row}; z-index: {int(position.layer)};"


class FretboardRenderer(ABC):
    """Abstract fretboard renderer."""

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Default filename extension for this renderer."""

    @abstractmethod
    def render(
        self,
        *,
        title: str,
        scale: ScaleInfo,
        layout: LayoutTable,
        display_mode: DisplayMode = DisplayMode.NOTES,
        string_names: Sequence[str] | None = None,
    ) -> str:
        """Render output into a file content string."""


class HtmlGridRenderer(FretboardRenderer):
    """
    Render a layout table as a self-contained HTML page using CSS grid.

    Every element of the table becomes one ``div`` placed with its own
    ``grid-column``, ``grid-row`` and ``z-index``; the renderer does no
    coordinate arithmetic of its own. Cell sizes come from CSS custom
    properties so the page can be resized without touching the table.
    """

    _FRET_WIDTH = "64px"
    _STRING_HEIGHT = "40px"

    def __init__(self, color_scheme: Mapping[int, str] = DEGREE_COLORS) -> None:
        self.color_scheme = color_scheme

    @property
    def default_extension(self) -> str:
        return ".html"

    def render(
        self,
        *,
        title: str,
        scale: ScaleInfo,
        layout: LayoutTable,
        display_mode: DisplayMode = DisplayMode.NOTES,
        string_names: Sequence[str] | None = None,
    ) -> str:
        cells = [self._element_html(element, display_mode) for element in layout.elements]
        cells.extend(self._fret_number_html(layout))
        return self.build_html(title, scale, layout, cells)

    def _element_html(self, element: GridElement, display_mode: DisplayMode) -> str:
        style = _grid_style(element.position)
        kind = element.kind.value

        if element.kind is ElementKind.NOTE_MARKER:
            marker = style_for(element.payload, display_mode, self.color_scheme)
            label = _escape_html(describe(element.payload))
            return (
                f'    <div class="{kind}" style="{style} background: {marker.color};" '
                f'title="{label}" aria-label="{label}">{_escape_html(marker.label)}</div>'
            )

        if element.kind is ElementKind.FRET_DIVIDER:
            fret = element.payload["fret_number"]
            return f'    <div class="{kind}" style="{style}" data-fret="{fret}"></div>'

        if element.kind is ElementKind.STRING_LINE:
            string_index = element.payload["string_index"]
            return f'    <div class="{kind}" style="{style}" data-string="{string_index}"></div>'

        return f'    <div class="{kind}" style="{style}" aria-hidden="true"></div>'

    def _fret_number_html(self, layout: LayoutTable) -> list[str]:
        """Fret-number labels in the bottom annotation band, under each divider."""
        bottom = [
            e for e in layout.of_kind(ElementKind.PLACEHOLDER_ROW)
            if e.payload and e.payload.get("band") == "bottom"
        ]
        if not bottom:
            return []
        row = bottom[0].position.row
        labels = []
        for divider in layout.of_kind(ElementKind.FRET_DIVIDER):
            position = divider.position
            labels.append(
                f'    <div class="fret-number" style="grid-column: {position.column}; '
                f'grid-row: {row}; z-index: {int(bottom[0].position.layer)};">'
                f'{divider.payload["fret_number"]}</div>'
            )
        return labels

    def build_html(
        self,
        title: str,
        scale: ScaleInfo,
        layout: LayoutTable,
        cells: list[str],
    ) -> str:
        """
        Wrap rendered grid cells and a scale legend in an HTML document.

        The grid container declares ``layout.columns`` x ``layout.rows`` tracks
        and exposes the layout's CSS custom properties.
        """
        title_safe = _escape_html(title)
        heading = f"  <h1>{title_safe}</h1>\n" if title else ""
        variables = " ".join(f"{name}: {value};" for name, value in layout.css_variables().items())
        legend_items = "\n".join(
            f'    <li><span class="swatch" style="background: {color};">{degree}</span>'
            f"{_escape_html(note)}</li>"
            for degree, note, color in legend(scale, self.color_scheme)
        )
        grid = "\n".join(cells)

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1.0" />
  <title>{title_safe}</title>
  <style>
    *, *::before, *::after {{ box-sizing: border-box; }}
    body {{
      font-family: Helvetica, Arial, sans-serif;
      background: #f4f1ea;
      margin: 0;
      padding: 2rem;
    }}
    h1 {{
      font-size: 1.4rem;
      color: #222;
    }}
    .fretboard {{
      --fret-width: {self._FRET_WIDTH};
      --string-height: {self._STRING_HEIGHT};
      display: grid;
      grid-template-columns: repeat(var(--grid-columns), var(--fret-width));
      grid-template-rows: repeat(var(--grid-rows), var(--string-height));
      background: #6b4423;
      border-radius: 8px;
      overflow-x: auto;
      width: max-content;
    }}
    .fret-divider {{
      justify-self: end;
      width: 3px;
      background: #c0c0c0;
    }}
    .string-line {{
      align-self: center;
      height: 2px;
      background: #e8e8e8;
    }}
    .note-marker {{
      justify-self: center;
      align-self: center;
      width: 30px;
      height: 30px;
      border-radius: 50%;
      display: flex;
      align-items: center;
      justify-content: center;
      font-weight: bold;
      font-size: 13px;
      color: #fff;
      text-shadow: 0 1px 2px rgba(0, 0, 0, 0.8);
    }}
    .marker-container {{
      display: flex;
      align-items: center;
      justify-content: center;
    }}
    .fret-number {{
      justify-self: center;
      align-self: center;
      color: #f4f1ea;
      font-size: 11px;
    }}
    .legend {{
      display: flex;
      gap: 0.75rem;
      list-style: none;
      padding: 0;
    }}
    .swatch {{
      display: inline-block;
      width: 1.5rem;
      height: 1.5rem;
      margin-right: 0.25rem;
      border-radius: 50%;
      text-align: center;
      line-height: 1.5rem;
      color: #fff;
    }}
  </style>
</head>
<body>
{heading}  <div class="fretboard" role="img" aria-label="{_escape_html(scale.name)}" style="{variables}">
{grid}
  </div>
  <ul class="legend">
{legend_items}
  </ul>
</body>
</html>"""


class TextRenderer(FretboardRenderer):
    """
    Render a layout table as a plain-text chart.

    The highest string is drawn on top, as on a tab staff. The open-string
    column is separated from the fretted cells by a double bar, and fret
    numbers run along the bottom.
    """

    CELL_WIDTH = 5

    @property
    def default_extension(self) -> str:
        return ".txt"

    def render(
        self,
        *,
        title: str,
        scale: ScaleInfo,
        layout: LayoutTable,
        display_mode: DisplayMode = DisplayMode.NOTES,
        string_names: Sequence[str] | None = None,
    ) -> str:
        names = list(string_names) if string_names is not None else list(STANDARD_TUNING.open_notes)
        labels: dict[tuple[int, int], str] = {}
        for element in layout.of_kind(ElementKind.NOTE_MARKER):
            labels[element.position.cell] = style_for(element.payload, display_mode).label

        string_rows = sorted(
            ((e.payload["string_index"], e.position.row) for e in layout.of_kind(ElementKind.STRING_LINE)),
            reverse=True,
        )
        name_width = max((len(n) for n in names), default=1)

        lines = []
        if title:
            lines.extend([title, ""])
        for string_index, row in string_rows:
            name = names[string_index] if string_index < len(names) else str(string_index)
            open_cell = labels.get((1, row), "").center(self.CELL_WIDTH)
            fretted = "|".join(
                self._cell(labels.get((column, row), "")) for column in range(2, layout.columns + 1)
            )
            lines.append(f"{name:<{name_width}} {open_cell}||{fretted}|")

        numbers = "".join(
            str(fret).center(self.CELL_WIDTH + 1) for fret in range(1, layout.fret_count + 1)
        )
        lines.append(" " * (name_width + 1 + self.CELL_WIDTH + 2) + numbers.rstrip())
        lines.extend(["", "  ".join(f"{degree}={note}" for degree, note, _ in legend(scale))])
        return "\n".join(lines) + "\n"

    def _cell(self, label: str) -> str:
        return label.center(self.CELL_WIDTH, "-") if label else "-" * self.CELL_WIDTH
