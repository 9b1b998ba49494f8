"""Unit tests for application defaults and where they are applied."""

from types import MappingProxyType

from fretmap.config import DEFAULT_CONFIG, MAX_FRET_LIMIT, FretboardConfig
from fretmap.exporter import FretboardExporter
from fretmap.layers import ElementKind
from fretmap.palette import DEGREE_COLORS, DisplayMode
from fretmap.position_resolver import STANDARD_TUNING, Tuning


def test_defaults() -> None:
    assert DEFAULT_CONFIG.default_key == "C"
    assert DEFAULT_CONFIG.default_display_mode is DisplayMode.NOTES
    assert DEFAULT_CONFIG.max_frets == 24
    assert DEFAULT_CONFIG.tuning is STANDARD_TUNING
    assert DEFAULT_CONFIG.color_scheme is DEGREE_COLORS
    assert MAX_FRET_LIMIT >= DEFAULT_CONFIG.max_frets


def test_exporter_falls_back_to_config_defaults() -> None:
    exporter = FretboardExporter()
    assert exporter.config is DEFAULT_CONFIG
    assert exporter.fret_count == DEFAULT_CONFIG.max_frets
    assert exporter.display_mode is DEFAULT_CONFIG.default_display_mode
    assert exporter.scanner.resolver.tuning is DEFAULT_CONFIG.tuning


def test_exporter_uses_config_tuning() -> None:
    bass = Tuning(name="Bass", open_notes=("E", "A", "D", "G"))
    config = FretboardConfig(tuning=bass, max_frets=5, default_display_mode=DisplayMode.DEGREES)
    exporter = FretboardExporter(config=config)
    assert exporter.fret_count == 5
    assert exporter.display_mode is DisplayMode.DEGREES

    _, layout = exporter.build_layout("C")
    assert len(layout.of_kind(ElementKind.STRING_LINE)) == 4
    assert layout.rows == 6
    assert exporter.scanner.resolver.string_names() == ("E", "A", "D", "G")


def test_exporter_uses_config_color_scheme() -> None:
    scheme = MappingProxyType({degree: f"#00000{degree}" for degree in range(1, 8)})
    exporter = FretboardExporter(fret_count=3, config=FretboardConfig(color_scheme=scheme))
    html = exporter.render("C")
    assert "background: #000001;" in html
    assert DEGREE_COLORS[1] not in html
