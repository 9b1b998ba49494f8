"""Tests for the fretmap command line."""

import json

from click.testing import CliRunner

from fretmap import __version__
from fretmap.cli import main
from fretmap.config import DEFAULT_CONFIG


def test_version() -> None:
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_scale_command() -> None:
    result = CliRunner().invoke(main, ["scale", "G"])
    assert result.exit_code == 0
    assert "G Major" in result.output
    assert "F#" in result.output
    assert "Outside: C# D# F G# A#" in result.output


def test_scale_command_accepts_lower_case_and_flats() -> None:
    result = CliRunner().invoke(main, ["scale", "bb"])
    assert result.exit_code == 0
    assert "A# Major" in result.output


def test_root_defaults_to_configured_key() -> None:
    result = CliRunner().invoke(main, ["scale"])
    assert result.exit_code == 0
    assert result.output.startswith(f"{DEFAULT_CONFIG.default_key} Major\n")

    result = CliRunner().invoke(main, ["render", "--frets", "3", "--format", "text"])
    assert result.exit_code == 0
    assert result.output.startswith("C Major\n")


def test_scale_command_rejects_unknown_root() -> None:
    result = CliRunner().invoke(main, ["scale", "H"])
    assert result.exit_code == 1
    assert "ERROR" in result.output


def test_positions_command_counts() -> None:
    result = CliRunner().invoke(main, ["positions", "C", "--frets", "12"])
    assert result.exit_code == 0
    assert "48 position(s)" in result.output

    result = CliRunner().invoke(main, ["positions", "C", "--frets", "12", "--no-open"])
    assert "42 position(s)" in result.output


def test_positions_command_degree_mode() -> None:
    result = CliRunner().invoke(main, ["positions", "C", "--frets", "3", "--mode", "degrees"])
    assert result.exit_code == 0
    assert "G (5th degree) on fret 3" in result.output


def test_positions_command_rejects_fret_count_over_limit() -> None:
    result = CliRunner().invoke(main, ["positions", "C", "--frets", "99"])
    assert result.exit_code == 2


def test_layout_command_json() -> None:
    result = CliRunner().invoke(main, ["layout", "--frets", "12", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["columns"] == 13
    assert data["rows"] == 8
    assert len(data["elements"]) == 20


def test_layout_command_table() -> None:
    result = CliRunner().invoke(main, ["layout", "--frets", "2"])
    assert result.exit_code == 0
    assert "Grid: 3 columns x 8 rows" in result.output
    assert "fret-divider" in result.output
    assert "Note Markers (top): 4" in result.output


def test_render_command_text_to_stdout() -> None:
    result = CliRunner().invoke(main, ["render", "C", "--frets", "3", "--format", "text"])
    assert result.exit_code == 0
    assert result.output.startswith("C Major\n")
    assert "E   E  ||--F--|-----|--G--|" in result.output


def test_render_command_title_uses_sharp_spelling() -> None:
    result = CliRunner().invoke(main, ["render", "bb", "--frets", "3", "--format", "text"])
    assert result.exit_code == 0
    assert result.output.startswith("A# Major\n")


def test_render_command_writes_file(tmp_path) -> None:
    out = tmp_path / "c.html"
    result = CliRunner().invoke(main, ["render", "C", "--frets", "5", "-o", str(out)])
    assert result.exit_code == 0
    assert "Done!" in result.output
    assert out.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")


def test_render_command_rejects_unknown_root() -> None:
    result = CliRunner().invoke(main, ["render", "X", "--format", "text"])
    assert result.exit_code == 1
    assert "ERROR" in result.output
