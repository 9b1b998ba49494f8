"""fretmap CLI entry point."""

import json
import logging
import sys
from typing import NoReturn

import click

from fretmap import __version__
from fretmap.chromatic import normalize_note_name
from fretmap.config import DEFAULT_CONFIG, MAX_FRET_LIMIT
from fretmap.coordinates import CoordinateMapper
from fretmap.errors import FretmapError
from fretmap.exporter import FretboardExporter
from fretmap.layout import LayoutAssembler
from fretmap.palette import DisplayMode, describe, label_for
from fretmap.position_resolver import PositionResolver
from fretmap.scanner import FretboardScanner

logger = logging.getLogger(__name__)

FRETS_OPTION = click.option(
    "--frets",
    type=click.IntRange(0, MAX_FRET_LIMIT),
    default=DEFAULT_CONFIG.max_frets,
    show_default=True,
    help="Number of frets to compute.",
)

MODE_OPTION = click.option(
    "--mode",
    type=click.Choice([m.value for m in DisplayMode], case_sensitive=False),
    default=DEFAULT_CONFIG.default_display_mode.value,
    show_default=True,
    help="Label markers by note name or by scale degree.",
)

ROOT_ARGUMENT = click.argument("root", required=False, default=DEFAULT_CONFIG.default_key)


def _normalize_root(text: str) -> str:
    """Accept lower-case input: 'f#' -> 'F#', 'bb' -> 'Bb'."""
    return text[:1].upper() + text[1:]


def _scanner() -> FretboardScanner:
    return FretboardScanner(resolver=PositionResolver(DEFAULT_CONFIG.tuning))


def _fail(exc: Exception) -> NoReturn:
    click.echo(f"  ERROR: {exc}", err=True)
    sys.exit(1)


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="fretmap")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
def main(verbose: bool) -> None:
    """fretmap: major-scale maps of the guitar fretboard."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


# ── scale subcommand ───────────────────────────────────────────────────────────

@main.command()
@ROOT_ARGUMENT
def scale(root: str) -> None:
    """
    Print the major scale of ROOT (default: C).

    \b
    Examples:
      fretmap scale
      fretmap scale f#
    """
    scanner = _scanner()
    try:
        info = scanner.engine.build_major_scale(_normalize_root(root))
    except FretmapError as exc:
        _fail(exc)

    click.echo(info.name)
    click.echo("  Degree : " + "  ".join(f"{d:<2}" for d in info.degrees))
    click.echo("  Note   : " + "  ".join(f"{n:<2}" for n in info.notes))
    click.echo("  Outside: " + " ".join(scanner.engine.excluded_notes(info)))


# ── positions subcommand ───────────────────────────────────────────────────────

@main.command()
@ROOT_ARGUMENT
@FRETS_OPTION
@MODE_OPTION
@click.option(
    "--open/--no-open",
    "include_open",
    default=True,
    show_default=True,
    help="Include in-scale open strings.",
)
def positions(root: str, frets: int, mode: str, include_open: bool) -> None:
    """
    List every in-scale position of ROOT's major scale.

    \b
    Examples:
      fretmap positions G --frets 12
      fretmap positions A --mode degrees --no-open
    """
    scanner = _scanner()
    display_mode = DisplayMode(mode.lower())
    normalized = _normalize_root(root)
    try:
        found = scanner.scan(normalized, frets)
        if include_open:
            found = [p for p in scanner.open_string_positions(normalized) if p.is_in_scale] + found
    except FretmapError as exc:
        _fail(exc)

    names = scanner.resolver.string_names()
    for position in sorted(found, key=lambda p: (p.string, p.fret)):
        label = label_for(position, display_mode)
        click.echo(
            f"  string {position.string} ({names[position.string]})  "
            f"fret {position.fret:>2}  {label:<3} {describe(position)}"
        )
    click.echo(f"{len(found)} position(s)")


# ── layout subcommand ──────────────────────────────────────────────────────────

@main.command()
@FRETS_OPTION
@click.option("--json", "as_json", is_flag=True, help="Print the table as JSON.")
def layout(frets: int, as_json: bool) -> None:
    """
    Print the structural grid layout for a fret count.

    \b
    Examples:
      fretmap layout --frets 12
      fretmap layout --frets 5 --json
    """
    assembler = LayoutAssembler(CoordinateMapper(string_count=len(DEFAULT_CONFIG.tuning)))
    table = assembler.assemble(frets)

    if as_json:
        click.echo(json.dumps(table.to_dict(), indent=2))
        return

    click.echo(f"Grid: {table.columns} columns x {table.rows} rows")
    for element in table.elements:
        position = element.position
        click.echo(
            f"  {element.kind.value:<16} col {position.column:>2} (+{position.column_span - 1:<2}) "
            f"row {position.row} (+{position.row_span - 1})  layer {int(position.layer)}"
        )
    for name, value in assembler.registry.layer_info().items():
        click.echo(f"  {name}: {value}")


# ── render subcommand ──────────────────────────────────────────────────────────

@main.command()
@ROOT_ARGUMENT
@FRETS_OPTION
@MODE_OPTION
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["html", "text"], case_sensitive=False),
    default="html",
    show_default=True,
    help="Output format: self-contained HTML page or plain-text chart.",
)
@click.option(
    "--output",
    "-o",
    default=None,
    metavar="PATH",
    help="Destination file. Prints to stdout when omitted.",
)
@click.option(
    "--title",
    default=None,
    metavar="TEXT",
    help="Title shown in the output. Defaults to '<ROOT> Major'.",
)
def render(
    root: str,
    frets: int,
    mode: str,
    output_format: str,
    output: str | None,
    title: str | None,
) -> None:
    """
    Render ROOT's major scale across the fretboard.

    \b
    Examples:
      fretmap render C --frets 12 --format text
      fretmap render G --mode degrees -o g_major.html
    """
    normalized = _normalize_root(root)
    logger.debug("Rendering %s as %s (%d frets, %s mode)", normalized, output_format, frets, mode)
    exporter = FretboardExporter(
        title=title if title is not None else f"{normalize_note_name(normalized)} Major",
        output_format=output_format,
        display_mode=DisplayMode(mode.lower()),
        fret_count=frets,
    )
    try:
        if output is None:
            click.echo(exporter.render(normalized), nl=False)
            return
        exporter.export(normalized, output)
    except FretmapError as exc:
        _fail(exc)
    except OSError as exc:
        _fail(OSError(f"Could not write output file: {exc}"))

    click.echo(f"Done!  Wrote '{output}'.")
