import sys
from dataclasses import replace
from pathlib import Path

import click

from .catalog import Catalog
from .codec import dumps_song
from .exceptions import ConfigError, ExportError, InvalidFileTypeError, SingsaamError
from .locales import AFRIKAANS, load_locale
from .logger import get_logger, setup_logging
from .markdown import MarkdownFormatter
from .registry import get_reader

log = get_logger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option("--log-level", default="WARNING", show_default=True,
              type=click.Choice(LOG_LEVELS, case_sensitive=False),
              help="Logging verbosity.")
@click.option("--config", "config_path", default=None, metavar="PATH",
              type=click.Path(dir_okay=False),
              help="YAML locale file (marker tokens, labels, normalization).")
@click.option("--normalize/--no-normalize", default=None,
              help="Override the locale's text normalization switch.")
@click.pass_context
def main(ctx: click.Context, log_level: str, config_path: str | None, normalize: bool | None) -> None:
    """Convert plain-text song lyrics to JSON and Markdown.

    \b
    Lyrics file layout:
      line 1          title
      (Artist)        zero or more artists in parentheses
      blank line      separates verses
      Koor: / Brug:   marks the verse as chorus / bridge
    """
    setup_logging(log_level)

    locale = AFRIKAANS
    if config_path:
        try:
            locale = load_locale(config_path)
        except ConfigError as exc:
            click.echo(f"Error: {exc}", err=True)
            sys.exit(1)
    if normalize is not None:
        locale = replace(locale, normalize=normalize)

    ctx.obj = locale


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "fmt", default="markdown", show_default=True,
              type=click.Choice(["markdown", "json"]),
              help="Output format.")
@click.option("-o", "--output", "output_path", default=None, metavar="PATH",
              help="Output file path (default: print to stdout).")
@click.pass_obj
def parse(locale, path: str, fmt: str, output_path: str | None) -> None:
    """Parse one lyrics (.txt) or exported (.json) file."""
    try:
        song = get_reader(path, locale).load(path)
    except InvalidFileTypeError as exc:
        click.echo(f"Error: {exc}", err=True)
        click.echo("Supported files: .txt, .json", err=True)
        sys.exit(1)
    except SingsaamError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if fmt == "json":
        text = dumps_song(song)
    else:
        text = MarkdownFormatter(locale).render(song)

    if output_path is None:
        click.echo(text, nl=False)
        return

    dest = Path(output_path)
    try:
        dest.write_text(text, encoding="utf-8")
    except OSError as exc:
        click.echo(f"Error: Could not write {dest}: {exc}", err=True)
        sys.exit(1)
    click.echo(f"Written to {dest}")


@main.command()
@click.argument("input_dir", type=click.Path(exists=True, file_okay=False))
@click.option("--data", "data_dir", default="data", show_default=True, metavar="DIR",
              help="Directory to export into.")
@click.option("--limit", default=None, type=click.IntRange(min=1), metavar="N",
              help="Stop after N songs.")
@click.option("--export-json", is_flag=True, default=False,
              help="Write data/song_<n>.json files.")
@click.option("--export-md", is_flag=True, default=False,
              help="Write data/song_<n>.md files.")
@click.option("--index", "write_index", is_flag=True, default=False,
              help="Write artists.md and titles.md (implies --export-md).")
@click.pass_obj
def scan(locale, input_dir: str, data_dir: str, limit: int | None,
         export_json: bool, export_md: bool, write_index: bool) -> None:
    """Parse every lyrics file below INPUT_DIR.

    Files that fail to parse are reported and skipped.  Export failures
    abort the run.
    """
    catalog = Catalog(locale)
    catalog.scan(input_dir, limit=limit)

    for artist in catalog.artists():
        log.debug("Artist: %s", artist)

    click.echo(f"Parsed {len(catalog.songs)} songs ({len(catalog.failures)} failed)")
    for failure in catalog.failures:
        click.echo(f"  skipped {failure.path}: {failure.error}", err=True)

    if not (export_json or export_md or write_index):
        return

    try:
        result = catalog.export(data_dir, json=export_json, markdown=export_md, index=write_index)
    except ExportError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    click.echo(f"Written {len(result.written)} files to {data_dir}")


@main.command()
@click.argument("input_dir", type=click.Path(exists=True, file_okay=False))
@click.pass_obj
def artists(locale, input_dir: str) -> None:
    """List the unique artists of all songs below INPUT_DIR."""
    catalog = Catalog(locale)
    catalog.scan(input_dir)
    for artist in catalog.artists():
        click.echo(artist)
