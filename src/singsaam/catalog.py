"""Directory scanning and numbered export of a song collection.

A scan walks an input directory of ``.txt`` lyrics files, parsing each one.
Files that fail (wrong extension, parse error, unreadable) are logged and
recorded, and the scan carries on.  Export writes every collected song as
``song_<n>.json`` / ``song_<n>.md`` (``n`` = position in the collection, so
names never collide) plus ``artists.md`` and ``titles.md``.  Export errors
abort the export.
"""

from dataclasses import dataclass, field
from pathlib import Path

from .codec import write_song_json
from .exceptions import ExportError, SingsaamError
from .index import IndexEntry, render_artist_index, render_title_index
from .locales import AFRIKAANS, Locale
from .logger import get_logger
from .markdown import MarkdownFormatter
from .models import Song
from .readers.text import TextSongReader
from .registry import get_reader

log = get_logger(__name__)

ARTIST_INDEX_FILENAME = "artists.md"
TITLE_INDEX_FILENAME = "titles.md"


@dataclass
class ScanFailure:
    path: str
    error: Exception


@dataclass
class ExportResult:
    written: list[Path] = field(default_factory=list)


def song_basename(index: int) -> str:
    return f"song_{index}"


class Catalog:
    """An ordered collection of parsed songs."""

    def __init__(self, locale: Locale = AFRIKAANS, readers=(TextSongReader,)):
        self.locale = locale
        self.readers = list(readers)
        self.songs: list[Song] = []
        self.failures: list[ScanFailure] = []

    def add_file(self, path: Path) -> Song:
        """Load one file through the registry and add it to the catalog.

        Raises InvalidFileTypeError, ParseError or OSError on failure.
        """
        song = get_reader(path, self.locale, self.readers).load(path)
        self.songs.append(song)
        return song

    def scan(self, input_dir: str | Path, limit: int | None = None) -> list[Song]:
        """Parse every regular file below *input_dir*, in sorted path order.

        Returns the songs added by this scan.  *limit* stops the scan once
        that many songs were added.
        """
        input_dir = Path(input_dir)
        added: list[Song] = []
        failed = 0
        for path in sorted(p for p in input_dir.rglob("*") if p.is_file()):
            if limit is not None and len(added) >= limit:
                log.info("Stopping after %d songs", limit)
                break
            try:
                song = self.add_file(path)
            except (SingsaamError, OSError) as exc:
                log.error("Skipping %s: %s", path, exc)
                self.failures.append(ScanFailure(str(path), exc))
                failed += 1
                continue
            log.debug("Loaded %s: %s", path, song.title)
            added.append(song)

        log.info("Loaded %d songs from %s (%d failed)", len(added), input_dir, failed)
        return added

    def artists(self) -> list[str]:
        """Unique artist names over all songs, sorted case-insensitively."""
        unique = {artist for song in self.songs for artist in song.artists}
        return sorted(unique, key=lambda a: (a.casefold(), a))

    def export(
        self,
        data_dir: str | Path,
        json: bool = True,
        markdown: bool = True,
        index: bool = True,
    ) -> ExportResult:
        """Write the collection into *data_dir*.

        The indexes link to the per-song Markdown files, so *index* implies
        *markdown*.  Raises :class:`ExportError` on the first failure; files
        written before the failure are left in place.
        """
        markdown = markdown or index
        data_dir = Path(data_dir)
        try:
            data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ExportError(str(data_dir), str(exc)) from exc

        result = ExportResult()
        formatter = MarkdownFormatter(self.locale)
        entries: list[IndexEntry] = []

        for i, song in enumerate(self.songs):
            name = song_basename(i)
            if json:
                path = data_dir / f"{name}.json"
                write_song_json(song, path)
                result.written.append(path)
            if markdown:
                path = data_dir / f"{name}.md"
                formatter.write(song, path)
                result.written.append(path)
            entries.append(IndexEntry(song=song, md_filename=f"{name}.md"))

        if index:
            for filename, text in (
                (ARTIST_INDEX_FILENAME, render_artist_index(entries, self.locale)),
                (TITLE_INDEX_FILENAME, render_title_index(entries, self.locale)),
            ):
                path = data_dir / filename
                try:
                    path.write_text(text, encoding="utf-8")
                except OSError as exc:
                    raise ExportError(str(path), str(exc)) from exc
                result.written.append(path)

        log.info("Written %d files to %s", len(result.written), data_dir)
        return result
