"""Cross-reference indexes over exported songs.

Both indexes are Markdown bullet lists of links to the per-song Markdown
files written by :mod:`singsaam.catalog`::

    # Titels

    - [Amazing Grace](song_0.md)
    - [Sarie Marais](song_1.md)
"""

from dataclasses import dataclass

from .locales import AFRIKAANS, Locale
from .models import Song


@dataclass
class IndexEntry:
    """A song together with the Markdown file it was exported to."""

    song: Song
    md_filename: str

    @property
    def link(self) -> str:
        return f"[{self.song.title}]({self.md_filename})"


def _by_title(entry: IndexEntry) -> tuple[str, str]:
    return (entry.song.title.casefold(), entry.md_filename)


def render_title_index(entries: list[IndexEntry], locale: Locale = AFRIKAANS) -> str:
    lines = [f"# {locale.title_index_title}", ""]
    lines.extend(f"- {entry.link}" for entry in sorted(entries, key=_by_title))
    return "\n".join(lines) + "\n"


def render_artist_index(entries: list[IndexEntry], locale: Locale = AFRIKAANS) -> str:
    """Group song links by artist.

    Artists are sorted case-insensitively; songs under each artist by title.
    A song with several artists is listed under each of them, and songs
    without artists are left out.
    """
    by_artist: dict[str, list[IndexEntry]] = {}
    for entry in entries:
        for artist in entry.song.artists:
            by_artist.setdefault(artist, []).append(entry)

    lines = [f"# {locale.artist_index_title}"]
    for artist in sorted(by_artist, key=lambda a: (a.casefold(), a)):
        lines.extend(["", f"## {artist}", ""])
        lines.extend(f"- {entry.link}" for entry in sorted(by_artist[artist], key=_by_title))
    return "\n".join(lines) + "\n"
