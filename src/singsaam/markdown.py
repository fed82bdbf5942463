"""Markdown renderer for a :class:`~singsaam.models.Song`.

Output layout::

    # Amazing Grace
    ## (John Newton, Edwin Excell)

    Amazing grace how sweet the sound

    That saved a wretch like me


    _Koor:_

    I once was lost but now am found

Every verse is preceded by a blank line and every lyric line is followed by
one.  Role markers use the locale labels (``_Koor:_``, ``_Brug:_``).
Key-change annotations are not rendered.

Usage::

    from singsaam.markdown import MarkdownFormatter
    text = MarkdownFormatter().render(song)
    Path("song_0.md").write_text(text)
"""

from pathlib import Path

from .exceptions import ExportError
from .locales import AFRIKAANS, Locale
from .models import Song, Verse


class MarkdownFormatter:
    """Render a :class:`~singsaam.models.Song` to Markdown text."""

    def __init__(self, locale: Locale = AFRIKAANS):
        self.locale = locale

    def render(self, song: Song) -> str:
        parts: list[str] = [f"# {song.title}\n"]

        if song.artists:
            parts.append(f"## ({', '.join(song.artists)})\n")

        for verse in song.verses:
            parts.append("\n")  # blank line to separate from previous verse
            parts.extend(self._render_verse(verse))

        return "".join(parts)

    def write(self, song: Song, path: str | Path) -> None:
        """Render *song* into *path*; raises :class:`ExportError` on failure."""
        path = Path(path)
        try:
            path.write_text(self.render(song), encoding="utf-8")
        except OSError as exc:
            raise ExportError(str(path), str(exc)) from exc

    def _render_verse(self, verse: Verse) -> list[str]:
        parts = []
        if verse.chorus:
            parts.append(f"_{self.locale.chorus_label}:_\n\n")
        if verse.bridge:
            parts.append(f"_{self.locale.bridge_label}:_\n\n")
        for line in verse.lines:
            parts.append(f"{line.text}\n\n")
        return parts
