"""Reader for plain-text lyrics files (``.txt``)."""

from ..models import Song
from ..parser import LyricsParser
from .base import SongReader


class TextSongReader(SongReader):
    """Parses ``.txt`` lyrics files with :class:`~singsaam.parser.LyricsParser`."""

    suffixes = (".txt",)

    def extract(self, text: str, source: str) -> Song:
        return LyricsParser(self.locale).parse(text, source)
