"""Reader for songs previously exported to JSON (``song_<n>.json``)."""

from ..codec import loads_song
from ..models import Song
from .base import SongReader


class JsonSongReader(SongReader):
    suffixes = (".json",)

    def extract(self, text: str, source: str) -> Song:
        return loads_song(text, source)
