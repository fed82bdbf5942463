from pathlib import Path

from .exceptions import InvalidFileTypeError
from .locales import AFRIKAANS, Locale
from .readers.base import SongReader
from .readers.json_song import JsonSongReader
from .readers.text import TextSongReader

READERS: list[type[SongReader]] = [
    TextSongReader,
    JsonSongReader,
]


def get_reader(
    path: str | Path,
    locale: Locale = AFRIKAANS,
    readers: list[type[SongReader]] | None = None,
) -> SongReader:
    """Return an instantiated reader for the given file.

    Raises InvalidFileTypeError if no reader in *readers* (default: all of
    them) matches the file extension.
    """
    for cls in readers if readers is not None else READERS:
        if cls.can_handle(path):
            return cls(locale)
    raise InvalidFileTypeError(str(path))
