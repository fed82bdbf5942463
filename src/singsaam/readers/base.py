from abc import ABC, abstractmethod
from pathlib import Path

from ..locales import AFRIKAANS, Locale
from ..models import Song


class SongReader(ABC):
    """Abstract base class for all file-type specific song readers."""

    suffixes: tuple[str, ...] = ()

    def __init__(self, locale: Locale = AFRIKAANS):
        self.locale = locale

    @classmethod
    def can_handle(cls, path: str | Path) -> bool:
        """Return True if this reader can handle the given file."""
        return Path(path).suffix.lower() in cls.suffixes

    def read(self, path: str | Path) -> str:
        """Return the file's text.  Raises OSError on I/O failures."""
        return Path(path).read_text(encoding="utf-8")

    @abstractmethod
    def extract(self, text: str, source: str) -> Song:
        """Build a Song from the file text.

        Raises a :class:`~singsaam.exceptions.SingsaamError` subclass if the
        text is not a valid song.
        """

    def load(self, path: str | Path) -> Song:
        """Convenience method: read + extract."""
        text = self.read(path)
        return self.extract(text, str(path))
