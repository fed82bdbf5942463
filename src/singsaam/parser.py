"""Line-oriented lyrics parser.

Turns a plain-text lyrics file into a :class:`~singsaam.models.Song`.

File layout::

    Amazing Grace                       <- title (required, first line)
    (John Newton)                       <- zero or more artists in parentheses

    Amazing grace how sweet the sound   <- verse 0
                                        <- blank line(s) end a verse
    Koor:                               <- marker: verse 1 is a chorus
    That saved a wretch like me

Marker literals (``Koor:``, ``Brug:``, ``Interlude:``) come from the
:class:`~singsaam.locales.Locale` passed to the parser.

Usage::

    from singsaam.parser import parse
    song = parse(Path("amazing-grace.txt").read_text(), "amazing-grace.txt")
"""

import re
from enum import Enum, auto
from typing import Iterable

from .exceptions import EmptyTitleError
from .locales import AFRIKAANS, Locale
from .logger import get_logger
from .models import Line, Song, Verse, Word
from .normalize import LineNormalizer, title_case

log = get_logger(__name__)

ARTIST_RE = re.compile(r"^\((.*)\)$")


class ParserState(Enum):
    TITLE = auto()  # first line
    ARTIST = auto()  # "(Artist Name)" lines below the title
    LYRICS = auto()  # everything else, until end of input


def tokenize(text: str) -> Line:
    """Split a lyric line on spaces into a :class:`Line` of words.

    Tokens that are empty after trimming (runs of spaces) are dropped.
    """
    words = []
    for token in text.split(" "):
        token = token.strip()
        if not token:
            continue
        words.append(Word(text=token))
    return Line(words=words)


class LyricsParser:
    """State machine converting lyric lines into a :class:`Song`.

    One instance may parse any number of files; all per-file state lives in
    :meth:`parse_lines`.
    """

    def __init__(self, locale: Locale = AFRIKAANS):
        self.locale = locale

    def parse_lines(self, lines: Iterable[str], source_file: str = "") -> Song:
        """Parse *lines* (without or with trailing newlines) into a song.

        Algorithm
        ---------
        1. The first line is the title.  A blank first line, or no lines at
           all, raises :class:`EmptyTitleError`.
        2. Lines wrapped in parentheses directly below the title are
           artists.  The first other line falls through to step 3.
        3. Blank lines close the open verse.  Any other line opens a verse
           if none is open, then either sets a role flag (marker line) or is
           tokenized into a :class:`Line` of the open verse.
        4. A verse still open at end of input is closed.

        Verses are only appended when they hold at least one line, so verse
        ids are gap-free and start at 0.

        Raises:
            EmptyTitleError: no title on the first line.
            InvalidCharacterError: normalization is enabled and a lyric line
                holds a disallowed character.
        """
        song = Song(title="", source_file=source_file)
        state = ParserState.TITLE
        normalizer = LineNormalizer(source_file) if self.locale.normalize else None
        current: Verse | None = None

        for line_nr, raw in enumerate(lines, start=1):
            text = raw.strip()

            if state == ParserState.TITLE:
                if not text:
                    raise EmptyTitleError(source_file)
                song.title = title_case(text) if self.locale.normalize else text
                log.debug("Title: %s", song.title)
                state = ParserState.ARTIST
                continue

            if state == ParserState.ARTIST:
                m = ARTIST_RE.match(text)
                if m:
                    song.artists.append(m.group(1))
                    continue
                state = ParserState.LYRICS

            # ParserState.LYRICS
            if not text:
                if current is not None:
                    self._close_verse(song, current)
                    current = None
                continue

            if current is None:
                current = Verse(id=len(song.verses))

            if self.locale.is_chorus_marker(text):
                current.chorus = True
                continue

            if self.locale.is_bridge_marker(text):
                current.bridge = True
                continue

            if normalizer is not None:
                normalized = normalizer.normalize(text, line_nr)
                if normalized != text:
                    log.debug("Lower cased %s(%d): %s", source_file, line_nr, normalized)
                text = normalized

            current.lines.append(tokenize(text))

        if state == ParserState.TITLE:
            raise EmptyTitleError(source_file)

        # Last verse has no blank line after it
        if current is not None:
            self._close_verse(song, current)

        return song

    def parse(self, text: str, source_file: str = "") -> Song:
        """Parse a whole lyrics document."""
        return self.parse_lines(text.splitlines(), source_file)

    @staticmethod
    def _close_verse(song: Song, verse: Verse) -> None:
        if not verse.lines:
            # Marker line with no lyrics below it
            log.debug("Dropping empty verse %d in %s", verse.id, song.source_file)
            return
        song.verses.append(verse)


def parse_lines(lines: Iterable[str], source_file: str = "", locale: Locale = AFRIKAANS) -> Song:
    """Parse an iterable of lyric lines with a one-off :class:`LyricsParser`."""
    return LyricsParser(locale).parse_lines(lines, source_file)


def parse(text: str, source_file: str = "", locale: Locale = AFRIKAANS) -> Song:
    """Parse a lyrics document into a :class:`~singsaam.models.Song`."""
    return LyricsParser(locale).parse(text, source_file)
