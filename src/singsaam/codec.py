"""JSON serialization of the song tree.

Schema (one object per song)::

    {
      "source_file": "files/amazing-grace.txt",
      "title": "Amazing Grace",
      "artists": ["John Newton"],
      "verses": [
        {"id": 0, "chorus": false, "bridge": false,
         "lines": [["Amazing", "Grace|G", "how", "sweet"]]}
      ]
    }

Each word is a plain JSON string.  A word carrying a key change is packed
as ``"<text>|<keychange>"`` and split on the first unescaped ``|`` when
decoded.  A ``|`` or ``\\`` that is part of the lyric itself is written as
``\\|`` / ``\\\\``, so ``ja|nee`` is stored as ``"ja\\\\|nee"`` in the file.
"""

import json
from pathlib import Path

from .exceptions import ExportError, MalformedSongError, MalformedWordEncodingError
from .models import Line, Song, Verse, Word

KEYCHANGE_SEPARATOR = "|"
ESCAPE = "\\"


# ---------------------------------------------------------------------------
# Words
# ---------------------------------------------------------------------------


def _escape_text(text: str) -> str:
    return text.replace(ESCAPE, ESCAPE * 2).replace(KEYCHANGE_SEPARATOR, ESCAPE + KEYCHANGE_SEPARATOR)


def encode_word(word: Word) -> str:
    """Encode *word* as a JSON string value.

    ``|`` and ``\\`` inside the word text are backslash-escaped so that only
    the separator before a key change is a bare ``|``.
    """
    text = _escape_text(word.text)
    if word.keychange:
        return f"{text}{KEYCHANGE_SEPARATOR}{word.keychange}"
    return text


def decode_word(value: object) -> Word:
    """Decode one JSON word value into a :class:`Word`.

    The text runs up to the first unescaped ``|``; everything after it is
    the key change.  Raises :class:`MalformedWordEncodingError` unless
    *value* is a string with non-empty text, no dangling escape, and a
    non-empty key change after a separator.
    """
    if not isinstance(value, str):
        raise MalformedWordEncodingError(value)

    chars: list[str] = []
    keychange = None
    i = 0
    while i < len(value):
        ch = value[i]
        if ch == ESCAPE:
            if i + 1 == len(value):
                raise MalformedWordEncodingError(value)
            chars.append(value[i + 1])
            i += 2
            continue
        if ch == KEYCHANGE_SEPARATOR:
            keychange = value[i + 1:]
            break
        chars.append(ch)
        i += 1

    text = "".join(chars)
    if not text or keychange == "":
        raise MalformedWordEncodingError(value)
    return Word(text=text, keychange=keychange or "")


# ---------------------------------------------------------------------------
# Songs
# ---------------------------------------------------------------------------


def song_to_dict(song: Song) -> dict:
    return {
        "source_file": song.source_file,
        "title": song.title,
        "artists": list(song.artists),
        "verses": [
            {
                "id": verse.id,
                "chorus": verse.chorus,
                "bridge": verse.bridge,
                "lines": [[encode_word(w) for w in line.words] for line in verse.lines],
            }
            for verse in song.verses
        ],
    }


def _verse_from_dict(data: object, source: str) -> Verse:
    if not isinstance(data, dict):
        raise MalformedSongError(source, "verse must be a JSON object")

    verse_id = data.get("id")
    # bool is an int subclass; true/false are not ids
    if not isinstance(verse_id, int) or isinstance(verse_id, bool):
        raise MalformedSongError(source, f"verse id must be an integer, got {verse_id!r}")

    chorus = data.get("chorus", False)
    # Older exports call the flag "interlude"
    bridge = data.get("bridge", data.get("interlude", False))
    for name, flag in (("chorus", chorus), ("bridge", bridge)):
        if not isinstance(flag, bool):
            raise MalformedSongError(source, f"verse {verse_id}: {name} must be true or false")

    lines_data = data.get("lines", [])
    if not isinstance(lines_data, list):
        raise MalformedSongError(source, f"verse {verse_id}: lines must be a list")

    lines = []
    for line in lines_data:
        if not isinstance(line, list):
            raise MalformedSongError(source, f"verse {verse_id}: each line must be a list of words")
        lines.append(Line(words=[decode_word(w) for w in line]))

    return Verse(id=verse_id, chorus=chorus, bridge=bridge, lines=lines)


def song_from_dict(data: dict, source: str = "") -> Song:
    """Build a :class:`Song` from a decoded JSON object.

    Raises :class:`MalformedSongError` when required keys are missing or any
    value has the wrong JSON type, and :class:`MalformedWordEncodingError`
    for bad words.
    """
    if not isinstance(data, dict):
        raise MalformedSongError(source, "expected a JSON object")
    if "title" not in data:
        raise MalformedSongError(source, "missing key 'title'")

    title = data["title"]
    artists = data.get("artists", [])
    source_file = data.get("source_file", "")
    verses_data = data.get("verses", [])

    if not isinstance(title, str) or not title:
        raise MalformedSongError(source, "title must be a non-empty string")
    if not isinstance(source_file, str):
        raise MalformedSongError(source, "source_file must be a string")
    if not isinstance(artists, list) or not all(isinstance(a, str) for a in artists):
        raise MalformedSongError(source, "artists must be a list of strings")
    if not isinstance(verses_data, list):
        raise MalformedSongError(source, "verses must be a list")

    verses = [_verse_from_dict(verse_data, source) for verse_data in verses_data]
    return Song(title=title, source_file=source_file, artists=list(artists), verses=verses)


def dumps_song(song: Song) -> str:
    return json.dumps(song_to_dict(song), indent=2, ensure_ascii=False) + "\n"


def loads_song(text: str, source: str = "") -> Song:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedSongError(source, f"invalid JSON: {exc}") from exc
    return song_from_dict(data, source)


def write_song_json(song: Song, path: str | Path) -> None:
    """Write *song* to *path*; raises :class:`ExportError` on I/O failure."""
    path = Path(path)
    try:
        path.write_text(dumps_song(song), encoding="utf-8")
    except OSError as exc:
        raise ExportError(str(path), str(exc)) from exc


def read_song_json(path: str | Path) -> Song:
    path = Path(path)
    return loads_song(path.read_text(encoding="utf-8"), str(path))
