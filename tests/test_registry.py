from pathlib import Path

import pytest

from singsaam.codec import write_song_json
from singsaam.exceptions import EmptyTitleError, InvalidFileTypeError
from singsaam.models import Song
from singsaam.readers.json_song import JsonSongReader
from singsaam.readers.text import TextSongReader
from singsaam.registry import get_reader

FIXTURES = Path(__file__).parent / "fixtures" / "lyrics"


# ---------------------------------------------------------------------------
# can_handle / get_reader
# ---------------------------------------------------------------------------


def test_text_reader_handles_txt():
    assert TextSongReader.can_handle("songs/amazing-grace.txt")
    assert TextSongReader.can_handle("SONGS/AMAZING-GRACE.TXT")
    assert not TextSongReader.can_handle("data/song_0.json")


def test_json_reader_handles_json():
    assert JsonSongReader.can_handle("data/song_0.json")
    assert not JsonSongReader.can_handle("songs/amazing-grace.txt")


def test_get_reader_txt():
    assert isinstance(get_reader("a.txt"), TextSongReader)


def test_get_reader_json():
    assert isinstance(get_reader("song_0.json"), JsonSongReader)


def test_get_reader_unsupported_raises():
    with pytest.raises(InvalidFileTypeError) as exc_info:
        get_reader("notes.md")
    assert exc_info.value.path == "notes.md"


def test_get_reader_restricted_list():
    with pytest.raises(InvalidFileTypeError):
        get_reader("song_0.json", readers=[TextSongReader])


# ---------------------------------------------------------------------------
# load
# ---------------------------------------------------------------------------


def test_text_reader_loads_fixture():
    path = FIXTURES / "amazing-grace.txt"
    song = TextSongReader().load(path)
    assert song.title == "Amazing Grace"
    assert song.source_file == str(path)
    assert song.verses[1].chorus


def test_text_reader_propagates_parse_errors():
    with pytest.raises(EmptyTitleError):
        TextSongReader().load(FIXTURES / "no-title.txt")


def test_json_reader_loads_exported_song(tmp_path):
    song = TextSongReader().load(FIXTURES / "sarie-marais.txt")
    path = tmp_path / "song_0.json"
    write_song_json(song, path)
    assert JsonSongReader().load(path) == song


def test_missing_file_raises_os_error(tmp_path):
    with pytest.raises(OSError):
        TextSongReader().load(tmp_path / "missing.txt")


def test_reader_locale_is_used(tmp_path):
    from dataclasses import replace

    from singsaam.locales import AFRIKAANS

    path = tmp_path / "loud.txt"
    path.write_text("LOUD SONG\n\nLA LA LA\n", encoding="utf-8")
    song = get_reader(path, replace(AFRIKAANS, normalize=True)).load(path)
    assert isinstance(song, Song)
    assert song.title == "Loud Song"
    assert song.verses[0].lines[0].text == "La la la"
