import json

import pytest

from singsaam.codec import (
    decode_word,
    dumps_song,
    encode_word,
    loads_song,
    read_song_json,
    song_from_dict,
    song_to_dict,
    write_song_json,
)
from singsaam.exceptions import ExportError, MalformedSongError, MalformedWordEncodingError
from singsaam.models import Line, Song, Verse, Word
from singsaam.parser import parse


def _song() -> Song:
    return Song(
        title="Amazing Grace",
        source_file="files/amazing-grace.txt",
        artists=["John Newton", "Edwin Excell"],
        verses=[
            Verse(id=0, lines=[Line(words=[Word("Amazing"), Word("Grace", "G")])]),
            Verse(id=1, chorus=True, lines=[Line(words=[Word("That"), Word("saved")])]),
            Verse(id=2, bridge=True, lines=[Line(words=[Word("Ná")]), Line(words=[Word("ek", "D7")])]),
        ],
    )


# ---------------------------------------------------------------------------
# Words
# ---------------------------------------------------------------------------


def test_encode_plain_word():
    assert encode_word(Word("Grace")) == "Grace"


def test_encode_word_with_keychange():
    assert encode_word(Word("Grace", "G")) == "Grace|G"


def test_decode_plain_word():
    assert decode_word("Grace") == Word("Grace")


def test_decode_word_with_keychange():
    assert decode_word("Grace|G") == Word(text="Grace", keychange="G")


def test_decode_splits_on_first_separator():
    assert decode_word("Grace|G|7") == Word("Grace", "G|7")


def test_keychange_word_json_form():
    assert json.dumps(encode_word(Word("Grace", "G"))) == '"Grace|G"'


@pytest.mark.parametrize("value", [42, None, ["Grace"], {"text": "Grace"}, "", "|G", "Grace|"])
def test_decode_malformed_word_raises(value):
    with pytest.raises(MalformedWordEncodingError) as exc_info:
        decode_word(value)
    assert exc_info.value.value == value


# ---------------------------------------------------------------------------
# Songs
# ---------------------------------------------------------------------------


def test_song_to_dict_schema():
    data = song_to_dict(_song())
    assert data["source_file"] == "files/amazing-grace.txt"
    assert data["title"] == "Amazing Grace"
    assert data["artists"] == ["John Newton", "Edwin Excell"]
    assert data["verses"][0] == {
        "id": 0,
        "chorus": False,
        "bridge": False,
        "lines": [["Amazing", "Grace|G"]],
    }
    assert data["verses"][1]["chorus"] is True
    assert data["verses"][2]["bridge"] is True


def test_json_round_trip():
    song = _song()
    assert loads_song(dumps_song(song)) == song


def test_parsed_song_round_trip():
    song = parse("Amazing Grace\n(John Newton)\n\nAmazing grace\n\nKoor:\nThat saved\n", "a.txt")
    assert loads_song(dumps_song(song)) == song


def test_dumps_is_indented_and_keeps_unicode():
    text = dumps_song(_song())
    assert '\n  "title": "Amazing Grace"' in text
    assert "Ná" in text
    assert text.endswith("\n")


def test_interlude_key_accepted_as_bridge():
    song = song_from_dict({
        "title": "T",
        "verses": [{"id": 0, "interlude": True, "lines": [["la"]]}],
    })
    assert song.verses[0].bridge


def test_missing_optional_keys_default():
    song = song_from_dict({"title": "T"})
    assert song.artists == []
    assert song.verses == []
    assert song.source_file == ""


def test_missing_title_raises():
    with pytest.raises(MalformedSongError):
        song_from_dict({"artists": []}, "x.json")


def test_non_object_raises():
    with pytest.raises(MalformedSongError):
        song_from_dict(["not", "a", "song"])


def test_verse_without_id_raises():
    with pytest.raises(MalformedSongError):
        song_from_dict({"title": "T", "verses": [{"lines": []}]})


def test_bad_artists_raise():
    with pytest.raises(MalformedSongError):
        song_from_dict({"title": "T", "artists": "John Newton"})


def test_invalid_json_raises():
    with pytest.raises(MalformedSongError):
        loads_song("{not json", "broken.json")


def test_bad_word_in_song_raises():
    with pytest.raises(MalformedWordEncodingError):
        song_from_dict({"title": "T", "verses": [{"id": 0, "lines": [["ok", 7]]}]})


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


def test_write_and_read_file(tmp_path):
    path = tmp_path / "song_0.json"
    write_song_json(_song(), path)
    assert read_song_json(path) == _song()


def test_write_to_missing_directory_raises_export_error(tmp_path):
    with pytest.raises(ExportError) as exc_info:
        write_song_json(_song(), tmp_path / "missing" / "song_0.json")
    assert "song_0.json" in exc_info.value.path


# ---------------------------------------------------------------------------
# Separator inside lyric text
# ---------------------------------------------------------------------------


def test_encode_escapes_separator_in_text():
    assert encode_word(Word("ja|nee")) == "ja\\|nee"
    assert encode_word(Word("|")) == "\\|"
    assert encode_word(Word("a\\b", "G")) == "a\\\\b|G"


def test_decode_unescapes_text():
    assert decode_word("ja\\|nee") == Word("ja|nee")
    assert decode_word("ja\\|nee|G") == Word("ja|nee", "G")
    assert decode_word("a\\\\b|G") == Word("a\\b", "G")


def test_decode_dangling_escape_raises():
    with pytest.raises(MalformedWordEncodingError):
        decode_word("Grace\\")


@pytest.mark.parametrize("word", [
    Word("ja|nee"),
    Word("|"),
    Word("\\"),
    Word("a\\|b", "C|D"),
    Word("Grace", "G"),
])
def test_word_round_trip(word):
    assert decode_word(json.loads(json.dumps(encode_word(word)))) == word


def test_pipe_inside_token_round_trips():
    song = parse("T\n\nja|nee\n")
    decoded = loads_song(dumps_song(song))
    assert decoded == song
    assert decoded.verses[0].lines[0].words == [Word("ja|nee")]


def test_lone_pipe_token_round_trips():
    song = parse("T\n\nla | la\n")
    decoded = loads_song(dumps_song(song))
    assert decoded == song
    assert [w.text for w in decoded.verses[0].lines[0].words] == ["la", "|", "la"]


# ---------------------------------------------------------------------------
# Structure validation
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("data", [
    {"title": "T", "verses": 5},
    {"title": "T", "verses": {"id": 0}},
    {"title": "T", "verses": ["verse"]},
    {"title": "T", "verses": [{"id": "0", "lines": []}]},
    {"title": "T", "verses": [{"id": True, "lines": []}]},
    {"title": "T", "verses": [{"id": 0, "chorus": "false", "lines": []}]},
    {"title": "T", "verses": [{"id": 0, "bridge": 1, "lines": []}]},
    {"title": "T", "verses": [{"id": 0, "interlude": "yes", "lines": []}]},
    {"title": "T", "verses": [{"id": 0, "lines": "abc"}]},
    {"title": "T", "verses": [{"id": 0, "lines": ["abc"]}]},
    {"title": "T", "source_file": 5},
    {"title": "T", "artists": None},
])
def test_malformed_structure_raises(data):
    with pytest.raises(MalformedSongError):
        song_from_dict(data, "bad.json")


def test_malformed_structure_error_names_source():
    with pytest.raises(MalformedSongError) as exc_info:
        song_from_dict({"title": "T", "verses": 5}, "bad.json")
    assert exc_info.value.source == "bad.json"
    assert "verses" in exc_info.value.reason
