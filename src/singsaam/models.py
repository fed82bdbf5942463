from dataclasses import dataclass, field


@dataclass
class Word:
    """A single lyric token, optionally annotated with a key change.

    Example: ``Word(text="Grace", keychange="G")`` marks a change to G on
    the word "Grace".  Words without an annotation have ``keychange == ""``.
    """

    text: str
    keychange: str = ""


@dataclass
class Line:
    """One line of lyrics as an ordered list of words (reading order)."""

    words: list[Word] = field(default_factory=list)

    @property
    def text(self) -> str:
        return " ".join(word.text for word in self.words)


@dataclass
class Verse:
    """A blank-line delimited block of lyric lines."""

    id: int  # 0-based position among the song's verses
    chorus: bool = False
    bridge: bool = False  # also set for interludes
    lines: list[Line] = field(default_factory=list)


@dataclass
class Song:
    """Structured representation of one lyrics file."""

    title: str
    source_file: str = ""
    artists: list[str] = field(default_factory=list)
    verses: list[Verse] = field(default_factory=list)
