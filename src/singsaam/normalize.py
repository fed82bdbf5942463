"""Optional text normalization applied while parsing lyrics.

Older lyric collections were typed partly in capitals and with stray
symbols.  When a :class:`~singsaam.locales.Locale` has ``normalize`` set, the
parser runs every lyric line through :class:`LineNormalizer`, which

  1. rejects lines holding characters outside :data:`ALLOWED_SYMBOLS`,
     letters, digits and space (:class:`InvalidCharacterError`);
  2. lower-cases lines where capitals outnumber lower-case letters;
  3. re-capitalizes the first letter of such a line when the previous
     lower-cased line ended a sentence.

The title line is title-cased with :func:`title_case`.
"""

from dataclasses import dataclass, field

from .exceptions import InvalidCharacterError

ALLOWED_SYMBOLS = "!?;:,.-'\"()[]0123456789/"
END_OF_SENTENCE = ".!?;"

# Afrikaans indefinite article; never capitalized by title casing.
_ARTICLE = "'n"


@dataclass
class CharSetCount:
    upper: int = 0
    lower: int = 0
    symbol: int = 0
    space: int = 0
    unknown: list[str] = field(default_factory=list)  # unique, first-seen order

    @property
    def unknown_chars(self) -> str:
        return "".join(self.unknown)


def count_char_sets(text: str) -> CharSetCount:
    """Classify every character of *text* into a :class:`CharSetCount`."""
    result = CharSetCount()
    for ch in text:
        if ch == " ":
            result.space += 1
        elif ch.isupper():
            result.upper += 1
        elif ch.islower():
            result.lower += 1
        elif ch in ALLOWED_SYMBOLS:
            result.symbol += 1
        elif ch not in result.unknown:
            result.unknown.append(ch)
    return result


def _title_word(word: str) -> str:
    if word.lower() == _ARTICLE:
        return _ARTICLE
    for i, ch in enumerate(word):
        if ch.isalpha():
            return word[:i].lower() + ch.upper() + word[i + 1:].lower()
    return word


def title_case(text: str) -> str:
    """Capitalize the first letter of every word.

    Words are separated by spaces and hyphens, so ``MIELIE-LAND`` becomes
    ``Mielie-Land``.

    >>> title_case("DIE SKEMER VAN 'N DAG")
    "Die Skemer Van 'n Dag"
    """
    return " ".join(
        "-".join(_title_word(part) for part in word.split("-"))
        for word in text.split(" ")
    )


def ends_sentence(text: str) -> bool:
    return bool(text) and text[-1] in END_OF_SENTENCE


class LineNormalizer:
    """Per-parse normalization state (tracks whether the last sentence ended)."""

    def __init__(self, source: str = ""):
        self.source = source
        self.sentence_ended = True

    def normalize(self, text: str, line_nr: int) -> str:
        """Validate and case-correct one trimmed lyric line.

        Raises :class:`~singsaam.exceptions.InvalidCharacterError` if the
        line holds characters outside the allowed set.
        """
        counts = count_char_sets(text)
        if counts.unknown:
            raise InvalidCharacterError(self.source, line_nr, counts.unknown_chars, text)

        if counts.upper <= counts.lower:
            return text

        text = text.lower()
        if self.sentence_ended and text[:1].islower():
            text = text[0].upper() + text[1:]
        self.sentence_ended = ends_sentence(text)
        return text
