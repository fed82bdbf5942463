class SingsaamError(Exception):
    """Base exception for singsaam."""


class ParseError(SingsaamError):
    """Raised when a lyrics file cannot be parsed into a song."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Parse error for {source or '<text>'}: {reason}")


class EmptyTitleError(ParseError):
    """Raised when the first line of a lyrics file is blank or missing."""

    def __init__(self, source: str):
        super().__init__(source, "empty first line, expected song title")


class InvalidCharacterError(ParseError):
    """Raised when a lyric line holds characters outside the allowed set."""

    def __init__(self, source: str, line_nr: int, chars: str, line: str):
        self.line_nr = line_nr
        self.chars = chars
        self.line = line
        super().__init__(source, f"invalid lyrics chars({chars}) on line {line_nr}: {line}")


class InvalidFileTypeError(SingsaamError):
    """Raised when no reader handles the file's extension."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Unsupported file type: {path}")


class MalformedWordEncodingError(SingsaamError):
    """Raised when an encoded JSON word is not a valid ``text|keychange`` string."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"word({value!r}) is not a quoted text|keychange string")


class MalformedSongError(SingsaamError):
    """Raised when a JSON song document is missing required structure."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Malformed song {source or '<json>'}: {reason}")


class ExportError(SingsaamError):
    """Raised when an exported file cannot be written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to export {path}: {reason}")


class ConfigError(SingsaamError):
    """Raised when a locale configuration file is invalid."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid config {path}: {reason}")
