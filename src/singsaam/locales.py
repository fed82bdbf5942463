"""Locale configuration: marker tokens, labels and the normalization switch.

A lyrics file flags a verse's role with a reserved marker line as the first
content of the verse.  The marker literals depend on the language the songs
are written in, so they live here instead of in the parser.

YAML layout accepted by :func:`load_locale`::

    name: en
    chorus_markers: ["Chorus:"]
    bridge_markers: ["Bridge:", "Interlude:"]
    chorus_label: Chorus
    bridge_label: Bridge
    artist_index_title: Artists
    title_index_title: Titles
    normalize: false

Missing keys fall back to :data:`AFRIKAANS`.
"""

from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

from .exceptions import ConfigError


@dataclass(frozen=True)
class Locale:
    name: str
    chorus_markers: tuple[str, ...]
    bridge_markers: tuple[str, ...]
    chorus_label: str  # rendered as _<label>:_ in Markdown
    bridge_label: str
    artist_index_title: str
    title_index_title: str
    normalize: bool = False

    def is_chorus_marker(self, line: str) -> bool:
        return line in self.chorus_markers

    def is_bridge_marker(self, line: str) -> bool:
        return line in self.bridge_markers


AFRIKAANS = Locale(
    name="af",
    chorus_markers=("Koor:",),
    bridge_markers=("Brug:", "Interlude:"),
    chorus_label="Koor",
    bridge_label="Brug",
    artist_index_title="Kunstenaars",
    title_index_title="Titels",
)

_TUPLE_FIELDS = {"chorus_markers", "bridge_markers"}


def load_locale(path: str | Path, base: Locale = AFRIKAANS) -> Locale:
    """Read a YAML locale file and overlay it on *base*.

    Raises :class:`~singsaam.exceptions.ConfigError` if the file cannot be
    read, is not a mapping, or names keys :class:`Locale` does not have.
    """
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(str(path), str(exc)) from exc

    if data is None:
        return base
    if not isinstance(data, dict):
        raise ConfigError(str(path), "expected a mapping at the top level")

    known = {f.name for f in fields(Locale)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(str(path), f"unknown keys: {', '.join(unknown)}")

    overrides = {}
    for key, value in data.items():
        if key in _TUPLE_FIELDS:
            if isinstance(value, str):
                value = [value]
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(str(path), f"{key} must be a list of strings")
            value = tuple(value)
        elif key == "normalize":
            if not isinstance(value, bool):
                raise ConfigError(str(path), "normalize must be true or false")
        elif not isinstance(value, str):
            raise ConfigError(str(path), f"{key} must be a string")
        overrides[key] = value

    return replace(base, **overrides)
