"""User preferences for contrastlens, read from a YAML file.

Example ``contrastlens.yaml``::

    default_level: AAA
    default_text_size: normal
    tie_break: foreground
    canvas_color: "#FFFFFF"
"""

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from .color_utils import parse_color
from .models import RGB, Level, TextSize
from .suggestions import TieBreak

__all__ = ["Preferences", "PreferencesError", "load_preferences"]

logger = logging.getLogger(__name__)


class PreferencesError(ValueError):
    """Raised when a preferences file cannot be read or holds invalid values."""


@dataclass(frozen=True)
class Preferences:
    default_level: Level = "AA"
    default_text_size: TextSize = "normal"
    tie_break: TieBreak = "foreground"
    canvas_color: str = "#FFFFFF"
    _canvas: RGB = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.default_level not in ("AA", "AAA"):
            raise PreferencesError(f"default_level must be AA or AAA, got {self.default_level!r}")
        if self.default_text_size not in ("normal", "large"):
            raise PreferencesError(
                f"default_text_size must be normal or large, got {self.default_text_size!r}"
            )
        if self.tie_break not in ("foreground", "background"):
            raise PreferencesError(
                f"tie_break must be foreground or background, got {self.tie_break!r}"
            )
        canvas = parse_color(self.canvas_color)
        if canvas is None:
            raise PreferencesError(f"canvas_color is not a color: {self.canvas_color!r}")
        object.__setattr__(self, "_canvas", canvas)

    @property
    def canvas_rgb(self) -> RGB:
        return self._canvas

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "Preferences":
        known = {f.name for f in fields(cls) if f.init}
        unknown = sorted(set(data) - known)
        if unknown:
            raise PreferencesError(f"Unknown preference keys: {', '.join(unknown)}")
        return cls(**data)


def load_preferences(path: str | Path | None) -> Preferences:
    """Load preferences from ``path``.

    A ``None`` path or a missing file gives the defaults.

    Raises:
        PreferencesError: If the file is not valid YAML, is not a mapping, or
            holds unknown keys or invalid values.
    """
    if path is None:
        return Preferences()

    path = Path(path)
    if not path.exists():
        logger.debug("No preferences file at %s, using defaults", path)
        return Preferences()

    try:
        with path.open(encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as e:
        raise PreferencesError(f"Cannot read preferences from {path}: {e}") from e

    if data is None:
        return Preferences()
    if not isinstance(data, dict):
        raise PreferencesError(f"Preferences in {path} must be a mapping")

    logger.debug("Loaded preferences from %s: %s", path, data)
    return Preferences.from_mapping(data)
