"""Immutable color value types for contrastlens.

Every color space the toolkit understands has a small frozen dataclass here.
``RGB`` is the canonical interchange form: parsers produce it, the contrast
engine consumes it, and every other space converts to and from it.

Cylindrical types (``HSL``, ``OKLCH``, ``LCH``) wrap their hue into
[0, 360) on construction, so ``HSL(360, 50, 50) == HSL(0, 50, 50)``.
"""

from dataclasses import dataclass
from typing import Literal

__all__ = [
    "RGB",
    "HSL",
    "OKLCH",
    "Lab",
    "LCH",
    "Level",
    "TextSize",
    "Score",
    "Adjustment",
]

Level = Literal["AA", "AAA"]
TextSize = Literal["normal", "large"]
Score = Literal["fail", "aa-large", "aa", "aaa"]
Adjustment = Literal["lighter", "darker", "original"]


def _wrap_hue(h: float) -> float:
    h = float(h) % 360.0
    # -1e-17 % 360 rounds up to 360.0
    return 0.0 if h >= 360.0 else h


@dataclass(frozen=True)
class RGB:
    """An 8-bit sRGB color.

    Args:
        r: Red channel, integer in [0, 255].
        g: Green channel, integer in [0, 255].
        b: Blue channel, integer in [0, 255].

    Raises:
        ValueError: If a channel is not an integer in [0, 255].
    """

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"RGB channel {name} must be an int, got {value!r}")
            if not 0 <= value <= 255:
                raise ValueError(f"RGB channel {name} out of range [0, 255]: {value}")

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def normalized(self) -> tuple[float, float, float]:
        """Channels scaled to [0, 1], the form matplotlib and colour expect."""
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0)


@dataclass(frozen=True)
class HSL:
    """Hue in degrees, saturation and lightness in percent."""

    h: float
    s: float
    l: float  # noqa: E741

    def __post_init__(self) -> None:
        object.__setattr__(self, "h", _wrap_hue(self.h))


@dataclass(frozen=True)
class OKLCH:
    """OKLCH: perceptual lightness [0, 1], chroma >= 0, hue in degrees."""

    l: float  # noqa: E741
    c: float
    h: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "h", _wrap_hue(self.h))

    def with_lightness(self, lightness: float) -> "OKLCH":
        return OKLCH(lightness, self.c, self.h)


@dataclass(frozen=True)
class Lab:
    """CIE Lab relative to the D50 white point, as CSS Color 4 defines it."""

    l: float  # noqa: E741
    a: float
    b: float


@dataclass(frozen=True)
class LCH:
    """Polar form of ``Lab``."""

    l: float  # noqa: E741
    c: float
    h: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "h", _wrap_hue(self.h))
