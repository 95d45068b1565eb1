"""Color parsing and formatting utilities for contrastlens.

Each supported grammar has its own ``parse_*_color`` function returning a
tagged :class:`ParsedColor` or ``None``. :func:`parse_color` tries them in a
fixed priority order (hex, rgb, hsl, color(), oklch, lab, lch, named) and
returns the first match as ``RGB``; ``None`` means "not a color".

The ``rgb()``, ``rgba()``, ``hsl()`` and ``hsla()`` function names only
match in lowercase. The CSS Color 4 functions, hex digits and color names
are case-insensitive.
"""

import math
import re
from dataclasses import dataclass
from typing import Callable, Literal

from .conversions import (
    hsl_to_rgb,
    lab_to_rgb,
    lch_to_rgb,
    oklch_to_rgb,
    quantize_channel,
    rgb_to_hex,
    rgb_to_hsl,
    rgb_to_lab,
    rgb_to_lch,
    rgb_to_oklch,
)
from .models import HSL, LCH, OKLCH, RGB, Lab
from .named_colors import NAMED_COLORS

__all__ = [
    "ColorSpace",
    "ParsedColor",
    "parse_hex_color",
    "hex_to_rgb",
    "parse_rgb_color",
    "parse_hsl_color",
    "parse_srgb_color",
    "parse_oklch_color",
    "parse_lab_color",
    "parse_lch_color",
    "parse_named_color",
    "parse_color",
    "parse_color_with_alpha",
    "parse_color_strict",
    "format_color_output",
]

ColorSpace = Literal["hex", "rgb", "hsl", "srgb", "oklch", "lab", "lch", "named"]

# OKLCH chroma tops out near 0.37 inside sRGB; anything past these bounds
# is a typo, not a color.
MAX_OKLCH_CHROMA = 1.0
MAX_LAB_AXIS = 400.0
MAX_LCH_CHROMA = 400.0

_NUM = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
_ALPHA = rf"(?:/\s*({_NUM}%?)\s*)?"

_HEX_RE = re.compile(r"#?([0-9a-f]{3}|[0-9a-f]{6}|[0-9a-f]{8})", re.IGNORECASE)
_RGB_LEGACY_RE = re.compile(
    rf"rgba?\(\s*({_NUM}%?)\s*,\s*({_NUM}%?)\s*,\s*({_NUM}%?)\s*"
    rf"(?:,\s*({_NUM}%?)\s*)?\)"
)
_RGB_MODERN_RE = re.compile(
    rf"rgba?\(\s*({_NUM}%?)\s+({_NUM}%?)\s+({_NUM}%?)\s*{_ALPHA}\)"
)
_HSL_LEGACY_RE = re.compile(
    rf"hsla?\(\s*({_NUM})(?:deg)?\s*,\s*({_NUM})%\s*,\s*({_NUM})%\s*"
    rf"(?:,\s*({_NUM}%?)\s*)?\)"
)
_HSL_MODERN_RE = re.compile(
    rf"hsla?\(\s*({_NUM})(?:deg)?\s+({_NUM})%?\s+({_NUM})%?\s*{_ALPHA}\)"
)
_SRGB_RE = re.compile(
    rf"color\(\s*srgb\s+({_NUM}%?)\s+({_NUM}%?)\s+({_NUM}%?)\s*{_ALPHA}\)",
    re.IGNORECASE,
)
_OKLCH_RE = re.compile(
    rf"oklch\(\s*({_NUM}%?)\s+({_NUM}%?)\s+({_NUM})(?:deg)?\s*{_ALPHA}\)",
    re.IGNORECASE,
)
_LAB_RE = re.compile(
    rf"lab\(\s*({_NUM}%?)\s+({_NUM}%?)\s+({_NUM}%?)\s*{_ALPHA}\)",
    re.IGNORECASE,
)
_LCH_RE = re.compile(
    rf"lch\(\s*({_NUM}%?)\s+({_NUM}%?)\s+({_NUM})(?:deg)?\s*{_ALPHA}\)",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class ParsedColor:
    """A successful parse, tagged with the grammar that produced it.

    ``value`` is in the color space named by ``space``; ``alpha`` is the
    parsed opacity in [0, 1] (1.0 when the input carries none).
    """

    space: ColorSpace
    value: RGB | HSL | OKLCH | Lab | LCH
    alpha: float = 1.0

    def to_rgb(self) -> RGB:
        return _TO_RGB[self.space](self.value)


def _identity(value: RGB) -> RGB:
    return value


_TO_RGB: dict[str, Callable[..., RGB]] = {
    "hex": _identity,
    "rgb": _identity,
    "hsl": hsl_to_rgb,
    "srgb": _identity,
    "oklch": oklch_to_rgb,
    "lab": lab_to_rgb,
    "lch": lch_to_rgb,
    "named": _identity,
}


def _number(token: str) -> float | None:
    value = float(token)
    return value if math.isfinite(value) else None


def _scaled(token: str, percent_scale: float) -> float | None:
    """Parse a bare number, or a percentage multiplied by ``percent_scale``."""
    if token.endswith("%"):
        value = _number(token[:-1])
        return None if value is None else value / 100.0 * percent_scale
    return _number(token)


def _alpha(token: str | None) -> float | None:
    if token is None:
        return 1.0
    value = _scaled(token, 1.0)
    if value is None or not 0.0 <= value <= 1.0:
        return None
    return value


def parse_hex_color(color_str: str) -> ParsedColor | None:
    """Parse ``#RGB``, ``#RRGGBB`` or ``#RRGGBBAA``; the ``#`` is optional."""
    match = _HEX_RE.fullmatch(color_str.strip())
    if not match:
        return None

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)

    rgb = RGB(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
    alpha = int(digits[6:8], 16) / 255.0 if len(digits) == 8 else 1.0
    return ParsedColor("hex", rgb, alpha)


def hex_to_rgb(hex_str: str) -> RGB | None:
    """Inverse of :func:`rgb_to_hex`; accepts every hex form the parser does."""
    parsed = parse_hex_color(hex_str)
    return parsed.to_rgb() if parsed is not None else None


def parse_rgb_color(color_str: str) -> ParsedColor | None:
    """Parse ``rgb()``/``rgba()`` in legacy comma or modern space syntax.

    Channels are numbers in [0, 255] or percentages; alpha is a number in
    [0, 1] or a percentage.
    """
    color_str = color_str.strip()
    match = _RGB_LEGACY_RE.fullmatch(color_str) or _RGB_MODERN_RE.fullmatch(color_str)
    if not match:
        return None

    channels: list[int] = []
    for token in match.group(1, 2, 3):
        value = _scaled(token, 255.0)
        if value is None or not 0.0 <= value <= 255.0:
            return None
        channels.append(quantize_channel(value))

    alpha = _alpha(match.group(4))
    if alpha is None:
        return None
    return ParsedColor("rgb", RGB(*channels), alpha)


def parse_hsl_color(color_str: str) -> ParsedColor | None:
    """Parse ``hsl()``/``hsla()``; the hue wraps, ``hsl(720, ...)`` is hue 0."""
    color_str = color_str.strip()
    match = _HSL_LEGACY_RE.fullmatch(color_str) or _HSL_MODERN_RE.fullmatch(color_str)
    if not match:
        return None

    h, s, lightness = (_number(token) for token in match.group(1, 2, 3))
    if h is None or s is None or lightness is None:
        return None
    if not (0.0 <= s <= 100.0 and 0.0 <= lightness <= 100.0):
        return None

    alpha = _alpha(match.group(4))
    if alpha is None:
        return None
    return ParsedColor("hsl", HSL(h, s, lightness), alpha)


def parse_srgb_color(color_str: str) -> ParsedColor | None:
    """Parse ``color(srgb r g b [/ a])`` with channels in [0, 1]."""
    match = _SRGB_RE.fullmatch(color_str.strip())
    if not match:
        return None

    channels: list[int] = []
    for token in match.group(1, 2, 3):
        value = _scaled(token, 1.0)
        if value is None or not 0.0 <= value <= 1.0:
            return None
        channels.append(quantize_channel(value * 255.0))

    alpha = _alpha(match.group(4))
    if alpha is None:
        return None
    return ParsedColor("srgb", RGB(*channels), alpha)


def parse_oklch_color(color_str: str) -> ParsedColor | None:
    """Parse ``oklch(l c h)``; lightness is a fraction or a percentage."""
    match = _OKLCH_RE.fullmatch(color_str.strip())
    if not match:
        return None

    lightness = _scaled(match.group(1), 1.0)
    chroma = _scaled(match.group(2), 0.4)
    hue = _number(match.group(3))
    if lightness is None or chroma is None or hue is None:
        return None
    if not (0.0 <= lightness <= 1.0 and 0.0 <= chroma <= MAX_OKLCH_CHROMA):
        return None

    alpha = _alpha(match.group(4))
    if alpha is None:
        return None
    return ParsedColor("oklch", OKLCH(lightness, chroma, hue), alpha)


def parse_lab_color(color_str: str) -> ParsedColor | None:
    """Parse ``lab(l a b)``; ``100%`` is 100 for l and 125 for a and b."""
    match = _LAB_RE.fullmatch(color_str.strip())
    if not match:
        return None

    lightness = _scaled(match.group(1), 100.0)
    a = _scaled(match.group(2), 125.0)
    b = _scaled(match.group(3), 125.0)
    if lightness is None or a is None or b is None:
        return None
    if not 0.0 <= lightness <= 100.0:
        return None
    if abs(a) > MAX_LAB_AXIS or abs(b) > MAX_LAB_AXIS:
        return None

    alpha = _alpha(match.group(4))
    if alpha is None:
        return None
    return ParsedColor("lab", Lab(lightness, a, b), alpha)


def parse_lch_color(color_str: str) -> ParsedColor | None:
    """Parse ``lch(l c h)``; ``100%`` chroma is 150."""
    match = _LCH_RE.fullmatch(color_str.strip())
    if not match:
        return None

    lightness = _scaled(match.group(1), 100.0)
    chroma = _scaled(match.group(2), 150.0)
    hue = _number(match.group(3))
    if lightness is None or chroma is None or hue is None:
        return None
    if not (0.0 <= lightness <= 100.0 and 0.0 <= chroma <= MAX_LCH_CHROMA):
        return None

    alpha = _alpha(match.group(4))
    if alpha is None:
        return None
    return ParsedColor("lch", LCH(lightness, chroma, hue), alpha)


def parse_named_color(color_str: str) -> ParsedColor | None:
    """Look up a CSS color name; ``transparent`` is black at alpha 0."""
    name = color_str.strip().lower()
    if name == "transparent":
        return ParsedColor("named", RGB(0, 0, 0), 0.0)
    if name not in NAMED_COLORS:
        return None
    return ParsedColor("named", RGB(*NAMED_COLORS[name]))


_PARSERS: list[Callable[[str], ParsedColor | None]] = [
    parse_hex_color,
    parse_rgb_color,
    parse_hsl_color,
    parse_srgb_color,
    parse_oklch_color,
    parse_lab_color,
    parse_lch_color,
    parse_named_color,
]


def _parse(color_str: str) -> ParsedColor | None:
    if not isinstance(color_str, str):
        return None
    color_str = color_str.strip()
    if not color_str:
        return None

    for parser in _PARSERS:
        result = parser(color_str)
        if result is not None:
            return result
    return None


def parse_color(color_str: str) -> RGB | None:
    """Parse any supported color string into ``RGB``.

    Alpha is parsed but discarded: ``rgb(255 85 0 / 50%)`` is
    ``RGB(255, 85, 0)``. Returns ``None`` for anything that is not a color.

    Examples:
        >>> parse_color("#FF5500")
        RGB(r=255, g=85, b=0)
        >>> parse_color("not-a-color") is None
        True
    """
    parsed = _parse(color_str)
    return parsed.to_rgb() if parsed is not None else None


def parse_color_with_alpha(color_str: str) -> tuple[RGB, float] | None:
    """Like :func:`parse_color` but keeps the opacity for compositing."""
    parsed = _parse(color_str)
    if parsed is None:
        return None
    return parsed.to_rgb(), parsed.alpha


def parse_color_strict(color_str: str) -> RGB:
    """Parse user input, raising ``ValueError`` when it is not a color."""
    result = parse_color(color_str)
    if result is None:
        raise ValueError(
            f"Invalid color format: '{color_str.strip()}'. "
            "Supported formats: #RGB, #RRGGBB, #RRGGBBAA, rgb(), rgba(), "
            "hsl(), hsla(), color(srgb ...), oklch(), lab(), lch(), "
            "and CSS color names"
        )
    return result


def format_color_output(colors: list[RGB], format_type: str = "hex") -> list[str]:
    """Format colors for output."""
    formatted: list[str] = []

    for rgb in colors:
        if format_type == "hex":
            formatted.append(rgb_to_hex(rgb))
        elif format_type == "rgb":
            formatted.append(f"rgb({rgb.r}, {rgb.g}, {rgb.b})")
        elif format_type == "hsl":
            hsl = rgb_to_hsl(rgb)
            formatted.append(f"hsl({hsl.h:.1f}, {hsl.s:.1f}%, {hsl.l:.1f}%)")
        elif format_type == "oklch":
            oklch = rgb_to_oklch(rgb)
            formatted.append(f"oklch({oklch.l:.4f} {oklch.c:.4f} {oklch.h:.2f})")
        elif format_type == "lab":
            lab = rgb_to_lab(rgb)
            formatted.append(f"lab({lab.l:.2f}% {lab.a:.2f} {lab.b:.2f})")
        elif format_type == "lch":
            lch = rgb_to_lch(rgb)
            formatted.append(f"lch({lch.l:.2f}% {lch.c:.2f} {lch.h:.2f})")
        else:
            raise ValueError(f"Unknown output format: {format_type!r}")

    return formatted
