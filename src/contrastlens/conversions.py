"""Color space conversions and WCAG relative luminance for contrastlens.

Conversions are total functions over the typed values in
:mod:`contrastlens.models`. Every path back to ``RGB`` clamps to the sRGB
gamut and rounds half up, so 8-bit quantization is the only lossy step and
any color survives a round trip through HSL, OKLCH, Lab or LCH within one
unit per channel.

Pipelines:
    - HSL: colour-science's cylindrical HSL model on normalized sRGB.
    - OKLCH: sRGB -> linear sRGB -> LMS -> OKLab -> polar, using Björn
      Ottosson's published matrices and their inverses.
    - Lab/LCH: colour's ``sRGB_to_XYZ`` adapted to D50 with Bradford, then
      ``XYZ_to_Lab`` with the D50 illuminant, matching CSS Color 4.

Transfer functions come from colour (``eotf_sRGB`` and its inverse). WCAG
luminance keeps the 0.03928 break point from the WCAG 2.x text while the
OKLCH and Lab pipelines use the IEC 61966-2-1 value 0.04045.
The two differ only for channel values that no 8-bit input can hit.
"""

import math
from typing import Any

import colour
import numpy as np

from .models import HSL, LCH, OKLCH, RGB, Lab

__all__ = [
    "rgb_to_hex",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "rgb_to_oklch",
    "oklch_to_rgb",
    "rgb_to_lab",
    "lab_to_rgb",
    "rgb_to_lch",
    "lch_to_rgb",
    "get_relative_luminance",
    "is_light_color",
    "quantize_channel",
]

_LINEAR_SRGB_TO_LMS = np.array(
    [
        [0.4122214708, 0.5363325363, 0.0514459929],
        [0.2119034982, 0.6806995451, 0.1073969566],
        [0.0883024619, 0.2817188376, 0.6299787005],
    ]
)

_LMS_CBRT_TO_OKLAB = np.array(
    [
        [0.2104542553, 0.7936177850, -0.0040720468],
        [1.9779984951, -2.4285922050, 0.4505937099],
        [0.0259040371, 0.7827717662, -0.8086757660],
    ]
)

_OKLAB_TO_LMS_CBRT = np.array(
    [
        [1.0, 0.3963377774, 0.2158037573],
        [1.0, -0.1055613458, -0.0638541728],
        [1.0, -0.0894841775, -1.2914855480],
    ]
)

_LMS_TO_LINEAR_SRGB = np.array(
    [
        [4.0767416621, -3.3077115913, 0.2309699292],
        [-1.2684380046, 2.6097574011, -0.3413193965],
        [-0.0041960863, -0.7034186147, 1.7076147010],
    ]
)

_D50 = colour.CCS_ILLUMINANTS["CIE 1931 2 Degree Standard Observer"]["D50"]


def quantize_channel(value: float) -> int:
    """Round a [0, 255] float to the nearest 8-bit integer, half up, clamped."""
    return int(min(255, max(0, math.floor(float(value) + 0.5))))


def _to_rgb(normalized: Any) -> RGB:
    r, g, b = (quantize_channel(c * 255.0) for c in np.clip(normalized, 0.0, 1.0))
    return RGB(r, g, b)


def _encode(linear: Any) -> RGB:
    return _to_rgb(colour.models.eotf_inverse_sRGB(np.clip(linear, 0.0, 1.0)))


def rgb_to_hex(rgb: RGB) -> str:
    """Format as ``#RRGGBB`` with uppercase digits."""
    return f"#{rgb.r:02X}{rgb.g:02X}{rgb.b:02X}"


def rgb_to_hsl(rgb: RGB) -> HSL:
    """Convert to HSL with hue in degrees and saturation/lightness in percent.

    Achromatic colors get hue 0 and saturation 0.
    """
    h, s, lightness = colour.RGB_to_HSL(np.array(rgb.normalized()))
    return HSL(float(h) * 360.0, float(s) * 100.0, float(lightness) * 100.0)


def hsl_to_rgb(hsl: HSL) -> RGB:
    """Convert HSL back to 8-bit RGB. Saturation 0 ignores hue entirely."""
    hsl_array = np.array([hsl.h / 360.0, hsl.s / 100.0, hsl.l / 100.0])
    return _to_rgb(colour.models.rgb.cylindrical.HSL_to_RGB(hsl_array))


def rgb_to_oklch(rgb: RGB) -> OKLCH:
    """Convert to OKLCH through linear sRGB, LMS and OKLab."""
    linear = colour.models.eotf_sRGB(np.array(rgb.normalized()))
    lms = _LINEAR_SRGB_TO_LMS @ linear
    lightness, a, b = _LMS_CBRT_TO_OKLAB @ np.cbrt(lms)
    chroma = math.hypot(a, b)
    hue = math.degrees(math.atan2(b, a))
    return OKLCH(float(lightness), float(chroma), hue)


def oklch_to_rgb(oklch: OKLCH) -> RGB:
    """Exact inverse of :func:`rgb_to_oklch`, clamped into the sRGB gamut.

    Lightness outside [0, 1] is clamped first; large chroma at extreme
    lightness simply clips to the nearest channel bound.
    """
    lightness = min(1.0, max(0.0, oklch.l))
    hue = math.radians(oklch.h)
    oklab = np.array([lightness, oklch.c * math.cos(hue), oklch.c * math.sin(hue)])
    lms = (_OKLAB_TO_LMS_CBRT @ oklab) ** 3
    return _encode(_LMS_TO_LINEAR_SRGB @ lms)


def rgb_to_lab(rgb: RGB) -> Lab:
    """Convert to CIE Lab (D50)."""
    xyz = colour.sRGB_to_XYZ(
        np.array(rgb.normalized()), illuminant=_D50, chromatic_adaptation_transform="Bradford"
    )
    lightness, a, b = colour.XYZ_to_Lab(xyz, illuminant=_D50)
    return Lab(float(lightness), float(a), float(b))


def lab_to_rgb(lab: Lab) -> RGB:
    xyz = colour.Lab_to_XYZ(np.array([lab.l, lab.a, lab.b]), illuminant=_D50)
    encoded = colour.XYZ_to_sRGB(
        xyz, illuminant=_D50, chromatic_adaptation_transform="Bradford"
    )
    return _to_rgb(encoded)


def rgb_to_lch(rgb: RGB) -> LCH:
    lab = rgb_to_lab(rgb)
    lightness, chroma, hue = colour.Lab_to_LCHab(np.array([lab.l, lab.a, lab.b]))
    return LCH(float(lightness), float(chroma), float(hue))


def lch_to_rgb(lch: LCH) -> RGB:
    lightness, a, b = colour.LCHab_to_Lab(np.array([lch.l, lch.c, lch.h]))
    return lab_to_rgb(Lab(float(lightness), float(a), float(b)))


def get_relative_luminance(rgb: RGB) -> float:
    """Compute WCAG relative luminance of an 8-bit sRGB color.

    Each channel is linearized with the WCAG transfer function (linear below
    0.03928, ``((v + 0.055) / 1.055) ** 2.4`` above) and weighted
    ``0.2126 R + 0.7152 G + 0.0722 B``.

    Examples:
        >>> get_relative_luminance(RGB(255, 255, 255))
        1.0
        >>> get_relative_luminance(RGB(0, 0, 0))
        0.0
    """
    def linearize(c: float) -> float:
        if c <= 0.03928:
            return c / 12.92
        return ((c + 0.055) / 1.055) ** 2.4

    r, g, b = rgb.normalized()
    return 0.2126 * linearize(r) + 0.7152 * linearize(g) + 0.0722 * linearize(b)


def is_light_color(rgb: RGB) -> bool:
    """True when relative luminance is at least 0.5."""
    return get_relative_luminance(rgb) >= 0.5
