"""WCAG 2.2 contrast ratio calculation and compliance checking.

The ratio is ``(L_lighter + 0.05) / (L_darker + 0.05)`` over WCAG relative
luminances, so it is symmetric and always lies in [1, 21].

Thresholds:
    - Level AA: 4.5:1 normal text, 3:1 large text, 3:1 UI components
    - Level AAA: 7:1 normal text, 4.5:1 large text

Large text is at least 18pt (24px) regular or 14pt (about 18.67px) bold.
"""

from dataclasses import dataclass

from .conversions import get_relative_luminance, rgb_to_hex
from .models import RGB, Level, Score, TextSize

__all__ = [
    "WCAG_THRESHOLDS",
    "AACompliance",
    "AAACompliance",
    "ContrastResult",
    "FullCompliance",
    "calculate_contrast_ratio",
    "format_contrast_ratio",
    "score_from_ratio",
    "analyze_contrast",
    "passes_wcag",
    "get_required_ratio",
    "get_score_label",
    "get_score_color",
    "get_contrast_gap",
    "is_large_text",
    "get_full_compliance",
]

WCAG_THRESHOLDS: dict[str, float] = {
    "AA_NORMAL": 4.5,
    "AA_LARGE": 3.0,
    "AA_UI": 3.0,
    "AAA_NORMAL": 7.0,
    "AAA_LARGE": 4.5,
}

_SCORE_LABELS: dict[str, str] = {
    "aaa": "AAA - Excellent",
    "aa": "AA - Good",
    "aa-large": "AA Large Text Only",
    "fail": "Fail - Insufficient Contrast",
}

_SCORE_COLORS: dict[str, str] = {
    "aaa": "#059669",
    "aa": "#2563EB",
    "aa-large": "#D97706",
    "fail": "#DC2626",
}


@dataclass(frozen=True)
class AACompliance:
    normal_text: bool
    large_text: bool
    ui_components: bool


@dataclass(frozen=True)
class AAACompliance:
    normal_text: bool
    large_text: bool


@dataclass(frozen=True)
class ContrastResult:
    """Full analysis of one foreground/background pair.

    Derived entirely from the two colors; ``score`` is the strictest tier
    passed for normal text, with ``aa-large`` as the only large-text tier.
    """

    ratio: float
    ratio_string: str
    aa: AACompliance
    aaa: AAACompliance
    score: Score
    foreground: str
    background: str


@dataclass(frozen=True)
class FullCompliance:
    ratio: float
    ratio_string: str
    normal_text: dict[str, bool]
    large_text: dict[str, bool]
    ui_components: dict[str, bool]
    overall_score: Score


def calculate_contrast_ratio(foreground: RGB, background: RGB) -> float:
    """Calculate the WCAG contrast ratio between two colors.

    Examples:
        >>> round(calculate_contrast_ratio(RGB(0, 0, 0), RGB(255, 255, 255)), 2)
        21.0
    """
    lum1 = get_relative_luminance(foreground)
    lum2 = get_relative_luminance(background)

    lighter = max(lum1, lum2)
    darker = min(lum1, lum2)
    return (lighter + 0.05) / (darker + 0.05)


def format_contrast_ratio(ratio: float) -> str:
    """Format a ratio for display, e.g. ``4.50:1``."""
    return f"{ratio:.2f}:1"


def score_from_ratio(ratio: float) -> Score:
    """Classify a ratio, most strict tier first."""
    if ratio >= WCAG_THRESHOLDS["AAA_NORMAL"]:
        return "aaa"
    if ratio >= WCAG_THRESHOLDS["AA_NORMAL"]:
        return "aa"
    if ratio >= WCAG_THRESHOLDS["AA_LARGE"]:
        return "aa-large"
    return "fail"


def analyze_contrast(foreground: RGB, background: RGB) -> ContrastResult:
    """Compute the ratio, every compliance cell and the overall score."""
    ratio = calculate_contrast_ratio(foreground, background)

    aa = AACompliance(
        normal_text=ratio >= WCAG_THRESHOLDS["AA_NORMAL"],
        large_text=ratio >= WCAG_THRESHOLDS["AA_LARGE"],
        ui_components=ratio >= WCAG_THRESHOLDS["AA_UI"],
    )
    aaa = AAACompliance(
        normal_text=ratio >= WCAG_THRESHOLDS["AAA_NORMAL"],
        large_text=ratio >= WCAG_THRESHOLDS["AAA_LARGE"],
    )

    return ContrastResult(
        ratio=ratio,
        ratio_string=format_contrast_ratio(ratio),
        aa=aa,
        aaa=aaa,
        score=score_from_ratio(ratio),
        foreground=rgb_to_hex(foreground),
        background=rgb_to_hex(background),
    )


def get_required_ratio(level: Level, text_size: TextSize) -> float:
    """Return the minimum ratio for a WCAG level and text size.

    Raises:
        ValueError: For an unknown level or text size.
    """
    if level not in ("AA", "AAA"):
        raise ValueError(f"Unknown WCAG level: {level!r}")
    if text_size not in ("normal", "large"):
        raise ValueError(f"Unknown text size: {text_size!r}")
    return WCAG_THRESHOLDS[f"{level}_{text_size.upper()}"]


def passes_wcag(
    foreground: RGB,
    background: RGB,
    level: Level,
    text_size: TextSize = "normal",
) -> bool:
    required = get_required_ratio(level, text_size)
    return calculate_contrast_ratio(foreground, background) >= required


def get_score_label(score: Score) -> str:
    return _SCORE_LABELS[score]


def get_score_color(score: Score) -> str:
    """Hex color used to badge a score in reports."""
    return _SCORE_COLORS[score]


def get_contrast_gap(ratio: float, level: Level, text_size: TextSize) -> float:
    """How much ratio is still missing to reach ``level``; never negative."""
    return max(0.0, get_required_ratio(level, text_size) - ratio)


def is_large_text(font_size_px: float, is_bold: bool) -> bool:
    if is_bold:
        return font_size_px >= 18.67
    return font_size_px >= 24


def get_full_compliance(foreground: RGB, background: RGB) -> FullCompliance:
    """Compliance grouped by text category rather than by level."""
    ratio = calculate_contrast_ratio(foreground, background)

    return FullCompliance(
        ratio=ratio,
        ratio_string=format_contrast_ratio(ratio),
        normal_text={
            "aa": ratio >= WCAG_THRESHOLDS["AA_NORMAL"],
            "aaa": ratio >= WCAG_THRESHOLDS["AAA_NORMAL"],
        },
        large_text={
            "aa": ratio >= WCAG_THRESHOLDS["AA_LARGE"],
            "aaa": ratio >= WCAG_THRESHOLDS["AAA_LARGE"],
        },
        ui_components={"aa": ratio >= WCAG_THRESHOLDS["AA_UI"]},
        overall_score=score_from_ratio(ratio),
    )
