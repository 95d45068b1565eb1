"""Accessible color suggestions for failing contrast pairs.

When a pair misses its target ratio, the engine adjusts one side at a time in
OKLCH, holding hue and chroma fixed and moving only lightness. "Percent
change" is the distance travelled in OKLCH lightness, times 100.

For each side two binary searches run independently:

    - lighter: bracket ``[l0, 1]``, converging on the smallest lightness that
      still meets the target;
    - darker: bracket ``[0, l0]``, converging on the largest such lightness.

Each search stops after 20 iterations or once the bracket is narrower than
0.001. The final candidate is checked again and dropped if it still fails,
which is how an unreachable target shows up: as a missing suggestion.
"""

from dataclasses import dataclass, field
from typing import Literal

from .contrast import (
    WCAG_THRESHOLDS,
    calculate_contrast_ratio,
    format_contrast_ratio,
    get_required_ratio,
)
from .conversions import oklch_to_rgb, rgb_to_hex, rgb_to_oklch
from .models import OKLCH, RGB, Adjustment, Level, TextSize

__all__ = [
    "TieBreak",
    "ColorSuggestion",
    "SuggestionResult",
    "MAX_ITERATIONS",
    "CONVERGENCE_WIDTH",
    "find_minimum_adjustment",
    "get_suggestions",
    "get_quick_suggestions",
    "suggest_accessible_variant",
    "generate_accessible_palette",
]

TieBreak = Literal["foreground", "background"]

MAX_ITERATIONS = 20
CONVERGENCE_WIDTH = 0.001

_BLACK = RGB(0, 0, 0)
_WHITE = RGB(255, 255, 255)


@dataclass(frozen=True)
class ColorSuggestion:
    color: RGB
    hex: str
    contrast_ratio: float
    ratio_string: str
    adjustment: Adjustment
    percent_change: float


@dataclass(frozen=True)
class SuggestionResult:
    """Suggestions for both sides of a pair.

    ``foreground_suggestions`` and ``background_suggestions`` are sorted by
    ascending percent change. When the pair already passes each list holds a
    single ``original`` entry and every ``best_*`` is ``None``.
    """

    foreground: RGB
    background: RGB
    ratio: float
    target_ratio: float
    foreground_suggestions: list[ColorSuggestion] = field(default_factory=list)
    background_suggestions: list[ColorSuggestion] = field(default_factory=list)
    tie_break: TieBreak = "foreground"

    @property
    def best_foreground(self) -> ColorSuggestion | None:
        return _first_change(self.foreground_suggestions)

    @property
    def best_background(self) -> ColorSuggestion | None:
        return _first_change(self.background_suggestions)

    @property
    def best_overall(self) -> tuple[Literal["foreground", "background"], ColorSuggestion] | None:
        """The side whose best fix changes least; equal changes follow ``tie_break``."""
        fg = self.best_foreground
        bg = self.best_background
        if fg is None and bg is None:
            return None
        if bg is None:
            return ("foreground", fg)
        if fg is None:
            return ("background", bg)
        if fg.percent_change == bg.percent_change:
            return (self.tie_break, fg if self.tie_break == "foreground" else bg)
        if fg.percent_change < bg.percent_change:
            return ("foreground", fg)
        return ("background", bg)


def _first_change(suggestions: list[ColorSuggestion]) -> ColorSuggestion | None:
    for suggestion in suggestions:
        if suggestion.adjustment != "original":
            return suggestion
    return None


def _make_suggestion(
    color: RGB, ratio: float, adjustment: Adjustment, percent_change: float
) -> ColorSuggestion:
    return ColorSuggestion(
        color=color,
        hex=rgb_to_hex(color),
        contrast_ratio=ratio,
        ratio_string=format_contrast_ratio(ratio),
        adjustment=adjustment,
        percent_change=percent_change,
    )


def _find_lightness_for_contrast(
    original: OKLCH,
    fixed_color: RGB,
    target_ratio: float,
    direction: Literal["lighter", "darker"],
) -> ColorSuggestion | None:
    """Binary search one direction; ``None`` if the target stays out of reach."""
    low, high = (original.l, 1.0) if direction == "lighter" else (0.0, original.l)

    iterations = 0
    while iterations < MAX_ITERATIONS and high - low > CONVERGENCE_WIDTH:
        mid = (low + high) / 2
        ratio = calculate_contrast_ratio(oklch_to_rgb(original.with_lightness(mid)), fixed_color)

        if direction == "lighter":
            if ratio >= target_ratio:
                high = mid
            else:
                low = mid
        else:
            if ratio >= target_ratio:
                low = mid
            else:
                high = mid
        iterations += 1

    final_l = high if direction == "lighter" else low
    final_rgb = oklch_to_rgb(original.with_lightness(final_l))
    final_ratio = calculate_contrast_ratio(final_rgb, fixed_color)
    if final_ratio < target_ratio:
        return None

    return _make_suggestion(final_rgb, final_ratio, direction, abs(final_l - original.l) * 100)


def find_minimum_adjustment(
    color_to_adjust: RGB, fixed_color: RGB, target_ratio: float
) -> list[ColorSuggestion]:
    """Suggest lighter and darker variants of ``color_to_adjust``.

    Returns a single ``original`` suggestion when the pair already meets
    ``target_ratio``, otherwise zero to two candidates sorted by the smallest
    change first.
    """
    original_ratio = calculate_contrast_ratio(color_to_adjust, fixed_color)
    if original_ratio >= target_ratio:
        return [_make_suggestion(color_to_adjust, original_ratio, "original", 0.0)]

    original = rgb_to_oklch(color_to_adjust)
    suggestions: list[ColorSuggestion] = []
    for direction in ("lighter", "darker"):
        suggestion = _find_lightness_for_contrast(original, fixed_color, target_ratio, direction)
        if suggestion is not None:
            suggestions.append(suggestion)

    suggestions.sort(key=lambda s: s.percent_change)
    return suggestions


def get_suggestions(
    foreground: RGB,
    background: RGB,
    level: Level = "AA",
    text_size: TextSize = "normal",
    tie_break: TieBreak = "foreground",
) -> SuggestionResult:
    """Find the smallest lightness fix for either side of a pair.

    Args:
        foreground: Text color.
        background: Background color.
        level: Target WCAG level, ``"AA"`` or ``"AAA"``.
        text_size: ``"normal"`` or ``"large"``.
        tie_break: Side reported by ``best_overall`` when both sides need
            exactly the same change.

    Returns:
        SuggestionResult: Both sides' candidates. Each suggested color, paired
        with the unchanged counterpart, meets the requested ratio.

    Raises:
        ValueError: For an unknown level, text size or tie-break.
    """
    if tie_break not in ("foreground", "background"):
        raise ValueError(f"Unknown tie-break side: {tie_break!r}")
    target_ratio = get_required_ratio(level, text_size)

    return SuggestionResult(
        foreground=foreground,
        background=background,
        ratio=calculate_contrast_ratio(foreground, background),
        target_ratio=target_ratio,
        foreground_suggestions=find_minimum_adjustment(foreground, background, target_ratio),
        background_suggestions=find_minimum_adjustment(background, foreground, target_ratio),
        tie_break=tie_break,
    )


def get_quick_suggestions(foreground: RGB, background: RGB) -> dict[str, SuggestionResult]:
    """Suggestions for the three targets people usually ask about."""
    return {
        "aa_large": get_suggestions(foreground, background, "AA", "large"),
        "aa": get_suggestions(foreground, background, "AA", "normal"),
        "aaa": get_suggestions(foreground, background, "AAA", "normal"),
    }


def suggest_accessible_variant(
    original_color: RGB,
    against_color: RGB,
    target_ratio: float = WCAG_THRESHOLDS["AA_NORMAL"],
) -> RGB:
    """Pick a same-hue color that passes, without a fine-grained search.

    Tries OKLCH lightness 0.1 through 0.9 and keeps the passing variant whose
    ratio is closest to the target. Falls back to black or white, whichever
    contrasts more, when no variant passes.
    """
    oklch = rgb_to_oklch(original_color)

    best_color: RGB | None = None
    closest = float("inf")
    for step in range(1, 10):
        candidate = oklch_to_rgb(oklch.with_lightness(step / 10))
        ratio = calculate_contrast_ratio(candidate, against_color)
        if ratio >= target_ratio and abs(ratio - target_ratio) < closest:
            closest = abs(ratio - target_ratio)
            best_color = candidate

    if best_color is not None:
        return best_color

    black_ratio = calculate_contrast_ratio(_BLACK, against_color)
    white_ratio = calculate_contrast_ratio(_WHITE, against_color)
    return _BLACK if black_ratio > white_ratio else _WHITE


def generate_accessible_palette(
    base_color: RGB, background_color: RGB, count: int = 5
) -> list[ColorSuggestion]:
    """Spread ``count`` lightness variants of ``base_color`` over 0.2 to 0.8.

    Variants are reported whether or not they pass; callers filter on
    ``contrast_ratio``.
    """
    if count < 2:
        raise ValueError(f"count must be at least 2, got {count}")

    base = rgb_to_oklch(base_color)
    palette: list[ColorSuggestion] = []
    for i in range(count):
        lightness = 0.2 + (i / (count - 1)) * 0.6
        rgb = oklch_to_rgb(base.with_lightness(lightness))
        ratio = calculate_contrast_ratio(rgb, background_color)

        if lightness > base.l:
            adjustment: Adjustment = "lighter"
        elif lightness < base.l:
            adjustment = "darker"
        else:
            adjustment = "original"
        palette.append(_make_suggestion(rgb, ratio, adjustment, abs(lightness - base.l) * 100))

    return palette
