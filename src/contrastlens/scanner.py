"""Page scan aggregation.

A DOM walker outside this package collects one :class:`ElementSample` per
text element: the computed text color, the computed background colors met
while walking up the ancestor chain (innermost first), and font metrics.
This module turns those samples into contrast results, compositing any
semi-transparent layers first.
"""

import csv
import io
import json
import logging
from collections.abc import Iterable
from typing import Literal, NotRequired, TypedDict

from .color_utils import parse_color_with_alpha
from .compositing import blend_colors, composite_layers
from .contrast import analyze_contrast, get_required_ratio, is_large_text
from .models import RGB, Level

__all__ = [
    "ElementSample",
    "ScanResult",
    "ScanStats",
    "ScanFilter",
    "resolve_colors",
    "scan_element",
    "scan_elements",
    "filter_results",
    "scan_stats",
    "export_results",
]

logger = logging.getLogger(__name__)

ScanFilter = Literal["all", "fail", "warning", "pass"]

_WHITE = RGB(255, 255, 255)
_BOLD_KEYWORDS = {"bold", "bolder"}

_CSV_FIELDS = [
    "element",
    "selector",
    "text",
    "foreground",
    "background",
    "ratio",
    "score",
    "font_size",
    "font_weight",
    "is_large_text",
    "passes",
]


class ElementSample(TypedDict):
    element: str
    selector: str
    color: str
    background_layers: list[str]
    font_size: float
    text: NotRequired[str]
    font_weight: NotRequired[str]


class ScanResult(TypedDict):
    element: str
    selector: str
    text: str
    foreground: str
    background: str
    ratio: float
    score: str
    font_size: float
    font_weight: str
    is_large_text: bool
    passes: bool


class ScanStats(TypedDict):
    total: int
    fail: int
    warning: int
    passed: int


def _is_bold(font_weight: str) -> bool:
    weight = str(font_weight).strip().lower()
    if weight in _BOLD_KEYWORDS:
        return True
    try:
        return float(weight) >= 700
    except ValueError:
        return False


def resolve_colors(
    color: str, background_layers: Iterable[str], canvas: RGB = _WHITE
) -> tuple[RGB, RGB] | None:
    """Effective opaque (foreground, background) as a viewer sees them.

    Returns ``None`` if any color string cannot be parsed.
    """
    layers: list[tuple[RGB, float]] = []
    for layer in background_layers:
        parsed = parse_color_with_alpha(layer)
        if parsed is None:
            return None
        layers.append(parsed)

    text = parse_color_with_alpha(color)
    if text is None:
        return None

    background = composite_layers(layers, canvas)
    foreground = blend_colors(text[0], background, text[1])
    return foreground, background


def scan_element(
    sample: ElementSample, level: Level = "AA", canvas: RGB = _WHITE
) -> ScanResult | None:
    """Analyze one sample; ``None`` when its colors cannot be parsed."""
    resolved = resolve_colors(sample["color"], sample["background_layers"], canvas)
    if resolved is None:
        logger.debug("Skipping %s: unparseable color", sample.get("selector", "?"))
        return None

    foreground, background = resolved
    result = analyze_contrast(foreground, background)
    font_weight = str(sample.get("font_weight", "400"))
    large = is_large_text(float(sample["font_size"]), _is_bold(font_weight))

    return ScanResult(
        element=sample["element"],
        selector=sample["selector"],
        text=sample.get("text", ""),
        foreground=result.foreground,
        background=result.background,
        ratio=result.ratio,
        score=result.score,
        font_size=float(sample["font_size"]),
        font_weight=font_weight,
        is_large_text=large,
        passes=result.ratio >= get_required_ratio(level, "large" if large else "normal"),
    )


def scan_elements(
    samples: Iterable[ElementSample], level: Level = "AA", canvas: RGB = _WHITE
) -> list[ScanResult]:
    """Analyze every sample, skipping the ones with unparseable colors."""
    results: list[ScanResult] = []
    skipped = 0
    for sample in samples:
        result = scan_element(sample, level, canvas)
        if result is None:
            skipped += 1
        else:
            results.append(result)

    logger.info("Scanned %d elements, skipped %d", len(results), skipped)
    return results


def filter_results(results: list[ScanResult], scan_filter: ScanFilter = "all") -> list[ScanResult]:
    """Select results by score bucket.

    ``fail`` is score fail, ``warning`` is aa-large, ``pass`` is aa or aaa.
    """
    if scan_filter == "all":
        return list(results)
    if scan_filter == "fail":
        return [r for r in results if r["score"] == "fail"]
    if scan_filter == "warning":
        return [r for r in results if r["score"] == "aa-large"]
    if scan_filter == "pass":
        return [r for r in results if r["score"] in ("aa", "aaa")]
    raise ValueError(f"Unknown scan filter: {scan_filter!r}")


def scan_stats(results: list[ScanResult]) -> ScanStats:
    return ScanStats(
        total=len(results),
        fail=len(filter_results(results, "fail")),
        warning=len(filter_results(results, "warning")),
        passed=len(filter_results(results, "pass")),
    )


def export_results(results: list[ScanResult], format_type: Literal["json", "csv"] = "json") -> str:
    """Serialize results for download or piping."""
    if format_type == "json":
        return json.dumps(results, indent=2)
    if format_type == "csv":
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=_CSV_FIELDS, lineterminator="\n")
        writer.writeheader()
        for result in results:
            writer.writerow({**result, "ratio": f"{result['ratio']:.2f}"})
        return buffer.getvalue()
    raise ValueError(f"Unknown export format: {format_type!r}")
