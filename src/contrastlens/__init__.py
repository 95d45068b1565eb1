"""contrastlens - WCAG contrast checking, color parsing and accessible color suggestions"""

__version__ = "0.1.0"

from .color_utils import (
    ParsedColor,
    format_color_output,
    hex_to_rgb,
    parse_color,
    parse_color_strict,
    parse_color_with_alpha,
)
from .compositing import blend_colors, composite_layers
from .contrast import (
    WCAG_THRESHOLDS,
    ContrastResult,
    analyze_contrast,
    calculate_contrast_ratio,
    get_contrast_gap,
    get_full_compliance,
    get_required_ratio,
    is_large_text,
    passes_wcag,
)
from .conversions import (
    get_relative_luminance,
    hsl_to_rgb,
    is_light_color,
    lab_to_rgb,
    lch_to_rgb,
    oklch_to_rgb,
    rgb_to_hex,
    rgb_to_hsl,
    rgb_to_lab,
    rgb_to_lch,
    rgb_to_oklch,
)
from .models import HSL, LCH, OKLCH, RGB, Lab
from .scanner import scan_elements, scan_stats
from .simulation import SimulationConfig, simulate_color
from .suggestions import (
    ColorSuggestion,
    SuggestionResult,
    generate_accessible_palette,
    get_quick_suggestions,
    get_suggestions,
    suggest_accessible_variant,
)

__all__ = [
    "RGB",
    "HSL",
    "OKLCH",
    "Lab",
    "LCH",
    "ParsedColor",
    "parse_color",
    "parse_color_strict",
    "parse_color_with_alpha",
    "format_color_output",
    "rgb_to_hex",
    "hex_to_rgb",
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
    "blend_colors",
    "composite_layers",
    "WCAG_THRESHOLDS",
    "ContrastResult",
    "calculate_contrast_ratio",
    "analyze_contrast",
    "passes_wcag",
    "get_required_ratio",
    "get_contrast_gap",
    "get_full_compliance",
    "is_large_text",
    "ColorSuggestion",
    "SuggestionResult",
    "get_suggestions",
    "get_quick_suggestions",
    "suggest_accessible_variant",
    "generate_accessible_palette",
    "SimulationConfig",
    "simulate_color",
    "scan_elements",
    "scan_stats",
]
