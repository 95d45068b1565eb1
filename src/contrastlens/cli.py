"""Command-line interface for contrastlens."""

import dataclasses
import json
import logging
import sys
from typing import IO, NoReturn

import click

from . import __version__
from .color_utils import format_color_output, parse_color_strict
from .config import Preferences, PreferencesError, load_preferences
from .contrast import analyze_contrast, get_contrast_gap, get_score_label
from .image_generation import create_suggestion_swatch
from .scanner import export_results, filter_results, scan_elements, scan_stats
from .simulation import DEFICIENCY_TYPES, SimulationConfig, simulate_color
from .suggestions import ColorSuggestion, generate_accessible_palette, get_suggestions

logger = logging.getLogger(__name__)

LEVEL_CHOICE = click.Choice(["AA", "AAA"], case_sensitive=False)
SIZE_CHOICE = click.Choice(["normal", "large"], case_sensitive=False)


def _mark(passed: bool) -> str:
    return "pass" if passed else "FAIL"


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _describe(suggestion: ColorSuggestion) -> str:
    return (
        f"{suggestion.hex}  {suggestion.ratio_string:>9}  "
        f"{suggestion.adjustment:<7}  {suggestion.percent_change:.1f}% change"
    )


@click.group()
@click.version_option(version=__version__, prog_name="contrastlens")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML preferences file (default level, text size, tie-break, canvas color)",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """Check color pairs against WCAG 2.2 contrast thresholds.

    Colors may be given as hex, rgb(), hsl(), color(srgb ...), oklch(),
    lab(), lch() or a CSS color name.

    Examples:

        contrastlens check "#767676" white

        contrastlens suggest "rgb(119 119 119)" "#FFFFFF" --level AAA

        contrastlens convert "oklch(0.63 0.26 29)"

        contrastlens scan elements.json --filter fail --export csv -o report.csv
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        ctx.obj = load_preferences(config_path)
    except PreferencesError as e:
        _fail(str(e))
    logger.debug("Using preferences: %s", ctx.obj)


@main.command()
@click.argument("foreground")
@click.argument("background")
@click.option("-l", "--level", type=LEVEL_CHOICE, default=None, help="Target WCAG level")
@click.option("-s", "--size", "text_size", type=SIZE_CHOICE, default=None, help="Text size")
@click.option("--json", "as_json", is_flag=True, help="Print the analysis as JSON")
@click.pass_obj
def check(
    prefs: Preferences,
    foreground: str,
    background: str,
    level: str | None,
    text_size: str | None,
    as_json: bool,
) -> None:
    """Analyze the contrast of FOREGROUND text on BACKGROUND."""
    level = level or prefs.default_level
    text_size = text_size or prefs.default_text_size
    try:
        fg = parse_color_strict(foreground)
        bg = parse_color_strict(background)
    except ValueError as e:
        _fail(str(e))

    result = analyze_contrast(fg, bg)
    if as_json:
        click.echo(json.dumps(dataclasses.asdict(result), indent=2))
        return

    click.echo(f"Foreground:     {result.foreground}")
    click.echo(f"Background:     {result.background}")
    click.echo(f"Contrast ratio: {result.ratio_string} ({get_score_label(result.score)})")
    click.echo()
    rows = [
        ("", "AA", "AAA"),
        ("Normal text", _mark(result.aa.normal_text), _mark(result.aaa.normal_text)),
        ("Large text", _mark(result.aa.large_text), _mark(result.aaa.large_text)),
        ("UI components", _mark(result.aa.ui_components), "-"),
    ]
    for label, aa, aaa in rows:
        click.echo(f"  {label:<14}  {aa:<5}  {aaa}")

    gap = get_contrast_gap(result.ratio, level, text_size)  # type: ignore[arg-type]
    if gap > 0:
        click.echo()
        click.echo(f"Needs {gap:.2f} more to reach {level} for {text_size} text.")


@main.command()
@click.argument("foreground")
@click.argument("background")
@click.option("-l", "--level", type=LEVEL_CHOICE, default=None, help="Target WCAG level")
@click.option("-s", "--size", "text_size", type=SIZE_CHOICE, default=None, help="Text size")
@click.option("--json", "as_json", is_flag=True, help="Print suggestions as JSON")
@click.option("-o", "--output", type=str, help="Also save a PNG swatch to this path")
@click.pass_obj
def suggest(
    prefs: Preferences,
    foreground: str,
    background: str,
    level: str | None,
    text_size: str | None,
    as_json: bool,
    output: str | None,
) -> None:
    """Suggest the smallest lightness change that makes the pair pass."""
    level = level or prefs.default_level
    text_size = text_size or prefs.default_text_size
    try:
        fg = parse_color_strict(foreground)
        bg = parse_color_strict(background)
    except ValueError as e:
        _fail(str(e))

    result = get_suggestions(fg, bg, level, text_size, prefs.tie_break)  # type: ignore[arg-type]
    best = result.best_overall

    if as_json:
        payload = dataclasses.asdict(result)
        payload["best_overall"] = (
            {"side": best[0], **dataclasses.asdict(best[1])} if best is not None else None
        )
        click.echo(json.dumps(payload, indent=2))
    else:
        click.echo(
            f"Current ratio {result.ratio:.2f}:1, target {result.target_ratio:.2f}:1 "
            f"({level} {text_size} text)"
        )
        if result.ratio >= result.target_ratio:
            click.echo("Already passes; no changes needed.")
        else:
            for side, suggestions in (
                ("Foreground", result.foreground_suggestions),
                ("Background", result.background_suggestions),
            ):
                click.echo()
                click.echo(f"{side}:")
                if not suggestions:
                    click.echo("  no lightness change reaches the target")
                for suggestion in suggestions:
                    click.echo(f"  {_describe(suggestion)}")

            click.echo()
            if best is None:
                click.echo("No single-side fix reaches the target.")
            else:
                click.echo(f"Recommended: change {best[0]} to {best[1].hex}")

    if output:
        try:
            create_suggestion_swatch(result, output)
        except (OSError, ValueError) as e:
            _fail(f"cannot create PNG: {e}")


@main.command()
@click.argument("color")
def convert(color: str) -> None:
    """Show COLOR in every supported notation."""
    try:
        rgb = parse_color_strict(color)
    except ValueError as e:
        _fail(str(e))

    for format_type in ("hex", "rgb", "hsl", "oklch", "lab", "lch"):
        click.echo(f"{format_type:<6} {format_color_output([rgb], format_type)[0]}")


@main.command()
@click.argument("color")
@click.option(
    "-t",
    "--type",
    "deficiency",
    type=click.Choice(DEFICIENCY_TYPES, case_sensitive=False),
    default="deuteranopia",
    help="Color vision deficiency to simulate (default: deuteranopia)",
)
@click.option(
    "--severity",
    type=click.FloatRange(0.0, 1.0),
    default=1.0,
    help="Severity for the -anomaly types (default: 1.0)",
)
def simulate(color: str, deficiency: str, severity: float) -> None:
    """Show how COLOR looks with a color vision deficiency."""
    try:
        rgb = parse_color_strict(color)
    except ValueError as e:
        _fail(str(e))

    simulated = simulate_color(rgb, SimulationConfig(deficiency, severity))  # type: ignore[arg-type]
    original_hex, simulated_hex = format_color_output([rgb, simulated])
    click.echo(f"{original_hex} -> {simulated_hex} ({deficiency})")


@main.command()
@click.argument("base")
@click.argument("background")
@click.option(
    "-n",
    "--number",
    type=click.IntRange(2, 20),
    default=5,
    help="Number of variants (default: 5)",
)
def palette(base: str, background: str, number: int) -> None:
    """List lightness variants of BASE with their contrast on BACKGROUND."""
    try:
        base_rgb = parse_color_strict(base)
        bg = parse_color_strict(background)
    except ValueError as e:
        _fail(str(e))

    for variant in generate_accessible_palette(base_rgb, bg, number):
        score = analyze_contrast(variant.color, bg).score
        click.echo(f"  {variant.hex}  {variant.ratio_string:>9}  {score}")


@main.command()
@click.argument("input_file", type=click.File("r"))
@click.option("-l", "--level", type=LEVEL_CHOICE, default=None, help="Target WCAG level")
@click.option(
    "--filter",
    "scan_filter",
    type=click.Choice(["all", "fail", "warning", "pass"], case_sensitive=False),
    default="all",
    help="Only report results in this bucket (default: all)",
)
@click.option(
    "--export",
    "export_format",
    type=click.Choice(["json", "csv"], case_sensitive=False),
    default=None,
    help="Print results as JSON or CSV instead of a summary",
)
@click.option("-o", "--output", type=str, help="Write the export to this file")
@click.pass_obj
def scan(
    prefs: Preferences,
    input_file: IO[str],
    level: str | None,
    scan_filter: str,
    export_format: str | None,
    output: str | None,
) -> None:
    """Analyze element samples collected from a page.

    INPUT_FILE is a JSON list of objects with element, selector, color,
    background_layers (innermost first), font_size and optionally text and
    font_weight. Use - to read from stdin.
    """
    level = level or prefs.default_level
    try:
        samples = json.load(input_file)
        if not isinstance(samples, list):
            raise ValueError("scan input must be a JSON list")
        results = scan_elements(samples, level, prefs.canvas_rgb)  # type: ignore[arg-type]
    except (KeyError, TypeError) as e:
        _fail(f"malformed element sample: {e}")
    except ValueError as e:
        _fail(str(e))

    selected = filter_results(results, scan_filter)  # type: ignore[arg-type]

    if export_format:
        exported = export_results(selected, export_format)  # type: ignore[arg-type]
        if output:
            try:
                with open(output, "w", encoding="utf-8") as fh:
                    fh.write(exported)
            except OSError as e:
                _fail(f"cannot write {output}: {e}")
            click.echo(f"{len(selected)} results written to: {output}")
        else:
            click.echo(exported, nl=False)
        return

    stats = scan_stats(results)
    click.echo(
        f"Scanned {stats['total']} elements: {stats['fail']} fail, "
        f"{stats['warning']} large text only, {stats['passed']} pass"
    )
    for result in selected:
        status = "pass" if result["passes"] else "FAIL"
        click.echo(
            f"  {status:<4}  {result['ratio']:>6.2f}:1  {result['foreground']} on "
            f"{result['background']}  {result['selector']}"
        )


if __name__ == "__main__":
    main()
