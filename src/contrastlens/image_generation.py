"""PNG swatches of color pairs for contrastlens."""

import math

import click
import matplotlib.patches as patches
import matplotlib.pyplot as plt

from .models import RGB
from .suggestions import SuggestionResult

__all__ = ["create_pair_grid", "create_suggestion_swatch"]


def create_pair_grid(
    pairs: list[tuple[RGB, RGB]],
    columns: int,
    output_file: str,
    tile_size: int = 64,
    tile_margin: int = 8,
    page_color: RGB = RGB(255, 255, 255),
) -> None:
    """Draw each (foreground, background) pair as a tile with sample text."""
    n_pairs = len(pairs)
    if n_pairs == 0:
        raise ValueError("No color pairs provided")

    rows = math.ceil(n_pairs / columns)

    w = (columns * (tile_size + tile_margin)) + tile_margin
    # Extra bottom margin
    h = (rows * (tile_size + tile_margin)) + tile_margin + tile_margin

    fig, ax = plt.subplots(figsize=(w / 100, h / 100), dpi=100)  # type: ignore[misc]

    fig.patch.set_facecolor(page_color.normalized())
    ax.set_facecolor(page_color.normalized())

    ax.set_xlim(0, w)
    ax.set_ylim(0, h)
    ax.axis("off")

    for i, (foreground, background) in enumerate(pairs):
        row = i // columns
        col = i % columns

        # Flip y so the first pair lands top-left
        x = tile_margin + col * (tile_size + tile_margin)
        y = h - tile_margin - (row + 1) * (tile_size + tile_margin)

        rect = patches.Rectangle(
            (x, y), tile_size, tile_size, linewidth=0, facecolor=background.normalized()
        )
        ax.add_patch(rect)
        ax.text(
            x + tile_size / 2,
            y + tile_size / 2,
            "Aa",
            color=foreground.normalized(),
            fontsize=tile_size * 0.3,
            ha="center",
            va="center",
        )

    plt.tight_layout()
    plt.savefig(output_file, bbox_inches="tight", pad_inches=0, dpi=100)  # type: ignore[misc]
    plt.close()

    click.echo(f"PNG swatch saved to: {output_file}")


def create_suggestion_swatch(result: SuggestionResult, output_file: str, tile_size: int = 64) -> None:
    """Render the original pair next to its best foreground and background fixes."""
    pairs = [(result.foreground, result.background)]
    if result.best_foreground is not None:
        pairs.append((result.best_foreground.color, result.background))
    if result.best_background is not None:
        pairs.append((result.foreground, result.best_background.color))

    create_pair_grid(pairs, len(pairs), output_file, tile_size=tile_size)
