"""Alpha compositing of semi-transparent colors onto opaque backgrounds."""

from collections.abc import Iterable

from .conversions import quantize_channel
from .models import RGB

__all__ = ["blend_colors", "composite_layers"]


def blend_colors(foreground: RGB, background: RGB, alpha: float) -> RGB:
    """Composite ``foreground`` at opacity ``alpha`` over an opaque background.

    Each channel is ``alpha * fg + (1 - alpha) * bg`` rounded to the nearest
    integer, so ``alpha == 1`` returns the foreground and ``alpha == 0`` the
    background unchanged.

    Raises:
        ValueError: If ``alpha`` is outside [0, 1].

    Examples:
        >>> blend_colors(RGB(255, 0, 0), RGB(0, 0, 255), 0.5)
        RGB(r=128, g=0, b=128)
    """
    if not 0.0 <= alpha <= 1.0:
        raise ValueError(f"alpha must be in [0, 1], got {alpha}")
    if alpha == 1.0:
        return foreground
    if alpha == 0.0:
        return background

    return RGB(
        *(
            quantize_channel(alpha * fg + (1.0 - alpha) * bg)
            for fg, bg in zip(foreground.as_tuple(), background.as_tuple())
        )
    )


def composite_layers(layers: Iterable[tuple[RGB, float]], base: RGB) -> RGB:
    """Flatten a stack of background layers into one opaque color.

    ``layers`` is ordered innermost first, the way a DOM walker meets them
    going up the ancestor chain. Compositing starts from ``base`` (the page
    canvas) and works inward, each result becoming the background of the
    next layer.
    """
    result = base
    for color, alpha in reversed(list(layers)):
        result = blend_colors(color, result, alpha)
    return result
