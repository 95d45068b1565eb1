"""Test configuration and fixtures for contrastlens tests."""

import pytest

from contrastlens.models import RGB


@pytest.fixture
def black() -> RGB:
    return RGB(0, 0, 0)


@pytest.fixture
def white() -> RGB:
    return RGB(255, 255, 255)


@pytest.fixture
def sample_colors() -> list[RGB]:
    """Provide sample RGB colors for testing."""
    return [
        RGB(0, 0, 0),  # Black
        RGB(255, 255, 255),  # White
        RGB(255, 0, 0),  # Red
        RGB(0, 255, 0),  # Green
        RGB(0, 0, 255),  # Blue
        RGB(128, 128, 128),  # Gray
        RGB(255, 255, 0),  # Yellow
        RGB(255, 0, 255),  # Magenta
        RGB(0, 255, 255),  # Cyan
        RGB(100, 150, 200),  # Steel blue
    ]


@pytest.fixture
def known_pairs() -> list[tuple[RGB, RGB, str]]:
    """Pairs on white with the score each should get."""
    white = RGB(255, 255, 255)
    return [
        (RGB(0, 0, 0), white, "aaa"),  # 21:1
        (RGB(96, 96, 96), white, "aa"),  # ~6.3:1
        (RGB(119, 119, 119), white, "aa-large"),  # ~4.48:1
        (RGB(200, 200, 200), RGB(220, 220, 220), "fail"),  # ~1.2:1
    ]


@pytest.fixture
def invalid_color_formats() -> list[str]:
    """Provide examples of strings that are not colors."""
    return [
        "",
        "   ",
        "invalid",
        "not-a-color",
        "#GGG",
        "#GG0000",
        "#12345",
        "#1234567",
        "rgb()",
        "rgb(256, 0, 0)",
        "rgb(-1, 0, 0)",
        "rgb(255, 0)",
        "rgb(red, green, blue)",
        "rgba(0, 0, 0, 1.5)",
        "rgb(0 0 0 / 150%)",
        "RGB(100, 150, 200)",
        "HSL(0, 100%, 50%)",
        "hsl()",
        "hsl(180, 101%, 50%)",
        "hsl(180, 50%, 101%)",
        "hsl(180, 50, 50)",
        "color(srgb 1.5 0 0)",
        "color(display-p3 1 0 0)",
        "oklch(1.5 0.1 120)",
        "oklch(0.5 -0.1 120)",
        "lab(120% 0 0)",
        "lch(50% -10 120)",
    ]
