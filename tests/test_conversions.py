"""Tests for contrastlens.conversions and contrastlens.models."""

import colour
import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from contrastlens.color_utils import hex_to_rgb
from contrastlens.conversions import (
    get_relative_luminance,
    hsl_to_rgb,
    is_light_color,
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
from contrastlens.models import HSL, LCH, OKLCH, RGB, Lab

settings.register_profile("fast", max_examples=50, deadline=None)
settings.load_profile("fast")

rgb_strategy = st.builds(
    RGB,
    st.integers(min_value=0, max_value=255),
    st.integers(min_value=0, max_value=255),
    st.integers(min_value=0, max_value=255),
)


def assert_close_rgb(actual: RGB, expected: RGB, tolerance: int = 1) -> None:
    for a, e in zip(actual.as_tuple(), expected.as_tuple()):
        assert abs(a - e) <= tolerance, f"{actual} differs from {expected}"


class TestModels:
    """Test the value types."""

    def test_rgb_equality_is_componentwise(self):
        assert RGB(1, 2, 3) == RGB(1, 2, 3)
        assert RGB(1, 2, 3) != RGB(3, 2, 1)

    def test_rgb_is_immutable(self):
        color = RGB(1, 2, 3)
        with pytest.raises(AttributeError):
            color.r = 5  # type: ignore[misc]

    @pytest.mark.parametrize("channels", [(256, 0, 0), (-1, 0, 0), (0.5, 0, 0), (True, 0, 0)])
    def test_rgb_rejects_invalid_channels(self, channels):
        with pytest.raises(ValueError):
            RGB(*channels)

    def test_hue_wraps_on_construction(self):
        assert HSL(360, 50, 50).h == 0
        assert HSL(720, 50, 50) == HSL(0, 50, 50)
        assert HSL(-90, 50, 50).h == 270
        assert OKLCH(0.5, 0.1, 400).h == pytest.approx(40)
        assert LCH(50, 20, -30).h == pytest.approx(330)

    def test_with_lightness_keeps_hue_and_chroma(self):
        color = OKLCH(0.5, 0.1, 200).with_lightness(0.8)
        assert color == OKLCH(0.8, 0.1, 200)


class TestHex:
    def test_rgb_to_hex(self):
        assert rgb_to_hex(RGB(255, 0, 0)) == "#FF0000"
        assert rgb_to_hex(RGB(170, 187, 204)) == "#AABBCC"
        assert rgb_to_hex(RGB(15, 15, 15)) == "#0F0F0F"

    def test_hex_to_rgb(self):
        assert hex_to_rgb("#AABBCC") == RGB(170, 187, 204)
        assert hex_to_rgb("abc") == RGB(170, 187, 204)
        assert hex_to_rgb("#12345") is None

    @given(rgb_strategy)
    def test_hex_round_trip(self, rgb: RGB):
        assert hex_to_rgb(rgb_to_hex(rgb)) == rgb


class TestHsl:
    def test_pure_colors(self):
        assert rgb_to_hsl(RGB(255, 0, 0)) == HSL(0, 100, 50)
        hsl = rgb_to_hsl(RGB(0, 255, 0))
        assert (hsl.h, hsl.s, hsl.l) == pytest.approx((120, 100, 50))
        hsl = rgb_to_hsl(RGB(0, 0, 255))
        assert (hsl.h, hsl.s, hsl.l) == pytest.approx((240, 100, 50))

    def test_grayscale(self):
        gray = rgb_to_hsl(RGB(128, 128, 128))
        assert gray.h == 0
        assert gray.s == 0
        assert gray.l == pytest.approx(50, abs=0.5)
        assert rgb_to_hsl(RGB(255, 255, 255)) == HSL(0, 0, 100)
        assert rgb_to_hsl(RGB(0, 0, 0)) == HSL(0, 0, 0)

    def test_hsl_to_rgb(self):
        assert hsl_to_rgb(HSL(0, 100, 50)) == RGB(255, 0, 0)
        assert hsl_to_rgb(HSL(120, 100, 50)) == RGB(0, 255, 0)
        assert hsl_to_rgb(HSL(240, 100, 50)) == RGB(0, 0, 255)

    def test_zero_saturation_ignores_hue(self):
        assert hsl_to_rgb(HSL(0, 0, 50)) == RGB(128, 128, 128)
        assert hsl_to_rgb(HSL(180, 0, 50)) == RGB(128, 128, 128)
        assert hsl_to_rgb(HSL(180, 0, 100)) == RGB(255, 255, 255)

    @given(rgb_strategy)
    def test_round_trip(self, rgb: RGB):
        assert_close_rgb(hsl_to_rgb(rgb_to_hsl(rgb)), rgb)


class TestOklch:
    def test_black_and_white(self):
        assert rgb_to_oklch(RGB(0, 0, 0)).l == pytest.approx(0, abs=0.01)
        assert rgb_to_oklch(RGB(255, 255, 255)).l == pytest.approx(1, abs=0.01)

    def test_known_red(self):
        red = rgb_to_oklch(RGB(255, 0, 0))
        assert red.l == pytest.approx(0.628, abs=0.001)
        assert red.c == pytest.approx(0.2577, abs=0.001)
        assert red.h == pytest.approx(29.23, abs=0.1)

    def test_grays_have_no_chroma(self):
        assert rgb_to_oklch(RGB(128, 128, 128)).c == pytest.approx(0, abs=1e-6)

    def test_out_of_gamut_is_clamped(self):
        result = oklch_to_rgb(OKLCH(0.9, 0.4, 30))
        assert all(0 <= c <= 255 for c in result.as_tuple())
        assert oklch_to_rgb(OKLCH(1.5, 0, 0)) == RGB(255, 255, 255)

    @pytest.mark.parametrize(
        "rgb", [RGB(255, 0, 0), RGB(0, 255, 0), RGB(0, 0, 255), RGB(100, 150, 200)]
    )
    def test_known_round_trips(self, rgb: RGB):
        assert_close_rgb(oklch_to_rgb(rgb_to_oklch(rgb)), rgb)

    @given(rgb_strategy)
    def test_round_trip(self, rgb: RGB):
        assert_close_rgb(oklch_to_rgb(rgb_to_oklch(rgb)), rgb)

    def test_lightness_is_monotonic_for_grays(self):
        lightness = [rgb_to_oklch(RGB(v, v, v)).l for v in range(0, 256, 15)]
        assert lightness == sorted(lightness)

    @pytest.mark.parametrize("value", [10, 64, 128, 200])
    def test_gray_lightness_is_cube_root_of_linear_light(self, value: int):
        expected = np.cbrt(colour.models.eotf_sRGB(value / 255))
        assert rgb_to_oklch(RGB(value, value, value)).l == pytest.approx(expected, rel=1e-6)


class TestLabLch:
    def test_white_is_lightness_100(self):
        lab = rgb_to_lab(RGB(255, 255, 255))
        assert lab.l == pytest.approx(100, abs=0.01)
        assert lab.a == pytest.approx(0, abs=0.01)
        assert lab.b == pytest.approx(0, abs=0.01)

    def test_black_is_lightness_0(self):
        assert rgb_to_lab(RGB(0, 0, 0)).l == pytest.approx(0, abs=0.01)

    @pytest.mark.parametrize(
        "rgb, expected",
        [
            (RGB(0, 0, 255), (29.57, 68.29, -112.03)),
            (RGB(0, 255, 0), (87.82, -79.27, 80.99)),
        ],
    )
    def test_matches_css_d50_reference(self, rgb: RGB, expected):
        lab = rgb_to_lab(rgb)
        assert (lab.l, lab.a, lab.b) == pytest.approx(expected, abs=0.2)

    def test_matches_bradford_adapted_colour_pipeline(self):
        d50 = colour.CCS_ILLUMINANTS["CIE 1931 2 Degree Standard Observer"]["D50"]
        xyz = colour.sRGB_to_XYZ(
            np.array([100, 150, 200]) / 255,
            illuminant=d50,
            chromatic_adaptation_transform="Bradford",
        )
        expected = colour.XYZ_to_Lab(xyz, illuminant=d50)
        lab = rgb_to_lab(RGB(100, 150, 200))
        assert (lab.l, lab.a, lab.b) == pytest.approx(tuple(expected))

    def test_known_red(self):
        lab = rgb_to_lab(RGB(255, 0, 0))
        assert lab.l == pytest.approx(54.29, abs=0.1)
        assert lab.a == pytest.approx(80.8, abs=0.2)
        assert lab.b == pytest.approx(69.9, abs=0.2)

    def test_lch_is_polar_lab(self):
        lab = rgb_to_lab(RGB(100, 150, 200))
        lch = rgb_to_lch(RGB(100, 150, 200))
        assert lch.l == pytest.approx(lab.l)
        assert lch.c == pytest.approx((lab.a**2 + lab.b**2) ** 0.5)

    def test_inverse_of_extremes(self):
        assert lab_to_rgb(Lab(100, 0, 0)) == RGB(255, 255, 255)
        assert lab_to_rgb(Lab(0, 0, 0)) == RGB(0, 0, 0)
        assert lch_to_rgb(LCH(0, 0, 0)) == RGB(0, 0, 0)

    @given(rgb_strategy)
    def test_lab_round_trip(self, rgb: RGB):
        assert_close_rgb(lab_to_rgb(rgb_to_lab(rgb)), rgb)

    @given(rgb_strategy)
    def test_lch_round_trip(self, rgb: RGB):
        assert_close_rgb(lch_to_rgb(rgb_to_lch(rgb)), rgb)


class TestRelativeLuminance:
    def test_extremes(self):
        assert get_relative_luminance(RGB(255, 255, 255)) == pytest.approx(1.0)
        assert get_relative_luminance(RGB(0, 0, 0)) == 0.0

    def test_primary_coefficients(self):
        assert get_relative_luminance(RGB(255, 0, 0)) == pytest.approx(0.2126)
        assert get_relative_luminance(RGB(0, 255, 0)) == pytest.approx(0.7152)
        assert get_relative_luminance(RGB(0, 0, 255)) == pytest.approx(0.0722)

    @given(st.integers(min_value=1, max_value=255))
    def test_green_dominates(self, value: int):
        green = get_relative_luminance(RGB(0, value, 0))
        assert green > get_relative_luminance(RGB(value, 0, 0))
        assert green > get_relative_luminance(RGB(0, 0, value))

    def test_linear_segment(self):
        # 10/255 is below the 0.03928 break point
        expected = 0.2126 * (10 / 255) / 12.92
        assert get_relative_luminance(RGB(10, 0, 0)) == pytest.approx(expected)

    def test_power_segment(self):
        expected = 0.2126 * (((128 / 255) + 0.055) / 1.055) ** 2.4
        assert get_relative_luminance(RGB(128, 0, 0)) == pytest.approx(expected)


class TestIsLightColor:
    @pytest.mark.parametrize("rgb", [RGB(255, 255, 255), RGB(255, 255, 0), RGB(200, 200, 200)])
    def test_light(self, rgb: RGB):
        assert is_light_color(rgb)

    @pytest.mark.parametrize("rgb", [RGB(0, 0, 0), RGB(0, 0, 255), RGB(50, 50, 50)])
    def test_dark(self, rgb: RGB):
        assert not is_light_color(rgb)


def test_quantize_channel_rounds_half_up_and_clamps():
    assert quantize_channel(127.5) == 128
    assert quantize_channel(127.49) == 127
    assert quantize_channel(-3.0) == 0
    assert quantize_channel(300.0) == 255
