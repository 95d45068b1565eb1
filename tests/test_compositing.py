"""Tests for contrastlens.compositing module."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from contrastlens.compositing import blend_colors, composite_layers
from contrastlens.models import RGB

rgb_strategy = st.builds(
    RGB,
    st.integers(min_value=0, max_value=255),
    st.integers(min_value=0, max_value=255),
    st.integers(min_value=0, max_value=255),
)


class TestBlendColors:
    """Test the blend_colors function."""

    def test_half_red_over_blue(self):
        assert blend_colors(RGB(255, 0, 0), RGB(0, 0, 255), 0.5) == RGB(128, 0, 128)

    def test_half_black_over_white(self, black, white):
        assert blend_colors(black, white, 0.5) == RGB(128, 128, 128)

    @given(rgb_strategy, rgb_strategy)
    def test_opaque_returns_foreground(self, fg: RGB, bg: RGB):
        assert blend_colors(fg, bg, 1.0) == fg

    @given(rgb_strategy, rgb_strategy)
    def test_transparent_returns_background(self, fg: RGB, bg: RGB):
        assert blend_colors(fg, bg, 0.0) == bg

    @given(rgb_strategy, rgb_strategy, st.floats(min_value=0.0, max_value=1.0))
    def test_channels_stay_between_inputs(self, fg: RGB, bg: RGB, alpha: float):
        result = blend_colors(fg, bg, alpha)
        for out, f, b in zip(result.as_tuple(), fg.as_tuple(), bg.as_tuple()):
            assert min(f, b) <= out <= max(f, b)

    @pytest.mark.parametrize("alpha", [-0.1, 1.01, 2.0])
    def test_alpha_out_of_range(self, black, white, alpha: float):
        with pytest.raises(ValueError, match="alpha must be in"):
            blend_colors(black, white, alpha)

    def test_quarter_alpha(self, black, white):
        # 0.75 * 255 = 191.25
        assert blend_colors(black, white, 0.25) == RGB(191, 191, 191)


class TestCompositeLayers:
    """Test the composite_layers function."""

    def test_no_layers_is_base(self, white):
        assert composite_layers([], white) == white

    def test_single_layer(self, black, white):
        assert composite_layers([(black, 0.5)], white) == RGB(128, 128, 128)

    def test_innermost_layer_applies_last(self, black, white):
        red = RGB(255, 0, 0)
        # black at 0.5 over white is (128, 128, 128); red at 0.5 over that
        result = composite_layers([(red, 0.5), (black, 0.5)], white)
        assert result == RGB(192, 64, 64)

    def test_opaque_layer_hides_everything_beneath(self, black, white):
        blue = RGB(0, 0, 255)
        assert composite_layers([(blue, 1.0), (black, 0.5)], white) == blue

    def test_transparent_layers_are_ignored(self, black, white):
        assert composite_layers([(black, 0.0), (black, 0.0)], white) == white

    def test_accepts_generators(self, black, white):
        layers = ((color, 0.5) for color in [black])
        assert composite_layers(layers, white) == RGB(128, 128, 128)
