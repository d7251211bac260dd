"""Tests for the contrast ratio (chroma_contrast)."""

import pytest

from chroma_contrast import contrast_ratio, contrast_ratio_luminance
from chroma_hub import CIEXYZ, get_d65_ciexyz
from chroma_spaces import CIELUV, SRGB, DisplayP3


class TestContrastRatioLuminance:

    def test_identical(self):
        assert contrast_ratio_luminance(0.3, 0.3) == 1.0

    def test_white_on_black(self):
        assert contrast_ratio_luminance(1.0, 0.0) == 21.0

    def test_formula(self):
        assert contrast_ratio_luminance(0.5, 0.1) == pytest.approx(0.55 / 0.15)


class TestContrastRatio:

    def test_same_color(self):
        color = SRGB.from_hex("336699")
        assert contrast_ratio(color, color) == 1.0

    def test_reference_white_on_black(self):
        black = CIEXYZ(0.0, 0.0, 0.0)
        assert contrast_ratio(get_d65_ciexyz(), black) == 21.0

    def test_symmetric(self):
        a = SRGB.from_hex("996633")
        b = SRGB.from_hex("0000ff")
        assert contrast_ratio(a, b) == contrast_ratio(b, a)

    def test_known_pair(self):
        ratio = contrast_ratio(SRGB.from_hex("996633"), SRGB.from_hex("0000ff"))
        assert ratio == pytest.approx(1.7610, abs=1e-4)

    def test_never_below_one(self, device_batch):
        colors = [SRGB.from_vector3(rgb) for rgb in device_batch[:16]]
        for a, b in zip(colors, reversed(colors)):
            assert contrast_ratio(a, b) >= 1.0

    def test_mixed_spaces(self):
        srgb = SRGB.from_hex("996633")
        p3 = srgb.to_color(DisplayP3)
        luv = srgb.to_color(CIELUV)
        assert contrast_ratio(p3, SRGB.from_hex("0000ff")) == pytest.approx(1.7610, abs=1e-4)
        assert contrast_ratio(srgb, luv) == pytest.approx(1.0, abs=1e-9)
