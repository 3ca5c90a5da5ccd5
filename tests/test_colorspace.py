# Copyright (c) 2026 oklch-pixel
# SPDX-License-Identifier: MIT

"""Tests for color space conversions (OKLCH ↔ OKLab ↔ LMS ↔ linear RGB)."""

import numpy as np
import pytest

from oklch_pixel.convert import colorspace
from oklch_pixel.convert.colorspace import (
    GAMUT_EPSILON,
    srgb_to_linear,
    linear_to_srgb,
    oklab_to_oklch,
    oklch_to_oklab,
    oklab_to_lms,
    lms_to_linear_srgb,
    lms_to_linear_p3,
    oklab_to_linear_srgb,
    linear_srgb_to_oklab,
    in_gamut,
    quantize,
    oklch_to_hex,
    hex_to_oklch,
)


class TestTransferFunction:
    """sRGB / Display P3 transfer curve."""

    def test_roundtrip_mid_gray(self):
        encoded = np.array([0.5, 0.5, 0.5])
        recovered = linear_to_srgb(srgb_to_linear(encoded))
        np.testing.assert_allclose(recovered, encoded, atol=1e-10)

    def test_endpoints_fixed(self):
        np.testing.assert_allclose(linear_to_srgb(np.array([0.0, 1.0])), [0.0, 1.0], atol=1e-12)

    def test_linear_segment(self):
        """Values below 0.0031308 use the linear segment."""
        val = 0.002
        assert float(linear_to_srgb(np.array([val]))[0]) == pytest.approx(val * 12.92, abs=1e-12)

    def test_negative_stays_finite(self):
        """Out-of-gamut negatives are mirrored, not NaN."""
        encoded = linear_to_srgb(np.array([-0.25, 0.25]))
        assert np.all(np.isfinite(encoded))
        assert encoded[0] == pytest.approx(-encoded[1])

    def test_no_clipping_above_one(self):
        assert float(linear_to_srgb(np.array([2.0]))[0]) > 1.0

    def test_batch_roundtrip(self):
        encoded = np.random.RandomState(42).random((100, 3))
        recovered = linear_to_srgb(srgb_to_linear(encoded))
        np.testing.assert_allclose(recovered, encoded, atol=1e-10)


# CSS Color 4 conversion matrices, as the exact rationals it publishes
_CSS_LINEAR_SRGB_TO_XYZ = np.array([
    [506752 / 1228815, 87881 / 245763, 12673 / 70218],
    [87098 / 409605, 175762 / 245763, 12673 / 175545],
    [7918 / 409605, 87881 / 737289, 1001167 / 1053270],
])

_CSS_XYZ_TO_LINEAR_P3 = np.array([
    [446124 / 178915, -333277 / 357830, -72051 / 178915],
    [-14852 / 17905, 63121 / 35810, 423 / 17905],
    [11844 / 330415, -50337 / 660830, 316169 / 330415],
])

_CSS_LINEAR_P3_TO_XYZ = np.array([
    [608311 / 1250200, 189793 / 714400, 198249 / 1000160],
    [35783 / 156275, 247089 / 357200, 198249 / 2500400],
    [0.0, 32229 / 714400, 5220557 / 5000800],
])

# Ottosson's published LMS -> linear sRGB
_OKLAB_LMS_TO_LINEAR_SRGB = np.array([
    [4.0767416621, -3.3077115913, 0.2309699292],
    [-1.2684380046, 2.6097574011, -0.3413193965],
    [-0.0041960863, -0.7034186147, 1.7076147010],
])


class TestMatrices:
    """Fixed conversion matrices against their published values."""

    def test_srgb_lms_pair_inverse(self):
        product = colorspace._LINEAR_SRGB_TO_LMS @ colorspace._LMS_TO_LINEAR_SRGB
        np.testing.assert_allclose(product, np.eye(3), atol=1e-6)

    def test_oklab_lms_pair_inverse(self):
        product = colorspace._LMS_TO_OKLAB @ colorspace._OKLAB_TO_LMS
        np.testing.assert_allclose(product, np.eye(3), atol=1e-6)

    def test_lms_to_srgb_published(self):
        np.testing.assert_array_equal(colorspace._LMS_TO_LINEAR_SRGB, _OKLAB_LMS_TO_LINEAR_SRGB)

    def test_srgb_to_xyz_matches_css(self):
        np.testing.assert_allclose(
            colorspace._LINEAR_SRGB_TO_XYZ, _CSS_LINEAR_SRGB_TO_XYZ, rtol=0, atol=1e-12
        )

    def test_xyz_to_p3_matches_css(self):
        np.testing.assert_allclose(
            colorspace._XYZ_TO_LINEAR_P3, _CSS_XYZ_TO_LINEAR_P3, rtol=0, atol=1e-12
        )

    def test_lms_to_p3_matches_css(self):
        """Composed LMS -> P3 agrees element by element with the CSS rationals."""
        expected = _CSS_XYZ_TO_LINEAR_P3 @ _CSS_LINEAR_SRGB_TO_XYZ @ _OKLAB_LMS_TO_LINEAR_SRGB
        np.testing.assert_allclose(colorspace._LMS_TO_LINEAR_P3, expected, rtol=0, atol=1e-9)

    def test_lms_to_p3_back_to_xyz(self):
        """P3 -> XYZ undoes the P3 leg, leaving LMS -> sRGB -> XYZ."""
        via_p3 = _CSS_LINEAR_P3_TO_XYZ @ colorspace._LMS_TO_LINEAR_P3
        via_srgb = _CSS_LINEAR_SRGB_TO_XYZ @ _OKLAB_LMS_TO_LINEAR_SRGB
        np.testing.assert_allclose(via_p3, via_srgb, rtol=0, atol=1e-9)

    def test_matrices_read_only(self):
        with pytest.raises(ValueError):
            colorspace._LMS_TO_LINEAR_P3[0, 0] = 0.0


class TestOKLCHRoundtrip:
    """OKLab ↔ OKLCH conversions must roundtrip accurately."""

    def test_roundtrip_chromatic(self):
        lab = np.array([0.7, 0.1, -0.05])
        recovered = oklch_to_oklab(oklab_to_oklch(lab))
        np.testing.assert_allclose(recovered, lab, atol=1e-10)

    def test_polar_to_cartesian(self):
        lab = oklch_to_oklab(np.array([0.5, 0.2, 90.0]))
        np.testing.assert_allclose(lab, [0.5, 0.0, 0.2], atol=1e-12)

    def test_hue_wraps(self):
        a = oklch_to_oklab(np.array([0.5, 0.1, 30.0]))
        b = oklch_to_oklab(np.array([0.5, 0.1, 390.0]))
        c = oklch_to_oklab(np.array([0.5, 0.1, -330.0]))
        np.testing.assert_allclose(a, b, atol=1e-12)
        np.testing.assert_allclose(a, c, atol=1e-12)

    def test_negative_chroma_flips_hue(self):
        a = oklch_to_oklab(np.array([0.5, -0.1, 30.0]))
        b = oklch_to_oklab(np.array([0.5, 0.1, 210.0]))
        np.testing.assert_allclose(a, b, atol=1e-12)

    def test_hue_range(self):
        """Hue must be in [0, 360)."""
        lch = oklab_to_oklch(np.array([0.5, -0.1, 0.1]))
        assert 0.0 <= lch[2] < 360.0


class TestLMS:
    """OKLab → LMS → linear RGB."""

    def test_white(self):
        lms = oklab_to_lms(np.array([1.0, 0.0, 0.0]))
        np.testing.assert_allclose(lms, [1.0, 1.0, 1.0], atol=1e-12)
        np.testing.assert_allclose(lms_to_linear_srgb(lms), [1.0, 1.0, 1.0], atol=1e-8)
        np.testing.assert_allclose(lms_to_linear_p3(lms), [1.0, 1.0, 1.0], atol=1e-6)

    def test_cubes_intermediate(self):
        lms = oklab_to_lms(np.array([0.5, 0.0, 0.0]))
        np.testing.assert_allclose(lms, [0.125, 0.125, 0.125], atol=1e-12)

    def test_neutral_stays_neutral_in_p3(self):
        lms = oklab_to_lms(np.array([0.6, 0.0, 0.0]))
        p3 = lms_to_linear_p3(lms)
        assert np.ptp(p3) < 1e-6

    def test_srgb_red_inside_p3(self):
        """sRGB red is well inside Display P3."""
        lab = linear_srgb_to_oklab(np.array([1.0, 0.0, 0.0]))
        p3 = lms_to_linear_p3(oklab_to_lms(lab))
        # Published value: color(display-p3 0.9175 0.2003 0.1387), linear
        expected = srgb_to_linear(np.array([0.9175, 0.2003, 0.1387]))
        np.testing.assert_allclose(p3, expected, atol=5e-4)
        assert in_gamut(p3)

    def test_oklab_roundtrip(self):
        rgb = np.random.RandomState(42).random((50, 3))
        recovered = oklab_to_linear_srgb(linear_srgb_to_oklab(rgb))
        # The published 10-digit matrix pairs are inverses to ~1e-7
        np.testing.assert_allclose(recovered, rgb, atol=1e-6)

    def test_monotonic_chroma(self):
        """Raising chroma at fixed L, H moves LMS away from the neutral axis."""
        chromas = np.linspace(0.0, 0.25, 26)
        for hue in (0.0, 29.23, 90.0, 142.5, 180.0, 264.05, 270.0):
            lch = np.stack(
                [np.full_like(chromas, 0.7), chromas, np.full_like(chromas, hue)],
                axis=-1,
            )
            lms = oklab_to_lms(oklch_to_oklab(lch))
            distance = np.linalg.norm(lms - lms.mean(axis=-1, keepdims=True), axis=-1)
            assert distance[0] == pytest.approx(0.0, abs=1e-12)
            assert np.all(np.diff(distance) > 0), f"not monotonic at hue {hue}"


class TestGamutAndQuantize:

    def test_in_gamut_bounds(self):
        assert in_gamut(np.array([0.0, 0.5, 1.0]))
        assert in_gamut(np.array([-GAMUT_EPSILON / 2, 0.5, 1.0 + GAMUT_EPSILON / 2]))
        assert not in_gamut(np.array([-0.01, 0.5, 0.5]))
        assert not in_gamut(np.array([0.5, 1.01, 0.5]))

    def test_nan_never_in_gamut(self):
        assert not in_gamut(np.array([np.nan, 0.5, 0.5]))

    def test_quantize_8bit(self):
        assert quantize(np.array([0.0, 0.5, 1.0]), 8).tolist() == [0, 128, 255]

    def test_quantize_16bit(self):
        assert quantize(np.array([0.0, 0.5, 1.0]), 16).tolist() == [0, 32768, 65535]

    def test_quantize_clamps(self):
        assert quantize(np.array([-3.0, 1.7, 0.25]), 8).tolist() == [0, 255, 64]

    def test_quantize_non_finite(self):
        assert quantize(np.array([np.nan, np.inf, -np.inf]), 8).tolist() == [0, 255, 0]

    def test_quantize_rejects_bit_depth(self):
        with pytest.raises(ValueError, match="Bit depth"):
            quantize(np.array([0.5, 0.5, 0.5]), 12)


# Published OKLCH values for sRGB colors (CSS Color 4 / oklch.com)
REFERENCE_COLORS = [
    ("#008080", (0.5431, 0.0927, 194.77)),
    ("#FF0000", (0.6279, 0.2577, 29.23)),
    ("#00FF00", (0.8664, 0.2948, 142.50)),
    ("#0000FF", (0.4520, 0.3132, 264.05)),
    ("#FFFFFF", (1.0, 0.0, 0.0)),
    ("#000000", (0.0, 0.0, 0.0)),
]


def _hex_channels(hex_color):
    hex_color = hex_color.lstrip("#")
    return [int(hex_color[i:i + 2], 16) for i in (0, 2, 4)]


class TestHexConversion:
    """Hex ↔ OKLCH against published reference values."""

    @pytest.mark.parametrize("hex_color,lch", REFERENCE_COLORS)
    def test_oklch_to_hex_reference(self, hex_color, lch):
        got = _hex_channels(oklch_to_hex(*lch))
        want = _hex_channels(hex_color)
        assert all(abs(g - w) <= 1 for g, w in zip(got, want)), (got, want)

    @pytest.mark.parametrize("hex_color,lch", REFERENCE_COLORS[:4])
    def test_hex_to_oklch_reference(self, hex_color, lch):
        L, C, H = hex_to_oklch(hex_color)
        assert L == pytest.approx(lch[0], abs=1e-3)
        assert C == pytest.approx(lch[1], abs=1e-3)
        assert H == pytest.approx(lch[2], abs=0.05)

    def test_hex_format(self):
        hex_val = oklch_to_hex(0.6, 0.2, 30.0)
        assert hex_val.startswith("#")
        assert len(hex_val) == 7

    def test_hex_without_hash(self):
        assert hex_to_oklch("008080") == hex_to_oklch("#008080")

    def test_bad_hex(self):
        with pytest.raises(ValueError):
            hex_to_oklch("#12345")
