# Copyright (c) 2026 oklch-pixel
# SPDX-License-Identifier: MIT

"""
OKLCH → pixel conversion.

This is the primary entry point of the converter. It picks the narrowest
output space that holds the color: sRGB when it fits, Display P3 otherwise.
Colors beyond Display P3 are clamped into it.
"""

from __future__ import annotations

import logging
from typing import Union

import numpy as np

from oklch_pixel.schema import ColorSpace, ConvertedPixel, OKLCHColor
from oklch_pixel.schema.pixel import DEFAULT_BIT_DEPTH, max_sample
from oklch_pixel.convert.colorspace import (
    in_gamut,
    linear_to_srgb,
    lms_to_linear_p3,
    lms_to_linear_srgb,
    oklab_to_lms,
    oklch_to_oklab,
    quantize,
)

logger = logging.getLogger(__name__)

RGBTriple = tuple[int, int, int]


def convert_color(
    color: OKLCHColor,
    *,
    bit_depth: int = DEFAULT_BIT_DEPTH,
) -> ConvertedPixel:
    """
    Convert an OKLCH color to a gamma-encoded pixel.

    Steps:
    1. OKLCH → OKLab → LMS (cubed)
    2. LMS → linear sRGB; if in gamut, encode as sRGB
    3. Otherwise LMS → linear Display P3 and encode as Display P3
    4. Apply the sRGB transfer curve, scale to bit_depth, round, clamp

    Never raises for numeric input: out-of-range or non-finite values
    are clamped into the chosen space. Non-finite intermediates never
    pass the gamut test, so they are tagged Display P3 and flagged
    clipped; see quantize() for how NaN is resolved.

    Args:
        color: Input color (not range-checked)
        bit_depth: 8 or 16

    Returns:
        ConvertedPixel with samples, chosen space and gamut flags

    Example:
        >>> convert_color(OKLCHColor(0.5431, 0.0927, 194.77)).hex
        '#008080'
    """
    max_sample(bit_depth)  # validates before any math

    with np.errstate(invalid="ignore", over="ignore"):
        lch = np.array([color.L, color.C, color.H], dtype=np.float64)
        lms = oklab_to_lms(oklch_to_oklab(lch))

        linear = lms_to_linear_srgb(lms)
        in_srgb = in_gamut(linear)
        if in_srgb:
            space = ColorSpace.SRGB
            clipped = False
        else:
            space = ColorSpace.DISPLAY_P3
            linear = lms_to_linear_p3(lms)
            clipped = not in_gamut(linear)

        encoded = linear_to_srgb(linear)

    r, g, b = quantize(encoded, bit_depth).tolist()

    logger.debug(
        "%s -> %s (%d, %d, %d) at %d-bit%s",
        color.to_css(),
        space.value,
        r, g, b,
        bit_depth,
        ", clipped" if clipped else "",
    )

    return ConvertedPixel(
        rgb=(r, g, b),
        color_space=space,
        bit_depth=bit_depth,
        in_srgb_gamut=in_srgb,
        clipped=clipped,
    )


def convert(
    L: Union[float, int],
    C: Union[float, int],
    H: Union[float, int],
    *,
    bit_depth: int = DEFAULT_BIT_DEPTH,
) -> tuple[RGBTriple, ColorSpace]:
    """
    Convert raw OKLCH components to (RGB samples, color space).

    Thin wrapper over convert_color() for callers that only need the
    triple and its tag.
    """
    pixel = convert_color(OKLCHColor(L=L, C=C, H=H), bit_depth=bit_depth)
    return pixel.rgb, pixel.color_space
