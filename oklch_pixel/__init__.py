# Copyright (c) 2026 oklch-pixel
# SPDX-License-Identifier: MIT

"""
oklch-pixel -- Single-pixel wide-gamut images from OKLCH colors.

Converts an OKLCH color to sRGB when it fits, Display P3 when it does
not, and writes it as a 1×1 PNG tagged with that color space. Useful for
flat wallpapers in colors that an 8-bit sRGB hex code cannot express.

Quick start::

    from oklch_pixel import OKLCHColor, convert_color, write_image

    pixel = convert_color(OKLCHColor(0.7, 0.25, 145))
    pixel.color_space   # ColorSpace.DISPLAY_P3
    write_image("green.png", pixel.rgb, None, pixel.color_space)
"""

from __future__ import annotations

__version__ = "1.0.0"

from oklch_pixel.convert import convert, convert_color
from oklch_pixel.image import default_output_name, read_image, write_image
from oklch_pixel.schema import (
    ColorSpace,
    ConvertedPixel,
    DecodedImage,
    OKLCHColor,
    PixelImage,
)

__all__ = [
    # Core API
    "convert",
    "convert_color",
    "write_image",
    "read_image",
    "default_output_name",
    # Types
    "OKLCHColor",
    "ColorSpace",
    "ConvertedPixel",
    "PixelImage",
    "DecodedImage",
    # Version
    "__version__",
]
