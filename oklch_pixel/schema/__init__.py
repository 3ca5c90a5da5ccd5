# Copyright (c) 2026 oklch-pixel
# SPDX-License-Identifier: MIT

"""
Schema definitions for oklch-pixel.

All types in this module are immutable (frozen dataclasses).
A converted pixel is a fact about its input and cannot be altered.
"""

from oklch_pixel.schema.pixel import (
    DEFAULT_BIT_DEPTH,
    SUPPORTED_BIT_DEPTHS,
    ColorSpace,
    ConvertedPixel,
    DecodedImage,
    OKLCHColor,
    PixelImage,
)

__all__ = [
    # Bit depth
    "DEFAULT_BIT_DEPTH",
    "SUPPORTED_BIT_DEPTHS",
    # Input
    "OKLCHColor",
    # Output color space tag
    "ColorSpace",
    # Converter result
    "ConvertedPixel",
    # Image types
    "PixelImage",
    "DecodedImage",
]
