# Copyright (c) 2026 oklch-pixel
# SPDX-License-Identifier: MIT

"""
Color conversion core for oklch-pixel.

Pure, deterministic OKLCH → sRGB / Display P3 conversion.
"""

from oklch_pixel.convert.colorspace import GAMUT_EPSILON
from oklch_pixel.convert.pixel import convert, convert_color

__all__ = ["convert", "convert_color", "GAMUT_EPSILON"]
