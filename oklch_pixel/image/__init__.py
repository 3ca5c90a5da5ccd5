# Copyright (c) 2026 oklch-pixel
# SPDX-License-Identifier: MIT

"""
Single-pixel PNG output for oklch-pixel.

The writer knows nothing about color math: it takes integer samples and a
color space tag and produces a tagged 1×1 PNG.
"""

from oklch_pixel.image.png import encode_png
from oklch_pixel.image.writer import (
    default_output_name,
    read_image,
    save_image,
    write_image,
)

__all__ = [
    "write_image",
    "save_image",
    "read_image",
    "encode_png",
    "default_output_name",
]
