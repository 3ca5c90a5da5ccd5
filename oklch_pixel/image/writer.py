# Copyright (c) 2026 oklch-pixel
# SPDX-License-Identifier: MIT

"""
Pixel image file I/O.

Writes are all-or-nothing: the PNG is written to a temporary file beside
the destination and renamed into place, so a failed write never leaves a
truncated image under the output name.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Sequence, Union

from PIL import Image

from oklch_pixel.schema import ColorSpace, DecodedImage, OKLCHColor, PixelImage
from oklch_pixel.schema.pixel import DEFAULT_BIT_DEPTH, format_component, max_sample
from oklch_pixel.image.png import encode_png, read_header

logger = logging.getLogger(__name__)

# U+2215 DIVISION SLASH stands in for "/", which cannot appear in a file name
_ALPHA_SEPARATOR = "∕"

# mkstemp creates 0600; images are published as 0644 regardless of umask
OUTPUT_MODE = 0o644


def default_output_name(color: OKLCHColor, alpha: Optional[float] = None) -> str:
    """
    File name derived from the input color.

    Examples:
        oklch(0.5431 0.0927 194.77).png
        oklch(0.7 0.2 30 ∕ 0.5).png
    """
    if alpha is None:
        return f"oklch({color.label}).png"
    return f"oklch({color.label} {_ALPHA_SEPARATOR} {format_component(alpha)}).png"


def save_image(path: Union[str, Path], image: PixelImage) -> Path:
    """
    Atomically write a PixelImage as PNG.

    Raises:
        OSError: If the file cannot be written. No partial file is left
            at path.
    """
    path = Path(path)
    data = encode_png(image)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
    )
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        os.chmod(tmp_name, OUTPUT_MODE)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise

    logger.info("wrote %s (%s, %d-bit)", path, image.color_space.value, image.bit_depth)
    return path


def write_image(
    path: Union[str, Path],
    rgb: Sequence[int],
    alpha: Optional[float],
    color_space: ColorSpace,
    *,
    bit_depth: int = DEFAULT_BIT_DEPTH,
) -> Path:
    """
    Write a single-pixel PNG tagged with its color space.

    Args:
        path: Destination file
        rgb: Integer samples (R, G, B) at bit_depth
        alpha: Opacity 0-1, or None for an RGB image
        color_space: Space the samples are encoded in
        bit_depth: 8 or 16

    Returns:
        The path written

    Raises:
        OSError: If the file cannot be written
        ValueError: If samples do not fit bit_depth
    """
    alpha_sample = None
    if alpha is not None:
        if not 0.0 <= alpha <= 1.0:
            raise ValueError(f"Alpha must be 0-1, got {alpha}")
        alpha_sample = int(round(alpha * max_sample(bit_depth)))

    image = PixelImage(
        rgb=tuple(rgb),
        color_space=color_space,
        alpha=alpha_sample,
        bit_depth=bit_depth,
    )
    return save_image(path, image)


def read_image(path: Union[str, Path]) -> DecodedImage:
    """
    Read back the top-left pixel of a PNG and its color space tag.

    Pixel values come from Pillow at 8 bits per channel; bit depth and
    tag are taken from the PNG chunks, which Pillow does not expose.

    Raises:
        ValueError: If the file is not a valid PNG
    """
    path = Path(path)
    bit_depth, color_space = read_header(path.read_bytes())

    with Image.open(path) as img:
        img.load()
        has_alpha = img.mode in ("RGBA", "LA") or "transparency" in img.info
        rgba = img.convert("RGBA")
        r, g, b, a = rgba.getpixel((0, 0))
        size = img.size

    return DecodedImage(
        rgb=(r, g, b),
        alpha=a if has_alpha else None,
        color_space=color_space,
        bit_depth=bit_depth,
        size=size,
    )
