# Copyright (c) 2026 oklch-pixel
# SPDX-License-Identifier: MIT

"""
Pixel schema — value types for the OKLCH → PNG pipeline.

Design principles:
- Immutable: All types are frozen dataclasses
- Deterministic: Same input → same pixel
- Permissive input: OKLCH values are never range-checked, so lightness
  outside 0-1 and negative chroma reach the converter untouched

OKLCH Color Space:
- L (Lightness): 0.0 = black, 1.0 = white
- C (Chroma): 0.0 = gray, ~0.37 = max saturation in Display P3
- H (Hue): 0-360 degrees (≈30=orange, ≈90=yellow, ≈145=green, ≈250=blue, ≈330=pink/red)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np


# =============================================================================
# Bit Depth
# =============================================================================

DEFAULT_BIT_DEPTH = 8
SUPPORTED_BIT_DEPTHS = (8, 16)


def max_sample(bit_depth: int) -> int:
    """Largest integer sample for a bit depth (255 or 65535)."""
    if bit_depth not in SUPPORTED_BIT_DEPTHS:
        raise ValueError(
            f"Bit depth must be one of {SUPPORTED_BIT_DEPTHS}, got {bit_depth}"
        )
    return (1 << bit_depth) - 1


def _check_samples(samples: tuple[int, ...], bit_depth: int) -> None:
    top = max_sample(bit_depth)
    for sample in samples:
        if isinstance(sample, bool) or not isinstance(sample, (int, np.integer)):
            raise ValueError(
                f"Sample must be an integer, got {sample!r}"
            )
        if not 0 <= sample <= top:
            raise ValueError(
                f"Sample must be 0-{top} at {bit_depth}-bit, got {sample}"
            )


def format_component(value: float) -> str:
    """
    Format a number the way it appears in file names.

    Shortest digits that round-trip, positional notation, no trailing ".0",
    and negative zero printed as "0".
    """
    text = np.format_float_positional(float(value), trim="-")
    if text == "-0":
        text = "0"
    return text


# =============================================================================
# Input Color
# =============================================================================


@dataclass(frozen=True, slots=True)
class OKLCHColor:
    """
    A single color in OKLCH color space.

    Unlike a measured color, an input color is not validated: OKLCH is
    commonly pushed outside its perceptual norms for experimentation, and
    the converter clamps whatever comes out.

    Attributes:
        L: Lightness (0.0 = black, 1.0 = white)
        C: Chroma (0.0 = neutral gray)
        H: Hue in degrees (any value; taken modulo 360)
    """
    L: float
    C: float
    H: float

    @property
    def is_achromatic(self) -> bool:
        """True if the color has no chroma, so hue has no effect."""
        return self.C == 0.0

    @property
    def label(self) -> str:
        """Space-separated components as used in CSS and file names."""
        return " ".join(format_component(v) for v in (self.L, self.C, self.H))

    def to_css(self, alpha: Optional[float] = None) -> str:
        """CSS Color 4 notation, e.g. ``oklch(0.5431 0.0927 194.77)``."""
        if alpha is None:
            return f"oklch({self.label})"
        return f"oklch({self.label} / {format_component(alpha)})"

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"L": self.L, "C": self.C, "H": self.H}

    @classmethod
    def from_dict(cls, data: dict) -> OKLCHColor:
        """Deserialize from dictionary."""
        return cls(L=data["L"], C=data["C"], H=data["H"])


# =============================================================================
# Color Space Tag
# =============================================================================


class ColorSpace(Enum):
    """
    Output color space chosen by the converter.

    Both spaces share the sRGB transfer curve and D65 white point; they
    differ only in primaries. The value is the CSS predefined color space
    name.
    """

    SRGB = "srgb"
    DISPLAY_P3 = "display-p3"

    @property
    def cicp_primaries(self) -> int:
        """ITU-T H.273 ColourPrimaries code point (PNG cICP byte 0)."""
        return _CICP_PRIMARIES[self]

    @property
    def cicp_transfer(self) -> int:
        """ITU-T H.273 TransferCharacteristics code point (13 = sRGB curve)."""
        return 13

    @classmethod
    def from_cicp(cls, primaries: int) -> ColorSpace:
        """Look up a color space by its cICP primaries code point."""
        for space, code in _CICP_PRIMARIES.items():
            if code == primaries:
                return space
        raise ValueError(f"Unsupported cICP colour primaries: {primaries}")


_CICP_PRIMARIES = {
    ColorSpace.SRGB: 1,
    ColorSpace.DISPLAY_P3: 12,
}


# =============================================================================
# Converter Result
# =============================================================================


@dataclass(frozen=True, slots=True)
class ConvertedPixel:
    """
    Gamma-encoded RGB produced from one OKLCH color.

    Attributes:
        rgb: Integer samples (R, G, B) in 0..2**bit_depth - 1
        color_space: Space the samples are encoded in
        bit_depth: 8 or 16
        in_srgb_gamut: True if the color fit sRGB before any clamping
        clipped: True if clamping changed a channel, i.e. the color lies
            outside the chosen space (beyond Display P3, or degenerate input)
    """
    rgb: tuple[int, int, int]
    color_space: ColorSpace
    bit_depth: int = DEFAULT_BIT_DEPTH
    in_srgb_gamut: bool = True
    clipped: bool = False

    def __post_init__(self) -> None:
        """Validate samples fit the bit depth."""
        if len(self.rgb) != 3:
            raise ValueError(f"Expected 3 samples, got {len(self.rgb)}")
        _check_samples(self.rgb, self.bit_depth)

    @property
    def hex(self) -> str:
        """
        Hex string of the 8-bit samples, like "#008080".

        16-bit samples are reduced to 8 bits first. The hex carries no
        color space: for Display P3 pixels it is only meaningful alongside
        the tag.
        """
        if self.bit_depth == 8:
            r, g, b = self.rgb
        else:
            r, g, b = (round(v * 255 / max_sample(self.bit_depth)) for v in self.rgb)
        return f"#{r:02X}{g:02X}{b:02X}"


# =============================================================================
# Image Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class PixelImage:
    """
    A 1×1 raster holding one RGB(A) pixel and its color space.

    Attributes:
        rgb: Integer samples (R, G, B) at bit_depth
        color_space: Space the samples are encoded in (written as cICP)
        alpha: Integer alpha sample at bit_depth, or None for an RGB image
        bit_depth: 8 or 16
    """
    rgb: tuple[int, int, int]
    color_space: ColorSpace
    alpha: Optional[int] = None
    bit_depth: int = DEFAULT_BIT_DEPTH

    def __post_init__(self) -> None:
        """Validate samples fit the bit depth."""
        if len(self.rgb) != 3:
            raise ValueError(f"Expected 3 samples, got {len(self.rgb)}")
        samples = self.rgb if self.alpha is None else (*self.rgb, self.alpha)
        _check_samples(samples, self.bit_depth)

    @property
    def has_alpha(self) -> bool:
        return self.alpha is not None

    @property
    def samples(self) -> tuple[int, ...]:
        """Channel samples in PNG order (R, G, B[, A])."""
        if self.alpha is None:
            return self.rgb
        return (*self.rgb, self.alpha)

    @classmethod
    def from_pixel(
        cls,
        pixel: ConvertedPixel,
        alpha: Optional[float] = None,
    ) -> PixelImage:
        """
        Build an image from a converted pixel.

        Args:
            pixel: Converter output
            alpha: Opacity 0-1, or None for an RGB image. Values outside
                0-1 are clamped.
        """
        alpha_sample = None
        if alpha is not None:
            top = max_sample(pixel.bit_depth)
            alpha_sample = int(round(min(max(alpha, 0.0), 1.0) * top))
        return cls(
            rgb=pixel.rgb,
            color_space=pixel.color_space,
            alpha=alpha_sample,
            bit_depth=pixel.bit_depth,
        )


@dataclass(frozen=True, slots=True)
class DecodedImage:
    """
    A pixel image read back from disk.

    Attributes:
        rgb: (R, G, B) as decoded by Pillow, always 8 bits per channel
        alpha: 8-bit alpha, or None if the file has no alpha channel
        color_space: Tag recovered from the cICP chunk, or None if untagged
        bit_depth: Bit depth stored in the file header
        size: (width, height)
    """
    rgb: tuple[int, int, int]
    alpha: Optional[int]
    color_space: Optional[ColorSpace]
    bit_depth: int
    size: tuple[int, int] = (1, 1)
