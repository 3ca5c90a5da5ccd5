# Copyright (c) 2026 oklch-pixel
# SPDX-License-Identifier: MIT

"""
Color space conversions.

Conversion chain: OKLCH → OKLab → LMS → Linear sRGB / Linear Display P3 → encoded RGB

References:
- OKLab: https://bottosson.github.io/posts/oklab/
- OKLCH: Cylindrical form of OKLab (Lightness, Chroma, Hue)
- CSS Color 4, sample code for color conversions:
  https://www.w3.org/TR/css-color-4/#color-conversion-code

All conversions are pure NumPy and accept arrays of shape (..., 3).
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from oklch_pixel.schema.pixel import DEFAULT_BIT_DEPTH, max_sample


# Linear components within this distance outside [0, 1] still count as in gamut.
# Published OKLCH values are rounded to ~4 digits, which puts colors on the
# sRGB boundary (e.g. #008080) a few 1e-5 outside it.
GAMUT_EPSILON = 1e-4


# =============================================================================
# Matrices
# =============================================================================

# From https://bottosson.github.io/posts/oklab/

# Linear sRGB to LMS (cone responses)
_LINEAR_SRGB_TO_LMS = np.array([
    [0.4122214708, 0.5363325363, 0.0514459929],
    [0.2119034982, 0.6806995451, 0.1073969566],
    [0.0883024619, 0.2817188376, 0.6299787005],
], dtype=np.float64)

# LMS' (cube-rooted) to OKLab
_LMS_TO_OKLAB = np.array([
    [0.2104542553, 0.7936177850, -0.0040720468],
    [1.9779984951, -2.4285922050, 0.4505937099],
    [0.0259040371, 0.7827717662, -0.8086757660],
], dtype=np.float64)

# OKLab to LMS' (before cubing)
_OKLAB_TO_LMS = np.array([
    [1.0, 0.3963377774, 0.2158037573],
    [1.0, -0.1055613458, -0.0638541728],
    [1.0, -0.0894841775, -1.2914855480],
], dtype=np.float64)

# LMS to linear sRGB
_LMS_TO_LINEAR_SRGB = np.array([
    [4.0767416621, -3.3077115913, 0.2309699292],
    [-1.2684380046, 2.6097574011, -0.3413193965],
    [-0.0041960863, -0.7034186147, 1.7076147010],
], dtype=np.float64)

# From CSS Color 4 (D65 white, no chromatic adaptation needed)

_LINEAR_SRGB_TO_XYZ = np.array([
    [0.41239079926595934, 0.357584339383878, 0.1804807884018343],
    [0.21263900587151027, 0.715168678767756, 0.07219231536073371],
    [0.01933081871559182, 0.11919477979462598, 0.9505321522496607],
], dtype=np.float64)

_XYZ_TO_LINEAR_P3 = np.array([
    [2.493496911941425, -0.9313836179191239, -0.40271078445071684],
    [-0.8294889695615747, 1.7626640603183463, 0.023624685841943577],
    [0.03584583024378447, -0.07617238926804182, 0.9568845240076872],
], dtype=np.float64)

# LMS to linear Display P3, composed once
_LMS_TO_LINEAR_P3 = _XYZ_TO_LINEAR_P3 @ _LINEAR_SRGB_TO_XYZ @ _LMS_TO_LINEAR_SRGB

for _m in (
    _LINEAR_SRGB_TO_LMS,
    _LMS_TO_OKLAB,
    _OKLAB_TO_LMS,
    _LMS_TO_LINEAR_SRGB,
    _LMS_TO_LINEAR_P3,
):
    _m.setflags(write=False)
del _m


def _apply(matrix: NDArray[np.float64], values: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.einsum('...j,ij->...i', values, matrix)


# =============================================================================
# Transfer Function (sRGB and Display P3)
# =============================================================================


def srgb_to_linear(encoded: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert gamma-encoded values to linear light.

    The sRGB piecewise curve, shared by Display P3:
    - For |value| <= 0.04045: value/12.92
    - Otherwise: sign(value) * ((|value| + 0.055) / 1.055) ^ 2.4
    """
    encoded = np.asarray(encoded, dtype=np.float64)
    magnitude = np.abs(encoded)
    linear = np.where(
        magnitude <= 0.04045,
        encoded / 12.92,
        np.sign(encoded) * np.power((magnitude + 0.055) / 1.055, 2.4)
    )
    return linear


def linear_to_srgb(linear: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert linear light to gamma-encoded values.

    Inverse of srgb_to_linear. The curve is extended symmetrically below
    zero and not clipped, so out-of-gamut values stay finite and are left
    for quantize() to clamp.
    """
    linear = np.asarray(linear, dtype=np.float64)
    magnitude = np.abs(linear)
    encoded = np.where(
        magnitude <= 0.0031308,
        linear * 12.92,
        np.sign(linear) * (1.055 * np.power(magnitude, 1.0 / 2.4) - 0.055)
    )
    return encoded


# =============================================================================
# OKLab ↔ OKLCH
# =============================================================================


def oklab_to_oklch(lab: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert OKLab to OKLCH (cylindrical coordinates).

    Args:
        lab: Array of shape (..., 3) with OKLab values (L, a, b)

    Returns:
        Array of shape (..., 3) with OKLCH values (L, C, H)
        H is in degrees [0, 360)
    """
    lab = np.asarray(lab, dtype=np.float64)

    L = lab[..., 0]
    a = lab[..., 1]
    b = lab[..., 2]

    C = np.sqrt(a**2 + b**2)
    H = np.degrees(np.arctan2(b, a)) % 360.0

    return np.stack([L, C, H], axis=-1)


def oklch_to_oklab(lch: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert OKLCH to OKLab.

    Args:
        lch: Array of shape (..., 3) with OKLCH values (L, C, H)
        H is in degrees, any range

    Returns:
        Array of shape (..., 3) with OKLab values (L, a, b)
    """
    lch = np.asarray(lch, dtype=np.float64)

    L = lch[..., 0]
    C = lch[..., 1]
    H_rad = np.radians(lch[..., 2] % 360.0)

    a = C * np.cos(H_rad)
    b = C * np.sin(H_rad)

    return np.stack([L, a, b], axis=-1)


# =============================================================================
# OKLab ↔ LMS ↔ Linear RGB
# =============================================================================


def oklab_to_lms(lab: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert OKLab to linear-light LMS.

    Applies the OKLab → LMS' matrix, then cubes each component to undo
    the model's cube-root compression.

    Args:
        lab: Array of shape (..., 3) with OKLab values (L, a, b)

    Returns:
        Array of shape (..., 3) with LMS values
    """
    lab = np.asarray(lab, dtype=np.float64)
    lms_cbrt = _apply(_OKLAB_TO_LMS, lab)
    return lms_cbrt ** 3


def lms_to_linear_srgb(lms: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert LMS to linear sRGB. Components may fall outside [0, 1]."""
    return _apply(_LMS_TO_LINEAR_SRGB, np.asarray(lms, dtype=np.float64))


def lms_to_linear_p3(lms: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert LMS to linear Display P3. Components may fall outside [0, 1]."""
    return _apply(_LMS_TO_LINEAR_P3, np.asarray(lms, dtype=np.float64))


def oklab_to_linear_srgb(lab: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert OKLab to linear sRGB."""
    return lms_to_linear_srgb(oklab_to_lms(lab))


def linear_srgb_to_oklab(rgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert linear sRGB to OKLab.

    Args:
        rgb: Array of shape (..., 3) with linear RGB values

    Returns:
        Array of shape (..., 3) with OKLab values (L, a, b)
    """
    rgb = np.asarray(rgb, dtype=np.float64)

    # RGB to LMS
    lms = _apply(_LINEAR_SRGB_TO_LMS, rgb)

    # Cube root (np.cbrt keeps the sign of out-of-gamut values)
    lms_cbrt = np.cbrt(lms)

    # LMS' to OKLab
    return _apply(_LMS_TO_OKLAB, lms_cbrt)


# =============================================================================
# Gamut and Quantization
# =============================================================================


def in_gamut(
    linear: NDArray[np.float64],
    epsilon: float = GAMUT_EPSILON,
) -> bool:
    """
    True if every linear component lies in [0, 1] within epsilon.

    Non-finite components are never in gamut.
    """
    linear = np.asarray(linear, dtype=np.float64)
    return bool(np.all((linear >= -epsilon) & (linear <= 1.0 + epsilon)))


def quantize(
    encoded: NDArray[np.float64],
    bit_depth: int = DEFAULT_BIT_DEPTH,
) -> NDArray[np.int64]:
    """
    Scale encoded values in [0, 1] to integer samples.

    Rounds half away from zero and clamps to the valid range. NaN maps
    to 0 and infinities to the nearest bound, so the result is always
    defined.

    Finite but huge OKLCH input (e.g. L = 1e200) overflows while cubing
    and cancels to NaN in the matrix step (inf - inf), so such colors
    come out black rather than white.
    """
    top = max_sample(bit_depth)
    encoded = np.nan_to_num(
        np.asarray(encoded, dtype=np.float64), nan=0.0, posinf=1.0, neginf=0.0
    )
    clamped = np.clip(encoded, 0.0, 1.0)
    return np.floor(clamped * top + 0.5).astype(np.int64)


# =============================================================================
# Convenience: OKLCH ↔ 8-bit sRGB hex
# =============================================================================


def oklch_to_srgb(lch: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert OKLCH to gamma-encoded sRGB, unclipped.

    Full chain: OKLCH → OKLab → LMS → Linear sRGB → sRGB
    """
    linear = oklab_to_linear_srgb(oklch_to_oklab(lch))
    return linear_to_srgb(linear)


def srgb_to_oklch(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert gamma-encoded sRGB [0,1] to OKLCH.

    Full chain: sRGB → Linear sRGB → OKLab → OKLCH
    """
    return oklab_to_oklch(linear_srgb_to_oklab(srgb_to_linear(srgb)))


def oklch_to_hex(L: float, C: float, H: float) -> str:
    """
    Convert OKLCH values to an 8-bit sRGB hex string.

    Out-of-gamut colors are clamped per channel.

    Returns:
        Hex string like "#008080"
    """
    srgb = oklch_to_srgb(np.array([L, C, H], dtype=np.float64))
    r, g, b = quantize(srgb, 8).tolist()
    return f"#{r:02X}{g:02X}{b:02X}"


def hex_to_oklch(hex_color: str) -> tuple[float, float, float]:
    """
    Convert an sRGB hex color string to OKLCH values.

    Args:
        hex_color: Hex string like "#008080" or "008080"

    Returns:
        Tuple of (L, C, H), H in degrees [0, 360)
    """
    hex_color = hex_color.lstrip("#")
    if len(hex_color) != 6:
        raise ValueError(f"Expected 6 hex digits, got {hex_color!r}")

    r = int(hex_color[0:2], 16)
    g = int(hex_color[2:4], 16)
    b = int(hex_color[4:6], 16)

    srgb = np.array([r, g, b], dtype=np.float64) / 255.0
    lch = srgb_to_oklch(srgb)
    return float(lch[0]), float(lch[1]), float(lch[2])
