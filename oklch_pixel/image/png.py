# Copyright (c) 2026 oklch-pixel
# SPDX-License-Identifier: MIT

"""
Minimal PNG encoding for 1×1 tagged images.

A general encoder (Pillow's) has no way to emit a cICP chunk or 16-bit RGB,
so the container is written chunk by chunk here:

    signature, IHDR, cICP, [sRGB], IDAT, IEND

References:
- PNG Third Edition: https://www.w3.org/TR/png-3/
- cICP code points: ITU-T H.273
"""

from __future__ import annotations

import struct
import zlib
from typing import Iterator, Optional

import numpy as np

from oklch_pixel.schema import ColorSpace, PixelImage


PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

# IHDR colour types
COLOR_TYPE_RGB = 2
COLOR_TYPE_RGBA = 6

# cICP bytes 2 and 3: identity matrix (RGB), full range
CICP_MATRIX_IDENTITY = 0
CICP_FULL_RANGE = 1

# sRGB chunk rendering intent
SRGB_INTENT_PERCEPTUAL = 0


def chunk(chunk_type: bytes, data: bytes) -> bytes:
    """Frame data as a PNG chunk: length, type, data, CRC-32 of type+data."""
    if len(chunk_type) != 4:
        raise ValueError(f"Chunk type must be 4 bytes, got {chunk_type!r}")
    crc = zlib.crc32(chunk_type + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + chunk_type + data + struct.pack(">I", crc)


def iter_chunks(data: bytes) -> Iterator[tuple[bytes, bytes]]:
    """
    Yield (type, data) for each chunk of a PNG byte string.

    Raises:
        ValueError: If the signature is missing, a chunk is truncated,
            or a CRC does not match
    """
    if not data.startswith(PNG_SIGNATURE):
        raise ValueError("Not a PNG file (bad signature)")

    offset = len(PNG_SIGNATURE)
    while offset < len(data):
        if offset + 8 > len(data):
            raise ValueError(f"Truncated chunk header at offset {offset}")
        length, chunk_type = struct.unpack(">I4s", data[offset:offset + 8])
        end = offset + 8 + length
        if end + 4 > len(data):
            raise ValueError(f"Truncated {chunk_type!r} chunk at offset {offset}")
        body = data[offset + 8:end]
        (crc,) = struct.unpack(">I", data[end:end + 4])
        if crc != zlib.crc32(chunk_type + body) & 0xFFFFFFFF:
            raise ValueError(f"CRC mismatch in {chunk_type!r} chunk")
        yield chunk_type, body
        offset = end + 4
        if chunk_type == b"IEND":
            return


def _ihdr(image: PixelImage) -> bytes:
    color_type = COLOR_TYPE_RGBA if image.has_alpha else COLOR_TYPE_RGB
    # width, height, bit depth, colour type, compression, filter, interlace
    return struct.pack(">IIBBBBB", 1, 1, image.bit_depth, color_type, 0, 0, 0)


def _cicp(color_space: ColorSpace) -> bytes:
    return bytes([
        color_space.cicp_primaries,
        color_space.cicp_transfer,
        CICP_MATRIX_IDENTITY,
        CICP_FULL_RANGE,
    ])


def _scanline(image: PixelImage) -> bytes:
    """Filter type 0 followed by big-endian samples."""
    dtype = np.dtype(">u2") if image.bit_depth == 16 else np.dtype(np.uint8)
    return b"\x00" + np.asarray(image.samples, dtype=dtype).tobytes()


def encode_png(image: PixelImage) -> bytes:
    """
    Encode a pixel image as PNG bytes.

    Every file carries a cICP chunk naming its primaries. sRGB files also
    get an sRGB chunk for decoders that predate cICP.
    """
    parts = [
        PNG_SIGNATURE,
        chunk(b"IHDR", _ihdr(image)),
        chunk(b"cICP", _cicp(image.color_space)),
    ]
    if image.color_space is ColorSpace.SRGB:
        parts.append(chunk(b"sRGB", bytes([SRGB_INTENT_PERCEPTUAL])))
    parts.append(chunk(b"IDAT", zlib.compress(_scanline(image))))
    parts.append(chunk(b"IEND", b""))
    return b"".join(parts)


def read_header(data: bytes) -> tuple[int, Optional[ColorSpace]]:
    """
    Recover (bit depth, color space) from PNG bytes.

    The color space comes from cICP if present, else from an sRGB chunk,
    else None.

    Raises:
        ValueError: If the bytes are not a PNG, or IHDR or cICP is malformed
    """
    bit_depth = None
    color_space = None
    for chunk_type, body in iter_chunks(data):
        if chunk_type == b"IHDR":
            if len(body) != 13:
                raise ValueError(f"IHDR must be 13 bytes, got {len(body)}")
            bit_depth = body[8]
        elif chunk_type == b"cICP":
            if len(body) != 4:
                raise ValueError(f"cICP must be 4 bytes, got {len(body)}")
            color_space = ColorSpace.from_cicp(body[0])
        elif chunk_type == b"sRGB" and color_space is None:
            color_space = ColorSpace.SRGB
    if bit_depth is None:
        raise ValueError("PNG has no IHDR chunk")
    return bit_depth, color_space
