# Copyright (c) 2026 oklch-pixel
# SPDX-License-Identifier: MIT

"""
Command-line entry point: ``oklch-pixel L C H [A]``.

Converts one OKLCH color and writes it as a 1×1 PNG named after the color,
e.g. ``oklch(0.5431 0.0927 194.77).png``.
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from pathlib import Path
from typing import Optional, Sequence

import shtab

from oklch_pixel import __version__
from oklch_pixel.convert import convert_color
from oklch_pixel.image import default_output_name, save_image
from oklch_pixel.schema import OKLCHColor, PixelImage
from oklch_pixel.schema.pixel import DEFAULT_BIT_DEPTH, SUPPORTED_BIT_DEPTHS

logger = logging.getLogger(__name__)


# =============================================================================
# Argument Types
# =============================================================================


def parse_number(text: str) -> float:
    """Parse a finite float. Negative and out-of-range values are allowed."""
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}") from None
    if not math.isfinite(value):
        raise argparse.ArgumentTypeError(f"not a finite number: {text!r}")
    return value


def parse_lightness(text: str) -> float:
    """Parse lightness as 0-1 or as a percentage like ``62.5%``."""
    stripped = text.strip()
    if stripped.endswith("%"):
        return parse_number(stripped[:-1]) / 100.0
    return parse_number(stripped)


def parse_alpha(text: str) -> float:
    """Parse alpha, which must lie in 0-1."""
    value = parse_number(text)
    if not 0.0 <= value <= 1.0:
        raise argparse.ArgumentTypeError(f"alpha must be 0-1, got {text!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="oklch-pixel",
        description=(
            "Generate a 1x1 PNG from an OKLCH color, encoded in sRGB when it "
            "fits and in Display P3 otherwise."
        ),
        epilog=(
            "Default output file: oklch(L C H).png or oklch(L C H ∕ A).png "
            "(L normalized to 0..1)."
        ),
    )
    parser.add_argument("L", type=parse_lightness, help="Lightness: 0..1 or percent (e.g. 62.5%%).")
    parser.add_argument("C", type=parse_number, help="Chroma (normally >= 0).")
    parser.add_argument("H", type=parse_number, help="Hue in degrees.")
    parser.add_argument(
        "A",
        type=parse_alpha,
        nargs="?",
        default=None,
        help="Alpha 0..1 (optional). If provided, output is RGBA.",
    )
    parser.add_argument(
        "--bit-depth",
        type=int,
        choices=SUPPORTED_BIT_DEPTHS,
        default=DEFAULT_BIT_DEPTH,
        help="Output bit depth (default: %(default)s).",
    )
    parser.add_argument(
        "--output-file",
        type=Path,
        default=None,
        metavar="PATH",
        help="Explicit output file path.",
    ).complete = shtab.FILE
    parser.add_argument("-v", "--verbose", action="store_true", help="Log conversion details")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    shtab.add_argument_to(
        parser,
        ["--print-completion"],
        help="Print a shell completion script and exit.",
    )
    return parser


# =============================================================================
# Entry Point
# =============================================================================


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    CLI entry point.

    Returns:
        Process exit code: 0 on success, 1 if the file could not be written.
        Usage errors exit with 2 via argparse.
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    color = OKLCHColor(L=args.L, C=args.C, H=args.H)
    pixel = convert_color(color, bit_depth=args.bit_depth)
    if pixel.clipped:
        logger.warning("color out of Display P3 gamut; clipped")

    output = args.output_file or Path(default_output_name(color, args.A))
    image = PixelImage.from_pixel(pixel, alpha=args.A)

    try:
        path = save_image(output, image)
    except OSError as exc:
        print(f"error: failed to write PNG: {exc}", file=sys.stderr, flush=True)
        return 1

    print(path, flush=True)
    return 0
