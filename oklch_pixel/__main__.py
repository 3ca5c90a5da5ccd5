# Copyright (c) 2026 oklch-pixel
# SPDX-License-Identifier: MIT

import sys

from oklch_pixel.cli import main

if __name__ == "__main__":
    sys.exit(main())
