#!/usr/bin/env python3
"""
GLCM Standalone Counting Script

Thin wrapper around the pyglcm command line interface, for running from a
source checkout without installing the console script.

Supported Input Formats:
-----------------------
  - NumPy arrays (.npy): integer grids, or float grids with NaN for missing cells
  - Delimited text (.csv, .txt): NA / NaN / empty cells are missing

Values must already be quantized to grey levels 0 .. n_grey - 1.

Usage Examples:
---------------
python glcm_standalone.py --grid-input path/to/grid.npy --n-grey 8 --output results/
python glcm_standalone.py --grid-input path/to/grid.csv --n-grey 16 --distance 2 --directions 0,90
"""

import sys
import os

current_dir = os.path.dirname(os.path.abspath(__file__))
if current_dir not in sys.path:
    sys.path.insert(0, current_dir)

from pyglcm._cli import main


if __name__ == "__main__":
    exit_code = main()
    sys.exit(exit_code)
