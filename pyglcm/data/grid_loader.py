import logging
import os
from pathlib import Path
from typing import Union

import numpy as np

from ..config.settings import GRID_EXTENSIONS, NPY_EXTENSIONS, TEXT_EXTENSIONS, TEXT_MISSING_TOKENS
from ..exceptions import GridLoadError

logger = logging.getLogger("Dev_logger")


def detect_grid_format(path: Union[str, Path]) -> str:
    """Return "npy" or "text" from the file extension."""
    extension = Path(path).suffix.lower()
    if extension in NPY_EXTENSIONS:
        return "npy"
    if extension in TEXT_EXTENSIONS:
        return "text"
    raise GridLoadError(f"Unsupported grid file extension '{extension}'; expected one of {GRID_EXTENSIONS}")


def grid_name(path: Union[str, Path]) -> str:
    """Short name used to tag logs and output files."""
    return Path(path).stem


def _sniff_delimiter(path: Path):
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            if line.strip():
                return "," if "," in line else None
    raise GridLoadError(f"Grid file is empty: {path}")


def _parse_token(token: str, path: Path) -> float:
    token = token.strip()
    if token in TEXT_MISSING_TOKENS:
        return np.nan
    try:
        return float(token)
    except ValueError:
        raise GridLoadError(f"Non-numeric grid value '{token}' in {path}") from None


def _load_text_grid(path: Path) -> np.ndarray:
    delimiter = _sniff_delimiter(path)
    try:
        tokens = np.loadtxt(path, dtype=str, delimiter=delimiter, ndmin=2)
    except ValueError as exc:
        raise GridLoadError(f"Grid file {path} is not a rectangular table: {exc}") from exc

    values = np.empty(tokens.shape, dtype=np.float64)
    for (row, col), token in np.ndenumerate(tokens):
        values[row, col] = _parse_token(token, path)
    return values


def _load_npy_grid(path: Path) -> np.ndarray:
    try:
        return np.load(path, allow_pickle=False)
    except (ValueError, OSError) as exc:
        raise GridLoadError(f"Cannot read numpy grid {path}: {exc}") from exc


def load_grid(path: Union[str, Path]) -> np.ndarray:
    """
    Load an already-quantized 2D grid.

    .npy files are read as stored (float NaN cells are missing); .csv/.txt
    tables are read as float with NA/NaN/empty cells as NaN.
    """
    path = Path(path)
    if not os.path.isfile(path):
        raise GridLoadError(f"Grid file does not exist: {path}")

    fmt = detect_grid_format(path)
    grid = _load_npy_grid(path) if fmt == "npy" else _load_text_grid(path)

    if grid.ndim != 2:
        raise GridLoadError(f"Grid in {path} must be 2D, got shape {grid.shape}")

    logger.info("[%s] Loaded %dx%d grid (%s)", grid_name(path), grid.shape[0], grid.shape[1], fmt)
    return grid
