# -*- coding: utf-8 -*-
# engine/cooccurrence.py

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Tuple, Union

import numpy as np
import pandas as pd

from .directions import ALL_DIRECTIONS, Direction, DirectionLike, parse_direction, parse_directions, \
    reference_window
from .levels import MISSING, index_to_grey_level, require_positive_int, to_index_grid
from ..exceptions import InvalidArgumentError

logger = logging.getLogger("Dev_logger")


def _empty_counts(n_grey: int) -> np.ndarray:
    return np.zeros((n_grey + 1, n_grey + 1), dtype=np.int64)


def _freeze(counts: np.ndarray) -> np.ndarray:
    counts.setflags(write=False)
    return counts


def _accumulate_pairs(ref_indices: np.ndarray, nei_indices: np.ndarray, n_grey: int) -> np.ndarray:
    """
    Fast accumulation of (reference, neighbour) index pairs with np.bincount.
    Index n_grey is the missing row/column.
    """
    size = n_grey + 1
    if ref_indices.size == 0:
        return _empty_counts(n_grey)

    flat_indices = ref_indices.ravel() * size + nei_indices.ravel()
    counts = np.bincount(flat_indices, minlength=size * size)
    return counts.reshape(size, size).astype(np.int64, copy=False)


def count_index_grid(
        indices: np.ndarray,
        n_grey: int,
        distance: int,
        direction: Direction,
        row_range: Optional[Tuple[int, int]] = None,
) -> np.ndarray:
    """
    Count co-occurrences on an already validated index grid.

    Parameters
    ----------
    indices : np.ndarray
        int64 grid from `to_index_grid` (missing cells hold n_grey).
    n_grey : int
        Number of grey levels.
    distance : int
        Offset magnitude, >= 1.
    direction : Direction
        Offset orientation.
    row_range : tuple of int, optional
        Half-open [start, stop) range of reference rows to visit; intersected
        with the rows valid for the direction. Used to split work into row blocks.

    Returns
    -------
    np.ndarray
        Writeable (n_grey + 1) x (n_grey + 1) int64 count matrix.
    """
    n_rows, n_cols = indices.shape
    rows, cols = reference_window(direction, n_rows, n_cols, distance)

    row_start, row_stop = rows.start, rows.stop
    if row_range is not None:
        row_start = max(row_start, int(row_range[0]))
        row_stop = min(row_stop, int(row_range[1]))

    if row_stop <= row_start or cols.stop <= cols.start:
        logger.debug("No %d° pairs at distance %d in a %dx%d grid.", direction.degrees, distance, n_rows, n_cols)
        return _empty_counts(n_grey)

    d_row, d_col = direction.offset(distance)
    ref_indices = indices[row_start:row_stop, cols.start:cols.stop]
    nei_indices = indices[row_start + d_row:row_stop + d_row, cols.start + d_col:cols.stop + d_col]

    return _accumulate_pairs(ref_indices, nei_indices, n_grey)


def count_cooccurrence(grid: Any, n_grey: int, d: int, direction: DirectionLike) -> np.ndarray:
    """
    Build the raw grey-level co-occurrence matrix of `grid` for one direction.

    Entry (r, n) counts reference pixels with level r whose neighbour at the
    direction's offset has level n. Row/column n_grey collects every pair with
    a missing member. Pairs whose neighbour falls outside the grid are skipped,
    so a distance reaching past the grid gives an all-zero matrix.

    Raises
    ------
    InvalidArgumentError
        If n_grey or d is not a positive integer, the direction is unknown, or
        a grid value is neither missing nor a level in [0, n_grey - 1].
    """
    n_grey = require_positive_int("n_grey", n_grey)
    distance = require_positive_int("d", d)
    direction = parse_direction(direction)
    indices = to_index_grid(grid, n_grey)

    return _freeze(count_index_grid(indices, n_grey, distance, direction))


def glcm0(grid: Any, n_grey: int, d: int) -> np.ndarray:
    """0° GLCM: neighbour at (i, j + d)."""
    return count_cooccurrence(grid, n_grey, d, Direction.DEG_0)


def glcm90(grid: Any, n_grey: int, d: int) -> np.ndarray:
    """90° GLCM: neighbour at (i - d, j)."""
    return count_cooccurrence(grid, n_grey, d, Direction.DEG_90)


def glcm45(grid: Any, n_grey: int, d: int) -> np.ndarray:
    """45° GLCM: neighbour at (i - d, j + d)."""
    return count_cooccurrence(grid, n_grey, d, Direction.DEG_45)


def glcm135(grid: Any, n_grey: int, d: int) -> np.ndarray:
    """135° GLCM: neighbour at (i - d, j - d)."""
    return count_cooccurrence(grid, n_grey, d, Direction.DEG_135)


def compute_glcms(
        grid: Any,
        n_grey: int,
        d: int = 1,
        directions: Union[str, Iterable[DirectionLike], None] = ALL_DIRECTIONS,
) -> Dict[Direction, np.ndarray]:
    """Validate the grid once and count every requested direction, in request order."""
    n_grey = require_positive_int("n_grey", n_grey)
    distance = require_positive_int("d", d)
    parsed = parse_directions(directions)
    indices = to_index_grid(grid, n_grey)

    return {
        direction: _freeze(count_index_grid(indices, n_grey, distance, direction))
        for direction in parsed
    }


def strip_missing(counts: np.ndarray) -> np.ndarray:
    """Real-level block of a count matrix, without the trailing missing row/column."""
    counts = np.asarray(counts)
    if counts.ndim != 2 or counts.shape[0] != counts.shape[1] or counts.shape[0] < 2:
        raise InvalidArgumentError(f"Expected a square count matrix of size >= 2, got shape {counts.shape}")
    return counts[:-1, :-1]


def to_dataframe(counts: np.ndarray, missing_label: str = "NA") -> pd.DataFrame:
    """Label a count matrix: grey levels "0".."n_grey-1" then `missing_label` on both axes."""
    counts = np.asarray(counts)
    if counts.ndim != 2 or counts.shape[0] != counts.shape[1] or counts.shape[0] < 2:
        raise InvalidArgumentError(f"Expected a square count matrix of size >= 2, got shape {counts.shape}")

    n_grey = counts.shape[0] - 1
    labels = []
    for index in range(n_grey + 1):
        level = index_to_grey_level(index, n_grey)
        labels.append(missing_label if level is MISSING else str(level.value))

    frame = pd.DataFrame(counts.copy(), index=labels, columns=labels)
    frame.index.name = "reference"
    frame.columns.name = "neighbor"
    return frame
