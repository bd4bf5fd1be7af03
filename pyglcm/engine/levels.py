# -*- coding: utf-8 -*-
# engine/levels.py

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass
from typing import Any, Tuple, Union

import numpy as np

from ..exceptions import InvalidArgumentError


@dataclass(frozen=True)
class RealLevel:
    """A quantized grey level in [0, n_grey - 1]."""
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, (bool, np.bool_)) or not isinstance(self.value, (int, np.integer)):
            raise InvalidArgumentError(f"Grey level must be an integer, got {self.value!r}")
        object.__setattr__(self, "value", int(self.value))


class Missing(Enum):
    """Marker for a cell that carries no grey level."""
    MISSING = "NA"

    def __repr__(self) -> str:
        return "MISSING"


MISSING = Missing.MISSING

GreyLevel = Union[RealLevel, Missing]


def require_positive_int(name: str, value: Any) -> int:
    """Return `value` as int, raising InvalidArgumentError unless it is an integer >= 1."""
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise InvalidArgumentError(f"{name} must be >= 1, got {value}")
    return int(value)


def as_grey_level(item: Any) -> GreyLevel:
    """
    Classify a single grid cell.

    None, NaN and MISSING are missing; integers and integral floats are real levels.
    """
    if isinstance(item, (RealLevel, Missing)):
        return item
    if item is None:
        return MISSING
    if isinstance(item, (bool, np.bool_)):
        raise InvalidArgumentError(f"Boolean grid values are not grey levels: {item!r}")
    if isinstance(item, (int, np.integer)):
        return RealLevel(int(item))
    if isinstance(item, (float, np.floating)):
        if np.isnan(item):
            return MISSING
        if not float(item).is_integer():
            raise InvalidArgumentError(f"Grey levels must be integral, got {item!r}")
        return RealLevel(int(item))
    raise InvalidArgumentError(f"Unsupported grid value {item!r} of type {type(item).__name__}")


def grey_level_index(level: GreyLevel, n_grey: int) -> int:
    """Matrix index of a grey level: the level itself, or n_grey for a missing cell."""
    if level is MISSING:
        return n_grey
    if not 0 <= level.value < n_grey:
        raise InvalidArgumentError(f"Grey level {level.value} outside [0, {n_grey - 1}]")
    return level.value


def index_to_grey_level(index: int, n_grey: int) -> GreyLevel:
    """Inverse of grey_level_index over the (n_grey + 1) matrix indices."""
    if not 0 <= index <= n_grey:
        raise InvalidArgumentError(f"Matrix index {index} outside [0, {n_grey}]")
    return MISSING if index == n_grey else RealLevel(index)


def _check_shape(shape: Tuple[int, ...]) -> None:
    if len(shape) != 2:
        raise InvalidArgumentError(f"Grid must be 2D, got {len(shape)} dimension(s)")
    if shape[0] < 1 or shape[1] < 1:
        raise InvalidArgumentError(f"Grid must have at least one row and one column, got shape {shape}")


def _split_missing(grid: Any) -> Tuple[np.ndarray, np.ndarray]:
    """Separate a numeric grid into its values and a boolean missing mask."""
    if isinstance(grid, np.ma.MaskedArray):
        values = np.ma.getdata(grid)
        missing = np.ma.getmaskarray(grid).copy()
    else:
        values = grid
        missing = np.zeros(grid.shape, dtype=bool)

    if values.dtype.kind == "f":
        missing |= np.isnan(values)
    return values, missing


def _numeric_index_grid(grid: np.ndarray, n_grey: int) -> np.ndarray:
    values, missing = _split_missing(grid)
    present = ~missing

    out_of_range = present & ((values < 0) | (values >= n_grey))
    if np.any(out_of_range):
        row, col = np.argwhere(out_of_range)[0]
        raise InvalidArgumentError(
            f"Grid value {values[row, col]!r} at ({row}, {col}) outside [0, {n_grey - 1}]"
        )

    if values.dtype.kind == "f":
        fractional = present & (values != np.floor(values))
        if np.any(fractional):
            row, col = np.argwhere(fractional)[0]
            raise InvalidArgumentError(
                f"Grid value {values[row, col]!r} at ({row}, {col}) is not an integral grey level"
            )

    filled = np.where(missing, 0, values) if values.dtype.kind == "f" else values
    return np.where(missing, n_grey, filled).astype(np.int64)


def _object_index_grid(grid: np.ndarray, n_grey: int) -> np.ndarray:
    # ndenumerate ignores the mask of a masked array
    masked = np.ma.getmaskarray(grid)
    indices = np.empty(grid.shape, dtype=np.int64)
    for (row, col), item in np.ndenumerate(np.ma.getdata(grid)):
        if masked[row, col]:
            indices[row, col] = n_grey
            continue
        try:
            indices[row, col] = grey_level_index(as_grey_level(item), n_grey)
        except InvalidArgumentError as exc:
            raise InvalidArgumentError(f"Invalid grid value at ({row}, {col}): {exc}") from exc
    return indices


def to_index_grid(grid: Any, n_grey: int) -> np.ndarray:
    """
    Validate a grid and map every cell to its matrix index.

    Parameters
    ----------
    grid : array-like
        2D grid. Integer arrays, float arrays (NaN is missing), masked arrays
        (masked cells are missing) and nested sequences of ints, integral floats,
        RealLevel, None, NaN or MISSING are accepted.
    n_grey : int
        Number of grey levels.

    Returns
    -------
    np.ndarray
        int64 array of the same shape; real levels map to themselves and
        missing cells map to n_grey. The input grid is never modified.
    """
    n_grey = require_positive_int("n_grey", n_grey)

    if not isinstance(grid, np.ndarray):
        try:
            grid = np.asarray(grid, dtype=object)
        except ValueError as exc:
            raise InvalidArgumentError(f"Grid must be a rectangular 2D array: {exc}") from exc

    _check_shape(grid.shape)

    kind = grid.dtype.kind
    if kind in "iuf":
        return _numeric_index_grid(grid, n_grey)
    if kind == "O":
        return _object_index_grid(grid, n_grey)

    raise InvalidArgumentError(f"Unsupported grid dtype {grid.dtype}")
