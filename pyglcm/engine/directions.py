# -*- coding: utf-8 -*-
# engine/directions.py

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Any, Iterable, List, Tuple, Union

import numpy as np

from ..exceptions import InvalidArgumentError


class Direction(Enum):
    """In-plane GLCM directions, valued by their angle in degrees."""
    DEG_0 = 0
    DEG_45 = 45
    DEG_90 = 90
    DEG_135 = 135

    @property
    def degrees(self) -> int:
        return self.value

    def offset(self, distance: int) -> Tuple[int, int]:
        """(row, col) step from a reference pixel to its neighbour."""
        unit_row, unit_col = _unit_offsets()[self]
        return unit_row * distance, unit_col * distance


@lru_cache(maxsize=1)
def _unit_offsets() -> dict:
    # (drow, dcol) at distance 1; rows grow downwards so "up" is -1
    return {
        Direction.DEG_0: (0, 1),
        Direction.DEG_45: (-1, 1),
        Direction.DEG_90: (-1, 0),
        Direction.DEG_135: (-1, -1),
    }


ALL_DIRECTIONS: Tuple[Direction, ...] = (
    Direction.DEG_0,
    Direction.DEG_45,
    Direction.DEG_90,
    Direction.DEG_135,
)

DirectionLike = Union[Direction, int, str]


def parse_direction(value: DirectionLike) -> Direction:
    """Accept a Direction member or its angle as int/str ("45", "45deg", 45)."""
    if isinstance(value, Direction):
        return value
    if isinstance(value, (bool, np.bool_)):
        raise InvalidArgumentError(f"Unknown direction {value!r}")

    if isinstance(value, str):
        text = value.strip().lower()
        for suffix in ("deg", "°"):
            if text.endswith(suffix):
                text = text[: -len(suffix)].strip()
        try:
            value = int(text)
        except ValueError:
            raise InvalidArgumentError(f"Unknown direction {value!r}") from None

    if isinstance(value, (int, np.integer)):
        try:
            return Direction(int(value))
        except ValueError:
            pass

    raise InvalidArgumentError(
        f"Unknown direction {value!r}; expected one of {[d.degrees for d in ALL_DIRECTIONS]}"
    )


def parse_directions(values: Union[str, Iterable[Any], None]) -> List[Direction]:
    """
    Parse a direction list, e.g. "0,45,90,135" or [0, Direction.DEG_90].
    Order is preserved and duplicates are dropped.
    """
    if values is None:
        return list(ALL_DIRECTIONS)
    if isinstance(values, str):
        values = [part for part in values.split(",") if part.strip()]
    elif isinstance(values, (Direction, int, np.integer)):
        values = [values]

    directions: List[Direction] = []
    for value in values:
        direction = parse_direction(value)
        if direction not in directions:
            directions.append(direction)

    if not directions:
        raise InvalidArgumentError("At least one direction is required")
    return directions


def reference_window(direction: Direction, n_rows: int, n_cols: int, distance: int
                     ) -> Tuple[slice, slice]:
    """
    Reference-pixel rows and columns whose neighbour stays inside the grid.

    Pairs reaching outside the grid are excluded (no wrapping or padding);
    the window is empty once the offset meets the grid extent.
    """
    d_row, d_col = direction.offset(distance)
    rows = slice(max(0, -d_row), max(0, min(n_rows, n_rows - d_row)))
    cols = slice(max(0, -d_col), max(0, min(n_cols, n_cols - d_col)))
    return rows, cols


def valid_pair_count(direction: Direction, n_rows: int, n_cols: int, distance: int) -> int:
    """Number of reference positions visited for this direction and distance."""
    rows, cols = reference_window(direction, n_rows, n_cols, distance)
    return max(0, rows.stop - rows.start) * max(0, cols.stop - cols.start)
