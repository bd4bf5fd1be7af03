import numpy as np
import pytest


def naive_glcm(grid, n_grey, d, direction):
    """Loop-based reference counter following the per-direction reference ranges."""
    grid = np.asarray(grid, dtype=float)
    n_rows, n_cols = grid.shape
    counts = np.zeros((n_grey + 1, n_grey + 1), dtype=np.int64)

    if direction == 0:
        rows, cols, offset = range(0, n_rows), range(0, n_cols - d), (0, d)
    elif direction == 90:
        rows, cols, offset = range(d, n_rows), range(0, n_cols), (-d, 0)
    elif direction == 45:
        rows, cols, offset = range(d, n_rows), range(0, n_cols - d), (-d, d)
    else:
        rows, cols, offset = range(d, n_rows), range(d, n_cols), (-d, -d)

    def index(value):
        return n_grey if np.isnan(value) else int(value)

    for i in rows:
        for j in cols:
            ref = index(grid[i, j])
            nei = index(grid[i + offset[0], j + offset[1]])
            counts[ref, nei] += 1
    return counts


@pytest.fixture
def random_grid():
    rng = np.random.default_rng(1234)
    return rng.integers(0, 5, size=(23, 17))


@pytest.fixture
def random_grid_with_missing():
    rng = np.random.default_rng(4321)
    grid = rng.integers(0, 4, size=(19, 26)).astype(float)
    grid[rng.random(grid.shape) < 0.15] = np.nan
    return grid


@pytest.fixture
def naive():
    return naive_glcm
