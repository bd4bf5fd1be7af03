import numpy as np
import pandas as pd
import pytest

import pyglcm
from pyglcm import Direction, InvalidArgumentError, MISSING, RealLevel
from pyglcm.engine.cooccurrence import count_cooccurrence, compute_glcms, strip_missing, to_dataframe

ADAPTERS = {
    0: pyglcm.glcm0,
    45: pyglcm.glcm45,
    90: pyglcm.glcm90,
    135: pyglcm.glcm135,
}

CYCLIC = np.array([[0, 1, 2],
                   [1, 2, 0],
                   [2, 0, 1]])


def expected_pairs(direction, n_rows, n_cols, d):
    if direction == 0:
        return n_rows * max(0, n_cols - d)
    if direction == 90:
        return max(0, n_rows - d) * n_cols
    return max(0, n_rows - d) * max(0, n_cols - d)


class TestScenarios:

    def test_horizontal_pairs(self):
        counts = pyglcm.glcm0([[0, 1], [1, 0]], 2, 1)

        expected = np.zeros((3, 3), dtype=np.int64)
        expected[0, 1] = 1
        expected[1, 0] = 1
        np.testing.assert_array_equal(counts, expected)

    def test_vertical_pairs_start_at_row_d(self):
        counts = pyglcm.glcm90([[0, 0], [0, 0]], 2, 1)

        assert counts[0, 0] == 2
        assert counts.sum() == 2

    @pytest.mark.parametrize("grid", [
        np.array([[np.nan, 2, 1], [0, 1, 2]]),
        [[None, 2, 1], [0, 1, 2]],
        [[MISSING, RealLevel(2), RealLevel(1)], [0, 1, 2]],
        np.ma.masked_array([[9, 2, 1], [0, 1, 2]], mask=[[True, False, False], [False, False, False]]),
        np.ma.masked_array(np.array([[9, 2, 1], [0, 1, 2]], dtype=object),
                           mask=[[True, False, False], [False, False, False]]),
        np.ma.masked_array(np.array([[1, 2, 1], [0, 1, 2]], dtype=object),
                           mask=[[True, False, False], [False, False, False]]),
    ])
    def test_missing_reference_goes_to_missing_row(self, grid):
        counts = pyglcm.glcm0(grid, 3, 1)

        assert counts[3, 2] == 1
        assert counts[0, 2] == 0
        assert counts[2, 1] == 1
        assert counts[0, 1] == 1
        assert counts[1, 2] == 1
        assert counts.sum() == 4

    def test_distance_equal_to_width_gives_zeros(self):
        counts = pyglcm.glcm0(np.arange(6).reshape(2, 3) % 3, 3, 3)

        assert counts.shape == (4, 4)
        assert not counts.any()

    def test_cyclic_grid_all_directions(self):
        expected = {
            0: {(0, 1): 2, (1, 2): 2, (2, 0): 2},
            90: {(1, 0): 2, (2, 1): 2, (0, 2): 2},
            45: {(1, 1): 1, (2, 2): 2, (0, 0): 1},
            135: {(2, 0): 1, (0, 1): 2, (1, 2): 1},
        }
        for degrees, cells in expected.items():
            counts = ADAPTERS[degrees](CYCLIC, 3, 1)
            target = np.zeros((4, 4), dtype=np.int64)
            for (ref, nei), value in cells.items():
                target[ref, nei] = value
            np.testing.assert_array_equal(counts, target, err_msg=f"{degrees}°")


class TestProperties:

    @pytest.mark.parametrize("degrees", [0, 45, 90, 135])
    @pytest.mark.parametrize("d", [1, 2, 5, 16, 17, 23, 40])
    def test_total_equals_valid_reference_positions(self, random_grid, degrees, d):
        counts = ADAPTERS[degrees](random_grid, 5, d)

        n_rows, n_cols = random_grid.shape
        assert counts.sum() == expected_pairs(degrees, n_rows, n_cols, d)
        assert counts.dtype == np.int64
        assert (counts >= 0).all()

    @pytest.mark.parametrize("degrees", [0, 45, 90, 135])
    @pytest.mark.parametrize("d", [1, 3, 7])
    def test_matches_loop_reference(self, random_grid_with_missing, naive, degrees, d):
        counts = ADAPTERS[degrees](random_grid_with_missing, 4, d)

        np.testing.assert_array_equal(counts, naive(random_grid_with_missing, 4, d, degrees))

    @pytest.mark.parametrize("degrees", [45, 90, 135])
    def test_distance_reaching_past_rows_gives_zeros(self, degrees):
        grid = np.zeros((3, 10), dtype=int)

        assert not ADAPTERS[degrees](grid, 1, 3).any()

    def test_missing_never_lands_in_real_levels(self):
        grid = np.full((4, 4), np.nan)

        counts = pyglcm.glcm0(grid, 2, 1)

        assert counts[2, 2] == 12
        assert not counts[:2, :2].any()

    def test_deterministic_and_input_untouched(self, random_grid_with_missing):
        before = random_grid_with_missing.copy()

        first = pyglcm.glcm135(random_grid_with_missing, 4, 2)
        second = pyglcm.glcm135(random_grid_with_missing, 4, 2)

        np.testing.assert_array_equal(first, second)
        np.testing.assert_array_equal(random_grid_with_missing, before)

    def test_result_is_read_only(self):
        counts = pyglcm.glcm0([[0, 1]], 2, 1)

        assert not counts.flags.writeable
        with pytest.raises(ValueError):
            counts[0, 0] = 5

    def test_single_pixel_grid(self):
        for adapter in ADAPTERS.values():
            assert not adapter([[0]], 1, 1).any()


class TestValidation:

    @pytest.mark.parametrize("n_grey, d", [(0, 1), (-2, 1), (2, 0), (2, -1), (2.0, 1), (2, 1.0), (True, 1)])
    def test_rejects_non_positive_parameters(self, n_grey, d):
        with pytest.raises(InvalidArgumentError):
            pyglcm.glcm0([[0, 1]], n_grey, d)

    @pytest.mark.parametrize("grid", [
        [[0, 2]],
        [[-1, 0]],
        np.array([[0, 1.5]]),
        np.array([[0, np.inf]]),
        [[0, "1"]],
        np.array([[True, False]]),
        [[0, True]],
    ])
    def test_rejects_bad_grid_values(self, grid):
        with pytest.raises(InvalidArgumentError):
            pyglcm.glcm0(grid, 2, 1)

    @pytest.mark.parametrize("grid", [[], [[]], [0, 1], np.zeros((2, 2, 2)), [[0, 1], [1]]])
    def test_rejects_bad_shapes(self, grid):
        with pytest.raises(InvalidArgumentError):
            pyglcm.glcm90(grid, 2, 1)

    def test_rejects_unknown_direction(self):
        with pytest.raises(InvalidArgumentError):
            count_cooccurrence([[0, 1]], 2, 1, 30)

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            pyglcm.glcm45([[5]], 2, 1)

    @pytest.mark.parametrize("direction", [Direction.DEG_45, 45, "45", "45deg", " 45° "])
    def test_direction_spellings(self, direction):
        np.testing.assert_array_equal(count_cooccurrence(CYCLIC, 3, 1, direction), pyglcm.glcm45(CYCLIC, 3, 1))


class TestComputeGlcms:

    def test_matches_single_direction_adapters(self, random_grid_with_missing):
        matrices = compute_glcms(random_grid_with_missing, 4, d=2)

        assert list(matrices) == list(pyglcm.ALL_DIRECTIONS)
        for direction, counts in matrices.items():
            np.testing.assert_array_equal(counts, ADAPTERS[direction.degrees](random_grid_with_missing, 4, 2))

    def test_order_and_duplicates(self):
        matrices = compute_glcms(CYCLIC, 3, directions="90,0,90")

        assert list(matrices) == [Direction.DEG_90, Direction.DEG_0]

    def test_empty_direction_list(self):
        with pytest.raises(InvalidArgumentError):
            compute_glcms(CYCLIC, 3, directions=[])


class TestViews:

    def test_to_dataframe_labels(self):
        frame = to_dataframe(pyglcm.glcm0([[0, 1], [1, 0]], 2, 1))

        assert isinstance(frame, pd.DataFrame)
        assert list(frame.index) == ["0", "1", "NA"]
        assert list(frame.columns) == ["0", "1", "NA"]
        assert frame.loc["0", "1"] == 1
        assert frame.index.name == "reference"
        assert frame.columns.name == "neighbor"

    def test_to_dataframe_custom_missing_label(self):
        frame = to_dataframe(pyglcm.glcm0([[0]], 1, 1), missing_label="missing")

        assert list(frame.columns) == ["0", "missing"]

    def test_strip_missing(self):
        counts = pyglcm.glcm0([[np.nan, 1, 0]], 2, 1)

        real = strip_missing(counts)

        assert real.shape == (2, 2)
        assert real[1, 0] == 1
        assert real.sum() == 1

    @pytest.mark.parametrize("bad", [np.zeros((2, 3)), np.zeros(4), np.zeros((1, 1))])
    def test_views_reject_non_square(self, bad):
        with pytest.raises(InvalidArgumentError):
            strip_missing(bad)
        with pytest.raises(InvalidArgumentError):
            to_dataframe(bad)
