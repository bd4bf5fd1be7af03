#!/usr/bin/env python3
"""
Basic usage examples for the pyglcm library.

Shows the direction-specific counters, the multi-direction call, missing-pixel
handling, parallel counting and the one-call process_grid export.
"""

import numpy as np

import pyglcm


def example_1_single_direction():
    """Example 1: One direction at distance 1."""
    print("=== Example 1: Single Direction ===")

    grid = np.array([[0, 1],
                     [1, 0]])
    counts = pyglcm.glcm0(grid, n_grey=2, d=1)

    print("0° counts (last row/column is the missing index):")
    print(pyglcm.to_dataframe(counts))


def example_2_all_directions():
    """Example 2: All four directions from one validated grid."""
    print("\n=== Example 2: All Directions ===")

    rng = np.random.default_rng(0)
    grid = rng.integers(0, 4, size=(64, 64))
    matrices = pyglcm.compute_glcms(grid, n_grey=4, d=2)

    for direction, counts in matrices.items():
        print(f"   {direction.degrees:>3}°: {int(counts.sum())} pairs")


def example_3_missing_pixels():
    """Example 3: NaN cells are counted in the missing row/column."""
    print("\n=== Example 3: Missing Pixels ===")

    grid = np.array([[np.nan, 2, 1],
                     [0, 1, 2]])
    counts = pyglcm.glcm0(grid, n_grey=3, d=1)

    print(pyglcm.to_dataframe(counts))
    print("Real-level block, ready for texture statistics:")
    print(pyglcm.strip_missing(counts))


def example_4_parallel_counting():
    """Example 4: Row blocks counted in worker processes."""
    print("\n=== Example 4: Parallel Counting ===")

    rng = np.random.default_rng(1)
    grid = rng.integers(0, 8, size=(512, 512))

    parallel = pyglcm.count_cooccurrence_parallel(grid, 8, 1, 135, num_workers=4)
    sequential = pyglcm.glcm135(grid, 8, 1)
    print(f"   Parallel result matches sequential: {np.array_equal(parallel, sequential)}")


def example_5_process_grid():
    """Example 5: Count and export to Excel in one call."""
    print("\n=== Example 5: Export to Excel ===")

    rng = np.random.default_rng(2)
    grid = rng.integers(0, 8, size=(128, 128))

    result = pyglcm.process_grid(
        grid_input=grid,
        n_grey=8,
        output_path="./glcm_results",
        distance=1,
        directions="0,45,90,135",
        report="info",
    )

    if result['success']:
        print("✅ Processing completed successfully!")
        print(f"   Results saved to: {result['output_path']}")
        print(f"   Processing time: {result['processing_time']:.2f} seconds")
    else:
        print("❌ Processing failed")
        print(f"   Error: {result['error']}")


def main():
    example_1_single_direction()
    example_2_all_directions()
    example_3_missing_pixels()
    example_4_parallel_counting()
    example_5_process_grid()


if __name__ == "__main__":
    main()
