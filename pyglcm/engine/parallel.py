# -*- coding: utf-8 -*-
# engine/parallel.py

from __future__ import annotations

import logging
import math
import os
from concurrent.futures import ProcessPoolExecutor
from typing import Any, List, Optional, Tuple, Union

import numpy as np

from .cooccurrence import _empty_counts, _freeze, count_index_grid
from .directions import Direction, DirectionLike, parse_direction, reference_window
from .levels import require_positive_int, to_index_grid
from ..config.settings import MIN_WORKERS, MAX_WORKERS
from ..exceptions import InvalidArgumentError
from ..utils.log_record import init_worker_logging

logger = logging.getLogger("Dev_logger")


def resolve_num_workers(num_workers: Union[str, int, None], n_tasks: int) -> int:
    """Turn "auto"/None or an explicit count into a worker count no larger than n_tasks."""
    if num_workers is None or num_workers == "auto":
        return max(1, min(os.cpu_count() or 1, n_tasks))

    if isinstance(num_workers, str) and num_workers.strip().lstrip("+-").isdigit():
        workers = int(num_workers)
    elif isinstance(num_workers, (int, np.integer)) and not isinstance(num_workers, (bool, np.bool_)):
        workers = int(num_workers)
    else:
        raise InvalidArgumentError(f"num_workers must be 'auto' or an integer, got {num_workers!r}")

    if not MIN_WORKERS <= workers <= MAX_WORKERS:
        raise InvalidArgumentError(f"num_workers must be between {MIN_WORKERS} and {MAX_WORKERS}, got {workers}")
    return max(1, min(workers, n_tasks))


def split_row_blocks(row_start: int, row_stop: int, block_size: int) -> List[Tuple[int, int]]:
    """Contiguous half-open [start, stop) row ranges covering [row_start, row_stop)."""
    return [(start, min(start + block_size, row_stop)) for start in range(row_start, row_stop, block_size)]


def _count_row_block(
        indices: np.ndarray, n_grey: int, distance: int, direction: Direction, row_block: Tuple[int, int]
) -> np.ndarray:
    """Worker entry point: partial counts for one block of reference rows."""
    logger.debug("Counting %d° pairs for reference rows %d-%d", direction.degrees, row_block[0], row_block[1] - 1)
    return count_index_grid(indices, n_grey, distance, direction, row_range=row_block)


def count_cooccurrence_parallel(
        grid: Any,
        n_grey: int,
        d: int,
        direction: DirectionLike,
        num_workers: Union[str, int, None] = "auto",
        row_block_size: Optional[int] = None,
        log_queue: Optional[Any] = None,
        report: str = "all",
) -> np.ndarray:
    """
    Same result as `count_cooccurrence`, counted over row blocks in worker processes.

    Every worker fills its own partial matrix; partial matrices are summed in the
    parent once all blocks are done.

    Parameters
    ----------
    num_workers : "auto" or int
        "auto" uses min(cpu count, number of blocks).
    row_block_size : int, optional
        Reference rows per block. Defaults to an even split across the workers.
    log_queue : multiprocessing.Queue, optional
        Queue that worker log records are forwarded to.
    report : str
        Report mode applied to worker logging.
    """
    n_grey = require_positive_int("n_grey", n_grey)
    distance = require_positive_int("d", d)
    direction = parse_direction(direction)
    indices = to_index_grid(grid, n_grey)

    rows, cols = reference_window(direction, indices.shape[0], indices.shape[1], distance)
    n_rows = max(0, rows.stop - rows.start)
    if n_rows == 0 or cols.stop <= cols.start:
        return _freeze(_empty_counts(n_grey))

    workers = resolve_num_workers(num_workers, n_rows)
    if row_block_size is None:
        row_block_size = math.ceil(n_rows / workers)
    row_block_size = require_positive_int("row_block_size", row_block_size)

    row_blocks = split_row_blocks(rows.start, rows.stop, row_block_size)
    workers = min(workers, len(row_blocks))

    if workers == 1:
        logger.debug("Counting %d° pairs sequentially (%d row block(s))", direction.degrees, len(row_blocks))
        counts = _empty_counts(n_grey)
        for row_block in row_blocks:
            counts += count_index_grid(indices, n_grey, distance, direction, row_range=row_block)
        return _freeze(counts)

    logger.info("Counting %d° pairs over %d row blocks with %d workers", direction.degrees, len(row_blocks), workers)

    executor_kwargs = {"max_workers": workers}
    if log_queue is not None:
        executor_kwargs.update(initializer=init_worker_logging, initargs=(log_queue, report))

    counts = _empty_counts(n_grey)
    n_blocks = len(row_blocks)
    with ProcessPoolExecutor(**executor_kwargs) as executor:
        for partial in executor.map(
                _count_row_block,
                [indices] * n_blocks,
                [n_grey] * n_blocks,
                [distance] * n_blocks,
                [direction] * n_blocks,
                row_blocks,
        ):
            counts += partial

    return _freeze(counts)
