import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np
import pandas as pd

from ..config.settings import (
    DEFAULT_GLCM_PARAMS, DIRECTION_SHEET_TEMPLATE, OUTPUT_FILENAME_TEMPLATE, get_default_output_path)
from ..data.grid_loader import grid_name, load_grid
from ..engine.cooccurrence import count_index_grid, to_dataframe, _freeze
from ..engine.directions import Direction, parse_directions
from ..engine.levels import require_positive_int, to_index_grid
from ..engine.parallel import count_cooccurrence_parallel
from ..utils.log_record import log_to_excel, setup_multiprocessing_logging
from ..utils.profiling import profile_delta, profile_snapshot
from ..utils.save_params import write_to_excel

logger = logging.getLogger("Dev_logger")


class GlcmProcessor:
    """Counts GLCMs for a grid in every configured direction and writes them to an Excel workbook."""

    def __init__(
            self,
            output_path: Optional[str] = None,
            memory_handler: Optional[Any] = None,
            distance: Optional[int] = None,
            directions: Optional[Union[str, List[Any]]] = None,
            num_workers: Optional[Union[str, int]] = None,
            enable_parallelism: Optional[bool] = None,
            report: Optional[str] = None,
            optional_params: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.memory_handler = memory_handler
        self.last_perf: Dict[int, Dict[str, Any]] = {}

        # Initialize default parameters
        self.params: Dict[str, Any] = DEFAULT_GLCM_PARAMS.copy()

        # Apply provided optional parameters first
        if optional_params:
            for key, value in optional_params.items():
                if key in DEFAULT_GLCM_PARAMS:
                    self.params[key] = value
                else:
                    logger.warning("Ignoring unknown parameter '%s'", key)

        # Explicit parameter overrides
        param_updates = {
            "glcm_destination_folder": output_path,
            "glcm_distance": distance,
            "glcm_directions": directions,
            "glcm_num_workers": num_workers,
            "glcm_enable_parallelism": enable_parallelism,
            "glcm_report": report,
        }
        for key, value in param_updates.items():
            if value is not None:
                self.params[key] = value

        self.output_path = Path(self.params["glcm_destination_folder"] or get_default_output_path())
        self.params["glcm_destination_folder"] = str(self.output_path)

        # Fail fast on malformed configuration
        self.distance = require_positive_int("distance", self.params["glcm_distance"])
        self.directions: List[Direction] = parse_directions(self.params["glcm_directions"])
        self.params["glcm_directions"] = ",".join(str(d.degrees) for d in self.directions)

    # -------------------------------------------------------------------------
    # Save Parameter Configuration
    # -------------------------------------------------------------------------
    def save_parameters(self, excel_path: Union[str, Path]) -> None:
        """Save current configuration into the Parameters sheet of `excel_path`."""
        try:
            write_to_excel(excel_path, self.params)
        except (ValueError, PermissionError) as e:
            logger.error("Error saving parameters: %s", e)
            raise

    def _generate_output_file(self, name: str) -> str:
        parallel_suffix = "_parallel" if self.params["glcm_enable_parallelism"] else "_sequential"
        timestamp = datetime.now().strftime("%m_%d_%Y_%H_%M_%S")

        output_filename = OUTPUT_FILENAME_TEMPLATE.format(
            grid_name=name,
            distance=self.distance,
            parallel_suffix=parallel_suffix,
            timestamp=timestamp,
        )
        return os.path.join(self.output_path, output_filename)

    # -------------------------------------------------------------------------
    # Main Processing API
    # -------------------------------------------------------------------------
    def compute(self, grid: Any, n_grey: int, name: str = "grid") -> Dict[Direction, np.ndarray]:
        """Count every configured direction; profiling per direction is kept in `last_perf`."""
        n_grey = require_positive_int("n_grey", n_grey)
        matrices: Dict[Direction, np.ndarray] = {}

        if self.params["glcm_enable_parallelism"]:
            logger.info("[%s] Counting in parallel", name)
            matrices = self._compute_parallel(grid, n_grey, name)
        else:
            logger.info("[%s] Counting sequentially", name)
            indices = to_index_grid(grid, n_grey)
            for direction in self.directions:
                prof = profile_snapshot()
                matrices[direction] = _freeze(count_index_grid(indices, n_grey, self.distance, direction))
                self._record(name, direction, matrices[direction], prof)

        return matrices

    def _compute_parallel(self, grid: Any, n_grey: int, name: str) -> Dict[Direction, np.ndarray]:
        log_queue, listener = setup_multiprocessing_logging(self.memory_handler, self.params["glcm_report"])
        if listener is not None:
            listener.start()

        matrices: Dict[Direction, np.ndarray] = {}
        try:
            for direction in self.directions:
                prof = profile_snapshot()
                matrices[direction] = count_cooccurrence_parallel(
                    grid,
                    n_grey,
                    self.distance,
                    direction,
                    num_workers=self.params["glcm_num_workers"],
                    row_block_size=self.params["glcm_row_block_size"],
                    log_queue=log_queue,
                    report=self.params["glcm_report"],
                )
                self._record(name, direction, matrices[direction], prof)
        finally:
            if listener is not None:
                listener.stop()

        return matrices

    def _record(self, name: str, direction: Direction, counts: np.ndarray, prof: Dict[str, Any]) -> None:
        self.last_perf[direction.degrees] = profile_delta(prof)
        logger.info("[%s] %d° GLCM: %d pairs (%.4f s)", name, direction.degrees, int(counts.sum()),
                    self.last_perf[direction.degrees]["total_time_sec"])

    def process_grid(self, grid_input: Union[str, Path, np.ndarray, Any], n_grey: int) -> Dict[str, Any]:
        """
        Count GLCMs for an in-memory grid or a grid file and save them to a new workbook.

        Returns
        -------
        dict
            {"matrices": {Direction: matrix}, "output_path": str}
        """
        name = grid_name(grid_input) if isinstance(grid_input, (str, Path)) else "grid"

        try:
            grid = load_grid(grid_input) if isinstance(grid_input, (str, Path)) else grid_input
            matrices = self.compute(grid, n_grey, name)
        except ValueError as e:
            logger.error("[%s] Invalid input: %s", name, e)
            raise

        self.output_path.mkdir(parents=True, exist_ok=True)
        output_file = self._generate_output_file(name)
        self._save_matrices(matrices, output_file)
        logger.info("[%s] Results saved to %s", name, output_file)

        self.save_parameters(output_file)
        if self.memory_handler:
            log_to_excel(output_file, self.memory_handler.get_logs())

        return {"matrices": matrices, "output_path": output_file}

    def _save_matrices(self, matrices: Dict[Direction, np.ndarray], output_file: str) -> None:
        with pd.ExcelWriter(output_file, engine="openpyxl") as writer:
            for direction, counts in matrices.items():
                frame = to_dataframe(counts, missing_label=self.params["glcm_missing_label"])
                frame.to_excel(writer, sheet_name=DIRECTION_SHEET_TEMPLATE.format(degrees=direction.degrees))
