__version__ = "1.0.0"
__author__ = "Mohammad R. Salmanpour, Amir Hossein Pouria"
__email__ = "m.salmanpoor66@gmail.com"

from typing import Any, Dict, List, Optional, Union

from .engine.cooccurrence import (
    count_cooccurrence, compute_glcms, glcm0, glcm45, glcm90, glcm135, strip_missing, to_dataframe)
from .engine.directions import ALL_DIRECTIONS, Direction
from .engine.levels import MISSING, Missing, RealLevel
from .engine.parallel import count_cooccurrence_parallel
from .exceptions import GridLoadError, InvalidArgumentError
from .processing.glcm_processor import GlcmProcessor
from .utils.log_record import initialize_logging


def process_grid(
        grid_input: Any,
        n_grey: int,
        output_path: Optional[str] = None,
        distance: Optional[int] = None,
        directions: Optional[Union[str, List[Any]]] = None,
        num_workers: Optional[Union[str, int]] = None,
        enable_parallelism: Optional[bool] = None,
        report: Optional[str] = "all",
        optional_params: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Count GLCMs for one grid (array or .npy/.csv/.txt path) and save them to an Excel workbook.

    Never raises for processing failures: they are reported through
    ``success=False`` and ``error`` in the returned dict.
    """
    import time

    start_time = time.time()
    logger, memory_handler = initialize_logging(report)
    logger.info("Starting pyglcm co-occurrence counting")

    try:
        processor = GlcmProcessor(
            output_path=output_path,
            memory_handler=memory_handler,
            distance=distance,
            directions=directions,
            num_workers=num_workers,
            enable_parallelism=enable_parallelism,
            report=report,
            optional_params=optional_params,
        )
        result = processor.process_grid(grid_input, n_grey)
        processing_time = time.time() - start_time
        logger.info(f"Processing completed successfully in {processing_time:.2f} seconds")

        return {
            'success': True,
            'output_path': result['output_path'],
            'matrices': result['matrices'],
            'processing_time': processing_time,
            'logs': memory_handler.get_logs(),
        }

    except Exception as e:
        processing_time = time.time() - start_time
        logger.error(f"Processing failed with error: {e}")

        return {
            'success': False,
            'output_path': output_path,
            'matrices': {},
            'processing_time': processing_time,
            'logs': memory_handler.get_logs(),
            'error': str(e),
        }


__all__ = [
    'glcm0',
    'glcm45',
    'glcm90',
    'glcm135',
    'count_cooccurrence',
    'compute_glcms',
    'count_cooccurrence_parallel',
    'strip_missing',
    'to_dataframe',
    'process_grid',
    'GlcmProcessor',
    'Direction',
    'ALL_DIRECTIONS',
    'RealLevel',
    'Missing',
    'MISSING',
    'InvalidArgumentError',
    'GridLoadError',
    '__version__',
]
