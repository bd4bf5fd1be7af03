"""
Command line argument parsing for the GLCM counting pipeline.
"""

import argparse
import json
import logging
import os
from typing import Any, Dict, List, Optional

from ..config.settings import (
    DEFAULT_GLCM_PARAMS, GRID_EXTENSIONS, LOG_LEVEL_MAP, MIN_GREY_LEVELS, MAX_GREY_LEVELS,
    MIN_DISTANCE, MAX_DISTANCE, MIN_WORKERS, MAX_WORKERS)
from ..engine.directions import parse_directions
from ..exceptions import InvalidArgumentError

logger = logging.getLogger("Dev_logger")


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = _create_argument_parser()
    return parser.parse_args(argv)


def _create_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pyglcm',
        description='Count grey-level co-occurrence matrices (0, 45, 90, 135 degrees) of a quantized grid.'
    )

    _add_required_arguments(parser)
    _add_optional_arguments(parser)

    return parser


def _add_required_arguments(parser: argparse.ArgumentParser) -> None:
    """Add required command line arguments."""
    parser.add_argument(
        '--grid-input',
        required=True,
        help=f'Path to a quantized 2D grid file ({", ".join(GRID_EXTENSIONS)})'
    )
    parser.add_argument(
        '--n-grey',
        type=int,
        required=True,
        help='Number of grey levels; grid values must lie in [0, n_grey - 1] or be missing (NA/NaN)'
    )


def _add_optional_arguments(parser: argparse.ArgumentParser) -> None:
    """Add optional command line arguments."""
    parser.add_argument(
        '--output',
        default=None,
        help=f'Path to the output directory. Default is "{DEFAULT_GLCM_PARAMS["glcm_destination_folder"]}"'
    )
    parser.add_argument(
        '--distance',
        type=int,
        default=None,
        help=f'Distance from reference pixel to neighbour pixel (default: {DEFAULT_GLCM_PARAMS["glcm_distance"]})'
    )
    parser.add_argument(
        '--directions',
        type=str,
        default=None,
        help=f'Comma-separated directions in degrees (default: {DEFAULT_GLCM_PARAMS["glcm_directions"]})'
    )
    parser.add_argument(
        '--num-workers',
        type=str,
        default=None,
        help='Number of parallel workers, or "auto" (default: number of CPU cores)'
    )
    parser.add_argument(
        '--enable-parallelism',
        action='store_true',
        default=None,
        help='Count row blocks in parallel worker processes'
    )
    parser.add_argument(
        '--report',
        type=str,
        default=DEFAULT_GLCM_PARAMS["glcm_report"],
        choices=list(LOG_LEVEL_MAP.keys()),
        help='Type of report logs to use (default: all (which represents INFO, WARNING, ERROR logs))'
    )
    parser.add_argument(
        '--optional-params',
        type=str,
        default=None,
        help='JSON string or path to a JSON file with additional parameter overrides'
    )


def load_optional_parameters(args: argparse.Namespace) -> Optional[Dict[str, Any]]:
    """Load optional parameters from a JSON file or JSON string."""
    opt_arg = getattr(args, 'optional_params', None)
    if not opt_arg:
        return None

    if os.path.isfile(opt_arg):
        with open(opt_arg, 'r', encoding='utf-8') as f:
            return json.load(f)
    return json.loads(opt_arg)


def validate_arguments(args: argparse.Namespace) -> bool:
    validation_checks = [
        _validate_input_path,
        _validate_output_directory,
        _validate_numeric_arguments,
        _validate_directions,
    ]

    for check in validation_checks:
        if not check(args):
            return False

    return True


def _validate_input_path(args: argparse.Namespace) -> bool:
    """Validate the grid input path."""
    if not os.path.isfile(args.grid_input):
        logger.error(f"Error: Grid input path does not exist: {args.grid_input}")
        return False

    if not args.grid_input.lower().endswith(GRID_EXTENSIONS):
        logger.error(f"Error: Grid input must be one of {GRID_EXTENSIONS}, got {args.grid_input}")
        return False

    return True


def _validate_output_directory(args: argparse.Namespace) -> bool:
    """Validate output directory creation."""
    if args.output:
        try:
            os.makedirs(args.output, exist_ok=True)
        except OSError as e:
            logger.error(f"Error: Cannot create output directory {args.output}: {e}")
            return False

    return True


def _validate_numeric_arguments(args: argparse.Namespace) -> bool:
    """Validate numeric argument ranges."""
    if not MIN_GREY_LEVELS <= args.n_grey <= MAX_GREY_LEVELS:
        logger.error(f"Error: n_grey must be between {MIN_GREY_LEVELS} and {MAX_GREY_LEVELS}, got {args.n_grey}")
        return False

    if args.distance is not None and not MIN_DISTANCE <= args.distance <= MAX_DISTANCE:
        logger.error(f"Error: distance must be between {MIN_DISTANCE} and {MAX_DISTANCE}, got {args.distance}")
        return False

    if args.num_workers is not None and args.num_workers != "auto":
        if not args.num_workers.isdigit() or not MIN_WORKERS <= int(args.num_workers) <= MAX_WORKERS:
            logger.error(f"Error: num_workers must be 'auto' or between {MIN_WORKERS} and {MAX_WORKERS}, "
                         f"got {args.num_workers}")
            return False

    return True


def _validate_directions(args: argparse.Namespace) -> bool:
    """Validate the direction list."""
    if args.directions is None:
        return True
    try:
        parse_directions(args.directions)
    except InvalidArgumentError as e:
        logger.error(f"Error: {e}")
        return False
    return True


def print_usage_examples() -> None:
    """Print usage examples for the GLCM counting pipeline."""
    print("\n" + "=" * 80)
    print("GLCM COUNTING PIPELINE - USAGE EXAMPLES")
    print("=" * 80)

    print("\n1. Count all four directions at distance 1:")
    print("   pyglcm --grid-input grid.npy --n-grey 8")

    print("\n2. Read a CSV grid (NA cells are missing) and choose the output directory:")
    print("   pyglcm --grid-input grid.csv --n-grey 16 --output /path/to/results")

    print("\n3. Selected directions at distance 3:")
    print("   pyglcm --grid-input grid.npy --n-grey 8 --distance 3 --directions 0,90")

    print("\n4. Count row blocks in parallel:")
    print("   pyglcm --grid-input grid.npy --n-grey 8 --enable-parallelism --num-workers 4")

    print("\n5. Override parameters from JSON:")
    print("   pyglcm --grid-input grid.npy --n-grey 8 --optional-params '{\"glcm_missing_label\": \"NaN\"}'")

    print("\n" + "=" * 80 + "\n")
