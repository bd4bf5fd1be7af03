#!/usr/bin/env python3

import sys
from typing import List, Optional

from pyglcm.utils.log_record import initialize_logging
from .cli.argument_parser import load_optional_parameters, parse_arguments, print_usage_examples, \
    validate_arguments
from .processing.glcm_processor import GlcmProcessor


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point for the GLCM counting pipeline."""
    try:
        try:
            args = parse_arguments(argv)
        except SystemExit as e:
            # argparse exits with 2 on usage errors and 0 after --help
            return 0 if e.code in (0, None) else 1
        logger, memory_handler = initialize_logging(args.report)

        if not validate_arguments(args):
            print_usage_examples()
            return 1

        optional_params = load_optional_parameters(args)

        processor = GlcmProcessor(
            output_path=args.output,
            memory_handler=memory_handler,
            distance=args.distance,
            directions=args.directions,
            num_workers=args.num_workers,
            enable_parallelism=args.enable_parallelism,
            report=args.report,
            optional_params=optional_params,
        )

        logger.debug(f"Loading grid: {args.grid_input}")
        result = processor.process_grid(args.grid_input, args.n_grey)

        logger.info(f"Processing complete. Results saved to {result['output_path']}")
        return 0

    except KeyboardInterrupt:
        print("\nProcessing interrupted by user.")
        return 1
    except Exception as e:
        print(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    exit_code = main()
    sys.exit(exit_code)
