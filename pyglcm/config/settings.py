"""
Configuration settings for the GLCM counting pipeline.
"""

import os

# =============================================================================
# PROCESSING PARAMETERS
# =============================================================================

# Default GLCM processing parameters
DEFAULT_GLCM_PARAMS = {
    'glcm_distance': 1,
    'glcm_directions': "0,45,90,135",
    'glcm_destination_folder': "./output_result",
    'glcm_report': "all",
    'glcm_enable_parallelism': False,
    'glcm_num_workers': "auto",
    'glcm_row_block_size': None,
    'glcm_missing_label': "NA",
}

# =============================================================================
# THRESHOLDS AND LIMITS
# =============================================================================

# Valid grey-level count range
MIN_GREY_LEVELS = 1
MAX_GREY_LEVELS = 65536

# Valid distance range
MIN_DISTANCE = 1
MAX_DISTANCE = 100000

# Valid number of workers range
MIN_WORKERS = 1
MAX_WORKERS = 32

# =============================================================================
# FILE FORMATS AND EXTENSIONS
# =============================================================================

NPY_EXTENSIONS = ('.npy',)
TEXT_EXTENSIONS = ('.csv', '.txt')
GRID_EXTENSIONS = NPY_EXTENSIONS + TEXT_EXTENSIONS

# Tokens read as missing cells in delimited text grids
TEXT_MISSING_TOKENS = ("NA", "NaN", "nan", "")

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

# Map your mode to actual log levels
LOG_LEVEL_MAP = {
    "none": {'console_level': None, 'memory_level': None},  # No logs
    "error": {'console_level': 'ERROR', 'memory_level': 'ERROR'},  # Errors only
    "warning": {'console_level': 'WARNING', 'memory_level': 'WARNING'},  # Warnings only
    "info": {'console_level': 'INFO', 'memory_level': 'INFO'},  # Info only
    "all": {'console_level': 'INFO', 'memory_level': 'INFO'},  # All (INFO, WARNING, ERROR)
}

LOGGING_CONFIG = {
    'console_format': '%(asctime)s - %(levelname)s - %(message)s',
    'memory_format': '%(asctime)s - %(levelname)s - %(message)s'
}

# =============================================================================
# OUTPUT CONFIGURATION
# =============================================================================

# Output file naming template
OUTPUT_FILENAME_TEMPLATE = "glcm_counts_{grid_name}_d{distance}{parallel_suffix}_{timestamp}.xlsx"

# Sheet names in the output workbook
DIRECTION_SHEET_TEMPLATE = "GLCM_{degrees}"
PARAMETERS_SHEET = "Parameters"
REPORT_SHEET = "Report"

DEFAULT_DIRECTORIES = {
    'output': 'output_result',
}


# =============================================================================
# PATH UTILITY FUNCTIONS
# =============================================================================

def get_default_output_path() -> str:
    """Get the default output directory path (relative to the working directory)."""
    return os.path.join(os.getcwd(), DEFAULT_DIRECTORIES['output'])
