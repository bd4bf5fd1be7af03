""" Logging setup and writing of captured log lines into the output workbook. """

import logging
import multiprocessing as mp
import re
from logging.handlers import QueueListener, QueueHandler
from pathlib import Path
from typing import List, Tuple, Optional

from openpyxl import Workbook, load_workbook

from ..config.settings import LOGGING_CONFIG, LOG_LEVEL_MAP, REPORT_SHEET

LOGGER_NAME = "Dev_logger"


# ------------------------------------------------------------
# Logging Handlers
# ------------------------------------------------------------

class MemoryLogHandler(logging.Handler):
    """Keeps formatted log lines in memory until they are written to the report sheet."""

    def __init__(self):
        super().__init__()
        self.records: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno >= self.level:
            self.records.append(self.format(record))

    def get_logs(self) -> List[str]:
        return self.records.copy()

    def clear(self) -> None:
        self.records.clear()


# ------------------------------------------------------------
# Log Writing to Excel
# ------------------------------------------------------------

REPORT_SHEET_HEADERS = ["Grid", "Direction", "Level", "Message"]


def log_to_excel(excel_path: str, logs: List[str], sheet_name: str = REPORT_SHEET) -> None:
    """Append parsed log lines to a sheet of the workbook at `excel_path`."""
    excel_path = Path(excel_path)
    excel_path.parent.mkdir(parents=True, exist_ok=True)

    workbook = load_workbook(excel_path) if excel_path.exists() else Workbook()
    if sheet_name not in workbook.sheetnames:
        sheet = workbook.create_sheet(title=sheet_name)
        sheet.append(REPORT_SHEET_HEADERS)
    else:
        sheet = workbook[sheet_name]

    for line in logs:
        level, message = parse_log_level_and_message(line)
        sheet.append([extract_grid_name(message), extract_direction(message), level, message])

    workbook.save(excel_path)


# ------------------------------------------------------------
# Log Parsing
# ------------------------------------------------------------

def parse_log_level_and_message(log_line: str) -> Tuple[str, str]:
    """Extract log level and message from formatted log line."""
    parts = log_line.split(" - ", maxsplit=2)
    if len(parts) == 3:
        _, level, message = parts
        return level.strip(), message.strip()
    return "INFO", log_line.strip()


def extract_grid_name(message: str) -> str:
    """Grid name from a leading [name] tag."""
    match = re.match(r"^\[(?P<grid>[^\]]+)\]", message)
    return match.group("grid").strip() if match else ""


def extract_direction(message: str) -> str:
    """Direction in degrees from a "<n>°" mention."""
    match = re.search(r"\b(?P<deg>0|45|90|135)°", message)
    return match.group("deg") if match else ""


# ------------------------------------------------------------
# Logger Setup
# ------------------------------------------------------------

def get_levels_from_mode(log_mode_level: str = "all") -> Tuple[Optional[int], Optional[int]]:
    """Return console and memory logging levels for a report mode."""
    mode_config = LOG_LEVEL_MAP.get(log_mode_level, LOG_LEVEL_MAP["all"])
    console_level = getattr(logging, mode_config['console_level']) if mode_config['console_level'] else None
    memory_level = getattr(logging, mode_config['memory_level']) if mode_config['memory_level'] else None
    return console_level, memory_level


def _only_info(record: logging.LogRecord) -> bool:
    return record.levelno == logging.INFO


def create_console_handler(console_level: Optional[int], log_level_mode: str = "all") -> Optional[
    logging.StreamHandler]:
    """Create a console handler if console_level is set."""
    if console_level is None:
        return None

    handler = logging.StreamHandler()
    handler.setLevel(console_level)

    if log_level_mode == "info":
        handler.addFilter(_only_info)

    handler.setFormatter(logging.Formatter(LOGGING_CONFIG['console_format']))
    return handler


def configure_memory_handler(memory_handler: MemoryLogHandler, memory_level: Optional[int],
                             log_mode_level: str = "all") -> None:
    """Configure memory handler if memory_level is set."""
    if memory_level is None:
        return
    memory_handler.setLevel(memory_level)

    if log_mode_level == "info":
        memory_handler.addFilter(_only_info)

    memory_handler.setFormatter(logging.Formatter(LOGGING_CONFIG['memory_format']))


def setup_logging(memory_handler: Optional[MemoryLogHandler] = None, log_mode_level: str = "all") -> Tuple[
    logging.Logger, Optional[MemoryLogHandler]]:
    """
    Setup the package logger with a console handler and an optional memory handler.
    Handler levels follow LOG_LEVEL_MAP.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.disabled = False
    if logger.hasHandlers():
        logger.handlers.clear()

    console_level, memory_level = get_levels_from_mode(log_mode_level)

    # Silent mode
    if console_level is None and memory_level is None:
        logger.disabled = True
        return logger, memory_handler

    console_handler = create_console_handler(console_level, log_mode_level)
    if console_handler:
        logger.addHandler(console_handler)

    if memory_handler:
        configure_memory_handler(memory_handler, memory_level, log_mode_level)
        if memory_level is not None:
            logger.addHandler(memory_handler)

    return logger, memory_handler


def initialize_logging(log_mode_level: str = "all") -> Tuple[logging.Logger, MemoryLogHandler]:
    """Initialize logger and memory handler."""
    return setup_logging(MemoryLogHandler(), log_mode_level)


def setup_multiprocessing_logging(memory_handler: Optional[MemoryLogHandler] = None, log_mode_level: str = "all") -> \
        Tuple[Optional[mp.Queue], Optional[QueueListener]]:
    """
    Create the queue worker processes log into and the listener that drains it
    into the console and memory handlers of the parent.
    """
    console_level, memory_level = get_levels_from_mode(log_mode_level)

    # Silent mode
    if console_level is None and memory_level is None:
        logging.getLogger(LOGGER_NAME).disabled = True
        return None, None

    log_queue = mp.Queue()
    handlers = []

    console_handler = create_console_handler(console_level, log_mode_level)
    if console_handler:
        handlers.append(console_handler)

    if memory_handler:
        configure_memory_handler(memory_handler, memory_level, log_mode_level)
        if memory_level is not None:
            handlers.append(memory_handler)

    listener = QueueListener(log_queue, *handlers, respect_handler_level=True)
    return log_queue, listener


def init_worker_logging(log_queue: mp.Queue, log_level_mode: str = "all") -> None:
    """
    Worker process initializer: route the package logger into `log_queue`.
    """
    console_level, _ = get_levels_from_mode(log_level_mode)
    if console_level is None:
        logging.getLogger(LOGGER_NAME).disabled = True
        return

    worker_logger = logging.getLogger(LOGGER_NAME)
    worker_logger.setLevel(logging.DEBUG)
    worker_logger.handlers.clear()

    queue_handler = QueueHandler(log_queue)
    queue_handler.setLevel(console_level)
    worker_logger.addHandler(queue_handler)
    worker_logger.propagate = False
