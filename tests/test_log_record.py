import logging

from openpyxl import load_workbook

from pyglcm.utils.log_record import (
    MemoryLogHandler, extract_direction, extract_grid_name, get_levels_from_mode, initialize_logging,
    log_to_excel, parse_log_level_and_message)


def test_memory_handler_captures_formatted_lines():
    logger, memory_handler = initialize_logging("all")

    logger.info("[grid] 90° GLCM: 12 pairs")
    logger.debug("not captured")

    logs = memory_handler.get_logs()
    assert len(logs) == 1
    assert logs[0].endswith("INFO - [grid] 90° GLCM: 12 pairs")


def test_info_mode_filters_other_levels():
    logger, memory_handler = initialize_logging("info")

    logger.info("kept")
    logger.warning("dropped")

    assert [line.split(" - ")[-1] for line in memory_handler.get_logs()] == ["kept"]


def test_none_mode_disables_logger():
    logger, memory_handler = initialize_logging("none")

    logger.error("silenced")

    assert logger.disabled
    assert memory_handler.get_logs() == []
    initialize_logging("all")
    assert not logging.getLogger("Dev_logger").disabled


def test_levels_from_mode():
    assert get_levels_from_mode("error") == (logging.ERROR, logging.ERROR)
    assert get_levels_from_mode("none") == (None, None)
    assert get_levels_from_mode("unknown") == (logging.INFO, logging.INFO)


def test_parsing_helpers():
    level, message = parse_log_level_and_message("2024-01-01 10:00:00,000 - WARNING - [scan_3] 135° GLCM: 0 pairs")

    assert level == "WARNING"
    assert extract_grid_name(message) == "scan_3"
    assert extract_direction(message) == "135"
    assert parse_log_level_and_message("plain") == ("INFO", "plain")


def test_log_to_excel(tmp_path):
    path = tmp_path / "report.xlsx"
    handler = MemoryLogHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
    handler.emit(logging.LogRecord("Dev_logger", logging.ERROR, __file__, 1, "[g] 0° failed", None, None))

    log_to_excel(str(path), handler.get_logs())

    sheet = load_workbook(path)["Report"]
    rows = list(sheet.iter_rows(values_only=True))
    assert rows[0] == ("Grid", "Direction", "Level", "Message")
    assert rows[1] == ("g", "0", "ERROR", "[g] 0° failed")
