"""
Functions for writing run parameters into the output workbook
"""

from pathlib import Path
from typing import Any, Dict, Union

from openpyxl import Workbook, load_workbook

from ..config.settings import PARAMETERS_SHEET


def _cell_value(value: Any) -> Any:
    # openpyxl only stores scalars
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def write_to_excel(
        excel_path: Union[str, Path],
        params_data: Dict[str, Any]
) -> None:
    excel_path = Path(excel_path)

    # Ensure parent folder exists
    excel_path.parent.mkdir(parents=True, exist_ok=True)

    # Load or create workbook
    if excel_path.exists():
        wb = load_workbook(excel_path)
    else:
        wb = Workbook()

    if PARAMETERS_SHEET not in wb.sheetnames:
        ws = wb.create_sheet(PARAMETERS_SHEET)
    else:
        ws = wb[PARAMETERS_SHEET]

    # Clear existing content
    ws.delete_rows(1, ws.max_row)

    # Header row of keys, then one row of values
    ws.append(list(params_data.keys()))
    ws.append([_cell_value(value) for value in params_data.values()])

    wb.save(excel_path)
