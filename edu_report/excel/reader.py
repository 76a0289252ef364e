from __future__ import annotations

import math
import re
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl import load_workbook

from ..models.errors import ReadError

"""Workbook reader: first sheet of an Excel file as rows of text.

Cells are rendered the way they read in a spreadsheet, not as stored:

- empty cells -> ""
- integral floats lose their ".0" (1.0 -> "1")
- percent-formatted numbers are shown as percentages: 0.399 under
  ``0.0%`` reads "39.9%", 0.65 under ``0%`` reads "65%"
- trailing empty cells of a row and trailing empty rows are dropped, so rows
  can be ragged

.xlsx/.xlsm files are read with openpyxl (cached formula values, number
formats available). Legacy .xls goes through pandas + xlrd, which carries no
number formats; those cells keep their stored value.
"""

__all__ = [
    "ReadError",
    "cell_text",
    "format_number",
    "read_first_sheet_rows",
]

_XLS_SUFFIXES = {".xls"}
# decimals of a percent format: "0%" -> 0, "0.0%" -> 1, "#,##0.00%" -> 2
_PERCENT_DECIMALS_RE = re.compile(r"(?:\.([0#]+))?\s*%")
_QUOTED_RE = re.compile(r'"[^"]*"|\\.')


def _percent_decimals(number_format: str) -> int | None:
    """Decimal places of a percent format, or None when it is not one."""
    section = _QUOTED_RE.sub("", number_format.split(";")[0])
    m = _PERCENT_DECIMALS_RE.search(section)
    if m is None:
        return None
    return len(m.group(1) or "")


def cell_text(value: Any) -> str:
    if value is None or value is pd.NaT:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)


def format_number(value: Any, number_format: str | None) -> str:
    """Render a cell value under its Excel number format."""
    if isinstance(value, (int, float)) and not isinstance(value, bool) and number_format:
        decimals = _percent_decimals(number_format)
        if decimals is not None:
            return f"{float(value) * 100:.{decimals}f}%"
    return cell_text(value)


def _trim_row(cells: list[str]) -> list[str]:
    while cells and not cells[-1].strip():
        cells.pop()
    return cells


def _xlsx_rows(path: Path) -> list[list[str]]:
    wb = load_workbook(path, data_only=True)
    try:
        if not wb.worksheets:
            raise ReadError(f"workbook has no sheets: {path.name}")
        ws = wb.worksheets[0]
        return [
            _trim_row([format_number(c.value, c.number_format) for c in row])
            for row in ws.iter_rows()
        ]
    finally:
        wb.close()


def _xls_rows(path: Path) -> list[list[str]]:
    with pd.ExcelFile(path, engine="xlrd") as xls:
        if not xls.sheet_names:
            raise ReadError(f"workbook has no sheets: {path.name}")
        # keep_default_na=False: "NA" / "null" in a cell stay text
        df = xls.parse(xls.sheet_names[0], header=None, dtype=object, keep_default_na=False)
    return [_trim_row([cell_text(v) for v in values]) for values in df.itertuples(index=False, name=None)]


def read_first_sheet_rows(path: Path) -> list[list[str]]:
    """Return the rows of the first sheet of ``path`` as lists of strings.

    Raises:
        ReadError: the file is missing, cannot be parsed, or has no sheets
    """
    try:
        if path.suffix.lower() in _XLS_SUFFIXES:
            rows = _xls_rows(path)
        else:
            rows = _xlsx_rows(path)
    except ReadError:
        raise
    except Exception as e:
        raise ReadError(f"cannot read {path.name}: {e}") from e

    while rows and not rows[-1]:
        rows.pop()
    return rows
