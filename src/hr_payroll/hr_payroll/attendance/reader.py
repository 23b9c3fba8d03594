from __future__ import annotations

import zipfile
from dataclasses import dataclass
from typing import Any, BinaryIO, List, Optional, Union

import pandas as pd

from ..core.exceptions import SpreadsheetFormatError


@dataclass(frozen=True)
class SheetData:
    name: str
    header: List[Any]
    rows: List[List[Any]]


def _frame_to_sheet(name: str, df: pd.DataFrame) -> Optional[SheetData]:
    # Only leading and trailing blank rows go; interior blank rows keep their
    # position because the row index can stand in for the day of month.
    filled = df.notna().any(axis=1).to_numpy()
    if not filled.any():
        return None
    first = int(filled.argmax())
    last = len(filled) - int(filled[::-1].argmax())
    df = df.iloc[first:last]
    values = df.astype(object).where(pd.notna(df), None).values.tolist()
    return SheetData(name=str(name), header=list(values[0]), rows=[list(r) for r in values[1:]])


def read_workbook(source: Union[str, BinaryIO], *, filename: Optional[str] = None) -> List[SheetData]:
    """Read every sheet of an .xlsx/.csv upload as raw header + rows.

    Cells are left as pandas produced them (numbers, strings, datetimes/times),
    except that empty cells become None. Blank sheets are dropped, and so are
    blank rows before the header or after the last filled row.
    """

    name = (filename or (source if isinstance(source, str) else "") or "").lower()
    try:
        if name.endswith(".csv"):
            frames = {"Sheet1": pd.read_csv(source, header=None, dtype=object, skip_blank_lines=False)}
        else:
            frames = pd.read_excel(source, sheet_name=None, header=None, engine="openpyxl")
    except (ValueError, OSError, zipfile.BadZipFile) as e:
        raise SpreadsheetFormatError(f"Could not read spreadsheet: {e}") from e

    sheets = [s for s in (_frame_to_sheet(n, df) for n, df in frames.items()) if s is not None]
    if not sheets:
        raise SpreadsheetFormatError("Spreadsheet is empty or missing a header row")
    return sheets
