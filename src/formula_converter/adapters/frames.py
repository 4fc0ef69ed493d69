"""
pandas interop for converter grids.

Converts between pandas DataFrames and the row-major 2D lists the
converter works on, so values read with pandas can be converted and the
result inspected with sheet labels.
"""

import math
from typing import Any, Optional

import pandas as pd

from formula_converter.spreadsheet.a1 import index_to_column_label
from formula_converter.spreadsheet.model import Grid, GridRange


def grid_from_frame(df: pd.DataFrame, include_header: bool = False) -> Grid:
    """Convert a DataFrame to a 2D list of cell values.

    Args:
        df: DataFrame to convert
        include_header: If True, the first row is the column headers

    Returns:
        2D list where each inner list is a row of cell values; missing
        values become ""
    """
    rows: Grid = []
    if include_header:
        rows.append([str(c) for c in df.columns])
    for row in df.itertuples(index=False, name=None):
        rows.append([_normalize_value(v) for v in row])
    return rows


def frame_from_grid(grid: Grid, grid_range: Optional[GridRange] = None) -> pd.DataFrame:
    """Wrap a grid in a DataFrame labelled like the sheet.

    Columns are named with their column letters and the index holds the
    one-based sheet row numbers, both offset by *grid_range*'s top-left
    cell (A1 when omitted).
    """
    first_row = grid_range.first_row if grid_range is not None else 0
    first_col = grid_range.first_col if grid_range is not None else 0
    nb_columns = len(grid[0]) if grid else 0

    return pd.DataFrame(
        [list(row) for row in grid],
        columns=[index_to_column_label(first_col + j) for j in range(nb_columns)],
        index=pd.Index([first_row + 1 + i for i in range(len(grid))], name="row"),
    )


def _normalize_value(v: Any) -> Any:
    if v is None or v is pd.NA or (isinstance(v, float) and math.isnan(v)):
        return ""
    return v
