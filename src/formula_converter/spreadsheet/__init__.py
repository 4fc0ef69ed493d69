"""
Spreadsheet grid module.

This module provides A1 notation helpers and the range model the formula
evaluator resolves cell and range references against.
"""

from formula_converter.spreadsheet.model import (
    ArrayResult,
    CellCoordinate,
    Grid,
    GridRange,
)
from formula_converter.spreadsheet.a1 import (
    cell_label_to_coordinate,
    column_label_to_index,
    index_to_column_label,
    resolve_range_bounds,
    row_label_to_index,
)

__all__ = [
    "ArrayResult",
    "CellCoordinate",
    "Grid",
    "GridRange",
    "cell_label_to_coordinate",
    "column_label_to_index",
    "index_to_column_label",
    "resolve_range_bounds",
    "row_label_to_index",
]
