"""
Grid conversion entry points.

Walks a grid of cell values and formulas and produces a parallel grid of
HTML fragments:

- a plain value starting with ``http`` becomes an ``<a>`` tag
- ``=HYPERLINK(...)`` and ``=IMAGE(...)`` become ``<a>`` / ``<img>`` tags
- ``=ARRAYFORMULA(...)`` results spill into the cells below and to the
  right of the formula, the way Google Sheets displays them
- every other cell keeps its value

A formula that fails to evaluate yields ``#ERROR!`` in its own cell only;
shape errors on the input grids abort the whole conversion up front.
"""

import logging
from typing import Any, Iterable, Optional, Set, Union

import pandas as pd

from formula_converter.adapters.frames import frame_from_grid, grid_from_frame
from formula_converter.config import ConverterSettings, get_settings
from formula_converter.exceptions import FormulaConverterError
from formula_converter.formula.evaluator import FormulaEvaluator
from formula_converter.rendering import is_url, to_link
from formula_converter.spreadsheet.a1 import column_label_to_index, index_to_column_label
from formula_converter.spreadsheet.model import ArrayResult, Grid, GridRange

logger = logging.getLogger(__name__)

ColumnId = Union[int, str]


class FormulaConverter:
    """Converts one grid of values/formulas to HTML.

    Each instance owns a fresh output grid and processed-marker grid, so
    a converter is single-use and independent conversions share no state.

    Usage::

        converter = FormulaConverter("B2:C", values, formulas)
        html = converter.process()
    """

    def __init__(
        self,
        range_a1: str,
        values: Grid,
        formulas: Grid,
        ignored_columns: Optional[Iterable[ColumnId]] = None,
        settings: Optional[ConverterSettings] = None,
    ) -> None:
        """Initialize a converter.

        Args:
            range_a1: A1 label of the window the grids come from ("B2:C")
            values: 2D list of displayed cell values
            formulas: 2D list of cell formulas, "" where a cell has none
            ignored_columns: Columns left untouched, as indices relative
                to the grid or as absolute column labels ("D")
            settings: Converter settings; defaults to ``get_settings()``

        Raises:
            RangesDontMatch: If the grids or the range differ in shape
            InvalidRange: If *range_a1* cannot be resolved
            InvalidColumnLabel: If an ignored column label is malformed
        """
        self.settings = settings or get_settings()
        self.data_range = GridRange.from_grid(range_a1, values, formulas)
        self.values = values
        self.formulas = formulas
        self.nb_rows = len(values)
        self.nb_columns = len(values[0]) if values else 0
        self.ignored_columns = self._resolve_ignored_columns(ignored_columns or [])
        self.evaluator = FormulaEvaluator(self.data_range, self.settings)

        self.output: Grid = [list(row) for row in values]
        self._processed = [[False] * self.nb_columns for _ in range(self.nb_rows)]

    def _resolve_ignored_columns(self, columns: Iterable[ColumnId]) -> Set[int]:
        resolved = set()
        for col in columns:
            if isinstance(col, str):
                resolved.add(column_label_to_index(col) - self.data_range.first_col)
            else:
                resolved.add(int(col))
        return resolved

    def process(self) -> Grid:
        """Convert every cell and return the output grid.

        Columns are walked left to right and each column top to bottom.
        Cells already written by an earlier array formula are skipped.
        """
        logger.debug(
            "Converting %s (%dx%d), ignored columns: %s",
            self.data_range.label, self.nb_rows, self.nb_columns,
            sorted(self.ignored_columns) or "none",
        )

        for j in range(self.nb_columns):
            if j in self.ignored_columns:
                continue

            for i in range(self.nb_rows):
                if self._processed[i][j]:
                    continue

                formula = self.formulas[i][j]
                value = self.values[i][j]

                if not formula:
                    if is_url(value, self.settings.url_prefix):
                        self.output[i][j] = to_link(value)
                    self._processed[i][j] = True
                    continue

                result = self._evaluate_cell(i, j, formula, value)
                if isinstance(result, ArrayResult):
                    self._spill(i, j, result)
                else:
                    if result is not None:
                        self.output[i][j] = result
                    self._processed[i][j] = True

        return self.output

    def _evaluate_cell(self, i: int, j: int, formula: Any, value: Any) -> Any:
        text = str(formula)
        if text.startswith("="):
            text = text[1:]

        try:
            return self.evaluator.evaluate(text, value)
        except FormulaConverterError as e:
            logger.warning(
                "Formula in %s failed (%s): %s",
                self._cell_label(i, j), formula, e,
            )
            return self.settings.error_marker

    def _spill(self, i: int, j: int, result: ArrayResult) -> None:
        """Write an array result anchored at (i, j), marking each cell processed."""
        self._processed[i][j] = True
        dropped = 0

        for r, row in enumerate(result.rows):
            for c, element in enumerate(row):
                ti, tj = i + r, j + c
                if ti >= self.nb_rows or tj >= self.nb_columns:
                    dropped += 1
                    continue
                if (r, c) != (0, 0) and (self._processed[ti][tj] or tj in self.ignored_columns):
                    continue
                if element is not None:
                    self.output[ti][tj] = element
                self._processed[ti][tj] = True

        if dropped:
            logger.debug(
                "Array result at %s spills past the grid, %d cells dropped",
                self._cell_label(i, j), dropped,
            )

    def _cell_label(self, i: int, j: int) -> str:
        row = self.data_range.first_row + i + 1
        return f"{index_to_column_label(self.data_range.first_col + j)}{row}"


def convert_formulas_to_html(
    values: Union[Grid, pd.DataFrame],
    formulas: Union[Grid, pd.DataFrame],
    range_a1: str = "A1",
    ignored_columns: Optional[Iterable[ColumnId]] = None,
    settings: Optional[ConverterSettings] = None,
    as_frame: bool = False,
) -> Union[Grid, pd.DataFrame]:
    """Convert HYPERLINK / IMAGE / ARRAYFORMULA formulas of a grid to HTML.

    Args:
        values: 2D list (or DataFrame) of displayed cell values
        formulas: 2D list (or DataFrame) of formulas, same shape as values
        range_a1: A1 label of the window the grids come from; open ends
            ("B2:C") and a bare anchor ("B2") are completed from the grids
        ignored_columns: Columns to leave untouched, as indices relative
            to the grid or absolute column labels
        settings: Converter settings; defaults to ``get_settings()``
        as_frame: Return a DataFrame labelled with sheet columns and rows

    Returns:
        Grid of the same shape: HTML fragments, untouched values, or
        ``#ERROR!`` for cells whose formula could not be evaluated

    Raises:
        RangesDontMatch: If values, formulas and range differ in shape
    """
    if isinstance(values, pd.DataFrame):
        values = grid_from_frame(values)
    if isinstance(formulas, pd.DataFrame):
        formulas = grid_from_frame(formulas)

    converter = FormulaConverter(range_a1, values, formulas, ignored_columns, settings)
    output = converter.process()

    if as_frame:
        return frame_from_grid(output, converter.data_range)
    return output
