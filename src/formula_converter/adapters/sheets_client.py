"""
Google Sheets API client wrapper.

Reads the values and formulas of a worksheet range via gspread, runs the
converter on them and optionally writes the HTML grid back.  The core
converter never talks to Google Sheets; this module is the I/O adapter
around it.
"""

import logging
from typing import Any, Iterable, List, Optional, Tuple

import gspread
from gspread.exceptions import APIError
from gspread.utils import ValueRenderOption

from formula_converter.config import ConverterSettings
from formula_converter.converter import ColumnId, convert_formulas_to_html
from formula_converter.exceptions import InvalidCellReference, SheetsAPIError
from formula_converter.spreadsheet.a1 import cell_label_to_coordinate
from formula_converter.spreadsheet.model import Grid

logger = logging.getLogger(__name__)


class SheetsClient:
    """
    A wrapper around gspread for the reads and writes of a conversion.

    Attributes:
        gc: The authenticated gspread client, when worksheets are opened
            through this client
    """

    def __init__(self, gc: Optional[gspread.Client] = None) -> None:
        """
        Initialize the Sheets client.

        Args:
            gc: An authenticated gspread client, e.g. from ``gspread.service_account()``
                or ``gspread.oauth()``.  Only needed by ``open_worksheet``.
        """
        self.gc = gc

    def open_worksheet(self, spreadsheet_key: str, title: str) -> gspread.Worksheet:
        """
        Open a worksheet (tab) of a spreadsheet by key and title.

        Raises:
            SheetsAPIError: If the API call fails
            ValueError: If the client was created without a gspread client
        """
        if self.gc is None:
            raise ValueError("SheetsClient needs a gspread client to open worksheets")
        try:
            return self.gc.open_by_key(spreadsheet_key).worksheet(title)
        except APIError as e:
            raise SheetsAPIError(
                f"Failed to open worksheet '{title}' of spreadsheet '{spreadsheet_key}': {e}"
            ) from e

    def read_values(self, worksheet: gspread.Worksheet, range_name: str) -> Grid:
        """
        Read the displayed values of a range.

        Args:
            worksheet: The worksheet to read from
            range_name: The A1 notation range (e.g., "B2:C")

        Returns:
            A 2D list of formatted values (rows may be ragged)

        Raises:
            SheetsAPIError: If the API call fails
        """
        try:
            result = worksheet.get(range_name, value_render_option=ValueRenderOption.formatted)
        except APIError as e:
            raise SheetsAPIError(f"Failed to read values of range '{range_name}': {e}") from e
        logger.info("Read values of %s!%s", worksheet.title, range_name)
        return [list(row) for row in result]

    def read_formulas(self, worksheet: gspread.Worksheet, range_name: str) -> Grid:
        """
        Read the formulas of a range.

        Cells without a formula are returned as "" (the API returns their
        raw value under the FORMULA render option).

        Raises:
            SheetsAPIError: If the API call fails
        """
        try:
            result = worksheet.get(range_name, value_render_option=ValueRenderOption.formula)
        except APIError as e:
            raise SheetsAPIError(f"Failed to read formulas of range '{range_name}': {e}") from e
        logger.info("Read formulas of %s!%s", worksheet.title, range_name)
        return [
            [cell if isinstance(cell, str) and cell.startswith("=") else "" for cell in row]
            for row in result
        ]

    def write_values(self, worksheet: gspread.Worksheet, range_name: str, values: Grid) -> None:
        """
        Write values to a range in a worksheet.

        Args:
            worksheet: The worksheet to write to
            range_name: The A1 notation range or top-left cell (e.g., "E2")
            values: A 2D list of values to write

        Raises:
            SheetsAPIError: If the API call fails
        """
        try:
            worksheet.update(values, range_name=range_name)
        except APIError as e:
            raise SheetsAPIError(
                f"Failed to write values to range '{range_name}': {e}"
            ) from e
        logger.info("Wrote %d rows to %s!%s", len(values), worksheet.title, range_name)


def convert_worksheet_range(
    worksheet: gspread.Worksheet,
    range_a1: str,
    values: Optional[Grid] = None,
    formulas: Optional[Grid] = None,
    ignored_columns: Optional[Iterable[ColumnId]] = None,
    output_cell: Optional[str] = None,
    client: Optional[SheetsClient] = None,
    settings: Optional[ConverterSettings] = None,
) -> Grid:
    """Convert the formulas of a live worksheet range to HTML.

    Values and formulas not supplied by the caller are fetched from the
    worksheet.  The API trims trailing empty cells, so both grids are
    padded with "" to a common rectangle first.

    Args:
        worksheet: Worksheet the range belongs to
        range_a1: Range to convert, in A1 notation ("B2:C")
        values: Pre-fetched values of the range
        formulas: Pre-fetched formulas of the range
        ignored_columns: Columns to leave untouched
        output_cell: If given, the result is written back with this
            cell as its top-left corner
        client: SheetsClient to use; a bare one is created if omitted
        settings: Converter settings

    Returns:
        The converted grid

    Raises:
        SheetsAPIError: If reading or writing fails
        RangesDontMatch: If the grids cannot be aligned with the range
    """
    client = client or SheetsClient()
    if values is None:
        values = client.read_values(worksheet, range_a1)
    if formulas is None:
        formulas = client.read_formulas(worksheet, range_a1)

    declared_rows, declared_cols = _declared_shape(range_a1)
    nb_rows = declared_rows or max(len(values), len(formulas))
    nb_columns = declared_cols or max((len(row) for row in values + formulas), default=0)
    values = _pad(values, nb_rows, nb_columns)
    formulas = _pad(formulas, nb_rows, nb_columns)

    output = convert_formulas_to_html(
        values, formulas, range_a1=range_a1, ignored_columns=ignored_columns, settings=settings,
    )

    if output_cell and output:
        client.write_values(worksheet, output_cell, output)
    return output


def _declared_shape(range_a1: str) -> Tuple[Optional[int], Optional[int]]:
    """Rows and columns pinned by both endpoints of *range_a1*, else None."""
    parts = range_a1.split(":")
    if len(parts) != 2:
        return None, None
    try:
        start = cell_label_to_coordinate(parts[0])
        end = cell_label_to_coordinate(parts[1])
    except InvalidCellReference:
        return None, None

    rows = abs(end.row - start.row) + 1 if start.row is not None and end.row is not None else None
    cols = abs(end.col - start.col) + 1 if start.col is not None and end.col is not None else None
    return rows, cols


def _pad(grid: List[List[Any]], nb_rows: int, nb_columns: int) -> Grid:
    rows = [list(row)[:nb_columns] + [""] * (nb_columns - len(row)) for row in grid[:nb_rows]]
    rows.extend([[""] * nb_columns for _ in range(nb_rows - len(rows))])
    return rows
