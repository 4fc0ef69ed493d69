"""
A1 notation helpers.

Converts between spreadsheet labels ("B", "12", "B12", "B2:C10") and
zero-based grid indices.  Labels may omit either part: "A" is a whole
column, "5" a whole row, and ranges such as "A:B", "2:5" or "A1:B" are
open-ended and get completed from a context range.

All indices are 0-indexed unless ``one_based=True`` is requested, which
adds one to every returned index (the Google Sheets API convention).
"""

import re
from typing import Optional

from formula_converter.exceptions import (
    InvalidCellReference,
    InvalidColumnLabel,
    InvalidRange,
)
from formula_converter.spreadsheet.model import CellCoordinate, GridRange

_COLUMN_LABEL_RE = re.compile(r"^[A-Z]{1,2}$")
_LEADING_LETTERS_RE = re.compile(r"^[A-Z]+")
_TRAILING_DIGITS_RE = re.compile(r"[0-9]+$")


def column_label_to_index(label: str, one_based: bool = False) -> int:
    """Convert a column label to its index.

    Args:
        label: One or two uppercase letters ("A", "Z", "AA", "ZZ")
        one_based: Return a 1-indexed column number instead

    Returns:
        Column index (A = 0, Z = 25, AA = 26, ZZ = 701)

    Raises:
        InvalidColumnLabel: If label is not a string of 1-2 letters A-Z
    """
    if not isinstance(label, str) or not _COLUMN_LABEL_RE.match(label):
        raise InvalidColumnLabel(f"Expected column label, got {label!r}")

    col_1indexed = 0
    for char in label:
        col_1indexed = col_1indexed * 26 + (ord(char) - 64)
    return col_1indexed - 1 + (1 if one_based else 0)


def index_to_column_label(index: int, one_based: bool = False) -> str:
    """Convert a column index back to its letter label.

    Inverse of :func:`column_label_to_index`.

    Raises:
        InvalidColumnLabel: If index does not name a column
    """
    col_1indexed = index if one_based else index + 1
    if col_1indexed < 1:
        raise InvalidColumnLabel(f"Column index out of range: {index}")

    label = ""
    while col_1indexed > 0:
        col_1indexed -= 1
        label = chr(65 + (col_1indexed % 26)) + label
        col_1indexed //= 26
    return label


def row_label_to_index(label, one_based: bool = False) -> int:
    """Convert a row number ("12" or 12) to its index.

    Raises:
        InvalidCellReference: If label is not a row number of at least 1
    """
    try:
        row_number = int(label)
    except (TypeError, ValueError) as e:
        raise InvalidCellReference(f"Invalid row label: {label!r}") from e
    if row_number < 1:
        raise InvalidCellReference(f"Row numbers start at 1, got {label!r}")
    return row_number - 1 + (1 if one_based else 0)


def cell_label_to_coordinate(label: str, one_based: bool = False) -> CellCoordinate:
    """Split a cell label into row and column indices.

    Leading letters give the column, trailing digits the row.  Either one
    may be missing, in which case the matching field is ``None``.
    Absolute markers (``$B$2``) are ignored.

    Args:
        label: Cell label such as "B2", "B" or "2"
        one_based: Return 1-indexed coordinates

    Returns:
        CellCoordinate with ``row`` and/or ``col`` set

    Raises:
        InvalidCellReference: If the label has neither letters nor digits
        InvalidColumnLabel: If the column part is longer than two letters
    """
    if not isinstance(label, str):
        raise InvalidCellReference(f"Invalid cell reference: {label!r}")

    clean = label.replace("$", "").strip()
    col_match = _LEADING_LETTERS_RE.match(clean)
    row_match = _TRAILING_DIGITS_RE.search(clean)

    if col_match is None and row_match is None:
        raise InvalidCellReference(f"Invalid cell reference: {label!r}")

    row = row_label_to_index(row_match.group(0), one_based) if row_match else None
    col = column_label_to_index(col_match.group(0), one_based) if col_match else None
    return CellCoordinate(row=row, col=col)


def resolve_range_bounds(range_label: str, context: Optional[GridRange] = None) -> GridRange:
    """Compute the bounding box of an A1 range.

    Open endpoints are completed from *context*: an unanchored start
    ("A:B", "2:5") begins at the context's first row/column, and an open
    end ("A1:B", "A2:2") stops at the context's last row/column.  A label
    without ``:`` is a single cell.  Bounds are normalised so that
    ``first_* <= last_*`` whatever order the endpoints were given in.

    The returned range keeps a back-reference to the root range that
    owns the backing values, when *context* has one.

    Args:
        range_label: Range in A1 notation ("B2:C10", "B2:C", "C:T", "1:2")
        context: Range used to complete open endpoints

    Returns:
        GridRange with resolved bounds

    Raises:
        InvalidRange: If the label is malformed, or an endpoint is open
            and no context is available
    """
    if not isinstance(range_label, str) or not range_label.strip():
        raise InvalidRange(f"Invalid range: {range_label!r}")

    parts = range_label.strip().split(":")
    if len(parts) > 2:
        raise InvalidRange(f"Invalid range: {range_label!r}")

    try:
        start = cell_label_to_coordinate(parts[0])
    except InvalidCellReference as e:
        raise InvalidRange(f"Invalid range: {range_label!r}") from e

    if len(parts) == 1:
        end = start
    elif not parts[1].strip():
        end = CellCoordinate(row=None, col=None)
    else:
        try:
            end = cell_label_to_coordinate(parts[1])
        except InvalidCellReference as e:
            raise InvalidRange(f"Invalid range: {range_label!r}") from e

    def _complete(value, fallback, what):
        if value is not None:
            return value
        if context is None:
            raise InvalidRange(f"Invalid range: {range_label!r} (open {what} and no context range)")
        return fallback

    first_row = _complete(start.row, context.first_row if context else None, "start row")
    first_col = _complete(start.col, context.first_col if context else None, "start column")
    last_row = _complete(end.row, context.last_row if context else None, "end row")
    last_col = _complete(end.col, context.last_col if context else None, "end column")

    return GridRange(
        first_row=min(first_row, last_row),
        first_col=min(first_col, last_col),
        last_row=max(first_row, last_row),
        last_col=max(first_col, last_col),
        root=context.source if context is not None and context.has_values else None,
        label=range_label.strip(),
    )
