"""
Grid model classes.

This module provides the data structures shared by the converter:
- CellCoordinate: A (row, col) pair parsed from an A1 label
- GridRange: A rectangular window of the sheet, optionally backed by the
  values/formulas grids of the conversion (the *root* range)
- ArrayResult: A 2D result produced by an ARRAYFORMULA broadcast
"""

from typing import Any, Callable, List, NamedTuple, Optional

from formula_converter.exceptions import InvalidCellReference, InvalidRange, RangesDontMatch

Grid = List[List[Any]]


class CellCoordinate(NamedTuple):
    """Row/column indices of a cell.  Either may be ``None`` for a whole
    column ("B") or a whole row ("5") reference."""

    row: Optional[int]
    col: Optional[int]


class GridRange:
    """Represents a rectangular cell region using 0-indexed sheet coordinates.

    The root range of a conversion owns the ``values`` and ``formulas``
    grids.  Ranges resolved from formula arguments only hold a reference to
    that root and read through it, so lookups always use absolute sheet
    coordinates translated by the root's first row/column.

    Attributes:
        first_row: First row (0-indexed, inclusive)
        first_col: First column (0-indexed, inclusive)
        last_row: Last row (0-indexed, inclusive)
        last_col: Last column (0-indexed, inclusive)
        values: Backing values grid (root range only)
        formulas: Backing formulas grid (root range only)
        root: Root range this range reads its values from
        label: The A1 label this range was resolved from, if any
    """

    def __init__(
        self,
        first_row: int,
        first_col: int,
        last_row: Optional[int] = None,
        last_col: Optional[int] = None,
        values: Optional[Grid] = None,
        formulas: Optional[Grid] = None,
        root: Optional["GridRange"] = None,
        label: Optional[str] = None,
    ) -> None:
        if first_row < 0 or first_col < 0:
            raise ValueError("Row and column must be non-negative (0-indexed)")

        self.first_row = first_row
        self.first_col = first_col
        self.last_row = last_row if last_row is not None else first_row
        self.last_col = last_col if last_col is not None else first_col

        if self.last_row < self.first_row or self.last_col < self.first_col:
            raise ValueError("End coordinates must be >= start coordinates")

        self.values = values
        self.formulas = formulas
        self.root = root
        self.label = label

    @classmethod
    def from_grid(cls, range_label: str, values: Grid, formulas: Grid) -> "GridRange":
        """Build the root range of a conversion.

        The label anchors the grids on the sheet ("B2:C10").  Open ends
        ("B2:C", "B:C") and a bare anchor cell ("B2") are completed with
        the grids' own dimensions.

        Args:
            range_label: A1 label of the window the grids were read from
            values: 2D list of cell values
            formulas: 2D list of cell formulas ("" when a cell has none)

        Returns:
            Root GridRange owning *values* and *formulas*

        Raises:
            RangesDontMatch: If the grids differ in shape, are not
                rectangular, or do not fit the declared range
            InvalidRange: If the label cannot be resolved
        """
        from formula_converter.spreadsheet.a1 import cell_label_to_coordinate, resolve_range_bounds

        nb_rows, nb_columns = _grid_shape(values, "values")
        if _grid_shape(formulas, "formulas") != (nb_rows, nb_columns):
            raise RangesDontMatch(
                f"Ranges do not match: values are {nb_rows}x{nb_columns}, "
                f"formulas are {len(formulas)}x{len(formulas[0]) if formulas else 0}"
            )

        label = range_label.strip()
        if ":" not in label:
            label = f"{label}:"

        try:
            anchor = cell_label_to_coordinate(label.split(":")[0])
        except InvalidCellReference as e:
            raise InvalidRange(f"Invalid range: {range_label!r}") from e
        first_row = anchor.row if anchor.row is not None else 0
        first_col = anchor.col if anchor.col is not None else 0
        extent = cls(
            first_row=first_row,
            first_col=first_col,
            last_row=first_row + max(nb_rows, 1) - 1,
            last_col=first_col + max(nb_columns, 1) - 1,
        )

        bounds = resolve_range_bounds(label, extent)
        if nb_rows and nb_columns and (bounds.nb_rows, bounds.nb_columns) != (nb_rows, nb_columns):
            raise RangesDontMatch(
                f"Ranges do not match: range {range_label!r} is "
                f"{bounds.nb_rows}x{bounds.nb_columns}, grids are {nb_rows}x{nb_columns}"
            )

        return cls(
            first_row=bounds.first_row,
            first_col=bounds.first_col,
            last_row=bounds.last_row,
            last_col=bounds.last_col,
            values=values,
            formulas=formulas,
            label=range_label.strip(),
        )

    @property
    def nb_rows(self) -> int:
        return self.last_row - self.first_row + 1

    @property
    def nb_columns(self) -> int:
        return self.last_col - self.first_col + 1

    @property
    def has_values(self) -> bool:
        return self.values is not None or self.root is not None

    @property
    def source(self) -> "GridRange":
        """The range that owns the backing grids (the root, or self)."""
        return self.root if self.root is not None else self

    def same_shape_as(self, other: Any) -> bool:
        """Check whether *other* has the same number of rows and columns."""
        return self.nb_rows == other.nb_rows and self.nb_columns == other.nb_columns

    def get_value(self, rel_row: int, rel_col: int) -> Any:
        """Return the value at an offset relative to this range's top-left cell.

        Raises:
            InvalidCellReference: If the cell is outside the root grid
        """
        return self.get_absolute_value(self.first_row + rel_row, self.first_col + rel_col)

    def get_absolute_value(self, row: int, col: int) -> Any:
        """Return the value of the sheet cell at (row, col), 0-indexed.

        Raises:
            InvalidCellReference: If the cell is outside the root grid
        """
        root = self.source
        if root.values is None:
            raise InvalidCellReference(f"Range {self!r} has no backing values")

        r = row - root.first_row
        c = col - root.first_col
        if not (0 <= r < root.nb_rows and 0 <= c < root.nb_columns):
            raise InvalidCellReference(
                f"Cell ({row}, {col}) is outside of the converted range {root!r}"
            )
        return root.values[r][c]

    def to_a1(self) -> str:
        """Convert to A1 notation ("B2" or "B2:C10")."""
        from formula_converter.spreadsheet.a1 import index_to_column_label

        start_cell = f"{index_to_column_label(self.first_col)}{self.first_row + 1}"
        if self.first_row == self.last_row and self.first_col == self.last_col:
            return start_cell
        end_cell = f"{index_to_column_label(self.last_col)}{self.last_row + 1}"
        return f"{start_cell}:{end_cell}"

    def __repr__(self) -> str:
        return f"GridRange({self.to_a1()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridRange):
            return NotImplemented
        return (
            self.first_row == other.first_row
            and self.first_col == other.first_col
            and self.last_row == other.last_row
            and self.last_col == other.last_col
        )


class ArrayResult:
    """A 2D block of values produced by broadcasting a function over ranges.

    Exposes the same shape/lookup interface as GridRange so a nested
    broadcast result can feed an enclosing call as a range argument.
    """

    def __init__(self, rows: Grid) -> None:
        self.rows = rows

    @property
    def nb_rows(self) -> int:
        return len(self.rows)

    @property
    def nb_columns(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def same_shape_as(self, other: Any) -> bool:
        return self.nb_rows == other.nb_rows and self.nb_columns == other.nb_columns

    def get_value(self, rel_row: int, rel_col: int) -> Any:
        return self.rows[rel_row][rel_col]

    def map(self, fn: Callable[[Any], Any]) -> "ArrayResult":
        """Apply *fn* to every element, returning a new ArrayResult."""
        return ArrayResult([[fn(v) for v in row] for row in self.rows])

    def to_list(self) -> Grid:
        return [list(row) for row in self.rows]

    def __repr__(self) -> str:
        return f"ArrayResult({self.nb_rows}x{self.nb_columns})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArrayResult):
            return NotImplemented
        return self.rows == other.rows


def _grid_shape(grid: Grid, name: str) -> tuple:
    """Return (rows, cols) of a rectangular 2D list."""
    if not grid:
        return 0, 0
    nb_columns = len(grid[0])
    for i, row in enumerate(grid):
        if len(row) != nb_columns:
            raise RangesDontMatch(
                f"Ranges do not match: {name} row {i} has {len(row)} cells, expected {nb_columns}"
            )
    return len(grid), nb_columns
