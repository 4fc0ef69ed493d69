"""
Unit tests for A1 notation helpers.

Tests cover:
- Column labels <-> indices, including the 0/1-based switch
- Row labels
- Cell labels with missing row or column parts
- Range bounds, including open-ended ranges completed from a context
"""

import pytest

from formula_converter.exceptions import InvalidCellReference, InvalidColumnLabel, InvalidRange
from formula_converter.spreadsheet.a1 import (
    cell_label_to_coordinate,
    column_label_to_index,
    index_to_column_label,
    resolve_range_bounds,
    row_label_to_index,
)
from formula_converter.spreadsheet.model import CellCoordinate, GridRange


class TestColumnLabels:
    """Test Suite for column label conversion."""

    def test_single_letters(self):
        """A is 0 and Z is 25."""
        assert column_label_to_index("A") == 0
        assert column_label_to_index("C") == 2
        assert column_label_to_index("Z") == 25

    def test_two_letters(self):
        """Two-letter labels continue after Z."""
        assert column_label_to_index("AA") == 26
        assert column_label_to_index("AZ") == 51
        assert column_label_to_index("BA") == 52
        assert column_label_to_index("ZZ") == 701

    def test_one_based(self):
        """one_based shifts every index by one."""
        assert column_label_to_index("A", one_based=True) == 1
        assert column_label_to_index("AA", one_based=True) == 27

    @pytest.mark.parametrize("label", ["AAA", "", "a", "A1", None, 3])
    def test_invalid_labels(self, label):
        """Anything but one or two uppercase letters is rejected."""
        with pytest.raises(InvalidColumnLabel):
            column_label_to_index(label)

    def test_round_trip_all_labels(self):
        """Every label from A to ZZ survives index conversion and back."""
        letters = [chr(c) for c in range(ord("A"), ord("Z") + 1)]
        labels = letters + [a + b for a in letters for b in letters]

        for label in labels:
            assert index_to_column_label(column_label_to_index(label)) == label

    def test_index_to_label_one_based(self):
        assert index_to_column_label(1, one_based=True) == "A"
        assert index_to_column_label(27, one_based=True) == "AA"

    def test_index_to_label_negative(self):
        """Negative indices do not name a column."""
        with pytest.raises(InvalidColumnLabel):
            index_to_column_label(-1)


class TestRowLabels:
    """Test Suite for row label conversion."""

    def test_row_label(self):
        """Rows are 1-indexed labels, 0-indexed results."""
        assert row_label_to_index("1") == 0
        assert row_label_to_index("12") == 11
        assert row_label_to_index(5) == 4

    def test_row_label_one_based(self):
        assert row_label_to_index("12", one_based=True) == 12

    def test_invalid_row_label(self):
        with pytest.raises(InvalidCellReference):
            row_label_to_index("x")

    @pytest.mark.parametrize("label", ["0", 0, "-3"])
    def test_row_numbers_start_at_one(self, label):
        """There is no row 0 in A1 notation."""
        with pytest.raises(InvalidCellReference):
            row_label_to_index(label)

    def test_row_zero_in_cell_label(self):
        with pytest.raises(InvalidCellReference):
            cell_label_to_coordinate("A0")


class TestCellLabels:
    """Test Suite for cell label parsing."""

    def test_full_cell(self):
        assert cell_label_to_coordinate("B12") == CellCoordinate(row=11, col=1)

    def test_full_cell_one_based(self):
        assert cell_label_to_coordinate("B12", one_based=True) == CellCoordinate(row=12, col=2)

    def test_column_only(self):
        """A bare column label has no row."""
        assert cell_label_to_coordinate("C") == CellCoordinate(row=None, col=2)

    def test_row_only(self):
        """A bare row number has no column."""
        assert cell_label_to_coordinate("5") == CellCoordinate(row=4, col=None)

    def test_absolute_markers_ignored(self):
        assert cell_label_to_coordinate("$C$2") == CellCoordinate(row=1, col=2)

    def test_no_letters_no_digits(self):
        with pytest.raises(InvalidCellReference):
            cell_label_to_coordinate("#!")

    def test_column_part_too_long(self):
        with pytest.raises(InvalidColumnLabel):
            cell_label_to_coordinate("ABC1")


class TestResolveRangeBounds:
    """Test Suite for range bounds resolution."""

    @pytest.fixture
    def context(self):
        # B2:D11
        return GridRange(first_row=1, first_col=1, last_row=10, last_col=3)

    def test_closed_range(self):
        r = resolve_range_bounds("B2:C10")
        assert (r.first_row, r.first_col, r.last_row, r.last_col) == (1, 1, 9, 2)
        assert r.nb_rows == 9
        assert r.nb_columns == 2

    def test_reversed_endpoints_are_normalised(self):
        """C10:B2 covers the same cells as B2:C10."""
        assert resolve_range_bounds("C10:B2") == resolve_range_bounds("B2:C10")

    def test_single_cell(self):
        r = resolve_range_bounds("C3")
        assert (r.nb_rows, r.nb_columns) == (1, 1)
        assert r.to_a1() == "C3"

    def test_open_end_row_uses_context_last_row(self, context):
        """A1:B style ranges run to the context's last row."""
        r = resolve_range_bounds("C3:C", context)
        assert r.to_a1() == "C3:C11"

    def test_whole_columns(self, context):
        """A:B style ranges span the context's rows."""
        r = resolve_range_bounds("C:D", context)
        assert r.to_a1() == "C2:D11"

    def test_whole_rows(self, context):
        """2:5 style ranges span the context's columns."""
        r = resolve_range_bounds("3:5", context)
        assert r.to_a1() == "B3:D5"

    def test_open_range_without_context(self):
        with pytest.raises(InvalidRange):
            resolve_range_bounds("C3:C")

        with pytest.raises(InvalidRange):
            resolve_range_bounds("C:D")

    def test_malformed_ranges(self):
        with pytest.raises(InvalidRange):
            resolve_range_bounds("A1:B2:C3")

        with pytest.raises(InvalidRange):
            resolve_range_bounds("#:B2")

        with pytest.raises(InvalidRange):
            resolve_range_bounds("")

    @pytest.mark.parametrize("label", ["A1:#", "A1:!!", "A0:A1", "C2:C0"])
    def test_malformed_endpoints(self, label, root):
        """Either endpoint failing to parse makes the range invalid."""
        with pytest.raises(InvalidRange):
            resolve_range_bounds(label, root)

    def test_keeps_root_back_reference(self, root):
        """A range resolved against the root reads through it."""
        r = resolve_range_bounds("C2:C3", root)
        assert r.root is root
        assert r.values is None
        assert r.get_value(1, 0) == "Bouh"

    def test_no_back_reference_without_values(self, context):
        r = resolve_range_bounds("C3:C", context)
        assert r.root is None
        assert not r.has_values
