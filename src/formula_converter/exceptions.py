"""
Exception classes for formula_converter.

These exceptions signal the error conditions met while resolving A1
references, parsing formulas and talking to Google Sheets.  Errors raised
while evaluating a single cell are contained by the converter and become
an in-grid error marker; errors about the overall grid shape are fatal.
"""


class FormulaConverterError(Exception):
    """Base class for every error raised by formula_converter."""
    pass


class InvalidRange(FormulaConverterError):
    """Raised when an A1 range label cannot be resolved to grid bounds.

    Examples:
        - A range whose starting cell has neither a row nor a column
        - An open-ended range ("A:B") with no context range to complete it
    """
    pass


class InvalidCellReference(FormulaConverterError):
    """Raised when a cell reference cannot be resolved to a value.

    Common causes:
        - A label with no column letters and no row digits
        - A lookup that falls outside the root conversion grid
        - A range argument used outside of an ARRAYFORMULA
        - Ranges of different shapes combined in one ARRAYFORMULA call
    """
    pass


class InvalidColumnLabel(FormulaConverterError):
    """Raised when a column label is not one or two uppercase letters."""
    pass


class RangesDontMatch(FormulaConverterError):
    """Raised when the values grid, the formulas grid and the declared
    range do not share the same dimensions.

    This is checked once, before any cell is processed.
    """
    pass


class InvalidFormula(FormulaConverterError):
    """Raised when a supported function is called with too many arguments."""
    pass


class SheetsAPIError(FormulaConverterError):
    """Raised when a Google Sheets API call fails.

    Wraps exceptions from gspread and records which range the failing
    read or write was targeting.  Common causes include authentication
    failures, rate limiting (HTTP 429) and missing permissions.
    """
    pass
