"""
formula_converter - Turn Google Sheets HYPERLINK / IMAGE formulas into HTML.

Takes the values and formulas of a sheet range and returns a parallel
grid where links and images are rendered as ``<a>`` and ``<img>`` tags.
Cell and range references, nested calls and ARRAYFORMULA broadcasting
are resolved against the grid itself; nothing is fetched per formula.

Usage:
    >>> from formula_converter import convert_formulas_to_html
    >>> convert_formulas_to_html(
    ...     values=[["Home", "Bouh"]],
    ...     formulas=[["", '=HYPERLINK("http://a.b", "Home")']],
    ...     range_a1="B2:C2",
    ... )
    [['Home', '<a href="http://a.b">Home</a>']]

Key components:
- spreadsheet: A1 notation helpers and the grid range model
- formula: parameter tokenizer, supported functions and the evaluator
- converter: the grid walk and the public entry point
- adapters: pandas and gspread integration
"""

from .exceptions import *
from .config import ConverterSettings, configure_logging, get_settings
from .converter import FormulaConverter, convert_formulas_to_html
from .adapters.sheets_client import SheetsClient, convert_worksheet_range

# Version
__version__ = "0.1.0"

__all__ = [
    'ConverterSettings',
    'FormulaConverter',
    'SheetsClient',
    'configure_logging',
    'convert_formulas_to_html',
    'convert_worksheet_range',
    'get_settings',
]
