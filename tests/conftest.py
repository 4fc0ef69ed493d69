"""Shared pytest configuration and fixtures for formula_converter tests."""

import pytest

from formula_converter.config import ConverterSettings
from formula_converter.spreadsheet.model import GridRange

from tests.helpers.html import MICKE, TJENA


def pytest_addoption(parser):
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Include tests marked @pytest.mark.slow (e.g. live Google Sheets)",
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: marks tests as slow (skipped unless --run-slow)")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-slow"):
        return
    skip = pytest.mark.skip(reason="slow test — pass --run-slow to include")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def settings() -> ConverterSettings:
    """Default settings, independent of the test environment."""
    return ConverterSettings(_env_file=None)


@pytest.fixture
def validation_sheet() -> dict:
    """The B2:C16 validation sheet: one feature per row, label in column B."""
    return {
        "range": "B2:C",
        "values": [
            ["Simple link (no formula)", TJENA],
            ["Simple HYPERLINK", MICKE],
            ["HYPERLINK with link label", "Bouh"],
            ["HYPERLINK with cell ref for url", "Bouh"],
            ["HYPERLINK with 2 cells ref", "Simple link (no formula)"],
            ["ARRAYFORMULA + HYPERLINK", "Bouh"],
            ["idem", "Simple link (no formula)"],
            ["Simple IMAGE", ""],
            ["IMAGE with cell ref for url", ""],
            ["ARRAYFORMULA + IMAGE", ""],
            ["idem", ""],
            ["Simple HYPERLINK + IMAGE", ""],
            ["HYPERLINK + IMAGE with cell ref", ""],
            ["HYPERLINK + IMAGE with ARRAYFORMULA", ""],
            ["idem", ""],
        ],
        "formulas": [
            ["", ""],
            ["", f'=HYPERLINK("{MICKE}")'],
            ["", f'=HYPERLINK("{MICKE}", "Bouh")'],
            ["", '=HYPERLINK(C2, "Bouh")'],
            ["", "=HYPERLINK(C2, B2)"],
            ["", "=ARRAYFORMULA(HYPERLINK(C2:C3, C5:C6))"],
            ["", ""],
            ["", f'=IMAGE("{MICKE}")'],
            ["", "=IMAGE(C2)"],
            ["", "=ARRAYFORMULA(IMAGE(C2:C3))"],
            ["", ""],
            ["", f'=HYPERLINK("{TJENA}", IMAGE("{TJENA}"))'],
            ["", "=HYPERLINK(C2, IMAGE(C2))"],
            ["", "=ARRAYFORMULA(HYPERLINK(C2:C3, IMAGE(C2:C3)))"],
            ["", ""],
        ],
    }


@pytest.fixture
def root() -> GridRange:
    """A B2:C4 root range.

    B2="a"  C2="http://x"
    B3="b"  C3="Bouh"
    B4="c"  C4="http://y"
    """
    values = [
        ["a", "http://x"],
        ["b", "Bouh"],
        ["c", "http://y"],
    ]
    formulas = [["", ""], ["", ""], ["", ""]]
    return GridRange.from_grid("B2:C4", values, formulas)
