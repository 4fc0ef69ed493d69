"""
Demonstration of formula conversion.

Converts a small in-memory grid, then (when a spreadsheet key is given on
the command line) the B2:C range of a live worksheet.

Usage:
    python examples/convert_demo.py [SPREADSHEET_KEY [WORKSHEET_TITLE]]

Authentication for the live part: requires either a service account JSON
at ~/.config/gspread/service_account.json or OAuth credentials at
~/.config/gspread/credentials.json (browser flow on first use).
"""

import logging
import sys

import gspread

from formula_converter import (
    SheetsClient,
    configure_logging,
    convert_formulas_to_html,
    convert_worksheet_range,
)


def _get_gspread_client() -> gspread.Client:
    """Authenticate with Google Sheets, trying service account then OAuth."""
    try:
        return gspread.service_account()
    except Exception:
        pass
    try:
        return gspread.oauth()
    except Exception as exc:
        print(f"✗ Could not authenticate with Google Sheets: {exc}")
        sys.exit(1)


def local_demo():
    values = [
        ["Home", "http://example.com"],
        ["Logo", ""],
        ["Both", ""],
        ["", ""],
    ]
    formulas = [
        ["", ""],
        ["", '=IMAGE("http://example.com/logo.png")'],
        ["", "=ARRAYFORMULA(HYPERLINK(C2:C3, B2:B3))"],
        ["", ""],
    ]

    frame = convert_formulas_to_html(values, formulas, range_a1="B2:C", as_frame=True)
    print(frame.to_string())


def live_demo(key: str, title: str):
    client = SheetsClient(_get_gspread_client())
    worksheet = client.open_worksheet(key, title)
    output = convert_worksheet_range(worksheet, "B2:C", client=client)
    for row in output:
        print(row)


def main():
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    configure_logging()

    print("=" * 70)
    print("Formula conversion demo")
    print("=" * 70)
    local_demo()

    if len(sys.argv) > 1:
        print()
        live_demo(sys.argv[1], sys.argv[2] if len(sys.argv) > 2 else "Sheet1")


if __name__ == "__main__":
    main()
