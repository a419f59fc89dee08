"""
A1 notation helpers.
"""


def column_letter(index: int) -> str:
    """Convert a 0-based column index to its letter (0 -> A, 26 -> AA)."""
    if index < 0:
        raise ValueError(f"Column index must be non-negative: {index}")

    letters = ""
    index += 1
    while index:
        index, remainder = divmod(index - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def quote_sheet(sheet_name: str) -> str:
    escaped = sheet_name.replace("'", "''")
    return f"'{escaped}'"


def cell_range(sheet_name: str, row_number: int, column_index: int) -> str:
    """Range for a single cell, e.g. ``'Payments'!H5``."""
    return f"{quote_sheet(sheet_name)}!{column_letter(column_index)}{row_number}"


def address_range(sheet_name: str, address: str) -> str:
    return f"{quote_sheet(sheet_name)}!{address}"
