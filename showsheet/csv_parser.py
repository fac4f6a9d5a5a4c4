"""
Permissive CSV parser for spreadsheet exports.

A single left-to-right scan that tracks whether it is inside a quoted field.
It tolerates what spreadsheet exports actually produce: quoted fields with
embedded commas and newlines, doubled quotes as a literal quote, CRLF or lone
CR line endings, and a missing trailing newline. There is no schema: rows are
plain lists of strings and may have differing lengths.
"""

from typing import List

Row = List[str]


def parse_csv(text: str) -> List[Row]:
    """
    Parse raw delimited text into rows of fields.

    Args:
        text: Raw CSV text

    Returns:
        List of rows, each a list of field strings (header row included)
    """
    rows: List[Row] = []
    current: Row = []
    field = []
    in_quotes = False
    i = 0
    n = len(text)

    while i < n:
        char = text[i]

        if char == '"':
            if in_quotes and i + 1 < n and text[i + 1] == '"':
                field.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == ',' and not in_quotes:
            current.append(''.join(field))
            field = []
        elif char == '\n' and not in_quotes:
            current.append(''.join(field))
            rows.append(current)
            current = []
            field = []
        elif char == '\r':
            pass
        else:
            field.append(char)
        i += 1

    # Input without a trailing newline
    if field or current:
        current.append(''.join(field))
        rows.append(current)

    return rows


def data_rows(text: str) -> List[Row]:
    """Parse CSV text and drop the header row."""
    return parse_csv(text)[1:]


def get_field(row: Row, index: int) -> str:
    """Positional field access that treats missing trailing columns as empty."""
    if index < len(row):
        return row[index]
    return ''
