"""
Delimiter detection and quote-aware splitting for spreadsheet CSV exports.
"""

from typing import List

COMMA = ","
SEMICOLON = ";"
QUOTE = '"'

# Excel and Google Sheets exports like to leave these around cell values.
_BOM = "\ufeff"
_NBSP = "\u00a0"


def normalize_trim(value: str) -> str:
    """Strip byte-order marks and non-breaking spaces along with ordinary whitespace."""
    return value.replace(_BOM, "").replace(_NBSP, " ").strip()


def parse_value(raw: str) -> str:
    """
    Clean a single token. A value fully wrapped in quotes loses the outer
    quotes and has doubled quotes unescaped.
    """
    trimmed = normalize_trim(raw)
    if len(trimmed) >= 2 and trimmed.startswith(QUOTE) and trimmed.endswith(QUOTE):
        return trimmed[1:-1].replace('""', QUOTE)
    return trimmed


def detect_delimiter(first_line: str) -> str:
    """
    Semicolon wins only when it strictly outnumbers commas outside quoted
    fields (EU-style exports); comma otherwise.
    """
    commas = 0
    semicolons = 0
    in_quotes = False
    for char in first_line:
        if char == QUOTE:
            in_quotes = not in_quotes
        elif not in_quotes:
            if char == COMMA:
                commas += 1
            elif char == SEMICOLON:
                semicolons += 1
    return SEMICOLON if semicolons > commas else COMMA


def split_csv_line(line: str, delimiter: str = COMMA) -> List[str]:
    """
    Split one CSV line honoring quoted fields. An unterminated quote is
    tolerated: the rest of the line is kept in the last field.
    """
    result: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]
        if char == QUOTE:
            if in_quotes and i + 1 < length and line[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            result.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    result.append("".join(current))
    return result
