# Helpers shared by every reader.
# - split_lines: "\n" and "\r\n" line endings
# - to_number: float or NaN (never raises), like parseFloat on a whole cell
# - TableBody: row buffer for a data section; first row fixes the width,
#   later rows must match it; to_columns() transposes to column-major

import math
import re

from nodes import ParseError

_line_break = re.compile(r'\r\n|\n')
_blank = re.compile(r'^\s*$')


def split_lines(text):
    return _line_break.split(text)


def is_blank(line):
    return _blank.match(line) is not None


def to_number(tok):
    t = tok.strip()
    try:
        return float(t)
    except ValueError:
        return math.nan


def is_number(tok):
    t = tok.strip()
    if t.lower() == 'nan':
        return True
    try:
        v = float(t)
    except ValueError:
        return False
    # float() also takes "nan"/"inf" spellings; only the plain literal counts
    return not math.isnan(v)


def transpose(rows):
    """Row-major list of lists -> column-major. No rows gives []."""
    if not rows:
        return []
    return [list(col) for col in zip(*rows)]


class TableBody:
    """
    Collects the rows of one data section.

    `width` is None until the first row arrives; after that every row must
    have exactly `width` cells or ParseError is raised (unless the caller
    asked with fits() first and stopped).
    """

    def __init__(self, width=None):
        self.width = width
        self.rows = []
        self.spans = []

    def __len__(self):
        return len(self.rows)

    def fits(self, cells):
        return self.width is None or len(cells) == self.width

    @property
    def first_line(self):
        return self.spans[0][0] if self.spans else None

    @property
    def last_line(self):
        return self.spans[-1][1] if self.spans else None

    def append(self, cells, lineno, last=None):
        if self.width is None:
            self.width = len(cells)
        elif len(cells) != self.width:
            raise ParseError(
                f"Column count mismatched (data): expected {self.width}, got {len(cells)}",
                lineno)
        self.spans.append((lineno, lineno if last is None else last))
        self.rows.append([to_number(c) for c in cells])

    def to_columns(self):
        return transpose(self.rows)
