# Reader for the fixed 4-line-header plot format ("chiplot").
#   line 0: title
#   line 1: x-axis label(s)
#   line 2: y-axis label(s)
#   line 3: number of points per data set, optionally number of data sets
#   line 4..: data rows until a blank line or EOF
# Separators on line 3 and in data rows are a comma or a run of spaces.

import logging
import re

from nodes import FileNode, ParseError, ParseResult, ScanDataNode
from tabular import TableBody, is_blank, split_lines

log = logging.getLogger(__name__)

FORMAT = 'chiplot'
MIN_LINES = 6

_label_sep = re.compile(r'\s*,\s*|\s{2,}')
_cell_sep = re.compile(r'\s*,\s*|\s+')
_counts = re.compile(r'^\s*([0-9]+)(?:(?:\s*,\s*|\s+)([0-9]+))?')


def parse_chiplot(text, token=None, reporter=None):
    """
    Parse chiplot text into [File(title), ScanData].

    Returns None for short input (silently), on cancellation, or when the
    data rows do not agree with line 3 or with each other.
    """
    reporter = reporter or log
    if token is not None and token.is_set():
        return None
    lines = split_lines(text)
    if len(lines) < MIN_LINES:
        log.debug("chiplot: only %d lines", len(lines))
        return None
    try:
        return _parse(lines)
    except ParseError as ex:
        reporter.error(str(ex))
        return None


def _parse(lines):
    title = lines[0].strip()
    labels = _label_sep.split(lines[1].strip()) + _label_sep.split(lines[2].strip())

    m = _counts.match(lines[3])
    if not m:
        raise ParseError("Number of points is missing", 3)
    row_count = int(m.group(1))
    if row_count < 1:
        raise ParseError(f"Number of points must be positive, got {row_count}", 3)

    body = TableBody()
    i = 4
    while i < len(lines) and not is_blank(lines[i]):
        body.append(_cell_sep.split(lines[i].strip()), i)
        i += 1

    if len(body) != row_count:
        raise ParseError(f"Row count mismatched: declared {row_count}, found {len(body)}", 3)

    width = body.width
    if len(labels) < width:
        headers = labels + [f"[{c}]" for c in range(len(labels), width)]
    else:
        headers = labels[:width]

    return ParseResult(FORMAT, nodes=[
        FileNode(0, 0, title),
        ScanDataNode(body.first_line, body.last_line, headers, body.to_columns(), True),
    ])
