# Reader for generic delimited numeric tables ("csv-column" / "csv-row").
# - Blank lines are skipped; "#" lines become Comment nodes
# - A block starts at a line whose first cell is a number (or "nan");
#   the delimiter (spaces, comma or tab) is whatever first follows that cell
# - The line right above a block supplies headers when it has the same
#   number of cells
# - "@A" lines (multichannel arrays, "\" continued) form blocks of their own
# - Column-wise: one ScanData per block (column-major). Row-wise: one
#   single-series ScanData per row

import logging
import re

from nodes import CommentNode, ParseError, ParseResult, ScanDataNode
from tabular import TableBody, is_blank, is_number, split_lines

log = logging.getLogger(__name__)

COLUMN_FORMAT = 'csv-column'
ROW_FORMAT = 'csv-row'

COMMENT_MARKER = '#'

_first_sep = re.compile(r' +|,|\t')
_SPLITTERS = {
    ' ': re.compile(r' +'),
    ',': re.compile(r'\s*,\s*'),
    '\t': re.compile(r'\t'),
}
_array_start = re.compile(r'^@A(?:\s|$)')


def parse_table(text, columnwise=True, token=None, reporter=None):
    """
    Parse delimited numeric text.

    Returns a ParseResult (nodes only), or None when no numeric block was
    found, the token was set, or a block had rows of different lengths.
    """
    reporter = reporter or log
    fmt = COLUMN_FORMAT if columnwise else ROW_FORMAT
    try:
        result = _parse(split_lines(text), fmt, columnwise, token)
    except ParseError as ex:
        reporter.error(str(ex))
        return None
    if result is not None:
        log.debug("%s: %d nodes", fmt, len(result.nodes))
    return result


def _parse(lines, fmt, columnwise, token):
    result = ParseResult(fmt)
    found = False
    n = len(lines)
    i = 0
    while i < n:
        if _cancelled(token):
            return None
        line = lines[i]

        if is_blank(line):
            i += 1
            continue

        if line.lstrip().startswith(COMMENT_MARKER):
            text = line.lstrip()[len(COMMENT_MARKER):].strip()
            result.nodes.append(CommentNode(i, i, text))
            i += 1
            continue

        if _array_start.match(line):
            body, i = _read_arrays(lines, i, token)
            if body is None:
                return None
            _emit(result, body, None, None, columnwise)
            found = True
            continue

        sep = _detect_separator(line)
        cells = _split(line, sep)
        if not is_number(cells[0]):
            i += 1
            continue

        header_line, headers = _headers_above(lines, i, sep, len(cells))
        body = TableBody(len(cells))
        while i < n:
            if _cancelled(token):
                return None
            row = lines[i]
            if is_blank(row) or row.lstrip().startswith(COMMENT_MARKER) or _array_start.match(row):
                break
            body.append(_split(row, sep), i)
            i += 1
        _emit(result, body, headers, header_line, columnwise)
        found = True

    return result if found else None


def _cancelled(token):
    if token is not None and token.is_set():
        log.debug("table: parse cancelled")
        return True
    return False


def _detect_separator(line):
    m = _first_sep.search(line.strip())
    if m is None:
        return None
    return m.group(0)[0]


def _split(line, sep):
    text = line.strip()
    if sep is None:
        return [text]
    return _SPLITTERS[sep].split(text)


def _headers_above(lines, i, sep, width):
    """
    Header tokens from the line above a block: (header line or None, tokens)
    or (None, None). A comment line already has its own node, so only a
    plain text line is claimed as part of the block.
    """
    if i == 0 or is_blank(lines[i - 1]) or _array_start.match(lines[i - 1]):
        return None, None
    prev = lines[i - 1].strip()
    header_line = i - 1
    if prev.startswith(COMMENT_MARKER):
        prev = prev[len(COMMENT_MARKER):].strip()
        header_line = None
        if not prev:
            return None, None
    tokens = _split(prev, sep)
    if len(tokens) != width:
        return None, None
    return header_line, tokens


def _read_arrays(lines, i, token):
    """
    Read consecutive "@A" records starting at line i. A record continues on
    the next physical line while it ends with a backslash. Records of a
    different length end the block (the next call picks them up).
    Returns (TableBody or None if cancelled, next line index).
    """
    n = len(lines)
    body = TableBody()
    while i < n and _array_start.match(lines[i]):
        if _cancelled(token):
            return None, i
        start = i
        parts = [lines[i].strip()[2:]]
        while parts[-1].rstrip().endswith('\\') and i + 1 < n:
            parts[-1] = parts[-1].rstrip()[:-1]
            i += 1
            parts.append(lines[i].strip())
        if parts[-1].rstrip().endswith('\\'):
            parts[-1] = parts[-1].rstrip()[:-1]
        cells = ' '.join(parts).split()
        if not body.fits(cells):
            return body, start
        body.append(cells, start, i)
        i += 1
    return body, i


def _emit(result, body, headers, header_line, columnwise):
    if not len(body):
        return
    if columnwise:
        if headers is None:
            headers = [f"column {c}" for c in range(body.width)]
        start = header_line if header_line is not None else body.first_line
        result.nodes.append(ScanDataNode(start, body.last_line, headers, body.to_columns(), True))
        return
    for r, (row, (first, last)) in enumerate(zip(body.rows, body.spans)):
        result.nodes.append(ScanDataNode(first, last, [f"row {r}"], [row], False))
