# Entry point for reading instrument data files.
# - resolve_format: file name -> format id (user glob associations first,
#   then the built-in extension defaults)
# - read_text: run the reader for a format id over decoded text
# - read_file: both of the above plus decoding the file from disk
# Every reader returns a ParseResult or None (cancelled / failed / nothing
# to show); problems are reported through `reporter`, never raised.

import fnmatch
import logging
import os

from chiplot_reader import parse_chiplot
from mca_reader import parse_mca
from scan_reader import parse_scan_log
from table_reader import parse_table

log = logging.getLogger(__name__)

SPEC_DATA = 'spec-data'
CSV_COLUMN = 'csv-column'
CSV_ROW = 'csv-row'
DPPMCA = 'dppmca'
CHIPLOT = 'chiplot'

FORMATS = (SPEC_DATA, CSV_COLUMN, CSV_ROW, DPPMCA, CHIPLOT)

DEFAULT_ASSOCIATIONS = {
    '*.spec': SPEC_DATA,
    '*.chi': CHIPLOT,
    '*.mca': DPPMCA,
    '*.csv': CSV_COLUMN,
    '*.tsv': CSV_COLUMN,
}


def resolve_format(path, associations=None):
    """Format id for `path`, or None. A pattern without "/" matches the base name."""
    merged = dict(associations or {})
    for pattern, fmt in DEFAULT_ASSOCIATIONS.items():
        merged.setdefault(pattern, fmt)

    name = os.path.basename(path)
    for pattern, fmt in merged.items():
        target = path if '/' in pattern else name
        if fnmatch.fnmatchcase(target, pattern):
            return fmt if fmt in FORMATS else None
    return None


def read_text(text, fmt, token=None, reporter=None):
    if fmt == SPEC_DATA:
        return parse_scan_log(text, token=token, reporter=reporter)
    if fmt == CSV_COLUMN:
        return parse_table(text, columnwise=True, token=token, reporter=reporter)
    if fmt == CSV_ROW:
        return parse_table(text, columnwise=False, token=token, reporter=reporter)
    if fmt == DPPMCA:
        return parse_mca(text, token=token, reporter=reporter)
    if fmt == CHIPLOT:
        return parse_chiplot(text, token=token, reporter=reporter)
    raise ValueError(f"Unknown format: {fmt!r} (expected one of {', '.join(FORMATS)})")


def read_file(path, fmt=None, settings=None, token=None, reporter=None):
    """
    Read and parse a file. `fmt` overrides the association lookup; when
    neither gives a format, ValueError is raised.
    """
    associations = settings.associations if settings is not None else None
    encoding = settings.encoding if settings is not None else 'latin-1'
    if fmt is None:
        fmt = resolve_format(path, associations)
        if fmt is None:
            raise ValueError(f"No format associated with {path}")
    # newline='' keeps "\r\n" for split_lines
    with open(path, 'r', encoding=encoding, newline='') as f:
        text = f.read()
    log.info("Reading %s as %s", path, fmt)
    return read_text(text, fmt, token=token, reporter=reporter)
