# Reader for multichannel-analyzer spectrum files ("dppmca").
# Sections are delimited by header lines:
#   <<PMCA SPECTRUM>>          opens a section
#   <<DP5 CONFIGURATION END>>  closes the open section (name ends with END)
#   <<END>>                    same
# A new opening header also closes the section before it. <<DATA>> holds
# one integer count per line and becomes a single-column ScanData; other
# sections are kept verbatim as Unknown nodes.
# A count is read from its leading digits ("2.0" -> 2); a line without any
# becomes NaN and is reported as a warning.

import logging
import math
import re

from nodes import DocumentSymbol, FoldingRange, ParseResult, Range, ScanDataNode, UnknownNode
from tabular import is_blank, split_lines

log = logging.getLogger(__name__)

FORMAT = 'dppmca'

_section = re.compile(r'^<<([a-zA-Z0-9_ ]+)>>$')
_count = re.compile(r'^[+-]?[0-9]+')


def parse_mca(text, token=None, reporter=None):
    reporter = reporter or log
    result = _parse(split_lines(text), token, reporter)
    if result is not None:
        log.debug("dppmca: %d sections", len(result.symbols))
    return result


def _parse(lines, token, reporter):
    result = ParseResult(FORMAT)
    current = None  # (name, header line, raw lines)

    for i, line in enumerate(lines):
        if token is not None and token.is_set():
            log.debug("dppmca: parse cancelled at line %d", i + 1)
            return None
        m = _section.match(line.strip())
        if m:
            name = m.group(1)
            if name.endswith('END'):
                if current is not None:
                    _close(result, lines, current, i, reporter)
                current = None
            else:
                if current is not None:
                    _close(result, lines, current, i - 1, reporter)
                current = (name, i, [])
        elif current is not None:
            current[2].append(line)

    if current is not None:
        _close(result, lines, current, len(lines) - 1, reporter)
    return result


def _close(result, lines, section, end, reporter):
    name, start, raw = section
    result.folding_ranges.append(FoldingRange(start, end))
    result.symbols.append(DocumentSymbol(
        name=name,
        detail='',
        kind='object',
        range=Range(start, 0, end, len(lines[end])),
        selection_range=Range(start, 0, start, len(lines[start])),
    ))
    if name == 'DATA':
        counts = []
        for k, item in enumerate(raw):
            if is_blank(item):
                continue
            m = _count.match(item.strip())
            if m is None or m.end() != len(item.strip()):
                msg = f"Invalid count in DATA section: {item.strip()!r}: line {start + 2 + k}"
                reporter.warning(msg)
                result.warnings.append(msg)
            counts.append(int(m.group(0)) if m else math.nan)
        first = start + 1 if raw else start
        last = start + len(raw)
        result.nodes.append(ScanDataNode(first, last, ['count'], [counts] if counts else [], False))
    else:
        result.nodes.append(UnknownNode(start, end, name, '\n'.join(raw)))
