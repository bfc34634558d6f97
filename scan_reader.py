# Reader for spec scan-log files ("spec-data").
# - One forward pass over the lines; each line is tested against the
#   directive patterns below in order
# - #O/#o, #J/#j and #P lines are numbered continuations merged into one
#   NameList/ValueList node; indices must run 0,1,2,... or the parse fails
# - #N declares the column count of the next #L section; #L starts a data
#   body that runs until a blank line or the next "#" line
# - Blank lines delimit blocks; each block becomes a folding range and,
#   when its first line is a directive, an outline symbol
# - Fatal problems abort the parse (None); the first-row column quirk is
#   only a warning

import logging
import re
from dataclasses import dataclass

from nodes import (
    CommentNode, DateNode, DocumentSymbol, FileNode, FoldingRange,
    NameListNode, ParseError, ParseResult, Range, ScanDataNode,
    ScanHeadNode, UnknownNode, ValueListNode,
)
from tabular import TableBody, is_blank, split_lines, to_number

log = logging.getLogger(__name__)

FORMAT = 'spec-data'

_file = re.compile(r'^#F (.*)$')
_date = re.compile(r'^#D (.*)$')
_comment = re.compile(r'^#C (.*)$')
_name_list = re.compile(r'^#([OJoj])([0-9]+) (.*)$')
_value_list = re.compile(r'^#(P)([0-9]+) (.*)$')
_scan_head = re.compile(r'^#S ([0-9]+)(?: (.*))?$')
_scan_number = re.compile(r'^#N ([0-9]+)$')
_scan_labels = re.compile(r'^#L (.*)$')
_directive = re.compile(r'^#([a-zA-Z][0-9]*) (.*)$')

# outline: block start shapes
_outline_scan = re.compile(r'^(#S [0-9]+)\s*(\S.*)?$')
_outline_other = re.compile(r'^(#[a-zA-Z][0-9]*)\s(\S.*)?$')

_KINDS = {'o': 'motor', 'j': 'counter', 'p': 'motor'}

# full names may contain single spaces; columns are 2+ spaces apart
_name_sep = re.compile(r' {2,}|\t+')
_label_sep = re.compile(r' {2,}|\t')
_cell_sep = re.compile(r'[ \t]+')


@dataclass
class _OpenList:
    """The list node still accepting continuation lines (by position in nodes)."""
    node_index: int
    node_type: str
    kind: str
    mnemonic: bool
    last_index: int


def parse_scan_log(text, token=None, reporter=None):
    """
    Parse spec scan-log text.

    Returns a ParseResult (nodes, folding ranges, symbols, warnings), or None
    when the token is set or the document is structurally broken. Errors and
    warnings go to `reporter` (anything with error()/warning(); defaults to
    this module's logger).
    """
    reporter = reporter or log
    try:
        result = _parse(split_lines(text), token, reporter)
    except ParseError as ex:
        reporter.error(str(ex))
        return None
    if result is not None:
        log.debug("spec-data: %d nodes, %d folds", len(result.nodes), len(result.folding_ranges))
    return result


def _parse(lines, token, reporter):
    result = ParseResult(FORMAT)
    nodes = result.nodes
    n = len(lines)

    open_list = None
    columns = None
    block_start = 0

    i = 0
    while i < n:
        if token is not None and token.is_set():
            log.debug("spec-data: parse cancelled at line %d", i + 1)
            return None
        line = lines[i]
        slot = None

        if is_blank(line):
            if i > block_start:
                _close_block(result, lines, block_start, i)
            block_start = i + 1

        elif _file.match(line):
            nodes.append(FileNode(i, i, _file.match(line).group(1)))

        elif _date.match(line):
            nodes.append(DateNode(i, i, _date.match(line).group(1)))

        elif _comment.match(line):
            nodes.append(CommentNode(i, i, _comment.match(line).group(1)))

        elif _name_list.match(line):
            m = _name_list.match(line)
            letter = m.group(1)
            mnemonic = letter.islower()
            values = _split_names(m.group(3), mnemonic)
            slot = _continue_list(nodes, open_list, 'nameList', _KINDS[letter.lower()],
                                  mnemonic, int(m.group(2)), values, i)

        elif _value_list.match(line):
            m = _value_list.match(line)
            values = [to_number(v) for v in m.group(3).split()]
            slot = _continue_list(nodes, open_list, 'valueList', _KINDS[m.group(1).lower()],
                                  False, int(m.group(2)), values, i)

        elif _scan_head.match(line):
            m = _scan_head.match(line)
            nodes.append(ScanHeadNode(i, i, int(m.group(1)), m.group(2) or ''))

        elif _scan_number.match(line):
            columns = int(_scan_number.match(line).group(1))

        elif _scan_labels.match(line):
            headers = _label_sep.split(_scan_labels.match(line).group(1).strip())
            if columns is None:
                # lazy files without "#N"
                columns = len(headers)
            elif len(headers) != columns:
                raise ParseError(
                    f"Column count mismatched (header): #N declares {columns}, #L has {len(headers)}", i)
            body, end = _read_body(lines, i + 1, columns, result, reporter)
            nodes.append(ScanDataNode(i, end, headers, body.to_columns(), True))
            columns = None
            open_list = None
            i = end + 1
            continue

        elif line.startswith('#'):
            nodes.append(_unknown(line, i))

        open_list = slot
        i += 1

    if block_start < n:
        _close_block(result, lines, block_start, n - 1)
    return result


def _read_body(lines, start, columns, result, reporter):
    """Consume data rows from `start`; returns (TableBody, last consumed line)."""
    body = TableBody()
    j = start
    while j < len(lines):
        row = lines[j]
        if row.startswith('#') or is_blank(row):
            break
        cells = _cell_sep.split(row.strip())
        if not len(body) and len(cells) != columns:
            # spec writes a short first row after some user commands; keep going
            msg = (f"Column count mismatched (data): header has {columns}, "
                   f"first row has {len(cells)}: line {j + 1}")
            reporter.warning(msg)
            result.warnings.append(msg)
        body.append(cells, j)
        j += 1
    return body, j - 1


def _continue_list(nodes, slot, node_type, kind, mnemonic, index, values, lineno):
    label = 'name list' if node_type == 'nameList' else 'value list'
    if (slot is not None and slot.node_type == node_type
            and slot.kind == kind and slot.mnemonic == mnemonic
            and index == slot.last_index + 1):
        node = nodes[slot.node_index]
        node.values.extend(values)
        node.line_end = lineno
        slot.last_index = index
        return slot

    if index != 0:
        if slot is not None and slot.node_type == node_type and slot.kind == kind and slot.mnemonic == mnemonic:
            raise ParseError(
                f"Non-consecutive index of the {label}: expected {slot.last_index + 1}, got {index}", lineno)
        raise ParseError(f"The {label} index must start at 0, got {index}", lineno)

    if node_type == 'nameList':
        nodes.append(NameListNode(lineno, lineno, kind, list(values), mnemonic))
    else:
        nodes.append(ValueListNode(lineno, lineno, kind, list(values)))
    return _OpenList(len(nodes) - 1, node_type, kind, mnemonic, 0)


def _split_names(text, mnemonic):
    text = text.strip()
    if not text:
        return []
    if mnemonic:
        return text.split()
    return _name_sep.split(text)


def _unknown(line, lineno):
    m = _directive.match(line)
    if m:
        return UnknownNode(lineno, lineno, m.group(1), m.group(2))
    rest = line[1:]
    if not rest or rest[0].isspace():
        return UnknownNode(lineno, lineno, '', rest.strip())
    parts = rest.split(None, 1)
    value = parts[1].strip() if len(parts) > 1 else ''
    return UnknownNode(lineno, lineno, parts[0], value)


def _close_block(result, lines, start, end):
    """Fold lines start..end and add an outline entry if the block opens with a directive."""
    if end > start:
        result.folding_ranges.append(FoldingRange(start, end))
    head = lines[start]
    m = _outline_scan.match(head) or _outline_other.match(head)
    if m:
        result.symbols.append(DocumentSymbol(
            name=m.group(1),
            detail=m.group(2) or '',
            kind='key',
            range=Range(start, 0, end, 0),
            selection_range=Range(start, 0, start, len(m.group(0))),
        ))
