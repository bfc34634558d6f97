# Document model produced by the readers.
# - Every node carries line_start/line_end (0-based, inclusive source lines)
# - Nodes are tagged by a `type` string; consumers switch on it
# - ScanData.data is column-major: data[column][row]

import math
from dataclasses import dataclass, field, asdict
from typing import List, Optional


class ParseError(ValueError):
    """Fatal structural problem; the whole document is discarded."""

    def __init__(self, message, line=None):
        super().__init__(message)
        self.line = line

    def __str__(self):
        msg = super().__str__()
        if self.line is None:
            return msg
        return f"{msg}: line {self.line + 1}"


@dataclass
class Node:
    line_start: int
    line_end: int

    type = 'node'


@dataclass
class FileNode(Node):
    value: str = ''
    type = 'file'


@dataclass
class DateNode(Node):
    value: str = ''
    type = 'date'


@dataclass
class CommentNode(Node):
    value: str = ''
    type = 'comment'


@dataclass
class NameListNode(Node):
    kind: str = ''
    values: List[str] = field(default_factory=list)
    mnemonic: bool = False
    type = 'nameList'


@dataclass
class ValueListNode(Node):
    kind: str = ''
    values: List[float] = field(default_factory=list)
    type = 'valueList'


@dataclass
class ScanHeadNode(Node):
    index: int = 0
    code: str = ''
    type = 'scanHead'


@dataclass
class ScanDataNode(Node):
    headers: List[str] = field(default_factory=list)
    data: List[List[float]] = field(default_factory=list)
    x_axis_selectable: bool = True
    type = 'scanData'

    @property
    def row_count(self):
        return len(self.data[0]) if self.data else 0


@dataclass
class UnknownNode(Node):
    kind: str = ''
    value: str = ''
    type = 'unknown'


@dataclass(frozen=True)
class FoldingRange:
    start: int
    end: int


@dataclass(frozen=True)
class Range:
    start_line: int
    start_char: int
    end_line: int
    end_char: int


@dataclass
class DocumentSymbol:
    name: str
    detail: str
    kind: str
    range: Range
    selection_range: Range


@dataclass
class ParseResult:
    format: str
    nodes: List[Node] = field(default_factory=list)
    folding_ranges: List[FoldingRange] = field(default_factory=list)
    symbols: List[DocumentSymbol] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def _plain(value):
    # NaN and infinities have no JSON spelling
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


def node_to_dict(node):
    """Plain dict of a node with its `type` tag, suitable for JSON (NaN -> None)."""
    d = {'type': node.type}
    d.update((k, _plain(v)) for k, v in asdict(node).items())
    return d


def result_to_dict(result: Optional[ParseResult]):
    if result is None:
        return None
    return {
        'format': result.format,
        'nodes': [node_to_dict(n) for n in result.nodes],
        'foldingRanges': [asdict(r) for r in result.folding_ranges],
        'symbols': [asdict(s) for s in result.symbols],
        'warnings': list(result.warnings),
    }
