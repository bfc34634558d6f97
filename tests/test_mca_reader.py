import math
import threading

import mca_reader as mr
from nodes import FoldingRange, Range

SAMPLE = """<<PMCA SPECTRUM>>
TAG - live_data
DESCRIPTION - test
<<DATA>>
0
5
12
<<END>>
<<DP5 CONFIGURATION>>
GAIN=10;
<<DP5 CONFIGURATION END>>
"""


def test_sections():
    result = mr.parse_mca(SAMPLE)
    assert result.format == 'dppmca'
    spectrum, data, config = result.nodes

    assert (spectrum.type, spectrum.kind) == ('unknown', 'PMCA SPECTRUM')
    assert spectrum.value == 'TAG - live_data\nDESCRIPTION - test'
    assert (spectrum.line_start, spectrum.line_end) == (0, 2)

    assert data.type == 'scanData'
    assert data.headers == ['count']
    assert data.data == [[0, 5, 12]]
    assert (data.line_start, data.line_end) == (4, 6)
    assert not data.x_axis_selectable

    assert (config.kind, config.value) == ('DP5 CONFIGURATION', 'GAIN=10;')
    assert (config.line_start, config.line_end) == (8, 10)


def test_folding_and_outline():
    result = mr.parse_mca(SAMPLE)
    assert result.folding_ranges == [FoldingRange(0, 2), FoldingRange(3, 7), FoldingRange(8, 10)]
    assert [s.name for s in result.symbols] == ['PMCA SPECTRUM', 'DATA', 'DP5 CONFIGURATION']
    data = result.symbols[1]
    assert data.kind == 'object'
    assert data.range == Range(3, 0, 7, len('<<END>>'))
    assert data.selection_range == Range(3, 0, 3, len('<<DATA>>'))


def test_section_open_at_end_of_file():
    result = mr.parse_mca("<<DATA>>\n1\n2")
    (node,) = result.nodes
    assert node.data == [[1, 2]]
    assert (node.line_start, node.line_end) == (1, 2)
    assert result.folding_ranges == [FoldingRange(0, 2)]


def test_empty_data_section():
    (node,) = mr.parse_mca("<<DATA>>\n<<END>>\n").nodes
    assert node.data == []
    assert node.row_count == 0


def test_non_integer_counts_are_tolerated(reporter):
    text = "<<PMCA SPECTRUM>>\nTAG - x\n<<DATA>>\n1\n2.0\nx\n<<END>>\n"
    result = mr.parse_mca(text, reporter=reporter)

    assert result is not None
    assert reporter.errors == []
    spectrum, data = result.nodes
    assert spectrum.value == "TAG - x"
    assert data.data[0][:2] == [1, 2]
    assert math.isnan(data.data[0][2])
    assert len(reporter.warnings) == 2
    assert "'2.0': line 5" in reporter.warnings[0]
    assert "line 6" in reporter.warnings[1]
    assert result.warnings == reporter.warnings


def test_cancelled(reporter):
    token = threading.Event()
    token.set()
    assert mr.parse_mca(SAMPLE, token=token, reporter=reporter) is None
    assert reporter.errors == []
