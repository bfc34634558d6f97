import pytest

import index
import query
import scan_reader
import table_reader


@pytest.fixture
def parsed(sample_spec):
    nodes = scan_reader.parse_scan_log(sample_spec).nodes
    return nodes, index.build_index(nodes)


def test_build_index(parsed):
    nodes, idx = parsed
    assert sorted(idx['scans']) == [1, 2]
    assert len(idx['scan_data']) == 2
    assert len(idx['by_type']['nameList']) == 4
    assert idx['name_lists']['motor'][0] == 'Two Theta'
    assert idx['mnemonic_lists']['counter'] == ['sec', 'mon', 'det']


def test_list_and_lookup(parsed):
    nodes, idx = parsed
    assert [n.index for n in query.list_nodes_by_type(idx, 'scanHead')] == [1, 2]
    assert query.list_nodes_by_type(idx, 'nope') == []
    assert query.get_scan(idx, 2).code == 'timescan 1'
    assert query.get_scan_data(idx, 1).headers == ['Seconds', 'Detector']
    with pytest.raises(KeyError):
        query.get_scan(idx, 7)
    with pytest.raises(KeyError):
        query.get_scan_data(idx, 2)


def test_node_at_line(parsed):
    nodes, _ = parsed
    assert query.node_at_line(nodes, 0).type == 'file'
    assert query.node_at_line(nodes, 18).type == 'scanData'
    # a blank line maps to the next node
    assert query.node_at_line(nodes, 20).type == 'scanHead'
    assert query.node_at_line(nodes, 100) is None


def test_scan_for(parsed):
    nodes, idx = parsed
    assert query.scan_for(nodes, idx['scan_data'][0]).index == 1
    assert query.scan_for(nodes, idx['scan_data'][1]).index == 2


def test_motor_headers(parsed):
    _, idx = parsed
    assert query.motor_headers(idx, 'Mnemonic') == ['tth', 'th', 'chi', 'phi', 'samx']
    assert query.motor_headers(idx, 'Name')[-1] == 'Sample X'
    assert query.motor_headers(idx, 'None') is None


def test_select_series(parsed):
    _, idx = parsed
    node = query.get_scan_data(idx, 0)
    x, y1, y2 = query.select_series(node, x=0, y1=(-1,), y2=(1,))
    assert x == ('Theta', [0.0, 0.5, 1.0])
    assert y1 == [('Detector', [12.0, 30.0, 15.0])]
    assert y2 == [('Monitor', [1000.0, 1001.0, 999.0])]
    with pytest.raises(IndexError):
        query.select_series(node, y1=(3,))


def test_select_series_without_x_axis():
    node = table_reader.parse_table("1 2\n", columnwise=False).nodes[0]
    x, y1, _ = query.select_series(node)
    assert x is None
    assert y1 == [('row 0', [1.0, 2.0])]


def test_select_series_rejects_empty_or_other_nodes(parsed):
    nodes, _ = parsed
    with pytest.raises(ValueError):
        query.select_series(nodes[0])
    empty = scan_reader.parse_scan_log("#L a  b\n").nodes[0]
    with pytest.raises(ValueError):
        query.select_series(empty)
