import json

import matplotlib
matplotlib.use("Agg")

import pytest

import cli


@pytest.fixture
def spec_file(tmp_path, sample_spec):
    path = tmp_path / 'sample.spec'
    path.write_text(sample_spec, encoding='latin-1')
    return str(path)


def test_list_all(spec_file, capsys):
    assert cli.main([spec_file, '--list', 'ALL']) == 0
    out = capsys.readouterr().out
    assert 'scanHead (2):' in out
    assert '  12: 1 ascan  th 0 1 2 0.1' in out
    assert '3 rows x 3 columns' in out


def test_list_one_type(spec_file, capsys):
    assert cli.main([spec_file, '--list', 'date']) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == 'date (2):'
    assert cli.main([spec_file, '--list', 'bogus']) == 0
    assert capsys.readouterr().out.strip() == '(none)'


def test_outline_and_folding(spec_file, capsys):
    assert cli.main([spec_file, '--outline', '--folding']) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[:3] == ['1-11  #F  /tmp/sample.spec', '12-21  #S 1  ascan  th 0 1 2 0.1', '22-26  #S 2  timescan 1']
    assert out[3:] == ['1-11', '12-21', '22-26']


def test_json(spec_file, capsys):
    assert cli.main([spec_file, '--json']) == 0
    data = json.loads(capsys.readouterr().out)
    assert data['format'] == 'spec-data'
    assert data['nodes'][0] == {'type': 'file', 'line_start': 0, 'line_end': 0, 'value': '/tmp/sample.spec'}
    assert data['foldingRanges'][0] == {'start': 0, 'end': 10}


def test_json_writes_nan_as_null(tmp_path, capsys):
    path = tmp_path / 'gaps.spec'
    path.write_text('#L a  b\n1 oops\n', encoding='latin-1')
    assert cli.main([str(path), '--json']) == 0
    out = capsys.readouterr().out
    assert 'NaN' not in out
    assert json.loads(out)['nodes'][0]['data'] == [[1.0], [None]]


def test_print(spec_file, capsys):
    assert cli.main([spec_file, '--print', '--plot-data', '0']) == 0
    out = capsys.readouterr().out
    assert 'Scan 2: timescan 1' in out
    assert 'Data #0: 3 rows x 3 columns' in out


def test_plot_save(spec_file, tmp_path):
    out = tmp_path / 'p.png'
    assert cli.main([spec_file, '--plot', '1', '-x', '0', '-y', '1', '--save', str(out)]) == 0
    assert out.exists()


def test_bad_plot_index(spec_file, capsys):
    assert cli.main([spec_file, '--plot', '9', '--save', 'unused.png']) == 1
    assert 'No data section #9' in capsys.readouterr().err


def test_format_override(tmp_path, capsys):
    path = tmp_path / 'data.txt'
    path.write_text('1 2\n3 4\n', encoding='latin-1')
    assert cli.main([str(path), '--format', 'csv-row', '--list', 'scanData']) == 0
    assert 'scanData (2):' in capsys.readouterr().out


def test_unknown_format(tmp_path, capsys):
    path = tmp_path / 'data.txt'
    path.write_text('1 2\n', encoding='latin-1')
    assert cli.main([str(path), '--list', 'ALL']) == 1
    assert 'No format associated' in capsys.readouterr().err


def test_parse_failure(tmp_path, capsys):
    path = tmp_path / 'broken.spec'
    path.write_text('#O1 A\n', encoding='latin-1')
    assert cli.main([str(path)]) == 1
    assert 'Failed in parsing the file' in capsys.readouterr().err
