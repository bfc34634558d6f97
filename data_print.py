# Print parsed nodes to the terminal (file/scan headings, motor position
# tables, data section summaries and tables).
import math

import query

MISMATCH_NOTICE = "The number of scan headers and data columns mismatched."


def print_nodes(nodes, settings):
    for line in format_nodes(nodes, settings):
        print(line)


def format_nodes(nodes, settings):
    """Text lines for a whole node sequence, in document order."""
    out = []
    # name lists seen so far; a value list uses the latest one above it
    seen = {'name_lists': {}, 'mnemonic_lists': {}}
    occurrence = 0
    for node in nodes:
        t = node.type
        if t == 'file':
            out.append(f"File: {node.value}")
        elif t == 'date':
            out.append(f"Date: {node.value}")
        elif t == 'comment':
            out.append(f"Comment: {node.value}")
        elif t == 'nameList':
            key = 'mnemonic_lists' if node.mnemonic else 'name_lists'
            seen[key][node.kind] = node.values
        elif t == 'valueList':
            headers = query.motor_headers(seen, settings.header_type) if node.kind == 'motor' else None
            out.extend(_format_value_list(node, headers, settings.columns_per_line))
        elif t == 'scanHead':
            out.append('')
            out.append(f"Scan {node.index}: {node.code}")
        elif t == 'scanData':
            out.extend(_format_scan_data(node, occurrence, settings.hide_table))
            occurrence += 1
        elif t == 'unknown':
            pass
        else:
            raise ValueError(f"Unhandled node type: {t}")
    return out


def print_scan_data(idx, occurrence):
    """Print one data section in full (headers and every row)."""
    node = query.get_scan_data(idx, occurrence)
    for line in _format_scan_data(node, occurrence, hide_table=False):
        print(line)


def _format_value_list(node, headers, per_line):
    if headers is not None and len(headers) != len(node.values):
        return [MISMATCH_NOTICE]
    out = [f"[{node.kind}]"]
    values = node.values
    for start in range(0, len(values), per_line):
        chunk = values[start:start + per_line]
        if headers is not None:
            names = headers[start:start + per_line]
            widths = [max(len(n), len(_fmt(v))) for n, v in zip(names, chunk)]
            out.append('  '.join(n.rjust(w) for n, w in zip(names, widths)))
            out.append('  '.join(_fmt(v).rjust(w) for v, w in zip(chunk, widths)))
        else:
            out.append('  '.join(_fmt(v) for v in chunk))
    return out


def _format_scan_data(node, occurrence, hide_table):
    cols = len(node.data)
    rows = node.row_count
    out = [f"Data #{occurrence}: {rows} rows x {cols} columns (lines {node.line_start + 1}-{node.line_end + 1})"]
    if not cols:
        return out
    out.append("Columns: " + ', '.join(node.headers))
    if hide_table:
        return out
    cells = [[_fmt(v) for v in col] for col in node.data]
    headers = list(node.headers[:cols]) + [f"[{c}]" for c in range(len(node.headers), cols)]
    widths = [max([len(h)] + [len(c) for c in col]) for h, col in zip(headers, cells)]
    out.append('  '.join(h.rjust(w) for h, w in zip(headers, widths)))
    for r in range(rows):
        out.append('  '.join(cells[c][r].rjust(widths[c]) for c in range(cols)))
    return out


def _fmt(v):
    if isinstance(v, float):
        if math.isnan(v):
            return 'nan'
        if v.is_integer() and abs(v) < 1e15:
            return str(int(v))
        return f"{v:g}"
    return str(v)
