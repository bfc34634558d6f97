# Queries over the indexed node sequence: nodes by type, data sections by
# occurrence, the node under an editor line, and plot series selection.

def list_nodes_by_type(idx, node_type):
    return idx['by_type'].get(node_type, [])


def get_scan_data(idx, occurrence):
    items = idx['scan_data']
    if occurrence < 0 or occurrence >= len(items):
        raise KeyError(f"No data section #{occurrence} (file has {len(items)})")
    return items[occurrence]


def get_scan(idx, number):
    scan = idx['scans'].get(number)
    if scan is None:
        raise KeyError(f"No such scan: {number}")
    return scan


def node_at_line(nodes, line):
    """First node ending at or after `line` (keeps a preview in step with an editor)."""
    for node in nodes:
        if node.line_end >= line:
            return node
    return None


def scan_for(nodes, data_node):
    """Closest ScanHead before `data_node`, or None."""
    head = None
    for node in nodes:
        if node is data_node:
            return head
        if node.type == 'scanHead':
            head = node
    return None


def motor_headers(idx, header_type):
    # header_type: 'Name', 'Mnemonic' or 'None'
    if header_type == 'Name':
        return idx['name_lists'].get('motor')
    if header_type == 'Mnemonic':
        return idx['mnemonic_lists'].get('motor')
    return None


def _resolve(node, i):
    n = len(node.data)
    k = n - 1 if i == -1 else i
    if k < 0 or k >= n:
        raise IndexError(f"Column {i} out of range (0..{n - 1})")
    label = node.headers[k] if k < len(node.headers) else f"[{k}]"
    return label, node.data[k]


def select_series(node, x=0, y1=(-1,), y2=()):
    """
    Pick plot series out of a ScanData node by column index (-1 = last column).
    Returns (x_series, [y1 series], [y2 series]); each series is (label, values).
    """
    if node.type != 'scanData':
        raise ValueError(f"Not a data section: {node.type}")
    if not node.data:
        raise ValueError("Data section has no rows")
    x_series = _resolve(node, x) if node.x_axis_selectable else None
    return (x_series,
            [_resolve(node, i) for i in y1],
            [_resolve(node, i) for i in y2])
