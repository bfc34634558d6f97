# Build simple indices over a parsed node sequence for fast lookup.
# scan_data keeps document order; a node's position there is its
# "occurrence", the number used to address plots and printed tables.

def build_index(nodes):
    by_type = {}
    scans = {}
    scan_data = []
    name_lists = {}
    mnemonic_lists = {}
    for node in nodes:
        bucket = by_type.get(node.type)
        if bucket is None:
            bucket = []
            by_type[node.type] = bucket
        bucket.append(node)

        if node.type == 'scanHead':
            scans[node.index] = node
        elif node.type == 'scanData':
            scan_data.append(node)
        elif node.type == 'nameList':
            # a later header block replaces the earlier one
            if node.mnemonic:
                mnemonic_lists[node.kind] = node.values
            else:
                name_lists[node.kind] = node.values
    return {
        'by_type': by_type,
        'scans': scans,
        'scan_data': scan_data,
        'name_lists': name_lists,
        'mnemonic_lists': mnemonic_lists,
    }
