# Small CLI for instrument data files: outline, print, plot.
# Usage:
#   python cli.py <file.spec> --list ALL
#   python cli.py <file.spec> --outline
#   python cli.py <file.spec> --print
#   python cli.py <file.spec> --plot 0 -x 0 -y -1 --y2 3
#   python cli.py <file.csv> --format csv-row --json
#
# Notes:
# - One chart per --plot invocation (plot shows immediately unless --save).
# - Data sections are addressed by occurrence: 0 is the first #L block.

import argparse
import json
import logging
import sys
from textwrap import fill

import data_print
import index
import query
import reader
from nodes import result_to_dict
from settings import Settings, load_settings

log = logging.getLogger(__name__)


def _describe(node):
    t = node.type
    if t in ('file', 'date', 'comment'):
        return node.value
    if t == 'nameList':
        return f"{node.kind}{' (mnemonic)' if node.mnemonic else ''}: {len(node.values)} names"
    if t == 'valueList':
        return f"{node.kind}: {len(node.values)} values"
    if t == 'scanHead':
        return f"{node.index} {node.code}"
    if t == 'scanData':
        return f"{node.row_count} rows x {len(node.data)} columns"
    return f"#{node.kind} {node.value}".rstrip()


def main(argv=None):
    ap = argparse.ArgumentParser(description="Instrument scan data tools")
    ap.add_argument("file", help="Path to a data file")
    ap.add_argument("--format", "-f", dest="fmt", choices=reader.FORMATS,
                    help="File format; by default chosen from the file name")
    ap.add_argument("--settings", help="JSON settings file")
    ap.add_argument("--list", dest="list_type",
                    help="List nodes of a type (e.g., scanHead). Use ALL to list every type with its entries")
    ap.add_argument("--outline", action="store_true", help="Print outline symbols")
    ap.add_argument("--folding", action="store_true", help="Print folding ranges")
    ap.add_argument("--print", dest="print_tree", action="store_true", help="Print the document contents")
    ap.add_argument("--json", action="store_true", help="Dump the parse result as JSON (NaN cells as null)")
    ap.add_argument("--plot-data", dest="plot_data", type=int, metavar="N",
                    help="Print data section N (0-based occurrence) in full")
    ap.add_argument("--plot", dest="plot", type=int, metavar="N", help="Plot data section N")
    ap.add_argument("--plot-all", action="store_true", help="Plot all data sections in one figure")
    ap.add_argument("-x", type=int, default=0, help="Column for the x axis (default 0)")
    ap.add_argument("-y", type=int, nargs="+", default=[-1], help="Columns for the left y axis (-1 = last)")
    ap.add_argument("--y2", type=int, nargs="+", default=[], help="Columns for the right y axis")
    ap.add_argument("--logy", action="store_true", help="Log scale on the left y axis")
    ap.add_argument("--logy2", action="store_true", help="Log scale on the right y axis")
    ap.add_argument("--save", help="Save the plot to this file instead of showing it")
    ap.add_argument("--verbose", "-v", action="count", default=0)
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose > 1 else logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings(args.settings) if args.settings else Settings()
        result = reader.read_file(args.file, fmt=args.fmt, settings=settings)
    except (OSError, ValueError) as ex:
        print(f"Error: {ex}", file=sys.stderr)
        return 1
    if result is None:
        print(f"Failed in parsing the file: {args.file}", file=sys.stderr)
        return 1

    nodes = result.nodes
    idx = index.build_index(nodes)

    if args.json:
        print(json.dumps(result_to_dict(result), indent=2, allow_nan=False))

    if args.list_type:
        lt = args.list_type.strip()
        if lt.upper() == "ALL":
            for t, items in idx['by_type'].items():
                print(f"{t} ({len(items)}):")
                for node in items:
                    print(f"  {node.line_start + 1}: {_describe(node)}")
        else:
            items = query.list_nodes_by_type(idx, lt)
            if not items:
                print("(none)")
            else:
                print(f"{lt} ({len(items)}):")
                line = ', '.join(_describe(n) for n in items)
                print('  ' + fill(line, width=100, subsequent_indent='  '))

    if args.outline:
        for s in result.symbols:
            print(f"{s.range.start_line + 1}-{s.range.end_line + 1}  {s.name}  {s.detail}".rstrip())

    if args.folding:
        for r in result.folding_ranges:
            print(f"{r.start + 1}-{r.end + 1}")

    if args.print_tree:
        data_print.print_nodes(nodes, settings)

    try:
        if args.plot_data is not None:
            data_print.print_scan_data(idx, args.plot_data)

        if args.plot is not None or args.plot_all:
            import plot
            if args.plot is not None:
                plot.plot_scan(nodes, idx, args.plot, settings, x=args.x, y1=args.y,
                               y2=args.y2, y1_log=args.logy, y2_log=args.logy2, save=args.save)
            if args.plot_all:
                plot.plot_all(nodes, idx, settings, save=args.save)
    except (KeyError, IndexError, ValueError) as ex:
        print(f"Error: {ex}", file=sys.stderr)
        return 1

    log.debug("%d warnings", len(result.warnings))
    return 0


if __name__ == "__main__":
    sys.exit(main())
