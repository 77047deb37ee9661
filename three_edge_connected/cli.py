import argparse
import contextlib
import sys

from .analyse import gfa_three_edge_components
from .exceptions import ThreeEdgeConnectedError
from .report import components_to_df, write_components


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="three-edge-connected",
        description="Finds the 3-edge-connected components in a graph given in the GFA format. "
        "Output is a list of 3-edge-connected components, one per line, "
        "as tab-separated lists of segment names.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("-s", "--stdin", action="store_true", help="Read the GFA from stdin.")
    source.add_argument("-i", "--in-file", help="GFA file (possibly gzipped).")
    parser.add_argument("-o", "--out-file", help="Output file. If not given, writes to stdout.")
    parser.add_argument(
        "--cactus",
        action="store_true",
        help="Work on the biedged graph with contracted gray edges instead of the segment graph.",
    )
    parser.add_argument(
        "--min-size",
        type=int,
        default=2,
        help="Report only components with at least that many nodes (default: %(default)s).",
    )
    parser.add_argument("--canonical", action="store_true", help="Sort components by their smallest node.")
    parser.add_argument("--table", action="store_true", help="Write a tab-separated table, one row per node.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show progress on stderr.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = get_parser().parse_args(argv)
    try:
        # stage messages must not mix with components written to stdout
        with contextlib.redirect_stdout(sys.stderr):
            graph, components = gfa_three_edge_components(
                sys.stdin if args.stdin else args.in_file,
                contract_gray_edges=args.cactus,
                canonical=args.canonical,
                verbose=args.verbose,
            )
        out = open(args.out_file, "w") if args.out_file else sys.stdout
    except (OSError, ThreeEdgeConnectedError) as e:
        print(f"three-edge-connected: {e}", file=sys.stderr)
        return 1

    try:
        if args.table:
            df = components_to_df(components, graph.inv_names)
            df = df[df.component_size >= args.min_size]
            df.to_csv(out, sep="\t", index=False)
        else:
            write_components(out, graph.inv_names, components, min_size=args.min_size)
    finally:
        if out is not sys.stdout:
            out.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
