#!/usr/bin/env python3
"""
Reduce a whitespace-separated matrix file to reduced row echelon form.

  python examples/reduce_file.py matrix.txt
  python examples/reduce_file.py matrix.txt --lenient --draw out.png -v
"""

import argparse
import logging
import sys

from rreftools import Reducer, RrefError


def main(argv=None):
    ap = argparse.ArgumentParser(description=__doc__,
                                 formatter_class=argparse.RawDescriptionHelpFormatter)
    ap.add_argument("path", help="text file, one row per line")
    ap.add_argument("--lenient", action="store_true",
                    help="parse unreadable tokens as 0 instead of failing")
    ap.add_argument("--tol", type=float, default=None,
                    help="relative cancellation tolerance (default: RREFTOOLS_ZERO_TOL or 1e-10)")
    ap.add_argument("--eps", type=float, default=None,
                    help="display snap for printing (default: 1e-3)")
    ap.add_argument("--draw", type=str, default=None, metavar="OUT.png",
                    help="also save a before/after picture")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        red = Reducer.from_file(args.path, lenient=args.lenient, zero_tol=args.tol)
    except RrefError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    red.print_matrix(eps=args.eps)
    print()
    print(f"rank={red.rank}  pivots={red.pivot_columns()}  passes={red.passes}")

    if args.draw:
        from rreftools.io.text import read_matrix
        from rreftools.viz.draw import draw_reduction

        draw_reduction(read_matrix(args.path, lenient=args.lenient),
                       eps=args.eps, zero_tol=args.tol, save_path=args.draw)
        print(f"saved {args.draw}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
