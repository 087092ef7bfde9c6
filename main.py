#!/usr/bin/env python3
"""
Command-line front end for the graphing core.

    python main.py "x^2 - 4" --at 2 --at 3 --range -5 5

Prints y for every --at value and the x-intercepts found over the range.
"""
import argparse
import logging
import sys
from pathlib import Path

# running from a checkout without installing: make graphcalc importable
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from graphcalc import config
from graphcalc.api import EvalError, GraphSession, sample_for_viewport, visible_range
from graphcalc.zeros import find_zero_crossings


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Evaluate a function of x and mark its x-intercepts.")
    p.add_argument("expression", help="function of x, e.g. '2sin(x) - 1'")
    p.add_argument("--at", type=float, action="append", default=[], metavar="X",
                   help="print y at this x (repeatable)")
    p.add_argument("--range", type=float, nargs=2, metavar=("XMIN", "XMAX"),
                   help="x-range to scan for intercepts (default: the default viewport)")
    p.add_argument("--width", type=int, default=config.DEFAULT_VIEWPORT_WIDTH,
                   help="number of sample steps, one per pixel column")
    p.add_argument("--verbose", action="store_true", help="enable debug logging")
    return p


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    session = GraphSession()
    error = session.submit(args.expression)
    if error is not None:
        print(f"Error: {session.error_message}", file=sys.stderr)
        if session.hint:
            print(session.hint, file=sys.stderr)
        return 2

    print(f"f(x) = {session.canonical}")
    for x in args.at:
        try:
            print(f"y({x:g}) = {session.evaluate_at(x):.10g}")
        except EvalError as e:
            print(f"y({x:g}) = undefined ({e.message})")

    if args.range:
        x_min, x_max = args.range
    else:
        x_min, x_max = visible_range(args.width, config.DEFAULT_PIXELS_PER_UNIT, 0)
    try:
        samples = sample_for_viewport(session.tree, x_min, x_max, args.width)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    zeros = find_zero_crossings(samples)
    if not zeros:
        print(f"no x-intercepts in [{x_min:g}, {x_max:g}]")
    for z in zeros:
        print(f"x-intercept near x = {z.x:.6g}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
