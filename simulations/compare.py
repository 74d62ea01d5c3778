# simulations/compare.py

from __future__ import annotations

import argparse
import sys

import matplotlib.pyplot as plt

from .common import ExperimentSpec, common_x_range, format_summary_line, gaps
from .run import add_experiment_args, configure_logging, run_pair


def main(argv: list[str], out=None) -> int:
    out = out or sys.stdout
    parser = argparse.ArgumentParser(
        description="Compare two decision algorithms on the same graphs (gap histograms)."
    )
    parser.add_argument("--algorithm-a", required=True, help="e.g. greedy | one_choice")
    parser.add_argument("--algorithm-b", required=True, help="e.g. greedy | one_choice")
    add_experiment_args(parser)
    parser.add_argument("--no-plot", action="store_true", help="print stats only")
    parser.add_argument("--output", default=None, help="save the figure here instead of showing it")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    spec = ExperimentSpec(
        topology=args.topology,
        n=args.n,
        balls=args.balls,
        d=args.d,
        repetitions=args.repetitions,
    )
    ra, rb = run_pair(args.algorithm_a, args.algorithm_b, spec, seed=args.seed)

    # Print stats
    print(format_summary_line(args.algorithm_a, ra), file=out)
    print(format_summary_line(args.algorithm_b, rb), file=out)

    if args.no_plot:
        return 0

    # Plot with same x-axis
    ga, gb = gaps(ra), gaps(rb)
    xmin, xmax = common_x_range([ga, gb])
    bins = max(1, int(xmax - xmin) + 1)

    plt.figure(figsize=(12, 4))

    plt.subplot(1, 2, 1)
    plt.hist(ga, bins=bins, range=(xmin - 0.5, xmax + 0.5))
    plt.title(args.algorithm_a)
    plt.xlabel("Gap (max - min load)")
    plt.ylabel("Number of runs")
    plt.xlim(xmin - 0.5, xmax + 0.5)

    plt.subplot(1, 2, 2)
    plt.hist(gb, bins=bins, range=(xmin - 0.5, xmax + 0.5))
    plt.title(args.algorithm_b)
    plt.xlabel("Gap (max - min load)")
    plt.xlim(xmin - 0.5, xmax + 0.5)

    plt.suptitle(
        f"Compare: {args.algorithm_a} vs {args.algorithm_b}  "
        f"({spec.topology}, n={spec.n}, balls={spec.balls}, runs={spec.repetitions})"
    )
    plt.tight_layout(rect=[0, 0.02, 1, 0.92])
    if args.output is not None:
        plt.savefig(args.output)
    else:
        plt.show()

    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
