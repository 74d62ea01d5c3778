# simulations/run.py

from __future__ import annotations

import argparse
import logging
import random
import sys
from dataclasses import replace
from typing import List

from graph_bins import get_algorithm, load_balanced, to_dot

from .common import (
    DEFAULT_SEED,
    ExperimentResult,
    ExperimentSpec,
    Timer,
    format_stats_line,
    format_summary_line,
)
from .methods import TOPOLOGIES, build_graph

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Offset between the graph RNG seed and the ball RNG seed, so that two runs
# with the same seed see the same sequence of graphs whatever the algorithm.
BALL_SEED_OFFSET = 1000


def run_experiment(
    spec: ExperimentSpec,
    seed: int = DEFAULT_SEED,
) -> List[ExperimentResult]:
    """
    Run all repetitions of one experiment.

    Parameters
    ----------
    spec:
        Topology, size, balls, repetitions and algorithm.
    seed:
        Base RNG seed. Graphs are drawn from Random(seed), balls from
        Random(seed + BALL_SEED_OFFSET).

    Returns
    -------
    One ExperimentResult per repetition.
    """
    algorithm_cls = get_algorithm(spec.algorithm)

    graph_rng = random.Random(seed)
    ball_rng = random.Random(seed + BALL_SEED_OFFSET)

    results: List[ExperimentResult] = []
    for i in range(spec.repetitions):
        graph = build_graph(spec, graph_rng)
        with Timer() as t:
            bins = load_balanced(graph, algorithm_cls, spec.balls, ball_rng)

        result = ExperimentResult(
            algorithm=spec.algorithm,
            spec=spec,
            loads=bins.snapshot_loads(),
            runtime_s=t.elapsed_s,
            meta={"repetition": i, "graph": repr(graph)},
            bins=bins,
        )
        logger.info("repetition %d/%d %s", i + 1, spec.repetitions, format_stats_line(result))
        results.append(result)
    return results


def run_pair(
    algorithm_a: str,
    algorithm_b: str,
    spec: ExperimentSpec,
    seed: int = DEFAULT_SEED,
):
    """
    Convenience helper: run two algorithms on the same graphs and seed.

    Returns (results_a, results_b).
    """
    ra = run_experiment(_with_algorithm(spec, algorithm_a), seed=seed)
    rb = run_experiment(_with_algorithm(spec, algorithm_b), seed=seed)
    return ra, rb


def _with_algorithm(spec: ExperimentSpec, algorithm: str) -> ExperimentSpec:
    return replace(spec, algorithm=algorithm)


def add_experiment_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--topology", required=True, help=f"one of {sorted(TOPOLOGIES)}")
    parser.add_argument("--n", type=int, required=True, help="number of vertices")
    parser.add_argument("--d", type=int, default=None, help="degree (required for random; must match structured topologies)")
    parser.add_argument("--balls", type=int, required=True, help="number of balls")
    parser.add_argument("--repetitions", type=int, default=1, help="independent runs")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="base RNG seed")
    parser.add_argument("--log-level", default="WARNING", help="logging level")


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def main(argv: List[str], out=None) -> int:
    out = out or sys.stdout
    parser = argparse.ArgumentParser(
        description="Throw balls on a regular graph and report the load gap."
    )
    add_experiment_args(parser)
    parser.add_argument("--algorithm", default="greedy", help="e.g. greedy | one_choice")
    parser.add_argument("--dot", default=None, help="write the last run as Graphviz DOT to this path")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    spec = ExperimentSpec(
        topology=args.topology,
        n=args.n,
        balls=args.balls,
        d=args.d,
        repetitions=args.repetitions,
        algorithm=args.algorithm,
    )
    results = run_experiment(spec, seed=args.seed)

    for r in results:
        print(format_stats_line(r), file=out)
    print(format_summary_line(spec.algorithm, results), file=out)

    if args.dot is not None:
        with open(args.dot, "w", encoding="utf-8") as fh:
            fh.write(to_dot(results[-1].bins))

    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
