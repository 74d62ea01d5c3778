import random
from typing import Type

from .algorithms import DecisionAlgorithm
from .bins import LoadBins
from .graph import Graph


def load_balance(
    bins: LoadBins,
    algorithm: DecisionAlgorithm,
    balls: int,
    rng: random.Random,
) -> LoadBins:
    """
    Throw `balls` balls: each one lands on a random edge of the graph and
    the algorithm decides which endpoint gets it.

    This is the only place loads change, one increment per ball.
    """
    if balls < 0:
        raise ValueError("balls must be >= 0")

    graph = bins.graph
    for _ in range(balls):
        u, v = graph.random_edge(rng)
        chosen = algorithm.choose_between(bins, u, v, rng)
        if chosen != u and chosen != v:
            raise RuntimeError(
                f"{type(algorithm).__name__} chose {chosen}, not an endpoint of ({u}, {v})"
            )
        bins.add_ball(chosen)
    return bins


def load_balanced(
    graph: Graph,
    algorithm_cls: Type[DecisionAlgorithm],
    balls: int,
    rng: random.Random,
) -> LoadBins:
    """
    Fresh empty bins on `graph`, filled with `balls` balls.
    """
    if balls < 0:
        raise ValueError("balls must be >= 0")
    bins = LoadBins(graph)
    algorithm = algorithm_cls.for_graph(graph)
    return load_balance(bins, algorithm, balls, rng)
