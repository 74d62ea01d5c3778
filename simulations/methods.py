# simulations/methods.py

from __future__ import annotations

import logging
import math
import random
from typing import Callable, Dict, Optional

from graph_bins import (
    ArbitraryRegularGraph,
    CompleteGraph,
    Graph,
    HyperCubeGraph,
    RingGraph,
    TorusGraph,
)

from .common import ExperimentSpec

logger = logging.getLogger(__name__)


GraphBuilder = Callable[[int, Optional[int], random.Random], Graph]


def build_ring(n: int, d: Optional[int], rng: random.Random) -> Graph:
    return RingGraph(n)


def build_torus(n: int, d: Optional[int], rng: random.Random) -> Graph:
    """
    Square torus; n must be a perfect square.
    """
    side = math.isqrt(n)
    if side * side != n:
        raise ValueError(f"torus needs a square vertex count, got {n}")
    return TorusGraph(side, side)


def build_hypercube(n: int, d: Optional[int], rng: random.Random) -> Graph:
    """
    Hypercube; n must be a power of two.
    """
    if n < 2 or n & (n - 1):
        raise ValueError(f"hypercube needs a power-of-two vertex count, got {n}")
    return HyperCubeGraph(n.bit_length() - 1)


def build_complete(n: int, d: Optional[int], rng: random.Random) -> Graph:
    return CompleteGraph(n)


def build_random(n: int, d: Optional[int], rng: random.Random) -> Graph:
    """
    Random simple d-regular graph (configuration model + switchings).
    A fresh graph is drawn every time this is called.
    """
    if d is None:
        raise ValueError("topology 'random' needs d")
    graph = ArbitraryRegularGraph.random(n, d, rng)
    logger.debug("drew random %d-regular graph on %d vertices", d, n)
    return graph


def build_graph(spec: ExperimentSpec, rng: random.Random) -> Graph:
    """
    Build the graph for one repetition of `spec`.

    Structured topologies fix their own degree; a `d` that disagrees with it
    is an error rather than being dropped.
    """
    graph = get_topology(spec.topology)(spec.n, spec.d, rng)
    if spec.d is not None and graph.degree != spec.d:
        raise ValueError(
            f"topology '{spec.topology}' with n={spec.n} has degree {graph.degree}, not d={spec.d}"
        )
    return graph


# --- Registry / dispatch -----------------------------------------------------

def get_topology(name: str) -> GraphBuilder:
    name = name.strip().lower()
    if name not in TOPOLOGIES:
        raise ValueError(f"unknown topology '{name}'. Available: {sorted(TOPOLOGIES.keys())}")
    return TOPOLOGIES[name]


# TOPOLOGIES maps topology name -> builder(n, d, rng).
TOPOLOGIES: Dict[str, GraphBuilder] = {
    "ring": build_ring,
    "torus": build_torus,
    "hypercube": build_hypercube,
    "complete": build_complete,
    "random": build_random,
}
