"""
Balls-into-bins load balancing on d-regular graphs.

Random regular graphs come from the configuration model plus switching
repair; structured topologies (ring, torus, hypercube, complete) use
closed-form neighbors. A driver throws balls on random edges and lets a
pluggable decision algorithm pick the endpoint.
"""

from .algorithms import ALGORITHMS, DecisionAlgorithm, Greedy, OneChoice, get_algorithm
from .arbitrary_graph import ArbitraryRegularGraph
from .bins import LoadBins
from .driver import load_balance, load_balanced
from .export import to_dot
from .graph import Graph, GraphValidationError
from .pairing import Pairing, random_pairing
from .structured import CompleteGraph, HyperCubeGraph, RingGraph, TorusGraph
from .switching import GenerationResult, RepairFailed, random_simple_pairing

__all__ = [
    "ALGORITHMS",
    "ArbitraryRegularGraph",
    "CompleteGraph",
    "DecisionAlgorithm",
    "GenerationResult",
    "Graph",
    "GraphValidationError",
    "Greedy",
    "HyperCubeGraph",
    "LoadBins",
    "OneChoice",
    "Pairing",
    "RepairFailed",
    "RingGraph",
    "TorusGraph",
    "get_algorithm",
    "load_balance",
    "load_balanced",
    "random_pairing",
    "random_simple_pairing",
    "to_dot",
]
