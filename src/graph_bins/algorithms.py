import random
from abc import ABC, abstractmethod
from typing import Dict, Type

from .bins import LoadBins
from .graph import Graph, Vertex


class DecisionAlgorithm(ABC):
    """
    Placement policy for one ball thrown on edge (u, v).

    An instance is built once per graph via for_graph() before the run and
    then asked choose_between() for every ball. It sees the current loads
    through the LoadBins overlay but must never modify them; the driver does
    the increment. Subclasses may keep state on the instance.
    """

    @classmethod
    def for_graph(cls, graph: Graph) -> "DecisionAlgorithm":
        return cls()

    @abstractmethod
    def choose_between(
        self, bins: LoadBins, u: Vertex, v: Vertex, rng: random.Random
    ) -> Vertex:
        ...


class Greedy(DecisionAlgorithm):
    """
    Graph-restricted power of two choices: the less loaded endpoint wins,
    exact ties are broken by a fair coin.
    """

    def choose_between(
        self, bins: LoadBins, u: Vertex, v: Vertex, rng: random.Random
    ) -> Vertex:
        lu = bins[u]
        lv = bins[v]
        if lu < lv:
            return u
        if lv < lu:
            return v
        return u if rng.random() < 0.5 else v


class OneChoice(DecisionAlgorithm):
    """
    Baseline: ignore loads and pick either endpoint uniformly.
    """

    def choose_between(
        self, bins: LoadBins, u: Vertex, v: Vertex, rng: random.Random
    ) -> Vertex:
        return u if rng.random() < 0.5 else v


# --- Registry / dispatch -----------------------------------------------------

def get_algorithm(name: str) -> Type[DecisionAlgorithm]:
    name = name.strip().lower()
    if name not in ALGORITHMS:
        raise ValueError(f"unknown algorithm '{name}'. Available: {sorted(ALGORITHMS.keys())}")
    return ALGORITHMS[name]


ALGORITHMS: Dict[str, Type[DecisionAlgorithm]] = {
    "greedy": Greedy,
    "one_choice": OneChoice,
}
