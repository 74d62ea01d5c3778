import random
from abc import ABC, abstractmethod
from typing import Iterator, List, Sequence, Tuple


Vertex = int
Edge = Tuple[Vertex, Vertex]


class GraphValidationError(Exception):
    """Raised when a materialized graph breaks the regular-graph invariants."""


class Graph(ABC):
    """
    Graph (capability contract)

    Every topology the simulator runs on is a d-regular simple graph over a
    fixed vertex universe 0..n-1. Subclasses provide:

      - vertex_count / degree (fixed at construction)
      - neighbors(v): exactly `degree` distinct vertices, never v itself
      - has_edge(u, v): symmetric adjacency test
      - random_edge(rng): a (u, v) pair with v in neighbors(u)

    All randomness is drawn from the caller-supplied `random.Random`; no
    graph keeps an RNG of its own.
    """

    @property
    @abstractmethod
    def vertex_count(self) -> int:
        ...

    @property
    @abstractmethod
    def degree(self) -> int:
        ...

    @abstractmethod
    def neighbors(self, v: Vertex) -> Sequence[Vertex]:
        ...

    @abstractmethod
    def has_edge(self, u: Vertex, v: Vertex) -> bool:
        ...

    @abstractmethod
    def random_edge(self, rng: random.Random) -> Edge:
        ...

    # ------------------------------------------------------------
    # Derived helpers
    # ------------------------------------------------------------

    def vertices(self) -> range:
        return range(self.vertex_count)

    def label(self, v: Vertex) -> str:
        return str(v)

    def edges(self) -> Iterator[Edge]:
        """
        Yield every undirected edge once, as (u, v) with u < v.
        """
        for u in self.vertices():
            for v in self.neighbors(u):
                if u < v:
                    yield u, v

    def validate(self) -> None:
        """
        Check regularity, simplicity and symmetry of the adjacency.

        Raises GraphValidationError on the first violation found. This is a
        check for topology implementations; nothing repairs a graph after it
        has been materialized.
        """
        d = self.degree
        for v in self.vertices():
            nbrs: List[Vertex] = list(self.neighbors(v))
            if len(nbrs) != d:
                raise GraphValidationError(
                    f"vertex {self.label(v)} has {len(nbrs)} neighbors, expected {d}"
                )
            if len(set(nbrs)) != len(nbrs):
                raise GraphValidationError(
                    f"vertex {self.label(v)} has duplicate neighbors: {nbrs}"
                )
            if v in nbrs:
                raise GraphValidationError(f"vertex {self.label(v)} has a self-loop")
            for u in nbrs:
                if not 0 <= u < self.vertex_count:
                    raise GraphValidationError(
                        f"vertex {self.label(v)} has out-of-range neighbor {u}"
                    )
                if v not in self.neighbors(u):
                    raise GraphValidationError(
                        f"edge {self.label(v)} -> {self.label(u)} is not symmetric"
                    )
                if not self.has_edge(v, u) or not self.has_edge(u, v):
                    raise GraphValidationError(
                        f"has_edge disagrees with neighbors for "
                        f"{self.label(v)} -- {self.label(u)}"
                    )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n={self.vertex_count}, d={self.degree})"
