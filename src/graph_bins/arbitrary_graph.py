from __future__ import annotations

import random
from typing import List, Optional, Sequence

from .graph import Edge, Graph, GraphValidationError, Vertex
from .pairing import Pairing
from .switching import random_simple_pairing


class ArbitraryRegularGraph(Graph):
    """
    A d-regular graph stored as a flat adjacency array: the neighbors of v
    are data[v*d : v*d + d].
    """

    def __init__(self, d: int, data: Sequence[Vertex]):
        if d <= 0:
            raise ValueError("d must be > 0")
        if len(data) % d != 0:
            raise ValueError("adjacency length must be a multiple of d")
        self._d = d
        self._data: List[Vertex] = list(data)
        self._n = len(self._data) // d

    @classmethod
    def from_pairing(cls, pairing: Pairing) -> "ArbitraryRegularGraph":
        """
        Materialize a simple pairing: each pair (a, b) becomes the edge
        cell(a) -- cell(b).
        """
        if not pairing.is_simple():
            raise ValueError("pairing must be simple (no loops, no double edges)")

        n, d = pairing.n, pairing.d
        adjacency: List[List[Vertex]] = [[] for _ in range(n)]
        for c1, c2 in pairing.cell_pairs():
            adjacency[c1].append(c2)
            adjacency[c2].append(c1)

        data: List[Vertex] = []
        for nbrs in adjacency:
            if len(nbrs) != d:
                raise GraphValidationError(f"cell has {len(nbrs)} neighbors, expected {d}")
            data.extend(nbrs)
        return cls(d, data)

    @classmethod
    def random(
        cls,
        n: int,
        d: int,
        rng: random.Random,
        max_attempts: Optional[int] = None,
    ) -> "ArbitraryRegularGraph":
        """
        A random simple d-regular graph on n vertices.
        """
        result = random_simple_pairing(n, d, rng, max_attempts=max_attempts)
        return cls.from_pairing(result.pairing)

    # ------------------------------------------------------------
    # Graph contract
    # ------------------------------------------------------------

    @property
    def vertex_count(self) -> int:
        return self._n

    @property
    def degree(self) -> int:
        return self._d

    def neighbors(self, v: Vertex) -> Sequence[Vertex]:
        start = v * self._d
        return self._data[start:start + self._d]

    def has_edge(self, u: Vertex, v: Vertex) -> bool:
        return v in self.neighbors(u)

    def random_edge(self, rng: random.Random) -> Edge:
        v = rng.randrange(self._n)
        off = rng.randrange(self._d)
        return v, self._data[v * self._d + off]
