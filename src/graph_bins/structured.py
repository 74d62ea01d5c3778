import random
from typing import List, Sequence

from .graph import Edge, Graph, Vertex


def ring_degree(n: int) -> int:
    """Degree of a ring of n vertices (a ring of two is a single edge)."""
    if n == 1:
        return 0
    if n == 2:
        return 1
    return 2


class RingGraph(Graph):
    """Cycle on n vertices; v is adjacent to v+1 and v-1 (mod n)."""

    def __init__(self, n: int):
        if n < 2:
            raise ValueError("ring needs n >= 2")
        self.n = n

    @property
    def vertex_count(self) -> int:
        return self.n

    @property
    def degree(self) -> int:
        return ring_degree(self.n)

    def neighbors(self, v: Vertex) -> Sequence[Vertex]:
        if self.n == 2:
            return [1 - v]
        return [(v + 1) % self.n, (v - 1) % self.n]

    def has_edge(self, u: Vertex, v: Vertex) -> bool:
        return u != v and (u - v) % self.n in (1, self.n - 1)

    def random_edge(self, rng: random.Random) -> Edge:
        v = rng.randrange(self.n)
        if self.n == 2:
            return v, 1 - v
        off = 1 if rng.random() < 0.5 else -1
        return v, (v + off) % self.n


class TorusGraph(Graph):
    """
    x-by-y torus: the product of two rings. Vertex (i, j) is numbered
    i*y + j and labelled "i.j". A side of length 1 contributes no edges.
    """

    def __init__(self, x: int, y: int):
        if x < 1 or y < 1:
            raise ValueError("torus sides must be >= 1")
        if x == 1 and y == 1:
            raise ValueError("1x1 torus has no edges")
        self.x = x
        self.y = y

    @property
    def vertex_count(self) -> int:
        return self.x * self.y

    @property
    def degree(self) -> int:
        return ring_degree(self.x) + ring_degree(self.y)

    def label(self, v: Vertex) -> str:
        i, j = divmod(v, self.y)
        return f"{i}.{j}"

    @staticmethod
    def _ring_neighbors(i: int, size: int) -> List[int]:
        if size == 1:
            return []
        if size == 2:
            return [1 - i]
        return [(i + 1) % size, (i - 1) % size]

    def neighbors(self, v: Vertex) -> Sequence[Vertex]:
        i, j = divmod(v, self.y)
        out = [ii * self.y + j for ii in self._ring_neighbors(i, self.x)]
        out.extend(i * self.y + jj for jj in self._ring_neighbors(j, self.y))
        return out

    def has_edge(self, u: Vertex, v: Vertex) -> bool:
        ui, uj = divmod(u, self.y)
        vi, vj = divmod(v, self.y)
        if ui == vi:
            return vj in self._ring_neighbors(uj, self.y)
        if uj == vj:
            return vi in self._ring_neighbors(ui, self.x)
        return False

    def random_edge(self, rng: random.Random) -> Edge:
        v = rng.randrange(self.vertex_count)
        nbrs = self.neighbors(v)
        return v, nbrs[rng.randrange(len(nbrs))]


class HyperCubeGraph(Graph):
    """dim-dimensional hypercube; neighbors differ in exactly one bit."""

    def __init__(self, dim: int):
        if dim < 1:
            raise ValueError("hypercube dimension must be >= 1")
        self.dim = dim

    @property
    def vertex_count(self) -> int:
        return 1 << self.dim

    @property
    def degree(self) -> int:
        return self.dim

    def label(self, v: Vertex) -> str:
        return format(v, "b")

    def neighbors(self, v: Vertex) -> Sequence[Vertex]:
        return [v ^ (1 << bit) for bit in range(self.dim)]

    def has_edge(self, u: Vertex, v: Vertex) -> bool:
        return bin(u ^ v).count("1") == 1

    def random_edge(self, rng: random.Random) -> Edge:
        v = rng.randrange(self.vertex_count)
        return v, v ^ (1 << rng.randrange(self.dim))


class CompleteGraph(Graph):
    """Complete graph K_n."""

    def __init__(self, n: int):
        if n < 2:
            raise ValueError("complete graph needs n >= 2")
        self.n = n

    @property
    def vertex_count(self) -> int:
        return self.n

    @property
    def degree(self) -> int:
        return self.n - 1

    def neighbors(self, v: Vertex) -> Sequence[Vertex]:
        return [u for u in range(self.n) if u != v]

    def has_edge(self, u: Vertex, v: Vertex) -> bool:
        return u != v

    def random_edge(self, rng: random.Random) -> Edge:
        # Rejection: redraw until the endpoints differ.
        while True:
            u = rng.randrange(self.n)
            v = rng.randrange(self.n)
            if u != v:
                return u, v
