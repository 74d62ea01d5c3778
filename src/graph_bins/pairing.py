import random
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple


HalfEdge = int
CellPair = Tuple[int, int]


def check_regular_params(n: int, d: int) -> None:
    """
    Precondition checks shared by the pairing generator and the repair
    engine. Runs before any randomness is drawn.
    """
    if n <= 0:
        raise ValueError("n must be > 0")
    if d <= 0:
        raise ValueError("d must be > 0")
    if (n * d) % 2 != 0:
        raise ValueError(f"n * d must be even (n={n}, d={d})")


class Pairing:
    """
    Pairing (configuration-model multigraph)

    n cells of d half-edges each, half-edge h living in cell h // d. The
    pairing is a perfect matching of the n*d half-edges into n*d/2 pairs.

    Two structures are kept side by side:

      - pairs[i] = (a, b): the i-th matched pair of half-edges
      - edges[(c1, c2)] = list of pair indices joining cells c1 <= c2

    Every pair index sits in exactly one bucket of `edges`. The only way to
    change a pair is replace_pair(), which updates both structures together.
    """

    def __init__(self, d: int, pairs: Iterable[Sequence[HalfEdge]]):
        if d <= 0:
            raise ValueError("d must be > 0")

        self.d = d
        self._pairs: List[Tuple[HalfEdge, HalfEdge]] = [(p[0], p[1]) for p in pairs]

        total = len(self._pairs) * 2
        if total % d != 0:
            raise ValueError(f"{total} half-edges do not fill cells of size {d}")
        self.n = total // d

        seen = sorted(h for pair in self._pairs for h in pair)
        if seen != list(range(total)):
            raise ValueError("pairs must match every half-edge exactly once")

        # edges[(c1, c2)] = pair indices between cells c1 <= c2 (non-empty only)
        self._edges: Dict[CellPair, List[int]] = {}
        for idx, (a, b) in enumerate(self._pairs):
            self._edges.setdefault(self.cell_pair(a, b), []).append(idx)

    # ------------------------------------------------------------
    # Cell arithmetic
    # ------------------------------------------------------------

    def cell(self, h: HalfEdge) -> int:
        return h // self.d

    def same_cell(self, a: HalfEdge, b: HalfEdge) -> bool:
        return a // self.d == b // self.d

    def cell_pair(self, a: HalfEdge, b: HalfEdge) -> CellPair:
        c1 = a // self.d
        c2 = b // self.d
        return (c1, c2) if c1 <= c2 else (c2, c1)

    def card(self, a: HalfEdge, b: HalfEdge) -> int:
        """
        Number of pairs joining the cells of half-edges a and b.
        """
        bucket = self._edges.get(self.cell_pair(a, b))
        return len(bucket) if bucket else 0

    def disjoint(self, *hs: HalfEdge) -> bool:
        """
        True if all given half-edges live in pairwise different cells.
        """
        return len({h // self.d for h in hs}) == len(hs)

    # ------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._pairs)

    def pair(self, idx: int) -> Tuple[HalfEdge, HalfEdge]:
        return self._pairs[idx]

    @property
    def pairs(self) -> List[Tuple[HalfEdge, HalfEdge]]:
        return list(self._pairs)

    def pair_indices(self, c1: int, c2: int) -> List[int]:
        key = (c1, c2) if c1 <= c2 else (c2, c1)
        return list(self._edges.get(key, ()))

    def enumerate_cell_pairs(self) -> Iterator[Tuple[int, int, List[int]]]:
        """
        Yield (c1, c2, pair indices) for every cell pair that has a pair,
        in ascending cell order.
        """
        for (c1, c2) in sorted(self._edges):
            yield c1, c2, list(self._edges[(c1, c2)])

    def cell_pairs(self) -> Iterator[CellPair]:
        """
        Yield the (cell, cell) endpoints of every pair, in pair order.
        """
        d = self.d
        for a, b in self._pairs:
            yield a // d, b // d

    def loops(self) -> List[int]:
        """Pair indices with both half-edges in one cell."""
        out: List[int] = []
        for (c1, c2), bucket in sorted(self._edges.items()):
            if c1 == c2:
                out.extend(bucket)
        return out

    def multi_edges(self) -> List[List[int]]:
        """Buckets of >= 2 pairs joining the same two distinct cells."""
        return [
            list(bucket)
            for (c1, c2), bucket in sorted(self._edges.items())
            if c1 != c2 and len(bucket) >= 2
        ]

    def is_simple(self) -> bool:
        return not self.loops() and not self.multi_edges()

    def is_consistent(self) -> bool:
        """
        Rebuild the cell-pair index from scratch and compare with the
        incrementally maintained one.
        """
        rebuilt: Dict[CellPair, List[int]] = {}
        for idx, (a, b) in enumerate(self._pairs):
            rebuilt.setdefault(self.cell_pair(a, b), []).append(idx)
        current = {k: sorted(v) for k, v in self._edges.items() if v}
        return current == {k: sorted(v) for k, v in rebuilt.items()}

    # ------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------

    def replace_pair(self, idx: int, a: HalfEdge, b: HalfEdge) -> None:
        """
        Rewrite pair idx to (a, b), moving it between index buckets.

        Callers are responsible for keeping the overall matching perfect;
        a switching rewrites several pairs whose half-edges it permutes.
        """
        old_key = self.cell_pair(*self._pairs[idx])
        bucket = self._edges[old_key]
        bucket.remove(idx)
        if not bucket:
            del self._edges[old_key]

        self._pairs[idx] = (a, b)
        self._edges.setdefault(self.cell_pair(a, b), []).append(idx)

    def __repr__(self) -> str:
        return f"Pairing(n={self.n}, d={self.d}, pairs={len(self._pairs)})"


def random_pairing(n: int, d: int, rng: random.Random) -> Pairing:
    """
    Configuration model: a uniformly random perfect matching of the n*d
    half-edges, built by shuffling them and taking consecutive twos.
    """
    check_regular_params(n, d)

    half_edges = list(range(n * d))
    rng.shuffle(half_edges)
    it = iter(half_edges)
    return Pairing(d, zip(it, it))
