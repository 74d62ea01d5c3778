from typing import List

from .graph import Graph, Vertex


class LoadBins:
    """
    LoadBins (load overlay)

    Wraps a Graph with one non-negative integer counter ("bin") per vertex.
    Counters start at zero and only ever go up, one ball at a time, through
    add_ball(). The simulation driver is the only writer.
    """

    def __init__(self, graph: Graph):
        self.graph = graph
        self._loads: List[int] = [0] * graph.vertex_count

    # ------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------

    def __getitem__(self, v: Vertex) -> int:
        return self._loads[v]

    def __len__(self) -> int:
        return len(self._loads)

    def add_ball(self, v: Vertex) -> None:
        self._loads[v] += 1

    # ------------------------------------------------------------
    # Summary statistics
    # ------------------------------------------------------------

    def total(self) -> int:
        return sum(self._loads)

    def gap(self) -> int:
        """Max load minus min load."""
        return max(self._loads) - min(self._loads)

    def upper_gap(self) -> float:
        """Max load minus mean load."""
        return max(self._loads) - self.total() / len(self._loads)

    def snapshot_loads(self) -> List[int]:
        return list(self._loads)

    def __repr__(self) -> str:
        return f"LoadBins({self.graph!r}, total={self.total()})"
