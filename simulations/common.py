# simulations/common.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple
import math
import time

from graph_bins import LoadBins


DEFAULT_SEED = 42


@dataclass(frozen=True)
class ExperimentSpec:
    """
    Common experiment parameters shared across all simulations.

    `n` is always the number of vertices; `d` is only used by the
    'random' topology (the structured ones have a fixed degree).
    """
    topology: str
    n: int
    balls: int
    d: Optional[int] = None
    repetitions: int = 1
    algorithm: str = "greedy"

    def __post_init__(self) -> None:
        if self.n <= 0:
            raise ValueError("n must be > 0")
        if self.balls < 0:
            raise ValueError("balls must be >= 0")
        if self.repetitions <= 0:
            raise ValueError("repetitions must be > 0")
        if self.d is not None and self.d <= 0:
            raise ValueError("d must be > 0")


@dataclass(frozen=True)
class SummaryStats:
    """
    Summary stats for final per-vertex loads.
    """
    min: int
    max: int
    mean: float
    std: float  # population stddev
    gap: int  # max - min
    upper_gap: float  # max - mean


def summarize_loads(loads: List[int]) -> SummaryStats:
    """
    Compute min/max/mean/std and both gaps over integer loads.
    Stddev computed via a two-pass method for clarity.
    """
    if not loads:
        raise ValueError("loads must be non-empty")

    mn = min(loads)
    mx = max(loads)

    n = len(loads)
    mean = sum(loads) / n

    # population variance
    var_acc = 0.0
    for c in loads:
        d = c - mean
        var_acc += d * d
    std = math.sqrt(var_acc / n)

    return SummaryStats(
        min=mn,
        max=mx,
        mean=mean,
        std=std,
        gap=mx - mn,
        upper_gap=mx - mean,
    )


@dataclass
class ExperimentResult:
    """
    Outcome of one repetition: the final loads of one graph.
    """
    algorithm: str
    spec: ExperimentSpec
    loads: List[int]

    stats: SummaryStats = field(init=False)
    runtime_s: Optional[float] = None
    meta: Dict[str, Any] = field(default_factory=dict)
    bins: Optional[LoadBins] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.stats = summarize_loads(self.loads)

        # Sanity: loads should sum to balls
        expected = self.spec.balls
        actual = sum(self.loads)
        if actual != expected:
            raise ValueError(
                f"loads sum mismatch: expected {expected}, got {actual}"
            )


class Timer:
    """
    Tiny timing helper for simulations.
    Usage:
        with Timer() as t:
            ...
        elapsed = t.elapsed_s
    """
    def __init__(self) -> None:
        self._start: Optional[float] = None
        self.elapsed_s: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.time()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._start is not None:
            self.elapsed_s = time.time() - self._start


def gaps(results: Sequence[ExperimentResult]) -> List[int]:
    return [r.stats.gap for r in results]


def common_x_range(samples: Sequence[Sequence[float]]) -> Tuple[float, float]:
    """
    Compute a shared (xmin, xmax) across several sample lists for
    'same x-axis' histogram comparisons.
    """
    values = [x for s in samples for x in s]
    if not values:
        raise ValueError("samples must be non-empty")
    return min(values), max(values)


def format_stats_line(r: ExperimentResult) -> str:
    """
    Human-friendly one-liner for printing in compare tools.
    """
    s = r.stats
    return (
        f"{r.algorithm}: gap={s.gap}, upper_gap={s.upper_gap:.3f}, "
        f"min={s.min}, max={s.max}, mean={s.mean:.3f}, std={s.std:.3f}"
        + (f", runtime={r.runtime_s:.3f}s" if r.runtime_s is not None else "")
    )


def format_summary_line(label: str, results: Sequence[ExperimentResult]) -> str:
    """
    One line aggregating the gaps of several repetitions.
    """
    g = gaps(results)
    mean_gap = sum(g) / len(g)
    return f"{label}: runs={len(g)}, mean_gap={mean_gap:.3f}, min_gap={min(g)}, max_gap={max(g)}"
