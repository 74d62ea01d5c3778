"""
Switching-based repair of configuration-model pairings.

A pairing drawn by random_pairing() usually contains a few loops and double
edges. Following McKay & Wormald (J. Algorithms 11, 1990,
https://doi.org/10.1016/0196-6774(90)90029-E) we remove them one at a time
with local "forward switchings" that rewire a handful of pairs without
creating new defects. Pairings that are too far from simple, or that have
no available switching, are thrown away and redrawn.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .pairing import Pairing, check_regular_params, random_pairing

logger = logging.getLogger(__name__)


class RepairFailed(Exception):
    """The pairing cannot be repaired; a fresh one has to be drawn."""


@dataclass(frozen=True)
class GenerationResult:
    pairing: Pairing
    attempts: int


# ------------------------------------------------------------
# Candidate enumeration
# ------------------------------------------------------------

# Uniform (first, second) draws tried before falling back to an exact count.
REJECTION_TRIES = 64

Donor = Tuple[int, int, int]  # (pair index, first half-edge, second half-edge)


def _oriented_pairs(p: Pairing) -> List[Donor]:
    """
    Every pair in both orientations, as (pair index, first, second).
    """
    out: List[Donor] = []
    for idx in range(len(p)):
        a, b = p.pair(idx)
        out.append((idx, a, b))
        out.append((idx, b, a))
    return out


def _loop_donors(p: Pairing, loop_idx: int) -> Tuple[List[Donor], List[Donor], Callable[[Donor, Donor], bool]]:
    """
    Split the loop switching conditions into per-donor filters and the
    joint test that needs both donors.

    For the loop (p2, p3) we look for donor pairs (p1, p6) and (p4, p5) such
    that p1, p2, p4, p5, p6 lie in distinct cells, both donors are simple
    edges, and none of (p1, p2), (p3, p4), (p5, p6) is an edge yet.
    """
    p2, p3 = p.pair(loop_idx)
    if not p.same_cell(p2, p3):
        raise ValueError(f"pair {loop_idx} is not a loop")

    firsts = [
        (idx, a, b)
        for idx, a, b in _oriented_pairs(p)
        if p.disjoint(a, p2, b) and p.card(a, b) == 1 and p.card(a, p2) == 0
    ]
    seconds = [
        (idx, a, b)
        for idx, a, b in _oriented_pairs(p)
        if p.disjoint(p2, a, b) and p.card(a, b) == 1 and p.card(p3, a) == 0
    ]

    def compatible(first: Donor, second: Donor) -> bool:
        _, p1, p6 = first
        _, p4, p5 = second
        return p.disjoint(p1, p2, p4, p5, p6) and p.card(p5, p6) == 0

    return firsts, seconds, compatible


def _ordered_double(p: Pairing, d_idx1: int, d_idx2: int) -> Tuple[int, int, int, int]:
    """
    Return (p2, p6, p3, p7) with p2, p3 in one cell and p6, p7 in the other.
    """
    p2, p6 = p.pair(d_idx1)
    p3, p7 = p.pair(d_idx2)
    if p.same_cell(p2, p7):
        p3, p7 = p7, p3
    if not (p.same_cell(p2, p3) and p.same_cell(p6, p7)) or p.same_cell(p2, p6):
        raise ValueError(f"pairs {d_idx1} and {d_idx2} do not form a double edge")
    return p2, p6, p3, p7


def _double_donors(
    p: Pairing, d_idx1: int, d_idx2: int
) -> Tuple[List[Donor], List[Donor], Callable[[Donor, Donor], bool]]:
    """
    With the double edge written as (p2, p6), (p3, p7) we look for donors
    (p1, p5) and (p4, p8) such that p1, p2, p4, p5, p6, p8 lie in distinct
    cells, both donors are simple edges, and none of (p1, p2), (p3, p4),
    (p5, p6), (p7, p8) is an edge yet.
    """
    p2, p6, p3, p7 = _ordered_double(p, d_idx1, d_idx2)

    firsts = [
        (idx, a, b)
        for idx, a, b in _oriented_pairs(p)
        if p.disjoint(a, p2, b, p6)
        and p.card(a, b) == 1
        and p.card(a, p2) == 0
        and p.card(b, p6) == 0
    ]
    seconds = [
        (idx, a, b)
        for idx, a, b in _oriented_pairs(p)
        if p.disjoint(a, p2, b, p6)
        and p.card(a, b) == 1
        and p.card(p3, a) == 0
        and p.card(p7, b) == 0
    ]

    def compatible(first: Donor, second: Donor) -> bool:
        _, p1, p5 = first
        _, p4, p8 = second
        return p.disjoint(p1, p2, p4, p5, p6, p8)

    return firsts, seconds, compatible


def _sample_donors(
    firsts: List[Donor],
    seconds: List[Donor],
    compatible: Callable[[Donor, Donor], bool],
    rng: random.Random,
) -> Optional[Tuple[Donor, Donor]]:
    """
    Uniformly random compatible (first, second) donor pair, or None.

    Draws from firsts x seconds by rejection; on sparse pairings almost every
    draw is accepted. After REJECTION_TRIES misses the compatible pairs are
    counted and one is picked by index, which also detects the empty case.
    """
    if not firsts or not seconds:
        return None

    for _ in range(REJECTION_TRIES):
        first = rng.choice(firsts)
        second = rng.choice(seconds)
        if compatible(first, second):
            return first, second

    total = sum(1 for f in firsts for s in seconds if compatible(f, s))
    if total == 0:
        return None
    k = rng.randrange(total)
    for f in firsts:
        for s in seconds:
            if compatible(f, s):
                if k == 0:
                    return f, s
                k -= 1
    raise RuntimeError("compatible donor count changed while sampling")


def loop_switch_candidates(p: Pairing, loop_idx: int) -> List[Tuple[int, int, int, int, int, int]]:
    """
    All donor choices for removing the loop at pair `loop_idx`, as tuples
    (idx1, p1, p6, idx2, p4, p5). Quadratic in the number of pairs; the
    switching itself samples without listing them.
    """
    firsts, seconds, compatible = _loop_donors(p, loop_idx)
    return [f + s for f in firsts for s in seconds if compatible(f, s)]


def double_switch_candidates(
    p: Pairing, d_idx1: int, d_idx2: int
) -> List[Tuple[int, int, int, int, int, int]]:
    """
    All donor choices for removing the double edge formed by two pairs, as
    tuples (idx1, p1, p5, idx2, p4, p8).
    """
    firsts, seconds, compatible = _double_donors(p, d_idx1, d_idx2)
    return [f + s for f in firsts for s in seconds if compatible(f, s)]


# ------------------------------------------------------------
# Switchings
# ------------------------------------------------------------

def sample_loop_switch(
    p: Pairing, loop_idx: int, rng: random.Random
) -> Optional[Tuple[int, int, int, int, int, int]]:
    """
    One uniformly chosen entry of loop_switch_candidates(), or None.
    """
    chosen = _sample_donors(*_loop_donors(p, loop_idx), rng)
    return None if chosen is None else chosen[0] + chosen[1]


def sample_double_switch(
    p: Pairing, d_idx1: int, d_idx2: int, rng: random.Random
) -> Optional[Tuple[int, int, int, int, int, int]]:
    """
    One uniformly chosen entry of double_switch_candidates(), or None.
    """
    chosen = _sample_donors(*_double_donors(p, d_idx1, d_idx2), rng)
    return None if chosen is None else chosen[0] + chosen[1]


def loop_switch(p: Pairing, loop_idx: int, rng: random.Random) -> Optional[Tuple[int, int, int]]:
    """
    Remove the loop at `loop_idx` with a uniformly chosen forward switching.

    Returns the indices of the three rewritten pairs, or None (pairing left
    untouched) if no switching exists.
    """
    choice = sample_loop_switch(p, loop_idx, rng)
    if choice is None:
        return None

    p2, p3 = p.pair(loop_idx)
    idx1, p1, p6, idx2, p4, p5 = choice
    # TODO: add the McKay-Wormald rejection step (f-rejection) so the output is exactly uniform
    p.replace_pair(loop_idx, p1, p2)
    p.replace_pair(idx1, p3, p4)
    p.replace_pair(idx2, p5, p6)
    return loop_idx, idx1, idx2


def double_switch(
    p: Pairing, d_idx1: int, d_idx2: int, rng: random.Random
) -> Optional[Tuple[int, int, int, int]]:
    """
    Remove the double edge formed by pairs d_idx1, d_idx2.

    Returns the indices of the four rewritten pairs, or None (pairing left
    untouched) if no switching exists.
    """
    choice = sample_double_switch(p, d_idx1, d_idx2, rng)
    if choice is None:
        return None

    p2, p6, p3, p7 = _ordered_double(p, d_idx1, d_idx2)
    idx1, p1, p5, idx2, p4, p8 = choice
    p.replace_pair(d_idx1, p1, p2)
    p.replace_pair(d_idx2, p3, p4)
    p.replace_pair(idx1, p5, p6)
    p.replace_pair(idx2, p7, p8)
    return d_idx1, d_idx2, idx1, idx2


# ------------------------------------------------------------
# Repair
# ------------------------------------------------------------

def find_defects(p: Pairing) -> Tuple[List[int], List[Tuple[int, int]]]:
    """
    Scan the cell-pair index and apply the feasibility gate.

    Returns (loop pair indices, double-edge pair index pairs). Raises
    RepairFailed when a cell pair has three or more pairs, a cell has more
    than one loop, or there are more defects than the thresholds allow.
    """
    n, d = p.n, p.d
    m = n * d // 2
    m2 = n * d * (d - 1)

    loops: List[int] = []
    doubles: List[Tuple[int, int]] = []
    for c1, c2, bucket in p.enumerate_cell_pairs():
        card = len(bucket)
        if c1 == c2:
            if card >= 2:
                raise RepairFailed(f"cell {c1} has {card} loops")
            loops.append(bucket[0])
        elif card == 2:
            doubles.append((bucket[0], bucket[1]))
        elif card >= 3:
            raise RepairFailed(f"cells {c1} and {c2} joined by {card} pairs")

    if len(doubles) > (m2 // m) ** 2:
        raise RepairFailed(f"{len(doubles)} double edges exceed {(m2 // m) ** 2}")
    if len(loops) > m2 // m:
        raise RepairFailed(f"{len(loops)} loops exceed {m2 // m}")
    return loops, doubles


def try_repair(p: Pairing, rng: random.Random) -> Pairing:
    """
    Make `p` simple in place: first all loops, then all double edges.

    Raises RepairFailed if the pairing is rejected by the gate or a defect
    has no switching.
    """
    loops, doubles = find_defects(p)

    for loop_idx in loops:
        if loop_switch(p, loop_idx, rng) is None:
            raise RepairFailed(f"no switching for loop pair {loop_idx}")

    for d_idx1, d_idx2 in doubles:
        if double_switch(p, d_idx1, d_idx2, rng) is None:
            raise RepairFailed(f"no switching for double edge {d_idx1}/{d_idx2}")

    return p


def random_simple_pairing(
    n: int,
    d: int,
    rng: random.Random,
    max_attempts: Optional[int] = None,
) -> GenerationResult:
    """
    Draw configuration-model pairings until one can be repaired into a
    simple pairing.

    The number of attempts is unbounded by default (expected O(1) for fixed
    d); `max_attempts` turns it into a hard cap that raises RuntimeError.
    """
    check_regular_params(n, d)
    if d >= n:
        raise ValueError(f"a simple {d}-regular graph needs n > d (n={n})")
    if max_attempts is not None and max_attempts <= 0:
        raise ValueError("max_attempts must be > 0")

    attempts = 0
    while True:
        attempts += 1
        p = random_pairing(n, d, rng)
        try:
            try_repair(p, rng)
        except RepairFailed as e:
            logger.debug("attempt %d for n=%d d=%d rejected: %s", attempts, n, d, e)
            if max_attempts is not None and attempts >= max_attempts:
                raise RuntimeError(
                    f"no simple pairing for n={n} d={d} after {attempts} attempts"
                ) from e
            continue

        logger.debug("simple pairing for n=%d d=%d after %d attempt(s)", n, d, attempts)
        return GenerationResult(pairing=p, attempts=attempts)
