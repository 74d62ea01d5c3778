import random

import pytest

from graph_bins import switching
from graph_bins.pairing import Pairing
from graph_bins.switching import (
    RepairFailed,
    double_switch,
    double_switch_candidates,
    find_defects,
    loop_switch,
    loop_switch_candidates,
    random_simple_pairing,
    try_repair,
)


def _loop_pairing() -> Pairing:
    # d=2: loop in cell 0, 4-cycle over cells 1-2-3-4
    return Pairing(2, [(0, 1), (2, 4), (5, 6), (7, 8), (9, 3)])


def _double_pairing() -> Pairing:
    # d=2: cells 0 and 1 joined twice, 4-cycle over cells 2-3-4-5
    return Pairing(2, [(0, 2), (1, 3), (4, 6), (7, 8), (9, 10), (11, 5)])


# =============================================================================
# Loop switching
# =============================================================================

def test_loop_candidates_respect_constraints():
    p = _loop_pairing()
    candidates = loop_switch_candidates(p, 0)
    assert candidates
    p2, p3 = p.pair(0)
    for idx1, p1, p6, idx2, p4, p5 in candidates:
        assert p.disjoint(p1, p2, p4, p5, p6)
        assert p.card(p1, p6) == 1 and p.card(p4, p5) == 1
        assert p.card(p1, p2) == 0
        assert p.card(p3, p4) == 0
        assert p.card(p5, p6) == 0


@pytest.mark.parametrize("seed", range(10))
def test_loop_switch_removes_loop(seed):
    p = _loop_pairing()
    rewritten = loop_switch(p, 0, random.Random(seed))

    assert rewritten is not None
    assert p.card(0, 1) == 0  # loop cell pair is empty
    for idx in rewritten:
        a, b = p.pair(idx)
        assert not p.same_cell(a, b)
        assert p.card(a, b) == 1
    assert len(p) == 5
    assert p.is_simple()
    assert p.is_consistent()


def test_loop_switch_without_candidates_leaves_pairing_alone():
    p = Pairing(2, [(0, 1), (2, 3)])
    before = p.pairs
    assert loop_switch(p, 0, random.Random(0)) is None
    assert p.pairs == before


def test_loop_candidates_reject_non_loop():
    with pytest.raises(ValueError):
        loop_switch_candidates(_loop_pairing(), 1)


# =============================================================================
# Double-edge switching
# =============================================================================

def test_double_candidates_nonempty():
    assert double_switch_candidates(_double_pairing(), 0, 1)


@pytest.mark.parametrize("seed", range(10))
def test_double_switch_removes_double_edge(seed):
    p = _double_pairing()
    rewritten = double_switch(p, 0, 1, random.Random(seed))

    assert rewritten is not None
    assert p.pair_indices(0, 1) == []
    for idx in rewritten:
        a, b = p.pair(idx)
        assert p.card(a, b) == 1
    assert len(p) == 6
    assert p.is_simple()
    assert p.is_consistent()


def test_double_switch_accepts_either_pair_orientation():
    # second double pair stored the other way round
    p = Pairing(2, [(0, 2), (3, 1), (4, 6), (7, 8), (9, 10), (11, 5)])
    assert double_switch(p, 0, 1, random.Random(3)) is not None
    assert p.is_simple()


# =============================================================================
# Feasibility gate
# =============================================================================

def test_gate_rejects_triple_edge():
    with pytest.raises(RepairFailed):
        find_defects(Pairing(3, [(0, 3), (1, 4), (2, 5)]))


def test_gate_rejects_double_loop():
    with pytest.raises(RepairFailed):
        find_defects(Pairing(4, [(0, 1), (2, 3)]))


def test_gate_rejects_too_many_loops():
    # d=2 allows at most 2 loops
    with pytest.raises(RepairFailed):
        find_defects(Pairing(2, [(0, 1), (2, 3), (4, 5)]))


def test_find_defects_lists_loops_and_doubles():
    loops, doubles = find_defects(Pairing(2, [(0, 1), (2, 4), (3, 5)]))
    assert loops == [0]
    assert doubles == [(1, 2)]


def test_try_repair_fails_without_switching():
    with pytest.raises(RepairFailed):
        try_repair(Pairing(2, [(0, 1), (2, 3)]), random.Random(0))


# =============================================================================
# Retry wrapper
# =============================================================================

@pytest.mark.parametrize("n,d", [(5, 3), (4, 0), (3, 3), (2, 4)])
def test_random_simple_pairing_preconditions(n, d):
    rng = random.Random(0)
    before = rng.getstate()
    with pytest.raises(ValueError):
        random_simple_pairing(n, d, rng)
    assert rng.getstate() == before


def test_random_simple_pairing_is_simple(rng):
    result = random_simple_pairing(28, 3, rng)
    assert result.attempts >= 1
    assert result.pairing.is_simple()
    assert result.pairing.is_consistent()
    assert result.pairing.n == 28


def test_attempts_are_counted(monkeypatch, rng):
    calls = {"n": 0}

    def flaky(p, r):
        calls["n"] += 1
        if calls["n"] < 3:
            raise RepairFailed("forced")
        return p

    monkeypatch.setattr(switching, "try_repair", flaky)
    result = random_simple_pairing(20, 3, rng)
    assert result.attempts == 3


def test_max_attempts_cap(monkeypatch, rng):
    def never(p, r):
        raise RepairFailed("forced")

    monkeypatch.setattr(switching, "try_repair", never)
    with pytest.raises(RuntimeError, match="after 4 attempts"):
        random_simple_pairing(10, 3, rng, max_attempts=4)


def test_max_attempts_must_be_positive(rng):
    with pytest.raises(ValueError):
        random_simple_pairing(10, 3, rng, max_attempts=0)


def test_gate_rejects_too_many_double_edges():
    # d=2 allows at most (2*(d-1))**2 = 4 doubled cell pairs; here there are 5
    pairs = [(0, 2), (1, 3), (4, 6), (5, 7), (8, 10), (9, 11), (12, 14), (13, 15), (16, 18), (17, 19)]
    with pytest.raises(RepairFailed, match="double edges"):
        find_defects(Pairing(2, pairs))


def test_gate_accepts_double_edges_at_the_cap():
    pairs = [(0, 2), (1, 3), (4, 6), (5, 7), (8, 10), (9, 11), (12, 14), (13, 15)]
    loops, doubles = find_defects(Pairing(2, pairs))
    assert loops == []
    assert len(doubles) == 4


# =============================================================================
# Sampling without listing candidates
# =============================================================================

def _big_loop_pairing(n: int) -> Pairing:
    # d=2: loop in cell 0, one long cycle over cells 1..n-1
    pairs = [(0, 1)]
    pairs.extend((2 * c + 1, 2 * c + 2) for c in range(1, n - 1))
    pairs.append((2 * n - 1, 2))
    return Pairing(2, pairs)


def test_sampled_loop_switch_reaches_every_candidate():
    p = _loop_pairing()
    candidates = set(loop_switch_candidates(p, 0))
    rng = random.Random(8)
    seen = {switching.sample_loop_switch(p, 0, rng) for _ in range(2000)}
    assert seen == candidates


def test_sampled_double_switch_reaches_every_candidate():
    p = _double_pairing()
    candidates = set(double_switch_candidates(p, 0, 1))
    rng = random.Random(8)
    seen = {switching.sample_double_switch(p, 0, 1, rng) for _ in range(2000)}
    assert seen == candidates


@pytest.mark.parametrize("seed", range(5))
def test_counting_fallback_picks_valid_switch(monkeypatch, seed):
    monkeypatch.setattr(switching, "REJECTION_TRIES", 0)
    p = _loop_pairing()
    choice = switching.sample_loop_switch(p, 0, random.Random(seed))
    assert choice in loop_switch_candidates(p, 0)

    q = _double_pairing()
    assert double_switch(q, 0, 1, random.Random(seed)) is not None
    assert q.is_simple()


def test_no_compatible_donors_returns_none():
    # loop in cell 0 next to a triangle: every donor pair shares a cell
    p = Pairing(2, [(0, 1), (2, 4), (5, 6), (7, 3)])
    assert loop_switch_candidates(p, 0) == []
    before = p.pairs
    assert loop_switch(p, 0, random.Random(1)) is None
    assert p.pairs == before


def test_loop_switch_on_large_pairing_does_not_list_candidates(monkeypatch):
    def listing(*args):
        raise AssertionError("full candidate list built")

    monkeypatch.setattr(switching, "loop_switch_candidates", listing)
    monkeypatch.setattr(switching, "double_switch_candidates", listing)

    p = _big_loop_pairing(3000)
    assert loop_switch(p, 0, random.Random(4)) is not None
    assert p.is_simple()
    assert p.is_consistent()


def test_random_simple_pairing_large(rng):
    result = random_simple_pairing(2000, 3, rng)
    assert result.pairing.is_simple()
    assert len(result.pairing) == 3000
