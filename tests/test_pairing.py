import random

import pytest

from graph_bins.pairing import Pairing, random_pairing


def test_cell_arithmetic():
    p = Pairing(3, [(0, 3), (1, 4), (2, 5)])
    assert p.n == 2
    assert p.cell(4) == 1
    assert p.same_cell(0, 2)
    assert not p.same_cell(2, 3)
    assert p.cell_pair(5, 0) == (0, 1)
    assert p.card(0, 5) == 3
    assert p.disjoint(0, 3)
    assert not p.disjoint(0, 1, 3)


def test_index_partitions_every_pair_once():
    p = random_pairing(20, 3, random.Random(1))
    assert len(p) == 30
    seen = []
    for _, _, bucket in p.enumerate_cell_pairs():
        seen.extend(bucket)
    assert sorted(seen) == list(range(30))
    assert p.is_consistent()


def test_random_pairing_is_a_perfect_matching(rng):
    p = random_pairing(15, 4, rng)
    half_edges = sorted(h for pair in p.pairs for h in pair)
    assert half_edges == list(range(60))


def test_random_pairing_reproducible():
    a = random_pairing(12, 3, random.Random(99))
    b = random_pairing(12, 3, random.Random(99))
    assert a.pairs == b.pairs


@pytest.mark.parametrize("n,d", [(5, 3), (0, 2), (4, 0), (-1, 2)])
def test_random_pairing_preconditions(n, d):
    rng = random.Random(0)
    before = rng.getstate()
    with pytest.raises(ValueError):
        random_pairing(n, d, rng)
    # no randomness is drawn on caller errors
    assert rng.getstate() == before


def test_constructor_rejects_broken_matching():
    with pytest.raises(ValueError):
        Pairing(2, [(0, 1), (1, 2)])
    with pytest.raises(ValueError):
        Pairing(3, [(0, 1)])


def test_loops_and_multi_edges():
    # cell 0 has a loop, cells 1 and 2 are joined twice
    p = Pairing(2, [(0, 1), (2, 4), (3, 5)])
    assert p.loops() == [0]
    assert p.multi_edges() == [[1, 2]]
    assert not p.is_simple()


def test_replace_pair_keeps_index_consistent():
    p = Pairing(2, [(0, 1), (2, 4), (3, 5)])
    # turn (0, 1) + (2, 4) into (0, 2) + (1, 4)
    p.replace_pair(0, 0, 2)
    p.replace_pair(1, 1, 4)

    assert p.pair(0) == (0, 2)
    assert p.card(0, 1) == 0  # loop in cell 0 gone
    assert p.card(0, 2) == 1  # cells 0-1
    assert p.card(1, 4) == 1  # cells 0-2
    assert p.card(3, 5) == 1  # cells 1-2
    assert p.is_simple()
    assert p.is_consistent()
    assert len(p) == 3


def test_cell_pairs_follow_pair_order():
    p = Pairing(2, [(0, 2), (1, 4), (3, 5)])
    assert list(p.cell_pairs()) == [(0, 1), (0, 2), (1, 2)]
