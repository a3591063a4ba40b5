from __future__ import annotations

import pytest

from qr_bingo.rng import create_rng


def test_py_random_determinism():
    r1 = create_rng("py_random", 12345)
    r2 = create_rng("py_random", 12345)
    seq1 = [r1.randint(1, 100) for _ in range(10)]
    seq2 = [r2.randint(1, 100) for _ in range(10)]
    assert seq1 == seq2


def test_randint_is_inclusive():
    rng = create_rng("py_random", 1)
    seen = {rng.randint(0, 2) for _ in range(200)}
    assert seen == {0, 1, 2}


def test_unknown_engine_rejected():
    with pytest.raises(ValueError):
        create_rng("mersenne_plus", 1)
