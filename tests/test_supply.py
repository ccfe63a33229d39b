"""
Tests for piece supplies.
"""

import pytest

from tetris_core.game import RandomSupply, SequenceSupply, TetrominoType

I, O, T = TetrominoType.I, TetrominoType.O, TetrominoType.T


class TestSequenceSupply:
    def test_replays_cyclically(self):
        supply = SequenceSupply([I, O, T])
        assert [supply.draw() for _ in range(7)] == [I, O, T, I, O, T, I]

    def test_reset_rewinds(self):
        supply = SequenceSupply([I, O, T])
        supply.draw()
        supply.draw()
        supply.reset()
        assert supply.draw() == I

    def test_accepts_integer_kinds(self):
        supply = SequenceSupply([1, 2])
        assert supply.sequence == (I, O)

    def test_empty_sequence_rejected(self):
        with pytest.raises(ValueError):
            SequenceSupply([])

    def test_caller_list_is_copied(self):
        pieces = [I, O]
        supply = SequenceSupply(pieces)
        pieces.append(T)
        assert supply.sequence == (I, O)


class TestRandomSupply:
    def test_deterministic_with_seed(self):
        s1 = RandomSupply(seed=42)
        s2 = RandomSupply(seed=42)
        assert [s1.draw() for _ in range(50)] == [s2.draw() for _ in range(50)]

    def test_reset_restores_seeded_sequence(self):
        supply = RandomSupply(seed=7)
        first = [supply.draw() for _ in range(20)]
        supply.reset()
        assert [supply.draw() for _ in range(20)] == first

    def test_draws_every_kind(self):
        supply = RandomSupply(seed=0)
        drawn = {supply.draw() for _ in range(500)}
        assert drawn == set(TetrominoType)
