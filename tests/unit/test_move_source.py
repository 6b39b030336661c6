"""
Unit tests for move sources.

Tests random and scripted move supply plus the move-code parser.
"""
import random

import pytest

from kps.core.game_enums import Move
from kps.core.move_source import (
    MoveSourceExhausted,
    RandomMoveSource,
    ScriptedMoveSource,
    parse_move_script,
)


class TestRandomMoveSource:
    """Test the uniform random opponent."""

    def test_same_seed_same_sequence(self):
        first = RandomMoveSource(seed=42)
        second = RandomMoveSource(seed=42)

        assert [first.next_move() for _ in range(50)] == [second.next_move() for _ in range(50)]

    def test_returns_moves(self):
        source = RandomMoveSource(seed=1)
        for _ in range(20):
            assert isinstance(source.next_move(), Move)

    def test_covers_every_move(self):
        source = RandomMoveSource(seed=3)
        seen = {source.next_move() for _ in range(500)}
        assert seen == set(Move)

    def test_injected_rng_is_used(self):
        rng = random.Random(99)
        expected = random.Random(99).choice(list(Move))
        assert RandomMoveSource(rng=rng).next_move() == expected

    def test_source_name(self):
        assert RandomMoveSource().get_source_name() == "Random"
        assert RandomMoveSource(seed=5).get_source_name() == "Random(seed=5)"


class TestScriptedMoveSource:
    """Test fixed move sequences."""

    def test_plays_in_order(self):
        source = ScriptedMoveSource([Move.KICK, Move.BLOCK, Move.JUMP])
        assert [source.next_move() for _ in range(3)] == [Move.KICK, Move.BLOCK, Move.JUMP]
        assert source.remaining == 0

    def test_exhaustion_raises(self):
        source = ScriptedMoveSource([Move.KICK])
        source.next_move()
        with pytest.raises(MoveSourceExhausted):
            source.next_move()

    def test_looping(self):
        source = ScriptedMoveSource([Move.KICK, Move.PUNCH], loop=True)
        assert [source.next_move() for _ in range(5)] == [
            Move.KICK, Move.PUNCH, Move.KICK, Move.PUNCH, Move.KICK
        ]

    def test_empty_script_rejected(self):
        with pytest.raises(ValueError):
            ScriptedMoveSource([])


class TestParseMoveScript:
    """Test the single-character move-code parser."""

    def test_parses_all_codes(self):
        assert parse_move_script("kpscbj") == list(Move)

    def test_ignores_whitespace_and_case(self):
        assert parse_move_script("K p\nS") == [Move.KICK, Move.PUNCH, Move.SWEEP]

    def test_unknown_code_rejected(self):
        with pytest.raises(ValueError, match="Unknown move code 'x'"):
            parse_move_script("kx")
