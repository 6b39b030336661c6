"""
Unit tests for the round state machine.

Covers clamping, termination, winner determination and a full
scripted scenario from full health to a knockout.
"""
import pytest

from kps.core.game_enums import Move, Outcome, RoundResult
from kps.core.round_state import (
    MAX_HEALTH,
    Round,
    RoundInProgressError,
    apply,
    clamp,
    is_finished,
    winner,
)


class TestClamp:
    """Test the clamp helper."""

    @pytest.mark.parametrize("value,expected", [(-3, 0), (0, 0), (5, 5), (10, 10), (11, 10)])
    def test_clamp_bounds(self, value, expected):
        assert clamp(value) == expected

    def test_clamp_custom_range(self):
        assert clamp(7, 0, 5) == 5


class TestRoundCreation:
    """Test Round construction and validation."""

    def test_starts_at_full_health(self, fresh_round):
        assert fresh_round.left == MAX_HEALTH
        assert fresh_round.right == MAX_HEALTH
        assert fresh_round.bars == (10, 10)
        assert not fresh_round.is_finished

    @pytest.mark.parametrize("left,right", [(-1, 5), (5, 11), (11, 11)])
    def test_out_of_range_health_rejected(self, left, right):
        with pytest.raises(ValueError):
            Round(left, right)


class TestClamping:
    """Test clamping at the health boundaries."""

    @pytest.mark.parametrize("delta", [-1, -2])
    def test_negative_delta_at_zero_stays_zero(self, delta):
        round_ = Round(0, 5)
        round_.apply_deltas(delta, 0)
        assert round_.left == 0

        round_ = Round(5, 0)
        round_.apply_deltas(0, delta)
        assert round_.right == 0

    def test_positive_delta_at_max_stays_max(self):
        round_ = Round(10, 10)
        round_.apply_deltas(1, 1)
        assert round_.bars == (10, 10)

    def test_sides_clamped_independently(self):
        round_ = Round(1, 10)
        round_.apply_deltas(-2, 1)
        assert round_.bars == (0, 10)

    def test_dodge_at_full_health_is_absorbed(self):
        round_ = Round()
        result = round_.tick(Move.CROUCH, Move.KICK)
        assert result.deltas == (1, 0)
        assert round_.bars == (10, 10)

    def test_dodge_heals_below_max(self):
        round_ = Round(7, 7)
        round_.tick(Move.BLOCK, Move.PUNCH)
        assert round_.bars == (8, 7)


class TestTermination:
    """Test the finished predicate."""

    def test_finished_iff_a_side_is_zero(self):
        for a in range(0, MAX_HEALTH + 1):
            for b in range(0, MAX_HEALTH + 1):
                round_ = Round(a, b)
                assert round_.is_finished == (a == 0 or b == 0)
                assert is_finished(round_) == (a == 0 or b == 0)

    def test_tick_on_finished_round_is_ignored(self):
        round_ = Round(0, 4)
        assert round_.tick(Move.KICK, Move.PUNCH) is None
        assert round_.bars == (0, 4)


class TestWinner:
    """Test winner determination."""

    def test_right_wins(self):
        assert Round(0, 10).winner() == RoundResult.RIGHT_WINS

    def test_left_wins(self):
        assert Round(10, 0).winner() == RoundResult.LEFT_WINS

    def test_double_ko(self):
        assert Round(0, 0).winner() == RoundResult.DOUBLE_KO

    def test_module_level_winner(self):
        assert winner(Round(3, 0)) == RoundResult.LEFT_WINS

    def test_winner_requires_finished_round(self):
        with pytest.raises(RoundInProgressError):
            Round(5, 5).winner()

    def test_in_progress_error_is_runtime_error(self):
        assert issubclass(RoundInProgressError, RuntimeError)


class TestTick:
    """Test tick results and the pure apply function."""

    def test_tick_result_contents(self, fresh_round):
        result = fresh_round.tick(Move.KICK, Move.PUNCH)

        assert result.left_move == Move.KICK
        assert result.right_move == Move.PUNCH
        assert result.outcome == Outcome.WIN
        assert result.deltas == (0, -2)
        assert result.before == (10, 10)
        assert result.after == (10, 8)
        assert not result.finished

    def test_apply_does_not_mutate_input(self, fresh_round):
        next_round = apply(fresh_round, Move.KICK, Move.KICK)

        assert fresh_round.bars == (10, 10)
        assert next_round.bars == (9, 9)
        assert next_round is not fresh_round

    def test_apply_is_deterministic(self):
        start = Round(6, 4)
        assert apply(start, Move.SWEEP, Move.BLOCK) == apply(start, Move.SWEEP, Move.BLOCK)

    def test_apply_on_finished_round_returns_unchanged_copy(self):
        finished = Round(0, 3)
        assert apply(finished, Move.KICK, Move.PUNCH) == finished


class TestScenario:
    """Full round from (10, 10) to a left-side knockout."""

    def test_scripted_knockout(self):
        round_ = Round()

        round_ = apply(round_, Move.KICK, Move.KICK)
        assert round_.bars == (9, 9)
        assert not round_.is_finished

        round_ = apply(round_, Move.KICK, Move.PUNCH)
        assert round_.bars == (9, 7)
        assert not round_.is_finished

        expected_right = [5, 3, 1, 0]
        for right in expected_right:
            round_ = apply(round_, Move.PUNCH, Move.SWEEP)
            assert round_.bars == (9, right)

        assert round_.is_finished
        assert round_.winner() == RoundResult.LEFT_WINS

    def test_in_place_ticks_stop_once_finished(self):
        round_ = Round(9, 1)
        assert round_.tick(Move.PUNCH, Move.SWEEP).finished
        assert round_.tick(Move.PUNCH, Move.SWEEP) is None
        assert round_.bars == (9, 0)
