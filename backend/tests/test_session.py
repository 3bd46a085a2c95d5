"""
Tests for services.session.GameSession.
"""

import os
import sys
import logging
import random
from unittest.mock import Mock

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import (
    GRID_SIZE, UP, DOWN, LEFT, RIGHT,
    Snake,
    GameState,
    GameStatus,
    Food,
    ChangeDirection,
    Move,
    GameOver,
    InvalidActionError,
)
from services.config import SessionConfig
from services.scheduler import ManualTickScheduler
from services.session import GameSession


def make_state(snake, direction=RIGHT, food=(1, 1), score=0):
    return GameState(
        status=GameStatus(direction=direction),
        snake=Snake(tuple(snake)),
        food=Food(food),
        score=score,
    )


def make_session(state=None, **kwargs):
    return GameSession(
        state=state,
        scheduler=ManualTickScheduler(),
        config=SessionConfig(),
        **kwargs
    )


def no_sleep(_seconds):
    pass


class TestLifecycle:
    """Starting, stopping and tearing down sessions."""

    def test_start_acquires_scheduler_and_input(self):
        session = make_session(make_state([(10, 10)]))
        session.start()
        assert session.is_running is True
        assert session.input_attached is True
        assert session.start_time is not None

    def test_stop_releases_both(self):
        session = make_session(make_state([(10, 10)]))
        session.start()
        session.stop()
        assert session.is_running is False
        assert session.input_attached is False
        assert session.end_time is not None

    def test_stop_is_idempotent(self):
        session = make_session(make_state([(10, 10)]))
        session.stop()
        session.start()
        session.stop()
        session.stop()
        assert session.is_running is False

    def test_context_manager_stops_on_error(self):
        session = make_session(make_state([(10, 10)]))
        with pytest.raises(KeyError):
            with session:
                assert session.is_running
                raise KeyError("navigated away")
        assert session.is_running is False
        assert session.input_attached is False

    def test_cannot_start_finished_game(self):
        session = make_session(make_state([(10, 10)]))
        session.dispatch(GameOver())
        with pytest.raises(RuntimeError):
            session.start()

    def test_default_state_uses_seed(self):
        a = GameSession(scheduler=ManualTickScheduler(), config=SessionConfig(seed=9))
        b = GameSession(scheduler=ManualTickScheduler(), config=SessionConfig(seed=9))
        assert a.state == b.state
        assert a.game_id != b.game_id

    def test_explicit_rng_wins_over_seed(self):
        rng = random.Random(1)
        session = GameSession(
            scheduler=ManualTickScheduler(), config=SessionConfig(seed=9), rng=rng
        )
        assert session.rng is rng


class TestTick:
    """Timer ticks drive Move / GameOver."""

    def test_tick_moves(self):
        session = make_session(make_state([(10, 10)], direction=RIGHT))
        with session:
            session.scheduler.fire()
        assert session.state.snake.head == (11, 10)
        assert session.tick_count == 1
        assert len(session.history) == 2

    def test_tick_returns_action(self):
        session = make_session(make_state([(10, 10)]))
        assert isinstance(session.tick(), Move)

    def test_game_over_stops_timer_and_input(self):
        session = make_session(make_state([(0, 5)]))
        session.start()

        session.scheduler.fire()

        assert session.state.status.is_game_over is True
        assert session.is_running is False
        assert session.input_attached is False
        assert isinstance(session.actions[-1], GameOver)

    def test_ticks_after_game_over_are_ignored(self):
        session = make_session(make_state([(0, 5)]))
        session.tick()
        frozen = session.state

        assert session.tick() is None
        assert session.state is frozen
        assert session.tick_count == 1

    def test_growth_is_logged(self, caplog):
        session = make_session(make_state([(10, 10)], food=(10, 10)), rng=random.Random(2))
        with caplog.at_level(logging.INFO, logger="services.session"):
            session.tick()
        assert session.state.score == 1
        assert "Snake ate food" in caplog.text


class TestInput:
    """Key presses become ChangeDirection actions."""

    @pytest.mark.parametrize("key, direction", [
        (38, UP), (40, DOWN), (37, LEFT), (39, RIGHT),
        ("ArrowUp", UP), ("ArrowDown", DOWN), ("ArrowLeft", LEFT), ("ArrowRight", RIGHT),
    ])
    def test_mapped_keys(self, key, direction):
        session = make_session(make_state([(10, 10)]))
        session.start()

        action = session.handle_key(key)

        assert action == ChangeDirection(direction)
        assert session.state.status.direction == direction

    @pytest.mark.parametrize("key", [65, 13, "a", "Enter", None])
    def test_other_keys_ignored(self, key):
        session = make_session(make_state([(10, 10)], direction=RIGHT))
        session.start()

        assert session.handle_key(key) is None
        assert session.state.status.direction == RIGHT
        assert session.actions == []

    def test_keys_ignored_when_detached(self):
        session = make_session(make_state([(10, 10)], direction=RIGHT))
        assert session.handle_key(38) is None
        session.start()
        session.stop()
        assert session.handle_key(38) is None
        assert session.state.status.direction == RIGHT

    def test_direction_change_visible_to_next_tick(self):
        session = make_session(make_state([(10, 10)], direction=RIGHT))
        session.start()
        session.handle_key(38)
        session.scheduler.fire()
        assert session.state.snake.head == (10, 9)

    def test_custom_key_map(self):
        session = make_session(make_state([(10, 10)]), key_map={"w": UP})
        session.start()
        assert session.handle_key("w") == ChangeDirection(UP)
        assert session.handle_key(38) is None


class TestDispatch:
    """Direct dispatch of actions."""

    def test_invalid_action_propagates(self):
        session = make_session(make_state([(10, 10)]))
        with pytest.raises(InvalidActionError):
            session.dispatch("SNAKE_MOVE")
        assert session.actions == []

    def test_dispatch_records_action(self):
        session = make_session(make_state([(10, 10)]))
        session.dispatch(Move())
        assert session.actions == [Move()]


class TestRun:
    """The blocking run loop."""

    def test_runs_until_wall(self):
        """Head walks 47 -> 50, then the next tick ends the game."""
        session = make_session(make_state([(GRID_SIZE - 3, 10)], direction=RIGHT))

        final = session.run(sleep=no_sleep)

        assert final.status.is_game_over is True
        assert final.snake.head == (GRID_SIZE, 10)
        assert session.tick_count == 4
        assert len(session.history) == 5
        assert session.is_running is False

    def test_max_ticks(self):
        session = make_session(make_state([(10, 10)]))
        final = session.run(max_ticks=2, sleep=no_sleep)

        assert session.tick_count == 2
        assert final.snake.head == (12, 10)
        assert final.status.is_game_over is False
        assert session.is_running is False

    def test_before_tick_hook(self):
        session = make_session(make_state([(10, 10)], direction=RIGHT))
        hook = Mock(side_effect=lambda s: s.handle_key(40))

        session.run(max_ticks=3, sleep=no_sleep, before_tick=hook)

        assert hook.call_count == 3
        assert session.state.snake.head == (10, 13)

    def test_sleeps_between_polls(self):
        session = make_session(make_state([(10, 10)]))
        sleep = Mock()
        session.run(max_ticks=3, sleep=sleep)
        assert sleep.call_count == 3

    def test_stops_scheduler_on_error(self):
        session = make_session(make_state([(10, 10)]))

        def explode(_session):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            session.run(sleep=no_sleep, before_tick=explode)
        assert session.is_running is False
