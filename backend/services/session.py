"""
GameSession - the single owner of a running game.

The session holds the one GameState instance, the tick scheduler and the
input listener. The scheduler and the key handler only ever talk to the
session; neither keeps a copy of the state.
"""

import logging
import random
import time
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional, Union

from domain import (
    KEY_CODES_MAP,
    ChangeDirection,
    GameOver,
    GameState,
    Move,
    decide_tick,
    reduce,
)
from .config import SessionConfig, load_config
from .scheduler import ScheduleTickScheduler, TickScheduler

logger = logging.getLogger(__name__)

# How long run() sleeps between scheduler polls, in seconds
POLL_INTERVAL_SECONDS = 0.01


class GameSession:
    """
    Owns:
      - the current GameState
      - the tick scheduler (acquired in start(), released in stop())
      - the input listener (attached in start(), detached in stop())
      - the history of states, one entry per tick, for replays
    """

    def __init__(
        self,
        state: Optional[GameState] = None,
        scheduler: Optional[TickScheduler] = None,
        config: Optional[SessionConfig] = None,
        rng: Optional[random.Random] = None,
        key_map: Optional[dict] = None,
        game_id: Optional[str] = None,
    ):
        self.config = config or load_config()

        if rng is None and self.config.seed is not None:
            rng = random.Random(self.config.seed)
        self.rng = rng

        self.state = state if state is not None else GameState.new_game(self.rng)
        self.scheduler = scheduler or ScheduleTickScheduler(self.config.tick_seconds)
        self.key_map = key_map if key_map is not None else KEY_CODES_MAP
        self.game_id = game_id or str(uuid.uuid4())

        self.input_attached = False
        self.tick_count = 0
        self.history: List[GameState] = [self.state]
        self.actions: list = []
        self.start_time: Optional[datetime] = None
        self.end_time: Optional[datetime] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self.scheduler.is_running

    @property
    def is_game_over(self) -> bool:
        return self.state.is_game_over

    def start(self) -> "GameSession":
        if self.is_game_over:
            raise RuntimeError(f"Game {self.game_id} is already over.")
        self.scheduler.start(self.tick)
        self.input_attached = True
        self.start_time = datetime.now(timezone.utc)
        logger.info(
            f"Game {self.game_id} started: head={tuple(self.state.snake.head)}, "
            f"food={tuple(self.state.food.coordinate)}"
        )
        return self

    def stop(self) -> None:
        """Stop the timer and detach input. Safe to call more than once."""
        if not self.is_running and not self.input_attached:
            return
        self.scheduler.stop()
        self.input_attached = False
        self.end_time = datetime.now(timezone.utc)
        logger.info(
            f"Game {self.game_id} stopped after {self.tick_count} ticks "
            f"(score: {self.state.score}, game over: {self.is_game_over})"
        )

    def __enter__(self) -> "GameSession":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def dispatch(self, action) -> GameState:
        """Apply one action to the owned state and return the new state."""
        previous = self.state
        self.state = reduce(previous, action, self.rng)
        self.actions.append(action)

        if self.state.score > previous.score:
            logger.info(
                f"Snake ate food at {tuple(previous.food.coordinate)} "
                f"(score: {self.state.score}, length: {len(self.state.snake)})"
            )
        return self.state

    def tick(self) -> Optional[Union[Move, GameOver]]:
        """
        One timer tick: decide Move vs GameOver for the current state and apply it.

        Ticks arriving after the game is over are ignored.
        """
        if self.is_game_over:
            logger.debug(f"Ignoring tick for finished game {self.game_id}")
            return None

        action = decide_tick(self.state)
        self.dispatch(action)
        self.tick_count += 1
        self.history.append(self.state)

        if isinstance(action, GameOver):
            head = tuple(self.state.snake.head)
            logger.info(
                f"Game over at tick {self.tick_count}: head={head}, score={self.state.score}"
            )
            self.stop()
        return action

    def handle_key(self, key: Union[int, str]) -> Optional[ChangeDirection]:
        """
        Translate a raw key identifier into a direction change.

        Unknown keys, and keys arriving while input is detached, produce no action.
        """
        if not self.input_attached:
            logger.debug(f"Input detached; ignoring key {key!r}")
            return None

        direction = self.key_map.get(key)
        if direction is None:
            logger.debug(f"Ignoring unmapped key {key!r}")
            return None

        action = ChangeDirection(direction)
        self.dispatch(action)
        return action

    # ------------------------------------------------------------------
    # Driving loop
    # ------------------------------------------------------------------

    def run(
        self,
        max_ticks: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
        before_tick: Optional[Callable[["GameSession"], None]] = None,
    ) -> GameState:
        """
        Block until the game is over, the session is stopped or max_ticks ticks have fired.

        Args:
            max_ticks: stop after this many ticks (None = play to the end)
            sleep: sleep function between scheduler polls
            before_tick: called before each poll, e.g. to feed scripted input

        Returns:
            The final GameState
        """
        if not self.is_running:
            self.start()

        try:
            while self.is_running and not self.is_game_over:
                if max_ticks is not None and self.tick_count >= max_ticks:
                    break
                if before_tick is not None:
                    before_tick(self)
                self.scheduler.run_pending()
                sleep(POLL_INTERVAL_SECONDS)
        finally:
            self.stop()

        return self.state
