"""
Runtime settings for GridSnake sessions.

Values come from the environment (a local .env file is loaded first).
The grid size is a code constant and deliberately not configurable here.
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from domain.constants import TICK_RATE

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_REPLAY_DIR = "completed_games"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class SessionConfig:
    tick_rate_ms: int = TICK_RATE
    seed: Optional[int] = None
    log_level: str = DEFAULT_LOG_LEVEL
    replay_dir: str = DEFAULT_REPLAY_DIR

    @property
    def tick_seconds(self) -> float:
        return self.tick_rate_ms / 1000.0


def _int_from_env(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} is not an integer; using default {default}")
        return default


def load_config() -> SessionConfig:
    """
    Build a SessionConfig from environment variables.

    Uses environment variables:
    - SNAKE_TICK_RATE_MS: milliseconds between ticks (default: 150)
    - SNAKE_SEED: integer seed for reproducible games (default: unset)
    - SNAKE_LOG_LEVEL: logging level name for the CLI (default: INFO)
    - SNAKE_REPLAY_DIR: where replay JSON files are written (default: completed_games)
    """
    tick_rate_ms = _int_from_env("SNAKE_TICK_RATE_MS", TICK_RATE)
    if tick_rate_ms <= 0:
        logger.warning(
            f"SNAKE_TICK_RATE_MS={tick_rate_ms} is invalid; defaulting to {TICK_RATE}."
        )
        tick_rate_ms = TICK_RATE

    return SessionConfig(
        tick_rate_ms=tick_rate_ms,
        seed=_int_from_env("SNAKE_SEED", None),
        log_level=os.getenv("SNAKE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        replay_dir=os.getenv("SNAKE_REPLAY_DIR", DEFAULT_REPLAY_DIR),
    )
