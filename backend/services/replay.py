"""
Replay files for finished sessions.

A replay is a JSON document with a metadata block and one state snapshot
per tick. Replays are written for inspection only; nothing loads them
back into a running game.
"""

import os
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from domain.constants import GRID_SIZE

logger = logging.getLogger(__name__)


def _isoformat(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def build_replay(session) -> Dict[str, Any]:
    """Return the replay document for a session."""
    metadata = {
        "game_id": session.game_id,
        "start_time": _isoformat(session.start_time),
        "end_time": _isoformat(session.end_time or datetime.now(timezone.utc)),
        "grid_size": GRID_SIZE,
        "tick_rate_ms": session.config.tick_rate_ms,
        "final_score": session.state.score,
        "ticks_played": session.tick_count,
        "game_over": session.state.is_game_over,
    }

    return {
        "metadata": metadata,
        "ticks": [state.to_dict() for state in session.history],
    }


def save_replay(session, directory: str) -> str:
    """
    Write the session replay to <directory>/snake_game_<game_id>.json.

    Returns:
        Path of the written file

    Raises:
        OSError: if the directory cannot be created or the file written
    """
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, f"snake_game_{session.game_id}.json")

    with open(path, "w") as f:
        json.dump(build_replay(session), f, indent=2)

    logger.info(f"Replay for game {session.game_id} saved to {path}")
    return path
