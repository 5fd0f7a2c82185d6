"""Request-scoped access to the running game.

The lifespan handler installs one GameManager at startup and clears it on
shutdown. Requests that arrive outside that window get a 503.
"""

from __future__ import annotations

from fastapi import HTTPException

from geocoin.api.game_manager import GameManager

_running: GameManager | None = None


def set_game_manager(manager: GameManager | None) -> None:
    global _running
    _running = manager


def get_game_manager() -> GameManager:
    manager = _running
    if manager is None:
        raise HTTPException(status_code=503, detail="No game is running.")
    return manager
