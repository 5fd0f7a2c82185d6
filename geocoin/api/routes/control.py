"""POST /api/v1/control/{action} — game lifecycle controls."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_game_manager
from geocoin.api.game_manager import GameManager
from geocoin.api.schemas import ControlResponse

router = APIRouter()


class ControlAction(str, Enum):
    reset = "reset"
    save = "save"


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    manager: GameManager = Depends(get_game_manager),
) -> ControlResponse:
    match action:
        case ControlAction.reset:
            result = manager.reset()
            with manager.locked() as (session, _):
                moves = session.moves
            return ControlResponse(
                status="ok",
                message=f"Game reset: {result.active_count} caches nearby.",
                moves=moves,
            )

        case ControlAction.save:
            manager.save()
            with manager.locked() as (session, _):
                moves = session.moves
            return ControlResponse(status="ok", message="Game saved.", moves=moves)
