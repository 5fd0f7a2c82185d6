"""POST /api/v1/move — player movement (directional controls or a position sensor)."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_game_manager
from geocoin.api.game_manager import GameManager
from geocoin.api.schemas import CellSchema, MoveRequest, MoveResponse
from geocoin.core.enums import Direction
from geocoin.core.models import Point
from geocoin.engine.neighborhood import RegenerationResult

router = APIRouter()


class MoveDirection(str, Enum):
    north = "north"
    east = "east"
    south = "south"
    west = "west"


def _move_response(manager: GameManager, result: RegenerationResult) -> MoveResponse:
    with manager.locked() as (session, _):
        moves = session.moves
    return MoveResponse(
        moves=moves,
        cell=CellSchema(i=result.origin.i, j=result.origin.j),
        spawned=[CellSchema(i=c.cell.i, j=c.cell.j) for c in result.spawned],
        evicted=[CellSchema(i=c.cell.i, j=c.cell.j) for c in result.evicted],
        retained=result.retained,
        resumed=result.resumed,
    )


@router.post("/move/{direction}", response_model=MoveResponse)
def step(
    direction: MoveDirection,
    manager: GameManager = Depends(get_game_manager),
) -> MoveResponse:
    result = manager.step(Direction[direction.name.upper()])
    return _move_response(manager, result)


@router.post("/move", response_model=MoveResponse)
def move_to(
    body: MoveRequest,
    manager: GameManager = Depends(get_game_manager),
) -> MoveResponse:
    result = manager.move_to(Point(body.x, body.y))
    return _move_response(manager, result)
