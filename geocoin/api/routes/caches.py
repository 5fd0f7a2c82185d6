"""POST /api/v1/caches/{i}/{j}/{action} — collect and deposit coins."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, HTTPException

from geocoin.api.dependencies import get_game_manager
from geocoin.api.game_manager import GameManager
from geocoin.api.schemas import TransferResponse
from geocoin.core.errors import InactiveCacheError
from geocoin.core.models import Cell

router = APIRouter()


class TransferAction(str, Enum):
    collect = "collect"
    deposit = "deposit"


@router.post("/caches/{i}/{j}/{action}", response_model=TransferResponse)
def transfer(
    i: int,
    j: int,
    action: TransferAction,
    manager: GameManager = Depends(get_game_manager),
) -> TransferResponse:
    try:
        match action:
            case TransferAction.collect:
                token = manager.collect(i, j)
            case TransferAction.deposit:
                token = manager.deposit(i, j)
    except InactiveCacheError:
        raise HTTPException(status_code=404, detail=f"No cache in view at ({i}, {j}).")

    with manager.locked() as (session, _):
        cache = session.neighborhood.cache_at(Cell(i, j))
        return TransferResponse(
            status="ok" if token is not None else "noop",
            token=token,
            cache_coins=cache.coin_count if cache is not None else 0,
            inventory_coins=len(session.inventory),
        )
