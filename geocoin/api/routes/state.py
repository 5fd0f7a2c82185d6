"""GET /api/v1/state — player, inventory and live caches (polled by UI)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from geocoin.api.dependencies import get_game_manager
from geocoin.api.game_manager import GameManager
from geocoin.api.schemas import (
    BoundsSchema,
    CacheSchema,
    CellSchema,
    EventSchema,
    GameStateResponse,
    PlayerSchema,
    PointSchema,
)
from geocoin.core.models import Bounds, Cache, Point
from geocoin.utils.event_log import GameEvent

router = APIRouter()


def _point(p: Point) -> PointSchema:
    return PointSchema(x=p.x, y=p.y)


def _bounds(b: Bounds) -> BoundsSchema:
    return BoundsSchema(south_west=_point(b.south_west), north_east=_point(b.north_east))


def _cache(cache: Cache, bounds: Bounds) -> CacheSchema:
    return CacheSchema(
        i=cache.cell.i,
        j=cache.cell.j,
        coins=cache.coin_count,
        tokens=list(cache.tokens),
        bounds=_bounds(bounds),
    )


def _event(e: GameEvent) -> EventSchema:
    cell = CellSchema(i=e.cell[0], j=e.cell[1]) if e.cell is not None else None
    return EventSchema(step=e.step, category=e.category, message=e.message, cell=cell)


@router.get("/state", response_model=GameStateResponse)
def get_state(manager: GameManager = Depends(get_game_manager)) -> GameStateResponse:
    with manager.locked() as (session, view):
        cell = session.current_cell
        return GameStateResponse(
            moves=session.moves,
            player=PlayerSchema(
                position=_point(session.position),
                cell=CellSchema(i=cell.i, j=cell.j),
                inventory=list(session.inventory.tokens),
            ),
            caches=[_cache(cache, bounds) for cache, bounds in view],
            known_cells=session.grid.known_cell_count,
            archived_caches=len(session.store),
        )


@router.get("/events", response_model=list[EventSchema])
def get_events(
    since: int = Query(0, ge=0, description="Only events at or after this move"),
    limit: int = Query(100, ge=1, le=1000),
    manager: GameManager = Depends(get_game_manager),
) -> list[EventSchema]:
    events = manager.event_log.since_step(since)
    return [_event(e) for e in events[-limit:]]
