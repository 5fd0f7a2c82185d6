"""GET /api/v1/config — expose game configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from geocoin.api.dependencies import get_game_manager
from geocoin.api.game_manager import GameManager
from geocoin.api.schemas import GameConfigResponse, PointSchema

router = APIRouter()


@router.get("/config", response_model=GameConfigResponse)
def get_config(
    manager: GameManager = Depends(get_game_manager),
) -> GameConfigResponse:
    cfg = manager.config
    return GameConfigResponse(
        world_seed=cfg.world_seed,
        tile_width=cfg.tile_width,
        visibility_radius=cfg.visibility_radius,
        spawn_probability=cfg.spawn_probability,
        max_coins=cfg.max_coins,
        start=PointSchema(x=cfg.start_x, y=cfg.start_y),
        persistent=cfg.storage_path is not None,
    )
