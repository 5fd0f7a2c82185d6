"""Pydantic request/response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Geometry ---

class PointSchema(BaseModel):
    x: float
    y: float


class CellSchema(BaseModel):
    i: int
    j: int


class BoundsSchema(BaseModel):
    south_west: PointSchema
    north_east: PointSchema


# --- World State ---

class CacheSchema(BaseModel):
    i: int
    j: int
    coins: int
    tokens: list[str] = Field(default_factory=list, description="Stack order: the last token is collected first")
    bounds: BoundsSchema


class PlayerSchema(BaseModel):
    position: PointSchema
    cell: CellSchema
    inventory: list[str] = Field(default_factory=list)


class EventSchema(BaseModel):
    step: int
    category: str
    message: str
    cell: CellSchema | None = None


class GameStateResponse(BaseModel):
    moves: int
    player: PlayerSchema
    caches: list[CacheSchema]
    known_cells: int
    archived_caches: int


# --- Commands ---

class MoveRequest(BaseModel):
    x: float = Field(allow_inf_nan=False)
    y: float = Field(allow_inf_nan=False)


class MoveResponse(BaseModel):
    moves: int
    cell: CellSchema
    spawned: list[CellSchema]
    evicted: list[CellSchema]
    retained: int
    resumed: int


class TransferResponse(BaseModel):
    status: str                     # "ok" or "noop"
    token: str | None = None
    cache_coins: int
    inventory_coins: int


class ControlResponse(BaseModel):
    status: str
    message: str
    moves: int = 0


# --- Config ---

class GameConfigResponse(BaseModel):
    world_seed: int
    tile_width: float
    visibility_radius: int
    spawn_probability: float
    max_coins: int
    start: PointSchema
    persistent: bool
