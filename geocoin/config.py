"""Game configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration for a game session."""

    # World
    world_seed: int = 0

    # Grid: cell edge in position units, and window half-width in cells
    tile_width: float = 1e-4
    visibility_radius: int = 8
    registry_limit: int | None = None       # None = keep every cell ever referenced

    # Caches
    spawn_probability: float = 0.1
    max_coins: int = 100                    # initial coins are floor(sample * max_coins)

    # Player start (Oakes College classroom)
    start_x: float = 36.98949379578401
    start_y: float = -122.06277128548504

    # Persistence
    storage_path: str | None = None         # None = in-memory only

    # Logging
    log_level: str = "INFO"
