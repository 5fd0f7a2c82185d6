"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from geocoin.api.dependencies import set_game_manager
from geocoin.api.game_manager import GameManager
from geocoin.api.routes import api_router
from geocoin.config import GameConfig
from geocoin.utils.logging import setup_logging

if TYPE_CHECKING:
    from geocoin.storage.backends import KeyValueStorage

logger = logging.getLogger(__name__)


def create_app(
    config: GameConfig | None = None,
    storage: KeyValueStorage | None = None,
    configure_logging: bool = True,
) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = GameConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if configure_logging:
            setup_logging(_config.log_level)
        manager = GameManager(_config, storage=storage)
        set_game_manager(manager)
        logger.info("API server started (seed=%d).", _config.world_seed)
        yield
        manager.shutdown()
        set_game_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Geocoin",
        description=(
            "Location-based coin caches — game API.\n\n"
            "## API Groups\n\n"
            "- **State** — Player position, inventory and caches currently in view\n"
            "- **Move** — Step one tile or jump to an absolute position\n"
            "- **Caches** — Collect coins from and deposit coins into a cache in view\n"
            "- **Control** — Reset or save the game\n"
            "- **Config** — Read-only game configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Live game state polled by the map client."},
            {"name": "Move", "description": "Player movement; every move regenerates the caches in view."},
            {"name": "Caches", "description": "Coin transfers between the player and a cache in view."},
            {"name": "Control", "description": "Game lifecycle controls: reset and save."},
            {"name": "Config", "description": "Read-only game configuration (grid size, spawn odds, start location)."},
        ],
    )

    # CORS — allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app
