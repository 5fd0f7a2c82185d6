"""Engine layer: neighborhood regeneration, token transfers, sessions."""

from geocoin.engine.neighborhood import NeighborhoodManager, RegenerationResult
from geocoin.engine.session import GameSession
from geocoin.engine.view import NullView, ViewListener, ViewState

__all__ = [
    "GameSession",
    "NeighborhoodManager",
    "NullView",
    "RegenerationResult",
    "ViewListener",
    "ViewState",
]
