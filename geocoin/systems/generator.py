"""Cache generator: decides which cells hold a cache and what it starts with."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from geocoin.core.models import Cell, token_id
from geocoin.systems.rng import coin_key, spawn_key

if TYPE_CHECKING:
    from geocoin.config import GameConfig
    from geocoin.systems.rng import DeterministicGenerator


class CacheGenerator:
    """Rolls spawn decisions and fresh token sequences from cell coordinates."""

    __slots__ = ("_rng", "_spawn_probability", "_max_coins")

    def __init__(
        self,
        rng: DeterministicGenerator,
        spawn_probability: float = 0.1,
        max_coins: int = 100,
    ) -> None:
        self._rng = rng
        self._spawn_probability = spawn_probability
        self._max_coins = max_coins

    @classmethod
    def from_config(cls, config: GameConfig, rng: DeterministicGenerator) -> CacheGenerator:
        return cls(rng, config.spawn_probability, config.max_coins)

    def should_spawn(self, cell: Cell) -> bool:
        return self._rng.sample(spawn_key(cell)) < self._spawn_probability

    def initial_coin_count(self, cell: Cell) -> int:
        return math.floor(self._rng.sample(coin_key(cell)) * self._max_coins)

    def fresh_tokens(self, cell: Cell) -> list[str]:
        """The complete, reproducible token set minted by *cell*."""
        return [token_id(cell, n) for n in range(1, self.initial_coin_count(cell) + 1)]
