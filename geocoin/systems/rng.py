"""Key-addressed deterministic RNG using xxhash.

Every value is a pure function of (seed, key): no internal state, so the
order in which cells are sampled never changes what they contain.

Formula: RNG_Value = XXH64(key, seed) / 2**64
"""

from __future__ import annotations

import xxhash

from geocoin.core.models import Cell

# Salts decorrelate the spawn roll from the coin roll of the same cell.
SPAWN_SALT = "initialValue"
COIN_SALT = "initialCoins"


def spawn_key(cell: Cell) -> str:
    return f"{cell.key}{SPAWN_SALT}"


def coin_key(cell: Cell) -> str:
    return f"{cell.key}{COIN_SALT}"


class DeterministicGenerator:
    """Stateless string-keyed pseudo-random number generator."""

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int = 0) -> None:
        self._seed = seed & self._MAX_UINT64

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, key: str) -> int:
        return xxhash.xxh64(key.encode("utf-8"), seed=self._seed).intdigest()

    def sample(self, key: str) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(key) / (self._MAX_UINT64 + 1)

    def next_int(self, key: str, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.sample(key)
        return low + int(f * (high - low + 1))

    def next_bool(self, key: str, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self.sample(key) < probability
