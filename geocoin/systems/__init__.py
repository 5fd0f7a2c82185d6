"""Engine systems: deterministic RNG and cache generation."""

from geocoin.systems.rng import DeterministicGenerator
from geocoin.systems.generator import CacheGenerator

__all__ = ["CacheGenerator", "DeterministicGenerator"]
