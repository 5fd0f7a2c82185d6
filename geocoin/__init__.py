"""geocoin — deterministic location-based token caches."""

__version__ = "0.1.0"
