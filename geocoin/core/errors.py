"""Engine exceptions."""

from __future__ import annotations


class MalformedPersistedState(ValueError):
    """Durable storage returned text that does not parse into the expected shape."""


class InactiveCacheError(LookupError):
    """A transfer targeted a cache that is not currently materialized."""
