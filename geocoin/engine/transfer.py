"""Token transfers between a cache and the player, and the conservation census."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable

from geocoin.core.cache_store import CacheStateStore
from geocoin.core.enums import TransferDirection
from geocoin.core.models import Cache, Inventory

logger = logging.getLogger(__name__)


def transfer(
    cache: Cache,
    inventory: Inventory,
    direction: TransferDirection,
    store: CacheStateStore,
) -> str | None:
    """Move one token and commit the cache's contents to *store*.

    Collect pops from the cache onto the inventory; deposit pops from the
    inventory onto the cache. An empty source is a no-op and returns None.
    """
    if direction == TransferDirection.COLLECT:
        source, dest = cache, inventory
    else:
        source, dest = inventory, cache

    token = source.pop()
    if token is None:
        logger.debug("%s on %r ignored: source empty", direction.name.lower(), cache)
        return None

    dest.push(token)
    store.save(cache.cell.key, cache.tokens)
    return token


def token_census(
    active: Iterable[Cache],
    store: CacheStateStore,
    inventory: Inventory,
) -> Counter[str]:
    """Count every token across live caches, archived inactive caches and
    the inventory. A store entry for a live cell is shadowed by the cache."""
    census: Counter[str] = Counter()
    live_keys: set[str] = set()
    for cache in active:
        live_keys.add(cache.cell.key)
        census.update(cache.tokens)
    for key, tokens in store.items():
        if key not in live_keys:
            census.update(tokens)
    census.update(inventory.tokens)
    return census


def duplicated_tokens(census: Counter[str]) -> list[str]:
    """Tokens present in more than one place. Empty when the census is sound."""
    return sorted(token for token, count in census.items() if count > 1)
