"""Enumerations used throughout the engine."""

from __future__ import annotations

from enum import IntEnum, unique


@unique
class Direction(IntEnum):
    """Cardinal movement directions."""

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3


@unique
class TransferDirection(IntEnum):
    """Which way a token moves between a cache and the player."""

    COLLECT = 0   # cache -> inventory
    DEPOSIT = 1   # inventory -> cache
