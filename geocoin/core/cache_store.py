"""Keyed archive of cache token sequences that outlives the caches themselves."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from geocoin.core.errors import MalformedPersistedState
from geocoin.core.models import parse_cell_key

logger = logging.getLogger(__name__)

STORE_FORMAT_VERSION = 1


class StoreDocument(BaseModel):
    """On-disk shape of a serialized store.

    Unknown fields are ignored and missing ones fall back to defaults, so
    documents written by older or newer builds still load.
    """

    model_config = ConfigDict(extra="ignore")

    version: int = STORE_FORMAT_VERSION
    caches: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("caches")
    @classmethod
    def keys_are_cells(cls, caches: dict[str, list[str]]) -> dict[str, list[str]]:
        for key in caches:
            parse_cell_key(key)
        return caches


class CacheStateStore:
    """Last-committed token sequence per cell key.

    ``restore`` distinguishes a key that was never saved (``None``) from one
    saved with no tokens (``[]``). Reads never consume or alter an entry.
    Sequences are copied on the way in and on the way out, so callers can
    keep mutating their own lists.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: dict[str, list[str]] | None = None) -> None:
        self._entries: dict[str, list[str]] = {}
        if entries:
            for key, tokens in entries.items():
                self._entries[key] = list(tokens)

    def save(self, key: str, tokens: list[str]) -> None:
        self._entries[key] = list(tokens)

    def restore(self, key: str) -> list[str] | None:
        tokens = self._entries.get(key)
        return None if tokens is None else list(tokens)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> list[str]:
        return list(self._entries)

    def items(self) -> list[tuple[str, list[str]]]:
        return [(k, list(v)) for k, v in self._entries.items()]

    def clear(self) -> None:
        self._entries.clear()

    # -- serialization --

    def serialize(self) -> str:
        doc = StoreDocument(caches=self._entries)
        return doc.model_dump_json()

    @classmethod
    def deserialize(cls, text: str) -> CacheStateStore:
        """Rebuild a store from ``serialize`` output.

        Raises MalformedPersistedState when *text* is not a store document.
        """
        try:
            doc = StoreDocument.model_validate_json(text)
        except ValidationError as exc:
            raise MalformedPersistedState(
                f"Unreadable cache store: {exc.error_count()} error(s)"
            ) from exc
        if doc.version > STORE_FORMAT_VERSION:
            logger.warning(
                "Cache store written by format v%d, reading as v%d",
                doc.version, STORE_FORMAT_VERSION,
            )
        return cls(doc.caches)
