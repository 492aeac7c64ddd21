"""Content-addressed parse cache for stepmark.

A dashboard re-renders the instructions of every unlocked step on each
refresh, almost always with unchanged text. Keying parsed Documents by
(content_hash, config_hash) lets those refreshes skip segmenting entirely.

Thread Safety:
    DictParseCache is not thread-safe. Share one across threads only behind a
    lock around get/put.

Example:
    >>> from stepmark import parse, DictParseCache
    >>> cache = DictParseCache(max_entries=64)
    >>> first = parse("# Step 1", cache=cache)
    >>> parse("# Step 1", cache=cache) is first
    True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from stepmark.utils.hashing import hash_str

if TYPE_CHECKING:
    from stepmark.config import ParseConfig
    from stepmark.nodes import Document


class ParseCache(Protocol):
    """Anything that can store and return Documents by content and config hash."""

    def get(self, content_hash: str, config_hash: str) -> Document | None: ...

    def put(self, content_hash: str, config_hash: str, doc: Document) -> None: ...


class DictParseCache:
    """In-memory ParseCache backed by a dict.

    With ``max_entries`` set, storing a new key when full evicts the entry
    that was stored first. Without it the cache grows without bound.
    """

    __slots__ = ("_entries", "_max_entries")

    def __init__(self, max_entries: int | None = None) -> None:
        if max_entries is not None and max_entries < 1:
            msg = f"max_entries must be positive, got {max_entries}"
            raise ValueError(msg)
        self._entries: dict[tuple[str, str], Document] = {}
        self._max_entries = max_entries

    def get(self, content_hash: str, config_hash: str) -> Document | None:
        return self._entries.get((content_hash, config_hash))

    def put(self, content_hash: str, config_hash: str, doc: Document) -> None:
        key = (content_hash, config_hash)
        if (
            self._max_entries is not None
            and key not in self._entries
            and len(self._entries) >= self._max_entries
        ):
            del self._entries[next(iter(self._entries))]
        self._entries[key] = doc

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


def hash_content(source: str) -> str:
    """SHA-256 hex digest of the source text."""
    return hash_str(source)


def hash_config(config: ParseConfig) -> str:
    """Digest of the config fields that change parse output.

    A text_transformer is an arbitrary callable whose effect cannot be
    hashed, so its presence yields "" and parse() skips the cache.
    """
    if config.text_transformer is not None:
        return ""
    return hash_str(f"em_dash={config.em_dash}")


__all__ = [
    "DictParseCache",
    "ParseCache",
    "hash_config",
    "hash_content",
]
