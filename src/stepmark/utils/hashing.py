"""Stable digests used as parse cache keys.

Example:
    >>> from stepmark.utils.hashing import hash_str
    >>> hash_str("hello", truncate=16)
    '2cf24dba5fb0a30e'
"""

import hashlib


def hash_str(content: str, truncate: int | None = None, algorithm: str = "sha256") -> str:
    """Hex digest of the UTF-8 encoding of ``content``, optionally shortened."""
    digest = hashlib.new(algorithm, content.encode("utf-8")).hexdigest()
    if truncate is None:
        return digest
    return digest[:truncate]
