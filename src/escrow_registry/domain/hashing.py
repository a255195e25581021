"""Content hashing for identities and contracts.

The same two-field formatter fingerprints identities (name, email) and
contracts (title, description). A content hash is not a unique key: equal
inputs always produce the same hex string.
"""

from __future__ import annotations

import hashlib


def generate_content_hash(name: str, value: str) -> str:
    """Return the SHA-256 hex digest of ``"name: {name}, email: {value}"``."""
    canonical = f"name: {name}, email: {value}"
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
