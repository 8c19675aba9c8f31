"""Canonical serialization for deterministic quote payloads."""

from __future__ import annotations

import json
from typing import Any

from eth_utils.crypto import keccak


def _validate_for_serialization(obj: Any) -> None:
    if isinstance(obj, float):
        raise ValueError("Floating point values are not allowed")

    if isinstance(obj, dict):
        for key, value in obj.items():
            if not isinstance(key, str):
                raise TypeError("All dictionary keys must be strings")
            _validate_for_serialization(value)
        return

    if isinstance(obj, list):
        for item in obj:
            _validate_for_serialization(item)
        return

    if obj is None or isinstance(obj, (str, int, bool)):
        return

    raise TypeError(f"Unsupported type for serialization: {type(obj).__name__}")


class CanonicalSerializer:
    """
    Produces deterministic JSON for quote fingerprints.

    Rules:
    - Keys sorted alphabetically (recursive)
    - No whitespace
    - Amounts travel as decimal strings, never floats
    """

    @staticmethod
    def serialize(obj: Any) -> bytes:
        """Returns canonical bytes representation."""
        _validate_for_serialization(obj)
        payload = json.dumps(
            obj,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
        )
        return payload.encode("utf-8")

    @staticmethod
    def hash(obj: Any) -> bytes:
        """Returns keccak256 of canonical serialization."""
        return keccak(CanonicalSerializer.serialize(obj))

    @staticmethod
    def fingerprint(obj: Any) -> str:
        """Hex digest of the canonical hash, used as a stable quote key."""
        return CanonicalSerializer.hash(obj).hex()
