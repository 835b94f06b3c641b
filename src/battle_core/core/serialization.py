"""Tagged-wrapper codec for associative containers in JSON payloads.

JSON objects only allow string keys, so mappings with structured keys are
written as ``{"__type": "Map", "entries": [[key, value], ...]}`` and read
back by reversing the wrapper. Plain objects pass through untouched.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


MAP_TYPE_TAG = "Map"


def encode_tagged_map(mapping: Mapping[Any, Any]) -> dict[str, Any]:
    """Wrap a mapping as an explicit entries list.

    Args:
        mapping: Mapping whose keys and values are already JSON-compatible.

    Returns:
        The tagged wrapper object.
    """
    return {"__type": MAP_TYPE_TAG, "entries": [[key, value] for key, value in mapping.items()]}


def is_tagged_map(value: Any) -> bool:
    return isinstance(value, dict) and value.get("__type") == MAP_TYPE_TAG


def decode_tagged_map(value: Any) -> dict[Any, Any]:
    """Reverse ``encode_tagged_map``.

    Args:
        value: A tagged wrapper object.

    Returns:
        The reconstructed dictionary, preserving entry order.

    Raises:
        ValueError: If the wrapper or one of its entries is malformed.
    """
    if not is_tagged_map(value):
        raise ValueError("Expected a tagged Map wrapper")
    entries = value.get("entries")
    if not isinstance(entries, list):
        raise ValueError("Tagged Map wrapper has no entries list")
    decoded: dict[Any, Any] = {}
    for entry in entries:
        if not isinstance(entry, (list, tuple)) or len(entry) != 2:
            raise ValueError(f"Malformed tagged Map entry: {entry!r}")
        key, item = entry
        decoded[key] = item
    return decoded


__all__ = [
    "MAP_TYPE_TAG",
    "encode_tagged_map",
    "decode_tagged_map",
    "is_tagged_map",
]
