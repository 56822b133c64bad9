"""
Identity cache for a single mapping traversal.
"""

from typing import Any

_MISS = object()


class IdentityCache:
    """
    Remembers which target was produced for each source object.

    Lookups use object identity, never equality: two equal but distinct
    source objects map to two distinct targets. The cache keeps a reference
    to every source it has seen so no identity can be recycled while the
    traversal runs.

    One cache serves exactly one top-level ``map`` call.
    """

    MISS = _MISS

    def __init__(self) -> None:
        self._entries: dict[int, tuple[Any, Any]] = {}

    def get(self, source: Any) -> Any:
        """Return the target recorded for ``source``, or ``IdentityCache.MISS``."""
        entry = self._entries.get(id(source))
        if entry is None:
            return _MISS
        return entry[1]

    def put(self, source: Any, target: Any) -> None:
        self._entries[id(source)] = (source, target)

    def __contains__(self, source: Any) -> bool:
        return id(source) in self._entries

    def __len__(self) -> int:
        return len(self._entries)
