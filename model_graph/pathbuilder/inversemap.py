"""Registry of inverse property pairs used to canonicalize edges."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class InverseInfo:
    canonical: str
    inverse: str
    is_inverted: bool


class InverseMap:
    """An immutable map of (canonical, inverse) property URI pairs.

    A pair registered later evicts any earlier pair sharing either URI.

    Example::

        inverses = InverseMap([("ex:parentOf", "ex:childOf")])
        inverses.canonicalize_edge("ex:childOf", "A", "B")
        # -> ("ex:parentOf", "ex:childOf", "B", "A")
    """

    def __init__(self, pairs: Iterable[Tuple[str, str]] = ()) -> None:
        entries: Dict[str, InverseInfo] = {}
        for canonical, inverse in pairs:
            for uri in (canonical, inverse):
                conflict = entries.get(uri)
                if conflict is not None:
                    entries.pop(conflict.canonical, None)
                    entries.pop(conflict.inverse, None)

            entries[canonical] = InverseInfo(canonical, inverse, False)
            entries[inverse] = InverseInfo(canonical, inverse, True)
        self._entries = entries

    def __len__(self) -> int:
        return len(self._entries) // 2

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        """Iterate over the registered ``(canonical, inverse)`` pairs."""
        for info in self._entries.values():
            if not info.is_inverted:
                yield (info.canonical, info.inverse)

    def check(self, uri: str) -> Optional[InverseInfo]:
        return self._entries.get(uri)

    def has(self, uri: str) -> bool:
        return uri in self._entries

    def canonicalize_edge(
        self, uri: str, source: T, target: T
    ) -> Tuple[str, Optional[str], T, T]:
        """Return ``(canonical_uri, inverse_uri, source, target)`` for an edge.

        Unknown URIs pass through unchanged with no inverse. If ``uri`` is a
        registered inverse, source and target are swapped.
        """
        info = self.check(uri)
        if info is None:
            return (uri, None, source, target)
        if info.is_inverted:
            return (info.canonical, info.inverse, target, source)
        return (info.canonical, info.inverse, source, target)

    def add(self, canonical: str, inverse: str) -> "InverseMap":
        """Return a map with the given pair added (or ``self`` if unchanged)."""
        existing = self.check(canonical)
        if existing is not None and not existing.is_inverted and existing.inverse == inverse:
            return self
        return InverseMap(list(self) + [(canonical, inverse)])

    def remove(self, canonical: str) -> "InverseMap":
        """Return a map without the given canonical pair (or ``self`` if absent)."""
        pairs = list(self)
        kept = [pair for pair in pairs if pair[0] != canonical]
        if len(kept) == len(pairs):
            return self
        return InverseMap(kept)

    def to_json(self) -> Dict[str, Any]:
        return {"type": "inverse-map", "pairs": [list(pair) for pair in self]}

    @classmethod
    def from_json(cls, data: Any) -> Optional["InverseMap"]:
        if not cls.is_valid_inverse_map(data):
            return None
        return cls((canonical, inverse) for canonical, inverse in data["pairs"])

    @staticmethod
    def is_valid_inverse_map(data: Any) -> bool:
        if not isinstance(data, dict) or data.get("type") != "inverse-map":
            return False
        pairs = data.get("pairs")
        if not isinstance(pairs, list):
            return False
        return all(
            isinstance(pair, (list, tuple))
            and len(pair) == 2
            and all(isinstance(uri, str) for uri in pair)
            for pair in pairs
        )
