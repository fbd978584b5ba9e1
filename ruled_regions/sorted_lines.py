"""Small ordered map used for the sweep's line registries."""

from __future__ import annotations

from bisect import bisect_left, insort
from typing import Any, Dict, Generic, Iterable, Iterator, List, Tuple, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class SortedLineMap(Generic[K, V]):
    """Map from an orderable key (a coordinate or a tuple of them) to a line.

    ``put`` replaces the value stored under an existing key, ``add`` keeps it,
    so the same class models both a sorted map and a sorted set whose
    comparator only looks at the key.
    """

    __slots__ = ("_keys", "_values")

    def __init__(self, items: Iterable[Tuple[K, V]] = ()) -> None:
        self._keys: List[K] = []
        self._values: Dict[K, V] = {}
        for key, value in items:
            self.put(key, value)

    def put(self, key: K, value: V) -> None:
        if key not in self._values:
            insort(self._keys, key)  # type: ignore[type-var]
        self._values[key] = value

    def add(self, key: K, value: V) -> bool:
        """Insert unless the key is already present; return True if inserted."""
        if key in self._values:
            return False
        self.put(key, value)
        return True

    def discard(self, key: K) -> None:
        if key in self._values:
            del self._values[key]
            index = bisect_left(self._keys, key)  # type: ignore[type-var]
            del self._keys[index]

    def first_key(self) -> K:
        return self._keys[0]

    def last_key(self) -> K:
        return self._keys[-1]

    def first(self) -> V:
        return self._values[self._keys[0]]

    def last(self) -> V:
        return self._values[self._keys[-1]]

    def sub_map(self, lower: Any, upper: Any) -> "SortedLineMap[K, V]":
        """Entries with ``lower <= key < upper``."""
        start = bisect_left(self._keys, lower)
        stop = bisect_left(self._keys, upper)
        result: SortedLineMap[K, V] = SortedLineMap()
        result._keys = self._keys[start:stop]
        result._values = {key: self._values[key] for key in result._keys}
        return result

    def update(self, other: "SortedLineMap[K, V]") -> None:
        for key, value in other.items():
            self.put(key, value)

    def keys(self) -> List[K]:
        return list(self._keys)

    def values(self) -> List[V]:
        return [self._values[key] for key in self._keys]

    def items(self) -> List[Tuple[K, V]]:
        return [(key, self._values[key]) for key in self._keys]

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[V]:
        return iter(self.values())

    def __repr__(self) -> str:
        return f"SortedLineMap({self.items()!r})"


__all__ = ["SortedLineMap"]
