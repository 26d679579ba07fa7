"""Indexed binary min-heap with decrease-key."""

from __future__ import annotations

import math
from typing import Dict, Iterator, List, Tuple, Union

from .exceptions import AlgorithmError, ConfigError, EmptyHeap, InvalidDecrease

Item = int
Key = Union[int, float]

INFINITY: Key = math.inf

TIE_BREAKS = ("right", "left")


class IndexedMinHeap:
    """Array-backed binary min-heap over integer ids.

    Besides the key and id arrays the heap keeps ``id -> slot`` so that
    :meth:`decrease_key` can locate an entry in O(1) and sift it up in
    O(log n). Slot 0 is the root; the children of slot ``i`` are ``2i+1``
    and ``2i+2`` and exist only when they are below :meth:`__len__`.

    Args:
        tie_break: Which child to follow in sift-down when both children
            carry the same key, ``"right"`` (default) or ``"left"``.

    Raises:
        ConfigError: If ``tie_break`` is not recognised.
    """

    def __init__(self, tie_break: str = "right") -> None:
        if tie_break not in TIE_BREAKS:
            raise ConfigError(f"unknown tie_break {tie_break!r}")
        self.tie_break = tie_break
        self._keys: List[Key] = []
        self._items: List[Item] = []
        self._slot: Dict[Item, int] = {}

    # ---- queries --------------------------------------------------------

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._slot

    def __iter__(self) -> Iterator[Tuple[Item, Key]]:
        """Iterate ``(id, key)`` pairs in slot order (not sorted)."""
        return iter(zip(self._items, self._keys))

    def is_empty(self) -> bool:
        return not self._items

    def size(self) -> int:
        return len(self._items)

    def slot_of(self, item: Item) -> int:
        """Return the current slot of ``item``.

        Raises:
            KeyError: If ``item`` is not in the heap.
        """
        return self._slot[item]

    def key_of(self, item: Item) -> Key:
        return self._keys[self._slot[item]]

    def peek(self) -> Tuple[Item, Key]:
        """Return the root entry without removing it."""
        if not self._items:
            raise EmptyHeap("peek on empty heap")
        return self._items[0], self._keys[0]

    # ---- internals ------------------------------------------------------

    def _swap(self, i: int, j: int) -> None:
        keys, items = self._keys, self._items
        keys[i], keys[j] = keys[j], keys[i]
        items[i], items[j] = items[j], items[i]
        self._slot[items[i]] = i
        self._slot[items[j]] = j

    def _sift_up(self, pos: int) -> None:
        keys = self._keys
        while pos > 0:
            parent = (pos - 1) // 2
            if not keys[pos] < keys[parent]:
                break
            self._swap(pos, parent)
            pos = parent

    def _sift_down(self, pos: int) -> None:
        keys = self._keys
        size = len(keys)
        prefer_right = self.tie_break == "right"
        while True:
            left = 2 * pos + 1
            right = left + 1
            if left >= size:
                return
            child = left
            if right < size:
                if keys[right] < keys[left] or (prefer_right and keys[right] == keys[left]):
                    child = right
            # equal keys move down too; reported routes depend on it
            if keys[pos] >= keys[child]:
                self._swap(pos, child)
                pos = child
            else:
                return

    # ---- public API -----------------------------------------------------

    def insert(self, item: Item, key: Key) -> None:
        """Add ``item`` with priority ``key``.

        Raises:
            AlgorithmError: If ``item`` is already present.
        """
        if item in self._slot:
            raise AlgorithmError(f"item {item} already in heap")
        pos = len(self._items)
        self._items.append(item)
        self._keys.append(key)
        self._slot[item] = pos
        self._sift_up(pos)

    def extract_min(self) -> Tuple[Item, Key]:
        """Remove and return the ``(id, key)`` pair with the smallest key.

        Raises:
            EmptyHeap: If the heap is empty.
        """
        if not self._items:
            raise EmptyHeap("extract_min on empty heap")
        item, key = self._items[0], self._keys[0]
        last_item = self._items.pop()
        last_key = self._keys.pop()
        del self._slot[item]
        if self._items:
            self._items[0] = last_item
            self._keys[0] = last_key
            self._slot[last_item] = 0
            self._sift_down(0)
        return item, key

    def decrease_key(self, item: Item, key: Key) -> None:
        """Lower the key of ``item`` to ``key`` and restore heap order.

        Raises:
            InvalidDecrease: If ``item`` is absent or ``key`` is not strictly
                smaller than its current key.
        """
        pos = self._slot.get(item)
        if pos is None:
            raise InvalidDecrease(f"item {item} is not in the heap")
        if not key < self._keys[pos]:
            raise InvalidDecrease(
                f"new key {key} for item {item} is not below current key {self._keys[pos]}"
            )
        self._keys[pos] = key
        self._sift_up(pos)

    def check_invariants(self) -> None:
        """Verify heap order and slot consistency.

        Raises:
            AlgorithmError: On the first violation found.
        """
        keys = self._keys
        size = len(keys)
        if len(self._slot) != size:
            raise AlgorithmError("slot map size does not match heap size")
        for pos, item in enumerate(self._items):
            if self._slot.get(item) != pos:
                raise AlgorithmError(f"item {item} recorded at slot {self._slot.get(item)}, found at {pos}")
            for child in (2 * pos + 1, 2 * pos + 2):
                if child < size and keys[child] < keys[pos]:
                    raise AlgorithmError(f"heap order broken between slots {pos} and {child}")


__all__ = ["IndexedMinHeap", "INFINITY", "TIE_BREAKS"]
