"""
Copyright (c) Microsoft Corporation.
Licensed under the MIT license.

Insertion-ordered, case-insensitive property container for connection strings.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple


class PropertyMap:
    """
    Ordered key → value container with overwrite semantics.

    - Lookup is case-insensitive; the casing of a key's first insertion is kept
    - Overwriting a key keeps its position, new keys are appended
    - keys() and items() return snapshots, not live views
    """

    def __init__(self, items: Optional[Iterable[Tuple[str, str]]] = None) -> None:
        # Entries are [display_key, value]; _index maps normalized key -> entry position
        self._entries: List[List[str]] = []
        self._index: Dict[str, int] = {}
        if items:
            for key, value in items:
                self.set(key, value)

    @staticmethod
    def _normalize(key: str) -> str:
        return key.lower()

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Look up a value by key, ignoring case.

        Args:
            key: Property name
            default: Returned when the key is absent

        Returns:
            The stored value, or default
        """
        position = self._index.get(self._normalize(key))
        if position is None:
            return default
        return self._entries[position][1]

    def set(self, key: str, value: str) -> Optional[str]:
        """
        Insert or overwrite a property.

        Args:
            key: Property name
            value: Literal value

        Returns:
            The previous value if the key existed, else None
        """
        normalized = self._normalize(key)
        position = self._index.get(normalized)
        if position is not None:
            old_value = self._entries[position][1]
            self._entries[position][1] = value
            return old_value

        self._index[normalized] = len(self._entries)
        self._entries.append([key, value])
        return None

    def remove(self, key: str) -> Optional[str]:
        """
        Remove a property if present.

        Args:
            key: Property name

        Returns:
            The removed value, or None if the key was absent
        """
        position = self._index.pop(self._normalize(key), None)
        if position is None:
            return None

        _, old_value = self._entries.pop(position)
        # Entries after the removed one shift down by one
        for later_key, _ in self._entries[position:]:
            self._index[self._normalize(later_key)] -= 1
        return old_value

    def keys(self) -> List[str]:
        """Return the keys in insertion order."""
        return [key for key, _ in self._entries]

    def items(self) -> List[Tuple[str, str]]:
        """Return (key, value) tuples in insertion order."""
        return [(key, value) for key, value in self._entries]

    def copy(self) -> 'PropertyMap':
        return PropertyMap(self.items())

    def __contains__(self, key) -> bool:
        return isinstance(key, str) and self._normalize(key) in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PropertyMap):
            return NotImplemented
        return [(self._normalize(k), v) for k, v in self._entries] == [
            (other._normalize(k), v) for k, v in other._entries
        ]

    def __repr__(self) -> str:
        # Keys only, values may hold credentials
        return f"PropertyMap(keys={self.keys()!r})"
