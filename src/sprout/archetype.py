"""Archetype table: per-species descriptors referenced by nodes.

Nodes carry an index into this table. No growth rule consults it yet; the
table only fixes the index contract so future per-species behaviour can be
looked up without changing the node layout.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

_LOGGER = logging.getLogger(__name__)

INVALID_ARCHETYPE_INDEX: int = 2**32 - 1


@dataclass(frozen=True)
class Archetype:
    """Descriptor of a plant species.

    Attributes:
        name (str): Human readable label.
        placeholder (int): Reserved slot for future growth rules.
    """

    name: str = "default"
    placeholder: int = 0


class ArchetypeTable:
    """Append-only list of archetypes addressed by integer index."""

    def __init__(self) -> None:
        self._table: List[Archetype] = []

    def register(self, descriptor: Archetype) -> int:
        """Append `descriptor` and return its index.

        Raises:
            RuntimeError: If the table would hand out the reserved sentinel.
        """
        index = len(self._table)
        if index >= INVALID_ARCHETYPE_INDEX:
            raise RuntimeError("Archetype table is full")
        self._table.append(descriptor)
        _LOGGER.debug("Registered archetype %r at index %d", descriptor.name, index)
        return index

    def get(self, index: int) -> Archetype:
        """Return the archetype at `index`.

        Raises:
            IndexError: If `index` is negative, out of range, or the sentinel.
        """
        if not 0 <= index < len(self._table):
            raise IndexError(
                f"archetype index {index} out of range for table of size {len(self._table)}"
            )
        return self._table[index]

    def __len__(self) -> int:
        return len(self._table)
