"""Module defining the Node record stored in a NodeBuffer.

A node is one segment of the plant skeleton. Its identity is its slot index
in the buffer; parent and child links are indices into the same buffer, with
:data:`INVALID_INDEX` meaning "no such node".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Tuple

import numpy as np
from numpy.typing import NDArray

from .archetype import INVALID_ARCHETYPE_INDEX
from .transforms import identity

INVALID_INDEX: int = 2**32 - 1


class NodeStatus(IntEnum):
    """Lifecycle state of a node slot."""

    GARBAGE = 0  # slot is free / not instantiated
    DEAD = 1  # was alive, susceptible to rot
    ALIVE = 2  # currently alive, could become dead
    NEVER_ALIVE = 3  # structural, cannot die


def _origin() -> NDArray[np.float64]:
    return np.zeros(3, dtype=float)


@dataclass(eq=False)
class Node:
    """One segment of the branching structure.

    Attributes:
        left_child (int): Index of the left child or INVALID_INDEX.
        right_child (int): Index of the right child or INVALID_INDEX.
        parent (int): Index of the parent or INVALID_INDEX for a root.
        age (int): Age in ticks.
        archetype (int): Index into the archetype table.
        status (NodeStatus): Lifecycle state; GARBAGE marks a free slot.
        area (float): Surface area (photosynthesis etc.).
        length (float): Segment length; drives geometry extraction.
        visible (bool): Whether the segment is emitted as geometry.
        absolute_position (NDArray): World anchor, used only for roots.
        transformation (NDArray): 4x4 transform relative to the parent's end point.
    """

    left_child: int = INVALID_INDEX
    right_child: int = INVALID_INDEX
    parent: int = INVALID_INDEX
    age: int = 0
    archetype: int = INVALID_ARCHETYPE_INDEX
    status: NodeStatus = NodeStatus.GARBAGE
    area: float = 0.0
    length: float = 0.0
    visible: bool = False
    absolute_position: NDArray[np.float64] = field(default_factory=_origin)
    transformation: NDArray[np.float64] = field(default_factory=identity)

    def __post_init__(self) -> None:
        self.status = NodeStatus(self.status)
        self.absolute_position = np.array(self.absolute_position, dtype=float)
        self.transformation = np.array(self.transformation, dtype=float)
        if self.absolute_position.shape != (3,):
            raise ValueError(
                f"absolute_position must have shape (3,), got {self.absolute_position.shape}"
            )
        if self.transformation.shape != (4, 4):
            raise ValueError(
                f"transformation must have shape (4, 4), got {self.transformation.shape}"
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return bool(
            self.left_child == other.left_child
            and self.right_child == other.right_child
            and self.parent == other.parent
            and self.age == other.age
            and self.archetype == other.archetype
            and self.status == other.status
            and self.area == other.area
            and self.length == other.length
            and self.visible == other.visible
            and np.array_equal(self.absolute_position, other.absolute_position)
            and np.array_equal(self.transformation, other.transformation)
        )

    def copy(self, **changes: Any) -> "Node":
        """Return a deep copy, optionally overriding fields."""
        values = {
            "left_child": self.left_child,
            "right_child": self.right_child,
            "parent": self.parent,
            "age": self.age,
            "archetype": self.archetype,
            "status": self.status,
            "area": self.area,
            "length": self.length,
            "visible": self.visible,
            "absolute_position": self.absolute_position.copy(),
            "transformation": self.transformation.copy(),
        }
        values.update(changes)
        return Node(**values)

    @property
    def is_garbage(self) -> bool:
        return self.status == NodeStatus.GARBAGE

    @property
    def is_root(self) -> bool:
        return self.parent == INVALID_INDEX

    def children(self) -> Tuple[int, ...]:
        """Return the valid child indices, left first."""
        return tuple(c for c in (self.left_child, self.right_child) if c != INVALID_INDEX)
