"""Module defining the NodeBuffer arena that owns every plant node.

The buffer has a fixed capacity set at construction. Free slots are kept on a
LIFO stack so allocation and release are O(1); the most recently freed index
is handed out first. All structural links between nodes are indices into this
buffer.
"""

from __future__ import annotations

import logging
import operator
from typing import List, Optional

import numpy as np
from numpy.typing import NDArray

from .node import INVALID_INDEX, Node, NodeStatus
from .transforms import is_rigid

_LOGGER = logging.getLogger(__name__)


class NodeBufferFullError(RuntimeError):
    """Raised when an operation needs a node and the buffer has none left."""


class NodeBuffer:
    """Fixed-capacity, index-addressed store of plant nodes.

    Attributes:
        nodes (List[Node]): Backing store, one slot per index.
        free_stack (NDArray[np.uint32]): Free indices; the top is at ``free_ptr - 1``.
        free_ptr (int): Number of free indices on the stack.
    """

    nodes: List[Node]
    free_stack: NDArray[np.uint32]
    free_ptr: int

    def __init__(self, capacity: int) -> None:
        """Create a buffer of `capacity` garbage nodes, all free.

        Args:
            capacity (int): Number of slots. Must be in ``[1, INVALID_INDEX)``.

        Raises:
            ValueError: If `capacity` is 0, negative, or not below the sentinel.
        """
        capacity = int(capacity)
        if capacity <= 0 or capacity >= INVALID_INDEX:
            raise ValueError(f"invalid size for node buffer: {capacity}")

        self._max_size = capacity
        self.nodes = [Node() for _ in range(capacity)]
        self.free_stack = np.arange(capacity, dtype=np.uint32)
        self.free_ptr = capacity
        self._allocated = np.zeros(capacity, dtype=bool)

        _LOGGER.debug("NodeBuffer initialized with capacity=%d", capacity)

    # ------------------------------------------------------------------
    # Indexed access
    # ------------------------------------------------------------------
    def _check_index(self, index: int) -> int:
        try:
            i = operator.index(index)
        except TypeError:
            raise TypeError(f"node index must be an integer, got {index!r}") from None
        if not 0 <= i < self._max_size:
            raise IndexError(
                f"node index {index} out of range for buffer of size {self._max_size}"
            )
        return i

    def get(self, index: int) -> Node:
        """Return a copy of the node at `index`."""
        return self.nodes[self._check_index(index)].copy()

    def set(self, index: int, node: Node) -> None:
        """Store a copy of `node` at `index`."""
        self.nodes[self._check_index(index)] = node.copy()

    def view(self, index: int) -> Node:
        """Return the live node at `index`; edits land in the buffer."""
        return self.nodes[self._check_index(index)]

    # ------------------------------------------------------------------
    # Allocation
    # ------------------------------------------------------------------
    def alloc(self) -> Optional[int]:
        """Pop a free index off the stack.

        The caller must overwrite the slot (including its status).

        Returns:
            Optional[int]: The allocated index, or None if the buffer is full.
        """
        if self.free_ptr == 0:
            _LOGGER.warning("No memory left in node buffer (capacity=%d)", self._max_size)
            return None
        self.free_ptr -= 1
        index = int(self.free_stack[self.free_ptr])
        self._allocated[index] = True
        return index

    def alloc_insert(self, node: Node) -> int:
        """Allocate a slot and store `node` in it.

        Raises:
            NodeBufferFullError: If no free slot is available.
        """
        index = self.alloc()
        if index is None:
            raise NodeBufferFullError("node buffer is full")
        self.set(index, node)
        return index

    def free(self, index: int) -> None:
        """Mark the node at `index` as garbage and return the slot to the stack.

        Raises:
            IndexError: If `index` is out of range.
            RuntimeError: If `index` is not currently allocated, or the free
                stack is already full.
        """
        i = self._check_index(index)
        if not self._allocated[i]:
            raise RuntimeError(f"node index {i} is not allocated")
        if self.free_ptr == self._max_size:
            raise RuntimeError("Free stack full (this should not happen)")
        self.nodes[i].status = NodeStatus.GARBAGE
        self._allocated[i] = False
        self.free_stack[self.free_ptr] = i
        self.free_ptr += 1

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    def size(self) -> int:
        """Return the maximum number of nodes the buffer can hold."""
        return self._max_size

    capacity = size

    def current_size(self) -> int:
        """Return the number of allocated slots."""
        return self._max_size - self.free_ptr

    def __len__(self) -> int:
        return self.current_size()

    def is_allocated(self, index: int) -> bool:
        return bool(self._allocated[self._check_index(index)])

    def free_indices(self) -> List[int]:
        """Return the free stack, bottom first."""
        return [int(i) for i in self.free_stack[: self.free_ptr]]

    def allocated_indices(self) -> List[int]:
        """Return every allocated index in ascending order."""
        return [int(i) for i in np.flatnonzero(self._allocated)]

    def live_indices(self) -> List[int]:
        """Return allocated, non-garbage indices in ascending order."""
        return [i for i in self.allocated_indices() if not self.nodes[i].is_garbage]

    def roots(self) -> List[int]:
        """Return live nodes without a parent, in ascending order."""
        return [i for i in self.live_indices() if self.nodes[i].is_root]

    def validate(self) -> None:
        """Check the buffer invariants.

        Verifies that free and allocated indices partition the index range,
        that every link of a live node targets another live node, that
        child links agree with the children's parent links and that every
        live transformation is a proper rotation.

        Raises:
            RuntimeError: Describing the first violation found.
        """
        free = self.free_indices()
        if len(set(free)) != len(free):
            raise RuntimeError("free stack holds duplicate indices")
        allocated = set(self.allocated_indices())
        if allocated & set(free):
            raise RuntimeError(
                f"indices both free and allocated: {sorted(allocated & set(free))}"
            )
        if len(allocated) + len(free) != self._max_size:
            raise RuntimeError("free and allocated indices do not cover the buffer")

        live = set(self.live_indices())
        for i in sorted(live):
            node = self.nodes[i]
            if not is_rigid(node.transformation):
                raise RuntimeError(f"node {i} transformation is not a proper rotation")
            links = {"left_child": node.left_child, "right_child": node.right_child}
            for name, child in links.items():
                if child == INVALID_INDEX:
                    continue
                if child not in live:
                    raise RuntimeError(f"node {i} {name} {child} is not a live node")
                if self.nodes[child].parent != i:
                    raise RuntimeError(
                        f"node {i} {name} {child} has parent {self.nodes[child].parent}"
                    )
            if node.parent != INVALID_INDEX:
                if node.parent not in live:
                    raise RuntimeError(f"node {i} parent {node.parent} is not a live node")
                p = self.nodes[node.parent]
                if i not in (p.left_child, p.right_child):
                    raise RuntimeError(f"node {i} is not a child of its parent {node.parent}")
