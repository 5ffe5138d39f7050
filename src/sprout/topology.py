"""Structural edits on a NodeBuffer.

Every change to parent/child links goes through :func:`set_left_child` or
:func:`set_right_child`, which keep the child's back-reference in step with
the parent's link.
"""

from __future__ import annotations

import logging
from typing import List

from .node import INVALID_INDEX
from .node_buffer import NodeBuffer, NodeBufferFullError
from .transforms import identity

_LOGGER = logging.getLogger(__name__)


def set_left_child(buffer: NodeBuffer, parent: int, child: int) -> None:
    """Make `child` the left child of `parent` (INVALID_INDEX clears the link)."""
    node = buffer.view(parent)
    if child != INVALID_INDEX:
        buffer.view(child).parent = parent
    node.left_child = child


def set_right_child(buffer: NodeBuffer, parent: int, child: int) -> None:
    """Make `child` the right child of `parent` (INVALID_INDEX clears the link)."""
    node = buffer.view(parent)
    if child != INVALID_INDEX:
        buffer.view(child).parent = parent
    node.right_child = child


def _check_fraction(fraction: float) -> float:
    f = float(fraction)
    if not 0.0 < f < 1.0:
        raise ValueError(f"split fraction must lie in (0, 1), got {fraction}")
    return f


def divide(buffer: NodeBuffer, fraction: float, index: int) -> int:
    """Split the segment at `index` into two colinear segments.

    A new node takes over the upper part of the segment: it copies every
    property of the original, receives ``(1 - fraction)`` of its length, an
    identity transformation and both of its children. The original keeps
    ``fraction`` of the length, gets the new node as its left child and an
    empty right child.

    Args:
        buffer (NodeBuffer): Buffer holding the node.
        fraction (float): Split point along the segment, in (0, 1).
        index (int): Node to split.

    Returns:
        int: Index of the newly created node.

    Raises:
        ValueError: If `fraction` is outside (0, 1).
        NodeBufferFullError: If no free node is available. Nothing is modified.
    """
    f = _check_fraction(fraction)
    node = buffer.view(index)

    new_index = buffer.alloc()
    if new_index is None:
        raise NodeBufferFullError(f"cannot divide node {index}: node buffer is full")

    original_length = node.length
    buffer.set(new_index, node.copy(transformation=identity()))
    node.length = f * original_length
    buffer.view(new_index).length = (1.0 - f) * original_length

    set_left_child(buffer, new_index, node.left_child)
    set_right_child(buffer, new_index, node.right_child)

    set_left_child(buffer, index, new_index)
    set_right_child(buffer, index, INVALID_INDEX)

    _LOGGER.debug("Divided node %d at %.3f -> new node %d", index, f, new_index)
    return new_index


def branch(buffer: NodeBuffer, parent: int, fraction: float, child: int) -> int:
    """Insert `child` as a lateral branch `fraction` of the way along `parent`.

    Returns:
        int: Index of the continuation node created by the split.

    Raises:
        NodeBufferFullError: If the split cannot allocate a node.
    """
    buffer.view(child)  # bounds check before any mutation
    new_index = divide(buffer, fraction, parent)
    set_right_child(buffer, parent, child)
    return new_index


def prune(buffer: NodeBuffer, index: int) -> List[int]:
    """Detach the subtree rooted at `index` and free all of its nodes.

    Returns:
        List[int]: The freed indices, in depth-first order.
    """
    node = buffer.view(index)
    parent = node.parent
    if parent != INVALID_INDEX:
        p = buffer.view(parent)
        if p.left_child == index:
            set_left_child(buffer, parent, INVALID_INDEX)
        if p.right_child == index:
            set_right_child(buffer, parent, INVALID_INDEX)
        node.parent = INVALID_INDEX

    freed: List[int] = []
    stack = [index]
    while stack:
        i = stack.pop()
        current = buffer.view(i)
        stack.extend(reversed(current.children()))
        current.left_child = INVALID_INDEX
        current.right_child = INVALID_INDEX
        current.parent = INVALID_INDEX
        buffer.free(i)
        freed.append(i)

    _LOGGER.debug("Pruned %d nodes starting at %d", len(freed), index)
    return freed
