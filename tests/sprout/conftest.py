from __future__ import annotations

from typing import Tuple

import numpy as np
import pytest

from sprout.node import Node, NodeStatus
from sprout.node_buffer import NodeBuffer
from sprout.topology import set_left_child, set_right_child
from sprout.transforms import rotation_z


def make_node(**fields) -> Node:
    """Return an alive, visible node with the given field overrides."""
    fields.setdefault("status", NodeStatus.ALIVE)
    fields.setdefault("visible", True)
    return Node(**fields)


@pytest.fixture()
def rng() -> np.random.Generator:
    return np.random.Generator(np.random.PCG64(0))


@pytest.fixture()
def empty_buffer() -> NodeBuffer:
    return NodeBuffer(10)


@pytest.fixture()
def three_node_tree() -> Tuple[NodeBuffer, int, int, int]:
    """
    Provides a buffer holding a root with two children:
        root  length 1.0, identity, anchored at the origin
        left  length 0.5, identity
        right length 0.5, rotated +90 degrees about Z
    """
    buffer = NodeBuffer(10)
    root = buffer.alloc_insert(make_node(length=1.0))
    left = buffer.alloc_insert(make_node(length=0.5))
    right = buffer.alloc_insert(
        make_node(length=0.5, transformation=rotation_z(np.pi / 2))
    )
    set_left_child(buffer, root, left)
    set_right_child(buffer, root, right)
    return buffer, root, left, right


@pytest.fixture()
def node_factory():
    return make_node
