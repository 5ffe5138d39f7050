"""Per-tick growth and branching of a plant skeleton.

One call to :func:`update_all` advances every live node by one tick: the
segment lengthens by a fixed factor and, with a small probability, a new
lateral branch is inserted halfway along it. Nodes created during a pass are
not visited until the next one.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np

from .config import default_rng
from .environment import Environment
from .growth_parameters import Parameters
from .node import Node, NodeStatus
from .node_buffer import NodeBuffer, NodeBufferFullError
from .topology import branch
from .transforms import random_rotation_z

_LOGGER = logging.getLogger(__name__)


def _spawn_branch(
    buffer: NodeBuffer, index: int, params: Parameters, rng: np.random.Generator
) -> Optional[int]:
    """Insert a fresh leaf along node `index`; return its index or None if full."""
    leaf = buffer.alloc()
    if leaf is None:
        return None

    buffer.set(
        leaf,
        Node(
            status=NodeStatus.ALIVE,
            visible=True,
            length=params.branch_length,
            transformation=random_rotation_z(rng, params.branch_angle_spread),
        ),
    )
    try:
        branch(buffer, index, params.branch_fraction, leaf)
    except NodeBufferFullError:
        buffer.free(leaf)
        return None
    return leaf


def update_all(
    buffer: NodeBuffer,
    params: Optional[Parameters] = None,
    rng: Optional[np.random.Generator] = None,
    environment: Optional[Environment] = None,
) -> List[int]:
    """Advance every live node in `buffer` by one tick.

    Args:
        buffer (NodeBuffer): The plant to grow, mutated in place.
        params (Optional[Parameters]): Growth constants; defaults to `Parameters()`.
        rng (Optional[np.random.Generator]): Random source for branching
            decisions and branch orientation; defaults to the configured one.
        environment (Optional[Environment]): Environmental snapshot for this tick.

    Returns:
        List[int]: Indices of the branch leaves created during this tick.
    """
    params = params or Parameters()
    rng = default_rng() if rng is None else rng
    environment = environment or Environment()

    to_visit = buffer.live_indices()
    created: List[int] = []
    skipped = 0

    for i in to_visit:
        node = buffer.view(i)
        if node.is_garbage:
            continue
        node.length *= params.growth_rate
        if node.status == NodeStatus.ALIVE:
            node.age += 1

        if rng.random() < params.branch_probability:
            leaf = _spawn_branch(buffer, i, params, rng)
            if leaf is None:
                skipped += 1
            else:
                created.append(leaf)

    if skipped:
        _LOGGER.warning("Node buffer exhausted: skipped %d branching events", skipped)
    _LOGGER.debug(
        "Growth tick: visited=%d new_branches=%d size=%d/%d sunlight=%.2f",
        len(to_visit),
        len(created),
        buffer.current_size(),
        buffer.size(),
        environment.sunlight,
    )
    return created


advance_growth = update_all
