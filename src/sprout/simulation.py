"""Module defining the Simulation driver used by a render loop.

A Simulation owns the node buffer, the growth parameters and the current
environment snapshot. Each frame the host calls :meth:`Simulation.step`,
which grows the plant by one tick and returns the segments to upload.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from .config import bool_env, default_rng
from .environment import Environment
from .geometry import Segment, gen_vertex
from .growth import update_all
from .growth_parameters import Parameters
from .node import Node, NodeStatus
from .node_buffer import NodeBuffer
from .transforms import rotation_z

_LOGGER = logging.getLogger(__name__)


class Simulation:
    """Grow-then-extract loop around a single NodeBuffer.

    Attributes:
        buffer (NodeBuffer): Arena holding the plant.
        params (Parameters): Growth constants.
        environment (Environment): Snapshot handed to growth each tick.
        rng (np.random.Generator): Random source for growth.
        tick (int): Number of completed growth ticks.
        validate (bool): Check buffer invariants after every tick. Defaults to
            the ``SPROUT_VALIDATE`` environment variable.
    """

    def __init__(
        self,
        capacity: int = 10000,
        params: Optional[Parameters] = None,
        environment: Optional[Environment] = None,
        rng: Optional[np.random.Generator] = None,
        validate: Optional[bool] = None,
    ) -> None:
        self.buffer = NodeBuffer(capacity)
        self.params = params or Parameters()
        self.environment = environment or Environment()
        self.rng = default_rng() if rng is None else rng
        self.tick = 0
        self.validate = bool_env("SPROUT_VALIDATE", False) if validate is None else validate
        _LOGGER.info("Simulation initialized: capacity=%d", capacity)

    def plant_seed(
        self, position: NDArray[Any] | Sequence[float] = (0.0, 0.0, 0.0)
    ) -> int:
        """Allocate a root segment at `position` and return its index."""
        node = Node(
            status=NodeStatus.ALIVE,
            visible=True,
            absolute_position=np.asarray(position, dtype=float),
            transformation=rotation_z(self.params.seed_angle),
            length=self.params.seed_length,
        )
        index = self.buffer.alloc_insert(node)
        _LOGGER.info("Planted seed %d at %s", index, list(node.absolute_position))
        return index

    def set_environment(self, **changes: float) -> Environment:
        """Replace the environment snapshot with an updated copy."""
        self.environment = self.environment.with_updates(**changes)
        _LOGGER.debug("Environment updated: %s", changes)
        return self.environment

    def grow(self) -> List[int]:
        """Run one growth tick; return the indices of new branch leaves."""
        created = update_all(self.buffer, self.params, self.rng, self.environment)
        self.tick += 1
        if self.validate:
            self.buffer.validate()
        return created

    def extract(self) -> List[Segment]:
        return gen_vertex(self.buffer)

    def step(self) -> List[Segment]:
        """Grow one tick, then return the segments of the grown plant."""
        self.grow()
        return self.extract()

    def run(self, ticks: int) -> List[Segment]:
        """Run `ticks` growth ticks and return the final segments."""
        if ticks < 0:
            raise ValueError(f"ticks must be non-negative, got {ticks}")
        for _ in range(ticks):
            self.grow()
        _LOGGER.info(
            "Ran %d ticks: tick=%d nodes=%d", ticks, self.tick, self.buffer.current_size()
        )
        return self.extract()
