"""Module defining the Parameters class for configuring plant growth.

This module provides the Parameters class, which holds the constants of the
per-tick growth and branching rule.
"""

import numpy as np


class Parameters:
    """Holds settings for growing a plant skeleton.

    Attributes:
        growth_rate (float): Multiplicative length factor applied every tick.
        branch_probability (float): Chance per node and tick of a new lateral branch.
        branch_length (float): Initial length of a freshly spawned branch.
        branch_fraction (float): Split point along the parent segment, in (0, 1).
        branch_angle_spread (float): Width (rad) of the uniform Z rotation of new branches.
        seed_length (float): Length of the initial root segment.
        seed_angle (float): Z rotation (rad) of the initial root segment.

    Notes:
        - Set `branch_probability` to zero for deterministic, branch-free growth.
    """

    def __init__(self) -> None:
        self.growth_rate = 1.0001
        self.branch_probability = 0.0005
        self.branch_length = 0.1
        self.branch_fraction = 0.5
        # New branches rotate about Z by U[-spread/2, spread/2)
        self.branch_angle_spread = 1.0

        ###########################################
        # Initial plant
        ###########################################
        self.seed_length = 0.4
        self.seed_angle = np.pi
