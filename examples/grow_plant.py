"""Grow a plant for a number of ticks and export its skeleton as a line mesh.

Usage:
    python examples/grow_plant.py [ticks] [output.vtu]

Environment:
    SPROUT_SEED, SPROUT_LOGLEVEL, SPROUT_SUNLIGHT, ... (see sprout.config and
    sprout.environment).
"""

import logging
import sys

import sprout
from sprout.growth_parameters import Parameters as BaseParameters


class Parameters(BaseParameters):
    """Growth settings for this example.

    Attributes:
        ticks (int): Number of growth ticks to simulate.
        filename (str): Output mesh file; the format follows the extension.
        capacity (int): Size of the node buffer.
    """

    def __init__(self):
        super().__init__()

        self.ticks = 2000
        self.filename = "plant.vtu"
        self.capacity = 10000

        # Branch more often than the default so a short run shows structure
        self.branch_probability = 0.002


def main(argv):
    logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    sprout.set_log_level("INFO")

    params = Parameters()
    if len(argv) > 1:
        params.ticks = int(argv[1])
    if len(argv) > 2:
        params.filename = argv[2]

    sim = sprout.Simulation(
        capacity=params.capacity,
        params=params,
        environment=sprout.Environment.from_env(),
        rng=sprout.make_rng(sprout.config.seed_default),
    )
    sim.plant_seed()
    segments = sim.run(params.ticks)

    print(f"{sim.tick} ticks, {sim.buffer.current_size()} nodes, {len(segments)} segments")
    sprout.save_segments(segments, params.filename)


if __name__ == "__main__":
    main(sys.argv)
