"""The sprout package grows procedural plant skeletons and extracts their geometry.

This package offers:
  - A fixed-capacity node arena with O(1) allocation and release.
  - Structural edits (attach, divide, branch, prune) that keep parent links consistent.
  - A per-tick stochastic growth rule and line-segment extraction for rendering.

Submodules:
  - archetype: Per-species descriptor table.
  - config: Logging, environment helpers and the default random source.
  - environment: Immutable environmental settings snapshot.
  - geometry: Segment extraction and export.
  - growth: Per-tick growth and branching.
  - growth_parameters: Parameter container for growth.
  - node: Node record and status values.
  - node_buffer: NodeBuffer arena.
  - simulation: Grow-then-extract driver.
  - topology: Structural edits on a NodeBuffer.
  - transforms: 4x4 transform helpers.

Classes:
  Archetype, ArchetypeTable, Environment, Node, NodeBuffer, NodeStatus,
  Parameters, Segment, Simulation
"""

from .config import (
    config,
    default_rng,
    make_rng,
    rng,
    seed,
    set_log_level,
    use,
)

from sprout.archetype import INVALID_ARCHETYPE_INDEX, Archetype, ArchetypeTable
from sprout.environment import Environment
from sprout.geometry import (
    Segment,
    extract_geometry,
    gen_vertex,
    save_segments,
    vertex_array,
)
from sprout.growth import advance_growth, update_all
from sprout.growth_parameters import Parameters
from sprout.node import INVALID_INDEX, Node, NodeStatus
from sprout.node_buffer import NodeBuffer, NodeBufferFullError
from sprout.simulation import Simulation
from sprout.topology import branch, divide, prune, set_left_child, set_right_child

__all__ = [
    # Core classes
    "Archetype",
    "ArchetypeTable",
    "Environment",
    "Node",
    "NodeBuffer",
    "NodeBufferFullError",
    "NodeStatus",
    "Parameters",
    "Segment",
    "Simulation",
    # Sentinels
    "INVALID_INDEX",
    "INVALID_ARCHETYPE_INDEX",
    # Topology and growth
    "set_left_child",
    "set_right_child",
    "divide",
    "branch",
    "prune",
    "update_all",
    "advance_growth",
    # Geometry
    "gen_vertex",
    "extract_geometry",
    "vertex_array",
    "save_segments",
    # Configuration
    "config",
    "default_rng",
    "make_rng",
    "rng",
    "seed",
    "use",
    "set_log_level",
]
