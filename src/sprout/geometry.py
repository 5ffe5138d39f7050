"""Geometry extraction: turn a NodeBuffer into renderable line segments.

Each root (a live node without a parent) starts a depth-first walk. World
transforms accumulate from parent to child, and each visible node emits the
segment from its start point to its end point. The walk uses an explicit
stack, so tree depth is not bounded by the interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from typing import List, NamedTuple, Sequence, Set, Tuple

import meshio
import numpy as np
from numpy.typing import NDArray

from .node import INVALID_INDEX
from .node_buffer import NodeBuffer
from .transforms import GROWTH_AXIS, identity, transform_vector

_LOGGER = logging.getLogger(__name__)

START_COLOR: Tuple[float, float, float] = (0.0, 1.0, 0.0)
END_COLOR: Tuple[float, float, float] = (0.0, 0.0, 0.0)

VERTEX_DTYPE = np.dtype([("loc", np.float32, (3,)), ("color", np.float32, (3,))])


class Segment(NamedTuple):
    """A rendered line from a node's start point to its end point."""

    start: NDArray[np.float64]
    end: NDArray[np.float64]
    start_color: Tuple[float, float, float] = START_COLOR
    end_color: Tuple[float, float, float] = END_COLOR


def gen_vertex(buffer: NodeBuffer) -> List[Segment]:
    """Extract the segments of every tree in `buffer`.

    Roots are walked in ascending index order; within a tree the order is
    depth-first, parent before children, left child before right.

    Args:
        buffer (NodeBuffer): The plant to extract.

    Returns:
        List[Segment]: One segment per visible node reachable from a root.

    Raises:
        RuntimeError: If a node is reached twice (cyclic links).
    """
    segments: List[Segment] = []
    visited: Set[int] = set()

    for root in buffer.roots():
        stack: List[Tuple[int, NDArray[np.float64], NDArray[np.float64]]] = [
            (root, buffer.view(root).absolute_position.copy(), identity())
        ]
        while stack:
            index, start, parent_transform = stack.pop()
            if index in visited:
                raise RuntimeError(f"node {index} reached twice; links form a cycle")
            visited.add(index)

            node = buffer.view(index)
            if node.is_garbage:
                _LOGGER.warning("Skipping garbage node %d linked into the tree", index)
                continue

            world = parent_transform @ node.transformation
            end = start + transform_vector(world, GROWTH_AXIS * node.length)
            if node.visible:
                segments.append(Segment(start, end))

            # right pushed first so the left subtree is emitted first
            for child in (node.right_child, node.left_child):
                if child != INVALID_INDEX:
                    stack.append((child, end, world))

    _LOGGER.debug("Extracted %d segments from %d nodes", len(segments), len(visited))
    return segments


extract_geometry = gen_vertex


def vertex_array(segments: Sequence[Segment]) -> NDArray[np.void]:
    """Pack segments into a flat vertex array (two vertices per segment).

    Returns:
        NDArray: Structured array with ``loc`` and ``color`` float32 fields.
    """
    out = np.zeros(2 * len(segments), dtype=VERTEX_DTYPE)
    for k, seg in enumerate(segments):
        out[2 * k] = (seg.start, seg.start_color)
        out[2 * k + 1] = (seg.end, seg.end_color)
    return out


def save_segments(segments: Sequence[Segment], filename: str) -> None:
    """Write segments as a line mesh; the format is inferred from the extension.

    Args:
        segments (Sequence[Segment]): Segments to export.
        filename (str): Output path (e.g. ``plant.vtu``).

    Raises:
        ValueError: If there are no segments to write.
    """
    if not segments:
        raise ValueError("Cannot save: no segments to write.")

    verts = vertex_array(segments)
    points = verts["loc"].astype(float)
    con = np.arange(points.shape[0], dtype=int).reshape(-1, 2)

    try:
        m = meshio.Mesh(
            points=points,
            cells=[("line", con)],
            point_data={"color": verts["color"].astype(float)},
        )
        m.write(filename)
        _LOGGER.info(
            "Saved %d segments (%d points) to %s", con.shape[0], points.shape[0], filename
        )
    except Exception:
        _LOGGER.exception("save_segments: failed to write %s", filename)
        raise
