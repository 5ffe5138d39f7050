"""Unit tests for the per-tick growth rule.

This test suite verifies:
- Deterministic lengthening when branching is disabled
- Branch insertion when branching is forced
- Nodes created mid-pass are not revisited
- Buffer exhaustion skips branching without corrupting the tree
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from sprout.environment import Environment
from sprout.growth import advance_growth, update_all
from sprout.growth_parameters import Parameters
from sprout.node import INVALID_INDEX, NodeStatus
from sprout.node_buffer import NodeBuffer
from sprout.transforms import is_rigid


def _params(probability: float) -> Parameters:
    params = Parameters()
    params.branch_probability = probability
    return params


def test_no_branching_only_lengthens(three_node_tree, rng):
    """With zero branch probability every node just grows and ages."""
    buffer, root, left, right = three_node_tree
    params = _params(0.0)
    before = {i: buffer.view(i).length for i in buffer.live_indices()}

    n_ticks = 7
    for _ in range(n_ticks):
        assert update_all(buffer, params, rng) == []

    assert buffer.current_size() == 3
    for i, length in before.items():
        assert_allclose(buffer.view(i).length, length * params.growth_rate**n_ticks)
        assert buffer.view(i).length > length
        assert buffer.view(i).age == n_ticks


def test_forced_branching_adds_leaf_and_continuation(three_node_tree, rng):
    """Each branch adds a continuation node and a short lateral leaf."""
    buffer, root, left, right = three_node_tree
    params = _params(1.0)
    grown = {i: buffer.view(i).length * params.growth_rate for i in (root, left, right)}

    created = update_all(buffer, params, rng)

    assert len(created) == 3
    assert buffer.current_size() == 9
    buffer.validate()

    for i in (root, left, right):
        node = buffer.view(i)
        assert node.right_child in created
        continuation = buffer.view(node.left_child)
        # the pass does not revisit the continuation: halves of the grown length
        assert_allclose(node.length, 0.5 * grown[i])
        assert_allclose(continuation.length, 0.5 * grown[i])

    for leaf in created:
        node = buffer.view(leaf)
        assert node.status == NodeStatus.ALIVE
        assert node.visible is True
        assert node.length == params.branch_length
        assert node.age == 0
        assert node.left_child == INVALID_INDEX
        assert is_rigid(node.transformation)


def test_branch_angles_within_spread(node_factory, rng):
    """New leaves are rotated about Z within half the angle spread."""
    buffer = NodeBuffer(200)
    buffer.alloc_insert(node_factory(length=1.0))
    params = _params(1.0)
    params.branch_angle_spread = 0.5

    created = []
    for _ in range(5):
        created += update_all(buffer, params, rng)

    for leaf in created:
        m = buffer.view(leaf).transformation
        angle = np.arctan2(m[1, 0], m[0, 0])
        assert -0.25 <= angle <= 0.25


def test_exhaustion_skips_branching(node_factory, rng):
    """
    With room for the leaf but not for the split, the leaf is released
    and the node simply grows.
    """
    buffer = NodeBuffer(2)
    root = buffer.alloc_insert(node_factory(length=1.0))
    params = _params(1.0)

    created = update_all(buffer, params, rng)

    assert created == []
    assert buffer.current_size() == 1
    assert buffer.view(root).right_child == INVALID_INDEX
    assert_allclose(buffer.view(root).length, params.growth_rate)
    buffer.validate()


def test_exhaustion_mid_pass_keeps_tree_consistent(three_node_tree, rng):
    """Running out of nodes mid-tick skips branches and leaves links intact."""
    buffer, root, left, right = three_node_tree
    # capacity 10 with 4 used: room for three leaf+split pairs, the fourth node is skipped
    extra = buffer.alloc_insert(buffer.get(left).copy(parent=INVALID_INDEX))
    params = _params(1.0)

    created = update_all(buffer, params, rng)

    assert len(created) == 3
    assert buffer.current_size() == 10
    buffer.validate()
    assert extra in buffer.roots()


def test_garbage_and_dead_nodes(empty_buffer, node_factory, rng):
    """Garbage slots are ignored; dead nodes lengthen but do not age."""
    buffer = empty_buffer
    dead = buffer.alloc_insert(node_factory(status=NodeStatus.DEAD, length=1.0))
    raw = buffer.alloc()

    update_all(buffer, _params(0.0), rng)

    assert_allclose(buffer.view(dead).length, Parameters().growth_rate)
    assert buffer.view(dead).age == 0
    assert buffer.view(raw).length == 0.0


def test_same_seed_same_growth(node_factory):
    """Identical seeds produce identical trees."""
    def grow(seed):
        buffer = NodeBuffer(500)
        buffer.alloc_insert(node_factory(length=0.4))
        gen = np.random.Generator(np.random.PCG64(seed))
        for _ in range(20):
            advance_growth(buffer, _params(0.2), gen)
        return buffer

    a, b = grow(3), grow(3)
    assert a.allocated_indices() == b.allocated_indices()
    for i in a.live_indices():
        assert_allclose(a.view(i).length, b.view(i).length)
        assert_allclose(a.view(i).transformation, b.view(i).transformation)


def test_defaults_use_configured_rng(node_factory):
    """Without explicit arguments growth uses the seeded package generator."""
    import sprout

    buffer = NodeBuffer(1)
    root = buffer.alloc_insert(node_factory(length=1.0))
    with sprout.use(seed=5):
        update_all(buffer, environment=Environment(sunlight=0.2))

    assert buffer.view(root).length == pytest.approx(Parameters().growth_rate)
