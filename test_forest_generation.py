"""
Tests for rejection-sampled forest placement.

Covers the exclusion square, the bounded attempt budget and the
starvation case where fewer trees than requested are returned.
"""

from itertools import islice

import numpy as np

from procscene.engine import SceneConfig
from procscene.engine.config import TRUNK_HEIGHT_RANGE, TRUNK_RADIUS_RANGE, CANOPY_SCALE_RANGE
from procscene.engine.generators import ForestGenerator, RandomPlacementSampler


def test_sampler_rejects_strictly_inside_only():
    """Points on the exclusion boundary are accepted."""

    sampler = RandomPlacementSampler(15.0, (6.0, 4.0), 4.5, np.random.RandomState(0))

    assert sampler.is_excluded(6.0, 4.0)
    assert sampler.is_excluded(10.4, 0.0)
    assert not sampler.is_excluded(10.5, 4.0)   # dx == half-width
    assert not sampler.is_excluded(6.0, -0.5)   # dz == half-width
    assert not sampler.is_excluded(11.0, 4.0)
    assert not sampler.is_excluded(6.0, 9.0)


def test_sampler_yields_points_outside_exclusion_within_ground():
    sampler = RandomPlacementSampler(15.0, (6.0, 4.0), 4.5, np.random.RandomState(1))

    points = list(islice(iter(sampler), 500))
    assert len(points) == 500
    for x, z in points:
        assert -15.0 <= x <= 15.0
        assert -15.0 <= z <= 15.0
        assert not (abs(x - 6.0) < 4.5 and abs(z - 4.0) < 4.5)


def test_sampler_candidates_include_rejections():
    sampler = RandomPlacementSampler(15.0, (0.0, 0.0), 10.0, np.random.RandomState(2))

    candidates = list(islice(sampler.candidates(), 400))
    rejected = [c for c in candidates if not c.accepted]

    assert rejected
    for c in rejected:
        assert abs(c.x) < 10.0 and abs(c.z) < 10.0


def test_forest_honours_exclusion_invariant():
    config = SceneConfig(forest_size=200, pyramid_base_size=10, seed=3)
    layout = ForestGenerator().generate(config, np.random.RandomState(3))

    cx, cz = layout.exclusion_center
    half_width = layout.exclusion_half_width
    assert half_width == 10 / 2 + 1.5
    for tree in layout.trees:
        x, y, z = tree.position
        assert y == 0.0
        assert not (abs(x - cx) < half_width and abs(z - cz) < half_width)


def test_forest_fills_request_with_modest_exclusion():
    """A 6x6 pyramid reserves well under half the ground, so the forest is full."""

    for seed in range(5):
        layout = ForestGenerator().generate(SceneConfig(forest_size=40, seed=seed), np.random.RandomState(seed))
        assert len(layout.trees) == 40
        assert layout.is_complete
        assert layout.attempts >= 40


def test_forest_never_exceeds_requested_count():
    layout = ForestGenerator().place(7, 6, np.random.RandomState(11))

    assert len(layout.trees) <= 7
    assert layout.requested == 7


def test_forest_starves_when_exclusion_covers_ground():
    """Exclusion larger than the ground: every draw is rejected, budget is 5 * 50."""

    generator = ForestGenerator(padding=100.0)
    layout = generator.place(5, 6, np.random.RandomState(0))

    assert layout.trees == []
    assert layout.attempts == 250
    assert not layout.is_complete


def test_forest_attempt_budget_scales_with_size():
    generator = ForestGenerator(attempts_per_tree=10)
    layout = generator.place(3, 6, np.random.RandomState(0), half_width=1000.0)

    assert layout.attempts == 30
    assert len(layout.trees) == 0


def test_tree_dimensions_in_range():
    layout = ForestGenerator().place(100, 3, np.random.RandomState(5))

    for tree in layout.trees:
        assert TRUNK_HEIGHT_RANGE[0] <= tree.trunk_height <= TRUNK_HEIGHT_RANGE[1]
        assert TRUNK_RADIUS_RANGE[0] <= tree.trunk_radius <= TRUNK_RADIUS_RANGE[1]
        assert CANOPY_SCALE_RANGE[0] <= tree.canopy_scale <= CANOPY_SCALE_RANGE[1]


def test_tree_derived_transforms():
    layout = ForestGenerator().place(1, 3, np.random.RandomState(9))
    tree = layout.trees[0]

    assert tree.trunk_scale == (tree.trunk_radius, tree.trunk_height / 2.0, tree.trunk_radius)
    assert tree.trunk_offset == (0.0, tree.trunk_height / 2.0, 0.0)
    assert tree.canopy_offset[1] == tree.trunk_height + tree.canopy_scale * 0.35


def test_forest_is_reproducible_for_a_seed():
    first = ForestGenerator().place(15, 6, np.random.RandomState(42))
    second = ForestGenerator().place(15, 6, np.random.RandomState(42))

    assert first == second
