"""
Tests for the stepped pyramid builder and its level gradient.
"""

import numpy as np
import pytest

from procscene.engine import RecordingBackend, SceneConfig
from procscene.engine.generators import GRADIENT_STOPS, SteppedPyramidBuilder, gradient_color, level_color


def test_three_level_pyramid():
    layout = SteppedPyramidBuilder().layout(3)

    assert [level.cube_count for level in layout.levels] == [9, 4, 1]
    assert layout.cube_count == 14
    assert [level.height for level in layout.levels] == [0.5, 1.5, 2.5]
    assert [level.side for level in layout.levels] == [3, 2, 1]


@pytest.mark.parametrize("base_size", [1, 3, 6, 10])
def test_cube_counts_are_squares(base_size):
    layout = SteppedPyramidBuilder().layout(base_size)

    assert len(layout.levels) == base_size
    for index, level in enumerate(layout.levels):
        assert level.cube_count == (base_size - index) ** 2
    assert layout.cube_count == sum((base_size - L) ** 2 for L in range(base_size))

    heights = [level.height for level in layout.levels]
    assert np.allclose(np.diff(heights), 1.0)


def test_single_level_pyramid():
    layout = SteppedPyramidBuilder().layout(1)

    assert layout.cube_count == 1
    level = layout.levels[0]
    assert level.color == tuple(GRADIENT_STOPS[0])
    assert level.positions == [(6.0, 0.5, 4.0)]


def test_levels_are_centered_on_anchor():
    layout = SteppedPyramidBuilder().layout(6)

    for level in layout.levels:
        positions = np.array(level.positions)
        assert np.allclose(positions[:, 0].mean(), 6.0)
        assert np.allclose(positions[:, 2].mean(), 4.0)
        assert np.allclose(positions[:, 1], level.height)


def test_cube_spacing_includes_gap():
    layout = SteppedPyramidBuilder().layout(4)
    xs = sorted({round(p[0], 6) for p in layout.levels[0].positions})

    assert len(xs) == 4
    assert np.allclose(np.diff(xs), 1.02)


def test_gradient_end_stops_exact():
    assert gradient_color(0.0) == tuple(GRADIENT_STOPS[0])
    assert gradient_color(1.0) == tuple(GRADIENT_STOPS[-1])


@pytest.mark.parametrize("boundary", [0.25, 0.5, 0.75])
def test_gradient_continuous_at_quartiles(boundary):
    eps = 1e-9
    below = np.array(gradient_color(boundary - eps))
    at = np.array(gradient_color(boundary))
    above = np.array(gradient_color(boundary + eps))

    assert np.allclose(below, at, atol=1e-6)
    assert np.allclose(above, at, atol=1e-6)
    assert np.allclose(at, GRADIENT_STOPS[int(boundary * 4)])


def test_gradient_midsegment_interpolates():
    expected = (GRADIENT_STOPS[0] + GRADIENT_STOPS[1]) / 2.0
    assert np.allclose(gradient_color(0.125), expected)


def test_level_colors_span_gradient():
    layout = SteppedPyramidBuilder().layout(5)
    colors = [level.color for level in layout.levels]

    for index, color in enumerate(colors):
        assert np.allclose(color, GRADIENT_STOPS[index])
    assert level_color(0, 1) == tuple(GRADIENT_STOPS[0])


def test_pyramid_ignores_randomness():
    config = SceneConfig(pyramid_base_size=7)
    first = SteppedPyramidBuilder().generate(config, np.random.RandomState(1))
    second = SteppedPyramidBuilder().generate(config, np.random.RandomState(2))

    assert first == second


def test_build_creates_one_cube_per_position():
    backend = RecordingBackend()
    builder = SteppedPyramidBuilder()
    layout = builder.layout(4)
    pyramid = builder.build(backend, layout)

    assert pyramid.name == "Pyramid"
    assert len(pyramid.children) == layout.cube_count
    assert backend.count_shapes()["cube"] == 30

    top = pyramid.children[-1]
    assert np.allclose(top.world_position, layout.levels[-1].positions[0])
    assert top.color == layout.levels[-1].color
