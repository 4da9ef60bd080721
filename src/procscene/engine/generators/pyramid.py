"""
Stepped pyramid builder.

Stacks square levels of unit cubes, one cube narrower per side on every
level, and colors each level from a fixed five-stop gradient. Fully
deterministic: the random source is ignored.
"""

from typing import List, Sequence

import numpy as np

from ..backend import SceneBackend
from ..config import BLOCK_GAP, BLOCK_SIZE, PYRAMID_CENTER, RGBA, SceneConfig, Vector3
from .base import Layout, LayoutGenerator


# Bottom to top: warm yellow, orange, pink, purple, red
GRADIENT_STOPS = np.array([
    [0.95, 0.9, 0.2, 1.0],
    [0.95, 0.7, 0.35, 1.0],
    [0.95, 0.6, 0.75, 1.0],
    [0.65, 0.4, 0.9, 1.0],
    [0.9, 0.15, 0.15, 1.0],
])


def gradient_color(t: float, stops: np.ndarray = GRADIENT_STOPS) -> RGBA:
    """
    Piecewise-linear color lookup over evenly spaced stops.

    t is clamped to [0, 1]; t = 0 and t = 1 return the end stops exactly.
    """

    t = float(np.clip(t, 0.0, 1.0))
    segments = len(stops) - 1
    index = min(int(t * segments), segments - 1)
    local_t = t * segments - index

    color = stops[index] * (1.0 - local_t) + stops[index + 1] * local_t
    return tuple(float(c) for c in color)


def level_color(level: int, levels: int) -> RGBA:
    t = 0.0 if levels <= 1 else level / (levels - 1)
    return gradient_color(t)


class PyramidLevel(Layout):
    """One horizontal layer of cubes sharing a color."""

    index: int
    side: int
    height: float
    color: RGBA
    positions: List[Vector3]

    @property
    def cube_count(self) -> int:
        return len(self.positions)


class PyramidLayout(Layout):
    base_size: int
    center: Vector3
    block_size: float
    gap: float
    levels: List[PyramidLevel]

    @property
    def cube_count(self) -> int:
        return sum(level.cube_count for level in self.levels)


class SteppedPyramidBuilder(LayoutGenerator):
    """Deterministic generator of pyramid cube positions and level colors."""

    def __init__(
        self,
        center: Sequence[float] = PYRAMID_CENTER,
        block_size: float = BLOCK_SIZE,
        gap: float = BLOCK_GAP
    ):
        self.center = tuple(float(c) for c in center)
        self.block_size = block_size
        self.gap = gap

    def generate(self, config: SceneConfig, rng: np.random.RandomState = None) -> PyramidLayout:
        return self.layout(config.pyramid_base_size)

    def layout(self, base_size: int) -> PyramidLayout:
        """Lay out `base_size` levels; level L has (base_size - L)^2 cubes."""

        levels = [self._level(index, base_size) for index in range(max(0, base_size))]
        return PyramidLayout(
            base_size=base_size,
            center=self.center,
            block_size=self.block_size,
            gap=self.gap,
            levels=levels
        )

    def _level(self, index: int, base_size: int) -> PyramidLevel:
        n = base_size - index
        size = self.block_size
        y = size * 0.5 + index * size

        # Center the n-cube footprint (including gaps) on the anchor
        width = n * size + (n - 1) * self.gap
        start_x = self.center[0] - width / 2.0 + size / 2.0
        start_z = self.center[2] - width / 2.0 + size / 2.0

        steps = np.arange(n) * (size + self.gap)
        xs, zs = np.meshgrid(start_x + steps, start_z + steps, indexing='ij')
        ys = np.full_like(xs, y)
        positions = np.stack([xs.ravel(), ys.ravel(), zs.ravel()], axis=1)

        return PyramidLevel(
            index=index,
            side=n,
            height=y,
            color=level_color(index, base_size),
            positions=[tuple(p) for p in positions.tolist()]
        )

    def build(self, backend: SceneBackend, layout: PyramidLayout):
        pyramid = backend.create_node("Pyramid")

        for level in layout.levels:
            for position in level.positions:
                cube = backend.create_primitive("cube", pyramid, name=f"Block_L{level.index}")
                backend.set_scale(cube, (layout.block_size,) * 3)
                backend.set_position(cube, position)
                backend.set_color(cube, level.color)

        return pyramid
