"""
Ground plane generator.
"""

import numpy as np

from ..backend import SceneBackend
from ..config import GROUND_COLOR, GROUND_HALF_SIZE, GROUND_SCALE, RGBA, SceneConfig, Vector3
from .base import Layout, LayoutGenerator


class GroundLayout(Layout):
    half_extent: float
    scale: Vector3
    color: RGBA


class GroundGenerator(LayoutGenerator):
    """Single plane centered on the origin; its extent bounds forest placement."""

    def __init__(self, half_extent: float = GROUND_HALF_SIZE):
        self.half_extent = half_extent

    def generate(self, config: SceneConfig, rng: np.random.RandomState = None) -> GroundLayout:
        # The unit plane is 10x10, so scale 1 covers a half-extent of 5
        scale = self.half_extent / 5.0
        return GroundLayout(
            half_extent=self.half_extent,
            scale=(scale, GROUND_SCALE[1], scale),
            color=GROUND_COLOR
        )

    def build(self, backend: SceneBackend, layout: GroundLayout):
        ground = backend.create_node("Ground")

        plane = backend.create_primitive("plane", ground, name="Plane")
        backend.set_position(plane, (0.0, 0.0, 0.0))
        backend.set_scale(plane, layout.scale)
        backend.set_color(plane, layout.color)

        return ground
