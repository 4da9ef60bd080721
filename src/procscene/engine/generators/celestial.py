"""
Celestial body generator.

A glowing sphere hung above the scene with a point light attached. The
orchestrator spins its container and the day/night controller retunes
its light.
"""

from typing import Tuple

import numpy as np

from ..backend import LightHandle, SceneBackend
from ..config import (
    CELESTIAL_COLOR, CELESTIAL_DAY_INTENSITY, CELESTIAL_LIGHT_RANGE,
    CELESTIAL_POSITION, CELESTIAL_SCALE, RGBA, WHITE, SceneConfig, Vector3
)
from .base import Layout, LayoutGenerator


class CelestialLayout(Layout):
    position: Vector3
    scale: float
    color: RGBA
    light_intensity: float
    light_color: RGBA
    light_range: float


class CelestialGenerator(LayoutGenerator):

    def generate(self, config: SceneConfig, rng: np.random.RandomState = None) -> CelestialLayout:
        return CelestialLayout(
            position=CELESTIAL_POSITION,
            scale=CELESTIAL_SCALE,
            color=CELESTIAL_COLOR,
            light_intensity=CELESTIAL_DAY_INTENSITY,
            light_color=WHITE,
            light_range=CELESTIAL_LIGHT_RANGE
        )

    def build(self, backend: SceneBackend, layout: CelestialLayout):
        node, _ = self.build_with_light(backend, layout)
        return node

    def build_with_light(self, backend: SceneBackend, layout: CelestialLayout) -> Tuple[object, LightHandle]:
        """Build the celestial body and return (container, point light)."""

        celestial = backend.create_node("Celestial")

        body = backend.create_primitive("sphere", celestial, name="Body")
        backend.set_position(body, layout.position)
        backend.set_scale(body, (layout.scale,) * 3)
        backend.set_color(body, layout.color)

        light = backend.create_light(
            body, "point",
            intensity=layout.light_intensity,
            color=layout.light_color,
            light_range=layout.light_range
        )

        return celestial, light
