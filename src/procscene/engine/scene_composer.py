"""
Scene orchestration.

Builds the ground, forest, pyramid and celestial body once, then advances
the celestial rotation and the day/night cycle on every tick.
"""

from typing import List, Optional, Tuple

import numpy as np

from .backend import LightHandle, RecordingBackend, SceneBackend
from .config import CELESTIAL_ROTATION_SPEED, SceneConfig
from .day_night import DayNightController, LightingState
from .generators import (
    CelestialGenerator, CelestialLayout, ForestGenerator, ForestLayout,
    GroundGenerator, GroundLayout, Layout, PyramidLayout, SteppedPyramidBuilder
)


class SceneLayout(Layout):
    """Everything generated for one scene."""

    config: SceneConfig
    ground: GroundLayout
    forest: ForestLayout
    pyramid: PyramidLayout
    celestial: CelestialLayout


class SceneOrchestrator:
    """
    Top-level driver of the procedural scene.

    The directional "sun" light is passed in explicitly and may be None, in
    which case sun updates are skipped. All per-tick state (elapsed time,
    celestial yaw, day/night timer) belongs to this object.
    """

    def __init__(
        self,
        config: Optional[SceneConfig] = None,
        backend: Optional[SceneBackend] = None,
        sun: Optional[LightHandle] = None,
        rng: Optional[np.random.RandomState] = None
    ):
        self.config = config or SceneConfig()
        self.backend = backend if backend is not None else RecordingBackend()
        self.sun = sun
        self.rng = rng if rng is not None else np.random.RandomState(self.config.seed)

        # Build order matters: ground, forest, pyramid, celestial
        self.generators = {
            "ground": GroundGenerator(),
            "forest": ForestGenerator(),
            "pyramid": SteppedPyramidBuilder(),
            "celestial": CelestialGenerator()
        }

        self.layout: Optional[SceneLayout] = None
        self.nodes = {}
        self.day_night = DayNightController(sun=sun)
        self.celestial_angle = 0.0
        self.elapsed = 0.0

    @property
    def initialized(self) -> bool:
        return self.layout is not None

    def initialize(self) -> SceneLayout:
        """Generate and build the scene. Later calls return the existing layout."""

        if self.layout is not None:
            return self.layout

        layouts = {}
        for name in ("ground", "forest", "pyramid"):
            generator = self.generators[name]
            layouts[name] = generator.generate(self.config, self.rng)
            self.nodes[name] = generator.build(self.backend, layouts[name])

        celestial = self.generators["celestial"]
        layouts["celestial"] = celestial.generate(self.config, self.rng)
        self.nodes["celestial"], celestial_light = celestial.build_with_light(
            self.backend, layouts["celestial"]
        )
        self.day_night.celestial_light = celestial_light

        self.layout = SceneLayout(config=self.config, **layouts)
        return self.layout

    def tick(self, delta: float) -> Optional[LightingState]:
        """
        Advance the scene by `delta` seconds of simulated time.

        Returns the LightingState pushed to the lights if day/night flipped
        on this tick, else None.
        """

        if not self.initialized:
            self.initialize()

        delta = max(0.0, delta)
        self.elapsed += delta

        self.celestial_angle = (self.celestial_angle + CELESTIAL_ROTATION_SPEED * delta) % 360.0
        self.backend.set_rotation(self.nodes["celestial"], (0.0, self.celestial_angle, 0.0))

        return self.day_night.update(delta)

    def simulate(self, ticks: int, delta: float) -> List[Tuple[float, LightingState]]:
        """Run a fixed-delta tick sequence and collect (elapsed, lighting) transitions."""

        transitions = []
        for _ in range(ticks):
            lighting = self.tick(delta)
            if lighting is not None:
                transitions.append((self.elapsed, lighting))
        return transitions
