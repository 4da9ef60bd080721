#!/usr/bin/env python3
"""
Real-time scene viewer using Raylib.

Renders the procedural scene with pyray primitives and drives the
orchestrator with the frame time, so the celestial body spins and the
day/night cycle plays out live.
"""

import argparse
import time
from typing import Optional, Sequence

import numpy as np

try:
    import pyray as rl
    RAYLIB_AVAILABLE = True
except ImportError:
    RAYLIB_AVAILABLE = False

from ..engine import RecordingBackend, SceneConfig, SceneOrchestrator
from ..engine.backend import SceneNode
from ..engine.config import SUN_DAY_INTENSITY, WHITE


DAY_SKY = np.array([135, 206, 235])
NIGHT_SKY = np.array([18, 22, 46])


def shade(color: Sequence[float], brightness: float, tint: Sequence[float] = WHITE) -> "rl.Color":
    """Convert a 0-1 RGBA color to a raylib Color, scaled by light."""

    rgb = np.clip(np.asarray(color[:3]) * np.asarray(tint[:3]) * brightness, 0.0, 1.0)
    r, g, b = (int(c) for c in rgb * 255)
    a = int(np.clip(color[3], 0.0, 1.0) * 255)
    return rl.Color(r, g, b, a)


class RaylibSceneBackend(RecordingBackend):
    """
    Recording backend that can draw itself.

    Unit primitive sizes follow the usual engine conventions: plane 10x10,
    cube 1, cylinder 2 tall with radius 0.5, sphere diameter 1.
    """

    def draw(self, brightness: float = 1.0, tint: Sequence[float] = WHITE):
        for node in self.iter_nodes():
            if node.shape is None or node.color is None:
                continue
            self._draw_node(node, shade(node.color, brightness, tint))

    def _draw_node(self, node: SceneNode, color):
        x, y, z = node.world_position
        sx, sy, sz = node.scale

        if node.shape == "plane":
            rl.draw_plane(rl.Vector3(x, y, z), rl.Vector2(10.0 * sx, 10.0 * sz), color)
        elif node.shape == "cube":
            rl.draw_cube(rl.Vector3(x, y, z), sx, sy, sz, color)
        elif node.shape == "cylinder":
            height = 2.0 * sy
            radius = 0.5 * sx
            rl.draw_cylinder(rl.Vector3(x, y - height / 2.0, z), radius, radius, height, 12, color)
        elif node.shape == "sphere":
            rl.draw_sphere(rl.Vector3(x, y, z), 0.5 * sx, color)


class SceneViewer:
    """
    Real-time scene viewer.

    Features:
    - Orbiting camera
    - Live celestial rotation and day/night cycle
    - SPACE regenerates the scene with a new seed
    - P pauses simulated time
    """

    def __init__(
        self,
        config: SceneConfig,
        window_width: int = 1024,
        window_height: int = 768,
        time_scale: float = 1.0
    ):
        if not RAYLIB_AVAILABLE:
            raise ImportError("pyray is required. Install with: pip install raylib")

        self.config = config
        self.window_width = window_width
        self.window_height = window_height
        self.time_scale = time_scale
        self.paused = False

        self.backend: Optional[RaylibSceneBackend] = None
        self.orchestrator: Optional[SceneOrchestrator] = None
        self.sun = None
        self.last_generation_time = 0.0

    def initialize(self):
        """Open the window and build the first scene."""

        rl.init_window(self.window_width, self.window_height, "procscene Viewer")
        rl.set_target_fps(60)

        self.camera = rl.Camera3D(
            rl.Vector3(28.0, 20.0, 28.0),
            rl.Vector3(0.0, 2.0, 0.0),
            rl.Vector3(0.0, 1.0, 0.0),
            45.0,
            rl.CAMERA_PERSPECTIVE
        )

        self.generate_scene(self.config)

        print("Scene viewer initialized!")
        print("Controls:")
        print("  SPACE - Regenerate scene")
        print("  P - Pause time")
        print("  ESC - Exit")

    def generate_scene(self, config: SceneConfig):
        start_time = time.time()

        self.config = config
        self.backend = RaylibSceneBackend()
        self.sun = self.backend.create_light(
            self.backend.create_node("Sun"), "directional", SUN_DAY_INTENSITY, WHITE
        )
        self.orchestrator = SceneOrchestrator(config=config, backend=self.backend, sun=self.sun)
        layout = self.orchestrator.initialize()

        self.last_generation_time = time.time() - start_time
        print(f"Generated scene: {len(layout.forest.trees)} trees, {layout.pyramid.cube_count} cubes")

    def handle_input(self):
        if rl.is_key_pressed(rl.KEY_SPACE):
            seed = int(np.random.randint(0, 2**31 - 1))
            self.generate_scene(self.config.model_copy(update={"seed": seed}))

        if rl.is_key_pressed(rl.KEY_P):
            self.paused = not self.paused
            print(f"Time: {'paused' if self.paused else 'running'}")

    def render(self):
        day_night = self.orchestrator.day_night
        celestial_light = day_night.celestial_light

        sky = NIGHT_SKY if day_night.is_night else DAY_SKY
        brightness = 0.3 + 0.7 * self.sun.intensity
        tint = celestial_light.color if celestial_light is not None else WHITE

        rl.begin_drawing()
        rl.clear_background(rl.Color(int(sky[0]), int(sky[1]), int(sky[2]), 255))

        rl.begin_mode_3d(self.camera)
        self.backend.draw(brightness, tint)
        rl.end_mode_3d()

        # UI overlay
        phase = "Night" if day_night.is_night else "Day"
        rl.draw_text(f"{phase}  (next change in {day_night.period - day_night.timer:.1f}s)", 10, 10, 20, rl.RAYWHITE)
        rl.draw_text(f"Seed: {self.config.seed}", 10, 35, 16, rl.RAYWHITE)
        rl.draw_text(f"Generation time: {self.last_generation_time:.3f}s", 10, 55, 16, rl.RAYWHITE)
        rl.draw_text(f"FPS: {rl.get_fps()}", 10, 75, 16, rl.RAYWHITE)
        rl.draw_text("SPACE: New scene, P: Pause, ESC: Exit", 10, self.window_height - 25, 14, rl.LIGHTGRAY)

        rl.end_drawing()

    def run_main_loop(self):
        print("Starting scene viewer main loop...")

        while not rl.window_should_close():
            dt = rl.get_frame_time()

            self.handle_input()
            rl.update_camera(self.camera, rl.CAMERA_ORBITAL)

            if not self.paused:
                self.orchestrator.tick(dt * self.time_scale)

            self.render()

        rl.close_window()
        print("Scene viewer closed")


def main():
    """CLI entry point for scene viewer."""

    parser = argparse.ArgumentParser(description="procscene Real-time Viewer")
    parser.add_argument("--forest-size", type=int, default=None, help="Number of trees")
    parser.add_argument("--forest-spread", type=float, default=None, help="Spread size of trees")
    parser.add_argument("--pyramid-base-size", type=int, default=None, help="Pyramid base size (3-10)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--width", type=int, default=1024, help="Window width")
    parser.add_argument("--height", type=int, default=768, help="Window height")
    parser.add_argument("--time-scale", type=float, default=1.0, help="Simulated seconds per real second")

    args = parser.parse_args()

    if not RAYLIB_AVAILABLE:
        print("Error: pyray not available")
        print("Install with: pip install raylib")
        return 1

    try:
        config = SceneConfig(
            forest_size=args.forest_size,
            forest_spread=args.forest_spread,
            pyramid_base_size=args.pyramid_base_size,
            seed=args.seed
        )

        viewer = SceneViewer(
            config,
            window_width=args.width,
            window_height=args.height,
            time_scale=args.time_scale
        )
        viewer.initialize()
        viewer.run_main_loop()

        return 0

    except Exception as e:
        print(f"Error running scene viewer: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
