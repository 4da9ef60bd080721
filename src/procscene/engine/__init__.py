"""
Procedural scene layout engine.

Generates a forest that avoids a reserved footprint, a stepped pyramid with
per-level gradient colors and a celestial body with a day/night light cycle,
all expressed through a renderer-agnostic SceneBackend.
"""

from .config import SceneConfig
from .backend import LightHandle, RecordingBackend, SceneBackend
from .day_night import DayNightController, DayNightState, LightingState
from .scene_composer import SceneLayout, SceneOrchestrator

__all__ = [
    "SceneConfig",
    "SceneBackend", "LightHandle", "RecordingBackend",
    "DayNightController", "DayNightState", "LightingState",
    "SceneOrchestrator", "SceneLayout"
]
