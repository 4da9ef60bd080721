"""
procscene - Procedural Scene Layout

Populates a bounded 3D scene with a ground plane, a randomly scattered
forest, a stepped pyramid and a celestial body whose light cycles between
day and night.

This package provides:
- Layout engine with renderer-agnostic scene backend
- FastAPI service for scene generation and day/night simulation
- Command-line export and simulation
- Optional raylib viewer
"""

__version__ = "0.1.0"
__title__ = "procscene"

from .engine import SceneConfig, SceneOrchestrator, RecordingBackend

__all__ = [
    "SceneConfig",
    "SceneOrchestrator",
    "RecordingBackend",
]
