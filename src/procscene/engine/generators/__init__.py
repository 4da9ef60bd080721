"""
Scene element generators.

Each generator lays out one part of the scene (ground, forest, pyramid,
celestial body) and can build its layout through a SceneBackend.
"""

from .base import Layout, LayoutGenerator
from .placement import Candidate, RandomPlacementSampler
from .ground import GroundGenerator, GroundLayout
from .forest import ForestGenerator, ForestLayout, TreeInstance
from .pyramid import (
    GRADIENT_STOPS, PyramidLayout, PyramidLevel, SteppedPyramidBuilder,
    gradient_color, level_color
)
from .celestial import CelestialGenerator, CelestialLayout

__all__ = [
    "Layout", "LayoutGenerator",
    "Candidate", "RandomPlacementSampler",
    "GroundGenerator", "GroundLayout",
    "ForestGenerator", "ForestLayout", "TreeInstance",
    "SteppedPyramidBuilder", "PyramidLayout", "PyramidLevel",
    "GRADIENT_STOPS", "gradient_color", "level_color",
    "CelestialGenerator", "CelestialLayout"
]
