"""
Scene configuration and layout constants.

SceneConfig is the only externally supplied input. Out-of-range values
are normalized to defaults instead of being rejected, so every config
produces a (possibly smaller) valid scene.
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Configuration defaults
DEFAULT_FOREST_SIZE = 10
DEFAULT_FOREST_SPREAD = 1.5
DEFAULT_PYRAMID_BASE_SIZE = 6
MIN_PYRAMID_BASE_SIZE = 3
MAX_PYRAMID_BASE_SIZE = 10

# Ground
GROUND_HALF_SIZE = 15.0
GROUND_SCALE = (3.0, 1.0, 3.0)
GROUND_COLOR = (0.65, 0.25, 0.25, 1.0)

# Forest
ATTEMPTS_PER_TREE = 50
TRUNK_HEIGHT_RANGE = (1.5, 3.2)
TRUNK_RADIUS_RANGE = (0.25, 0.5)
CANOPY_SCALE_RANGE = (0.9, 1.8)
CANOPY_LIFT = 0.35
TRUNK_COLOR = (0.2, 0.5, 0.2, 1.0)
CANOPY_COLOR = (0.15, 0.7, 0.15, 1.0)

# Pyramid
PYRAMID_CENTER = (6.0, 0.0, 4.0)
PYRAMID_PADDING = 1.5
BLOCK_SIZE = 1.0
BLOCK_GAP = 0.02

# Celestial body
CELESTIAL_POSITION = (0.0, 8.0, 0.0)
CELESTIAL_SCALE = 1.2
CELESTIAL_COLOR = (0.9, 0.9, 1.0, 1.0)
CELESTIAL_LIGHT_RANGE = 18.0
CELESTIAL_ROTATION_SPEED = 25.0  # degrees per simulated second

# Day/night cycle
DAY_NIGHT_PERIOD = 6.0
SUN_DAY_INTENSITY = 1.0
SUN_NIGHT_INTENSITY = 0.15
CELESTIAL_DAY_INTENSITY = 0.8
CELESTIAL_NIGHT_INTENSITY = 1.6
WHITE = (1.0, 1.0, 1.0, 1.0)
NIGHT_TINT = (0.7, 0.8, 1.0, 1.0)

Vector3 = Tuple[float, float, float]
RGBA = Tuple[float, float, float, float]


class SceneConfig(BaseModel):
    """
    Normalized scene configuration.

    Invalid numbers never raise: a non-positive forest size or spread falls
    back to its default, a zero pyramid base falls back to the default and any
    other base is clamped to [3, 10].
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    forest_size: Optional[int] = Field(DEFAULT_FOREST_SIZE, description="Number of trees to place")
    forest_spread: Optional[float] = Field(DEFAULT_FOREST_SPREAD, description="Spread size of trees")
    pyramid_base_size: Optional[int] = Field(DEFAULT_PYRAMID_BASE_SIZE, description="Cubes per side of the bottom level")
    seed: Optional[int] = Field(None, description="Seed for the uniform random source")

    @field_validator("forest_size")
    @classmethod
    def _normalize_forest_size(cls, value: Optional[int]) -> int:
        if value is None or value < 1:
            return DEFAULT_FOREST_SIZE
        return value

    @field_validator("forest_spread")
    @classmethod
    def _normalize_forest_spread(cls, value: Optional[float]) -> float:
        if value is None or value <= 0.0:
            return DEFAULT_FOREST_SPREAD
        return value

    @field_validator("pyramid_base_size")
    @classmethod
    def _normalize_pyramid_base_size(cls, value: Optional[int]) -> int:
        if value is None or value == 0:
            return DEFAULT_PYRAMID_BASE_SIZE
        return max(MIN_PYRAMID_BASE_SIZE, min(MAX_PYRAMID_BASE_SIZE, value))

    @property
    def exclusion_half_width(self) -> float:
        """Half-width of the square kept free of trees around the pyramid."""
        return (self.pyramid_base_size * BLOCK_SIZE) / 2.0 + PYRAMID_PADDING
