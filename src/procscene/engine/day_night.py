"""
Day/night controller.

A two-state timer: simulated time accumulates every tick and once a full
period has passed the state flips between day and night, the timer resets
and the new lighting is pushed to whatever lights are attached.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from .backend import LightHandle
from .config import (
    CELESTIAL_DAY_INTENSITY, CELESTIAL_NIGHT_INTENSITY, DAY_NIGHT_PERIOD,
    NIGHT_TINT, RGBA, SUN_DAY_INTENSITY, SUN_NIGHT_INTENSITY, WHITE
)


class DayNightState(BaseModel):
    timer: float = 0.0
    is_night: bool = False


class LightingState(BaseModel):
    """Light settings emitted on a day/night transition."""

    model_config = ConfigDict(frozen=True)

    is_night: bool
    sun_intensity: float
    celestial_intensity: float
    celestial_color: RGBA

    @classmethod
    def for_phase(cls, is_night: bool) -> "LightingState":
        if is_night:
            return cls(
                is_night=True,
                sun_intensity=SUN_NIGHT_INTENSITY,
                celestial_intensity=CELESTIAL_NIGHT_INTENSITY,
                celestial_color=NIGHT_TINT
            )
        return cls(
            is_night=False,
            sun_intensity=SUN_DAY_INTENSITY,
            celestial_intensity=CELESTIAL_DAY_INTENSITY,
            celestial_color=WHITE
        )


class DayNightController:
    """
    Flips between day and night every `period` seconds of simulated time.

    Both lights are optional; a missing light is skipped on every update.
    """

    def __init__(
        self,
        sun: Optional[LightHandle] = None,
        celestial_light: Optional[LightHandle] = None,
        period: float = DAY_NIGHT_PERIOD
    ):
        self.sun = sun
        self.celestial_light = celestial_light
        self.period = period
        self.state = DayNightState()

    @property
    def is_night(self) -> bool:
        return self.state.is_night

    @property
    def timer(self) -> float:
        return self.state.timer

    def update(self, delta: float) -> Optional[LightingState]:
        """
        Advance by `delta` seconds.

        Returns the new LightingState when the phase flipped, else None. At
        most one flip happens per call; leftover time past the period is
        dropped.
        """

        self.state.timer += max(0.0, delta)
        if self.state.timer < self.period:
            return None

        self.state.timer = 0.0
        self.state.is_night = not self.state.is_night

        lighting = LightingState.for_phase(self.state.is_night)
        self.apply(lighting)
        return lighting

    def apply(self, lighting: LightingState) -> None:
        if self.sun is not None:
            self.sun.set_intensity(lighting.sun_intensity)

        if self.celestial_light is not None:
            self.celestial_light.set_intensity(lighting.celestial_intensity)
            self.celestial_light.set_color(lighting.celestial_color)
