"""
Tests for the two-state day/night controller.
"""

from procscene.engine import DayNightController, LightingState, RecordingBackend
from procscene.engine.config import NIGHT_TINT, WHITE


def make_lights():
    backend = RecordingBackend()
    sun = backend.create_light(backend.create_node("Sun"), "directional", 1.0, WHITE)
    moon = backend.create_light(backend.create_node("Body"), "point", 0.8, WHITE, light_range=18.0)
    return sun, moon


def test_initial_state_is_day():
    controller = DayNightController()

    assert controller.is_night is False
    assert controller.timer == 0.0


def test_flips_after_full_period_and_back():
    controller = DayNightController()

    for _ in range(11):
        assert controller.update(0.5) is None
    assert controller.timer == 5.5

    lighting = controller.update(0.5)
    assert lighting is not None
    assert controller.is_night is True
    assert controller.timer == 0.0

    transitions = [controller.update(0.25) for _ in range(24)]
    assert all(t is None for t in transitions[:-1])
    assert transitions[-1].is_night is False
    assert controller.is_night is False


def test_single_large_tick_flips_once_and_discards_excess():
    controller = DayNightController()

    lighting = controller.update(13.0)
    assert lighting.is_night is True
    assert controller.timer == 0.0


def test_negative_delta_is_ignored():
    controller = DayNightController()
    controller.update(-5.0)

    assert controller.timer == 0.0


def test_transition_pushes_night_lighting():
    sun, moon = make_lights()
    controller = DayNightController(sun=sun, celestial_light=moon)

    controller.update(6.0)
    assert sun.intensity == 0.15
    assert moon.intensity == 1.6
    assert moon.color == NIGHT_TINT

    controller.update(6.0)
    assert sun.intensity == 1.0
    assert moon.intensity == 0.8
    assert moon.color == WHITE


def test_missing_lights_are_skipped():
    _, moon = make_lights()
    controller = DayNightController(sun=None, celestial_light=moon)

    lighting = controller.update(6.0)
    assert lighting.sun_intensity == 0.15
    assert moon.intensity == 1.6

    bare = DayNightController()
    assert bare.update(6.0).is_night is True


def test_no_light_updates_between_transitions():
    sun, moon = make_lights()
    controller = DayNightController(sun=sun, celestial_light=moon)

    controller.update(3.0)
    assert sun.updates == 0
    assert moon.updates == 0


def test_lighting_state_for_phase():
    day = LightingState.for_phase(False)
    night = LightingState.for_phase(True)

    assert (day.sun_intensity, day.celestial_intensity, day.celestial_color) == (1.0, 0.8, WHITE)
    assert (night.sun_intensity, night.celestial_intensity, night.celestial_color) == (0.15, 1.6, NIGHT_TINT)
