"""Tests for simulation module."""

import dataclasses

import numpy as np
import pytest

from celestial import StarField, MoonTexture
from constants import (
    SUN_START_X, SUN_START_Y, LIGHTSKYBLUE, NIGHT_SKY_COLOR, NUM_POINTS, SUN_CYCLE_FRAMES
)
from simulation import Simulation, SkyState, sun_frames
from sky import occluded_sky_color, transition_sky_color
from sun import SunTrajectory


@pytest.fixture(scope="module")
def scenery():
    params = {"seed": 42, "star_count": 30}
    return StarField(params), MoonTexture(params["seed"])


@pytest.fixture
def sim(scenery):
    stars, moon = scenery
    return Simulation(stars, moon, {"seed": 42})


class TestInitialState:
    """Tests for the state published before the first step."""

    def test_frame_zero(self, sim):
        state = sim.state
        assert state.frame == 0
        assert state.sun_position == (SUN_START_X, SUN_START_Y)
        assert not state.has_set
        assert state.sky_color == LIGHTSKYBLUE
        assert state.darkened_sky_color == LIGHTSKYBLUE
        assert state.darken_factor == 0.0
        assert state.density.shape == (NUM_POINTS, NUM_POINTS)
        assert not state.density.any()

    def test_state_is_frozen(self, sim):
        with pytest.raises(dataclasses.FrozenInstanceError):
            sim.state.frame = 5

    def test_density_is_read_only(self, sim):
        with pytest.raises(ValueError):
            sim.state.density[0, 0] = 1.0



class TestStep:
    """Tests for the per-frame update."""

    def test_frame_zero_scenario(self, sim):
        """At frame 0 the sun is at its start, up, and the sky is day blue."""
        state = sim.compute(0, False)
        assert state.sun_position == pytest.approx((SUN_START_X, SUN_START_Y))
        assert not state.has_set
        assert state.rising_amount is None
        assert state.setting_amount is None
        assert state.sky_color == transition_sky_color(0.0)
        for a, e in zip(state.sky_color, LIGHTSKYBLUE):
            assert abs(a - e) <= 1
        empty = np.zeros((NUM_POINTS, NUM_POINTS))
        color, factor = occluded_sky_color(sim.sun, state.sky_color, empty)
        assert factor == 0.0
        assert color == state.sky_color

    def test_step_advances_frame(self, sim):
        first = sim.step()
        second = sim.step()
        assert (first.frame, second.frame) == (0, 1)
        assert sim.frame == 2
        assert sim.state is second

    def test_density_in_range(self, sim):
        state = sim.step()
        assert isinstance(state, SkyState)
        assert state.density.shape == (NUM_POINTS, NUM_POINTS)
        assert 0.0 <= state.density.min() <= state.density.max() <= 1.0
        assert 0.0 <= state.darken_factor <= 0.4

    def test_published_density_is_read_only(self, sim):
        """The renderer cannot alter a grid after it has been published."""
        state = sim.step()
        with pytest.raises(ValueError):
            state.density[0, 0] = 1.0

    def test_speedup_scales_sun_frames(self):
        assert sun_frames(10, False) == 10
        assert sun_frames(10, True) == 90

    def test_speedup_moves_sun_faster(self, sim):
        state = sim.compute(100, True)
        assert state.sun_position == SunTrajectory.position(900)

    def test_set_speedup(self, sim):
        sim.set_speedup(True)
        assert sim.speedup
        sim.set_speedup(False)
        assert not sim.speedup

    def test_night(self, sim):
        """Half a cycle in, the sun has set and the sky is the night colour."""
        state = sim.compute(int(SUN_CYCLE_FRAMES / 2), False)
        assert state.has_set
        assert state.darkened_sky_color == NIGHT_SKY_COLOR
        assert state.darken_factor == 0.0
        assert state.star_alpha == 1.0

    def test_replayable(self, sim, scenery):
        """The same frame computed by two simulations gives the same sky."""
        stars, moon = scenery
        other = Simulation(stars, moon, {"seed": 42})
        a = sim.compute(321, False)
        b = other.compute(321, False)
        assert a.sun_position == b.sun_position
        assert a.darkened_sky_color == b.darkened_sky_color
        assert np.array_equal(a.density, b.density)
