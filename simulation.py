# simulation.py
"""
Handles the per-frame update of the sky.

This module defines the Simulation class, which advances the scene by one
frame: it moves the sun, derives the base sky colour from the sun's state,
regenerates the cloud density grid in parallel, and finally dims the sky by
the amount of cloud covering the sun. Each frame's results are published as
an immutable SkyState snapshot for the renderer.
"""
import logging
import numpy as np
from dataclasses import dataclass
from typing import Dict, Any, Optional, Tuple
from celestial import StarField, MoonTexture
from clouds import CloudField, time_offset
from constants import SPEEDUP_FACTOR, LIGHTSKYBLUE
from sky import Color, transition_sky_color, occluded_sky_color, star_alpha
from sun import SunTrajectory

# --- Data Contracts ---
#
# class Simulation:
#   - __init__(self, stars: StarField, moon: MoonTexture, params: Dict[str, Any]):
#     - Inputs:
#       - stars, moon: Immutable scenery built during initialization.
#       - params: Dictionary of simulation parameters from config.json.
#         - "seed": int
#     - Side Effects: Builds the sun and cloud field. Publishes a frame 0
#       state with an empty cloud grid.
#
#   - step(self) -> SkyState:
#     - Side Effects: Computes the state for self.frame, stores it in
#       self.state and advances self.frame by one.
#
#   - compute(self, frame: int, speedup: bool) -> SkyState:
#     - Outputs: The state of the sky for the given frame.
#     - Invariants: The sun position depends on (frame, speedup) only.

@dataclass(frozen=True)
class SkyState:
    """Everything the renderer needs to draw one frame."""
    frame: int
    sun_position: Tuple[float, float]
    has_set: bool
    rising_amount: Optional[float]
    setting_amount: Optional[float]
    sky_color: Color
    darkened_sky_color: Color
    darken_factor: float
    density: np.ndarray
    star_alpha: float

def sun_frames(frame: int, speedup: bool) -> int:
    """Frame count driving the sun. Speed-up uses the integer part of the factor."""
    return frame * (int(SPEEDUP_FACTOR) if speedup else 1)

class Simulation:
    """
    Owns the per-frame sky state and advances it one frame at a time.
    """
    def __init__(self, stars: StarField, moon: MoonTexture, params: Dict[str, Any]):
        self.stars = stars
        self.moon = moon
        self.sun = SunTrajectory()
        self.clouds = CloudField(params['seed'])
        self.speedup = False
        self.frame = 0

        self.state = SkyState(
            frame=0,
            sun_position=self.sun.pos,
            has_set=self.sun.has_set(),
            rising_amount=None,
            setting_amount=None,
            sky_color=LIGHTSKYBLUE,
            darkened_sky_color=LIGHTSKYBLUE,
            darken_factor=0.0,
            density=self.clouds.density,
            star_alpha=0.0,
        )

        logging.info("Simulation initialized.")

    def set_speedup(self, enabled: bool) -> None:
        if enabled != self.speedup:
            logging.debug(f"Speed-up {'enabled' if enabled else 'disabled'}.")
        self.speedup = enabled

    def compute(self, frame: int, speedup: bool) -> SkyState:
        """
        Computes the sky for one frame.
        """
        # 1. Move the sun. Its position is a function of the frame count only.
        self.sun.advance(sun_frames(frame, speedup))

        # 2. Clouds. The parallel kernel returns once every column is done.
        density = self.clouds.update(time_offset(frame, speedup))

        # 3. Base sky colour from where the sun is in its cycle
        sky_color = transition_sky_color(self.sun.cycle_amount())

        # 4. Dim the sky by the clouds in front of the sun
        darkened, factor = occluded_sky_color(self.sun, sky_color, density)

        return SkyState(
            frame=frame,
            sun_position=self.sun.pos,
            has_set=self.sun.has_set(),
            rising_amount=self.sun.rising_amount(),
            setting_amount=self.sun.setting_amount(),
            sky_color=sky_color,
            darkened_sky_color=darkened,
            darken_factor=factor,
            density=density,
            star_alpha=star_alpha(self.sun),
        )

    def step(self) -> SkyState:
        """
        Executes one frame of the simulation.
        """
        self.state = self.compute(self.frame, self.speedup)
        self.frame += 1
        return self.state
