# sky.py
"""
Sky colour: the day/night gradient and the darkening caused by clouds
passing in front of the sun.

The gradient is sampled once at import time into a fixed table of
SKY_GRADIENT_STEPS colours. Interpolation happens in linear light and the
samples are converted back to sRGB for display.
"""
import math
import numpy as np
from typing import Tuple
from constants import (
    LIGHTSKYBLUE, SUNSET_SKY_COLOR, NIGHT_SKY_COLOR, SKY_GRADIENT_STEPS,
    PIXELS_PER_POINT_F, SUN_RADIUS, MAX_SUN_COVERAGE, MAX_DARKEN_FACTOR,
    STAR_FADE_IN_THRESHOLD
)
from sun import SunTrajectory
from utils import clamp, map_range

# --- Data Contracts ---
#
# transition_sky_color(amount: float) -> Color:
#   - Inputs: amount in [0, 1], 0 = full day, 1 = full night. Values outside
#     are clamped; NaN counts as 0.
#   - Outputs: An sRGB colour from the precomputed gradient table.
#   - Invariants: Pure. Identical input gives identical output.
#
# sun_coverage(density: np.ndarray, sun_pos, radius) -> float:
#   - Outputs: Sum of the densities of every cell whose centre lies within
#     radius of sun_pos. NaN cells count as 0.
#
# darken_factor(coverage: float) -> float:
#   - Outputs: coverage mapped from [0, MAX_SUN_COVERAGE] onto
#     [0, MAX_DARKEN_FACTOR], clamped. NaN or negative coverage gives 0.
#
# occluded_sky_color(sun, sky_color, density) -> Tuple[Color, float]:
#   - Outputs: The final background colour and the factor used. A set sun
#     always gives NIGHT_SKY_COLOR and a factor of 0.

Color = Tuple[int, int, int]

def srgb_to_linear(c: np.ndarray) -> np.ndarray:
    """sRGB transfer function inverse, for values in [0, 1]."""
    return np.where(c <= 0.04045, c / 12.92, ((c + 0.055) / 1.055) ** 2.4)

def linear_to_srgb(c: np.ndarray) -> np.ndarray:
    """sRGB transfer function, for values in [0, 1]."""
    c = np.clip(c, 0.0, 1.0)
    return np.where(c <= 0.0031308, c * 12.92, 1.055 * c ** (1.0 / 2.4) - 0.055)

def build_gradient(stops, steps: int) -> np.ndarray:
    """
    Samples evenly spaced colour stops at `steps` evenly spaced positions.

    Returns a uint8 array of shape (steps, 3).
    """
    linear_stops = srgb_to_linear(np.asarray(stops, dtype=np.float64) / 255.0)
    segments = len(linear_stops) - 1
    positions = np.linspace(0.0, 1.0, steps) * segments
    index = np.minimum(positions.astype(np.int64), segments - 1)
    t = (positions - index)[:, np.newaxis]
    linear = linear_stops[index] + (linear_stops[index + 1] - linear_stops[index]) * t
    srgb = linear_to_srgb(linear)
    return np.clip(np.rint(srgb * 255.0), 0, 255).astype(np.uint8)

_SKY_GRADIENT = build_gradient(
    [LIGHTSKYBLUE, SUNSET_SKY_COLOR, NIGHT_SKY_COLOR], SKY_GRADIENT_STEPS
)
_SKY_GRADIENT.flags.writeable = False

def transition_sky_color(amount: float) -> Color:
    """Day-to-night sky colour for a cycle amount in [0, 1]."""
    amount = clamp(amount, 0.0, 1.0)
    index = int(map_range(amount, 0.0, 1.0, 0, SKY_GRADIENT_STEPS - 1))
    r, g, b = _SKY_GRADIENT[index]
    return (int(r), int(g), int(b))

def sun_coverage(density: np.ndarray, sun_pos, radius: float = SUN_RADIUS) -> float:
    """Total cloud density over the sun's disc."""
    cols, rows = density.shape
    xs = np.arange(cols, dtype=np.float64)[:, np.newaxis] * PIXELS_PER_POINT_F
    ys = np.arange(rows, dtype=np.float64)[np.newaxis, :] * PIXELS_PER_POINT_F
    inside = np.hypot(xs - sun_pos[0], ys - sun_pos[1]) <= radius
    return float(np.nansum(density[inside]))

def darken_factor(coverage: float) -> float:
    """How much the sky dims for a given amount of cloud over the sun."""
    if math.isnan(coverage):
        return 0.0
    factor = map_range(coverage, 0.0, MAX_SUN_COVERAGE, 0.0, MAX_DARKEN_FACTOR)
    return clamp(factor, 0.0, MAX_DARKEN_FACTOR)

def darken_by(color: Color, factor: float) -> Color:
    keep = 1.0 - factor
    return tuple(int(clamp(c * keep, 0.0, 255.0)) for c in color)

def occluded_sky_color(sun: SunTrajectory, sky_color: Color, density: np.ndarray) -> Tuple[Color, float]:
    """
    Final background colour: the sky dimmed by clouds in front of the sun,
    or the fixed night colour once the sun has set.
    """
    if sun.has_set():
        return NIGHT_SKY_COLOR, 0.0
    factor = darken_factor(sun_coverage(density, sun.pos, SUN_RADIUS))
    return darken_by(sky_color, factor), factor

def star_alpha(sun: SunTrajectory) -> float:
    """
    Star visibility. Stars fade out while the sun rises and only fade in
    during the last part of the sunset.
    """
    rising = sun.rising_amount()
    if rising is not None:
        return clamp(1.0 - rising, 0.0, 1.0)
    setting = sun.setting_amount()
    if setting is not None:
        if setting > STAR_FADE_IN_THRESHOLD:
            return clamp(map_range(setting, STAR_FADE_IN_THRESHOLD, 1.0, 0.0, 1.0), 0.0, 1.0)
        return 0.0
    if sun.has_set():
        return 1.0
    return 0.0
