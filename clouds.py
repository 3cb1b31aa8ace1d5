# clouds.py
"""
Generates the cloud density grid.

This module defines the CloudField class, which regenerates an N x N grid
of cloud densities every frame from layered 3D noise. Two noise dimensions
are spatial and drift with the wind; the third is time, so the clouds
evolve as well as translate. Columns are independent and are computed in
parallel by a Numba kernel.
"""
import logging
import numpy as np
from numba import njit, prange
from coherent_noise import billow_3d, exponent, make_permutation_tables
from constants import (
    NUM_POINTS, BILLOW_OCTAVES, BILLOW_FREQUENCY, BILLOW_LACUNARITY,
    BILLOW_PERSISTENCE, EXPONENT_POWER, WIND_SPEED, WIND_TIME_OFFSET,
    Y_OFFSET, NOISE_SAMPLE_SCALE, ZERO_ALPHA_THRESHOLD, ALPHA_ZERO_SCALING,
    SPEED_MULTIPLIER, SPEEDUP_FACTOR
)

# --- Data Contracts ---
#
# class CloudField:
#   - __init__(self, seed: int, size: int = NUM_POINTS):
#     - Side Effects: Builds the noise permutation tables. Allocates an
#       all-zero density grid.
#
#   - generate(self, delta: float) -> np.ndarray:
#     - Inputs: delta, the elapsed time in noise units (see time_offset).
#     - Outputs: A new float64 array of shape (size, size), indexed [x, y].
#     - Invariants: Every value lies in [0, 1]. Raw noise magnitudes below
#       ZERO_ALPHA_THRESHOLD are exactly 0. Same seed and delta give the
#       same grid.
#
#   - update(self, delta: float) -> np.ndarray:
#     - Side Effects: Replaces self.density with a freshly generated grid.

def time_offset(frames: int, speedup: bool) -> float:
    """Converts an elapsed frame count into the noise time offset."""
    return frames * SPEED_MULTIPLIER * (SPEEDUP_FACTOR if speedup else 1.0)

@njit
def threshold_density(raw, cutoff, scaling):
    """
    Collapses faint noise to zero and remaps the rest onto [0, 1].

    NaN input is treated as no cloud.
    """
    if raw != raw:
        return 0.0
    if raw < cutoff:
        return 0.0
    alpha = (raw - cutoff) / (scaling - cutoff)
    if alpha > 1.0:
        return 1.0
    if alpha < 0.0:
        return 0.0
    return alpha

@njit(parallel=True)
def _density_grid(perms, size, delta, wind_speed, wind_time_offset, y_offset,
                  sample_scale, frequency, lacunarity, persistence, power,
                  cutoff, scaling):
    """
    Numba-jitted kernel that fills the density grid.

    Each prange iteration owns one column of the output, so iterations never
    share writes. The kernel returns only once every column is done.
    """
    grid = np.zeros((size, size))
    for x in prange(size):
        spat_x = x / sample_scale - (delta + wind_time_offset) * wind_speed
        for y in range(size):
            spat_y = y / sample_scale - y_offset
            value = exponent(
                billow_3d(perms, spat_x, spat_y, delta, frequency, lacunarity, persistence),
                power
            )
            grid[x, y] = threshold_density(abs(value), cutoff, scaling)
    return grid

class CloudField:
    """
    Owns the noise tables and the most recent cloud density grid.
    """
    def __init__(self, seed: int, size: int = NUM_POINTS):
        self.seed = seed
        self.size = size
        self.perms = make_permutation_tables(seed, BILLOW_OCTAVES)
        self.density = np.zeros((size, size))
        self.density.flags.writeable = False

        logging.info(f"CloudField initialized with a {size}x{size} density grid.")
        logging.debug(
            f"Cloud noise: {BILLOW_OCTAVES} octaves, threshold {ZERO_ALPHA_THRESHOLD}, "
            f"wind speed {WIND_SPEED}."
        )

    def generate(self, delta: float) -> np.ndarray:
        """Computes a fresh density grid for the given time offset."""
        return _density_grid(
            self.perms, self.size, float(delta),
            WIND_SPEED, WIND_TIME_OFFSET, Y_OFFSET, NOISE_SAMPLE_SCALE,
            BILLOW_FREQUENCY, BILLOW_LACUNARITY, BILLOW_PERSISTENCE, EXPONENT_POWER,
            ZERO_ALPHA_THRESHOLD, ALPHA_ZERO_SCALING
        )

    def update(self, delta: float) -> np.ndarray:
        """Regenerates the grid wholesale and keeps it as the current density."""
        grid = self.generate(delta)
        # Published to the renderer as-is, so it must not change afterwards.
        grid.flags.writeable = False
        self.density = grid
        return self.density
