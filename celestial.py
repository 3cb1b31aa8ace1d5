# celestial.py
"""
One-time generated scenery: the star field and the moon's spot texture.

Both structures are built during initialization, validated against their
expected fixed sizes and never mutated afterwards. They are passed
explicitly into the simulation rather than kept as module globals.
"""
import logging
import math
import numpy as np
from typing import Dict, Any, Tuple
from coherent_noise import billow_3d, exponent, make_permutation_tables
from constants import (
    SCREEN_SIZE_F, STAR_COUNT, MOON_RADIUS, MOON_POS, BILLOW_OCTAVES,
    BILLOW_FREQUENCY, BILLOW_LACUNARITY, MOON_NOISE_PERSISTENCE,
    EXPONENT_POWER, MOON_NOISE_SCALE, MOON_SPOT_THRESHOLD, MOON_SPOT_MAX_ALPHA
)
from utils import clamp, map_range

# --- Data Contracts ---
#
# class StarField:
#   - __init__(self, params: Dict[str, Any]):
#     - Inputs:
#       - params: Dictionary of simulation parameters from config.json.
#         - "seed": int
#         - "star_count": int (optional, must equal STAR_COUNT)
#     - Side Effects: Samples star positions uniformly over the screen.
#     - Invariants: self.points is a read-only float64 array of shape
#       (STAR_COUNT, 2). Raises ValueError otherwise.
#
# class MoonTexture:
#   - __init__(self, seed: int, center=MOON_POS, radius=MOON_RADIUS):
#     - Side Effects: Samples noise over every lattice point strictly inside
#       the moon disc.
#     - Invariants: self.spots is a tuple of ((x, y), alpha) pairs with
#       alpha in [0, MOON_SPOT_MAX_ALPHA]. Its length equals the number of
#       lattice points inside the disc. Raises ValueError otherwise.

Spot = Tuple[Tuple[float, float], float]

class StarField:
    """
    A fixed set of star positions, sampled once at startup.
    """
    def __init__(self, params: Dict[str, Any]):
        self.seed = params['seed']
        configured = params.get('star_count', STAR_COUNT)

        # Rule 7: Enforce data contracts. Validate config on initialization.
        if configured != STAR_COUNT:
            msg = (
                f"Configuration error: star_count {configured} does not match "
                f"the fixed star field size ({STAR_COUNT})."
            )
            logging.critical(msg)
            raise ValueError(msg)

        rng = np.random.default_rng(self.seed)
        points = rng.uniform(
            low=[0.0, 0.0],
            high=[SCREEN_SIZE_F, SCREEN_SIZE_F],
            size=(configured, 2)
        )
        points.flags.writeable = False
        self.points = points

        logging.info(f"StarField initialized with {STAR_COUNT} stars.")
        logging.debug(f"Star positions shape: {self.points.shape}")

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

def disc_offsets(radius: int):
    """Integer offsets (i, j) in [-r, r) whose point lies strictly inside the disc."""
    for i in range(-radius, radius):
        for j in range(-radius, radius):
            if i * i + j * j < radius * radius:
                yield i, j

def expected_spot_count(radius: int) -> int:
    """Number of lattice points strictly inside a disc of the given radius."""
    offsets = np.arange(-radius, radius)
    i, j = np.meshgrid(offsets, offsets, indexing='ij')
    return int(np.count_nonzero(i * i + j * j < radius * radius))

def spot_alpha(raw: float) -> float:
    """Turns a raw noise sample into a spot opacity in [0, MOON_SPOT_MAX_ALPHA]."""
    alpha = abs(raw) * MOON_NOISE_SCALE
    if math.isnan(alpha) or alpha < MOON_SPOT_THRESHOLD:
        return 0.0
    alpha = map_range(alpha, MOON_SPOT_THRESHOLD, 1.0, 0.0, MOON_SPOT_MAX_ALPHA)
    return clamp(alpha, 0.0, MOON_SPOT_MAX_ALPHA)

class MoonTexture:
    """
    Precomputed speckle texture for the moon's surface.
    """
    def __init__(self, seed: int, center: Tuple[float, float] = MOON_POS, radius: int = MOON_RADIUS):
        self.center = center
        self.radius = radius
        perms = make_permutation_tables(seed, BILLOW_OCTAVES)

        cx, cy = center
        spots = []
        for i, j in disc_offsets(radius):
            px = cx - i
            py = cy - j
            raw = exponent(
                billow_3d(perms, px / 2.0, py / 2.0, 0.0,
                          BILLOW_FREQUENCY, BILLOW_LACUNARITY, MOON_NOISE_PERSISTENCE),
                EXPONENT_POWER
            )
            spots.append(((px, py), spot_alpha(raw)))

        expected = expected_spot_count(radius)
        if len(spots) != expected:
            msg = f"Moon texture has {len(spots)} spots, expected {expected}."
            logging.critical(msg)
            raise ValueError(msg)

        self.spots: Tuple[Spot, ...] = tuple(spots)

        visible = sum(1 for _, alpha in self.spots if alpha > 0.0)
        logging.info(f"MoonTexture generated: {len(self.spots)} samples, {visible} visible spots.")

    def __len__(self) -> int:
        return len(self.spots)

    def __iter__(self):
        return iter(self.spots)
