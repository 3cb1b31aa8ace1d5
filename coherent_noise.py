# coherent_noise.py
"""
Coherent noise primitives used by the cloud layer and the moon texture.

All sampling functions are JIT-compiled with Numba so they can be called
both from plain Python and from inside the parallel cloud grid kernel. They
are pure and stateless: every call is a function of the permutation tables
and the sample coordinates only.
"""
import logging
import numpy as np
from numba import njit

# --- Data Contracts ---
#
# make_permutation_tables(seed: int, octaves: int) -> np.ndarray:
#   - Outputs: int64 array of shape (octaves, 512). Row i is a permutation
#     of 0..255 seeded with (seed + i), repeated twice so lattice lookups
#     never need to wrap.
#
# perlin_3d(perm, x, y, z) -> float:
#   - Outputs: gradient noise in roughly [-1, 1]. Zero on every lattice point.
#
# billow_3d(perms, x, y, z, frequency, lacunarity, persistence) -> float:
#   - Inputs: one permutation row per octave.
#   - Outputs: sum of folded (|n| * 2 - 1) octaves plus 0.5.
#
# exponent(value, power) -> float:
#   - Outputs: value remapped to [0, 1], raised to power, mapped back to
#     [-1, 1].

def make_permutation_tables(seed: int, octaves: int) -> np.ndarray:
    """Builds one doubled permutation table per octave from a master seed."""
    tables = np.empty((octaves, 512), dtype=np.int64)
    for octave in range(octaves):
        # Rule 12: All randomness is controlled by a single master seed.
        rng = np.random.default_rng(seed + octave)
        perm = rng.permutation(256).astype(np.int64)
        tables[octave, :256] = perm
        tables[octave, 256:] = perm
    logging.debug(f"Built {octaves} noise permutation tables from seed {seed}.")
    return tables

@njit
def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)

@njit
def _lerp(a, b, t):
    "Linear interpolation."
    return a + t * (b - a)

@njit
def _gradient(h, x, y, z):
    """Dot product of (x, y, z) with one of the 12 cube-edge gradients."""
    h = h & 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h == 12 or h == 14:
        v = x
    else:
        v = z
    return (u if (h & 1) == 0 else -u) + (v if (h & 2) == 0 else -v)

@njit
def perlin_3d(perm, x, y, z):
    """Samples improved gradient noise at a single 3D point."""
    x0 = np.floor(x)
    y0 = np.floor(y)
    z0 = np.floor(z)

    xi = int(x0) % 256
    yi = int(y0) % 256
    zi = int(z0) % 256

    xf = x - x0
    yf = y - y0
    zf = z - z0

    u = _fade(xf)
    v = _fade(yf)
    w = _fade(zf)

    a = perm[xi] + yi
    aa = perm[a] + zi
    ab = perm[a + 1] + zi
    b = perm[xi + 1] + yi
    ba = perm[b] + zi
    bb = perm[b + 1] + zi

    x1 = _lerp(_gradient(perm[aa], xf, yf, zf), _gradient(perm[ba], xf - 1.0, yf, zf), u)
    x2 = _lerp(_gradient(perm[ab], xf, yf - 1.0, zf), _gradient(perm[bb], xf - 1.0, yf - 1.0, zf), u)
    y1 = _lerp(x1, x2, v)

    x1 = _lerp(_gradient(perm[aa + 1], xf, yf, zf - 1.0), _gradient(perm[ba + 1], xf - 1.0, yf, zf - 1.0), u)
    x2 = _lerp(_gradient(perm[ab + 1], xf, yf - 1.0, zf - 1.0), _gradient(perm[bb + 1], xf - 1.0, yf - 1.0, zf - 1.0), u)
    y2 = _lerp(x1, x2, v)

    return _lerp(y1, y2, w)

@njit
def billow_3d(perms, x, y, z, frequency, lacunarity, persistence):
    """
    Billowy fractal noise: each octave's magnitude is folded so the field
    forms rounded, cloud-like lumps instead of ridges.
    """
    x *= frequency
    y *= frequency
    z *= frequency
    result = 0.0
    amplitude = 1.0
    for octave in range(perms.shape[0]):
        signal = abs(perlin_3d(perms[octave], x, y, z)) * 2.0 - 1.0
        result += signal * amplitude
        amplitude *= persistence
        x *= lacunarity
        y *= lacunarity
        z *= lacunarity
    return result + 0.5

@njit
def exponent(value, power):
    """Applies an exponential curve to a value in roughly [-1, 1]."""
    value = abs((value + 1.0) / 2.0)
    return value ** power * 2.0 - 1.0
