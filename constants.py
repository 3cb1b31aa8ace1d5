# constants.py
"""
Application-level constants.

These values are static and do not change between simulation runs.
They describe the fixed geometry of the scene (screen and grid size, the
sun's orbit, the moon), the cloud noise parameters and the palette. None of
them are part of the startup configuration in config.json.

Coordinates follow a y-up convention with the origin in the bottom-left
corner of the screen. The renderer flips y when drawing.
"""
import math

# --- Screen & Grid ---
SCREEN_SIZE = 450
SCREEN_SIZE_F = float(SCREEN_SIZE)
# Size in pixels of one cloud grid cell.
PIXELS_PER_POINT = 3
PIXELS_PER_POINT_F = float(PIXELS_PER_POINT)
# The cloud grid is NUM_POINTS x NUM_POINTS cells.
NUM_POINTS = SCREEN_SIZE // PIXELS_PER_POINT
FPS = 60

# --- Sun ---
SUN_RADIUS = 30
SUN_AURA_SIZE = 30
SUN_START_X = SCREEN_SIZE_F / 2.0
SUN_START_Y = SCREEN_SIZE_F * 0.8
# The sun orbits this point, which sits on the horizon line.
SUN_ROTATE_POINT = (SCREEN_SIZE_F / 2.0, 0.0)
# Degrees per frame.
SUN_CYCLE_SPEED = 0.07
# Frames for one full orbit.
SUN_CYCLE_FRAMES = 360.0 / SUN_CYCLE_SPEED

# --- Stars ---
STAR_COUNT = 30
STAR_RADIUS = 2.0
STAR_AURA_SIZE = 6
# Setting fraction above which stars start to fade in.
STAR_FADE_IN_THRESHOLD = 0.85

# --- Moon ---
MOON_RADIUS = (SUN_RADIUS // 2) + (SUN_RADIUS // 5)
MOON_POS = (SCREEN_SIZE_F / 4.0, SUN_START_Y * 1.13)
MOON_AURA_SIZE = MOON_RADIUS // 2
MOON_NOISE_PERSISTENCE = 0.15
MOON_NOISE_SCALE = 0.75
MOON_SPOT_THRESHOLD = 0.2
MOON_SPOT_MAX_ALPHA = 0.85
# Spots are dimmer while the sun is up.
MOON_DAY_SPOT_ALPHA = 0.75
MOON_SPOT_RADIUS = 1.5

# --- Cloud Noise ---
BILLOW_OCTAVES = 6
BILLOW_FREQUENCY = 1.0
BILLOW_LACUNARITY = math.pi * 2.0 / 3.0
BILLOW_PERSISTENCE = 0.5
EXPONENT_POWER = 1.0
WIND_SPEED = 20.0
# Constant added to the time offset before the wind term is applied.
WIND_TIME_OFFSET = 120.0
# Converts elapsed frames to noise time units.
SPEED_MULTIPLIER = 0.00005
SPEEDUP_FACTOR = 9.5
Y_OFFSET = 50.0
# Grid index to noise space divisor.
NOISE_SAMPLE_SCALE = 550.0
# Raw noise magnitudes below this value produce no cloud at all.
ZERO_ALPHA_THRESHOLD = 0.6
ALPHA_ZERO_SCALING = 1.2

# --- Occlusion ---
# Summed cloud density over the sun disc mapped onto [0, MAX_DARKEN_FACTOR].
MAX_SUN_COVERAGE = 120.0
MAX_DARKEN_FACTOR = 0.4

# --- Colors (sRGB, 0-255) ---
LIGHTSKYBLUE = (135, 206, 250)
SUNSET_SKY_COLOR = (254, 172, 39)
NIGHT_SKY_COLOR = (20, 30, 37)
# Number of discrete samples taken along the sky gradient.
SKY_GRADIENT_STEPS = 101

WHITE = (255, 255, 255)
GAINSBORO = (220, 220, 220)
GRAY = (128, 128, 128)
DARKGRAY = (169, 169, 169)
CORNSILK = (255, 248, 220)
CLOUD_NIGHT_COLOR = GRAY
MOON_DAY_COLOR = (215, 239, 253)
MOON_NIGHT_COLOR = CORNSILK
MOON_SPOTS_DAY_COLOR = (143, 198, 232)
MOON_SPOTS_NIGHT_COLOR = DARKGRAY
