# sun.py
"""
Models the sun's circular day/night trajectory.

The sun's position is never integrated. It is recomputed every frame from
the elapsed frame count alone by rotating a fixed starting point about a
fixed pivot on the horizon, so any frame can be replayed exactly.
"""
import logging
import math
from typing import Optional, Tuple
from constants import (
    SCREEN_SIZE_F, SUN_RADIUS, SUN_AURA_SIZE, SUN_START_X, SUN_START_Y,
    SUN_ROTATE_POINT, SUN_CYCLE_SPEED, SUN_CYCLE_FRAMES
)
from utils import map_range, log_ease

# --- Data Contracts ---
#
# class SunTrajectory:
#   - position(frames: float) -> Tuple[float, float]  (static)
#     - Outputs: The sun centre for the given frame count.
#     - Invariants: Periodic with period SUN_CYCLE_FRAMES.
#
#   - advance(self, frames: float) -> None:
#     - Side Effects: Replaces self.pos with position(frames).
#
#   - has_set(self) -> bool
#   - rising_amount(self) -> Optional[float]   (only while set)
#   - setting_amount(self) -> Optional[float]  (only while not set)
#     - Invariants: At most one of rising/setting is defined. Defined
#       values lie in [0, 1].
#
#   - cycle_amount(self) -> float:
#     - Outputs: 0 for full day, 1 for full night.

Point = Tuple[float, float]

class SunTrajectory:
    """
    The sun's current position and its rising/setting/set state.
    """
    def __init__(self, pos: Point = (SUN_START_X, SUN_START_Y)):
        self.pos = pos
        logging.info(
            f"Sun initialized at ({pos[0]:.1f}, {pos[1]:.1f}), "
            f"cycle of {SUN_CYCLE_FRAMES:.1f} frames."
        )

    @staticmethod
    def position(frames: float) -> Point:
        """Rotates the start point about the pivot by the angle for this frame."""
        sx, sy = SUN_START_X, SUN_START_Y
        px, py = SUN_ROTATE_POINT
        angle = -math.radians((frames % SUN_CYCLE_FRAMES) * SUN_CYCLE_SPEED)
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        x = px + cos_a * (sx - px) - sin_a * (sy - py)
        y = py + sin_a * (sx - px) + cos_a * (sy - py)
        return (x, y)

    def advance(self, frames: float) -> None:
        self.pos = self.position(frames)

    def has_set(self) -> bool:
        """
        True unless the whole disc is above the horizon and inside the
        screen's horizontal bounds.
        """
        x, y = self.pos
        visible = (
            x - SUN_RADIUS > 0.0
            and y > 0.0
            and x - (SUN_RADIUS + SUN_AURA_SIZE) < SCREEN_SIZE_F
        )
        return not visible

    def rising_amount(self) -> Optional[float]:
        """How far the sun has come up over the left edge, eased."""
        edge_x = self.pos[0] - SUN_RADIUS
        if edge_x <= 0.0 and self.has_set():
            return log_ease(map_range(edge_x, SUN_RADIUS * -2.0, 0.0, 0.0, 1.0))
        return None

    def setting_amount(self) -> Optional[float]:
        """How far the sun has gone down past the right edge, eased."""
        edge_x = self.pos[0] + SUN_RADIUS
        if edge_x >= SCREEN_SIZE_F and not self.has_set():
            return log_ease(
                map_range(edge_x, SCREEN_SIZE_F, SCREEN_SIZE_F + SUN_RADIUS * 2.0, 0.0, 1.0)
            )
        return None

    def cycle_amount(self) -> float:
        """Where the sky is in the day (0) to night (1) cycle."""
        rising = self.rising_amount()
        if rising is not None:
            return 1.0 - rising
        setting = self.setting_amount()
        if setting is not None:
            return setting
        if self.has_set():
            return 1.0
        return 0.0
