# visualization.py
"""
Handles the visualization of the sky simulation using Pygame.

The renderer only reads the numeric state published by the simulation. The
simulation works in a y-up frame with the origin at the bottom-left corner,
so every position is flipped vertically before drawing.
"""
import logging
import math
import pygame
import numpy as np
from celestial import StarField, MoonTexture
from constants import (
    SCREEN_SIZE, FPS, SUN_RADIUS, SUN_AURA_SIZE, STAR_RADIUS, STAR_AURA_SIZE,
    MOON_RADIUS, MOON_POS, MOON_AURA_SIZE, MOON_DAY_SPOT_ALPHA, MOON_SPOT_RADIUS,
    MOON_DAY_COLOR, MOON_NIGHT_COLOR, MOON_SPOTS_DAY_COLOR, MOON_SPOTS_NIGHT_COLOR,
    WHITE, GAINSBORO, CLOUD_NIGHT_COLOR, PIXELS_PER_POINT
)
from utils import clamp, map_range
from typing import Tuple

# Forward reference for type hinting to avoid circular import
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from simulation import Simulation, SkyState


# --- Data Contracts ---
#
# class Visualizer:
#   - __init__(self, stars: StarField, moon: MoonTexture, fps: int = FPS):
#     - Side Effects: Initializes Pygame, creates the window and pre-renders
#       the auras, the star sprite and both moon spot layers.
#
#   - draw(self, state: "SkyState", simulation: "Simulation") -> bool:
#     - Outputs:
#       - bool: False if the user has quit, True otherwise.
#     - Side Effects: Renders the frame, handles Pygame events and toggles
#       the simulation's speed-up flag while the Right arrow is held.

def with_alpha(color: Tuple[int, int, int], alpha: float) -> Tuple[int, int, int, int]:
    """Attaches an alpha in [0, 1] to an RGB colour as a 0-255 channel."""
    a = int(map_range(clamp(alpha, 0.0, 1.0), 0.0, 1.0, 0, 255))
    return (color[0], color[1], color[2], a)

def aura_alpha(ring: int, size: int, start: float) -> float:
    """Opacity of one aura ring, fading out towards the outside."""
    return clamp(abs(math.log10(map_range(ring, 0, size, start, 1.0))), 0.0, 1.0)

def to_screen(x: float, y: float) -> Tuple[int, int]:
    return (int(x), int(SCREEN_SIZE - y))

class Visualizer:
    """
    Draws the sky, sun, moon, stars and clouds, and reads keyboard input.
    """
    def __init__(self, stars: StarField, moon: MoonTexture, fps: int = FPS):
        """
        Initializes Pygame and the display window.
        """
        pygame.init()
        self.screen = pygame.display.set_mode((SCREEN_SIZE, SCREEN_SIZE))
        pygame.display.set_caption("Sky")
        self.clock = pygame.time.Clock()
        self.fps = fps
        self.stars = stars
        self.moon = moon

        # --- Pre-render sprites for performance (Rule 11) ---
        self.sun_aura = self._pre_render_aura(SUN_RADIUS, SUN_AURA_SIZE, 0.101)
        self.moon_aura = self._pre_render_aura(MOON_RADIUS, MOON_AURA_SIZE, 0.7)
        self.star_sprite = self._pre_render_star()
        self.moon_spots_day = self._pre_render_moon_spots(MOON_SPOTS_DAY_COLOR, MOON_DAY_SPOT_ALPHA)
        self.moon_spots_night = self._pre_render_moon_spots(MOON_SPOTS_NIGHT_COLOR, 1.0)

        # Cloud layer at grid resolution, scaled up each frame.
        self.cloud_cells = pygame.Surface((SCREEN_SIZE // PIXELS_PER_POINT,) * 2, pygame.SRCALPHA)

        logging.info(f"Visualizer initialized with Pygame display ({SCREEN_SIZE}x{SCREEN_SIZE}).")

    def _pre_render_aura(self, radius: int, size: int, start: float) -> pygame.Surface:
        """Concentric one-pixel rings around a disc of the given radius."""
        extent = radius + size
        surf = pygame.Surface((extent * 2, extent * 2), pygame.SRCALPHA)
        for i in range(size):
            color = with_alpha(GAINSBORO, aura_alpha(i, size, start))
            pygame.draw.circle(surf, color, (extent, extent), radius + i, 1)
        return surf

    def _pre_render_star(self) -> pygame.Surface:
        extent = int(STAR_RADIUS) + STAR_AURA_SIZE
        surf = pygame.Surface((extent * 2, extent * 2), pygame.SRCALPHA)
        for i in range(STAR_AURA_SIZE):
            color = with_alpha(GAINSBORO, aura_alpha(i, STAR_AURA_SIZE, 0.8))
            pygame.draw.circle(surf, color, (extent, extent), int(STAR_RADIUS) + i, 1)
        pygame.draw.circle(surf, WHITE, (extent, extent), STAR_RADIUS)
        return surf

    def _pre_render_moon_spots(self, color: Tuple[int, int, int], scale: float) -> pygame.Surface:
        """The moon texture is immutable, so each spot layer is drawn only once."""
        surf = pygame.Surface((SCREEN_SIZE, SCREEN_SIZE), pygame.SRCALPHA)
        for (x, y), alpha in self.moon:
            if alpha > 0.0:
                pygame.draw.circle(surf, with_alpha(color, alpha * scale), to_screen(x, y), MOON_SPOT_RADIUS)
        return surf

    def _blit_centered(self, surf: pygame.Surface, x: float, y: float) -> None:
        sx, sy = to_screen(x, y)
        self.screen.blit(surf, surf.get_rect(center=(sx, sy)))

    def _draw_clouds(self, state: "SkyState") -> None:
        color = WHITE if not state.has_set else CLOUD_NIGHT_COLOR
        self.cloud_cells.fill(color + (0,))
        # Surfarray indexes [x, y] with y pointing down.
        alpha = pygame.surfarray.pixels_alpha(self.cloud_cells)
        alpha[:, :] = (np.clip(state.density[:, ::-1], 0.0, 1.0) * 255).astype(np.uint8)
        del alpha
        scaled = pygame.transform.smoothscale(self.cloud_cells, (SCREEN_SIZE, SCREEN_SIZE))
        self.screen.blit(scaled, (0, 0))

    def _handle_events(self, state: "SkyState", simulation: "Simulation") -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False

            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    logging.info("ESC key pressed. Shutting down visualizer.")
                    return False
                if event.key == pygame.K_SPACE:
                    logging.info(f"FPS: {self.clock.get_fps():.1f}")
                elif event.key == pygame.K_s:
                    logging.info(f"Stars: {self.stars.points.tolist()}")
                    logging.info(f"Sun has set: {state.has_set}")
                elif event.key == pygame.K_RIGHT:
                    simulation.set_speedup(True)

            if event.type == pygame.KEYUP and event.key == pygame.K_RIGHT:
                simulation.set_speedup(False)
        return True

    def draw(self, state: "SkyState", simulation: "Simulation") -> bool:
        """
        Draws one frame and handles events.

        Returns:
            bool: False if the simulation should exit, True otherwise.
        """
        if not self._handle_events(state, simulation):
            return False

        self.screen.fill(state.darkened_sky_color)

        if not state.has_set:
            self._blit_centered(self.sun_aura, *state.sun_position)
            pygame.draw.circle(self.screen, WHITE, to_screen(*state.sun_position), SUN_RADIUS)
        else:
            self._blit_centered(self.moon_aura, *MOON_POS)

        if state.star_alpha > 0.0:
            self.star_sprite.set_alpha(int(state.star_alpha * 255))
            for x, y in self.stars:
                self._blit_centered(self.star_sprite, x, y)

        moon_color = MOON_NIGHT_COLOR if state.has_set else MOON_DAY_COLOR
        pygame.draw.circle(self.screen, moon_color, to_screen(*MOON_POS), MOON_RADIUS)
        self.screen.blit(self.moon_spots_night if state.has_set else self.moon_spots_day, (0, 0))

        self._draw_clouds(state)

        pygame.display.flip()
        self.clock.tick(self.fps)
        return True

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()
