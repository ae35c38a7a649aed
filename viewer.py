# FOLDER: /

# viewer.py

"""
================================================================================
HEX WORLD VIEWER
================================================================================
A minimal pygame host for HexWorld. Draws the world top-down as flat,
biome-coloured hexagons and feeds the real frame time back into the world so
growth is paced by this window's own frame rate.

Controls:
- Reset the world: SPACE
- Pan: W, A, S, D
- Zoom: Mouse Wheel
- Quit: ESC or close window
================================================================================
"""

import argparse
import json
import logging
import math
import sys

import numpy as np
import pygame

from hex_terrain import color_maps
from hex_terrain.runtime import HexWorld

# --- Application Constants ---
SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
CLOCK_TICK_RATE = 0 # Uncapped, so the governor sees the real frame budget.
PAN_SPEED_PIXELS = 15
ZOOM_SPEED = 0.1
MAX_ZOOM = 200.0
MIN_ZOOM = 0.5
START_ZOOM = 12.0 # Screen pixels per world unit

# Pointy-top hexagon with circumradius 0.5 world units, matching cell spacing.
HEX_CORNERS = np.array([
    (0.5 * math.cos(math.radians(60 * i + 30)), 0.5 * math.sin(math.radians(60 * i + 30)))
    for i in range(6)
])

class Camera:
    """A simple top-down camera over the world's (x, z) plane."""
    def __init__(self, screen_width, screen_height):
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.zoom = START_ZOOM
        self.x = 0.0
        self.y = 0.0

    def world_to_screen(self, world_x, world_y):
        screen_x = (world_x - self.x) * self.zoom + self.screen_width / 2
        screen_y = (world_y - self.y) * self.zoom + self.screen_height / 2
        return screen_x, screen_y

    def pan(self, dx, dy):
        # Panning speed should be independent of zoom level
        self.x += dx / self.zoom
        self.y += dy / self.zoom

    def zoom_in(self):
        self.zoom = min(MAX_ZOOM, self.zoom * (1 + ZOOM_SPEED))

    def zoom_out(self):
        self.zoom = max(MIN_ZOOM, self.zoom * (1 - ZOOM_SPEED))

class ViewerApp:
    """The main application class for the hex world viewer."""
    def __init__(self, config: dict):
        logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
        self.logger = logging.getLogger(__name__)

        self.logger.info("Initializing Pygame...")
        pygame.init()

        self.screen_width = SCREEN_WIDTH
        self.screen_height = SCREEN_HEIGHT
        self.screen = pygame.display.set_mode((self.screen_width, self.screen_height))
        pygame.display.set_caption("Hex World Viewer")

        self.clock = pygame.time.Clock()
        self.camera = Camera(self.screen_width, self.screen_height)
        self.colors = color_maps.create_color_handles()
        self.world = HexWorld(config, logger=self.logger)

        self.reset_pressed = False
        self.is_running = True

    def run(self):
        """The main application loop."""
        try:
            while self.is_running:
                time_delta = self.clock.tick(CLOCK_TICK_RATE) / 1000.0
                self.handle_events()
                self.update(time_delta)
                self.draw()
        except Exception:
            self.logger.critical("An unhandled exception occurred!", exc_info=True)
        finally:
            self.logger.info("Exiting viewer.")
            pygame.quit()
            sys.exit()

    def handle_events(self):
        """Processes user input and other events."""
        self.reset_pressed = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.is_running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.is_running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE:
                self.logger.info("Event: SPACE pressed. Resetting world.")
                self.reset_pressed = True
            elif event.type == pygame.MOUSEWHEEL:
                if event.y > 0:
                    self.camera.zoom_in()
                elif event.y < 0:
                    self.camera.zoom_out()

    def update(self, time_delta: float):
        """Advances the world and handles continuous key presses for panning."""
        self.world.update(time_delta, self.reset_pressed)

        keys = pygame.key.get_pressed()
        if keys[pygame.K_w]:
            self.camera.pan(0, -PAN_SPEED_PIXELS)
        if keys[pygame.K_s]:
            self.camera.pan(0, PAN_SPEED_PIXELS)
        if keys[pygame.K_a]:
            self.camera.pan(-PAN_SPEED_PIXELS, 0)
        if keys[pygame.K_d]:
            self.camera.pan(PAN_SPEED_PIXELS, 0)

    def draw(self):
        """Handles all rendering for the application."""
        self.screen.fill(color_maps.COLOR_BACKGROUND)

        # Hexes smaller than a couple of pixels are drawn as points.
        draw_polygons = self.camera.zoom >= 4.0
        corners = HEX_CORNERS * self.camera.zoom

        for event in self.world.iter_cells():
            x, _, z = event.position
            sx, sy = self.camera.world_to_screen(x, z)
            if sx < -self.camera.zoom or sy < -self.camera.zoom or \
               sx > self.screen_width + self.camera.zoom or sy > self.screen_height + self.camera.zoom:
                continue
            color = self.colors.resolve(event.biome)
            if draw_polygons:
                pygame.draw.polygon(self.screen, color, (corners + (sx, sy)).tolist())
            else:
                self.screen.set_at((int(sx), int(sy)), color)

        if self.world.flight is not None:
            vx, _, vz = self.world.viewer.translation
            pygame.draw.circle(self.screen, color_maps.COLOR_WAYPOINT,
                               self.camera.world_to_screen(vx, vz), 4)

        fps = self.world.diagnostics.fps or 0.0
        pygame.display.set_caption(
            f"Hex World Viewer | {fps:.0f} fps | {self.world.entity_count} cells | "
            f"Rings: {self.world.ring_count} | Zoom: {self.camera.zoom:.2f}"
        )
        pygame.display.flip()

def _load_config(config_path: str) -> dict:
    """Loads world parameters from a JSON file."""
    try:
        with open(config_path, 'r') as f:
            return json.load(f)
    except FileNotFoundError:
        print(f"Error: Configuration file not found at '{config_path}'")
        sys.exit(1)
    except json.JSONDecodeError:
        print(f"Error: Could not decode JSON from '{config_path}'")
        sys.exit(1)

if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Interactive viewer for the infinite hex world.")
    parser.add_argument("--config", type=str, help="Optional JSON file overriding the default world parameters.")
    parser.add_argument("--mode", choices=("ring", "static"), help="Grow ring by ring, or spawn one fixed disk.")
    parser.add_argument("--fly", action="store_true", help="Fly the viewer along a random waypoint path.")
    args = parser.parse_args()

    config = _load_config(args.config) if args.config else {}
    if args.mode:
        config['generation_mode'] = args.mode
    if args.fly:
        config['fly_enabled'] = True

    app = ViewerApp(config)
    app.run()
