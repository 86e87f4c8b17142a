"""
Constants for the game.
"""

from __future__ import annotations

FPS = 60
WINDOW_SIZE = (800, 600)
WINDOW_TITLE = "Tilt Invaders (Pygame + mini-arcade-core)"
BACKGROUND_COLOR = (0, 0, 0)

# Invader grid
INVADER_SIZE = (24, 16)
INVADER_GRID_SPACING = (12, 12)
INVADER_ROW_COUNT = 6
# the grid loop starts at 1, so a row holds INVADER_COL_COUNT - 1 invaders
INVADER_COL_COUNT = 6

# Invader movement
INVADER_STEP = 10.0
EDGE_MARGIN = 1.0
TIME_PER_MOVE = 1.0

# Ship
SHIP_SIZE = (30, 16)
SHIP_COLOR = (0, 255, 0)
SHIP_MASS = 0.2
SHIP_LINEAR_DAMPING = 0.1

# Motion input
MOTION_DEADZONE = 0.2
MOTION_FORCE_SCALE = 40.0
KEYBOARD_TILT = 0.5
TILT_AXIS = "tilt_x"
TAP_INTERVAL = 0.3

# HUD
HUD_FONT_SIZE = 25
SCORE_HUD_NAME = "scoreHud"
HEALTH_HUD_NAME = "healthHud"
SCORE_HUD_OFFSET = 40
HEALTH_HUD_OFFSET = 80
SCORE_HUD_COLOR = (0, 255, 0)
HEALTH_HUD_COLOR = (255, 0, 0)
