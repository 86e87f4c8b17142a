"""
Tilt Invaders: a Space Invaders style scene steered by tilt input.
"""

__version__ = "0.1.0"
