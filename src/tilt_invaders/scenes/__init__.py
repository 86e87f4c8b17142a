"""
Tilt Invaders scenes
"""

from tilt_invaders.scenes.game_scene import GameWorld, TiltInvadersScene

__all__ = ["GameWorld", "TiltInvadersScene"]
