"""
Tilt Invaders entities
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from mini_arcade_core.spaces.geometry.size import Size2D
from mini_arcade_core.spaces.geometry.transform import Transform2D
from mini_arcade_core.spaces.math.vec2 import Vec2
from mini_arcade_core.spaces.physics.kinematics2d import Kinematic2D

from tilt_invaders.constants import (
    INVADER_SIZE,
    SHIP_COLOR,
    SHIP_LINEAR_DAMPING,
    SHIP_MASS,
    SHIP_SIZE,
)

Color = tuple[int, int, int]


def centered(x: float, y: float, size: tuple[int, int]) -> Transform2D:
    """Transform centred on ``(x, y)``."""
    return Transform2D(center=Vec2(float(x), float(y)), size=Size2D(*size))


class InvaderType(str, Enum):
    """
    Invader type. Only decides the color; every invader shares INVADER_SIZE.
    """

    A = "A"
    B = "B"
    C = "C"

    @property
    def color(self) -> Color:
        return _INVADER_COLORS[self]

    @classmethod
    def for_row(cls, row: int) -> InvaderType:
        """Round robin over the three types, one type per row."""
        return (cls.A, cls.B, cls.C)[row % 3]


_INVADER_COLORS: dict[InvaderType, Color] = {
    InvaderType.A: (255, 0, 0),
    InvaderType.B: (0, 255, 0),
    InvaderType.C: (0, 0, 255),
}


@dataclass
class Node:
    """
    Anything placed in the scene. ``transform.center`` is its centre.
    """

    transform: Transform2D

    @property
    def position(self) -> Vec2:
        return self.transform.center

    @property
    def size(self) -> Size2D:
        return self.transform.size

    @property
    def min_x(self) -> float:
        return self.position.x - self.size.width / 2

    @property
    def max_x(self) -> float:
        return self.position.x + self.size.width / 2

    @property
    def min_y(self) -> float:
        return self.position.y - self.size.height / 2

    @property
    def max_y(self) -> float:
        return self.position.y + self.size.height / 2

    def to_rect_tuple(self) -> tuple[int, int, int, int]:
        """Top-left corner and size, as the backend draws rectangles."""
        return (
            int(self.min_x),
            int(self.min_y),
            int(self.size.width),
            int(self.size.height),
        )


@dataclass
class Invader(Node):
    """
    Invader entity
    """

    type: InvaderType = InvaderType.A
    row: int = 0
    col: int = 0

    @classmethod
    def at(cls, x: float, y: float, **kwargs) -> Invader:
        return cls(transform=centered(x, y, INVADER_SIZE), **kwargs)

    @property
    def color(self) -> Color:
        return self.type.color


@dataclass
class Ship(Node):
    """
    Ship entity. Forces go into ``body.accel`` and are cleared after each
    physics step.
    """

    color: Color = SHIP_COLOR
    mass: float = SHIP_MASS
    linear_damping: float = SHIP_LINEAR_DAMPING
    body: Kinematic2D | None = None  # set after world init

    @classmethod
    def at(cls, x: float, y: float, **kwargs) -> Ship:
        return cls(transform=centered(x, y, SHIP_SIZE), **kwargs)

    def apply_force(self, force: Vec2):
        if self.body is None:
            return
        self.body.accel += force * (1.0 / self.mass)

    def step(self, dt: float, bounds: tuple[float, float] | None = None):
        """
        Integrate one frame of the body and move the ship.

        :param dt: Seconds since the previous step
        :type dt: float

        :param bounds: Scene (width, height); the ship is kept inside it
        :type bounds: tuple[float, float] | None
        """
        body = self.body
        if body is None:
            return

        if dt > 0:
            body.step(self.transform, dt)
            body.velocity *= max(0.0, 1.0 - self.linear_damping * dt)
            if bounds is not None:
                self._keep_inside(bounds)
        body.accel = Vec2(0.0, 0.0)

    def _keep_inside(self, bounds: tuple[float, float]):
        vw, vh = bounds
        half_w, half_h = self.size.width / 2, self.size.height / 2
        center = self.transform.center

        x = max(half_w, min(vw - half_w, center.x))
        y = max(half_h, min(vh - half_h, center.y))
        if x != center.x:
            self.body.velocity.x = 0.0
        if y != center.y:
            self.body.velocity.y = 0.0
        center.x, center.y = x, y


@dataclass
class HudLabel:
    """
    HUD text label, centred on ``position``.
    """

    name: str
    position: Vec2
    color: Color
    font_size: int
    text: str = ""
