"""
Invader movement: a five state direction machine advanced on edge contact.

The formation moves one step per movement tick. When an invader touches a
side edge, the formation first moves down for one tick (``DOWN_THEN_*``)
and then continues sideways in the opposite direction.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from mini_arcade_core.utils import logger

from tilt_invaders.constants import EDGE_MARGIN, INVADER_STEP, TIME_PER_MOVE
from tilt_invaders.entities import Invader


class InvaderMovementDirection(str, Enum):
    RIGHT = "right"
    LEFT = "left"
    DOWN_THEN_RIGHT = "down_then_right"
    DOWN_THEN_LEFT = "down_then_left"
    NONE = "none"  # idle, never left once entered


def determine_direction(
    direction: InvaderMovementDirection,
    invaders: Sequence[Invader],
    scene_width: float,
    margin: float = EDGE_MARGIN,
) -> InvaderMovementDirection:
    """
    Resolve the direction for the next movement tick.

    Invaders are scanned in creation order and the scan stops at the first
    one that triggers a transition.

    :param direction: Current direction
    :type direction: InvaderMovementDirection

    :param invaders: Invaders in creation order
    :type invaders: Sequence[Invader]

    :param scene_width: Width of the scene
    :type scene_width: float

    :param margin: Distance from a side edge that counts as contact
    :type margin: float

    :return: The direction to move in this tick
    :rtype: InvaderMovementDirection
    """
    for invader in invaders:
        if direction is InvaderMovementDirection.RIGHT:
            if invader.max_x >= scene_width - margin:
                return InvaderMovementDirection.DOWN_THEN_LEFT
        elif direction is InvaderMovementDirection.LEFT:
            if invader.min_x <= margin:
                return InvaderMovementDirection.DOWN_THEN_RIGHT
        elif direction is InvaderMovementDirection.DOWN_THEN_LEFT:
            return InvaderMovementDirection.LEFT
        elif direction is InvaderMovementDirection.DOWN_THEN_RIGHT:
            return InvaderMovementDirection.RIGHT
        else:
            break

    return direction


def translate_invaders(
    invaders: Sequence[Invader],
    direction: InvaderMovementDirection,
    step: float = INVADER_STEP,
):
    """Move every invader one step in ``direction``."""
    if direction is InvaderMovementDirection.RIGHT:
        dx, dy = step, 0.0
    elif direction is InvaderMovementDirection.LEFT:
        dx, dy = -step, 0.0
    elif direction in (
        InvaderMovementDirection.DOWN_THEN_LEFT,
        InvaderMovementDirection.DOWN_THEN_RIGHT,
    ):
        # the sideways part of these states happens on the next tick
        dx, dy = 0.0, step
    else:
        return

    for invader in invaders:
        invader.position.x += dx
        invader.position.y += dy


@dataclass
class InvaderMovement:
    """
    Movement state of the invader formation.
    """

    direction: InvaderMovementDirection = InvaderMovementDirection.RIGHT
    time_of_last_move: float = 0.0
    time_per_move: float = TIME_PER_MOVE
    step: float = INVADER_STEP
    edge_margin: float = EDGE_MARGIN

    def is_due(self, current_time: float) -> bool:
        return current_time - self.time_of_last_move >= self.time_per_move

    def advance(
        self,
        current_time: float,
        invaders: Sequence[Invader],
        scene_width: float,
    ) -> bool:
        """
        Run one movement tick if the move interval has elapsed.

        :param current_time: Frame time in seconds
        :type current_time: float

        :param invaders: Invaders in creation order
        :type invaders: Sequence[Invader]

        :param scene_width: Width of the scene
        :type scene_width: float

        :return: True if the invaders were moved
        :rtype: bool
        """
        if not self.is_due(current_time):
            return False

        proposed = determine_direction(
            self.direction, invaders, scene_width, margin=self.edge_margin
        )
        if proposed is not self.direction:
            logger.debug(
                "Invaders direction "
                f"{self.direction.value} -> {proposed.value}"
            )
            self.direction = proposed

        translate_invaders(invaders, self.direction, self.step)
        self.time_of_last_move = current_time
        return True
