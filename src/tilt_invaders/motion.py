"""
Motion and tap input.

Desktop hardware has no accelerometer, so samples come from an input axis
(``TILT_AXIS``) when the backend reports one, or from the arrow keys.
"""

from __future__ import annotations

from dataclasses import dataclass

from mini_arcade_core.backend.keys import Key
from mini_arcade_core.runtime.input_frame import InputFrame
from mini_arcade_core.spaces.math.vec2 import Vec2
from mini_arcade_core.utils import logger

from tilt_invaders.constants import (
    KEYBOARD_TILT,
    MOTION_DEADZONE,
    MOTION_FORCE_SCALE,
    TAP_INTERVAL,
    TILT_AXIS,
)
from tilt_invaders.entities import Ship

_LEFT_KEYS = (Key.LEFT, Key.A)
_RIGHT_KEYS = (Key.RIGHT, Key.D)


@dataclass(frozen=True)
class AccelerometerData:
    x: float
    y: float = 0.0
    z: float = 0.0


class MotionManager:
    """
    Holds the most recently delivered accelerometer sample.

    Nothing is delivered until ``start_accelerometer_updates`` is called;
    until then ``accelerometer_data`` is None.
    """

    def __init__(
        self,
        keyboard_tilt: float | None = KEYBOARD_TILT,
        axis: str | None = TILT_AXIS,
    ):
        """
        :param keyboard_tilt: Acceleration emulated while an arrow key is
            held, or None to ignore the keyboard
        :type keyboard_tilt: float | None

        :param axis: Name of the input axis read as the x acceleration
        :type axis: str | None
        """
        self._keyboard_tilt = keyboard_tilt
        self._axis = axis
        self._active = False
        self._data: AccelerometerData | None = None

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def accelerometer_data(self) -> AccelerometerData | None:
        return self._data

    def start_accelerometer_updates(self):
        logger.debug("Starting accelerometer updates")
        self._active = True

    def stop_accelerometer_updates(self):
        logger.debug("Stopping accelerometer updates")
        self._active = False
        self._data = None

    def deliver(self, x: float, y: float = 0.0, z: float = 0.0):
        """Deliver a sample; ignored while updates are stopped."""
        if not self._active:
            return
        self._data = AccelerometerData(x=x, y=y, z=z)

    def read_input(self, input_frame: InputFrame) -> bool:
        """
        Deliver a sample from this frame's input, if it carries one.

        The axis wins over the keyboard. Without tilt input in the frame the
        previous sample is kept.

        :param input_frame: Input snapshot of the current frame
        :type input_frame: InputFrame

        :return: True if a sample was delivered
        :rtype: bool
        """
        if self._axis is not None and self._axis in input_frame.axes:
            self.deliver(float(input_frame.axes[self._axis]))
            return True

        if self._keyboard_tilt is None:
            return False

        touched = input_frame.keys_down | input_frame.keys_released
        if not any(key in touched for key in _LEFT_KEYS + _RIGHT_KEYS):
            return False

        left = any(key in input_frame.keys_down for key in _LEFT_KEYS)
        right = any(key in input_frame.keys_down for key in _RIGHT_KEYS)
        x = 0.0
        if right and not left:
            x = self._keyboard_tilt
        elif left and not right:
            x = -self._keyboard_tilt
        self.deliver(x)
        return True


def apply_motion(
    ship: Ship | None,
    data: AccelerometerData | None,
    deadzone: float = MOTION_DEADZONE,
    force_scale: float = MOTION_FORCE_SCALE,
) -> bool:
    """
    Push the ship sideways in proportion to the tilt.

    Nothing happens when the ship, its body or the sample is missing; the
    next frame tries again.

    :return: True if a force was applied
    :rtype: bool
    """
    if ship is None or ship.body is None or data is None:
        return False
    if abs(data.x) <= deadzone:
        return False

    logger.debug(f"Acceleration: {data.x}")
    ship.apply_force(Vec2(force_scale * data.x, 0.0))
    return True


class TapRecognizer:
    """
    Counts consecutive releases the way a touch screen reports tap counts.
    """

    def __init__(self, interval: float = TAP_INTERVAL):
        self.interval = interval
        self._count = 0
        self._last_release: float | None = None

    @staticmethod
    def is_tap(input_frame: InputFrame) -> bool:
        """A left mouse button or SPACE release (touches arrive as mouse)."""
        button = input_frame.buttons.get("mouse_left")
        if button is not None and button.released:
            return True
        return Key.SPACE in input_frame.keys_released

    def release(self, now: float) -> int:
        """
        Register a release at ``now`` and return its tap count.

        :param now: Time of the release in seconds
        :type now: float

        :return: 1 for a single tap, n for the n-th tap in a quick series
        :rtype: int
        """
        if (
            self._last_release is not None
            and now - self._last_release <= self.interval
        ):
            self._count += 1
        else:
            self._count = 1
        self._last_release = now
        return self._count
