"""Test configuration and fixtures for the Tilt Invaders tests."""

from types import SimpleNamespace

import pytest
from mini_arcade_core.engine.commands import CommandQueue
from mini_arcade_core.engine.game_config import EngineConfig
from mini_arcade_core.engine.gameplay_settings import GamePlaySettings
from mini_arcade_core.runtime.context import RuntimeContext
from mini_arcade_core.runtime.input_frame import InputFrame

from tilt_invaders.entities import Invader
from tilt_invaders.motion import MotionManager
from tilt_invaders.scenes.game_scene import TiltInvadersScene


class FakeWindow:
    """Window service reporting a fixed virtual canvas size."""

    def __init__(self, width, height):
        self.virtual_size = (width, height)

    def get_virtual_size(self):
        return self.virtual_size


class RecordingBackend:
    """Backend stand-in that records draw calls instead of drawing."""

    def __init__(self):
        self.rects = []
        self.texts = []
        self.render = SimpleNamespace(draw_rect=self._draw_rect)
        self.text = SimpleNamespace(measure=self._measure, draw=self._draw)

    def _draw_rect(self, x, y, w, h, color=(255, 255, 255)):
        self.rects.append(((x, y, w, h), color))

    @staticmethod
    def _measure(text, font_size=None, font_name=None):
        return (10 * len(text), font_size or 24)

    def _draw(self, x, y, text, color=(255, 255, 255), font_size=None, **_):
        self.texts.append(((x, y), text, color))


def make_context(width=800, height=600, gameplay=None):
    """Runtime context with just the services the scene uses."""
    services = SimpleNamespace(
        window=FakeWindow(width, height),
        capture=SimpleNamespace(replay_recording=False, replay_playing=False),
    )
    return RuntimeContext(
        services=services,
        config=EngineConfig(virtual_resolution=(width, height)),
        settings=GamePlaySettings.from_dict(gameplay),
        command_queue=CommandQueue(),
    )


def make_frame(index=0, dt=0.0, **kwargs):
    """Input frame with nothing pressed unless given."""
    return InputFrame(frame_index=index, dt=dt, **kwargs)


def tick(scene, dt, **kwargs):
    """Advance the scene one engine tick and return the render packet."""
    return scene.tick(make_frame(dt=dt, **kwargs), dt)


@pytest.fixture
def motion():
    """Motion manager that already accepts samples."""
    manager = MotionManager()
    manager.start_accelerometer_updates()
    return manager


@pytest.fixture
def scene():
    """An 800x600 scene that has been entered."""
    game_scene = TiltInvadersScene(make_context())
    game_scene.on_enter()
    return game_scene


def make_invader(x, y=100.0):
    """Helper to place a single invader centred on (x, y)."""
    return Invader.at(x, y)
