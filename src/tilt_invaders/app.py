"""
Main application for Tilt Invaders using mini-arcade-core and pygame backend.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from mini_arcade_core import run_game  # pyright: ignore[reportMissingImports]
from mini_arcade_core.utils import logger
from mini_arcade_core.utils.logging import configure_logging

# Justification: in editable installs, this module is provided by the package.
# pylint: disable=no-name-in-module
from mini_arcade_pygame_backend import (  # pyright: ignore[reportMissingImports]
    PygameBackend,
    PygameBackendSettings,
)

from tilt_invaders.constants import (
    BACKGROUND_COLOR,
    FPS,
    KEYBOARD_TILT,
    TAP_INTERVAL,
    TILT_AXIS,
    WINDOW_SIZE,
    WINDOW_TITLE,
)

# pylint: enable=no-name-in-module


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    w_width, w_height = WINDOW_SIZE
    parser = argparse.ArgumentParser(
        prog="tilt-invaders",
        description="Space Invaders style scene steered by tilt input.",
    )
    parser.add_argument("--width", type=_positive_int, default=w_width)
    parser.add_argument("--height", type=_positive_int, default=w_height)
    parser.add_argument("--fps", type=_positive_int, default=FPS)
    parser.add_argument(
        "--no-keyboard-tilt",
        action="store_true",
        help="only take tilt from the input axis",
    )
    parser.add_argument("--debug", action="store_true", help="debug logging")
    return parser


def run(argv: Sequence[str] | None = None):
    """
    Main entry point for Tilt Invaders.

    - Auto-discovers scenes from the `tilt_invaders.scenes` package.
    - Configures the pygame backend window with the given dimensions and a
      black background.
    - Passes the tilt options to the scene through the gameplay controls.
    - Runs the game with the initial scene set to "tilt_invaders".
    """
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.debug else logging.INFO)

    # NOTE: Kept as plain dictionaries so the same shape can later come
    # from a config file.
    settings_data = {
        "window": {
            "width": args.width,
            "height": args.height,
            "title": WINDOW_TITLE,
            "high_dpi": False,
            "resizable": True,
        },
        "renderer": {"background_color": BACKGROUND_COLOR},
        "audio": {
            "enable": False,
        },
    }
    backend_settings = PygameBackendSettings.from_dict(settings_data)
    backend = PygameBackend(settings=backend_settings)

    engine_config = {
        "fps": args.fps,
        "virtual_resolution": (args.width, args.height),
    }
    gameplay_config = {
        "controls": {
            "tilt": {
                "keyboard_tilt": (
                    None if args.no_keyboard_tilt else KEYBOARD_TILT
                ),
                "axis": TILT_AXIS,
                "tap_interval": TAP_INTERVAL,
            }
        }
    }

    logger.info("Starting Tilt Invaders...")
    logger.info(backend_settings.to_dict())
    run_game(
        engine_config=engine_config,
        backend=backend,
        scene_config={
            "initial_scene": "tilt_invaders",
            "discover_packages": ["tilt_invaders.scenes"],
        },
        gameplay_config=gameplay_config,
    )


if __name__ == "__main__":
    run()
