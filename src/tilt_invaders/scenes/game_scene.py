"""
Tilt Invaders Scene
"""

from __future__ import annotations

from dataclasses import dataclass, field

from mini_arcade_core.backend import Backend
from mini_arcade_core.runtime.context import RuntimeContext
from mini_arcade_core.scenes.autoreg import (  # pyright: ignore[reportMissingImports]
    register_scene,
)
from mini_arcade_core.scenes.sim_scene import (  # pyright: ignore[reportMissingImports]
    BaseIntent,
    BaseTickContext,
    BaseWorld,
    Drawable,
    DrawCall,
    SimScene,
)
from mini_arcade_core.scenes.systems.builtins import (
    BaseRenderSystem,
    InputIntentSystem,
)
from mini_arcade_core.scenes.systems.phases import SystemPhase
from mini_arcade_core.spaces.math.vec2 import Vec2
from mini_arcade_core.spaces.physics.kinematics2d import Kinematic2D
from mini_arcade_core.utils import logger

from tilt_invaders.constants import (
    HEALTH_HUD_COLOR,
    HEALTH_HUD_NAME,
    HEALTH_HUD_OFFSET,
    HUD_FONT_SIZE,
    INVADER_COL_COUNT,
    INVADER_GRID_SPACING,
    INVADER_ROW_COUNT,
    INVADER_SIZE,
    KEYBOARD_TILT,
    MOTION_DEADZONE,
    MOTION_FORCE_SCALE,
    SCORE_HUD_COLOR,
    SCORE_HUD_NAME,
    SCORE_HUD_OFFSET,
    SHIP_SIZE,
    TAP_INTERVAL,
    TILT_AXIS,
)
from tilt_invaders.entities import HudLabel, Invader, InvaderType, Ship
from tilt_invaders.motion import (
    AccelerometerData,
    MotionManager,
    TapRecognizer,
    apply_motion,
)
from tilt_invaders.movement import InvaderMovement


@dataclass
class GameWorld(BaseWorld):
    """
    Everything the frame update reads and writes.
    """

    viewport: tuple[float, float]
    invaders: list[Invader] = field(default_factory=list)
    ship: Ship | None = None
    hud: dict[str, HudLabel] = field(default_factory=dict)
    movement: InvaderMovement = field(default_factory=InvaderMovement)
    # filled by single taps, not consumed yet
    tap_queue: list[int] = field(default_factory=list)
    score: int = 0
    ship_health: float = 1.0
    elapsed: float = 0.0  # scene clock, sum of frame dts


@dataclass
class GameIntent(BaseIntent):
    """
    Tilt Invaders Intent
    """

    tilt: AccelerometerData | None = None
    tap_count: int = 0  # 0 when nothing was released this frame


@dataclass
class GameTickContext(BaseTickContext[GameWorld, GameIntent]):
    """
    Tilt Invaders Tick Context
    """


def queue_tap(world: GameWorld, tap_count: int):
    """Only single taps reach the tap queue."""
    if tap_count == 1:
        world.tap_queue.append(1)


@dataclass
class SceneClockSystem:
    """
    Advance the scene clock that invader movement is timed against.
    """

    name: str = "tilt_invaders_clock"
    phase: int = SystemPhase.INPUT
    order: int = 0

    def step(self, ctx: GameTickContext):
        ctx.world.elapsed += max(0.0, ctx.dt)


@dataclass
class ViewportSystem:
    """
    Keep ``world.viewport`` equal to the virtual canvas size.

    A resized window only rescales the canvas, so the viewport changes
    when the virtual resolution does.
    """

    name: str = "tilt_invaders_viewport"
    phase: int = SystemPhase.INPUT
    order: int = 5

    window: object | None = None

    def step(self, ctx: GameTickContext):
        if self.window is None:
            return
        vw, vh = self.window.get_virtual_size()
        viewport = (float(vw), float(vh))
        if viewport != ctx.world.viewport:
            logger.debug(f"Viewport {ctx.world.viewport} -> {viewport}")
            ctx.world.viewport = viewport


@dataclass
class GameInputSystem(InputIntentSystem):
    """
    Turn the input frame into a tilt sample and a tap count.
    """

    name: str = "tilt_invaders_input"

    motion: MotionManager = field(default_factory=MotionManager)
    taps: TapRecognizer = field(default_factory=TapRecognizer)

    def build_intent(self, ctx: GameTickContext) -> GameIntent:
        self.motion.read_input(ctx.input_frame)

        tap_count = 0
        if TapRecognizer.is_tap(ctx.input_frame):
            tap_count = self.taps.release(ctx.world.elapsed)
            logger.debug(f"Tap released, count {tap_count}")

        return GameIntent(
            tilt=self.motion.accelerometer_data, tap_count=tap_count
        )


@dataclass
class MotionSystem:
    """
    Push the ship according to the latest tilt sample.
    """

    name: str = "tilt_invaders_motion"
    phase: int = SystemPhase.CONTROL
    order: int = 10

    deadzone: float = MOTION_DEADZONE
    force_scale: float = MOTION_FORCE_SCALE

    def step(self, ctx: GameTickContext):
        if ctx.intent is None:
            return
        apply_motion(
            ctx.world.ship,
            ctx.intent.tilt,
            deadzone=self.deadzone,
            force_scale=self.force_scale,
        )


@dataclass
class TapSystem:
    """
    Queue single taps released this frame.
    """

    name: str = "tilt_invaders_taps"
    phase: int = SystemPhase.CONTROL
    order: int = 20

    def step(self, ctx: GameTickContext):
        if ctx.intent is None or not ctx.intent.tap_count:
            return
        queue_tap(ctx.world, ctx.intent.tap_count)


@dataclass
class InvaderMovementSystem:
    """
    Move the invader formation once per movement interval.
    """

    name: str = "tilt_invaders_invaders"
    phase: int = SystemPhase.SIMULATION
    order: int = 30

    def step(self, ctx: GameTickContext):
        vw, _ = ctx.world.viewport
        ctx.world.movement.advance(ctx.world.elapsed, ctx.world.invaders, vw)


@dataclass
class ShipPhysicsSystem:
    """
    Integrate the ship body and keep the ship inside the viewport.
    """

    name: str = "tilt_invaders_ship_physics"
    phase: int = SystemPhase.SIMULATION
    order: int = 40

    def step(self, ctx: GameTickContext):
        ship = ctx.world.ship
        if ship is None:
            return
        ship.step(ctx.dt, bounds=ctx.world.viewport)


@dataclass
class HudSystem:
    """
    Refresh the score and health labels from the world.
    """

    name: str = "tilt_invaders_hud"
    phase: int = SystemPhase.PRESENTATION
    order: int = 90

    def step(self, ctx: GameTickContext):
        w = ctx.world
        score = w.hud.get(SCORE_HUD_NAME)
        if score is not None:
            score.text = format_score(w.score)
        health = w.hud.get(HEALTH_HUD_NAME)
        if health is not None:
            health.text = format_health(w.ship_health)


def format_score(score: int) -> str:
    """Zero padded to four digits, e.g. ``Score: 0042``."""
    return f"Score: {score:04d}"


def format_health(health: float) -> str:
    """Health fraction as a percentage, e.g. ``Health: 100.0%``."""
    return f"Health: {health * 100.0:.1f}%"


class DrawInvaders(Drawable):
    """
    Drawable Invaders, one rectangle in the type's color each.
    """

    def draw(self, backend: Backend, ctx: GameTickContext):
        for invader in ctx.world.invaders:
            backend.render.draw_rect(
                *invader.to_rect_tuple(), color=invader.color
            )


class DrawShip(Drawable):
    """
    Drawable Ship
    """

    def draw(self, backend: Backend, ctx: GameTickContext):
        ship = ctx.world.ship
        if ship is None:
            return
        backend.render.draw_rect(*ship.to_rect_tuple(), color=ship.color)


class DrawHud(Drawable):
    """
    Drawable HUD labels, centred on their position.
    """

    def draw(self, backend: Backend, ctx: GameTickContext):
        for label in ctx.world.hud.values():
            if not label.text:
                continue
            tw, th = backend.text.measure(label.text, font_size=label.font_size)
            backend.text.draw(
                int(label.position.x - tw / 2),
                int(label.position.y - th / 2),
                label.text,
                color=label.color,
                font_size=label.font_size,
            )


@dataclass
class GameRenderSystem(BaseRenderSystem):
    """
    Render the Tilt Invaders world.
    """

    name: str = "tilt_invaders_render"
    order: int = 100

    def step(self, ctx: GameTickContext):
        """Render the Tilt Invaders world."""
        ctx.draw_ops = [
            DrawCall(DrawInvaders(), ctx=ctx),
            DrawCall(DrawShip(), ctx=ctx),
            DrawCall(DrawHud(), ctx=ctx),
        ]
        super().step(ctx)


@register_scene("tilt_invaders")
class TiltInvadersScene(SimScene[GameTickContext, GameWorld]):
    """
    The invaders scene: bootstraps its content once, then advances on
    every engine tick.

    Tilt options are read from the ``tilt`` entry of the gameplay
    ``controls`` (``keyboard_tilt``, ``axis``, ``tap_interval``).
    """

    world: GameWorld
    tick_context_type = GameTickContext

    def __init__(self, ctx: RuntimeContext):
        super().__init__(ctx)
        controls = getattr(ctx.settings, "controls", None) or {}
        tilt = controls.get("tilt") or {}
        self.motion = MotionManager(
            keyboard_tilt=tilt.get("keyboard_tilt", KEYBOARD_TILT),
            axis=tilt.get("axis", TILT_AXIS),
        )
        self.taps = TapRecognizer(
            interval=float(tilt.get("tap_interval", TAP_INTERVAL))
        )
        self.content_created = False

    def on_enter(self):
        self.did_move()

    def on_exit(self):
        self.motion.stop_accelerometer_updates()

    # Scene Setup and Content Creation

    def did_move(self):
        """
        Scene became active. Content is only created the first time;
        accelerometer updates (re)start on every entry.
        """
        if not self.content_created:
            # Justification: window typer is protocol, mypy can't infer correctly
            # pylint: disable=assignment-from-no-return
            vw, vh = self.context.services.window.get_virtual_size()
            # pylint: enable=assignment-from-no-return
            self.world = GameWorld(
                entities=[], viewport=(float(vw), float(vh))
            )
            self.create_content()
            self.systems.extend(
                [
                    SceneClockSystem(),
                    ViewportSystem(window=self.context.services.window),
                    GameInputSystem(motion=self.motion, taps=self.taps),
                    MotionSystem(),
                    TapSystem(),
                    InvaderMovementSystem(),
                    ShipPhysicsSystem(),
                    HudSystem(),
                    GameRenderSystem(),
                ]
            )
            self.content_created = True
        self.motion.start_accelerometer_updates()

    def create_content(self):
        logger.debug("Creating scene content")
        self.setup_invaders()
        self.setup_ship()
        self.setup_hud()

    def setup_invaders(self):
        vw, vh = self.world.viewport
        inv_w, inv_h = INVADER_SIZE
        gap_x, _ = INVADER_GRID_SPACING
        origin = Vec2(vw / 3, vh / 2)

        for row in range(INVADER_ROW_COUNT):
            invader_type = InvaderType.for_row(row)
            # rows stack upward from the origin
            y = origin.y - row * (inv_h * 2)
            for col in range(1, INVADER_COL_COUNT):
                x = origin.x + (col - 1) * (inv_w + gap_x)
                self.world.invaders.append(
                    Invader.at(
                        x, y, type=invader_type, row=row, col=col - 1
                    )
                )

        logger.debug(f"Invaders count: {len(self.world.invaders)}")

    def setup_ship(self):
        vw, vh = self.world.viewport
        self.world.ship = Ship.at(
            vw / 2, vh - SHIP_SIZE[1] / 2, body=Kinematic2D()
        )

    def setup_hud(self):
        vw, _ = self.world.viewport

        self.world.hud[SCORE_HUD_NAME] = HudLabel(
            name=SCORE_HUD_NAME,
            position=Vec2(vw / 2, SCORE_HUD_OFFSET + HUD_FONT_SIZE / 2),
            color=SCORE_HUD_COLOR,
            font_size=HUD_FONT_SIZE,
            text=format_score(self.world.score),
        )
        self.world.hud[HEALTH_HUD_NAME] = HudLabel(
            name=HEALTH_HUD_NAME,
            position=Vec2(vw / 2, HEALTH_HUD_OFFSET + HUD_FONT_SIZE / 2),
            color=HEALTH_HUD_COLOR,
            font_size=HUD_FONT_SIZE,
            text=format_health(self.world.ship_health),
        )

    # User Tap Helpers

    def touches_ended(self, tap_count: int):
        queue_tap(self.world, tap_count)
