"""Tests for the invader movement state machine."""

import pytest
from conftest import make_invader

from tilt_invaders.movement import (
    InvaderMovement,
    InvaderMovementDirection,
    determine_direction,
    translate_invaders,
)

SCENE_WIDTH = 200.0


class TestDetermineDirection:
    """Test direction transitions."""

    def test_right_away_from_edge_keeps_direction(self):
        invaders = [make_invader(100.0)]
        direction = determine_direction(
            InvaderMovementDirection.RIGHT, invaders, SCENE_WIDTH
        )
        assert direction is InvaderMovementDirection.RIGHT

    def test_right_at_edge_turns_down_then_left(self):
        # 24 wide: max_x == 199 == width - 1
        invaders = [make_invader(100.0), make_invader(187.0)]
        direction = determine_direction(
            InvaderMovementDirection.RIGHT, invaders, SCENE_WIDTH
        )
        assert direction is InvaderMovementDirection.DOWN_THEN_LEFT

    def test_right_just_short_of_edge(self):
        invaders = [make_invader(186.9)]
        direction = determine_direction(
            InvaderMovementDirection.RIGHT, invaders, SCENE_WIDTH
        )
        assert direction is InvaderMovementDirection.RIGHT

    def test_left_at_edge_turns_down_then_right(self):
        # min_x == 1
        invaders = [make_invader(100.0), make_invader(13.0)]
        direction = determine_direction(
            InvaderMovementDirection.LEFT, invaders, SCENE_WIDTH
        )
        assert direction is InvaderMovementDirection.DOWN_THEN_RIGHT

    def test_left_ignores_right_edge(self):
        invaders = [make_invader(190.0)]
        direction = determine_direction(
            InvaderMovementDirection.LEFT, invaders, SCENE_WIDTH
        )
        assert direction is InvaderMovementDirection.LEFT

    @pytest.mark.parametrize(
        "current, expected",
        [
            (
                InvaderMovementDirection.DOWN_THEN_LEFT,
                InvaderMovementDirection.LEFT,
            ),
            (
                InvaderMovementDirection.DOWN_THEN_RIGHT,
                InvaderMovementDirection.RIGHT,
            ),
        ],
    )
    def test_down_states_collapse_unconditionally(self, current, expected):
        invaders = [make_invader(100.0)]
        assert determine_direction(current, invaders, SCENE_WIDTH) is expected

    def test_none_is_idle(self):
        invaders = [make_invader(187.0), make_invader(13.0)]
        direction = determine_direction(
            InvaderMovementDirection.NONE, invaders, SCENE_WIDTH
        )
        assert direction is InvaderMovementDirection.NONE

    def test_every_state_has_a_next_state(self):
        invaders = [make_invader(100.0)]
        for current in InvaderMovementDirection:
            assert isinstance(
                determine_direction(current, invaders, SCENE_WIDTH),
                InvaderMovementDirection,
            )


class TestTranslate:
    """Test how each direction moves the formation."""

    def test_right_and_left(self):
        invaders = [make_invader(50.0), make_invader(80.0)]
        translate_invaders(invaders, InvaderMovementDirection.RIGHT, 10.0)
        assert [i.position.x for i in invaders] == [60.0, 90.0]

        translate_invaders(invaders, InvaderMovementDirection.LEFT, 10.0)
        assert [i.position.x for i in invaders] == [50.0, 80.0]
        assert all(i.position.y == 100.0 for i in invaders)

    @pytest.mark.parametrize(
        "direction",
        [
            InvaderMovementDirection.DOWN_THEN_LEFT,
            InvaderMovementDirection.DOWN_THEN_RIGHT,
        ],
    )
    def test_down_states_only_move_down(self, direction):
        invader = make_invader(50.0, 100.0)
        translate_invaders([invader], direction, 10.0)
        # y grows downward on screen
        assert (invader.position.x, invader.position.y) == (50.0, 110.0)

    def test_none_does_not_move(self):
        invader = make_invader(50.0, 100.0)
        translate_invaders([invader], InvaderMovementDirection.NONE, 10.0)
        assert (invader.position.x, invader.position.y) == (50.0, 100.0)


class TestInvaderMovement:
    """Test the gated movement tick."""

    def test_turn_then_descend_at_right_edge(self):
        invader = make_invader(187.0, 100.0)
        movement = InvaderMovement()

        assert movement.advance(1.0, [invader], SCENE_WIDTH)
        assert movement.direction is InvaderMovementDirection.DOWN_THEN_LEFT
        assert (invader.position.x, invader.position.y) == (187.0, 110.0)

        assert movement.advance(2.0, [invader], SCENE_WIDTH)
        assert movement.direction is InvaderMovementDirection.LEFT
        assert (invader.position.x, invader.position.y) == (177.0, 110.0)

    def test_turn_then_descend_at_left_edge(self):
        invader = make_invader(13.0, 100.0)
        movement = InvaderMovement(direction=InvaderMovementDirection.LEFT)

        movement.advance(1.0, [invader], SCENE_WIDTH)
        assert movement.direction is InvaderMovementDirection.DOWN_THEN_RIGHT
        assert (invader.position.x, invader.position.y) == (13.0, 110.0)

        movement.advance(2.0, [invader], SCENE_WIDTH)
        assert movement.direction is InvaderMovementDirection.RIGHT
        assert (invader.position.x, invader.position.y) == (23.0, 110.0)

    def test_calls_within_interval_are_noops(self):
        invader = make_invader(50.0, 100.0)
        movement = InvaderMovement()

        assert not movement.advance(0.5, [invader], SCENE_WIDTH)
        assert movement.advance(1.0, [invader], SCENE_WIDTH)
        assert not movement.advance(1.99, [invader], SCENE_WIDTH)

        assert invader.position.x == 60.0
        assert movement.direction is InvaderMovementDirection.RIGHT
        assert movement.time_of_last_move == 1.0

    def test_interval_measured_from_last_move(self):
        invader = make_invader(50.0, 100.0)
        movement = InvaderMovement()

        movement.advance(1.5, [invader], SCENE_WIDTH)
        assert not movement.advance(2.4, [invader], SCENE_WIDTH)
        assert movement.advance(2.5, [invader], SCENE_WIDTH)
        assert invader.position.x == 70.0

    def test_full_sweep_reaches_right_edge_and_returns(self):
        invader = make_invader(100.0, 100.0)
        movement = InvaderMovement()
        seen = []
        for t in range(1, 20):
            movement.advance(float(t), [invader], SCENE_WIDTH)
            seen.append(movement.direction)

        first_turn = seen.index(InvaderMovementDirection.DOWN_THEN_LEFT)
        assert seen[first_turn + 1] is InvaderMovementDirection.LEFT
        assert seen.count(InvaderMovementDirection.DOWN_THEN_LEFT) == 1
        assert invader.position.y == 110.0

    def test_edge_margin_widens_contact(self):
        # max_x == 190: no contact at the default margin of 1
        invader = make_invader(178.0, 100.0)
        movement = InvaderMovement(edge_margin=10.0)
        movement.advance(1.0, [invader], SCENE_WIDTH)
        assert movement.direction is InvaderMovementDirection.DOWN_THEN_LEFT

        invader = make_invader(178.0, 100.0)
        movement = InvaderMovement()
        movement.advance(1.0, [invader], SCENE_WIDTH)
        assert movement.direction is InvaderMovementDirection.RIGHT
