"""Tests for player kinematics."""

import jax.numpy as jnp

from flappax.player import advance, flap
from flappax.state import create_player
from flappax.constants import TERMINAL_VELOCITY, FLAP_VELOCITY, PLAYER_START_X, PLAYER_START_Y


class TestAdvance:
    """Test gravity and forward motion."""

    def test_single_step(self):
        player = advance(create_player())

        assert player.x == PLAYER_START_X + 1
        assert jnp.isclose(player.velocity, 0.35)
        assert jnp.isclose(player.y, PLAYER_START_Y + 0.35)

    def test_velocity_monotonic_and_capped(self):
        """Without flaps velocity never decreases and never exceeds terminal velocity."""
        player = create_player(velocity=FLAP_VELOCITY)
        previous = float(player.velocity)

        for _ in range(40):
            player = advance(player)
            velocity = float(player.velocity)
            assert velocity >= previous
            assert velocity <= TERMINAL_VELOCITY
            previous = velocity

        assert player.velocity == TERMINAL_VELOCITY

    def test_cap_reached_early(self):
        player = create_player()
        for _ in range(6):
            player = advance(player)
        assert player.velocity == TERMINAL_VELOCITY

    def test_x_advances_one_column_per_step(self):
        player = create_player()
        for i in range(1, 36):
            player = advance(player)
            assert player.x == PLAYER_START_X + i

    def test_y_never_negative(self):
        """Flapping at the top of the screen clamps y to zero."""
        player = create_player(y=1.0)
        for _ in range(10):
            player = advance(flap(player))
            assert player.y >= 0.0
        assert player.y == 0.0


class TestFlap:
    """Test the flap impulse."""

    def test_flap_sets_velocity(self):
        for velocity in [-2.0, -0.5, 0.0, 1.3, 2.0]:
            player = flap(create_player(velocity=velocity))
            assert player.velocity == FLAP_VELOCITY

    def test_flap_does_not_stack(self):
        player = flap(flap(flap(create_player())))
        assert player.velocity == FLAP_VELOCITY

    def test_flap_keeps_position(self):
        player = create_player(x=12, y=30.5, velocity=1.0)
        flapped = flap(player)
        assert flapped.x == 12
        assert flapped.y == 30.5
