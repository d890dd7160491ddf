"""Player kinematics: gravity, forward motion and the flap impulse."""

import jax.numpy as jnp

from flappax.state import Canvas, PlayerState
from flappax.constants import GRAVITY, TERMINAL_VELOCITY, FLAP_VELOCITY, GLYPH_PLAYER, YELLOW, BLACK
from flappax.canvas import set_glyph


def advance(player: PlayerState) -> PlayerState:
    """One simulated step: accelerate, fall, move one column right, stay below the top edge."""
    velocity = jnp.minimum(player.velocity + GRAVITY, TERMINAL_VELOCITY)
    y = jnp.maximum(player.y + velocity, 0.0)
    return player.replace(x=player.x + 1, y=y, velocity=velocity)


def flap(player: PlayerState) -> PlayerState:
    """Override the current velocity with the upward impulse."""
    return player.replace(velocity=jnp.full_like(player.velocity, FLAP_VELOCITY))


def draw_player(canvas: Canvas, player: PlayerState) -> Canvas:
    """The player always sits in the leftmost column."""
    return set_glyph(canvas, 0, jnp.astype(player.y, jnp.int32), YELLOW, BLACK, GLYPH_PLAYER)
