"""Game session state structures."""

import jax
import jax.numpy as jnp
from flax.struct import PyTreeNode

from flappax.constants import (
    SCREEN_WIDTH, SCREEN_HEIGHT, GLYPH_SPACE, WHITE, BLACK, PLAYER_START_X, PLAYER_START_Y
)


class Canvas(PyTreeNode):
    """Character grid indexed [col, row]: glyph code plus palette colours."""
    glyphs: jnp.ndarray
    fg: jnp.ndarray
    bg: jnp.ndarray


class PlayerState(PyTreeNode):
    """Player kinematics. ``x`` counts simulated steps, so it is an exact integer."""
    x: jnp.ndarray
    y: jnp.ndarray
    velocity: jnp.ndarray


class ObstacleState(PyTreeNode):
    """A single obstacle column with a passable gap."""
    x: jnp.ndarray
    gap_y: jnp.ndarray
    size: jnp.ndarray


class GameState(PyTreeNode):
    """Whole game session: player, the two obstacle slots, score, timing and mode."""
    rng: jax.random.PRNGKey
    player: PlayerState
    obstacle1: ObstacleState
    obstacle2: ObstacleState
    score: jnp.ndarray
    frame_time: jnp.ndarray
    mode: jnp.ndarray
    quitting: jnp.ndarray
    canvas: Canvas


def create_canvas() -> Canvas:
    """Blank grid: spaces, white on black."""
    shape = (SCREEN_WIDTH, SCREEN_HEIGHT)
    return Canvas(
        glyphs=jnp.full(shape, GLYPH_SPACE, dtype=jnp.uint8),
        fg=jnp.full(shape, WHITE, dtype=jnp.uint8),
        bg=jnp.full(shape, BLACK, dtype=jnp.uint8),
    )


def create_player(x: int = PLAYER_START_X, y: float = PLAYER_START_Y, velocity: float = 0.0) -> PlayerState:
    return PlayerState(
        x=jnp.asarray(x, dtype=jnp.int32),
        y=jnp.asarray(y, dtype=jnp.float32),
        velocity=jnp.asarray(velocity, dtype=jnp.float32),
    )
