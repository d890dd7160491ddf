"""Obstacle generation, drawing and collision."""

import jax
import jax.numpy as jnp

from flappax.state import Canvas, ObstacleState, PlayerState
from flappax.constants import (
    GAP_Y_MIN, GAP_Y_MAX, MAX_GAP_SIZE, MIN_GAP_SIZE, GLYPH_OBSTACLE, RED, BLACK
)
from flappax.canvas import paint, xx, yy


def gap_size(score) -> jnp.ndarray:
    """Gap narrows by one row per point scored, down to MIN_GAP_SIZE."""
    return jnp.maximum(MIN_GAP_SIZE, MAX_GAP_SIZE - jnp.asarray(score, dtype=jnp.int32))


def create_obstacle(rng: jax.random.PRNGKey, x, score) -> ObstacleState:
    """New obstacle at world column ``x`` with a random gap sized for ``score``."""
    gap_y = jax.random.uniform(rng, (), jnp.float32, GAP_Y_MIN, GAP_Y_MAX)
    return ObstacleState(
        x=jnp.asarray(x, dtype=jnp.int32),
        gap_y=gap_y,
        size=gap_size(score),
    )


def draw_obstacle(canvas: Canvas, obstacle: ObstacleState, player_x) -> Canvas:
    """Draw the two bars of the obstacle, scrolled relative to the player."""
    screen_x = obstacle.x - player_x
    half_size = obstacle.size // 2
    gap_row = jnp.astype(obstacle.gap_y, jnp.int32)

    solid = (yy < gap_row - half_size) | (yy >= gap_row + half_size)
    return paint(canvas, (xx == screen_x) & solid, RED, BLACK, GLYPH_OBSTACLE)


def collides_with(obstacle: ObstacleState, player: PlayerState) -> jnp.ndarray:
    """True when the player is in the obstacle's column but outside its gap."""
    half_size = obstacle.size / 2.0
    same_column = player.x == obstacle.x
    above_gap = player.y < obstacle.gap_y - half_size
    below_gap = player.y > obstacle.gap_y + half_size
    return same_column & (above_gap | below_gap)
