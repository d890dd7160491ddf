"""Session creation and restart."""

import jax
import jax.numpy as jnp

from flappax.state import GameState, create_canvas, create_player
from flappax.obstacle import create_obstacle
from flappax.constants import SCREEN_WIDTH, GameMode


def _fresh_course(rng: jax.random.PRNGKey):
    """Player back at the start and a new obstacle pair, both sized for score 0."""
    rng, first_key, second_key = jax.random.split(rng, 3)
    return dict(
        rng=rng,
        player=create_player(),
        obstacle1=create_obstacle(first_key, SCREEN_WIDTH // 2, 0),
        obstacle2=create_obstacle(second_key, SCREEN_WIDTH, 0),
        score=jnp.zeros((), dtype=jnp.int32),
        frame_time=jnp.zeros((), dtype=jnp.float32),
    )


def create_state(rng: jax.random.PRNGKey = jax.random.PRNGKey(0)) -> GameState:
    """Create a new session sitting in the main menu."""
    return GameState(
        **_fresh_course(rng),
        mode=jnp.asarray(int(GameMode.MENU), dtype=jnp.int32),
        quitting=jnp.zeros((), dtype=jnp.bool_),
        canvas=create_canvas(),
    )


def restart(state: GameState) -> GameState:
    """Reset player, obstacles, score and timer, and start playing."""
    return state.replace(
        **_fresh_course(state.rng),
        mode=jnp.asarray(int(GameMode.PLAYING), dtype=jnp.int32),
    )
