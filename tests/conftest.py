"""Test configuration and fixtures for the Flappax game core."""

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from flappax import create_state, restart, tick, TickInput, KEY_NONE
from flappax.state import ObstacleState, create_player

# Just over FRAME_DURATION: every tick fires exactly one simulated step
STEP_MS = 76.0


@pytest.fixture
def fresh_state():
    """Provide a new session sitting in the main menu."""
    return create_state(jax.random.PRNGKey(0))


@pytest.fixture
def playing_state(fresh_state):
    """Provide a session that has just started playing."""
    return restart(fresh_state)


def make_obstacle(x, gap_y, size):
    return ObstacleState(
        x=jnp.asarray(x, dtype=jnp.int32),
        gap_y=jnp.asarray(gap_y, dtype=jnp.float32),
        size=jnp.asarray(size, dtype=jnp.int32),
    )


def place_player(state, x, y, velocity=0.0):
    """Helper to put the player at a given position."""
    return state.replace(player=create_player(x, y, velocity))


def place_obstacle(state, slot, x, gap_y, size):
    """Helper to put an obstacle with a known gap into ``slot``."""
    return state.replace(**{slot: make_obstacle(x, gap_y, size)})


def run_ticks(state, n, elapsed_ms=STEP_MS, key=KEY_NONE):
    for _ in range(n):
        state = tick(state, TickInput(elapsed_ms=elapsed_ms, key=key))
    return state


def row_text(canvas, row):
    """Characters of one grid row as a string."""
    return "".join(chr(c) for c in np.asarray(canvas.glyphs[:, row]))
