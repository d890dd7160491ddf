"""Mode state machine: one tick of the game per driver frame."""

import jax
import jax.lax

from flappax.state import GameState
from flappax.tick_input import TickInput
from flappax.modes.menu import tick_menu
from flappax.modes.playing import tick_playing
from flappax.modes.end import tick_end

# Indexed by GameMode
MODE_HANDLERS = [
    tick_menu,
    tick_playing,
    tick_end,
]


def step(state: GameState, tick_input: TickInput) -> GameState:
    """Run the handler of the current mode."""
    return jax.lax.switch(state.mode, MODE_HANDLERS, state, tick_input)


tick = jax.jit(step)
