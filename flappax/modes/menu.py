"""Main menu screen."""

import jax
import jax.lax

from flappax.state import GameState
from flappax.tick_input import TickInput
from flappax.session import restart
from flappax.canvas import cls, print_centered
from flappax.constants import KEY_P, KEY_Q

RULE = "*" * 80


def handle_menu_keys(state: GameState, tick_input: TickInput) -> GameState:
    """P starts a new game, Q asks the driver to exit; other keys do nothing."""
    state = jax.lax.cond(
        tick_input.key == KEY_P,
        restart,
        lambda s: s,
        state
    )
    return state.replace(quitting=state.quitting | (tick_input.key == KEY_Q))


def tick_menu(state: GameState, tick_input: TickInput) -> GameState:
    canvas = cls(state.canvas)
    canvas = print_centered(canvas, 3, RULE)
    canvas = print_centered(canvas, 5, "Welcome to Flappax")
    canvas = print_centered(canvas, 7, RULE)
    canvas = print_centered(canvas, 9, "(P) Play Game")
    canvas = print_centered(canvas, 10, "(Q) Quit Game")
    canvas = print_centered(canvas, 44, RULE)
    canvas = print_centered(canvas, 46, "Fly through the gaps. Every gap passed makes the next one narrower.")
    canvas = print_centered(canvas, 48, RULE)

    return handle_menu_keys(state.replace(canvas=canvas), tick_input)
