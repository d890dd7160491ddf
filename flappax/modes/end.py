"""Game over screen."""

from flappax.state import GameState
from flappax.tick_input import TickInput
from flappax.canvas import cls, print_centered
from flappax.modes.menu import handle_menu_keys


def tick_end(state: GameState, tick_input: TickInput) -> GameState:
    canvas = cls(state.canvas)
    canvas = print_centered(canvas, 5, "You are dead!")
    canvas = print_centered(canvas, 6, "You earned {} points", state.score)
    canvas = print_centered(canvas, 8, "(P) Play Again")
    canvas = print_centered(canvas, 9, "(Q) Quit Game")

    return handle_menu_keys(state.replace(canvas=canvas), tick_input)
