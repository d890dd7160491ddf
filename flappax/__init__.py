"""Flappax: a jit-compiled flappy bird core on an 80x50 character grid."""

from flappax.state import GameState, PlayerState, ObstacleState, Canvas, create_canvas, create_player
from flappax.session import create_state, restart
from flappax.tick_input import TickInput
from flappax.game import step, tick
from flappax.constants import *

__all__ = [
    "GameState",
    "PlayerState",
    "ObstacleState",
    "Canvas",
    "TickInput",
    "create_canvas",
    "create_player",
    "create_state",
    "restart",
    "step",
    "tick",
    "GameMode",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "FRAME_DURATION",
    "KEY_NONE",
    "KEY_SPACE",
    "KEY_P",
    "KEY_Q",
]
