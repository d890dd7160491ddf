"""In-game tick: timing, physics, scoring and the end condition."""

import jax
import jax.lax
import jax.numpy as jnp

from flappax.state import GameState
from flappax.tick_input import TickInput
from flappax.player import advance, flap, draw_player
from flappax.obstacle import create_obstacle, draw_obstacle, collides_with
from flappax.canvas import cls_bg, print_text
from flappax.constants import FRAME_DURATION, SCREEN_WIDTH, SCREEN_HEIGHT, KEY_SPACE, NAVY, GameMode


def make_pass_check(slot: str):
    """Factory for scoring an obstacle slot once the player has moved beyond it."""
    def replace_obstacle(state: GameState) -> GameState:
        rng, key = jax.random.split(state.rng)
        score = state.score + 1
        obstacle = create_obstacle(key, state.player.x + SCREEN_WIDTH, score)
        return state.replace(rng=rng, score=score, **{slot: obstacle})

    def pass_check(state: GameState) -> GameState:
        return jax.lax.cond(
            state.player.x > getattr(state, slot).x,
            replace_obstacle,
            lambda s: s,
            state
        )
    return pass_check


check_obstacle1 = make_pass_check("obstacle1")
check_obstacle2 = make_pass_check("obstacle2")


def tick_playing(state: GameState, tick_input: TickInput) -> GameState:
    canvas = cls_bg(state.canvas, NAVY)

    # Fixed-rate simulation, decoupled from the display refresh rate
    frame_time = state.frame_time + tick_input.elapsed_ms
    stepped = frame_time > FRAME_DURATION
    frame_time = jnp.where(stepped, 0.0, frame_time).astype(jnp.float32)
    player = jax.lax.cond(stepped, advance, lambda p: p, state.player)

    # Flap is applied on the keypress, not on the simulation step
    player = jax.lax.cond(tick_input.key == KEY_SPACE, flap, lambda p: p, player)

    canvas = draw_player(canvas, player)
    canvas = print_text(canvas, 0, 0, "Press SPACE to flap.")
    canvas = print_text(canvas, 0, 1, "Score: {}", state.score)
    canvas = draw_obstacle(canvas, state.obstacle1, player.x)
    canvas = draw_obstacle(canvas, state.obstacle2, player.x)

    state = state.replace(player=player, frame_time=frame_time, canvas=canvas)
    state = check_obstacle2(check_obstacle1(state))

    dead = (
        (state.player.y > SCREEN_HEIGHT)
        | collides_with(state.obstacle1, state.player)
        | collides_with(state.obstacle2, state.player)
    )
    mode = jnp.where(dead, int(GameMode.END), state.mode).astype(jnp.int32)
    return state.replace(mode=mode)
