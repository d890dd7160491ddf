import dataclasses
from functools import partial
from typing import Any, Callable, Dict, Optional

import jax
import jax.numpy as jnp
import numpy as np

from flappax.state import GameState
from flappax.session import create_state, restart
from flappax.tick_input import TickInput
from flappax.game import step as game_step
from flappax.constants import GameMode, KEY_NONE, KEY_SPACE, GLYPH_SPACE
from flappax.rendering import canvas_to_rgb, create_color_scheme
from flappax.logging import scan_with_progress


class FlappaxEnvState(GameState):
    """Game state with episode bookkeeping.

    Attributes:
        time: Environment steps taken in the episode
    """
    time: jnp.ndarray = 0


def asdict_non_recursive(obj: Any) -> Dict[str, Any]:
    """Convert dataclass to dictionary without recursive conversion."""
    return {field.name: getattr(obj, field.name) for field in dataclasses.fields(obj)}


class FlappaxEnv:
    """Headless, jit-compiled Flappax environment.

    Drives the same tick function as the interactive frontend, feeding it
    synthetic frame times instead of a real clock. One environment step runs
    ``frame_skip`` ticks of ``1000 / fps`` milliseconds each; the chosen action
    is applied as a key press on the first of them.

    Actions: 0 = do nothing, 1 = flap.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 60}

    def __init__(
        self,
        max_num_steps_per_episodes: int = 2000,
        fps: int = 60,
        frame_skip: int = 5,
        render_mode: str = "rgb_array",
        render_scale: int = 1,
        color_scheme: str = "classic",
    ):
        """Initialize the environment.

        Args:
            max_num_steps_per_episodes: Maximum steps before episode truncation
            fps: Simulated display frame rate
            frame_skip: Number of display ticks per environment step
            render_mode: Rendering mode ("rgb_array" or None)
            render_scale: Multiplier on the default 8x12 pixel cell
            color_scheme: Colour scheme for rendering ("classic", "amber", "mono")
        """
        self.max_num_steps_per_episodes = max_num_steps_per_episodes
        self.fps = fps
        self.frame_skip = frame_skip

        self.render_mode = render_mode
        self.render_scale = render_scale
        self.color_scheme = color_scheme

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(
                f"Unsupported render_mode '{render_mode}'. "
                f"Supported modes: {self.metadata['render_modes']}"
            )
        # Fail early on a bad scheme name
        create_color_scheme(color_scheme)

    @property
    def frame_ms(self) -> float:
        return 1000.0 / self.fps

    @property
    def num_actions(self) -> int:
        return 2

    def observe(self, state: GameState) -> jnp.ndarray:
        """Occupancy grid of the screen, (width, height), 1.0 where a glyph is drawn."""
        return jnp.astype(state.canvas.glyphs != GLYPH_SPACE, jnp.float32)

    @partial(jax.jit, static_argnums=0)
    def reset(self, rng: jax.random.PRNGKey):
        """Start a new episode directly in play mode.

        Returns:
            Tuple of (state, observation, info)
        """
        state = restart(create_state(rng))
        state = FlappaxEnvState(
            **asdict_non_recursive(state)
        ).replace(time=jnp.zeros((), dtype=jnp.int32))

        # One idle tick so the first observation shows the course
        state = game_step(state, TickInput(elapsed_ms=0.0, key=KEY_NONE))
        return state, self.observe(state), {"score": state.score}

    @partial(jax.jit, static_argnums=0)
    def step(self, state: FlappaxEnvState, action: int | jnp.ndarray):
        """Execute one environment step.

        Returns:
            Tuple of (next_state, observation, reward, terminated, truncated, info)
        """
        first_key = jnp.where(action == 1, KEY_SPACE, KEY_NONE)
        keys = jnp.zeros(self.frame_skip, dtype=jnp.int32).at[0].set(first_key)

        def run_tick(state, key):
            state = jax.lax.cond(
                state.mode == int(GameMode.PLAYING),
                lambda s: game_step(s, TickInput(elapsed_ms=self.frame_ms, key=key)),
                lambda s: s,
                state
            )
            return state, None

        previous_score = state.score
        final_state, _ = jax.lax.scan(run_tick, state, keys)
        final_state = final_state.replace(time=final_state.time + 1)

        reward = jnp.astype(final_state.score - previous_score, jnp.float32)
        terminated = final_state.mode == int(GameMode.END)
        truncated = final_state.time >= self.max_num_steps_per_episodes

        return (
            final_state,
            self.observe(final_state),
            reward,
            terminated,
            truncated,
            {"score": final_state.score},
        )

    def render(self, state: GameState) -> Optional[np.ndarray]:
        """Render the current screen as an RGB array if render_mode="rgb_array"."""
        if self.render_mode == "rgb_array":
            return canvas_to_rgb(
                state.canvas,
                cell_width=8 * self.render_scale,
                cell_height=12 * self.render_scale,
                palette=create_color_scheme(self.color_scheme),
            )
        return None


def random_flap_policy(flap_probability: float = 0.1) -> Callable:
    """Policy flapping with a fixed probability each step."""
    def policy(rng: jax.random.PRNGKey, observation: jnp.ndarray):
        return jnp.astype(jax.random.bernoulli(rng, flap_probability), jnp.int32)
    return policy


def rollout(env: FlappaxEnv, policy: Callable, rng: jax.random.PRNGKey, num_steps: int,
            progress: bool = False):
    """Play ``num_steps`` environment steps, resetting whenever an episode ends.

    Returns:
        Tuple of (final carry, stacked per-step states)
    """
    def env_step(carry, _):
        rng, state, observation = carry
        rng, rng_action, rng_reset = jax.random.split(rng, 3)
        action = policy(rng_action, observation)
        next_state, next_observation, reward, terminated, truncated, info = env.step(state, action)

        next_state, next_observation = jax.lax.cond(
            terminated | truncated,
            lambda _: env.reset(rng_reset)[:2],
            lambda _: (next_state, next_observation),
            None
        )
        return (rng, next_state, next_observation), next_state

    if progress:
        env_step = scan_with_progress(num_steps)(env_step)

    @jax.jit
    def run(rng):
        rng, rng_reset = jax.random.split(rng)
        state, observation, _ = env.reset(rng_reset)
        return jax.lax.scan(env_step, (rng, state, observation), jnp.arange(num_steps))

    return run(rng)
