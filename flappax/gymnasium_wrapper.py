"""
Gymnasium compatibility wrapper for the Flappax environment.

Keeps the JAX state internally and exposes the standard Gymnasium API with
numpy observations.
"""

from typing import Dict, Optional, Tuple
import jax
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from flappax.env import FlappaxEnv


class GymnasiumWrapper(gym.Env):
    """
    Gymnasium-compatible wrapper for :class:`~flappax.env.FlappaxEnv`.

    Example:
        ```python
        gym_env = GymnasiumWrapper(FlappaxEnv())
        obs, info = gym_env.reset(seed=0)
        obs, reward, terminated, truncated, info = gym_env.step(1)  # flap
        ```
    """

    def __init__(self, flappax_env: FlappaxEnv, seed: Optional[int] = None):
        self.flappax_env = flappax_env
        self._state = None
        self._rng_key = jax.random.PRNGKey(seed if seed is not None else 42)

        self.metadata = flappax_env.metadata.copy()
        self.render_mode = flappax_env.render_mode

        self.action_space = spaces.Discrete(flappax_env.num_actions)

        _, temp_obs, _ = flappax_env.reset(jax.random.PRNGKey(0))
        self.observation_space = spaces.Box(
            low=0, high=1, shape=temp_obs.shape, dtype=np.float32
        )

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to a new episode.

        Args:
            seed: Optional seed for this episode
            options: Unused

        Returns:
            Tuple of (observation, info)
        """
        super().reset(seed=seed)
        if seed is not None:
            self._rng_key = jax.random.PRNGKey(seed)

        reset_key, self._rng_key = jax.random.split(self._rng_key)
        self._state, observation, info = self.flappax_env.reset(reset_key)

        return np.array(observation), {k: int(v) for k, v in info.items()}

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Execute one environment step.

        Args:
            action: 0 to do nothing, 1 to flap

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        if self._state is None:
            raise RuntimeError("Must call reset() before step()")

        (self._state, observation, reward, terminated,
         truncated, info) = self.flappax_env.step(self._state, int(action))

        return (
            np.array(observation),
            float(reward),
            bool(terminated),
            bool(truncated),
            {k: int(v) for k, v in info.items()},
        )

    def render(self) -> Optional[np.ndarray]:
        """RGB array of the current screen if render_mode is "rgb_array", else None."""
        if self._state is None:
            return None
        return self.flappax_env.render(self._state)

    def close(self):
        pass

    @property
    def unwrapped(self):
        """Access the underlying Flappax environment."""
        return self.flappax_env


def make_gymnasium_env(seed: Optional[int] = None, **kwargs) -> GymnasiumWrapper:
    """Create a Gymnasium-compatible Flappax environment; kwargs go to FlappaxEnv."""
    return GymnasiumWrapper(FlappaxEnv(**kwargs), seed=seed)
