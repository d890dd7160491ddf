"""Tests for the headless environment and its Gymnasium wrapper."""

import jax
import numpy as np
import pytest

from flappax import GameMode, SCREEN_WIDTH, SCREEN_HEIGHT
from flappax.env import FlappaxEnv, random_flap_policy, rollout
from flappax.gymnasium_wrapper import GymnasiumWrapper, make_gymnasium_env


@pytest.fixture(scope="module")
def env():
    return FlappaxEnv()


class TestFlappaxEnv:

    def test_reset(self, env):
        state, observation, info = env.reset(jax.random.PRNGKey(0))

        assert int(state.mode) == GameMode.PLAYING
        assert observation.shape == (SCREEN_WIDTH, SCREEN_HEIGHT)
        assert info["score"] == 0
        assert state.time == 0
        # Player glyph is on screen after the first tick
        assert observation[0, 25] == 1.0

    def test_flap_step(self, env):
        state, _, _ = env.reset(jax.random.PRNGKey(0))
        state, _, reward, terminated, truncated, _ = env.step(state, 1)

        # Five 16.7 ms ticks: flap on the first, one simulated step on the last
        assert state.player.x == 6
        assert np.isclose(float(state.player.velocity), -1.65)
        assert float(state.player.y) < 25.0
        assert reward == 0.0
        assert not terminated
        assert not truncated
        assert state.time == 1

    def test_episode_terminates(self, env):
        state, _, _ = env.reset(jax.random.PRNGKey(0))
        for _ in range(60):
            state, _, _, terminated, _, info = env.step(state, 0)
            if terminated:
                break

        assert terminated
        assert info["score"] == 0
        assert int(state.mode) == GameMode.END

    def test_truncation(self):
        env = FlappaxEnv(max_num_steps_per_episodes=2)
        state, _, _ = env.reset(jax.random.PRNGKey(0))
        state, *_ = env.step(state, 1)
        state, _, _, _, truncated, _ = env.step(state, 1)
        assert truncated

    def test_render(self, env):
        state, _, _ = env.reset(jax.random.PRNGKey(0))
        frame = env.render(state)
        assert frame.shape == (SCREEN_HEIGHT * 12, SCREEN_WIDTH * 8, 3)
        assert frame.dtype == np.uint8

    def test_invalid_render_mode(self):
        with pytest.raises(ValueError):
            FlappaxEnv(render_mode="human")

    def test_invalid_color_scheme(self):
        with pytest.raises(ValueError):
            FlappaxEnv(color_scheme="sepia")

    def test_rollout(self, env):
        (_, final_state, _), states = rollout(env, random_flap_policy(0.2), jax.random.PRNGKey(1), 30)

        assert states.score.shape == (30,)
        assert states.canvas.glyphs.shape == (30, SCREEN_WIDTH, SCREEN_HEIGHT)
        assert int(final_state.mode) == GameMode.PLAYING


class TestGymnasiumWrapper:

    def test_reset_and_step(self):
        gym_env = make_gymnasium_env(seed=0)
        observation, info = gym_env.reset(seed=0)

        assert gym_env.observation_space.contains(observation)
        assert info == {"score": 0}

        observation, reward, terminated, truncated, info = gym_env.step(1)
        assert observation.dtype == np.float32
        assert isinstance(reward, float)
        assert terminated is False
        assert truncated is False

    def test_step_before_reset(self):
        gym_env = GymnasiumWrapper(FlappaxEnv())
        with pytest.raises(RuntimeError):
            gym_env.step(0)

    def test_seeded_resets_match(self):
        gym_env = make_gymnasium_env()
        first, _ = gym_env.reset(seed=5)
        second, _ = gym_env.reset(seed=5)
        np.testing.assert_array_equal(first, second)

    def test_render(self):
        gym_env = make_gymnasium_env()
        assert gym_env.render() is None
        gym_env.reset(seed=0)
        assert gym_env.render().shape[-1] == 3
