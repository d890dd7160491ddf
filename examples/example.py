import time

import jax

from flappax.env import FlappaxEnv, random_flap_policy, rollout
from flappax.rendering import create_video

if __name__ == "__main__":
    env = FlappaxEnv()
    policy = random_flap_policy(0.12)
    rng = jax.random.PRNGKey(0)

    start = time.time()
    (_, final_state, _), states = jax.block_until_ready(rollout(env, policy, rng, 2000, progress=True))
    print("Rollout time incl. compilation (s):", time.time() - start)
    print("Best score:", int(states.score.max()))

    create_video(states, fps=12, display=True)
