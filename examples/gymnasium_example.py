import time
import cv2
from flappax.gymnasium_wrapper import make_gymnasium_env

if __name__ == "__main__":
    env = make_gymnasium_env(render_mode="rgb_array")

    print(f"Action space: {env.action_space}")
    print(f"Observation space: {env.observation_space}")

    obs, info = env.reset(seed=42)
    episode_count = 0
    frames = []

    start_time = time.time()

    for step in range(500):
        # Flap roughly every eighth step
        action = int(env.np_random.random() < 0.125)
        obs, reward, terminated, truncated, info = env.step(action)

        if episode_count == 0:
            frames.append(env.render())

        if terminated or truncated:
            episode_count += 1
            print(f"Episode {episode_count} ended with score {info['score']}")
            obs, info = env.reset()

    end_time = time.time()
    print(f"Steps per second: {500 / (end_time - start_time):.1f}")

    for frame in frames:
        cv2.imshow('Flappax', cv2.cvtColor(frame, cv2.COLOR_RGB2BGR))
        if cv2.waitKey(80) & 0xFF == ord('q'):
            break
    cv2.destroyAllWindows()

    env.close()
