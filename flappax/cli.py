import jax
import hydra
from omegaconf import DictConfig, OmegaConf

from flappax.env import FlappaxEnv, random_flap_policy, rollout
from flappax.frontend import run_game
from flappax.logging import SessionLogger
from flappax.rendering import create_video


def play(cfg: dict, logger: SessionLogger):
    display = cfg["display"]
    run_game(
        seed=cfg["seed"],
        fps=display["fps"],
        cell_width=display["cell_width"],
        cell_height=display["cell_height"],
        title=display["title"],
        color_scheme=display["color_scheme"],
        logger=logger,
    )


def record(cfg: dict, logger: SessionLogger):
    record_cfg = cfg["record"]
    env = FlappaxEnv(color_scheme=cfg["display"]["color_scheme"])
    policy = random_flap_policy(record_cfg["flap_probability"])

    _, states = rollout(
        env, policy, jax.random.PRNGKey(cfg["seed"]), record_cfg["num_steps"],
        progress=record_cfg["progress"],
    )
    logger.info(f"Best score in rollout: {int(states.score.max())}")

    create_video(
        states,
        filename=record_cfg["filename"],
        fps=record_cfg["fps"],
        scale=record_cfg["scale"],
        color_scheme=cfg["display"]["color_scheme"],
    )
    logger.info(f"Video saved: {record_cfg['filename']} ({record_cfg['num_steps']} frames)")


MODES = {"play": play, "record": record}


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig) -> None:
    cfg = OmegaConf.to_container(cfg)

    if cfg["mode"] not in MODES:
        raise ValueError(f"Unknown mode '{cfg['mode']}'. Available: {list(MODES)}")

    logger = SessionLogger(log_level=cfg["log_level"])
    logger.log_session_start({k: v for k, v in cfg.items() if not isinstance(v, dict)})
    MODES[cfg["mode"]](cfg, logger)


if __name__ == "__main__":
    main()
