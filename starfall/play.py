"""
Command line entry point: play in an Arcade window, or run headless
random-action episodes for a quick smoke test.

    python -m starfall.play
    python -m starfall.play --headless --episodes 5 --seed 0
"""

import argparse
import random

from .clock import SystemClock
from .configs import ENV_CONFIG, GAME_CONFIG, HIGHSCORE_FILE
from .highscore import JsonHighScoreStore
from .logger import get_logger, setup_logger
from .simulation import Simulation

logger = get_logger(__name__)


def run_headless(episodes: int, seed, game_config: dict):
    from .shooter_env import StarfallEnv

    env = StarfallEnv(game_config=game_config, **ENV_CONFIG)
    scores = []
    for ep in range(episodes):
        ep_seed = None if seed is None else seed + ep
        obs, info = env.reset(seed=ep_seed)
        env.action_space.seed(ep_seed)
        terminated = truncated = False
        while not (terminated or truncated):
            obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        scores.append(info["score"])
        print(f"Episode {ep + 1}/{episodes}: score={info['score']} steps={info['step']} "
              f"health={info['health']} game_over={info['game_over']}")
    env.close()

    print(f"\n{'='*40}")
    print(f"Mean score over {episodes} episodes: {sum(scores) / max(1, len(scores)):.1f}")
    print(f"Best score: {max(scores) if scores else 0}")
    print(f"{'='*40}")
    return scores


def main(argv=None):
    parser = argparse.ArgumentParser(description="Starfall arcade shooter")
    parser.add_argument("--headless", action="store_true",
                        help="Run random-action episodes without a window")
    parser.add_argument("--episodes", type=int, default=1,
                        help="Number of headless episodes")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed")
    parser.add_argument("--width", type=int, default=GAME_CONFIG["width"],
                        help="Arena width in pixels")
    parser.add_argument("--height", type=int, default=GAME_CONFIG["height"],
                        help="Arena height in pixels")
    parser.add_argument("--highscore-file", type=str, default=HIGHSCORE_FILE,
                        help="Where the high score is kept")
    parser.add_argument("--log-level", type=str, default="INFO",
                        help="Logging level (DEBUG, INFO, WARNING)")
    args = parser.parse_args(argv)

    setup_logger(args.log_level)

    game_config = dict(GAME_CONFIG, width=args.width, height=args.height)

    if args.headless:
        run_headless(args.episodes, args.seed, game_config)
        return

    from .window import play

    sim = Simulation(
        clock=SystemClock(),
        rng=random.Random(args.seed),
        store=JsonHighScoreStore(args.highscore_file),
        **game_config,
    )
    play(sim)
    logger.info(f"Session ended, high score {sim.high_score}")


if __name__ == "__main__":
    main()
