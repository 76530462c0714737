import argparse
import logging
import os

import numpy as np
import pygame

from bug_arena.config import GameConfig

logger = logging.getLogger("bug_arena")

KEY_COMMANDS = {
    pygame.K_UP: "up",
    pygame.K_DOWN: "down",
    pygame.K_LEFT: "left",
    pygame.K_RIGHT: "right",
    pygame.K_p: "pause",
    pygame.K_a: "fire-left",
    pygame.K_d: "fire-right",
}


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="bug_arena", description="Play Bug Arena.")
    parser.add_argument("--seed", type=int, default=None, help="seed for the level generator")
    parser.add_argument("--fps", type=int, default=None)
    parser.add_argument("--lives", type=int, default=None, help="lives at the start of a game")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    parser.add_argument(
        "--check", action="store_true", help="run gymnasium's env checker headlessly and exit"
    )
    return parser.parse_args(argv)


def run_check(config):
    from gymnasium.utils.env_checker import check_env

    from bug_arena.env import GameEnv

    env = GameEnv(config=config)
    check_env(env.unwrapped)
    env.validate_implementation()
    env.close()
    logger.info("Environment check passed")


def play(config):
    user_driver = os.environ.get("SDL_VIDEODRIVER")

    from bug_arena.env import GameEnv

    # Dialogs wait for Enter while playing by hand.
    env = GameEnv(config=config, auto_dismiss=False)
    if user_driver is None:
        # The env defaults to the headless driver; a window needs the real one.
        os.environ.pop("SDL_VIDEODRIVER", None)
        pygame.display.quit()
        pygame.display.init()
    obs, info = env.reset(seed=config.seed)

    screen = pygame.display.set_mode((env.WIDTH, env.HEIGHT))
    pygame.display.set_caption("Bug Arena")
    clock = pygame.time.Clock()

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYUP:
                if event.key == pygame.K_RETURN:
                    env.world.dialogs.dismiss()
                elif event.key == pygame.K_r:
                    obs, info = env.reset()
                elif event.key in KEY_COMMANDS:
                    env.world.handle_input(KEY_COMMANDS[event.key])

        events = env.world.update(clock.get_time() / 1000.0)
        for name, detail in events:
            if name != "fired":
                logger.info("%s %s", name, detail if detail is not None else "")

        frame = np.transpose(env.render(), (1, 0, 2))
        surf = pygame.surfarray.make_surface(frame)
        screen.blit(surf, (0, 0))
        pygame.display.flip()
        clock.tick(env.FPS)

    env.close()


def main(argv=None):
    args = parse_args(argv)
    config = GameConfig.from_env(
        fps=args.fps, seed=args.seed, start_lives=args.lives, log_level=args.log_level
    )
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.check:
        run_check(config)
    else:
        play(config)


if __name__ == "__main__":
    main()
