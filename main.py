# main.py

import logging

import numpy as np
import pygame

import constants
import logger_setup
from canvas import Canvas
from config import load_config
from fireworks import Fireworks
from scheduler import FrameScheduler, TimerScheduler

# Get the application's dedicated logger
logger = logging.getLogger("fireworks")


def handle_event(event, show: Fireworks) -> bool:
    """
    Applies one pygame event to the display. Returns False when the app should quit.

    - Space toggles pause / resume.
    - S stops the show and clears the sky.
    - A mouse click launches a burst at the cursor.
    """
    if event.type == pygame.QUIT:
        return False
    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return False
        if event.key == pygame.K_SPACE:
            if show.is_running:
                show.pause()
            else:
                show.start()
        elif event.key == pygame.K_s:
            show.stop()
    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        x, y = event.pos
        show.spawn_burst(x, y)
    return True


def run_display_loop(show: Fireworks, screen, clock, refresh_rate: float):
    """
    The host loop. Pumps both schedulers, then presents the persistent buffer.
    """
    running = True
    while running:
        for event in pygame.event.get():
            if not handle_event(event, show):
                running = False

        show.timer.run_due()
        show.frames.run_frame()

        # --- Drawing ---
        screen.fill(constants.BLACK)
        show.canvas.present(screen)
        pygame.display.flip()
        clock.tick(refresh_rate)


def main():
    """
    Main function to initialize and run the fireworks display.
    """
    # --- Setup ---
    logger_setup.setup_logging()
    config, fireworks_config = load_config()

    logger.info("Application starting...")

    # Initialize the master random number generator (RNG)
    rng = np.random.default_rng(config.get('master_seed'))
    logger.info(f"Master RNG initialized with seed: {config.get('master_seed')}")

    # --- Initialization ---
    pygame.init()
    screen = pygame.display.set_mode((constants.WIDTH, constants.HEIGHT))
    pygame.display.set_caption(constants.TITLE)
    clock = pygame.time.Clock()

    show = Fireworks(
        Canvas.blank(constants.WIDTH, constants.HEIGHT),
        config=fireworks_config,
        rng=rng,
        timer=TimerScheduler(clock=pygame.time.get_ticks),
        frames=FrameScheduler(),
    )
    show.start()

    run_display_loop(show, screen, clock, fireworks_config.display_refresh_rate)

    show.stop()
    logger.info("Application shutting down.")
    pygame.quit()

if __name__ == "__main__":
    main()
