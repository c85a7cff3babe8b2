import logging

import pygame

from stacker.config import StackerConfig
from stacker.game import StackerGame
from stacker.render import draw
from stacker.scheduler import ClockScheduler

logger = logging.getLogger(__name__)

START_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)


def painter(screen, font):
    """Frame hook that paints each new state onto the window surface."""

    def paint(state):
        draw(screen, state, font)

    return paint


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    config = StackerConfig.from_env()

    pygame.init()
    pygame.display.set_caption("Stacker")
    screen = pygame.display.set_mode((config.canvas_width, config.canvas_height))
    font = pygame.font.Font(None, 36)
    logger.info("opened %dx%d window at %d fps", config.canvas_width, config.canvas_height, config.fps)

    paint = painter(screen, font)
    scheduler = ClockScheduler(config.fps)
    game = StackerGame(config, scheduler, on_frame=paint)

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    game.place()
                elif event.key in START_KEYS:
                    _start_or_restart(game)
                elif event.key == pygame.K_r:
                    game.restart()
            elif event.type == pygame.MOUSEBUTTONDOWN and not game.running:
                _start_or_restart(game)

        # Paces the loop even while the game is idle or over; the hook only
        # runs on live frames, so paint the still screens here
        if not scheduler.tick():
            paint(game.state)
        pygame.display.flip()

    pygame.quit()


def _start_or_restart(game):
    if game.is_over:
        game.restart()
    else:
        game.start()


if __name__ == "__main__":
    main()
