#!/usr/bin/env python3
"""
Harvest Dash - Main Entry Point

Walk the farmer around the field collecting crops before the clock runs
out. Scarecrows block the way. Reach the goal score to move on; clear
all three levels to win.

Usage:
    python -m harvest_dash.main
    harvest-dash

Settings come from HARVEST_* environment variables or a .env file
(see harvest_dash.config).

Controls:
    Arrow keys / WASD: Move
    Enter / Space: Start (or resume)
    P: Pause
    R: Back to menu
    Escape: Quit
"""
import logging
import random

import pygame

from harvest_dash.config import get_settings
from harvest_dash.difficulty import load_difficulty
from harvest_dash.gameplay.game import Game
from harvest_dash.gameplay.geometry import frame_step
from harvest_dash.ui.renderer import Renderer, HudText
from harvest_dash.ui.input_handler import InputHandler, KeyboardInput

logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    settings = get_settings()

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Harvest Dash - Starting...")

    # Difficulty must be known before the first frame
    difficulty = load_difficulty(
        settings.difficulty_source, timeout=settings.config_timeout_seconds
    )

    hud = HudText()
    keyboard = KeyboardInput()
    game = Game(
        difficulty=difficulty,
        input_provider=keyboard,
        hud=hud.sinks(),
        rng=random.Random(settings.seed),
    )

    pygame.init()
    try:
        renderer = Renderer(game, hud)
        renderer.init_display(settings.window_title)
        input_handler = InputHandler(game)
        clock = pygame.time.Clock()

        logger.info("Starting game loop...")
        should_quit = False
        while not should_quit:
            dt = frame_step(clock.tick(settings.fps) / 1000.0)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    should_quit = True
                elif event.type == pygame.KEYDOWN:
                    should_quit = input_handler.handle_key(event.key) or should_quit

            keyboard.poll()
            game.update(dt)
            renderer.render(dt)
            pygame.display.flip()
    finally:
        pygame.quit()
        logger.info("Harvest Dash stopped.")


if __name__ == "__main__":
    main()
