"""
Input Handler - Translates key presses to gameplay commands.
This is a THIN ADAPTER - no game logic here.
"""
import pygame

from harvest_dash.gameplay.controls import Direction
from harvest_dash.gameplay.game import Game


# Movement keys; arrows and WASD both work
DIRECTION_KEYS = {
    Direction.UP: (pygame.K_UP, pygame.K_w),
    Direction.DOWN: (pygame.K_DOWN, pygame.K_s),
    Direction.LEFT: (pygame.K_LEFT, pygame.K_a),
    Direction.RIGHT: (pygame.K_RIGHT, pygame.K_d),
}


class KeyboardInput:
    """
    InputProvider backed by pygame's held-key table.
    Call poll() once per frame after the event queue has been pumped.
    """

    def __init__(self):
        self._pressed = None

    def poll(self) -> None:
        self._pressed = pygame.key.get_pressed()

    def is_held(self, direction: Direction) -> bool:
        if self._pressed is None:
            return False
        return any(self._pressed[key] for key in DIRECTION_KEYS[direction])


class InputHandler:
    """
    Handles discrete key presses and translates them to game commands.

    Movement is not handled here: the game reads KeyboardInput itself.
    """

    def __init__(self, game: Game):
        self.game = game

    def handle_key(self, key: int) -> bool:
        """
        Handle a single key press.
        Returns True if the game should quit.
        """
        if key == pygame.K_ESCAPE:
            return True

        if key == pygame.K_p:
            self.game.toggle_pause()
        elif key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE):
            self.game.start()
        elif key == pygame.K_r:
            self.game.reset()

        return False
