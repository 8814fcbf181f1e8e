"""
Renderer - Reads gameplay state and paints it with pygame.
This is a THIN ADAPTER - no game logic here.
"""
import math
from typing import Callable, Dict, Optional

import pygame

from harvest_dash.gameplay.game import Game, GameState
from harvest_dash.gameplay.entities import Crop, Obstacle, Player
from harvest_dash.gameplay.constants import WIDTH, HEIGHT, TILE


# Colors
COLOR_FIELD = (223, 240, 213)
COLOR_GRID = (199, 224, 189)
COLOR_STALK = (47, 125, 50)
COLOR_POLE = (155, 118, 83)
COLOR_SCARECROW_HEAD = (194, 142, 14)
COLOR_ARMS = (107, 79, 42)
COLOR_FARMER_SHIRT = (52, 101, 164)
COLOR_FARMER_SKIN = (240, 200, 160)
COLOR_FARMER_HAT = (196, 160, 0)
COLOR_FARMER_BOOTS = (90, 60, 30)
COLOR_HUD = (40, 60, 40)
COLOR_OVERLAY_TEXT = (255, 255, 255)
OVERLAY_SHADE = (0, 0, 0, 128)

# Farmer animation
FACING_DOWN, FACING_LEFT, FACING_RIGHT, FACING_UP = range(4)
WALK_FRAMES = 4
WALK_FRAME_TIME = 0.15  # seconds per frame

# Points sampled along a crop stalk
STALK_SEGMENTS = 8

PROMPTS = {
    GameState.MENU: "Press Enter to start",
    GameState.GAME_OVER: "Out of time! Enter to retry, R for menu",
    GameState.WIN: "Enter to play again, R for menu",
}


class HudText:
    """
    The score/time/goal/status readouts.
    Game writes into these through sinks(); the renderer draws them.
    """

    FIELDS = ("score", "time", "goal", "status")

    def __init__(self):
        self.values: Dict[str, str] = {name: "" for name in self.FIELDS}

    def sinks(self) -> Dict[str, Callable[[str], None]]:
        return {name: self._setter(name) for name in self.FIELDS}

    def _setter(self, name: str) -> Callable[[str], None]:
        def write(text: str) -> None:
            self.values[name] = text
        return write


def facing_for(vx: float, vy: float, previous: int) -> int:
    """Sprite row from velocity sign. Vertical wins over horizontal."""
    if vy > 0:
        return FACING_DOWN
    if vy < 0:
        return FACING_UP
    if vx < 0:
        return FACING_LEFT
    if vx > 0:
        return FACING_RIGHT
    return previous


class Renderer:
    """
    Renders game state to a pygame surface.

    This class reads from Game but never modifies it.
    """

    def __init__(self, game: Game, hud: HudText, screen: Optional[pygame.Surface] = None):
        self.game = game
        self.hud = hud
        self.screen = screen

        # Animation state belongs to the view, not the simulation
        self.facing = FACING_DOWN
        self.walk_frame = 0
        self._walk_timer = 0.0

        self.hud_font: Optional[pygame.font.Font] = None
        self.overlay_font: Optional[pygame.font.Font] = None
        self._background: Optional[pygame.Surface] = None

    def init_display(self, title: str) -> None:
        """Open the window and prepare fonts and the static background."""
        if self.screen is None:
            self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption(title)

        self.hud_font = pygame.font.SysFont("arial", 20)
        self.overlay_font = pygame.font.SysFont("arial", 32)
        self._background = self._build_background()

    def render(self, dt: float) -> None:
        """Main render function called each frame."""
        self._animate_farmer(dt)

        self.screen.blit(self._background, (0, 0))
        for crop in self.game.crops:
            self._draw_crop(crop)
        for obstacle in self.game.obstacles:
            self._draw_scarecrow(obstacle)
        self._draw_farmer(self.game.player)

        self._draw_hud()
        self._draw_overlay()

    # =========================================================================
    # FIELD
    # =========================================================================

    def _build_background(self) -> pygame.Surface:
        surface = pygame.Surface((WIDTH, HEIGHT))
        surface.fill(COLOR_FIELD)
        for y in range(TILE, HEIGHT, TILE):
            pygame.draw.line(surface, COLOR_GRID, (0, y), (WIDTH, y))
        for x in range(TILE, WIDTH, TILE):
            pygame.draw.line(surface, COLOR_GRID, (x, 0), (x, HEIGHT))
        return surface

    def _draw_crop(self, crop: Crop) -> None:
        x, y, w, h = crop.x, crop.y, crop.w, crop.h
        base = (x + w / 2, y + h)
        bend = (x + w / 2 + math.sin(crop.sway) * 3, y + h / 2)
        tip = (x + w / 2, y)

        # Quadratic curve base -> tip, pulled towards bend
        points = []
        for i in range(STALK_SEGMENTS + 1):
            t = i / STALK_SEGMENTS
            u = 1 - t
            px = u * u * base[0] + 2 * u * t * bend[0] + t * t * tip[0]
            py = u * u * base[1] + 2 * u * t * bend[1] + t * t * tip[1]
            points.append((px, py))
        pygame.draw.lines(self.screen, COLOR_STALK, False, points, 3)

        head = pygame.Rect(0, 0, 16, 12)
        head.center = (round(tip[0]), round(tip[1]))
        pygame.draw.ellipse(self.screen, pygame.Color(crop.color), head)

    def _draw_scarecrow(self, obstacle: Obstacle) -> None:
        x, y, w, h = obstacle.x, obstacle.y, obstacle.w, obstacle.h
        pygame.draw.rect(self.screen, COLOR_POLE, pygame.Rect(x + w / 2 - 3, y, 6, h))
        pygame.draw.circle(self.screen, COLOR_SCARECROW_HEAD, (x + w / 2, y + 10), 10)
        pygame.draw.line(self.screen, COLOR_ARMS, (x, y + 18), (x + w, y + 18), 4)

    # =========================================================================
    # FARMER
    # =========================================================================

    def _animate_farmer(self, dt: float) -> None:
        player = self.game.player
        if self.game.state != GameState.PLAYING:
            return

        moving = player.vx != 0 or player.vy != 0
        if not moving:
            self.walk_frame = 0
            self._walk_timer = 0.0
            return

        self.facing = facing_for(player.vx, player.vy, self.facing)
        self._walk_timer += dt
        if self._walk_timer >= WALK_FRAME_TIME:
            self._walk_timer = 0.0
            self.walk_frame = (self.walk_frame + 1) % WALK_FRAMES

    def _draw_farmer(self, player: Player) -> None:
        x, y, w, h = player.x, player.y, player.w, player.h
        cx = x + w / 2

        # Boots step on odd frames
        stride = 3 if self.walk_frame % 2 else 0
        pygame.draw.rect(self.screen, COLOR_FARMER_BOOTS, pygame.Rect(cx - 9, y + h - 8 - stride, 7, 8))
        pygame.draw.rect(self.screen, COLOR_FARMER_BOOTS, pygame.Rect(cx + 2, y + h - 8 - (3 - stride), 7, 8))

        pygame.draw.rect(self.screen, COLOR_FARMER_SHIRT, pygame.Rect(cx - 10, y + 14, 20, 14), border_radius=4)
        pygame.draw.circle(self.screen, COLOR_FARMER_SKIN, (cx, y + 10), 8)
        pygame.draw.rect(self.screen, COLOR_FARMER_HAT, pygame.Rect(cx - 12, y + 1, 24, 4))

        # Eyes show which way the farmer is looking
        if self.facing == FACING_DOWN:
            eyes = [(cx - 3, y + 10), (cx + 3, y + 10)]
        elif self.facing == FACING_LEFT:
            eyes = [(cx - 4, y + 10)]
        elif self.facing == FACING_RIGHT:
            eyes = [(cx + 4, y + 10)]
        else:
            eyes = []
        for eye in eyes:
            pygame.draw.circle(self.screen, (30, 30, 30), eye, 1)

    # =========================================================================
    # HUD & OVERLAY
    # =========================================================================

    def _draw_hud(self) -> None:
        values = self.hud.values
        line = (
            f"Score {values['score']} / {values['goal']}    "
            f"Time {values['time']}    {values['status']}"
        )
        text = self.hud_font.render(line, True, COLOR_HUD)
        self.screen.blit(text, (10, 8))

        prompt = PROMPTS.get(self.game.state)
        if prompt and self.game.get_overlay() is None:
            text = self.hud_font.render(prompt, True, COLOR_HUD)
            self.screen.blit(text, text.get_rect(center=(WIDTH // 2, HEIGHT // 2)))

    def _draw_overlay(self) -> None:
        message = self.game.get_overlay()
        if message is None:
            return

        shade = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
        shade.fill(OVERLAY_SHADE)
        self.screen.blit(shade, (0, 0))

        text = self.overlay_font.render(message, True, COLOR_OVERLAY_TEXT)
        self.screen.blit(text, text.get_rect(center=(WIDTH // 2, HEIGHT // 2)))
