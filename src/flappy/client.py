#!/usr/bin/env python3
"""
client.py

pygame frontend: frame driver, input translation and rendering.
The simulation lives in game.py; nothing here mutates it except through
FlappyGame.tick / activate / suspend.
"""

import logging
import os
import random
from enum import Enum
from typing import Optional

import pygame

from .constants import (
    DB_FILE, GROUND_Y, MAX_FRAME_DELTA_MS, RENDER_FPS, SCREEN_HEIGHT, SCREEN_WIDTH,
)
from .data_models import GamePhase
from .events import EventType, GameEvent
from .game import FlappyGame
from .score_store import ScoreStore

logger = logging.getLogger(__name__)

SKY_DAY = (135, 206, 235)
SKY_NIGHT = (20, 24, 60)
PIPE_COLOR = (0, 150, 0)
GROUND_COLOR = (222, 216, 149)
BIRD_COLOR = (255, 255, 0)
WHITE = (255, 255, 255)
GREY = (200, 200, 200)
RED = (255, 50, 50)

CELEBRATE_MS = 200


class InputSignal(Enum):
    ACTIVATE = "activate"
    SUSPEND = "suspend"
    QUIT = "quit"


def translate_event(event) -> Optional[InputSignal]:
    """Maps a pygame event onto the signals the game understands."""
    if event.type == pygame.QUIT:
        return InputSignal.QUIT
    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return InputSignal.QUIT
        if event.key == pygame.K_SPACE:
            return InputSignal.ACTIVATE
        return None
    if event.type == pygame.MOUSEBUTTONDOWN and getattr(event, "button", 1) == 1:
        return InputSignal.ACTIVATE
    if event.type in (pygame.WINDOWFOCUSLOST, pygame.WINDOWMINIMIZED):
        return InputSignal.SUSPEND
    if event.type == pygame.ACTIVEEVENT and getattr(event, "gain", 1) == 0:
        # The pointer leaving the window (APPMOUSEFOCUS alone) is not a focus loss
        if getattr(event, "state", 0) & (pygame.APPINPUTFOCUS | pygame.APPACTIVE):
            return InputSignal.SUSPEND
        return None
    return None


class FlappyClient:
    def __init__(self, game: FlappyGame):
        pygame.init()
        self.game = game
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("Flappy")
        self.clock = pygame.time.Clock()

        self.large_font = pygame.font.Font(None, 48)
        self.font = pygame.font.Font(None, 28)

        # Presentation state, fed by game events
        self.sky = SKY_DAY
        self.celebrate_ms = 0.0
        self.game.bus.subscribe(self._on_event)

    def _on_event(self, event: GameEvent):
        if event.type is EventType.BACKGROUND_CHANGED:
            self.sky = SKY_DAY if event.data["is_day"] else SKY_NIGHT
        elif event.type is EventType.SCORE_MILESTONE:
            self.celebrate_ms = CELEBRATE_MS
        elif event.type is EventType.COLLISION:
            logger.debug("Crash into %s", event.data["kind"])

    def run(self):
        """The main client execution loop."""
        self.game.boot()
        running = True
        while running:
            delta = min(float(self.clock.tick(RENDER_FPS)), MAX_FRAME_DELTA_MS)

            for event in pygame.event.get():
                signal = translate_event(event)
                if signal is InputSignal.QUIT:
                    running = False
                elif signal is InputSignal.ACTIVATE:
                    self.game.activate()
                elif signal is InputSignal.SUSPEND:
                    self.game.suspend()

            self.game.tick(pygame.time.get_ticks(), delta)
            self.celebrate_ms = max(0.0, self.celebrate_ms - delta)
            self._draw_game()

        self.game.close()
        pygame.quit()

    # -------- Rendering --------

    def _blit_centered(self, text: str, font, color, y: float):
        surf = font.render(text, True, color)
        self.screen.blit(surf, (SCREEN_WIDTH // 2 - surf.get_width() // 2, int(y)))

    def _draw_game(self):
        """Renders the session state using pygame."""
        screen = self.screen
        session = self.game.session
        phase = self.game.phase
        screen.fill(self.sky)

        for pair in session.pairs:
            for member in pair.members:
                b = member.bounds
                pygame.draw.rect(screen, PIPE_COLOR,
                                 (b.left, b.top, b.right - b.left, b.bottom - b.top))

        pygame.draw.rect(screen, GROUND_COLOR, (0, GROUND_Y, SCREEN_WIDTH, SCREEN_HEIGHT - GROUND_Y))

        if phase is not GamePhase.PRESTART:
            actor = self.game.actor
            body = pygame.Surface((actor.width, actor.height), pygame.SRCALPHA)
            body.fill(BIRD_COLOR)
            # pygame rotates counter-clockwise; tilt is nose-down positive
            rotated = pygame.transform.rotate(body, -actor.tilt)
            screen.blit(rotated, rotated.get_rect(center=(actor.x, actor.y)))

        if phase is GamePhase.PRESTART:
            self._blit_centered("TAP OR PRESS SPACE TO START", self.large_font, WHITE,
                                SCREEN_HEIGHT // 2 - 24)
            self._blit_centered(f"BEST SCORE {session.high_score}", self.font, GREY,
                                SCREEN_HEIGHT // 2 + 40)
        elif phase is GamePhase.GAMEOVER:
            self._blit_centered("GAME OVER", self.large_font, RED, SCREEN_HEIGHT * 0.3)
            self._blit_centered(str(session.score), self.large_font, WHITE, SCREEN_HEIGHT * 0.5)
            self._blit_centered(f"BEST {session.high_score}", self.font, GREY, SCREEN_HEIGHT * 0.6)
            self._blit_centered("TAP OR PRESS SPACE TO RESTART", self.font, WHITE,
                                SCREEN_HEIGHT * 0.75)
        else:
            font = self.large_font if self.celebrate_ms > 0 else self.font
            self._blit_centered(str(session.score), font, WHITE, 30)

        if phase is GamePhase.PAUSED:
            overlay = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT), pygame.SRCALPHA)
            overlay.fill((0, 0, 0, 128))
            screen.blit(overlay, (0, 0))
            self._blit_centered("PAUSED - TAP OR PRESS SPACE TO RESUME", self.font, WHITE,
                                SCREEN_HEIGHT // 2)

        fps = self.font.render(f"FPS: {self.clock.get_fps():.0f}", True, (0, 255, 0))
        screen.blit(fps, (10, 10))
        pygame.display.flip()


def main():
    logging.basicConfig(level=os.environ.get("FLAPPY_LOG_LEVEL", "INFO").upper())
    store = ScoreStore(os.environ.get("FLAPPY_DB_FILE", DB_FILE))
    game = FlappyGame(store=store, rng=random.Random())
    FlappyClient(game).run()


if __name__ == "__main__":
    main()
