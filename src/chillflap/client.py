"""
client.py

pygame frontend: ambient audio, input polling, rendering and the frame loop.
The simulation itself lives in game_loop; this module only feeds it time and
input and draws what it holds.
"""

import logging
import math
import os
from typing import Optional, Tuple

import pygame

from .constants import MUSIC_VOLUME, RENDER_FPS
from .data_models import GameState
from .game_loop import GameLoop

logger = logging.getLogger(__name__)

SKY = (0, 191, 255)
PIPE_COLOR = (0, 150, 0)
FLYER_COLOR = (255, 220, 0)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
GAME_OVER_COLOR = (255, 50, 50)

GAME_OVER_SCALE_TIME = 0.3      # Seconds for the banner to grow in


# ----------------- Audio -----------------

class PygameAudio:
    """
    Looping ambient track on pygame.mixer.music.
    play() never rewinds a running track and stop() only pauses, so the next
    play() resumes where the music left off.
    Any load or device failure leaves a silent player behind.
    """

    def __init__(self, path: str, volume: float = MUSIC_VOLUME):
        self.path = path
        self.available = False
        self.started = False
        self.paused = False

        if not os.path.exists(path):
            logger.warning("Could not find music file %s, continuing without audio", path)
            return
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            pygame.mixer.music.load(path)
            pygame.mixer.music.set_volume(volume)
            self.available = True
        except pygame.error as e:
            logger.warning("Audio error: %s, continuing without audio", e)

    def play(self):
        if not self.available:
            return
        try:
            if self.paused:
                pygame.mixer.music.unpause()
                self.paused = False
            elif not pygame.mixer.music.get_busy():
                pygame.mixer.music.play(loops=-1)
                self.started = True
        except pygame.error as e:
            logger.warning("Audio playback failed: %s", e)
            self.available = False

    def stop(self):
        if self.available and self.started and not self.paused:
            pygame.mixer.music.pause()
            self.paused = True


# ----------------- Input -----------------

class PygameInput:
    """Turns pygame events into the single activate signal."""

    ACTIVATE_KEYS = (pygame.K_SPACE, pygame.K_UP)

    def poll(self) -> Tuple[bool, bool]:
        """Drains the queue. Returns (activated, quit_requested)."""
        activated = False
        quit_requested = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                quit_requested = True
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    quit_requested = True
                elif event.key in self.ACTIVATE_KEYS:
                    activated = True
            elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.FINGERDOWN):
                activated = True
        return activated, quit_requested


# ----------------- Renderer -----------------

class PygameRenderer:
    """Draws the loop's entities. World y points up, screen y points down."""

    def __init__(self, surface: pygame.Surface, loop: GameLoop):
        self.surface = surface
        self.loop = loop
        self.height = surface.get_height()

        self.large_font = pygame.font.Font(None, 48)
        self.font = pygame.font.Font(None, 34)

        self.score_surface = self._render_score(loop.score)
        self.game_over_since: Optional[float] = None

        loop.add_listener("score_changed", self.on_score_changed)
        loop.add_listener("state_changed", self.on_state_changed)

    def _render_score(self, score: int) -> pygame.Surface:
        return self.font.render(f"Score: {score}", True, WHITE)

    def on_score_changed(self, score: int):
        self.score_surface = self._render_score(score)

    def on_state_changed(self, old_state: GameState, new_state: GameState):
        self.game_over_since = None

    def to_screen(self, x: float, y: float) -> Tuple[int, int]:
        return int(x), int(self.height - y)

    def box_rect(self, entity) -> pygame.Rect:
        left, top = self.to_screen(entity.left_edge, entity.top_edge)
        return pygame.Rect(left, top, int(entity.width), int(entity.height))

    def _blit_centered(self, surf: pygame.Surface, y: int):
        self.surface.blit(surf, (self.surface.get_width() // 2 - surf.get_width() // 2, y))

    def draw(self, now: float):
        loop = self.loop
        screen = self.surface
        screen.fill(SKY)

        for obstacle in loop.obstacles:
            pygame.draw.rect(screen, PIPE_COLOR, self.box_rect(obstacle))

        flyer = loop.flyer
        center = self.to_screen(flyer.x, flyer.y)
        pygame.draw.circle(screen, FLYER_COLOR, center, int(flyer.width / 2))
        # Beak shows the eased rotation
        beak = (center[0] + int(math.cos(flyer.rotation) * flyer.width / 2),
                center[1] - int(math.sin(flyer.rotation) * flyer.width / 2))
        pygame.draw.line(screen, BLACK, center, beak, 4)

        mid_y = self.height // 2
        if loop.state == GameState.WAITING_TO_START:
            self._blit_centered(self.large_font.render("Touch Screen to Start", True, WHITE), mid_y)
        elif loop.state == GameState.PLAYING:
            self._blit_centered(self.score_surface, 80)
        else:
            self._draw_game_over(now, mid_y)

    def _draw_game_over(self, now: float, mid_y: int):
        if self.game_over_since is None:
            self.game_over_since = now
        progress = min(1.0, (now - self.game_over_since) / GAME_OVER_SCALE_TIME)
        # Ease out
        scale = 1.0 - (1.0 - progress) ** 2

        banner = self.large_font.render("Game Over", True, GAME_OVER_COLOR)
        size = (max(1, int(banner.get_width() * scale)), max(1, int(banner.get_height() * scale)))
        self._blit_centered(pygame.transform.smoothscale(banner, size), mid_y - 120)

        if progress < 1.0:
            return
        self._blit_centered(self.font.render(f"Final Score: {self.loop.score}", True, WHITE), mid_y - 40)
        self._blit_centered(self.font.render(f"High Score: {self.loop.high_score}", True, WHITE), mid_y)
        self._blit_centered(self.font.render("Touch Screen to Restart", True, WHITE), mid_y + 120)


# ----------------- Game Client -----------------

class FlappyClient:
    def __init__(self, loop: GameLoop, music_file: Optional[str] = None, fps: int = RENDER_FPS):
        pygame.init()
        cfg = loop.config
        self.screen = pygame.display.set_mode((int(cfg.screen_width), int(cfg.screen_height)))
        pygame.display.set_caption("Chill Flap")

        self.loop = loop
        self.fps = fps
        if music_file is not None:
            self.loop.audio = PygameAudio(music_file)
        self.input = PygameInput()
        self.renderer = PygameRenderer(self.screen, loop)
        self.frame_clock = pygame.time.Clock()
        self.time_source = loop.clock

    def step(self) -> bool:
        """Runs one frame. Returns False once the player asked to quit."""
        activated, quit_requested = self.input.poll()
        if quit_requested:
            return False
        if activated:
            self.loop.activate()

        now = self.time_source.now()
        self.loop.tick(now)
        self.renderer.draw(now)
        pygame.display.flip()
        return True

    def run(self):
        """The main client execution loop."""
        self.loop.audio.play()
        try:
            while self.step():
                self.frame_clock.tick(self.fps)
        finally:
            self.loop.audio.stop()
            pygame.quit()
