"""
spawner.py: Generates top/bottom obstacle pairs and their score triggers.
"""

import itertools
import logging
import random
from typing import Optional

from .data_models import GameConfig, Obstacle, ObstacleKind, ObstaclePair, ScoreTrigger

logger = logging.getLogger(__name__)


class ObstacleSpawner:
    """
    Builds pipe pairs just past the right edge of the screen.
    The caller owns the spawned entities; the spawner only hands out ids.
    """

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self._ids = itertools.count(1)

    def height_range(self, screen_height: float) -> tuple[float, float]:
        """Bounds for the top pipe's height, never an inverted range."""
        cfg = self.config
        min_height = cfg.min_pipe_height
        max_height = screen_height - cfg.pipe_gap - min_height - cfg.pipe_margin
        return min_height, max(min_height, max_height)

    def spawn_pair(self, screen_height: float, screen_width: float) -> ObstaclePair:
        cfg = self.config
        gap = cfg.pipe_gap
        low, high = self.height_range(screen_height)
        random_height = self.rng.uniform(low, high)

        x = screen_width + cfg.pipe_width / 2
        velocity = -cfg.pipe_speed
        bottom_height = screen_height - random_height - gap

        top = Obstacle(
            id=next(self._ids), kind=ObstacleKind.TOP,
            x=x, y=screen_height - random_height / 2,
            width=cfg.pipe_width, height=random_height, vx=velocity)
        bottom = Obstacle(
            id=next(self._ids), kind=ObstacleKind.BOTTOM,
            x=x, y=bottom_height / 2,
            width=cfg.pipe_width, height=bottom_height, vx=velocity)
        # Half the gap tall so the flyer cannot brush it from a pipe lip
        trigger = ScoreTrigger(
            id=next(self._ids),
            x=x, y=screen_height - random_height - gap / 2,
            width=cfg.score_trigger_width, height=gap / 2, vx=velocity)

        logger.debug("Spawned pair %d/%d, top height %.1f", top.id, bottom.id, random_height)
        return ObstaclePair(top=top, bottom=bottom, trigger=trigger, random_height=random_height)

    @staticmethod
    def is_off_screen(entity) -> bool:
        """True once the entity has fully left past the left edge."""
        return entity.right_edge < 0
