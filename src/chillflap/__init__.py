"""
Chill Flap: a single-screen arcade game core with a pygame frontend.
"""

from .clock import ManualClock, MonotonicClock
from .collision import CollisionDetector
from .data_models import (
    ContactEvent, ContactKind, Flyer, GameConfig, GameState, Obstacle,
    ObstacleKind, ObstaclePair, ScoreTrigger, TickReport
)
from .game_loop import GameLoop, SilentAudio
from .physics_core import PhysicsBody
from .score_store import MemoryScoreStore, SqliteScoreStore
from .spawner import ObstacleSpawner

__version__ = "0.1.0"
