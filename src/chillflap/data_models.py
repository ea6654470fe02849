"""
data_models.py: Data structures for the game state.
"""

from dataclasses import dataclass, field
from enum import Enum

from .constants import (
    SCREEN_WIDTH, SCREEN_HEIGHT, FLYER_SIZE, FLYER_RADIUS,
    PIPE_WIDTH, PIPE_GAP, PIPE_SPEED, PIPE_SPAWN_INTERVAL, MIN_PIPE_HEIGHT,
    PIPE_MARGIN, SCORE_TRIGGER_WIDTH, SCORE_INCREMENT,
    GRAVITY_ACCEL, LINEAR_DAMPING, MAX_VELOCITY, IMPULSE_FORCE,
    ROTATION_SCALE, MAX_ROTATION, MIN_ROTATION, ROTATION_DURATION, MAX_TICK_DT
)


class GameState(Enum):
    WAITING_TO_START = "waiting_to_start"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class ObstacleKind(Enum):
    TOP = "top"
    BOTTOM = "bottom"


class ContactKind(Enum):
    SCORE = "score"
    LETHAL = "lethal"


@dataclass
class GameConfig:
    """Per-instance tuning. Defaults mirror constants.py."""
    screen_width: float = SCREEN_WIDTH
    screen_height: float = SCREEN_HEIGHT
    flyer_size: float = FLYER_SIZE
    flyer_radius: float = FLYER_RADIUS
    pipe_width: float = PIPE_WIDTH
    pipe_gap: float = PIPE_GAP
    pipe_speed: float = PIPE_SPEED
    pipe_spawn_interval: float = PIPE_SPAWN_INTERVAL
    min_pipe_height: float = MIN_PIPE_HEIGHT
    pipe_margin: float = PIPE_MARGIN
    score_trigger_width: float = SCORE_TRIGGER_WIDTH
    score_increment: int = SCORE_INCREMENT
    gravity: float = GRAVITY_ACCEL
    linear_damping: float = LINEAR_DAMPING
    max_velocity: float = MAX_VELOCITY
    impulse_force: float = IMPULSE_FORCE
    rotation_scale: float = ROTATION_SCALE
    max_rotation: float = MAX_ROTATION
    min_rotation: float = MIN_ROTATION
    rotation_duration: float = ROTATION_DURATION
    max_tick_dt: float = MAX_TICK_DT

    def __post_init__(self):
        if self.screen_width <= 0 or self.screen_height <= 0:
            raise ValueError("screen size must be positive")

    @property
    def spawn_x(self) -> float:
        """Center x of a freshly spawned pair, just past the right edge."""
        return self.screen_width + self.pipe_width / 2


@dataclass
class Flyer:
    """The player-controlled body. Position is its center, y points up."""
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    rotation: float = 0.0
    width: float = FLYER_SIZE
    height: float = FLYER_SIZE
    radius: float = FLYER_RADIUS
    dynamic: bool = False

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)


class BoxEdges:
    """Edge accessors for center-positioned rectangles."""

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    @property
    def half_extents(self) -> tuple[float, float]:
        return (self.width / 2, self.height / 2)

    @property
    def left_edge(self) -> float:
        return self.x - self.width / 2

    @property
    def right_edge(self) -> float:
        return self.x + self.width / 2

    @property
    def top_edge(self) -> float:
        return self.y + self.height / 2

    @property
    def bottom_edge(self) -> float:
        return self.y - self.height / 2


@dataclass
class Obstacle(BoxEdges):
    """A rectangular pipe. Position is its center."""
    id: int
    kind: ObstacleKind
    x: float
    y: float
    width: float
    height: float
    vx: float = 0.0


@dataclass
class ScoreTrigger(BoxEdges):
    """Invisible, non-colliding zone centered in a pair's gap."""
    id: int
    x: float
    y: float
    width: float
    height: float
    vx: float = 0.0


@dataclass
class ObstaclePair:
    top: Obstacle
    bottom: Obstacle
    trigger: ScoreTrigger
    random_height: float

    def members(self) -> list:
        return [self.top, self.bottom, self.trigger]


@dataclass
class ContactEvent:
    kind: ContactKind
    other_id: int


@dataclass
class TickReport:
    """What happened during one tick; handy for hosts and tests."""
    dt: float = 0.0
    contacts: list[ContactEvent] = field(default_factory=list)
    spawned: bool = False
    game_over: bool = False
