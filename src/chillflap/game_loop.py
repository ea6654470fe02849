"""
game_loop.py: The single-writer simulation loop and game state machine.

One host frame calls tick(); user input calls activate(). Nothing here
blocks or runs concurrently, so the loop owns every entity list outright.
"""

import logging
import random
from typing import Callable, Dict, List, Optional, Protocol

from .clock import Clock, MonotonicClock
from .collision import CollisionDetector
from .data_models import (
    ContactEvent, ContactKind, GameConfig, GameState, Obstacle, ObstaclePair,
    ScoreTrigger, TickReport
)
from .physics_core import PhysicsBody
from .score_store import MemoryScoreStore, ScoreStore
from .spawner import ObstacleSpawner

logger = logging.getLogger(__name__)


class AudioPlayer(Protocol):
    def play(self) -> None:
        ...

    def stop(self) -> None:
        ...


class SilentAudio:
    """Stands in when no ambient track is wired up."""

    def play(self) -> None:
        pass

    def stop(self) -> None:
        pass


class GameLoop:
    """
    Owns the flyer, the obstacle and trigger lists, the score and the
    WaitingToStart -> Playing -> GameOver -> WaitingToStart cycle.
    """

    EVENTS = ("score_changed", "state_changed", "high_score_changed")

    def __init__(self,
                 score_store: Optional[ScoreStore] = None,
                 config: Optional[GameConfig] = None,
                 clock: Optional[Clock] = None,
                 audio: Optional[AudioPlayer] = None,
                 rng: Optional[random.Random] = None):
        self.config = config or GameConfig()
        self.score_store = score_store if score_store is not None else MemoryScoreStore()
        self.clock = clock or MonotonicClock()
        self.audio = audio or SilentAudio()

        self.physics = PhysicsBody(self.config)
        self.spawner = ObstacleSpawner(self.config, rng)
        self.detector = CollisionDetector()

        self.state = GameState.WAITING_TO_START
        self.flyer = self.physics.create_flyer()
        self.obstacles: List[Obstacle] = []
        self.triggers: List[ScoreTrigger] = []
        self.score = 0
        self.high_score = self.score_store.get_high_score()

        self.time_since_last_spawn = 0.0
        self.last_timestamp: Optional[float] = None

        self._listeners: Dict[str, List[Callable]] = {name: [] for name in self.EVENTS}

    # ---------- Notifications ----------

    def add_listener(self, event: str, callback: Callable):
        if event not in self._listeners:
            raise ValueError(f"unknown event {event!r}, expected one of {self.EVENTS}")
        self._listeners[event].append(callback)

    def _emit(self, event: str, *args):
        for callback in self._listeners[event]:
            callback(*args)

    def _set_state(self, new_state: GameState):
        old_state, self.state = self.state, new_state
        logger.info("State %s -> %s", old_state.value, new_state.value)
        self._emit("state_changed", old_state, new_state)

    def _set_score(self, value: int):
        self.score = value
        self._emit("score_changed", value)

    # ---------- Input ----------

    def activate(self):
        """The single user input: start, flap or restart depending on state."""
        if self.state == GameState.WAITING_TO_START:
            self.start_game()
        elif self.state == GameState.PLAYING:
            self.physics.apply_impulse(self.flyer)
        else:
            self.restart()

    # ---------- Transitions ----------

    def start_game(self):
        self.time_since_last_spawn = 0.0
        self._set_state(GameState.PLAYING)
        self.flyer.dynamic = True
        self.spawn_pair()
        self._set_score(0)
        self.audio.play()

    def game_over(self):
        if self.state != GameState.PLAYING:
            return
        self._set_state(GameState.GAME_OVER)
        self.flyer.dynamic = False

        prior = self.score_store.get_high_score()
        self.high_score = max(prior, self.score)
        if self.score > prior:
            self.score_store.set_high_score(self.score)
            logger.info("New high score %d (was %d)", self.score, prior)
            self._emit("high_score_changed", self.high_score)

        self.audio.stop()

    def restart(self):
        self.obstacles.clear()
        self.triggers.clear()
        self.physics.respawn(self.flyer)
        self.time_since_last_spawn = 0.0
        self.last_timestamp = None
        self._set_score(0)
        self._set_state(GameState.WAITING_TO_START)
        self.audio.play()

    # ---------- Entities ----------

    def spawn_pair(self) -> Optional[ObstaclePair]:
        if self.state != GameState.PLAYING:
            logger.debug("Refused spawn while %s", self.state.value)
            return None
        pair = self.spawner.spawn_pair(self.config.screen_height, self.config.screen_width)
        self.obstacles.extend([pair.top, pair.bottom])
        self.triggers.append(pair.trigger)
        self.time_since_last_spawn = 0.0
        return pair

    def remove_trigger(self, trigger_id: int) -> bool:
        """Drops a trigger by id. Removing a missing trigger is a no-op."""
        for i, trigger in enumerate(self.triggers):
            if trigger.id == trigger_id:
                del self.triggers[i]
                return True
        return False

    def _advance_entities(self, dt: float):
        for entity in self.obstacles + self.triggers:
            entity.x += entity.vx * dt
        self.obstacles = [o for o in self.obstacles if not self.spawner.is_off_screen(o)]
        self.triggers = [t for t in self.triggers if not self.spawner.is_off_screen(t)]

    def _handle_contacts(self, events: List[ContactEvent]):
        for event in events:
            if event.kind == ContactKind.SCORE:
                if self.remove_trigger(event.other_id):
                    self._set_score(self.score + self.config.score_increment)
            elif event.kind == ContactKind.LETHAL:
                self.game_over()

    # ---------- Tick ----------

    def elapsed(self, now: float) -> float:
        """Seconds since the previous tick; 0 on the first tick or a clock reset."""
        last, self.last_timestamp = self.last_timestamp, now
        if last is None:
            return 0.0
        return min(max(0.0, now - last), self.config.max_tick_dt)

    def tick(self, now: Optional[float] = None) -> TickReport:
        if now is None:
            now = self.clock.now()
        return self.update(self.elapsed(now))

    def update(self, dt: float) -> TickReport:
        report = TickReport(dt=dt)

        if self.state == GameState.GAME_OVER:
            self._advance_entities(dt)
            return report
        if self.state != GameState.PLAYING:
            return report

        self.physics.integrate(self.flyer, dt)
        self._advance_entities(dt)

        report.contacts = self.detector.check_contacts(self.flyer, self.obstacles, self.triggers)
        self._handle_contacts(report.contacts)

        if self.state == GameState.PLAYING and self.physics.is_below_screen(self.flyer):
            self.game_over()

        if self.state != GameState.PLAYING:
            report.game_over = True
            return report

        self.time_since_last_spawn += dt
        if self.time_since_last_spawn >= self.config.pipe_spawn_interval:
            report.spawned = self.spawn_pair() is not None
        return report
