"""Tests for the game loop state machine."""
from __future__ import annotations

import math
import random

import pytest

from chillflap.clock import ManualClock
from chillflap.data_models import ContactEvent, ContactKind, GameConfig, GameState
from chillflap.game_loop import GameLoop, SilentAudio
from chillflap.score_store import MemoryScoreStore


def put_on_flyer(loop: GameLoop, entity) -> None:
    entity.x, entity.y = loop.flyer.x, loop.flyer.y


class TestWaitingToStart:
    def test_initial_state(self, loop: GameLoop) -> None:
        assert loop.state == GameState.WAITING_TO_START
        assert loop.score == 0
        assert loop.obstacles == []
        assert loop.triggers == []
        assert (loop.flyer.x, loop.flyer.y) == (100.0, 400.0)
        assert not loop.flyer.dynamic

    def test_nothing_moves_while_waiting(self, loop: GameLoop) -> None:
        loop.tick(0.0)
        loop.tick(0.2)
        assert (loop.flyer.x, loop.flyer.y) == (100.0, 400.0)
        assert loop.flyer.vy == 0.0

    def test_spawn_refused_while_waiting(self, loop: GameLoop) -> None:
        assert loop.spawn_pair() is None
        assert loop.obstacles == []

    def test_activate_starts_game(self, loop: GameLoop, audio) -> None:
        loop.activate()
        assert loop.state == GameState.PLAYING
        assert loop.score == 0
        assert len(loop.obstacles) == 2
        assert len(loop.triggers) == 1
        for entity in loop.obstacles + loop.triggers:
            assert entity.x == 400 + 80 / 2
        assert loop.flyer.dynamic
        assert loop.time_since_last_spawn == 0.0
        assert audio.calls == ["play"]


class TestPlaying:
    def test_activate_flaps(self, loop: GameLoop) -> None:
        loop.activate()
        loop.activate()
        assert loop.state == GameState.PLAYING
        assert loop.flyer.vy == loop.config.impulse_force

    def test_flyer_falls(self, loop: GameLoop) -> None:
        loop.activate()
        loop.tick(0.0)
        loop.tick(0.1)
        assert loop.flyer.y < 400.0

    def test_obstacles_scroll_left(self, loop: GameLoop) -> None:
        loop.activate()
        x0 = loop.obstacles[0].x
        loop.update(0.1)
        assert math.isclose(loop.obstacles[0].x, x0 - 14.7)
        assert math.isclose(loop.triggers[0].x, x0 - 14.7)

    def test_velocity_bound_while_playing(self, loop: GameLoop) -> None:
        rng = random.Random(3)
        loop.activate()
        for _ in range(300):
            if loop.state != GameState.PLAYING:
                break
            if rng.random() < 0.15:
                loop.activate()
            loop.update(1 / 60)
            assert abs(loop.flyer.vy) <= loop.config.max_velocity

    def test_off_screen_entities_removed(self, loop: GameLoop) -> None:
        loop.activate()
        for entity in loop.obstacles + loop.triggers:
            entity.x = -100.0
        loop.update(0.0)
        assert loop.obstacles == []
        assert loop.triggers == []


class TestSpawnCadence:
    def test_pair_every_interval(self, store, audio) -> None:
        loop = GameLoop(score_store=store, config=GameConfig(gravity=0.0), audio=audio,
                        rng=random.Random(8))
        loop.activate()
        reports = [loop.update(0.1) for _ in range(14)]
        assert [r.spawned for r in reports] == [False] * 13 + [True]
        assert len(loop.obstacles) == 4
        assert len(loop.triggers) == 2
        assert loop.time_since_last_spawn == 0.0

    def test_timer_resets_on_start(self, loop: GameLoop) -> None:
        loop.time_since_last_spawn = 1.0
        loop.activate()
        assert loop.time_since_last_spawn == 0.0


class TestScoring:
    def test_trigger_contact_scores_once(self, loop: GameLoop) -> None:
        loop.activate()
        trigger = loop.triggers[0]
        put_on_flyer(loop, trigger)
        report = loop.update(0.0)
        assert [e.kind for e in report.contacts] == [ContactKind.SCORE]
        assert loop.score == 10
        assert loop.triggers == []

        loop.update(0.0)
        assert loop.score == 10

    def test_removing_missing_trigger_is_noop(self, loop: GameLoop) -> None:
        loop.activate()
        trigger_id = loop.triggers[0].id
        assert loop.remove_trigger(trigger_id)
        assert not loop.remove_trigger(trigger_id)

    def test_score_counts_before_crash_in_same_tick(self, loop: GameLoop) -> None:
        loop.activate()
        put_on_flyer(loop, loop.triggers[0])
        put_on_flyer(loop, loop.obstacles[0])
        report = loop.update(0.0)
        assert report.game_over
        assert loop.score == 10
        assert loop.state == GameState.GAME_OVER
        assert loop.high_score == 10

    def test_score_listener(self, loop: GameLoop) -> None:
        seen = []
        loop.add_listener("score_changed", seen.append)
        loop.activate()
        put_on_flyer(loop, loop.triggers[0])
        loop.update(0.0)
        assert seen == [0, 10]

    def test_duplicate_score_contacts_in_one_tick(self, loop: GameLoop) -> None:
        loop.activate()
        trigger_id = loop.triggers[0].id
        loop._handle_contacts([
            ContactEvent(ContactKind.SCORE, trigger_id),
            ContactEvent(ContactKind.SCORE, trigger_id),
        ])
        assert loop.score == 10
        assert loop.triggers == []


class TestGameOver:
    def test_crash_ends_game(self, loop: GameLoop, audio) -> None:
        loop.activate()
        put_on_flyer(loop, loop.obstacles[0])
        report = loop.update(1 / 60)
        assert report.game_over
        assert loop.state == GameState.GAME_OVER
        assert not loop.flyer.dynamic
        assert audio.calls == ["play", "stop"]

    def test_falling_below_screen_ends_game(self, loop: GameLoop) -> None:
        loop.activate()
        loop.flyer.y = -60.0
        loop.tick(0.0)
        assert loop.state == GameState.GAME_OVER

    def test_flyer_frozen_after_game_over(self, loop: GameLoop) -> None:
        loop.activate()
        loop.game_over()
        y0 = loop.flyer.y
        loop.update(0.2)
        assert loop.flyer.y == y0

    def test_obstacles_drift_but_no_spawns(self, loop: GameLoop) -> None:
        loop.activate()
        loop.game_over()
        x0 = loop.obstacles[0].x
        for _ in range(10):
            loop.update(0.2)
        assert math.isclose(loop.obstacles[0].x, x0 - 147.0 * 2.0)
        assert len(loop.obstacles) == 2

    def test_game_over_only_once(self, loop: GameLoop) -> None:
        changes = []
        loop.add_listener("state_changed", lambda old, new: changes.append(new))
        loop.activate()
        loop.game_over()
        loop.game_over()
        assert changes == [GameState.PLAYING, GameState.GAME_OVER]

    def test_high_score_kept_when_beaten(self, config, audio) -> None:
        store = MemoryScoreStore(50)
        loop = GameLoop(score_store=store, config=config, audio=audio)
        seen = []
        loop.add_listener("high_score_changed", seen.append)
        loop.activate()
        loop.score = 70
        loop.game_over()
        assert store.get_high_score() == 70
        assert loop.high_score == 70
        assert seen == [70]

    def test_high_score_never_decreases(self, config, audio) -> None:
        store = MemoryScoreStore(50)
        loop = GameLoop(score_store=store, config=config, audio=audio)
        seen = []
        loop.add_listener("high_score_changed", seen.append)
        loop.activate()
        loop.score = 30
        loop.game_over()
        assert store.get_high_score() == 50
        assert loop.high_score == 50
        assert seen == []


class TestRestart:
    def test_activate_after_game_over_waits(self, loop: GameLoop, audio) -> None:
        loop.activate()
        put_on_flyer(loop, loop.triggers[0])
        loop.update(0.0)
        loop.flyer.vy = -300.0
        loop.flyer.rotation = -0.3
        loop.game_over()

        loop.activate()
        assert loop.state == GameState.WAITING_TO_START
        assert loop.obstacles == []
        assert loop.triggers == []
        assert loop.score == 0
        assert (loop.flyer.x, loop.flyer.y) == (100.0, 400.0)
        assert loop.flyer.vy == 0.0
        assert loop.flyer.rotation == 0.0
        assert loop.last_timestamp is None
        assert audio.calls == ["play", "stop", "play"]

    def test_second_activate_resumes_play(self, loop: GameLoop) -> None:
        loop.activate()
        loop.game_over()
        loop.activate()
        loop.activate()
        assert loop.state == GameState.PLAYING
        assert len(loop.obstacles) == 2


class TestTiming:
    def test_first_tick_has_no_elapsed_time(self, loop: GameLoop) -> None:
        assert loop.tick(1000.0).dt == 0.0
        assert math.isclose(loop.tick(1000.5).dt, 0.25)

    def test_elapsed_between_ticks(self, loop: GameLoop) -> None:
        loop.tick(10.0)
        assert math.isclose(loop.tick(10.016).dt, 0.016)

    def test_clock_going_backwards(self, loop: GameLoop) -> None:
        loop.tick(10.0)
        assert loop.tick(5.0).dt == 0.0

    def test_reads_injected_clock(self, loop: GameLoop, clock: ManualClock) -> None:
        clock.reset(3.0)
        loop.tick()
        clock.advance(0.05)
        assert math.isclose(loop.tick().dt, 0.05)


class TestListeners:
    def test_unknown_event(self, loop: GameLoop) -> None:
        with pytest.raises(ValueError):
            loop.add_listener("flapped", lambda: None)

    def test_state_sequence(self, loop: GameLoop) -> None:
        changes = []
        loop.add_listener("state_changed", lambda old, new: changes.append((old, new)))
        loop.activate()
        loop.game_over()
        loop.activate()
        assert changes == [
            (GameState.WAITING_TO_START, GameState.PLAYING),
            (GameState.PLAYING, GameState.GAME_OVER),
            (GameState.GAME_OVER, GameState.WAITING_TO_START),
        ]

    def test_defaults_need_no_collaborators(self) -> None:
        loop = GameLoop()
        assert isinstance(loop.audio, SilentAudio)
        loop.activate()
        loop.tick()
        assert loop.state == GameState.PLAYING
