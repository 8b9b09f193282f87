"""
Game session: owns the balls, hands, score and configuration, and advances
all of them with one synchronous step per tracking frame.
"""

import logging
import random
import time
from typing import Callable, List, Optional, Sequence

from config.config import CONFIG
from juggling.balls import BallRegistry
from juggling.hands import HandTracker
from juggling.physics import PhysicsIntegrator
from juggling.resolver import CatchThrowResolver
from juggling.state import (BallThrown, GameState, HandDetection, ScoreChanged,
                            StateChanged)

# Configure logging
logger = logging.getLogger(__name__)


class GameSession:
    """State machine for one player: IDLE (setup or paused) and PLAYING.

    GAME_OVER is never a resting state. end_game() reports it as an event
    and the session goes back to IDLE.
    """

    def __init__(self, rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = time.time):
        self.rng = rng or random.Random()
        self.clock = clock

        self.registry = BallRegistry(self.rng)
        self.hands = HandTracker()
        self.resolver = CatchThrowResolver(self.rng)
        self.physics = PhysicsIntegrator()

        self.state = GameState.IDLE
        self.score = 0
        self.high_score = 0
        self.target_ball_count = CONFIG['default_ball_count']
        self.active_ball_count = self.target_ball_count
        self.last_spawn_time = float('-inf')
        self.started_at: Optional[float] = None
        self.games_started = 0

    @property
    def balls(self):
        return self.registry.balls

    @property
    def is_playing(self) -> bool:
        return self.state == GameState.PLAYING

    def duration(self, now: Optional[float] = None) -> float:
        """Seconds since the current session started."""
        if self.started_at is None:
            return 0.0
        now = self.clock() if now is None else now
        return max(0.0, now - self.started_at)

    def set_target_ball_count(self, count: int) -> None:
        if self.is_playing:
            raise RuntimeError("Ball count can only be changed while not playing")
        if not CONFIG['min_balls'] <= count <= CONFIG['max_balls']:
            raise ValueError(
                f"Ball count must be between {CONFIG['min_balls']} and {CONFIG['max_balls']}, got {count}")
        self.target_ball_count = count
        logger.info(f"Target ball count set to {count}")

    def start(self, now: Optional[float] = None) -> List:
        """IDLE -> PLAYING: reset the score and pull stray balls back into view."""
        if self.is_playing:
            logger.warning("Session already playing, ignoring start")
            return []

        now = self.clock() if now is None else now
        self.score = 0
        self.active_ball_count = self.target_ball_count
        respawned = self.registry.reset_out_of_bounds()
        self.started_at = now
        self.games_started += 1
        self.state = GameState.PLAYING
        logger.info(
            f"Session started with {self.active_ball_count} balls ({respawned} respawned)")
        return [StateChanged(GameState.PLAYING, self.score)]

    def pause(self) -> List:
        """PLAYING -> IDLE without ending the game."""
        if not self.is_playing:
            return []
        self.state = GameState.IDLE
        logger.info(f"Session paused at score {self.score}")
        return [StateChanged(GameState.IDLE, self.score)]

    def end_game(self) -> List:
        """Externally triggered game over; reported once, then back to IDLE."""
        if not self.is_playing:
            return []
        self.state = GameState.IDLE
        self.high_score = max(self.high_score, self.score)
        logger.info(f"Game over! Final score: {self.score} (best {self.high_score})")
        return [StateChanged(GameState.GAME_OVER, self.score)]

    def step(self, detections: Sequence[HandDetection], now: Optional[float] = None) -> List:
        """Advance one frame and return the outward events it produced.

        Hands are always tracked so the markers keep following the player;
        balls only move while PLAYING.
        """
        self.hands.update(detections)
        if not self.is_playing:
            return []

        now = self.clock() if now is None else now
        events = []

        if (len(self.registry) < self.active_ball_count
                and now - self.last_spawn_time > CONFIG['spawn_interval']):
            self.registry.spawn()
            self.last_spawn_time = now

        for event in self.resolver.resolve(self.registry, self.hands, now):
            events.append(event)
            if isinstance(event, BallThrown):
                events.append(self._add_score(CONFIG['score_per_throw']))

        events.extend(self.physics.step(self.registry, self.hands))
        return events

    def _add_score(self, points: int) -> ScoreChanged:
        self.score += points
        self.high_score = max(self.high_score, self.score)
        return ScoreChanged(self.score, points)
