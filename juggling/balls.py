import itertools
import logging
import random
from typing import Iterator, List, Optional

from config.config import CONFIG
from juggling.state import Ball

# Configure logging
logger = logging.getLogger(__name__)


class BallRegistry:
    """Owns every ball in play.

    Balls are never removed: a ball that falls off the screen is respawned
    at the top instead, so the population only grows through spawn().
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.balls: List[Ball] = []
        self._ids = itertools.count(1)
        self._catches = itertools.count(1)

    def __len__(self) -> int:
        return len(self.balls)

    def __iter__(self) -> Iterator[Ball]:
        return iter(self.balls)

    def _random_x(self) -> float:
        low, high = CONFIG['spawn_x_range']
        return low + self.rng.random() * (high - low)

    def _random_vx(self) -> float:
        return (self.rng.random() - 0.5) * CONFIG['spawn_vx_jitter']

    def spawn(self) -> Ball:
        """Add a new ball just above the visible area."""
        ball = Ball(
            id=next(self._ids),
            x=self._random_x(),
            y=CONFIG['spawn_y'],
            vx=self._random_vx(),
            vy=0.0,
            radius=CONFIG['ball_radius'],
            color=self.rng.choice(CONFIG['ball_colors']),
        )
        self.balls.append(ball)
        logger.debug(f"Spawned ball {ball.id} at x={ball.x:.2f} ({len(self.balls)} in play)")
        return ball

    def respawn(self, ball: Ball) -> None:
        """Move a ball back to a fresh spawn point, higher than a new spawn."""
        ball.x = self._random_x()
        ball.y = CONFIG['respawn_y']
        ball.vx = self._random_vx()
        ball.vy = 0.0
        ball.held_by = None

    def catch(self, ball: Ball, side: str) -> None:
        """Attach a ball to the top of a hand's stack and stop it."""
        ball.held_by = side
        ball.catch_order = next(self._catches)
        ball.vx = 0.0
        ball.vy = 0.0

    def release(self, ball: Ball) -> None:
        ball.held_by = None

    def held_by(self, side: str) -> List[Ball]:
        """Balls held by a hand, in catch order (last one is the top of the stack)."""
        held = [ball for ball in self.balls if ball.held_by == side]
        return sorted(held, key=lambda ball: ball.catch_order)

    def free(self) -> List[Ball]:
        return [ball for ball in self.balls if ball.held_by is None]

    def reset_out_of_bounds(self) -> int:
        """Respawn balls that are below the screen or far above it."""
        count = 0
        for ball in self.balls:
            if ball.y > 1 or ball.y < CONFIG['respawn_y']:
                self.respawn(ball)
                count += 1
        return count
