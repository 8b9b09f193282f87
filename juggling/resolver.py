import logging
import random
from typing import Dict, List, Optional

from config.config import CONFIG
from juggling.balls import BallRegistry
from juggling.hands import HandTracker
from juggling.state import (Ball, BallsDropped, BallThrown, HandPosition, HANDS)

# Configure logging
logger = logging.getLogger(__name__)


def stack_offset(index: int, radius: float) -> float:
    """Vertical distance between the palm anchor and stack slot `index`."""
    slot = min(index, CONFIG['max_stack_height'])
    return CONFIG['stack_base_offset'] + slot * radius * CONFIG['stack_spacing']


class CatchThrowResolver:
    """Per-frame throw, stacking and drop decisions for held balls.

    Runs after the hand update and before physics. Catching happens in the
    physics step and is never throttled; throws are limited per hand by
    `throw_cooldown`.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.last_throw: Dict[str, float] = {side: float('-inf') for side in HANDS}

    def reset(self) -> None:
        for side in HANDS:
            self.last_throw[side] = float('-inf')

    def resolve(self, registry: BallRegistry, hands: HandTracker, now: float) -> List:
        """Resolve both hands, left first. Returns BallThrown/BallsDropped events."""
        events = []
        for side in HANDS:
            events.extend(self._resolve_hand(registry, hands[side], side, now))
        return events

    def _resolve_hand(self, registry: BallRegistry, hand: HandPosition, side: str,
                      now: float) -> List:
        held = registry.held_by(side)
        if not held:
            return []

        if not hand.is_present:
            for ball in held:
                registry.release(ball)
            ball_ids = tuple(ball.id for ball in held)
            logger.debug(f"{side} hand lost, dropped balls {ball_ids}")
            return [BallsDropped(side, ball_ids)]

        events = []
        if self._wants_throw(hand, side, now):
            ball = held.pop()
            self._throw(registry, ball, hand)
            self.last_throw[side] = now
            logger.debug(f"{side} hand threw ball {ball.id} (hand vy={hand.vy:.3f})")
            events.append(BallThrown(ball.id, side))

        for index, ball in enumerate(held):
            ball.x = hand.x
            ball.y = hand.y - stack_offset(index, ball.radius)
            ball.vx = 0.0
            ball.vy = 0.0
        return events

    def _wants_throw(self, hand: HandPosition, side: str, now: float) -> bool:
        return (hand.vy < CONFIG['throw_threshold']
                and now - self.last_throw[side] > CONFIG['throw_cooldown'])

    def _throw(self, registry: BallRegistry, ball: Ball, hand: HandPosition) -> None:
        registry.release(ball)
        damping = CONFIG['throw_damping']
        ball.vy = hand.vy * damping - CONFIG['throw_pop']
        ball.vx = hand.vx * damping
        ball.vx += (self.rng.random() - 0.5) * CONFIG['throw_vx_jitter']
