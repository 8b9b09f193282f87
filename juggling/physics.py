import logging
import math
from typing import List

from config.config import CONFIG
from juggling.balls import BallRegistry
from juggling.hands import HandTracker
from juggling.state import Ball, BallCaught, HandPosition, HANDS

# Configure logging
logger = logging.getLogger(__name__)


def bounce_walls(ball: Ball) -> bool:
    """Reflect a ball off the left/right walls. Returns True on a bounce."""
    if ball.radius <= ball.x <= 1 - ball.radius:
        return False
    ball.vx *= -CONFIG['wall_restitution']
    ball.x = max(ball.radius, min(1 - ball.radius, ball.x))
    return True


def in_catch_range(ball: Ball, hand: HandPosition) -> bool:
    """Elliptical palm test; the vertical distance counts less than horizontal."""
    if not hand.is_present:
        return False
    dx = ball.x - hand.x
    dy = (ball.y - hand.y) * CONFIG['catch_ellipse_factor']
    distance = math.sqrt(dx * dx + dy * dy)
    if distance >= ball.radius + CONFIG['hand_radius'] / 2:
        return False
    # Only catch balls that are falling or nearly still
    return ball.vy > CONFIG['catch_max_upward_velocity']


class PhysicsIntegrator:
    """Advances free balls by one frame: gravity, walls, catches, respawn."""

    def step(self, registry: BallRegistry, hands: HandTracker) -> List[BallCaught]:
        events = []
        for ball in registry.free():
            ball.vy += CONFIG['gravity']
            ball.y += ball.vy
            ball.x += ball.vx

            bounce_walls(ball)

            for side in HANDS:
                if in_catch_range(ball, hands[side]):
                    registry.catch(ball, side)
                    logger.debug(f"{side} hand caught ball {ball.id}")
                    events.append(BallCaught(ball.id, side))
                    break

            if not ball.is_held and ball.y > CONFIG['respawn_floor']:
                registry.respawn(ball)
        return events
