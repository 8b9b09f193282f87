import random

import pytest

from config.config import CONFIG
from juggling.resolver import CatchThrowResolver, stack_offset
from juggling.state import BallsDropped, BallThrown


def hold(registry, side, count):
    balls = [registry.spawn() for _ in range(count)]
    for ball in balls:
        registry.catch(ball, side)
    return balls


def move_hand(hand, x, y, vx=0.0, vy=0.0, present=True):
    hand.x, hand.y, hand.vx, hand.vy = x, y, vx, vy
    hand.is_present = present


@pytest.fixture
def resolver():
    return CatchThrowResolver(random.Random(7))


def test_throw_releases_top_of_stack(registry, hands, resolver):
    bottom, top = hold(registry, 'left', 2)
    move_hand(hands.left, 0.5, 0.5, vx=0.02, vy=-0.1)

    events = resolver.resolve(registry, hands, now=10.0)

    assert events == [BallThrown(top.id, 'left')]
    assert top.held_by is None
    assert bottom.held_by == 'left'
    assert top.vy == pytest.approx(-0.1 * 0.25 - 0.005)
    assert top.vx == pytest.approx(0.005, abs=CONFIG['throw_vx_jitter'] / 2)
    assert resolver.last_throw['left'] == 10.0


def test_throw_needs_fast_upward_hand(registry, hands, resolver):
    hold(registry, 'left', 1)
    move_hand(hands.left, 0.5, 0.5, vy=-0.05)

    assert resolver.resolve(registry, hands, now=10.0) == []
    assert len(registry.held_by('left')) == 1


def test_throw_respects_cooldown(registry, hands, resolver):
    hold(registry, 'right', 3)
    move_hand(hands.right, 0.5, 0.5, vy=-0.1)
    resolver.last_throw['right'] = 1.0

    assert resolver.resolve(registry, hands, now=1.3) == []
    assert len(registry.held_by('right')) == 3

    events = resolver.resolve(registry, hands, now=1.45)
    assert len(events) == 1
    assert len(registry.held_by('right')) == 2

    # Still moving up fast on the next frame, but cooling down
    assert resolver.resolve(registry, hands, now=1.5) == []
    assert len(registry.held_by('right')) == 2


def test_cooldown_is_per_hand(registry, hands, resolver):
    hold(registry, 'left', 1)
    hold(registry, 'right', 1)
    move_hand(hands.left, 0.3, 0.5, vy=-0.1)
    move_hand(hands.right, 0.7, 0.5, vy=-0.1)
    resolver.last_throw['left'] = 5.0

    events = resolver.resolve(registry, hands, now=5.1)

    assert [event.hand for event in events] == ['right']


def test_held_balls_follow_hand_with_stack_offsets(registry, hands, resolver):
    balls = hold(registry, 'left', 6)
    move_hand(hands.left, 0.4, 0.7, vx=0.03, vy=0.02)

    resolver.resolve(registry, hands, now=1.0)

    for index, ball in enumerate(balls):
        assert ball.x == pytest.approx(0.4)
        assert 0.7 - ball.y == pytest.approx(stack_offset(index, ball.radius))
        assert (ball.vx, ball.vy) == (0.0, 0.0)
    # Slots beyond the cap overlap
    assert balls[5].y == pytest.approx(balls[4].y)
    assert balls[0].y == pytest.approx(0.7 - CONFIG['stack_base_offset'])


def test_lost_hand_drops_everything(registry, hands, resolver):
    balls = hold(registry, 'right', 2)
    for ball in balls:
        ball.x, ball.y = 0.6, 0.4
    move_hand(hands.right, 0.6, 0.45, vy=-0.2, present=False)

    events = resolver.resolve(registry, hands, now=3.0)

    assert events == [BallsDropped('right', tuple(ball.id for ball in balls))]
    for ball in balls:
        assert ball.held_by is None
        assert (ball.vx, ball.vy) == (0.0, 0.0)
        assert (ball.x, ball.y) == (0.6, 0.4)


def test_hands_do_not_touch_each_others_balls(registry, hands, resolver):
    left_ball, = hold(registry, 'left', 1)
    right_ball, = hold(registry, 'right', 1)
    move_hand(hands.left, 0.2, 0.5)
    move_hand(hands.right, 0.8, 0.5, present=False)

    resolver.resolve(registry, hands, now=1.0)

    assert left_ball.held_by == 'left'
    assert left_ball.x == pytest.approx(0.2)
    assert right_ball.held_by is None
