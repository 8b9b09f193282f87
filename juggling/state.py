"""
Shared data types for the juggling game: balls, hands, game states and the
events a frame step reports outward.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Tuple

LEFT = 'left'
RIGHT = 'right'
HANDS = (LEFT, RIGHT)  # resolution order

# Middle finger MCP in the 21-point MediaPipe hand model
PALM_ANCHOR_INDEX = 9


class GameState(Enum):
    IDLE = 'IDLE'
    PLAYING = 'PLAYING'
    GAME_OVER = 'GAME_OVER'  # reported outward only, never held


@dataclass
class Ball:
    """A ball in normalized screen space (origin top-left)."""
    id: int
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    radius: float = 0.04
    color: Tuple[int, int, int] = (255, 255, 255)
    held_by: Optional[str] = None
    catch_order: int = 0  # stack position key while held

    @property
    def is_held(self) -> bool:
        return self.held_by is not None


@dataclass
class HandPosition:
    """Palm anchor of one hand; velocity is the last frame-to-frame delta."""
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    is_present: bool = False


@dataclass
class HandDetection:
    """One detected hand as reported by the tracking source.

    `landmarks` holds objects with normalized `x`/`y` attributes, e.g.
    MediaPipe's NormalizedLandmark.
    """
    label: str
    landmarks: Sequence


@dataclass
class ChatMessage:
    role: str  # 'user', 'model' or 'system'
    text: str


# Outward events returned by GameSession.step and the transition methods

@dataclass(frozen=True)
class ScoreChanged:
    score: int
    delta: int


@dataclass(frozen=True)
class StateChanged:
    state: GameState
    score: int = 0


@dataclass(frozen=True)
class BallThrown:
    ball_id: int
    hand: str


@dataclass(frozen=True)
class BallCaught:
    ball_id: int
    hand: str


@dataclass(frozen=True)
class BallsDropped:
    hand: str
    ball_ids: Tuple[int, ...] = field(default_factory=tuple)
