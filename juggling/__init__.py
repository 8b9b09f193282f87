"""
Juggling Master AR - catch and throw virtual balls with your hands.
"""

from .session import GameSession
from .state import GameState, Ball, HandPosition, HandDetection

__version__ = "1.0.0"
__all__ = [
    "GameSession",
    "GameState",
    "Ball",
    "HandPosition",
    "HandDetection"
]
