import logging
from typing import Iterable, Optional, Tuple

import cv2
import numpy as np

from config.config import CONFIG
from juggling.state import Ball, HandPosition, LEFT, RIGHT

# Configure logging
logger = logging.getLogger(__name__)

WHITE = (255, 255, 255)
GRAY = (170, 170, 170)
PURPLE = (250, 139, 167)


class Renderer:
    """Draws the game state over the camera frame with OpenCV."""

    def __init__(self):
        self.hand_colors = {
            LEFT: CONFIG['left_hand_color'],
            RIGHT: CONFIG['right_hand_color'],
        }

    @staticmethod
    def _to_pixels(frame: np.ndarray, x: float, y: float) -> Tuple[int, int]:
        h, w = frame.shape[:2]
        return int(x * w), int(y * h)

    def draw(self, frame: np.ndarray, session, coach_text: Optional[str] = None,
             coach_thinking: bool = False) -> None:
        """Draw one frame in place."""
        for side, hand in session.hands.hands.items():
            self._draw_hand_marker(frame, hand, self.hand_colors[side])

        self._draw_balls(frame, session.balls)
        self._draw_score(frame, session.score, session.high_score)

        if not session.is_playing:
            self._draw_setup_overlay(frame, session)

        self._draw_coach(frame, coach_text, coach_thinking)

    def _draw_hand_marker(self, frame: np.ndarray, hand: HandPosition,
                          color: Tuple[int, int, int]) -> None:
        """Dashed catch circle around the palm anchor."""
        if not hand.is_present:
            return
        center = self._to_pixels(frame, hand.x, hand.y)
        radius = int(CONFIG['hand_radius'] * frame.shape[1])
        for start in range(0, 360, 30):
            cv2.ellipse(frame, center, (radius, radius), 0,
                        start, start + 15, color, 3, cv2.LINE_AA)

    def _draw_balls(self, frame: np.ndarray, balls: Iterable[Ball]) -> None:
        w = frame.shape[1]
        held = []
        for ball in balls:
            center = self._to_pixels(frame, ball.x, ball.y)
            radius = max(1, int(ball.radius * w))
            cv2.circle(frame, center, radius, ball.color, -1, cv2.LINE_AA)
            cv2.circle(frame, center, radius, WHITE, 2, cv2.LINE_AA)
            if ball.is_held:
                held.append((center, radius))

        # Copy after every body is drawn; only held balls change in the blend
        if held:
            highlight = frame.copy()
            for center, radius in held:
                cv2.circle(highlight, center, radius, WHITE, -1, cv2.LINE_AA)
            alpha = CONFIG['held_highlight_alpha']
            cv2.addWeighted(highlight, alpha, frame, 1 - alpha, 0, frame)

    def _draw_score(self, frame: np.ndarray, score: int, high_score: int) -> None:
        overlay = frame.copy()
        cv2.rectangle(overlay, (10, 10), (190, 85), (0, 0, 0), -1)
        cv2.addWeighted(overlay, 0.6, frame, 0.4, 0, frame)
        cv2.rectangle(frame, (10, 10), (190, 85), (80, 80, 80), 1)

        cv2.putText(frame, "SCORE", (20, 30),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.45, GRAY, 1)
        cv2.putText(frame, str(score), (20, 62),
                    cv2.FONT_HERSHEY_SIMPLEX, 1.0, WHITE, 2)
        cv2.putText(frame, f"Best: {high_score}", (20, 80),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.4, GRAY, 1)

    def _draw_centered(self, frame: np.ndarray, text: str, y: int, scale: float,
                       color: Tuple[int, int, int], thickness: int) -> None:
        w = frame.shape[1]
        size = cv2.getTextSize(text, cv2.FONT_HERSHEY_SIMPLEX, scale, thickness)[0]
        cv2.putText(frame, text, ((w - size[0]) // 2, y),
                    cv2.FONT_HERSHEY_SIMPLEX, scale, color, thickness)

    def _draw_setup_overlay(self, frame: np.ndarray, session) -> None:
        """Setup/paused screen with the ball count selector."""
        h, w = frame.shape[:2]
        overlay = np.zeros_like(frame)
        alpha = CONFIG['overlay_transparency']
        cv2.addWeighted(frame, 1 - alpha, overlay, alpha, 0, frame)

        self._draw_centered(frame, "GAME SETUP", h // 2 - 130, 0.8, PURPLE, 2)
        self._draw_centered(frame, f"Number of Balls: {session.target_ball_count}",
                            h // 2 - 90, 0.7, WHITE, 2)

        # Ball count slider
        min_balls, max_balls = CONFIG['min_balls'], CONFIG['max_balls']
        left, right, bar_y = w // 2 - 150, w // 2 + 150, h // 2 - 60
        cv2.line(frame, (left, bar_y), (right, bar_y), (80, 80, 80), 6)
        share = (session.target_ball_count - min_balls) / max(1, max_balls - min_balls)
        knob_x = int(left + share * (right - left))
        cv2.circle(frame, (knob_x, bar_y), 10, PURPLE, -1, cv2.LINE_AA)
        cv2.putText(frame, f"{min_balls} (Easy)", (left, bar_y + 25),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.45, GRAY, 1)
        cv2.putText(frame, f"{max_balls} (Chaos)", (right - 80, bar_y + 25),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.45, GRAY, 1)

        action = "Start Juggling" if session.games_started == 0 else "Resume"
        self._draw_centered(frame, f"Press SPACE to {action}", h // 2 + 10, 0.9, WHITE, 2)
        self._draw_centered(frame, "Catch balls with your palms.", h // 2 + 55, 0.55, GRAY, 1)
        self._draw_centered(frame, "Flick your hand UP firmly to throw!", h // 2 + 80, 0.55, GRAY, 1)
        self._draw_centered(frame, "+/- balls   p pause   g end game   t tip   c camera   q quit",
                            h // 2 + 115, 0.45, GRAY, 1)

    def _draw_coach(self, frame: np.ndarray, text: Optional[str], thinking: bool) -> None:
        if thinking:
            text = "Coach is thinking..."
        if not text:
            return
        h, w = frame.shape[:2]
        max_chars = max(10, w // 11)
        if len(text) > max_chars:
            text = text[:max_chars - 3] + "..."

        overlay = frame.copy()
        cv2.rectangle(overlay, (0, h - 40), (w, h), (0, 0, 0), -1)
        cv2.addWeighted(overlay, 0.6, frame, 0.4, 0, frame)
        cv2.putText(frame, f"Coach: {text}", (10, h - 14),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, PURPLE, 1)
