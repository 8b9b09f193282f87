import logging
from typing import Dict, List, Sequence

from juggling.state import (HandDetection, HandPosition, LEFT, RIGHT,
                            PALM_ANCHOR_INDEX)

# Configure logging
logger = logging.getLogger(__name__)

SIDE_BY_LABEL = {'Left': LEFT, 'Right': RIGHT}
MAX_TRACKED_HANDS = 2


def detections_from_results(result) -> List[HandDetection]:
    """Convert a MediaPipe Hands result into HandDetection objects."""
    detections: List[HandDetection] = []
    if not result.multi_hand_landmarks or not result.multi_handedness:
        return detections

    for hand_landmarks, handedness in zip(result.multi_hand_landmarks, result.multi_handedness):
        label = handedness.classification[0].label
        detections.append(HandDetection(label, hand_landmarks.landmark))
    return detections


class HandTracker:
    """Keeps the palm anchor position and velocity of both hands.

    Velocity is the raw one-frame delta of the anchor, so its magnitude
    depends on the camera frame rate. A hand missing from a frame keeps its
    last position and velocity, only `is_present` is cleared.
    """

    def __init__(self):
        self.hands: Dict[str, HandPosition] = {
            LEFT: HandPosition(),
            RIGHT: HandPosition(),
        }

    def __getitem__(self, side: str) -> HandPosition:
        return self.hands[side]

    @property
    def left(self) -> HandPosition:
        return self.hands[LEFT]

    @property
    def right(self) -> HandPosition:
        return self.hands[RIGHT]

    def update(self, detections: Sequence[HandDetection]) -> None:
        """Apply one frame of detections."""
        previous = {side: (hand.x, hand.y) for side, hand in self.hands.items()}
        for hand in self.hands.values():
            hand.is_present = False

        for detection in list(detections)[:MAX_TRACKED_HANDS]:
            side = SIDE_BY_LABEL.get(detection.label)
            if side is None:
                logger.debug(f"Ignoring hand with unknown label {detection.label!r}")
                continue
            if len(detection.landmarks) <= PALM_ANCHOR_INDEX:
                logger.debug(f"Ignoring {side} hand with {len(detection.landmarks)} landmarks")
                continue

            anchor = detection.landmarks[PALM_ANCHOR_INDEX]
            prev_x, prev_y = previous[side]
            hand = self.hands[side]
            hand.vx = anchor.x - prev_x
            hand.vy = anchor.y - prev_y
            hand.x = anchor.x
            hand.y = anchor.y
            hand.is_present = True
