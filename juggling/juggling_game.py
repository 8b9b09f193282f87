import logging
import time
from typing import List, Optional

import cv2
import mediapipe as mp
import pygame

from config.config import CONFIG
from juggling.coach import Coach, CoachBackend
from juggling.hands import detections_from_results
from juggling.renderer import Renderer
from juggling.session import GameSession
from juggling.state import (BallCaught, BallsDropped, BallThrown, ScoreChanged,
                            StateChanged)

# Configure logging
logger = logging.getLogger(__name__)

WINDOW_NAME = 'Juggling Master AR'


class JugglingGame:
    """Camera + MediaPipe shell around the juggling session."""

    def __init__(self, coach_backend: Optional[CoachBackend] = None):
        self.mp_hands = mp.solutions.hands
        self.hands = None
        self.cap = None
        self.active_camera_index = None
        self.available_cameras = []

        self.session = GameSession()
        self.renderer = Renderer()
        self.coach = Coach(coach_backend) if CONFIG['coach']['enabled'] else None

        # Sound system
        self.sound_enabled = CONFIG['enable_sounds']
        self.sounds = {}

    def _check_camera_permissions(self) -> None:
        """Check camera permissions on macOS."""
        import platform
        if platform.system() == "Darwin":  # macOS
            logger.info(
                "Running on macOS - if this is the first time running, you may need to grant camera permissions")
            logger.info(
                "If prompted, please allow camera access in System Preferences > Security & Privacy > Camera")

    def setup(self) -> None:
        """Initialize sound system, MediaPipe and camera."""
        self._check_camera_permissions()

        if self.sound_enabled:
            try:
                pygame.mixer.init(frequency=22050, size=-16, channels=1, buffer=512)
                self._load_sounds()
                logger.info("Sound system initialized successfully")
            except Exception as e:
                logger.warning(f"Failed to initialize sound system: {e}")
                self.sound_enabled = False

        try:
            self.hands = self.mp_hands.Hands(**CONFIG['hands_config'])
        except Exception as e:
            logger.error(f"Failed to initialize MediaPipe Hands: {e}")
            raise

        self._init_camera_with_retry()

    def _load_sounds(self) -> None:
        """Load sound files."""
        for sound_name, sound_file in CONFIG['sound_files'].items():
            try:
                self.sounds[sound_name] = pygame.mixer.Sound(sound_file)
                logger.info(f"Loaded sound: {sound_name}")
            except Exception as e:
                logger.warning(f"Failed to load sound {sound_name}: {e}")

    def _play_sound(self, sound_name: str) -> None:
        """Play a sound effect."""
        if self.sound_enabled and sound_name in self.sounds:
            try:
                self.sounds[sound_name].play()
            except Exception as e:
                logger.warning(f"Failed to play sound {sound_name}: {e}")

    def _open_camera(self, cam_idx: int) -> bool:
        """Open a camera and check that it delivers frames."""
        if self.cap:
            self.cap.release()

        self.cap = cv2.VideoCapture(cam_idx)
        if not self.cap.isOpened():
            logger.warning(f"Camera index {cam_idx} could not be opened")
            return False

        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, CONFIG['camera_width'])
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, CONFIG['camera_height'])
        self.cap.set(cv2.CAP_PROP_FPS, CONFIG['camera_fps'])

        ret, frame = self.cap.read()
        if not ret:
            logger.warning(f"Camera index {cam_idx} opened but cannot read frames")
            return False

        h, w = frame.shape[:2]
        logger.info(f"✓ SUCCESS: Using Camera {cam_idx} with resolution {w}x{h}")
        self.active_camera_index = cam_idx
        return True

    def _init_camera_with_retry(self) -> None:
        """Initialize camera with retry mechanism."""
        max_retries = 3
        camera_indices = [CONFIG['camera_index'], 0, 1]

        if not self.available_cameras:
            self._discover_available_cameras()

        for retry in range(max_retries):
            for cam_idx in camera_indices:
                logger.info(
                    f"Attempting to initialize camera {cam_idx} (attempt {retry + 1}/{max_retries})")
                try:
                    if self._open_camera(cam_idx):
                        logger.info(f"Available cameras: {self.available_cameras}")
                        return
                except Exception as e:
                    logger.warning(f"Failed to initialize camera {cam_idx}: {e}")

            if retry < max_retries - 1:
                logger.info("Waiting 2 seconds before retry...")
                time.sleep(2)

        raise RuntimeError(
            "Could not initialize any camera after multiple attempts. Please check camera permissions and availability.")

    def _discover_available_cameras(self) -> None:
        """Discover all available cameras."""
        logger.info("Discovering available cameras...")
        self.available_cameras = []

        for i in range(5):
            cap = cv2.VideoCapture(i)
            if cap.isOpened():
                ret, _ = cap.read()
                if ret:
                    self.available_cameras.append(i)
                    logger.info(f"Found working camera at index {i}")
            cap.release()

        if not self.available_cameras:
            logger.warning("No working cameras found!")
        else:
            logger.info(f"Total available cameras: {self.available_cameras}")

    def _reinit_camera(self) -> None:
        """Reinitialize camera if it fails during runtime."""
        logger.info("Attempting to reinitialize camera...")
        old_camera = self.active_camera_index
        if self.cap:
            self.cap.release()
        self._init_camera_with_retry()
        if self.active_camera_index != old_camera:
            logger.info(f"Camera switched from {old_camera} to {self.active_camera_index}")

    def _switch_camera(self) -> None:
        """Switch to the next available camera."""
        if len(self.available_cameras) <= 1:
            logger.info("Only one camera available, cannot switch.")
            return

        try:
            current_index = self.available_cameras.index(self.active_camera_index)
        except ValueError:
            current_index = -1
        next_camera = self.available_cameras[(current_index + 1) % len(self.available_cameras)]
        logger.info(f"Switching from camera {self.active_camera_index} to camera {next_camera}")

        if not self._open_camera(next_camera):
            logger.error(f"Failed to switch to camera {next_camera}")
            self._reinit_camera()

    def _handle_events(self, events: List) -> None:
        """Sounds and coach reactions for the events of one frame."""
        for event in events:
            if isinstance(event, BallCaught):
                self._play_sound('catch')
            elif isinstance(event, BallThrown):
                self._play_sound('throw')
            elif isinstance(event, BallsDropped):
                self._play_sound('drop')
            elif isinstance(event, ScoreChanged):
                logger.debug(f"Score: {event.score}")
            elif isinstance(event, StateChanged):
                logger.info(f"Game state: {event.state.value}")
                if self.coach:
                    self.coach.on_game_event(event, self.session.duration())

    def _change_ball_count(self, delta: int) -> None:
        if self.session.is_playing:
            logger.info("Pause the game to change the number of balls.")
            return
        count = self.session.target_ball_count + delta
        count = max(CONFIG['min_balls'], min(CONFIG['max_balls'], count))
        self.session.set_target_ball_count(count)

    def _handle_key(self, key: int) -> None:
        if key == ord('q'):
            logger.info("Exit requested by user.")
            raise SystemExit
        elif key == ord(' '):
            if not self.session.is_playing:
                self._handle_events(self.session.start())
        elif key == ord('p'):
            self._handle_events(self.session.pause())
        elif key == ord('g'):
            self._handle_events(self.session.end_game())
        elif key in (ord('+'), ord('=')):
            self._change_ball_count(1)
        elif key in (ord('-'), ord('_')):
            self._change_ball_count(-1)
        elif key == ord('t') and self.coach:
            self.coach.ask(CONFIG['coach']['tip_prompt'])
        elif key == ord('c'):
            logger.info("Camera switch requested by user.")
            self._switch_camera()

    def update_loop(self) -> None:
        """Process one frame of the video feed."""
        if not self.cap or not self.cap.isOpened():
            logger.error("Camera not initialized or closed.")
            return

        ret, frame = self.cap.read()
        if not ret:
            logger.warning("Failed to read frame from camera.")
            try:
                self._reinit_camera()
            except Exception as e:
                logger.error(f"Failed to reinitialize camera: {e}")
            return

        frame = cv2.flip(frame, 1)
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        result = self.hands.process(rgb)

        events = self.session.step(detections_from_results(result), time.time())
        self._handle_events(events)

        coach_text = self.coach.last_reply if self.coach else None
        coach_thinking = self.coach.is_thinking if self.coach else False
        self.renderer.draw(frame, self.session, coach_text, coach_thinking)

        cv2.imshow(WINDOW_NAME, frame)

        key = cv2.waitKey(1) & 0xFF
        if key != 0xFF:
            self._handle_key(key)

    def cleanup(self) -> None:
        """Release resources."""
        if self.coach:
            self.coach.close()
        if self.cap:
            self.cap.release()
        cv2.destroyAllWindows()
        if self.hands:
            self.hands.close()
        if self.sound_enabled:
            pygame.mixer.quit()
        logger.info("Resources cleaned up.")
