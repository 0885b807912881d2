"""Camera + MediaPipe hand tracking that drives the wheel like a touch pointer.

The index fingertip is the pointer position and a thumb/index pinch is the
finger touching the screen: pinch press -> DOWN, pinch held -> MOVE,
pinch release -> UP. The whole camera frame maps onto the wheel's normalized
bounding box. Capture and inference run on a background thread; the host
drains the queued events from its own loop with ``read()``.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from typing import Deque, List, Optional, Sequence

import cv2
import mediapipe as mp
import numpy as np

from src.control_types import PointerAction, PointerEvent, PointerSample, PointerSource, PointSmoother
from src.pinch import PinchState, PinchTracker

# Some mediapipe builds do not expose ``solutions`` at the top level, so we
# try the submodule import and keep a helpful error ready for callers.
try:
    from mediapipe import solutions as mp_solutions
except ImportError:
    mp_solutions = getattr(mp, "solutions", None)
if mp_solutions is None:
    MP_IMPORT_ERROR: Optional[ImportError] = ImportError(
        "mediapipe.solutions could not be imported. Install a mediapipe release that "
        "still ships the Hands solution (pip install 'mediapipe<0.10.30')."
    )
else:
    MP_IMPORT_ERROR = None


logger = logging.getLogger(__name__)

INDEX_TIP = 8
THUMB_TIP = 4
WRIST = 0
MIDDLE_MCP = 9
# Bound the backlog so a stalled host loop cannot grow memory without limit.
MAX_PENDING_EVENTS = 256


class VisionPointerSource(PointerSource):
    """Encapsulates OpenCV capture and MediaPipe Hands inference."""

    def __init__(
        self,
        camera_index: int = 0,
        smoothing_alpha: float = 0.5,
        smoothing_deadzone: float = 0.005,
        min_detection_confidence: float = 0.6,
        min_tracking_confidence: float = 0.5,
        mirror: bool = True,
        pinch_on_threshold: float = 0.35,
        pinch_off_threshold: float = 0.5,
        show_debug_overlay: bool = False,
        camera_width: int = 640,
        camera_height: int = 480,
    ) -> None:
        if MP_IMPORT_ERROR:
            raise MP_IMPORT_ERROR

        self.cap = cv2.VideoCapture(camera_index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, camera_width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, camera_height)
        if not self.cap.isOpened():
            logger.warning("Camera %d could not be opened; no pointer events will arrive", camera_index)

        self.hands = mp_solutions.hands.Hands(
            model_complexity=0,
            max_num_hands=1,
            min_detection_confidence=min_detection_confidence,
            min_tracking_confidence=min_tracking_confidence,
        )
        self.smoother = PointSmoother(alpha=smoothing_alpha, dead_zone=smoothing_deadzone)
        self.pinch_tracker = PinchTracker(on_threshold=pinch_on_threshold, off_threshold=pinch_off_threshold)
        self.mirror = mirror
        self.show_debug_overlay = show_debug_overlay
        self.window_name = "Wheel Camera"

        # Events are produced on the vision thread and drained by the host loop.
        self._lock = threading.Lock()
        self._pending: Deque[PointerEvent] = deque(maxlen=MAX_PENDING_EVENTS)
        self._stop_event = threading.Event()
        self._thread = threading.Thread(target=self._vision_loop, daemon=True)
        self._thread.start()

    def _fingertip(self, landmarks: Sequence) -> tuple[float, float]:
        tip = landmarks[INDEX_TIP]
        x = 1.0 - tip.x if self.mirror else tip.x
        return float(x), float(tip.y)

    def _pinch_distance(self, landmarks: Sequence) -> float:
        thumb = landmarks[THUMB_TIP]
        index = landmarks[INDEX_TIP]
        wrist = landmarks[WRIST]
        middle = landmarks[MIDDLE_MCP]
        # Normalize by palm length so the threshold works at any distance from the camera.
        scale = float(np.linalg.norm([middle.x - wrist.x, middle.y - wrist.y])) or 1.0
        return float(np.linalg.norm([thumb.x - index.x, thumb.y - index.y])) / scale

    def _emit(self, pinch: PinchState, position: Optional[tuple[float, float]]) -> None:
        if position is None:
            if pinch.released:
                # Hand vanished mid-gesture: release off-wheel so nothing is selected.
                self._push(PointerEvent(PointerAction.UP, PointerSample(float("nan"), float("nan"))))
            return

        sample = PointerSample(*position)
        if pinch.pressed:
            self._push(PointerEvent(PointerAction.DOWN, sample))
        elif pinch.released:
            self._push(PointerEvent(PointerAction.UP, sample))
        elif pinch.active:
            self._push(PointerEvent(PointerAction.MOVE, sample))

    def _push(self, event: PointerEvent) -> None:
        with self._lock:
            self._pending.append(event)

    def _overlay_debug(self, frame: np.ndarray, position: Optional[tuple[float, float]], pinch: PinchState) -> None:
        height, width, _ = frame.shape
        side = min(width, height)
        center = (width // 2, height // 2)
        # Wheel ring as seen by the camera: outer edge and the ignored center.
        cv2.circle(frame, center, side // 2, (200, 200, 200), 1)
        cv2.circle(frame, center, int(side * 0.15), (120, 120, 120), 1)
        if position is not None:
            px = int((1.0 - position[0] if self.mirror else position[0]) * width)
            py = int(position[1] * height)
            color = (0, 220, 120) if pinch.active else (0, 200, 255)
            cv2.circle(frame, (px, py), 10, color, -1 if pinch.active else 2)
        label = "PINCH" if pinch.active else "open"
        cv2.putText(frame, f"Pointer: {label}", (12, 28), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)

    def _vision_loop(self) -> None:
        """Capture frames and run inference without stalling the host loop."""

        while not self._stop_event.is_set():
            success, frame = self.cap.read()
            if not success:
                time.sleep(0.01)
                continue

            rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
            rgb_frame.flags.writeable = False
            results = self.hands.process(rgb_frame)

            position: Optional[tuple[float, float]] = None
            if results and results.multi_hand_landmarks:
                landmarks = results.multi_hand_landmarks[0].landmark
                position = self.smoother.update(self._fingertip(landmarks))
                pinch = self.pinch_tracker.update(self._pinch_distance(landmarks))
            else:
                pinch = self.pinch_tracker.update(None)

            self._emit(pinch, position)

            if self.show_debug_overlay:
                self._overlay_debug(frame, position, pinch)
                cv2.imshow(self.window_name, frame)
                if cv2.waitKey(1) & 0xFF == ord("q"):
                    self._stop_event.set()

        if self.show_debug_overlay:
            cv2.destroyAllWindows()

    def read(self) -> List[PointerEvent]:
        with self._lock:
            events = list(self._pending)
            self._pending.clear()
        return events

    def close(self) -> None:
        self._stop_event.set()
        if self._thread.is_alive():
            self._thread.join(timeout=1.5)
        if self.cap.isOpened():
            self.cap.release()
        self.hands.close()
        cv2.destroyAllWindows()
