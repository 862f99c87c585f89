# facecam/live.py
"""
Real-time webcam annotation loop.

Each iteration runs capture -> tips -> detect -> info panel -> boxes ->
(grayscale) -> show -> key poll, synchronously, until a key other than the
toggle key is pressed or a collaborator fails.

Collaborators are duck-typed so tests can pass fakes:
- source:   open(), read() -> frame | None, metrics() -> SessionMetrics, release()
- detector: load(), detect(image) -> list[Rect]
- sink:     create_window(), show(frame), poll_key(timeout_ms) -> int | None, destroy_all()
"""

from __future__ import annotations

import time
import logging
from typing import Callable, List, Literal, Optional, Tuple

import cv2
import numpy as np

from facecam.config import Settings
from facecam.capture import CameraSource
from facecam.detector import HaarFaceDetector, prepare_for_detection
from facecam.display import WindowSink, window_flags
from facecam.errors import CollaboratorOperationFailure
from facecam.models import OverlayState, SessionMetrics, SessionSummary
from facecam.visual import draw_tips, draw_info_panel, draw_detections, panel_lines, to_grayscale

logger = logging.getLogger(__name__)

KeyAction = Literal["TOGGLE", "EXIT"]


def interpret_key(key: Optional[int], toggle_code: int) -> Optional[KeyAction]:
    """
    Map a key-poll result to a loop action.
    - None: nothing pressed, keep going
    - toggle_code: flip grayscale mode
    - anything else: exit
    """
    if key is None:
        return None
    if key == toggle_code:
        return "TOGGLE"
    return "EXIT"


class FrameAnnotationLoop:
    """Owns the camera handle, the window and the grayscale toggle for one session."""

    def __init__(self, settings: Settings, source, sink, detector=None,
                 sleep: Callable[[float], None] = time.sleep):
        self.s = settings
        self.source = source
        self.sink = sink
        self.detector = detector
        self._sleep = sleep
        self.state = OverlayState()
        # (step, error) pairs; step is "release" or "destroy_all"
        self.cleanup_errors: List[Tuple[str, Exception]] = []

    # ---- lifecycle ----
    def run(self) -> SessionSummary:
        summary = SessionSummary()
        try:
            self._start(summary)
            self._loop(summary)
        finally:
            self.close()
        summary.grayscale = self.state.grayscale
        logger.info(f"[live] stopped frames_shown={summary.frames_shown} empty_reads={summary.empty_reads}")
        return summary

    def close(self) -> None:
        """Release the camera and destroy windows; each step runs even if the other fails."""
        for name, step in (("release", self.source.release), ("destroy_all", self.sink.destroy_all)):
            try:
                step()
            except Exception as e:
                logger.exception(f"[live] cleanup step {name} failed")
                self.cleanup_errors.append((name, e))

    def _start(self, summary: SessionSummary) -> None:
        self.sink.create_window()
        self.source.open()
        if self.detector is not None:
            self.detector.load()
        summary.metrics = self.source.metrics()
        logger.info("[live] Live camera is showing, press any key to close the app.")

    # ---- loop ----
    def _loop(self, summary: SessionSummary) -> None:
        while True:
            frame = self.source.read()
            if frame is None or frame.size == 0:
                summary.empty_reads += 1
                logger.warning(f"[live] empty frame from source; retrying in {self.s.CAPTURE_RETRY_SECONDS}s")
                self._sleep(self.s.CAPTURE_RETRY_SECONDS)
                continue

            shown, face_count = self.annotate(frame, summary.metrics)
            self.sink.show(shown)
            summary.frames_shown += 1
            summary.faces_detected += face_count or 0

            key = self.sink.poll_key(self.s.KEY_POLL_MS)
            action = interpret_key(key, self.s.toggle_code)
            if action == "TOGGLE":
                enabled = self.state.toggle()
                logger.info(f"[live] Grayscale mode enabled: {enabled}")
            elif action == "EXIT":
                summary.exit_key = key
                logger.debug(f"[live] exit key={key}")
                return

    def annotate(self, frame: np.ndarray, metrics: SessionMetrics) -> tuple[np.ndarray, Optional[int]]:
        """Draw every overlay on `frame`; returns the frame to display and the face count."""
        faces = []
        face_count = None
        try:
            draw_tips(frame, self.s)
            if self.detector is not None:
                # downscale and upscale both come from DETECT_SCALE
                small = prepare_for_detection(frame, self.s.DETECT_SCALE)
                raw = self.detector.detect(small)
                faces = [r.scaled(self.s.detection_upscale) for r in raw]
                face_count = len(faces)
                logger.debug(f"[live] faces={face_count} detect_input={small.shape[1]}x{small.shape[0]}")
            draw_info_panel(frame, panel_lines(metrics, face_count), self.s)
            draw_detections(frame, faces)
            # Overlays are drawn in color first; grayscale mode converts the finished frame
            if self.state.grayscale:
                frame = to_grayscale(frame)
        except cv2.error as e:
            raise CollaboratorOperationFailure(f"Frame annotation failed: {e}") from e
        return frame, face_count


# -----------------------------------------------------------------------------
# OpenCV-backed runners
# -----------------------------------------------------------------------------
def build_webcam_loop(settings: Settings, camera_index: Optional[int] = None, with_detector: bool = True) -> FrameAnnotationLoop:
    cam_idx = settings.CAMERA_INDEX if camera_index is None else camera_index
    source = CameraSource(cam_idx)
    sink = WindowSink(settings.WINDOW_NAME, window_flags(settings, gui_normal=False))
    detector = HaarFaceDetector.from_settings(settings) if with_detector else None
    return FrameAnnotationLoop(settings, source, sink, detector=detector)


def run_webcam_face_detection(settings: Settings, camera_index: Optional[int] = None) -> FrameAnnotationLoop:
    """
    Open the webcam, detect faces on a downscaled grayscale copy, draw tips,
    the info panel and face boxes. Press the toggle key for grayscale, any other key to quit.

    Returns the finished loop so callers can inspect `cleanup_errors`.
    """
    loop = build_webcam_loop(settings, camera_index, with_detector=True)
    loop.run()
    return loop


def run_webcam_preview(settings: Settings, camera_index: Optional[int] = None) -> FrameAnnotationLoop:
    """Same window and key handling as the detection loop, without a detector."""
    loop = build_webcam_loop(settings, camera_index, with_detector=False)
    loop.run()
    return loop
