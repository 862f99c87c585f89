"""
Frame source backed by cv2.VideoCapture.
"""
from __future__ import annotations
from typing import Optional
import logging

import cv2
import numpy as np

from facecam.errors import StartupFailure, CollaboratorOperationFailure
from facecam.models import SessionMetrics

logger = logging.getLogger(__name__)


class CameraSource:
    """Live camera; `0` is the default webcam, `1` the second one and so on."""

    def __init__(self, index: int = 0, api_preference: int = cv2.CAP_ANY):
        self.index = index
        self.api_preference = api_preference
        self._cap = None

    def open(self) -> "CameraSource":
        logger.debug(f"[capture] opening camera index={self.index}")
        cap = cv2.VideoCapture(self.index, self.api_preference)
        if not cap.isOpened():
            cap.release()
            raise StartupFailure(f"Unable to open camera index {self.index}")
        self._cap = cap
        return self

    def read(self) -> Optional[np.ndarray]:
        """Grab one frame; `None` when the device delivered nothing this time."""
        if self._cap is None:
            raise CollaboratorOperationFailure("read() called before open()")
        try:
            ok, frame = self._cap.read()
        except cv2.error as e:
            raise CollaboratorOperationFailure(f"Camera read failed: {e}") from e
        if not ok or frame is None or frame.size == 0:
            return None
        return frame

    def metrics(self) -> SessionMetrics:
        if self._cap is None:
            raise CollaboratorOperationFailure("metrics() called before open()")
        width = int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        height = int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        fps = float(self._cap.get(cv2.CAP_PROP_FPS) or 0.0)
        logger.debug(f"[capture] width={width} height={height} fps={fps}")
        return SessionMetrics(width=width, height=height, fps=fps)

    def release(self) -> None:
        if self._cap is None:
            return
        cap, self._cap = self._cap, None
        cap.release()
        logger.debug(f"[capture] released camera index={self.index}")
