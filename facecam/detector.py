"""
Haar-cascade face detection and the downscaled grayscale input it runs on.
"""
from __future__ import annotations
from pathlib import Path
from typing import List, Optional, Tuple
import logging

import cv2
import numpy as np

from facecam.config import Settings
from facecam.errors import StartupFailure, CollaboratorOperationFailure
from facecam.models import Rect

logger = logging.getLogger(__name__)


def prepare_for_detection(frame: np.ndarray, scale: float) -> np.ndarray:
    """Grayscale copy of `frame` shrunk by `scale` on both axes.

    The returned image is what the detector sees; boxes found on it must be
    multiplied by 1 / scale before drawing on `frame`.
    """
    gray = frame if frame.ndim == 2 else cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
    return cv2.resize(gray, (0, 0), fx=scale, fy=scale, interpolation=cv2.INTER_LINEAR)


class HaarFaceDetector:
    """Frontal face detector over cv2.CascadeClassifier."""

    def __init__(
        self,
        cascade_path: Optional[str] = None,
        min_size: Tuple[int, int] = (30, 30),
        scale_factor: float = 1.1,
        min_neighbors: int = 2,
    ):
        self.cascade_path = cascade_path or (cv2.data.haarcascades + "haarcascade_frontalface_alt.xml")
        self.min_size = min_size
        self.scale_factor = scale_factor
        self.min_neighbors = min_neighbors
        self._cascade = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "HaarFaceDetector":
        path = settings.CASCADE_PATH or (cv2.data.haarcascades + settings.CASCADE_FILE)
        return cls(
            cascade_path=path,
            min_size=(settings.MIN_FACE_SIZE, settings.MIN_FACE_SIZE),
            scale_factor=settings.SCALE_FACTOR,
            min_neighbors=settings.MIN_NEIGHBORS,
        )

    def load(self) -> "HaarFaceDetector":
        if not Path(self.cascade_path).is_file():
            raise StartupFailure(f"Cascade file not found: {self.cascade_path}")
        try:
            cascade = cv2.CascadeClassifier(self.cascade_path)
        except cv2.error as e:
            raise StartupFailure(f"Failed to load cascade: {self.cascade_path}") from e
        if cascade.empty():
            raise StartupFailure(f"Failed to load cascade: {self.cascade_path}")
        self._cascade = cascade
        logger.debug(f"[detector] loaded cascade {self.cascade_path}")
        return self

    def detect(self, image: np.ndarray) -> List[Rect]:
        if self._cascade is None:
            raise CollaboratorOperationFailure("detect() called before load()")
        try:
            faces = self._cascade.detectMultiScale(
                image,
                scaleFactor=self.scale_factor,
                minNeighbors=self.min_neighbors,
                flags=cv2.CASCADE_SCALE_IMAGE,
                minSize=self.min_size,
            )
        except cv2.error as e:
            raise CollaboratorOperationFailure(f"Face detection failed: {e}") from e
        # detectMultiScale returns an empty tuple when nothing is found
        return [Rect.from_xywh(f) for f in faces]
