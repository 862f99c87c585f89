"""
Display sink backed by OpenCV highgui windows.
"""
from __future__ import annotations
from typing import Optional
import logging

import cv2
import numpy as np

from facecam.config import Settings
from facecam.errors import CollaboratorOperationFailure

logger = logging.getLogger(__name__)

NO_KEY = 0xFF


def window_flags(settings: Settings, gui_normal: bool = False) -> int:
    """Non-resizable window that keeps the image ratio.

    `gui_normal` selects the bare window without toolbar (image viewer);
    the webcam windows use WINDOW_NORMAL. WINDOW_OPENGL is opt-in: stock
    opencv-python wheels are built without it and namedWindow fails when
    it is requested.
    """
    flags = cv2.WINDOW_AUTOSIZE | cv2.WINDOW_KEEPRATIO
    flags |= cv2.WINDOW_GUI_NORMAL if gui_normal else cv2.WINDOW_NORMAL
    if settings.WINDOW_OPENGL:
        flags |= cv2.WINDOW_OPENGL
    return flags


class WindowSink:
    def __init__(self, name: str, flags: int = cv2.WINDOW_AUTOSIZE):
        self.name = name
        self.flags = flags

    def create_window(self) -> None:
        try:
            cv2.namedWindow(self.name, self.flags)
        except cv2.error as e:
            raise CollaboratorOperationFailure(f"Could not create window {self.name!r}: {e}") from e

    def show(self, frame: np.ndarray) -> None:
        try:
            cv2.imshow(self.name, frame)
        except cv2.error as e:
            raise CollaboratorOperationFailure(f"Could not show frame: {e}") from e

    def poll_key(self, timeout_ms: int) -> Optional[int]:
        """Wait up to `timeout_ms` for a key; `None` when nothing was pressed."""
        try:
            key = cv2.waitKey(timeout_ms)
        except cv2.error as e:
            raise CollaboratorOperationFailure(f"Key poll failed: {e}") from e
        # Some backends report "no key" as 255 instead of -1
        # 0 comes back for arrow/function keys on some backends; not an exit request
        if key <= 0 or (key & 0xFF) == NO_KEY:
            return None
        return key & 0xFF

    def destroy_all(self) -> None:
        cv2.destroyAllWindows()
