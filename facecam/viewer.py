"""
Still-image viewer: load one file, report its properties, show it in a window.
"""
from __future__ import annotations
from pathlib import Path
from typing import Optional
import logging

import cv2
import numpy as np

from facecam.config import Settings
from facecam.display import WindowSink, window_flags
from facecam.errors import StartupFailure
from facecam.models import ImageInfo

logger = logging.getLogger(__name__)

READ_FLAGS = {
    "color": cv2.IMREAD_COLOR,
    "grayscale": cv2.IMREAD_GRAYSCALE,
    "unchanged": cv2.IMREAD_UNCHANGED,
}


def load_image(path: str, read_mode: str = "color") -> np.ndarray:
    """
    Decode an image file.

    Raises:
        StartupFailure: file missing or not decodable.
    """
    if not Path(path).is_file():
        raise StartupFailure(f"Image not found: {path}")
    image = cv2.imread(path, READ_FLAGS.get(read_mode, cv2.IMREAD_COLOR))
    if image is None or image.size == 0:
        raise StartupFailure(f"Image could not be decoded: {path}")
    return image


def describe_image(path: str, image: np.ndarray) -> ImageInfo:
    h, w = image.shape[:2]
    channels = 1 if image.ndim == 2 else int(image.shape[2])
    return ImageInfo(
        path=path,
        width=int(w),
        height=int(h),
        channels=channels,
        is_grayscale=(channels == 1),
        dims=int(image.ndim),
    )


def format_image_info(info: ImageInfo) -> str:
    return "\n".join([
        "[ Image Info ]:",
        f"resolution: {info.width} x {info.height}",
        f"Is grayscale: {info.is_grayscale}",
        f"Dimension: {info.dims}",
    ])


def show_image(path: str, settings: Settings, sink: Optional[WindowSink] = None) -> ImageInfo:
    """Show `path` until a key is pressed or IMAGE_WAIT_MS elapses."""
    image = load_image(path, settings.IMAGE_READ_MODE)
    info = describe_image(path, image)
    logger.info(f"[viewer] {format_image_info(info)}")

    sink = sink or WindowSink(settings.IMAGE_WINDOW_NAME, window_flags(settings, gui_normal=True))
    try:
        sink.create_window()
        sink.show(image)
        sink.poll_key(settings.IMAGE_WAIT_MS)
    finally:
        try:
            sink.destroy_all()
        except Exception:
            logger.exception("[viewer] destroying windows failed")
    return info
