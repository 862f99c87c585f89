"""
Configuration for the webcam and image programs.
"""
from pydantic import BaseModel
import os

READ_MODES = ("color", "grayscale", "unchanged")


def _env_bool(name: str, default: str = "0") -> bool:
    return (os.getenv(name, default) or default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """
    Runtime settings with environment-variable overrides.
    """
    CAMERA_INDEX: int = int(os.getenv("CAMERA_INDEX", "0"))
    WINDOW_NAME: str = os.getenv("WINDOW_NAME", "Web Cam Preview Window")
    IMAGE_WINDOW_NAME: str = os.getenv("IMAGE_WINDOW_NAME", "Image Preview")
    WINDOW_OPENGL: bool = _env_bool("WINDOW_OPENGL")

    # Detection runs on a copy shrunk by DETECT_SCALE; boxes are scaled back by its inverse
    DETECT_SCALE: float = float(os.getenv("DETECT_SCALE", "0.25"))
    CASCADE_PATH: str | None = os.getenv("CASCADE_PATH") or None
    CASCADE_FILE: str = os.getenv("CASCADE_FILE", "haarcascade_frontalface_alt.xml")
    MIN_FACE_SIZE: int = int(os.getenv("MIN_FACE_SIZE", "30"))
    SCALE_FACTOR: float = float(os.getenv("SCALE_FACTOR", "1.1"))
    MIN_NEIGHBORS: int = int(os.getenv("MIN_NEIGHBORS", "2"))

    CAPTURE_RETRY_SECONDS: float = float(os.getenv("CAPTURE_RETRY_SECONDS", "5"))
    KEY_POLL_MS: int = int(os.getenv("KEY_POLL_MS", "10"))
    TOGGLE_KEY: str = os.getenv("TOGGLE_KEY", "g")

    TIP_ORIGIN_X: int = int(os.getenv("TIP_ORIGIN_X", "5"))
    TIP_ORIGIN_Y: int = int(os.getenv("TIP_ORIGIN_Y", "30"))
    TIP_FONT_SCALE: float = float(os.getenv("TIP_FONT_SCALE", "0.8"))
    LINE_GAP: int = int(os.getenv("LINE_GAP", "10"))

    PANEL_WIDTH: int = int(os.getenv("PANEL_WIDTH", "280"))
    PANEL_HEIGHT: int = int(os.getenv("PANEL_HEIGHT", "88"))
    PANEL_MARGIN: int = int(os.getenv("PANEL_MARGIN", "2"))
    PANEL_ALPHA: float = float(os.getenv("PANEL_ALPHA", "0.7"))
    PANEL_FONT_SCALE: float = float(os.getenv("PANEL_FONT_SCALE", "0.6"))

    IMAGE_READ_MODE: str = os.getenv("IMAGE_READ_MODE", "color")
    IMAGE_WAIT_MS: int = int(os.getenv("IMAGE_WAIT_MS", "10000"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def __init__(self, **data):
        super().__init__(**data)
        if not (0.0 < self.DETECT_SCALE <= 1.0):
            raise ValueError(f"DETECT_SCALE must be in (0, 1], got {self.DETECT_SCALE}")
        if len(self.TOGGLE_KEY or "") != 1:
            raise ValueError(f"TOGGLE_KEY must be a single character, got {self.TOGGLE_KEY!r}")
        # Normalize read mode: lower-case, unknown values fall back to color
        mode = (self.IMAGE_READ_MODE or "color").strip().lower()
        if mode not in READ_MODES:
            mode = "color"
        object.__setattr__(self, "IMAGE_READ_MODE", mode)
        object.__setattr__(self, "LOG_LEVEL", (self.LOG_LEVEL or "INFO").strip().upper())

    @property
    def detection_upscale(self) -> float:
        return 1.0 / self.DETECT_SCALE

    @property
    def toggle_code(self) -> int:
        return ord(self.TOGGLE_KEY)
