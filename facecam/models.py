"""
Pydantic data models shared by the loop, the adapters and the viewer.
"""
from __future__ import annotations
from pydantic import BaseModel
from typing import Optional, Tuple


class Rect(BaseModel):
    x: int
    y: int
    w: int
    h: int

    @classmethod
    def from_xywh(cls, box) -> "Rect":
        x, y, w, h = (int(v) for v in box)
        return cls(x=x, y=y, w=w, h=h)

    def scaled(self, factor: float) -> "Rect":
        """Multiply position and size by `factor` (rounded to whole pixels)."""
        return Rect(
            x=int(round(self.x * factor)),
            y=int(round(self.y * factor)),
            w=int(round(self.w * factor)),
            h=int(round(self.h * factor)),
        )

    def corners(self) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        return (self.x, self.y), (self.x + self.w, self.y + self.h)


class SessionMetrics(BaseModel):
    width: int
    height: int
    fps: float


class OverlayState(BaseModel):
    grayscale: bool = False

    def toggle(self) -> bool:
        self.grayscale = not self.grayscale
        return self.grayscale


class ImageInfo(BaseModel):
    path: str
    width: int
    height: int
    channels: int
    is_grayscale: bool
    dims: int


class SessionSummary(BaseModel):
    metrics: Optional[SessionMetrics] = None
    frames_shown: int = 0
    empty_reads: int = 0
    faces_detected: int = 0
    grayscale: bool = False
    exit_key: Optional[int] = None
