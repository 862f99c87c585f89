"""Overlay drawing helpers.

- draw_tips: multi-line help text anchored at the top-left corner
- draw_info_panel: semi-transparent box in the top-right corner with session metrics
- draw_detections: face rectangles in full-frame coordinates
- to_grayscale: single-channel copy used when the grayscale toggle is on

Text placement goes through layout_lines so it can be tested with a fake measure.
"""
from __future__ import annotations
from typing import Callable, List, Optional, Sequence, Tuple

import cv2
import numpy as np

from facecam.config import Settings
from facecam.models import Rect, SessionMetrics

FONT = cv2.FONT_HERSHEY_DUPLEX
TIP_COLOR = (0, 255, 0)
PANEL_COLOR = (0, 0, 0)
PANEL_TEXT_COLOR = (255, 255, 255)
FACE_COLOR = (0, 0, 255)
FACE_THICKNESS = 5
PANEL_PADDING = 8

Measure = Callable[[str], Tuple[int, int]]


def tips_for(settings: Settings) -> List[str]:
    return [
        f"Press '{settings.TOGGLE_KEY}' to toggle grayscale mode",
        "Press any key to exit",
    ]


def text_measure(font_scale: float, thickness: int = 1) -> Measure:
    """(width, height) of a line as rendered by putText with these font settings."""
    def measure(text: str) -> Tuple[int, int]:
        (w, h), _baseline = cv2.getTextSize(text, FONT, font_scale, thickness)
        return w, h
    return measure


def layout_lines(lines: Sequence[str],
                 origin: Tuple[int, int],
                 gap: int,
                 measure: Measure) -> List[Tuple[str, Tuple[int, int]]]:
    """Place each line below the previous one.

    The first line sits at `origin`; every later line is moved down by the
    previous line's measured height plus `gap`.
    """
    x, y = origin
    placed: List[Tuple[str, Tuple[int, int]]] = []
    prev_h: Optional[int] = None
    for text in lines:
        if prev_h is not None:
            y += prev_h + gap
        placed.append((text, (x, y)))
        prev_h = measure(text)[1]
    return placed


def _put_lines(frame: np.ndarray, placed, font_scale: float, color) -> None:
    for text, org in placed:
        cv2.putText(frame, text, org, FONT, font_scale, color, 1, cv2.LINE_AA)


def draw_tips(frame: np.ndarray, settings: Settings, tips: Optional[Sequence[str]] = None) -> np.ndarray:
    """Draw the help lines in place and return the frame."""
    lines = tips_for(settings) if tips is None else tips
    placed = layout_lines(
        lines,
        (settings.TIP_ORIGIN_X, settings.TIP_ORIGIN_Y),
        settings.LINE_GAP,
        text_measure(settings.TIP_FONT_SCALE),
    )
    _put_lines(frame, placed, settings.TIP_FONT_SCALE, TIP_COLOR)
    return frame


def panel_lines(metrics: SessionMetrics, face_count: Optional[int]) -> List[str]:
    lines = [
        f"Resolution: {metrics.width} x {metrics.height}",
        f"FPS: {metrics.fps:.1f}",
    ]
    if face_count is not None:
        lines.append(f"Faces: {face_count}")
    return lines


def panel_box(frame_w: int, frame_h: int, settings: Settings) -> Tuple[int, int, int, int]:
    """(x0, y0, x1, y1) of the info panel, clamped to the frame."""
    x1 = max(0, frame_w - settings.PANEL_MARGIN)
    x0 = max(0, x1 - settings.PANEL_WIDTH)
    y0 = min(settings.PANEL_MARGIN, frame_h)
    y1 = min(frame_h, y0 + settings.PANEL_HEIGHT)
    return x0, y0, x1, y1


def draw_info_panel(frame: np.ndarray, lines: Sequence[str], settings: Settings) -> np.ndarray:
    """Blend a dark box into the top-right corner and write `lines` inside it.

    Only the box region is blended: (1 - PANEL_ALPHA) of the frame plus
    PANEL_ALPHA of the panel color. The frame is modified in place and returned.
    """
    h, w = frame.shape[:2]
    x0, y0, x1, y1 = panel_box(w, h, settings)
    if x1 <= x0 or y1 <= y0:
        return frame

    roi = frame[y0:y1, x0:x1]
    panel = np.empty_like(roi)
    panel[:] = PANEL_COLOR if roi.ndim == 3 else PANEL_COLOR[0]
    frame[y0:y1, x0:x1] = cv2.addWeighted(roi, 1.0 - settings.PANEL_ALPHA, panel, settings.PANEL_ALPHA, 0)

    measure = text_measure(settings.PANEL_FONT_SCALE)
    first_h = measure(lines[0])[1] if lines else 0
    placed = layout_lines(
        lines,
        (x0 + PANEL_PADDING, y0 + PANEL_PADDING + first_h),
        settings.LINE_GAP,
        measure,
    )
    _put_lines(frame, placed, settings.PANEL_FONT_SCALE, PANEL_TEXT_COLOR)
    return frame


def draw_detections(frame: np.ndarray, faces: Sequence[Rect]) -> np.ndarray:
    """Draw rectangles already in full-frame coordinates."""
    for face in faces:
        top_left, bottom_right = face.corners()
        cv2.rectangle(frame, top_left, bottom_right, FACE_COLOR, FACE_THICKNESS, cv2.LINE_8)
    return frame


def to_grayscale(frame: np.ndarray) -> np.ndarray:
    if frame.ndim == 2:
        return frame
    return cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
