import pytest
import numpy as np

from facecam.config import Settings
from facecam.models import Rect, SessionMetrics


class ScriptedSource:
    """Yields the given frames in order; None entries simulate empty reads."""
    def __init__(self, frames, metrics=None):
        self.frames = list(frames)
        self.metrics_value = metrics or SessionMetrics(width=640, height=480, fps=30.0)
        self.opened = 0
        self.reads = 0
        self.released = 0
    def open(self):
        self.opened += 1
        return self
    def read(self):
        self.reads += 1
        if not self.frames:
            raise AssertionError("source exhausted; the loop should have stopped")
        return self.frames.pop(0)
    def metrics(self):
        return self.metrics_value
    def release(self):
        self.released += 1


class FakeDetector:
    def __init__(self, rects=None):
        self.rects = rects or []
        self.loaded = 0
        self.inputs = []
    def load(self):
        self.loaded += 1
        return self
    def detect(self, image):
        self.inputs.append(image.shape)
        return list(self.rects)


class RecordingSink:
    """Records shown frames and replays scripted key presses (None = no key)."""
    def __init__(self, keys):
        self.keys = list(keys)
        self.created = 0
        self.shown = []
        self.polls = []
        self.destroyed = 0
    def create_window(self):
        self.created += 1
    def show(self, frame):
        self.shown.append(frame.copy())
    def poll_key(self, timeout_ms):
        self.polls.append(timeout_ms)
        return self.keys.pop(0) if self.keys else None
    def destroy_all(self):
        self.destroyed += 1


def color_frame(h=480, w=640, value=100):
    return np.full((h, w, 3), value, dtype=np.uint8)


@pytest.fixture
def settings():
    return Settings(CAPTURE_RETRY_SECONDS=5, KEY_POLL_MS=10, DETECT_SCALE=0.25)


@pytest.fixture
def face_rect():
    return Rect(x=10, y=10, w=20, h=20)
