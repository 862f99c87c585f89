import numpy as np

from facecam.config import Settings
from facecam.models import Rect, SessionMetrics
from facecam.visual import (
    layout_lines, draw_tips, draw_info_panel, draw_detections, panel_box, panel_lines,
    to_grayscale, tips_for,
)


def test_layout_lines_uses_previous_line_height():
    heights = {"a": 10, "bb": 20, "ccc": 30}
    placed = layout_lines(["a", "bb", "ccc"], (5, 30), 10, lambda t: (len(t) * 7, heights[t]))
    assert placed == [("a", (5, 30)), ("bb", (5, 50)), ("ccc", (5, 80))]


def test_layout_lines_single_line_sits_on_origin():
    assert layout_lines(["only"], (3, 4), 10, lambda t: (1, 99)) == [("only", (3, 4))]


def test_tips_mention_toggle_key():
    assert tips_for(Settings(TOGGLE_KEY="t"))[0] == "Press 't' to toggle grayscale mode"


def test_draw_tips_touches_top_left_only():
    frame = np.zeros((200, 640, 3), dtype=np.uint8)
    out = draw_tips(frame, Settings())
    assert out is frame
    assert frame[:60, :400].any()
    assert not frame[120:, :].any()


def test_panel_box_top_right_with_margin():
    s = Settings()
    assert panel_box(640, 480, s) == (358, 2, 638, 90)


def test_panel_box_clamped_on_small_frame():
    s = Settings()
    x0, y0, x1, y1 = panel_box(100, 50, s)
    assert (x0, y0, x1, y1) == (0, 2, 98, 50)


def test_info_panel_blends_only_inside_box():
    s = Settings()
    frame = np.full((480, 640, 3), 100, dtype=np.uint8)
    draw_info_panel(frame, ["Resolution: 640 x 480", "FPS: 30.0", "Faces: 1"], s)

    # padding corner inside the box: 0.3 * frame + 0.7 * black
    assert tuple(frame[3, 359]) == (30, 30, 30)
    # outside the box
    assert tuple(frame[100, 100]) == (100, 100, 100)
    assert tuple(frame[0, 639]) == (100, 100, 100)
    # text is drawn in the panel
    assert (frame[2:90, 358:638] > 30).any()


def test_info_panel_on_grayscale_frame():
    frame = np.full((120, 400), 100, dtype=np.uint8)
    draw_info_panel(frame, ["FPS: 30.0"], Settings())
    assert frame.ndim == 2
    assert frame[3, 119] == 30


def test_panel_lines():
    m = SessionMetrics(width=1280, height=720, fps=29.97)
    assert panel_lines(m, 2) == ["Resolution: 1280 x 720", "FPS: 30.0", "Faces: 2"]
    assert panel_lines(m, None) == ["Resolution: 1280 x 720", "FPS: 30.0"]


def test_draw_detections_red_boxes():
    frame = np.zeros((200, 200, 3), dtype=np.uint8)
    draw_detections(frame, [Rect(x=40, y=40, w=80, h=80)])
    assert tuple(frame[40, 80]) == (0, 0, 255)
    assert tuple(frame[80, 80]) == (0, 0, 0)


def test_to_grayscale():
    frame = np.zeros((10, 10, 3), dtype=np.uint8)
    gray = to_grayscale(frame)
    assert gray.shape == (10, 10)
    assert to_grayscale(gray) is gray
