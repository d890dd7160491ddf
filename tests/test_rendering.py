"""Tests for rasterising the character grid."""

import numpy as np
import pytest

from flappax.state import create_canvas
from flappax.canvas import cls_bg, set_glyph
from flappax.rendering import canvas_to_rgb, create_color_scheme, create_video
from flappax.constants import NAVY, RED, BLACK, GLYPH_OBSTACLE, NUM_COLORS


def test_color_schemes():
    for scheme in ["classic", "amber", "mono"]:
        palette = create_color_scheme(scheme)
        assert palette.shape == (NUM_COLORS, 3)
        assert palette.dtype == np.uint8


def test_unknown_color_scheme():
    with pytest.raises(ValueError):
        create_color_scheme("sepia")


def test_background_fill():
    palette = create_color_scheme("classic")
    frame = canvas_to_rgb(cls_bg(create_canvas(), NAVY), cell_width=4, cell_height=6, palette=palette)

    assert frame.shape == (50 * 6, 80 * 4, 3)
    assert np.all(frame == palette[NAVY])


def test_glyph_drawn_in_its_cell():
    palette = create_color_scheme("classic")
    canvas = set_glyph(create_canvas(), 2, 3, RED, BLACK, GLYPH_OBSTACLE)
    frame = canvas_to_rgb(canvas, cell_width=8, cell_height=12, palette=palette)

    cell = frame[3 * 12:4 * 12, 2 * 8:3 * 8]
    assert np.any(cell != palette[BLACK])
    # Nothing leaks into a far-away cell
    assert np.all(frame[40 * 12:41 * 12, 70 * 8:71 * 8] == palette[BLACK])


def test_create_video_without_output():
    assert create_video(None) is None
