"""Tests for drawing onto the character grid."""

import jax.numpy as jnp

from flappax.state import create_canvas, create_player
from flappax.canvas import cls, cls_bg, set_glyph, print_text, print_centered, number_glyphs
from flappax.player import draw_player
from flappax.obstacle import draw_obstacle
from flappax.constants import (
    GLYPH_SPACE, GLYPH_PLAYER, GLYPH_OBSTACLE, NAVY, BLACK, WHITE, YELLOW, RED, SCREEN_HEIGHT
)
from conftest import make_obstacle, row_text


class TestClear:

    def test_cls_bg(self):
        canvas = set_glyph(create_canvas(), 3, 3, RED, BLACK, GLYPH_OBSTACLE)
        canvas = cls_bg(canvas, NAVY)

        assert jnp.all(canvas.bg == NAVY)
        assert jnp.all(canvas.glyphs == GLYPH_SPACE)

    def test_cls(self):
        canvas = cls(cls_bg(create_canvas(), NAVY))
        assert jnp.all(canvas.bg == BLACK)
        assert jnp.all(canvas.fg == WHITE)


class TestGlyphs:

    def test_set_glyph(self):
        canvas = set_glyph(create_canvas(), 10, 20, YELLOW, BLACK, GLYPH_PLAYER)

        assert canvas.glyphs[10, 20] == GLYPH_PLAYER
        assert canvas.fg[10, 20] == YELLOW
        assert jnp.sum(canvas.glyphs != GLYPH_SPACE) == 1

    def test_off_grid_draws_nothing(self):
        canvas = create_canvas()
        for col, row in [(-1, 0), (80, 0), (0, -1), (0, 50), (200, 200)]:
            canvas = set_glyph(canvas, col, row, YELLOW, BLACK, GLYPH_PLAYER)
        assert jnp.all(canvas.glyphs == GLYPH_SPACE)

    def test_draw_player(self):
        canvas = draw_player(create_canvas(), create_player(x=30, y=12.8))
        assert canvas.glyphs[0, 12] == GLYPH_PLAYER
        assert jnp.sum(canvas.glyphs == GLYPH_PLAYER) == 1

    def test_draw_player_below_screen(self):
        canvas = draw_player(create_canvas(), create_player(y=50.5))
        assert jnp.all(canvas.glyphs == GLYPH_SPACE)


class TestObstacleDrawing:

    def test_bars_and_gap(self):
        # Screen column 45 - 5 = 40; gap rows 25 - 5 .. 25 + 5 (exclusive)
        canvas = draw_obstacle(create_canvas(), make_obstacle(45, 25.7, 10), 5)
        column = canvas.glyphs[40]

        assert jnp.all(column[:20] == GLYPH_OBSTACLE)
        assert jnp.all(column[20:30] == GLYPH_SPACE)
        assert jnp.all(column[30:SCREEN_HEIGHT] == GLYPH_OBSTACLE)
        assert jnp.all(canvas.fg[40, :20] == RED)
        assert jnp.sum(canvas.glyphs != GLYPH_SPACE) == 40

    def test_scrolls_with_player(self):
        obstacle = make_obstacle(45, 25.0, 10)
        canvas = draw_obstacle(create_canvas(), obstacle, 40)
        assert canvas.glyphs[5, 0] == GLYPH_OBSTACLE

    def test_off_screen_obstacle(self):
        canvas = draw_obstacle(create_canvas(), make_obstacle(200, 25.0, 10), 5)
        assert jnp.all(canvas.glyphs == GLYPH_SPACE)


class TestText:

    def test_print_text(self):
        canvas = print_text(create_canvas(), 0, 0, "Press SPACE to flap.")
        assert row_text(canvas, 0).startswith("Press SPACE to flap. ")

    def test_print_number(self):
        canvas = print_text(create_canvas(), 2, 1, "Score: {}", 105)
        assert row_text(canvas, 1) == "  Score: 105".ljust(80)

    def test_print_centered(self):
        canvas = print_centered(create_canvas(), 5, "You are dead!")
        # 13 characters starting at column 40 - 13 // 2
        assert row_text(canvas, 5)[34:47] == "You are dead!"
        assert row_text(canvas, 5)[:34].strip() == ""

    def test_print_centered_number(self):
        canvas = print_centered(create_canvas(), 6, "You earned {} points", 7)
        text = "You earned 7 points"
        start = 40 - len(text) // 2
        assert row_text(canvas, 6)[start:start + len(text)] == text

    def test_text_clipped_at_edge(self):
        canvas = print_text(create_canvas(), 75, 0, "0123456789")
        assert row_text(canvas, 0)[75:] == "01234"

    def test_number_glyphs(self):
        for value, expected in [(0, "0"), (7, "7"), (10, "10"), (2024, "2024")]:
            codes, length = number_glyphs(value)
            text = "".join(chr(c) for c in codes.tolist())
            assert int(length) == len(expected)
            assert text[-len(expected):] == expected
