"""Drawing operations on the character grid.

Every operation is a pure function from one :class:`~flappax.state.Canvas` to the
next, so a whole tick (including its drawing) can be jit-compiled. Cells that
fall outside the grid are silently skipped, as a terminal would clip them.
"""

from typing import Optional

import jax.numpy as jnp

from flappax.state import Canvas
from flappax.constants import SCREEN_WIDTH, SCREEN_HEIGHT, GLYPH_SPACE, WHITE, BLACK, MAX_DIGITS

# Pre-computed coordinate grids for masked drawing
xx, yy = jnp.meshgrid(jnp.arange(SCREEN_WIDTH), jnp.arange(SCREEN_HEIGHT), indexing='ij')

_POWERS_OF_TEN = jnp.array([10 ** i for i in range(MAX_DIGITS - 1, -1, -1)], dtype=jnp.int32)


def _u8(value) -> jnp.ndarray:
    return jnp.asarray(value, dtype=jnp.uint8)


def cls(canvas: Canvas) -> Canvas:
    """Clear the screen to spaces, white on black."""
    return cls_bg(canvas, BLACK)


def cls_bg(canvas: Canvas, color) -> Canvas:
    """Clear the screen and fill every cell's background with ``color``."""
    return canvas.replace(
        glyphs=jnp.full_like(canvas.glyphs, GLYPH_SPACE),
        fg=jnp.full_like(canvas.fg, WHITE),
        bg=jnp.full_like(canvas.bg, color),
    )


def paint(canvas: Canvas, mask: jnp.ndarray, fg, bg, glyph) -> Canvas:
    """Set glyph and colours on every cell selected by a (width, height) mask."""
    return canvas.replace(
        glyphs=jnp.where(mask, _u8(glyph), canvas.glyphs),
        fg=jnp.where(mask, _u8(fg), canvas.fg),
        bg=jnp.where(mask, _u8(bg), canvas.bg),
    )


def set_glyph(canvas: Canvas, col, row, fg, bg, glyph) -> Canvas:
    """Set a single cell. Off-grid coordinates draw nothing."""
    return paint(canvas, (xx == col) & (yy == row), fg, bg, glyph)


def encode(text: str) -> jnp.ndarray:
    """ASCII codes for ``text`` plus one trailing space, so the buffer is never empty."""
    return jnp.array([ord(c) if ord(c) < 128 else ord("?") for c in text + " "], dtype=jnp.uint8)


def number_glyphs(value) -> tuple[jnp.ndarray, jnp.ndarray]:
    """Decimal digits of a non-negative integer, right-aligned in MAX_DIGITS cells.

    Returns:
        Tuple of (glyph codes, number of significant digits)
    """
    value = jnp.asarray(value, dtype=jnp.int32)
    digits = (value // _POWERS_OF_TEN) % 10
    length = jnp.maximum(1, jnp.sum(value >= _POWERS_OF_TEN))
    return _u8(ord("0") + digits), length


def layout(text: str, value=None) -> tuple[jnp.ndarray, jnp.ndarray]:
    """Glyph buffer and visible length for ``text``, with ``{}`` replaced by ``value``."""
    if value is None:
        return encode(text), jnp.asarray(len(text), dtype=jnp.int32)

    prefix, suffix = text.split("{}", 1)
    head, tail = encode(prefix), encode(suffix)
    digits, num_len = number_glyphs(value)

    k = jnp.arange(len(prefix) + MAX_DIGITS + len(suffix))
    start = len(prefix)
    codes = jnp.where(
        k < start,
        head[jnp.clip(k, 0, len(prefix))],
        jnp.where(
            k < start + num_len,
            digits[jnp.clip(MAX_DIGITS - num_len + k - start, 0, MAX_DIGITS - 1)],
            tail[jnp.clip(k - start - num_len, 0, len(suffix))],
        ),
    )
    return codes, start + num_len + len(suffix)


def _print_codes(canvas: Canvas, col, row, codes, length, fg, bg) -> Canvas:
    offset = xx - col
    mask = (yy == row) & (offset >= 0) & (offset < length)
    glyphs = codes[jnp.clip(offset, 0, codes.shape[0] - 1)]
    return canvas.replace(
        glyphs=jnp.where(mask, glyphs, canvas.glyphs),
        fg=jnp.where(mask, _u8(fg), canvas.fg),
        bg=jnp.where(mask, _u8(bg), canvas.bg),
    )


def print_text(canvas: Canvas, col, row, text: str, value=None, fg=WHITE, bg=BLACK) -> Canvas:
    """Print ``text`` starting at (col, row); ``{}`` in the text is filled with ``value``."""
    codes, length = layout(text, value)
    return _print_codes(canvas, col, row, codes, length, fg, bg)


def print_centered(canvas: Canvas, row, text: str, value: Optional[jnp.ndarray] = None,
                   fg=WHITE, bg=BLACK) -> Canvas:
    """Print ``text`` horizontally centred on ``row``."""
    codes, length = layout(text, value)
    col = SCREEN_WIDTH // 2 - length // 2
    return _print_codes(canvas, col, row, codes, length, fg, bg)
