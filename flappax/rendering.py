"""Rasterising the character grid to RGB frames and videos."""
import time

import cv2
import numpy as np
from typing import Optional

from flappax.state import Canvas, GameState
from flappax.constants import SCREEN_WIDTH, SCREEN_HEIGHT, GLYPH_SPACE, NUM_COLORS

FONT = cv2.FONT_HERSHEY_PLAIN


def create_color_scheme(scheme: str = "classic") -> np.ndarray:
    """Get the RGB palette for a named colour scheme.

    Args:
        scheme: Colour scheme name ("classic", "amber", "mono")

    Returns:
        uint8 array of shape (NUM_COLORS, 3), indexed by the palette constants
        (BLACK, WHITE, YELLOW, RED, NAVY)
    """
    schemes = {
        "classic": [(0, 0, 0), (255, 255, 255), (255, 255, 0), (255, 0, 0), (0, 0, 128)],
        "amber": [(0, 0, 0), (255, 176, 0), (255, 210, 80), (200, 90, 0), (40, 20, 0)],
        "mono": [(0, 0, 0), (255, 255, 255), (255, 255, 255), (170, 170, 170), (40, 40, 40)],
    }

    if scheme not in schemes:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(schemes.keys())}"
        )

    palette = np.array(schemes[scheme], dtype=np.uint8)
    assert palette.shape == (NUM_COLORS, 3)
    return palette


def canvas_to_rgb(
    canvas: Canvas,
    cell_width: int = 8,
    cell_height: int = 12,
    palette: Optional[np.ndarray] = None,
) -> np.ndarray:
    """Convert a character grid to an RGB image.

    Args:
        canvas: Canvas with (80, 50) glyph and colour arrays
        cell_width: Pixel width of one character cell
        cell_height: Pixel height of one character cell
        palette: RGB palette from :func:`create_color_scheme` (default: classic)

    Returns:
        RGB array of shape (50*cell_height, 80*cell_width, 3) with uint8 values
    """
    if palette is None:
        palette = create_color_scheme()

    # Grid is (width, height); images are (height, width)
    glyphs = np.asarray(canvas.glyphs).T
    fg = np.asarray(canvas.fg).T
    bg = np.asarray(canvas.bg).T

    frame = palette[bg]
    frame = np.repeat(np.repeat(frame, cell_height, axis=0), cell_width, axis=1)
    frame = np.ascontiguousarray(frame)

    font_scale = cell_height / 14.0
    for row, col in zip(*np.nonzero(glyphs != GLYPH_SPACE)):
        color = tuple(int(c) for c in palette[fg[row, col]])
        origin = (int(col * cell_width), int((row + 1) * cell_height - 2))
        cv2.putText(frame, chr(glyphs[row, col]), origin, FONT, font_scale, color, 1, cv2.LINE_AA)

    return frame


def create_video(
        states: GameState,
        filename: str = None,
        fps: float = 60.0,
        scale: int = 1,
        color_scheme: str = "classic",
        display: bool = False
) -> None:
    """Display and/or save the canvases of a rollout as a video.

    Args:
        states: GameState with canvas glyphs of shape (N, 80, 50)
        filename: If provided, save video to this MP4 file
        fps: Video frame rate
        scale: Multiplier on the default 8x12 pixel cell
        color_scheme: Colour scheme for rendering
        display: If True, show video in window (press 'q' to quit, space to pause)
    """
    if states is None or (filename is None and not display):
        return
    glyphs = np.asarray(states.canvas.glyphs)
    if len(glyphs.shape) != 3 or glyphs.shape[1:] != (SCREEN_WIDTH, SCREEN_HEIGHT):
        raise ValueError(
            f"Expected canvas shape (N, {SCREEN_WIDTH}, {SCREEN_HEIGHT}), got {glyphs.shape}"
        )
    fg = np.asarray(states.canvas.fg)
    bg = np.asarray(states.canvas.bg)

    cell_width, cell_height = 8 * scale, 12 * scale
    width, height = SCREEN_WIDTH * cell_width, SCREEN_HEIGHT * cell_height
    palette = create_color_scheme(color_scheme)

    writer = None
    if filename:
        fourcc = cv2.VideoWriter_fourcc(*'mp4v')
        writer = cv2.VideoWriter(filename, fourcc, fps, (width, height))

    if display:
        window_name = "Flappax (q=quit, space=pause)"
        cv2.namedWindow(window_name, cv2.WINDOW_AUTOSIZE)

    frame_delay = 1.0 / fps if display else 0
    paused = False

    try:
        for i in range(glyphs.shape[0]):
            start_time = time.time()

            frame = canvas_to_rgb(
                Canvas(glyphs=glyphs[i], fg=fg[i], bg=bg[i]), cell_width, cell_height, palette
            )
            frame_bgr = cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)

            if writer:
                writer.write(frame_bgr)

            if display:
                cv2.imshow(window_name, frame_bgr)

                key = cv2.waitKey(1) & 0xFF
                if key == ord('q') or key == 27:  # 'q' or ESC
                    break
                elif key == ord(' '):
                    paused = not paused

                while paused:
                    key = cv2.waitKey(30) & 0xFF
                    if key == ord(' '):
                        paused = False
                    elif key == ord('q') or key == 27:
                        return

                elapsed = time.time() - start_time
                sleep_time = max(0, frame_delay - elapsed)
                if sleep_time > 0:
                    time.sleep(sleep_time)

    finally:
        if writer:
            writer.release()
        if display:
            cv2.destroyAllWindows()
