"""
Interactive pygame frontend: the display/input driver for the game core.

Owns the window, the frame clock and keyboard polling. Each frame it hands the
elapsed milliseconds and the key pressed during the frame to the jitted tick
function, then blits the resulting character grid.
"""

import jax
import numpy as np
import pygame

from flappax.state import GameState
from flappax.session import create_state
from flappax.tick_input import TickInput
from flappax.game import tick
from flappax.rendering import create_color_scheme
from flappax.logging import SessionLogger
from flappax.constants import SCREEN_WIDTH, SCREEN_HEIGHT, GLYPH_SPACE, GameMode, KEY_NONE, KEY_SPACE, KEY_P, KEY_Q

KEY_MAP = {
    pygame.K_SPACE: KEY_SPACE,
    pygame.K_p: KEY_P,
    pygame.K_q: KEY_Q,
}


class DriverInitError(RuntimeError):
    """The window or font could not be created."""


def translate_key(events) -> int:
    """Core key code for the first mapped key pressed among ``events``."""
    for event in events:
        if event.type == pygame.KEYDOWN and event.key in KEY_MAP:
            return KEY_MAP[event.key]
    return KEY_NONE


class GlyphRenderer:
    """Blits a canvas onto a pygame surface, caching one surface per (glyph, colour)."""

    def __init__(self, font: pygame.font.Font, cell_width: int, cell_height: int, palette: np.ndarray):
        self.font = font
        self.cell_width = cell_width
        self.cell_height = cell_height
        self.palette = [tuple(int(c) for c in color) for color in palette]
        self._cache = {}

    def _glyph(self, glyph: int, color: int) -> pygame.Surface:
        key = (glyph, color)
        if key not in self._cache:
            self._cache[key] = self.font.render(chr(glyph), True, self.palette[color])
        return self._cache[key]

    def draw(self, surface: pygame.Surface, state: GameState):
        glyphs = np.asarray(state.canvas.glyphs)
        fg = np.asarray(state.canvas.fg)
        bg = np.asarray(state.canvas.bg)

        for col in range(SCREEN_WIDTH):
            for row in range(SCREEN_HEIGHT):
                rect = pygame.Rect(col * self.cell_width, row * self.cell_height,
                                   self.cell_width, self.cell_height)
                surface.fill(self.palette[bg[col, row]], rect)
                if glyphs[col, row] != GLYPH_SPACE:
                    surface.blit(self._glyph(int(glyphs[col, row]), int(fg[col, row])), rect)


def open_window(title: str, cell_width: int, cell_height: int):
    """Initialise pygame and open the game window.

    Raises:
        DriverInitError: If the display or the font cannot be initialised
    """
    try:
        pygame.init()
        screen = pygame.display.set_mode((SCREEN_WIDTH * cell_width, SCREEN_HEIGHT * cell_height))
        pygame.display.set_caption(title)
        font = pygame.font.SysFont("monospace", cell_height)
    except pygame.error as e:
        pygame.quit()
        raise DriverInitError(f"Cannot open game window: {e}") from e
    return screen, font


def run_game(
    seed: int = 0,
    fps: int = 60,
    cell_width: int = 10,
    cell_height: int = 14,
    title: str = "Flappax",
    color_scheme: str = "classic",
    logger: SessionLogger = None,
) -> GameState:
    """Main loop. Returns the final state once the player quits or closes the window."""
    if logger is None:
        logger = SessionLogger()
    palette = create_color_scheme(color_scheme)

    try:
        screen, font = open_window(title, cell_width, cell_height)
    except DriverInitError as e:
        logger.error(str(e))
        raise

    renderer = GlyphRenderer(font, cell_width, cell_height, palette)
    clock = pygame.time.Clock()
    state = create_state(jax.random.PRNGKey(seed))
    mode = int(state.mode)

    logger.info("Controls: SPACE=Flap, P=Play, Q=Quit")

    try:
        while True:
            elapsed_ms = clock.tick(fps)

            events = pygame.event.get()
            if any(event.type == pygame.QUIT for event in events):
                break

            state = tick(state, TickInput(elapsed_ms=float(elapsed_ms), key=translate_key(events)))

            new_mode = int(state.mode)
            if new_mode != mode:
                if new_mode == GameMode.END:
                    logger.log_game_over(int(state.score))
                else:
                    logger.debug(f"Mode {GameMode(mode).name} -> {GameMode(new_mode).name}")
                mode = new_mode

            renderer.draw(screen, state)
            pygame.display.flip()

            if bool(state.quitting):
                break
    finally:
        pygame.quit()
        logger.log_session_end()

    return state
