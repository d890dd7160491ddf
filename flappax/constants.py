"""Game constants: grid geometry, physics, colours and key codes."""

from enum import IntEnum

# Character grid
SCREEN_WIDTH = 80
SCREEN_HEIGHT = 50

# Simulation runs at most one step per FRAME_DURATION ms of real time
FRAME_DURATION = 75.0

# Player kinematics
GRAVITY = 0.35
TERMINAL_VELOCITY = 2.0
FLAP_VELOCITY = -2.0
PLAYER_START_X = 5
PLAYER_START_Y = 25.0

# Obstacles
GAP_Y_MIN = 10.0
GAP_Y_MAX = 40.0
MAX_GAP_SIZE = 20
MIN_GAP_SIZE = 2

# Glyphs (code page 437 / ASCII)
GLYPH_SPACE = ord(" ")
GLYPH_PLAYER = ord("@")
GLYPH_OBSTACLE = ord("|")

# Palette indices, resolved to RGB by flappax.rendering
BLACK = 0
WHITE = 1
YELLOW = 2
RED = 3
NAVY = 4
NUM_COLORS = 5

# Key codes handed to the core by the driver
KEY_NONE = 0
KEY_SPACE = 1
KEY_P = 2
KEY_Q = 3

# Widest number the HUD prints (int32 range)
MAX_DIGITS = 10


class GameMode(IntEnum):
    """Closed set of modes; values index the handler table in flappax.game."""
    MENU = 0
    PLAYING = 1
    END = 2
