"""Per-tick input handed to the game by the display/input driver."""

from chex import dataclass


@dataclass(frozen=True)
class TickInput:
    """Elapsed real time since the previous tick and the key pressed during it."""
    elapsed_ms: float
    key: int  # KEY_NONE when nothing was pressed
