"""Console logging utilities for Flappax sessions and headless rollouts.

Provides a levelled console logger, a session logger that reports games as
they finish, and a real-time tqdm progress bar for jitted rollouts using
io_callback.
"""

import time
import sys
from typing import Any, Callable, Dict, List, Optional, Tuple

import jax
from jax.experimental import io_callback
from tqdm import tqdm

LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConsoleLogger:
    """Levelled console logger with optional colours and elapsed-time stamps."""

    colors = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    reset = "\033[0m"

    def __init__(
        self,
        name: str = "Flappax",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream=None,
    ):
        self.name = name
        self.log_level = log_level.upper()
        if self.log_level not in LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {LEVELS}")
        self.stream = stream if stream is not None else sys.stdout
        self.use_colors = (
            use_colors and hasattr(self.stream, "isatty") and self.stream.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def _should_log(self, level: str) -> bool:
        return LEVELS.index(level) >= LEVELS.index(self.log_level)

    def _format_message(self, level: str, message: str) -> str:
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        if self.use_colors:
            level_str = f"{self.colors[level]}{level_str}{self.reset}"
        return f"{timestamp}{level_str}[{self.name}] {message}"

    def log(self, level: str, message: str):
        level = level.upper()
        if self._should_log(level):
            print(self._format_message(level, message), file=self.stream, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


class SessionLogger(ConsoleLogger):
    """Logger for an interactive session: configuration, finished games, summary."""

    def __init__(self, name: str = "Session", **kwargs):
        super().__init__(name, **kwargs)
        self.scores: List[int] = []

    def log_session_start(self, config: Dict[str, Any]):
        self.info("=" * 60)
        self.info("Starting session with configuration:")
        for key, value in config.items():
            self.info(f"  {key}: {value}")
        self.info("=" * 60)

    def log_game_over(self, score: int):
        self.scores.append(score)
        best = max(self.scores)
        self.info(f"Game {len(self.scores)} over: {score} points (best {best})")

    def log_session_end(self):
        elapsed = time.time() - self.start_time
        self.info("=" * 60)
        self.info(f"Session ended after {elapsed / 60:.2f} minutes ({elapsed:.1f}s)")
        if self.scores:
            mean = sum(self.scores) / len(self.scores)
            self.info(f"  games: {len(self.scores)}")
            self.info(f"  best: {max(self.scores)}")
            self.info(f"  mean: {mean:.2f}")
        else:
            self.info("  no games finished")
        self.info("=" * 60)


def build_tqdm_progress_bar(
    n: int,
    print_rate: Optional[int] = None,
    desc: str = None,
    **kwargs,
) -> Tuple[Callable, Callable]:
    """Build a real-time tqdm progress bar driven from inside jitted code."""
    if desc is None:
        desc = f"Rollout ({n:,} ticks)"

    for kwarg in ("total", "mininterval", "maxinterval", "miniters"):
        kwargs.pop(kwarg, None)

    if print_rate is None:
        print_rate = max(1, min(n // 20, 50))
    else:
        print_rate = max(1, min(print_rate, n))

    remainder = n % print_rate
    tqdm_bars = {}

    def _define_tqdm():
        tqdm_bars[0] = tqdm(total=n, desc=desc, unit="tick", **kwargs)

    def _update_tqdm(steps):
        if 0 in tqdm_bars:
            tqdm_bars[0].update(int(steps))

    def _close_tqdm():
        if 0 in tqdm_bars:
            tqdm_bars[0].close()

    def _update_progress_bar(iter_num):
        _ = jax.lax.cond(
            iter_num == 0,
            lambda _: io_callback(_define_tqdm, None, ordered=True),
            lambda _: None,
            operand=None,
        )

        _ = jax.lax.cond(
            (iter_num % print_rate == 0) & (iter_num != n - remainder) & (iter_num > 0),
            lambda _: io_callback(_update_tqdm, None, print_rate, ordered=True),
            lambda _: None,
            operand=None,
        )

        _ = jax.lax.cond(
            iter_num == n - remainder,
            lambda _: io_callback(_update_tqdm, None, remainder, ordered=True),
            lambda _: None,
            operand=None,
        )

    def close_progress_bar(result, iter_num):
        _ = jax.lax.cond(
            iter_num == n - 1,
            lambda _: io_callback(_close_tqdm, None, ordered=True),
            lambda _: None,
            operand=None,
        )
        return result

    return _update_progress_bar, close_progress_bar


def scan_with_progress(
    n: int,
    print_rate: Optional[int] = None,
    desc: str = None,
    **tqdm_kwargs,
) -> Callable:
    """Decorator adding a real-time progress bar to the body of a ``jax.lax.scan``.

    The scanned ``xs`` must be the iteration number, or a tuple starting with it.
    """
    _update_progress_bar, close_progress_bar = build_tqdm_progress_bar(
        n, print_rate, desc, **tqdm_kwargs
    )

    def _scan_progress_decorator(func):
        def wrapper_with_progress(carry, x):
            iter_num = x[0] if isinstance(x, tuple) else x
            _update_progress_bar(iter_num)
            result = func(carry, x)
            return close_progress_bar(result, iter_num)

        return wrapper_with_progress

    return _scan_progress_decorator
