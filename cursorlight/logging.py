"""Frame-stamped logging for the controller and the demo loop."""

from __future__ import annotations
import os
import sys
import time
from typing import Optional, TextIO


class Logger:
    """Writes tagged lines stamped with elapsed time and frame number."""

    def __init__(self, quiet: bool = False):
        self._start_time: float = time.perf_counter()
        self._frame: int = 0
        self.quiet: bool = quiet

    @property
    def frame(self) -> int:
        """Current frame number."""
        return self._frame

    @frame.setter
    def frame(self, value: int) -> None:
        self._frame = value

    def increment_frame(self) -> None:
        self._frame += 1

    @property
    def elapsed(self) -> float:
        """Seconds since the logger was created."""
        return time.perf_counter() - self._start_time

    def format(self, msg: str) -> str:
        return f"[{self.elapsed:7.3f}s F{self._frame:06d}] {msg}\n"

    def log(self, msg: str, stream: Optional[TextIO] = None) -> None:
        """Write one line. Falls back to stderr if stdout is gone."""
        if self.quiet:
            return
        line = self.format(msg)
        try:
            out = stream or sys.stdout
            out.write(line)
            out.flush()
        except (OSError, ValueError, AttributeError):
            # stdout closed or detached (pythonw, piped and closed)
            try:
                sys.stderr.write(line)
                sys.stderr.flush()
            except (OSError, ValueError, AttributeError):
                pass

    def __call__(self, msg: str) -> None:
        self.log(msg)


_logger: Optional[Logger] = None


def get_logger() -> Logger:
    """Get or create the process-wide logger."""
    global _logger
    if _logger is None:
        _logger = Logger(quiet=os.environ.get("CURSORLIGHT_QUIET", "") == "1")
    return _logger


def log(msg: str) -> None:
    get_logger().log(msg)


def set_quiet(quiet: bool) -> None:
    """Silence or re-enable all output from the shared logger."""
    get_logger().quiet = quiet


def get_frame() -> int:
    return get_logger().frame


def set_frame(frame: int) -> None:
    get_logger().frame = frame


def increment_frame() -> None:
    get_logger().increment_frame()


def now() -> float:
    """Current time in seconds (high precision)."""
    return time.perf_counter()
