"""A simple status spinner for long-running terminal operations."""

from __future__ import annotations

import os
import sys
import threading
from enum import Enum
from typing import TextIO

DEFAULT_FRAMES = ("⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷")
DEFAULT_INTERVAL = 0.5

_ERASE = "\r\033[K"


def _colors_enabled() -> bool:
    if "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb":
        return False
    isatty = getattr(sys.stdout, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        return False


def _colorize(text: str, code: str) -> str:
    """Wrap text in an ANSI colour sequence when the output is a colour terminal."""
    if not _colors_enabled():
        return text
    return f"\033[{code}m{text}\033[0m"


class SpinnerStatus(Enum):
    """Final status shown when a spinner stops."""

    OK = ("OK", "32")
    WARN_OK = ("OK", "36")
    WARN = ("WARN", "36")
    FAIL = ("FAIL", "31")

    @property
    def message(self) -> str:
        label, code = self.value
        return f"... [{_colorize(label, code)}]\n"


class Spinner:
    """Animated spinner that ends with a status line."""

    def __init__(
        self,
        stream: TextIO | None = None,
        frames: tuple[str, ...] = DEFAULT_FRAMES,
        interval: float = DEFAULT_INTERVAL,
    ) -> None:
        self.stream = stream if stream is not None else sys.stderr
        self.frames = frames
        self.interval = interval
        self.prefix = ""
        self.suffix = ""
        self._active = False
        self._lock = threading.Lock()
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def active(self) -> bool:
        return self._active

    def _render(self, frame: str) -> None:
        self.stream.write(f"{_ERASE}{self.prefix} {frame}{self.suffix} ")
        self.stream.flush()

    def _run(self) -> None:
        index = 1
        while not self._stopped.wait(self.interval):
            with self._lock:
                if not self._active:
                    return
                self._render(self.frames[index % len(self.frames)])
            index += 1

    def start(self, fmt: str, *args: object) -> None:
        """Start spinning with the formatted text as the prefix."""
        with self._lock:
            self.prefix = fmt % args if args else fmt
            if self._active:
                return
            self._active = True
            self._stopped.clear()
            self._render(self.frames[0])
            self._thread = threading.Thread(target=self._run, daemon=True)
            self._thread.start()

    def stop(self, status: SpinnerStatus) -> None:
        """Stop spinning and print the prefix followed by the status."""
        with self._lock:
            if not self._active:
                return
            self._active = False
            self.suffix = ""
            self.stream.write(_ERASE)
            self.stream.write(f"{self.prefix} {status.message}")
            self.stream.flush()
            self._stopped.set()
            thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def write(self, data: str | bytes) -> int:
        """Show the written text next to the spinner; returns its length."""
        text = data.decode(errors="replace") if isinstance(data, bytes) else data
        self.suffix = " " + text.strip()
        return len(data)

    def ok(self) -> None:
        self.stop(SpinnerStatus.OK)

    def warn_ok(self) -> None:
        self.stop(SpinnerStatus.WARN_OK)

    def warn(self) -> None:
        self.stop(SpinnerStatus.WARN)

    def fail(self) -> None:
        self.stop(SpinnerStatus.FAIL)