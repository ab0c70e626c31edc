"""Tagged console output for the hook."""

from __future__ import annotations

import os
import sys
from typing import Optional, TextIO


TAG = "[pre-push]"

# ANSI
RED = "\033[0;31m"
YELLOW = "\033[0;33m"
GREEN = "\033[0;32m"
RESET = "\033[0m"


def color_enabled(mode: str, stream: TextIO) -> bool:
    if mode == "never":
        return False
    if mode == "always":
        return True
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class Console:
    """Prints `[pre-push]` lines; failures go red when color is on."""

    def __init__(self, stream: Optional[TextIO] = None, color: str = "auto"):
        self.stream = stream if stream is not None else sys.stdout
        self.use_color = color_enabled(color, self.stream)

    def _emit(self, text: str, color: str = "") -> None:
        if color and self.use_color:
            text = f"{color}{text}{RESET}"
        print(text, file=self.stream, flush=True)

    def info(self, msg: str) -> None:
        self._emit(f"{TAG} {msg}")

    def ok(self, msg: str) -> None:
        self._emit(f"{TAG} {msg}", GREEN)

    def warn(self, msg: str) -> None:
        self._emit(f"{TAG} Warning: {msg}", YELLOW)

    def fail(self, msg: str) -> None:
        self._emit("")
        self._emit(f"{TAG} {msg}", RED)

    def detail(self, line: str) -> None:
        self._emit(f"  {line}")
