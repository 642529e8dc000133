"""Animated progress indicators shown while slow work runs."""

from __future__ import annotations

import sys
import threading
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from gust.styles import FOAM, PROGRESS_MESSAGE_STYLE, Style

T = TypeVar("T")

_CLEAR_LINE = "\r\x1b[K"


@dataclass(frozen=True)
class SpinnerStyle:
    """The frames of an animation and the seconds each frame is shown."""

    frames: tuple[str, ...]
    interval: float


MINI_DOT = SpinnerStyle(("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"), 1 / 12)

WEATHER_EMOJIS = SpinnerStyle(
    ("☀️ ", "⛅️ ", "☁️ ", "🌧️ ", "⛈️ ", "❄️ ", "🌪️ ", "🌈 "),
    1 / 5,
)


class Spinner:
    """A coloured animation that advances one frame per tick."""

    def __init__(self, style: SpinnerStyle = MINI_DOT, color: str = FOAM) -> None:
        self.style = style
        self.color = color
        self.frame = 0
        self._painter = Style(foreground=color)

    def tick(self) -> None:
        self.frame = (self.frame + 1) % len(self.style.frames)

    def view(self) -> str:
        return self._painter.render(self.style.frames[self.frame])


def _is_terminal(stream: Any) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def run_with_spinner(
    message: str, style: SpinnerStyle, color: str, fn: Callable[[], T]
) -> T:
    """Run ``fn`` while animating a spinner; return its result or raise its error."""
    spinner = Spinner(style, color)
    outcome: dict[str, Any] = {}

    def work() -> None:
        try:
            outcome["result"] = fn()
        except BaseException as exc:  # handed back to the caller's thread
            outcome["error"] = exc

    worker = threading.Thread(target=work, daemon=True)
    worker.start()

    stream = sys.stdout
    animate = _is_terminal(stream)
    label = PROGRESS_MESSAGE_STYLE.render(message)
    try:
        while worker.is_alive():
            if animate:
                stream.write(f"{_CLEAR_LINE}{spinner.view()} {label}")
                stream.flush()
            worker.join(style.interval)
            spinner.tick()
    finally:
        if animate:
            stream.write(_CLEAR_LINE)
            stream.flush()

    if "error" in outcome:
        raise outcome["error"]
    return outcome.get("result")