"""Colours, text styles and boxed layout for terminal output."""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass, replace
from datetime import datetime

import termcolor
from termcolor import colored
from wcwidth import wcswidth, wcwidth

BASE = "#191724"
SURFACE = "#1f1d2e"
OVERLAY = "#26233a"
MUTED = "#6e6a86"
SUBTLE = "#908caa"
TEXT = "#e0def4"
LOVE = "#eb6f92"
GOLD = "#f6c177"
ROSE = "#ebbcba"
PINE = "#31748f"
FOAM = "#9ccfd8"
IRIS = "#c4a7e7"

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")
_ITALIC = ("italic",) if "italic" in termcolor.ATTRIBUTES else ()


def _line_width(line: str) -> int:
    width = wcswidth(line)
    if width >= 0:
        return width
    return sum(max(wcwidth(char), 0) for char in line)


def visible_width(text: str) -> int:
    """Return the widest line's width in terminal cells, ignoring escape codes."""
    return max(_line_width(line) for line in _ANSI_ESCAPE.sub("", text).split("\n"))


def _ansi_enabled() -> bool:
    if os.environ.get("ANSI_COLORS_DISABLED") or "NO_COLOR" in os.environ:
        return False
    if "FORCE_COLOR" in os.environ:
        return True
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def _paint(text: str, color: str | None, bold: bool = False, italic: bool = False) -> str:
    if not text or not _ansi_enabled():
        return text
    codes = []
    if bold:
        codes.append("1")
    if italic:
        codes.append("3")
    if color:
        digits = color.lstrip("#")
        red, green, blue = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
        codes.append(f"38;2;{red};{green};{blue}")
    if not codes:
        return text
    return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


@dataclass(frozen=True)
class Border:
    top: str
    bottom: str
    left: str
    right: str
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str


ROUNDED_BORDER = Border("─", "─", "│", "│", "╭", "╮", "╰", "╯")
DOUBLE_BORDER = Border("═", "═", "║", "║", "╔", "╗", "╚", "╝")


@dataclass(frozen=True)
class Style:
    """A block style: colour, emphasis, padding and an optional border."""

    foreground: str | None = None
    bold: bool = False
    italic: bool = False
    border: Border | None = None
    border_foreground: str | None = None
    padding: tuple[int, int, int, int] = (0, 0, 0, 0)

    def render(self, text: str) -> str:
        lines = str(text).split("\n")
        width = max(visible_width(line) for line in lines)
        top, right, bottom, left = self.padding
        inner = width + left + right
        blank = " " * inner
        body = [blank] * top
        body += [
            " " * left
            + _paint(line, self.foreground, self.bold, self.italic)
            + " " * (width - visible_width(line) + right)
            for line in lines
        ]
        body += [blank] * bottom
        if self.border is None:
            return "\n".join(body)

        edge = self.border

        def paint_edge(segment: str) -> str:
            return _paint(segment, self.border_foreground)

        rows = [paint_edge(edge.top_left + edge.top * inner + edge.top_right)]
        rows += [paint_edge(edge.left) + row + paint_edge(edge.right) for row in body]
        rows.append(paint_edge(edge.bottom_left + edge.bottom * inner + edge.bottom_right))
        return "\n".join(rows)

    def with_border_color(self, color: str) -> Style:
        return replace(self, border_foreground=color)


TITLE_STYLE = Style(foreground=ROSE, bold=True)
SUBTITLE_STYLE = Style(foreground=GOLD)
HIGHLIGHT_STYLE = Style(foreground=TEXT, bold=True)
CURSOR_STYLE = Style(foreground=LOVE)
SELECTED_ITEM_STYLE = Style(foreground=FOAM)
HINT_STYLE = Style(foreground=SUBTLE, italic=True)
BOX_STYLE = Style(border=ROUNDED_BORDER, border_foreground=IRIS, padding=(1, 2, 1, 2))
PROGRESS_MESSAGE_STYLE = Style(foreground=FOAM, italic=True)


def header_style(text: str) -> str:
    return colored(str(text), "light_cyan", attrs=["bold"])


def tip_style(text: str) -> str:
    return colored(str(text), "light_blue", attrs=list(_ITALIC))


def temp_style(text: str) -> str:
    return colored(str(text), "light_yellow", attrs=["bold"])


def highlight_style(text: str) -> str:
    return colored(str(text), "white")


def info_style(text: str) -> str:
    return colored(str(text), "light_blue")


def time_style(text: str) -> str:
    return colored(str(text), "light_yellow")


def alert_style(text: str) -> str:
    return colored(str(text), "light_red", attrs=["bold"])


def error_style(text: str) -> str:
    return colored(str(text), "light_red", attrs=["bold"])


def success_style(text: str) -> str:
    return colored(str(text), "light_green", attrs=["bold"])


def warning_style(text: str) -> str:
    return colored(str(text), "light_yellow")


def divider(length: int) -> str:
    return "─" * length


def format_header(title: str) -> str:
    """A highlighted title followed by a rule twice its byte length."""
    return f"\n{header_style(title)}\n{divider(len(title.encode('utf-8')) * 2)}\n"


def exit_with_error(message: str, error: object) -> None:
    """Log the message and error to stderr, then exit with status 1."""
    stamp = datetime.now().strftime("%Y/%m/%d %H:%M:%S")
    sys.stderr.write(f"{stamp} {message}: {error}\n")
    raise SystemExit(1)