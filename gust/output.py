"""Printing status messages and rate-limit notices."""

from __future__ import annotations

from datetime import datetime

from gust.styles import (
    BOX_STYLE,
    LOVE,
    error_style,
    format_header,
    highlight_style,
    info_style,
    success_style,
    time_style,
    warning_style,
)

_WARNING_SIGN = "\u26a0\ufe0f"


def print_error(message: str) -> None:
    print(error_style("\u274c " + message))


def print_success(message: str) -> None:
    print(success_style("\u2705 " + message))


def print_info(message: str) -> None:
    print(info_style(message))


def print_warning(message: str) -> None:
    print(warning_style(f"{_WARNING_SIGN} " + message))


def print_header(title: str) -> None:
    print(format_header(title), end="")


def print_boxed_message(message: str) -> None:
    print(BOX_STYLE.render(message))


def _minutes_until(moment: datetime) -> int:
    now = datetime.now(moment.tzinfo) if moment.tzinfo is not None else datetime.now()
    return int((moment - now).total_seconds() / 60)


def print_rate_limit_warning(remaining: int, limit: int, reset_time: datetime) -> None:
    minutes = _minutes_until(reset_time)
    message = (
        f"{_WARNING_SIGN} API Rate Limit Warning\n\n"
        f"You have {highlight_style(str(remaining))} requests remaining out of {limit}.\n"
        f"Your rate limit will reset at {time_style(reset_time.strftime('%H:%M'))} "
        f"({minutes} minutes from now)."
    )
    print()
    print(BOX_STYLE.render(message))
    print()


def print_rate_limit_error(limit: int, reset_time: datetime) -> None:
    minutes = _minutes_until(reset_time)
    message = (
        "\u274c API Rate Limit Reached\n\n"
        f"Sorry - you have used all {limit} available requests.\n"
        "You must really like checking the weather!!\n"
        f"Your rate limit will reset at {time_style(reset_time.strftime('%H:%M'))} "
        f"({minutes} minutes from now).\n\n"
        "\U0001f4a1 If you think the limits are too low please get in touch :)"
    )
    print()
    print(BOX_STYLE.with_border_color(LOVE).render(message))
    print()