import re
from datetime import datetime, timedelta, timezone

from gust import output
from gust.styles import divider, visible_width

_ANSI = re.compile(r"\x1b\[[0-9;]*m")


def _plain(text):
    return _ANSI.sub("", text)


def _box_lines(text):
    return [line for line in _plain(text).split("\n") if line]


def test_print_error(capsys):
    output.print_error("boom")
    assert _plain(capsys.readouterr().out) == "\u274c boom\n"


def test_print_success(capsys):
    output.print_success("saved")
    assert _plain(capsys.readouterr().out) == "\u2705 saved\n"


def test_print_info(capsys):
    output.print_info("hello")
    assert _plain(capsys.readouterr().out) == "hello\n"


def test_print_warning(capsys):
    output.print_warning("careful")
    assert _plain(capsys.readouterr().out) == "\u26a0\ufe0f careful\n"


def test_print_header(capsys):
    output.print_header("Title")
    assert _plain(capsys.readouterr().out) == "\nTitle\n" + divider(len("Title") * 2) + "\n"


def test_print_boxed_message(capsys):
    output.print_boxed_message("hello")
    lines = _box_lines(capsys.readouterr().out)
    assert lines[0].startswith("╭")
    assert lines[-1].startswith("╰")
    assert len({visible_width(line) for line in lines}) == 1
    assert any("hello" in line for line in lines)


def test_print_rate_limit_warning(capsys):
    reset = datetime.now() + timedelta(minutes=90, seconds=30)
    output.print_rate_limit_warning(3, 10, reset)
    text = _plain(capsys.readouterr().out)
    assert "API Rate Limit Warning" in text
    assert "You have 3 requests remaining out of 10." in text
    assert "(90 minutes from now)" in text
    assert reset.strftime("%H:%M") in text
    assert text.startswith("\n")


def test_print_rate_limit_error(capsys):
    reset = datetime.now() + timedelta(minutes=29, seconds=30)
    output.print_rate_limit_error(50, reset)
    out = capsys.readouterr().out
    text = _plain(out)
    assert "API Rate Limit Reached" in text
    assert "Sorry - you have used all 50 available requests." in text
    assert "(29 minutes from now)" in text
    lines = _box_lines(out)
    assert len({visible_width(line) for line in lines}) == 1


def test_rate_limit_with_aware_time(capsys):
    reset = datetime.now(timezone.utc) + timedelta(minutes=45, seconds=20)
    output.print_rate_limit_warning(1, 10, reset)
    text = _plain(capsys.readouterr().out)
    assert "(45 minutes from now)" in text
    assert reset.strftime("%H:%M") in text