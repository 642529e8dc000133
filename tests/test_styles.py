import re

import pytest

from gust import styles
from gust.styles import (
    BOX_STYLE,
    LOVE,
    ROUNDED_BORDER,
    Style,
    divider,
    exit_with_error,
    format_header,
    visible_width,
)

_ANSI = re.compile(r"\x1b\[[0-9;]*m")


def _plain(text):
    return _ANSI.sub("", text)


def test_divider():
    assert divider(35) == "─" * 35


def test_format_header():
    title = "TEST TITLE"
    result = format_header(title)
    assert result.count("\n") == 3
    assert title in result
    assert divider(len(title) * 2) in result


@pytest.mark.parametrize(
    "function",
    [
        styles.header_style,
        styles.temp_style,
        styles.highlight_style,
        styles.info_style,
        styles.time_style,
        styles.alert_style,
        styles.tip_style,
        styles.error_style,
        styles.success_style,
        styles.warning_style,
    ],
)
def test_style_functions_keep_text(function):
    result = function("Test Text")
    assert _plain(result) == "Test Text"


def test_visible_width_ignores_escapes():
    assert visible_width("abc") == 3
    assert visible_width("\x1b[1mabc\x1b[0m") == 3


def test_visible_width_counts_wide_characters_and_lines():
    assert visible_width("日本") == 4
    assert visible_width("a\nlonger") == 6


def test_plain_style_pads_lines():
    assert Style().render("a\nbbb") == "a  \nbbb"


def test_boxed_render_shape():
    rendered = _plain(Style(border=ROUNDED_BORDER, padding=(1, 2, 1, 2)).render("hi\nthere"))
    lines = rendered.split("\n")
    assert len(lines) == 6
    assert all(visible_width(line) == 11 for line in lines)
    assert lines[0].startswith("╭") and lines[0].endswith("╮")
    assert lines[-1].startswith("╰") and lines[-1].endswith("╯")
    assert "hi" in lines[2] and "there" in lines[3]


def test_with_border_color_returns_new_style():
    recoloured = BOX_STYLE.with_border_color(LOVE)
    assert recoloured.border_foreground == LOVE
    assert BOX_STYLE.border_foreground != LOVE
    assert recoloured.padding == BOX_STYLE.padding


def test_exit_with_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        exit_with_error("failed to run", "boom")
    assert excinfo.value.code == 1
    assert "failed to run: boom" in capsys.readouterr().err