"""The HTML page shown in the browser after a successful sign-in."""

from __future__ import annotations

from datetime import datetime

_PALETTE = {
    "base": "#191724",
    "surface": "#1f1d2e",
    "overlay": "#26233a",
    "subtle": "#908caa",
    "text": "#e0def4",
    "love": "#eb6f92",
    "gold": "#f6c177",
    "rose": "#ebbcba",
    "pine": "#31748f",
    "foam": "#9ccfd8",
    "iris": "#c4a7e7",
    "highlight-med": "#403d52",
}

_MONO_BOX = {
    "padding": "1rem",
    "border-radius": "4px",
    "font-family": "monospace",
    "overflow-wrap": "break-word",
    "margin": "1.5rem 0",
    "border": "1px solid var(--highlight-med)",
}

_RULES: list[tuple[str, dict[str, str]]] = [
    (
        "body",
        {
            "font-family": "system-ui, sans-serif",
            "max-width": "600px",
            "margin": "0 auto",
            "padding": "2rem",
            "text-align": "center",
            "line-height": "1.6",
            "background-color": "var(--base)",
            "color": "var(--text)",
        },
    ),
    ("h1", {"color": "var(--rose)", "margin-bottom": "1.5rem"}),
    (".success", {"color": "var(--pine)", "font-weight": "bold", "font-size": "1.2rem"}),
    (".info", {"margin": "2rem 0", "line-height": "1.5", "color": "var(--subtle)"}),
    (
        ".api-key",
        {**_MONO_BOX, "background": "var(--surface)", "text-align": "center", "color": "var(--foam)"},
    ),
    (
        ".code-block",
        {
            **_MONO_BOX,
            "background": "var(--overlay)",
            "color": "var(--text)",
            "text-align": "left",
            "white-space": "pre",
        },
    ),
    (
        ".next-steps",
        {
            "background": "var(--surface)",
            "padding": "1.5rem",
            "border-radius": "6px",
            "margin-top": "2rem",
            "border": "1px solid var(--highlight-med)",
        },
    ),
    (".key-highlight", {"color": "var(--love)"}),
    (".string-highlight", {"color": "var(--iris)"}),
]

_ESCAPES = {
    "\0": "\ufffd",
    '"': "&#34;",
    "&": "&amp;",
    "'": "&#39;",
    "+": "&#43;",
    "<": "&lt;",
    ">": "&gt;",
}


def _escape(text: str) -> str:
    return "".join(_ESCAPES.get(char, char) for char in text)


def _now_rfc3339() -> str:
    stamp = datetime.now().astimezone().isoformat(timespec="seconds")
    return stamp[:-6] + "Z" if stamp.endswith("+00:00") else stamp


def _stylesheet() -> str:
    variables = "\n".join(f"  --{name}: {value};" for name, value in _PALETTE.items())
    blocks = [f":root {{\n{variables}\n}}"]
    for selector, properties in _RULES:
        body = "\n".join(f"  {prop}: {value};" for prop, value in properties.items())
        blocks.append(f"{selector} {{\n{body}\n}}")
    return "\n".join(blocks)


def _json_snippet(fields: list[tuple[str, str]]) -> str:
    entries = ",\n".join(
        f'  <span class="key-highlight">"{key}"</span>: '
        f'<span class="string-highlight">"{value}"</span>'
        for key, value in fields
    )
    return "{\n" + entries + "\n}"


def render_success_template(login: str, api_key: str, server_url: str) -> str:
    """Return the sign-in success page with the given details filled in."""
    safe_login = _escape(login)
    safe_key = _escape(api_key)
    snippet = _json_snippet(
        [
            ("api_key", safe_key),
            ("server_url", _escape(server_url)),
            ("github_user", safe_login),
            ("last_auth", _escape(_now_rfc3339())),
        ]
    )
    parts = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        "<title>Gust Authentication Success</title>",
        f"<style>\n{_stylesheet()}\n</style>",
        "</head>",
        "<body>",
        "<h1>Authentication Successful!</h1>",
        f'<p class="success">Welcome, {safe_login}!</p>',
        '<p class="info">Your Gust API key has been generated:</p>',
        f'<div class="api-key">{safe_key}</div>',
        "<p>This key will allow you to access weather data through the breeze API.</p>",
        '<div class="next-steps">',
        "<p>You can now return to your terminal. "
        "The CLI application should automatically continue.</p>",
        "<p>If it doesn't, you can close this window and add the below "
        "to your ~/.config/gust/auth.json</p>",
        f'<div class="code-block">{snippet}</div>',
        "</div>",
        "</body>",
        "</html>",
    ]
    return "\n".join(parts)