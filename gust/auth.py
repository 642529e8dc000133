"""Stored API credentials and the browser-based sign-in flow."""

from __future__ import annotations

import json
import queue
import re
import subprocess
import sys
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Any, Mapping
from urllib.parse import parse_qs, urlsplit

import requests

from gust.output import print_error, print_info
from gust.templates import render_success_template

DEFAULT_API_URL = "https://breeze.joeburgess.dev"
CALLBACK_PORT = 9876
AUTH_TIMEOUT = 5 * 60.0

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
_FRACTION = re.compile(r"\.(\d+)")


class AuthError(Exception):
    """Signing in, or reading and writing stored credentials, failed."""


def _format_timestamp(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.astimezone()
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset()
    if not offset:
        return text + "Z"
    total = int(offset.total_seconds())
    sign = "+" if total >= 0 else "-"
    total = abs(total)
    return f"{text}{sign}{total // 3600:02d}:{total % 3600 // 60:02d}"


def _parse_timestamp(text: str) -> datetime:
    value = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    value = _FRACTION.sub(lambda match: "." + (match.group(1) + "000000")[:6], value, count=1)
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        raise ValueError(f"timestamp has no time zone: {text!r}")
    return parsed


@dataclass
class AuthConfig:
    api_key: str = ""
    server_url: str = ""
    last_auth: datetime = field(default_factory=lambda: _ZERO_TIME)
    github_user: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "api_key": self.api_key,
            "server_url": self.server_url,
            "last_auth": _format_timestamp(self.last_auth),
            "github_user": self.github_user,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AuthConfig:
        """Build from decoded JSON; raises ValueError for a malformed timestamp."""
        last_auth = data.get("last_auth")
        if last_auth is not None and not isinstance(last_auth, str):
            raise ValueError("last_auth must be a string")
        return cls(
            api_key=str(data.get("api_key") or ""),
            server_url=str(data.get("server_url") or ""),
            last_auth=_ZERO_TIME if last_auth is None else _parse_timestamp(last_auth),
            github_user=str(data.get("github_user") or ""),
        )


def default_auth_config_path() -> Path:
    """Return ~/.config/gust/auth.json."""
    try:
        home = Path.home()
    except RuntimeError as exc:
        raise AuthError(f"could not get user home directory: {exc}") from exc
    return home / ".config" / "gust" / "auth.json"


def save_auth_config(auth_config: AuthConfig, path: str | Path | None = None) -> None:
    target = Path(path) if path is not None else default_auth_config_path()
    try:
        target.parent.mkdir(mode=0o755, parents=True, exist_ok=True)
    except OSError as exc:
        raise AuthError(f"failed to create config directory: {exc}") from exc
    try:
        with open(target, "w", encoding="utf-8") as handle:
            handle.write(json.dumps(auth_config.to_dict(), indent=2, ensure_ascii=False) + "\n")
    except OSError as exc:
        raise AuthError(f"failed to create auth config file: {exc}") from exc


def load_auth_config(path: str | Path | None = None) -> AuthConfig | None:
    """Load stored credentials, or return None when none have been saved."""
    source = Path(path) if path is not None else default_auth_config_path()
    try:
        with open(source, encoding="utf-8") as handle:
            text = handle.read()
    except FileNotFoundError:
        return None
    except OSError as exc:
        raise AuthError(f"failed to open auth config file: {exc}") from exc

    try:
        data = json.loads(text)
        if data is None:
            return AuthConfig()
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        return AuthConfig.from_dict(data)
    except (ValueError, TypeError) as exc:
        raise AuthError(f"failed to decode auth config: {exc}") from exc


def get_auth_url(server_url: str, port: int) -> str:
    """Ask the server for the URL where the user signs in."""
    url = f"{server_url}/api/auth/request?callback_port={port}"
    try:
        response = requests.get(url)
    except requests.RequestException as exc:
        raise AuthError(f"failed to contact auth server: {exc}") from exc

    with response:
        if response.status_code != 200:
            raise AuthError(f"server returned status code {response.status_code}")
        try:
            data = response.json()
        except ValueError as exc:
            raise AuthError(f"failed to decode response: {exc}") from exc
    if data is None:
        return ""
    if not isinstance(data, dict):
        raise AuthError("failed to decode response: expected a JSON object")
    return str(data.get("url") or "")


def exchange_code_for_api_key(server_url: str, code: str, port: int) -> AuthConfig:
    """Trade a sign-in code for an API key."""
    url = f"{server_url}/api/auth/exchange"
    try:
        response = requests.post(url, json={"code": code, "callback_port": port})
    except requests.RequestException as exc:
        raise AuthError(f"failed to exchange code: {exc}") from exc

    with response:
        if response.status_code != 200:
            raise AuthError(f"server returned status {response.status_code}: {response.text}")
        try:
            data = response.json()
        except ValueError as exc:
            raise AuthError(f"failed to decode response: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise AuthError("failed to decode response: expected a JSON object")

    return AuthConfig(
        api_key=str(data.get("api_key") or ""),
        server_url=server_url,
        last_auth=datetime.now().astimezone(),
        github_user=str(data.get("github_user") or ""),
    )


def open_browser(url: str) -> None:
    """Open the URL in the desktop's default browser."""
    if sys.platform == "darwin":
        command = ["open", url]
    elif sys.platform == "win32":
        command = ["rundll32", "url.dll,FileProtocolHandler", url]
    else:
        command = ["xdg-open", url]
    try:
        subprocess.Popen(command, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    except OSError as exc:
        raise AuthError(f"could not open browser: {exc}") from exc


class _CallbackServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, port: int, api_url: str, results: queue.Queue) -> None:
        super().__init__(("", port), _CallbackHandler)
        self.api_url = api_url
        self.results = results


class _CallbackHandler(BaseHTTPRequestHandler):
    server: _CallbackServer

    def log_message(self, format: str, *args: Any) -> None:
        pass

    def _respond(self, status: int, body: bytes, content_type: str | None = None) -> None:
        self.send_response(status)
        if content_type:
            self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_GET(self) -> None:
        parts = urlsplit(self.path)
        if parts.path != "/callback":
            self._respond(404, b"404 page not found\n", "text/plain; charset=utf-8")
            return

        code = parse_qs(parts.query).get("code", [""])[0]
        if not code:
            self.server.results.put(AuthError("no auth code received"))
            self._respond(
                400, b"Authentication failed: No code provided", "text/plain; charset=utf-8"
            )
            return

        try:
            auth_config = exchange_code_for_api_key(
                self.server.api_url, code, self.server.server_port
            )
        except AuthError as exc:
            self.server.results.put(exc)
            self._respond(500, b"")
            print(f"Authentication failed: {exc}", end="")
            return

        page = render_success_template(
            auth_config.github_user, auth_config.api_key, self.server.api_url
        )
        self._respond(200, page.encode("utf-8"), "text/html; charset=utf-8")
        self.server.results.put(auth_config)

        closer = threading.Timer(0.1, self.server.shutdown)
        closer.daemon = True
        closer.start()


def _start_callback_server(port: int, api_url: str, results: queue.Queue) -> _CallbackServer:
    """Serve the sign-in callback in the background; outcomes go to ``results``."""
    try:
        server = _CallbackServer(port, api_url, results)
    except OSError as exc:
        raise AuthError(f"could not start callback server: {exc}") from exc
    threading.Thread(target=server.serve_forever, daemon=True).start()
    return server


def authenticate(api_url: str) -> AuthConfig:
    """Sign in through the browser and return the issued credentials."""
    api_url = api_url or DEFAULT_API_URL
    results: queue.Queue = queue.Queue()
    server = _start_callback_server(CALLBACK_PORT, api_url, results)

    try:
        try:
            auth_url = get_auth_url(api_url, server.server_port)
        except AuthError as exc:
            raise AuthError(f"failed to get auth URL: {exc}") from exc

        print_info("Opening browser for GitHub authentication...")
        try:
            open_browser(auth_url)
        except AuthError:
            print_error(
                f"Could not open browser automatically. Please open this URL manually:\n{auth_url}"
            )

        try:
            outcome = results.get(timeout=AUTH_TIMEOUT)
        except queue.Empty:
            raise AuthError("authentication timed out") from None
    finally:
        server.shutdown()
        server.server_close()

    if isinstance(outcome, Exception):
        raise outcome
    return outcome