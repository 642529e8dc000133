import json
import queue
import re
import sys
import urllib.error
import urllib.request
from datetime import datetime, timezone
from unittest import mock

import pytest
import responses

from gust import auth
from gust.auth import (
    AuthConfig,
    AuthError,
    default_auth_config_path,
    exchange_code_for_api_key,
    get_auth_url,
    load_auth_config,
    open_browser,
    save_auth_config,
)

SERVER = "https://auth.example.com"


def _sample():
    return AuthConfig(
        api_key="secret",
        server_url="https://test-server.example.com",
        last_auth=datetime(2023, 1, 1, 12, 0, 0, tzinfo=timezone.utc),
        github_user="testuser",
    )


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "auth.json"
    original = _sample()
    save_auth_config(original, path)
    loaded = load_auth_config(path)

    assert loaded.api_key == original.api_key
    assert loaded.server_url == original.server_url
    assert loaded.last_auth == original.last_auth
    assert loaded.github_user == original.github_user


def test_saved_file_layout(tmp_path):
    path = tmp_path / "nested" / "dir" / "auth.json"
    save_auth_config(_sample(), path)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert list(data) == ["api_key", "server_url", "last_auth", "github_user"]
    assert data["last_auth"] == "2023-01-01T12:00:00Z"


def test_load_non_existent_returns_none(tmp_path):
    assert load_auth_config(tmp_path / "nonexistent-auth.json") is None


def test_load_invalid_json_raises(tmp_path):
    path = tmp_path / "auth.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(AuthError, match="failed to decode auth config"):
        load_auth_config(path)


def test_load_without_timestamp_gives_zero_time(tmp_path):
    path = tmp_path / "auth.json"
    path.write_text('{"api_key": "token", "github_user": "octo"}', encoding="utf-8")
    loaded = load_auth_config(path)
    assert loaded.api_key == "token"
    assert loaded.github_user == "octo"
    assert loaded.last_auth == datetime(1, 1, 1, tzinfo=timezone.utc)


def test_fractional_and_offset_timestamps_round_trip():
    data = {"api_key": "token", "last_auth": "2024-05-06T07:08:09.123456789+02:00"}
    config = AuthConfig.from_dict(data)
    assert config.last_auth.microsecond == 123456
    assert config.last_auth.utcoffset().total_seconds() == 7200
    assert AuthConfig.from_dict(config.to_dict()) == config


def test_default_auth_config_path():
    path = default_auth_config_path()
    assert path.name == "auth.json"
    assert path.is_absolute()
    assert path.parent.parts[-2:] == (".config", "gust")


def test_get_auth_url_returns_url():
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET,
            re.compile(re.escape(SERVER) + r"/api/auth/request.*"),
            json={"url": "https://login.example.com/authorize"},
        )
        url = get_auth_url(SERVER, 9876)
        request_url = rsps.calls[0].request.url
    assert url == "https://login.example.com/authorize"
    assert request_url.endswith("/api/auth/request?callback_port=9876")


def test_get_auth_url_error_status():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, re.compile(re.escape(SERVER) + r"/api/auth/request.*"), status=503)
        with pytest.raises(AuthError, match="server returned status code 503"):
            get_auth_url(SERVER, 9876)


def test_exchange_code_for_api_key():
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.POST,
            f"{SERVER}/api/auth/exchange",
            json={"api_key": "token", "github_user": "octo"},
        )
        config = exchange_code_for_api_key(SERVER, "abc", 9876)
        sent = json.loads(rsps.calls[0].request.body)
    assert sent == {"code": "abc", "callback_port": 9876}
    assert config.api_key == "token"
    assert config.github_user == "octo"
    assert config.server_url == SERVER
    assert abs((datetime.now(timezone.utc) - config.last_auth).total_seconds()) < 60


def test_exchange_code_error_status():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, f"{SERVER}/api/auth/exchange", status=401, body="bad code")
        with pytest.raises(AuthError, match="server returned status 401: bad code"):
            exchange_code_for_api_key(SERVER, "abc", 9876)


@pytest.mark.parametrize(
    "platform, expected",
    [
        ("linux", ["xdg-open", "https://login.example.com"]),
        ("darwin", ["open", "https://login.example.com"]),
    ],
)
def test_open_browser_uses_platform_command(monkeypatch, platform, expected):
    monkeypatch.setattr(sys, "platform", platform)
    with mock.patch("subprocess.Popen") as popen:
        result = open_browser("https://login.example.com")
    assert result is None
    assert popen.call_count == 1
    assert popen.call_args[0][0] == expected


def test_open_browser_failure_raises(monkeypatch):
    monkeypatch.setattr(sys, "platform", "darwin")
    with mock.patch("subprocess.Popen", side_effect=OSError("missing")):
        with pytest.raises(AuthError, match="could not open browser"):
            open_browser("https://login.example.com")


def test_callback_without_code_reports_error():
    results = queue.Queue()
    server = auth._start_callback_server(0, SERVER, results)
    try:
        with pytest.raises(urllib.error.HTTPError) as caught:
            urllib.request.urlopen(f"http://127.0.0.1:{server.server_port}/callback", timeout=5)
        status = caught.value.code
        body = caught.value.read().decode()
    finally:
        server.shutdown()
        server.server_close()

    assert status == 400
    assert body == "Authentication failed: No code provided"
    outcome = results.get(timeout=5)
    assert isinstance(outcome, AuthError)
    assert str(outcome) == "no auth code received"


def test_callback_with_code_returns_credentials():
    results = queue.Queue()
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.POST,
            f"{SERVER}/api/auth/exchange",
            json={"api_key": "token", "github_user": "octo"},
        )
        server = auth._start_callback_server(0, SERVER, results)
        try:
            url = f"http://127.0.0.1:{server.server_port}/callback?code=abc"
            with urllib.request.urlopen(url, timeout=5) as reply:
                status = reply.status
                page = reply.read().decode()
        finally:
            server.shutdown()
            server.server_close()

    assert status == 200
    assert "Welcome, octo!" in page
    outcome = results.get(timeout=5)
    assert outcome.api_key == "token"
    assert outcome.github_user == "octo"


def test_callback_exchange_failure_reports_error(capsys):
    results = queue.Queue()
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, f"{SERVER}/api/auth/exchange", status=500, body="nope")
        server = auth._start_callback_server(0, SERVER, results)
        try:
            url = f"http://127.0.0.1:{server.server_port}/callback?code=abc"
            with pytest.raises(urllib.error.HTTPError) as caught:
                urllib.request.urlopen(url, timeout=5)
        finally:
            server.shutdown()
            server.server_close()

    assert caught.value.code == 500
    outcome = results.get(timeout=5)
    assert isinstance(outcome, AuthError)
    assert "server returned status 500: nope" in str(outcome)


def test_authenticate_fails_when_auth_url_unavailable(monkeypatch):
    monkeypatch.setattr(auth, "CALLBACK_PORT", 0)
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, re.compile(re.escape(SERVER) + r"/api/auth/request.*"), status=500)
        with pytest.raises(AuthError, match="failed to get auth URL: server returned status code 500"):
            auth.authenticate(SERVER)


def test_authenticate_times_out(monkeypatch):
    monkeypatch.setattr(auth, "CALLBACK_PORT", 0)
    monkeypatch.setattr(auth, "AUTH_TIMEOUT", 0.2)
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET,
            re.compile(re.escape(SERVER) + r"/api/auth/request.*"),
            json={"url": "https://login.example.com/authorize"},
        )
        with mock.patch("subprocess.Popen") as popen:
            with pytest.raises(AuthError, match="authentication timed out"):
                auth.authenticate(SERVER)
    assert "https://login.example.com/authorize" in popen.call_args[0][0]