"""Reading and writing the user's settings file."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path


class ConfigError(Exception):
    """The settings file could not be located, read or written."""


@dataclass
class Config:
    default_city: str = ""
    api_url: str = ""
    units: str = ""
    default_view: str = ""
    show_tips: bool = False

    def save(self, path: str | Path | None = None) -> None:
        target = Path(path) if path is not None else default_config_path()
        try:
            with open(target, "w", encoding="utf-8") as handle:
                handle.write(json.dumps(asdict(self), indent=2, ensure_ascii=False) + "\n")
        except OSError as exc:
            raise ConfigError(f"could not create config file: {exc}") from exc


def default_config_path() -> Path:
    """Return ~/.config/gust/config.json, creating its directory."""
    try:
        home = Path.home()
    except RuntimeError as exc:
        raise ConfigError(f"could not get user home directory: {exc}") from exc
    config_dir = home / ".config" / "gust"
    try:
        config_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigError(f"could not create config directory: {exc}") from exc
    return config_dir / "config.json"


def load(path: str | Path | None = None) -> Config:
    """Load settings; a missing file gives the defaults."""
    source = Path(path) if path is not None else default_config_path()
    try:
        with open(source, encoding="utf-8") as handle:
            text = handle.read()
    except FileNotFoundError:
        return Config(units="metric", default_view="default")
    except OSError as exc:
        raise ConfigError(f"could not open config file: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"could not decode config file: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("could not decode config file: expected a JSON object")

    return Config(
        default_city=str(data.get("default_city") or ""),
        api_url=str(data.get("api_url") or ""),
        units=str(data.get("units") or "") or "metric",
        default_view=str(data.get("default_view") or "") or "default",
        show_tips=bool(data.get("show_tips") or False),
    )