# gust

Simple terminal weather, as a Python library. `gust` fetches current
conditions, hourly and daily forecasts and weather alerts for a city from a
weather API server, and prints them as coloured views in the terminal.

## Installation

```
pip install .
```

## Quick start

```python
from gust.api import Client
from gust.config import load
from gust.renderer import TerminalRenderer

cfg = load()  # ~/.config/gust/config.json, or defaults if it does not exist
client = Client("http://localhost:8080", "placeholder", cfg.units)

response = client.get_weather("London")
TerminalRenderer(cfg.units).render_current_weather(response.city, response.weather, cfg)
```

## Modules

### `gust.models`

Dataclasses for the weather data: `City`, `WeatherCondition`,
`Precipitation`, `CurrentWeather`, `MinuteData`, `HourData`, `TempData`,
`FeelsLikeData`, `DayData`, `Alert` and `OneCallResponse`. Each has a
`from_dict` class method that builds it from decoded JSON, filling missing
fields with zero values; `City` and `WeatherCondition` also have `to_dict`.

Helpers:

- `weather_emoji(condition_id, current)` – an emoji for a condition code;
  clear sky (800) gives a moon when `current` shows it is before sunrise or
  after sunset.
- `wind_direction(degrees)` – eight-point compass direction (`N`, `NE`, …),
  for any bearing including negative or above 360.
- `visibility_to_string(meters)` – `Excellent`, `Good`, `Moderate` or `Poor`
  with the distance in km.
- `weather_tip(weather, units)` – a short piece of advice based on current
  rain or snow, precipitation in the next hours, temperature, UV index and
  wind, with thresholds chosen for `metric`, `imperial` or `standard` units.

### `gust.api`

`Client(base_url, api_key, units)` talks to the weather API server:

- `get_weather(city_name)` returns a `WeatherResponse` with `city` and
  `weather`.
- `search_cities(query)` returns a list of `City`.

Failures raise `ApiError` (with `status_code` where the server answered);
a 429 answer raises `RateLimitError`. After each weather request the
client's `rate_limit_info` (`RateLimitInfo` with `limit`, `remaining` and
`reset_time`) holds the values from the `X-RateLimit-*` response headers.

### `gust.config`

`Config` holds `default_city`, `api_url`, `units`, `default_view` and
`show_tips`. `load(path=None)` reads it from
`~/.config/gust/config.json` (see `default_config_path()`); a missing file
gives `units="metric"` and `default_view="default"`, and empty values in the
file fall back to those same defaults. `Config.save(path=None)` writes it as
indented JSON. Problems raise `ConfigError`.

### `gust.auth`

`AuthConfig` holds `api_key`, `server_url`, `last_auth` and `github_user`.

- `save_auth_config(auth_config, path=None)` and `load_auth_config(path=None)`
  store and read `~/.config/gust/auth.json` (see
  `default_auth_config_path()`); loading returns `None` when no file exists.
- `authenticate(api_url)` runs the browser sign-in: it starts a small
  callback server on port 9876, asks the API server for the sign-in URL
  (`get_auth_url`), opens it with `open_browser`, and when the browser comes
  back with a code exchanges it for an API key
  (`exchange_code_for_api_key`). The browser is shown a success page. It
  gives up after five minutes.

Failures raise `AuthError`.

### `gust.renderer`

`TerminalRenderer(units)` prints views to standard output:
`render_current_weather`, `render_compact_weather`, `render_hourly_forecast`
(up to 24 hours, grouped by day), `render_daily_forecast` (up to 5 days),
`render_alerts` and `render_full_weather` (current conditions, alerts if any,
then the 5-day forecast). Temperatures use °C, °F or K by unit; wind speeds
are shown in mph for `imperial` and km/h otherwise. When the config's
`show_tips` is set, a weather tip is added to the current and compact views.

`new_weather_renderer(renderer_type, units)` returns a `TerminalRenderer`;
`format_date_time(timestamp, fmt)` formats a Unix timestamp in local time.

### `gust.output`

`print_error`, `print_success`, `print_info`, `print_warning`,
`print_header` and `print_boxed_message` print styled status lines;
`print_rate_limit_warning(remaining, limit, reset_time)` and
`print_rate_limit_error(limit, reset_time)` print boxed rate-limit notices
with the reset time and the minutes left.

### `gust.spinner`

`run_with_spinner(message, style, color, fn)` runs `fn` in a background
thread while animating a spinner next to the message (only when standard
output is a terminal), then returns its result or re-raises its error.
`Spinner`, `SpinnerStyle`, `MINI_DOT` and `WEATHER_EMOJIS` are available for
your own use.

### `gust.styles` and `gust.templates`

`gust.styles` has the colour palette, text style functions (`header_style`,
`temp_style`, `alert_style`, …), `divider`, `format_header` and a `Style`
class for coloured, padded and bordered blocks. Block colours are switched
off by `NO_COLOR` or `ANSI_COLORS_DISABLED`, forced on by `FORCE_COLOR`, and
otherwise used only when standard output is a terminal.

`gust.templates.render_success_template(login, api_key, server_url)` returns
the HTML page shown after signing in, with the values escaped.

## What this package does not do

There is no `gust` command, no command-line argument handling and no
interactive setup wizard. Choosing a city, a view or units, and saving
settings, is left to the Python code that uses the library.

## Development

```
pip install -e ".[test]"
pytest
```