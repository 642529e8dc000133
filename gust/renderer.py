"""Terminal views of current weather, forecasts and alerts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Sequence

from gust.config import Config
from gust.models import (
    Alert,
    City,
    OneCallResponse,
    Precipitation,
    visibility_to_string,
    weather_emoji,
    weather_tip,
    wind_direction,
)
from gust.styles import (
    alert_style,
    divider,
    format_header,
    highlight_style,
    info_style,
    temp_style,
    time_style,
    tip_style,
)


def format_date_time(timestamp: int, fmt: str) -> str:
    """Format a Unix timestamp in local time with a strftime format."""
    return datetime.fromtimestamp(timestamp).strftime(fmt)


def _clock(timestamp: int) -> str:
    return format_date_time(timestamp, "%H:%M")


def _day(timestamp: int) -> str:
    moment = datetime.fromtimestamp(timestamp)
    return f"{moment:%a %b} {moment.day}"


def _day_and_clock(timestamp: int) -> str:
    moment = datetime.fromtimestamp(timestamp)
    return f"{moment:%a %b} {moment.day} {moment:%H:%M}"


def _has_amount(precipitation: Optional[Precipitation]) -> bool:
    return precipitation is not None and precipitation.one_hour > 0


class WeatherRenderer(ABC):
    """Something that can show each of the weather views."""

    @abstractmethod
    def render_current_weather(self, city: City, weather: OneCallResponse, config: Config) -> None:
        ...

    @abstractmethod
    def render_daily_forecast(self, city: City, weather: OneCallResponse, config: Config) -> None:
        ...

    @abstractmethod
    def render_hourly_forecast(self, city: City, weather: OneCallResponse, config: Config) -> None:
        ...

    @abstractmethod
    def render_alerts(self, city: City, weather: OneCallResponse, config: Config) -> None:
        ...

    @abstractmethod
    def render_full_weather(self, city: City, weather: OneCallResponse, config: Config) -> None:
        ...

    @abstractmethod
    def render_compact_weather(self, city: City, weather: OneCallResponse, config: Config) -> None:
        ...


class TerminalRenderer(WeatherRenderer):
    """Prints weather views to standard output."""

    def __init__(self, units: str) -> None:
        self.units = units

    def temperature_unit(self) -> str:
        if self.units == "imperial":
            return "°F"
        if self.units == "metric":
            return "°C"
        return "K"

    def wind_speed_unit(self) -> str:
        return "mph" if self.units == "imperial" else "km/h"

    def format_wind_speed(self, speed: float) -> float:
        return speed if self.units == "imperial" else speed * 3.6

    def _display_wind_info(self, speed: float, degrees: int, gust: float) -> None:
        unit = self.wind_speed_unit()
        line = (
            f"Wind: {self.format_wind_speed(speed):.1f} {unit} {wind_direction(degrees)} 💨"
        )
        if gust > 0:
            line += f" (Gusts: {self.format_wind_speed(gust):.1f} {unit})"
        print(line)

    @staticmethod
    def _display_precipitation(
        rain: Optional[Precipitation], snow: Optional[Precipitation]
    ) -> None:
        if _has_amount(rain):
            print(f"Rain: {rain.one_hour:.1f} mm (last hour) 🌧️")
        if _has_amount(snow):
            print(f"Snow: {snow.one_hour:.1f} mm (last hour) ❄️")

    @staticmethod
    def _display_alert_summary(alerts: Sequence[Alert], city_name: str) -> None:
        if alerts:
            notice = alert_style(f"⚠️  There are {len(alerts)} weather alerts for this area.")
            print(f"{notice} Use 'gust --alerts {city_name}' to view them.")

    def _display_weather_tip(self, weather: OneCallResponse, config: Config) -> None:
        if not config.show_tips:
            return
        tip = weather_tip(weather, self.units)
        print(f"\n{tip_style(f'💡 {tip}')}")

    def render_alerts(self, city: City, weather: OneCallResponse, config: Config) -> None:
        print(format_header(f"WEATHER ALERTS FOR {city.name.upper()}"), end="")
        if not weather.alerts:
            print("No weather alerts for this area.")
            return

        for index, alert in enumerate(weather.alerts):
            if index > 0:
                print(divider(30))
            print(alert_style(f"⚠️  {alert.event}"))
            print(f"Issued by: {alert.sender_name}")
            print(
                f"Valid: {time_style(_day_and_clock(alert.start))} "
                f"to {time_style(_day_and_clock(alert.end))}\n"
            )
            print(alert.description)
            print()

    def render_compact_weather(self, city: City, weather: OneCallResponse, config: Config) -> None:
        current = weather.current
        print(format_header(f"{city.name.upper()} WEATHER"), end="")
        if not current.weather:
            return

        condition = current.weather[0]
        temp = temp_style(f"{current.temp:.1f}{self.temperature_unit()}")
        extra_space = " " if current.temp < 10 else ""
        emoji = weather_emoji(condition.id, current)
        print(f"🌡️ {temp:<16}{extra_space}         {emoji} {highlight_style(condition.description)}")

        wind = self.format_wind_speed(current.wind_speed)
        line = (
            f"💧 {current.humidity:<3d}%           "
            f"💨 {wind:<4.1f} {self.wind_speed_unit():<3} {wind_direction(current.wind_deg):<2}"
        )
        if _has_amount(current.rain):
            line += f"     🌧️ {current.rain.one_hour:.1f} mm"
        if _has_amount(current.snow):
            line += f"     ❄️ {current.snow.one_hour:.1f} mm"
        print(line)

        line = f"🌅 {_clock(current.sunrise):<8}       🌇 {_clock(current.sunset):<8}"
        if weather.alerts:
            line += f"     {alert_style(f'⚠️ {len(weather.alerts)} alerts')}"
        print(line)
        self._display_weather_tip(weather, config)

    def render_current_weather(self, city: City, weather: OneCallResponse, config: Config) -> None:
        current = weather.current
        print(format_header(f"WEATHER FOR {city.name.upper()}"), end="")

        if current.weather:
            condition = current.weather[0]
            print(
                f"Current Conditions: {highlight_style(condition.description)} "
                f"{weather_emoji(condition.id, current)}\n"
            )

            unit = self.temperature_unit()
            print(
                f"Temperature: {temp_style(f'{current.temp:.1f}{unit}')} 🌡️ "
                f"(F/L: {current.feels_like:.1f}{unit})"
            )
            print(f"Humidity: {current.humidity}% 💧")
            if current.uvi > 0:
                print(f"UV Index: {current.uvi:.1f} ☀️")

            self._display_wind_info(current.wind_speed, current.wind_deg, current.wind_gust)

            if current.clouds > 0:
                print(f"Cloud coverage: {current.clouds}% ☁️")

            self._display_precipitation(current.rain, current.snow)
            print(f"Visibility: {visibility_to_string(current.visibility)}")
            print(f"Sunrise: {_clock(current.sunrise)} 🌅  Sunset: {_clock(current.sunset)} 🌇")
            self._display_weather_tip(weather, config)
            print()

        self._display_alert_summary(weather.alerts, city.name)

    def render_daily_forecast(self, city: City, weather: OneCallResponse, config: Config) -> None:
        print(format_header(f"5-DAY FORECAST FOR {city.name.upper()}"), end="")
        if not weather.daily:
            return

        unit = self.temperature_unit()
        wind_unit = self.wind_speed_unit()
        for index, day in enumerate(weather.daily[:5]):
            if index > 0:
                print()
            print(f"{highlight_style(_day(day.dt))}: {day.summary}")
            print(
                f"  High/Low: {temp_style(f'{day.temp.max:.1f}{unit}')}/"
                f"{temp_style(f'{day.temp.min:.1f}{unit}')} 🌡️"
            )
            print(
                f"  Morning: {day.temp.morn:.1f}{unit}  Day: {day.temp.day:.1f}{unit}  "
                f"Evening: {day.temp.eve:.1f}{unit}  Night: {day.temp.night:.1f}{unit}"
            )
            if day.weather:
                condition = day.weather[0]
                text = f"{condition.description} {weather_emoji(condition.id, None)}"
                print(f"  Conditions: {info_style(text)}")
            if day.pop > 0:
                print(f"  Precipitation: {int(day.pop * 100)}% chance")
            if day.rain > 0:
                print(f"  Rain: {day.rain:.1f} mm 🌧️")
            if day.snow > 0:
                print(f"  Snow: {day.snow:.1f} mm ❄️")
            print(
                f"  Wind: {self.format_wind_speed(day.wind_speed):.1f} {wind_unit} "
                f"{wind_direction(day.wind_deg)}"
            )
            print(f"  UV Index: {day.uvi:.1f}")
        print()

    def render_hourly_forecast(self, city: City, weather: OneCallResponse, config: Config) -> None:
        print(format_header(f"24H FORECAST FOR {city.name.upper()}"), end="")
        if not weather.hourly:
            return

        unit = self.temperature_unit()
        current_day = ""
        for hour in weather.hourly[:24]:
            if not hour.weather:
                continue

            day = _day(hour.dt)
            if day != current_day:
                if current_day:
                    print()
                print(f"{highlight_style(day)}:")
                current_day = day

            condition = hour.weather[0]
            temp = temp_style(f"{hour.temp:.1f}{unit}")
            chance = f" ({hour.pop * 100:.0f}% chance of precipitation)" if hour.pop > 0 else ""
            extra_space = " " if hour.temp < 10 else ""
            print(
                f"  {_clock(hour.dt)}:   {temp}  {extra_space}"
                f"{weather_emoji(condition.id, None)}  {info_style(condition.description)}{chance}"
            )
            if _has_amount(hour.rain):
                print(f"       Rain: {hour.rain.one_hour:.1f} mm/h")
            if _has_amount(hour.snow):
                print(f"       Snow: {hour.snow.one_hour:.1f} mm/h")
        print()

    def render_full_weather(self, city: City, weather: OneCallResponse, config: Config) -> None:
        self.render_current_weather(city, weather, config)
        print()
        if weather.alerts:
            self.render_alerts(city, weather, config)
            print()
        self.render_daily_forecast(city, weather, config)
        print()


def new_weather_renderer(renderer_type: str, units: str) -> WeatherRenderer:
    """Return a renderer; the terminal renderer is the only kind."""
    return TerminalRenderer(units)