"""Weather data types and helpers for describing conditions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping


def _int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    return 0 if value is None else int(value)


def _float(data: Mapping[str, Any], key: str) -> float:
    value = data.get(key)
    return 0.0 if value is None else float(value)


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def _precipitation(data: Mapping[str, Any], key: str) -> Precipitation | None:
    value = data.get(key)
    return None if value is None else Precipitation.from_dict(value)


def _conditions(data: Mapping[str, Any]) -> list[WeatherCondition]:
    return [WeatherCondition.from_dict(item) for item in data.get("weather") or []]


@dataclass
class City:
    name: str = ""
    lat: float = 0.0
    lon: float = 0.0
    country: str = ""
    state: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> City:
        return cls(
            name=_str(data, "name"),
            lat=_float(data, "lat"),
            lon=_float(data, "lon"),
            country=_str(data, "country"),
            state=_str(data, "state"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "lat": self.lat,
            "lon": self.lon,
            "country": self.country,
            "state": self.state,
        }


@dataclass
class WeatherCondition:
    id: int = 0
    main: str = ""
    description: str = ""
    icon: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WeatherCondition:
        return cls(
            id=_int(data, "id"),
            main=_str(data, "main"),
            description=_str(data, "description"),
            icon=_str(data, "icon"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "main": self.main,
            "description": self.description,
            "icon": self.icon,
        }


@dataclass
class Precipitation:
    """Rain or snow volume over the last hour, in millimetres."""

    one_hour: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Precipitation:
        return cls(one_hour=_float(data, "1h"))


@dataclass
class CurrentWeather:
    dt: int = 0
    sunrise: int = 0
    sunset: int = 0
    temp: float = 0.0
    feels_like: float = 0.0
    pressure: int = 0
    humidity: int = 0
    dew_point: float = 0.0
    uvi: float = 0.0
    clouds: int = 0
    visibility: int = 0
    wind_speed: float = 0.0
    wind_gust: float = 0.0
    wind_deg: int = 0
    rain: Precipitation | None = None
    snow: Precipitation | None = None
    weather: list[WeatherCondition] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CurrentWeather:
        return cls(
            dt=_int(data, "dt"),
            sunrise=_int(data, "sunrise"),
            sunset=_int(data, "sunset"),
            temp=_float(data, "temp"),
            feels_like=_float(data, "feels_like"),
            pressure=_int(data, "pressure"),
            humidity=_int(data, "humidity"),
            dew_point=_float(data, "dew_point"),
            uvi=_float(data, "uvi"),
            clouds=_int(data, "clouds"),
            visibility=_int(data, "visibility"),
            wind_speed=_float(data, "wind_speed"),
            wind_gust=_float(data, "wind_gust"),
            wind_deg=_int(data, "wind_deg"),
            rain=_precipitation(data, "rain"),
            snow=_precipitation(data, "snow"),
            weather=_conditions(data),
        )


@dataclass
class MinuteData:
    dt: int = 0
    precipitation: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MinuteData:
        return cls(dt=_int(data, "dt"), precipitation=_float(data, "precipitation"))


@dataclass
class HourData:
    dt: int = 0
    temp: float = 0.0
    feels_like: float = 0.0
    pressure: int = 0
    humidity: int = 0
    dew_point: float = 0.0
    uvi: float = 0.0
    clouds: int = 0
    visibility: int = 0
    wind_speed: float = 0.0
    wind_gust: float = 0.0
    wind_deg: int = 0
    pop: float = 0.0
    rain: Precipitation | None = None
    snow: Precipitation | None = None
    weather: list[WeatherCondition] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HourData:
        return cls(
            dt=_int(data, "dt"),
            temp=_float(data, "temp"),
            feels_like=_float(data, "feels_like"),
            pressure=_int(data, "pressure"),
            humidity=_int(data, "humidity"),
            dew_point=_float(data, "dew_point"),
            uvi=_float(data, "uvi"),
            clouds=_int(data, "clouds"),
            visibility=_int(data, "visibility"),
            wind_speed=_float(data, "wind_speed"),
            wind_gust=_float(data, "wind_gust"),
            wind_deg=_int(data, "wind_deg"),
            pop=_float(data, "pop"),
            rain=_precipitation(data, "rain"),
            snow=_precipitation(data, "snow"),
            weather=_conditions(data),
        )


@dataclass
class TempData:
    day: float = 0.0
    min: float = 0.0
    max: float = 0.0
    night: float = 0.0
    eve: float = 0.0
    morn: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TempData:
        return cls(**{name: _float(data, name) for name in ("day", "min", "max", "night", "eve", "morn")})


@dataclass
class FeelsLikeData:
    day: float = 0.0
    night: float = 0.0
    eve: float = 0.0
    morn: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FeelsLikeData:
        return cls(**{name: _float(data, name) for name in ("day", "night", "eve", "morn")})


@dataclass
class DayData:
    dt: int = 0
    sunrise: int = 0
    sunset: int = 0
    moonrise: int = 0
    moonset: int = 0
    moon_phase: float = 0.0
    summary: str = ""
    temp: TempData = field(default_factory=TempData)
    feels_like: FeelsLikeData = field(default_factory=FeelsLikeData)
    pressure: int = 0
    humidity: int = 0
    dew_point: float = 0.0
    wind_speed: float = 0.0
    wind_gust: float = 0.0
    wind_deg: int = 0
    clouds: int = 0
    uvi: float = 0.0
    pop: float = 0.0
    rain: float = 0.0
    snow: float = 0.0
    weather: list[WeatherCondition] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DayData:
        return cls(
            dt=_int(data, "dt"),
            sunrise=_int(data, "sunrise"),
            sunset=_int(data, "sunset"),
            moonrise=_int(data, "moonrise"),
            moonset=_int(data, "moonset"),
            moon_phase=_float(data, "moon_phase"),
            summary=_str(data, "summary"),
            temp=TempData.from_dict(data.get("temp") or {}),
            feels_like=FeelsLikeData.from_dict(data.get("feels_like") or {}),
            pressure=_int(data, "pressure"),
            humidity=_int(data, "humidity"),
            dew_point=_float(data, "dew_point"),
            wind_speed=_float(data, "wind_speed"),
            wind_gust=_float(data, "wind_gust"),
            wind_deg=_int(data, "wind_deg"),
            clouds=_int(data, "clouds"),
            uvi=_float(data, "uvi"),
            pop=_float(data, "pop"),
            rain=_float(data, "rain"),
            snow=_float(data, "snow"),
            weather=_conditions(data),
        )


@dataclass
class Alert:
    sender_name: str = ""
    event: str = ""
    start: int = 0
    end: int = 0
    description: str = ""
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Alert:
        return cls(
            sender_name=_str(data, "sender_name"),
            event=_str(data, "event"),
            start=_int(data, "start"),
            end=_int(data, "end"),
            description=_str(data, "description"),
            tags=[str(tag) for tag in data.get("tags") or []],
        )


@dataclass
class OneCallResponse:
    lat: float = 0.0
    lon: float = 0.0
    timezone: str = ""
    timezone_offset: int = 0
    current: CurrentWeather = field(default_factory=CurrentWeather)
    minutely: list[MinuteData] = field(default_factory=list)
    hourly: list[HourData] = field(default_factory=list)
    daily: list[DayData] = field(default_factory=list)
    alerts: list[Alert] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OneCallResponse:
        return cls(
            lat=_float(data, "lat"),
            lon=_float(data, "lon"),
            timezone=_str(data, "timezone"),
            timezone_offset=_int(data, "timezone_offset"),
            current=CurrentWeather.from_dict(data.get("current") or {}),
            minutely=[MinuteData.from_dict(item) for item in data.get("minutely") or []],
            hourly=[HourData.from_dict(item) for item in data.get("hourly") or []],
            daily=[DayData.from_dict(item) for item in data.get("daily") or []],
            alerts=[Alert.from_dict(item) for item in data.get("alerts") or []],
        )


_CLOUDY = "\U0001f325\ufe0f"


def weather_emoji(condition_id: int, current: CurrentWeather | None = None) -> str:
    """Return an emoji for a condition code; clear skies at night give a moon."""
    if condition_id == 800 and current is not None and (
        current.dt > current.sunset or current.dt < current.sunrise
    ):
        return "\U0001f319"
    if 200 <= condition_id <= 232:
        return "\u26a1"
    if 300 <= condition_id <= 321:
        return "\U0001f326"
    if 500 <= condition_id <= 531:
        return "\u2614"
    if 600 <= condition_id <= 622:
        return "\u26c4"
    if 700 <= condition_id <= 781:
        return "\U0001f32b"
    if condition_id == 800:
        return "\U0001f506"
    if 801 <= condition_id <= 804:
        return _CLOUDY
    return "\U0001f321"


_DIRECTIONS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


def wind_direction(degrees: int) -> str:
    """Return the eight-point compass direction for a bearing in degrees."""
    normalized = degrees % 360
    return _DIRECTIONS[int((normalized + 22.5) / 45) % 8]


def visibility_to_string(meters: int) -> str:
    km = meters / 1000
    if meters >= 10000:
        return "Excellent (10+ km)"
    if meters >= 5000:
        return f"Good ({km:.1f} km)"
    if meters >= 2000:
        return f"Moderate ({km:.1f} km)"
    return f"Poor ({km:.1f} km)"


_TEMPERATURE_THRESHOLDS = {
    "imperial": (40.0, 55.0, 82.0),
    "standard": (278.0, 285.0, 301.0),
}
_WIND_THRESHOLDS = {"imperial": 12.0, "standard": 5.5}


def weather_tip(weather: OneCallResponse, units: str) -> str:
    """Pick a short piece of advice for the current and upcoming weather."""
    current = weather.current

    if current.snow is not None and current.snow.one_hour > 0:
        return "It might be snowing right now! Stay warm and take care on slippery surfaces! \u26c4"
    if current.rain is not None and current.rain.one_hour > 0:
        return "It might be raining right now - don't go out without an umbrella! \u2614"

    for hour in weather.hourly[1:12]:
        at = datetime.fromtimestamp(hour.dt).strftime("%H:%M")
        if hour.snow is not None and hour.snow.one_hour > 0.1:
            return f"Snow expected around {at} - dress warmly and wear appropriate footwear! \u2744\ufe0f"
        if (hour.rain is not None and hour.rain.one_hour > 0.5) or hour.pop > 0.4:
            return f"Rain expected around {at} - don't forget your umbrella! \u2614"

    cold, cool, warm = _TEMPERATURE_THRESHOLDS.get(units, (5.0, 12.0, 28.0))
    if current.temp < cold:
        return "It's quite cold - wear a heavy coat and maybe a scarf! \U0001f9e3"
    if current.temp < cool:
        return "It's cool today - a jacket would be a good idea. \U0001f9e5"
    if current.temp > warm:
        return "It's hot today - stay hydrated and wear sunscreen! \U0001f9f4"

    if current.uvi > 6:
        return "UV index is high - wear sunscreen and maybe a hat! \U0001f9e2"

    if current.wind_speed > _WIND_THRESHOLDS.get(units, 20.0):
        return "It's quite windy today - secure any loose items outdoors! \U0001f4a8"

    return "Conditions look fine, enjoy your day! \U0001f324\ufe0f"