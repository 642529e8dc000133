"""HTTP client for the weather API server."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Mapping
from urllib.parse import quote_plus

import requests

from gust.models import City, OneCallResponse


class ApiError(Exception):
    """The weather API could not be reached or gave an unusable answer."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(ApiError):
    """The server refused the request because the rate limit was used up."""


@dataclass
class RateLimitInfo:
    limit: int = 0
    remaining: int = 0
    reset_time: datetime | None = None


@dataclass
class WeatherResponse:
    city: City | None = None
    weather: OneCallResponse | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WeatherResponse:
        city = data.get("city")
        weather = data.get("weather")
        return cls(
            city=None if city is None else City.from_dict(city),
            weather=None if weather is None else OneCallResponse.from_dict(weather),
        )


_FRACTION = re.compile(r"\.(\d+)")


def _parse_rfc3339(text: str) -> datetime:
    value = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    value = _FRACTION.sub(lambda match: "." + (match.group(1) + "000000")[:6], value, count=1)
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None or "T" not in value.upper():
        raise ValueError(f"not an RFC 3339 timestamp: {text!r}")
    return parsed


class Client:
    """Talks to the weather API and remembers the latest rate-limit headers."""

    def __init__(self, base_url: str, api_key: str, units: str) -> None:
        self.base_url = base_url
        self.api_key = api_key
        self.units = units
        self.session = requests.Session()
        self.rate_limit_info = RateLimitInfo()

    def _get(self, endpoint: str) -> requests.Response:
        try:
            return self.session.get(endpoint)
        except requests.RequestException as exc:
            raise ApiError(f"failed to connect to API: {exc}") from exc

    def _extract_rate_limit_info(self, response: requests.Response) -> None:
        info = self.rate_limit_info
        limit = response.headers.get("X-RateLimit-Limit", "")
        if limit:
            try:
                info.limit = int(limit)
            except ValueError:
                pass

        remaining = response.headers.get("X-RateLimit-Remaining", "")
        if remaining:
            try:
                info.remaining = int(remaining)
            except ValueError:
                info.remaining = 0

        reset = response.headers.get("X-RateLimit-Reset", "")
        if reset:
            try:
                info.reset_time = _parse_rfc3339(reset)
            except ValueError:
                info.reset_time = datetime.now().astimezone() + timedelta(hours=1)

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"failed to decode API response: {exc}") from exc

    def get_weather(self, city_name: str) -> WeatherResponse:
        endpoint = f"{self.base_url}/api/weather/{quote_plus(city_name)}?api_key={self.api_key}"
        if self.units:
            endpoint = f"{endpoint}&units={self.units}"

        with self._get(endpoint) as response:
            self._extract_rate_limit_info(response)

            if response.status_code == 429:
                raise RateLimitError(f"rate limit exceeded: {response.text}", 429)
            if response.status_code != 200:
                raise ApiError(
                    f"API error ({response.status_code}): {response.text}", response.status_code
                )

            data = self._decode(response)
        if data is None:
            return WeatherResponse()
        if not isinstance(data, dict):
            raise ApiError("failed to decode API response: expected a JSON object")
        return WeatherResponse.from_dict(data)

    def search_cities(self, query: str) -> list[City]:
        endpoint = f"{self.base_url}/api/cities/search?q={quote_plus(query)}"

        with self._get(endpoint) as response:
            if response.status_code != 200:
                raise ApiError(
                    f"API error ({response.status_code}): {response.text}", response.status_code
                )
            data = self._decode(response)
        if data is None:
            return []
        if not isinstance(data, list):
            raise ApiError("failed to decode API response: expected a JSON array")
        return [City.from_dict(item) for item in data]