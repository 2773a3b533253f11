"""Live environmental data providers."""

import os
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from ..logging_config import get_logger

logger = get_logger(__name__)

OPENWEATHER_BASE_URL = "https://api.openweathermap.org"

# OpenWeatherMap index 1-5 -> approximate 0-500 AQI
_OWM_INDEX_TO_AQI = {1: 40, 2: 80, 3: 120, 4: 180, 5: 350}

# (upper PM2.5 bound, AQI at lower bound, AQI span, lower PM2.5 bound, PM2.5 span)
_PM25_BANDS = [
    (12.0, 0, 50, 0.0, 12.0),
    (35.4, 50, 50, 12.0, 23.4),
    (55.4, 100, 50, 35.4, 20.0),
    (150.4, 150, 50, 55.4, 95.0),
    (250.4, 200, 100, 150.4, 100.0),
]


@dataclass(frozen=True)
class WeatherReading:
    """Current weather at a location."""

    location: str
    temperature: float
    conditions: str
    humidity: float
    alert: str | None = None


@dataclass(frozen=True)
class AirQualityReading:
    """Current air quality at a location."""

    aqi: int
    main_pollutant: str
    city: str


class IEnvironmentalDataProvider(Protocol):
    """Live data source. Returns None instead of raising on any failure."""

    async def get_weather(self, city: str, country: str = "IN") -> WeatherReading | None:
        """Current weather for a city."""
        ...

    async def get_air_quality(self, city: str, country: str = "IN") -> AirQualityReading | None:
        """Current AQI for a city."""
        ...


def pm25_to_aqi(pm25: float) -> int:
    """Approximate AQI from a PM2.5 concentration."""
    for upper, aqi_low, aqi_span, pm_low, pm_span in _PM25_BANDS:
        if pm25 <= upper:
            return round(aqi_low + (aqi_span / pm_span) * (pm25 - pm_low))
    return round(300 + (200 / 250) * (pm25 - 250.4))


def owm_to_standard_aqi(owm_index: int, components: dict[str, float] | None) -> int:
    """Map an OpenWeatherMap air-pollution item to the 0-500 scale."""
    if components and components.get("pm2_5") is not None:
        return pm25_to_aqi(components["pm2_5"])
    return _OWM_INDEX_TO_AQI.get(owm_index, 100)


def main_pollutant(components: dict[str, float] | None) -> str:
    if not components:
        return "PM2.5"
    return max(components.items(), key=lambda item: item[1])[0].upper()


class OpenWeatherMapProvider:
    """OpenWeatherMap weather + air pollution over httpx."""

    def __init__(
        self,
        api_key: str | None = None,
        client: httpx.AsyncClient | None = None,
        base_url: str = OPENWEATHER_BASE_URL,
        timeout: float = 5.0,
    ):
        self._api_key = api_key or os.getenv("OPENWEATHER_API_KEY")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def close(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            await self._client.aclose()

    async def _get_json(self, path: str, params: dict[str, Any]) -> Any:
        response = await self._client.get(path, params={**params, "appid": self._api_key})
        response.raise_for_status()
        return response.json()

    async def get_weather(self, city: str, country: str = "IN") -> WeatherReading | None:
        """Current weather for a city, None when unavailable."""
        if not self._api_key:
            return None
        try:
            data = await self._get_json(
                "/data/2.5/weather", {"q": f"{city},{country}", "units": "metric"}
            )
            return WeatherReading(
                location=data.get("name", city),
                temperature=round(data["main"]["temp"]),
                conditions=data["weather"][0]["description"],
                humidity=data["main"]["humidity"],
            )
        except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError) as e:
            logger.warning("Weather fetch failed for %s: %s", city, e)
            return None

    async def get_air_quality(self, city: str, country: str = "IN") -> AirQualityReading | None:
        """Current AQI for a city (geocoded first), None when unavailable."""
        if not self._api_key:
            return None
        try:
            places = await self._get_json(
                "/geo/1.0/direct", {"q": f"{city},{country}", "limit": 1}
            )
            if not places:
                return None
            lat, lon = places[0]["lat"], places[0]["lon"]

            data = await self._get_json("/data/2.5/air_pollution", {"lat": lat, "lon": lon})
            items = data.get("list") or []
            if not items:
                return None
            item = items[0]
            components = item.get("components")
            return AirQualityReading(
                aqi=owm_to_standard_aqi(item["main"]["aqi"], components),
                main_pollutant=main_pollutant(components),
                city=city,
            )
        except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError) as e:
            logger.warning("Air quality fetch failed for %s: %s", city, e)
            return None


class StaticEnvironmentalDataProvider:
    """Provider with fixed readings; all-None means offline."""

    def __init__(
        self,
        weather: WeatherReading | None = None,
        air_quality: AirQualityReading | None = None,
    ):
        self._weather = weather
        self._air_quality = air_quality

    async def get_weather(self, city: str, country: str = "IN") -> WeatherReading | None:
        return self._weather

    async def get_air_quality(self, city: str, country: str = "IN") -> AirQualityReading | None:
        return self._air_quality
