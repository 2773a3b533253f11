"""Environment module: live providers, seasonal fallbacks, calendars."""

from .festivals import FESTIVAL_CALENDAR, get_upcoming_festivals
from .providers import (
    AirQualityReading,
    IEnvironmentalDataProvider,
    OpenWeatherMapProvider,
    StaticEnvironmentalDataProvider,
    WeatherReading,
)
from .seasons import get_season, season_description, seasonal_risk_factors
from .simulator import (
    RiskBand,
    aqi_risk,
    estimate_aqi_from_conditions,
    overall_environmental_severity,
    simulate_environment,
    temperature_risk,
)

__all__ = [
    "FESTIVAL_CALENDAR",
    "get_upcoming_festivals",
    "AirQualityReading",
    "WeatherReading",
    "IEnvironmentalDataProvider",
    "OpenWeatherMapProvider",
    "StaticEnvironmentalDataProvider",
    "get_season",
    "season_description",
    "seasonal_risk_factors",
    "RiskBand",
    "aqi_risk",
    "temperature_risk",
    "estimate_aqi_from_conditions",
    "overall_environmental_severity",
    "simulate_environment",
]
