"""Seasonal environmental defaults and risk bands."""

from dataclasses import dataclass
from datetime import date, datetime, time, timezone

from ..models import EnvironmentalData, Season, Severity

# season -> (aqi, temperature, humidity, rainfall, alert)
_SEASONAL_DEFAULTS = {
    Season.WINTER: (350, 15, 70, 5, "Air Quality: Very Poor. Health advisory in effect."),
    Season.SUMMER: (120, 40, 30, 0, "Heatwave warning. Extreme temperatures expected."),
    Season.MONSOON: (80, 28, 85, 150, "Heavy rainfall expected. Flood risk in low-lying areas."),
    Season.POST_MONSOON: (
        200,
        25,
        75,
        20,
        "Air quality deteriorating. Vector-borne disease risk continues.",
    ),
}


@dataclass(frozen=True)
class RiskBand:
    """Banded reading of one environmental indicator."""

    level: str
    severity: Severity
    health_impact: str


def simulate_environment(season: Season, city: str, on: date | None = None) -> EnvironmentalData:
    """Deterministic environmental snapshot for a season."""
    aqi, temperature, humidity, rainfall, alert = _SEASONAL_DEFAULTS[season]
    day = on or date.today()
    return EnvironmentalData(
        location=city,
        timestamp=datetime.combine(day, time(12, 0), tzinfo=timezone.utc),
        aqi=aqi,
        temperature=temperature,
        humidity=humidity,
        rainfall=rainfall,
        weather_alert=alert,
    )


def estimate_aqi_from_conditions(conditions: str, season: Season) -> int:
    """Rough AQI when only a weather description is available."""
    text = conditions.lower()

    if season == Season.WINTER:
        base = 250.0
    elif season == Season.POST_MONSOON:
        base = 150.0
    else:
        base = 80.0

    if "clear" in text or "sunny" in text:
        base *= 0.8
    elif "rain" in text or "storm" in text:
        base *= 0.5  # rain clears the air
    elif "fog" in text or "haze" in text:
        base *= 1.5

    return round(min(500.0, max(50.0, base)))


def aqi_risk(aqi: float) -> RiskBand:
    """Band an AQI reading."""
    if aqi <= 50:
        return RiskBand("Good", Severity.LOW, "Minimal health impact")
    if aqi <= 100:
        return RiskBand("Moderate", Severity.LOW, "Acceptable air quality")
    if aqi <= 200:
        return RiskBand("Poor", Severity.MEDIUM, "Respiratory issues for sensitive groups")
    if aqi <= 300:
        return RiskBand("Very Poor", Severity.HIGH, "Respiratory issues for general population")
    return RiskBand("Severe", Severity.CRITICAL, "Serious health impacts for all")


def temperature_risk(temperature: float) -> RiskBand:
    """Band a temperature reading (Celsius)."""
    if temperature >= 40:
        return RiskBand("Extreme Heat", Severity.CRITICAL, "Heatstroke risk, dehydration")
    if temperature >= 35:
        return RiskBand("Very Hot", Severity.HIGH, "Heat exhaustion risk")
    if temperature <= 5:
        return RiskBand("Extreme Cold", Severity.HIGH, "Hypothermia risk")
    if temperature <= 10:
        return RiskBand("Very Cold", Severity.MEDIUM, "Cold-related illnesses")
    return RiskBand("Normal", Severity.LOW, "Minimal temperature-related health impact")


def overall_environmental_severity(*bands: RiskBand) -> Severity:
    """CRITICAL or HIGH if any band is, MEDIUM otherwise."""
    worst = max((band.severity for band in bands), key=lambda s: s.rank)
    return worst if worst.rank >= Severity.HIGH.rank else Severity.MEDIUM
