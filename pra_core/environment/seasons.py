"""Season detection for the Indian climate calendar."""

from datetime import date

from ..models import Season

_DESCRIPTIONS = {
    Season.WINTER: "Winter season (Dec-Feb): Cold temperatures, high pollution in North India",
    Season.SUMMER: "Summer season (Mar-May): High temperatures, heat-related illnesses",
    Season.MONSOON: "Monsoon season (Jun-Sep): Heavy rainfall, vector-borne diseases peak",
    Season.POST_MONSOON: "Post-monsoon (Oct-Nov): Transition period, continued vector activity",
}

_RISK_FACTORS = {
    Season.WINTER: [
        "Respiratory infections",
        "Influenza",
        "Pneumonia",
        "Air pollution effects",
        "Hypothermia (in some regions)",
    ],
    Season.SUMMER: [
        "Heatstroke",
        "Dehydration",
        "Food poisoning",
        "Sunburn",
        "Heat exhaustion",
    ],
    Season.MONSOON: [
        "Dengue",
        "Malaria",
        "Leptospirosis",
        "Waterborne diseases",
        "Fungal infections",
    ],
    Season.POST_MONSOON: [
        "Dengue (continued)",
        "Viral fever",
        "Chikungunya",
        "Respiratory infections (onset)",
    ],
}


def get_season(on: date | None = None) -> Season:
    """Season for a date (today by default)."""
    month = (on or date.today()).month

    if month == 12 or month <= 2:
        return Season.WINTER
    if month <= 5:
        return Season.SUMMER
    if month <= 9:
        return Season.MONSOON
    return Season.POST_MONSOON


def season_description(season: Season) -> str:
    return _DESCRIPTIONS[season]


def seasonal_risk_factors(season: Season) -> list[str]:
    """Typical health risks of a season."""
    return list(_RISK_FACTORS[season])
