"""Festival calendar with historical health impact."""

from datetime import date, timedelta

from ..models import FestivalInfo

# name -> (health risks, affected departments)
_FESTIVAL_IMPACT: dict[str, tuple[list[str], list[str]]] = {
    "Makar Sankranti": (
        ["Kite-string injuries", "Falls from rooftops"],
        ["Emergency", "Orthopedics"],
    ),
    "Holi": (
        ["Eye injuries (chemical colours)", "Skin allergies", "Alcohol-related trauma"],
        ["Emergency", "Ophthalmology", "Dermatology"],
    ),
    "Ram Navami": (
        ["Crowd injuries", "Heat exhaustion"],
        ["Emergency"],
    ),
    "Eid al-Fitr": (
        ["Gastrointestinal illness", "Road accidents"],
        ["Emergency", "Gastroenterology"],
    ),
    "Independence Day": (
        ["Road accidents", "Crowd injuries"],
        ["Emergency", "Orthopedics"],
    ),
    "Ganesh Chaturthi": (
        ["Crowd injuries", "Drowning", "Waterborne diseases"],
        ["Emergency", "Internal Medicine"],
    ),
    "Dussehra": (
        ["Burns", "Crowd injuries"],
        ["Emergency", "Burns Unit"],
    ),
    "Diwali": (
        ["Burns (fireworks)", "Respiratory distress (smoke)", "Eye injuries"],
        ["Emergency", "Burns Unit", "Pulmonology", "Ophthalmology"],
    ),
    "Christmas": (
        ["Road accidents", "Alcohol-related trauma"],
        ["Emergency"],
    ),
}

# (name, date, surge multiplier)
_CALENDAR: list[tuple[str, date, float]] = [
    ("Makar Sankranti", date(2024, 1, 15), 1.3),
    ("Holi", date(2024, 3, 25), 1.8),
    ("Eid al-Fitr", date(2024, 4, 11), 1.5),
    ("Ram Navami", date(2024, 4, 17), 1.4),
    ("Independence Day", date(2024, 8, 15), 1.2),
    ("Ganesh Chaturthi", date(2024, 9, 7), 2.0),
    ("Dussehra", date(2024, 10, 12), 2.2),
    ("Diwali", date(2024, 11, 1), 3.0),
    ("Christmas", date(2024, 12, 25), 1.5),
    ("Makar Sankranti", date(2025, 1, 14), 1.3),
    ("Holi", date(2025, 3, 14), 1.8),
    ("Eid al-Fitr", date(2025, 3, 31), 1.5),
    ("Ram Navami", date(2025, 4, 6), 1.4),
    ("Independence Day", date(2025, 8, 15), 1.2),
    ("Ganesh Chaturthi", date(2025, 8, 27), 2.0),
    ("Dussehra", date(2025, 10, 2), 2.2),
    ("Diwali", date(2025, 10, 20), 3.0),
    ("Christmas", date(2025, 12, 25), 1.5),
    ("Makar Sankranti", date(2026, 1, 14), 1.3),
    ("Holi", date(2026, 3, 4), 1.8),
    ("Eid al-Fitr", date(2026, 3, 21), 1.5),
    ("Ram Navami", date(2026, 3, 27), 1.4),
    ("Independence Day", date(2026, 8, 15), 1.2),
    ("Ganesh Chaturthi", date(2026, 9, 16), 2.0),
    ("Dussehra", date(2026, 10, 22), 2.2),
    ("Diwali", date(2026, 11, 8), 3.0),
    ("Christmas", date(2026, 12, 25), 1.5),
]

FESTIVAL_CALENDAR: list[FestivalInfo] = [
    FestivalInfo(
        id=f"{name.lower().replace(' ', '-')}-{day.year}",
        name=name,
        date=day,
        region="IN",
        health_risks=_FESTIVAL_IMPACT[name][0],
        affected_departments=_FESTIVAL_IMPACT[name][1],
        historical_surge_multiplier=surge,
    )
    for name, day, surge in _CALENDAR
]


def get_upcoming_festivals(on: date | None = None, days_ahead: int = 30) -> list[FestivalInfo]:
    """Festivals between `on` and `on + days_ahead` (inclusive), soonest first."""
    start = on or date.today()
    end = start + timedelta(days=days_ahead)
    upcoming = [f for f in FESTIVAL_CALENDAR if start <= f.date <= end]
    return sorted(upcoming, key=lambda f: f.date)
