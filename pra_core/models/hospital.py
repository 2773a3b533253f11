"""Hospital and forecasting data models."""

from dataclasses import asdict, dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Any


class Season(str, Enum):
    """Climatic season (Indian calendar)."""

    WINTER = "WINTER"
    SUMMER = "SUMMER"
    MONSOON = "MONSOON"
    POST_MONSOON = "POST_MONSOON"


class Severity(str, Enum):
    """Ordered severity scale."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return list(Severity).index(self)


class RiskType(str, Enum):
    """Kind of a health risk forecast."""

    POLLUTION_SPIKE = "POLLUTION_SPIKE"
    HEATWAVE = "HEATWAVE"
    DENGUE_OUTBREAK = "DENGUE_OUTBREAK"
    INFLUENZA_SURGE = "INFLUENZA_SURGE"
    FESTIVAL_RELATED = "FESTIVAL_RELATED"
    NORMAL = "NORMAL"


@dataclass(frozen=True)
class Location:
    """Where the hospital is."""

    city: str
    state: str
    country: str = "IN"
    lat: float | None = None
    lon: float | None = None


@dataclass(frozen=True)
class HospitalConfig:
    """Read-only capacity parameters of one hospital."""

    hospital_id: str
    name: str
    location: Location

    # Bed capacity
    total_beds: int
    allocated_beds_for_risk: int
    avg_length_of_stay_days: float
    target_occupancy: float  # 0 < x < 1

    # Staff capacity per shift
    current_doctors_per_shift: int
    current_nurses_per_shift: int
    max_patients_per_doctor_per_shift: float
    max_patients_per_nurse_per_shift: float

    # Baseline load
    baseline_patients_per_day: float

    # Season name -> multiplier
    uplift_factors: dict[str, float] = field(default_factory=dict)
    hazard_uplift_overrides: dict[str, float] = field(default_factory=dict)

    def season_uplift(self, season: Season | str) -> float:
        """Uplift factor for a season, 1.0 when unknown."""
        key = season.value if isinstance(season, Season) else season
        return self.uplift_factors.get(key, 1.0)

    def hazard_uplift(self, hazard: str) -> float | None:
        """Override factor for a hazard type, None when not configured."""
        return self.hazard_uplift_overrides.get(hazard)

    def with_updates(self, **changes: Any) -> "HospitalConfig":
        """Return a copy with the given fields replaced."""
        if isinstance(changes.get("location"), dict):
            changes["location"] = replace(self.location, **changes["location"])
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HospitalConfig":
        values = dict(data)
        location = values.pop("location")
        if isinstance(location, dict):
            location = Location(**location)
        return cls(location=location, **values)


@dataclass(frozen=True)
class EnvironmentalData:
    """Environmental snapshot used by perception."""

    location: str
    timestamp: datetime
    aqi: int
    temperature: float  # Celsius
    humidity: float  # percentage
    rainfall: float | None = None  # mm
    weather_alert: str | None = None


@dataclass(frozen=True)
class FestivalInfo:
    """A calendar event with known health impact."""

    id: str
    name: str
    date: date
    region: str
    health_risks: list[str]
    affected_departments: list[str]
    historical_surge_multiplier: float  # 2.5 = 250% of baseline


@dataclass(frozen=True)
class HealthRiskForecast:
    """One forecast risk derived from perception inputs."""

    id: str
    risk_type: RiskType
    severity: Severity
    duration_days: int
    predicted_patient_load_multiplier: float
    affected_departments: list[str]
    description: str
    start_date: date


@dataclass(frozen=True)
class CalculationExplanation:
    """Formula, inputs, result and a readable derivation."""

    formula: str
    inputs: dict[str, float]
    result: float
    reasoning: str


@dataclass(frozen=True)
class SupplyRecommendation:
    """Quantity of one supply item to stock."""

    item: str
    quantity: int
    unit: str
    urgency: Severity
    explanation: CalculationExplanation


@dataclass(frozen=True)
class CapacityRecommendation:
    """Bundle of capacity results for one scenario."""

    extra_beds: int
    bed_explanation: CalculationExplanation
    extra_doctors: int
    extra_nurses: int
    staff_explanation: CalculationExplanation
    supplies: list[SupplyRecommendation]
    overall_severity: Severity
    summary: str
