"""Project-level configuration, path helpers and hospital defaults."""

import json
import os
from pathlib import Path
from typing import Union

from .models import HospitalConfig, Location

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"
LOGS_DIR = PROJECT_ROOT / "logs"
DEFAULT_DB_PATH = DATA_DIR / "pra_runs.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)


PathLike = Union[str, Path]


DEFAULT_HOSPITAL_CONFIG = HospitalConfig(
    hospital_id="AIIMS-DEL-001",
    name="All India Institute of Medical Sciences, Delhi",
    location=Location(city="Delhi", state="Delhi", country="IN", lat=28.5672, lon=77.2100),
    total_beds=500,
    allocated_beds_for_risk=100,  # respiratory / medicine / emergency
    avg_length_of_stay_days=3,
    target_occupancy=0.85,
    current_doctors_per_shift=15,
    current_nurses_per_shift=40,
    max_patients_per_doctor_per_shift=15,
    max_patients_per_nurse_per_shift=5,
    baseline_patients_per_day=50,
    uplift_factors={
        "POST_MONSOON": 1.3,
        "MONSOON": 1.3,
        "SUMMER": 1.2,
        "WINTER": 1.4,
    },
    hazard_uplift_overrides={
        "POLLUTION_SPIKE": 1.35,
        "HEATWAVE": 1.25,
        "DENGUE_OUTBREAK": 1.4,
        "INFLUENZA_SURGE": 1.45,
    },
)


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def load_hospital_config(path: PathLike | None = None) -> HospitalConfig:
    """
    Load hospital configuration.

    Args:
        path: JSON file with HospitalConfig fields. Defaults to the
              HOSPITAL_CONFIG_PATH env var; built-in defaults when unset.

    Returns:
        HospitalConfig snapshot
    """
    if path is None:
        path = os.getenv("HOSPITAL_CONFIG_PATH")
    if not path:
        return DEFAULT_HOSPITAL_CONFIG

    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = PROJECT_ROOT / candidate

    with open(candidate, "r", encoding="utf-8") as f:
        data = json.load(f)

    # Partial files layer on top of the defaults
    merged = DEFAULT_HOSPITAL_CONFIG.to_dict()
    location = {**merged["location"], **data.pop("location", {})}
    merged.update(data)
    merged["location"] = location
    return HospitalConfig.from_dict(merged)
