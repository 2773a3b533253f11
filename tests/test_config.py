"""Tests for configuration loading."""

import json
from pathlib import Path

from pra_core.config import (
    DEFAULT_DB_PATH,
    DEFAULT_HOSPITAL_CONFIG,
    PROJECT_ROOT,
    load_hospital_config,
    resolve_db_path,
)
from pra_core.models import Season


class TestResolveDbPath:
    """Tests for resolve_db_path."""

    def test_default(self):
        assert resolve_db_path(None) == DEFAULT_DB_PATH

    def test_memory(self):
        assert resolve_db_path(":memory:") == ":memory:"

    def test_relative_is_under_project_root(self):
        assert resolve_db_path("data/test.db") == PROJECT_ROOT / "data" / "test.db"

    def test_absolute_unchanged(self, tmp_path):
        path = tmp_path / "runs.db"
        assert resolve_db_path(str(path)) == Path(path)


class TestLoadHospitalConfig:
    """Tests for load_hospital_config."""

    def test_defaults_without_path(self, monkeypatch):
        monkeypatch.delenv("HOSPITAL_CONFIG_PATH", raising=False)
        assert load_hospital_config() == DEFAULT_HOSPITAL_CONFIG

    def test_partial_file_layers_on_defaults(self, tmp_path):
        """Test that a partial file overrides only the given fields."""
        path = tmp_path / "hospital.json"
        path.write_text(
            json.dumps(
                {
                    "hospital_id": "KEM-MUM-001",
                    "location": {"city": "Mumbai", "state": "Maharashtra"},
                    "baseline_patients_per_day": 70,
                }
            ),
            encoding="utf-8",
        )

        config = load_hospital_config(path)

        assert config.hospital_id == "KEM-MUM-001"
        assert config.location.city == "Mumbai"
        assert config.location.country == "IN"
        assert config.baseline_patients_per_day == 70
        assert config.total_beds == DEFAULT_HOSPITAL_CONFIG.total_beds

    def test_path_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "hospital.json"
        path.write_text(json.dumps({"total_beds": 800}), encoding="utf-8")
        monkeypatch.setenv("HOSPITAL_CONFIG_PATH", str(path))

        assert load_hospital_config().total_beds == 800


class TestDefaultHospitalConfig:
    """Tests for the built-in hospital profile."""

    def test_uplift_factor_per_season(self):
        """Test that every uplift factor is keyed by a season."""
        assert set(DEFAULT_HOSPITAL_CONFIG.uplift_factors) == {s.value for s in Season}
