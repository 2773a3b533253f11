"""Tests for capacity formulas."""

import pytest

from pra_core.capacity import (
    calculate_bed_capacity,
    calculate_capacity,
    calculate_staff_capacity,
    calculate_supply_needs,
    ceil_units,
    overall_severity,
    predicted_admissions,
)
from pra_core.models import Severity


class TestCeilUnits:
    """Tests for ceil_units."""

    def test_rounds_up(self):
        assert ceil_units(9.75) == 10

    def test_whole_value_unchanged(self):
        assert ceil_units(30.0) == 30

    def test_float_noise_ignored(self):
        """Test that representation noise never adds a unit."""
        assert ceil_units(100.00000000000001) == 100
        assert ceil_units(0.1 + 0.2 - 0.3) == 0


class TestBedCapacity:
    """Tests for bed calculations."""

    def test_delhi_post_monsoon(self, hospital_config):
        """Test the default hospital at 1.3 uplift and 1.5 risk."""
        beds = calculate_bed_capacity(hospital_config, 1.5, 1.3)

        assert beds.predicted_admissions == pytest.approx(97.5)
        assert beds.peak_occupancy == pytest.approx(292.5)
        assert beds.required_beds == pytest.approx(344.1176, rel=1e-4)
        assert beds.extra_beds == 245

    def test_explanation(self, hospital_config):
        """Test the derivation text and result."""
        beds = calculate_bed_capacity(hospital_config, 1.5, 1.3)

        assert beds.explanation.result == 245
        assert beds.explanation.inputs["baseline"] == 50
        assert beds.explanation.inputs["allocated"] == 100
        assert beds.explanation.reasoning == (
            "Predicted 97.5 admissions/day -> 292.5 patient-days -> "
            "344.1 beds required -> 245 extra beds needed"
        )

    def test_exact_fit_needs_no_extra_beds(self, hospital_config):
        """Test that required == allocated yields zero."""
        config = hospital_config.with_updates(
            avg_length_of_stay_days=1, target_occupancy=0.5, allocated_beds_for_risk=100
        )
        beds = calculate_bed_capacity(config, 1.0, 1.0)

        assert beds.required_beds == pytest.approx(100.0)
        assert beds.extra_beds == 0

    def test_spare_capacity_is_not_negative(self, hospital_config):
        """Test that surplus beds never give a negative result."""
        config = hospital_config.with_updates(allocated_beds_for_risk=1000)
        assert calculate_bed_capacity(config, 1.5, 1.3).extra_beds == 0


class TestStaffCapacity:
    """Tests for staff calculations."""

    def test_delhi_post_monsoon(self, hospital_config):
        """Test staff needs of the default hospital."""
        staff = calculate_staff_capacity(hospital_config, 1.5, 1.3)

        assert staff.peak_load == pytest.approx(146.25)
        assert staff.required_doctors == 10
        assert staff.required_nurses == 30
        assert staff.extra_doctors == 0
        assert staff.extra_nurses == 0
        assert staff.explanation.result == 0

    def test_understaffed(self, hospital_config):
        """Test extra staff when current staff is short."""
        config = hospital_config.with_updates(
            current_doctors_per_shift=4, current_nurses_per_shift=20
        )
        staff = calculate_staff_capacity(config, 1.5, 1.3)

        assert staff.extra_doctors == 6
        assert staff.extra_nurses == 10
        assert staff.explanation.result == 16

    def test_exact_fit_needs_no_extra_staff(self, hospital_config):
        """Test that required == current yields zero."""
        config = hospital_config.with_updates(
            baseline_patients_per_day=100, current_doctors_per_shift=10
        )
        staff = calculate_staff_capacity(config, 1.0, 1.0)

        assert staff.required_doctors == 10
        assert staff.extra_doctors == 0


class TestSupplyNeeds:
    """Tests for supply calculations."""

    def test_delhi_post_monsoon(self, hospital_config):
        """Test oxygen and nebulizer quantities."""
        supplies = calculate_supply_needs(hospital_config, 1.5, 1.3)

        assert supplies.duration_days == 7
        assert supplies.oxygen_liters == 2730
        assert supplies.nebulizer_units == 30
        assert [s.item for s in supplies.supplies] == ["Oxygen", "Nebulizers"]
        assert supplies.supplies[0].urgency == Severity.HIGH
        assert supplies.supplies[1].urgency == Severity.MEDIUM

    def test_zero_load(self, hospital_config):
        """Test that no patients need no supplies."""
        supplies = calculate_supply_needs(hospital_config, 0.0, 1.3)

        assert supplies.oxygen_liters == 0
        assert supplies.nebulizer_units == 0


class TestOverallSeverity:
    """Tests for overall_severity bands."""

    @pytest.mark.parametrize(
        "risk,uplift,expected",
        [
            (1.0, 1.0, Severity.LOW),
            (1.0, 1.2, Severity.MEDIUM),
            (1.0, 1.5, Severity.HIGH),
            (1.5, 1.3, Severity.HIGH),
            (2.0, 1.0, Severity.CRITICAL),
        ],
    )
    def test_bands(self, risk, uplift, expected):
        assert overall_severity(risk, uplift) == expected


class TestCalculateCapacity:
    """Tests for the bundled recommendation."""

    def test_bundle(self, hospital_config):
        """Test that the bundle carries all three results."""
        recommendation = calculate_capacity(hospital_config, 1.5, 1.3, summary="post-monsoon")

        assert recommendation.extra_beds == 245
        assert recommendation.extra_doctors == 0
        assert recommendation.extra_nurses == 0
        assert len(recommendation.supplies) == 2
        assert recommendation.overall_severity == Severity.HIGH
        assert recommendation.summary == "post-monsoon"

    def test_deterministic(self, hospital_config):
        """Test that identical inputs give identical outputs."""
        assert calculate_capacity(hospital_config, 1.5, 1.3) == calculate_capacity(
            hospital_config, 1.5, 1.3
        )

    def test_predicted_admissions(self, hospital_config):
        assert predicted_admissions(hospital_config, 2.0, 1.4) == pytest.approx(140.0)
