"""Capacity formulas: beds, staff and supplies.

Every function is pure and returns its result together with a
CalculationExplanation (formula, inputs, result, derivation text).

Beds:
    predicted_admissions = baseline x seasonal_uplift x risk_multiplier
    peak_occupancy = predicted_admissions x avg_length_of_stay_days
    required_beds = peak_occupancy / target_occupancy
    extra_beds = max(0, ceil(required_beds - allocated_beds_for_risk))

Staff:
    peak_load = predicted_admissions x 1.5
    required_doctors = ceil(peak_load / max_patients_per_doctor_per_shift)
    required_nurses = ceil(peak_load / max_patients_per_nurse_per_shift)
    extra_x = max(0, required_x - current_x_per_shift)

Supplies (7-day horizon):
    oxygen_liters = ceil(predicted_admissions x 0.4 x 7 x 10)
    nebulizer_units = ceil(predicted_admissions x 0.3)
"""

import math
from dataclasses import dataclass

from .models import (
    CalculationExplanation,
    CapacityRecommendation,
    HospitalConfig,
    Severity,
    SupplyRecommendation,
)

PEAK_SHIFT_FACTOR = 1.5
SUPPLY_HORIZON_DAYS = 7
OXYGEN_PATIENT_SHARE = 0.4
OXYGEN_LITERS_PER_PATIENT_DAY = 10
NEBULIZER_PATIENT_SHARE = 0.3

# Digits kept before ceiling so float noise never adds a unit
_CEIL_PRECISION = 9


@dataclass(frozen=True)
class BedCapacity:
    predicted_admissions: float
    peak_occupancy: float
    required_beds: float
    extra_beds: int
    explanation: CalculationExplanation


@dataclass(frozen=True)
class StaffCapacity:
    peak_load: float
    required_doctors: int
    required_nurses: int
    extra_doctors: int
    extra_nurses: int
    explanation: CalculationExplanation


@dataclass(frozen=True)
class SupplyNeeds:
    predicted_patients: float
    duration_days: int
    oxygen_liters: int
    nebulizer_units: int
    supplies: list[SupplyRecommendation]
    explanation: CalculationExplanation


def ceil_units(value: float) -> int:
    """Whole units needed to cover `value`."""
    return math.ceil(round(value, _CEIL_PRECISION))


def predicted_admissions(
    config: HospitalConfig, risk_multiplier: float, seasonal_uplift: float
) -> float:
    return config.baseline_patients_per_day * seasonal_uplift * risk_multiplier


def calculate_bed_capacity(
    config: HospitalConfig, risk_multiplier: float, seasonal_uplift: float
) -> BedCapacity:
    """Extra beds needed beyond the beds allocated for risk."""
    admissions = predicted_admissions(config, risk_multiplier, seasonal_uplift)
    peak_occupancy = admissions * config.avg_length_of_stay_days
    required_beds = peak_occupancy / config.target_occupancy
    extra_beds = max(0, ceil_units(required_beds - config.allocated_beds_for_risk))

    explanation = CalculationExplanation(
        formula=(
            "extraBeds = max(0, ceil((baseline × uplift × risk × LOS / targetOcc)"
            " - allocated))"
        ),
        inputs={
            "baseline": config.baseline_patients_per_day,
            "uplift": seasonal_uplift,
            "riskMultiplier": risk_multiplier,
            "avgLOS": config.avg_length_of_stay_days,
            "targetOcc": config.target_occupancy,
            "allocated": config.allocated_beds_for_risk,
        },
        result=extra_beds,
        reasoning=(
            f"Predicted {admissions:.1f} admissions/day -> "
            f"{peak_occupancy:.1f} patient-days -> "
            f"{required_beds:.1f} beds required -> "
            f"{extra_beds} extra beds needed"
        ),
    )
    return BedCapacity(
        predicted_admissions=admissions,
        peak_occupancy=peak_occupancy,
        required_beds=required_beds,
        extra_beds=extra_beds,
        explanation=explanation,
    )


def calculate_staff_capacity(
    config: HospitalConfig, risk_multiplier: float, seasonal_uplift: float
) -> StaffCapacity:
    """Extra doctors and nurses per shift for the peak load."""
    admissions = predicted_admissions(config, risk_multiplier, seasonal_uplift)
    peak_load = admissions * PEAK_SHIFT_FACTOR

    required_doctors = ceil_units(peak_load / config.max_patients_per_doctor_per_shift)
    required_nurses = ceil_units(peak_load / config.max_patients_per_nurse_per_shift)
    extra_doctors = max(0, required_doctors - config.current_doctors_per_shift)
    extra_nurses = max(0, required_nurses - config.current_nurses_per_shift)

    explanation = CalculationExplanation(
        formula="extraStaff = max(0, ceil(peakLoad / maxPatientsPerStaff) - current)",
        inputs={
            "peakLoad": peak_load,
            "maxPatientsPerDoctor": config.max_patients_per_doctor_per_shift,
            "maxPatientsPerNurse": config.max_patients_per_nurse_per_shift,
            "currentDoctors": config.current_doctors_per_shift,
            "currentNurses": config.current_nurses_per_shift,
        },
        result=extra_doctors + extra_nurses,
        reasoning=(
            f"Peak load {peak_load:.1f} patients -> Need {required_doctors} doctors "
            f"(+{extra_doctors}), {required_nurses} nurses (+{extra_nurses})"
        ),
    )
    return StaffCapacity(
        peak_load=peak_load,
        required_doctors=required_doctors,
        required_nurses=required_nurses,
        extra_doctors=extra_doctors,
        extra_nurses=extra_nurses,
        explanation=explanation,
    )


def calculate_supply_needs(
    config: HospitalConfig, risk_multiplier: float, seasonal_uplift: float
) -> SupplyNeeds:
    """Oxygen and nebulizer stock for the planning horizon."""
    patients = predicted_admissions(config, risk_multiplier, seasonal_uplift)
    days = SUPPLY_HORIZON_DAYS

    oxygen = ceil_units(patients * OXYGEN_PATIENT_SHARE * days * OXYGEN_LITERS_PER_PATIENT_DAY)
    nebulizers = ceil_units(patients * NEBULIZER_PATIENT_SHARE)

    supplies = [
        SupplyRecommendation(
            item="Oxygen",
            quantity=oxygen,
            unit="liters",
            urgency=Severity.HIGH,
            explanation=CalculationExplanation(
                formula="oxygen = ceil(patients × 0.4 × days × 10)",
                inputs={"predictedPatients": patients, "duration": days},
                result=oxygen,
                reasoning=(
                    f"40% of {patients:.1f} patients need oxygen support "
                    f"(10 L/day for {days} days) -> {oxygen} liters"
                ),
            ),
        ),
        SupplyRecommendation(
            item="Nebulizers",
            quantity=nebulizers,
            unit="units",
            urgency=Severity.MEDIUM,
            explanation=CalculationExplanation(
                formula="nebulizers = ceil(patients × 0.3)",
                inputs={"predictedPatients": patients},
                result=nebulizers,
                reasoning=(
                    f"30% of {patients:.1f} patients need nebulizer treatment "
                    f"-> {nebulizers} units"
                ),
            ),
        ),
    ]

    explanation = CalculationExplanation(
        formula="Supply-specific formulas over a fixed planning horizon",
        inputs={"predictedPatients": patients, "duration": days},
        result=len(supplies),
        reasoning=(
            f"Calculated {len(supplies)} critical supply categories: "
            f"{oxygen} L oxygen, {nebulizers} nebulizers over {days} days"
        ),
    )
    return SupplyNeeds(
        predicted_patients=patients,
        duration_days=days,
        oxygen_liters=oxygen,
        nebulizer_units=nebulizers,
        supplies=supplies,
        explanation=explanation,
    )


def overall_severity(risk_multiplier: float, seasonal_uplift: float) -> Severity:
    """Severity of the combined load multiplier."""
    load = risk_multiplier * seasonal_uplift
    if load < 1.2:
        return Severity.LOW
    if load < 1.5:
        return Severity.MEDIUM
    if load < 2.0:
        return Severity.HIGH
    return Severity.CRITICAL


def calculate_capacity(
    config: HospitalConfig,
    risk_multiplier: float,
    seasonal_uplift: float,
    summary: str = "",
) -> CapacityRecommendation:
    """Run all three calculations and bundle the results."""
    beds = calculate_bed_capacity(config, risk_multiplier, seasonal_uplift)
    staff = calculate_staff_capacity(config, risk_multiplier, seasonal_uplift)
    supplies = calculate_supply_needs(config, risk_multiplier, seasonal_uplift)

    return CapacityRecommendation(
        extra_beds=beds.extra_beds,
        bed_explanation=beds.explanation,
        extra_doctors=staff.extra_doctors,
        extra_nurses=staff.extra_nurses,
        staff_explanation=staff.explanation,
        supplies=supplies.supplies,
        overall_severity=overall_severity(risk_multiplier, seasonal_uplift),
        summary=summary,
    )
