"""Forecaster: synthesizes perception broadcasts into risk forecasts."""

from datetime import date
from typing import Any

from ...environment import aqi_risk
from ...models import (
    Action,
    ActionType,
    AgentMessage,
    AgentRole,
    HealthRiskForecast,
    HospitalConfig,
    Perception,
    Reasoning,
    RiskType,
    Season,
    Severity,
    to_plain,
)
from ...toolkit import IToolkit
from ..base import Agent, now

_LISTENS_TO = {
    ActionType.ENVIRONMENTAL_ASSESSMENT.value,
    ActionType.FESTIVAL_FORECAST.value,
    ActionType.SEASON_ASSESSMENT.value,
}

POLLUTION_AQI_THRESHOLD = 200
HEATWAVE_TEMPERATURE = 40


def build_forecasts(
    data: dict[str, Any], config: HospitalConfig, as_of: date
) -> list[HealthRiskForecast]:
    """Health risk forecasts implied by the collected perception data."""
    forecasts: list[HealthRiskForecast] = []
    environment = data.get("environment")
    season = data.get("season")

    def hazard_multiplier(risk_type: RiskType) -> float:
        return config.hazard_uplift(risk_type.value) or 1.0

    if environment and environment["aqi"] > POLLUTION_AQI_THRESHOLD:
        band = aqi_risk(environment["aqi"])
        forecasts.append(
            HealthRiskForecast(
                id=f"pollution-spike-{as_of.isoformat()}",
                risk_type=RiskType.POLLUTION_SPIKE,
                severity=band.severity,
                duration_days=14,
                predicted_patient_load_multiplier=hazard_multiplier(RiskType.POLLUTION_SPIKE),
                affected_departments=["Emergency", "Pulmonology", "Pediatrics"],
                description=(
                    f"AQI {environment['aqi']} ({band.level}). Expect surge in respiratory cases."
                ),
                start_date=as_of,
            )
        )

    if environment and environment["temperature"] >= HEATWAVE_TEMPERATURE:
        forecasts.append(
            HealthRiskForecast(
                id=f"heatwave-{as_of.isoformat()}",
                risk_type=RiskType.HEATWAVE,
                severity=Severity.CRITICAL,
                duration_days=7,
                predicted_patient_load_multiplier=hazard_multiplier(RiskType.HEATWAVE),
                affected_departments=["Emergency", "Internal Medicine"],
                description=(
                    f"Temperature {environment['temperature']}°C. "
                    "Expect heatstroke and dehydration cases."
                ),
                start_date=as_of,
            )
        )

    if season and season["season"] in (Season.MONSOON.value, Season.POST_MONSOON.value):
        forecasts.append(
            HealthRiskForecast(
                id=f"dengue-outbreak-{as_of.isoformat()}",
                risk_type=RiskType.DENGUE_OUTBREAK,
                severity=Severity.HIGH,
                duration_days=30,
                predicted_patient_load_multiplier=hazard_multiplier(RiskType.DENGUE_OUTBREAK),
                affected_departments=["Emergency", "Internal Medicine", "Pediatrics"],
                description="Vector-borne disease season. Expect dengue and malaria cases.",
                start_date=as_of,
            )
        )
    elif season and season["season"] == Season.WINTER.value:
        forecasts.append(
            HealthRiskForecast(
                id=f"influenza-surge-{as_of.isoformat()}",
                risk_type=RiskType.INFLUENZA_SURGE,
                severity=Severity.HIGH,
                duration_days=21,
                predicted_patient_load_multiplier=hazard_multiplier(RiskType.INFLUENZA_SURGE),
                affected_departments=["Emergency", "Pulmonology"],
                description="Winter season. Expect influenza and pneumonia cases.",
                start_date=as_of,
            )
        )

    for festival in data.get("festivals", []):
        surge = festival["surge_multiplier"]
        forecasts.append(
            HealthRiskForecast(
                id=festival["id"],
                risk_type=RiskType.FESTIVAL_RELATED,
                severity=Severity.HIGH if surge >= 3 else Severity.MEDIUM,
                duration_days=3,
                predicted_patient_load_multiplier=surge,
                affected_departments=list(festival["affected_departments"]),
                description=(
                    f"{festival['name']} in {festival['days_until']} days. Historical data "
                    f"shows {round((surge - 1) * 100)}% surge in "
                    f"{', '.join(festival['health_risks'])} cases."
                ),
                start_date=date.fromisoformat(festival["date"]),
            )
        )

    return forecasts


class ForecasterAgent(Agent):
    """Reasoning agent turning perception broadcasts into risk forecasts."""

    AGENT_ID = "forecaster"

    def __init__(self, toolkit: IToolkit):
        super().__init__(
            agent_id=self.AGENT_ID,
            name="Forecaster",
            role=AgentRole.REASONING,
            toolkit=toolkit,
            description="Synthesizes environmental, festival, and seasonal data into risk forecasts",
        )

    def receive_message(self, message: AgentMessage) -> None:
        if message.content.topic in _LISTENS_TO:
            self.memory.working.inbox.append(message)

    async def perceive(self) -> Perception:
        environment = self.latest_message_data(ActionType.ENVIRONMENTAL_ASSESSMENT.value)
        festival = self.latest_message_data(ActionType.FESTIVAL_FORECAST.value)
        season = self.latest_message_data(ActionType.SEASON_ASSESSMENT.value)
        sources = sum(1 for item in (environment, festival, season) if item is not None)

        return Perception(
            agent_id=self.agent_id,
            timestamp=now(),
            data={
                "as_of": self.toolkit.today().isoformat(),
                "environment": environment,
                "festivals": festival["festivals"] if festival else [],
                "season": season,
                "source_count": sources,
            },
            confidence=0.5 + 0.1 * sources,
        )

    def reason(self, perception: Perception) -> Reasoning:
        config = self.toolkit.get_hospital_config()
        as_of = date.fromisoformat(perception.data["as_of"])
        forecasts = build_forecasts(perception.data, config, as_of)

        conclusions = [f"Baseline patient load: {config.baseline_patients_per_day} patients/day"]
        if forecasts:
            conclusions.extend(
                f"{f.risk_type.value} ({f.severity.value}, {f.duration_days} days): "
                f"{f.predicted_patient_load_multiplier}x load"
                for f in forecasts
            )
            reasoning = (
                f"Combined {perception.data['source_count']} perception source(s) into "
                f"{len(forecasts)} health risk forecast(s)."
            )
        else:
            conclusions.append("No elevated health risks forecast")
            reasoning = (
                f"Combined {perception.data['source_count']} perception source(s); "
                "no elevated health risks found."
            )

        return Reasoning(
            agent_id=self.agent_id,
            timestamp=now(),
            conclusions=conclusions,
            confidence=perception.confidence,
            reasoning=reasoning,
        )

    def act(self, reasoning: Reasoning) -> Action:
        perception = self.latest_perception()
        forecasts = build_forecasts(
            perception.data,
            self.toolkit.get_hospital_config(),
            date.fromisoformat(perception.data["as_of"]),
        )
        peak = max((f.predicted_patient_load_multiplier for f in forecasts), default=1.0)

        action = Action(
            agent_id=self.agent_id,
            timestamp=now(),
            type=ActionType.RISK_FORECAST.value,
            data={
                "forecasts": to_plain(forecasts),
                "peak_load_multiplier": peak,
                "summary": reasoning.reasoning,
            },
            explanation=reasoning.reasoning,
        )
        self.share(action)
        return action
