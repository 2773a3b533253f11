"""Capacity Calculator: explicit bed, staff and supply formulas."""

from ...capacity import (
    calculate_bed_capacity,
    calculate_capacity,
    calculate_staff_capacity,
    calculate_supply_needs,
    predicted_admissions,
)
from ...environment import get_season
from ...models import (
    Action,
    ActionType,
    AgentMessage,
    AgentRole,
    Perception,
    Reasoning,
    to_plain,
)
from ...toolkit import IToolkit
from ..base import Agent, now

DEFAULT_RISK_MULTIPLIER = 1.5


class CapacityCalculatorAgent(Agent):
    """Reasoning agent sizing beds, staff and supplies."""

    AGENT_ID = "capacity-calculator"

    def __init__(self, toolkit: IToolkit):
        super().__init__(
            agent_id=self.AGENT_ID,
            name="Capacity Calculator",
            role=AgentRole.REASONING,
            toolkit=toolkit,
            description="Computes resource requirements using explicit mathematical formulas",
        )

    def receive_message(self, message: AgentMessage) -> None:
        if message.content.topic == ActionType.SEASON_ASSESSMENT.value:
            self.memory.working.inbox.append(message)

    def _resolve_uplift(self) -> tuple[float, str, str]:
        """(uplift, source, season) for the current run."""
        config = self.toolkit.get_hospital_config()
        scenario = self.toolkit.scenario
        season = get_season(self.toolkit.today()).value

        if scenario and scenario.hazard:
            override = config.hazard_uplift(scenario.hazard)
            if override is not None:
                return override, f"hazard:{scenario.hazard}", season

        assessment = self.latest_message_data(ActionType.SEASON_ASSESSMENT.value)
        if assessment and assessment.get("uplift_factor") is not None:
            return assessment["uplift_factor"], "season-tracker", assessment["season"]

        return config.season_uplift(season), "config", season

    async def perceive(self) -> Perception:
        config = self.toolkit.get_hospital_config()
        scenario = self.toolkit.scenario
        risk_multiplier = scenario.risk_multiplier if scenario else DEFAULT_RISK_MULTIPLIER
        uplift, source, season = self._resolve_uplift()

        return Perception(
            agent_id=self.agent_id,
            timestamp=now(),
            data={
                "hospital_id": config.hospital_id,
                "risk_multiplier": risk_multiplier,
                "seasonal_uplift": uplift,
                "uplift_source": source,
                "season": season,
            },
            confidence=1.0,
        )

    def reason(self, perception: Perception) -> Reasoning:
        config = self.toolkit.get_hospital_config()
        risk = perception.data["risk_multiplier"]
        uplift = perception.data["seasonal_uplift"]

        beds = calculate_bed_capacity(config, risk, uplift)
        staff = calculate_staff_capacity(config, risk, uplift)
        supplies = calculate_supply_needs(config, risk, uplift)

        return Reasoning(
            agent_id=self.agent_id,
            timestamp=now(),
            conclusions=[
                f"Bed calculation: {beds.explanation.reasoning}",
                f"Staff calculation: {staff.explanation.reasoning}",
                f"Supply calculation: {supplies.explanation.reasoning}",
            ],
            confidence=0.95,
            reasoning=(
                "Applied mathematical formulas to calculate resource requirements based on "
                f"predicted patient load (uplift {uplift}x from {perception.data['uplift_source']}, "
                f"risk {risk}x)."
            ),
        )

    def act(self, reasoning: Reasoning) -> Action:
        config = self.toolkit.get_hospital_config()
        data = self.latest_perception().data
        risk = data["risk_multiplier"]
        uplift = data["seasonal_uplift"]

        recommendation = calculate_capacity(config, risk, uplift, summary=reasoning.reasoning)

        action = Action(
            agent_id=self.agent_id,
            timestamp=now(),
            type=ActionType.CAPACITY_CALCULATION.value,
            data={
                **to_plain(recommendation),
                "predicted_admissions": predicted_admissions(config, risk, uplift),
                "risk_multiplier": risk,
                "seasonal_uplift": uplift,
                "uplift_source": data["uplift_source"],
            },
            explanation=(
                f"Calculated resource needs: {recommendation.extra_beds} beds, "
                f"{recommendation.extra_doctors} doctors, {recommendation.extra_nurses} nurses. "
                f"{reasoning.reasoning}"
            ),
        )
        self.share(action)
        return action
