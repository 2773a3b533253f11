"""Season Tracker: current season and its uplift factor."""

from ...environment import get_season, season_description, seasonal_risk_factors
from ...models import Action, ActionType, AgentRole, Perception, Reasoning
from ...toolkit import IToolkit
from ..base import Agent, now


class SeasonTrackerAgent(Agent):
    """Perception agent applying seasonal uplift factors."""

    AGENT_ID = "season-tracker"

    def __init__(self, toolkit: IToolkit):
        super().__init__(
            agent_id=self.AGENT_ID,
            name="Season Tracker",
            role=AgentRole.PERCEPTION,
            toolkit=toolkit,
            description="Monitors seasonal health patterns and applies uplift factors",
        )

    async def perceive(self) -> Perception:
        on = self.toolkit.today()
        season = get_season(on)

        return Perception(
            agent_id=self.agent_id,
            timestamp=now(),
            data={
                "season": season.value,
                "description": season_description(season),
                "risk_factors": seasonal_risk_factors(season),
                "month": on.month,
                "date": on.isoformat(),
            },
            confidence=1.0,  # deterministic
        )

    def reason(self, perception: Perception) -> Reasoning:
        season = perception.data["season"]
        uplift = self.toolkit.get_hospital_config().season_uplift(season)

        return Reasoning(
            agent_id=self.agent_id,
            timestamp=now(),
            conclusions=[
                f"Current season: {season}",
                f"Seasonal uplift factor: {uplift}x",
                f"Expected {(uplift - 1) * 100:.0f}% increase in baseline patient load",
            ],
            confidence=0.9,
            reasoning=(
                f"{perception.data['description']}. Applying seasonal uplift factor of "
                f"{uplift}x to baseline predictions."
            ),
        )

    def act(self, reasoning: Reasoning) -> Action:
        data = self.latest_perception().data
        uplift = self.toolkit.get_hospital_config().season_uplift(data["season"])

        action = Action(
            agent_id=self.agent_id,
            timestamp=now(),
            type=ActionType.SEASON_ASSESSMENT.value,
            data={
                "season": data["season"],
                "uplift_factor": uplift,
                "risk_factors": data["risk_factors"],
                "seasonal_risks": list(reasoning.conclusions),
            },
            explanation=reasoning.reasoning,
        )
        self.share(action)
        return action
