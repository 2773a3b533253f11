"""Festival Detector: upcoming festivals and their health impact."""

from ...environment import get_upcoming_festivals
from ...models import Action, ActionType, AgentRole, Perception, Reasoning
from ...toolkit import IToolkit
from ..base import Agent, now

LOOKAHEAD_DAYS = 30


class FestivalDetectorAgent(Agent):
    """Perception agent reading the festival calendar."""

    AGENT_ID = "festival-detector"

    def __init__(self, toolkit: IToolkit, lookahead_days: int = LOOKAHEAD_DAYS):
        super().__init__(
            agent_id=self.AGENT_ID,
            name="Festival Detector",
            role=AgentRole.PERCEPTION,
            toolkit=toolkit,
            description="Detects upcoming festivals and predicts health impacts",
        )
        self._lookahead_days = lookahead_days

    async def perceive(self) -> Perception:
        on = self.toolkit.today()
        festivals = get_upcoming_festivals(on, self._lookahead_days)

        return Perception(
            agent_id=self.agent_id,
            timestamp=now(),
            data={
                "as_of": on.isoformat(),
                "festivals": [
                    {
                        "id": f.id,
                        "name": f.name,
                        "date": f.date.isoformat(),
                        "days_until": (f.date - on).days,
                        "surge_multiplier": f.historical_surge_multiplier,
                        "health_risks": list(f.health_risks),
                        "affected_departments": list(f.affected_departments),
                    }
                    for f in festivals
                ],
                "count": len(festivals),
            },
            confidence=1.0,  # static calendar
        )

    def reason(self, perception: Perception) -> Reasoning:
        festivals = perception.data["festivals"]

        if not festivals:
            return Reasoning(
                agent_id=self.agent_id,
                timestamp=now(),
                conclusions=[f"No major festivals detected in next {self._lookahead_days} days"],
                confidence=1.0,
                reasoning="Calendar analysis shows no significant cultural events approaching.",
            )

        conclusions = []
        for festival in festivals:
            conclusions.append(
                f"{festival['name']} in {festival['days_until']} days: "
                f"{festival['surge_multiplier']}x surge expected"
            )
            conclusions.append(f"  Health risks: {', '.join(festival['health_risks'])}")
            conclusions.append(
                f"  Affected departments: {', '.join(festival['affected_departments'])}"
            )

        return Reasoning(
            agent_id=self.agent_id,
            timestamp=now(),
            conclusions=conclusions,
            confidence=0.85,
            reasoning=(
                f"Detected {len(festivals)} upcoming festival(s). Historical data indicates "
                "significant patient load increases during these periods."
            ),
        )

    def act(self, reasoning: Reasoning) -> Action:
        festivals = self.latest_perception().data["festivals"]

        action = Action(
            agent_id=self.agent_id,
            timestamp=now(),
            type=ActionType.FESTIVAL_FORECAST.value,
            data={
                "has_upcoming_festivals": bool(festivals),
                "festivals": festivals,
                "festival_details": list(reasoning.conclusions),
            },
            explanation=reasoning.reasoning,
        )
        self.share(action)
        return action
