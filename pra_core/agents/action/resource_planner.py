"""Resource Planner: turns capacity results into deployment tasks."""

from typing import Any

from ...models import (
    Action,
    ActionType,
    AgentMessage,
    AgentRole,
    Perception,
    Reasoning,
    Severity,
)
from ...toolkit import IToolkit
from ..base import Agent, now

_LISTENS_TO = {
    ActionType.CAPACITY_CALCULATION.value,
    ActionType.RISK_FORECAST.value,
}


def build_deployment_tasks(
    capacity: dict[str, Any] | None, forecast: dict[str, Any] | None
) -> list[dict[str, Any]]:
    """Ordered deployment tasks for a capacity result."""
    if not capacity:
        return []

    severity = Severity(capacity["overall_severity"]).value
    tasks: list[dict[str, Any]] = []

    if capacity["extra_beds"] > 0:
        tasks.append(
            {
                "resource": "beds",
                "quantity": capacity["extra_beds"],
                "unit": "beds",
                "priority": severity,
                "task": f"Open {capacity['extra_beds']} surge beds",
            }
        )
    if capacity["extra_doctors"] > 0:
        tasks.append(
            {
                "resource": "doctors",
                "quantity": capacity["extra_doctors"],
                "unit": "per shift",
                "priority": severity,
                "task": f"Call in {capacity['extra_doctors']} additional doctors per shift",
            }
        )
    if capacity["extra_nurses"] > 0:
        tasks.append(
            {
                "resource": "nurses",
                "quantity": capacity["extra_nurses"],
                "unit": "per shift",
                "priority": severity,
                "task": f"Call in {capacity['extra_nurses']} additional nurses per shift",
            }
        )
    for supply in capacity.get("supplies", []):
        if supply["quantity"] > 0:
            tasks.append(
                {
                    "resource": supply["item"].lower(),
                    "quantity": supply["quantity"],
                    "unit": supply["unit"],
                    "priority": Severity(supply["urgency"]).value,
                    "task": f"Stock {supply['quantity']} {supply['unit']} of {supply['item']}",
                }
            )

    departments: list[str] = []
    for item in (forecast or {}).get("forecasts", []):
        for department in item["affected_departments"]:
            if department not in departments:
                departments.append(department)
    if departments:
        tasks.append(
            {
                "resource": "departments",
                "quantity": len(departments),
                "unit": "departments",
                "priority": severity,
                "task": f"Alert departments: {', '.join(departments)}",
            }
        )

    return tasks


class ResourcePlannerAgent(Agent):
    """Action agent producing the deployment plan."""

    AGENT_ID = "resource-planner"

    def __init__(self, toolkit: IToolkit):
        super().__init__(
            agent_id=self.AGENT_ID,
            name="Resource Planner",
            role=AgentRole.ACTION,
            toolkit=toolkit,
            description="Generates actionable resource deployment plans",
        )

    def receive_message(self, message: AgentMessage) -> None:
        if message.content.topic in _LISTENS_TO:
            self.memory.working.inbox.append(message)

    async def perceive(self) -> Perception:
        capacity = self.latest_message_data(ActionType.CAPACITY_CALCULATION.value)
        forecast = self.latest_message_data(ActionType.RISK_FORECAST.value)

        return Perception(
            agent_id=self.agent_id,
            timestamp=now(),
            data={"capacity_needs": capacity, "risk_forecast": forecast},
            confidence=0.9 if capacity else 0.5,
        )

    def reason(self, perception: Perception) -> Reasoning:
        capacity = perception.data["capacity_needs"]
        tasks = build_deployment_tasks(capacity, perception.data["risk_forecast"])

        if not capacity:
            return Reasoning(
                agent_id=self.agent_id,
                timestamp=now(),
                conclusions=["No capacity calculation received; no deployment required"],
                confidence=perception.confidence,
                reasoning="No capacity needs were reported, so no resources are deployed.",
            )

        conclusions = [task["task"] for task in tasks] or [
            "Current capacity covers the predicted load"
        ]
        return Reasoning(
            agent_id=self.agent_id,
            timestamp=now(),
            conclusions=conclusions,
            confidence=0.85,
            reasoning=(
                f"Deployment plan with {len(tasks)} task(s) at "
                f"{Severity(capacity['overall_severity']).value} severity based on "
                "capacity calculations."
            ),
        )

    def act(self, reasoning: Reasoning) -> Action:
        data = self.latest_perception().data
        capacity = data["capacity_needs"]
        tasks = build_deployment_tasks(capacity, data["risk_forecast"])
        severity = Severity(capacity["overall_severity"]) if capacity else Severity.LOW

        return Action(
            agent_id=self.agent_id,
            timestamp=now(),
            type=ActionType.RESOURCE_DEPLOYMENT_PLAN.value,
            data={
                "tasks": tasks,
                "overall_severity": severity.value,
                "activate_emergency_protocol": severity.rank >= Severity.HIGH.rank,
            },
            explanation=reasoning.reasoning,
        )
