"""Orchestrator: runs registered agents in Perception -> Reasoning -> Action order."""

from typing import Protocol

from ..agents import IAgent
from ..logging_config import get_logger
from ..message_bus import IMessageBus
from ..models import (
    Action,
    AgentId,
    AgentOutputs,
    AgentRole,
    Recommendation,
    Scenario,
)
from ..toolkit import Toolkit

logger = get_logger(__name__)

PHASE_ORDER = (AgentRole.PERCEPTION, AgentRole.REASONING, AgentRole.ACTION)


def recommendation_id(action: Action) -> str:
    """Agent id plus action timestamp in epoch milliseconds."""
    return f"{action.agent_id}-{int(action.timestamp.timestamp() * 1000)}"


def to_recommendation(action: Action) -> Recommendation:
    return Recommendation(
        id=recommendation_id(action),
        title=action.type,
        description=action.explanation,
        data=action.data,
    )


class IOrchestrator(Protocol):
    """Registry and phased execution of agents."""

    def register_agent(self, agent: IAgent) -> None:
        """Register an agent into its role's group and the bus."""
        ...

    def unregister_agent(self, agent_id: AgentId) -> None:
        """Remove an agent from its group and the bus."""
        ...

    async def execute_agents(self, scenario: Scenario | None = None) -> AgentOutputs:
        """Run every phase and return the aggregate."""
        ...

    def reset_all(self) -> None:
        """Reset every agent and clear the bus audit queue."""
        ...


class Orchestrator:
    """Runs agents phase by phase, one at a time, in registration order."""

    def __init__(self, toolkit: Toolkit, message_bus: IMessageBus):
        self._toolkit = toolkit
        self._message_bus = message_bus
        self._agents: dict[AgentId, IAgent] = {}
        self._groups: dict[AgentRole, list[IAgent]] = {role: [] for role in PHASE_ORDER}

    @property
    def agents(self) -> list[IAgent]:
        """Registered agents in phase order."""
        return [agent for role in PHASE_ORDER for agent in self._groups[role]]

    def get_agent(self, agent_id: AgentId) -> IAgent | None:
        return self._agents.get(agent_id)

    def register_agent(self, agent: IAgent) -> None:
        """Register an agent into its role's group and the bus."""
        if agent.agent_id in self._agents:
            raise ValueError(f"Agent already registered: {agent.agent_id}")
        role = AgentRole(agent.role)

        self._agents[agent.agent_id] = agent
        self._groups[role].append(agent)
        self._message_bus.subscribe(agent.agent_id, agent)
        logger.info("Registered agent %s (%s)", agent.agent_id, role.value)

    def unregister_agent(self, agent_id: AgentId) -> None:
        """Remove an agent from its group and the bus."""
        agent = self._agents.pop(agent_id, None)
        if agent is None:
            raise ValueError(f"Unknown agent: {agent_id}")

        self._groups[AgentRole(agent.role)].remove(agent)
        self._message_bus.unsubscribe(agent_id)
        logger.info("Unregistered agent %s", agent_id)

    async def execute_agents(self, scenario: Scenario | None = None) -> AgentOutputs:
        """
        Run the pipeline once.

        Args:
            scenario: Inputs of this run, exposed to agents via the toolkit.

        Returns:
            Perceptions, reasonings, actions, traces and recommendations.

        Raises:
            The first error any agent raises; nothing is returned then.
        """
        scenario_id = scenario.id if scenario else None
        self._toolkit.begin_run(scenario)
        outputs = AgentOutputs()

        logger.info(
            "Starting pipeline with %s agents", len(self._agents),
            extra={"scenario_id": scenario_id},
        )

        for role in PHASE_ORDER:
            # Snapshot so registry changes never affect the running phase
            for agent in list(self._groups[role]):
                try:
                    await agent.run(outputs)
                except Exception:
                    logger.exception(
                        "Agent %s failed, aborting pipeline",
                        agent.agent_id,
                        extra={
                            "agent_id": agent.agent_id,
                            "scenario_id": scenario_id,
                            "phase": role.value,
                        },
                    )
                    raise
            logger.info(
                "%s phase complete: %s perceptions, %s reasonings, %s actions",
                role.value,
                len(outputs.perceptions),
                len(outputs.reasonings),
                len(outputs.actions),
                extra={"scenario_id": scenario_id, "phase": role.value},
            )

        outputs.recommendations = [to_recommendation(action) for action in outputs.actions]
        logger.info(
            "Pipeline complete with %s recommendations",
            len(outputs.recommendations),
            extra={"scenario_id": scenario_id},
        )
        return outputs

    def reset_all(self) -> None:
        """Reset every agent and clear the bus audit queue."""
        for agent in self.agents:
            agent.reset()
        self._message_bus.clear_messages()
        logger.info("Reset %s agents", len(self._agents))
