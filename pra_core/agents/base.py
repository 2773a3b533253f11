"""Agent base: the perceive -> reason -> act cycle."""

import json
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Protocol

from ..logging_config import get_logger
from ..models import (
    Action,
    AgentId,
    AgentMemory,
    AgentMessage,
    AgentOutputs,
    AgentRole,
    AgentStatus,
    Episode,
    Perception,
    Reasoning,
    ReasoningTrace,
    TraceStep,
    WorkingMemory,
)
from ..toolkit import IToolkit

logger = get_logger(__name__)


class IAgent(Protocol):
    """A unit the orchestrator can register and run."""

    @property
    def agent_id(self) -> AgentId:
        """Agent identifier."""
        ...

    @property
    def name(self) -> str:
        """Display name."""
        ...

    @property
    def role(self) -> AgentRole:
        """Execution group."""
        ...

    @property
    def status(self) -> AgentStatus:
        """Current cycle phase."""
        ...

    async def run(self, outputs: AgentOutputs | None = None) -> Action:
        """Execute one perceive -> reason -> act cycle."""
        ...

    def reset(self) -> None:
        """Clear working memory and traces."""
        ...

    def receive_message(self, message: AgentMessage) -> None:
        """Handle a message delivered by the bus."""
        ...

    def get_reasoning_traces(self) -> list[ReasoningTrace]:
        """Traces accumulated since the last reset."""
        ...


def now() -> datetime:
    return datetime.now(timezone.utc)


class Agent(ABC):
    """
    Base implementation of the perceive -> reason -> act cycle.

    Subclasses implement the three phases. `perceive` is a coroutine and
    may perform I/O; `reason` and `act` are synchronous and CPU-only.
    Status and traces are owned by this class and change only in `run`
    and `reset`.
    """

    def __init__(
        self,
        agent_id: AgentId,
        name: str,
        role: AgentRole,
        toolkit: IToolkit,
        description: str = "",
    ):
        self._agent_id = agent_id
        self._name = name
        self._role = role
        self._description = description
        self._toolkit = toolkit
        self._status = AgentStatus.IDLE
        self._memory = AgentMemory()
        self._traces: list[ReasoningTrace] = []

    @property
    def agent_id(self) -> AgentId:
        return self._agent_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def role(self) -> AgentRole:
        return self._role

    @property
    def description(self) -> str:
        return self._description

    @property
    def status(self) -> AgentStatus:
        return self._status

    @property
    def toolkit(self) -> IToolkit:
        return self._toolkit

    @property
    def memory(self) -> AgentMemory:
        return self._memory

    async def run(self, outputs: AgentOutputs | None = None) -> Action:
        """
        Execute one cycle.

        Args:
            outputs: Optional aggregate; the perception, reasoning, action
                     and traces of this run are appended to it.

        Returns:
            The Action produced by `act`.

        Raises:
            Whatever a phase raises, after status is back to IDLE.
        """
        try:
            self._status = AgentStatus.PERCEIVING
            perception = await self.perceive()
            self._memory.working.current_perceptions.append(perception)
            self._log_thought(
                f"Perceived: {json.dumps(perception.data, default=str)}",
                TraceStep.PERCEIVE,
                outputs,
            )
            if outputs is not None:
                outputs.perceptions.append(perception)

            self._status = AgentStatus.REASONING
            reasoning = self.reason(perception)
            self._log_thought(f"Reasoning: {reasoning.reasoning}", TraceStep.REASON, outputs)
            if outputs is not None:
                outputs.reasonings.append(reasoning)

            self._status = AgentStatus.ACTING
            action = self.act(reasoning)
            self._memory.working.recent_actions.append(action)
            self._log_thought(f"Action: {action.explanation}", TraceStep.ACT, outputs)
            if outputs is not None:
                outputs.actions.append(action)

            scenario = self._toolkit.scenario
            self._memory.knowledge.episodes.append(
                Episode(
                    timestamp=action.timestamp,
                    scenario_id=scenario.id if scenario else None,
                    actions=[action],
                )
            )
            return action
        finally:
            self._status = AgentStatus.IDLE

    @abstractmethod
    async def perceive(self) -> Perception:
        """Gather input for this cycle."""

    @abstractmethod
    def reason(self, perception: Perception) -> Reasoning:
        """Derive conclusions from a perception. No I/O."""

    @abstractmethod
    def act(self, reasoning: Reasoning) -> Action:
        """Turn reasoning into a tagged Action. No I/O."""

    def reset(self) -> None:
        """Clear working memory and traces; keep the knowledge base."""
        self._status = AgentStatus.IDLE
        self._traces = []
        self._memory.working = WorkingMemory()

    def receive_message(self, message: AgentMessage) -> None:
        """Ignore messages unless a subclass wants them."""

    def get_reasoning_traces(self) -> list[ReasoningTrace]:
        return list(self._traces)

    # Helpers for subclasses

    def latest_perception(self) -> Perception:
        """Perception of the cycle in progress."""
        return self._memory.working.current_perceptions[-1]

    def latest_message_data(self, topic: str) -> Any:
        """Data of the newest inbox message on a topic, None if none."""
        for message in reversed(self._memory.working.inbox):
            if message.content.topic == topic:
                return message.content.data
        return None

    def share(self, action: Action) -> None:
        """Broadcast an action's data under its type."""
        self._toolkit.broadcast(self._agent_id, action.type, action.data)

    def _log_thought(
        self, thought: str, step: TraceStep, outputs: AgentOutputs | None = None
    ) -> None:
        trace = ReasoningTrace(
            agent_id=self._agent_id,
            agent_name=self._name,
            timestamp=now(),
            thought=thought,
            step=step,
        )
        self._traces.append(trace)
        if outputs is not None:
            outputs.reasoning_traces.append(trace)
        logger.debug("%s [%s] %s", self._name, step.value, thought[:200])
