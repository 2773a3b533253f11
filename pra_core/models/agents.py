"""Agent-related data models."""

from collections import deque
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any

AgentId = str

# Episodes an agent remembers across resets
MAX_EPISODES = 20


class AgentRole(str, Enum):
    """Execution group an agent belongs to."""

    PERCEPTION = "PERCEPTION"
    REASONING = "REASONING"
    ACTION = "ACTION"


class AgentStatus(str, Enum):
    """Current phase of an agent's cycle."""

    IDLE = "IDLE"
    PERCEIVING = "PERCEIVING"
    REASONING = "REASONING"
    ACTING = "ACTING"


class TraceStep(str, Enum):
    """Cycle phase a reasoning trace belongs to."""

    PERCEIVE = "PERCEIVE"
    REASON = "REASON"
    ACT = "ACT"


class ActionType(str, Enum):
    """Closed set of Action tags consumers dispatch on."""

    ENVIRONMENTAL_ASSESSMENT = "ENVIRONMENTAL_ASSESSMENT"
    FESTIVAL_FORECAST = "FESTIVAL_FORECAST"
    SEASON_ASSESSMENT = "SEASON_ASSESSMENT"
    RISK_FORECAST = "RISK_FORECAST"
    CAPACITY_CALCULATION = "CAPACITY_CALCULATION"
    RESOURCE_DEPLOYMENT_PLAN = "RESOURCE_DEPLOYMENT_PLAN"


@dataclass(frozen=True)
class Perception:
    """Sensed input an agent will reason over."""

    agent_id: AgentId
    timestamp: datetime
    data: dict[str, Any]
    confidence: float  # 0-1


@dataclass(frozen=True)
class Reasoning:
    """Conclusions derived from a single Perception."""

    agent_id: AgentId
    timestamp: datetime
    conclusions: list[str]
    confidence: float  # 0-1
    reasoning: str


@dataclass(frozen=True)
class Action:
    """Tagged, structured output of an agent run."""

    agent_id: AgentId
    timestamp: datetime
    type: str
    data: dict[str, Any]
    explanation: str


@dataclass(frozen=True)
class ReasoningTrace:
    """Append-only log entry of one cycle phase."""

    agent_id: AgentId
    agent_name: str
    timestamp: datetime
    thought: str
    step: TraceStep


@dataclass(frozen=True)
class Recommendation:
    """Consumer-facing record synthesized from an Action."""

    id: str
    title: str
    description: str
    data: dict[str, Any]


@dataclass
class AgentOutputs:
    """Aggregate produced by one orchestrator run."""

    perceptions: list[Perception] = field(default_factory=list)
    reasonings: list[Reasoning] = field(default_factory=list)
    actions: list[Action] = field(default_factory=list)
    reasoning_traces: list[ReasoningTrace] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)


@dataclass(frozen=True)
class Scenario:
    """Inputs of a single simulation run."""

    id: str
    name: str = ""
    as_of: date | None = None  # None means today
    risk_multiplier: float = 1.5
    hazard: str | None = None  # key into hazard_uplift_overrides
    city: str | None = None  # overrides the configured location


@dataclass
class WorkingMemory:
    """Short-term memory, cleared on reset."""

    current_perceptions: list[Perception] = field(default_factory=list)
    recent_actions: list[Action] = field(default_factory=list)
    inbox: list[Any] = field(default_factory=list)  # AgentMessage


@dataclass
class Episode:
    """One completed run of an agent."""

    timestamp: datetime
    scenario_id: str | None
    actions: list[Action]


@dataclass
class KnowledgeBase:
    """Long-term memory, survives reset. Keeps the newest MAX_EPISODES episodes."""

    episodes: deque[Episode] = field(default_factory=lambda: deque(maxlen=MAX_EPISODES))


@dataclass
class AgentMemory:
    """Private memory of an agent."""

    working: WorkingMemory = field(default_factory=WorkingMemory)
    knowledge: KnowledgeBase = field(default_factory=KnowledgeBase)
