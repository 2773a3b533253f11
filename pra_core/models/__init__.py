"""Core data models for the PRA pipeline."""

from .agents import (
    Action,
    ActionType,
    AgentId,
    AgentMemory,
    AgentOutputs,
    AgentRole,
    AgentStatus,
    Episode,
    KnowledgeBase,
    MAX_EPISODES,
    Perception,
    Reasoning,
    ReasoningTrace,
    Recommendation,
    Scenario,
    TraceStep,
    WorkingMemory,
)
from .hospital import (
    CalculationExplanation,
    CapacityRecommendation,
    EnvironmentalData,
    FestivalInfo,
    HealthRiskForecast,
    HospitalConfig,
    Location,
    RiskType,
    Season,
    Severity,
    SupplyRecommendation,
)
from .messages import BROADCAST_ALL, AgentMessage, MessageContent, MessageType, Priority
from .runs import PipelineRun, StoredMessage
from .serialization import to_plain

__all__ = [
    # Agents
    "AgentId",
    "AgentRole",
    "AgentStatus",
    "TraceStep",
    "ActionType",
    "Perception",
    "Reasoning",
    "Action",
    "ReasoningTrace",
    "Recommendation",
    "AgentOutputs",
    "Scenario",
    "AgentMemory",
    "WorkingMemory",
    "KnowledgeBase",
    "MAX_EPISODES",
    "Episode",
    # Messages
    "BROADCAST_ALL",
    "AgentMessage",
    "MessageContent",
    "MessageType",
    "Priority",
    # Hospital
    "Season",
    "Severity",
    "RiskType",
    "Location",
    "HospitalConfig",
    "EnvironmentalData",
    "FestivalInfo",
    "HealthRiskForecast",
    "CalculationExplanation",
    "SupplyRecommendation",
    "CapacityRecommendation",
    # Runs
    "PipelineRun",
    "StoredMessage",
    # Serialization
    "to_plain",
]
