"""Perception-Reasoning-Action pipeline core."""

from .agents import (
    Agent,
    CapacityCalculatorAgent,
    EnvironmentMonitorAgent,
    FestivalDetectorAgent,
    ForecasterAgent,
    IAgent,
    ResourcePlannerAgent,
    SeasonTrackerAgent,
    create_default_agents,
)
from .app import Application, IApplication
from .environment import (
    IEnvironmentalDataProvider,
    OpenWeatherMapProvider,
    StaticEnvironmentalDataProvider,
)
from .message_bus import IMessageBus, MessageBus
from .models import (
    Action,
    AgentMessage,
    AgentOutputs,
    AgentRole,
    AgentStatus,
    HospitalConfig,
    Perception,
    Reasoning,
    ReasoningTrace,
    Recommendation,
    Scenario,
)
from .orchestrator import IOrchestrator, Orchestrator
from .storage import IStorage, Storage
from .toolkit import IToolkit, Toolkit

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Models
    "Perception",
    "Reasoning",
    "Action",
    "ReasoningTrace",
    "AgentMessage",
    "AgentOutputs",
    "AgentRole",
    "AgentStatus",
    "Recommendation",
    "Scenario",
    "HospitalConfig",
    # Components
    "IMessageBus",
    "MessageBus",
    "IToolkit",
    "Toolkit",
    "IEnvironmentalDataProvider",
    "OpenWeatherMapProvider",
    "StaticEnvironmentalDataProvider",
    "IAgent",
    "Agent",
    "EnvironmentMonitorAgent",
    "FestivalDetectorAgent",
    "SeasonTrackerAgent",
    "ForecasterAgent",
    "CapacityCalculatorAgent",
    "ResourcePlannerAgent",
    "create_default_agents",
    "IOrchestrator",
    "Orchestrator",
    "IStorage",
    "Storage",
]
