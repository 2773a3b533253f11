"""Agents module."""

from ..toolkit import IToolkit
from .action import ResourcePlannerAgent
from .base import Agent, IAgent
from .perception import EnvironmentMonitorAgent, FestivalDetectorAgent, SeasonTrackerAgent
from .reasoning import CapacityCalculatorAgent, ForecasterAgent


def create_default_agents(toolkit: IToolkit) -> list[Agent]:
    """The standard pipeline, in registration order."""
    return [
        EnvironmentMonitorAgent(toolkit),
        FestivalDetectorAgent(toolkit),
        SeasonTrackerAgent(toolkit),
        ForecasterAgent(toolkit),
        CapacityCalculatorAgent(toolkit),
        ResourcePlannerAgent(toolkit),
    ]


__all__ = [
    "Agent",
    "IAgent",
    "EnvironmentMonitorAgent",
    "FestivalDetectorAgent",
    "SeasonTrackerAgent",
    "ForecasterAgent",
    "CapacityCalculatorAgent",
    "ResourcePlannerAgent",
    "create_default_agents",
]
