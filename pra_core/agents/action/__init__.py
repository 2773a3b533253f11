"""Action-phase agents."""

from .resource_planner import ResourcePlannerAgent

__all__ = ["ResourcePlannerAgent"]
