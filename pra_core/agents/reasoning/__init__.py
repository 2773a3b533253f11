"""Reasoning-phase agents."""

from .capacity_calculator import CapacityCalculatorAgent
from .forecaster import ForecasterAgent

__all__ = ["CapacityCalculatorAgent", "ForecasterAgent"]
