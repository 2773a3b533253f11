"""Orchestrator module."""

from .orchestrator import IOrchestrator, Orchestrator, recommendation_id, to_recommendation

__all__ = ["IOrchestrator", "Orchestrator", "recommendation_id", "to_recommendation"]
