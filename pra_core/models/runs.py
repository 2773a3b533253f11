"""Persisted pipeline run models."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass
class PipelineRun:
    """A successful pipeline run as stored."""

    id: str
    scenario: dict[str, Any]
    outputs: dict[str, Any]  # plain AgentOutputs
    created_at: datetime


@dataclass
class StoredMessage:
    """A bus audit message as stored."""

    id: str
    run_id: str
    sender: str
    recipient: str
    type: str
    topic: str
    priority: str
    data: Any
    timestamp: datetime
