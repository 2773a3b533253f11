"""Inter-agent message models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from .agents import AgentId

BROADCAST_ALL = "ALL"


class MessageType(str, Enum):
    """Kind of an AgentMessage."""

    REQUEST = "REQUEST"
    RESPONSE = "RESPONSE"
    BROADCAST = "BROADCAST"
    DELEGATE = "DELEGATE"


class Priority(str, Enum):
    """Message and goal priority."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


@dataclass(frozen=True)
class MessageContent:
    """Payload of an AgentMessage."""

    topic: str
    data: Any
    priority: Priority = Priority.MEDIUM


@dataclass(frozen=True)
class AgentMessage:
    """A message exchanged through the MessageBus."""

    id: str
    sender: AgentId
    to: AgentId  # or BROADCAST_ALL
    type: MessageType
    content: MessageContent
    timestamp: datetime
