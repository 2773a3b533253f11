"""MessageBus implementation for agent-to-agent messaging."""

from typing import Protocol

from ..logging_config import get_logger
from ..models import BROADCAST_ALL, AgentId, AgentMessage

logger = get_logger(__name__)


class IMessageReceiver(Protocol):
    """Anything that can be subscribed to the bus."""

    def receive_message(self, message: AgentMessage) -> None:
        """Handle a delivered message."""
        ...


class IMessageBus(Protocol):
    """In-memory pub/sub between agents with an audit queue."""

    def subscribe(self, agent_id: AgentId, agent: IMessageReceiver) -> None:
        """Register a recipient under an id."""
        ...

    def unsubscribe(self, agent_id: AgentId) -> None:
        """Remove a recipient; unknown ids are ignored."""
        ...

    def send(self, message: AgentMessage) -> None:
        """Record a message and deliver it synchronously."""
        ...

    def get_messages(self) -> list[AgentMessage]:
        """Snapshot of the audit queue."""
        ...

    def clear_messages(self) -> None:
        """Empty the audit queue, keeping subscriptions."""
        ...


class MessageBus:
    """In-memory message bus with direct and broadcast delivery."""

    def __init__(self):
        # dict keeps registration order for broadcast delivery
        self._subscribers: dict[AgentId, IMessageReceiver] = {}
        self._messages: list[AgentMessage] = []

    def subscribe(self, agent_id: AgentId, agent: IMessageReceiver) -> None:
        """Register a recipient under an id."""
        self._subscribers[agent_id] = agent

    def unsubscribe(self, agent_id: AgentId) -> None:
        """Remove a recipient; unknown ids are ignored."""
        self._subscribers.pop(agent_id, None)

    def is_subscribed(self, agent_id: AgentId) -> bool:
        return agent_id in self._subscribers

    def send(self, message: AgentMessage) -> None:
        """Record a message and deliver it to its recipient(s)."""
        self._messages.append(message)

        if message.to == BROADCAST_ALL:
            recipients = [
                (agent_id, agent)
                for agent_id, agent in self._subscribers.items()
                if agent_id != message.sender
            ]
        elif message.to in self._subscribers:
            recipients = [(message.to, self._subscribers[message.to])]
        else:
            logger.debug(
                "Dropping message %s for unsubscribed recipient %s",
                message.id,
                message.to,
            )
            return

        for agent_id, agent in list(recipients):
            try:
                agent.receive_message(message)
            except Exception:
                # Fire-and-forget: a failing recipient never reaches the sender
                logger.exception(
                    "Error delivering message %s to %s", message.id, agent_id
                )

    def get_messages(self) -> list[AgentMessage]:
        """Snapshot of the audit queue."""
        return list(self._messages)

    def clear_messages(self) -> None:
        """Empty the audit queue, keeping subscriptions."""
        self._messages.clear()
