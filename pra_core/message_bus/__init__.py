"""MessageBus module."""

from .message_bus import IMessageBus, IMessageReceiver, MessageBus

__all__ = ["IMessageBus", "IMessageReceiver", "MessageBus"]
