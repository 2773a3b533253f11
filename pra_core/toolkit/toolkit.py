"""Toolkit: read-only services handed to every agent."""

import uuid
from datetime import date, datetime, timezone
from typing import Any, Protocol

from ..environment import IEnvironmentalDataProvider, StaticEnvironmentalDataProvider
from ..message_bus import IMessageBus
from ..models import (
    BROADCAST_ALL,
    AgentId,
    AgentMessage,
    HospitalConfig,
    MessageContent,
    MessageType,
    Priority,
    Scenario,
)


class IToolkit(Protocol):
    """What an agent may use during its cycle."""

    @property
    def scenario(self) -> Scenario | None:
        """Scenario of the current run."""
        ...

    @property
    def environment(self) -> IEnvironmentalDataProvider:
        """Live environmental data source."""
        ...

    def get_hospital_config(self) -> HospitalConfig:
        """Configuration snapshot of the current run."""
        ...

    def today(self) -> date:
        """Reference date of the current run."""
        ...

    def city(self) -> str:
        """City the current run is about."""
        ...

    def send_message(self, message: AgentMessage) -> None:
        """Send a message through the bus."""
        ...

    def broadcast(
        self,
        sender: AgentId,
        topic: str,
        data: Any,
        priority: Priority = Priority.MEDIUM,
    ) -> AgentMessage:
        """Send a BROADCAST message to every other agent."""
        ...


class Toolkit:
    """Config provider, bus access and data sources for agents."""

    def __init__(
        self,
        config: HospitalConfig,
        message_bus: IMessageBus,
        environment: IEnvironmentalDataProvider | None = None,
    ):
        self._config = config
        self._message_bus = message_bus
        self._environment = environment or StaticEnvironmentalDataProvider()
        self._scenario: Scenario | None = None

    @property
    def scenario(self) -> Scenario | None:
        return self._scenario

    @property
    def environment(self) -> IEnvironmentalDataProvider:
        return self._environment

    @property
    def message_bus(self) -> IMessageBus:
        return self._message_bus

    def get_hospital_config(self) -> HospitalConfig:
        """Configuration snapshot of the current run."""
        return self._config

    def update_config(self, config: HospitalConfig) -> None:
        """Swap the configuration snapshot (between runs only)."""
        self._config = config

    def begin_run(self, scenario: Scenario | None) -> None:
        """Install the scenario the next run reads."""
        self._scenario = scenario

    def today(self) -> date:
        """Scenario date, or today when the scenario has none."""
        if self._scenario and self._scenario.as_of:
            return self._scenario.as_of
        return datetime.now(timezone.utc).date()

    def city(self) -> str:
        if self._scenario and self._scenario.city:
            return self._scenario.city
        return self._config.location.city

    def send_message(self, message: AgentMessage) -> None:
        self._message_bus.send(message)

    def broadcast(
        self,
        sender: AgentId,
        topic: str,
        data: Any,
        priority: Priority = Priority.MEDIUM,
    ) -> AgentMessage:
        """Send a BROADCAST message to every other agent."""
        message = AgentMessage(
            id=str(uuid.uuid4()),
            sender=sender,
            to=BROADCAST_ALL,
            type=MessageType.BROADCAST,
            content=MessageContent(topic=topic, data=data, priority=priority),
            timestamp=datetime.now(timezone.utc),
        )
        self._message_bus.send(message)
        return message
