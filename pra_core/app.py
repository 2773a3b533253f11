"""Application bootstrap and lifecycle management."""

import asyncio
import os
import uuid
from datetime import datetime, timezone
from typing import Any, Protocol

from .agents import IAgent, create_default_agents
from .config import load_hospital_config
from .environment import (
    IEnvironmentalDataProvider,
    OpenWeatherMapProvider,
    StaticEnvironmentalDataProvider,
)
from .logging_config import get_logger
from .message_bus import MessageBus
from .models import HospitalConfig, PipelineRun, Scenario, to_plain
from .orchestrator import Orchestrator
from .storage import IStorage, Storage
from .toolkit import Toolkit

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Reset agents, history and configuration between simulations."""
        ...

    async def run_scenario(self, scenario: Scenario) -> PipelineRun:
        """Run the pipeline once and persist the result."""
        ...

    async def update_config(self, changes: dict[str, Any]) -> HospitalConfig:
        """Replace configuration fields for subsequent runs."""
        ...

    def get_traces(
        self, agent_id: str | None = None, step: str | None = None
    ) -> list[dict]:
        """Reasoning traces of the last successful run."""
        ...

    @property
    def last_run(self) -> PipelineRun | None:
        """Most recent successful run."""
        ...

    @property
    def agents(self) -> list[IAgent]:
        """Registered agents in phase order."""
        ...

    @property
    def config(self) -> HospitalConfig:
        """Current configuration snapshot."""
        ...

    @property
    def storage(self) -> IStorage:
        """Run history."""
        ...


class Application:
    """Wires config, bus, toolkit, agents, orchestrator and storage."""

    def __init__(
        self,
        db_path: str | None = None,
        config: HospitalConfig | None = None,
        environment: IEnvironmentalDataProvider | None = None,
    ):
        self._db_path = os.getenv("DATABASE_URL") if db_path is None else db_path
        self._initial_config = config
        self._environment = environment

        # Components (will be initialized in start())
        self._storage: IStorage | None = None
        self._message_bus: MessageBus | None = None
        self._toolkit: Toolkit | None = None
        self._orchestrator: Orchestrator | None = None

        self._last_run: PipelineRun | None = None
        # Runs and config swaps never interleave
        self._lock = asyncio.Lock()

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Storage (no dependencies)
        self._storage = Storage(self._db_path)
        await self._storage.init()
        logger.info("Storage initialized")

        # 2. Configuration snapshot
        if self._initial_config is None:
            self._initial_config = load_hospital_config()

        # 3. Live data provider (offline when no API key)
        if self._environment is None:
            if os.getenv("OPENWEATHER_API_KEY"):
                self._environment = OpenWeatherMapProvider()
                logger.info("Using OpenWeatherMap for live environmental data")
            else:
                self._environment = StaticEnvironmentalDataProvider()
                logger.info("No OPENWEATHER_API_KEY, using seasonal defaults")

        # 4. MessageBus + Toolkit
        self._message_bus = MessageBus()
        self._toolkit = Toolkit(self._initial_config, self._message_bus, self._environment)

        # 5. Orchestrator with the standard agents
        self._orchestrator = Orchestrator(self._toolkit, self._message_bus)
        for agent in create_default_agents(self._toolkit):
            self._orchestrator.register_agent(agent)
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if isinstance(self._environment, OpenWeatherMapProvider):
            await self._environment.close()
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    async def reset(self) -> None:
        """Reset agents, history and configuration between simulations."""
        async with self._lock:
            self.orchestrator.reset_all()
            await self.storage.clear()
            self.toolkit.update_config(self._initial_config)
            self._last_run = None
            logger.info("Reset complete")

    async def run_scenario(self, scenario: Scenario) -> PipelineRun:
        """
        Run the pipeline once and persist the result.

        A failing run raises and leaves the last successful run in place.
        """
        async with self._lock:
            # Fresh agent state per scenario
            self.orchestrator.reset_all()
            outputs = await self.orchestrator.execute_agents(scenario)

            run = PipelineRun(
                id=str(uuid.uuid4()),
                scenario=to_plain(scenario),
                outputs=to_plain(outputs),
                created_at=datetime.now(timezone.utc),
            )
            await self.storage.save_run(run, self._message_bus.get_messages())

            self._last_run = run
            logger.info("Run %s stored", run.id, extra={"scenario_id": scenario.id})
            return run

    async def update_config(self, changes: dict[str, Any]) -> HospitalConfig:
        """Replace configuration fields for subsequent runs."""
        async with self._lock:
            config = self.toolkit.get_hospital_config().with_updates(**changes)
            self.toolkit.update_config(config)
            logger.info("Hospital config updated: %s", sorted(changes))
            return config

    def get_traces(
        self, agent_id: str | None = None, step: str | None = None
    ) -> list[dict]:
        """Reasoning traces of the last successful run."""
        if self._last_run is None:
            return []
        return [
            trace
            for trace in self._last_run.outputs["reasoning_traces"]
            if (agent_id is None or trace["agent_id"] == agent_id)
            and (step is None or trace["step"] == step)
        ]

    @property
    def last_run(self) -> PipelineRun | None:
        return self._last_run

    @property
    def agents(self) -> list[IAgent]:
        return self.orchestrator.agents

    @property
    def config(self) -> HospitalConfig:
        return self.toolkit.get_hospital_config()

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def toolkit(self) -> Toolkit:
        if not self._toolkit:
            raise RuntimeError("Application not started")
        return self._toolkit

    @property
    def orchestrator(self) -> Orchestrator:
        """Get orchestrator instance."""
        if not self._orchestrator:
            raise RuntimeError("Application not started")
        return self._orchestrator
