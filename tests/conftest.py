"""Pytest configuration and fixtures."""

import sys
from datetime import date
from pathlib import Path

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Post-monsoon, three days before Dussehra 2026
AS_OF = date(2026, 10, 19)


@pytest_asyncio.fixture
async def storage():
    """Create in-memory storage for testing."""
    from pra_core.storage import Storage

    st = Storage(":memory:")
    await st.init()
    yield st
    await st.close()


@pytest.fixture
def hospital_config():
    """Default Delhi hospital configuration."""
    from pra_core.config import DEFAULT_HOSPITAL_CONFIG

    return DEFAULT_HOSPITAL_CONFIG


@pytest.fixture
def scenario():
    """Deterministic scenario pinned to AS_OF."""
    from pra_core.models import Scenario

    return Scenario(id="scenario-1", name="Post-monsoon baseline", as_of=AS_OF)


@pytest.fixture
def message_bus():
    """Create an empty MessageBus."""
    from pra_core.message_bus import MessageBus

    return MessageBus()


@pytest.fixture
def toolkit(hospital_config, message_bus, scenario):
    """Toolkit with offline environment data and the scenario installed."""
    from pra_core.toolkit import Toolkit

    tk = Toolkit(hospital_config, message_bus)
    tk.begin_run(scenario)
    return tk


@pytest.fixture
def orchestrator(toolkit, message_bus):
    """Orchestrator with the standard agents registered."""
    from pra_core.agents import create_default_agents
    from pra_core.orchestrator import Orchestrator

    orch = Orchestrator(toolkit, message_bus)
    for agent in create_default_agents(toolkit):
        orch.register_agent(agent)
    return orch


@pytest_asyncio.fixture
async def app(hospital_config):
    """Started Application on in-memory storage and offline data."""
    from pra_core.app import Application
    from pra_core.environment import StaticEnvironmentalDataProvider

    application = Application(
        db_path=":memory:",
        config=hospital_config,
        environment=StaticEnvironmentalDataProvider(),
    )
    await application.start()
    yield application
    await application.stop()
