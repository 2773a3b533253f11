"""Tests for Application."""

from datetime import date

import pytest

from pra_core.agents import Agent
from pra_core.app import Application
from pra_core.environment import StaticEnvironmentalDataProvider
from pra_core.models import AgentRole, Scenario


class BrokenAgent(Agent):
    """Action agent that always fails."""

    def __init__(self, toolkit):
        super().__init__("broken", "Broken", AgentRole.ACTION, toolkit)

    async def perceive(self):
        raise RuntimeError("broken agent")

    def reason(self, perception):
        raise NotImplementedError

    def act(self, reasoning):
        raise NotImplementedError


class TestApplicationStart:
    """Tests for Application.start()."""

    @pytest.mark.asyncio
    async def test_start_initializes_components(self, monkeypatch):
        """Test that start initializes all components."""
        monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)
        monkeypatch.delenv("HOSPITAL_CONFIG_PATH", raising=False)
        app = Application(db_path=":memory:")
        await app.start()

        assert app._storage is not None
        assert app._message_bus is not None
        assert app._toolkit is not None
        assert app._orchestrator is not None
        assert isinstance(app._environment, StaticEnvironmentalDataProvider)
        assert app.config.hospital_id == "AIIMS-DEL-001"

        await app.stop()

    @pytest.mark.asyncio
    async def test_start_registers_agents(self, app):
        """Test that start registers the six standard agents in phase order."""
        assert [a.agent_id for a in app.agents] == [
            "environment-monitor",
            "festival-detector",
            "season-tracker",
            "forecaster",
            "capacity-calculator",
            "resource-planner",
        ]


class TestApplicationRun:
    """Tests for Application.run_scenario()."""

    @pytest.mark.asyncio
    async def test_run_is_stored(self, app, scenario):
        """Test that a run is returned, stored and remembered."""
        run = await app.run_scenario(scenario)

        assert app.last_run is run
        assert run.scenario["as_of"] == "2026-10-19"
        assert len(run.outputs["recommendations"]) == 6

        stored = await app.storage.get_run(run.id)
        assert stored is not None
        assert stored.outputs == run.outputs

        messages = await app.storage.get_bus_messages(run_id=run.id)
        assert len(messages) == 5

    @pytest.mark.asyncio
    async def test_runs_do_not_accumulate_state(self, app, scenario):
        """Test that each run starts from fresh agent state."""
        await app.run_scenario(scenario)
        run = await app.run_scenario(scenario)

        assert len(run.outputs["reasoning_traces"]) == 18
        assert len(await app.storage.get_runs()) == 2

    @pytest.mark.asyncio
    async def test_failed_run_keeps_last_run(self, app, scenario):
        """Test that a failure leaves the previous result and history alone."""
        first = await app.run_scenario(scenario)
        app.orchestrator.register_agent(BrokenAgent(app.toolkit))

        with pytest.raises(RuntimeError, match="broken agent"):
            await app.run_scenario(scenario)

        assert app.last_run is first
        assert len(await app.storage.get_runs()) == 1

    @pytest.mark.asyncio
    async def test_failed_run_keeps_traces(self, app, scenario):
        """Test that traces still describe the last successful run after a failure."""
        await app.run_scenario(scenario)
        await app.update_config({"target_occupancy": 0})

        with pytest.raises(ZeroDivisionError):
            await app.run_scenario(scenario)

        traces = app.get_traces()
        assert len(traces) == 18
        act = app.get_traces(agent_id="capacity-calculator", step="ACT")
        assert len(act) == 1
        assert act[0]["thought"].startswith("Action: Calculated resource needs: 245 beds")

    @pytest.mark.asyncio
    async def test_get_traces_before_any_run(self, app):
        assert app.get_traces() == []


class TestApplicationConfig:
    """Tests for configuration updates."""

    @pytest.mark.asyncio
    async def test_update_config_applies_to_next_run(self, app, scenario):
        """Test that a config change affects subsequent runs."""
        config = await app.update_config({"allocated_beds_for_risk": 300})
        assert config.allocated_beds_for_risk == 300

        run = await app.run_scenario(scenario)
        capacity = run.outputs["actions"][4]["data"]
        assert capacity["extra_beds"] == 45

    @pytest.mark.asyncio
    async def test_update_config_invalid_field(self, app):
        with pytest.raises(TypeError):
            await app.update_config({"helipads": 2})


class TestApplicationReset:
    """Tests for Application.reset()."""

    @pytest.mark.asyncio
    async def test_reset_clears_storage(self, app, scenario):
        """Test that reset clears history, last run and traces."""
        await app.run_scenario(scenario)

        await app.reset()

        assert app.last_run is None
        assert await app.storage.get_runs() == []
        assert await app.storage.get_bus_messages() == []
        assert all(a.get_reasoning_traces() == [] for a in app.agents)

    @pytest.mark.asyncio
    async def test_reset_restores_config(self, app):
        """Test that reset restores the initial configuration."""
        await app.update_config({"baseline_patients_per_day": 90})

        await app.reset()

        assert app.config.baseline_patients_per_day == 50


class TestApplicationProperties:
    """Tests for Application properties."""

    def test_storage_property_raises_when_not_started(self):
        """Test that storage property raises when not started."""
        app = Application(db_path=":memory:")
        with pytest.raises(RuntimeError, match="Application not started"):
            _ = app.storage

    def test_orchestrator_property_raises_when_not_started(self):
        app = Application(db_path=":memory:")
        with pytest.raises(RuntimeError, match="Application not started"):
            _ = app.orchestrator

    @pytest.mark.asyncio
    async def test_hazard_scenario(self, app):
        """Test a hazard scenario end to end."""
        run = await app.run_scenario(
            Scenario(id="smog", as_of=date(2026, 11, 20), hazard="POLLUTION_SPIKE")
        )
        capacity = run.outputs["actions"][4]["data"]
        assert capacity["uplift_source"] == "hazard:POLLUTION_SPIKE"
        assert capacity["seasonal_uplift"] == 1.35
