"""Tests for Orchestrator."""

import pytest

from pra_core.agents import Agent
from pra_core.agents.base import now
from pra_core.models import (
    Action,
    AgentRole,
    AgentStatus,
    Perception,
    Reasoning,
    TraceStep,
)
from pra_core.orchestrator import Orchestrator, recommendation_id


class StubAgent(Agent):
    """Agent that records when it ran into a shared log."""

    def __init__(self, agent_id, role, toolkit, log, fail=False):
        super().__init__(agent_id, agent_id.title(), role, toolkit)
        self.log = log
        self.fail = fail

    async def perceive(self) -> Perception:
        self.log.append(self.agent_id)
        if self.fail:
            raise RuntimeError(f"{self.agent_id} failed")
        return Perception(agent_id=self.agent_id, timestamp=now(), data={}, confidence=1.0)

    def reason(self, perception: Perception) -> Reasoning:
        return Reasoning(
            agent_id=self.agent_id,
            timestamp=now(),
            conclusions=[],
            confidence=1.0,
            reasoning="ok",
        )

    def act(self, reasoning: Reasoning) -> Action:
        return Action(
            agent_id=self.agent_id,
            timestamp=now(),
            type="STUB",
            data={"from": self.agent_id},
            explanation=f"{self.agent_id} acted",
        )


@pytest.fixture
def empty_orchestrator(toolkit, message_bus):
    """Orchestrator without agents."""
    return Orchestrator(toolkit, message_bus)


class TestOrchestratorRegistry:
    """Tests for registration."""

    def test_register_subscribes_to_bus(self, empty_orchestrator, toolkit, message_bus):
        agent = StubAgent("p1", AgentRole.PERCEPTION, toolkit, [])
        empty_orchestrator.register_agent(agent)

        assert empty_orchestrator.get_agent("p1") is agent
        assert message_bus.is_subscribed("p1")

    def test_duplicate_id_rejected(self, empty_orchestrator, toolkit):
        empty_orchestrator.register_agent(StubAgent("p1", AgentRole.PERCEPTION, toolkit, []))

        with pytest.raises(ValueError):
            empty_orchestrator.register_agent(StubAgent("p1", AgentRole.ACTION, toolkit, []))

    def test_unregister(self, empty_orchestrator, toolkit, message_bus):
        """Test that unregistering removes the agent from its group and the bus."""
        empty_orchestrator.register_agent(StubAgent("p1", AgentRole.PERCEPTION, toolkit, []))

        empty_orchestrator.unregister_agent("p1")

        assert empty_orchestrator.get_agent("p1") is None
        assert empty_orchestrator.agents == []
        assert not message_bus.is_subscribed("p1")

    def test_unregister_unknown(self, empty_orchestrator):
        with pytest.raises(ValueError):
            empty_orchestrator.unregister_agent("ghost")

    def test_agents_in_phase_order(self, empty_orchestrator, toolkit):
        """Test that the agent list follows phases, then registration order."""
        for agent_id, role in [
            ("a1", AgentRole.ACTION),
            ("r1", AgentRole.REASONING),
            ("p1", AgentRole.PERCEPTION),
            ("p2", AgentRole.PERCEPTION),
        ]:
            empty_orchestrator.register_agent(StubAgent(agent_id, role, toolkit, []))

        assert [a.agent_id for a in empty_orchestrator.agents] == ["p1", "p2", "r1", "a1"]


class TestOrchestratorExecute:
    """Tests for execute_agents."""

    @pytest.mark.asyncio
    async def test_phase_order(self, empty_orchestrator, toolkit):
        """Test that phases run in order regardless of registration order."""
        log = []
        for agent_id, role in [
            ("a1", AgentRole.ACTION),
            ("r1", AgentRole.REASONING),
            ("p1", AgentRole.PERCEPTION),
            ("p2", AgentRole.PERCEPTION),
        ]:
            empty_orchestrator.register_agent(StubAgent(agent_id, role, toolkit, log))

        outputs = await empty_orchestrator.execute_agents()

        assert log == ["p1", "p2", "r1", "a1"]
        assert [a.agent_id for a in outputs.actions] == ["p1", "p2", "r1", "a1"]
        assert len(outputs.perceptions) == 4
        assert len(outputs.reasonings) == 4
        assert len(outputs.reasoning_traces) == 12

    @pytest.mark.asyncio
    async def test_recommendations(self, empty_orchestrator, toolkit):
        """Test one recommendation per action."""
        empty_orchestrator.register_agent(StubAgent("p1", AgentRole.PERCEPTION, toolkit, []))

        outputs = await empty_orchestrator.execute_agents()

        action = outputs.actions[0]
        recommendation = outputs.recommendations[0]
        assert recommendation.id == recommendation_id(action)
        assert recommendation.id == f"p1-{int(action.timestamp.timestamp() * 1000)}"
        assert recommendation.title == "STUB"
        assert recommendation.description == "p1 acted"
        assert recommendation.data == {"from": "p1"}

    @pytest.mark.asyncio
    async def test_fail_fast(self, empty_orchestrator, toolkit):
        """Test that the first failure aborts the run."""
        log = []
        failing = StubAgent("p1", AgentRole.PERCEPTION, toolkit, log, fail=True)
        empty_orchestrator.register_agent(failing)
        empty_orchestrator.register_agent(StubAgent("p2", AgentRole.PERCEPTION, toolkit, log))
        empty_orchestrator.register_agent(StubAgent("r1", AgentRole.REASONING, toolkit, log))

        with pytest.raises(RuntimeError, match="p1 failed"):
            await empty_orchestrator.execute_agents()

        assert log == ["p1"]
        assert failing.status == AgentStatus.IDLE

    @pytest.mark.asyncio
    async def test_scenario_installed(self, empty_orchestrator, toolkit, scenario):
        await empty_orchestrator.execute_agents(scenario)
        assert toolkit.scenario == scenario
        assert toolkit.today() == scenario.as_of

    @pytest.mark.asyncio
    async def test_empty_orchestrator(self, empty_orchestrator):
        outputs = await empty_orchestrator.execute_agents()
        assert outputs.actions == []
        assert outputs.recommendations == []


class TestOrchestratorPipeline:
    """Tests for the standard six-agent pipeline."""

    @pytest.mark.asyncio
    async def test_full_run(self, orchestrator, scenario):
        """Test a complete post-monsoon run."""
        outputs = await orchestrator.execute_agents(scenario)

        assert [r.title for r in outputs.recommendations] == [
            "ENVIRONMENTAL_ASSESSMENT",
            "FESTIVAL_FORECAST",
            "SEASON_ASSESSMENT",
            "RISK_FORECAST",
            "CAPACITY_CALCULATION",
            "RESOURCE_DEPLOYMENT_PLAN",
        ]
        capacity = outputs.actions[4].data
        assert capacity["uplift_source"] == "season-tracker"
        assert capacity["extra_beds"] == 245

        plan = outputs.actions[5].data
        resources = [t["resource"] for t in plan["tasks"]]
        assert resources == ["beds", "oxygen", "nebulizers", "departments"]
        assert plan["activate_emergency_protocol"] is True

    @pytest.mark.asyncio
    async def test_traces_follow_phases(self, orchestrator, scenario):
        """Test that every agent's traces are grouped and phase-ordered."""
        outputs = await orchestrator.execute_agents(scenario)

        traces = outputs.reasoning_traces
        assert len(traces) == 18
        for i in range(0, 18, 3):
            assert [t.step for t in traces[i : i + 3]] == [
                TraceStep.PERCEIVE,
                TraceStep.REASON,
                TraceStep.ACT,
            ]
            assert len({t.agent_id for t in traces[i : i + 3]}) == 1

    @pytest.mark.asyncio
    async def test_bus_audit(self, orchestrator, message_bus, scenario):
        """Test that every sharing agent broadcast once."""
        await orchestrator.execute_agents(scenario)

        senders = [m.sender for m in message_bus.get_messages()]
        assert senders == [
            "environment-monitor",
            "festival-detector",
            "season-tracker",
            "forecaster",
            "capacity-calculator",
        ]

    @pytest.mark.asyncio
    async def test_reset_all(self, orchestrator, message_bus, scenario):
        """Test that reset clears traces and the audit queue, twice in a row."""
        await orchestrator.execute_agents(scenario)

        orchestrator.reset_all()
        orchestrator.reset_all()

        assert message_bus.get_messages() == []
        for agent in orchestrator.agents:
            assert agent.get_reasoning_traces() == []
            assert agent.status == AgentStatus.IDLE

    @pytest.mark.asyncio
    async def test_runs_are_repeatable(self, orchestrator, scenario):
        """Test that reset between runs gives identical results."""
        first = await orchestrator.execute_agents(scenario)
        orchestrator.reset_all()
        second = await orchestrator.execute_agents(scenario)

        assert [a.data for a in first.actions] == [a.data for a in second.actions]
