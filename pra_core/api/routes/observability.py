"""Observability API routes."""

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Query
from pydantic import BaseModel

from ...app import IApplication
from ...models import TraceStep


class AgentResponse(BaseModel):
    """Response model for a registered agent."""

    id: str
    name: str
    role: str
    status: str


class TraceResponse(BaseModel):
    """Response model for a reasoning trace."""

    agent_id: str
    agent_name: str
    timestamp: datetime
    thought: str
    step: str


class BusMessageResponse(BaseModel):
    """Response model for an audited bus message."""

    id: str
    run_id: str
    sender: str
    recipient: str
    type: str
    topic: str
    priority: str
    data: Any
    timestamp: datetime


def create_observability_router(app: IApplication) -> APIRouter:
    """Create observability router."""
    router = APIRouter(prefix="/api", tags=["observability"])

    @router.get("/agents", response_model=list[AgentResponse])
    async def get_agents() -> list[dict]:
        """Registered agents in phase order."""
        return [
            {
                "id": agent.agent_id,
                "name": agent.name,
                "role": agent.role.value,
                "status": agent.status.value,
            }
            for agent in app.agents
        ]

    @router.get("/traces", response_model=list[TraceResponse])
    async def get_traces(
        agent_id: str | None = Query(None, description="Filter by agent"),
        step: TraceStep | None = Query(None, description="Filter by cycle step"),
    ) -> list[dict]:
        """Reasoning traces of the last successful run."""
        return app.get_traces(agent_id, step.value if step else None)

    @router.get("/messages", response_model=list[BusMessageResponse])
    async def get_messages(
        run_id: str | None = Query(None, description="Filter by run"),
        limit: int = Query(100, ge=1, le=1000),
    ) -> list[dict]:
        """Audited bus messages, newest first."""
        messages = await app.storage.get_bus_messages(run_id=run_id, limit=limit)
        return [
            {
                "id": m.id,
                "run_id": m.run_id,
                "sender": m.sender,
                "recipient": m.recipient,
                "type": m.type,
                "topic": m.topic,
                "priority": m.priority,
                "data": m.data,
                "timestamp": m.timestamp,
            }
            for m in messages
        ]

    return router
