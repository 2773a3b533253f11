"""Pipeline API routes."""

import uuid
from datetime import date, datetime
from typing import Any

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from ...app import IApplication
from ...logging_config import get_logger
from ...models import PipelineRun, Scenario

logger = get_logger(__name__)


class ScenarioRequest(BaseModel):
    """Request model for a pipeline run."""

    id: str | None = None
    name: str = ""
    as_of: date | None = None
    risk_multiplier: float = Field(1.5, ge=0)
    hazard: str | None = None
    city: str | None = None


class PipelineRunResponse(BaseModel):
    """Response model for a stored run."""

    id: str
    scenario: dict[str, Any]
    outputs: dict[str, Any]
    created_at: datetime


def _run_response(run: PipelineRun) -> dict:
    return {
        "id": run.id,
        "scenario": run.scenario,
        "outputs": run.outputs,
        "created_at": run.created_at,
    }


def create_pipeline_router(app: IApplication) -> APIRouter:
    """Create pipeline router."""
    router = APIRouter(prefix="/api/pipeline", tags=["pipeline"])

    @router.post("/run", response_model=PipelineRunResponse)
    async def run_pipeline(request: ScenarioRequest) -> dict:
        """Run every agent once for a scenario."""
        scenario = Scenario(
            id=request.id or str(uuid.uuid4()),
            name=request.name,
            as_of=request.as_of,
            risk_multiplier=request.risk_multiplier,
            hazard=request.hazard,
            city=request.city,
        )
        try:
            run = await app.run_scenario(scenario)
        except Exception:
            # Previous result stays current; callers get a generic failure
            logger.exception("Pipeline run failed", extra={"scenario_id": scenario.id})
            raise HTTPException(status_code=500, detail="Pipeline execution failed")
        return _run_response(run)

    @router.get("/latest", response_model=PipelineRunResponse)
    async def get_latest_run() -> dict:
        """Most recent successful run."""
        if app.last_run is None:
            raise HTTPException(status_code=404, detail="No pipeline run yet")
        return _run_response(app.last_run)

    @router.get("/runs", response_model=list[PipelineRunResponse])
    async def get_runs(limit: int = Query(20, ge=1, le=200)) -> list[dict]:
        """Stored runs, newest first."""
        runs = await app.storage.get_runs(limit=limit)
        return [_run_response(run) for run in runs]

    @router.get("/runs/{run_id}", response_model=PipelineRunResponse)
    async def get_run(run_id: str) -> dict:
        """A stored run by ID."""
        run = await app.storage.get_run(run_id)
        if run is None:
            raise HTTPException(status_code=404, detail="Run not found")
        return _run_response(run)

    return router
