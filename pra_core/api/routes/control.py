"""Control API routes."""

from typing import Any

from fastapi import APIRouter, Body, HTTPException
from pydantic import BaseModel

from ...app import IApplication
from ...models import to_plain


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


def create_control_router(app: IApplication) -> APIRouter:
    """Create control router."""
    router = APIRouter(prefix="/api", tags=["control"])

    @router.get("/config")
    async def get_config() -> dict:
        """Current hospital configuration."""
        return to_plain(app.config)

    @router.put("/config")
    async def update_config(changes: dict[str, Any] = Body(...)) -> dict:
        """Replace configuration fields for subsequent runs."""
        try:
            config = await app.update_config(changes)
        except (TypeError, ValueError) as e:
            raise HTTPException(status_code=400, detail=f"Invalid config update: {e}")
        return to_plain(config)

    @router.post("/control/reset", response_model=StatusResponse)
    async def reset_system() -> dict:
        """Reset agents, run history and configuration."""
        try:
            await app.reset()
            return {"status": "ok"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
