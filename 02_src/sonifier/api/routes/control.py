"""Control API routes."""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ...app import Application


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


class SimStartRequest(BaseModel):
    """Request model for starting the load generator."""

    profile: str = "low"


def create_control_router(app: Application) -> APIRouter:
    """Create control router."""
    router = APIRouter(prefix="/api/control", tags=["control"])

    @router.post("/reset", response_model=StatusResponse)
    async def reset_system() -> dict:
        """Drop the current snapshot."""
        await app.reset()
        return {"status": "ok"}

    @router.post("/sim/start", response_model=StatusResponse)
    async def start_sim(request: SimStartRequest | None = None) -> dict:
        """Start the synthetic load generator."""
        generator = app.load_generator
        if generator is None:
            raise HTTPException(status_code=404, detail="SIM not configured")
        profile = request.profile if request else "low"
        try:
            await generator.start(profile)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {"status": "ok"}

    @router.post("/sim/stop", response_model=StatusResponse)
    async def stop_sim() -> dict:
        """Stop the synthetic load generator."""
        generator = app.load_generator
        if generator is None:
            raise HTTPException(status_code=404, detail="SIM not configured")
        await generator.stop()
        return {"status": "ok"}

    return router
