"""Health endpoint."""

from fastapi import APIRouter

from login_server import __version__

router = APIRouter()


@router.get("/health")
async def health_check():
    """Liveness check with the running version."""
    return {"status": "ok", "version": __version__}
