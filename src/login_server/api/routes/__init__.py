"""
Route registration entry point for the FastAPI application.
"""

from fastapi import FastAPI

from login_server.api.routes import health, login
from login_server.core.pipeline import LoginPipeline


def register_routes(app: FastAPI, pipeline: LoginPipeline) -> None:
    """Register all API routes with the FastAPI app."""
    app.include_router(health.router)
    app.include_router(login.router(pipeline))
