"""FastAPI dependencies."""

from __future__ import annotations

from fastapi import Request

from component_chameleon.ai.client import OracleClient
from component_chameleon.config import Settings, get_settings


def get_oracle_client(request: Request) -> OracleClient:
    """The client built in the app lifespan."""
    return request.app.state.oracle_client


def get_app_settings() -> Settings:
    return get_settings()
