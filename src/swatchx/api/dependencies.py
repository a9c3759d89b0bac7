"""Request dependencies: API key authentication and application state."""

from __future__ import annotations

import secrets
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from swatchx.config import Settings
from swatchx.discovery.cancellation import DiscoveryRegistry
from swatchx.discovery.engine import AdaptiveDiscoveryEngine
from swatchx.remote.limiter import RequestLimiter

_bearer_scheme = HTTPBearer(auto_error=False)


def get_settings_from_request(request: Request) -> Settings:
    settings: Settings = request.app.state.settings
    return settings


def get_engine(request: Request) -> AdaptiveDiscoveryEngine:
    engine: AdaptiveDiscoveryEngine = request.app.state.engine
    return engine


def get_registry(request: Request) -> DiscoveryRegistry:
    registry: DiscoveryRegistry = request.app.state.registry
    return registry


def get_limiter(request: Request) -> RequestLimiter:
    limiter: RequestLimiter = request.app.state.limiter
    return limiter


async def verify_api_key(
    settings: Annotated[Settings, Depends(get_settings_from_request)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer_scheme)],
) -> None:
    """Check the Bearer token against the configured API key.

    If SWATCHX_API_KEY is not set, all requests pass. Otherwise requests
    must send 'Authorization: Bearer <key>'.
    """
    if settings.api_key is None:
        return

    if credentials is None or not secrets.compare_digest(credentials.credentials.encode(), settings.api_key.encode()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key",
            headers={"WWW-Authenticate": "Bearer"},
        )


EngineDep = Annotated[AdaptiveDiscoveryEngine, Depends(get_engine)]
RegistryDep = Annotated[DiscoveryRegistry, Depends(get_registry)]
LimiterDep = Annotated[RequestLimiter, Depends(get_limiter)]
