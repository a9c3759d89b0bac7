"""API route definitions."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Header, Path, Query, Response, status

from swatchx.api.dependencies import EngineDep, LimiterDep, RegistryDep, verify_api_key
from swatchx.api.schemas import (
    CacheStatusResponse,
    ColorSwatch,
    DistinctColorsResponse,
    ErrorResponse,
    HealthResponse,
    RemoteErrorResponse,
)
from swatchx.discovery.cancellation import CancelToken
from swatchx.discovery.engine import generate_points

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", dependencies=[Depends(verify_api_key)])

Saturation = Annotated[int, Query(ge=0, le=100, description="Saturation percentage")]
Lightness = Annotated[int, Query(ge=0, le=100, description="Lightness percentage")]

_LOOKUP_ERRORS: dict[int | str, dict[str, object]] = {
    status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": ErrorResponse},
    status.HTTP_502_BAD_GATEWAY: {"model": RemoteErrorResponse},
}


@router.get(
    "/colors/distinct",
    response_model=DistinctColorsResponse,
    responses={**_LOOKUP_ERRORS, status.HTTP_409_CONFLICT: {"model": ErrorResponse}},
    summary="Discover every distinct color name around the hue wheel",
)
async def discover_colors(
    saturation: Saturation,
    lightness: Lightness,
    engine: EngineDep,
    registry: RegistryDep,
    session_id: Annotated[str | None, Header(alias="X-Discovery-Session")] = None,
) -> DistinctColorsResponse:
    """Return one swatch per color name, ordered by hue.

    Requests sharing an ``X-Discovery-Session`` header supersede each other:
    the older discovery is cancelled and answers 409.
    """
    token = registry.begin(session_id) if session_id else CancelToken()
    try:
        results = await engine.discover(saturation, lightness, token)
    finally:
        if session_id:
            registry.finish(session_id, token)

    return DistinctColorsResponse(
        saturation=saturation,
        lightness=lightness,
        colors=[ColorSwatch.from_result(result) for result in results],
    )


@router.get(
    "/colors",
    response_model=list[ColorSwatch],
    responses=_LOOKUP_ERRORS,
    summary="Look up colors for several hues",
)
async def lookup_colors(
    saturation: Saturation,
    lightness: Lightness,
    engine: EngineDep,
    hues: Annotated[list[int] | None, Query(description="Hues to look up")] = None,
    count: Annotated[int, Query(ge=1, le=360, description="Evenly spaced hues when 'hues' is absent")] = 360,
) -> list[ColorSwatch]:
    """Return a swatch per requested hue, in request order."""
    points = hues if hues else generate_points(count)
    results = await engine.lookup_many(points, saturation, lightness)
    return [ColorSwatch.from_result(result) for result in results]


@router.get(
    "/colors/{hue}",
    response_model=ColorSwatch,
    responses=_LOOKUP_ERRORS,
    summary="Look up the color at one hue",
)
async def lookup_color(
    hue: Annotated[int, Path(ge=0, le=359)],
    saturation: Saturation,
    lightness: Lightness,
    engine: EngineDep,
) -> ColorSwatch:
    result = await engine.lookup(hue, saturation, lightness)
    return ColorSwatch.from_result(result)


@router.get(
    "/cache",
    response_model=CacheStatusResponse,
    summary="Report whether evenly spaced hues are cached",
)
async def cache_status(
    saturation: Saturation,
    lightness: Lightness,
    engine: EngineDep,
    count: Annotated[int, Query(ge=1, le=360)] = 360,
) -> CacheStatusResponse:
    return CacheStatusResponse(
        entries=len(engine.cache),
        all_cached=engine.is_cached(generate_points(count), saturation, lightness),
    )


@router.delete(
    "/cache",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Clear the color cache",
)
async def clear_cache(engine: EngineDep) -> Response:
    entries = len(engine.cache)
    engine.cache.reset()
    logger.info("Cleared %d cached colors", entries)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
)
async def health(engine: EngineDep, limiter: LimiterDep, registry: RegistryDep) -> HealthResponse:
    """Return service health status."""
    return HealthResponse(
        status="ok",
        cache_entries=len(engine.cache),
        active_requests=limiter.active_count,
        queue_depth=limiter.queue_depth,
        discoveries_in_flight=registry.in_flight,
    )
