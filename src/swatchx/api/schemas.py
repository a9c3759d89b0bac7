"""Pydantic response schemas for the SwatchX API."""

from __future__ import annotations

from pydantic import BaseModel, Field

from swatchx.discovery.classifier import ClassificationResult


class RGB(BaseModel):
    red: int = Field(ge=0, le=255)
    green: int = Field(ge=0, le=255)
    blue: int = Field(ge=0, le=255)


class ColorSwatch(BaseModel):
    """A named color at one hue."""

    hue: int = Field(description="Hue in degrees (0-359)")
    saturation: int = Field(description="Saturation percentage (0-100)")
    lightness: int = Field(description="Lightness percentage (0-100)")
    name: str
    rgb: RGB
    hex: str | None = None
    hsl: str | None = None

    @classmethod
    def from_result(cls, result: ClassificationResult) -> ColorSwatch:
        payload = result.payload
        return cls(
            hue=result.point,
            saturation=result.param_a,
            lightness=result.param_b,
            name=result.label,
            rgb=RGB(**payload["rgb"]),
            hex=payload.get("hex"),
            hsl=payload.get("hsl"),
        )


class DistinctColorsResponse(BaseModel):
    """Response for the distinct-color discovery endpoint."""

    saturation: int
    lightness: int
    colors: list[ColorSwatch]


class CacheStatusResponse(BaseModel):
    """Cache size and whether a set of hues is fully cached."""

    entries: int
    all_cached: bool


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    cache_entries: int
    active_requests: int
    queue_depth: int
    discoveries_in_flight: int


class ErrorResponse(BaseModel):
    """Standard error response."""

    detail: str


class RemoteErrorResponse(ErrorResponse):
    """Error response for failed Color API lookups."""

    kind: str = Field(description="Failure kind: 'connection', 'status', or 'malformed'")
    status_code: int | None = None
