"""RemoteClassifier backed by The Color API (thecolorapi.com).

A hue is classified by asking for the color at ``hsl(hue, saturation%,
lightness%)`` and taking its name as the label.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from swatchx.discovery.classifier import UNNAMED, ClassificationResult
from swatchx.discovery.errors import RemoteError, RemoteErrorKind

if TYPE_CHECKING:
    from swatchx.remote.limiter import RequestLimiter

logger = logging.getLogger(__name__)


class ColorApiClassifier:
    """Classifies hues by color name over HTTP."""

    def __init__(self, client: httpx.AsyncClient, base_url: str, limiter: RequestLimiter) -> None:
        self._client = client
        self._url = f"{base_url.rstrip('/')}/id"
        self._limiter = limiter

    async def classify(self, point: int, param_a: int, param_b: int) -> ClassificationResult:
        response = await self._limiter.run(self._request, point, param_a, param_b)

        if not response.is_success:
            raise RemoteError(
                f"Color API returned HTTP {response.status_code} for hue {point}",
                kind=RemoteErrorKind.STATUS,
                point=point,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            raise RemoteError(
                f"Color API returned a non-JSON body for hue {point}",
                kind=RemoteErrorKind.MALFORMED,
                point=point,
                status_code=response.status_code,
            ) from None

        return _parse_color(data, point, param_a, param_b)

    async def _request(self, point: int, param_a: int, param_b: int) -> httpx.Response:
        try:
            return await self._client.get(self._url, params={"hsl": f"{point},{param_a},{param_b}"})
        except httpx.HTTPError as exc:
            logger.debug("Color API request for hue %s failed: %s", point, exc)
            raise RemoteError(
                f"Could not reach the Color API for hue {point}: {exc}",
                kind=RemoteErrorKind.CONNECTION,
                point=point,
            ) from exc


_RGB_CHANNELS: tuple[tuple[str, str], ...] = (("red", "r"), ("green", "g"), ("blue", "b"))


def _optional_str(value: Any, field_name: str) -> str | None:
    if value is not None and not isinstance(value, str):
        raise TypeError(f"{field_name} must be a string, got {type(value).__name__}")
    return value


def _parse_color(data: Any, point: int, param_a: int, param_b: int) -> ClassificationResult:
    try:
        name = data["name"]
        rgb = data["rgb"]
        if not name or not rgb:
            raise KeyError("name/rgb")

        channels: dict[str, int] = {}
        for channel, key in _RGB_CHANNELS:
            value = rgb[key]
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
                raise ValueError(f"rgb.{key} must be an integer in 0..255, got {value!r}")
            channels[channel] = value

        payload: dict[str, Any] = {
            "rgb": channels,
            "hex": _optional_str((data.get("hex") or {}).get("value"), "hex.value"),
            "hsl": _optional_str((data.get("hsl") or {}).get("value"), "hsl.value"),
        }
        label = _optional_str(name.get("value"), "name.value") or UNNAMED
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise RemoteError(
            f"Invalid Color API response structure for hue {point}: {exc}",
            kind=RemoteErrorKind.MALFORMED,
            point=point,
        ) from None

    return ClassificationResult(point=point, param_a=param_a, param_b=param_b, label=label, payload=payload)
