"""Tests for the Color API classifier."""

from __future__ import annotations

import logging
from typing import Any

import httpx
import pytest

from swatchx.discovery.classifier import UNNAMED
from swatchx.discovery.errors import RemoteError, RemoteErrorKind
from swatchx.remote.color_api import ColorApiClassifier
from swatchx.remote.limiter import RequestLimiter

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _color_body(name: str | None = "Torch Red") -> dict[str, Any]:
    return {
        "hex": {"value": "#FF1A1A", "clean": "FF1A1A"},
        "rgb": {"r": 255, "g": 26, "b": 26, "value": "rgb(255, 26, 26)"},
        "hsl": {"value": "hsl(0, 100%, 55%)"},
        "name": {"value": name, "closest_named_hex": "#FF1A1A", "exact_match_name": False},
    }


def _make_classifier(handler: Any) -> tuple[ColorApiClassifier, RequestLimiter]:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    limiter = RequestLimiter(max_concurrent=4)
    return ColorApiClassifier(client, "https://colors.test/", limiter), limiter


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestColorApiClassifier:
    async def test_parses_name_and_payload(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_color_body())

        classifier, limiter = _make_classifier(handler)
        result = await classifier.classify(0, 100, 55)

        assert result.point == 0
        assert result.param_a == 100
        assert result.param_b == 55
        assert result.label == "Torch Red"
        assert result.payload == {
            "rgb": {"red": 255, "green": 26, "blue": 26},
            "hex": "#FF1A1A",
            "hsl": "hsl(0, 100%, 55%)",
        }
        assert seen[0].url.path == "/id"
        assert seen[0].url.params["hsl"] == "0,100,55"
        assert limiter.active_count == 0

    @pytest.mark.parametrize("name", ["", None])
    async def test_blank_name_becomes_unnamed(self, name: str | None) -> None:
        classifier, _ = _make_classifier(lambda request: httpx.Response(200, json=_color_body(name)))
        result = await classifier.classify(10, 50, 50)
        assert result.label == UNNAMED
        assert result.has_label is False

    async def test_non_success_status(self) -> None:
        classifier, _ = _make_classifier(lambda request: httpx.Response(503, text="unavailable"))

        with pytest.raises(RemoteError) as exc_info:
            await classifier.classify(10, 50, 50)

        assert exc_info.value.kind == RemoteErrorKind.STATUS
        assert exc_info.value.status_code == 503
        assert exc_info.value.point == 10

    async def test_non_json_body(self) -> None:
        classifier, _ = _make_classifier(lambda request: httpx.Response(200, text="<html>oops</html>"))

        with pytest.raises(RemoteError) as exc_info:
            await classifier.classify(10, 50, 50)

        assert exc_info.value.kind == RemoteErrorKind.MALFORMED

    @pytest.mark.parametrize("missing", ["name", "rgb"])
    async def test_missing_required_field(self, missing: str) -> None:
        body = _color_body()
        del body[missing]
        classifier, _ = _make_classifier(lambda request: httpx.Response(200, json=body))

        with pytest.raises(RemoteError, match="Invalid Color API response") as exc_info:
            await classifier.classify(10, 50, 50)

        assert exc_info.value.kind == RemoteErrorKind.MALFORMED

    async def test_unexpected_json_shape(self) -> None:
        classifier, _ = _make_classifier(lambda request: httpx.Response(200, json=["not", "an", "object"]))

        with pytest.raises(RemoteError) as exc_info:
            await classifier.classify(10, 50, 50)

        assert exc_info.value.kind == RemoteErrorKind.MALFORMED

    async def test_connection_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        classifier, limiter = _make_classifier(handler)

        with pytest.raises(RemoteError) as exc_info:
            await classifier.classify(10, 50, 50)

        assert exc_info.value.kind == RemoteErrorKind.CONNECTION
        assert exc_info.value.status_code is None
        assert limiter.active_count == 0
        assert limiter.queue_depth == 0

    async def test_numeric_name_is_malformed(self) -> None:
        body = _color_body()
        body["name"]["value"] = 123
        classifier, _ = _make_classifier(lambda request: httpx.Response(200, json=body))

        with pytest.raises(RemoteError, match="name.value") as exc_info:
            await classifier.classify(5, 50, 50)

        assert exc_info.value.kind == RemoteErrorKind.MALFORMED

    @pytest.mark.parametrize("bad_channel", ["abc", 999, -1, 12.5, True, None])
    async def test_bad_rgb_channel_is_malformed(self, bad_channel: object) -> None:
        body = _color_body()
        body["rgb"]["r"] = bad_channel
        classifier, _ = _make_classifier(lambda request: httpx.Response(200, json=body))

        with pytest.raises(RemoteError, match="rgb.r") as exc_info:
            await classifier.classify(5, 50, 50)

        assert exc_info.value.kind == RemoteErrorKind.MALFORMED

    async def test_non_string_hex_is_malformed(self) -> None:
        body = _color_body()
        body["hex"]["value"] = 0xFF1A1A
        classifier, _ = _make_classifier(lambda request: httpx.Response(200, json=body))

        with pytest.raises(RemoteError, match="hex.value") as exc_info:
            await classifier.classify(5, 50, 50)

        assert exc_info.value.kind == RemoteErrorKind.MALFORMED

    async def test_connection_failure_is_not_logged_as_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        classifier, _ = _make_classifier(handler)

        with caplog.at_level(logging.DEBUG, logger="swatchx.remote.color_api"), pytest.raises(RemoteError):
            await classifier.classify(10, 50, 50)

        records = [r for r in caplog.records if r.name == "swatchx.remote.color_api"]
        assert records
        assert all(r.levelno == logging.DEBUG for r in records)
