"""Resilient Geocoder — response parsing, retry policy and error mapping.

Invariants:
    - OK → Coordinates from results[0].geometry.location
    - ZERO_RESULTS → GeocodeError(no_match, 422), single request
    - 5xx / OVER_QUERY_LIMIT / connection errors retried up to max_retries
    - REQUEST_DENIED → GeocodeError(client_error), no retry

Design Decisions:
    - httpx.MockTransport instead of network; base_delay_ms=0 keeps retries instant
"""

import httpx
import pytest

from lessonmap.core.domain_types import Coordinates
from lessonmap.core.errors import GeocodeError
from lessonmap.infrastructure.geocoding import GoogleGeocoder


def _ok(lat=40.7484, lng=-73.9857):
    return {
        "status": "OK",
        "results": [{"geometry": {"location": {"lat": lat, "lng": lng}}}],
    }


def _geocoder(handler, max_retries=2):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GoogleGeocoder(
        "test-key", client, max_retries=max_retries, base_delay_ms=0,
    )


async def test_resolves_first_result():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=_ok())

    coords = await _geocoder(handler).resolve("20 W 34th St")

    assert coords == Coordinates(lat=40.7484, lng=-73.9857)
    assert requests[0].url.params["address"] == "20 W 34th St"
    assert requests[0].url.params["key"] == "test-key"


async def test_zero_results_is_no_match_without_retry():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"status": "ZERO_RESULTS", "results": []})

    with pytest.raises(GeocodeError) as exc_info:
        await _geocoder(handler).resolve("nowhere at all")

    assert exc_info.value.reason == "no_match"
    assert exc_info.value.http_status == 422
    assert len(calls) == 1


async def test_server_error_then_success_is_retried():
    responses = iter([httpx.Response(503), httpx.Response(200, json=_ok(1, 2))])

    coords = await _geocoder(lambda request: next(responses)).resolve("1 Main St")

    assert coords == Coordinates(lat=1.0, lng=2.0)


async def test_over_query_limit_is_retried():
    responses = iter([
        httpx.Response(200, json={"status": "OVER_QUERY_LIMIT"}),
        httpx.Response(200, json=_ok(3, 4)),
    ])

    coords = await _geocoder(lambda request: next(responses)).resolve("1 Main St")

    assert coords == Coordinates(lat=3.0, lng=4.0)


async def test_connection_errors_exhaust_retries():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(GeocodeError) as exc_info:
        await _geocoder(handler, max_retries=2).resolve("1 Main St")

    assert exc_info.value.reason == "unavailable"
    assert exc_info.value.http_status == 503
    assert len(calls) == 3


async def test_request_denied_fails_immediately():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(
            200, json={"status": "REQUEST_DENIED", "error_message": "bad key"},
        )

    with pytest.raises(GeocodeError) as exc_info:
        await _geocoder(handler).resolve("1 Main St")

    assert exc_info.value.reason == "client_error"
    assert "bad key" not in exc_info.value.message
    assert len(calls) == 1
