import pytest

from common.http_timing import TimingResult, measure_rpc_request
from metrics.ethereum import BlockNumberRequest

PAYLOAD = BlockNumberRequest().build()

# Generous bound for loopback connection setup and scheduling jitter
OVERHEAD_BOUND_MS = 1000


@pytest.mark.asyncio
async def test_measures_at_least_server_delay(rpc_server):
    url = await rpc_server(delay=0.05)

    result = await measure_rpc_request(url, PAYLOAD)

    assert result.success
    assert result.status == 200
    assert not result.is_http_error
    # 1 ms allowance for timer resolution differences
    assert 49 <= result.duration_ms < 50 + OVERHEAD_BOUND_MS
    assert 0 <= result.connection_ms <= result.duration_ms


@pytest.mark.asyncio
async def test_transport_error_yields_no_sample(unreachable_url):
    result = await measure_rpc_request(unreachable_url, PAYLOAD)

    assert not result.success
    assert result.duration_ms is None
    assert result.status is None
    assert result.error


@pytest.mark.asyncio
async def test_non_2xx_still_yields_sample(rpc_server):
    url = await rpc_server(status=503)

    result = await measure_rpc_request(url, PAYLOAD)

    assert result.success
    assert result.duration_ms is not None
    assert result.status == 503
    assert result.is_http_error


@pytest.mark.asyncio
@pytest.mark.parametrize("url", [None, ""])
async def test_missing_url_fails_without_request(url):
    result = await measure_rpc_request(url, PAYLOAD)

    assert result == TimingResult.failed("Endpoint URL is not configured")


@pytest.mark.asyncio
async def test_timeout_is_reported_as_failure(rpc_server):
    url = await rpc_server(delay=0.5)

    result = await measure_rpc_request(url, PAYLOAD, timeout=0.05)

    assert not result.success
    assert "Timeout" in result.error


def test_is_http_error_only_for_completed_requests():
    assert not TimingResult.failed("boom").is_http_error
    assert TimingResult.ok(1.0, 404).is_http_error
    assert not TimingResult.ok(1.0, 204).is_http_error
