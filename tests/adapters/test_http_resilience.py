from __future__ import annotations

import asyncio

import httpx

from subsync.adapters.http_resilience import ResilientClient, build_retry
from subsync.config.http_resilience import RateLimit, ResilienceConfig, RetryPolicy


def test_default_retry_policy_never_retries_patch() -> None:
    policy = RetryPolicy()

    assert "PATCH" not in policy.allowed_methods
    assert {"GET", "POST"} <= policy.allowed_methods
    assert build_retry(policy).total == policy.total


def test_resilient_client_sends_through_limiter() -> None:
    seen: list[tuple[str, str]] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path))
        return httpx.Response(200, json={"ok": True})

    config = ResilienceConfig(name="test", ratelimit=RateLimit(max_calls=5, per_seconds=1.0))

    async def exercise() -> list[int]:
        async with ResilientClient(config) as client:
            client._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            responses = [
                await client.get("https://example.test/a"),
                await client.post("https://example.test/b", json={}),
                await client.patch("https://example.test/c", json={}),
            ]
        return [response.status_code for response in responses]

    assert asyncio.run(exercise()) == [200, 200, 200]
    assert seen == [("GET", "/a"), ("POST", "/b"), ("PATCH", "/c")]
