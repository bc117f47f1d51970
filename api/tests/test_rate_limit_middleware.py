import pytest
from api.middleware.rate_limit import (
    _PATH_RATE_LIMITS,
    _extract_forwarded_client_ip,
    _is_trusted_proxy_host,
    _resolve_client_ip,
)
from sitekit.config import reset_settings_cache
from starlette.requests import Request


def _make_request(remote: str, xff: str | None = None) -> Request:
    headers: list[tuple[bytes, bytes]] = []
    if xff:
        headers.append((b"x-forwarded-for", xff.encode("utf-8")))
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/v1/contact",
        "headers": headers,
        "client": (remote, 12345),
    }
    return Request(scope)


class _CountingRedis:
    def __init__(self, start: int = 0, fail: bool = False):
        self.counts: dict[str, int] = {}
        self.start = start
        self.fail = fail

    async def incr(self, key):
        if self.fail:
            raise ConnectionError("redis down")
        self.counts[key] = self.counts.get(key, self.start) + 1
        return self.counts[key]

    async def expire(self, key, seconds):
        return True


@pytest.fixture
def limits_on(monkeypatch):
    monkeypatch.setenv("RATE_LIMIT_ENABLED", "true")
    reset_settings_cache()


def test_is_trusted_proxy_host_private_ranges() -> None:
    assert _is_trusted_proxy_host("172.23.0.6")
    assert _is_trusted_proxy_host("127.0.0.1")
    assert not _is_trusted_proxy_host("8.8.8.8")


def test_extract_forwarded_client_ip_prefers_rightmost_non_proxy() -> None:
    forwarded = "198.51.100.10, 203.0.113.9, 172.23.0.6"
    assert _extract_forwarded_client_ip(forwarded) == "203.0.113.9"


def test_extract_forwarded_client_ip_ignores_invalid_entries() -> None:
    forwarded = "garbage, 999.999.999.999, 203.0.113.9"
    assert _extract_forwarded_client_ip(forwarded) == "203.0.113.9"


def test_resolve_client_ip_uses_forwarded_ip_for_trusted_proxy() -> None:
    request = _make_request("172.23.0.6", "198.51.100.10, 203.0.113.9")
    assert _resolve_client_ip(request) == "203.0.113.9"


def test_resolve_client_ip_ignores_forwarded_ip_for_untrusted_remote() -> None:
    request = _make_request("8.8.8.8", "198.51.100.10")
    assert _resolve_client_ip(request) == "8.8.8.8"


def test_path_limits_cover_public_write_endpoints() -> None:
    for path in ("/v1/contact", "/api/ai-generate", "/api/ai-polish", "/api/send-email", "/setup"):
        assert path in _PATH_RATE_LIMITS
    assert _PATH_RATE_LIMITS["/v1/contact"] == 10


async def test_contact_over_limit_returns_429(app, client, limits_on) -> None:
    app.state._rate_limit_redis = _CountingRedis(start=_PATH_RATE_LIMITS["/v1/contact"])
    response = await client.post("/v1/contact", data={"name": "Jo"})
    assert response.status_code == 429
    assert response.json() == {"error": "Rate limit exceeded"}


async def test_reads_are_not_limited(app, client, limits_on) -> None:
    redis = _CountingRedis(start=10_000)
    app.state._rate_limit_redis = redis
    response = await client.get("/v1/menu")
    assert response.status_code == 200
    assert redis.counts == {}


async def test_limiter_fails_open_when_redis_unavailable(app, client, limits_on) -> None:
    app.state._rate_limit_redis = _CountingRedis(fail=True)
    response = await client.post("/v1/contact", data={"name": "Jo"})
    assert response.status_code == 400
    assert "fieldErrors" in response.json()
