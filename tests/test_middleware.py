"""
Tests for API key gating, rate limiting, security headers and health.
"""
from core.middleware.security_headers import SECURITY_HEADERS


class TestApiKey:
    """X-API-Key gating when API_KEY is configured."""

    def test_missing_key_rejected_before_persisting(self, make_client, record_count):
        client = make_client(API_KEY="s3cret")

        resp = client.post("/analyze", json={"adSpend": 1000, "revenue": 2500})

        assert resp.status_code == 403
        assert resp.json() == {"error": "Unauthorized: Invalid API Key"}
        assert record_count(client) == 0

    def test_wrong_key_rejected(self, make_client):
        client = make_client(API_KEY="s3cret")
        resp = client.get("/history", headers={"X-API-Key": "nope"})
        assert resp.status_code == 403

    def test_auth_runs_before_validation(self, make_client):
        client = make_client(API_KEY="s3cret")
        resp = client.post("/analyze", json={"adSpend": 0})
        assert resp.status_code == 403

    def test_matching_key_accepted(self, make_client):
        client = make_client(API_KEY="s3cret")
        headers = {"X-API-Key": "s3cret"}

        assert client.post("/analyze", json={"adSpend": 1, "revenue": 2}, headers=headers).status_code == 200
        assert client.get("/history", headers=headers).status_code == 200

    def test_health_is_public(self, make_client):
        client = make_client(API_KEY="s3cret")
        assert client.get("/health").status_code == 200
        assert client.get("/").status_code == 200

    def test_gating_disabled_without_key(self, client):
        assert client.get("/history").status_code == 200

    def test_blank_key_means_disabled(self, make_client):
        client = make_client(API_KEY="   ")
        assert client.get("/history").status_code == 200


class TestRateLimit:

    def test_blocks_after_limit(self, make_client):
        client = make_client(RATE_LIMIT_ENABLED=True, RATE_LIMIT_MAX_REQUESTS=3)

        statuses = [client.get("/history").status_code for _ in range(4)]

        assert statuses == [200, 200, 200, 429]

    def test_blocked_response_shape(self, make_client):
        client = make_client(RATE_LIMIT_ENABLED=True, RATE_LIMIT_MAX_REQUESTS=1)
        client.get("/history")

        resp = client.get("/history")

        assert resp.status_code == 429
        assert "error" in resp.json()
        assert int(resp.headers["Retry-After"]) >= 1
        assert resp.headers["X-RateLimit-Remaining"] == "0"

    def test_limit_headers_on_allowed_response(self, make_client):
        client = make_client(RATE_LIMIT_ENABLED=True, RATE_LIMIT_MAX_REQUESTS=5)
        resp = client.get("/history")
        assert resp.headers["X-RateLimit-Limit"] == "5"
        assert resp.headers["X-RateLimit-Remaining"] == "4"

    def test_disabled(self, client):
        for _ in range(5):
            resp = client.get("/history")
        assert resp.status_code == 200
        assert "X-RateLimit-Limit" not in resp.headers


class TestHeaders:

    def test_security_headers_present(self, client):
        resp = client.get("/history")
        for name, value in SECURITY_HEADERS.items():
            assert resp.headers[name] == value

    def test_security_headers_on_errors(self, make_client):
        client = make_client(API_KEY="s3cret")
        resp = client.get("/history")
        assert resp.status_code == 403
        assert resp.headers["X-Content-Type-Options"] == "nosniff"

    def test_request_id_echoed(self, client):
        resp = client.get("/history", headers={"X-Request-ID": "abc-123"})
        assert resp.headers["X-Request-ID"] == "abc-123"

    def test_request_id_generated(self, client):
        assert client.get("/history").headers["X-Request-ID"]

    def test_cors_preflight(self, client):
        resp = client.options(
            "/analyze",
            headers={
                "Origin": "http://example.com",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "*"


class TestHealth:

    def test_health_ok(self, client):
        client.post("/analyze", json={"adSpend": 1, "revenue": 2})

        body = client.get("/health").json()

        assert body["status"] == "ok"
        assert body["db"] == {"ok": True}
        assert body["analyses"] == 1
        assert "timestamp_utc" in body

    def test_root_banner(self, client):
        assert client.get("/").json() == {"status": "healthy", "service": "MarketingAnalyzer"}


class TestClientIp:
    """Rate limit key is the socket address unless TRUST_PROXY is set."""

    def test_forwarded_header_ignored_by_default(self, make_client):
        client = make_client(RATE_LIMIT_ENABLED=True, RATE_LIMIT_MAX_REQUESTS=2)

        statuses = [
            client.get("/history", headers={"X-Forwarded-For": f"10.0.0.{i}"}).status_code
            for i in range(6)
        ]

        assert statuses == [200, 200, 429, 429, 429, 429]

    def test_forwarded_header_used_behind_trusted_proxy(self, make_client):
        client = make_client(RATE_LIMIT_ENABLED=True, RATE_LIMIT_MAX_REQUESTS=2, TRUST_PROXY=True)

        rotating = [
            client.get("/history", headers={"X-Forwarded-For": f"10.0.0.{i}, 192.168.1.1"}).status_code
            for i in range(4)
        ]
        same = [
            client.get("/history", headers={"X-Forwarded-For": "10.9.9.9"}).status_code
            for _ in range(3)
        ]

        assert rotating == [200, 200, 200, 200]
        assert same == [200, 200, 429]
