"""Tests for the retry/backoff executor"""

from __future__ import annotations

import logging

import pytest

from adsapi.domain.config.retry import RetryPolicy
from adsapi.domain.errors import TransportError
from adsapi.domain.models.request_spec import HttpMethod, RequestSpec
from adsapi.infrastructure.http.executor import Executor

from conftest import FakeTransport, make_response

NOW = 1_700_000_000


def _request() -> RequestSpec:
    return RequestSpec(
        method=HttpMethod.GET,
        domain="https://ads-api.twitter.com",
        resource="/12/accounts",
        headers={"Authorization": "OAuth signed"},
    )


def _executor(transport, sleep, **policy) -> Executor:
    return Executor(transport, RetryPolicy(**policy), sleep=sleep, clock=lambda: NOW)


class TestSingleAttempt:
    """Tests with retry_max = 0"""

    @pytest.mark.parametrize("status", [200, 400, 429, 500, 503])
    def test_exactly_one_attempt(self, sleep, status):
        """Test that a single attempt is made regardless of status"""
        transport = FakeTransport(make_response(status), make_response(200))

        response = _executor(transport, sleep).execute(_request())

        assert response.status_code == status
        assert transport.calls == 1
        assert sleep.calls == []


class TestStatusRetries:
    """Tests for status-driven retries"""

    def test_retries_until_success(self, sleep):
        """500, 500, 200 -> three attempts and two sleeps"""
        transport = FakeTransport(make_response(500), make_response(500), make_response(200))

        response = _executor(transport, sleep, retry_max=2, retry_on_status=[500, 503]).execute(_request())

        assert response.status_code == 200
        assert transport.calls == 3
        assert sleep.calls == [1, 1]

    def test_exhausted_retries_return_last_response(self, sleep):
        """Test that N retries give N+1 attempts"""
        transport = FakeTransport(make_response(503, body="down"))

        response = _executor(transport, sleep, retry_max=3, retry_delay=2500).execute(_request())

        assert response.status_code == 503
        assert response.body == "down"
        assert transport.calls == 4
        assert sleep.calls == [2, 2, 2, 2]

    def test_delay_after_last_retryable_failure(self, sleep):
        """Test that exhausting retries still waits once per retryable failure"""
        transport = FakeTransport(make_response(500))

        response = _executor(transport, sleep, retry_max=2, retry_delay=2000).execute(_request())

        assert response.status_code == 500
        assert transport.calls == 3
        assert sleep.calls == [2, 2, 2]

    def test_non_retryable_status_stops_immediately(self, sleep):
        """Test that a status outside retry_on_status is returned as-is"""
        transport = FakeTransport(make_response(404), make_response(200))

        response = _executor(transport, sleep, retry_max=5).execute(_request())

        assert response.status_code == 404
        assert transport.calls == 1
        assert sleep.calls == []

    def test_custom_retry_on_status(self, sleep):
        """Test that retry_on_status is honoured"""
        transport = FakeTransport(make_response(502), make_response(201))

        response = _executor(transport, sleep, retry_max=1, retry_on_status={502}).execute(_request())

        assert response.status_code == 201
        assert transport.calls == 2

    def test_delay_truncates_to_whole_seconds(self, sleep):
        """Test that sub-second delays become zero-second sleeps"""
        transport = FakeTransport(make_response(500), make_response(200))

        _executor(transport, sleep, retry_max=1, retry_delay=999).execute(_request())

        assert sleep.calls == [0]

    def test_success_terminates_loop(self, sleep):
        """Test that any 2xx ends the loop without further attempts"""
        transport = FakeTransport(make_response(204), make_response(500))

        response = _executor(transport, sleep, retry_max=3, handle_rate_limit=True).execute(_request())

        assert response.status_code == 204
        assert transport.calls == 1

    def test_same_request_sent_on_every_attempt(self, sleep):
        """Test that the signed request is reused unmodified"""
        transport = FakeTransport(make_response(500), make_response(500), make_response(200))
        request = _request()

        _executor(transport, sleep, retry_max=2).execute(request)

        assert all(sent is request for sent in transport.requests)


class TestRateLimit:
    """Tests for HTTP 429 handling"""

    def test_waits_until_reset_plus_grace(self, sleep):
        """Test wait = reset - now + 5 without consuming retry budget"""
        transport = FakeTransport(
            make_response(429, headers={"x-account-rate-limit-reset": str(NOW + 30)}),
            make_response(200),
        )

        response = _executor(transport, sleep, handle_rate_limit=True).execute(_request())

        assert response.status_code == 200
        assert transport.calls == 2
        assert sleep.calls == [35]

    def test_account_header_preferred(self, sleep):
        """Test that x-account-rate-limit-reset wins over x-rate-limit-reset"""
        transport = FakeTransport(
            make_response(
                429,
                headers={
                    "x-rate-limit-reset": str(NOW + 100),
                    "x-account-rate-limit-reset": str(NOW + 10),
                },
            ),
            make_response(200),
        )

        _executor(transport, sleep, handle_rate_limit=True).execute(_request())

        assert sleep.calls == [15]

    def test_falls_back_to_rate_limit_reset_header(self, sleep):
        """Test that x-rate-limit-reset is used when the account header is absent"""
        transport = FakeTransport(
            make_response(429, headers={"X-Rate-Limit-Reset": str(NOW + 20)}),
            make_response(200),
        )

        _executor(transport, sleep, handle_rate_limit=True).execute(_request())

        assert sleep.calls == [25]

    def test_second_rate_limit_is_not_recomputed(self, sleep, caplog):
        """Test that a recurring 429 follows the normal path"""
        transport = FakeTransport(
            make_response(429, headers={"x-rate-limit-reset": str(NOW + 30)}),
            make_response(429, headers={"x-rate-limit-reset": str(NOW + 600)}),
            make_response(200),
        )

        with caplog.at_level(logging.WARNING):
            response = _executor(transport, sleep, handle_rate_limit=True).execute(_request())

        # retry_max = 0: the second 429 ends the call
        assert response.status_code == 429
        assert transport.calls == 2
        assert sleep.calls == [35]
        assert sum("Rate Limit" in r.getMessage() for r in caplog.records) == 1

    def test_recurring_rate_limit_uses_retry_budget(self, sleep):
        """Test a recurring 429 that is listed in retry_on_status"""
        transport = FakeTransport(
            make_response(429, headers={"x-rate-limit-reset": str(NOW + 30)}),
        )

        response = _executor(
            transport, sleep, handle_rate_limit=True, retry_max=1, retry_on_status=[429]
        ).execute(_request())

        assert response.status_code == 429
        assert transport.calls == 3
        assert sleep.calls == [35, 1, 1]

    def test_rate_limit_does_not_consume_retry_budget(self, sleep):
        """Test that retry_max retries remain after the rate-limit wait"""
        transport = FakeTransport(
            make_response(429, headers={"x-rate-limit-reset": str(NOW)}),
            make_response(500),
            make_response(500),
            make_response(200),
        )

        response = _executor(transport, sleep, handle_rate_limit=True, retry_max=2).execute(_request())

        assert response.status_code == 200
        assert transport.calls == 4
        assert sleep.calls == [5, 1, 1]

    def test_rate_limit_disabled_returns_429(self, sleep):
        """Test that 429 is not waited on when handling is disabled"""
        transport = FakeTransport(
            make_response(429, headers={"x-rate-limit-reset": str(NOW + 30)}),
            make_response(200),
        )

        response = _executor(transport, sleep).execute(_request())

        assert response.status_code == 429
        assert transport.calls == 1
        assert sleep.calls == []

    def test_reset_in_the_past_is_clamped(self, sleep):
        """Test that a negative wait becomes the grace period only"""
        transport = FakeTransport(
            make_response(429, headers={"x-rate-limit-reset": str(NOW - 100)}),
            make_response(200),
        )

        _executor(transport, sleep, handle_rate_limit=True).execute(_request())

        assert sleep.calls == [5]

    def test_missing_reset_header(self, sleep):
        """Test that a 429 without reset headers waits the grace period"""
        transport = FakeTransport(make_response(429), make_response(200))

        response = _executor(transport, sleep, handle_rate_limit=True).execute(_request())

        assert response.status_code == 200
        assert sleep.calls == [5]

    @pytest.mark.parametrize("reset", ["inf", "1e400", "-inf", "soon"])
    def test_unparseable_reset_header(self, sleep, reset):
        """Test that an unusable reset header waits the grace period only"""
        transport = FakeTransport(
            make_response(429, headers={"x-rate-limit-reset": reset}),
            make_response(200),
        )

        response = _executor(transport, sleep, handle_rate_limit=True).execute(_request())

        assert response.status_code == 200
        assert transport.calls == 2
        assert sleep.calls == [5]

    def test_rate_limit_warning_logged(self, sleep, caplog):
        """Test that the rate-limit wait is logged as a warning"""
        transport = FakeTransport(
            make_response(429, headers={"x-rate-limit-reset": str(NOW + 42)}),
            make_response(200),
        )

        with caplog.at_level(logging.WARNING, logger="adsapi.infrastructure.http.executor"):
            _executor(transport, sleep, handle_rate_limit=True).execute(_request())

        assert "Request reached Rate Limit: resume in 42 seconds" in caplog.text


class TestTransportFailures:
    """Tests for connection-level failures"""

    def test_transport_error_is_not_retried(self, sleep):
        """Test that transport errors propagate immediately"""
        calls = {"n": 0}

        class FailingTransport:
            def execute(self, request):
                calls["n"] += 1
                raise TransportError("connection refused")

        executor = Executor(FailingTransport(), RetryPolicy(retry_max=3), sleep=sleep)

        with pytest.raises(TransportError, match="connection refused"):
            executor.execute(_request())
        assert calls["n"] == 1
        assert sleep.calls == []


class TestTrace:
    """Tests for per-attempt tracing"""

    def test_trace_called_for_every_attempt(self, sleep):
        """Test that each attempt logs request and response"""

        class RecordingTrace:
            def __init__(self):
                self.events = []

            def log_request(self, request):
                self.events.append(("request", request.method))

            def log_response(self, response, domain):
                self.events.append(("response", response.status_code, domain))

        trace = RecordingTrace()
        transport = FakeTransport(make_response(500), make_response(200))
        executor = Executor(transport, RetryPolicy(retry_max=1), trace=trace, sleep=sleep)

        executor.execute(_request())

        assert trace.events == [
            ("request", HttpMethod.GET),
            ("response", 500, "https://ads-api.twitter.com"),
            ("request", HttpMethod.GET),
            ("response", 200, "https://ads-api.twitter.com"),
        ]
