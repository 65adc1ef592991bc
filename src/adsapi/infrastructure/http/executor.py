"""Retry/backoff executor for signed requests.

The loop is driven by tenacity, with the decision for each attempt made from
per-call state:

* 2xx stops immediately;
* HTTP 429 with rate-limit handling enabled waits until the reset time plus a
  grace period, once per call, without consuming the retry budget;
* otherwise, when retries are configured, statuses in ``retry_on_status`` are
  followed by a fixed delay (including the last one) and anything else stops;
* with ``retry_max == 0`` exactly one status-driven attempt is made.

The last response is returned whatever its status; error translation is the
caller's job.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from tenacity import RetryCallState, Retrying, nap, retry_if_result

from adsapi.domain.config.retry import RetryPolicy
from adsapi.domain.errors import RATE_LIMIT_RESET_HEADERS
from adsapi.domain.models.request_spec import RequestSpec
from adsapi.domain.models.response import Response
from adsapi.infrastructure.http.trace import TraceLogger
from adsapi.infrastructure.http.transport import Transport

logger = logging.getLogger(__name__)

RATE_LIMIT_STATUS = 429
RATE_LIMIT_GRACE_SECONDS = 5


@dataclass
class _CallState:
    """Mutable state of one execute() call"""

    retry_count: int = 0
    retry_after: Optional[int] = None  # cached rate-limit wait, computed once per call
    next_wait: float = 0


class Executor:
    """Runs a signed request through the transport with retry and rate-limit handling"""

    def __init__(
        self,
        transport: Transport,
        policy: Optional[RetryPolicy] = None,
        trace: Optional[TraceLogger] = None,
        sleep: Optional[Callable[[float], None]] = None,
        clock: Optional[Callable[[], float]] = None,
        log: Optional[logging.Logger] = None,
    ):
        """Initialize executor

        Args:
            transport: Transport used for every attempt
            policy: Retry policy (default: single attempt, no rate-limit handling)
            trace: Optional trace logger, called for every attempt
            sleep: Blocking sleep function (default: tenacity's sleep)
            clock: Returns current epoch seconds (default: time.time)
            log: Logger for rate-limit and retry warnings
        """
        self.transport = transport
        self.policy = policy or RetryPolicy()
        self.trace = trace
        self._sleep = sleep or nap.sleep
        self._clock = clock or time.time
        self.log = log or logger

    def execute(self, request: RequestSpec) -> Response:
        """Execute the request until it succeeds, stops, or exhausts retries

        Args:
            request: Signed request, sent unchanged on every attempt

        Returns:
            Last response received

        Raises:
            TransportError: If the transport fails at the connection level
        """
        state = _CallState()

        retrying = Retrying(
            retry=retry_if_result(lambda response: self._should_retry(state, response)),
            stop=lambda retry_state: state.retry_count > self.policy.retry_max,
            wait=lambda retry_state: state.next_wait,
            sleep=self._sleep,
            before_sleep=self._before_sleep,
            retry_error_callback=lambda retry_state: retry_state.outcome.result(),
        )
        return retrying(self._attempt, request)

    def _attempt(self, request: RequestSpec) -> Response:
        if self.trace:
            self.trace.log_request(request)
        response = self.transport.execute(request)
        if self.trace:
            self.trace.log_response(response, request.domain)
        return response

    def _should_retry(self, state: _CallState, response: Response) -> bool:
        status_code = response.status_code
        if response.is_success:
            return False

        if (
            self.policy.handle_rate_limit
            and state.retry_after is None
            and status_code == RATE_LIMIT_STATUS
        ):
            state.retry_after = self._rate_limit_wait(response)
            self.log.warning(f"Request reached Rate Limit: resume in {state.retry_after} seconds")
            state.next_wait = state.retry_after + RATE_LIMIT_GRACE_SECONDS
            return True

        if self.policy.retry_max > 0:
            if status_code not in self.policy.retry_on_status:
                return False
            state.retry_count += 1
            state.next_wait = self.policy.delay_seconds
            if state.retry_count > self.policy.retry_max:
                # the delay also applies after the last retryable failure, before the loop stops
                self.log.warning(
                    f"Request failed with status {status_code}, "
                    f"retries exhausted after {self.policy.retry_max}"
                )
                self._sleep(state.next_wait)
                return True
            self.log.warning(
                f"Request failed with status {status_code} "
                f"(retry {state.retry_count}/{self.policy.retry_max}), "
                f"retrying in {state.next_wait}s"
            )
            return True

        return False

    def _rate_limit_wait(self, response: Response) -> int:
        """Seconds until the rate-limit window resets, never negative"""
        reset_at = 0
        for name in RATE_LIMIT_RESET_HEADERS:
            value = response.header(name)
            if value is None:
                continue
            try:
                reset_at = int(float(value))
            except (ValueError, OverflowError):
                self.log.warning(f"Invalid {name} header: {value!r}")
            break
        return max(0, reset_at - int(self._clock()))

    def _before_sleep(self, retry_state: RetryCallState) -> None:
        self.log.debug(
            f"Attempt {retry_state.attempt_number} done, sleeping {retry_state.next_action.sleep}s"
        )
