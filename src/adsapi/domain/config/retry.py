"""Retry policy model."""

from typing import FrozenSet

from pydantic import BaseModel, ConfigDict, Field


class RetryPolicy(BaseModel):
    """Retry and rate-limit handling for a single API call.

    Read-only once built, so one policy can be shared by concurrent calls.

    Attributes:
        retry_max: Number of status-driven retries (0 = single attempt)
        retry_delay: Delay between retries in milliseconds (truncated to whole seconds)
        retry_on_status: HTTP statuses that trigger a retry
        handle_rate_limit: Wait for the rate-limit reset on HTTP 429
    """

    retry_max: int = Field(0, ge=0)
    retry_delay: int = Field(1500, ge=0)
    retry_on_status: FrozenSet[int] = frozenset({500, 503})
    handle_rate_limit: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def delay_seconds(self) -> int:
        """Whole seconds to wait between status-driven retries"""
        return self.retry_delay // 1000
