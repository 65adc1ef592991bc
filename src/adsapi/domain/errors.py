"""Error taxonomy for Ads API calls.

``DomainError.from_response`` is the error factory used once the retry loop
has finished: it picks the most specific subclass for the final status code.
"""

import json
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Type

from adsapi.domain.models.response import Response

RATE_LIMIT_RESET_HEADERS = ("x-account-rate-limit-reset", "x-rate-limit-reset")


class AdsApiError(Exception):
    """Base class for all adsapi errors."""

    pass


class ConfigurationError(AdsApiError):
    """Invalid configuration or request options, raised before any network activity."""

    pass


class TransportError(AdsApiError):
    """Connection-level failure reported by the transport."""

    pass


class DomainError(AdsApiError):
    """API call finished with an HTTP status >= 400.

    Attributes:
        response: Final response received from the API
        code: HTTP status code
        body: Raw response body
        details: ``errors`` list from a JSON body, if present
    """

    def __init__(self, response: Response, message: Optional[str] = None):
        self.response = response
        self.code = response.status_code
        self.body = response.body
        self.details = _extract_details(response.body)
        super().__init__(message or self._default_message())

    def _default_message(self) -> str:
        status = f"{self.code} {self.response.reason}".strip()
        if self.details:
            return f"{type(self).__name__}: HTTP {status}, details={self.details}"
        return f"{type(self).__name__}: HTTP {status}"

    @classmethod
    def from_response(cls, response: Response) -> "DomainError":
        """Build the error matching the response status code"""
        error_class = ERRORS_BY_STATUS.get(response.status_code, DomainError)
        return error_class(response)


class BadRequest(DomainError):
    pass


class NotAuthorized(DomainError):
    pass


class Forbidden(DomainError):
    pass


class NotFound(DomainError):
    pass


class RateLimitError(DomainError):
    """Rate limit still in effect after the retry loop."""

    def __init__(self, response: Response, message: Optional[str] = None):
        self.reset_at = _int_header(response, *RATE_LIMIT_RESET_HEADERS)
        super().__init__(response, message)


class ServerError(DomainError):
    pass


class ServiceUnavailable(DomainError):
    def __init__(self, response: Response, message: Optional[str] = None):
        self.retry_after = _int_header(response, "retry-after")
        super().__init__(response, message)


ERRORS_BY_STATUS: Mapping[int, Type[DomainError]] = MappingProxyType({
    400: BadRequest,
    401: NotAuthorized,
    403: Forbidden,
    404: NotFound,
    429: RateLimitError,
    500: ServerError,
    503: ServiceUnavailable,
})


def _extract_details(body: str) -> Optional[List[Any]]:
    if not body:
        return None
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if isinstance(payload, dict) and isinstance(payload.get("errors"), list):
        return payload["errors"]
    return None


def _int_header(response: Response, *names: str) -> Optional[int]:
    for name in names:
        value = response.header(name)
        if value is None:
            continue
        try:
            return int(value)
        except ValueError:
            return None
    return None
