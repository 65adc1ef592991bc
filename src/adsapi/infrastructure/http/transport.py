"""HTTP transport (requests)"""

import logging
from typing import Optional, Protocol

import requests

from adsapi.domain.errors import TransportError
from adsapi.domain.models.request_spec import RequestSpec
from adsapi.domain.models.response import Response

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Sends one request and returns the raw response."""

    def execute(self, request: RequestSpec) -> Response: ...


class RequestsTransport:
    """Transport built on the requests library

    Every attempt is a standalone request; connection errors are raised as
    TransportError and are never retried here.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def execute(self, request: RequestSpec) -> Response:
        logger.debug(f"HTTP {request.method.value} {request.url}")
        try:
            resp = requests.request(
                request.method.value,
                request.url,
                headers=request.headers,
                data=request.body,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{request.method.value} {request.url} failed: {e}") from e

        return Response(
            status_code=resp.status_code,
            headers=dict(resp.headers),
            body=resp.text,
            reason=resp.reason or "",
        )
