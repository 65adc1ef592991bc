"""Request/response trace logging"""

import logging
from typing import Mapping, Optional, Union

from adsapi.domain.models.request_spec import RequestSpec
from adsapi.domain.models.response import Response
from adsapi.infrastructure.http.request_builder import ADS_API_DOMAINS

REDACTED_BODY = "**OMITTED**"


def is_ads_api_domain(domain: str) -> bool:
    """True for the production and sandbox domains, False for anything else"""
    return domain in ADS_API_DOMAINS


class TraceLogger:
    """Logs each attempt of an API call

    Bodies are only written for the production and sandbox domains; other
    domains (e.g. upload endpoints) get a redaction marker instead.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("adsapi.trace")

    def log_request(self, request: RequestSpec) -> None:
        params = request.params or ""
        self.logger.info(f"Send: {request.method.value} {request.domain}{request.resource} {params}")
        self._log_headers(request.headers)
        self._log_body(request.body, request.domain)

    def log_response(self, response: Response, domain: str) -> None:
        self.logger.info(f"Status: {response.status_code} {response.reason}")
        self._log_headers(response.headers)
        self._log_body(response.body, domain)

    def _log_headers(self, headers: Mapping[str, str]) -> None:
        for name, value in headers.items():
            self.logger.info(f"Header: {name}: {value}")

    def _log_body(self, body: Optional[Union[bytes, str]], domain: str) -> None:
        if not body:
            return
        if is_ads_api_domain(domain):
            if isinstance(body, bytes):
                body = body.decode("utf-8", errors="replace")
            self.logger.info(f"Body: {body}")
        else:
            self.logger.info(f"Body: {REDACTED_BODY}")
