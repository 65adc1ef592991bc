"""HTTP request pipeline: build, sign, execute"""

from adsapi.infrastructure.http.executor import Executor
from adsapi.infrastructure.http.request_builder import (
    DEFAULT_DOMAIN,
    SANDBOX_DOMAIN,
    RequestBuilder,
    resolve_domain,
)
from adsapi.infrastructure.http.signer import OAuth1Signer, Signer
from adsapi.infrastructure.http.trace import REDACTED_BODY, TraceLogger
from adsapi.infrastructure.http.transport import RequestsTransport, Transport

__all__ = [
    "DEFAULT_DOMAIN",
    "SANDBOX_DOMAIN",
    "Executor",
    "OAuth1Signer",
    "REDACTED_BODY",
    "RequestBuilder",
    "RequestsTransport",
    "Signer",
    "TraceLogger",
    "Transport",
    "resolve_domain",
]
