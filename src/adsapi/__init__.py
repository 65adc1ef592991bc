"""adsapi - resilient, signed HTTP requests for the Ads API"""

from adsapi.application import Client, Request
from adsapi.domain.config import AppConfig, ClientConfig, CredentialsConfig, RetryPolicy
from adsapi.domain.errors import (
    AdsApiError,
    BadRequest,
    ConfigurationError,
    DomainError,
    Forbidden,
    NotAuthorized,
    NotFound,
    RateLimitError,
    ServerError,
    ServiceUnavailable,
    TransportError,
)
from adsapi.domain.models import HttpMethod, RequestSpec, Response
from adsapi.version import __version__

__all__ = [
    "AdsApiError",
    "AppConfig",
    "BadRequest",
    "Client",
    "ClientConfig",
    "ConfigurationError",
    "CredentialsConfig",
    "DomainError",
    "Forbidden",
    "HttpMethod",
    "NotAuthorized",
    "NotFound",
    "RateLimitError",
    "Request",
    "RequestSpec",
    "Response",
    "RetryPolicy",
    "ServerError",
    "ServiceUnavailable",
    "TransportError",
    "__version__",
]
