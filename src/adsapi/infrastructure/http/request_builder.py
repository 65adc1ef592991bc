"""Builds RequestSpec objects for Ads API calls"""

import logging
import platform
import sys
from typing import Mapping, Optional, Union

from adsapi.domain.errors import ConfigurationError
from adsapi.domain.models.request_spec import HttpMethod, RequestSpec
from adsapi.version import __version__

logger = logging.getLogger(__name__)

DEFAULT_DOMAIN = "https://ads-api.twitter.com"
SANDBOX_DOMAIN = "https://ads-api-sandbox.twitter.com"
ADS_API_DOMAINS = frozenset({DEFAULT_DOMAIN, SANDBOX_DOMAIN})


def resolve_domain(domain: Optional[str] = None, sandbox: bool = False) -> str:
    """Resolve the effective domain: explicit override > sandbox flag > production"""
    if domain:
        return domain
    return SANDBOX_DOMAIN if sandbox else DEFAULT_DOMAIN


def resolve_method(method: Union[str, HttpMethod]) -> HttpMethod:
    """Map a verb name onto HttpMethod

    Raises:
        ConfigurationError: If the verb is not supported
    """
    if isinstance(method, HttpMethod):
        return method
    if isinstance(method, str):
        try:
            return HttpMethod(method.upper())
        except ValueError:
            pass
    supported = ", ".join(m.value for m in HttpMethod)
    raise ConfigurationError(f"Unsupported HTTP method: {method!r}. Supported methods: {supported}")


def user_agent() -> str:
    """Identifying user-agent string"""
    return (
        f"adsapi version: {__version__} "
        f"platform: {platform.python_implementation()} {platform.python_version()} ({sys.platform})"
    )


class RequestBuilder:
    """Assembles method, URL, headers and body into a RequestSpec"""

    def __init__(self, sandbox: bool = False):
        self.sandbox = sandbox

    def build(
        self,
        method: Union[str, HttpMethod],
        resource: str,
        *,
        params: Optional[Mapping[str, str]] = None,
        body: Optional[Union[bytes, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        domain: Optional[str] = None,
    ) -> RequestSpec:
        """Build a request for the given resource

        Args:
            method: HTTP verb (GET, POST, PUT, DELETE; case-insensitive)
            resource: Resource path, e.g. "/12/accounts"
            params: Query parameters, appended to the URL when non-empty
            body: Request body
            headers: Extra request headers
            domain: Forced domain override (also overrides sandbox mode)

        Returns:
            RequestSpec ready for signing

        Raises:
            ConfigurationError: If the method is not supported
        """
        http_method = resolve_method(method)
        request_headers = dict(headers or {})
        request_headers["user-agent"] = user_agent()

        request = RequestSpec(
            method=http_method,
            domain=resolve_domain(domain, self.sandbox),
            resource=resource,
            params=dict(params or {}),
            headers=request_headers,
            body=body,
        )
        logger.debug(f"Built request {request.method.value} {request.url}")
        return request
