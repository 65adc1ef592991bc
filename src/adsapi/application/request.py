"""Request - a single signed API call with retry handling"""

import logging
from typing import Mapping, Optional, Union

from adsapi.application.client import Client
from adsapi.domain.errors import DomainError
from adsapi.domain.models.request_spec import HttpMethod, RequestSpec
from adsapi.domain.models.response import Response
from adsapi.infrastructure.http.request_builder import RequestBuilder, resolve_domain

logger = logging.getLogger(__name__)


def handle_error(response: Response) -> Response:
    """Pass responses below 400 through, raise the matching DomainError otherwise"""
    if response.status_code < 400:
        return response
    raise DomainError.from_response(response)


class Request:
    """Generic container for API requests

    Example:
        request = Request(client, "GET", "/12/accounts", params={"count": "10"})
        response = request.perform()
    """

    def __init__(
        self,
        client: Client,
        method: Union[str, HttpMethod],
        resource: str,
        *,
        params: Optional[Mapping[str, str]] = None,
        body: Optional[Union[bytes, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        domain: Optional[str] = None,
    ):
        """Create a request

        Args:
            client: Client providing credentials, options and collaborators
            method: HTTP verb
            resource: Resource path, e.g. "/12/accounts"
            params: Query parameters
            body: Request body
            headers: Extra headers
            domain: Forced domain override; also overrides the client's sandbox mode
        """
        self.client = client
        self.method = method
        self.resource = resource
        self.params = params
        self.body = body
        self.headers = headers
        self._domain = domain

    @property
    def domain(self) -> str:
        """Effective domain for this request"""
        return resolve_domain(self._domain or self.client.options.domain, self.client.options.sandbox)

    def build(self) -> RequestSpec:
        """Build the unsigned request

        Raises:
            ConfigurationError: If the method is not supported
        """
        return RequestBuilder(sandbox=self.client.options.sandbox).build(
            self.method,
            self.resource,
            params=self.params,
            body=self.body,
            headers=self.headers,
            domain=self.domain,
        )

    def perform(self) -> Response:
        """Build, sign once, execute with retries and translate errors

        Returns:
            Response with status < 400

        Raises:
            ConfigurationError: If the method or credentials are invalid
            TransportError: If the connection fails
            DomainError: If the final status is >= 400
        """
        request = self.build()
        signed = self.client.signer.sign(request, self.client.credentials, request.domain)
        response = self.client.executor().execute(signed)
        logger.debug(f"{request.method.value} {request.url} -> {response.status_code}")
        return handle_error(response)
