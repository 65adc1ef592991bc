"""Request signing"""

import logging
from dataclasses import replace
from typing import Protocol

import requests
from requests_oauthlib import OAuth1

from adsapi.domain.config.credentials import CredentialsConfig
from adsapi.domain.errors import ConfigurationError
from adsapi.domain.models.request_spec import RequestSpec

logger = logging.getLogger(__name__)


class Signer(Protocol):
    """Attaches authentication material to a built request."""

    def sign(self, request: RequestSpec, credentials: CredentialsConfig, domain: str) -> RequestSpec: ...


class OAuth1Signer:
    """OAuth 1.0a (HMAC-SHA1) signer

    The signature covers method, URL (including query) and form body at the
    moment of signing.
    """

    def sign(self, request: RequestSpec, credentials: CredentialsConfig, domain: str) -> RequestSpec:
        missing = credentials.missing()
        if missing:
            raise ConfigurationError(
                f"Missing OAuth credentials: {', '.join(missing)}. "
                "Set ADSAPI_* environment variables or provide them in config."
            )

        auth = OAuth1(
            client_key=credentials.consumer_key,
            client_secret=credentials.consumer_secret,
            resource_owner_key=credentials.access_token,
            resource_owner_secret=credentials.access_token_secret,
        )
        prepared = requests.Request(
            method=request.method.value,
            url=request.url,
            headers=request.headers,
            data=request.body,
        ).prepare()
        signed = auth(prepared)

        headers = dict(request.headers)
        headers["Authorization"] = _native(signed.headers["Authorization"])
        # oauthlib may classify the body as form data; keep the content type it signed with
        content_type = signed.headers.get("Content-Type")
        if content_type and not any(name.lower() == "content-type" for name in headers):
            headers["Content-Type"] = _native(content_type)

        logger.debug(f"Signed {request.method.value} request for {domain}")
        return replace(request, headers=headers)


def _native(value) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value
