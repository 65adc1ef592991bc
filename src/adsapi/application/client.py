"""Ads API client: credentials, options and shared collaborators"""

import logging
from typing import Callable, Mapping, Optional, Union

from adsapi.domain.config import AppConfig, ClientConfig, CredentialsConfig, RetryPolicy
from adsapi.domain.models.request_spec import HttpMethod
from adsapi.domain.models.response import Response
from adsapi.infrastructure.http.executor import Executor
from adsapi.infrastructure.http.signer import OAuth1Signer, Signer
from adsapi.infrastructure.http.trace import TraceLogger
from adsapi.infrastructure.http.transport import RequestsTransport, Transport

logger = logging.getLogger(__name__)


class Client:
    """Holds everything needed to perform API calls

    Configuration is read-only, so a single client can be shared by calls
    running on different threads. Thread safety of a custom transport is the
    transport's concern.
    """

    def __init__(
        self,
        consumer_key: Optional[str] = None,
        consumer_secret: Optional[str] = None,
        access_token: Optional[str] = None,
        access_token_secret: Optional[str] = None,
        *,
        credentials: Optional[CredentialsConfig] = None,
        options: Optional[ClientConfig] = None,
        retry: Optional[RetryPolicy] = None,
        transport: Optional[Transport] = None,
        signer: Optional[Signer] = None,
        trace_logger: Optional[logging.Logger] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        """Initialize client

        Args:
            consumer_key: OAuth consumer key
            consumer_secret: OAuth consumer secret
            access_token: OAuth access token
            access_token_secret: OAuth access token secret
            credentials: Credentials model (takes precedence over the four keys above)
            options: Client options (sandbox, trace, timeout, domain)
            retry: Retry policy
            transport: Transport (default: RequestsTransport with options.timeout)
            signer: Request signer (default: OAuth1Signer)
            trace_logger: Logger used when tracing is enabled (default: "adsapi.trace")
            sleep: Blocking sleep used for backoff (default: tenacity's sleep)
        """
        self.credentials = credentials or CredentialsConfig(
            consumer_key=consumer_key,
            consumer_secret=consumer_secret,
            access_token=access_token,
            access_token_secret=access_token_secret,
        )
        self.options = options or ClientConfig()
        self.retry = retry or RetryPolicy()
        self.transport = transport or RequestsTransport(timeout=self.options.timeout)
        self.signer = signer or OAuth1Signer()
        self.trace_logger = trace_logger
        self.sleep = sleep

    @classmethod
    def from_config(cls, config: AppConfig, **kwargs) -> "Client":
        """Create client from validated application config"""
        return cls(credentials=config.credentials, options=config.client, retry=config.retry, **kwargs)

    def executor(self) -> Executor:
        """Executor configured with this client's policy and tracing"""
        trace = TraceLogger(self.trace_logger) if self.options.trace else None
        return Executor(self.transport, self.retry, trace=trace, sleep=self.sleep)

    def request(
        self,
        method: Union[str, HttpMethod],
        resource: str,
        *,
        params: Optional[Mapping[str, str]] = None,
        body: Optional[Union[bytes, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        domain: Optional[str] = None,
    ) -> Response:
        """Perform one API call, see Request.perform"""
        from adsapi.application.request import Request

        return Request(
            self, method, resource, params=params, body=body, headers=headers, domain=domain
        ).perform()
