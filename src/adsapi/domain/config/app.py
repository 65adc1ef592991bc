"""Main application configuration model."""

from pydantic import BaseModel, ConfigDict, Field

from adsapi.domain.config.client import ClientConfig
from adsapi.domain.config.credentials import CredentialsConfig
from adsapi.domain.config.retry import RetryPolicy


class AppConfig(BaseModel):
    """Main application configuration.

    Root model aggregating all configuration sections. Validation is performed
    at load time to fail fast on configuration errors.

    Attributes:
        credentials: OAuth credentials
        client: Client options (sandbox, trace, timeout, domain)
        retry: Retry and rate-limit policy
    """

    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)
    retry: RetryPolicy = Field(default_factory=RetryPolicy)

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "credentials": {
                    "consumer_key": None,
                    "consumer_secret": None,
                    "access_token": None,
                    "access_token_secret": None,
                },
                "client": {
                    "sandbox": False,
                    "trace": False,
                    "timeout": None,
                    "domain": None,
                },
                "retry": {
                    "retry_max": 0,
                    "retry_delay": 1500,
                    "retry_on_status": [500, 503],
                    "handle_rate_limit": False,
                },
            }
        },
    )
