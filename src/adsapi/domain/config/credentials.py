"""OAuth credentials model."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class CredentialsConfig(BaseModel):
    """OAuth 1.0a consumer and access token credentials.

    Attributes:
        consumer_key: Application consumer key (None = from ADSAPI_CONSUMER_KEY env)
        consumer_secret: Application consumer secret (None = from ADSAPI_CONSUMER_SECRET env)
        access_token: User access token (None = from ADSAPI_ACCESS_TOKEN env)
        access_token_secret: User access token secret (None = from ADSAPI_ACCESS_TOKEN_SECRET env)
    """

    consumer_key: Optional[str] = None
    consumer_secret: Optional[str] = None
    access_token: Optional[str] = None
    access_token_secret: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    def missing(self) -> list:
        """Names of credentials that are not set"""
        return [name for name, value in self.model_dump().items() if not value]

    def __repr__(self) -> str:
        return f"CredentialsConfig(missing={self.missing()})"

    __str__ = __repr__
