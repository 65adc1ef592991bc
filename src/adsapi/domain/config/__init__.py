"""Configuration models with Pydantic validation."""

from adsapi.domain.config.app import AppConfig
from adsapi.domain.config.client import ClientConfig
from adsapi.domain.config.credentials import CredentialsConfig
from adsapi.domain.config.retry import RetryPolicy

__all__ = [
    "AppConfig",
    "ClientConfig",
    "CredentialsConfig",
    "RetryPolicy",
]
