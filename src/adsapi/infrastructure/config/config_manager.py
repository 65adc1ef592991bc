"""Configuration manager for loading and validating .adsapi.yml"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from adsapi.domain.config import AppConfig, ClientConfig, CredentialsConfig, RetryPolicy
from adsapi.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".adsapi.yml"

CREDENTIAL_ENV_VARS = {
    "consumer_key": "ADSAPI_CONSUMER_KEY",
    "consumer_secret": "ADSAPI_CONSUMER_SECRET",
    "access_token": "ADSAPI_ACCESS_TOKEN",
    "access_token_secret": "ADSAPI_ACCESS_TOKEN_SECRET",
}

CLIENT_FLAG_ENV_VARS = {
    "sandbox": "ADSAPI_SANDBOX",
    "trace": "ADSAPI_TRACE",
}


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class ConfigManager:
    """Manages configuration from .adsapi.yml and environment variables

    Configuration priority:
    1. Default values
    2. .adsapi.yml file (searched upwards from the current directory)
    3. Environment variables (ADSAPI_*)
    4. CLI arguments (handled by CLI layer)
    """

    DEFAULT_CONFIG = {
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

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize config manager

        Args:
            config_path: Path to .adsapi.yml (searches from current dir if None)

        Raises:
            ConfigurationError: If configuration validation fails
        """
        if isinstance(config_path, str):
            config_path = Path(config_path)
        self.config_path = config_path or self._find_config_file()
        try:
            self.config: AppConfig = self._load_config()
        except ValidationError as e:
            errors = []
            for error in e.errors():
                field = ".".join(str(x) for x in error["loc"])
                errors.append(f"  - {field}: {error['msg']}")
            raise ConfigurationError(
                "Configuration validation failed:\n" + "\n".join(errors)
            ) from e

    def _find_config_file(self) -> Optional[Path]:
        """Find .adsapi.yml starting from current directory

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            config_file = parent / CONFIG_FILE_NAME
            if config_file.exists():
                logger.info(f"Found config file: {config_file}")
                return config_file
        logger.debug(f"No {CONFIG_FILE_NAME} found, using defaults")
        return None

    def _load_config(self) -> AppConfig:
        """Load configuration from file and validate with Pydantic

        Raises:
            ValidationError: If configuration is invalid
        """
        config_dict = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_path and self.config_path.exists():
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    file_config = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigurationError(f"Failed to load config from {self.config_path}: {e}") from e
            if not isinstance(file_config, dict):
                raise ConfigurationError(f"{self.config_path} must contain a mapping")
            config_dict = self._merge_config(config_dict, file_config)
            logger.info(f"Loaded configuration from {self.config_path}")

        config_dict = self._apply_env_overrides(config_dict)
        return AppConfig(**config_dict)

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge configuration dictionaries"""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value
        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply ADSAPI_* environment variable overrides"""
        # an empty section in the file loads as None
        config["credentials"] = config.get("credentials") or {}
        config["client"] = config.get("client") or {}

        for key, env_var in CREDENTIAL_ENV_VARS.items():
            if os.getenv(env_var):
                config["credentials"][key] = os.getenv(env_var)

        for key, env_var in CLIENT_FLAG_ENV_VARS.items():
            if os.getenv(env_var):
                config["client"][key] = _env_flag(os.getenv(env_var))

        return config

    def get_credentials(self) -> CredentialsConfig:
        """Get OAuth credentials"""
        return self.config.credentials

    def get_client_config(self) -> ClientConfig:
        """Get client options"""
        return self.config.client

    def get_retry_policy(self) -> RetryPolicy:
        """Get retry policy"""
        return self.config.retry

