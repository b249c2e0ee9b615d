"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .salesforce import SalesforceConfig, default_salesforce_resilience, get_salesforce_config
from .storage import StorageConfig, get_storage_config

__all__ = [
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SalesforceConfig",
    "StorageConfig",
    "configure_logging",
    "default_salesforce_resilience",
    "get_salesforce_config",
    "get_storage_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
