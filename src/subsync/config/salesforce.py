"""Salesforce configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

DEFAULT_SALESFORCE_LOGIN_URL = "https://login.salesforce.com"
DEFAULT_SALESFORCE_API_VERSION = "v59.0"
SALESFORCE_TIMEOUT_SECONDS = 30.0


def default_salesforce_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="salesforce",
        timeout_seconds=SALESFORCE_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
    )


@dataclass(frozen=True)
class SalesforceConfig:
    """Connected-app credentials for the username-password OAuth flow."""

    client_id: str
    client_secret: str
    username: str
    password: str
    security_token: str = ""
    login_url: str = DEFAULT_SALESFORCE_LOGIN_URL
    api_version: str = DEFAULT_SALESFORCE_API_VERSION
    resilience: ResilienceConfig = field(default_factory=default_salesforce_resilience)

    @property
    def login_password(self) -> str:
        return self.password + self.security_token


def get_salesforce_config(*, resilience: ResilienceConfig | None = None) -> SalesforceConfig:
    values = require_env_vars(("SF_CLIENT_ID", "SF_CLIENT_SECRET", "SF_USERNAME", "SF_PASSWORD"))
    login_url = optional_env_var("SF_LOGIN_URL", DEFAULT_SALESFORCE_LOGIN_URL)
    return SalesforceConfig(
        client_id=values["SF_CLIENT_ID"],
        client_secret=values["SF_CLIENT_SECRET"],
        username=values["SF_USERNAME"],
        password=values["SF_PASSWORD"],
        security_token=optional_env_var("SF_SECURITY_TOKEN", "") or "",
        login_url=(login_url or DEFAULT_SALESFORCE_LOGIN_URL).rstrip("/"),
        api_version=optional_env_var("SF_API_VERSION") or DEFAULT_SALESFORCE_API_VERSION,
        resilience=resilience or default_salesforce_resilience(),
    )
