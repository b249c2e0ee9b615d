"""Shared fixtures for Salesforce adapter tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from subsync.adapters.salesforce import SalesforceClient
from subsync.config.salesforce import SalesforceConfig
from tests.helpers.salesforce import make_client_factory

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from tests.helpers.salesforce import ClientBuilder


@pytest.fixture
def salesforce_config() -> SalesforceConfig:
    return SalesforceConfig(
        client_id="client-id",
        client_secret="client-secret",
        username="sync@example.org",
        password="hunter2",
        security_token="TOKEN",
        login_url="https://login.example.com",
        api_version="v59.0",
    )


@pytest.fixture
def make_salesforce_client(salesforce_config: SalesforceConfig) -> ClientBuilder:
    def build(handler: Callable[[httpx.Request], httpx.Response]) -> SalesforceClient:
        return SalesforceClient(config=salesforce_config, client_factory=make_client_factory(handler))

    return build
