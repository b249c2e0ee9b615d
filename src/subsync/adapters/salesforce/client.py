"""Async HTTP client for the Salesforce REST API."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from pydantic import TypeAdapter, ValidationError

from subsync.adapters.http_resilience import ResilientClient

from .schema import ApiError, OAuthErrorResponse, QueryResponse, SaveResult, TokenResponse

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from subsync.config.http_resilience import ResilienceConfig
    from subsync.config.salesforce import SalesforceConfig

    from .schema import ProgramRolePayload

log = getLogger(__name__)

COMPOSITE_BATCH_SIZE: Final[int] = 200

PROGRAM_ROLES_QUERY: Final[str] = " ".join(
    """
    SELECT
      Id,
      Name,
      Account__c,
      Contact__c,
      Program_Role_Location__c,
      Program_Role_Type__c,
      Subscription__c,
      Installment_Frequency__c,
      Subscription_Cost__c,
      Active__c,
      Subscription_Start_Date__c,
      Uscreen_Member_ID__c,
      Uscreen_Subscription_Status__c,
      Uscreen_Last_Payment_Date__c,
      Contact__r.Email,
      Contact__r.Name
    FROM Program_Roles__c
    WHERE Uscreen_Member_ID__c != null
    ORDER BY CreatedDate DESC
    """.split()
)

_api_errors = TypeAdapter(list[ApiError])
_save_results = TypeAdapter(list[SaveResult])


class SalesforceAPIError(RuntimeError):
    """Raised when Salesforce rejects a request with an application-level error."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


@dataclass(frozen=True, slots=True)
class SalesforceSession:
    access_token: str
    instance_url: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}", "Accept": "application/json"}


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class SalesforceClient:
    """Username-password login, SOQL paging and composite updates."""

    config: SalesforceConfig
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    def open(self) -> ResilientClient:
        return self.client_factory(self.config.resilience)

    async def login(self, client: ResilientClient) -> SalesforceSession:
        response = await client.post(
            f"{self.config.login_url}/services/oauth2/token",
            data={
                "grant_type": "password",
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
                "username": self.config.username,
                "password": self.config.login_password,
            },
        )
        if response.is_error:
            _raise_oauth_error(response)
        token = TokenResponse.model_validate(response.json())
        log.info("Authenticated with Salesforce at %s", token.instance_url)
        return SalesforceSession(access_token=token.access_token, instance_url=token.instance_url)

    async def query_all(
        self,
        client: ResilientClient,
        session: SalesforceSession,
        soql: str = PROGRAM_ROLES_QUERY,
    ) -> list[ProgramRolePayload]:
        records: list[ProgramRolePayload] = []
        url = f"{session.instance_url}/services/data/{self.config.api_version}/query"
        params: dict[str, str] | None = {"q": soql}
        while True:
            response = await client.get(url, params=params, headers=session.headers)
            page = QueryResponse.model_validate(self._json_or_raise(response))
            records.extend(page.records)
            log.debug("Fetched %s/%s program roles", len(records), page.total_size)
            if page.done or not page.next_records_url:
                break
            url = f"{session.instance_url}{page.next_records_url}"
            params = None
        return records

    async def update_records(
        self,
        client: ResilientClient,
        session: SalesforceSession,
        records: Sequence[dict[str, object]],
    ) -> list[SaveResult]:
        url = f"{session.instance_url}/services/data/{self.config.api_version}/composite/sobjects"
        results: list[SaveResult] = []
        for start in range(0, len(records), COMPOSITE_BATCH_SIZE):
            batch = list(records[start : start + COMPOSITE_BATCH_SIZE])
            response = await client.patch(
                url,
                json={"allOrNone": False, "records": batch},
                headers=session.headers,
            )
            results.extend(_save_results.validate_python(self._json_or_raise(response)))
        return results

    def _json_or_raise(self, response: httpx.Response) -> object:
        if response.is_error:
            _raise_api_error(response)
        return response.json()


def _raise_oauth_error(response: httpx.Response) -> None:
    try:
        error = OAuthErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        response.raise_for_status()
        raise
    log.error(f"Salesforce login failed {error.error}: {error.error_description}")
    raise SalesforceAPIError(error.error_description or error.error, code=error.error)


def _raise_api_error(response: httpx.Response) -> None:
    try:
        errors = _api_errors.validate_python(response.json())
    except (ValueError, ValidationError):
        response.raise_for_status()
        raise
    if not errors:
        response.raise_for_status()
    first = errors[0]
    log.error(f"Salesforce API error {first.code}: {first.message}")
    raise SalesforceAPIError(first.message, code=first.code)
