"""Pydantic models describing the Salesforce REST payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from subsync.domain.canonical import identity_text


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


def _id_to_text(value: object) -> object:
    if value is None:
        return None
    return identity_text(value) or None


class SalesforceBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TokenResponse(SalesforceBaseModel):
    access_token: str
    instance_url: str
    token_type: str = "Bearer"


class OAuthErrorResponse(SalesforceBaseModel):
    error: str
    error_description: str | None = None


class ApiError(SalesforceBaseModel):
    message: str
    error_code: str | None = Field(default=None, alias="errorCode")
    status_code: str | None = Field(default=None, alias="statusCode")
    fields: list[str] = Field(default_factory=list)

    @property
    def code(self) -> str | None:
        return self.error_code or self.status_code


class ContactRef(SalesforceBaseModel):
    email: str | None = Field(default=None, alias="Email")
    name: str | None = Field(default=None, alias="Name")

    _normalize_blank = field_validator("email", "name", mode="before")(_blank_to_none)


class ProgramRolePayload(SalesforceBaseModel):
    id: str = Field(alias="Id")
    name: str | None = Field(default=None, alias="Name")
    account_id: str | None = Field(default=None, alias="Account__c")
    contact_id: str | None = Field(default=None, alias="Contact__c")
    contact: ContactRef | None = Field(default=None, alias="Contact__r")
    location: str | None = Field(default=None, alias="Program_Role_Location__c")
    role_type: str | None = Field(default=None, alias="Program_Role_Type__c")
    subscription: str | None = Field(default=None, alias="Subscription__c")
    installment_frequency: str | None = Field(default=None, alias="Installment_Frequency__c")
    subscription_cost: float | None = Field(default=None, alias="Subscription_Cost__c")
    active: bool | None = Field(default=None, alias="Active__c")
    subscription_start_date: str | None = Field(default=None, alias="Subscription_Start_Date__c")
    uscreen_member_id: str | None = Field(default=None, alias="Uscreen_Member_ID__c")
    uscreen_subscription_status: str | None = Field(
        default=None, alias="Uscreen_Subscription_Status__c"
    )
    uscreen_last_payment_date: str | None = Field(
        default=None, alias="Uscreen_Last_Payment_Date__c"
    )

    _normalize_member_id = field_validator("uscreen_member_id", mode="before")(_id_to_text)
    _normalize_blank = field_validator(
        "name",
        "uscreen_subscription_status",
        "uscreen_last_payment_date",
        "subscription_start_date",
        mode="before",
    )(_blank_to_none)

    @property
    def contact_email(self) -> str | None:
        return self.contact.email if self.contact is not None else None

    @property
    def contact_name(self) -> str | None:
        return self.contact.name if self.contact is not None else None


class QueryResponse(SalesforceBaseModel):
    total_size: int = Field(alias="totalSize")
    done: bool
    records: list[ProgramRolePayload]
    next_records_url: str | None = Field(default=None, alias="nextRecordsUrl")


class SaveResult(SalesforceBaseModel):
    id: str | None = None
    success: bool
    errors: list[ApiError] = Field(default_factory=list)


class SavedQueryFile(SalesforceBaseModel):
    """Query output saved to disk, either bare records or a full query response."""

    records: list[ProgramRolePayload]
