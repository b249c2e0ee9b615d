"""Public interface for the Salesforce adapter."""

from __future__ import annotations

from .client import PROGRAM_ROLES_QUERY, SalesforceAPIError, SalesforceClient, SalesforceSession
from .fetcher import (
    JsonTargetRecordFile,
    ProgramRoleFileError,
    SalesforceTargetFetcher,
    SalesforceTargetUpdater,
)
from .schema import ProgramRolePayload, QueryResponse, SaveResult
from .translator import parse_target_record, to_program_role_record

__all__ = [
    "PROGRAM_ROLES_QUERY",
    "JsonTargetRecordFile",
    "ProgramRoleFileError",
    "ProgramRolePayload",
    "QueryResponse",
    "SalesforceAPIError",
    "SalesforceClient",
    "SalesforceSession",
    "SalesforceTargetFetcher",
    "SalesforceTargetUpdater",
    "SaveResult",
    "parse_target_record",
    "to_program_role_record",
]
