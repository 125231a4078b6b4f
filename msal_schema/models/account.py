"""Signed-in account entity."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import ConfigDict

from msal_schema.errors import SchemaViolation
from msal_schema.marshal import reject
from msal_schema.models.base import SchemaModel
from msal_schema.models.types import NonEmptyStr


class AccountInfo(SchemaModel):
    """Identity of a signed-in user as reported by MSAL."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "homeAccountId": "24bbb5d3-...-e5ef.f8cdef31-...-8d6c",
                "environment": "login.windows.net",
                "tenantId": "f8cdef31-a31e-4b4a-93e4-5f571e91255a",
                "username": "user@example.com",
            }
        }
    )

    home_account_id: NonEmptyStr
    environment: NonEmptyStr
    tenant_id: NonEmptyStr
    username: NonEmptyStr

    @property
    def identity_key(self) -> tuple[str, str]:
        """Two AccountInfo values denote the same identity iff these match."""
        return (self.home_account_id, self.environment)

    def same_identity(self, other: AccountInfo) -> bool:
        return self.identity_key == other.identity_key


def parse_accounts(items: Any) -> list[AccountInfo]:
    """Build accounts from the array returned by ``getAllAccounts``."""
    if isinstance(items, (str, bytes)) or not isinstance(items, Iterable):
        raise reject(
            SchemaViolation(entity="AccountInfo", field_path="", expected="array of accounts")
        )
    return [AccountInfo.from_dynamic(item) for item in items]


def find_account(
    accounts: Iterable[AccountInfo],
    *,
    username: str | None = None,
    home_account_id: str | None = None,
) -> AccountInfo | None:
    """Local counterpart of ``getAccountByUsername`` / ``getAccountByHomeId``."""
    for account in accounts:
        if username is not None and account.username.lower() != username.lower():
            continue
        if home_account_id is not None and account.home_account_id != home_account_id:
            continue
        return account
    return None
