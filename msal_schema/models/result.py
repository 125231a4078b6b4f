"""Token response envelope returned by every acquisition call."""

from __future__ import annotations

from pydantic import ConfigDict, StrictBool, StrictStr

from msal_schema.models.account import AccountInfo
from msal_schema.models.base import SchemaModel
from msal_schema.models.claims import AccessTokenClaims, IdTokenClaims
from msal_schema.models.types import StringList, Timestamp
from msal_schema.unset import UNSET, Maybe


class AuthenticationResult(SchemaModel):
    """Tokens, account and claims for one successful acquisition."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "uniqueId": "00000000-0000-0000-66f3-3332eca7ea81",
                "tenantId": "3338040d-6c67-4c5b-b112-36a304b66dad",
                "scopes": ["openid", "profile"],
                "idToken": "eyJ0eXAiOiJKV1QiLCJhbGciOiJSUzI1NiJ9...",
                "idTokenClaims": {"typ": "JWT"},
                "accessToken": "eyJ0eXAiOiJKV1QiLCJhbGciOiJSUzI1NiJ9...",
                "fromCache": True,
                "expiresOn": "Thu Aug 06 2020 10:35:12 GMT+1000 (AEST)",
            }
        }
    )

    unique_id: StrictStr
    tenant_id: StrictStr
    scopes: StringList
    account: AccountInfo
    id_token: StrictStr
    id_token_claims: IdTokenClaims
    access_token: StrictStr
    from_cache: StrictBool
    expires_on: Timestamp
    ext_expires_on: Maybe[Timestamp] = UNSET
    state: Maybe[StrictStr] = UNSET
    family_id: Maybe[StrictStr] = UNSET

    def decode_id_token(self) -> IdTokenClaims:
        return IdTokenClaims.from_jwt(self.id_token)

    def decode_access_token(self) -> AccessTokenClaims:
        """Access tokens for some resources are opaque; decoding them raises."""
        return AccessTokenClaims.from_jwt(self.access_token)

    def claim_issues(self, client_id: str | None = None) -> list[str]:
        problems = list(self.id_token_claims.issues(client_id))
        if self.id_token_claims.tid is not UNSET and self.id_token_claims.tid != self.tenant_id:
            problems.append("tid claim differs from tenantId")
        return problems
