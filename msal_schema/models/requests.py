"""Token and sign-out request variants."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Any, Literal, Self

from pydantic import Field, StrictBool, StrictStr

from msal_schema.errors import SchemaViolation, UnknownEnumValue
from msal_schema.marshal import reject
from msal_schema.models.account import AccountInfo
from msal_schema.models.base import SchemaModel
from msal_schema.models.types import ScopeList, StringList, StringMap
from msal_schema.unset import UNSET, Maybe


class RequestKind(str, Enum):
    AUTHORIZATION_URL = "authorizationUrl"
    REDIRECT = "redirect"
    SILENT = "silent"
    END_SESSION = "endSession"


class ResponseMode(str, Enum):
    QUERY = "query"
    FRAGMENT = "fragment"
    FORM_POST = "form_post"


def _kind(value: RequestKind) -> Any:
    # The discriminator travels with the Python object only.
    return Field(default=value.value, exclude=True)


class BaseAuthRequest(SchemaModel):
    scopes: ScopeList
    authority: Maybe[StrictStr] = UNSET
    correlation_id: Maybe[StrictStr] = UNSET


class AuthorizationUrlRequest(BaseAuthRequest):
    """Interactive request (``loginPopup`` / ``acquireTokenPopup``)."""

    kind: Literal["authorizationUrl"] = _kind(RequestKind.AUTHORIZATION_URL)
    redirect_uri: Maybe[StrictStr] = UNSET
    response_mode: Maybe[ResponseMode] = UNSET
    code_challenge: Maybe[StrictStr] = UNSET
    code_challenge_method: Maybe[StrictStr] = UNSET
    state: Maybe[StrictStr] = UNSET
    prompt: Maybe[StrictStr] = UNSET
    login_hint: Maybe[StrictStr] = UNSET
    domain_hint: Maybe[StrictStr] = UNSET
    extra_query_parameters: Maybe[StringMap] = UNSET
    claims: Maybe[StrictStr] = UNSET
    nonce: Maybe[StrictStr] = UNSET
    # Retired after v2.
    extra_scopes_to_consent: Maybe[StringList] = UNSET

    @classmethod
    def from_scopes(cls, *scopes: str, **fields: Any) -> Self:
        return cls.build(scopes=list(scopes), **fields)


class RedirectRequest(AuthorizationUrlRequest):
    """Redirect flow request; returns to ``redirectStartPage`` afterwards."""

    kind: Literal["redirect"] = _kind(RequestKind.REDIRECT)
    redirect_start_page: Maybe[StrictStr] = UNSET


class SilentRequest(BaseAuthRequest):
    """Cache / refresh-token backed request for an already signed-in account."""

    kind: Literal["silent"] = _kind(RequestKind.SILENT)
    account: AccountInfo
    force_refresh: Maybe[StrictBool] = UNSET
    redirect_uri: Maybe[StrictStr] = UNSET

    @classmethod
    def for_account(cls, account: AccountInfo, *scopes: str, **fields: Any) -> Self:
        return cls.build(scopes=list(scopes), account=account, **fields)


class EndSessionRequest(SchemaModel):
    """Sign-out request; without an account the active session is ended."""

    kind: Literal["endSession"] = _kind(RequestKind.END_SESSION)
    account: Maybe[AccountInfo] = UNSET
    post_logout_redirect_uri: Maybe[StrictStr] = UNSET
    authority: Maybe[StrictStr] = UNSET
    correlation_id: Maybe[StrictStr] = UNSET

    @classmethod
    def for_account(cls, account: AccountInfo | None = None, **fields: Any) -> Self:
        if account is None:
            return cls.build(**fields)
        return cls.build(account=account, **fields)


Request = Annotated[
    AuthorizationUrlRequest | RedirectRequest | SilentRequest | EndSessionRequest,
    Field(discriminator="kind"),
]

REQUEST_MODELS: dict[RequestKind, type[SchemaModel]] = {
    RequestKind.AUTHORIZATION_URL: AuthorizationUrlRequest,
    RequestKind.REDIRECT: RedirectRequest,
    RequestKind.SILENT: SilentRequest,
    RequestKind.END_SESSION: EndSessionRequest,
}


def parse_request(data: Any) -> Request:
    """Build the request variant named by ``data["kind"]``."""
    if not isinstance(data, Mapping) or "kind" not in data:
        raise reject(SchemaViolation(entity="Request", field_path="kind", expected="request kind"))
    kind = data["kind"]
    try:
        model = REQUEST_MODELS[RequestKind(kind)]
    except ValueError:
        raise reject(
            UnknownEnumValue(
                entity="Request",
                field_path="kind",
                value=kind,
                allowed=[member.value for member in RequestKind],
            )
        ) from None
    return model.from_dynamic(data)
