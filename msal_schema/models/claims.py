"""Token claim sets.

``TokenClaims`` is the complete superset of every claim a v1, v2 or v3 token
may carry. Access- and ID-token classes are the same superset with a narrower
``view()``; nothing a token carries is ever discarded, and claims this module
does not know about stay in ``extensions``. Claims are passed through without
interpretation: expiry and audience are never enforced here.
"""

from __future__ import annotations

from typing import Any, ClassVar, Self

from jose import jwt
from jose.exceptions import JWTError
from pydantic import ConfigDict, StrictBool, StrictStr

from msal_schema.errors import SchemaViolation
from msal_schema.marshal import reject
from msal_schema.models.base import SchemaModel
from msal_schema.models.types import NumericDate, StringList, WholeNumber
from msal_schema.reconciler.generations import V3_CLAIMS
from msal_schema.unset import UNSET, Maybe

ClaimObject = dict[StrictStr, Any]

# JOSE header parameters that MSAL surfaces alongside payload claims.
_HEADER_PARAMETERS: tuple[str, ...] = ("typ", "alg", "kid", "x5t")

ACCESS_TOKEN_CLAIMS: frozenset[str] = frozenset(
    {
        "typ", "alg", "kid", "x5t", "aud", "iss", "idp", "iat", "nbf", "exp",
        "aio", "azp", "azpacr", "appid", "name", "oid", "preferred_username",
        "rh", "roles", "scp", "sub", "tid", "uti", "ver", "wids", "groups",
        "hasgroups",
    }
)

ID_TOKEN_CLAIMS: frozenset[str] = frozenset(
    {
        "typ", "alg", "kid", "aud", "iss", "iat", "nbf", "exp", "aio", "idp",
        "name", "given_name", "family_name", "nonce", "oid", "preferred_username",
        "email", "roles", "rh", "sub", "sid", "tid", "uti", "ver", "wids",
        "groups", "hasgroups",
    }
)


class TokenClaims(SchemaModel):
    """Every claim observed across the three schema generations."""

    model_config = ConfigDict(alias_generator=None)

    view_claims: ClassVar[frozenset[str]] = frozenset(V3_CLAIMS)

    # JOSE header
    typ: Maybe[StrictStr] = UNSET
    alg: Maybe[StrictStr] = UNSET
    kid: Maybe[StrictStr] = UNSET
    x5t: Maybe[StrictStr] = UNSET

    # Registered JWT claims
    iss: Maybe[StrictStr] = UNSET
    sub: Maybe[StrictStr] = UNSET
    aud: Maybe[StrictStr | StringList] = UNSET
    exp: Maybe[NumericDate] = UNSET
    nbf: Maybe[NumericDate] = UNSET
    iat: Maybe[NumericDate] = UNSET
    jti: Maybe[StrictStr] = UNSET

    # OpenID Connect
    nonce: Maybe[StrictStr] = UNSET
    sid: Maybe[StrictStr] = UNSET
    name: Maybe[StrictStr] = UNSET
    given_name: Maybe[StrictStr] = UNSET
    family_name: Maybe[StrictStr] = UNSET
    middle_name: Maybe[StrictStr] = UNSET
    nickname: Maybe[StrictStr] = UNSET
    preferred_username: Maybe[StrictStr] = UNSET
    profile: Maybe[StrictStr] = UNSET
    picture: Maybe[StrictStr] = UNSET
    website: Maybe[StrictStr] = UNSET
    email: Maybe[StrictStr] = UNSET
    email_verified: Maybe[StrictBool] = UNSET
    gender: Maybe[StrictStr] = UNSET
    birthdate: Maybe[StrictStr] = UNSET
    zoneinfo: Maybe[StrictStr] = UNSET
    locale: Maybe[StrictStr] = UNSET
    phone_number: Maybe[StrictStr] = UNSET
    phone_number_verified: Maybe[StrictBool] = UNSET
    address: Maybe[ClaimObject] = UNSET
    updated_at: Maybe[NumericDate] = UNSET

    # IANA JWT claims registry
    cnf: Maybe[ClaimObject] = UNSET
    sip_from_tag: Maybe[StrictStr] = UNSET
    sip_date: Maybe[NumericDate] = UNSET
    sip_callid: Maybe[StrictStr] = UNSET
    sip_cseq_num: Maybe[StrictStr] = UNSET
    sip_via_branch: Maybe[StrictStr] = UNSET
    orig: Maybe[ClaimObject] = UNSET
    dest: Maybe[ClaimObject] = UNSET
    mky: Maybe[ClaimObject] = UNSET
    events: Maybe[ClaimObject] = UNSET
    toe: Maybe[NumericDate] = UNSET
    txn: Maybe[StrictStr] = UNSET
    rph: Maybe[ClaimObject] = UNSET
    vot: Maybe[StrictStr] = UNSET
    vtm: Maybe[StrictStr] = UNSET
    attest: Maybe[StrictStr] = UNSET
    origid: Maybe[StrictStr] = UNSET
    act: Maybe[ClaimObject] = UNSET
    scope: Maybe[StrictStr] = UNSET
    client_id: Maybe[StrictStr] = UNSET
    may_act: Maybe[ClaimObject] = UNSET
    jcard: Maybe[ClaimObject] = UNSET
    at_use_nbr: Maybe[WholeNumber] = UNSET
    div: Maybe[ClaimObject] = UNSET
    opt: Maybe[StrictStr] = UNSET

    # Microsoft identity platform
    ver: Maybe[StrictStr] = UNSET
    oid: Maybe[StrictStr] = UNSET
    tid: Maybe[StrictStr] = UNSET
    aio: Maybe[StrictStr] = UNSET
    azp: Maybe[StrictStr] = UNSET
    azpacr: Maybe[StrictStr] = UNSET
    rh: Maybe[StrictStr] = UNSET
    scp: Maybe[StrictStr] = UNSET
    uti: Maybe[StrictStr] = UNSET
    idp: Maybe[StrictStr] = UNSET
    appid: Maybe[StrictStr] = UNSET
    roles: Maybe[StringList] = UNSET
    wids: Maybe[StringList] = UNSET
    groups: Maybe[StringList] = UNSET
    hasgroups: Maybe[StrictBool] = UNSET

    @classmethod
    def from_jwt(cls, token: str) -> Self:
        """Decode a compact JWT without verifying its signature.

        Header parameters (typ, alg, kid, x5t) are merged in underneath the
        payload claims.
        """
        if not isinstance(token, str):
            raise reject(
                SchemaViolation(entity=cls.__name__, field_path="", expected="compact JWT string")
            )
        try:
            header = jwt.get_unverified_header(token)
            payload = jwt.get_unverified_claims(token)
        except JWTError as exc:
            raise reject(
                SchemaViolation(
                    entity=cls.__name__, field_path="", expected="compact JWT", detail=str(exc)
                )
            ) from exc
        merged = {key: header[key] for key in _HEADER_PARAMETERS if key in header}
        merged.update(payload)
        return cls.from_dynamic(merged)

    def canonical(self) -> dict[str, Any]:
        """Every declared claim (unset ones as UNSET) plus the extension claims."""
        claims = {name: getattr(self, name) for name in type(self).model_fields}
        claims.update(self.extensions)
        return claims

    def claim(self, name: str, default: Any = None) -> Any:
        if name in type(self).model_fields:
            value = getattr(self, name)
            return default if value is UNSET else value
        return self.extensions.get(name, default)

    def view(self) -> dict[str, Any]:
        """Claims that are set and belong to this token type."""
        return {
            name: value
            for name, value in self.to_dynamic().items()
            if name in type(self).view_claims
        }

    @property
    def scopes(self) -> list[str]:
        """Delegated scopes from the space separated ``scp`` claim."""
        if self.scp is UNSET:
            return []
        return self.scp.split()

    def issued_before_expiry(self) -> bool:
        if self.exp is UNSET or self.iat is UNSET:
            return False
        return self.exp > self.iat > 0

    def audience_matches(self, client_id: str) -> bool:
        if self.aud is UNSET:
            return False
        if isinstance(self.aud, str):
            return self.aud == client_id
        return client_id in self.aud

    def issues(self, client_id: str | None = None) -> list[str]:
        """Structural problems with this claim set; nothing is enforced."""
        problems: list[str] = []
        if self.exp is not UNSET and self.iat is not UNSET and not self.issued_before_expiry():
            problems.append("exp must be later than iat, and iat positive")
        if client_id is not None and self.aud is not UNSET and not self.audience_matches(client_id):
            problems.append("aud does not name the configured client")
        return problems


class AccessTokenClaims(TokenClaims):
    view_claims: ClassVar[frozenset[str]] = ACCESS_TOKEN_CLAIMS


class IdTokenClaims(TokenClaims):
    view_claims: ClassVar[frozenset[str]] = ID_TOKEN_CLAIMS


CompleteTokenClaims = TokenClaims
