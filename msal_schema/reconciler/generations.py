"""Field sets of each MSAL-browser schema generation, keyed by entity.

v1 is the minimal surface the first binding needed to make a call, v2 the full
documented optional surface, v3 adds the Azure AD claim extras and retires two
fields. Field names are the wire (camelCase / claim) spellings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class SchemaGeneration(IntEnum):
    V1 = 1
    V2 = 2
    V3 = 3

    @property
    def label(self) -> str:
        return f"v{self.value}"


LATEST = SchemaGeneration.V3


@dataclass(frozen=True, slots=True)
class GenerationShape:
    required: frozenset[str] = frozenset()
    optional: frozenset[str] = frozenset()

    @property
    def fields(self) -> frozenset[str]:
        return self.required | self.optional


def _shape(required: tuple[str, ...] = (), optional: tuple[str, ...] = ()) -> GenerationShape:
    return GenerationShape(required=frozenset(required), optional=frozenset(optional))


# Claims present on the v1 example access and ID tokens.
V1_CLAIMS: tuple[str, ...] = (
    "typ", "alg", "kid", "aud", "iss", "iat", "nbf", "exp", "nonce", "sub",
    "name", "preferred_username", "oid", "tid", "ver",
    "aio", "azp", "azpacr", "rh", "scp", "uti",
)

# IETF / OIDC / IANA registered claims documented by v2.
REGISTERED_CLAIMS: tuple[str, ...] = (
    "x5t", "jti",
    "given_name", "family_name", "middle_name", "nickname", "profile",
    "picture", "website", "email", "email_verified", "gender", "birthdate",
    "zoneinfo", "locale", "phone_number", "phone_number_verified", "address",
    "updated_at", "cnf",
    "sip_from_tag", "sip_date", "sip_callid", "sip_cseq_num", "sip_via_branch",
    "orig", "dest", "mky", "events", "toe", "txn", "rph", "sid", "vot", "vtm",
    "attest", "origid", "act", "scope", "client_id", "may_act", "jcard",
    "at_use_nbr", "div", "opt",
)

# Provider-specific extras introduced by v3.
AZURE_EXTRA_CLAIMS: tuple[str, ...] = ("idp", "appid", "roles", "wids", "groups", "hasgroups")

V2_CLAIMS = V1_CLAIMS + REGISTERED_CLAIMS
V3_CLAIMS = V2_CLAIMS + AZURE_EXTRA_CLAIMS

_ACCOUNT = _shape(required=("homeAccountId", "environment", "tenantId", "username"))

_AUTH_V1 = _shape(required=("clientId",), optional=("authority", "redirectUri"))
_AUTH_V2 = _shape(
    required=("clientId",),
    optional=(
        "authority",
        "knownAuthorities",
        "cloudDiscoveryMetadata",
        "redirectUri",
        "postLogoutRedirectUri",
        "navigateToLoginRequestUrl",
    ),
)

_SYSTEM_V3_OPTIONAL = ("loggerOptions", "windowHashTimeout", "iframeHashTimeout", "loadFrameTimeout")

_AUTH_URL_V1_OPTIONAL = ("authority", "correlationId", "loginHint")
_AUTH_URL_V3_OPTIONAL = (
    "authority",
    "correlationId",
    "redirectUri",
    "responseMode",
    "codeChallenge",
    "codeChallengeMethod",
    "state",
    "prompt",
    "loginHint",
    "domainHint",
    "extraQueryParameters",
    "claims",
    "nonce",
)
_AUTH_URL_V2_OPTIONAL = _AUTH_URL_V3_OPTIONAL + ("extraScopesToConsent",)

_SILENT = _shape(
    required=("scopes", "account"),
    optional=("authority", "correlationId", "forceRefresh", "redirectUri"),
)
_END_SESSION = _shape(optional=("account", "postLogoutRedirectUri", "authority", "correlationId"))
_RESULT = _shape(
    required=(
        "uniqueId",
        "tenantId",
        "scopes",
        "account",
        "idToken",
        "idTokenClaims",
        "accessToken",
        "fromCache",
        "expiresOn",
    ),
    optional=("extExpiresOn", "state", "familyId"),
)

V1, V2, V3 = SchemaGeneration.V1, SchemaGeneration.V2, SchemaGeneration.V3

GENERATION_SHAPES: dict[str, dict[SchemaGeneration, GenerationShape]] = {
    "AccountInfo": {V1: _ACCOUNT, V2: _ACCOUNT, V3: _ACCOUNT},
    "AuthOptions": {V1: _AUTH_V1, V2: _AUTH_V2, V3: _AUTH_V2},
    "CacheOptions": {
        V2: _shape(optional=("cacheLocation", "storeAuthStateInCookie")),
        V3: _shape(optional=("cacheLocation", "storeAuthStateInCookie")),
    },
    "LoggerOptions": {
        V2: _shape(optional=("loggerCallback", "piiLoggingEnabled", "logLevel")),
        V3: _shape(optional=("loggerCallback", "piiLoggingEnabled", "logLevel")),
    },
    "SystemOptions": {
        V2: _shape(optional=_SYSTEM_V3_OPTIONAL + ("tokenRenewalOffsetSeconds",)),
        V3: _shape(optional=_SYSTEM_V3_OPTIONAL),
    },
    "Configuration": {
        V1: _shape(required=("auth",)),
        V2: _shape(required=("auth",), optional=("cache", "system")),
        V3: _shape(required=("auth",), optional=("cache", "system")),
    },
    "AuthorizationUrlRequest": {
        V1: _shape(required=("scopes",), optional=_AUTH_URL_V1_OPTIONAL),
        V2: _shape(required=("scopes",), optional=_AUTH_URL_V2_OPTIONAL),
        V3: _shape(required=("scopes",), optional=_AUTH_URL_V3_OPTIONAL),
    },
    "RedirectRequest": {
        V1: _shape(required=("scopes",), optional=_AUTH_URL_V1_OPTIONAL),
        V2: _shape(required=("scopes",), optional=_AUTH_URL_V2_OPTIONAL + ("redirectStartPage",)),
        V3: _shape(required=("scopes",), optional=_AUTH_URL_V3_OPTIONAL + ("redirectStartPage",)),
    },
    "SilentRequest": {V1: _SILENT, V2: _SILENT, V3: _SILENT},
    "EndSessionRequest": {V1: _END_SESSION, V2: _END_SESSION, V3: _END_SESSION},
    "AuthenticationResult": {V1: _RESULT, V2: _RESULT, V3: _RESULT},
    "TokenClaims": {
        V1: _shape(optional=V1_CLAIMS),
        V2: _shape(optional=V2_CLAIMS),
        V3: _shape(optional=V3_CLAIMS),
    },
}
