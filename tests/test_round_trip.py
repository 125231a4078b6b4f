"""to_dynamic(from_dynamic(x)) reproduces x, plus defaulted fields, for every generation."""

from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from msal_schema import from_dynamic, to_dynamic
from msal_schema.models import (
    AccountInfo,
    AuthenticationResult,
    AuthorizationUrlRequest,
    Configuration,
    EndSessionRequest,
    LoggerOptions,
    LogLevel,
    RedirectRequest,
    SilentRequest,
    TokenClaims,
)

from samples import ACCESS_TOKEN_V1, ACCOUNT, AZURE_EXTRAS, auth_response_dict, msal_config_dict

EXPIRY = datetime(2020, 8, 6, 10, 35, 12, tzinfo=timezone(timedelta(hours=10)))


def _sink(level: LogLevel, message: str, contains_pii: bool) -> None:
    pass


def _assert_contains(output: Any, original: Any, path: str = "") -> None:
    if isinstance(original, dict):
        assert isinstance(output, dict), path
        for key, value in original.items():
            assert key in output, f"{path}.{key} missing"
            _assert_contains(output[key], value, f"{path}.{key}")
    else:
        assert output == original, path


CASES: list[tuple[str, type, dict[str, Any]]] = [
    ("configuration-v1", Configuration, {"auth": {"clientId": "abc"}}),
    ("configuration-v2", Configuration, msal_config_dict()),
    (
        "configuration-deprecated",
        Configuration,
        {"auth": {"clientId": "abc"}, "system": {"tokenRenewalOffsetSeconds": 300}},
    ),
    ("account", AccountInfo, ACCOUNT),
    ("authorization-v1", AuthorizationUrlRequest, {"scopes": ["openid"], "loginHint": "abe"}),
    (
        "redirect-v2",
        RedirectRequest,
        {"scopes": ["openid"], "prompt": "login", "redirectStartPage": "https://app.example/"},
    ),
    ("silent", SilentRequest, {"scopes": ["openid"], "account": ACCOUNT, "forceRefresh": False}),
    ("end-session-empty", EndSessionRequest, {}),
    ("claims-v1", TokenClaims, ACCESS_TOKEN_V1),
    ("claims-v3", TokenClaims, {**ACCESS_TOKEN_V1, **AZURE_EXTRAS}),
    ("claims-extension", TokenClaims, {**ACCESS_TOKEN_V1, "xms_st": {"sub": "abc"}}),
    (
        "logger-options",
        LoggerOptions,
        {"loggerCallback": _sink, "piiLoggingEnabled": True, "logLevel": "Verbose"},
    ),
    (
        "authentication-result",
        AuthenticationResult,
        {**auth_response_dict(), "expiresOn": EXPIRY, "extExpiresOn": EXPIRY},
    ),
]


@pytest.mark.parametrize(("model", "data"), [c[1:] for c in CASES], ids=[c[0] for c in CASES])
def test_round_trip_is_stable(model: type, data: dict[str, Any]) -> None:
    entity = from_dynamic(model, data)
    output = to_dynamic(entity)

    _assert_contains(output, data)
    assert to_dynamic(from_dynamic(model, output)) == output


def test_from_dynamic_passes_instances_through() -> None:
    account = AccountInfo.from_dynamic(ACCOUNT)
    assert from_dynamic(AccountInfo, account) is account


def test_timestamps_normalise_to_the_same_instant() -> None:
    data = auth_response_dict()

    output = to_dynamic(from_dynamic(AuthenticationResult, data))

    assert output["expiresOn"] == EXPIRY
    assert output["extExpiresOn"] == EXPIRY
    assert {k: v for k, v in output.items() if k not in {"expiresOn", "extExpiresOn"}} == {
        k: v for k, v in data.items() if k not in {"expiresOn", "extExpiresOn"}
    }
    assert to_dynamic(from_dynamic(AuthenticationResult, output)) == output
