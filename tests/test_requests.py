"""Tests for the request variants and the Request union."""

from typing import Any

import pytest
from pydantic import TypeAdapter

from msal_schema import UNSET, SchemaViolation, UnknownEnumValue
from msal_schema.models import (
    AccountInfo,
    AuthorizationUrlRequest,
    EndSessionRequest,
    RedirectRequest,
    Request,
    RequestKind,
    ResponseMode,
    SilentRequest,
    parse_request,
)


class TestSilentRequest:
    def test_scopes_and_account_make_a_valid_request(self, account: dict[str, Any]):
        request = SilentRequest.from_dynamic({"scopes": ["openid"], "account": account})

        assert request.kind == RequestKind.SILENT.value
        assert request.scopes == ("openid",)
        assert request.account == AccountInfo.from_dynamic(account)
        assert request.force_refresh is UNSET

    def test_missing_account_is_a_violation(self):
        with pytest.raises(SchemaViolation) as exc_info:
            SilentRequest.from_dynamic({"scopes": ["openid"]})

        assert exc_info.value.entity == "SilentRequest"
        assert exc_info.value.field_path == "account"

    def test_missing_scopes_is_a_violation(self, account: dict[str, Any]):
        with pytest.raises(SchemaViolation) as exc_info:
            SilentRequest.from_dynamic({"account": account})
        assert exc_info.value.field_path == "scopes"

    def test_empty_scopes_is_a_violation(self, account: dict[str, Any]):
        with pytest.raises(SchemaViolation) as exc_info:
            SilentRequest.from_dynamic({"scopes": [], "account": account})
        assert exc_info.value.field_path == "scopes"

    def test_malformed_account_reports_nested_path(self, account: dict[str, Any]):
        del account["tenantId"]
        with pytest.raises(SchemaViolation) as exc_info:
            SilentRequest.from_dynamic({"scopes": ["openid"], "account": account})
        assert exc_info.value.field_path == "account.tenantId"

    def test_for_account_builder(self, account: dict[str, Any]):
        info = AccountInfo.from_dynamic(account)

        request = SilentRequest.for_account(info, "User.Read", force_refresh=True)

        assert request.account is info
        assert request.to_dynamic() == {
            "scopes": ["User.Read"],
            "account": account,
            "forceRefresh": True,
        }

    def test_keyword_construction_without_account_fails(self):
        with pytest.raises(SchemaViolation) as exc_info:
            SilentRequest.build(scopes=["openid"])
        assert exc_info.value.field_path == "account"


class TestEndSessionRequest:
    def test_account_is_optional(self):
        request = EndSessionRequest.from_dynamic({})

        assert request.account is UNSET
        assert request.to_dynamic() == {}

    def test_with_account(self, account: dict[str, Any]):
        request = EndSessionRequest.for_account(
            AccountInfo.from_dynamic(account), post_logout_redirect_uri="https://app.example/"
        )
        assert request.to_dynamic() == {
            "account": account,
            "postLogoutRedirectUri": "https://app.example/",
        }

    def test_partial_account_is_not_silently_dropped(self, account: dict[str, Any]):
        del account["username"]
        with pytest.raises(SchemaViolation) as exc_info:
            EndSessionRequest.from_dynamic({"account": account})
        assert exc_info.value.field_path == "account.username"


class TestAuthorizationRequests:
    def test_from_scopes(self):
        request = AuthorizationUrlRequest.from_scopes("openid", "profile", login_hint="abe")

        assert request.to_dynamic() == {"scopes": ["openid", "profile"], "loginHint": "abe"}

    def test_full_request(self):
        data = {
            "scopes": ["User.Read"],
            "authority": "https://login.microsoftonline.com/common",
            "correlationId": "b4a5e0b1-8c70-4a3d-a7c9-9b3bcb0c9d44",
            "redirectUri": "https://app.example/",
            "responseMode": "fragment",
            "codeChallenge": "E9Melhoa2OwvFrEMTJguCHaoeK1t8URWbuGJSstw-cM",
            "codeChallengeMethod": "S256",
            "state": "xyz",
            "prompt": "select_account",
            "loginHint": "abe@example.com",
            "domainHint": "organizations",
            "extraQueryParameters": {"dc": "ESTS-PUB-WUS2-AZ1"},
            "claims": '{"access_token":{"xms_cc":{"values":["CP1"]}}}',
            "nonce": "123523",
        }

        request = AuthorizationUrlRequest.from_dynamic(data)

        assert request.response_mode is ResponseMode.FRAGMENT
        assert request.to_dynamic() == data

    def test_unknown_response_mode_is_rejected(self):
        with pytest.raises(UnknownEnumValue) as exc_info:
            AuthorizationUrlRequest.from_dynamic({"scopes": ["openid"], "responseMode": "jwt"})
        assert exc_info.value.field_path == "responseMode"

    def test_wrong_typed_query_parameters_are_defaulted(self):
        request = AuthorizationUrlRequest.from_dynamic(
            {"scopes": ["openid"], "extraQueryParameters": ["dc", "ESTS"]}
        )
        assert request.extra_query_parameters is UNSET

    def test_collections_cannot_be_changed_in_place(self):
        request = AuthorizationUrlRequest.from_dynamic(
            {"scopes": ["openid"], "extraQueryParameters": {"dc": "ESTS-PUB-WUS2-AZ1"}}
        )

        with pytest.raises(TypeError):
            request.extra_query_parameters["dc"] = "elsewhere"
        with pytest.raises(AttributeError):
            request.scopes.append("offline_access")

        assert request.to_dynamic() == {
            "scopes": ["openid"],
            "extraQueryParameters": {"dc": "ESTS-PUB-WUS2-AZ1"},
        }

    def test_redirect_request_is_a_superset(self):
        request = RedirectRequest.from_dynamic(
            {"scopes": ["openid"], "redirectStartPage": "https://app.example/home"}
        )

        assert isinstance(request, AuthorizationUrlRequest)
        assert request.kind == "redirect"
        assert request.redirect_start_page == "https://app.example/home"

    def test_deprecated_extra_scopes_are_preserved(self):
        request = AuthorizationUrlRequest.from_dynamic(
            {"scopes": ["openid"], "extraScopesToConsent": ["Mail.Read"]}
        )
        assert request.to_dynamic()["extraScopesToConsent"] == ["Mail.Read"]

    def test_mismatched_kind_is_a_violation(self):
        with pytest.raises(SchemaViolation) as exc_info:
            AuthorizationUrlRequest.from_dynamic({"kind": "silent", "scopes": ["openid"]})
        assert exc_info.value.field_path == "kind"


class TestRequestUnion:
    def test_parse_request_dispatches_on_kind(self, account: dict[str, Any]):
        silent = parse_request({"kind": "silent", "scopes": ["openid"], "account": account})
        redirect = parse_request({"kind": "redirect", "scopes": ["openid"]})
        end = parse_request({"kind": "endSession"})

        assert isinstance(silent, SilentRequest)
        assert type(redirect) is RedirectRequest
        assert isinstance(end, EndSessionRequest)

    def test_kind_is_not_emitted(self, account: dict[str, Any]):
        silent = parse_request({"kind": "silent", "scopes": ["openid"], "account": account})
        assert "kind" not in silent.to_dynamic()

    def test_unknown_kind_is_rejected(self):
        with pytest.raises(UnknownEnumValue) as exc_info:
            parse_request({"kind": "deviceCode", "scopes": ["openid"]})
        assert exc_info.value.field_path == "kind"

    def test_missing_kind_is_a_violation(self):
        with pytest.raises(SchemaViolation):
            parse_request({"scopes": ["openid"]})

    def test_silent_variant_still_requires_account(self):
        with pytest.raises(SchemaViolation) as exc_info:
            parse_request({"kind": "silent", "scopes": ["openid"]})
        assert exc_info.value.field_path == "account"

    def test_discriminated_union_type(self):
        adapter = TypeAdapter(Request)

        request = adapter.validate_python({"kind": "authorizationUrl", "scopes": ["openid"]})

        assert type(request) is AuthorizationUrlRequest
