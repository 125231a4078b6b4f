"""Typed schema for MSAL-browser configuration, request and response objects."""

from .config import Settings, settings
from .errors import SchemaError, SchemaViolation, UnknownEnumValue
from .marshal import from_dynamic, to_dynamic
from .models import (
    AccessTokenClaims,
    AccountInfo,
    AuthenticationResult,
    AuthOptions,
    AuthorizationUrlRequest,
    CacheLocation,
    CacheOptions,
    CompleteTokenClaims,
    Configuration,
    EndSessionRequest,
    IdTokenClaims,
    LoggerOptions,
    LogLevel,
    RedirectRequest,
    Request,
    RequestKind,
    ResponseMode,
    SilentRequest,
    SystemOptions,
    TokenClaims,
    parse_accounts,
    parse_request,
)
from .reconciler import SchemaGeneration, SchemaReconciler, get_reconciler
from .unset import UNSET, is_unset

__all__ = [
    "UNSET",
    "AccessTokenClaims",
    "AccountInfo",
    "AuthOptions",
    "AuthenticationResult",
    "AuthorizationUrlRequest",
    "CacheLocation",
    "CacheOptions",
    "CompleteTokenClaims",
    "Configuration",
    "EndSessionRequest",
    "IdTokenClaims",
    "LogLevel",
    "LoggerOptions",
    "RedirectRequest",
    "Request",
    "RequestKind",
    "ResponseMode",
    "SchemaError",
    "SchemaGeneration",
    "SchemaReconciler",
    "SchemaViolation",
    "Settings",
    "SilentRequest",
    "SystemOptions",
    "TokenClaims",
    "UnknownEnumValue",
    "from_dynamic",
    "get_reconciler",
    "is_unset",
    "parse_accounts",
    "parse_request",
    "settings",
]
