from .account import AccountInfo, find_account, parse_accounts
from .base import SchemaModel
from .claims import (
    ACCESS_TOKEN_CLAIMS,
    ID_TOKEN_CLAIMS,
    AccessTokenClaims,
    CompleteTokenClaims,
    IdTokenClaims,
    TokenClaims,
)
from .configuration import (
    AuthOptions,
    BrowserAuthOptions,
    BrowserSystemOptions,
    CacheLocation,
    CacheOptions,
    Configuration,
    LoggerOptions,
    SystemOptions,
)
from .log_level import LoggerCallback, LogLevel
from .requests import (
    REQUEST_MODELS,
    AuthorizationUrlRequest,
    BaseAuthRequest,
    EndSessionRequest,
    RedirectRequest,
    Request,
    RequestKind,
    ResponseMode,
    SilentRequest,
    parse_request,
)
from .result import AuthenticationResult

# Every entity with an entry in the generation table.
ENTITY_MODELS: tuple[type[SchemaModel], ...] = (
    AccountInfo,
    AuthOptions,
    CacheOptions,
    LoggerOptions,
    SystemOptions,
    Configuration,
    AuthorizationUrlRequest,
    RedirectRequest,
    SilentRequest,
    EndSessionRequest,
    TokenClaims,
    AuthenticationResult,
)

__all__ = [
    "ACCESS_TOKEN_CLAIMS",
    "ENTITY_MODELS",
    "ID_TOKEN_CLAIMS",
    "REQUEST_MODELS",
    "AccessTokenClaims",
    "AccountInfo",
    "AuthOptions",
    "AuthenticationResult",
    "AuthorizationUrlRequest",
    "BaseAuthRequest",
    "BrowserAuthOptions",
    "BrowserSystemOptions",
    "CacheLocation",
    "CacheOptions",
    "CompleteTokenClaims",
    "Configuration",
    "EndSessionRequest",
    "IdTokenClaims",
    "LogLevel",
    "LoggerCallback",
    "LoggerOptions",
    "RedirectRequest",
    "Request",
    "RequestKind",
    "ResponseMode",
    "SchemaModel",
    "SilentRequest",
    "SystemOptions",
    "TokenClaims",
    "find_account",
    "parse_accounts",
    "parse_request",
]
