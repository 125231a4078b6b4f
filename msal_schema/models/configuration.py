"""Client configuration handed to the browser library at start-up."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Self

from pydantic import AliasChoices, BeforeValidator, ConfigDict, Field, StrictBool, StrictStr

from msal_schema.config import settings
from msal_schema.logger import get_logger
from msal_schema.models.base import SchemaModel
from msal_schema.models.log_level import LoggerCallback, LogLevel, normalize_log_level
from msal_schema.models.types import NonEmptyStr, StringList, Timeout
from msal_schema.observability.schema_metrics import get_schema_metrics
from msal_schema.unset import UNSET, Maybe

logger = get_logger(__name__)


class CacheLocation(str, Enum):
    """Browser storage backing the token cache."""

    SESSION_STORAGE = "sessionStorage"
    LOCAL_STORAGE = "localStorage"


def _default_authority() -> str:
    return settings.default_authority


class AuthOptions(SchemaModel):
    """Application registration details (the ``auth`` block)."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "clientId": "enter_client_id_here",
                "authority": "https://login.microsoftonline.com/common",
                "knownAuthorities": [],
                "redirectUri": "enter_redirect_uri_here",
                "navigateToLoginRequestUrl": True,
            }
        }
    )

    client_id: NonEmptyStr
    authority: StrictStr = Field(default_factory=_default_authority)
    known_authorities: StringList = Field(default_factory=tuple)
    cloud_discovery_metadata: Maybe[StrictStr] = UNSET
    redirect_uri: Maybe[StrictStr] = UNSET
    post_logout_redirect_uri: Maybe[StrictStr] = UNSET
    navigate_to_login_request_url: StrictBool = True


class CacheOptions(SchemaModel):
    cache_location: CacheLocation = CacheLocation.SESSION_STORAGE
    store_auth_state_in_cookie: StrictBool = False


class LoggerOptions(SchemaModel):
    """Logger callback plus the PII gate applied before it is called."""

    logger_callback: Maybe[LoggerCallback] = Field(
        default=UNSET,
        alias="loggerCallback",
        validation_alias=AliasChoices("loggerCallback", "callback"),
    )
    pii_logging_enabled: StrictBool = False
    # Consumed by the external client; dispatch performs no level filtering.
    log_level: Annotated[LogLevel, BeforeValidator(normalize_log_level)] = LogLevel.INFO

    def dispatch(self, level: Any, message: str, contains_pii: bool = False) -> bool:
        """Deliver one log line to the callback; returns whether it was delivered.

        Lines flagged as containing PII are dropped unless PII logging is
        enabled. Exceptions raised by the callback propagate.
        """
        level = LogLevel.coerce(level)
        metrics = get_schema_metrics()
        if contains_pii and not self.pii_logging_enabled:
            metrics.inc_log_dispatch(level=level.value, outcome="suppressed")
            logger.debug("msal_log_suppressed", level=level.value)
            return False
        if self.logger_callback is UNSET:
            metrics.inc_log_dispatch(level=level.value, outcome="no_callback")
            return False
        self.logger_callback(level, message, contains_pii)
        metrics.inc_log_dispatch(level=level.value, outcome="delivered")
        return True


class SystemOptions(SchemaModel):
    logger_options: LoggerOptions = Field(default_factory=LoggerOptions)
    window_hash_timeout: Timeout = 60000
    iframe_hash_timeout: Timeout = 6000
    load_frame_timeout: Timeout = 0
    # Retired after v2; still accepted and re-emitted.
    token_renewal_offset_seconds: Maybe[Timeout] = UNSET


class Configuration(SchemaModel):
    """Complete ``msalConfig`` object."""

    auth: AuthOptions
    cache: CacheOptions = Field(default_factory=CacheOptions)
    system: SystemOptions = Field(default_factory=SystemOptions)

    @classmethod
    def for_client(cls, client_id: str, **auth: Any) -> Self:
        """Configuration with only the ``auth`` block filled in."""
        return cls.from_dynamic({"auth": {"clientId": client_id, **auth}})

    @property
    def client_id(self) -> str:
        return self.auth.client_id

    @property
    def authority(self) -> str:
        return self.auth.authority

    @property
    def redirect_uri(self) -> str | None:
        return None if self.auth.redirect_uri is UNSET else self.auth.redirect_uri

    @property
    def logger_options(self) -> LoggerOptions:
        return self.system.logger_options

    def _with_auth(self, **changes: Any) -> Self:
        auth = {**self.auth.to_dynamic(), **changes}
        return type(self).from_dynamic({**self.to_dynamic(), "auth": auth})

    def with_authority(self, authority: str) -> Self:
        return self._with_auth(authority=authority)

    def with_redirect_uri(self, redirect_uri: str) -> Self:
        return self._with_auth(redirectUri=redirect_uri)

    def with_known_authorities(self, authorities: list[str]) -> Self:
        return self._with_auth(knownAuthorities=list(authorities))


BrowserAuthOptions = AuthOptions
BrowserSystemOptions = SystemOptions
