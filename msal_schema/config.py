"""Library settings using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict

COMMON_AUTHORITY = "https://login.microsoftonline.com/common"


class Settings(BaseSettings):
    """Schema layer configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MSAL_SCHEMA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = False
    log_level: str = "INFO"

    # Authority used when AuthOptions.authority is absent.
    default_authority: str = COMMON_AUTHORITY

    # When true, a wrong-typed optional field fails construction instead of
    # being reset to its default.
    strict_optional_fields: bool = False

    metrics_enabled: bool = True

    def resolved_log_level(self) -> str:
        """Effective log level name; debug mode always wins."""
        if self.debug:
            return "DEBUG"
        return self.log_level.upper()


settings = Settings()
