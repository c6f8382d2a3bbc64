"""Configuration loading for the CloudHub VPC provider.

This module provides centralized configuration management:
- Load settings from CLOUDHUB_* environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
- Build the core ProviderConfig, letting explicit values win over the environment
"""

from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cloudhub_provider.core.models import ControlPlane, ProviderConfig

CONTROL_PLANE_URLS: dict[ControlPlane, str] = {
    ControlPlane.US: "https://anypoint.mulesoft.com",
    ControlPlane.EU: "https://eu1.anypoint.mulesoft.com",
    ControlPlane.GOV: "https://gov.anypoint.mulesoft.com",
}


class Settings(BaseSettings):
    """Provider configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_prefix="CLOUDHUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Credentials
    client_id: SecretStr = Field(
        default=SecretStr(""),
        description="Connected app client id",
    )
    client_secret: SecretStr = Field(
        default=SecretStr(""),
        description="Connected app client secret",
    )
    access_token: SecretStr = Field(
        default=SecretStr(""),
        description="Pre-issued access token; skips the token exchange",
    )
    org_id: str = Field(
        default="",
        description="Organization id scoping every API call",
    )

    # API endpoints
    cplane: ControlPlane = Field(
        default=ControlPlane.US,
        description="Anypoint control plane (us, eu, gov)",
    )
    base_url: str = Field(
        default="",
        description="Override for the control plane base URL",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for each HTTP call in seconds",
    )

    # Host state
    state_path: str = Field(
        default="./cloudhub.tfstate.json",
        description="JSON file holding managed resource records",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    @field_validator("cplane", mode="before")
    @classmethod
    def normalize_cplane(cls, v: object) -> object:
        """Accept control plane names in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("http_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Ensure the HTTP timeout is positive."""
        if v <= 0:
            raise ValueError("http_timeout_seconds must be positive")
        return v

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure a base URL override is an http(s) URL."""
        if v and not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")

    @property
    def api_base_url(self) -> str:
        """Base URL of the selected control plane, or the override."""
        return self.base_url or CONTROL_PLANE_URLS[self.cplane]

    def provider_config(
        self,
        org_id: str | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
        access_token: str | None = None,
    ) -> ProviderConfig:
        """Build the core ProviderConfig.

        Explicit, non-empty arguments take precedence over values loaded
        from the environment.
        """
        return ProviderConfig(
            org_id=org_id or self.org_id,
            client_id=client_id or self.client_id.get_secret_value(),
            client_secret=client_secret or self.client_secret.get_secret_value(),
            access_token=access_token or self.access_token.get_secret_value(),
            cplane=self.cplane,
        )


def load_settings(env_file: str | None = None) -> Settings:
    """Load provider settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["CONTROL_PLANE_URLS", "Settings", "load_settings"]
