"""
Key Service Client Configuration

Manages the realm address and protocol version used to reach the
key service, plus transport and logging settings with environment
variable support. Secrets are never part of configuration.
"""

from enum import Enum
from functools import lru_cache
from typing import Literal, Optional

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, TypeAdapter, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationInvalidError


class KeyServiceVersion(str, Enum):
    """Key service protocol versions."""
    V1 = "v1"

    @property
    def url_path(self) -> str:
        return self.value


_HTTP_URL = TypeAdapter(AnyHttpUrl)


def is_valid_base_url(value: Optional[str]) -> bool:
    """Check that a realm base URL is an absolute http(s) URL."""
    if not value:
        return False
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        return False
    return True


class Settings(BaseSettings):
    """Client settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="KEYSERVICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Key service
    realm_base_url: str = ""
    version: KeyServiceVersion = KeyServiceVersion.V1

    # Transport
    timeout: float = 30.0
    verify_ssl: bool = True

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class KeyServiceConfiguration(BaseModel):
    """
    Address of the key service.

    realm_base_url is the realm on the identity server,
    eg "https://someserver.com/auth/realms/myrealm".
    """

    model_config = ConfigDict(frozen=True)

    realm_base_url: str
    version: KeyServiceVersion = KeyServiceVersion.V1

    @field_validator("realm_base_url")
    @classmethod
    def validate_realm_base_url(cls, v: str) -> str:
        if not is_valid_base_url(v):
            raise ValueError("realm_base_url must be an absolute http(s) URL")
        return v

    @classmethod
    def create(
        cls,
        realm_base_url: Optional[str],
        version: KeyServiceVersion = KeyServiceVersion.V1,
    ) -> "KeyServiceConfiguration":
        """
        Build a validated configuration.

        Raises:
            ConfigurationInvalidError: If the base URL is missing or invalid
        """
        try:
            return cls(realm_base_url=realm_base_url, version=version)
        except ValidationError as e:
            raise ConfigurationInvalidError(
                f"Invalid key service configuration: {realm_base_url!r}",
                cause=e,
            ) from e

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "KeyServiceConfiguration":
        settings = settings or get_settings()
        return cls.create(settings.realm_base_url, settings.version)


def verify_configuration(configuration: Optional[KeyServiceConfiguration]) -> bool:
    """Check that a configuration was supplied and still holds a valid URL."""
    return configuration is not None and is_valid_base_url(configuration.realm_base_url)
