"""Application Configuration — layered settings via pydantic-settings and YAML files.

Invariants:
    - APP_ENVIRONMENT selects the environment file: local (default) or production
    - Source priority: init kwargs > APP_* env vars > .env > {environment}.yaml > base.yaml
    - Secrets (database password, connection string) are SecretStr, never logged
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - YAML files per environment: shared defaults in base.yaml, overrides per deployment
    - Nested env vars use "__" (APP_SERVER__PORT=9000, APP_DATABASE__HOST=db)
"""

import os
from enum import Enum
from functools import lru_cache
from ipaddress import IPv4Address
from pathlib import Path

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)
from sqlalchemy.engine import URL

from newsletter.core.errors import ConfigurationError

ENVIRONMENT_VAR = "APP_ENVIRONMENT"
CONFIGURATION_DIRECTORY_VAR = "APP_CONFIGURATION_DIRECTORY"


class Environment(str, Enum):
    """Deployment environment; picks the YAML overlay file."""
    LOCAL = "local"
    PRODUCTION = "production"

    @classmethod
    def parse(cls, value: str) -> "Environment":
        try:
            return cls(value.strip().lower())
        except ValueError:
            supported = ", ".join(f"`{e.value}`" for e in cls)
            raise ConfigurationError(
                f"{value} is not a supported environment. Use one of {supported}",
            ) from None


def current_environment() -> Environment:
    return Environment.parse(os.environ.get(ENVIRONMENT_VAR, Environment.LOCAL.value))


def configuration_directory() -> Path:
    configured = os.environ.get(CONFIGURATION_DIRECTORY_VAR)
    if configured:
        return Path(configured)
    return Path.cwd() / "configuration"


class ServerSettings(BaseModel):
    """Where the HTTP listener binds."""

    host: IPv4Address = IPv4Address("127.0.0.1")
    port: int = Field(8000, ge=0, le=65535)

    def socket_address(self) -> tuple[str, int]:
        return str(self.host), self.port

    def with_random_port(self) -> "ServerSettings":
        """Same host, port 0: the OS picks a free port at bind time."""
        return self.model_copy(update={"port": 0})


class DatabaseSettings(BaseModel):
    """PostgreSQL connection parameters."""

    host: str = "127.0.0.1"
    port: int = Field(5430, ge=1, le=65535)
    name: str = "newsletter"
    username: str = "app"
    password: SecretStr = SecretStr("secret")
    pool_size: int = Field(5, ge=1)
    max_overflow: int = Field(10, ge=0)
    connect_on_startup: bool = False
    # Full URL override (e.g. injected by the hosting platform)
    url: SecretStr | None = None

    @field_validator("url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v):
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    def connection_string(self) -> SecretStr:
        if self.url is not None:
            return self.url
        url = URL.create(
            "postgresql+asyncpg",
            username=self.username,
            password=self.password.get_secret_value(),
            host=self.host,
            port=self.port,
            database=self.name,
        )
        return SecretStr(url.render_as_string(hide_password=False))


class Settings(BaseSettings):
    """Application settings from YAML files and environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_nested_delimiter="__",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Environment = Environment.LOCAL
    application_name: str = "newsletter"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()

    # Observability
    log_level: str = "INFO"
    log_format: str = Field("json", pattern=r"^(json|text)$")

    @field_validator("environment", mode="before")
    @classmethod
    def parse_environment(cls, v):
        if isinstance(v, str):
            return Environment.parse(v)
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        config_dir = configuration_directory()
        environment = current_environment()
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(
                settings_cls, yaml_file=config_dir / f"{environment.value}.yaml",
            ),
            YamlConfigSettingsSource(settings_cls, yaml_file=config_dir / "base.yaml"),
            file_secret_settings,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
