import os
import tomllib
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    SettingsError,
    TomlConfigSettingsSource,
)

from .dns.livedns import LIVEDNS_URL, AuthSchemeT
from .dns.types import IPVersion
from .errors import ConfigurationError

_CONFIG_PATH = os.getenv("GANDI_DDNS_CONFIG", ".gandi.toml")
_ENV_PATH = os.getenv("GANDI_DDNS_ENV", ".env")


class GandiSettings(BaseModel):
    key: str = Field(min_length=1)
    api_url: str = LIVEDNS_URL
    auth_scheme: AuthSchemeT = "Bearer"
    timeout: float = 10


class DNSSettings(BaseModel):
    domain: str = Field(min_length=1)
    records: list[str] = Field(default_factory=list)
    ipv4: bool = True
    ipv6: bool = True

    @field_validator("domain")
    @classmethod
    def _strip_domain(cls, value: str) -> str:
        value = value.strip().rstrip(".")
        if not value:
            raise ValueError("domain must not be blank")
        return value

    @field_validator("records", mode="before")
    @classmethod
    def _split_records(cls, value):
        # "home\nwww" as written by older config files
        if isinstance(value, str):
            value = value.split()
        if isinstance(value, list):
            value = [v.strip() if isinstance(v, str) else v for v in value]
            return [v for v in value if v != ""]
        return value

    @property
    def ip_versions(self) -> list[IPVersion]:
        versions = []
        if self.ipv4:
            versions.append(IPVersion.V4)
        if self.ipv6:
            versions.append(IPVersion.V6)
        return versions


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        toml_file=_CONFIG_PATH,
        env_file=_ENV_PATH,
        extra="ignore",
    )

    gandi: GandiSettings
    dns: DNSSettings
    on_failure: Literal["abort", "skip"] = "abort"

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_file: Optional[Path] = None

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Source order: init args > OS env > .env > .gandi.toml > secrets
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def load_settings(**overrides) -> Settings:
    """
    Load and validate the settings.

    Raises:
        ConfigurationError: a required value is missing or invalid, or the TOML
            file cannot be parsed
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e
    except (tomllib.TOMLDecodeError, SettingsError, OSError) as e:
        raise ConfigurationError(f"cannot read {_CONFIG_PATH}: {e}") from e
